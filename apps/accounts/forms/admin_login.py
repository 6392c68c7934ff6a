# apps/accounts/forms/admin_login.py
from django.contrib.admin.forms import AdminAuthenticationForm
from django.core.exceptions import ValidationError

from ..models import EmpresaMembership


class OperadorAdminAuthenticationForm(AdminAuthenticationForm):
    """
    Login del admin de Django solo para operadores de plataforma (staff sin
    membresía de empresa). Los usuarios de una empresa entran únicamente por
    la compuerta de /acceso/login/, que valida la ubicación.
    """

    def confirm_login_allowed(self, user):
        super().confirm_login_allowed(user)
        if EmpresaMembership.objects.filter(user=user).exists():
            raise ValidationError(
                "Los usuarios de empresa ingresan por la pantalla de acceso con su ubicación.",
                code="membresia_empresa",
            )

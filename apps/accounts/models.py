# apps/accounts/models.py
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class Rol(models.TextChoices):
    SUPERADMIN = "superadmin", "Superadministrador"
    ADMIN = "admin", "Administrador"
    MANAGER = "manager", "Gerente"
    SUPERVISOR = "supervisor", "Supervisor"
    TECHNICIAN = "technician", "Técnico"
    WAREHOUSE_CLERK = "warehouse-clerk", "Almacenero"


class EmpresaMembership(models.Model):
    """
    Pertenencia de un usuario a su empresa (una sola por usuario).

    - sucursal_asignada: asignación operativa. Null = sin sucursal
      (superadmin o director con visibilidad consolidada).
    - sucursal_seleccionada: última selección de alcance confirmada en sesión.
      Null = "ninguna" (consolidado).
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="membership")
    empresa = models.ForeignKey(
        "org.Empresa", on_delete=models.CASCADE, related_name="memberships")

    sucursal_asignada = models.ForeignKey(
        "org.Sucursal", on_delete=models.SET_NULL, null=True, blank=True, related_name="empleados"
    )
    sucursal_seleccionada = models.ForeignKey(
        "org.Sucursal", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    es_lider_equipo = models.BooleanField(default=False)
    # habilitado/deshabilitado dentro de la empresa
    activo = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Membresía de Empresa"
        verbose_name_plural = "Membresías de Empresa"

    def __str__(self):
        return f"{self.user} → {self.empresa}"

    def clean(self):
        if self.sucursal_asignada_id and self.sucursal_asignada.empresa_id != self.empresa_id:
            raise ValidationError(
                {"sucursal_asignada": "La sucursal no pertenece a la empresa."})


class RolAsignado(models.Model):
    membership = models.ForeignKey(
        EmpresaMembership, on_delete=models.CASCADE, related_name="roles")
    rol = models.CharField(max_length=20, choices=Rol.choices)

    class Meta:
        unique_together = ("membership", "rol")
        verbose_name = "Rol asignado"
        verbose_name_plural = "Roles asignados"

    def __str__(self):
        return f"{self.membership.user} · {self.rol}"

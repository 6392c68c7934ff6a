from django.contrib import admin

from .forms.admin_login import OperadorAdminAuthenticationForm
from .models import EmpresaMembership, RolAsignado

# el admin no es una segunda puerta de entrada para usuarios de empresa
admin.site.login_form = OperadorAdminAuthenticationForm


class RolAsignadoInline(admin.TabularInline):
    model = RolAsignado
    extra = 0


@admin.register(EmpresaMembership)
class EmpresaMembershipAdmin(admin.ModelAdmin):
    list_display = ("user", "empresa", "sucursal_asignada",
                    "sucursal_seleccionada", "es_lider_equipo", "activo")
    list_filter = ("empresa", "activo", "roles__rol")
    search_fields = ("user__username", "user__email", "empresa__nombre")
    inlines = [RolAsignadoInline]

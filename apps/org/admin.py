# apps/org/admin.py

from django.contrib import admin
from .models import Empresa, Sucursal


@admin.register(Empresa)
class EmpresaAdmin(admin.ModelAdmin):
    list_display = ("nombre", "subdominio", "activo", "creado")
    search_fields = ("nombre", "subdominio")
    list_filter = ("activo", "creado")
    ordering = ("-creado",)


@admin.register(Sucursal)
class SucursalAdmin(admin.ModelAdmin):
    list_display = ("nombre", "empresa", "es_matriz",
                    "activo", "codigo_interno", "creado")
    search_fields = ("nombre", "codigo_interno", "empresa__nombre")
    list_filter = ("empresa", "es_matriz", "activo")
    ordering = ("empresa", "-es_matriz", "nombre")

from django.apps import AppConfig


class OrgConfig(AppConfig):
    name = "apps.org"
    verbose_name = "Organización (Empresas y Sucursales)"
    default_auto_field = "django.db.models.BigAutoField"

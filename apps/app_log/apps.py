# apps/app_log/apps.py

from django.apps import AppConfig


class AppLogConfig(AppConfig):
    name = "apps.app_log"
    verbose_name = "Observabilidad (Logs + Auditoría de acceso)"
    default_auto_field = "django.db.models.BigAutoField"

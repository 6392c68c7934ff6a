# apps/app_log/admin.py

from django.contrib import admin
from .models import AppLog, AuditLog


@admin.register(AppLog)
class AppLogAdmin(admin.ModelAdmin):
    list_display = (
        "creado_en",
        "nivel",
        "http_status",
        "origen",
        "evento",
        "http_method",
        "http_path",
        "username",
        "empresa_id",
        "alcance",
    )
    list_filter = ("nivel", "origen", "evento", "http_status", "alcance")
    search_fields = ("mensaje", "http_path", "username")
    ordering = ("-creado_en",)


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = (
        "creado_en",
        "action",
        "success",
        "reason",
        "resource_id",
        "user_id",
        "empresa_id",
    )
    list_filter = ("action", "success", "creado_en")
    search_fields = ("resource_id", "user_id", "reason")
    ordering = ("-creado_en",)

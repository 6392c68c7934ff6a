# apps/app_log/models.py
"""
Modelos de observabilidad:
- AppLog: logs técnicos y de acceso HTTP, con el alcance efectivo del request.
- AuditLog: auditoría de acceso (login aceptado/rechazado, cambios de sucursal).

Diseño:
- ids de usuario/empresa/sucursal como CharField: sin FK duras, el log
  sobrevive al borrado de los registros que menciona.
- request_id permite correlacionar AppLog ↔ AuditLog.

Ejemplos de consultas:
- Rechazos de login del día: AuditLog.objects.filter(action=AuditLog.Action.LOGIN, success=False)
- Requests hechos con alcance consolidado: AppLog.objects.filter(alcance="todas")
"""

from __future__ import annotations

import uuid
from django.db import models
from django.utils import timezone


class AppLog(models.Model):

    class Level(models.TextChoices):
        DEBUG = "debug", "Debug"
        INFO = "info", "Info"
        WARNING = "warning", "Warning"
        ERROR = "error", "Error"
        CRITICAL = "critical", "Critical"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    creado_en = models.DateTimeField(default=timezone.now, db_index=True)

    empresa_id = models.CharField(
        max_length=64, null=True, blank=True, db_index=True, help_text="ID de la empresa (tenant) en texto."
    )
    user_id = models.CharField(
        max_length=64, null=True, blank=True, db_index=True, help_text="ID del usuario autenticado (si aplica)."
    )
    username = models.CharField(
        max_length=150, null=True, blank=True, db_index=True)
    alcance = models.CharField(
        max_length=40, null=True, blank=True, db_index=True,
        help_text='Alcance efectivo del request: "todas" o "sucursal:<id>".'
    )

    request_id = models.CharField(
        max_length=36, null=True, blank=True, db_index=True, help_text="X-Request-ID (UUID string)."
    )

    nivel = models.CharField(
        max_length=10, choices=Level.choices, db_index=True)
    origen = models.CharField(
        max_length=120, db_index=True, help_text='Logger/módulo: ej. "http", "scope.login".'
    )
    evento = models.CharField(
        max_length=80, db_index=True, help_text='Etiqueta corta: ej. "access_log", "login_rejected".'
    )
    mensaje = models.TextField()

    http_method = models.CharField(
        max_length=8, null=True, blank=True, db_index=True)
    http_path = models.CharField(
        max_length=512, null=True, blank=True, db_index=True)
    http_status = models.PositiveIntegerField(
        null=True, blank=True, db_index=True)
    duration_ms = models.PositiveIntegerField(null=True, blank=True)
    ip = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(null=True, blank=True)

    meta_json = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "app_log"
        verbose_name = "Log de aplicación"
        verbose_name_plural = "Logs de aplicación"
        ordering = ["-creado_en"]
        indexes = [
            models.Index(fields=["-creado_en", "nivel", "http_status"],
                         name="app_log_creado_nivel_idx"),
            models.Index(fields=["empresa_id", "origen", "evento"],
                         name="app_log_emp_origen_evt_idx"),
        ]

    def __str__(self) -> str:
        return f"[{self.nivel}] {self.origen} · {self.evento}"


class AuditLog(models.Model):
    """
    Auditoría de acceso: quién, cuándo, en qué empresa, qué acción y si fue
    exitosa (con motivo en los rechazos).
    """

    class Action(models.TextChoices):
        LOGIN = "login", "Login"
        LOGOUT = "logout", "Logout"
        SCOPE_SWITCH = "scope_switch", "Cambio de sucursal"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    creado_en = models.DateTimeField(default=timezone.now, db_index=True)

    empresa_id = models.CharField(
        max_length=64, null=True, blank=True, db_index=True)
    user_id = models.CharField(
        max_length=64, null=True, blank=True, db_index=True)
    username = models.CharField(
        max_length=150, null=True, blank=True, db_index=True)

    request_id = models.CharField(
        max_length=36, null=True, blank=True, db_index=True)
    ip = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(null=True, blank=True)

    resource_type = models.CharField(
        max_length=120, db_index=True, help_text='Etiqueta "<app_label>.<ModelName>".'
    )
    resource_id = models.CharField(max_length=120, db_index=True)

    action = models.CharField(
        max_length=20, choices=Action.choices, db_index=True)
    success = models.BooleanField(default=True, db_index=True)
    reason = models.TextField(null=True, blank=True)

    changes = models.JSONField(
        default=dict,
        blank=True,
        help_text='Diferencias por campo: {"campo": {"before": ..., "after": ...}}.'
    )

    class Meta:
        db_table = "audit_log"
        verbose_name = "Auditoría de acceso"
        verbose_name_plural = "Auditorías de acceso"
        ordering = ["-creado_en"]
        indexes = [
            models.Index(fields=["-creado_en", "empresa_id"],
                         name="audit_log_creado_emp_idx"),
            models.Index(fields=["action", "success", "-creado_en"],
                         name="audit_log_act_succ_idx"),
        ]

    def __str__(self) -> str:
        estado = "ok" if self.success else "rechazado"
        return f"[{self.action}:{estado}] {self.resource_type}:{self.resource_id}"

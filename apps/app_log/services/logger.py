# apps/app_log/services/logger.py
"""
Servicio central de registro en base de datos.

- log_event / log_exception: eventos técnicos y de negocio en AppLog.
- log_errors: decorador que registra la excepción y la re-lanza.
- audit_event: eventos de acceso en AuditLog (login, logout, cambio de sucursal).

Ambos modelos comparten las columnas de "quién/desde dónde" (empresa, usuario,
request_id, ip, user-agent); salen del request actual vía _columnas_comunes().
La metadata se sanitiza: contraseñas, tokens y cookies nunca se guardan.
"""

from __future__ import annotations

import traceback
from functools import wraps
from typing import Any, Dict, Optional

from django.conf import settings
from django.http import HttpRequest
from django.utils.timezone import now

from ..models import AppLog, AuditLog
from ..utils import alcance_label, get_current_request

REDACTADO = "***redacted***"
SAFE_REDACT_KEYS = (
    "password", "token", "authorization", "cookie",
    "secret", "apikey", "api_key", "sessionid",
)


def _es_sensible(clave) -> bool:
    clave = str(clave).lower()
    return any(s in clave for s in SAFE_REDACT_KEYS)


def _sanitize_meta(meta: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    limpio = {}
    for k, v in (meta or {}).items():
        if _es_sensible(k):
            limpio[k] = REDACTADO
        elif isinstance(v, dict):
            limpio[k] = _sanitize_meta(v)
        else:
            limpio[k] = v
    return limpio


def _request_context(request: Optional[HttpRequest]) -> Dict[str, Any]:
    """
    Contexto del request (explícito o el actual del thread): método, path,
    ip, user-agent, request_id, usuario y empresa/alcance de ScopeMiddleware.
    """
    request = request or get_current_request()
    if request is None:
        return {}

    ctx: Dict[str, Any] = {
        "method": getattr(request, "method", None),
        "path": getattr(request, "path", None),
        "ip": request.META.get("REMOTE_ADDR"),
        "user_agent": request.META.get("HTTP_USER_AGENT"),
        "request_id": str(getattr(request, "request_id", "") or "") or None,
        "alcance": alcance_label(request),
        "empresa_id": getattr(getattr(request, "identidad", None), "empresa_id", None),
    }
    user = getattr(request, "user", None)
    if getattr(user, "is_authenticated", False):
        ctx["user_id"] = user.pk
        ctx["username"] = getattr(user, "username", None)
    return ctx


def _as_text(value) -> Optional[str]:
    return None if value is None else str(value)


def _columnas_comunes(ctx: Dict[str, Any], *, empresa_id=None, user_id=None) -> Dict[str, Any]:
    return {
        "empresa_id": _as_text(empresa_id if empresa_id is not None else ctx.get("empresa_id")),
        "user_id": _as_text(user_id if user_id is not None else ctx.get("user_id")),
        "username": ctx.get("username"),
        "request_id": ctx.get("request_id"),
        "ip": ctx.get("ip"),
        "user_agent": ctx.get("user_agent"),
        "creado_en": now(),
    }


def log_event(
    nivel: str,
    origen: str,
    evento: str,
    mensaje: str,
    meta: Optional[Dict[str, Any]] = None,
    *,
    request: Optional[HttpRequest] = None,
    empresa_id=None,
) -> str:
    """
    Crea un registro AppLog y devuelve su id.

    nivel: debug|info|warning|error|critical
    origen: módulo del evento (ej. "http", "scope.login")
    evento: etiqueta corta (ej. "access_log", "login_rejected")
    meta: datos adicionales; se mezclan con el contexto del request y se sanitizan.
    """
    ctx = _request_context(request)
    meta_total = _sanitize_meta({**ctx, **(meta or {})})
    obj = AppLog.objects.create(
        nivel=nivel,
        origen=origen[:120],
        evento=evento[:80],
        mensaje=mensaje,
        meta_json=meta_total,
        alcance=meta_total.get("alcance"),
        http_method=meta_total.get("method"),
        http_path=meta_total.get("path"),
        http_status=meta_total.get("status"),
        duration_ms=meta_total.get("duration_ms"),
        **_columnas_comunes(ctx, empresa_id=empresa_id),
    )
    return str(obj.id)


def log_exception(
    origen: str,
    evento: str,
    exc: BaseException,
    *,
    request: Optional[HttpRequest] = None,
    empresa_id=None,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    meta = {
        "exception_type": type(exc).__name__,
        "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        **(extra or {}),
    }
    return log_event("error", origen, evento, str(exc), meta,
                     request=request, empresa_id=empresa_id)


def log_errors(origen: str, evento: str):
    """Decorador: registra la excepción en AppLog y la vuelve a lanzar."""
    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                log_exception(origen, evento, e, request=kwargs.get("request"))
                raise
        return wrapper
    return deco


def audit_event(
    action: str,
    resource_type: str,
    resource_id,
    *,
    success: bool = True,
    reason: Optional[str] = None,
    changes: Optional[Dict[str, Any]] = None,
    request: Optional[HttpRequest] = None,
    empresa_id=None,
    user_id=None,
) -> Optional[str]:
    """
    Crea un registro AuditLog. user_id/empresa_id explícitos tienen prioridad
    sobre el request (tras un logout el request ya es anónimo).
    Con APP_LOG_ENABLE_AUDIT apagado no registra nada.
    """
    if not getattr(settings, "APP_LOG_ENABLE_AUDIT", True):
        return None
    ctx = _request_context(request)
    obj = AuditLog.objects.create(
        action=action,
        resource_type=resource_type[:120],
        resource_id=str(resource_id)[:120],
        success=success,
        reason=reason,
        changes=_sanitize_meta(changes),
        **_columnas_comunes(ctx, empresa_id=empresa_id, user_id=user_id),
    )
    return str(obj.id)

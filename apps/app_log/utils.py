# apps/app_log/utils.py
"""
Contexto de request para los logs:
- request actual en un thread-local (lo fija RequestIDMiddleware),
- request_id único por request,
- etiqueta del alcance efectivo (lo fija ScopeMiddleware).
"""

import threading
import uuid
from typing import Optional
from django.http import HttpRequest

_local = threading.local()

REQUEST_ID_HEADER = "X-Request-ID"


def set_current_request(request: Optional[HttpRequest]):
    _local.request = request


def get_current_request() -> Optional[HttpRequest]:
    return getattr(_local, "request", None)


def ensure_request_id(request: HttpRequest) -> uuid.UUID:
    """Reusa el X-Request-ID entrante si es un UUID válido; si no, genera uno."""
    rid = getattr(request, "request_id", None)
    if rid:
        return rid
    entrante = request.headers.get(REQUEST_ID_HEADER)
    try:
        rid = uuid.UUID(entrante) if entrante else uuid.uuid4()
    except ValueError:
        rid = uuid.uuid4()
    request.request_id = rid
    return rid


def alcance_label(request: Optional[HttpRequest]) -> Optional[str]:
    alcance = getattr(request, "alcance", None)
    return getattr(alcance, "etiqueta", None)

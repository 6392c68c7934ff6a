# apps/app_log/middleware.py
"""
Middlewares de observabilidad:

- RequestIDMiddleware: asigna request_id y lo expone en el header X-Request-ID.
- RequestLogMiddleware: access log de cada request/response en AppLog y en el
  logger 'apps.access', con status, ms, alcance y body_preview redactado.
- AppLogExceptionMiddleware: registra excepciones no manejadas.
"""
import json
import logging
import time

from django.utils.deprecation import MiddlewareMixin

from .services.logger import _request_context, _sanitize_meta, log_event, log_exception
from .utils import REQUEST_ID_HEADER, ensure_request_id, set_current_request

SKIP_PREFIXES = (
    "/static/", "/media/", "/favicon.ico",
    "/admin/js/", "/admin/css/", "/admin/fonts/", "/healthz",
)

MAX_BODY_BYTES = 2048

access_logger = logging.getLogger("apps.access")


def _body_preview(request):
    if request.method not in ("POST", "PUT", "PATCH"):
        return None
    ctype = request.META.get("CONTENT_TYPE", "")
    if "application/json" in ctype:
        raw = request.body[:MAX_BODY_BYTES]
        try:
            data = json.loads(raw.decode("utf-8", errors="ignore"))
        except ValueError:
            return {"_raw": "<json inválido>"}
        return _sanitize_meta(data if isinstance(data, dict) else {})
    if "application/x-www-form-urlencoded" in ctype or "multipart/form-data" in ctype:
        return _sanitize_meta(request.POST.dict())
    return None


class RequestIDMiddleware(MiddlewareMixin):
    def process_request(self, request):
        set_current_request(request)
        ensure_request_id(request)

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid:
            response[REQUEST_ID_HEADER] = str(rid)
        set_current_request(None)
        return response


class RequestLogMiddleware(MiddlewareMixin):
    def process_request(self, request):
        request._app_log_started_at = time.perf_counter()
        request._app_log_body_preview = _body_preview(request)

    def process_response(self, request, response):
        path = getattr(request, "path", "")
        if any(path.startswith(p) for p in SKIP_PREFIXES):
            return response

        dur_ms = None
        if hasattr(request, "_app_log_started_at"):
            dur_ms = int(
                (time.perf_counter() - request._app_log_started_at) * 1000
            )

        status = getattr(response, "status_code", 0)
        level = "error" if status >= 500 else (
            "warning" if status >= 400 else "info"
        )

        ctx = _request_context(request)
        meta = {
            **ctx,
            "status": status,
            "duration_ms": dur_ms,
            "route_name": getattr(getattr(request, "resolver_match", None), "view_name", None),
            "body_preview": getattr(request, "_app_log_body_preview", None),
        }

        log_event(
            level,
            origen="http",
            evento="access_log",
            mensaje=f"{getattr(request, 'method', '-')} {path}",
            meta=meta,
            request=request,
        )
        access_logger.info(
            "%s %s", getattr(request, "method", "-"), path,
            extra={"status": status, "duration_ms": dur_ms},
        )
        return response


class AppLogExceptionMiddleware(MiddlewareMixin):
    def process_exception(self, request, exception):
        log_exception("middleware", "unhandled_exception",
                      exception, request=request)
        return None

# apps/app_log/logging_filters.py
from __future__ import annotations
import logging
from .utils import alcance_label, get_current_request


class RequestContextFilter(logging.Filter):
    """
    Añade campos al record para formatters/handlers:
    %(username)s %(empresa_id)s %(alcance)s %(request_id)s
    %(method)s %(path)s %(status)s %(duration_ms)s
    """

    def filter(self, record: logging.LogRecord) -> bool:
        req = get_current_request()
        record.username = getattr(record, "username", "-")
        record.empresa_id = getattr(record, "empresa_id", "-")
        record.alcance = getattr(record, "alcance", "-")
        record.request_id = getattr(record, "request_id", "-")
        record.method = getattr(record, "method", "-")
        record.path = getattr(record, "path", "-")
        record.status = getattr(record, "status", "-")
        record.duration_ms = getattr(record, "duration_ms", "-")

        if req:
            user = getattr(req, "user", None)
            if getattr(user, "is_authenticated", False):
                record.username = getattr(user, "username", None) or str(
                    getattr(user, "id", "-"))
            identidad = getattr(req, "identidad", None)
            record.empresa_id = str(getattr(identidad, "empresa_id", "-") or "-")
            record.alcance = alcance_label(req) or "-"
            record.request_id = str(getattr(req, "request_id", "-") or "-")
            record.method = getattr(req, "method", "-") or "-"
            record.path = getattr(req, "path", "-") or "-"

        return True

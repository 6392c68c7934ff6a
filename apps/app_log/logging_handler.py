# apps/app_log/logging_handler.py
"""
Handler que envía registros de logging a AppLog.
Importa los modelos de forma perezosa y tolera arranques sin migraciones.
"""

import logging


class AppLogDBHandler(logging.Handler):

    def emit(self, record: logging.LogRecord):
        try:
            from django.apps import apps
            if not apps.ready:
                return
            from .services.logger import log_event

            level = (record.levelname or "INFO").lower()
            msg = self.format(
                record) if self.formatter else record.getMessage()

            meta = {
                "logger": record.name,
                "funcName": getattr(record, "funcName", None),
                "lineno": getattr(record, "lineno", None),
                "exc_text": getattr(record, "exc_text", None),
            }
            for attr in ("status", "duration_ms", "alcance"):
                val = getattr(record, attr, None)
                if val not in (None, "-", ""):
                    meta[attr] = val

            log_event(
                nivel=level,
                origen=record.name,
                evento="django_log",
                mensaje=msg,
                meta=meta,
            )
        except Exception:
            # un handler de logging nunca rompe el flujo que loguea
            self.handleError(record)

from pathlib import Path
import os

# -------------------------------------------------------------------
# BASE
# -------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent  # .../project_root
DEBUG = False  # se sobreescribe en cada entorno
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "insecure-dev-key")  # prod: siempre por env

ALLOWED_HOSTS = []  # se sobreescribe por entorno

# -------------------------------------------------------------------
# APPS
# -------------------------------------------------------------------
INSTALLED_APPS = [
    # Django core
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Apps del proyecto
    "apps.org",
    "apps.accounts",
    "apps.scope",
    "apps.stock",
    "apps.app_log",
]

# -------------------------------------------------------------------
# MIDDLEWARE
#   RequestIDMiddleware antes de ScopeMiddleware: los warnings del alcance
#   ya salen con request_id. ScopeMiddleware después de AuthenticationMiddleware
#   (necesita request.user) y antes de RequestLogMiddleware (registra el alcance).
# -------------------------------------------------------------------
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "apps.app_log.middleware.RequestIDMiddleware",
    "operaciones.middleware.ScopeMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "apps.app_log.middleware.RequestLogMiddleware",
    "apps.app_log.middleware.AppLogExceptionMiddleware",
]

ROOT_URLCONF = "operaciones.urls"

# -------------------------------------------------------------------
# TEMPLATES (solo admin de Django; la API responde JSON)
# -------------------------------------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

# -------------------------------------------------------------------
# AUTH
#   Login por email: el username de cada usuario ES su email.
#   El único punto de entrada es la compuerta de /acceso/login/.
# -------------------------------------------------------------------
AUTHENTICATION_BACKENDS = [
    "django.contrib.auth.backends.ModelBackend",
]
LOGIN_URL = "/acceso/login/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -------------------------------------------------------------------
# ALCANCE POR SUCURSAL
# -------------------------------------------------------------------
# Valor de "ubicación" que pide visibilidad consolidada en el login
SCOPE_GENERAL_LOCATION = os.environ.get("SCOPE_GENERAL_LOCATION", "general")

# Métricas del consolidado: nombre → proveedor(empresa_id, alcance) -> {sucursal_id: valor}
CONSOLIDATED_METRICS = {
    "productos": "apps.stock.selectors.contar_productos",
    "valor_stock": "apps.stock.selectors.valor_stock",
}

# -------------------------------------------------------------------
# I18N / ZONA HORARIA
# -------------------------------------------------------------------
LANGUAGE_CODE = "es-ar"
TIME_ZONE = "America/Argentina/Tucuman"
USE_I18N = True
USE_TZ = True

# -------------------------------------------------------------------
# STATIC & MEDIA
# -------------------------------------------------------------------
STATIC_URL = "/static/"
MEDIA_URL = "/media/"

# -------------------------------------------------------------------
# DB / SEGURIDAD
#   - No se fijan en base.py para no acoplar entornos.
#   - Se definen en development.py / production.py / test.py
# -------------------------------------------------------------------

# -------------------------------------------------------------------
# LOGGING
# -------------------------------------------------------------------
# Observabilidad: toggles por entorno
APP_LOG_ENABLE_DB = os.environ.get(
    "APP_LOG_ENABLE_DB", "1") == "1"        # BD AppLog
APP_LOG_ENABLE_AUDIT = os.environ.get(
    "APP_LOG_ENABLE_AUDIT", "1") == "1"  # BD AuditLog
APP_LOG_LEVEL = os.environ.get("APP_LOG_LEVEL", "INFO")


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,

    "filters": {
        "request_context": {
            "()": "apps.app_log.logging_filters.RequestContextFilter",
        },
    },

    "formatters": {
        "line": {
            "format": (
                "%(asctime)s %(levelname)s %(name)s "
                "user=%(username)s empresa=%(empresa_id)s alcance=%(alcance)s "
                "req=%(request_id)s %(message)s"
            ),
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "access": {
            "format": (
                "%(asctime)s %(levelname)s "
                "user=%(username)s empresa=%(empresa_id)s alcance=%(alcance)s "
                "req=%(request_id)s method=%(method)s path=%(path)s "
                "status=%(status)s ms=%(duration_ms)s %(message)s"
            ),
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },

    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "filters": ["request_context"],
            "formatter": "line",
        },
        "console_access": {
            "class": "logging.StreamHandler",
            "filters": ["request_context"],
            "formatter": "access",
        },

        # BD → AppLog (tolera arranque sin migraciones)
        "applog_db": {
            "level": "INFO",
            "class": "apps.app_log.logging_handler.AppLogDBHandler",
        },
    },

    "loggers": {
        # Errores HTTP → consola + BD
        "django.request": {
            "handlers": ["console"]
            + (["applog_db"] if APP_LOG_ENABLE_DB else []),
            "level": "ERROR",
            "propagate": False,
        },

        # Logs de negocio genéricos (apps.scope, apps.org, ...)
        "apps": {
            "handlers": ["console"]
            + (["applog_db"] if APP_LOG_ENABLE_DB else []),
            "level": APP_LOG_LEVEL,
            "propagate": False,
        },

        # Access logs (desde RequestLogMiddleware)
        "apps.access": {
            "handlers": ["console_access"]
            + (["applog_db"] if APP_LOG_ENABLE_DB else []),
            "level": "INFO",
            "propagate": False,
        },
    },
}

import os
from django.core.wsgi import get_wsgi_application

# DJANGO_ENV: development (default) | production
env = os.getenv("DJANGO_ENV", "development").strip().lower()

# Ejemplo: DJANGO_ENV=production → operaciones/settings/production.py
os.environ.setdefault("DJANGO_SETTINGS_MODULE", f"operaciones.settings.{env}")

application = get_wsgi_application()

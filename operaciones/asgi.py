import os
from django.core.asgi import get_asgi_application

env = os.getenv("DJANGO_ENV", "development").strip().lower()
os.environ.setdefault("DJANGO_SETTINGS_MODULE", f"operaciones.settings.{env}")

application = get_asgi_application()

from django.apps import AppConfig


class StockConfig(AppConfig):
    name = "apps.stock"
    verbose_name = "Stock"
    default_auto_field = "django.db.models.BigAutoField"

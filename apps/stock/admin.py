from django.contrib import admin
from .models import Producto


@admin.register(Producto)
class ProductoAdmin(admin.ModelAdmin):
    list_display = ("nombre", "empresa", "sucursal",
                    "stock_actual", "precio_costo", "activo")
    list_filter = ("empresa", "sucursal", "activo")
    search_fields = ("nombre",)

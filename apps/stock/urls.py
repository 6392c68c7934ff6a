# apps/stock/urls.py
from django.urls import path
from . import views

app_name = "stock"

urlpatterns = [
    path("productos/", views.ProductosView.as_view(), name="productos"),
]

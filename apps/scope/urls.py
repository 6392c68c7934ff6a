# apps/scope/urls.py
from django.urls import path
from . import views

app_name = "scope"

urlpatterns = [
    path("ubicaciones/", views.UbicacionesView.as_view(), name="ubicaciones"),
    path("login/", views.LoginView.as_view(), name="login"),
    path("logout/", views.LogoutView.as_view(), name="logout"),
    path("alcance/", views.AlcanceView.as_view(), name="alcance"),
    path("sucursal/", views.CambiarSucursalView.as_view(), name="cambiar_sucursal"),
    path("consolidado/", views.ConsolidadoView.as_view(), name="consolidado"),
]

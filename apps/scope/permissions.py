# apps/scope/permissions.py
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied


class AlcanceRequiredMixin(LoginRequiredMixin):
    """
    Requiere sesión autenticada con alcance resuelto (ScopeMiddleware).
    Expone .identidad y .alcance para uso en vistas.

    Sin sesión o sin alcance → 403 (no hay redirect: la API es JSON).
    """
    raise_exception = True

    @property
    def identidad(self):
        return getattr(self.request, "identidad", None)

    @property
    def alcance(self):
        return getattr(self.request, "alcance", None)

    def dispatch(self, request, *args, **kwargs):
        if request.user.is_authenticated and getattr(request, "alcance", None) is None:
            return self.handle_no_permission()
        return super().dispatch(request, *args, **kwargs)


class AccesoGeneralRequiredMixin(AlcanceRequiredMixin):
    """Solo superadmin/director (visibilidad consolidada)."""

    def dispatch(self, request, *args, **kwargs):
        identidad = getattr(request, "identidad", None)
        if identidad is not None and not identidad.is_general_access:
            raise PermissionDenied(
                "Se requiere acceso general (matriz/dirección).")
        return super().dispatch(request, *args, **kwargs)

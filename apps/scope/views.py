# apps/scope/views.py

from django.contrib.auth import logout
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import ensure_csrf_cookie

from apps.app_log.models import AuditLog
from apps.app_log.services.logger import audit_event
from apps.org.exceptions import NotFound
from apps.org.selectors import empresa_por_subdominio, sucursales_activas

from .forms.login import CambiarSucursalForm, LoginForm
from .permissions import AccesoGeneralRequiredMixin, AlcanceRequiredMixin
from .resolver import describir_alcance, hierarchy_level
from .services.consolidated import consolidado_empresa
from .services.login import RejectReason, ubicacion_general, validate_login
from .services.selection import cambiar_sucursal

# credenciales/identidad → 401; política de ubicación → 403
_STATUS_RECHAZO = {
    RejectReason.INVALID_CREDENTIALS: 401,
    RejectReason.INACTIVE: 401,
}


def _sucursal_json(s):
    return {"id": s.pk, "nombre": s.nombre, "es_matriz": s.es_matriz}


class UbicacionesView(View):
    """
    Ubicaciones de la pantalla de acceso: "general" + sucursales activas.
    Emite la cookie csrftoken que necesitan los POST de login/logout/sucursal.
    """

    @method_decorator(ensure_csrf_cookie)
    def get(self, request):
        try:
            empresa = empresa_por_subdominio(request.GET.get("empresa", ""))
        except NotFound:
            return JsonResponse({"detail": "Empresa inexistente."}, status=404)

        ubicaciones = [{"id": ubicacion_general(), "nombre": "General (Matriz/Dirección)", "es_matriz": False}]
        ubicaciones += [_sucursal_json(s) for s in sucursales_activas(empresa.pk)]
        return JsonResponse({"empresa": empresa.nombre, "ubicaciones": ubicaciones})


class LoginView(View):
    def post(self, request):
        form = LoginForm(request.POST)
        if not form.is_valid():
            return JsonResponse({"ok": False, "errors": form.errors}, status=400)

        result = validate_login(
            request,
            form.cleaned_data["email"],
            form.cleaned_data["password"],
            form.cleaned_data["ubicacion"],
        )
        if not result.ok:
            return JsonResponse(
                {"ok": False, "motivo": result.motivo.value, "mensaje": result.mensaje},
                status=_STATUS_RECHAZO.get(result.motivo, 403),
            )
        return JsonResponse({
            "ok": True,
            "alcance": describir_alcance(result.alcance),
            "nivel": hierarchy_level(result.identidad).value,
        })


class LogoutView(View):
    def post(self, request):
        if request.user.is_authenticated:
            audit_event(AuditLog.Action.LOGOUT, "auth.User",
                        request.user.pk, request=request)
        logout(request)
        return JsonResponse({"ok": True})


class AlcanceView(AlcanceRequiredMixin, View):
    def get(self, request):
        data = {
            "alcance": describir_alcance(self.alcance),
            "nivel": hierarchy_level(self.identidad).value,
            "acceso_general": self.identidad.is_general_access,
        }
        if self.identidad.is_general_access:
            data["sucursales"] = [
                _sucursal_json(s) for s in sucursales_activas(self.identidad.empresa_id)
            ]
        return JsonResponse(data)


class CambiarSucursalView(AlcanceRequiredMixin, View):
    def post(self, request):
        form = CambiarSucursalForm(request.POST)
        if not form.is_valid():
            return JsonResponse({"ok": False, "errors": form.errors}, status=400)
        try:
            alcance = cambiar_sucursal(
                self.identidad, form.cleaned_data["sucursal"], request=request)
        except NotFound as exc:
            return JsonResponse({"ok": False, "detail": str(exc)}, status=404)
        return JsonResponse({"ok": True, "alcance": describir_alcance(alcance)})


class ConsolidadoView(AccesoGeneralRequiredMixin, View):
    def get(self, request):
        consolidado = consolidado_empresa(self.identidad.empresa_id)
        return JsonResponse(consolidado.as_dict())

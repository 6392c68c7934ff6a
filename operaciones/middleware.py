# operaciones/middleware.py
import logging

from django.contrib.auth import logout
from django.utils.deprecation import MiddlewareMixin

from apps.accounts.selectors import identidad_de
from apps.org.exceptions import Inactive, NotFound
from apps.scope.exceptions import NoBranchAssigned
from apps.scope.resolver import resolve_scope
from apps.scope.services.selection import leer_seleccion

logger = logging.getLogger("apps.scope.middleware")


class ScopeMiddleware(MiddlewareMixin):
    """
    Inyecta en cada request autenticado:
      - request.identidad: Identidad o None
      - request.alcance: SingleBranch | AllBranches, o None

    El alcance se calcula UNA vez por request desde la selección persistida;
    las vistas y queries lo reciben explícito, nunca leen estado compartido.

    Reglas:
      - Usuario sin membresía (ej. staff del admin de Django): sin alcance.
      - Usuario/empresa/sucursal inactivos o usuario atado sin sucursal:
        se cierra la sesión (equivale a falla de autenticación).
    """

    def process_request(self, request):
        request.identidad = None
        request.alcance = None

        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return

        try:
            identidad = identidad_de(user.pk)
        except NotFound:
            return
        except Inactive as exc:
            logger.warning("Sesión de usuario %s cerrada: %s", user.pk, exc)
            logout(request)
            return

        try:
            alcance = resolve_scope(identidad, leer_seleccion(identidad))
        except NoBranchAssigned as exc:
            logger.warning("Sesión de usuario %s cerrada: %s", user.pk, exc)
            logout(request)
            return

        request.identidad = identidad
        request.alcance = alcance

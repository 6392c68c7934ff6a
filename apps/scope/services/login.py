# apps/scope/services/login.py
"""
Compuerta de validación de login.

El chequeo de ubicación necesita datos que solo existen después de autenticar
(roles y sucursal asignada), pero un chequeo fallido no puede dejar una sesión
usable. Por eso el orden es:

    1. autenticar y emitir sesión (proveedor de auth)
    2. leer identidad del directorio
    3. validar la ubicación elegida
    4. si algo falla: REVOCAR la sesión y recién después devolver el rechazo

Toda excepción posterior al paso 1 también revoca antes de propagarse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from django.conf import settings
from django.contrib.auth import authenticate, login, logout

from apps.accounts.identity import Identidad
from apps.accounts.selectors import identidad_de
from apps.app_log.models import AuditLog
from apps.app_log.services.logger import audit_event, log_event
from apps.org.exceptions import Inactive
from apps.org.selectors import sucursal_activa_de

from ..fsm import LoginEstado, TransicionInvalida, puede_transicionar
from ..resolver import EffectiveScope, resolve_scope
from .selection import guardar_seleccion

logger = logging.getLogger(__name__)


def ubicacion_general() -> str:
    return getattr(settings, "SCOPE_GENERAL_LOCATION", "general")


class RejectReason(str, Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    INACTIVE = "inactive"
    LOCATION_MISMATCH = "location_mismatch"
    MUST_USE_GENERAL = "must_use_general"
    WRONG_BRANCH = "wrong_branch"


MENSAJES = {
    RejectReason.INVALID_CREDENTIALS: "Email o contraseña incorrectos.",
    RejectReason.INACTIVE: "Tu acceso está deshabilitado. Contactá al administrador.",
    RejectReason.LOCATION_MISMATCH: "Tu usuario no tiene acceso general. Seleccioná tu sucursal.",
    RejectReason.MUST_USE_GENERAL: "El superadmin debe acceder por la ubicación 'General'.",
    RejectReason.WRONG_BRANCH: "Ubicación incorrecta. Seleccioná la sucursal correcta para tu acceso.",
}


@dataclass(frozen=True)
class Accepted:
    alcance: EffectiveScope
    identidad: Identidad
    ok: bool = True


@dataclass(frozen=True)
class Rejected:
    motivo: RejectReason
    ok: bool = False

    @property
    def mensaje(self) -> str:
        return MENSAJES[self.motivo]


LoginResult = Union[Accepted, Rejected]


class SessionAuthProvider:
    """Credenciales y sesión sobre django.contrib.auth (username = email)."""

    def __init__(self, request):
        self.request = request

    def sign_in(self, email: str, password: str):
        user = authenticate(self.request, username=email, password=password)
        if user is None:
            return None
        login(self.request, user)
        return user

    def revoke(self) -> None:
        # flush de la sesión: la cookie anterior deja de ser válida
        logout(self.request)


@dataclass
class LoginGate:
    provider: SessionAuthProvider
    estado: LoginEstado = LoginEstado.IDLE
    historial: List[LoginEstado] = field(default_factory=lambda: [LoginEstado.IDLE])
    user_id: Optional[int] = None

    def _ir(self, hacia: LoginEstado) -> None:
        if not puede_transicionar(self.estado, hacia):
            raise TransicionInvalida(f"{self.estado.value} → {hacia.value}")
        self.estado = hacia
        self.historial.append(hacia)

    def _rechazar(self, motivo: RejectReason) -> Rejected:
        # revocar primero; el rechazo se informa recién con la sesión muerta
        self.provider.revoke()
        self._ir(LoginEstado.RECHAZADO)
        return Rejected(motivo)

    def validar(self, email: str, password: str, ubicacion: Union[str, int]) -> LoginResult:
        self._ir(LoginEstado.CREDENCIALES_ENVIADAS)
        user = self.provider.sign_in(email, password)
        if user is None:
            # una sesión previa del request tampoco sobrevive al rechazo
            self.provider.revoke()
            self._ir(LoginEstado.IDLE)
            return Rejected(RejectReason.INVALID_CREDENTIALS)
        self.user_id = user.pk

        try:
            try:
                identidad = identidad_de(user.pk)
            except Inactive:
                return self._rechazar(RejectReason.INACTIVE)
            self._ir(LoginEstado.ROLES_OBTENIDOS)

            motivo = motivo_rechazo_ubicacion(identidad, ubicacion)
            if motivo is not None:
                return self._rechazar(motivo)
            self._ir(LoginEstado.UBICACION_VALIDADA)

            seleccion = None if ubicacion == ubicacion_general() else int(ubicacion)
            guardar_seleccion(user.pk, seleccion)
            alcance = resolve_scope(identidad, seleccion)
            self._ir(LoginEstado.SESION_ESTABLECIDA)
            return Accepted(alcance=alcance, identidad=identidad)
        except BaseException:
            # incluye cancelaciones: nunca dejar viva una sesión no autorizada
            if self.estado not in (LoginEstado.SESION_ESTABLECIDA, LoginEstado.RECHAZADO):
                self.provider.revoke()
            raise


def motivo_rechazo_ubicacion(identidad: Identidad, ubicacion: Union[str, int]) -> Optional[RejectReason]:
    """Política de ubicación. None = la ubicación es válida para el usuario."""
    if ubicacion == ubicacion_general():
        if not identidad.is_general_access:
            return RejectReason.LOCATION_MISMATCH
        return None

    if identidad.is_superadmin and not identidad.is_director:
        return RejectReason.MUST_USE_GENERAL

    try:
        sucursal_id = int(ubicacion)
    except (TypeError, ValueError):
        return RejectReason.WRONG_BRANCH

    if not identidad.is_general_access:
        if identidad.sucursal_asignada_id != sucursal_id:
            return RejectReason.WRONG_BRANCH
        return None

    # director acotando a una sucursal: debe ser activa y de su empresa
    if sucursal_activa_de(identidad.empresa_id, sucursal_id) is None:
        return RejectReason.WRONG_BRANCH
    return None


def validate_login(request, email: str, password: str, ubicacion: Union[str, int], *, provider=None) -> LoginResult:
    """
    Punto de entrada del flujo de acceso. Devuelve Accepted(alcance) o
    Rejected(motivo); ante un rechazo el request queda sin autenticar.
    """
    gate = LoginGate(provider=provider or SessionAuthProvider(request))
    email = (email or "").strip().lower()
    result = gate.validar(email, password, ubicacion)

    if result.ok:
        logger.info("Login aceptado para %s (alcance=%s)",
                    email, result.alcance.etiqueta)
        audit_event(
            AuditLog.Action.LOGIN, "auth.User", result.identidad.user_id,
            request=request, empresa_id=result.identidad.empresa_id,
            user_id=result.identidad.user_id,
            changes={"ubicacion": {"after": str(ubicacion)}},
        )
        return result

    logger.warning("Login rechazado para %s: %s", email, result.motivo.value)
    log_event(
        "warning", "scope.login", "login_rejected",
        f"Login rechazado: {result.motivo.value}",
        meta={"email": email, "ubicacion": str(ubicacion),
              "estados": [e.value for e in gate.historial]},
        request=request,
    )
    if gate.user_id is not None:
        audit_event(
            AuditLog.Action.LOGIN, "auth.User", gate.user_id,
            success=False, reason=result.motivo.value,
            request=request, user_id=gate.user_id,
        )
    return result

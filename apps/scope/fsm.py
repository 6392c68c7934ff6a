# apps/scope/fsm.py
"""
Máquina de estados de la compuerta de login.

    idle → credenciales_enviadas → roles_obtenidos → ubicacion_validada → sesion_establecida
                                        │                   │
                                        └──→ rechazado ←────┘

Extensiones:
- credenciales_enviadas → idle: credenciales rechazadas (no se emite sesión y
  cualquier sesión previa del request se revoca).
- credenciales_enviadas → rechazado: ya hay sesión emitida pero el directorio
  falla (usuario/sucursal inactivos); la sesión se revoca igual.

'sesion_establecida' y 'rechazado' son finales.
"""

from enum import Enum
from typing import Iterable, Union


class LoginEstado(str, Enum):
    IDLE = "idle"
    CREDENCIALES_ENVIADAS = "credenciales_enviadas"
    ROLES_OBTENIDOS = "roles_obtenidos"
    UBICACION_VALIDADA = "ubicacion_validada"
    SESION_ESTABLECIDA = "sesion_establecida"
    RECHAZADO = "rechazado"


_TRANSICIONES = {
    LoginEstado.IDLE: {LoginEstado.CREDENCIALES_ENVIADAS},
    LoginEstado.CREDENCIALES_ENVIADAS: {
        LoginEstado.ROLES_OBTENIDOS, LoginEstado.IDLE, LoginEstado.RECHAZADO,
    },
    LoginEstado.ROLES_OBTENIDOS: {LoginEstado.UBICACION_VALIDADA, LoginEstado.RECHAZADO},
    LoginEstado.UBICACION_VALIDADA: {LoginEstado.SESION_ESTABLECIDA, LoginEstado.RECHAZADO},
    LoginEstado.SESION_ESTABLECIDA: set(),
    LoginEstado.RECHAZADO: set(),
}


class TransicionInvalida(Exception):
    pass


def _coerce_estado(value: Union[str, LoginEstado]) -> LoginEstado:
    if isinstance(value, LoginEstado):
        return value
    return LoginEstado(str(value))


def transiciones_desde(desde: Union[str, LoginEstado]) -> Iterable[LoginEstado]:
    return _TRANSICIONES.get(_coerce_estado(desde), set())


def puede_transicionar(desde: Union[str, LoginEstado], hacia: Union[str, LoginEstado]) -> bool:
    try:
        estado_desde = _coerce_estado(desde)
        estado_hacia = _coerce_estado(hacia)
    except ValueError:
        return False
    return estado_hacia in _TRANSICIONES.get(estado_desde, set())


def es_final(estado: Union[str, LoginEstado]) -> bool:
    try:
        e = _coerce_estado(estado)
    except ValueError:
        return False
    return len(_TRANSICIONES.get(e, set())) == 0

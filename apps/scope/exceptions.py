# apps/scope/exceptions.py
"""
Errores del motor de alcance.

Las violaciones de política en el login NO se modelan como excepciones hacia
afuera: la compuerta las convierte en un Rejected con motivo propio
(ver services/login.py). Acá quedan los errores que sí se propagan.
"""

from django.core.exceptions import PermissionDenied


class ScopeError(Exception):
    """Base de errores de alcance."""


class NoBranchAssigned(ScopeError):
    """Usuario atado a sucursal pero sin sucursal asignada: no ve nada."""


class BranchSwitchNotAllowed(PermissionDenied):
    """Un usuario atado a sucursal intentó cambiar de sucursal en sesión."""


class BranchWriteDenied(PermissionDenied):
    """Escritura sobre una fila de otra sucursal."""

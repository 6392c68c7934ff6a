# apps/accounts/selectors.py
from apps.org.exceptions import Inactive, NotFound

from .identity import Identidad
from .models import EmpresaMembership


def membership_de(user_id) -> EmpresaMembership:
    try:
        return (
            EmpresaMembership.objects
            .select_related("user", "empresa", "sucursal_asignada")
            .prefetch_related("roles")
            .get(user_id=user_id)
        )
    except EmpresaMembership.DoesNotExist:
        raise NotFound(f"Usuario {user_id} sin membresía de empresa.")


def identidad_de(user_id) -> Identidad:
    """
    Roles, sucursal asignada y flags del usuario.

    Lanza:
      - NotFound si el usuario no tiene membresía.
      - Inactive si el usuario, su membresía, su empresa o su sucursal
        asignada están desactivados.
    """
    mem = membership_de(user_id)

    if not mem.user.is_active or not mem.activo:
        raise Inactive(f"Usuario {user_id} deshabilitado.")
    if not mem.empresa.activo:
        raise Inactive(f"Empresa {mem.empresa_id} deshabilitada.")
    if mem.sucursal_asignada is not None and not mem.sucursal_asignada.activo:
        raise Inactive(f"Sucursal {mem.sucursal_asignada_id} deshabilitada.")

    return Identidad(
        user_id=mem.user_id,
        empresa_id=mem.empresa_id,
        roles=frozenset(r.rol for r in mem.roles.all()),
        sucursal_asignada_id=mem.sucursal_asignada_id,
        es_lider_equipo=mem.es_lider_equipo,
    )

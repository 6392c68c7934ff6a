# apps/accounts/services/memberships.py
from typing import Iterable, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from ..models import EmpresaMembership, Rol, RolAsignado


@transaction.atomic
def ensure_membership(
    user,
    empresa,
    roles: Iterable[str] = (Rol.TECHNICIAN,),
    sucursal_asignada=None,
    es_lider_equipo: bool = False,
) -> EmpresaMembership:
    """
    Crea o actualiza la membresía del usuario y reemplaza su conjunto de roles.
    Un superadmin nunca tiene sucursal asignada.
    """
    roles = {str(getattr(r, "value", r)) for r in roles}
    invalidos = roles - set(Rol.values)
    if invalidos:
        raise ValidationError(f"Roles inválidos: {sorted(invalidos)}")
    if Rol.SUPERADMIN.value in roles and sucursal_asignada is not None:
        raise ValidationError("Un superadmin no puede tener sucursal asignada.")
    if sucursal_asignada is not None and sucursal_asignada.empresa_id != empresa.pk:
        raise ValidationError("La sucursal no pertenece a la empresa.")

    mem, _ = EmpresaMembership.objects.update_or_create(
        user=user,
        defaults={
            "empresa": empresa,
            "sucursal_asignada": sucursal_asignada,
            "es_lider_equipo": es_lider_equipo,
        },
    )
    mem.roles.exclude(rol__in=roles).delete()
    existentes = set(mem.roles.values_list("rol", flat=True))
    RolAsignado.objects.bulk_create(
        [RolAsignado(membership=mem, rol=r) for r in sorted(roles - existentes)]
    )
    return mem


def asignar_sucursal(mem: EmpresaMembership, sucursal: Optional[object]) -> EmpresaMembership:
    """Cambia la asignación operativa (flujo administrativo, no de sesión)."""
    if sucursal is not None and mem.roles.filter(rol=Rol.SUPERADMIN).exists():
        raise ValidationError("Un superadmin no puede tener sucursal asignada.")
    mem.sucursal_asignada = sucursal
    mem.full_clean()
    mem.save(update_fields=["sucursal_asignada"])
    return mem

# apps/scope/services/selection.py
"""
Persistencia de la selección de alcance (EmpresaMembership.sucursal_seleccionada).

Escriben solamente:
  - la compuerta de login al aceptar (guardar_seleccion),
  - el cambio de sucursal en sesión, solo para usuarios con acceso general
    (cambiar_sucursal).
Los escritores son sesiones del propio usuario: last-write-wins.
"""

from __future__ import annotations

import logging
from typing import Optional

from apps.accounts.identity import Identidad
from apps.accounts.models import EmpresaMembership
from apps.app_log.models import AuditLog
from apps.app_log.services.logger import audit_event
from apps.org.exceptions import NotFound
from apps.org.selectors import sucursal_activa_de

from ..exceptions import BranchSwitchNotAllowed
from ..resolver import EffectiveScope, resolve_scope

logger = logging.getLogger(__name__)


def guardar_seleccion(user_id, sucursal_id: Optional[int]) -> None:
    EmpresaMembership.objects.filter(user_id=user_id).update(
        sucursal_seleccionada_id=sucursal_id)


def leer_seleccion(identidad: Identidad) -> Optional[int]:
    """
    Selección persistida, saneada:
    - usuario atado a sucursal: si no coincide con la asignación se corrige
      en silencio (selección obsoleta) y se devuelve la asignada.
    - acceso general: si la sucursal elegida ya no está activa o es de otra
      empresa, se limpia y se vuelve a "todas".
    """
    actual = (
        EmpresaMembership.objects
        .filter(user_id=identidad.user_id)
        .values_list("sucursal_seleccionada_id", flat=True)
        .first()
    )

    if not identidad.is_general_access:
        asignada = identidad.sucursal_asignada_id
        if actual != asignada:
            logger.warning(
                "Selección obsoleta para usuario %s (guardada=%s, asignada=%s); se corrige.",
                identidad.user_id, actual, asignada,
            )
            guardar_seleccion(identidad.user_id, asignada)
        return asignada

    if actual is not None and sucursal_activa_de(identidad.empresa_id, actual) is None:
        logger.info(
            "Selección %s del usuario %s ya no es válida; vuelve a todas las sucursales.",
            actual, identidad.user_id,
        )
        guardar_seleccion(identidad.user_id, None)
        return None
    return actual


def cambiar_sucursal(identidad: Identidad, sucursal_id: Optional[int], *, request=None) -> EffectiveScope:
    """
    Cambio de sucursal en sesión (o vuelta a "todas" con sucursal_id=None).
    Solo para superadmin/director; no modifica la asignación.
    """
    if not identidad.is_general_access:
        audit_event(
            AuditLog.Action.SCOPE_SWITCH, "accounts.EmpresaMembership", identidad.user_id,
            success=False, reason="usuario atado a sucursal",
            request=request, empresa_id=identidad.empresa_id,
            user_id=identidad.user_id,
        )
        raise BranchSwitchNotAllowed(
            "Tu usuario está asignado a una sucursal; no podés cambiarla.")

    if sucursal_id is not None and sucursal_activa_de(identidad.empresa_id, sucursal_id) is None:
        raise NotFound(
            f"Sucursal {sucursal_id} inexistente o inactiva en la empresa.")

    guardar_seleccion(identidad.user_id, sucursal_id)
    alcance = resolve_scope(identidad, sucursal_id)
    audit_event(
        AuditLog.Action.SCOPE_SWITCH, "accounts.EmpresaMembership", identidad.user_id,
        changes={"sucursal_seleccionada": {"after": sucursal_id}},
        request=request, empresa_id=identidad.empresa_id,
        user_id=identidad.user_id,
    )
    logger.info("Usuario %s cambió alcance a %s",
                identidad.user_id, alcance.etiqueta)
    return alcance

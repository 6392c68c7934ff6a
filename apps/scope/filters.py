# apps/scope/filters.py
"""
Contrato de filtrado por alcance para las queries de dominio.

- SingleBranch(id)             → <field>_id = id
- AllBranches (agregado=True)  → <field> IS NOT NULL
      Filas sin sucursal (legado/sin asignar) nunca cuentan como
      "todas las sucursales" en un total.
- AllBranches (listado)        → sin predicado de sucursal

Solo lectura. Las escrituras validan aparte con ensure_branch_write().
"""

from __future__ import annotations

from django.db.models import QuerySet

from apps.accounts.identity import Identidad

from .exceptions import BranchWriteDenied
from .resolver import AllBranches, EffectiveScope, SingleBranch


def apply_scope(qs: QuerySet, alcance: EffectiveScope, *, field: str = "sucursal", agregado: bool = False) -> QuerySet:
    if isinstance(alcance, SingleBranch):
        return qs.filter(**{f"{field}_id": alcance.sucursal_id})
    if isinstance(alcance, AllBranches):
        if agregado:
            return qs.filter(**{f"{field}__isnull": False})
        return qs
    raise TypeError(f"Alcance desconocido: {alcance!r}")


def ensure_branch_write(identidad: Identidad, sucursal_id) -> None:
    """
    Revalida una mutación: un usuario atado a sucursal solo escribe filas de
    su sucursal asignada. No confía en el alcance de lectura.
    """
    if identidad.is_general_access:
        return
    if identidad.sucursal_asignada_id is None or identidad.sucursal_asignada_id != sucursal_id:
        raise BranchWriteDenied(
            "No podés modificar datos de otra sucursal.")

# apps/scope/resolver.py
"""
Resolución del alcance efectivo y del nivel jerárquico.

Ambas funciones son puras: reciben hechos de identidad (Identidad) y la
selección persistida, y no leen estado compartido. El middleware las invoca
una vez por request y el resultado viaja explícito hasta cada query.

Reglas de alcance:
- superadmin o director:
    selección concreta → SingleBranch(selección)  (acotamiento voluntario)
    sin selección      → AllBranches
- cualquier otro usuario (atado a sucursal):
    SingleBranch(sucursal asignada), ignorando cualquier selección que no
    coincida (estado viejo o adulterado).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from apps.accounts.identity import ROLES_GERENCIALES, Identidad
from apps.accounts.models import Rol

from .exceptions import NoBranchAssigned


@dataclass(frozen=True)
class SingleBranch:
    sucursal_id: int

    @property
    def etiqueta(self) -> str:
        return f"sucursal:{self.sucursal_id}"


@dataclass(frozen=True)
class AllBranches:
    @property
    def etiqueta(self) -> str:
        return "todas"


EffectiveScope = Union[SingleBranch, AllBranches]


class HierarchyLevel(str, Enum):
    TECHNICIAN = "technician"
    SUPERVISOR = "supervisor"
    MANAGER = "manager"
    DIRECTOR = "director"


def resolve_scope(identidad: Identidad, seleccion: Optional[int]) -> EffectiveScope:
    if identidad.is_general_access:
        if seleccion is not None:
            return SingleBranch(seleccion)
        return AllBranches()

    if identidad.sucursal_asignada_id is None:
        # Nunca ampliar visibilidad por falta de asignación
        raise NoBranchAssigned(
            f"Usuario {identidad.user_id} sin sucursal asignada.")
    return SingleBranch(identidad.sucursal_asignada_id)


def hierarchy_level(identidad: Identidad) -> HierarchyLevel:
    """
    Nivel para elegir variantes de tablero/reportes (no filtra datos).
    El superadmin se clasifica como director: ve todo lo consolidado.
    """
    if identidad.is_superadmin or identidad.is_director:
        return HierarchyLevel.DIRECTOR
    if identidad.roles & ROLES_GERENCIALES:
        return HierarchyLevel.MANAGER
    if identidad.tiene_rol(Rol.SUPERVISOR) or identidad.es_lider_equipo:
        return HierarchyLevel.SUPERVISOR
    return HierarchyLevel.TECHNICIAN


def describir_alcance(alcance: EffectiveScope) -> dict:
    """Representación JSON-friendly del alcance."""
    if isinstance(alcance, SingleBranch):
        return {"tipo": "sucursal", "sucursal_id": alcance.sucursal_id}
    return {"tipo": "todas", "sucursal_id": None}

# apps/accounts/identity.py
"""
Hechos de identidad de un usuario, desacoplados del ORM.

Es lo que consumen el resolvedor de alcance y la compuerta de login: un valor
inmutable, construido una vez por request desde el directorio.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from .models import Rol

ROLES_GERENCIALES = frozenset({Rol.ADMIN.value, Rol.MANAGER.value})


@dataclass(frozen=True)
class Identidad:
    user_id: int
    empresa_id: int
    roles: FrozenSet[str] = field(default_factory=frozenset)
    sucursal_asignada_id: Optional[int] = None
    es_lider_equipo: bool = False

    def tiene_rol(self, rol) -> bool:
        return str(getattr(rol, "value", rol)) in self.roles

    @property
    def is_superadmin(self) -> bool:
        return self.tiene_rol(Rol.SUPERADMIN)

    @property
    def is_director(self) -> bool:
        # admin/manager sin sucursal asignada y que no sea superadmin
        return (
            bool(self.roles & ROLES_GERENCIALES)
            and self.sucursal_asignada_id is None
            and not self.is_superadmin
        )

    @property
    def is_general_access(self) -> bool:
        """Puede ver todas las sucursales (login por 'general')."""
        return self.is_superadmin or self.is_director

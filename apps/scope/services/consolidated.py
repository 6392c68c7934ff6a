# apps/scope/services/consolidated.py
"""
Consolidado multi-sucursal para usuarios con acceso general.

- aggregate(): combinador puro. Filas matriz primero y luego alfabético,
  más una fila de totales que suma cada métrica numérica (suma simple, sin
  ponderar). Las sucursales sin actividad se mantienen para que los totales
  se puedan auditar contra las filas.
- recolectar_metricas(): arma un paquete de métricas por sucursal activa con
  los proveedores de settings.CONSOLIDATED_METRICS, siempre bajo AllBranches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from numbers import Number
from typing import Callable, Dict, Iterable, List, Mapping, Tuple

from django.conf import settings
from django.utils.module_loading import import_string

from apps.app_log.services.logger import log_errors
from apps.org.selectors import sucursales_activas

from ..resolver import AllBranches

MetricProvider = Callable[[int, AllBranches], Mapping[int, Number]]


@dataclass(frozen=True)
class MetricasSucursal:
    sucursal_id: int
    nombre: str
    es_matriz: bool
    valores: Mapping[str, Number] = field(default_factory=dict)


@dataclass(frozen=True)
class Consolidado:
    filas: Tuple[MetricasSucursal, ...]
    totales: Dict[str, Number]

    def as_dict(self) -> dict:
        return {
            "sucursales": [
                {
                    "sucursal_id": f.sucursal_id,
                    "nombre": f.nombre,
                    "es_matriz": f.es_matriz,
                    **{k: _jsonable(v) for k, v in f.valores.items()},
                }
                for f in self.filas
            ],
            "totales": {k: _jsonable(v) for k, v in self.totales.items()},
        }


def _jsonable(value):
    return str(value) if isinstance(value, Decimal) else value


def _es_numerico(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _orden(fila: MetricasSucursal):
    return (not fila.es_matriz, fila.nombre.casefold(), fila.sucursal_id)


def aggregate(metricas: Iterable[MetricasSucursal]) -> Consolidado:
    filas = tuple(sorted(metricas, key=_orden))

    claves: List[str] = []
    for fila in filas:
        for clave, valor in fila.valores.items():
            if _es_numerico(valor) and clave not in claves:
                claves.append(clave)

    totales: Dict[str, Number] = {}
    for clave in claves:
        total = 0
        for fila in filas:
            valor = fila.valores.get(clave, 0)
            if _es_numerico(valor):
                total = total + valor
        totales[clave] = total
    return Consolidado(filas=filas, totales=totales)


def _proveedores() -> Dict[str, MetricProvider]:
    conf = getattr(settings, "CONSOLIDATED_METRICS", {}) or {}
    return {
        nombre: (import_string(ruta) if isinstance(ruta, str) else ruta)
        for nombre, ruta in conf.items()
    }


def recolectar_metricas(empresa_id) -> List[MetricasSucursal]:
    alcance = AllBranches()
    sucursales = list(sucursales_activas(empresa_id))
    por_metrica = {
        nombre: proveedor(empresa_id, alcance)
        for nombre, proveedor in _proveedores().items()
    }
    return [
        MetricasSucursal(
            sucursal_id=s.pk,
            nombre=s.nombre,
            es_matriz=s.es_matriz,
            valores={
                nombre: valores.get(s.pk, 0)
                for nombre, valores in por_metrica.items()
            },
        )
        for s in sucursales
    ]


@log_errors("scope.consolidado", "consolidado_error")
def consolidado_empresa(empresa_id) -> Consolidado:
    return aggregate(recolectar_metricas(empresa_id))

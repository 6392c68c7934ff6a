# apps/org/selectors.py

from typing import Optional

from django.db.models import QuerySet

from .exceptions import NotFound
from .models import Empresa, Sucursal


def _require_empresa(empresa_id) -> None:
    if not Empresa.objects.filter(pk=empresa_id).exists():
        raise NotFound(f"Empresa {empresa_id} inexistente.")


def sucursales_activas(empresa_id) -> QuerySet[Sucursal]:
    """
    Sucursales ACTIVAS de la empresa, matriz primero y luego por nombre.
    Lanza NotFound si la empresa no existe.
    """
    _require_empresa(empresa_id)
    return (
        Sucursal.objects
        .filter(empresa_id=empresa_id)
        .activas()
        .matriz_primero()
    )


def sucursal_matriz(empresa_id) -> Sucursal:
    _require_empresa(empresa_id)
    matriz = Sucursal.objects.filter(
        empresa_id=empresa_id, es_matriz=True).first()
    if matriz is None:
        raise NotFound(f"La empresa {empresa_id} no tiene sucursal matriz.")
    return matriz


def sucursal_activa_de(empresa_id, sucursal_id) -> Optional[Sucursal]:
    """Sucursal activa de la empresa con ese id, o None (ajena, inactiva o inexistente)."""
    if sucursal_id is None:
        return None
    return (
        Sucursal.objects
        .filter(pk=sucursal_id, empresa_id=empresa_id, activo=True)
        .first()
    )


def empresa_por_subdominio(subdominio: str) -> Empresa:
    """Empresa ACTIVA por subdominio (pantalla de acceso)."""
    empresa = Empresa.objects.filter(subdominio=subdominio, activo=True).first()
    if empresa is None:
        raise NotFound(f"Empresa '{subdominio}' inexistente.")
    return empresa

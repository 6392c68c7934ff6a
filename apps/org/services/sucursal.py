# apps/org/services/sucursal.py

import logging
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from ..models import Empresa, Sucursal

logger = logging.getLogger(__name__)


@transaction.atomic
def crear_sucursal(
    empresa: Empresa,
    nombre: str,
    direccion: str = "",
    codigo_interno: Optional[str] = None,
) -> Sucursal:
    """
    Crea una sucursal para la empresa.
    - La primera sucursal de la empresa queda como matriz.
    - Si no se provee codigo_interno, el modelo lo autogenera en save().
    """
    es_primera = not Sucursal.objects.filter(empresa=empresa).exists()
    sucursal = Sucursal.objects.create(
        empresa=empresa,
        nombre=nombre,
        direccion=direccion,
        codigo_interno=codigo_interno or "",
        es_matriz=es_primera,
    )
    logger.info("Sucursal %s creada en empresa %s (matriz=%s)",
                sucursal.pk, empresa.pk, es_primera)
    return sucursal


@transaction.atomic
def marcar_matriz(sucursal: Sucursal) -> Sucursal:
    """
    Mueve el flag de matriz a `sucursal`. Desmarca la anterior en la misma
    transacción para no violar el constraint de una matriz por empresa.
    """
    if not sucursal.activo:
        raise ValidationError("Una sucursal inactiva no puede ser matriz.")

    # lock de las sucursales de la empresa mientras movemos el flag
    list(Sucursal.objects.select_for_update().filter(empresa_id=sucursal.empresa_id))
    Sucursal.objects.filter(
        empresa_id=sucursal.empresa_id, es_matriz=True,
    ).exclude(pk=sucursal.pk).update(es_matriz=False)

    if not sucursal.es_matriz:
        sucursal.es_matriz = True
        sucursal.save(update_fields=["es_matriz", "actualizado"])
    logger.info("Sucursal %s marcada como matriz de empresa %s",
                sucursal.pk, sucursal.empresa_id)
    return sucursal


def desactivar_sucursal(sucursal: Sucursal) -> Sucursal:
    if sucursal.es_matriz:
        raise ValidationError(
            "No se puede desactivar la matriz. Marcá otra sucursal como matriz primero.")
    sucursal.activo = False
    sucursal.save(update_fields=["activo", "actualizado"])
    logger.info("Sucursal %s desactivada", sucursal.pk)
    return sucursal


def actualizar_sucursal(sucursal: Sucursal, **datos) -> Sucursal:
    # es_matriz/activo tienen sus propios servicios
    for field in ("es_matriz", "activo"):
        if field in datos:
            raise ValidationError(
                f"'{field}' se modifica con su servicio específico.")
    for field, value in datos.items():
        setattr(sucursal, field, value)
    sucursal.save()
    return sucursal

# apps/stock/services.py
import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction

from apps.accounts.identity import Identidad
from apps.scope.filters import ensure_branch_write

from .models import Producto

logger = logging.getLogger(__name__)


@transaction.atomic
def ajustar_stock(identidad: Identidad, producto_id, delta: Decimal) -> Producto:
    """
    Suma `delta` al stock del producto. El filtrado de lectura no protege
    escrituras: se revalida la sucursal del actor contra la fila.
    """
    producto = (
        Producto.objects
        .select_for_update()
        .get(pk=producto_id, empresa_id=identidad.empresa_id)
    )
    ensure_branch_write(identidad, producto.sucursal_id)

    nuevo = producto.stock_actual + Decimal(delta)
    if nuevo < 0:
        raise ValidationError("El stock no puede quedar negativo.")
    producto.stock_actual = nuevo
    producto.save(update_fields=["stock_actual", "actualizado"])
    logger.info("Stock de producto %s ajustado en %s por usuario %s",
                producto.pk, delta, identidad.user_id)
    return producto

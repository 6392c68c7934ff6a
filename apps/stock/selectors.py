# apps/stock/selectors.py
"""
Queries de stock con alcance aplicado, y proveedores de métricas para el
consolidado (settings.CONSOLIDATED_METRICS).
"""

from decimal import Decimal
from typing import Dict

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum, Value
from django.db.models.functions import Coalesce

from apps.scope.filters import apply_scope
from apps.scope.resolver import EffectiveScope

from .models import Producto


def productos_visibles(empresa_id, alcance: EffectiveScope):
    qs = Producto.objects.filter(empresa_id=empresa_id, activo=True)
    return apply_scope(qs, alcance).select_related("sucursal").order_by("nombre")


def _base_agregado(empresa_id, alcance: EffectiveScope):
    qs = Producto.objects.filter(empresa_id=empresa_id, activo=True)
    return apply_scope(qs, alcance, agregado=True)


def contar_productos(empresa_id, alcance: EffectiveScope) -> Dict[int, int]:
    rows = (
        _base_agregado(empresa_id, alcance)
        .values("sucursal_id")
        .annotate(total=Count("id"))
        .order_by()
    )
    return {r["sucursal_id"]: r["total"] for r in rows}


def valor_stock(empresa_id, alcance: EffectiveScope) -> Dict[int, Decimal]:
    valor = ExpressionWrapper(
        F("stock_actual") * F("precio_costo"),
        output_field=DecimalField(max_digits=24, decimal_places=4),
    )
    rows = (
        _base_agregado(empresa_id, alcance)
        .values("sucursal_id")
        .annotate(total=Coalesce(Sum(valor), Value(Decimal("0")), output_field=DecimalField(max_digits=24, decimal_places=4)))
        .order_by()
    )
    return {r["sucursal_id"]: Decimal(r["total"] or 0) for r in rows}

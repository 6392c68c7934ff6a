# apps/stock/views.py
from django.http import JsonResponse
from django.views import View

from apps.scope.permissions import AlcanceRequiredMixin
from apps.scope.resolver import describir_alcance

from .selectors import productos_visibles


class ProductosView(AlcanceRequiredMixin, View):
    """Listado de productos según el alcance efectivo del request."""

    def get(self, request):
        productos = productos_visibles(self.identidad.empresa_id, self.alcance)
        return JsonResponse({
            "alcance": describir_alcance(self.alcance),
            "productos": [
                {
                    "id": p.pk,
                    "nombre": p.nombre,
                    "sucursal_id": p.sucursal_id,
                    "sucursal": p.sucursal.nombre if p.sucursal_id else None,
                    "stock_actual": str(p.stock_actual),
                }
                for p in productos
            ],
        })

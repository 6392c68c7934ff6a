# apps/stock/models.py
from decimal import Decimal

from django.db import models


class Producto(models.Model):
    """
    Producto en stock de una sucursal.
    sucursal puede ser null en datos legados/sin asignar: esos productos no
    entran en los totales consolidados.
    """
    empresa = models.ForeignKey(
        "org.Empresa", on_delete=models.CASCADE, related_name="productos")
    sucursal = models.ForeignKey(
        "org.Sucursal", on_delete=models.PROTECT, null=True, blank=True, related_name="productos")
    nombre = models.CharField(max_length=150)
    stock_actual = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0"))
    precio_costo = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0"))
    activo = models.BooleanField(default=True)

    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Producto"
        verbose_name_plural = "Productos"
        ordering = ["nombre"]
        indexes = [
            models.Index(fields=["empresa", "sucursal", "activo"],
                         name="stock_prod_emp_suc_act_idx"),
        ]

    def __str__(self):
        return self.nombre

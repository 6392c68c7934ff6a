from decimal import Decimal

import pytest

from apps.app_log.models import AppLog
from apps.scope.services.consolidated import (
    MetricasSucursal,
    aggregate,
    consolidado_empresa,
    recolectar_metricas,
)
from apps.stock.models import Producto


def test_escenario_sucursal_sin_actividad():
    consolidado = aggregate([
        MetricasSucursal(1, "Head", True, {"productos": 10, "valor": 1000}),
        MetricasSucursal(2, "North", False, {"productos": 0, "valor": 0}),
    ])
    assert [f.sucursal_id for f in consolidado.filas] == [1, 2]
    assert consolidado.totales == {"productos": 10, "valor": 1000}


def test_orden_matriz_primero_y_alfabetico():
    consolidado = aggregate([
        MetricasSucursal(3, "sur", False, {"productos": 1}),
        MetricasSucursal(2, "Norte", False, {"productos": 2}),
        MetricasSucursal(1, "Zeta Central", True, {"productos": 3}),
    ])
    assert [f.nombre for f in consolidado.filas] == ["Zeta Central", "Norte", "sur"]
    assert consolidado.filas[0].es_matriz


def test_claves_faltantes_cuentan_cero():
    consolidado = aggregate([
        MetricasSucursal(1, "Head", True, {"productos": 4}),
        MetricasSucursal(2, "North", False, {"valor": Decimal("2.5")}),
    ])
    assert consolidado.totales == {"productos": 4, "valor": Decimal("2.5")}


def test_ignora_valores_no_numericos():
    consolidado = aggregate([
        MetricasSucursal(1, "Head", True, {"productos": 4, "nota": "x", "flag": True}),
    ])
    assert consolidado.totales == {"productos": 4}


def test_idempotente():
    metricas = [
        MetricasSucursal(2, "North", False, {"productos": 1}),
        MetricasSucursal(1, "Head", True, {"productos": 2}),
    ]
    assert aggregate(metricas) == aggregate(metricas)
    assert aggregate(aggregate(metricas).filas) == aggregate(metricas)


def test_sin_sucursales():
    consolidado = aggregate([])
    assert consolidado.filas == ()
    assert consolidado.totales == {}


def test_as_dict_serializa_decimales():
    data = aggregate([
        MetricasSucursal(1, "Head", True, {"valor": Decimal("10.50")}),
    ]).as_dict()
    assert data["totales"] == {"valor": "10.50"}
    assert data["sucursales"][0]["es_matriz"] is True


@pytest.mark.django_db
def test_consolidado_desde_stock(empresa, matriz, norte):
    Producto.objects.create(empresa=empresa, sucursal=matriz, nombre="Aceite",
                            stock_actual=Decimal("10"), precio_costo=Decimal("100"))
    Producto.objects.create(empresa=empresa, sucursal=None, nombre="Legado",
                            stock_actual=Decimal("1"), precio_costo=Decimal("999"))

    filas = recolectar_metricas(empresa.pk)
    assert {f.sucursal_id for f in filas} == {matriz.pk, norte.pk}

    consolidado = consolidado_empresa(empresa.pk)
    assert [f.sucursal_id for f in consolidado.filas] == [matriz.pk, norte.pk]
    assert consolidado.filas[1].valores == {"productos": 0, "valor_stock": 0}
    assert consolidado.totales["productos"] == 1
    assert consolidado.totales["valor_stock"] == Decimal("1000")


@pytest.mark.django_db
def test_consolidado_con_proveedores_configurados(settings, empresa, matriz, norte):
    settings.CONSOLIDATED_METRICS = {
        "fijo": lambda empresa_id, alcance: {matriz.pk: 7, norte.pk: 3},
    }
    consolidado = consolidado_empresa(empresa.pk)
    assert consolidado.totales == {"fijo": 10}


@pytest.mark.django_db
def test_falla_de_proveedor_se_registra_y_propaga(settings, empresa):
    def roto(empresa_id, alcance):
        raise RuntimeError("proveedor roto")

    settings.CONSOLIDATED_METRICS = {"roto": roto}
    with pytest.raises(RuntimeError):
        consolidado_empresa(empresa.pk)
    assert AppLog.objects.filter(evento="consolidado_error", nivel="error").exists()

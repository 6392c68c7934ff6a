from decimal import Decimal

import pytest
from django.test import Client
from django.urls import reverse

from apps.accounts.models import EmpresaMembership
from apps.org.services.sucursal import desactivar_sucursal
from apps.stock.models import Producto

from .conftest import PASSWORD

pytestmark = pytest.mark.django_db


@pytest.fixture
def productos(empresa, matriz, norte):
    Producto.objects.create(empresa=empresa, sucursal=matriz, nombre="Aceite",
                            stock_actual=Decimal("10"), precio_costo=Decimal("100"))
    Producto.objects.create(empresa=empresa, sucursal=norte, nombre="Filtro",
                            stock_actual=Decimal("2"), precio_costo=Decimal("50"))


def _nombres_productos(client):
    resp = client.get(reverse("stock:productos"))
    assert resp.status_code == 200
    return [p["nombre"] for p in resp.json()["productos"]]


def test_ubicaciones_de_login(client, empresa, matriz, norte):
    resp = client.get(reverse("scope:ubicaciones"), {"empresa": "taller-t"})
    assert resp.status_code == 200
    ids = [u["id"] for u in resp.json()["ubicaciones"]]
    assert ids == ["general", matriz.pk, norte.pk]


def test_ubicaciones_empresa_inexistente(client, db):
    resp = client.get(reverse("scope:ubicaciones"), {"empresa": "nada"})
    assert resp.status_code == 404


def test_escenario_tecnico_en_su_sucursal(client, login, tecnico, norte, productos):
    resp = login(tecnico.email, norte.pk)
    assert resp.status_code == 200
    assert resp.json() == {
        "ok": True,
        "alcance": {"tipo": "sucursal", "sucursal_id": norte.pk},
        "nivel": "technician",
    }
    assert _nombres_productos(client) == ["Filtro"]


def test_escenario_tecnico_por_general(client, login, tecnico):
    resp = login(tecnico.email, "general")
    assert resp.status_code == 403
    assert resp.json()["motivo"] == "location_mismatch"
    assert "_auth_user_id" not in client.session
    assert client.get(reverse("scope:alcance")).status_code == 403


def test_escenario_superadmin_en_sucursal(client, login, superadmin, norte):
    assert login(superadmin.email, "general").status_code == 200
    token_previo = client.cookies["sessionid"].value

    resp = login(superadmin.email, norte.pk)
    assert resp.status_code == 403
    assert resp.json()["motivo"] == "must_use_general"

    otro = Client()
    otro.cookies["sessionid"] = token_previo
    assert otro.get(reverse("scope:alcance")).status_code == 403
    assert client.get(reverse("scope:alcance")).status_code == 403


def test_password_incorrecta_es_401(client, login, tecnico, norte):
    resp = login(tecnico.email, norte.pk, password="mala")
    assert resp.status_code == 401
    assert resp.json()["motivo"] == "invalid_credentials"


def test_ubicacion_invalida_es_400(login, tecnico):
    assert login(tecnico.email, "sucursal-x").status_code == 400


def test_login_normaliza_email(login, tecnico, norte):
    assert login("  TECNICO@taller-t.com ", norte.pk).status_code == 200


def test_director_consolidado_y_cambio_de_sucursal(client, login, director, matriz, norte, productos):
    resp = login(director.email, "general")
    assert resp.json()["alcance"]["tipo"] == "todas"
    assert resp.json()["nivel"] == "director"

    consolidado = client.get(reverse("scope:consolidado")).json()
    assert [s["sucursal_id"] for s in consolidado["sucursales"]] == [matriz.pk, norte.pk]
    assert consolidado["totales"]["productos"] == 2

    alcance = client.get(reverse("scope:alcance")).json()
    assert alcance["acceso_general"] is True
    assert [s["id"] for s in alcance["sucursales"]] == [matriz.pk, norte.pk]

    resp = client.post(reverse("scope:cambiar_sucursal"), {"sucursal": norte.pk})
    assert resp.json()["alcance"] == {"tipo": "sucursal", "sucursal_id": norte.pk}
    assert _nombres_productos(client) == ["Filtro"]

    resp = client.post(reverse("scope:cambiar_sucursal"), {"sucursal": ""})
    assert resp.json()["alcance"]["tipo"] == "todas"
    assert _nombres_productos(client) == ["Aceite", "Filtro"]


def test_cambio_a_sucursal_inexistente_es_404(client, login, director):
    login(director.email, "general")
    resp = client.post(reverse("scope:cambiar_sucursal"), {"sucursal": 999999})
    assert resp.status_code == 404


def test_tecnico_sin_consolidado_ni_cambio(client, login, tecnico, norte, matriz):
    login(tecnico.email, norte.pk)
    assert client.get(reverse("scope:consolidado")).status_code == 403
    resp = client.post(reverse("scope:cambiar_sucursal"), {"sucursal": matriz.pk})
    assert resp.status_code == 403
    assert EmpresaMembership.objects.get(user=tecnico).sucursal_seleccionada_id == norte.pk


def test_gerente_de_sucursal_nivel_manager(client, login, gerente_norte, norte):
    resp = login(gerente_norte.email, norte.pk)
    assert resp.json()["nivel"] == "manager"
    assert client.get(reverse("scope:consolidado")).status_code == 403


def test_sucursal_desactivada_cierra_la_sesion(client, login, tecnico, norte):
    login(tecnico.email, norte.pk)
    assert client.get(reverse("scope:alcance")).status_code == 200
    desactivar_sucursal(norte)
    assert client.get(reverse("scope:alcance")).status_code == 403
    assert "_auth_user_id" not in client.session


def test_logout(client, login, director):
    login(director.email, "general")
    assert client.post(reverse("scope:logout")).status_code == 200
    assert client.get(reverse("scope:alcance")).status_code == 403


def test_sin_sesion_no_hay_alcance(client, db):
    assert client.get(reverse("stock:productos")).status_code == 403


def test_password_incorrecta_cierra_la_sesion_previa(client, login, director, tecnico, norte):
    assert login(director.email, "general").status_code == 200
    assert client.get(reverse("scope:alcance")).status_code == 200

    assert login(tecnico.email, norte.pk, password="mala").status_code == 401
    assert "_auth_user_id" not in client.session
    assert client.get(reverse("scope:alcance")).status_code == 403


def test_flujo_con_csrf(empresa, director, norte):
    client = Client(enforce_csrf_checks=True)
    client.get(reverse("scope:ubicaciones"), {"empresa": "taller-t"})
    token = client.cookies["csrftoken"].value

    datos = {"email": director.email, "password": PASSWORD, "ubicacion": "general"}
    assert client.post(reverse("scope:login"), datos).status_code == 403
    assert client.post(reverse("scope:login"), datos, HTTP_X_CSRFTOKEN=token).status_code == 200

    # el login rota el token; la respuesta trae la cookie nueva
    token = client.cookies["csrftoken"].value
    resp = client.post(reverse("scope:cambiar_sucursal"), {"sucursal": norte.pk},
                       HTTP_X_CSRFTOKEN=token)
    assert resp.status_code == 200
    assert client.post(reverse("scope:logout"), HTTP_X_CSRFTOKEN=token).status_code == 200


def test_admin_rechaza_usuarios_de_empresa(client, director):
    director.is_staff = True
    director.is_superuser = True
    director.save()
    resp = client.post(reverse("admin:login"), {
        "username": director.email, "password": PASSWORD,
        "next": reverse("admin:index"),
    })
    assert resp.status_code == 200
    assert "_auth_user_id" not in client.session


def test_admin_admite_operadores_de_plataforma(client, django_user_model):
    django_user_model.objects.create_superuser(
        username="operador", email="operador@plataforma.com", password=PASSWORD)
    resp = client.post(reverse("admin:login"), {
        "username": "operador", "password": PASSWORD,
        "next": reverse("admin:index"),
    })
    assert resp.status_code == 302
    assert client.get(reverse("admin:index")).status_code == 200

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse

from apps.accounts.models import Rol
from apps.accounts.services.memberships import ensure_membership
from apps.org.services.empresa import crear_empresa
from apps.org.services.sucursal import crear_sucursal

PASSWORD = "clave-segura-123"


@pytest.fixture
def empresa(db):
    return crear_empresa("Taller T", "taller-t", nombre_matriz="Casa Central")


@pytest.fixture
def matriz(empresa):
    return empresa.sucursales.get(es_matriz=True)


@pytest.fixture
def norte(empresa):
    return crear_sucursal(empresa, "Norte")


@pytest.fixture
def otra_empresa(db):
    return crear_empresa("Otra", "otra", nombre_matriz="Central Otra")


@pytest.fixture
def crear_usuario(db, empresa):
    User = get_user_model()

    def _crear(email, roles, sucursal=None, lider=False, en_empresa=None):
        user = User.objects.create_user(
            username=email, email=email, password=PASSWORD)
        ensure_membership(
            user, en_empresa or empresa, roles=roles,
            sucursal_asignada=sucursal, es_lider_equipo=lider,
        )
        return user
    return _crear


@pytest.fixture
def tecnico(crear_usuario, norte):
    return crear_usuario("tecnico@taller-t.com", [Rol.TECHNICIAN], norte)


@pytest.fixture
def director(crear_usuario):
    return crear_usuario("director@taller-t.com", [Rol.MANAGER])


@pytest.fixture
def superadmin(crear_usuario):
    return crear_usuario("root@taller-t.com", [Rol.SUPERADMIN])


@pytest.fixture
def gerente_norte(crear_usuario, norte):
    return crear_usuario("gerente@taller-t.com", [Rol.MANAGER], norte)


@pytest.fixture
def login(client):
    def _login(email, ubicacion, password=PASSWORD):
        return client.post(reverse("scope:login"), {
            "email": email,
            "password": password,
            "ubicacion": str(ubicacion),
        })
    return _login

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from apps.accounts.models import Rol
from apps.accounts.selectors import identidad_de
from apps.accounts.services.memberships import asignar_sucursal, ensure_membership
from apps.org.exceptions import Inactive, NotFound
from apps.org.models import Sucursal
from apps.org.selectors import (
    empresa_por_subdominio,
    sucursal_activa_de,
    sucursal_matriz,
    sucursales_activas,
)
from apps.org.services.empresa import actualizar_empresa
from apps.org.services.sucursal import (
    actualizar_sucursal,
    crear_sucursal,
    desactivar_sucursal,
    marcar_matriz,
)

pytestmark = pytest.mark.django_db


def test_crear_empresa_crea_matriz(empresa, matriz):
    assert matriz.nombre == "Casa Central"
    assert matriz.codigo_interno
    assert sucursal_matriz(empresa.pk) == matriz


def test_sucursales_activas_matriz_primero_y_alfabetico(empresa, matriz, norte):
    crear_sucursal(empresa, "Alameda")
    nombres = [s.nombre for s in sucursales_activas(empresa.pk)]
    assert nombres == ["Casa Central", "Alameda", "Norte"]


def test_sucursales_activas_excluye_inactivas(empresa, norte):
    desactivar_sucursal(norte)
    assert norte not in sucursales_activas(empresa.pk)
    assert sucursal_activa_de(empresa.pk, norte.pk) is None


def test_sucursales_activas_empresa_inexistente():
    with pytest.raises(NotFound):
        sucursales_activas(999999)


def test_sucursal_activa_de_no_cruza_empresas(empresa, otra_empresa):
    ajena = otra_empresa.sucursales.get()
    assert sucursal_activa_de(empresa.pk, ajena.pk) is None


def test_empresa_por_subdominio(empresa):
    assert empresa_por_subdominio("taller-t") == empresa
    with pytest.raises(NotFound):
        empresa_por_subdominio("no-existe")


def test_marcar_matriz_mueve_el_flag(empresa, matriz, norte):
    marcar_matriz(norte)
    matriz.refresh_from_db()
    norte.refresh_from_db()
    assert norte.es_matriz and not matriz.es_matriz
    assert Sucursal.objects.filter(empresa=empresa, es_matriz=True).count() == 1


def test_una_sola_matriz_por_empresa(empresa, norte):
    norte.es_matriz = True
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            norte.save()


def test_no_se_desactiva_la_matriz(matriz):
    with pytest.raises(ValidationError):
        desactivar_sucursal(matriz)


def test_actualizar_sucursal_rechaza_flags(norte):
    with pytest.raises(ValidationError):
        actualizar_sucursal(norte, activo=False)
    actualizar_sucursal(norte, direccion="Ruta 9 km 1300")
    norte.refresh_from_db()
    assert norte.direccion == "Ruta 9 km 1300"


def test_identidad_de_branch_bound(tecnico, norte, empresa):
    identidad = identidad_de(tecnico.pk)
    assert identidad.empresa_id == empresa.pk
    assert identidad.sucursal_asignada_id == norte.pk
    assert identidad.roles == frozenset({Rol.TECHNICIAN.value})
    assert not identidad.is_general_access


def test_identidad_de_director(director):
    identidad = identidad_de(director.pk)
    assert identidad.is_director
    assert identidad.is_general_access
    assert not identidad.is_superadmin


def test_superadmin_no_es_director(superadmin):
    identidad = identidad_de(superadmin.pk)
    assert identidad.is_superadmin
    assert not identidad.is_director
    assert identidad.is_general_access


def test_identidad_de_sin_membresia(django_user_model):
    user = django_user_model.objects.create_user(username="x@x.com", password="x")
    with pytest.raises(NotFound):
        identidad_de(user.pk)


def test_identidad_de_membresia_inactiva(tecnico):
    tecnico.membership.activo = False
    tecnico.membership.save()
    with pytest.raises(Inactive):
        identidad_de(tecnico.pk)


def test_identidad_de_empresa_inactiva(tecnico, empresa):
    empresa.activo = False
    empresa.save()
    with pytest.raises(Inactive):
        identidad_de(tecnico.pk)


def test_identidad_de_sucursal_asignada_inactiva(tecnico, norte):
    desactivar_sucursal(norte)
    with pytest.raises(Inactive):
        identidad_de(tecnico.pk)


def test_superadmin_no_puede_tener_sucursal(crear_usuario, norte):
    with pytest.raises(ValidationError):
        crear_usuario("root2@taller-t.com", [Rol.SUPERADMIN], norte)


def test_ensure_membership_reemplaza_roles(tecnico, empresa, norte):
    ensure_membership(tecnico, empresa, roles=[Rol.SUPERVISOR], sucursal_asignada=norte)
    assert identidad_de(tecnico.pk).roles == frozenset({Rol.SUPERVISOR.value})


def test_asignar_sucursal_de_otra_empresa(tecnico, otra_empresa):
    ajena = otra_empresa.sucursales.get()
    with pytest.raises(ValidationError):
        asignar_sucursal(tecnico.membership, ajena)


def test_actualizar_empresa(empresa):
    actualizar_empresa(empresa, nombre="Taller T SRL")
    empresa.refresh_from_db()
    assert empresa.nombre == "Taller T SRL"

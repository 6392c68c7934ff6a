# apps/org/services/empresa.py

from django.db import transaction

from ..models import Empresa
from .sucursal import crear_sucursal


@transaction.atomic
def crear_empresa(nombre: str, subdominio: str, nombre_matriz: str = "Matriz", logo=None) -> Empresa:
    """
    Crea una empresa junto con su sucursal matriz.
    Las membresías de usuarios se resuelven afuera (apps.accounts).
    """
    empresa = Empresa.objects.create(
        nombre=nombre, subdominio=subdominio, logo=logo)
    crear_sucursal(empresa=empresa, nombre=nombre_matriz)
    return empresa


def actualizar_empresa(empresa: Empresa, **datos) -> Empresa:
    """Actualiza los datos de la empresa."""
    for field, value in datos.items():
        setattr(empresa, field, value)
    empresa.save()
    return empresa

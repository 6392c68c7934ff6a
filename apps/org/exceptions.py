# apps/org/exceptions.py
"""
Errores del directorio de identidad y sucursales.

- NotFound: la empresa/usuario/sucursal no existe. Es fatal: se propaga.
- Inactive: usuario, empresa o sucursal asignada desactivados. Quien lo reciba
  debe tratarlo igual que una falla de autenticación.
"""


class DirectoryError(Exception):
    """Base de los errores de lectura del directorio."""


class NotFound(DirectoryError):
    pass


class Inactive(DirectoryError):
    pass

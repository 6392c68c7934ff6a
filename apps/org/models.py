# apps/org/models.py

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _


class Empresa(models.Model):
    """
    Tenant raíz del sistema (cuenta de la compañía).
    Aísla todos los datos de otras empresas. Tiene una sucursal matriz y
    cero o más sucursales secundarias.
    """
    nombre = models.CharField(_("Nombre"), max_length=150)
    subdominio = models.SlugField(
        _("Subdominio"),
        max_length=50,
        unique=True,
        help_text=_("Identificador único de la empresa en la pantalla de acceso"),
    )
    # Branding: no interviene en el alcance de datos
    logo = models.ImageField(
        _("Logo"),
        upload_to="empresas/logos/",
        null=True,
        blank=True,
    )
    activo = models.BooleanField(default=True)

    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Empresa")
        verbose_name_plural = _("Empresas")

    def __str__(self):
        return self.nombre


class SucursalQuerySet(models.QuerySet):
    def activas(self):
        return self.filter(activo=True)

    def matriz_primero(self):
        # Matriz primero, luego alfabético; el id desempata nombres repetidos
        return self.order_by("-es_matriz", "nombre", "id")


class Sucursal(models.Model):
    """
    Local operativo de una empresa. Exactamente una por empresa es la matriz.
    """
    empresa = models.ForeignKey(
        Empresa, on_delete=models.CASCADE, related_name="sucursales")
    nombre = models.CharField(_("Nombre"), max_length=100)
    direccion = models.CharField(_("Dirección"), max_length=255, blank=True)
    codigo_interno = models.CharField(
        _("Código interno"),
        max_length=20,
        help_text=_("Código único dentro de la empresa"),
    )
    es_matriz = models.BooleanField(_("Matriz"), default=False)
    activo = models.BooleanField(default=True)

    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    objects = SucursalQuerySet.as_manager()

    class Meta:
        unique_together = ("empresa", "codigo_interno")
        constraints = [
            models.UniqueConstraint(
                fields=["empresa"],
                condition=Q(es_matriz=True),
                name="org_sucursal_una_matriz_por_empresa",
            ),
        ]
        verbose_name = _("Sucursal")
        verbose_name_plural = _("Sucursales")

    def __str__(self):
        sufijo = " [matriz]" if self.es_matriz else ""
        return f"{self.nombre}{sufijo} ({self.empresa.nombre})"

    def clean(self):
        if self.es_matriz and not self.activo:
            raise ValidationError(
                _("La sucursal matriz no puede estar inactiva."))

    def save(self, *args, **kwargs):
        if not self.codigo_interno:
            base = (slugify(self.nombre).upper() or "S")[:6]
            n = 1
            while True:
                cand = f"{base}{n:02d}"
                if not Sucursal.objects.filter(empresa=self.empresa, codigo_interno=cand).exists():
                    self.codigo_interno = cand
                    break
                n += 1
        super().save(*args, **kwargs)

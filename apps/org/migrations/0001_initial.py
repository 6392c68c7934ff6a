from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Empresa",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nombre", models.CharField(max_length=150, verbose_name="Nombre")),
                ("subdominio", models.SlugField(help_text="Identificador único de la empresa en la pantalla de acceso", unique=True, verbose_name="Subdominio")),
                ("logo", models.ImageField(blank=True, null=True, upload_to="empresas/logos/", verbose_name="Logo")),
                ("activo", models.BooleanField(default=True)),
                ("creado", models.DateTimeField(auto_now_add=True)),
                ("actualizado", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Empresa",
                "verbose_name_plural": "Empresas",
            },
        ),
        migrations.CreateModel(
            name="Sucursal",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nombre", models.CharField(max_length=100, verbose_name="Nombre")),
                ("direccion", models.CharField(blank=True, max_length=255, verbose_name="Dirección")),
                ("codigo_interno", models.CharField(help_text="Código único dentro de la empresa", max_length=20, verbose_name="Código interno")),
                ("es_matriz", models.BooleanField(default=False, verbose_name="Matriz")),
                ("activo", models.BooleanField(default=True)),
                ("creado", models.DateTimeField(auto_now_add=True)),
                ("actualizado", models.DateTimeField(auto_now=True)),
                ("empresa", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="sucursales", to="org.empresa")),
            ],
            options={
                "verbose_name": "Sucursal",
                "verbose_name_plural": "Sucursales",
                "unique_together": {("empresa", "codigo_interno")},
            },
        ),
        migrations.AddConstraint(
            model_name="sucursal",
            constraint=models.UniqueConstraint(condition=models.Q(("es_matriz", True)), fields=("empresa",), name="org_sucursal_una_matriz_por_empresa"),
        ),
    ]

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("org", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="EmpresaMembership",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("es_lider_equipo", models.BooleanField(default=False)),
                ("activo", models.BooleanField(default=True)),
                ("empresa", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="memberships", to="org.empresa")),
                ("sucursal_asignada", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="empleados", to="org.sucursal")),
                ("sucursal_seleccionada", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to="org.sucursal")),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="membership", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Membresía de Empresa",
                "verbose_name_plural": "Membresías de Empresa",
            },
        ),
        migrations.CreateModel(
            name="RolAsignado",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("rol", models.CharField(choices=[("superadmin", "Superadministrador"), ("admin", "Administrador"), ("manager", "Gerente"), ("supervisor", "Supervisor"), ("technician", "Técnico"), ("warehouse-clerk", "Almacenero")], max_length=20)),
                ("membership", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="roles", to="accounts.empresamembership")),
            ],
            options={
                "verbose_name": "Rol asignado",
                "verbose_name_plural": "Roles asignados",
                "unique_together": {("membership", "rol")},
            },
        ),
    ]

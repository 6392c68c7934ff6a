from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("org", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Producto",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nombre", models.CharField(max_length=150)),
                ("stock_actual", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("precio_costo", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("activo", models.BooleanField(default=True)),
                ("creado", models.DateTimeField(auto_now_add=True)),
                ("actualizado", models.DateTimeField(auto_now=True)),
                ("empresa", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="productos", to="org.empresa")),
                ("sucursal", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="productos", to="org.sucursal")),
            ],
            options={
                "verbose_name": "Producto",
                "verbose_name_plural": "Productos",
                "ordering": ["nombre"],
            },
        ),
        migrations.AddIndex(
            model_name="producto",
            index=models.Index(fields=["empresa", "sucursal", "activo"], name="stock_prod_emp_suc_act_idx"),
        ),
    ]

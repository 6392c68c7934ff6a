from django.db import migrations, models
import django.utils.timezone
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AppLog",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("creado_en", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("empresa_id", models.CharField(blank=True, db_index=True, help_text="ID de la empresa (tenant) en texto.", max_length=64, null=True)),
                ("user_id", models.CharField(blank=True, db_index=True, help_text="ID del usuario autenticado (si aplica).", max_length=64, null=True)),
                ("username", models.CharField(blank=True, db_index=True, max_length=150, null=True)),
                ("alcance", models.CharField(blank=True, db_index=True, help_text='Alcance efectivo del request: "todas" o "sucursal:<id>".', max_length=40, null=True)),
                ("request_id", models.CharField(blank=True, db_index=True, help_text="X-Request-ID (UUID string).", max_length=36, null=True)),
                ("nivel", models.CharField(choices=[("debug", "Debug"), ("info", "Info"), ("warning", "Warning"), ("error", "Error"), ("critical", "Critical")], db_index=True, max_length=10)),
                ("origen", models.CharField(db_index=True, help_text='Logger/módulo: ej. "http", "scope.login".', max_length=120)),
                ("evento", models.CharField(db_index=True, help_text='Etiqueta corta: ej. "access_log", "login_rejected".', max_length=80)),
                ("mensaje", models.TextField()),
                ("http_method", models.CharField(blank=True, db_index=True, max_length=8, null=True)),
                ("http_path", models.CharField(blank=True, db_index=True, max_length=512, null=True)),
                ("http_status", models.PositiveIntegerField(blank=True, db_index=True, null=True)),
                ("duration_ms", models.PositiveIntegerField(blank=True, null=True)),
                ("ip", models.GenericIPAddressField(blank=True, null=True)),
                ("user_agent", models.TextField(blank=True, null=True)),
                ("meta_json", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "verbose_name": "Log de aplicación",
                "verbose_name_plural": "Logs de aplicación",
                "db_table": "app_log",
                "ordering": ["-creado_en"],
            },
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("creado_en", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("empresa_id", models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ("user_id", models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ("username", models.CharField(blank=True, db_index=True, max_length=150, null=True)),
                ("request_id", models.CharField(blank=True, db_index=True, max_length=36, null=True)),
                ("ip", models.GenericIPAddressField(blank=True, null=True)),
                ("user_agent", models.TextField(blank=True, null=True)),
                ("resource_type", models.CharField(db_index=True, help_text='Etiqueta "<app_label>.<ModelName>".', max_length=120)),
                ("resource_id", models.CharField(db_index=True, max_length=120)),
                ("action", models.CharField(choices=[("login", "Login"), ("logout", "Logout"), ("scope_switch", "Cambio de sucursal")], db_index=True, max_length=20)),
                ("success", models.BooleanField(db_index=True, default=True)),
                ("reason", models.TextField(blank=True, null=True)),
                ("changes", models.JSONField(blank=True, default=dict, help_text='Diferencias por campo: {"campo": {"before": ..., "after": ...}}.')),
            ],
            options={
                "verbose_name": "Auditoría de acceso",
                "verbose_name_plural": "Auditorías de acceso",
                "db_table": "audit_log",
                "ordering": ["-creado_en"],
            },
        ),
        migrations.AddIndex(
            model_name="applog",
            index=models.Index(fields=["-creado_en", "nivel", "http_status"], name="app_log_creado_nivel_idx"),
        ),
        migrations.AddIndex(
            model_name="applog",
            index=models.Index(fields=["empresa_id", "origen", "evento"], name="app_log_emp_origen_evt_idx"),
        ),
        migrations.AddIndex(
            model_name="auditlog",
            index=models.Index(fields=["-creado_en", "empresa_id"], name="audit_log_creado_emp_idx"),
        ),
        migrations.AddIndex(
            model_name="auditlog",
            index=models.Index(fields=["action", "success", "-creado_en"], name="audit_log_act_succ_idx"),
        ),
    ]

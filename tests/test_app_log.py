import uuid

import pytest
from django.urls import reverse

from apps.app_log.models import AppLog, AuditLog
from apps.app_log.services.logger import _sanitize_meta, audit_event, log_event
from apps.app_log.utils import get_current_request
from apps.scope.services import selection
from apps.scope.services.selection import guardar_seleccion

pytestmark = pytest.mark.django_db


def test_sanitize_meta_redacta_anidado():
    meta = _sanitize_meta({
        "email": "a@b.com",
        "password": "x",
        "headers": {"Authorization": "Bearer 1", "accept": "json"},
    })
    assert meta["email"] == "a@b.com"
    assert meta["password"] == "***redacted***"
    assert meta["headers"] == {"Authorization": "***redacted***", "accept": "json"}


def test_log_event_crea_registro():
    log_id = log_event("info", "scope.test", "prueba", "hola", meta={"token": "t"})
    log = AppLog.objects.get(pk=log_id)
    assert log.evento == "prueba"
    assert log.meta_json["token"] == "***redacted***"


def test_audit_event_respeta_toggle(settings):
    settings.APP_LOG_ENABLE_AUDIT = False
    assert audit_event(AuditLog.Action.LOGOUT, "auth.User", 1) is None
    assert not AuditLog.objects.exists()


def test_login_rechazado_queda_auditado(login, tecnico):
    login(tecnico.email, "general")
    audit = AuditLog.objects.get(action=AuditLog.Action.LOGIN)
    assert not audit.success
    assert audit.reason == "location_mismatch"
    assert audit.user_id == str(tecnico.pk)

    rechazo = AppLog.objects.get(evento="login_rejected")
    assert rechazo.meta_json["email"] == tecnico.email
    assert "clave" not in str(rechazo.meta_json)


def test_access_log_con_request_id_y_alcance(client, login, tecnico, norte):
    login(tecnico.email, norte.pk)
    rid = str(uuid.uuid4())
    resp = client.get(reverse("scope:alcance"), HTTP_X_REQUEST_ID=rid)
    assert resp["X-Request-ID"] == rid

    acceso = AppLog.objects.filter(evento="access_log", request_id=rid).get()
    assert acceso.http_status == 200
    assert acceso.alcance == f"sucursal:{norte.pk}"
    assert acceso.empresa_id == str(tecnico.membership.empresa_id)


def test_body_preview_sin_password(client, tecnico, norte, login):
    login(tecnico.email, norte.pk)
    acceso = AppLog.objects.filter(
        evento="access_log", http_path=reverse("scope:login")).get()
    assert acceso.meta_json["body_preview"]["password"] == "***redacted***"


def test_warnings_del_alcance_llevan_request_id(client, login, tecnico, norte, matriz, monkeypatch):
    login(tecnico.email, norte.pk)
    guardar_seleccion(tecnico.pk, matriz.pk)

    vistos = []

    def registrar(*args, **kwargs):
        vistos.append(getattr(get_current_request(), "request_id", None))

    monkeypatch.setattr(selection.logger, "warning", registrar)
    rid = str(uuid.uuid4())
    client.get(reverse("scope:alcance"), HTTP_X_REQUEST_ID=rid)
    assert [str(v) for v in vistos] == [rid]

from apps.scope.fsm import LoginEstado, es_final, puede_transicionar, transiciones_desde


def test_camino_feliz():
    camino = [
        LoginEstado.IDLE,
        LoginEstado.CREDENCIALES_ENVIADAS,
        LoginEstado.ROLES_OBTENIDOS,
        LoginEstado.UBICACION_VALIDADA,
        LoginEstado.SESION_ESTABLECIDA,
    ]
    for desde, hacia in zip(camino, camino[1:]):
        assert puede_transicionar(desde, hacia)


def test_rechazo_desde_estados_con_sesion():
    for desde in (LoginEstado.CREDENCIALES_ENVIADAS, LoginEstado.ROLES_OBTENIDOS,
                  LoginEstado.UBICACION_VALIDADA):
        assert puede_transicionar(desde, LoginEstado.RECHAZADO)
    assert not puede_transicionar(LoginEstado.IDLE, LoginEstado.RECHAZADO)


def test_no_se_salta_la_validacion_de_ubicacion():
    assert not puede_transicionar(LoginEstado.ROLES_OBTENIDOS, LoginEstado.SESION_ESTABLECIDA)


def test_finales():
    assert es_final(LoginEstado.SESION_ESTABLECIDA)
    assert es_final("rechazado")
    assert not es_final(LoginEstado.IDLE)
    assert list(transiciones_desde(LoginEstado.RECHAZADO)) == []


def test_estado_desconocido():
    assert not puede_transicionar("idle", "inventado")
    assert not es_final("inventado")

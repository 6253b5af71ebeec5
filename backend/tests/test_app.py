from reservations.core.config import Settings
from reservations.core.observability import setup_tracer


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.headers["cache-control"] == "no-store"


def test_root(client):
    assert client.get("/").json() == {"message": "Welcome to Reservations API"}


def test_unknown_route_is_not_an_error_envelope(client):
    assert client.get("/api/nothing-here").status_code == 404


def test_settings_normalization():
    settings = Settings(API_PREFIX="api/", LOG_LEVEL="debug", OTEL_TRACES_SAMPLER_RATIO=3)
    assert settings.API_PREFIX == "/api"
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.OTEL_TRACES_SAMPLER_RATIO == 1.0


def test_cors_allow_all_overrides_origins():
    settings = Settings(CORS_ALLOW_ALL=True, CORS_ORIGINS=["http://a.test"])
    assert settings.CORS_ORIGINS == ["*"]


def test_tracer_disabled_by_default(monkeypatch):
    monkeypatch.delenv("ENABLE_TRACING", raising=False)
    assert setup_tracer(object()) is False

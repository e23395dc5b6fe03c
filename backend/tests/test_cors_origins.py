from fastapi.testclient import TestClient

from backend.app.main import (
    LOCAL_DEVELOPMENT_ORIGIN,
    _load_allowed_origins_from_env,
    _resolve_allowed_origins,
    _split_raw_origins,
    app,
)


def test_split_raw_origins_accepts_commas_and_whitespace():
    raw = "http://localhost:3000, http://127.0.0.1:3000 https://farm.example.com"
    assert _split_raw_origins(raw) == [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://farm.example.com",
    ]


def test_load_allowed_origins_from_env_normalizes_values(monkeypatch):
    monkeypatch.setenv(
        "BACKEND_ALLOWED_ORIGINS",
        "https://farm.example.com/ http://localhost:3000",
    )

    assert _load_allowed_origins_from_env() == [
        "http://localhost:3000",
        "https://farm.example.com",
    ]


def test_resolved_origins_always_include_local_frontend(monkeypatch):
    monkeypatch.setenv("BACKEND_ALLOWED_ORIGINS", "https://farm.example.com")

    origins = _resolve_allowed_origins()

    assert LOCAL_DEVELOPMENT_ORIGIN in origins
    assert "https://farm.example.com" in origins


def test_expenses_endpoint_includes_cors_headers_for_local_frontend():
    client = TestClient(app)

    response = client.options(
        "/api/expenses",
        headers={
            "Origin": LOCAL_DEVELOPMENT_ORIGIN,
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers.get("access-control-allow-origin") == LOCAL_DEVELOPMENT_ORIGIN

"""Tests for app-level behavior: health, routing errors, unexpected failures, SPA hosting."""

import pytest
from fastapi.testclient import TestClient

from homedash.web.server import create_fastapi_app


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "ok"
    assert data["uptime"] >= 0
    assert "version" in data
    assert "timestamp" in data


def test_unknown_api_route(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"data": None, "error": "Not Found"}


def test_unsupported_method_on_api(client):
    response = client.patch("/api/todos/abc", json={"done": True})

    assert response.status_code == 404
    assert response.json()["error"] == "Not Found"


@pytest.mark.parametrize("method", ["HEAD", "OPTIONS"])
def test_head_and_options_on_api(client, method):
    response = client.request(method, "/api/todos")

    assert response.status_code == 404


def test_bare_api_path(client):
    response = client.get("/api")

    assert response.status_code == 404
    assert response.json() == {"data": None, "error": "Not Found"}


def test_unexpected_error_hidden_from_client(config, app_instance, monkeypatch):
    def explode():
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(app_instance, "get_health", explode)
    with TestClient(create_fastapi_app(app_instance, config), raise_server_exceptions=False) as client:
        response = client.get("/api/health")

    assert response.status_code == 500
    assert response.json() == {"data": None, "error": "Internal Server Error"}


def test_openapi_marks_public_endpoints(client):
    schema = client.get("/openapi.json").json()

    assert schema["paths"]["/api/auth/login"]["post"]["security"] == []
    assert schema["paths"]["/api/todos"]["get"]["security"] == [{"SessionCookie": []}]
    assert schema["components"]["securitySchemes"]["SessionCookie"]["name"] == "sid"


class TestStaticApp:
    def test_spa_served_with_fallback(self, tmp_path, config, app_instance):
        (tmp_path / "index.html").write_text("<div id=root></div>")
        (tmp_path / "app.js").write_text("console.log('hi')")
        spa_config = config.model_copy(update={"static_path": str(tmp_path)})

        with TestClient(create_fastapi_app(app_instance, spa_config)) as client:
            assert client.get("/").text == "<div id=root></div>"
            assert client.get("/app.js").text == "console.log('hi')"
            assert client.get("/dashboard").text == "<div id=root></div>"
            api_response = client.get("/api/unknown")
            bare_api_response = client.get("/api")

        assert api_response.status_code == 404
        assert api_response.json()["error"] == "Not Found"
        assert bare_api_response.status_code == 404
        assert bare_api_response.json()["error"] == "Not Found"

"""Shared pytest fixtures."""

import httpx
import pytest
from fastapi.testclient import TestClient

from homedash.app import App
from homedash.config import Config
from homedash.web.server import create_fastapi_app

FORECAST = {
    "latitude": 40.71,
    "longitude": -74.01,
    "timezone": "America/New_York",
    "current": {
        "time": "2025-03-01T09:00",
        "temperature_2m": 41.2,
        "apparent_temperature": 36.5,
        "weather_code": 3,
        "wind_speed_10m": 9.8,
    },
    "hourly": {
        "time": [f"2025-03-01T{hour:02d}:00" for hour in range(24)],
        "temperature_2m": [40.0 + hour for hour in range(24)],
        "apparent_temperature": [35.0 + hour for hour in range(24)],
        "weather_code": [1] * 24,
        "precipitation_probability": [10] * 20,
    },
}


class FakeForecastUpstream:
    """Stands in for Open-Meteo behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.status_code = 200
        self.payload: dict = FORECAST
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def config():
    """In-memory store and the cheapest bcrypt cost."""
    return Config(_env_file=None, database_url="memory://", password_hash_rounds=4)


@pytest.fixture
def weather_upstream():
    return FakeForecastUpstream()


@pytest.fixture
def app_instance(config, weather_upstream):
    app = App(config)
    app._core.services.weather.transport = httpx.MockTransport(weather_upstream)
    return app


@pytest.fixture
def client(app_instance, config):
    """TestClient with the application lifespan running."""
    with TestClient(create_fastapi_app(app_instance, config)) as test_client:
        yield test_client


@pytest.fixture
def database(app_instance):
    """Direct access to the in-memory store behind the app."""
    return app_instance._core.database


@pytest.fixture
def register(client):
    """Register a user through the API, leaving its session cookie on the client."""

    def _register(username="alice", password="secret"):
        return client.post("/api/auth/register", json={"username": username, "password": password})

    return _register


@pytest.fixture
def alice(register):
    """Registered and signed-in user; the client carries her session cookie."""
    response = register()
    assert response.status_code == 201
    return response.json()["data"]

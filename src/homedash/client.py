"""HTTP client for the dashboard API, mirroring the browser app's fetch wrapper.

Responses are unwrapped from the ``{data, error}`` envelope; failures raise
ApiError. The session cookie is kept in the underlying httpx cookie jar.
"""

from typing import Any

import httpx


class ApiError(Exception):
    """Raised for non-2xx responses and envelopes carrying an error."""

    def __init__(self, message: str, status: int, payload: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload


def _parse_json(response: httpx.Response) -> Any:
    if "application/json" not in response.headers.get("content-type", ""):
        return None
    try:
        return response.json()
    except ValueError:
        return None


def handle_response(response: httpx.Response) -> Any:
    """Return the envelope's data or raise ApiError."""
    payload = _parse_json(response)
    if not response.is_success:
        message = None
        if isinstance(payload, dict):
            message = payload.get("error") or payload.get("message")
        raise ApiError(message or f"Request failed ({response.status_code})", response.status_code, payload)

    if isinstance(payload, dict):
        if payload.get("error"):
            raise ApiError(payload["error"], response.status_code, payload)
        if "data" in payload:
            return payload["data"]
    return payload


class ApiClient:
    def __init__(self, base_url: str, *, http_client: httpx.Client | None = None, timeout: float = 10.0) -> None:
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        if http_client is not None:
            self._http.base_url = httpx.URL(base_url)
        self._http.headers["Accept"] = "application/json"

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def request(self, method: str, path: str, body: Any = None, params: dict[str, Any] | None = None) -> Any:
        response = self._http.request(method, path, json=body, params=params)
        return handle_response(response)

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any = None) -> Any:
        return self.request("POST", path, body)

    def put(self, path: str, body: Any = None) -> Any:
        return self.request("PUT", path, body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    # === Endpoints ===
    def register(self, username: str, password: str) -> dict[str, Any]:
        return self.post("/api/auth/register", {"username": username, "password": password})

    def login(self, username: str, password: str) -> dict[str, Any]:
        return self.post("/api/auth/login", {"username": username, "password": password})

    def logout(self) -> dict[str, Any]:
        return self.post("/api/auth/logout")

    def me(self) -> dict[str, Any]:
        return self.get("/api/me")

    def list_records(self, collection: str, **params: str) -> list[dict[str, Any]]:
        return self.get(f"/api/{collection}", params=params or None)

    def create_record(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        return self.post(f"/api/{collection}", fields)

    def update_record(self, collection: str, record_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        return self.put(f"/api/{collection}/{record_id}", fields)

    def delete_record(self, collection: str, record_id: str) -> dict[str, Any]:
        return self.delete(f"/api/{collection}/{record_id}")

    def weather(self, lat: float, lon: float) -> dict[str, Any]:
        return self.get("/api/weather", params={"lat": lat, "lon": lon})

    def health(self) -> dict[str, Any]:
        return self.get("/api/health")

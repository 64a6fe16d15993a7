"""Tests for the Python API client against the running app."""

import httpx
import pytest

from homedash.client import ApiClient, ApiError, handle_response


@pytest.fixture
def api(client):
    return ApiClient("http://testserver", http_client=client)


def test_full_session(api):
    user = api.register("carol", "secret")
    assert api.me() == user

    todo = api.create_record("todos", {"text": "Water plants"})
    assert api.list_records("todos") == [todo]
    assert api.update_record("todos", todo["id"], {"done": True})["done"] is True
    assert api.delete_record("todos", todo["id"])["id"] == todo["id"]

    assert api.logout() == {"success": True}
    with pytest.raises(ApiError) as exc_info:
        api.me()
    assert exc_info.value.status == 401
    assert str(exc_info.value) == "Authentication required"


def test_errors_carry_status_and_payload(api):
    api.register("carol", "secret")

    with pytest.raises(ApiError) as exc_info:
        api.delete_record("notes", "missing")

    assert exc_info.value.status == 404
    assert exc_info.value.payload == {"data": None, "error": "Record not found"}


def test_list_with_params(api):
    api.register("carol", "secret")
    api.create_record("events", {"title": "A", "startISO": "2025-03-01T09:00:00Z"})
    api.create_record("events", {"title": "B", "startISO": "2025-04-01T09:00:00Z"})

    assert [event["title"] for event in api.list_records("events", **{"from": "2025-03-15"})] == ["B"]


def test_weather_and_health(api):
    assert len(api.weather(40.7, -74.0)["hourly"]) == 12
    assert api.health()["status"] == "ok"


class TestHandleResponse:
    def test_non_json_failure(self):
        response = httpx.Response(503, text="busy", headers={"content-type": "text/plain"})

        with pytest.raises(ApiError, match=r"Request failed \(503\)"):
            handle_response(response)

    def test_error_field_in_successful_response(self):
        with pytest.raises(ApiError, match="soft failure"):
            handle_response(httpx.Response(200, json={"data": None, "error": "soft failure"}))

    def test_message_field_used_when_no_error(self):
        with pytest.raises(ApiError, match="Bad gateway"):
            handle_response(httpx.Response(502, json={"message": "Bad gateway"}))

    def test_payload_without_envelope_returned_as_is(self):
        assert handle_response(httpx.Response(200, json=[1, 2])) == [1, 2]

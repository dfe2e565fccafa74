from __future__ import annotations

from dataclasses import replace

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app import create_app
from room_calendar.controllers.calendar_controller import router
from room_calendar.services.calendar_service import CalendarService
from room_calendar.utils.config import get_settings


def _build_test_client() -> TestClient:
    settings = replace(get_settings(), app_version="test")
    return TestClient(create_app(settings))


def _suite_payload() -> dict:
    return {
        "bookings": [
            {"guest_id": "G1001", "email": "a@example.com", "room_id": "A", "from": "2024-01-10", "to": "2024-01-15"},
            {"guest_id": "G1002", "room_id": "B", "from": "2024-01-12", "to": "2024-01-20"},
            {"guest_id": "G1003", "room_id": "C", "from": "2024-01-01", "to": "2024-01-01"},
            {"guest_id": "G1004", "room_id": "C", "from": "2024-01-31", "to": "2024-01-31"},
        ],
        "maintenance": [],
        "linked_rooms": [{"suite_id": "S1", "room_ids": ["A", "B"]}],
    }


def test_health_reports_version() -> None:
    client = _build_test_client()
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app_version": "test"}


def test_availability_end_to_end() -> None:
    client = _build_test_client()
    response = client.post("/availability", json=_suite_payload())

    assert response.status_code == 200
    availability = response.json()["availability"]
    assert availability["S1"] == [
        {"from": "2024-01-01", "to": "2024-01-09"},
        {"from": "2024-01-21", "to": "2024-01-31"},
    ]
    assert availability["A"] == [
        {"from": "2024-01-01", "to": "2024-01-09"},
        {"from": "2024-01-16", "to": "2024-01-31"},
    ]
    assert set(availability) == {"A", "B", "C", "S1"}


def test_empty_request_returns_empty_availability() -> None:
    client = _build_test_client()
    response = client.post("/availability", json={})
    assert response.status_code == 200
    assert response.json() == {"availability": {}}


def test_double_booking_returns_conflict() -> None:
    client = _build_test_client()
    payload = {
        "bookings": [
            {"guest_id": "G1", "room_id": "101", "from": "2024-01-01", "to": "2024-01-05"},
            {"guest_id": "G2", "room_id": "101", "from": "2024-01-03", "to": "2024-01-10"},
        ]
    }
    response = client.post("/availability", json=payload)
    assert response.status_code == 409
    assert "room 101" in response.json()["detail"]


def test_overlapping_maintenance_is_accepted() -> None:
    client = _build_test_client()
    payload = {
        "maintenance": [
            {"room_id": "101", "from": "2024-01-01", "to": "2024-01-05"},
            {"room_id": "101", "from": "2024-01-03", "to": "2024-01-10"},
        ]
    }
    response = client.post("/availability", json=payload)
    assert response.status_code == 200
    assert response.json()["availability"] == {"101": []}


def test_reversed_dates_are_rejected() -> None:
    client = _build_test_client()
    payload = {"maintenance": [{"room_id": "101", "from": "2024-01-05", "to": "2024-01-01"}]}
    response = client.post("/availability", json=payload)
    assert response.status_code == 422


def test_suite_without_members_is_rejected() -> None:
    client = _build_test_client()
    payload = {"linked_rooms": [{"suite_id": "S1", "room_ids": []}]}
    response = client.post("/availability", json=payload)
    assert response.status_code == 422


def test_blank_suite_members_are_rejected() -> None:
    client = _build_test_client()
    payload = {"linked_rooms": [{"suite_id": "S1", "room_ids": [" "]}]}
    response = client.post("/availability", json=payload)
    assert response.status_code == 422
    assert response.json()["detail"] == "No rooms specified for suite"


def test_service_is_created_lazily_when_state_is_missing() -> None:
    app = FastAPI()
    app.include_router(router)
    client = TestClient(app)

    response = client.post("/availability", json={"linked_rooms": [{"suite_id": "S", "room_ids": ["A"]}]})
    assert response.status_code == 200
    assert isinstance(app.state.calendar_service, CalendarService)
    assert set(response.json()["availability"]) == {"A", "S"}


def test_health_falls_back_to_environment_settings() -> None:
    app = FastAPI()
    app.include_router(router)
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json()["app_version"] == get_settings().app_version


def test_app_keeps_its_own_settings_on_state() -> None:
    settings = replace(get_settings(), app_version="9.9.9")
    app = create_app(settings)
    assert app.state.settings is settings
    assert TestClient(app).get("/health").json()["app_version"] == "9.9.9"

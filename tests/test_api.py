"""
HTTP tests for the bookings router.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from storefront.application.use_cases.booking import BookingUseCase
from storefront.infrastructure.notifications.mock_notifier import MockNotifier
from storefront.infrastructure.store.memory_store import MemoryReservationRepository
from storefront.infrastructure.store.seed import seed_demo_reservations
from storefront.main import app
from storefront.wiring.dependencies import get_booking_use_case


@pytest.fixture
def client():
    repository = MemoryReservationRepository()
    seed_demo_reservations(repository)
    uc = BookingUseCase(repository=repository, notifier=MockNotifier())
    app.dependency_overrides[get_booking_use_case] = lambda: uc
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def booking_payload(**overrides):
    payload = {
        "service": {"id": "makeup-special", "name": "Makeup Special", "price": "$75.00"},
        "date": "2024-01-15",
        "time": "11:00 AM",
        "customer": {"name": "Ana Lopez", "email": "ana@email.com", "phone": "555-0100"},
    }
    payload.update(overrides)
    return payload


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_slots_for_seeded_day(client):
    resp = client.get("/api/bookings/slots", params={"date": "2024-01-15"})

    assert resp.status_code == 200
    slots = resp.json()
    assert len(slots) == 10
    assert "10:00 AM" not in slots


def test_slots_invalid_date_is_400(client):
    assert client.get("/api/bookings/slots", params={"date": "tomorrow-ish"}).status_code == 400


def test_create_booking_shape(client):
    resp = client.post("/api/bookings", json=booking_payload())

    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "pending"
    assert body["depositPaid"] is False
    assert body["time"] == "11:00 AM"
    assert body["customer"]["email"] == "ana@email.com"
    assert body["createdAt"] and body["updatedAt"]
    assert client.get(f"/api/bookings/{body['id']}").json()["id"] == body["id"]


def test_create_booking_missing_email_is_400(client):
    resp = client.post("/api/bookings", json=booking_payload(customer={"name": "Ana"}))

    assert resp.status_code == 400
    assert client.get("/api/bookings").json()["total"] == 2


def test_create_booking_taken_slot_is_409(client):
    resp = client.post("/api/bookings", json=booking_payload(time="10:00 AM"))

    assert resp.status_code == 409


def test_list_filters(client):
    body = client.get("/api/bookings", params={"status": "confirmed"}).json()
    assert [b["customer"]["name"] for b in body["data"]] == ["Sarah Johnson"]

    body = client.get("/api/bookings", params={"search": "makeup", "limit": 5}).json()
    assert body["total"] == 1
    assert body["data"][0]["customer"]["name"] == "Maria Garcia"

    body = client.get("/api/bookings", params={"offset": 1, "limit": 1}).json()
    assert (body["total"], body["start"], body["end"]) == (2, 1, 2)


def test_status_patch(client):
    resp = client.patch("/api/bookings/1767999000002/status", json={"status": "confirmed"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "confirmed"

    assert client.patch("/api/bookings/1767999000002/status", json={"status": "bogus"}).status_code == 400
    assert client.patch("/api/bookings/nope/status", json={"status": "confirmed"}).status_code == 404


def test_update_booking_reschedule(client):
    resp = client.patch("/api/bookings/1767999000002", json={"date": "2024-01-15", "time": "10:00 AM"})
    assert resp.status_code == 409

    resp = client.patch("/api/bookings/1767999000002", json={"time": "3pm"})
    assert resp.status_code == 200
    assert resp.json()["time"] == "3:00 PM"


def test_deposit_endpoint(client):
    resp = client.post(
        "/api/bookings/1767999000002/deposit",
        json={"paymentIntentId": "pi_mock_1", "status": "requires_payment_method"},
    )
    assert resp.status_code == 400

    resp = client.post(
        "/api/bookings/1767999000002/deposit",
        json={"paymentIntentId": "pi_mock_1", "status": "succeeded"},
    )
    assert resp.status_code == 200
    assert resp.json()["depositPaid"] is True


def test_calendar(client):
    events = client.get("/api/bookings/calendar", params={"start": "2024-01-01", "end": "2024-01-31"}).json()

    assert [e["start"] for e in events] == ["2024-01-15T10:00 AM", "2024-01-16T2:00 PM"]
    assert events[0]["backgroundColor"] == "#10b981"
    assert events[0]["extendedProps"]["booking"]["depositPaid"] is True


def test_delete_booking(client):
    resp = client.delete("/api/bookings/1767999000001")

    assert resp.status_code == 200
    assert resp.json()["message"] == "Booking deleted successfully"
    assert client.get("/api/bookings/1767999000001").status_code == 404
    assert client.delete("/api/bookings/1767999000001").status_code == 404

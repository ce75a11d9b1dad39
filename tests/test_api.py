"""
Tests for the booking HTTP endpoints.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from app.application.use_cases.session_manager import BookingSessionManager
from app.infrastructure.knowledge.pricing_catalog_store import PricingCatalogStore
from app.infrastructure.store.memory_store import MemoryBookingSessionStore
from app.main import app
from app.wiring.dependencies import get_session_manager

BASE = "/api/v1/booking"


def _client() -> TestClient:
    manager = BookingSessionManager(catalog=PricingCatalogStore(), store=MemoryBookingSessionStore())
    app.dependency_overrides[get_session_manager] = lambda: manager
    return TestClient(app)


def _create(client: TestClient, query: str = "") -> dict:
    response = client.post(f"{BASE}/sessions{query}")
    assert response.status_code == 201
    return response.json()


def test_health():
    client = _client()
    assert client.get("/health").json() == {"status": "ok"}


def test_create_session_captures_utm():
    client = _client()
    data = _create(client, "?utm_source=google&utm_medium=cpc&utm_campaign=spring")

    assert data["session_id"].startswith("bk_")
    assert data["current_step"] == 0
    assert data["can_proceed"] is False
    assert data["progress"]["progress"] == 20
    assert data["form_data"]["utm_source"] == "google"
    assert data["form_data"]["utm_campaign"] == "spring"


def test_booking_flow_pricing():
    client = _client()
    session_id = _create(client)["session_id"]

    data = client.put(
        f"{BASE}/sessions/{session_id}/package",
        json={"package_key": "signature", "sqft_tier": "lt2000"},
    ).json()
    assert data["pricing"]["package_price"] == 449
    assert data["recommended_addons"] == ["aerial-video", "premium-staging", "rush-delivery"]
    assert data["can_proceed"] is True

    client.post(f"{BASE}/sessions/{session_id}/addons/rush-delivery/toggle")
    client.put(f"{BASE}/sessions/{session_id}/travel-fee", json={"fee": 25, "distance": 50, "duration": 60})
    data = client.put(
        f"{BASE}/sessions/{session_id}/coupon",
        json={"code": "SAVE10", "discount": 10, "type": "percent"},
    ).json()

    pricing = data["pricing"]
    assert pricing["subtotal"] == 549
    assert pricing["coupon_discount"] == 55
    assert pricing["total"] == 494
    assert pricing["breakdown"][-1] == {"name": "Discount (SAVE10)", "price": -55, "quantity": None}

    data = client.delete(f"{BASE}/sessions/{session_id}/coupon").json()
    assert data["pricing"]["total"] == 549


def test_addon_quantity_and_removal():
    client = _client()
    session_id = _create(client)["session_id"]

    data = client.put(f"{BASE}/sessions/{session_id}/addons/premium-staging", json={"quantity": 3}).json()
    assert data["form_data"]["addons"] == [{"id": "premium-staging", "quantity": 3}]
    assert data["pricing"]["addons_total"] == 105

    data = client.put(f"{BASE}/sessions/{session_id}/addons/premium-staging", json={"quantity": 0}).json()
    assert data["form_data"]["addons"] == []
    assert data["pricing"]["addons_total"] == 0


def test_step_navigation_and_gate():
    client = _client()
    session_id = _create(client)["session_id"]

    data = client.post(f"{BASE}/sessions/{session_id}/steps/prev").json()
    assert data["current_step"] == 0

    client.put(f"{BASE}/sessions/{session_id}/steps", json={"step": 2})
    gate = client.get(f"{BASE}/sessions/{session_id}/can-proceed").json()
    assert gate == {"step": 2, "can_proceed": False}

    client.put(
        f"{BASE}/sessions/{session_id}/address",
        json={"street": "123 Main St", "city": "Orlando", "state": "FL", "zip": "32801", "lat": 28.5, "lng": -81.3},
    )
    gate = client.get(f"{BASE}/sessions/{session_id}/can-proceed").json()
    assert gate == {"step": 2, "can_proceed": True}

    data = client.post(f"{BASE}/sessions/{session_id}/steps/next").json()
    assert data["current_step"] == 3
    data = client.put(f"{BASE}/sessions/{session_id}/schedule", json={"date": "2024-01-15", "time": "10:00"}).json()
    assert data["can_proceed"] is True


def test_form_patch_rejects_unknown_fields():
    client = _client()
    session_id = _create(client)["session_id"]

    response = client.patch(f"{BASE}/sessions/{session_id}/form", json={"contact_name": "Jane"})
    assert response.status_code == 200
    assert response.json()["form_data"]["contact_name"] == "Jane"

    response = client.patch(f"{BASE}/sessions/{session_id}/form", json={"package_key": "premier"})
    assert response.status_code == 422

    response = client.patch(f"{BASE}/sessions/{session_id}/form", json={"utm_source": "spoofed"})
    assert response.status_code == 422
    assert client.get(f"{BASE}/sessions/{session_id}").json()["form_data"]["utm_source"] is None


def test_invalid_tier_is_rejected():
    client = _client()
    session_id = _create(client)["session_id"]

    response = client.put(
        f"{BASE}/sessions/{session_id}/package",
        json={"package_key": "signature", "sqft_tier": "2001_2500"},
    )
    assert response.status_code == 422


def test_site_conditions_and_abandonment():
    client = _client()
    session_id = _create(client)["session_id"]

    data = client.put(
        f"{BASE}/sessions/{session_id}/airspace",
        json={"status": "laanc_required", "warnings": ["Near airport"]},
    ).json()
    assert data["form_data"]["airspace_status"] == "laanc_required"

    forecast = [{"date": "2024-01-15", "condition": "Sunny", "temp_high": 78, "temp_low": 62, "rain_chance": 10, "icon": "sun"}]
    data = client.put(f"{BASE}/sessions/{session_id}/weather", json={"forecast": forecast}).json()
    assert data["form_data"]["weather_forecast"] == forecast

    data = client.put(f"{BASE}/sessions/{session_id}/loyalty", json={"points": 500, "value": 25}).json()
    assert data["pricing"]["loyalty_discount"] == 25

    data = client.post(f"{BASE}/sessions/{session_id}/abandon").json()
    assert data["is_abandoned"] is True
    data = client.post(f"{BASE}/sessions/{session_id}/recovery-email").json()
    assert data["recovery_email_sent"] is True


def test_reset_and_unknown_session():
    client = _client()
    session_id = _create(client)["session_id"]

    assert client.delete(f"{BASE}/sessions/{session_id}").status_code == 204
    assert client.get(f"{BASE}/sessions/{session_id}").status_code == 404
    assert client.post(f"{BASE}/sessions/bk_unknown/steps/next").status_code == 404


def test_list_addons_by_category():
    client = _client()

    data = client.get(f"{BASE}/catalog/addons", params={"category": "video"}).json()
    assert {a["id"] for a in data} == {"social-reel", "aerial-video"}

    data = client.get(f"{BASE}/catalog/addons").json()
    assert len(data) == 8

from __future__ import annotations

from datetime import date, timedelta

import psycopg2
import pytest
from fastapi.testclient import TestClient

import stayfinder.repositories.postgres as postgres
from stayfinder.config import AppConfig
from stayfinder.models import CHECKFRONT, MANUAL, NIGHTSBRIDGE, StayRequest
from stayfinder.services import CatalogSource, Source, demo_sources
from stayfinder.services.catalog import DEMO_LISTINGS
from stayfinder.web.main import app, get_config, get_sources

from conftest import FailingSource, listing


ORIGIN = "https://storefront.example.co.za"


def days(n: int) -> str:
    return (date.today() + timedelta(days=n)).isoformat()


@pytest.fixture
def client():
    app.dependency_overrides[get_sources] = demo_sources
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_availability_query(client: TestClient) -> None:
    resp = client.get(
        "/availability",
        params={"checkIn": days(8), "checkOut": days(15), "guests": 4, "location": "Franschhoek"},
        headers={"Origin": ORIGIN},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == ORIGIN
    body = resp.json()
    assert body["success"] is True
    assert body["totalCount"] == 4
    assert body["breakdown"] == {NIGHTSBRIDGE: 4, CHECKFRONT: 0}
    assert [p["rateFrom"] for p in body["properties"]] == [1500, 1800, 2100, 2200]
    assert body["properties"][0]["maxGuests"] == 4


def test_availability_body(client: TestClient) -> None:
    resp = client.post("/availability", json={"checkIn": days(3), "checkOut": days(5), "guests": 10})
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalCount"] == sum(body["breakdown"].values()) == len(body["properties"])
    assert all(p["maxGuests"] >= 10 for p in body["properties"])


def test_no_matches_is_an_empty_success(client: TestClient) -> None:
    resp = client.get("/availability", params={"checkIn": days(3), "checkOut": days(5), "location": "Durban"})
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "properties": [],
        "totalCount": 0,
        "breakdown": {NIGHTSBRIDGE: 0, CHECKFRONT: 0},
        "unavailable": {},
    }


@pytest.mark.parametrize(
    "params, field",
    [
        ({"checkIn": days(0), "checkOut": days(3)}, "checkIn"),
        ({"checkIn": days(4), "checkOut": days(4)}, "checkOut"),
        ({"checkIn": days(4), "checkOut": days(6), "guests": 0}, "guests"),
        ({"checkIn": days(4), "checkOut": days(6), "guests": 99}, "guests"),
        ({"checkIn": "04/11/2030", "checkOut": days(6)}, "checkIn"),
        ({"checkOut": days(6)}, "checkIn"),
    ],
)
def test_validation_errors_are_400(client: TestClient, params, field) -> None:
    resp = client.get("/availability", params=params)
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["field"] == field
    assert body["error"]


def test_partial_outage_still_succeeds() -> None:
    catalog = demo_sources()
    app.dependency_overrides[get_sources] = lambda: [FailingSource(NIGHTSBRIDGE), catalog[1]]
    try:
        resp = TestClient(app).get("/availability", params={"checkIn": days(3), "checkOut": days(5)})
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 200
    body = resp.json()
    assert body["breakdown"][NIGHTSBRIDGE] == 0
    assert body["breakdown"][CHECKFRONT] == 7
    assert body["unavailable"] == {NIGHTSBRIDGE: "connection refused"}


def test_total_outage_is_503() -> None:
    app.dependency_overrides[get_sources] = lambda: [FailingSource(NIGHTSBRIDGE), FailingSource(CHECKFRONT)]
    try:
        resp = TestClient(app).post("/availability", json={"checkIn": days(3), "checkOut": days(5)})
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 503
    body = resp.json()
    assert body["success"] is False
    assert "unavailable" in body["error"]


def test_cors_preflight(client: TestClient) -> None:
    resp = client.options(
        "/availability",
        headers={
            "Origin": ORIGIN,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type, apikey",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == ORIGIN
    assert "POST" in resp.headers["access-control-allow-methods"]


def test_bare_options_is_answered(client: TestClient) -> None:
    resp = client.options("/availability")
    assert resp.status_code == 204
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "POST" in resp.headers["access-control-allow-methods"]
    assert resp.headers["access-control-allow-headers"] == "authorization, x-client-info, apikey, content-type"


def test_quote(client: TestClient) -> None:
    resp = client.get(
        "/properties/nb-franschhoek-2/quote",
        params={"checkIn": days(8), "checkOut": days(15), "guests": 2},
    )
    assert resp.status_code == 200
    pricing = resp.json()["pricing"]
    assert pricing["nights"] == 7
    assert pricing["subtotal"] == 12600.0
    assert pricing["serviceFee"] == 945.0
    assert pricing["grandTotal"] == 14045.0


def test_quote_for_unknown_property_is_404(client: TestClient) -> None:
    resp = client.get("/properties/nb-nowhere/quote", params={"checkIn": days(8), "checkOut": days(15)})
    assert resp.status_code == 404
    assert resp.json()["success"] is False


def booking_payload(**guest):
    details = {"fullName": "Thandi Nkosi", "email": "thandi@example.co.za", "phone": "0821234567"}
    details.update(guest)
    return {
        "propertyId": "cf-hermanus-1",
        "checkIn": days(10),
        "checkOut": days(12),
        "guests": 4,
        "guestDetails": details,
    }


def test_demo_booking(client: TestClient) -> None:
    resp = client.post("/bookings", json=booking_payload(phone="+27721234567"))
    assert resp.status_code == 201
    body = resp.json()
    assert body["demo"] is True
    booking = body["booking"]
    assert booking["property"]["id"] == "cf-hermanus-1"
    assert booking["dates"]["nights"] == 2
    assert booking["pricing"]["grandTotal"] == 4200 + 500 + 315


@pytest.mark.parametrize(
    "guest",
    [{"phone": "12345"}, {"phone": "0521234567"}, {"email": "not-an-email"}, {"fullName": "A"}],
)
def test_booking_rejects_bad_guest_details(client: TestClient, guest) -> None:
    resp = client.post("/bookings", json=booking_payload(**guest))
    assert resp.status_code == 422
    assert resp.json()["success"] is False


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.json()["ok"] is True


class BrokenSource(Source):
    tag = NIGHTSBRIDGE

    def fetch_candidates(self, request: StayRequest):
        return [object()]


def test_unexpected_error_is_500_with_cors_headers() -> None:
    app.dependency_overrides[get_sources] = lambda: [BrokenSource()]
    try:
        resp = TestClient(app).get(
            "/availability",
            params={"checkIn": days(3), "checkOut": days(5)},
            headers={"Origin": ORIGIN},
        )
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "An unexpected error occurred"}
    assert resp.headers["access-control-allow-origin"] == ORIGIN


@pytest.fixture
def live_app():
    app.state.sources = None
    app.dependency_overrides[get_config] = lambda: AppConfig(live_sources=True)
    yield TestClient(app)
    app.dependency_overrides.clear()
    app.state.sources = None


def test_unreadable_credential_store_is_503_until_it_recovers(monkeypatch: pytest.MonkeyPatch, live_app: TestClient) -> None:
    reads = []

    def flaky_credentials(url=None):
        reads.append(url)
        if len(reads) == 1:
            raise psycopg2.OperationalError("no route to host")
        return []

    monkeypatch.setattr(postgres, "active_credentials", flaky_credentials)
    monkeypatch.setattr(
        postgres, "active_properties", lambda **kw: [listing("mn-7", MANUAL, 900, location="Sedgefield")]
    )
    params = {"checkIn": days(3), "checkOut": days(5)}

    first = live_app.get("/availability", params=params)
    assert first.status_code == 503
    assert first.json()["success"] is False

    second = live_app.get("/availability", params=params)
    assert second.status_code == 200
    assert [p["id"] for p in second.json()["properties"]] == ["mn-7"]
    assert second.json()["breakdown"] == {MANUAL: 1}

    live_app.get("/availability", params=params)
    assert len(reads) == 2


def test_property_detail(client: TestClient) -> None:
    resp = client.get("/properties/cf-stellenbosch-1", headers={"Origin": ORIGIN})
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == ORIGIN
    prop = resp.json()["property"]
    assert prop["id"] == "cf-stellenbosch-1"
    assert prop["system"] == CHECKFRONT
    assert prop["rateFrom"] == 1850
    assert prop["maxGuests"] == 7


def test_unknown_property_is_404(client: TestClient) -> None:
    resp = client.get("/properties/nb-nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Property not found"}


def test_booked_property_is_still_found_without_dates() -> None:
    blocked = {"nb-franschhoek-2": [(date.today(), date.today() + timedelta(days=365))]}
    catalog = CatalogSource(NIGHTSBRIDGE, DEMO_LISTINGS, blocked=blocked)
    app.dependency_overrides[get_sources] = lambda: [catalog]
    try:
        client = TestClient(app)
        search = client.get("/availability", params={"checkIn": days(8), "checkOut": days(15)})
        detail = client.get("/properties/nb-franschhoek-2")
    finally:
        app.dependency_overrides.clear()
    assert "nb-franschhoek-2" not in [p["id"] for p in search.json()["properties"]]
    assert detail.status_code == 200
    assert detail.json()["property"]["rateFrom"] == 1800


def test_property_lookup_skips_failed_sources() -> None:
    catalog = demo_sources()
    app.dependency_overrides[get_sources] = lambda: [FailingSource(NIGHTSBRIDGE), catalog[1]]
    try:
        found = TestClient(app).get("/properties/cf-hermanus-1")
        missing = TestClient(app).get("/properties/nb-franschhoek-1")
    finally:
        app.dependency_overrides.clear()
    assert found.status_code == 200
    assert missing.status_code == 404


def test_property_lookup_with_every_source_down_is_503() -> None:
    app.dependency_overrides[get_sources] = lambda: [FailingSource(NIGHTSBRIDGE), FailingSource(CHECKFRONT)]
    try:
        resp = TestClient(app).get("/properties/nb-franschhoek-1")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 503

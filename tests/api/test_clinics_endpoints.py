# This file tests clinic endpoints, including open-emergency mode and proximity search.

from __future__ import annotations

from pet_catalog.query.field_schema import EntityKind
from pet_catalog.query.geo import GeoPoint
from tests.api.support import CLINIC_ID, SAMPLE_RECORDS, FakeQueryExecutor, api_test_client


def test_open_emergency_clinics_near_point() -> None:
    nearby = dict(SAMPLE_RECORDS[EntityKind.CLINIC], distanceKm=1.25)
    executor = FakeQueryExecutor(records=[nearby])
    with api_test_client(executor=executor) as client:
        response = client.get(
            "/api/v1/clinics?isOpenNow=true&isEmergency=true&lat=31.9&lng=35.2&radius=5"
        )

    assert response.status_code == 200
    payload = response.json()
    assert payload["message"] == "Open emergency clinics retrieved successfully."
    assert payload["data"][0]["distanceKm"] == 1.25
    spec = executor.last_spec
    assert spec.predicate_map() == {"isOpenNow": True, "isEmergency": True}
    assert spec.geo.center == GeoPoint(longitude=35.2, latitude=31.9)
    assert spec.geo.radius_km == 5.0


def test_clinic_listing_without_distance_omits_field() -> None:
    with api_test_client() as client:
        response = client.get("/api/v1/clinics?city=Ramallah")

    assert response.status_code == 200
    payload = response.json()
    assert payload["message"] == "Clinics retrieved successfully."
    assert "distanceKm" not in payload["data"][0]
    assert payload["pagination"]["limit"] == 10


def test_clinic_nulls_other_than_distance_are_kept() -> None:
    unlisted = dict(SAMPLE_RECORDS[EntityKind.CLINIC], phone=None, address=None)
    executor = FakeQueryExecutor(records=[unlisted], by_id={CLINIC_ID: unlisted})
    with api_test_client(executor=executor) as client:
        listed = client.get("/api/v1/clinics?city=Ramallah").json()["data"][0]
        single = client.get(f"/api/v1/clinics/{CLINIC_ID}").json()["data"]

    for record in (listed, single):
        assert record["phone"] is None
        assert record["address"] is None
        assert "distanceKm" not in record


def test_geo_takes_precedence_over_city() -> None:
    executor = FakeQueryExecutor()
    with api_test_client(executor=executor) as client:
        response = client.get("/api/v1/clinics?city=Ramallah&lat=31.9&lng=35.2")

    assert response.status_code == 200
    assert "city" not in executor.last_spec.predicate_map()
    assert executor.last_spec.geo.radius_km == 10.0


def test_emergency_mode_needs_both_flags() -> None:
    with api_test_client() as client:
        response = client.get("/api/v1/clinics?isOpenNow=true")

    assert response.status_code == 400
    assert [(e["field"], e["reason"]) for e in response.json()["errors"]] == [
        ("isEmergency", "missing")
    ]


def test_lone_latitude_is_rejected() -> None:
    with api_test_client() as client:
        response = client.get("/api/v1/clinics?lat=31.9")

    assert response.status_code == 400
    assert [(e["field"], e["reason"]) for e in response.json()["errors"]] == [("lng", "missing")]


def test_out_of_range_coordinates() -> None:
    with api_test_client() as client:
        response = client.get("/api/v1/clinics?lat=95&lng=200")

    assert response.status_code == 400
    assert [(e["field"], e["reason"]) for e in response.json()["errors"]] == [
        ("lat", "invalid_range"),
        ("lng", "invalid_range"),
    ]


def test_get_clinic_by_id() -> None:
    with api_test_client() as client:
        response = client.get(f"/api/v1/clinics/{CLINIC_ID}")

    assert response.status_code == 200
    assert response.json()["data"]["isEmergency"] is True

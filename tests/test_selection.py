from __future__ import annotations

import pytest

from telepark.services.selection import find_nearest, is_available, status_is
from telepark.services.types import (
    NO_CANDIDATE,
    GeoPoint,
    MeterRecord,
    MeterStatus,
    NearestMeter,
)


def _meter(meter_id: str, lat: float, lon: float, status: MeterStatus) -> MeterRecord:
    return MeterRecord(meter_id=meter_id, location=GeoPoint(lat, lon), status=status)


def test_nearest_available_meter_in_lowell(lowell_reference, lowell_meters) -> None:
    result = find_nearest(lowell_reference, lowell_meters, is_available)

    assert isinstance(result, NearestMeter)
    assert result.meter.meter_id == "A"
    assert result.distance_km == pytest.approx(0.0138, abs=1e-3)


def test_occupied_meter_excluded_even_when_closest(lowell_reference, lowell_meters) -> None:
    result = find_nearest(GeoPoint(42.6340, -71.3155), lowell_meters, is_available)

    assert isinstance(result, NearestMeter)
    assert result.meter.meter_id == "A"


def test_no_meter_matches_filter(lowell_reference, lowell_meters) -> None:
    result = find_nearest(
        lowell_reference, lowell_meters, status_is(MeterStatus.OUT_OF_SERVICE)
    )

    assert result is NO_CANDIDATE
    assert not result


def test_empty_candidates_returns_no_candidate(lowell_reference) -> None:
    assert find_nearest(lowell_reference, [], is_available) is NO_CANDIDATE
    assert find_nearest(lowell_reference, [], status_is(*MeterStatus)) is NO_CANDIDATE


def test_default_filter_is_available(lowell_reference, lowell_meters) -> None:
    result = find_nearest(lowell_reference, lowell_meters)

    assert isinstance(result, NearestMeter)
    assert result.meter.meter_id == "A"


def test_multiple_statuses_accepted(lowell_reference, lowell_meters) -> None:
    result = find_nearest(
        GeoPoint(42.6341, -71.3154),
        lowell_meters,
        status_is(MeterStatus.AVAILABLE, MeterStatus.OCCUPIED),
    )

    assert isinstance(result, NearestMeter)
    assert result.meter.meter_id == "B"


def test_ties_resolve_to_first_in_input_order() -> None:
    reference = GeoPoint(0.0, 0.0)
    east = _meter("east", 0.0, 1.0, MeterStatus.AVAILABLE)
    west = _meter("west", 0.0, -1.0, MeterStatus.AVAILABLE)
    twin = _meter("twin", 0.0, 1.0, MeterStatus.AVAILABLE)

    for _ in range(3):
        assert find_nearest(reference, [east, west], is_available).meter.meter_id == "east"
        assert find_nearest(reference, [west, east], is_available).meter.meter_id == "west"
        assert find_nearest(reference, [east, twin], is_available).meter.meter_id == "east"
        assert find_nearest(reference, [twin, east], is_available).meter.meter_id == "twin"


def test_candidates_are_not_mutated(lowell_reference, lowell_meters) -> None:
    before = list(lowell_meters)

    result = find_nearest(lowell_reference, lowell_meters, is_available)

    assert lowell_meters == before
    assert result.meter is lowell_meters[0]


def test_record_updates_return_new_values() -> None:
    meter = _meter("A", 1.0, 2.0, MeterStatus.AVAILABLE)

    occupied = meter.with_status(MeterStatus.OCCUPIED)
    moved = meter.with_location(GeoPoint(3.0, 4.0))

    assert meter.status is MeterStatus.AVAILABLE
    assert occupied.status is MeterStatus.OCCUPIED
    assert occupied.meter_id == "A"
    assert moved.location == GeoPoint(3.0, 4.0)
    assert meter.location == GeoPoint(1.0, 2.0)


def test_nan_candidate_never_displaces_a_real_distance(lowell_reference) -> None:
    valid = _meter("valid", 42.6335, -71.3161, MeterStatus.AVAILABLE)
    broken = _meter("broken", float("nan"), -71.3161, MeterStatus.AVAILABLE)

    result = find_nearest(lowell_reference, [valid, broken], is_available)

    assert result.meter.meter_id == "valid"
    assert result.distance_km == pytest.approx(0.0138, abs=1e-3)

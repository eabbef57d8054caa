from __future__ import annotations

import pytest
from django.test import Client

from telepark.services.types import GeoPoint, MeterRecord, MeterStatus


@pytest.fixture
def api_client() -> Client:
    return Client()


@pytest.fixture
def lowell_meters() -> list[MeterRecord]:
    return [
        MeterRecord("A", GeoPoint(42.6335, -71.3161), MeterStatus.AVAILABLE),
        MeterRecord("B", GeoPoint(42.6340, -71.3155), MeterStatus.OCCUPIED),
        MeterRecord("C", GeoPoint(42.6329, -71.3170), MeterStatus.AVAILABLE),
    ]


@pytest.fixture
def lowell_reference() -> GeoPoint:
    return GeoPoint(42.6334, -71.3162)

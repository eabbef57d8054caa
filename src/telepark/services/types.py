from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Final, Union


class MeterStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    OUT_OF_SERVICE = "out_of_service"


@dataclass(slots=True, frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class MeterRecord:
    meter_id: str
    location: GeoPoint
    status: MeterStatus

    def with_status(self, status: MeterStatus) -> MeterRecord:
        return replace(self, status=status)

    def with_location(self, location: GeoPoint) -> MeterRecord:
        return replace(self, location=location)


@dataclass(slots=True, frozen=True)
class NearestMeter:
    meter: MeterRecord
    distance_km: float


class _NoCandidate:
    """Marker returned when no meter passes the status filter."""

    _instance: _NoCandidate | None = None

    def __new__(cls) -> _NoCandidate:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_CANDIDATE"


NO_CANDIDATE: Final = _NoCandidate()

SelectionResult = Union[NearestMeter, _NoCandidate]

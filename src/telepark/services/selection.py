from __future__ import annotations

from typing import Callable, Iterable

from telepark.services.geo import distance
from telepark.services.types import (
    NO_CANDIDATE,
    GeoPoint,
    MeterRecord,
    MeterStatus,
    NearestMeter,
    SelectionResult,
)

StatusFilter = Callable[[MeterStatus], bool]


def status_is(*statuses: MeterStatus) -> StatusFilter:
    accepted = frozenset(statuses)

    def _matches(status: MeterStatus) -> bool:
        return status in accepted

    return _matches


is_available: StatusFilter = status_is(MeterStatus.AVAILABLE)


def find_nearest(
    reference: GeoPoint,
    candidates: Iterable[MeterRecord],
    status_filter: StatusFilter = is_available,
) -> SelectionResult:
    """Return the filtered candidate closest to ``reference``.

    Candidates sharing the minimal distance resolve to the one seen first, since
    ``best`` only moves on a strictly smaller distance. An empty filtered set
    yields ``NO_CANDIDATE`` rather than raising.

    Coordinates are not validated. A NaN coordinate gives a NaN distance, which
    never compares smaller, so such a candidate can end up as the result.
    """
    best: MeterRecord | None = None
    best_distance = float("inf")

    for candidate in candidates:
        if not status_filter(candidate.status):
            continue
        candidate_distance = distance(reference, candidate.location)
        if best is None or candidate_distance < best_distance:
            best = candidate
            best_distance = candidate_distance

    if best is None:
        return NO_CANDIDATE
    return NearestMeter(meter=best, distance_km=best_distance)

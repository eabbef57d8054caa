from __future__ import annotations

import logging
from typing import Iterable

from django.conf import settings

from telepark.services.meter_store import MeterStore, parse_status
from telepark.services.selection import find_nearest, status_is
from telepark.services.types import GeoPoint, MeterStatus, SelectionResult

logger = logging.getLogger(__name__)


class NearestMeterService:
    def __init__(self, store: MeterStore | None = None) -> None:
        self.store = store or MeterStore()

    def nearest(
        self,
        reference: GeoPoint,
        statuses: Iterable[MeterStatus] | None = None,
    ) -> SelectionResult:
        accepted = (
            list(statuses)
            if statuses is not None
            else [parse_status(value) for value in settings.TELEPARK_DEFAULT_STATUSES]
        )
        result = find_nearest(reference, self.store.snapshot(), status_is(*accepted))
        if not result:
            logger.info(
                "No meter with status in %s near %s",
                [status.value for status in accepted],
                reference,
            )
        return result

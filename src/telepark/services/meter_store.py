from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from telepark.exceptions import DuplicateMeterError, InvalidMeterStatusError, MeterNotFoundError
from telepark.models import ParkingMeter
from telepark.services.types import GeoPoint, MeterRecord, MeterStatus

logger = logging.getLogger(__name__)


def parse_status(value: str | MeterStatus) -> MeterStatus:
    try:
        return MeterStatus(value)
    except ValueError as exc:
        raise InvalidMeterStatusError(f"Unknown meter status: {value!r}") from exc


class MeterStore:
    """Persists meter records and hands out point-in-time snapshots."""

    def snapshot(self, status: MeterStatus | None = None) -> list[MeterRecord]:
        queryset = ParkingMeter.objects.order_by("id")
        if status is not None:
            queryset = queryset.filter(status=status.value)
        return [meter.to_record() for meter in queryset]

    def get(self, meter_id: str) -> MeterRecord:
        return self._get_row(meter_id).to_record()

    def add(self, record: MeterRecord) -> MeterRecord:
        try:
            with transaction.atomic():
                meter = ParkingMeter.objects.create(
                    meter_id=record.meter_id,
                    latitude=record.location.latitude,
                    longitude=record.location.longitude,
                    status=record.status.value,
                )
        except IntegrityError as exc:
            raise DuplicateMeterError(f"Meter {record.meter_id} already exists") from exc

        logger.info("Added meter %s at %s", record.meter_id, record.location)
        return meter.to_record()

    def replace(self, record: MeterRecord) -> MeterRecord:
        meter = self._get_row(record.meter_id)
        meter.latitude = record.location.latitude
        meter.longitude = record.location.longitude
        meter.status = record.status.value
        meter.save(update_fields=["latitude", "longitude", "status", "updated_at"])
        logger.info(
            "Replaced meter %s: status=%s location=%s",
            record.meter_id,
            record.status.value,
            record.location,
        )
        return meter.to_record()

    def set_status(self, meter_id: str, status: MeterStatus) -> MeterRecord:
        return self.replace(self.get(meter_id).with_status(status))

    def move(self, meter_id: str, location: GeoPoint) -> MeterRecord:
        return self.replace(self.get(meter_id).with_location(location))

    def counts(self) -> dict[str, int]:
        counts = {status.value: 0 for status in MeterStatus}
        for status in ParkingMeter.objects.values_list("status", flat=True):
            counts[status] = counts.get(status, 0) + 1
        return counts

    @staticmethod
    def _get_row(meter_id: str) -> ParkingMeter:
        try:
            return ParkingMeter.objects.get(meter_id=meter_id)
        except ParkingMeter.DoesNotExist as exc:
            raise MeterNotFoundError(f"Meter {meter_id} does not exist") from exc

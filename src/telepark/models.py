from __future__ import annotations

from django.db import models

from telepark.services.types import GeoPoint, MeterRecord, MeterStatus


class ParkingMeter(models.Model):
    objects = models.Manager["ParkingMeter"]()

    class Status(models.TextChoices):
        AVAILABLE = MeterStatus.AVAILABLE.value, "Available"
        OCCUPIED = MeterStatus.OCCUPIED.value, "Occupied"
        OUT_OF_SERVICE = MeterStatus.OUT_OF_SERVICE.value, "Out of service"

    meter_id = models.CharField(max_length=64, unique=True)
    latitude = models.FloatField()
    longitude = models.FloatField()
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.AVAILABLE
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("id",)
        indexes = (
            models.Index(fields=["status"], name="meter_status_idx"),
            models.Index(fields=["latitude", "longitude"], name="meter_location_idx"),
        )

    def to_record(self) -> MeterRecord:
        return MeterRecord(
            meter_id=self.meter_id,
            location=GeoPoint(latitude=self.latitude, longitude=self.longitude),
            status=MeterStatus(self.status),
        )

    def __str__(self) -> str:
        return f"{self.meter_id} ({self.status})"

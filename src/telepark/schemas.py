from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from telepark.services.types import GeoPoint, MeterRecord, MeterStatus


class LocationPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    def to_point(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class MeterCreateRequest(LocationPayload):
    meter_id: str = Field(min_length=1, max_length=64)
    status: MeterStatus = MeterStatus.AVAILABLE

    def to_record(self) -> MeterRecord:
        return MeterRecord(meter_id=self.meter_id, location=self.to_point(), status=self.status)


class NearestMeterRequest(LocationPayload):
    statuses: list[MeterStatus] | None = Field(default=None, min_length=1)


class MeterStatusRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: MeterStatus


class MeterMoveRequest(LocationPayload):
    pass


class MeterResponse(BaseModel):
    meter_id: str
    latitude: float
    longitude: float
    status: MeterStatus

    @classmethod
    def from_record(cls, record: MeterRecord) -> MeterResponse:
        return cls(
            meter_id=record.meter_id,
            latitude=record.location.latitude,
            longitude=record.location.longitude,
            status=record.status,
        )


class MeterListResponse(BaseModel):
    meters: list[MeterResponse]


class NearestMeterResponse(BaseModel):
    found: bool
    meter: MeterResponse | None = None
    distance_km: float | None = None

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import polars as pl
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from telepark.models import ParkingMeter
from telepark.services.types import MeterStatus

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Import and normalize parking meter seed data from a CSV using Polars."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "--csv-path",
            type=str,
            default=str(settings.PROJECT_ROOT / "meters.csv"),
            help="Path to the source meters CSV",
        )
        parser.add_argument(
            "--replace",
            action="store_true",
            help="Delete existing meters before importing",
        )

    def handle(self, *_: Any, **options: Any) -> None:
        csv_path = Path(options["csv_path"])
        if not csv_path.exists():
            raise CommandError(f"CSV file does not exist: {csv_path}")

        frame = self._load_and_transform(csv_path)
        records = frame.to_dicts()

        with transaction.atomic():
            to_create, to_update = self._upsert(records, replace=options["replace"])

        logger.info(
            "Meter import from %s: %d created, %d updated", csv_path, len(to_create), len(to_update)
        )
        self.stdout.write(
            self.style.SUCCESS(
                "Imported meters: "
                + (
                    f"{len(records)} rows normalized, "
                    f"{len(to_create)} created, {len(to_update)} updated"
                )
            )
        )

    @staticmethod
    def _upsert(
        records: list[dict[str, Any]], *, replace: bool
    ) -> tuple[list[ParkingMeter], list[ParkingMeter]]:
        if replace:
            deleted, _ = ParkingMeter.objects.all().delete()
            logger.info("Removed %d meters before import", deleted)

        existing = {
            meter.meter_id: meter
            for meter in ParkingMeter.objects.filter(
                meter_id__in=[row["meter_id"] for row in records]
            )
        }

        to_create: list[ParkingMeter] = []
        to_update: list[ParkingMeter] = []

        for row in records:
            meter = existing.get(row["meter_id"])
            if meter is None:
                to_create.append(
                    ParkingMeter(
                        meter_id=row["meter_id"],
                        latitude=row["latitude"],
                        longitude=row["longitude"],
                        status=row["status"],
                    )
                )
                continue

            meter.latitude = row["latitude"]
            meter.longitude = row["longitude"]
            meter.status = row["status"]
            to_update.append(meter)

        if to_create:
            ParkingMeter.objects.bulk_create(to_create, batch_size=1000)
        if to_update:
            ParkingMeter.objects.bulk_update(
                to_update, ["latitude", "longitude", "status"], batch_size=1000
            )

        return to_create, to_update

    @staticmethod
    def _load_and_transform(csv_path: Path) -> pl.DataFrame:
        frame = pl.read_csv(csv_path, infer_schema_length=0)
        required_columns = {"meter_id", "latitude", "longitude", "status"}
        missing_columns = required_columns.difference(frame.columns)
        if missing_columns:
            raise CommandError(f"Missing expected columns: {sorted(missing_columns)}")

        known_statuses = [status.value for status in MeterStatus]
        normalized = (
            frame.select(
                pl.col("meter_id").cast(pl.Utf8, strict=False).str.strip_chars().alias("meter_id"),
                pl.col("latitude")
                .cast(pl.Utf8, strict=False)
                .str.strip_chars()
                .cast(pl.Float64, strict=False)
                .alias("latitude"),
                pl.col("longitude")
                .cast(pl.Utf8, strict=False)
                .str.strip_chars()
                .cast(pl.Float64, strict=False)
                .alias("longitude"),
                pl.col("status")
                .cast(pl.Utf8, strict=False)
                .str.strip_chars()
                .str.to_lowercase()
                .alias("status"),
            )
            .filter(
                pl.col("meter_id").is_not_null()
                & (pl.col("meter_id").str.len_chars() > 0)
                & pl.col("latitude").is_between(-90.0, 90.0)
                & pl.col("longitude").is_between(-180.0, 180.0)
                & pl.col("status").is_in(known_statuses)
            )
            .unique(subset=["meter_id"], keep="first", maintain_order=True)
        )

        return normalized

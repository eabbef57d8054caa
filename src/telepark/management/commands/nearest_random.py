from __future__ import annotations

import random
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from telepark.services.selection import find_nearest, status_is
from telepark.services.types import GeoPoint, MeterRecord, MeterStatus, NearestMeter


def random_points(count: int, seed: int | None = None) -> list[GeoPoint]:
    rng = random.Random(seed)
    return [
        GeoPoint(latitude=rng.uniform(-90.0, 90.0), longitude=rng.uniform(-180.0, 180.0))
        for _ in range(count)
    ]


class Command(BaseCommand):
    help = "Find the nearest of a set of random coordinates to a reference point."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "--count",
            type=int,
            default=settings.NEAREST_RANDOM_COUNT,
            help="Number of random points to generate",
        )
        parser.add_argument("--seed", type=int, default=None, help="Random seed")
        parser.add_argument("--latitude", type=float, default=0.0, help="Reference latitude")
        parser.add_argument("--longitude", type=float, default=0.0, help="Reference longitude")

    def handle(self, *_: Any, **options: Any) -> None:
        count = options["count"]
        if count < 1:
            raise CommandError("--count must be at least 1")

        reference = GeoPoint(latitude=options["latitude"], longitude=options["longitude"])
        points = random_points(count, seed=options["seed"])
        candidates = [
            MeterRecord(meter_id=str(index), location=point, status=MeterStatus.AVAILABLE)
            for index, point in enumerate(points)
        ]

        result = find_nearest(reference, candidates, status_is(MeterStatus.AVAILABLE))
        assert isinstance(result, NearestMeter)

        nearest = result.meter.location
        self.stdout.write(
            self.style.SUCCESS(
                f"Nearest of {count} points to ({reference.latitude:.6f}, "
                f"{reference.longitude:.6f}): #{result.meter.meter_id} at "
                f"({nearest.latitude:.6f}, {nearest.longitude:.6f}), "
                f"{result.distance_km:.3f} km"
            )
        )

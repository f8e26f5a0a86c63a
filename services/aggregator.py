"""Summary statistics for a single sensor series."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping

from services.downsampler import point_value
from services.errors import MalformedSeriesPointError

logger = logging.getLogger(__name__)

SENSOR_UNITS: Dict[str, str] = {
    "ph": "",
    "turbidity": "NTU",
    "temperature": "°C",
    "accel_x": "m/s²",
    "accel_y": "m/s²",
    "accel_z": "m/s²",
    "speed": "m/s",
}


@dataclass
class SeriesStatistics:
    """Computed statistics for one sensor's readings."""

    sensor: str
    unit: str
    count: int = 0
    skipped: int = 0
    min_value: float | None = None
    max_value: float | None = None
    mean_value: float | None = None
    current: float | None = None


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation.

    Points without a finite numeric ``value`` are left out of the figures and
    counted in ``skipped``. ``current`` is the first usable point, since the
    sensor API delivers readings newest first.
    """

    def aggregate(self, points: Iterable[Mapping[str, Any]], sensor: str) -> SeriesStatistics:
        if sensor not in SENSOR_UNITS:
            raise ValueError(
                f"Unknown sensor {sensor!r}; expected one of {', '.join(SENSOR_UNITS)}."
            )

        stats = SeriesStatistics(sensor=sensor, unit=SENSOR_UNITS[sensor])
        total = 0.0

        for index, point in enumerate(points):
            try:
                value = point_value(point, index)
            except MalformedSeriesPointError as exc:
                stats.skipped += 1
                logger.debug(
                    "Leaving point out of statistics",
                    extra={"record_index": index, "reason": exc.reason},
                )
                continue

            stats.count += 1
            total += value

            if stats.current is None:
                stats.current = value
            if stats.min_value is None or value < stats.min_value:
                stats.min_value = value
            if stats.max_value is None or value > stats.max_value:
                stats.max_value = value

        if stats.count:
            stats.mean_value = total / stats.count

        return stats

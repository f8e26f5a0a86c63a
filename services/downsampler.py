"""Fixed-window averaging used to thin time series before charting."""

from __future__ import annotations

import logging
import math
from threading import Event
from typing import Any, Dict, Iterable, List, Mapping, Optional

from services.errors import (
    InvalidWindowSizeError,
    MalformedSeriesPointError,
    SamplingCancelledError,
)

logger = logging.getLogger(__name__)


def validate_window_size(window_size: Any) -> int:
    if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size < 1:
        raise InvalidWindowSizeError(window_size)
    return window_size


def window_size_for(length: int, max_points: Any) -> int:
    """Smallest window that brings ``length`` points down to at most ``max_points``."""
    limit = validate_window_size(max_points)
    return max(1, math.ceil(length / limit))


def point_value(point: Any, index: int) -> float:
    if not isinstance(point, Mapping):
        raise MalformedSeriesPointError(index, "expected an object")
    value = point.get("value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedSeriesPointError(index, "missing numeric value")
    if not math.isfinite(value):
        raise MalformedSeriesPointError(index, "value is not finite")
    return float(value)


class SeriesDownsampler:
    """Averages consecutive windows; each output keeps its window's first point fields."""

    def downsample(
        self,
        points: Iterable[Mapping[str, Any]],
        window_size: int,
        cancel_event: Optional[Event] = None,
    ) -> List[Dict[str, Any]]:
        size = validate_window_size(window_size)
        series = list(points)
        sampled: List[Dict[str, Any]] = []

        for start in range(0, len(series), size):
            if cancel_event is not None and cancel_event.is_set():
                raise SamplingCancelledError(
                    f"Sampling cancelled after {len(sampled)} of "
                    f"{math.ceil(len(series) / size)} windows."
                )

            batch = series[start : start + size]
            if not batch:
                logger.warning(
                    "Skipping empty sampling window",
                    extra={"record_index": start, "window_size": size},
                )
                continue

            total = 0.0
            for offset, point in enumerate(batch):
                total += point_value(point, start + offset)

            output = dict(batch[0])
            output["value"] = total / len(batch)
            sampled.append(output)

        logger.debug(
            "Downsampled series",
            extra={"point_count": len(series), "window_size": size},
        )
        return sampled

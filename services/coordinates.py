"""Conversion of raw sensor records into GeoJSON point features."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

from models.records import COORDINATE_FIELDS, CoordinateIssue, FeatureCollection, GeoFeature
from services.errors import MalformedCoordinateError
from settings import COORDINATE_POLICIES

logger = logging.getLogger(__name__)


def parse_coordinate(text: Any) -> float:
    """Parse a coordinate whose extra dots are digit-group separators.

    The first dot separates the integer part; every later dot is dropped, so
    ``"6.123.456"`` reads as ``6.123456`` and ``"6"`` as ``6.0``.
    """
    if not isinstance(text, str):
        raise MalformedCoordinateError(text)
    candidate = text.strip()
    if not candidate or "_" in candidate:
        raise MalformedCoordinateError(text)

    integer, _, remainder = candidate.partition(".")
    normalized = f"{integer}.{remainder.replace('.', '')}"
    try:
        value = float(normalized)
    except ValueError as exc:
        raise MalformedCoordinateError(text) from exc

    if not math.isfinite(value):
        raise MalformedCoordinateError(text)
    return value


class CoordinateNormalizer:
    """Turns sensor records into a feature collection, preserving record order."""

    def __init__(self, policy: str = "abort") -> None:
        if policy not in COORDINATE_POLICIES:
            raise ValueError(
                f"Unknown coordinate error policy {policy!r}; "
                f"expected one of {', '.join(COORDINATE_POLICIES)}."
            )
        self.policy = policy

    def normalize(self, records: Iterable[Mapping[str, Any]]) -> FeatureCollection:
        collection = FeatureCollection()

        for index, record in enumerate(records):
            try:
                latitude = self._read_coordinate(record, "lat", index)
                longitude = self._read_coordinate(record, "lon", index)
            except MalformedCoordinateError as exc:
                if self.policy == "abort":
                    raise
                logger.warning(
                    "Skipping record with malformed coordinate",
                    extra={
                        "record_index": index,
                        "field": exc.field,
                        "invalid_value": exc.value,
                    },
                )
                collection.issues.append(
                    CoordinateIssue(index=index, field=exc.field or "", reason=str(exc))
                )
                continue

            properties = {
                key: value for key, value in record.items() if key not in COORDINATE_FIELDS
            }
            collection.features.append(
                GeoFeature(longitude=longitude, latitude=latitude, properties=properties)
            )

        logger.info(
            "Normalized sensor coordinates",
            extra={
                "feature_count": len(collection.features),
                "reason": f"{len(collection.issues)} skipped" if collection.issues else None,
            },
        )
        return collection

    @staticmethod
    def _read_coordinate(record: Mapping[str, Any], field: str, index: int) -> float:
        try:
            return parse_coordinate(record.get(field))
        except MalformedCoordinateError as exc:
            raise exc.at(index, field) from exc

"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

COORDINATE_FIELDS = ("lat", "lon")


@dataclass(frozen=True, slots=True)
class GeoFeature:
    """A point feature built from one sensor record."""

    longitude: float
    latitude: float
    properties: Mapping[str, Any]

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": [self.longitude, self.latitude],
            },
            "properties": dict(self.properties),
        }


@dataclass(frozen=True, slots=True)
class CoordinateIssue:
    """A record left out of a collection because its coordinates were unusable."""

    index: int
    field: str
    reason: str


@dataclass(slots=True)
class FeatureCollection:
    """Ordered features, one per accepted input record."""

    features: List[GeoFeature] = field(default_factory=list)
    issues: List[CoordinateIssue] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.features)

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "features": [feature.to_geojson() for feature in self.features],
        }

"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SensorRecord(BaseModel):
    """One raw reading as delivered by the sensor API."""

    model_config = ConfigDict(extra="allow")

    id_ph: Any = Field(default=None, description="Reading identifier.")
    id_lokasi: Any = Field(default=None, description="Location identifier.")
    tanggal: Any = Field(default=None, description="Reading timestamp.")
    lat: str = Field(..., description="Latitude; dots after the first group digits.")
    lon: str = Field(..., description="Longitude; dots after the first group digits.")
    nilai_ph: Any = None
    nilai_turbidity: Any = None
    nilai_temperature: Any = None
    nilai_accel_x: Any = None
    nilai_accel_y: Any = None
    nilai_accel_z: Any = None


class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(..., min_length=2, max_length=2)


class Feature(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: PointGeometry
    properties: Dict[str, Any] = Field(default_factory=dict)


class CoordinateIssueOut(BaseModel):
    """A record dropped from the collection under the ``skip`` policy."""

    index: int = Field(..., ge=0)
    field: str
    reason: str


class FeatureCollectionOut(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)
    errors: List[CoordinateIssueOut] = Field(default_factory=list)


class SamplingConfig(BaseModel):
    """Window configuration; an explicit interval wins over ``MAX_POINTS``."""

    SAMPLING_INTERVAL: Optional[int] = Field(
        default=None, description="Number of consecutive points averaged into one."
    )
    MAX_POINTS: Optional[int] = Field(
        default=None, description="Derive the interval so at most this many points remain."
    )


class SamplingRequest(BaseModel):
    rawData: List[Dict[str, Any]] = Field(default_factory=list)
    config: SamplingConfig = Field(default_factory=SamplingConfig)


class StatisticsRequest(BaseModel):
    rawData: List[Dict[str, Any]] = Field(default_factory=list)
    sensor: str = Field(..., description="Sensor type, e.g. 'ph' or 'turbidity'.")


class SeriesStatisticsOut(BaseModel):
    sensor: str
    unit: str
    count: int = Field(..., ge=0)
    skipped: int = Field(default=0, ge=0)
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    mean_value: Optional[float] = None
    current: Optional[float] = None


class WaterQualityRequest(BaseModel):
    ph: float
    turbidity: float


class WaterQualityOut(BaseModel):
    score: int = Field(..., ge=0, le=100)
    label: str
    color: str

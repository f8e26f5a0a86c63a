"""HTTP route definitions for the service."""

from __future__ import annotations

import asyncio
from concurrent.futures import Future
from typing import Any, Dict, List, TypeVar

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import (
    CoordinateIssueOut,
    FeatureCollectionOut,
    SamplingRequest,
    SensorRecord,
    SeriesStatisticsOut,
    StatisticsRequest,
    WaterQualityOut,
    WaterQualityRequest,
)
from services.errors import SamplingCancelledError
from services.water_quality import score_water_quality
from services.worker import WorkerService, build_default_worker

router = APIRouter()

T = TypeVar("T")


def get_worker() -> WorkerService:
    return build_default_worker()


async def _await_worker(future: Future[T]) -> T:
    try:
        return await asyncio.wrap_future(future)
    except SamplingCancelledError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


@router.post(
    "/workers/geojson",
    response_model=FeatureCollectionOut,
    summary="Convert raw sensor records into a GeoJSON feature collection.",
)
async def convert_to_geojson(
    records: List[SensorRecord],
    worker: WorkerService = Depends(get_worker),
) -> FeatureCollectionOut:
    payload = [record.model_dump(exclude_unset=True) for record in records]
    collection = await _await_worker(worker.submit_geojson(payload))
    return FeatureCollectionOut(
        features=collection.to_geojson()["features"],
        errors=[
            CoordinateIssueOut(index=issue.index, field=issue.field, reason=issue.reason)
            for issue in collection.issues
        ],
    )


@router.post(
    "/workers/sample",
    response_model=List[Dict[str, Any]],
    summary="Average a raw series into fixed-size windows for charting.",
)
async def sample_series(
    request: SamplingRequest,
    worker: WorkerService = Depends(get_worker),
) -> List[Dict[str, Any]]:
    try:
        future = worker.submit_sampling(
            request.rawData, request.config.model_dump(exclude_none=True)
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return await _await_worker(future)


@router.post(
    "/series/statistics",
    response_model=SeriesStatisticsOut,
    summary="Summarize a sensor series with min, max, mean and current value.",
)
async def series_statistics(
    request: StatisticsRequest,
    worker: WorkerService = Depends(get_worker),
) -> SeriesStatisticsOut:
    stats = await _await_worker(worker.submit_statistics(request.rawData, request.sensor))
    return SeriesStatisticsOut(
        sensor=stats.sensor,
        unit=stats.unit,
        count=stats.count,
        skipped=stats.skipped,
        min_value=stats.min_value,
        max_value=stats.max_value,
        mean_value=stats.mean_value,
        current=stats.current,
    )


@router.post(
    "/water-quality",
    response_model=WaterQualityOut,
    summary="Score water quality from pH and turbidity readings.",
)
async def water_quality(request: WaterQualityRequest) -> WaterQualityOut:
    result = score_water_quality(request.ph, request.turbidity)
    return WaterQualityOut(score=result.score, label=result.label, color=result.color)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}

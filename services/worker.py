"""Background execution of the coordinate and series workers."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from functools import lru_cache
from threading import Event, Lock
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence
from uuid import uuid4

from models.records import FeatureCollection
from services.aggregator import Aggregator, SeriesStatistics
from services.coordinates import CoordinateNormalizer
from services.downsampler import SeriesDownsampler, validate_window_size, window_size_for
from services.errors import WorkerError
from settings import get_settings

logger = logging.getLogger(__name__)


def _snapshot(items: Iterable[Any]) -> List[Any]:
    return [dict(item) if isinstance(item, Mapping) else item for item in items]


class WorkerService:
    """Runs each payload as one independent task and hands back a single future."""

    def __init__(
        self,
        normalizer: CoordinateNormalizer,
        downsampler: SeriesDownsampler,
        aggregator: Aggregator,
        workers: int = 4,
        default_sampling_interval: int = 10,
    ) -> None:
        self.normalizer = normalizer
        self.downsampler = downsampler
        self.aggregator = aggregator
        self.default_sampling_interval = validate_window_size(default_sampling_interval)
        self.executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sensor-worker")
        self._futures: Dict[str, Future[Any]] = {}
        self._futures_lock = Lock()
        self._cancel = Event()

    @property
    def in_flight(self) -> int:
        with self._futures_lock:
            return len(self._futures)

    def submit_geojson(self, records: Iterable[Mapping[str, Any]]) -> Future[FeatureCollection]:
        """Schedule conversion of sensor records into a feature collection."""
        return self._submit("geojson", self.normalizer.normalize, _snapshot(records))

    def submit_sampling(
        self,
        raw_data: Iterable[Mapping[str, Any]],
        config: Optional[Mapping[str, Any]] = None,
    ) -> Future[List[Dict[str, Any]]]:
        """Schedule window averaging of a series.

        The window size is resolved and validated here, so configuration
        errors surface to the caller before any task is scheduled.
        """
        series = _snapshot(raw_data)
        window_size = self.resolve_window_size(series, config or {})
        return self._submit(
            "sample",
            self.downsampler.downsample,
            series,
            window_size,
            self._cancel,
            window_size=window_size,
        )

    def submit_statistics(
        self, raw_data: Iterable[Mapping[str, Any]], sensor: str
    ) -> Future[SeriesStatistics]:
        return self._submit("statistics", self.aggregator.aggregate, _snapshot(raw_data), sensor)

    def resolve_window_size(self, series: Sequence[Any], config: Mapping[str, Any]) -> int:
        interval = config.get("SAMPLING_INTERVAL")
        if interval is not None:
            return validate_window_size(interval)
        max_points = config.get("MAX_POINTS")
        if max_points is not None:
            return window_size_for(len(series), max_points)
        return self.default_sampling_interval

    def shutdown(self) -> None:
        """Ask running tasks to stop and release executor resources."""
        self._cancel.set()
        self.executor.shutdown(wait=False, cancel_futures=True)

    def _submit(
        self,
        kind: str,
        func: Callable[..., Any],
        *args: Any,
        window_size: Optional[int] = None,
    ) -> Future[Any]:
        job_id = str(uuid4())
        payload = args[0]
        logger.debug(
            "Dispatching %s job",
            kind,
            extra={"job_id": job_id, "point_count": len(payload), "window_size": window_size},
        )
        future = self.executor.submit(self._run, job_id, kind, func, *args)
        with self._futures_lock:
            self._futures[job_id] = future
        future.add_done_callback(lambda _f, jid=job_id: self._clear_future(jid))
        return future

    def _clear_future(self, job_id: str) -> None:
        with self._futures_lock:
            self._futures.pop(job_id, None)

    @staticmethod
    def _run(job_id: str, kind: str, func: Callable[..., Any], *args: Any) -> Any:
        start_time = time.perf_counter()
        try:
            result = func(*args)
        except WorkerError as exc:
            logger.warning(
                "%s job failed",
                kind,
                extra={
                    "job_id": job_id,
                    "reason": str(exc),
                    "processing_ms": int((time.perf_counter() - start_time) * 1000),
                },
            )
            raise
        logger.info(
            "%s job finished",
            kind,
            extra={
                "job_id": job_id,
                "processing_ms": int((time.perf_counter() - start_time) * 1000),
            },
        )
        return result


@lru_cache
def build_default_worker(workers: Optional[int] = None) -> WorkerService:
    """Factory that wires the workers from environment settings."""
    settings = get_settings()
    return WorkerService(
        normalizer=CoordinateNormalizer(policy=settings.coordinate_error_policy),
        downsampler=SeriesDownsampler(),
        aggregator=Aggregator(),
        workers=workers or settings.worker_count,
        default_sampling_interval=settings.default_sampling_interval,
    )

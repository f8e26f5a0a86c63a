from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_WORKER_COUNT_ENV = "SENSOR_WORKER_COUNT"
_LOG_LEVEL_ENV = "LOG_LEVEL"
_SAMPLING_INTERVAL_ENV = "DEFAULT_SAMPLING_INTERVAL"
_COORDINATE_POLICY_ENV = "COORDINATE_ERROR_POLICY"

COORDINATE_POLICIES = ("abort", "skip")


@dataclass(frozen=True)
class Settings:
    worker_count: int
    log_level: str
    default_sampling_interval: int
    coordinate_error_policy: str


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


def _read_coordinate_policy(default: str) -> str:
    value = os.getenv(_COORDINATE_POLICY_ENV)
    if value is None:
        return default
    candidate = value.strip().lower()
    return candidate if candidate in COORDINATE_POLICIES else default


@lru_cache
def get_settings() -> Settings:
    return Settings(
        worker_count=_read_positive_int(_WORKER_COUNT_ENV, 4),
        log_level=_read_log_level("INFO"),
        default_sampling_interval=_read_positive_int(_SAMPLING_INTERVAL_ENV, 10),
        coordinate_error_policy=_read_coordinate_policy("abort"),
    )

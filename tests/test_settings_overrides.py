from __future__ import annotations

from typing import Iterable

from services.worker import build_default_worker
from settings import get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_WORKER_COUNT", "2")
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    monkeypatch.setenv("DEFAULT_SAMPLING_INTERVAL", "25")
    monkeypatch.setenv("COORDINATE_ERROR_POLICY", "SKIP")

    caches = (get_settings, build_default_worker)
    _clear_caches(caches)

    settings = get_settings()
    worker = build_default_worker()

    try:
        assert settings.log_level == "DEBUG"
        assert worker.executor._max_workers == 2
        assert worker.default_sampling_interval == 25
        assert worker.normalizer.policy == "skip"
    finally:
        worker.shutdown()
        _clear_caches(caches)


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_WORKER_COUNT", "zero")
    monkeypatch.setenv("DEFAULT_SAMPLING_INTERVAL", "-4")
    monkeypatch.setenv("COORDINATE_ERROR_POLICY", "nan")
    monkeypatch.setenv("LOG_LEVEL", "   ")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.worker_count == 4
        assert settings.default_sampling_interval == 10
        assert settings.coordinate_error_policy == "abort"
        assert settings.log_level == "INFO"
    finally:
        get_settings.cache_clear()

from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("services.worker", logging.INFO, __file__, 1, "sample job finished", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_context() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    output = formatter.format(_record(job_id="abc", processing_ms=12, window_size=None))

    assert output == "sample job finished | job_id=abc processing_ms=12"


def test_formatter_ignores_unknown_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["job_id"])

    output = formatter.format(_record(unrelated="x"))

    assert output == "sample job finished"

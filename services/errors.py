"""Error taxonomy for the sensor workers."""

from __future__ import annotations

from typing import Any


class WorkerError(ValueError):
    """Base class for failures a worker reports back to its caller."""


class MalformedCoordinateError(WorkerError):
    """A latitude/longitude string could not be turned into a number."""

    def __init__(self, value: Any, field: str | None = None, index: int | None = None) -> None:
        self.value = value
        self.field = field
        self.index = index
        location = ""
        if index is not None:
            location = f" in record {index}"
        if field is not None:
            location = f"{location} field {field!r}"
        super().__init__(f"Malformed coordinate {value!r}{location}.")

    def at(self, index: int, field: str) -> "MalformedCoordinateError":
        """Return a copy of this error tagged with the offending record position."""
        return MalformedCoordinateError(self.value, field=field, index=index)


class InvalidWindowSizeError(WorkerError):
    """Sampling window size is not a positive integer."""

    def __init__(self, window_size: Any) -> None:
        self.window_size = window_size
        super().__init__(
            f"Sampling window size must be a positive integer, got {window_size!r}."
        )


class MalformedSeriesPointError(WorkerError):
    """A series point is missing a numeric ``value``."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Series point {index} is invalid: {reason}.")


class SamplingCancelledError(WorkerError):
    """Sampling stopped because cancellation was requested."""

from __future__ import annotations

from typing import Any, Dict, List

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the sensor worker service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def to_geojson(self, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._post("/workers/geojson", records)

    def sample(self, raw_data: List[Dict[str, Any]], config: Dict[str, int]) -> List[Dict[str, Any]]:
        return self._post("/workers/sample", {"rawData": raw_data, "config": config})

    def statistics(self, raw_data: List[Dict[str, Any]], sensor: str) -> Dict[str, Any]:
        return self._post("/series/statistics", {"rawData": raw_data, "sensor": sensor})

    def water_quality(self, ph: float, turbidity: float) -> Dict[str, Any]:
        return self._post("/water-quality", {"ph": ph, "turbidity": turbidity})

    def _post(self, path: str, payload: Any) -> Any:
        try:
            response = self._client.post(path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.TransportError as exc:
            typer.secho(
                f"Could not reach {self._config.base_url}: {exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1) from exc
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: Any = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

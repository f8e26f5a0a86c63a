from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import (
    echo_json,
    render_feature_collection,
    render_sampled_series,
    render_statistics,
    render_water_quality,
)


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the sensor worker service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


def _load_records(path: Path) -> List[Dict[str, Any]]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{path} is not valid JSON: {exc.msg}.") from exc
    if isinstance(payload, dict) and isinstance(payload.get("rawData"), list):
        payload = payload["rawData"]
    if not isinstance(payload, list):
        raise typer.BadParameter(f"{path} must contain a JSON array of objects.")
    return payload


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for a worker response.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("geojson")
def geojson_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="JSON array of sensor records."),
    raw: bool = typer.Option(False, "--json", help="Print the feature collection as JSON."),
) -> None:
    """Convert sensor records into a GeoJSON feature collection."""
    state = _get_state(ctx)
    payload = state.client.to_geojson(_load_records(file))
    if raw:
        echo_json(payload)
        return
    render_feature_collection(payload)


@app.command("sample")
def sample_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="JSON array of series points."),
    interval: Optional[int] = typer.Option(
        None,
        "--interval",
        "-n",
        help="Number of consecutive points averaged into one.",
    ),
    max_points: Optional[int] = typer.Option(
        None,
        "--max-points",
        help="Derive the interval so at most this many points remain.",
    ),
    raw: bool = typer.Option(False, "--json", help="Print the sampled series as JSON."),
) -> None:
    """Downsample a series by averaging fixed-size windows."""
    state = _get_state(ctx)
    config: Dict[str, int] = {}
    if interval is not None:
        config["SAMPLING_INTERVAL"] = interval
    if max_points is not None:
        config["MAX_POINTS"] = max_points
    points = state.client.sample(_load_records(file), config)
    if raw:
        echo_json(points)
        return
    render_sampled_series(points)


@app.command("stats")
def stats_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="JSON array of series points."),
    sensor: str = typer.Option(..., "--sensor", "-s", help="Sensor type, e.g. ph or turbidity."),
) -> None:
    """Show min, max, mean and current value of a series."""
    state = _get_state(ctx)
    render_statistics(state.client.statistics(_load_records(file), sensor))


@app.command("quality")
def quality_command(
    ctx: typer.Context,
    ph: float = typer.Option(..., "--ph", help="Latest pH reading."),
    turbidity: float = typer.Option(..., "--turbidity", help="Latest turbidity reading in NTU."),
) -> None:
    """Score water quality from a pH and turbidity reading."""
    state = _get_state(ctx)
    render_water_quality(state.client.water_quality(ph, turbidity))

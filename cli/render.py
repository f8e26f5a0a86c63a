from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def render_feature_collection(payload: Dict[str, Any]) -> None:
    features = payload.get("features") or []
    echo_heading("Features")
    typer.echo(f"feature_count: {len(features)}")
    for feature in features:
        lon, lat = feature["geometry"]["coordinates"]
        label = feature.get("properties", {}).get("id_ph", "-")
        typer.echo(f"  - {label}: lon={lon} lat={lat}")

    errors = payload.get("errors") or []
    typer.echo()
    echo_heading("Skipped records")
    if errors:
        for error in errors:
            typer.echo(f"  - record {error.get('index')}: {error.get('reason')}")
    else:
        typer.echo("No records skipped.")


def render_sampled_series(points: List[Dict[str, Any]]) -> None:
    echo_heading("Sampled series")
    typer.echo(f"point_count: {len(points)}")
    for point in points:
        timestamp = point.get("timestamp") or point.get("tanggal") or "-"
        typer.echo(f"  - {timestamp}: {point.get('value')}")


def render_statistics(payload: Dict[str, Any]) -> None:
    unit = payload.get("unit") or ""
    echo_heading(f"Statistics for {payload.get('sensor')}")
    echo_key_values(
        [
            ("count", payload.get("count")),
            ("skipped", payload.get("skipped", 0)),
            ("min", _with_unit(payload.get("min_value"), unit)),
            ("max", _with_unit(payload.get("max_value"), unit)),
            ("mean", _with_unit(payload.get("mean_value"), unit)),
            ("current", _with_unit(payload.get("current"), unit)),
        ]
    )


def render_water_quality(payload: Dict[str, Any]) -> None:
    echo_heading("Water quality")
    echo_key_values(
        [
            ("score", payload.get("score")),
            ("label", payload.get("label")),
        ]
    )


def _with_unit(value: Any, unit: str) -> str:
    if value is None:
        return "N/A"
    formatted = f"{value:.2f}"
    return f"{formatted} {unit}" if unit else formatted

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List

import typer

_SEVERITY_COLORS = {
    "low": typer.colors.GREEN,
    "moderate": typer.colors.YELLOW,
    "high": typer.colors.RED,
    "dangerous": typer.colors.MAGENTA,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _format_time(timestamp_ms: Any) -> str:
    if not isinstance(timestamp_ms, (int, float)):
        return "-"
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M")


def render_readings(readings: List[Dict[str, Any]], limit: int | None = None) -> None:
    echo_heading(f"Readings ({len(readings)})")
    if not readings:
        typer.echo("No readings matched.")
        return
    shown = readings if limit is None else readings[:limit]
    for reading in shown:
        typer.echo(
            f"  {_format_time(reading.get('timestamp'))}  "
            f"{reading.get('decibel'):>5} dB  "
            f"{reading.get('location_name') or 'Unknown'} "
            f"({reading.get('latitude'):.4f}, {reading.get('longitude'):.4f})"
        )
    if len(shown) < len(readings):
        typer.echo(f"  ... {len(readings) - len(shown)} more")


def render_hotspots(hotspots: List[Dict[str, Any]]) -> None:
    echo_heading(f"Hotspots ({len(hotspots)})")
    if not hotspots:
        typer.echo("No hotspots found.")
        return
    for hotspot in hotspots:
        severity = hotspot.get("severity") or "low"
        typer.secho(
            f"  {hotspot.get('id')}: {hotspot.get('location_name') or 'Unknown'} "
            f"avg {hotspot.get('average_decibel'):.1f} dB "
            f"over {hotspot.get('reading_count')} readings [{severity}]",
            fg=_SEVERITY_COLORS.get(severity),
        )


def render_analytics(payload: Dict[str, Any]) -> None:
    stats = payload.get("statistics") or {}
    echo_heading("Statistics")
    echo_key_values(
        [
            ("readings", stats.get("count")),
            ("average", f"{stats.get('average')} dB"),
            ("minimum", f"{stats.get('minimum')} dB"),
            ("maximum", f"{stats.get('maximum')} dB"),
        ]
    )

    analysis = payload.get("analysis") or {}
    typer.echo()
    echo_heading("Pattern")
    echo_key_values(
        [
            ("type", analysis.get("pattern_type")),
            ("confidence", f"{analysis.get('confidence')}%"),
            ("insight", analysis.get("insight")),
        ]
    )

    health = payload.get("health") or {}
    typer.echo()
    echo_heading("Health Impact")
    echo_key_values(
        [
            ("risk_level", health.get("risk_level")),
            ("summary", health.get("summary")),
        ]
    )
    for recommendation in health.get("recommendations") or []:
        typer.echo(f"  - {recommendation}")

    prediction = payload.get("prediction") or []
    typer.echo()
    echo_heading("Next 24h Prediction")
    if prediction:
        typer.echo("  " + " ".join(f"{hour:02d}h:{value}" for hour, value in enumerate(prediction)))
    else:
        typer.echo("No prediction available.")


def render_contacts(payload: Dict[str, Any]) -> None:
    echo_heading("Report Noise Pollution")
    echo_key_values(
        [
            ("location", payload.get("location_name")),
            ("state", payload.get("state")),
        ]
    )
    for org in payload.get("organizations") or []:
        typer.echo()
        typer.secho(f"{org.get('name')} ({org.get('type')})", bold=True)
        echo_key_values(
            [
                ("  address", org.get("address")),
                ("  phone", org.get("phone")),
                ("  email", org.get("email")),
                ("  website", org.get("website")),
            ]
        )

    checklist = payload.get("checklist") or []
    if checklist:
        typer.echo()
        echo_heading("Include in your complaint")
        for item in checklist:
            typer.echo(f"  - {item}")


def render_reading(payload: Dict[str, Any]) -> None:
    echo_heading("Submitted Reading")
    echo_key_values(
        [
            ("id", payload.get("id")),
            ("decibel", payload.get("decibel")),
            ("latitude", payload.get("latitude")),
            ("longitude", payload.get("longitude")),
            ("device_type", payload.get("device_type")),
            ("timestamp", _format_time(payload.get("timestamp"))),
        ]
    )

from __future__ import annotations

import random
import time
from dataclasses import asdict, dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import (
    render_analytics,
    render_contacts,
    render_hotspots,
    render_reading,
    render_readings,
)
from models.records import UserLocation
from services.generator import current_time_ms
from services.meter import MeterSession, simulate_sample


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the noise map service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


def _check_pair(latitude: Optional[float], longitude: Optional[float]) -> None:
    if (latitude is None) != (longitude is None):
        raise typer.BadParameter("--lat and --lng must be given together.")


LatOption = typer.Option(None, "--lat", help="Centre latitude.")
LngOption = typer.Option(None, "--lng", help="Centre longitude.")


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Noise map API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="HTTP timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("readings")
def readings_command(
    ctx: typer.Context,
    latitude: Optional[float] = LatOption,
    longitude: Optional[float] = LngOption,
    radius_km: Optional[float] = typer.Option(None, "--radius", help="Radius in km around the centre."),
    min_decibel: float = typer.Option(0.0, "--min-db", help="Inclusive lower bound."),
    max_decibel: float = typer.Option(150.0, "--max-db", help="Inclusive upper bound."),
    limit: int = typer.Option(20, "--limit", min=1, help="Rows to print."),
) -> None:
    """List generated readings, newest first."""
    _check_pair(latitude, longitude)
    state = _get_state(ctx)
    readings = state.client.list_readings(
        latitude=latitude,
        longitude=longitude,
        radius_km=radius_km,
        min_decibel=min_decibel,
        max_decibel=max_decibel,
    )
    render_readings(readings, limit=limit)


@app.command("hotspots")
def hotspots_command(
    ctx: typer.Context,
    latitude: Optional[float] = LatOption,
    longitude: Optional[float] = LngOption,
    radius_km: Optional[float] = typer.Option(None, "--radius", help="Local radius in km."),
) -> None:
    """Show noise hotspots."""
    _check_pair(latitude, longitude)
    state = _get_state(ctx)
    hotspots = state.client.list_hotspots(
        latitude=latitude, longitude=longitude, radius_km=radius_km
    )
    render_hotspots(hotspots)


@app.command("analytics")
def analytics_command(
    ctx: typer.Context,
    latitude: Optional[float] = LatOption,
    longitude: Optional[float] = LngOption,
    radius_km: Optional[float] = typer.Option(None, "--radius", help="Radius in km."),
) -> None:
    """Show pattern analysis, health impact and prediction for an area."""
    _check_pair(latitude, longitude)
    state = _get_state(ctx)
    payload = state.client.get_analytics(
        latitude=latitude, longitude=longitude, radius_km=radius_km
    )
    render_analytics(payload)


@app.command("contacts")
def contacts_command(
    ctx: typer.Context,
    latitude: float = typer.Option(..., "--lat", help="Your latitude."),
    longitude: float = typer.Option(..., "--lng", help="Your longitude."),
) -> None:
    """List organizations that accept noise-pollution complaints near you."""
    state = _get_state(ctx)
    render_contacts(state.client.get_contacts(latitude, longitude))


@app.command("submit")
def submit_command(
    ctx: typer.Context,
    latitude: float = typer.Option(..., "--lat"),
    longitude: float = typer.Option(..., "--lng"),
    decibel: float = typer.Option(..., "--decibel", "-d"),
    device_type: str = typer.Option("mobile", "--device-type"),
) -> None:
    """Submit a reading you measured."""
    state = _get_state(ctx)
    payload = state.client.submit_reading(
        {
            "latitude": latitude,
            "longitude": longitude,
            "decibel": decibel,
            "timestamp": current_time_ms(),
            "device_type": device_type,
        }
    )
    typer.secho(f"Reading accepted. id={payload['id']}", fg=typer.colors.GREEN)


@app.command("measure")
def measure_command(
    ctx: typer.Context,
    seconds: int = typer.Option(10, "--seconds", "-s", min=1, help="Samples to record."),
    interval: float = typer.Option(1.0, "--interval", min=0.0, help="Seconds between samples."),
    latitude: Optional[float] = LatOption,
    longitude: Optional[float] = LngOption,
    submit: bool = typer.Option(
        False,
        "--submit/--no-submit",
        help="Submit the session average when recording finishes.",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the simulated microphone."),
) -> None:
    """Record with the simulated noise meter."""
    _check_pair(latitude, longitude)
    rng = random.Random(seed)
    session = MeterSession()
    if latitude is not None and longitude is not None:
        session.location = UserLocation(latitude=latitude, longitude=longitude)

    for index in range(seconds):
        if index and interval:
            time.sleep(interval)
        session.record(simulate_sample(rng))
        typer.echo(f"{session.elapsed_seconds:>3}s  {session.current:>3} dB  {session.level}")

    typer.echo()
    typer.echo(f"Average: {session.average} dB  Maximum: {session.maximum} dB")

    if not submit:
        return

    try:
        reading = session.to_submission()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    state = _get_state(ctx)
    payload = asdict(reading)
    payload.pop("id")
    render_reading(state.client.submit_reading(payload))

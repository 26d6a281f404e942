"""Greedy spatial clustering of readings into hotspots."""

from __future__ import annotations

from typing import Iterable, List, Literal, Sequence, Set

from models.records import Hotspot, NoiseReading
from services.geodesy import distance_km

CLUSTER_RADIUS_KM = 2.0
HOTSPOT_DISPLAY_RADIUS = 500.0

Severity = Literal["low", "moderate", "high", "dangerous"]

_SEVERITY_COLORS = {
    "low": "#22c55e",
    "moderate": "#f59e0b",
    "high": "#ef4444",
    "dangerous": "#7f1d1d",
}


def build_hotspots(readings: Sequence[NoiseReading]) -> List[Hotspot]:
    """Partition readings into hotspots in a single greedy pass.

    Each still-unassigned reading seeds a hotspot made of itself plus every
    other unassigned reading within 2 km of it. Neighbours of neighbours are
    not chained in, so the outcome depends on input order. Output order
    follows the seed readings.
    """
    hotspots: List[Hotspot] = []
    assigned: Set[str] = set()

    for seed in readings:
        if seed.id in assigned:
            continue

        members = [seed]
        for other in readings:
            if other.id == seed.id or other.id in assigned:
                continue
            distance = distance_km(
                seed.latitude, seed.longitude, other.latitude, other.longitude
            )
            if distance <= CLUSTER_RADIUS_KM:
                members.append(other)

        assigned.update(member.id for member in members)
        count = len(members)
        hotspots.append(
            Hotspot(
                id=f"hotspot-{len(hotspots) + 1}",
                latitude=sum(member.latitude for member in members) / count,
                longitude=sum(member.longitude for member in members) / count,
                average_decibel=sum(member.decibel for member in members) / count,
                reading_count=count,
                radius=HOTSPOT_DISPLAY_RADIUS,
                location_name=seed.location_name,
            )
        )

    return hotspots


def merge_unique(*batches: Iterable[NoiseReading]) -> List[NoiseReading]:
    """Concatenate batches, keeping the first reading seen for each id."""
    seen: Set[str] = set()
    merged: List[NoiseReading] = []
    for batch in batches:
        for reading in batch:
            if reading.id in seen:
                continue
            seen.add(reading.id)
            merged.append(reading)
    return merged


def severity_level(decibel: float) -> Severity:
    if decibel < 70:
        return "low"
    if decibel < 85:
        return "moderate"
    if decibel < 100:
        return "high"
    return "dangerous"


def severity_color(level: str) -> str:
    return _SEVERITY_COLORS.get(level, _SEVERITY_COLORS["low"])

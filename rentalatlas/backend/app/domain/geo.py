# app/domain/geo.py
"""
Static coordinate fallbacks used when the geocoder returns nothing.

The centroids are approximate. Jitter spreads records that share a centroid so
map pins do not stack; it is a display heuristic, not precision, and it never
feeds into identifiers.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol

from .types import Coordinates

DEFAULT_FALLBACK_ZIP = "95928"
DEFAULT_FALLBACK_CITY = "Chico"

ZIP_JITTER = 0.008
CITY_JITTER = 0.012
MANUAL_ENTRY_JITTER = 0.02

ZIP_CENTROIDS: dict[str, tuple[float, float]] = {
    "95926": (39.7285, -121.8375),
    "95928": (39.7156, -121.8089),
    "95973": (39.7567, -121.8234),
    "95969": (39.7534, -121.6078),
    "95965": (39.5134, -121.5567),
    "95966": (39.5078, -121.5423),
    "95948": (39.3638, -121.6936),
    "95917": (39.4127, -121.7128),
    "95938": (39.6460, -121.7997),
    "95954": (39.8121, -121.5783),
}

CITY_CENTROIDS: dict[str, tuple[float, float]] = {
    "Chico": (39.7285, -121.8375),
    "Paradise": (39.7534, -121.6078),
    "Oroville": (39.5134, -121.5567),
    "Gridley": (39.3638, -121.6936),
    "Biggs": (39.4127, -121.7128),
    "Durham": (39.6460, -121.7997),
    "Magalia": (39.8121, -121.5783),
}

# Manual entry carries a ZIP with each city since the form does not ask for one.
MANUAL_ENTRY_CITIES: dict[str, tuple[float, float, str]] = {
    "Chico": (39.7285, -121.8375, "95926"),
    "Paradise": (39.7596, -121.6219, "95969"),
    "Oroville": (39.5138, -121.5564, "95965"),
    "Gridley": (39.3638, -121.6936, "95948"),
    "Biggs": (39.4124, -121.7129, "95917"),
    "Durham": (39.6463, -121.7997, "95938"),
    "Magalia": (39.8118, -121.5783, "95954"),
    "Palermo": (39.4333, -121.5333, "95968"),
    "Thermalito": (39.5069, -121.5877, "95965"),
}


class Jitter(Protocol):
    def offset(self, magnitude: float) -> float:
        ...


@dataclass
class UniformJitter:
    """Offset uniformly distributed in [-magnitude/2, magnitude/2)."""

    rng: random.Random

    @classmethod
    def seeded(cls, seed: int | None = None) -> "UniformJitter":
        return cls(rng=random.Random(seed))

    def offset(self, magnitude: float) -> float:
        return (self.rng.random() - 0.5) * magnitude


class NoJitter:
    def offset(self, magnitude: float) -> float:
        return 0.0


def jitter_from_settings(enabled: bool) -> Jitter:
    return UniformJitter.seeded() if enabled else NoJitter()


def _spread(center: tuple[float, float], jitter: Jitter, magnitude: float) -> Coordinates:
    lat, lng = center[0], center[1]
    return Coordinates(latitude=lat + jitter.offset(magnitude), longitude=lng + jitter.offset(magnitude))


def zip_fallback(zip_code: str | None, jitter: Jitter) -> Coordinates:
    """Always returns coordinates: unknown ZIPs use the designated default."""
    center = ZIP_CENTROIDS.get(zip_code or "") or ZIP_CENTROIDS[DEFAULT_FALLBACK_ZIP]
    return _spread(center, jitter, ZIP_JITTER)


def city_fallback(city: str | None, jitter: Jitter) -> Coordinates:
    """Always returns coordinates: unknown cities use the designated default."""
    center = CITY_CENTROIDS.get(city or "") or CITY_CENTROIDS[DEFAULT_FALLBACK_CITY]
    return _spread(center, jitter, CITY_JITTER)


def known_city_fallback(city: str | None, jitter: Jitter) -> Coordinates | None:
    """Like city_fallback but without the default; unknown city -> None."""
    center = CITY_CENTROIDS.get(city or "")
    if center is None:
        return None
    return _spread(center, jitter, CITY_JITTER)


def manual_entry_location(city: str, jitter: Jitter) -> tuple[Coordinates, str]:
    lat, lng, zip_code = MANUAL_ENTRY_CITIES.get(city) or MANUAL_ENTRY_CITIES[DEFAULT_FALLBACK_CITY]
    return _spread((lat, lng), jitter, MANUAL_ENTRY_JITTER), zip_code

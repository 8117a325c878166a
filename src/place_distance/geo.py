"""Geographic utility functions. Pure Python, no external deps."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0
KM_TO_MILES = 0.621371

UNITS = ("km", "miles")


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points on Earth in kilometers.

    Uses the Haversine formula. Inputs are WGS84 decimal degrees and are not
    range-checked. Never negative, even for coincident points.
    """
    rlat1, rlon1 = math.radians(lat1), math.radians(lon1)
    rlat2, rlon2 = math.radians(lat2), math.radians(lon2)

    dlat = rlat2 - rlat1
    dlon = rlon2 - rlon1

    a = math.sin(dlat / 2) ** 2 + math.cos(rlat1) * math.cos(rlat2) * math.sin(dlon / 2) ** 2
    # Rounding can push `a` a hair outside [0, 1]
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return max(0.0, EARTH_RADIUS_KM * c)


def km_to_miles(km: float) -> float:
    return km * KM_TO_MILES


def miles_to_km(miles: float) -> float:
    return miles / KM_TO_MILES


def format_distance(km: float, unit: str = "km") -> str:
    """Render a distance the way the calculator displays it."""
    if unit == "km":
        return f"{km:.2f} km (straight-line)"
    if unit == "miles":
        return f"{km_to_miles(km):.2f} miles (straight-line)"
    raise ValueError(f"unknown unit {unit!r}, expected one of {UNITS}")

import logging
from math import atan2, cos, floor, isfinite, radians, sin, sqrt
from typing import Dict, Mapping, Type, TypeVar

from ..constants import (
    DECIMALS, EARTH_RADIUS_KM, METRO_WAIT_BUFFER_MIN, TRAVEL_SPEEDS_KMH, TravelMode
)
from ..errors import InvalidInputError, UnknownKeyError
from ..models import Coordinates

logger = logging.getLogger(__name__)

V = TypeVar("V")


def f2(x: float) -> str:
    """
    Format a float with a fixed number of decimal places (DECIMALS).
    """
    return f"{x:.{DECIMALS}f}"


def round_half_up(x: float) -> int:
    """
    Round to the nearest integer currency unit, halves away from zero.
    (Python's round() would send 32.5 to 32.)
    """
    if x < 0:
        return -int(floor(-x + 0.5))
    return int(floor(x + 0.5))


def require_non_negative(name: str, value: float) -> float:
    if value is None or not isfinite(value) or value < 0:
        raise InvalidInputError(name, value, "must be a finite number >= 0")
    return value


def require_positive(name: str, value: float) -> float:
    if value is None or not isfinite(value) or value <= 0:
        raise InvalidInputError(name, value, "must be a finite number > 0")
    return value


def lookup(
    table: Mapping[str, V],
    key: str,
    kind: str,
    error_cls: Type[UnknownKeyError] = UnknownKeyError,
) -> V:
    """
    Fetch a factor table entry, failing loudly on unknown keys.
    A silent default here would report an impact or a cost as free.
    """
    try:
        return table[key]
    except (KeyError, TypeError):
        raise error_cls(kind, key, table.keys()) from None


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """
    Compute great-circle distance in km between two coordinates (Haversine).
    Symmetric, and zero for identical points.
    """
    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlat = lat2 - lat1
    dlon = radians(b.lon - a.lon)
    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(h), sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def estimate_travel_time(distance: float, mode: TravelMode) -> int:
    """
    Estimate door-to-door minutes for a mode at its average urban speed.
    Metro adds a flat wait/transfer buffer on top of the rounded ride time.
    """
    require_non_negative("distance_km", distance)
    speed = lookup(TRAVEL_SPEEDS_KMH, mode, "travel mode")
    minutes = round_half_up(distance / speed * 60)
    if mode == "metro":
        minutes += METRO_WAIT_BUFFER_MIN
    return minutes


def scale_figures(daily: float, days_per_month: int, days_per_year: int) -> Dict[str, float]:
    return {
        "daily": daily,
        "monthly": daily * days_per_month,
        "yearly": daily * days_per_year,
    }

"""
Geographic helpers for distance ranking.

Coordinates arriving from query strings or from the store are parsed
explicitly: a value is usable only if it converts to a finite float.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, TypeVar

EARTH_RADIUS_KM = 6371.0
DISTANCE_DECIMALS = 4

T = TypeVar("T")


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in degrees."""

    lat: float
    lng: float


ORIGIN = Coordinate(lat=0.0, lng=0.0)


def parse_coordinate(value: Any) -> float | None:
    """
    Parse a single latitude or longitude value.

    Accepts numbers and numeric strings. Returns None for missing values,
    blank or non-numeric strings, booleans, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            parsed = float(value)
        except ValueError:
            return None
    elif isinstance(value, int | float | Decimal):
        parsed = float(value)
    else:
        return None

    return parsed if math.isfinite(parsed) else None


def parse_reference_point(lat: Any, lng: Any) -> Coordinate | None:
    """Return a Coordinate only when both parts parse as finite numbers."""
    parsed_lat = parse_coordinate(lat)
    parsed_lng = parse_coordinate(lng)
    if parsed_lat is None or parsed_lng is None:
        return None
    return Coordinate(lat=parsed_lat, lng=parsed_lng)


def first_present(*values: T | None) -> T | None:
    """Return the first value that is not None (query parameter aliases)."""
    for value in values:
        if value is not None:
            return value
    return None


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres between two points given in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_from(origin: Coordinate, lat: Any, lng: Any) -> float | None:
    """
    Rounded distance from origin to (lat, lng), or None if the target
    coordinates are not finite numbers.
    """
    target = parse_reference_point(lat, lng)
    if target is None:
        return None
    distance = haversine_km(origin.lat, origin.lng, target.lat, target.lng)
    return round(distance, DISTANCE_DECIMALS)


def resolve_reference_point(
    requested: Coordinate | None,
    schools: Sequence[Any],
) -> Coordinate | None:
    """
    Pick the point distances are measured from.

    1. The caller's coordinate, if one was supplied (no range check).
    2. Otherwise the first scanned school's coordinate.
    3. (0, 0) if that school's coordinate is unusable.

    Returns None only when there is no caller coordinate and no school.
    """
    if requested is not None:
        return requested
    if not schools:
        return None

    first = schools[0]
    return parse_reference_point(first.latitude, first.longitude) or ORIGIN


def rank_by_distance(origin: Coordinate, schools: Iterable[Any]) -> list[tuple[Any, float | None]]:
    """
    Pair each school with its distance from origin, nearest first.

    Schools without usable coordinates get None and sort after every
    measured school. The sort is stable, so ties keep scan order.
    """
    measured = [
        (school, distance_from(origin, school.latitude, school.longitude))
        for school in schools
    ]
    measured.sort(key=lambda pair: (pair[1] is None, pair[1] or 0.0))
    return measured

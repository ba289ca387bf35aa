"""
Coordinate resolution utilities for WalkRoute.

Place records arrive from several upstream sources and carry their
location in one of two shapes: a pair of separate ``lat``/``lon``
fields, or a ``coordinates`` pair in GeoJSON order, i.e.
``[longitude, latitude]``. Origins may additionally be given as a
plain ``"lat,lon"`` string. This module turns any of those into a
``GeoPoint`` or ``None``; it never performs network lookups.

Example usage:

    from walkroute.geocode import resolve_coordinates
    point = resolve_coordinates({"name": "Sé", "coordinates": [-9.1335, 38.7097]})
    origin = resolve_coordinates("38.71,-9.14")

The resolver returns ``None`` whenever no usable point can be found.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from numbers import Real
from typing import Any, Mapping, Optional

# "lat,lon" with optional sign and fraction on both parts, ASCII digits only
_COORD_PATTERN = re.compile(r"(-?[0-9]+(?:\.[0-9]+)?),[ \t]*(-?[0-9]+(?:\.[0-9]+)?)")


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def as_tuple(self):
        return self.latitude, self.longitude


def _make_point(lat: Any, lon: Any) -> Optional[GeoPoint]:
    """Build a GeoPoint from two raw values, or ``None`` if they are unusable."""
    for value in (lat, lon):
        if isinstance(value, bool) or not isinstance(value, Real):
            return None
    try:
        lat, lon = float(lat), float(lon)
    except OverflowError:
        # ints beyond float range, e.g. long literals from json.loads
        return None
    if not math.isfinite(lat) or not math.isfinite(lon):
        return None
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
        return None
    return GeoPoint(lat, lon)


def parse_coordinate_string(text: str) -> Optional[GeoPoint]:
    """Parse a ``"lat,lon"`` string such as ``"38.71,-9.14"``.

    Anything that does not match the pattern exactly yields ``None``.
    """
    match = _COORD_PATTERN.fullmatch(text)
    if not match:
        return None
    return _make_point(float(match.group(1)), float(match.group(2)))


def resolve_coordinates(value: Any) -> Optional[GeoPoint]:
    """Extract a ``GeoPoint`` from a place record, origin string or point.

    Resolution order for place records:

    1. ``lat`` and ``lon`` fields, when both are present and not ``None``.
    2. ``coordinates`` as a two element ``[lon, lat]`` sequence.

    A record carrying both shapes resolves through the field pair. Strings
    are handed to :func:`parse_coordinate_string`. A ``GeoPoint`` or a
    ``(lat, lon)`` tuple is accepted as is.

    Args:
        value: Place mapping, coordinate string, ``GeoPoint`` or tuple.

    Returns:
        The resolved point, or ``None`` if no coordinates are usable.
    """
    if value is None:
        return None
    if isinstance(value, GeoPoint):
        return value
    if isinstance(value, str):
        return parse_coordinate_string(value)
    if isinstance(value, tuple):
        if len(value) != 2:
            return None
        return _make_point(value[0], value[1])
    if not isinstance(value, Mapping):
        return None

    lat, lon = value.get("lat"), value.get("lon")
    if lat is not None and lon is not None:
        return _make_point(lat, lon)

    pair = value.get("coordinates")
    if isinstance(pair, (list, tuple)) and len(pair) == 2:
        # GeoJSON order: longitude first
        return _make_point(pair[1], pair[0])
    return None

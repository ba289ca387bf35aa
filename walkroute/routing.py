"""
Distance utilities for WalkRoute.

Walking tours are short, so straight-line great-circle distance is a
good enough proxy for the walk between two stops. This module provides
the Haversine distance, the walking-time estimate derived from it, and
a pairwise distance matrix for a set of points.

Example usage:

    coords = [(38.7139, -9.1334), (38.7097, -9.1335)]
    dist = haversine_distance(coords[0], coords[1])
    minutes = walking_minutes(dist)

No street network is consulted; real walking distances will be
somewhat longer than the estimates returned here.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple, Union

from walkroute.geocode import GeoPoint

EARTH_RADIUS_KM = 6371.0
WALKING_SPEED_KMH = 5.0

Coord = Union[GeoPoint, Tuple[float, float]]


def _lat_lon(coord: Coord) -> Tuple[float, float]:
    if isinstance(coord, GeoPoint):
        return coord.latitude, coord.longitude
    return coord[0], coord[1]


def haversine_distance(coord1: Coord, coord2: Coord) -> float:
    """Compute the great‑circle distance between two coordinates in kilometers."""
    lat1, lon1 = _lat_lon(coord1)
    lat2, lon2 = _lat_lon(coord2)
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # float rounding can push a slightly outside [0, 1] near antipodes
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def walking_minutes(distance_km: float, speed_kmh: float = WALKING_SPEED_KMH) -> int:
    """Estimate whole walking minutes for a distance, rounded up.

    At the default 5 km/h this is ``ceil(distance_km * 12)``.
    """
    if speed_kmh <= 0:
        raise ValueError("speed_kmh must be positive")
    return math.ceil(distance_km * (60.0 / speed_kmh))


def compute_haversine_matrix(coords: Sequence[Coord]) -> List[List[float]]:
    """Compute a symmetric distance matrix using the Haversine formula.

    Args:
        coords: List of points (``GeoPoint`` or (lat, lon) tuples).

    Returns:
        Square matrix of distances in kilometers.
    """
    n = len(coords)
    dist_matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            dist = haversine_distance(coords[i], coords[j])
            dist_matrix[i][j] = dist
            dist_matrix[j][i] = dist
    return dist_matrix

"""
Tour construction for WalkRoute.

This module orders a set of candidate places into a short walking tour
using the nearest neighbour heuristic. It provides:

    - ``nearest_neighbor``: visiting order over a distance matrix.
    - ``build_tour``: resolve place coordinates, order the places and
      rewrite each place's walking time to match its leg in the tour.
    - ``order_places``: list-in/list-out wrapper around ``build_tour``.

Places without usable coordinates are left out of the tour and counted
in ``Tour.skipped``. If no place has coordinates the input is returned
unchanged. The resulting tour is valid but not necessarily the shortest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from walkroute.geocode import GeoPoint, resolve_coordinates
from walkroute.routing import WALKING_SPEED_KMH, compute_haversine_matrix, walking_minutes

logger = logging.getLogger(__name__)

WALKING_TIME_FIELD = "walkingTime"


@dataclass
class TourLeg:
    place: dict
    distance_km: float

    @property
    def walking_time(self) -> int:
        return self.place[WALKING_TIME_FIELD]


@dataclass
class Tour:
    """Result of :func:`build_tour`.

    ``legs`` is empty when no place could be resolved; ``places`` then
    returns the original input sequence.
    """

    legs: List[TourLeg] = field(default_factory=list)
    skipped: int = 0
    origin: Optional[GeoPoint] = None
    passthrough: Optional[Sequence[Mapping[str, Any]]] = None

    @property
    def places(self) -> Sequence[Mapping[str, Any]]:
        if not self.legs and self.passthrough is not None:
            return self.passthrough
        return [leg.place for leg in self.legs]

    @property
    def total_distance_km(self) -> float:
        return sum(leg.distance_km for leg in self.legs)

    @property
    def total_walking_time(self) -> int:
        return sum(leg.walking_time for leg in self.legs)


def _label(place: Any) -> Any:
    if isinstance(place, Mapping):
        return place.get("name", "<unnamed>")
    return place


def nearest_neighbor(dist_matrix: Sequence[Sequence[float]], start: int = 0) -> List[int]:
    """Construct a route using the nearest neighbor heuristic.

    Ties are broken in favour of the lowest index, so the same matrix
    always yields the same route.

    Args:
        dist_matrix: A square matrix of distances.
        start: Index of the start location in the matrix.

    Returns:
        A list of indices representing the visiting order, starting
        with ``start`` and including all other indices exactly once.
    """
    n = len(dist_matrix)
    if n == 0:
        return []
    unvisited = [i for i in range(n) if i != start]
    route = [start]
    current = start
    while unvisited:
        # min() keeps the first of equal keys, and unvisited stays in index order
        next_stop = min(unvisited, key=lambda j: dist_matrix[current][j])
        route.append(next_stop)
        unvisited.remove(next_stop)
        current = next_stop
    return route


def build_tour(
    places: Sequence[Mapping[str, Any]],
    origin: Any = None,
    speed_kmh: float = WALKING_SPEED_KMH,
) -> Tour:
    """Order places into a walking tour starting from ``origin``.

    Args:
        places: Place records. Each may carry ``lat``/``lon`` or a
            ``coordinates`` pair in ``[lon, lat]`` order.
        origin: Optional start: a ``"lat,lon"`` string, a place-like
            mapping, a ``GeoPoint`` or a ``(lat, lon)`` tuple. The origin
            is not part of the tour. When it is missing or cannot be
            resolved the first place with coordinates is the start.
        speed_kmh: Walking speed used for the walking time estimate.

    Returns:
        A ``Tour`` whose legs hold copies of the places with their
        ``walkingTime`` set to the minutes needed for that leg.
    """
    resolved = []
    for place in places:
        # strings and tuples are valid origins but not place records
        point = resolve_coordinates(place) if isinstance(place, Mapping) else None
        if point is None:
            logger.debug("No usable coordinates for %r", _label(place))
            continue
        resolved.append((place, point))

    skipped = len(places) - len(resolved)
    logger.debug("Resolved coordinates for %d of %d places", len(resolved), len(places))
    if skipped:
        logger.warning("Skipping %d place(s) without usable coordinates", skipped)

    if not resolved:
        logger.info("No places with coordinates, keeping original order")
        return Tour(skipped=skipped, passthrough=places)

    start = resolve_coordinates(origin) if origin is not None else None
    points = [point for _, point in resolved]
    if start is not None:
        logger.debug("Starting from origin %s", start)
        # matrix row 0 is the origin, place i sits at row i + 1
        matrix = compute_haversine_matrix([start] + points)
        route = nearest_neighbor(matrix, start=0)[1:]
        offset = 1
        previous: Optional[int] = 0
    else:
        if origin is not None:
            logger.debug("Origin %r could not be resolved, ignoring it", origin)
        logger.debug("No origin, starting from first place %r", _label(resolved[0][0]))
        matrix = compute_haversine_matrix(points)
        route = nearest_neighbor(matrix, start=0)
        offset = 0
        previous = None

    legs: List[TourLeg] = []
    for row in route:
        distance = 0.0 if previous is None else matrix[previous][row]
        place = dict(resolved[row - offset][0])
        place[WALKING_TIME_FIELD] = walking_minutes(distance, speed_kmh)
        legs.append(TourLeg(place=place, distance_km=distance))
        logger.debug(
            "Selected %r (%.2f km, ~%d min walk)",
            _label(place), distance, place[WALKING_TIME_FIELD],
        )
        previous = row

    logger.debug("Tour order: %s", [_label(leg.place) for leg in legs])
    return Tour(legs=legs, skipped=skipped, origin=start)


def order_places(
    places: Sequence[Mapping[str, Any]],
    origin: Any = None,
    speed_kmh: float = WALKING_SPEED_KMH,
) -> Sequence[Mapping[str, Any]]:
    """Return ``places`` in walking order with recalculated walking times.

    See :func:`build_tour`; the skipped count is logged rather than returned.
    """
    return build_tour(places, origin=origin, speed_kmh=speed_kmh).places

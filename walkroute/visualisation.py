"""
Map visualisation utilities for WalkRoute.

This module provides a helper function to build an interactive map of
a finished tour using the Folium library. It renders numbered markers
for each stop in visiting order, an optional start marker for the
origin, and draws the walk as a polyline.
"""

from __future__ import annotations

import html

import folium

from walkroute.geocode import resolve_coordinates
from walkroute.optimisation import Tour

_MARKER_HTML = (
    "<div style='font-size: 12px; color: white; background-color: #16a34a; "
    "border-radius: 50%; width: 24px; height: 24px; text-align: center; "
    "line-height: 24px;'>{order}</div>"
)


def create_folium_map(tour: Tour, zoom_start: int = 15) -> folium.Map:
    """Create a Folium map with numbered markers and a polyline for the tour.

    Args:
        tour: Result of :func:`walkroute.optimisation.build_tour`.
        zoom_start: Initial zoom level; walking tours fit around 15.

    Returns:
        A Folium Map object ready for display.
    """
    coords = [resolve_coordinates(leg.place).as_tuple() for leg in tour.legs]
    if tour.origin is not None:
        coords.insert(0, tour.origin.as_tuple())
    if not coords:
        return folium.Map(location=[0, 0], zoom_start=2)
    # Compute map centre as the mean of all coordinates
    avg_lat = sum(lat for lat, _ in coords) / len(coords)
    avg_lon = sum(lon for _, lon in coords) / len(coords)
    m = folium.Map(location=[avg_lat, avg_lon], zoom_start=zoom_start, tiles="OpenStreetMap")
    if tour.origin is not None:
        folium.Marker(
            location=list(tour.origin.as_tuple()),
            popup=folium.Popup("Start", parse_html=True),
            icon=folium.Icon(color="red", icon="flag"),
        ).add_to(m)
    for order, leg in enumerate(tour.legs, start=1):
        point = resolve_coordinates(leg.place)
        label = html.escape(str(leg.place.get("name", f"Stop {order}")))
        folium.Marker(
            location=[point.latitude, point.longitude],
            popup=folium.Popup(f"{order}. {label} ({leg.walking_time} min walk)", parse_html=True),
            icon=folium.DivIcon(html=_MARKER_HTML.format(order=order)),
        ).add_to(m)
    folium.PolyLine([list(c) for c in coords], color="green", weight=4, opacity=0.6).add_to(m)
    return m

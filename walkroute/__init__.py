"""
WalkRoute package initialization.

This package orders candidate places into a short walking tour and
estimates the walk between consecutive stops.

Modules:
    geocode       – Coordinate extraction from place records and "lat,lon" strings.
    routing       – Haversine distances and walking time estimates.
    optimisation  – Nearest neighbour tour construction.
    visualisation – Folium based map creation utilities.

Distances are straight-line great-circle estimates; no street network
is consulted and the tour is not guaranteed to be the shortest one.
"""

__all__ = [
    "geocode",
    "routing",
    "optimisation",
    "visualisation",
]

import math
import unittest

from walkroute.geocode import GeoPoint
from walkroute.optimisation import build_tour, nearest_neighbor, order_places


class TestNearestNeighbor(unittest.TestCase):
    def test_nearest_neighbor(self):
        dist = [
            [0, 2, 9, 10],
            [1, 0, 6, 4],
            [15, 7, 0, 8],
            [6, 3, 12, 0],
        ]
        route = nearest_neighbor(dist, start=0)
        # Starting at 0, nearest is 1, then 3, then 2
        self.assertEqual(route, [0, 1, 3, 2])

    def test_ties_pick_lowest_index(self):
        dist = [
            [0, 5, 5, 5],
            [5, 0, 1, 1],
            [5, 1, 0, 1],
            [5, 1, 1, 0],
        ]
        self.assertEqual(nearest_neighbor(dist, start=0), [0, 1, 2, 3])

    def test_empty(self):
        self.assertEqual(nearest_neighbor([]), [])


class TestBuildTour(unittest.TestCase):
    def test_first_place_is_start_without_origin(self):
        places = [{"name": "B", "lat": 0, "lon": 1}, {"name": "A", "lat": 0, "lon": 0}]
        tour = build_tour(places)
        self.assertEqual([p["name"] for p in tour.places], ["B", "A"])
        self.assertEqual(tour.legs[0].distance_km, 0.0)
        self.assertEqual(tour.legs[0].walking_time, 0)
        self.assertAlmostEqual(tour.legs[1].distance_km, 111.19, delta=0.01)
        self.assertEqual(tour.legs[1].walking_time, 1335)
        self.assertEqual(tour.skipped, 0)
        self.assertIsNone(tour.origin)

    def test_origin_string(self):
        places = [{"name": "X", "lat": 0, "lon": 2}, {"name": "Y", "lat": 0, "lon": 1}]
        tour = build_tour(places, origin="0,0")
        self.assertEqual([p["name"] for p in tour.places], ["Y", "X"])
        self.assertEqual(tour.origin, GeoPoint(0.0, 0.0))
        # the origin is not a leg of its own
        self.assertEqual(len(tour.legs), 2)
        self.assertGreater(tour.legs[0].distance_km, 0)

    def test_place_without_coordinates_is_skipped(self):
        places = [
            {"name": "A", "lat": 38.7097, "lon": -9.1335},
            {"name": "Nowhere"},
            {"name": "B", "coordinates": [-9.1334, 38.7139]},
        ]
        with self.assertLogs("walkroute.optimisation", level="WARNING") as logs:
            tour = build_tour(places)
        self.assertEqual(tour.skipped, 1)
        self.assertEqual([p["name"] for p in tour.places], ["A", "B"])
        self.assertIn("Skipping 1 place(s)", logs.output[0])

    def test_nothing_resolvable_returns_input(self):
        places = [{"name": "P", "walkingTime": 7}, {"name": "Q", "walkingTime": 3}]
        tour = build_tour(places, origin="38.71,-9.14")
        self.assertEqual(tour.legs, [])
        self.assertEqual(tour.skipped, 2)
        self.assertIs(tour.places, places)
        self.assertIs(order_places(places), places)
        self.assertEqual(places, [{"name": "P", "walkingTime": 7}, {"name": "Q", "walkingTime": 3}])

    def test_malformed_origin_is_ignored(self):
        places = [{"name": "X", "lat": 0, "lon": 2}, {"name": "Y", "lat": 0, "lon": 1}]
        tour = build_tour(places, origin="somewhere in Lisbon")
        self.assertIsNone(tour.origin)
        self.assertEqual([p["name"] for p in tour.places], ["X", "Y"])
        self.assertEqual(tour.legs[0].walking_time, 0)

    def test_origin_tuple_and_mapping(self):
        places = [{"name": "X", "lat": 0, "lon": 2}, {"name": "Y", "lat": 0, "lon": 3}]
        for origin in [(0.0, 4.0), {"name": "Hotel", "coordinates": [4.0, 0.0]}]:
            tour = build_tour(places, origin=origin)
            self.assertEqual([p["name"] for p in tour.places], ["Y", "X"])

    def test_fields_preserved_and_input_untouched(self):
        place = {"name": "Sé", "lat": 38.7097, "lon": -9.1335, "walkingTime": 99,
                 "rating": 4.5, "tripAdvisorInfo": {"ranking": "#3"}}
        original = dict(place)
        tour = build_tour([place], origin="38.7139,-9.1334")
        out = tour.places[0]
        self.assertEqual(place, original)
        self.assertIsNot(out, place)
        self.assertEqual(out["rating"], 4.5)
        self.assertIs(out["tripAdvisorInfo"], place["tripAdvisorInfo"])
        self.assertNotEqual(out["walkingTime"], 99)
        self.assertEqual(out["walkingTime"], math.ceil(tour.legs[0].distance_km * 12))

    def test_equal_distances_keep_input_order(self):
        places = [
            {"name": "East", "lat": 0, "lon": 1},
            {"name": "North", "lat": 1, "lon": 0},
            {"name": "West", "lat": 0, "lon": -1},
        ]
        tour = build_tour(places, origin=GeoPoint(0, 0))
        self.assertEqual(tour.places[0]["name"], "East")

    def test_duplicate_locations(self):
        places = [{"name": "A", "lat": 1, "lon": 1}, {"name": "B", "lat": 1, "lon": 1}]
        tour = build_tour(places)
        self.assertEqual([p["name"] for p in tour.places], ["A", "B"])
        self.assertEqual([leg.walking_time for leg in tour.legs], [0, 0])

    def test_totals_and_speed(self):
        places = [{"name": "X", "lat": 0, "lon": 0.01}, {"name": "Y", "lat": 0, "lon": 0.02}]
        tour = build_tour(places, origin="0,0", speed_kmh=3.0)
        self.assertAlmostEqual(tour.total_distance_km, 2.2239, delta=0.001)
        self.assertEqual([leg.walking_time for leg in tour.legs], [23, 23])
        self.assertEqual(tour.total_walking_time, 46)

    def test_non_mapping_places_are_skipped(self):
        places = [
            {"name": "A", "lat": 0, "lon": 0},
            "0,1",
            (0.0, 1.0),
            GeoPoint(0.0, 2.0),
            {"name": "Big", "lat": 10**400, "lon": 0},
        ]
        tour = build_tour(places)
        self.assertEqual(tour.skipped, 4)
        self.assertEqual([p["name"] for p in tour.places], ["A"])

        only_strings = ["0,1", (0.0, 1.0)]
        tour = build_tour(only_strings, origin="0,0")
        self.assertEqual(tour.skipped, 2)
        self.assertIs(tour.places, only_strings)

    def test_empty_input(self):
        tour = build_tour([])
        self.assertEqual(tour.places, [])
        self.assertEqual(tour.skipped, 0)


if __name__ == "__main__":
    unittest.main()

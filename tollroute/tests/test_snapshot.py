"""
Tests for the in-memory reference point store and the domain types it holds.
"""

from django.test import SimpleTestCase

from tollroute.domain import BoundingBox, CandidatePoint, check_coordinate
from tollroute.exceptions import InvalidCoordinate
from tollroute.services.snapshot import ReferencePointSnapshot, ReferencePointStore

PLAZAS = [
    CandidatePoint.from_row("Khalapur", 18.8189, 73.2722),
    CandidatePoint.from_row("Talegaon", 18.7336, 73.6756),
    CandidatePoint.from_row("Attibele", 12.7792, 77.7706),
]


class ReferencePointSnapshotTests(SimpleTestCase):

    def test_len_and_iter(self):
        snapshot = ReferencePointSnapshot(PLAZAS)
        self.assertEqual(len(snapshot), 3)
        self.assertEqual(list(snapshot), PLAZAS)

    def test_within_bounding_box(self):
        snapshot = ReferencePointSnapshot(PLAZAS)
        box = BoundingBox(min_lat=18.0, max_lat=19.0, min_lng=73.0, max_lng=74.0)
        names = [p.identifier for p in snapshot.within(box)]
        self.assertEqual(names, ["Khalapur", "Talegaon"])

    def test_within_includes_edges(self):
        snapshot = ReferencePointSnapshot(PLAZAS)
        box = BoundingBox(18.8189, 18.8189, 73.2722, 73.2722)
        self.assertEqual([p.identifier for p in snapshot.within(box)], ["Khalapur"])

    def test_source_list_changes_do_not_leak(self):
        points = list(PLAZAS)
        snapshot = ReferencePointSnapshot(points)
        points.clear()
        self.assertEqual(len(snapshot), 3)


class ReferencePointStoreTests(SimpleTestCase):

    def test_empty_store(self):
        store = ReferencePointStore()
        self.assertEqual(store.count(), 0)

    def test_replace_swaps_snapshot(self):
        store = ReferencePointStore(PLAZAS[:1])
        old = store.snapshot()

        new = store.replace(PLAZAS)

        self.assertIs(store.snapshot(), new)
        self.assertEqual(store.count(), 3)
        # readers holding the old snapshot keep seeing the old data
        self.assertEqual(len(old), 1)


class CandidatePointTests(SimpleTestCase):

    def test_from_row_parses_strings(self):
        plaza = CandidatePoint.from_row("Khalapur", "18.8189", "73.2722")
        self.assertEqual(plaza.lat, 18.8189)
        self.assertEqual(plaza.lng, 73.2722)

    def test_equal_candidates_hash_equal(self):
        a = CandidatePoint.from_row("Khalapur", 18.8189, 73.2722)
        b = CandidatePoint.from_row("Khalapur", 18.8189, 73.2722)
        self.assertEqual(len({a, b}), 1)


class CheckCoordinateTests(SimpleTestCase):

    def test_valid(self):
        self.assertIsNone(check_coordinate(18.8189, 73.2722))
        self.assertIsNone(check_coordinate(-90.0, 180.0))

    def test_latitude_out_of_range(self):
        error = check_coordinate(91.0, 73.0)
        self.assertIsInstance(error, InvalidCoordinate)
        self.assertEqual(error.field, "latitude")

    def test_longitude_out_of_range(self):
        error = check_coordinate(18.0, -180.5)
        self.assertIsInstance(error, InvalidCoordinate)
        self.assertEqual(error.field, "longitude")

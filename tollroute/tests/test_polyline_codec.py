"""
Unit tests for encoded polyline decoding.

``polyline.encode`` from the ``polyline`` package is used as an
independent encoder for round trips.
"""

import polyline

from django.test import SimpleTestCase

from tollroute.domain import GeoPoint
from tollroute.exceptions import DecodeError
from tollroute.services import polyline_codec

# Reference example from the encoded polyline algorithm documentation
REFERENCE_ENCODED = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
REFERENCE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


class DecodeTests(SimpleTestCase):

    def test_reference_example(self):
        points = polyline_codec.decode(REFERENCE_ENCODED)
        self.assertEqual(len(points), 3)
        for got, expected in zip(points, REFERENCE_POINTS):
            self.assertAlmostEqual(got.lat, expected[0], places=5)
            self.assertAlmostEqual(got.lng, expected[1], places=5)

    def test_returns_geopoints(self):
        points = polyline_codec.decode(REFERENCE_ENCODED)
        self.assertIsInstance(points[0], GeoPoint)

    def test_empty_string(self):
        self.assertEqual(polyline_codec.decode(""), [])

    def test_round_trip_with_polyline_package(self):
        route = [
            (19.0544, 73.0362),
            (19.0, 73.0),
            (18.95712, 72.91234),
            (18.9271, 72.8294),
            (-33.86785, 151.20732),
            (0.0, 0.0),
        ]
        decoded = polyline_codec.decode(polyline.encode(route, 5))
        self.assertEqual(len(decoded), len(route))
        for got, expected in zip(decoded, route):
            self.assertAlmostEqual(got.lat, expected[0], delta=1e-5)
            self.assertAlmostEqual(got.lng, expected[1], delta=1e-5)

    def test_encode_matches_package(self):
        self.assertEqual(polyline_codec.encode(REFERENCE_POINTS), REFERENCE_ENCODED)


class MalformedInputTests(SimpleTestCase):

    def test_unterminated_group(self):
        # trailing "_" carries the continuation bit and nothing follows
        with self.assertRaises(DecodeError) as ctx:
            polyline_codec.decode(REFERENCE_ENCODED + "_")
        self.assertEqual(ctx.exception.position, len(REFERENCE_ENCODED) + 1)

    def test_character_outside_alphabet(self):
        with self.assertRaises(DecodeError) as ctx:
            polyline_codec.decode("_p~iF ps|U")
        self.assertEqual(ctx.exception.position, 5)

    def test_latitude_without_longitude(self):
        with self.assertRaises(DecodeError):
            polyline_codec.decode("_p~iF")

    def test_decode_error_is_value_error(self):
        with self.assertRaises(ValueError):
            polyline_codec.decode("~")

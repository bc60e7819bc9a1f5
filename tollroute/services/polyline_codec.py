"""
Encoded polyline support.

Routing providers (OSRM, Google) return route geometry in the
"encoded polyline algorithm format": every coordinate is stored as the
signed delta from the previous one, scaled by 1e5, zig-zag folded and
written as 5-bit chunks offset by 63.  A chunk with bit ``0x20`` set means
another chunk follows.

``decode`` is implemented here rather than delegated to the ``polyline``
package because truncated or corrupt input has to surface as a
``DecodeError`` instead of an ``IndexError`` or silently wrong points.
"""

import logging

import polyline as polyline_codec

from tollroute.domain import GeoPoint
from tollroute.exceptions import DecodeError

logger = logging.getLogger(__name__)

PRECISION = 5
SCALE = 10 ** PRECISION

_MIN_CHAR = 63
_MAX_CHAR = 126
_CONTINUATION = 0x20
_DATA_MASK = 0x1F


def _read_value(encoded: str, index: int) -> tuple[int, int]:
    """Read one zig-zag encoded integer starting at ``index``."""
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise DecodeError("Unterminated chunk group in encoded polyline", index)
        code = ord(encoded[index])
        if code < _MIN_CHAR or code > _MAX_CHAR:
            raise DecodeError(
                f"Invalid character {encoded[index]!r} in encoded polyline", index
            )
        chunk = code - _MIN_CHAR
        index += 1
        result |= (chunk & _DATA_MASK) << shift
        shift += 5
        if not chunk & _CONTINUATION:
            break

    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode(encoded: str) -> list[GeoPoint]:
    """
    Decode an encoded polyline string into ``[GeoPoint(lat, lng), …]``.

    Raises
    ------
    DecodeError
        If the string ends inside a chunk group, contains a character
        outside ``?``..``~``, or ends after a latitude with no longitude.
    """
    points: list[GeoPoint] = []
    if not encoded:
        return points

    index = 0
    lat = 0
    lng = 0
    while index < len(encoded):
        dlat, index = _read_value(encoded, index)
        if index >= len(encoded):
            raise DecodeError("Latitude without a matching longitude", index)
        dlng, index = _read_value(encoded, index)
        lat += dlat
        lng += dlng
        points.append(GeoPoint(lat / SCALE, lng / SCALE))

    logger.debug("Decoded polyline of %d chars into %d points", len(encoded), len(points))
    return points


def encode(points) -> str:
    """Encode ``[(lat, lng), …]`` with the same scheme ``decode`` reads."""
    return polyline_codec.encode([(p[0], p[1]) for p in points], PRECISION)

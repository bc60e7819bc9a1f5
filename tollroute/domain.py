"""
Value types shared by the route-matching services.

``GeoPoint`` is a named tuple so that plain ``(lat, lng)`` pairs, such as
those returned by ``polyline.decode``, can be used wherever a point is
expected.
"""

from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from tollroute.exceptions import InvalidCoordinate


class GeoPoint(NamedTuple):
    lat: float
    lng: float


class Segment(NamedTuple):
    start: GeoPoint
    end: GeoPoint


class SegmentProjection(NamedTuple):
    """Where a point falls relative to a single route segment (all km)."""

    distance_km: float
    along_km: float
    segment_length_km: float


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @classmethod
    def around(cls, a, b, buffer_deg: float = 0.0) -> "BoundingBox":
        return cls(
            min_lat=min(a[0], b[0]) - buffer_deg,
            max_lat=max(a[0], b[0]) + buffer_deg,
            min_lng=min(a[1], b[1]) - buffer_deg,
            max_lng=max(a[1], b[1]) + buffer_deg,
        )

    def contains(self, point) -> bool:
        return (
            self.min_lat <= point[0] <= self.max_lat
            and self.min_lng <= point[1] <= self.max_lng
        )


@dataclass(frozen=True)
class CandidatePoint:
    """A point of interest (e.g. a toll plaza) to test against a route."""

    identifier: Any
    point: GeoPoint

    @classmethod
    def from_row(cls, identifier: Any, lat: float, lng: float) -> "CandidatePoint":
        return cls(identifier=identifier, point=GeoPoint(float(lat), float(lng)))

    @property
    def lat(self) -> float:
        return self.point.lat

    @property
    def lng(self) -> float:
        return self.point.lng


@dataclass(frozen=True)
class MatchResult:
    candidate: CandidatePoint
    distance_from_start_km: float

    @property
    def identifier(self) -> Any:
        return self.candidate.identifier

    @property
    def lat(self) -> float:
        return self.candidate.lat

    @property
    def lng(self) -> float:
        return self.candidate.lng

    def as_tuple(self) -> tuple:
        """``(identifier, latitude, longitude, distance_from_start_km)``"""
        return (self.identifier, self.lat, self.lng, self.distance_from_start_km)


def check_coordinate(lat: float, lng: float) -> Optional[InvalidCoordinate]:
    """
    Validate a coordinate pair before it is handed to the matcher.

    Returns the error instead of raising it; ``None`` means the pair is
    usable.  The matching services never call this themselves.
    """
    if not -90.0 <= lat <= 90.0:
        return InvalidCoordinate("latitude", lat, -90.0, 90.0)
    if not -180.0 <= lng <= 180.0:
        return InvalidCoordinate("longitude", lng, -180.0, 180.0)
    return None

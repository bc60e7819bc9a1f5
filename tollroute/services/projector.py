import math

from tollroute.domain import SegmentProjection
from .helper import EARTH_RADIUS_KM, bearing, clamp, distance


def project_onto_segment(point, start, end) -> SegmentProjection:
    """
    Project ``point`` onto the great-circle segment ``start``→``end``.

    Uses spherical cross-track / along-track geometry rather than the
    flat-earth approximation, so the result stays accurate on long
    segments.

    When the perpendicular foot falls before ``start`` or past ``end``
    the distance is measured to the nearer endpoint instead, and
    ``along_km`` is pinned to 0 or to the segment length.

    Parameters
    ----------
    point : candidate ``(lat, lng)``
    start : segment start ``(lat, lng)``
    end   : segment end   ``(lat, lng)``

    Returns
    -------
    SegmentProjection
        ``distance_km``       – distance from the point to the segment
        ``along_km``          – offset of the foot from ``start`` on the segment
        ``segment_length_km`` – great-circle length of the segment
    """
    d13 = distance(start, point)
    d23 = distance(end, point)
    d12 = distance(start, end)

    if d12 == 0.0:
        return SegmentProjection(d13, 0.0, 0.0)

    theta13 = bearing(start[0], start[1], point[0], point[1])
    theta12 = bearing(start[0], start[1], end[0], end[1])
    if math.cos(theta13 - theta12) < 0:
        return SegmentProjection(d13, 0.0, d12)

    theta23 = bearing(end[0], end[1], point[0], point[1])
    theta21 = bearing(end[0], end[1], start[0], start[1])
    if math.cos(theta23 - theta21) < 0:
        return SegmentProjection(d23, d12, d12)

    delta13 = d13 / EARTH_RADIUS_KM
    dxt = math.asin(clamp(math.sin(delta13) * math.sin(theta13 - theta12), -1.0, 1.0))
    cos_dxt = math.cos(dxt)
    if cos_dxt == 0.0:
        dat = 0.0
    else:
        dat = math.acos(clamp(math.cos(delta13) / cos_dxt, -1.0, 1.0))

    along_km = clamp(dat * EARTH_RADIUS_KM, 0.0, d12)
    return SegmentProjection(abs(dxt) * EARTH_RADIUS_KM, along_km, d12)


def distance_to_segment(point, start, end) -> float:
    """Distance in km from ``point`` to the segment ``start``→``end``."""
    return project_onto_segment(point, start, end).distance_km

"""
Match candidate points (toll plazas) against a route.

Two strategies live side by side:

* **straight route** (coarse) – only the two endpoints are known.  The
  route is approximated by the chord between them; candidates inside a
  buffered bounding box pass if the detour through them is small
  compared with the direct distance.
* **route geometry** (precise) – the decoded road polyline is known.
  Every segment is scanned and a candidate matches when it lies within a
  small constant tolerance of any of them.

Both return ``MatchResult`` lists sorted by ``distance_from_start_km``.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings

from tollroute.domain import BoundingBox, CandidatePoint, GeoPoint, MatchResult
from . import polyline_codec
from .helper import distance
from .projector import project_onto_segment

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────
# Coarse mode: straight line between source and destination
# ──────────────────────────────────────────────────────────────────────────
def bounding_box(source, dest, buffer_deg: float | None = None) -> BoundingBox:
    """
    Axis-aligned box around ``source`` and ``dest`` padded by
    ``buffer_deg`` degrees on every side (default 1.0°, roughly 111 km).
    """
    if buffer_deg is None:
        buffer_deg = settings.ROUTE_MATCHER["BOUNDING_BOX_BUFFER_DEG"]
    return BoundingBox.around(source, dest, buffer_deg)


def is_near_straight_route(
    source,
    dest,
    point,
    tolerance_ratio: float | None = None,
    min_tolerance_km: float | None = None,
) -> bool:
    """
    Triangle test against the chord ``source``→``dest``.

    A point on the chord satisfies ``d(s, p) + d(p, d) == d(s, d)``.  The
    allowed excess is ``max(tolerance_ratio × d(s, d), min_tolerance_km)``:
    the real road drifts further from the chord on longer trips.
    """
    config = settings.ROUTE_MATCHER
    if tolerance_ratio is None:
        tolerance_ratio = config["STRAIGHT_ROUTE_TOLERANCE_RATIO"]     # 0.15
    if min_tolerance_km is None:
        min_tolerance_km = config["STRAIGHT_ROUTE_MIN_TOLERANCE_KM"]   # 50

    dist_to_source = distance(source, point)
    dist_to_dest = distance(point, dest)
    direct_dist = distance(source, dest)
    tolerance = max(direct_dist * tolerance_ratio, min_tolerance_km)

    return abs(dist_to_source + dist_to_dest - direct_dist) <= tolerance


def match_along_straight_route(
    source,
    dest,
    candidates,
    tolerance_ratio: float | None = None,
    min_tolerance_km: float | None = None,
    buffer_deg: float | None = None,
) -> list[MatchResult]:
    """
    Coarse matching when no route geometry is available.

    Algorithm:
      1. Build the bounding box around the endpoints, padded by ``buffer_deg``.
      2. Drop candidates outside it.
      3. Keep candidates passing ``is_near_straight_route``.
      4. ``distance_from_start_km`` is the direct distance from ``source``.
      5. Sort by ``distance_from_start_km``.
    """
    box = bounding_box(source, dest, buffer_deg)
    in_box = [c for c in candidates if box.contains(c.point)]
    logger.info("Candidates within bounding box: %d", len(in_box))

    matches = [
        MatchResult(candidate, distance(source, candidate.point))
        for candidate in _unique(in_box)
        if is_near_straight_route(
            source, dest, candidate.point, tolerance_ratio, min_tolerance_km
        )
    ]
    matches.sort(key=lambda m: m.distance_from_start_km)

    logger.info("Candidates near straight route: %d", len(matches))
    return matches


# ──────────────────────────────────────────────────────────────────────────
# Precise mode: scan every segment of the route polyline
# ──────────────────────────────────────────────────────────────────────────
def as_polyline(route) -> list[GeoPoint]:
    """Accept an encoded polyline string or a sequence of ``(lat, lng)``."""
    if isinstance(route, str):
        return polyline_codec.decode(route)
    return [GeoPoint(p[0], p[1]) for p in route]


def _locate(polyline, point, tolerance_km: float, legacy_midpoint: bool) -> float | None:
    """
    Distance along ``polyline`` to where ``point`` joins it, or ``None``
    when no segment is within ``tolerance_km``.

    The first matching segment wins, even if a later one is closer.
    """
    if not polyline:
        return None

    if len(polyline) == 1:
        # single vertex: no segments, compare against the point itself
        if distance(polyline[0], point) <= tolerance_km:
            return 0.0
        return None

    cumulative = 0.0
    for i in range(len(polyline) - 1):
        projection = project_onto_segment(point, polyline[i], polyline[i + 1])
        if projection.distance_km <= tolerance_km:
            if legacy_midpoint:
                return cumulative + projection.segment_length_km * 0.5
            return cumulative + projection.along_km
        cumulative += projection.segment_length_km
    return None


def is_near_route(route, point, tolerance_km: float | None = None) -> bool:
    """
    True when ``point`` is within ``tolerance_km`` of any segment of
    ``route`` (encoded string or ``[(lat, lng), …]``).
    """
    if tolerance_km is None:
        tolerance_km = settings.ROUTE_MATCHER["ROUTE_TOLERANCE_KM"]
    polyline = as_polyline(route)
    if not polyline:
        logger.warning("Empty polyline coordinates provided")
    return _locate(polyline, point, tolerance_km, legacy_midpoint=False) is not None


def distance_from_start(
    route,
    point,
    tolerance_km: float | None = None,
    legacy_midpoint: bool | None = None,
) -> float:
    """
    Distance in km measured along ``route`` (encoded string or
    ``[(lat, lng), …]``) from its first vertex to ``point``.

    By default the point is placed at its along-track projection on the
    first segment it matches.  With ``legacy_midpoint`` it is placed at
    that segment's midpoint instead.

    Returns ``math.inf`` when the point is not near the route.
    """
    config = settings.ROUTE_MATCHER
    if tolerance_km is None:
        tolerance_km = config["ROUTE_TOLERANCE_KM"]
    if legacy_midpoint is None:
        legacy_midpoint = config["LEGACY_MIDPOINT_PLACEMENT"]

    located = _locate(as_polyline(route), point, tolerance_km, legacy_midpoint)
    return math.inf if located is None else located


def match_along_route(
    route,
    candidates,
    tolerance_km: float | None = None,
    max_workers: int | None = None,
    legacy_midpoint: bool | None = None,
) -> list[MatchResult]:
    """
    Precise matching of candidates against actual route geometry.

    Parameters
    ----------
    route :
        Encoded polyline string or decoded ``[(lat, lng), …]``.
    candidates :
        Iterable of ``CandidatePoint``.
    tolerance_km :
        Maximum distance from the road.  Default from settings (5 km).
    max_workers :
        Thread count for evaluating candidates.  Default from settings;
        ``1`` evaluates inline.
    legacy_midpoint :
        Place matches at their segment midpoint.  Default from settings.

    Returns
    -------
    list[MatchResult]
        Matched candidates only, deduplicated, sorted by
        ``distance_from_start_km``.

    Raises
    ------
    DecodeError
        If ``route`` is a malformed encoded polyline.
    """
    config = settings.ROUTE_MATCHER
    if tolerance_km is None:
        tolerance_km = config["ROUTE_TOLERANCE_KM"]
    if max_workers is None:
        max_workers = config["MAX_WORKERS"]
    if legacy_midpoint is None:
        legacy_midpoint = config["LEGACY_MIDPOINT_PLACEMENT"]

    polyline = as_polyline(route)
    if not polyline:
        logger.warning("Empty polyline coordinates provided")
        return []

    unique = _unique(candidates)
    logger.info(
        "Matching %d candidates against %d route points", len(unique), len(polyline)
    )

    def evaluate(candidate: CandidatePoint) -> float | None:
        return _locate(polyline, candidate.point, tolerance_km, legacy_midpoint)

    if max_workers > 1 and len(unique) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            located = list(executor.map(evaluate, unique))
    else:
        located = [evaluate(c) for c in unique]

    matches = [
        MatchResult(candidate, along)
        for candidate, along in zip(unique, located)
        if along is not None
    ]
    # stable: equal distances keep candidate input order
    matches.sort(key=lambda m: m.distance_from_start_km)

    logger.info("Candidates on route: %d", len(matches))
    return matches


def _unique(candidates) -> list[CandidatePoint]:
    """
    Drop repeated candidates (same identifier and coordinates), keep order.

    Identifiers are opaque and may be unhashable (e.g. a dict holding a
    CSV row); those are compared by equality instead.
    """
    seen = set()
    unhashable = []
    unique = []
    for candidate in candidates:
        try:
            if candidate in seen:
                continue
            seen.add(candidate)
        except TypeError:
            if candidate in unhashable:
                continue
            unhashable.append(candidate)
        unique.append(candidate)
    return unique

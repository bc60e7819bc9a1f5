import math

EARTH_RADIUS_KM = 6371.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def haversine(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Return the great-circle distance **in kilometres** between two points."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)
    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    # rounding can push ``a`` a hair past 1 for antipodal points
    a = clamp(a, 0.0, 1.0)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance(a, b) -> float:
    """Great-circle distance in km between two ``(lat, lng)`` points."""
    return haversine(a[0], a[1], b[0], b[1])


def bearing(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Initial great-circle bearing from point 1 towards point 2.

    Inputs are degrees, the result is in radians within (-pi, pi].
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dlambda = math.radians(lng2 - lng1)
    y = math.sin(dlambda) * math.cos(phi2)
    x = (
        math.cos(phi1) * math.sin(phi2)
        - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)
    )
    return math.atan2(y, x)


def compute_cumulative_distances(points) -> list[float]:
    """
    Given polyline points [(lat, lng), …], return a list of
    cumulative distances **in km** from the first point.
    """
    if not points:
        return []
    distances = [0.0]
    for i in range(1, len(points)):
        distances.append(distances[-1] + distance(points[i - 1], points[i]))
    return distances


def route_length(points) -> float:
    cumulative = compute_cumulative_distances(points)
    return cumulative[-1] if cumulative else 0.0

from math import asin, atan2, cos, degrees, radians, sin, sqrt

#: Mean Earth radius in miles. https://en.wikipedia.org/wiki/Earth_radius
EARTH_RADIUS_MILES = 3963.0


def distance(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """
    Great-circle distance in miles between two points given as longitude/latitude.
    https://en.wikipedia.org/wiki/Haversine_formula
    """
    phi1 = radians(lat1)
    phi2 = radians(lat2)
    dphi = radians(lat2 - lat1)
    dlambda = radians(lon2 - lon1)

    h = sin(dphi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(dlambda / 2) ** 2
    # Clamp rounding noise so asin stays in its domain
    return 2 * EARTH_RADIUS_MILES * asin(min(1.0, sqrt(h)))


def bearing(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """
    Initial bearing from the first point towards the second, in degrees
    clockwise from true north, normalized into [0, 360).
    https://www.movable-type.co.uk/scripts/latlong.html
    """
    phi1 = radians(lat1)
    phi2 = radians(lat2)
    dlambda = radians(lon2 - lon1)

    y = sin(dlambda) * cos(phi2)
    x = cos(phi1) * sin(phi2) - sin(phi1) * cos(phi2) * cos(dlambda)
    result = degrees(atan2(y, x)) % 360.0
    # -0.0 and values that round up to 360.0
    return 0.0 if result >= 360.0 else result + 0.0


def relative_bearing(prev_bearing: float, next_bearing: float) -> float:
    """
    Signed change of heading from ``prev_bearing`` to ``next_bearing``.

    The result lies in (-180, 180]; negative values turn left, positive right.
    """
    delta = (next_bearing - prev_bearing) % 360.0
    if delta > 180.0:
        delta -= 360.0
    return delta

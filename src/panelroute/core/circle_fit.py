"""Circle fitting through outline points.

- circumcenter: exact circle through three points
- least_squares_circle_fit: Kasa fit over any number of points

Both return None for collinear input.
"""

import math

from panelroute.domain import Point

COLLINEAR_EPSILON = 1e-10


def circumcenter(p1: Point, p2: Point, p3: Point) -> tuple[Point, float] | None:
    """Center and radius of the circle through three points.

    Args:
        p1: First point
        p2: Second point
        p3: Third point

    Returns:
        Tuple of (center, radius), or None when the points are collinear

    Examples:
        >>> circumcenter(Point(1.0, 0.0), Point(0.0, 1.0), Point(-1.0, 0.0))
        (Point(x=0.0, y=0.0), 1.0)
    """
    ax, ay = p1.x, p1.y
    bx, by = p2.x, p2.y
    cx, cy = p3.x, p3.y

    d = 2 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    if abs(d) < COLLINEAR_EPSILON:
        return None

    a_sq = ax * ax + ay * ay
    b_sq = bx * bx + by * by
    c_sq = cx * cx + cy * cy

    ux = (a_sq * (by - cy) + b_sq * (cy - ay) + c_sq * (ay - by)) / d
    uy = (a_sq * (cx - bx) + b_sq * (ax - cx) + c_sq * (bx - ax)) / d

    radius = math.hypot(ax - ux, ay - uy)
    return Point(ux, uy), radius


def least_squares_circle_fit(points: list[Point]) -> tuple[Point, float] | None:
    """Best-fit circle through many points (Kasa method).

    Coordinates are centered on the centroid, then the 2x2 normal equations
    are solved for the center offset. Much more accurate than a three-point
    fit when many short line segments approximate a true circle.

    Args:
        points: At least three points

    Returns:
        Tuple of (center, radius), or None for fewer than three or collinear points
    """
    n = len(points)
    if n < 3:
        return None

    mx = sum(p.x for p in points) / n
    my = sum(p.y for p in points) / n

    suu = suv = svv = 0.0
    suuu = suvv = svvv = suuv = 0.0

    for p in points:
        u = p.x - mx
        v = p.y - my
        suu += u * u
        suv += u * v
        svv += v * v
        suuu += u * u * u
        suvv += u * v * v
        svvv += v * v * v
        suuv += u * u * v

    det = suu * svv - suv * suv
    if abs(det) < COLLINEAR_EPSILON:
        return None

    rhs1 = 0.5 * (suuu + suvv)
    rhs2 = 0.5 * (svvv + suuv)

    a = (svv * rhs1 - suv * rhs2) / det
    b = (suu * rhs2 - suv * rhs1) / det

    radius = math.sqrt(a * a + b * b + (suu + svv) / n)
    return Point(a + mx, b + my), radius

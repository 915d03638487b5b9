"""Geometric primitives for outline and toolpath calculations.

This module provides the low-level operations every other algorithm builds on:
- Angle normalization and directional sweep membership
- Nearest point on a line segment and on a circular arc
- Signed area (shoelace formula)
- Line intersection (bounded segments or infinite lines)
- Segment/rectangle clipping (Liang-Barsky)

All functions are pure and stateless.
"""

import math

from panelroute.domain import TWO_PI, ArcInfo, Point

ARC_ENDPOINT_PENALTY = 0.5

Rect = tuple[float, float, float, float]


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 2*pi)."""
    wrapped = angle % TWO_PI
    # -1e-17 % 2pi rounds to 2pi
    return 0.0 if wrapped >= TWO_PI else wrapped


def angle_offset(angle: float, start_angle: float, clockwise: bool) -> float:
    """Angle travelled from start_angle to angle in the given direction, in [0, 2*pi)."""
    if clockwise:
        return normalize_angle(start_angle - angle)
    return normalize_angle(angle - start_angle)


def angle_in_sweep(angle: float, arc: ArcInfo, epsilon: float = 1e-9) -> bool:
    """Check whether an angle lies within an arc's directional sweep.

    Args:
        angle: Angle to test in radians
        arc: Arc whose sweep is tested
        epsilon: Angular slack at the sweep boundaries

    Returns:
        True if the angle is reached while sweeping from start to end
    """
    sweep = arc.sweep
    if sweep >= TWO_PI - epsilon:
        return True
    offset = angle_offset(angle, arc.start_angle, arc.clockwise)
    return offset <= sweep + epsilon or offset >= TWO_PI - epsilon


def segment_parameter(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Clamped parameter t in [0, 1] of the projection of point onto a segment.

    Degenerate (zero-length) segments return 0.
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq < 1e-10:
        return 0.0

    # t = dot(point - start, end - start) / ||end - start||^2
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    return max(0.0, min(1.0, t))


def nearest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Point, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance) where nearest_point is the closest
        point on the segment and distance is the Euclidean distance to it

    Examples:
        >>> nearest, dist = nearest_point_on_segment(Point(1.0, 1.0), Point(0.0, 0.0), Point(2.0, 0.0))
        >>> nearest, dist
        (Point(x=1.0, y=0.0), 1.0)
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    if dx * dx + dy * dy < 1e-10:
        return seg_start, math.hypot(point.x - seg_start.x, point.y - seg_start.y)

    t = segment_parameter(point, seg_start, seg_end)
    nearest_x = seg_start.x + t * dx
    nearest_y = seg_start.y + t * dy

    distance = math.hypot(point.x - nearest_x, point.y - nearest_y)
    return Point(nearest_x, nearest_y), distance


def nearest_point_on_arc(
    point: Point,
    arc: ArcInfo,
    seg_start: Point,
    seg_end: Point,
    penalty: float = ARC_ENDPOINT_PENALTY,
) -> tuple[Point, float]:
    """Find the closest point on a circular arc to a given point.

    If the point's angle around the center lies inside the arc's directional
    sweep the radial projection is returned. Otherwise the nearer endpoint is
    returned with a fixed distance penalty added, so that an adjacent straight
    segment sharing that endpoint wins the comparison during neighbor searches.

    Args:
        point: The point to project
        arc: Arc description
        seg_start: Start point of the arc segment
        seg_end: End point of the arc segment
        penalty: Distance added for out-of-sweep points

    Returns:
        Tuple of (nearest_point, distance)
    """
    dx = point.x - arc.center.x
    dy = point.y - arc.center.y
    dist_to_center = math.hypot(dx, dy)

    if dist_to_center > 1e-12:
        angle = math.atan2(dy, dx)
        if angle_in_sweep(angle, arc):
            projected = arc.point_at_angle(angle)
            return projected, abs(dist_to_center - arc.radius)

    d_start = point.distance_to(seg_start)
    d_end = point.distance_to(seg_end)
    if d_start <= d_end:
        return seg_start, d_start + penalty
    return seg_end, d_end + penalty


def arc_parameter(point: Point, arc: ArcInfo) -> float:
    """Normalized position t in [0, 1] of a point's angle along an arc.

    Angles outside the sweep snap to whichever end is angularly closer.
    """
    angle = math.atan2(point.y - arc.center.y, point.x - arc.center.x)
    sweep = arc.sweep
    offset = angle_offset(angle, arc.start_angle, arc.clockwise)
    if offset <= sweep:
        return offset / sweep
    # Outside the sweep: distance past the end vs. distance before the start
    if offset - sweep < TWO_PI - offset:
        return 1.0
    return 0.0


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction in the points' own frame:
    - Positive area: counter-clockwise winding (increasing angle)
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def line_intersection(
    p1: Point, p2: Point, p3: Point, p4: Point, bounded: bool = True
) -> Point | None:
    """Find the intersection of line p1-p2 with line p3-p4.

    Uses parametric line equations. With bounded=True both parameters must
    lie within their segments; with bounded=False the lines are treated as
    infinite.

    Args:
        p1: First point of line 1
        p2: Second point of line 1
        p3: First point of line 2
        p4: Second point of line 2
        bounded: Restrict the intersection to both segments

    Returns:
        Intersection point, or None for parallel lines or (bounded) misses
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)

    # Parallel or coincident
    if abs(denom) < 1e-10:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    if bounded and not (0 <= t <= 1 and 0 <= u <= 1):
        return None

    return Point(x1 + t * (x2 - x1), y1 + t * (y2 - y1))


def clip_segment_to_rect(a: Point, b: Point, rect: Rect) -> tuple[Point, Point] | None:
    """Clip a segment against an axis-aligned rectangle (Liang-Barsky).

    Args:
        a: Segment start
        b: Segment end
        rect: (min_x, min_y, max_x, max_y)

    Returns:
        The clipped (start, end) pair, or None if the segment misses the rectangle
    """
    min_x, min_y, max_x, max_y = rect
    dx = b.x - a.x
    dy = b.y - a.y

    t0, t1 = 0.0, 1.0
    for p, q in (
        (-dx, a.x - min_x),
        (dx, max_x - a.x),
        (-dy, a.y - min_y),
        (dy, max_y - a.y),
    ):
        if p == 0:
            if q < 0:
                return None
            continue
        r = q / p
        if p < 0:
            if r > t1:
                return None
            t0 = max(t0, r)
        else:
            if r < t0:
                return None
            t1 = min(t1, r)

    return (
        Point(a.x + t0 * dx, a.y + t0 * dy),
        Point(a.x + t1 * dx, a.y + t1 * dy),
    )


def segment_intersects_rect(a: Point, b: Point, rect: Rect) -> bool:
    """Check whether any part of segment a-b lies inside the rectangle."""
    return clip_segment_to_rect(a, b, rect) is not None


def normalize_rect(corner_a: Point, corner_b: Point) -> Rect:
    """Rectangle spanned by two opposite corners (e.g. a marquee drag)."""
    return (
        min(corner_a.x, corner_b.x),
        min(corner_a.y, corner_b.y),
        max(corner_a.x, corner_b.x),
        max(corner_a.y, corner_b.y),
    )

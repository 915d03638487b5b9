"""Winding detection and tool-radius compensation.

A milling tool cuts a channel one tool radius wide on each side of its
centerline. To land the cut exactly on a board edge the centerline is
offset outward by the tool radius. Which side is "outward" depends on the
traversal direction of the closed outline:

- winding sign +1: clockwise traversal (decreasing angle, negative area)
- winding sign -1: counter-clockwise traversal

Lines shift along their normal (dy, -dx)/len with polarity chosen from the
winding sign. Arcs keep their center and angles; their radius grows when
the arc turns the same way as the outline (convex) and shrinks when it
turns against it (a local indentation). Arcs that collapse below the
minimum radius are dropped.

Consecutive offset pieces are re-joined: straight corners are mitred,
convex corners next to an arc get a round join, and anything else is
bridged with a straight segment.
"""

import math
from collections.abc import Sequence

from panelroute.core.primitives import line_intersection, signed_area
from panelroute.domain import ArcInfo, PathSegment, Point, RoutingSegment

MIN_OFFSET_RADIUS = 0.01
MIN_SEGMENT_LENGTH = 0.001
MITER_LIMIT = 4.0
ARC_SAMPLES = 8
JOIN_EPSILON = 1e-9
SHARED_VERTEX_EPSILON = 1e-6


def compute_outline_winding_sign(outline: Sequence[PathSegment | RoutingSegment]) -> int:
    """Traversal sign of a closed outline.

    Uses the shoelace area over the segment vertices, with arcs sampled
    along their sweep so that outlines made mostly of arcs are measured
    correctly.

    Args:
        outline: Closed sequence of segments

    Returns:
        +1 for clockwise (negative area), -1 otherwise
    """
    points: list[Point] = []
    for seg in outline:
        points.append(seg.start)
        if seg.arc is not None:
            for k in range(1, ARC_SAMPLES):
                points.append(seg.arc.point_at_angle(seg.arc.angle_at(k / ARC_SAMPLES)))

    return 1 if signed_area(points) < 0 else -1


def arc_offset_sign(arc: ArcInfo, winding_sign: int) -> int:
    """+1 when the arc turns with the outline (radius grows), -1 otherwise."""
    return 1 if (winding_sign > 0) == arc.clockwise else -1


def offset_line(
    start: Point,
    end: Point,
    tool_radius: float,
    winding_sign: int,
    min_segment_length: float = MIN_SEGMENT_LENGTH,
) -> RoutingSegment | None:
    """Shift a straight segment outward by the tool radius.

    Args:
        start: Segment start
        end: Segment end
        tool_radius: Offset distance
        winding_sign: Winding sign of the outline the segment belongs to
        min_segment_length: Shorter segments are dropped

    Returns:
        The offset segment, or None for degenerate input
    """
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy)
    if length < min_segment_length:
        return None

    shift = -winding_sign * tool_radius
    nx = dy / length * shift
    ny = -dx / length * shift

    return RoutingSegment(start=start.translated(nx, ny), end=end.translated(nx, ny))


def offset_arc(
    arc: ArcInfo,
    tool_radius: float,
    winding_sign: int,
    min_offset_radius: float = MIN_OFFSET_RADIUS,
) -> RoutingSegment | None:
    """Grow or shrink an arc's radius by the tool radius.

    Args:
        arc: Arc to offset
        tool_radius: Offset distance
        winding_sign: Winding sign of the outline the arc belongs to
        min_offset_radius: Arcs collapsing below this radius are dropped

    Returns:
        The offset arc segment, or None when the tool consumes the feature
    """
    radius = arc.radius + arc_offset_sign(arc, winding_sign) * tool_radius
    if radius < min_offset_radius:
        return None

    offset = ArcInfo(
        center=arc.center,
        radius=radius,
        start_angle=arc.start_angle,
        end_angle=arc.end_angle,
        clockwise=arc.clockwise,
    )
    return RoutingSegment(
        start=offset.point_at_angle(arc.start_angle),
        end=offset.point_at_angle(arc.end_angle),
        arc=offset,
    )


def offset_segment(
    segment: PathSegment | RoutingSegment,
    tool_radius: float,
    winding_sign: int,
    min_offset_radius: float = MIN_OFFSET_RADIUS,
    min_segment_length: float = MIN_SEGMENT_LENGTH,
) -> RoutingSegment | None:
    """Offset a single line or arc segment; None when it degenerates."""
    if segment.arc is not None:
        result = offset_arc(segment.arc, tool_radius, winding_sign, min_offset_radius)
        if result is None or result.length < min_segment_length:
            return None
        return result
    return offset_line(
        segment.start, segment.end, tool_radius, winding_sign, min_segment_length
    )


def segment_tangent(segment: RoutingSegment, at_end: bool) -> tuple[float, float]:
    """Unit direction of travel at the start or end of a segment."""
    if segment.arc is not None:
        angle = segment.arc.end_angle if at_end else segment.arc.start_angle
        if segment.arc.clockwise:
            return math.sin(angle), -math.cos(angle)
        return -math.sin(angle), math.cos(angle)

    dx = segment.end.x - segment.start.x
    dy = segment.end.y - segment.start.y
    length = math.hypot(dx, dy)
    if length < 1e-12:
        return 0.0, 0.0
    return dx / length, dy / length


def _same_direction(a: Point, b: Point, ref_start: Point, ref_end: Point) -> bool:
    return (b.x - a.x) * (ref_end.x - ref_start.x) + (b.y - a.y) * (ref_end.y - ref_start.y) > 0


def _round_join(vertex: Point, start: Point, end: Point, radius: float, clockwise: bool) -> RoutingSegment:
    arc = ArcInfo(
        center=vertex,
        radius=radius,
        start_angle=math.atan2(start.y - vertex.y, start.x - vertex.x),
        end_angle=math.atan2(end.y - vertex.y, end.x - vertex.x),
        clockwise=clockwise,
    )
    return RoutingSegment(start=start, end=end, arc=arc)


def offset_path(
    pieces: Sequence[RoutingSegment],
    tool_radius: float,
    winding_sign: int,
    closed: bool = False,
    min_offset_radius: float = MIN_OFFSET_RADIUS,
    min_segment_length: float = MIN_SEGMENT_LENGTH,
    miter_limit: float = MITER_LIMIT,
) -> list[RoutingSegment]:
    """Offset a connected run of outline pieces and re-join the results.

    Pieces must be in the outline's own orientation (the orientation the
    winding sign was computed for).

    Args:
        pieces: Consecutive outline pieces
        tool_radius: Offset distance
        winding_sign: Winding sign of the outline
        closed: Also join the last piece back to the first
        min_offset_radius: Collapsed arcs below this radius are dropped
        min_segment_length: Degenerate segments below this length are dropped
        miter_limit: Max miter distance from the corner in tool radii

    Returns:
        Offset segments in the same orientation, possibly empty
    """
    pairs: list[tuple[RoutingSegment, RoutingSegment]] = []
    for piece in pieces:
        shifted = offset_segment(
            piece, tool_radius, winding_sign, min_offset_radius, min_segment_length
        )
        if shifted is not None:
            pairs.append((piece, shifted))

    if not pairs:
        return []

    count = len(pairs)
    starts = [shifted.start for _, shifted in pairs]
    ends = [shifted.end for _, shifted in pairs]
    inserts: dict[int, RoutingSegment] = {}

    junctions = count if closed and count > 1 else count - 1
    for k in range(junctions):
        nxt = (k + 1) % count
        original_a, shifted_a = pairs[k]
        original_b, shifted_b = pairs[nxt]

        gap_start = ends[k]
        gap_end = starts[nxt]
        if gap_start.distance_to(gap_end) < JOIN_EPSILON:
            continue

        shared = original_a.end.distance_to(original_b.start) < SHARED_VERTEX_EPSILON

        if shifted_a.arc is None and shifted_b.arc is None:
            corner = line_intersection(
                shifted_a.start, shifted_a.end, shifted_b.start, shifted_b.end, bounded=False
            )
            if corner is not None:
                if shared:
                    reach = corner.distance_to(original_a.end)
                else:
                    reach = min(corner.distance_to(gap_start), corner.distance_to(gap_end))
                keeps_direction = _same_direction(
                    starts[k], corner, shifted_a.start, shifted_a.end
                ) and _same_direction(corner, ends[nxt], shifted_b.start, shifted_b.end)
                if reach <= miter_limit * tool_radius and keeps_direction:
                    ends[k] = corner
                    starts[nxt] = corner
                    continue

        elif shared:
            tax, tay = segment_tangent(original_a, at_end=True)
            tbx, tby = segment_tangent(original_b, at_end=False)
            turn = tax * tby - tay * tbx
            if turn * -winding_sign > 0:
                inserts[k] = _round_join(
                    original_a.end, gap_start, gap_end, tool_radius, clockwise=winding_sign > 0
                )
                continue

        inserts[k] = RoutingSegment(start=gap_start, end=gap_end)

    result: list[RoutingSegment] = []
    for k, (_, shifted) in enumerate(pairs):
        if shifted.arc is None:
            result.append(RoutingSegment(start=starts[k], end=ends[k]))
        else:
            result.append(shifted)
        if k in inserts:
            result.append(inserts[k])

    return result


def offset_outline(
    outline: Sequence[PathSegment],
    tool_radius: float,
    flip: bool = False,
    min_offset_radius: float = MIN_OFFSET_RADIUS,
    min_segment_length: float = MIN_SEGMENT_LENGTH,
    miter_limit: float = MITER_LIMIT,
) -> list[RoutingSegment]:
    """Complete closed tool-centerline contour around an outline.

    Args:
        outline: Closed outline segments
        tool_radius: Offset distance
        flip: Produce the inner-side offset instead of the outer one
        min_offset_radius: Collapsed arcs below this radius are dropped
        min_segment_length: Degenerate segments below this length are dropped
        miter_limit: Max miter distance from the corner in tool radii

    Returns:
        Offset contour segments in outline order
    """
    if not outline:
        return []

    winding_sign = compute_outline_winding_sign(outline)
    if flip:
        winding_sign = -winding_sign

    return offset_path(
        [seg.to_routing_segment() for seg in outline],
        tool_radius,
        winding_sign,
        closed=True,
        min_offset_radius=min_offset_radius,
        min_segment_length=min_segment_length,
        miter_limit=miter_limit,
    )


def path_length(segments: Sequence[RoutingSegment]) -> float:
    """Total length of a path (Euclidean for lines, true arc length for arcs)."""
    return sum(seg.length for seg in segments)

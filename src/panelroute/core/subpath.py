"""Sub-path extraction along a closed outline.

Given two points on a board outline, the extractor builds the connecting
path in both directions around the outline, offsets each candidate by the
tool radius and returns the shorter one (or the one the caller forces).

Endpoints are located explicitly: a caller that already knows where a point
sits on the outline passes a Located hint, otherwise Search() asks the
extractor to find the nearest segment itself. Keeping the two cases as
separate types means a hint is never silently re-derived.

Candidates are assembled in the outline's own orientation and reversed at
the end, so A->B and B->A yield exact mirror images of each other.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from panelroute.core.offset import (
    MIN_OFFSET_RADIUS,
    MIN_SEGMENT_LENGTH,
    MITER_LIMIT,
    compute_outline_winding_sign,
    offset_path,
    path_length,
)
from panelroute.core.primitives import (
    ARC_ENDPOINT_PENALTY,
    arc_parameter,
    nearest_point_on_arc,
    nearest_point_on_segment,
    segment_parameter,
)
from panelroute.domain import ArcInfo, OutlineDirection, PathSegment, Point, RoutingSegment
from panelroute.exceptions import InvalidHintError

MAX_LOCATE_DISTANCE = 2.0


@dataclass(frozen=True, slots=True)
class Located:
    """A position on an outline known in advance.

    Attributes:
        segment_index: Index of the outline segment
        t: Normalized position along that segment (0 = start, 1 = end)
    """

    segment_index: int
    t: float

    def validate(self, outline: Sequence[PathSegment]) -> None:
        """Check that the hint refers to the given outline.

        Raises:
            InvalidHintError: If the index or parameter is out of range
        """
        if not 0 <= self.segment_index < len(outline) or not 0.0 <= self.t <= 1.0:
            raise InvalidHintError(self.segment_index, self.t, len(outline))


@dataclass(frozen=True, slots=True)
class Search:
    """Ask the extractor to locate the point on the outline itself."""


LocationHint = Located | Search

SEARCH = Search()


@dataclass(frozen=True)
class Subpath:
    """Offset path between two outline points.

    Attributes:
        segments: Offset toolpath segments in travel order (may be empty)
        direction: Direction travelled along the outline
        length: Total length of the segments
    """

    segments: list[RoutingSegment] = field(default_factory=list)
    direction: OutlineDirection = OutlineDirection.FORWARD
    length: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.segments


def _distance_to_segment(
    point: Point, segment: PathSegment, penalty: float
) -> tuple[Point, float]:
    if segment.arc is not None:
        return nearest_point_on_arc(point, segment.arc, segment.start, segment.end, penalty)
    return nearest_point_on_segment(point, segment.start, segment.end)


def _parameter_on_segment(nearest: Point, segment: PathSegment) -> float:
    if segment.arc is not None:
        return arc_parameter(nearest, segment.arc)
    return segment_parameter(nearest, segment.start, segment.end)


def _best_location(
    outline: Sequence[PathSegment], point: Point, indices: Sequence[int], penalty: float
) -> tuple[Located, float] | None:
    best: tuple[Located, float] | None = None
    for index in indices:
        segment = outline[index]
        nearest, distance = _distance_to_segment(point, segment, penalty)
        if best is None or distance < best[1]:
            best = (Located(index, _parameter_on_segment(nearest, segment)), distance)
    return best


def locate_on_outline(
    outline: Sequence[PathSegment],
    point: Point,
    max_distance: float = MAX_LOCATE_DISTANCE,
    penalty: float = ARC_ENDPOINT_PENALTY,
) -> Located | None:
    """Find the outline position closest to a point.

    Searches every segment. The first segment wins ties.

    Args:
        outline: Closed outline segments
        point: Query point in panel coordinates
        max_distance: Matches further away than this are rejected
        penalty: Out-of-sweep penalty for arc segments

    Returns:
        The located position, or None when the point is too far from the outline
    """
    best = _best_location(outline, point, range(len(outline)), penalty)
    if best is None or best[1] > max_distance:
        return None
    return best[0]


def track_on_outline(
    outline: Sequence[PathSegment],
    point: Point,
    previous: Located,
    penalty: float = ARC_ENDPOINT_PENALTY,
) -> Located:
    """Follow a dragged point from its previous outline position.

    Only the previous segment and its two neighbours are searched, so a
    drag moves at most one segment per update and never jumps across the
    board. The arc endpoint penalty keeps a straight neighbour winning at
    shared corners.

    Args:
        outline: Closed outline segments
        point: New pointer position
        previous: Position from the previous update
        penalty: Out-of-sweep penalty for arc segments

    Returns:
        The updated position

    Raises:
        InvalidHintError: If previous does not refer to this outline
    """
    previous.validate(outline)
    count = len(outline)
    indices = sorted({(previous.segment_index + k) % count for k in (-1, 0, 1)})
    best = _best_location(outline, point, indices, penalty)
    if best is None:
        return previous
    return best[0]


def _resolve(
    outline: Sequence[PathSegment],
    point: Point,
    hint: LocationHint,
    max_distance: float,
    penalty: float,
) -> Located | None:
    if isinstance(hint, Located):
        hint.validate(outline)
        return hint
    return locate_on_outline(outline, point, max_distance, penalty)


def partial_segment(segment: PathSegment, t0: float, t1: float) -> RoutingSegment:
    """The part of a segment between parameters t0 < t1, in its own direction."""
    if t0 <= 0.0 and t1 >= 1.0:
        return segment.to_routing_segment()

    if segment.arc is None:
        dx = segment.end.x - segment.start.x
        dy = segment.end.y - segment.start.y
        return RoutingSegment(
            start=segment.start.translated(dx * t0, dy * t0),
            end=segment.start.translated(dx * t1, dy * t1),
        )

    arc = segment.arc
    start_angle = arc.angle_at(t0)
    end_angle = arc.angle_at(t1)
    part = ArcInfo(arc.center, arc.radius, start_angle, end_angle, arc.clockwise)
    return RoutingSegment(
        start=arc.point_at_angle(start_angle),
        end=arc.point_at_angle(end_angle),
        arc=part,
    )


def forward_pieces(
    outline: Sequence[PathSegment],
    origin: Located,
    target: Located,
    min_segment_length: float = MIN_SEGMENT_LENGTH,
) -> list[RoutingSegment]:
    """Outline pieces from origin to target in increasing index order.

    When both positions lie on the same segment with origin before target the
    result is a single partial segment. Otherwise the walk wraps around the
    outline. Pieces shorter than min_segment_length are dropped.
    """
    count = len(outline)
    spans: list[tuple[int, float, float]] = []

    if origin.segment_index == target.segment_index and origin.t <= target.t:
        spans.append((origin.segment_index, origin.t, target.t))
    else:
        spans.append((origin.segment_index, origin.t, 1.0))
        index = (origin.segment_index + 1) % count
        while index != target.segment_index:
            spans.append((index, 0.0, 1.0))
            index = (index + 1) % count
        spans.append((target.segment_index, 0.0, target.t))

    pieces: list[RoutingSegment] = []
    for index, t0, t1 in spans:
        segment = outline[index]
        if (t1 - t0) * segment.length < min_segment_length:
            continue
        pieces.append(partial_segment(segment, t0, t1))
    return pieces


def reverse_path(segments: Sequence[RoutingSegment]) -> list[RoutingSegment]:
    """The same path travelled end to start."""
    return [seg.reversed() for seg in reversed(segments)]


def get_outline_subpath(
    outline: Sequence[PathSegment],
    from_point: Point,
    to_point: Point,
    tool_radius: float,
    force_direction: OutlineDirection | None = None,
    from_hint: LocationHint = SEARCH,
    to_hint: LocationHint = SEARCH,
    flip_offset: bool = False,
    max_locate_distance: float = MAX_LOCATE_DISTANCE,
    arc_endpoint_penalty: float = ARC_ENDPOINT_PENALTY,
    min_offset_radius: float = MIN_OFFSET_RADIUS,
    min_segment_length: float = MIN_SEGMENT_LENGTH,
    miter_limit: float = MITER_LIMIT,
) -> Subpath:
    """Offset path between two points on a closed outline.

    Process:
    1. Locate both endpoints (hint or global search)
    2. Build the forward (increasing index) and reverse candidates
    3. Offset each candidate by the tool radius
    4. Return the forced direction, or the shorter candidate (forward wins ties)

    Args:
        outline: Closed outline segments
        from_point: Path start in panel coordinates
        to_point: Path end in panel coordinates
        tool_radius: Offset distance
        force_direction: Return this direction regardless of length
        from_hint: Known position of from_point, or Search()
        to_hint: Known position of to_point, or Search()
        flip_offset: Offset to the inner side instead of the outer side
        max_locate_distance: Search radius for endpoints without a hint
        arc_endpoint_penalty: Out-of-sweep penalty for arc segments during search
        min_offset_radius: Collapsed arcs below this radius are dropped
        min_segment_length: Degenerate pieces below this length are dropped
        miter_limit: Max miter distance from a corner in tool radii

    Returns:
        The selected subpath; empty when an endpoint is not on the outline

    Raises:
        InvalidHintError: If a Located hint does not refer to this outline
    """
    if not outline:
        return Subpath()

    origin = _resolve(
        outline, from_point, from_hint, max_locate_distance, arc_endpoint_penalty
    )
    target = _resolve(outline, to_point, to_hint, max_locate_distance, arc_endpoint_penalty)
    if origin is None or target is None:
        return Subpath()

    winding_sign = compute_outline_winding_sign(outline)
    if flip_offset:
        winding_sign = -winding_sign

    def build(start: Located, end: Located) -> list[RoutingSegment]:
        pieces = forward_pieces(outline, start, end, min_segment_length)
        return offset_path(
            pieces,
            tool_radius,
            winding_sign,
            closed=False,
            min_offset_radius=min_offset_radius,
            min_segment_length=min_segment_length,
            miter_limit=miter_limit,
        )

    forward = build(origin, target)
    reverse = reverse_path(build(target, origin))
    forward_length = path_length(forward)
    reverse_length = path_length(reverse)

    if force_direction is None:
        if forward_length <= reverse_length:
            force_direction = OutlineDirection.FORWARD
        else:
            force_direction = OutlineDirection.REVERSE

    if force_direction == OutlineDirection.FORWARD:
        return Subpath(forward, OutlineDirection.FORWARD, forward_length)
    return Subpath(reverse, OutlineDirection.REVERSE, reverse_length)

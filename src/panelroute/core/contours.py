"""Routing contour lifecycle.

Contours are created by auto-generation, free drawing or by following a
board outline; they are edited by replacing their segments or dragging
their endpoints, and destroyed individually (with their sync copies) or
all at once.

Every function returns a new contour list and leaves its input untouched.
Edits to a manual contour finish with a master sync so sibling copies
always reflect the latest master geometry. Sync copies and auto contours
are read-only: edits targeting them return the list unchanged.
"""

import math
from collections.abc import Callable, Sequence
from dataclasses import replace

from panelroute.config import RoutingConfig
from panelroute.core.outline import board_display_size, panel_corner_arcs
from panelroute.core.subpath import SEARCH, LocationHint, get_outline_subpath
from panelroute.core.sync import new_contour_id, sync_master_contours
from panelroute.domain import (
    ArcInfo,
    Board,
    BoardInstance,
    ContourType,
    CreationMethod,
    OutlineDirection,
    Panel,
    PathSegment,
    Point,
    RoutingContour,
    RoutingSegment,
    Tab,
    TabEdge,
    TabType,
)

IdFactory = Callable[[], str]


def _interpolate(a: Point, b: Point, t: float) -> Point:
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def board_contour_segments(
    board: Board,
    instance: BoardInstance,
    tabs: Sequence[Tab],
    offset: float,
) -> list[RoutingSegment]:
    """Rectangular toolpath around a placement, interrupted at its tabs.

    The placement's footprint is grown by offset on every side. Edges run
    bottom, right, top, left. A tab at position p (0..1 along the board
    edge) leaves a gap of its width centered on the matching point of the
    offset edge. V-score tabs do not interrupt the cut.

    Args:
        board: Board of the placement
        instance: The placement
        tabs: Tabs of the panel; only those of this placement are used
        offset: Distance between board edge and tool centerline

    Returns:
        Line segments of the contour
    """
    width, height = board_display_size(board, instance)
    bx, by = instance.position.x, instance.position.y
    x1, y1 = bx - offset, by - offset
    x2, y2 = bx + width + offset, by + height + offset

    edges = [
        (Point(x1, y1), Point(x2, y1), TabEdge.BOTTOM, width),
        (Point(x2, y1), Point(x2, y2), TabEdge.RIGHT, height),
        (Point(x2, y2), Point(x1, y2), TabEdge.TOP, width),
        (Point(x1, y2), Point(x1, y1), TabEdge.LEFT, height),
    ]

    instance_tabs = [
        t for t in tabs if t.board_instance_id == instance.id and t.tab_type != TabType.VSCORE
    ]

    segments: list[RoutingSegment] = []
    for start, end, edge, board_edge_length in edges:
        edge_tabs = [t for t in instance_tabs if t.edge == edge]
        if not edge_tabs:
            segments.append(RoutingSegment(start=start, end=end))
            continue

        offset_edge_length = board_edge_length + 2 * offset
        gaps = []
        for tab in edge_tabs:
            center = (tab.position * board_edge_length + offset) / offset_edge_length
            half_width = tab.width / 2 / offset_edge_length
            gaps.append((max(0.0, center - half_width), min(1.0, center + half_width)))
        gaps.sort()

        position = 0.0
        for gap_start, gap_end in gaps:
            if gap_start > position:
                segments.append(
                    RoutingSegment(
                        start=_interpolate(start, end, position),
                        end=_interpolate(start, end, gap_start),
                    )
                )
            position = max(position, gap_end)

        if position < 1.0:
            segments.append(RoutingSegment(start=_interpolate(start, end, position), end=end))

    return segments


def panel_outline_segments(
    width: float, height: float, corner_radius: float = 0.0
) -> list[RoutingSegment]:
    """Closed outer contour of the panel frame.

    Square frames give four edges. Rounded frames alternate straight edges
    and quarter-circle arcs, starting with the edge along y = 0.
    """
    w, h = width, height
    r = min(corner_radius, w / 2, h / 2)

    if r <= 0:
        corners = [Point(0, 0), Point(w, 0), Point(w, h), Point(0, h)]
        return [
            RoutingSegment(start=corners[i], end=corners[(i + 1) % 4]) for i in range(4)
        ]

    arcs = panel_corner_arcs(w, h, r)
    straight = [
        (Point(r, 0), Point(w - r, 0)),
        (Point(w, r), Point(w, h - r)),
        (Point(w - r, h), Point(r, h)),
        (Point(0, h - r), Point(0, r)),
    ]

    segments: list[RoutingSegment] = []
    for i, (line_start, line_end) in enumerate(straight):
        if line_start.distance_to(line_end) > 0:
            segments.append(RoutingSegment(start=line_start, end=line_end))
        arc_end = straight[(i + 1) % 4][0]
        segments.append(RoutingSegment(start=line_end, end=arc_end, arc=arcs[i]))
    return segments


def auto_generate_contours(
    panel: Panel,
    routing_config: RoutingConfig | None = None,
    id_factory: IdFactory = new_contour_id,
) -> list[RoutingContour]:
    """Regenerate the automatic contours of a panel.

    Existing auto contours are replaced. Manual contours and their sync
    copies are kept.

    Args:
        panel: Panel layout
        routing_config: Tool and generation settings
        id_factory: Id generator for new contours

    Returns:
        Updated contour list
    """
    config = routing_config or RoutingConfig()
    offset = config.tool_diameter / 2 + config.clearance

    generated: list[RoutingContour] = []

    if config.generate_board_outlines:
        for board, instance in panel.placements():
            generated.append(
                RoutingContour(
                    id=id_factory(),
                    contour_type=ContourType.BOARD_OUTLINE,
                    segments=board_contour_segments(board, instance, panel.tabs, offset),
                    tool_diameter=config.tool_diameter,
                    board_instance_id=instance.id,
                    creation_method=CreationMethod.AUTO,
                )
            )

    if config.generate_panel_outline:
        generated.append(
            RoutingContour(
                id=id_factory(),
                contour_type=ContourType.PANEL_OUTLINE,
                segments=panel_outline_segments(panel.width, panel.height, panel.corner_radius),
                tool_diameter=config.tool_diameter,
                creation_method=CreationMethod.AUTO,
            )
        )

    manual = [c for c in panel.routing_contours if c.creation_method != CreationMethod.AUTO]
    return generated + manual


def find_contour(contours: Sequence[RoutingContour], contour_id: str) -> RoutingContour | None:
    for contour in contours:
        if contour.id == contour_id:
            return contour
    return None


def add_routing_contour(
    contours: Sequence[RoutingContour],
    contour: RoutingContour,
    instances: Sequence[BoardInstance],
    id_factory: IdFactory = new_contour_id,
) -> list[RoutingContour]:
    """Append a contour; manual contours trigger a master sync."""
    updated = list(contours) + [contour]
    if contour.creation_method == CreationMethod.AUTO:
        return updated
    return sync_master_contours(instances, updated, id_factory)


def remove_routing_contour(
    contours: Sequence[RoutingContour],
    contour_id: str,
    instances: Sequence[BoardInstance],
    id_factory: IdFactory = new_contour_id,
) -> list[RoutingContour]:
    """Remove a contour together with every sync copy derived from it.

    Sync copies themselves cannot be removed; the list is returned unchanged.
    """
    target = find_contour(contours, contour_id)
    if target is None or target.is_sync_copy:
        return list(contours)

    remaining = [
        c for c in contours if c.id != contour_id and c.master_contour_id != contour_id
    ]
    return sync_master_contours(instances, remaining, id_factory)


def clear_routing_contours() -> list[RoutingContour]:
    """Contour list after removing every contour, masters and copies alike."""
    return []


def _edit(
    contours: Sequence[RoutingContour],
    contour_id: str,
    instances: Sequence[BoardInstance],
    change: Callable[[RoutingContour], RoutingContour],
    id_factory: IdFactory,
) -> list[RoutingContour]:
    target = find_contour(contours, contour_id)
    if target is None or not target.is_editable:
        return list(contours)

    updated = [change(c) if c.id == contour_id else c for c in contours]
    return sync_master_contours(instances, updated, id_factory)


def replace_contour_segments(
    contours: Sequence[RoutingContour],
    contour_id: str,
    segments: Sequence[RoutingSegment],
    instances: Sequence[BoardInstance],
    outline_direction: OutlineDirection | None = None,
    id_factory: IdFactory = new_contour_id,
) -> list[RoutingContour]:
    """Replace all segments of a manual contour.

    The outline direction is only updated when one is given.
    """

    def change(contour: RoutingContour) -> RoutingContour:
        if outline_direction is None:
            return replace(contour, segments=list(segments))
        return replace(contour, segments=list(segments), outline_direction=outline_direction)

    return _edit(contours, contour_id, instances, change, id_factory)


def _move_arc_endpoint(arc: ArcInfo, point: Point, at_start: bool) -> ArcInfo:
    angle = math.atan2(point.y - arc.center.y, point.x - arc.center.x)
    if at_start:
        return replace(arc, start_angle=angle)
    return replace(arc, end_angle=angle)


def update_contour_endpoints(
    contours: Sequence[RoutingContour],
    contour_id: str,
    instances: Sequence[BoardInstance],
    start: Point | None = None,
    end: Point | None = None,
    id_factory: IdFactory = new_contour_id,
) -> list[RoutingContour]:
    """Move the start of the first segment and/or the end of the last one.

    Arc segments keep their center and radius; the moved endpoint's angle
    is updated to follow the new point.
    """

    def change(contour: RoutingContour) -> RoutingContour:
        segments = list(contour.segments)
        if not segments:
            return contour
        if start is not None:
            first = segments[0]
            arc = _move_arc_endpoint(first.arc, start, True) if first.arc else None
            segments[0] = RoutingSegment(start=start, end=first.end, arc=arc)
        if end is not None:
            last = segments[-1]
            arc = _move_arc_endpoint(last.arc, end, False) if last.arc else None
            segments[-1] = RoutingSegment(start=last.start, end=end, arc=arc)
        return replace(contour, segments=segments)

    return _edit(contours, contour_id, instances, change, id_factory)


def nearest_instance(
    point: Point, instances: Sequence[BoardInstance], boards: Sequence[Board]
) -> BoardInstance | None:
    """Placement whose footprint center is closest to a point."""
    boards_by_id = {board.id: board for board in boards}
    best: BoardInstance | None = None
    best_distance = math.inf
    for instance in instances:
        board = boards_by_id.get(instance.board_id)
        if board is None:
            continue
        width, height = board_display_size(board, instance)
        center = Point(instance.position.x + width / 2, instance.position.y + height / 2)
        distance = center.distance_to(point)
        if distance < best_distance:
            best = instance
            best_distance = distance
    return best


def finalize_free_draw(
    points: Sequence[Point],
    instances: Sequence[BoardInstance],
    boards: Sequence[Board],
    tool_diameter: float = 2.0,
    id_factory: IdFactory = new_contour_id,
) -> RoutingContour | None:
    """Turn a free-drawn polyline into a routing contour.

    The contour is assigned to the placement nearest the points' centroid
    so that master sync picks it up.

    Args:
        points: Clicked points in panel coordinates
        instances: Board placements
        boards: Board library
        tool_diameter: Milling tool diameter
        id_factory: Id generator

    Returns:
        The new contour, or None with fewer than two points
    """
    if len(points) < 2:
        return None

    segments = [
        RoutingSegment(start=points[i], end=points[i + 1]) for i in range(len(points) - 1)
    ]
    centroid = Point(
        sum(p.x for p in points) / len(points),
        sum(p.y for p in points) / len(points),
    )
    owner = nearest_instance(centroid, instances, boards)

    return RoutingContour(
        id=id_factory(),
        contour_type=ContourType.BOARD_OUTLINE,
        segments=segments,
        tool_diameter=tool_diameter,
        board_instance_id=owner.id if owner is not None else None,
        creation_method=CreationMethod.FREE_DRAW,
    )


def create_follow_outline_contour(
    outline: Sequence[PathSegment],
    from_point: Point,
    to_point: Point,
    instance_id: str,
    tool_diameter: float = 2.0,
    force_direction: OutlineDirection | None = None,
    flip_offset: bool = False,
    id_factory: IdFactory = new_contour_id,
) -> RoutingContour | None:
    """Commit a contour that follows a board outline between two points.

    Returns:
        The new contour, or None when no usable path exists
    """
    subpath = get_outline_subpath(
        outline,
        from_point,
        to_point,
        tool_diameter / 2,
        force_direction=force_direction,
        flip_offset=flip_offset,
    )
    if subpath.is_empty:
        return None

    return RoutingContour(
        id=id_factory(),
        contour_type=ContourType.BOARD_OUTLINE,
        segments=subpath.segments,
        tool_diameter=tool_diameter,
        board_instance_id=instance_id,
        creation_method=CreationMethod.FOLLOW_OUTLINE,
        outline_direction=subpath.direction,
    )


def reroute_follow_outline(
    contours: Sequence[RoutingContour],
    contour_id: str,
    outline: Sequence[PathSegment],
    from_point: Point,
    to_point: Point,
    instances: Sequence[BoardInstance],
    force_direction: OutlineDirection | None = None,
    from_hint: LocationHint = SEARCH,
    to_hint: LocationHint = SEARCH,
    flip_offset: bool = False,
    id_factory: IdFactory = new_contour_id,
) -> list[RoutingContour]:
    """Recompute a follow-outline contour after one of its endpoints moved.

    An empty subpath leaves the contour untouched.

    Args:
        contours: Current contours
        contour_id: Contour being dragged
        outline: Outline of the contour's placement
        from_point: New start point
        to_point: New end point
        instances: Board placements (for the sync)
        force_direction: Keep this direction during an active drag
        from_hint: Known outline position of from_point
        to_hint: Known outline position of to_point
        flip_offset: Offset to the inner side
        id_factory: Id generator for new sync copies

    Returns:
        Updated contour list
    """
    target = find_contour(contours, contour_id)
    if target is None or not target.is_editable:
        return list(contours)

    subpath = get_outline_subpath(
        outline,
        from_point,
        to_point,
        target.tool_diameter / 2,
        force_direction=force_direction,
        from_hint=from_hint,
        to_hint=to_hint,
        flip_offset=flip_offset,
    )
    if subpath.is_empty:
        return list(contours)

    return replace_contour_segments(
        contours,
        contour_id,
        subpath.segments,
        instances,
        outline_direction=subpath.direction,
        id_factory=id_factory,
    )

"""Board outline reconstruction in panel coordinates.

The outline builder walks a board's outline commands in drawing order and
turns them into a closed sequence of line/arc path segments in panel
coordinates. Every point passes through transform_point_to_panel:

1. Layer rotation (0/90/180/270) about the origin, offset so the drawing
   stays in the positive quadrant
2. Vertical flip from the Y-up drawing frame to the Y-down panel frame
3. Optional mirroring (mirror_x flips Y, mirror_y flips X)
4. Instance rotation and translation

Steps 2 and 3 are reflections; each one inverts the direction of every arc.
"""

import math

from panelroute.domain import (
    ArcInfo,
    Board,
    BoardInstance,
    CommandType,
    DrawCommand,
    PathSegment,
    Point,
    directional_sweep,
)

MIN_SEGMENT_LENGTH = 0.001
MIN_ARC_RADIUS = 0.01
FULL_CIRCLE_GAP = 0.01


def board_display_size(board: Board, instance: BoardInstance) -> tuple[float, float]:
    """Width and height of a placement's footprint on the panel."""
    effective_w, effective_h = board.effective_size
    if instance.rotation in (90, 270):
        return effective_h, effective_w
    return effective_w, effective_h


def reverses_orientation(board: Board) -> bool:
    """True when the board-to-panel transform reverses arc direction.

    The vertical flip always reflects; each mirror flag adds one more reflection.
    """
    reflections = 1 + int(board.mirror_x) + int(board.mirror_y)
    return reflections % 2 == 1


def transform_point_to_panel(point: Point, board: Board, instance: BoardInstance) -> Point:
    """Map a board-local drawing point (Y up) to panel coordinates (Y down).

    Args:
        point: Point in board-local drawing coordinates
        board: Board supplying layer rotation, size and mirroring
        instance: Placement supplying position and rotation

    Returns:
        Point in panel coordinates
    """
    x, y = point.x, point.y

    if board.layer_rotation == 90:
        x, y = -y + board.height, x
    elif board.layer_rotation == 180:
        x, y = board.width - x, board.height - y
    elif board.layer_rotation == 270:
        x, y = y, -x + board.width

    effective_w, effective_h = board.effective_size

    y = effective_h - y

    if board.mirror_x:
        y = effective_h - y
    if board.mirror_y:
        x = effective_w - x

    px, py = instance.position.x, instance.position.y
    if instance.rotation == 90:
        return Point(px + effective_h - y, py + x)
    if instance.rotation == 180:
        return Point(px + effective_w - x, py + effective_h - y)
    if instance.rotation == 270:
        return Point(px + y, py + effective_w - x)
    return Point(px + x, py + y)


def rectangle_outline(board: Board, instance: BoardInstance) -> list[PathSegment]:
    """Four edges of a placement's footprint, starting at its position corner."""
    width, height = board_display_size(board, instance)
    bx, by = instance.position.x, instance.position.y

    corners = [
        Point(bx, by),
        Point(bx + width, by),
        Point(bx + width, by + height),
        Point(bx, by + height),
    ]

    segments: list[PathSegment] = []
    cumulative = 0.0
    for i, start in enumerate(corners):
        end = corners[(i + 1) % len(corners)]
        length = start.distance_to(end)
        segments.append(
            PathSegment(start=start, end=end, cumulative_distance=cumulative, length=length)
        )
        cumulative += length
    return segments


def transform_arc_command(
    cmd: DrawCommand, board: Board, instance: BoardInstance
) -> tuple[Point, Point, ArcInfo] | None:
    """Transform a native arc command into a panel-space arc.

    Args:
        cmd: Arc command with start, end and center
        board: Board the command belongs to
        instance: Placement of the board

    Returns:
        Tuple of (start, end, arc) in panel coordinates, or None for
        incomplete commands and arcs with a collapsed radius
    """
    if cmd.command_type != CommandType.ARC:
        return None
    if cmd.start is None or cmd.end is None or cmd.center is None:
        return None

    start = transform_point_to_panel(cmd.start, board, instance)
    end = transform_point_to_panel(cmd.end, board, instance)
    center = transform_point_to_panel(cmd.center, board, instance)

    radius = start.distance_to(center)
    if radius < MIN_ARC_RADIUS:
        return None

    start_angle = math.atan2(start.y - center.y, start.x - center.x)
    if cmd.start.distance_to(cmd.end) < FULL_CIRCLE_GAP:
        end_angle = start_angle
    else:
        end_angle = math.atan2(end.y - center.y, end.x - center.x)

    clockwise = cmd.clockwise != reverses_orientation(board)
    return start, end, ArcInfo(center, radius, start_angle, end_angle, clockwise)


def build_outline_segments(board: Board, instance: BoardInstance) -> list[PathSegment]:
    """Build a placement's closed outline as panel-space path segments.

    Line commands become straight segments, arc commands become arc
    segments whose length is the true arc length. Move and flash commands
    are skipped, as are zero-length pieces. Boards without usable outline
    commands fall back to their rectangular footprint.

    Args:
        board: The board to trace
        instance: The placement to trace it for

    Returns:
        Ordered path segments with cumulative distances
    """
    outline_layer = board.outline_layer
    if outline_layer is None or not outline_layer.commands:
        return rectangle_outline(board, instance)

    segments: list[PathSegment] = []
    cumulative = 0.0

    for cmd in outline_layer.commands:
        if cmd.command_type == CommandType.LINE:
            if cmd.start is None or cmd.end is None:
                continue
            start = transform_point_to_panel(cmd.start, board, instance)
            end = transform_point_to_panel(cmd.end, board, instance)
            length = start.distance_to(end)
            if length > MIN_SEGMENT_LENGTH:
                segments.append(PathSegment(start, end, cumulative, length))
                cumulative += length

        elif cmd.is_complete_arc:
            transformed = transform_arc_command(cmd, board, instance)
            if transformed is None:
                continue
            start, end, arc = transformed
            sweep = directional_sweep(arc.start_angle, arc.end_angle, arc.clockwise)
            length = arc.radius * sweep
            if length < MIN_SEGMENT_LENGTH:
                continue
            segments.append(PathSegment(start, end, cumulative, length, arc))
            cumulative += length

    if not segments:
        return rectangle_outline(board, instance)

    return segments


def panel_corner_arcs(width: float, height: float, corner_radius: float) -> list[ArcInfo]:
    """Quarter-circle fillets of a rounded panel frame.

    Arcs run with increasing angle (counter-clockwise in the Y-down panel
    frame) in outline order: the corner at (w, 0), then (w, h), (0, h) and
    finally (0, 0). A zero radius yields no arcs.
    """
    if corner_radius <= 0:
        return []

    r = corner_radius
    half_pi = math.pi / 2
    return [
        ArcInfo(Point(width - r, r), r, 3 * half_pi, 4 * half_pi, clockwise=False),
        ArcInfo(Point(width - r, height - r), r, 0.0, half_pi, clockwise=False),
        ArcInfo(Point(r, height - r), r, half_pi, 2 * half_pi, clockwise=False),
        ArcInfo(Point(r, r), r, 2 * half_pi, 3 * half_pi, clockwise=False),
    ]

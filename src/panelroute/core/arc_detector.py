"""Arc recovery from linearized outlines.

Many CAD tools export circles and fillets as long runs of short line
segments. The detector scans the outline's point list once, fits a circle
to a short window and grows the run while subsequent points stay on that
circle. Accepted runs are refit with a least-squares circle.

The scan is single pass and linear time, which keeps it usable while the
user is interacting with the panel. It is deterministic for a given
(tolerance, min_points) but may miss arcs that overlap a rejected window.
"""

import math

from panelroute.core.circle_fit import circumcenter, least_squares_circle_fit
from panelroute.domain import TWO_PI, Board, CommandType, DetectedArc, DrawCommand, Point

DEFAULT_TOLERANCE = 0.15
DEFAULT_MIN_POINTS = 5
DEFAULT_MIN_RADIUS = 0.3
DEFAULT_MAX_RADIUS = 500.0
FULL_CIRCLE_GAP = 0.1
FULL_CIRCLE_MIN_POINTS = 12


def _turning_angle(points: list[Point], center: Point) -> float:
    """Signed angle swept by a run of points around a center."""
    total = 0.0
    prev = math.atan2(points[0].y - center.y, points[0].x - center.x)
    for p in points[1:]:
        angle = math.atan2(p.y - center.y, p.x - center.x)
        delta = angle - prev
        if delta > math.pi:
            delta -= TWO_PI
        elif delta < -math.pi:
            delta += TWO_PI
        total += delta
        prev = angle
    return total


def detect_arcs_from_points(
    points: list[Point],
    tolerance: float = DEFAULT_TOLERANCE,
    min_points: int = DEFAULT_MIN_POINTS,
    min_radius: float = DEFAULT_MIN_RADIUS,
    max_radius: float = DEFAULT_MAX_RADIUS,
    full_circle_gap: float = FULL_CIRCLE_GAP,
    full_circle_min_points: int = FULL_CIRCLE_MIN_POINTS,
) -> list[DetectedArc]:
    """Find runs of polyline points that lie on a common circle.

    Process for each candidate start index i:
    1. Fit a circle through points[i], a midpoint and points[i + min_points - 1]
    2. Reject collinear windows and radii outside [min_radius, max_radius]
    3. Extend the run while each point's distance from the center stays
       within tolerance of the radius
    4. Runs of at least min_points are refit by least squares and emitted;
       scanning resumes after the run. Otherwise advance by one point.

    Args:
        points: Ordered outline points
        tolerance: Max radial deviation in mm
        min_points: Minimum run length
        min_radius: Smallest accepted radius in mm
        max_radius: Largest accepted radius in mm
        full_circle_gap: Closing distance for full circles in mm
        full_circle_min_points: A full circle needs more points than this

    Returns:
        Detected arcs in scan order
    """
    n = len(points)
    if n < min_points:
        return []

    arcs: list[DetectedArc] = []
    i = 0

    while i < n - min_points + 1:
        p1 = points[i]
        p2 = points[min(i + min_points // 2, n - 1)]
        p3 = points[min(i + min_points - 1, n - 1)]

        circle = circumcenter(p1, p2, p3)
        if circle is None or circle[1] < min_radius or circle[1] > max_radius:
            i += 1
            continue

        center, radius = circle
        arc_end = i
        for j in range(i, n):
            dist = math.hypot(points[j].x - center.x, points[j].y - center.y)
            if abs(dist - radius) <= tolerance:
                arc_end = j
            else:
                break

        run_length = arc_end - i + 1
        if run_length < min_points:
            i += 1
            continue

        run = points[i : arc_end + 1]
        refined = least_squares_circle_fit(run)
        if refined is not None:
            center, radius = refined

        start_point = points[i]
        end_point = points[arc_end]
        turning = _turning_angle(run, center)

        is_full_circle = (
            start_point.distance_to(end_point) < full_circle_gap
            and run_length > full_circle_min_points
        )

        if is_full_circle:
            start_angle, end_angle, sweep = 0.0, TWO_PI, TWO_PI
        else:
            start_angle = math.atan2(start_point.y - center.y, start_point.x - center.x)
            end_angle = math.atan2(end_point.y - center.y, end_point.x - center.x)
            sweep = min(abs(turning), TWO_PI)

        arcs.append(
            DetectedArc(
                center=center,
                radius=radius,
                start_angle=start_angle,
                end_angle=end_angle,
                start_point=start_point,
                end_point=end_point,
                clockwise=turning < 0,
                sweep=sweep,
            )
        )

        i = arc_end + 1

    return arcs


def extract_outline_data(board: Board) -> tuple[list[Point], list[DrawCommand]]:
    """Collect the outline point list and the native arc commands of a board.

    Uses the outline layer when the board has one, otherwise every layer.
    Points are the end points of line and arc commands, in drawing order.

    Args:
        board: Board to inspect

    Returns:
        Tuple of (points, native_arcs) in board-local coordinates
    """
    outline_layer = board.outline_layer
    layers = [outline_layer] if outline_layer is not None else board.layers

    points: list[Point] = []
    native_arcs: list[DrawCommand] = []

    for layer in layers:
        for cmd in layer.commands:
            if cmd.command_type == CommandType.LINE and cmd.end is not None:
                points.append(cmd.end)
            elif cmd.command_type == CommandType.ARC:
                if cmd.is_complete_arc:
                    native_arcs.append(cmd)
                if cmd.end is not None:
                    points.append(cmd.end)

    return points, native_arcs


def count_arcs_in_board(
    board: Board,
    tolerance: float = DEFAULT_TOLERANCE,
    min_points: int = DEFAULT_MIN_POINTS,
    min_radius: float = DEFAULT_MIN_RADIUS,
) -> int:
    """Number of arcs a board's outline offers for snapping.

    Native arc commands are counted when present; otherwise arcs are
    recovered from the linearized outline.
    """
    points, native_arcs = extract_outline_data(board)
    if native_arcs:
        return len(native_arcs)
    return len(
        detect_arcs_from_points(
            points, tolerance=tolerance, min_points=min_points, min_radius=min_radius
        )
    )

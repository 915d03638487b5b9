"""Nearest-arc lookup for interactive snapping.

Mousebite cuts are centered on outline arcs. When the user clicks near a
rounded corner, this module finds the arc under the pointer from three
sources:

- native arc commands of every placed board (transformed to panel space)
- arcs recovered by the arc detector from linearized outlines
- the four corner fillets of a rounded panel frame

A candidate only counts when the query point's angle around the center lies
inside the arc's directional sweep; being at the right radius is not enough.
"""

import math
from dataclasses import dataclass

from panelroute.core.arc_detector import (
    DEFAULT_MIN_POINTS,
    DEFAULT_MIN_RADIUS,
    DEFAULT_TOLERANCE,
    detect_arcs_from_points,
    extract_outline_data,
)
from panelroute.core.outline import (
    panel_corner_arcs,
    reverses_orientation,
    transform_arc_command,
    transform_point_to_panel,
)
from panelroute.core.primitives import angle_in_sweep
from panelroute.domain import ArcInfo, Board, BoardInstance, DetectedArc, Panel, Point

MAX_DISTANCE = 20.0
DUPLICATE_CENTER_TOLERANCE = 0.5
DUPLICATE_RADIUS_TOLERANCE = 0.5
MIN_RADIUS = 0.1
MIN_POINTS_FOR_DETECTION = 6


@dataclass(frozen=True, slots=True)
class NearestArcResult:
    """The arc closest to a query point.

    Attributes:
        center: Arc center in panel coordinates
        radius: Arc radius
        click_angle: Angle of the query point around the center (radians)
        instance_id: Board instance owning the arc, None for panel corners
        distance: Distance from the query point to the arc
    """

    center: Point
    radius: float
    click_angle: float
    instance_id: str | None
    distance: float


def _is_duplicate(
    arc: ArcInfo,
    accepted: list[ArcInfo],
    center_tolerance: float,
    radius_tolerance: float,
) -> bool:
    return any(
        arc.center.distance_to(other.center) < center_tolerance
        and abs(arc.radius - other.radius) < radius_tolerance
        for other in accepted
    )


def detected_arc_to_panel(detected: DetectedArc, board: Board, instance: BoardInstance) -> ArcInfo:
    """Move an arc found in board-local points into panel coordinates.

    The radius is kept (the transform is an isometry); the direction flips
    when the board transform reflects. Full circles keep coincident angles.
    """
    center = transform_point_to_panel(detected.center, board, instance)
    clockwise = detected.clockwise != reverses_orientation(board)

    if detected.is_full_circle:
        return ArcInfo(center, detected.radius, 0.0, 0.0, clockwise)

    start = transform_point_to_panel(detected.start_point, board, instance)
    end = transform_point_to_panel(detected.end_point, board, instance)
    return ArcInfo(
        center=center,
        radius=detected.radius,
        start_angle=math.atan2(start.y - center.y, start.x - center.x),
        end_angle=math.atan2(end.y - center.y, end.x - center.x),
        clockwise=clockwise,
    )


def collect_board_arcs(
    board: Board,
    instance: BoardInstance,
    duplicate_center_tolerance: float = DUPLICATE_CENTER_TOLERANCE,
    duplicate_radius_tolerance: float = DUPLICATE_RADIUS_TOLERANCE,
    min_radius: float = MIN_RADIUS,
    min_points_for_detection: int = MIN_POINTS_FOR_DETECTION,
    tolerance: float = DEFAULT_TOLERANCE,
    min_points: int = DEFAULT_MIN_POINTS,
    detection_min_radius: float = DEFAULT_MIN_RADIUS,
) -> list[ArcInfo]:
    """Every snapping candidate of one placement, in panel coordinates.

    Native arcs come first. Detected arcs that duplicate an already
    collected arc (close center and radius) are skipped.

    Args:
        board: Board to inspect
        instance: Placement of the board
        duplicate_center_tolerance: Max center distance of a duplicate
        duplicate_radius_tolerance: Max radius difference of a duplicate
        min_radius: Native arcs below this radius are ignored
        min_points_for_detection: Shorter outlines are not scanned
        tolerance: Arc detector tolerance
        min_points: Arc detector minimum run length
        detection_min_radius: Arc detector minimum radius

    Returns:
        List of arcs
    """
    points, native_arcs = extract_outline_data(board)
    arcs: list[ArcInfo] = []

    for cmd in native_arcs:
        transformed = transform_arc_command(cmd, board, instance)
        if transformed is None:
            continue
        _, _, arc = transformed
        if arc.radius < min_radius:
            continue
        arcs.append(arc)

    if len(points) >= min_points_for_detection:
        detected = detect_arcs_from_points(
            points, tolerance=tolerance, min_points=min_points, min_radius=detection_min_radius
        )
        for candidate in detected:
            arc = detected_arc_to_panel(candidate, board, instance)
            if _is_duplicate(arc, arcs, duplicate_center_tolerance, duplicate_radius_tolerance):
                continue
            arcs.append(arc)

    return arcs


def find_nearest_arc_at_point(
    panel: Panel,
    query: Point,
    max_distance: float = MAX_DISTANCE,
    duplicate_center_tolerance: float = DUPLICATE_CENTER_TOLERANCE,
    duplicate_radius_tolerance: float = DUPLICATE_RADIUS_TOLERANCE,
    min_radius: float = MIN_RADIUS,
    min_points_for_detection: int = MIN_POINTS_FOR_DETECTION,
) -> NearestArcResult | None:
    """Find the board or panel-corner arc closest to a query point.

    Args:
        panel: Panel with boards, placements and frame corner radius
        query: Query point in panel coordinates
        max_distance: Arcs further away than this are ignored
        duplicate_center_tolerance: Max center distance of a duplicate detected arc
        duplicate_radius_tolerance: Max radius difference of a duplicate detected arc
        min_radius: Native arcs below this radius are ignored
        min_points_for_detection: Shorter outlines are not scanned for hidden arcs

    Returns:
        The closest arc, or None when no arc passes under the query point
    """
    candidates: list[tuple[ArcInfo, str | None]] = []

    for board, instance in panel.placements():
        arcs = collect_board_arcs(
            board,
            instance,
            duplicate_center_tolerance=duplicate_center_tolerance,
            duplicate_radius_tolerance=duplicate_radius_tolerance,
            min_radius=min_radius,
            min_points_for_detection=min_points_for_detection,
        )
        candidates.extend((arc, instance.id) for arc in arcs)

    for arc in panel_corner_arcs(panel.width, panel.height, panel.corner_radius):
        candidates.append((arc, None))

    best: NearestArcResult | None = None
    for arc, instance_id in candidates:
        dx = query.x - arc.center.x
        dy = query.y - arc.center.y
        angle = math.atan2(dy, dx)
        if not angle_in_sweep(angle, arc):
            continue

        distance = abs(math.hypot(dx, dy) - arc.radius)
        if distance >= max_distance:
            continue
        if best is None or distance < best.distance:
            best = NearestArcResult(arc.center, arc.radius, angle, instance_id, distance)

    return best

"""Breakaway holes along rounded corners.

Rounded board corners and panel frame fillets cannot carry an edge tab, so
they are held by a row of drilled holes following the arc instead. Arcs
come from three places:

- native arc commands of a board outline
- arcs recovered from a linearized outline when a board has no native arcs
- the four corner fillets of a rounded panel frame

Every mousebite is stored with increasing angles. A source arc drawn
clockwise is read from its end angle, so the stored span is the same set
of points whichever way the arc was drawn.
"""

import uuid
from collections.abc import Callable

from panelroute.config import ArcDetectionConfig, MousebiteConfig
from panelroute.core.arc_detector import detect_arcs_from_points, extract_outline_data
from panelroute.core.nearest_arc import NearestArcResult, detected_arc_to_panel
from panelroute.core.outline import panel_corner_arcs, transform_arc_command
from panelroute.domain import (
    TWO_PI,
    ArcInfo,
    Board,
    BoardInstance,
    DetectedArc,
    DrawCommand,
    FreeMousebite,
    Panel,
)

IdFactory = Callable[[], str]


def new_mousebite_id() -> str:
    """Generate a fresh mousebite id."""
    return str(uuid.uuid4())


def arc_to_mousebite(
    arc: ArcInfo,
    config: MousebiteConfig,
    instance_id: str | None = None,
    id_factory: IdFactory = new_mousebite_id,
) -> FreeMousebite | None:
    """Cover a panel-space arc with holes.

    Args:
        arc: Arc in panel coordinates, either direction
        config: Hole settings
        instance_id: Owning placement, None for panel corners
        id_factory: Source of the new id

    Returns:
        The mousebite, or None when the arc is below the minimum radius
    """
    if arc.radius < config.min_radius:
        return None

    start = arc.end_angle if arc.clockwise else arc.start_angle
    return FreeMousebite(
        id=id_factory(),
        arc_center=arc.center,
        arc_radius=arc.radius,
        arc_start_angle=start,
        arc_end_angle=start + arc.sweep,
        hole_diameter=config.hole_diameter,
        hole_spacing=config.hole_spacing,
        board_instance_id=instance_id,
    )


def native_arc_to_mousebite(
    cmd: DrawCommand,
    board: Board,
    instance: BoardInstance,
    config: MousebiteConfig,
    id_factory: IdFactory = new_mousebite_id,
) -> FreeMousebite | None:
    """Mousebite along a board's native arc command, in panel coordinates."""
    transformed = transform_arc_command(cmd, board, instance)
    if transformed is None:
        return None
    _, _, arc = transformed
    return arc_to_mousebite(arc, config, instance.id, id_factory)


def detected_arc_to_mousebite(
    detected: DetectedArc,
    board: Board,
    instance: BoardInstance,
    config: MousebiteConfig,
    id_factory: IdFactory = new_mousebite_id,
) -> FreeMousebite | None:
    """Mousebite along an arc recovered from a board's linearized outline."""
    arc = detected_arc_to_panel(detected, board, instance)
    return arc_to_mousebite(arc, config, instance.id, id_factory)


def auto_generate_arc_mousebites(
    panel: Panel,
    config: MousebiteConfig,
    detection: ArcDetectionConfig | None = None,
    id_factory: IdFactory = new_mousebite_id,
) -> list[FreeMousebite]:
    """Mousebites for every rounded corner on the panel.

    A board with native arc commands uses those only; otherwise its outline
    points are scanned for arcs. The rounded panel frame adds one mousebite
    per corner fillet. The result replaces any earlier mousebites.

    Args:
        panel: Panel with boards, placements and frame corner radius
        config: Hole settings
        detection: Arc recovery settings for boards without native arcs
        id_factory: Source of new ids

    Returns:
        Mousebites in placement order, panel corners last
    """
    detection = detection or ArcDetectionConfig()
    mousebites: list[FreeMousebite] = []

    for board, instance in panel.placements():
        points, native_arcs = extract_outline_data(board)

        if native_arcs:
            for cmd in native_arcs:
                mousebite = native_arc_to_mousebite(cmd, board, instance, config, id_factory)
                if mousebite is not None:
                    mousebites.append(mousebite)
            continue

        detected = detect_arcs_from_points(
            points,
            tolerance=detection.tolerance,
            min_points=detection.min_points,
            min_radius=detection.min_radius,
            max_radius=detection.max_radius,
            full_circle_gap=detection.full_circle_gap,
            full_circle_min_points=detection.full_circle_min_points,
        )
        for arc in detected:
            mousebite = detected_arc_to_mousebite(arc, board, instance, config, id_factory)
            if mousebite is not None:
                mousebites.append(mousebite)

    for arc in panel_corner_arcs(panel.width, panel.height, panel.corner_radius):
        mousebite = arc_to_mousebite(arc, config, None, id_factory)
        if mousebite is not None:
            mousebites.append(mousebite)

    return mousebites


def mousebite_at_nearest_arc(
    nearest: NearestArcResult,
    config: MousebiteConfig,
    id_factory: IdFactory = new_mousebite_id,
) -> FreeMousebite:
    """Mousebite of the configured length centered where the arc was clicked.

    The span is capped at a full circle.
    """
    sweep = min(config.arc_length / nearest.radius, TWO_PI)
    start = nearest.click_angle - sweep / 2
    return FreeMousebite(
        id=id_factory(),
        arc_center=nearest.center,
        arc_radius=nearest.radius,
        arc_start_angle=start,
        arc_end_angle=start + sweep,
        hole_diameter=config.hole_diameter,
        hole_spacing=config.hole_spacing,
        board_instance_id=nearest.instance_id,
    )

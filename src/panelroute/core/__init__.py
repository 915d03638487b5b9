"""Core geometry algorithms for panelroute.

This module contains the contour geometry engine:

- Geometric primitives (nearest point on segment/arc, rectangle clipping)
- Circle fitting and arc recovery from linearized outlines
- Outline reconstruction in panel coordinates
- Winding detection and tool-radius offsetting
- Sub-path extraction between two outline points
- Nearest-arc lookup for snapping
- Breakaway hole rows along rounded corners
- Master contour synchronization and the contour lifecycle

All geometry functions are pure: no logging, no I/O, no shared state.
RoutingProcessor is the only component that logs.

Key functions:
- build_outline_segments: Board outline as panel-space path segments
- detect_arcs_from_points: Recover arcs from a polyline
- offset_outline: Tool-compensated closed contour
- get_outline_subpath: Shorter (or forced) offset path between two points
- find_nearest_arc_at_point: Closest board or panel-corner arc
- sync_master_contours: Copy master contours onto sibling placements
- auto_generate_arc_mousebites: Mousebites for every rounded corner

Key classes:
- Located, Search: Endpoint location hints
- Subpath: Sub-path extraction result
- NearestArcResult: Nearest-arc lookup result
- RoutingProcessor: Orchestrates a complete routing run
"""

from panelroute.core.arc_detector import (
    count_arcs_in_board,
    detect_arcs_from_points,
    extract_outline_data,
)
from panelroute.core.circle_fit import circumcenter, least_squares_circle_fit
from panelroute.core.contours import (
    add_routing_contour,
    auto_generate_contours,
    clear_routing_contours,
    create_follow_outline_contour,
    finalize_free_draw,
    remove_routing_contour,
    replace_contour_segments,
    reroute_follow_outline,
    update_contour_endpoints,
)
from panelroute.core.mousebites import (
    auto_generate_arc_mousebites,
    detected_arc_to_mousebite,
    mousebite_at_nearest_arc,
    native_arc_to_mousebite,
)
from panelroute.core.nearest_arc import NearestArcResult, find_nearest_arc_at_point
from panelroute.core.offset import (
    compute_outline_winding_sign,
    offset_arc,
    offset_line,
    offset_outline,
    offset_path,
)
from panelroute.core.outline import (
    board_display_size,
    build_outline_segments,
    transform_point_to_panel,
)
from panelroute.core.primitives import (
    nearest_point_on_arc,
    nearest_point_on_segment,
    segment_intersects_rect,
)
from panelroute.core.processor import RoutingProcessor
from panelroute.core.subpath import (
    Located,
    Search,
    Subpath,
    get_outline_subpath,
    locate_on_outline,
    track_on_outline,
)
from panelroute.core.sync import get_master_instance, sync_master_contours

__all__ = [
    # Result and hint types
    "Located",
    "NearestArcResult",
    # Processor
    "RoutingProcessor",
    "Search",
    "Subpath",
    # Contour lifecycle
    "add_routing_contour",
    "auto_generate_arc_mousebites",
    "auto_generate_contours",
    # Outline
    "board_display_size",
    "build_outline_segments",
    # Circle fitting and arcs
    "circumcenter",
    "clear_routing_contours",
    # Offset
    "compute_outline_winding_sign",
    "count_arcs_in_board",
    "create_follow_outline_contour",
    "detect_arcs_from_points",
    "detected_arc_to_mousebite",
    "extract_outline_data",
    "finalize_free_draw",
    "find_nearest_arc_at_point",
    # Sync
    "get_master_instance",
    "get_outline_subpath",
    "least_squares_circle_fit",
    "locate_on_outline",
    # Mousebites
    "mousebite_at_nearest_arc",
    "native_arc_to_mousebite",
    # Primitives
    "nearest_point_on_arc",
    "nearest_point_on_segment",
    "offset_arc",
    "offset_line",
    "offset_outline",
    "offset_path",
    "remove_routing_contour",
    "replace_contour_segments",
    "reroute_follow_outline",
    "segment_intersects_rect",
    "sync_master_contours",
    "track_on_outline",
    "transform_point_to_panel",
    "update_contour_endpoints",
]

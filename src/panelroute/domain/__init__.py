"""Domain models for panelroute.

This module contains the geometric records, board/panel inputs and routing
contours. Geometric records are immutable (frozen dataclasses); panel-level
containers are plain dataclasses that the lifecycle functions copy rather
than mutate.

Key classes:
- Point, ArcInfo: basic geometry
- PathSegment: one piece of an outline walk (ephemeral)
- RoutingSegment, RoutingContour: persisted toolpaths
- FreeMousebite: breakaway holes along an arc
- DetectedArc: arc recovered from a polyline
- DrawCommand, Layer, Board, BoardInstance, Tab, Panel: layout inputs
"""

from panelroute.domain.board import (
    Board,
    BoardInstance,
    CommandType,
    DrawCommand,
    Layer,
    Panel,
    Tab,
    TabEdge,
    TabType,
)
from panelroute.domain.geometry import (
    TWO_PI,
    ArcInfo,
    DetectedArc,
    PathSegment,
    Point,
    RoutingSegment,
    directional_sweep,
)
from panelroute.domain.routing import (
    ContourType,
    CreationMethod,
    FreeMousebite,
    OutlineDirection,
    RoutingContour,
)

__all__: list[str] = [
    "TWO_PI",
    # Enums
    "CommandType",
    "ContourType",
    "CreationMethod",
    "OutlineDirection",
    "TabEdge",
    "TabType",
    # Geometry
    "ArcInfo",
    "DetectedArc",
    "PathSegment",
    "Point",
    "RoutingSegment",
    "directional_sweep",
    # Layout
    "Board",
    "BoardInstance",
    "DrawCommand",
    "Layer",
    "Panel",
    "Tab",
    # Routing
    "FreeMousebite",
    "RoutingContour",
]

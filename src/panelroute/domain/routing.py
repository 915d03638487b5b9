"""Routing contour and arc mousebite models.

A routing contour is the persisted description of one milling toolpath:
a list of straight or circular segments (gaps between segments are tabs)
plus the tool and provenance metadata needed to edit and synchronize it.

A free mousebite is a row of breakaway holes drilled along a rounded
corner, independent of any edge tab.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from panelroute.domain.geometry import ArcInfo, Point, RoutingSegment


class ContourType(str, Enum):
    """What the contour routes around."""

    BOARD_OUTLINE = "boardOutline"
    PANEL_OUTLINE = "panelOutline"


class CreationMethod(str, Enum):
    """How the contour was created.

    - AUTO: generated from the panel layout, replaced on regeneration
    - FOLLOW_OUTLINE: extracted along a board outline
    - FREE_DRAW: drawn point by point
    """

    AUTO = "auto"
    FOLLOW_OUTLINE = "followOutline"
    FREE_DRAW = "freeDraw"


class OutlineDirection(str, Enum):
    """Traversal direction along an outline (increasing or decreasing index)."""

    FORWARD = "forward"
    REVERSE = "reverse"


@dataclass
class RoutingContour:
    """A complete routing contour.

    A contour with is_sync_copy set is derived from the master placement's
    contour named by master_contour_id and is never edited directly.

    Attributes:
        id: Unique contour id
        contour_type: Board or panel outline
        segments: Toolpath segments (gaps are tabs)
        tool_diameter: Milling tool diameter in mm
        board_instance_id: Owning board instance, if any
        visible: Rendering visibility
        creation_method: Provenance of the contour
        outline_direction: Direction along the outline for follow-outline contours
        master_contour_id: Source contour of a sync copy
        is_sync_copy: True for derived copies
    """

    id: str
    contour_type: ContourType
    segments: list[RoutingSegment] = field(default_factory=list)
    tool_diameter: float = 2.0
    board_instance_id: str | None = None
    visible: bool = True
    creation_method: CreationMethod = CreationMethod.AUTO
    outline_direction: OutlineDirection | None = None
    master_contour_id: str | None = None
    is_sync_copy: bool = False

    @property
    def is_editable(self) -> bool:
        """Only manual contours that are not sync copies can be edited."""
        return not self.is_sync_copy and self.creation_method != CreationMethod.AUTO

    @property
    def length(self) -> float:
        """Total cutting length of all segments."""
        return sum(seg.length for seg in self.segments)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the contour
        """
        data: dict[str, Any] = {
            "id": self.id,
            "contourType": self.contour_type.value,
            "segments": [s.to_dict() for s in self.segments],
            "toolDiameter": self.tool_diameter,
            "visible": self.visible,
            "creationMethod": self.creation_method.value,
        }
        if self.board_instance_id is not None:
            data["boardInstanceId"] = self.board_instance_id
        if self.outline_direction is not None:
            data["outlineDirection"] = self.outline_direction.value
        if self.master_contour_id is not None:
            data["masterContourId"] = self.master_contour_id
        if self.is_sync_copy:
            data["isSyncCopy"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RoutingContour":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a contour

        Returns:
            RoutingContour instance
        """
        direction = data.get("outlineDirection")
        return cls(
            id=str(data["id"]),
            contour_type=ContourType(data["contourType"]),
            segments=[RoutingSegment.from_dict(s) for s in data.get("segments", [])],
            tool_diameter=float(data.get("toolDiameter", 2.0)),
            board_instance_id=data.get("boardInstanceId"),
            visible=bool(data.get("visible", True)),
            creation_method=CreationMethod(data.get("creationMethod", "auto")),
            outline_direction=OutlineDirection(direction) if direction else None,
            master_contour_id=data.get("masterContourId"),
            is_sync_copy=bool(data.get("isSyncCopy", False)),
        )


@dataclass(frozen=True, slots=True)
class FreeMousebite:
    """Breakaway holes drilled along an arc of a board or the panel frame.

    The arc always runs with increasing angle from arc_start_angle to
    arc_end_angle, so the covered sweep is their difference (2*pi for a
    full circle) whatever direction the source arc was drawn in.

    Attributes:
        id: Unique mousebite id
        arc_center: Arc center in panel coordinates
        arc_radius: Arc radius in mm
        arc_start_angle: Start angle in radians
        arc_end_angle: End angle in radians (greater than the start angle)
        hole_diameter: Drill diameter in mm
        hole_spacing: Center distance between neighbouring holes in mm
        board_instance_id: Placement owning the arc, None for panel corners
    """

    id: str
    arc_center: Point
    arc_radius: float
    arc_start_angle: float
    arc_end_angle: float
    hole_diameter: float
    hole_spacing: float
    board_instance_id: str | None = None

    @property
    def sweep(self) -> float:
        return self.arc_end_angle - self.arc_start_angle

    @property
    def arc(self) -> ArcInfo:
        """The drilled arc as a counter-clockwise (increasing angle) ArcInfo."""
        return ArcInfo(
            center=self.arc_center,
            radius=self.arc_radius,
            start_angle=self.arc_start_angle,
            end_angle=self.arc_end_angle,
            clockwise=False,
        )

    @property
    def arc_length(self) -> float:
        return self.arc_radius * self.sweep

    def hole_centers(self) -> list[Point]:
        """Drill positions, evenly spread with half a pitch at each end.

        The hole count is the number of whole spacings that fit on the arc.
        """
        count = math.floor(self.arc_length / self.hole_spacing)
        if count <= 0:
            return []
        step = self.sweep / count
        return [
            self.arc.point_at_angle(self.arc_start_angle + (i + 0.5) * step)
            for i in range(count)
        ]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        data: dict[str, Any] = {
            "id": self.id,
            "arcCenter": self.arc_center.to_dict(),
            "arcRadius": self.arc_radius,
            "arcStartAngle": self.arc_start_angle,
            "arcEndAngle": self.arc_end_angle,
            "holeDiameter": self.hole_diameter,
            "holeSpacing": self.hole_spacing,
        }
        if self.board_instance_id is not None:
            data["boardInstanceId"] = self.board_instance_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FreeMousebite":
        """Deserialize from dictionary."""
        return cls(
            id=str(data["id"]),
            arc_center=Point.from_dict(data["arcCenter"]),
            arc_radius=float(data["arcRadius"]),
            arc_start_angle=float(data["arcStartAngle"]),
            arc_end_angle=float(data["arcEndAngle"]),
            hole_diameter=float(data["holeDiameter"]),
            hole_spacing=float(data["holeSpacing"]),
            board_instance_id=data.get("boardInstanceId"),
        )

"""Core geometric types for outline and toolpath representation.

This module defines the geometric records shared by every algorithm:
- Point: A 2D point in millimeters (panel coordinates, Y pointing down)
- ArcInfo: A circular arc with explicit traversal direction
- PathSegment: One piece of an outline walk with path bookkeeping
- RoutingSegment: The persisted toolpath primitive
- DetectedArc: An arc recovered from a linearized polyline

Angles are radians measured with atan2 in the coordinate frame the arc lives in.
"Clockwise" means decreasing angle in that frame.
"""

import math
from dataclasses import dataclass
from typing import Any

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in millimeters
        y: Y coordinate in millimeters
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def translated(self, dx: float, dy: float) -> "Point":
        """Return a copy moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


def directional_sweep(start_angle: float, end_angle: float, clockwise: bool) -> float:
    """Positive angle swept going from start_angle to end_angle.

    Coincident angles are read as a full turn, so the result lies in (0, 2*pi].

    Args:
        start_angle: Start angle in radians
        end_angle: End angle in radians
        clockwise: True when the traversal decreases the angle

    Returns:
        Sweep in radians
    """
    raw = start_angle - end_angle if clockwise else end_angle - start_angle
    sweep = raw % TWO_PI
    if sweep <= 1e-12:
        return TWO_PI
    return sweep


@dataclass(frozen=True, slots=True)
class ArcInfo:
    """A circular arc with an explicit traversal direction.

    Sweeping from start_angle to end_angle in the stated direction never
    exceeds one full turn.

    Attributes:
        center: Arc center
        radius: Arc radius (> 0)
        start_angle: Angle of the start point in radians
        end_angle: Angle of the end point in radians
        clockwise: True when the arc is traversed with decreasing angle
    """

    center: Point
    radius: float
    start_angle: float
    end_angle: float
    clockwise: bool

    @property
    def sweep(self) -> float:
        """Positive angle covered by the arc."""
        return directional_sweep(self.start_angle, self.end_angle, self.clockwise)

    @property
    def length(self) -> float:
        """True arc length (radius x sweep)."""
        return self.radius * self.sweep

    def angle_at(self, t: float) -> float:
        """Angle at normalized position t (0 = start, 1 = end) along the arc."""
        direction = -1.0 if self.clockwise else 1.0
        return self.start_angle + direction * self.sweep * t

    def point_at_angle(self, angle: float, radius: float | None = None) -> Point:
        """Point on the arc's circle (or a concentric one) at the given angle."""
        r = self.radius if radius is None else radius
        return Point(
            self.center.x + r * math.cos(angle),
            self.center.y + r * math.sin(angle),
        )

    def reversed(self) -> "ArcInfo":
        """The same arc traversed in the opposite direction."""
        return ArcInfo(
            center=self.center,
            radius=self.radius,
            start_angle=self.end_angle,
            end_angle=self.start_angle,
            clockwise=not self.clockwise,
        )

    def translated(self, dx: float, dy: float) -> "ArcInfo":
        """Return a copy with the center moved by (dx, dy)."""
        return ArcInfo(
            center=self.center.translated(dx, dy),
            radius=self.radius,
            start_angle=self.start_angle,
            end_angle=self.end_angle,
            clockwise=self.clockwise,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "center": self.center.to_dict(),
            "radius": self.radius,
            "startAngle": self.start_angle,
            "endAngle": self.end_angle,
            "clockwise": self.clockwise,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ArcInfo":
        """Deserialize from dictionary."""
        return cls(
            center=Point.from_dict(data["center"]),
            radius=float(data["radius"]),
            start_angle=float(data["startAngle"]),
            end_angle=float(data["endAngle"]),
            clockwise=bool(data["clockwise"]),
        )


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One piece of an outline walk.

    Path segments are rebuilt on demand for a single geometric query and are
    never persisted.

    Attributes:
        start: Start point in panel coordinates
        end: End point in panel coordinates
        cumulative_distance: Path length from the outline start to this segment's start
        length: Length of this segment (arc length for arcs)
        arc: Arc description, present iff the segment is curved
    """

    start: Point
    end: Point
    cumulative_distance: float
    length: float
    arc: ArcInfo | None = None

    @property
    def is_arc(self) -> bool:
        """True when the segment is curved."""
        return self.arc is not None

    def to_routing_segment(self) -> "RoutingSegment":
        """Drop the path bookkeeping."""
        return RoutingSegment(start=self.start, end=self.end, arc=self.arc)


@dataclass(frozen=True, slots=True)
class RoutingSegment:
    """A single toolpath piece, straight or circular.

    Attributes:
        start: Start point in panel coordinates
        end: End point in panel coordinates
        arc: Arc description, present iff the segment is curved
    """

    start: Point
    end: Point
    arc: ArcInfo | None = None

    @property
    def length(self) -> float:
        """Euclidean length for lines, true arc length for arcs."""
        if self.arc is not None:
            return self.arc.length
        return self.start.distance_to(self.end)

    def reversed(self) -> "RoutingSegment":
        """The same segment traversed end to start."""
        return RoutingSegment(
            start=self.end,
            end=self.start,
            arc=self.arc.reversed() if self.arc is not None else None,
        )

    def translated(self, dx: float, dy: float) -> "RoutingSegment":
        """Return a copy moved rigidly by (dx, dy)."""
        return RoutingSegment(
            start=self.start.translated(dx, dy),
            end=self.end.translated(dx, dy),
            arc=self.arc.translated(dx, dy) if self.arc is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        data: dict[str, Any] = {
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
        }
        if self.arc is not None:
            data["arc"] = self.arc.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RoutingSegment":
        """Deserialize from dictionary."""
        arc_data = data.get("arc")
        return cls(
            start=Point.from_dict(data["start"]),
            end=Point.from_dict(data["end"]),
            arc=ArcInfo.from_dict(arc_data) if arc_data else None,
        )


@dataclass(frozen=True, slots=True)
class DetectedArc:
    """An arc recovered from a run of polyline points.

    Attributes:
        center: Fitted circle center
        radius: Fitted circle radius
        start_angle: Angle of the first run point (0 for full circles)
        end_angle: Angle of the last run point (2*pi for full circles)
        start_point: First point of the run
        end_point: Last point of the run
        clockwise: True when the run turns with decreasing angle
        sweep: Total turning angle of the run in radians
    """

    center: Point
    radius: float
    start_angle: float
    end_angle: float
    start_point: Point
    end_point: Point
    clockwise: bool = False
    sweep: float = 0.0

    @property
    def is_full_circle(self) -> bool:
        """True when the run closes on itself."""
        return self.sweep >= TWO_PI - 1e-9

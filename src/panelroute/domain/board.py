"""Board, placement and panel models.

These records describe the inputs the geometry engine consumes: a board's
drawing commands in board-local coordinates (Y up), its placements on the
panel and the panel frame itself.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from panelroute.domain.geometry import Point
from panelroute.domain.routing import FreeMousebite, RoutingContour

VALID_ROTATIONS = (0, 90, 180, 270)

OUTLINE_LAYER = "outline"


class CommandType(str, Enum):
    """Kind of drawing command produced by the Gerber parser."""

    MOVE = "move"
    LINE = "line"
    ARC = "arc"
    FLASH = "flash"


class TabType(str, Enum):
    """Breakaway tab style."""

    SOLID = "solid"
    MOUSEBITES = "mousebites"
    VSCORE = "vscore"


class TabEdge(str, Enum):
    """Board edge a tab sits on."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class DrawCommand:
    """A single drawing command in board-local coordinates.

    Attributes:
        command_type: Move, line, arc or flash
        start: Start point (lines and arcs)
        end: End point
        center: Arc center (arcs only)
        clockwise: Arc direction in the Y-up drawing frame
    """

    command_type: CommandType
    start: Point | None = None
    end: Point | None = None
    center: Point | None = None
    clockwise: bool = False

    @property
    def is_complete_line(self) -> bool:
        return (
            self.command_type == CommandType.LINE
            and self.start is not None
            and self.end is not None
        )

    @property
    def is_complete_arc(self) -> bool:
        return (
            self.command_type == CommandType.ARC
            and self.start is not None
            and self.end is not None
            and self.center is not None
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.command_type.value}
        if self.start is not None:
            data["start"] = self.start.to_dict()
        if self.end is not None:
            data["end"] = self.end.to_dict()
        if self.center is not None:
            data["center"] = self.center.to_dict()
        if self.command_type == CommandType.ARC:
            data["clockwise"] = self.clockwise
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DrawCommand":
        def _point(key: str) -> Point | None:
            value = data.get(key)
            return Point.from_dict(value) if value is not None else None

        return cls(
            command_type=CommandType(data["type"]),
            start=_point("start"),
            end=_point("end"),
            center=_point("center"),
            clockwise=bool(data.get("clockwise", False)),
        )


@dataclass
class Layer:
    """One drawing layer of a board.

    Attributes:
        name: Layer name (usually the source file name)
        layer_type: Layer classification, "outline" for the board contour
        commands: Ordered drawing commands
    """

    name: str
    layer_type: str
    commands: list[DrawCommand] = field(default_factory=list)

    @property
    def is_outline(self) -> bool:
        return self.layer_type == OUTLINE_LAYER

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.layer_type,
            "commands": [c.to_dict() for c in self.commands],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Layer":
        return cls(
            name=data.get("name", ""),
            layer_type=data.get("type", "unknown"),
            commands=[DrawCommand.from_dict(c) for c in data.get("commands", [])],
        )


@dataclass
class Board:
    """An imported board design.

    A board can be placed many times on a panel; each placement is a
    BoardInstance referencing it by id.

    Attributes:
        id: Unique board id
        name: Display name
        width: Width of the drawing extent in mm (before layer rotation)
        height: Height of the drawing extent in mm (before layer rotation)
        layers: Drawing layers
        layer_rotation: Rotation of the drawing about its origin (0/90/180/270)
        mirror_x: Mirror the drawing about the horizontal axis
        mirror_y: Mirror the drawing about the vertical axis
    """

    id: str
    name: str
    width: float
    height: float
    layers: list[Layer] = field(default_factory=list)
    layer_rotation: int = 0
    mirror_x: bool = False
    mirror_y: bool = False

    def __post_init__(self) -> None:
        if self.layer_rotation not in VALID_ROTATIONS:
            raise ValueError(f"Invalid layer rotation: {self.layer_rotation}")

    @property
    def outline_layer(self) -> Layer | None:
        """The first layer classified as outline, if any."""
        for layer in self.layers:
            if layer.is_outline:
                return layer
        return None

    @property
    def effective_size(self) -> tuple[float, float]:
        """Width and height after layer rotation."""
        if self.layer_rotation in (90, 270):
            return self.height, self.width
        return self.width, self.height

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "layers": [layer.to_dict() for layer in self.layers],
            "layerRotation": self.layer_rotation,
            "mirrorX": self.mirror_x,
            "mirrorY": self.mirror_y,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Board":
        return cls(
            id=str(data["id"]),
            name=data.get("name", str(data["id"])),
            width=float(data["width"]),
            height=float(data["height"]),
            layers=[Layer.from_dict(layer) for layer in data.get("layers", [])],
            layer_rotation=int(data.get("layerRotation", 0)),
            mirror_x=bool(data.get("mirrorX", False)),
            mirror_y=bool(data.get("mirrorY", False)),
        )


@dataclass
class BoardInstance:
    """A placed copy of a board on the panel.

    Attributes:
        id: Unique instance id
        board_id: Id of the placed board
        position: Panel position of the placement's corner
        rotation: Placement rotation (0/90/180/270)
    """

    id: str
    board_id: str
    position: Point
    rotation: int = 0

    def __post_init__(self) -> None:
        if self.rotation not in VALID_ROTATIONS:
            raise ValueError(f"Invalid instance rotation: {self.rotation}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "boardId": self.board_id,
            "position": self.position.to_dict(),
            "rotation": self.rotation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BoardInstance":
        return cls(
            id=str(data["id"]),
            board_id=str(data["boardId"]),
            position=Point.from_dict(data["position"]),
            rotation=int(data.get("rotation", 0)),
        )


@dataclass
class Tab:
    """A breakaway tab bridging a board to the panel.

    Attributes:
        id: Unique tab id
        board_instance_id: Instance the tab belongs to
        edge: Board edge carrying the tab
        position: Tab center along the edge (0..1)
        width: Tab width in mm
        tab_type: Solid, mousebites or vscore
    """

    id: str
    board_instance_id: str
    edge: TabEdge
    position: float
    width: float
    tab_type: TabType = TabType.SOLID

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "boardInstanceId": self.board_instance_id,
            "edge": self.edge.value,
            "position": self.position,
            "width": self.width,
            "type": self.tab_type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tab":
        return cls(
            id=str(data["id"]),
            board_instance_id=str(data["boardInstanceId"]),
            edge=TabEdge(data["edge"]),
            position=float(data["position"]),
            width=float(data["width"]),
            tab_type=TabType(data.get("type", TabType.SOLID.value)),
        )


@dataclass
class Panel:
    """The production panel.

    Attributes:
        width: Panel width in mm
        height: Panel height in mm
        boards: Board library
        instances: Board placements
        corner_radius: Frame corner radius in mm (0 = square corners)
        tabs: Breakaway tabs
        routing_contours: Routing contours, including sync copies
        free_mousebites: Hole rows drilled along arcs
        name: Project name
    """

    width: float
    height: float
    boards: list[Board] = field(default_factory=list)
    instances: list[BoardInstance] = field(default_factory=list)
    corner_radius: float = 0.0
    tabs: list[Tab] = field(default_factory=list)
    routing_contours: list[RoutingContour] = field(default_factory=list)
    free_mousebites: list[FreeMousebite] = field(default_factory=list)
    name: str = ""

    def get_board(self, board_id: str) -> Board | None:
        for board in self.boards:
            if board.id == board_id:
                return board
        return None

    def get_instance(self, instance_id: str) -> BoardInstance | None:
        for instance in self.instances:
            if instance.id == instance_id:
                return instance
        return None

    def placements(self) -> list[tuple[Board, BoardInstance]]:
        """Every instance paired with its board; instances of unknown boards are skipped."""
        pairs = []
        for instance in self.instances:
            board = self.get_board(instance.board_id)
            if board is not None:
                pairs.append((board, instance))
        return pairs

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "cornerRadius": self.corner_radius,
            "boards": [b.to_dict() for b in self.boards],
            "instances": [i.to_dict() for i in self.instances],
            "tabs": [t.to_dict() for t in self.tabs],
            "routingContours": [c.to_dict() for c in self.routing_contours],
            "freeMousebites": [m.to_dict() for m in self.free_mousebites],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Panel":
        return cls(
            name=data.get("name", ""),
            width=float(data["width"]),
            height=float(data["height"]),
            corner_radius=float(data.get("cornerRadius", 0.0)),
            boards=[Board.from_dict(b) for b in data.get("boards", [])],
            instances=[BoardInstance.from_dict(i) for i in data.get("instances", [])],
            tabs=[Tab.from_dict(t) for t in data.get("tabs", [])],
            routing_contours=[
                RoutingContour.from_dict(c) for c in data.get("routingContours", [])
            ],
            free_mousebites=[
                FreeMousebite.from_dict(m) for m in data.get("freeMousebites", [])
            ],
        )

"""Unit tests for winding detection and tool-radius compensation."""

import math

import pytest

from panelroute.core.offset import (
    arc_offset_sign,
    compute_outline_winding_sign,
    offset_arc,
    offset_line,
    offset_outline,
    offset_path,
    path_length,
    segment_tangent,
)
from panelroute.core.outline import build_outline_segments
from panelroute.domain import (
    ArcInfo,
    Board,
    BoardInstance,
    CommandType,
    DrawCommand,
    Layer,
    PathSegment,
    Point,
    RoutingSegment,
)


def path(*points: tuple[float, float]) -> list[PathSegment]:
    """Closed polyline outline through the given corners."""
    segments = []
    cumulative = 0.0
    for i, (x, y) in enumerate(points):
        nx, ny = points[(i + 1) % len(points)]
        start, end = Point(x, y), Point(nx, ny)
        segments.append(PathSegment(start, end, cumulative, start.distance_to(end)))
        cumulative += start.distance_to(end)
    return segments


def assert_point(actual: Point, x: float, y: float) -> None:
    assert actual.x == pytest.approx(x, abs=1e-9)
    assert actual.y == pytest.approx(y, abs=1e-9)


@pytest.fixture
def quarter_pie() -> list[PathSegment]:
    """Two straight edges joined by a 90 degree arc of radius 10."""
    arc = ArcInfo(Point(0, 0), 10.0, 0.0, math.pi / 2, clockwise=False)
    return [
        PathSegment(Point(0, 0), Point(10, 0), 0.0, 10.0),
        PathSegment(Point(10, 0), Point(0, 10), 10.0, arc.length, arc),
        PathSegment(Point(0, 10), Point(0, 0), 10.0 + arc.length, 10.0),
    ]


class TestWindingSign:
    """Tests for compute_outline_winding_sign."""

    def test_increasing_angle_rectangle(self):
        assert compute_outline_winding_sign(path((0, 0), (20, 0), (20, 10), (0, 10))) == -1

    def test_reversed_rectangle(self):
        assert compute_outline_winding_sign(path((0, 10), (20, 10), (20, 0), (0, 0))) == 1

    def test_arc_only_outline(self):
        arc = ArcInfo(Point(5, 5), 5.0, 0.0, 0.0, clockwise=True)
        segment = PathSegment(Point(10, 5), Point(10, 5), 0.0, arc.length, arc)
        assert compute_outline_winding_sign([segment]) == 1

    def test_flipped_board_outline(self):
        commands = [
            DrawCommand(CommandType.LINE, start=Point(0, 0), end=Point(20, 0)),
            DrawCommand(CommandType.LINE, start=Point(20, 0), end=Point(20, 10)),
            DrawCommand(CommandType.LINE, start=Point(20, 10), end=Point(0, 10)),
            DrawCommand(CommandType.LINE, start=Point(0, 10), end=Point(0, 0)),
        ]
        board = Board(
            id="b",
            name="b",
            width=20,
            height=10,
            layers=[Layer(name="edge", layer_type="outline", commands=commands)],
        )
        instance = BoardInstance(id="i", board_id="b", position=Point(5, 5))
        outline = build_outline_segments(board, instance)

        # Counter-clockwise drawing becomes clockwise after the vertical flip
        assert compute_outline_winding_sign(outline) == 1

        offset = offset_outline(outline, 1.0)
        assert_point(offset[0].start, 4, 16)
        assert_point(offset[0].end, 26, 16)


class TestArcOffsetSign:
    """Tests for arc_offset_sign."""

    @pytest.mark.parametrize(
        "clockwise,winding,expected",
        [(True, 1, 1), (False, -1, 1), (True, -1, -1), (False, 1, -1)],
    )
    def test_sign_table(self, clockwise, winding, expected):
        arc = ArcInfo(Point(0, 0), 5.0, 0.0, 1.0, clockwise=clockwise)
        assert arc_offset_sign(arc, winding) == expected


class TestOffsetPrimitives:
    """Tests for single-segment offsets."""

    def test_offset_line(self):
        result = offset_line(Point(0, 0), Point(20, 0), 1.0, -1)
        assert result is not None
        assert_point(result.start, 0, -1)
        assert_point(result.end, 20, -1)

    def test_offset_line_opposite_winding(self):
        result = offset_line(Point(0, 0), Point(20, 0), 1.0, 1)
        assert result is not None
        assert_point(result.start, 0, 1)

    def test_degenerate_line(self):
        assert offset_line(Point(1, 1), Point(1, 1.0001), 1.0, -1) is None

    def test_arc_grows(self):
        arc = ArcInfo(Point(0, 0), 10.0, 0.0, math.pi / 2, clockwise=False)
        result = offset_arc(arc, 1.0, -1)
        assert result is not None and result.arc is not None
        assert result.arc.radius == pytest.approx(11.0)
        assert result.arc.center == arc.center
        assert result.arc.start_angle == arc.start_angle
        assert_point(result.start, 11, 0)
        assert_point(result.end, 0, 11)

    def test_arc_shrinks(self):
        arc = ArcInfo(Point(0, 0), 10.0, 0.0, math.pi / 2, clockwise=True)
        result = offset_arc(arc, 1.0, -1)
        assert result is not None and result.arc is not None
        assert result.arc.radius == pytest.approx(9.0)

    def test_collapsed_arc_dropped(self):
        arc = ArcInfo(Point(0, 0), 0.5, 0.0, math.pi / 2, clockwise=True)
        assert offset_arc(arc, 1.0, -1) is None

    def test_segment_tangent(self):
        line = RoutingSegment(Point(0, 0), Point(0, 5))
        assert segment_tangent(line, at_end=False) == pytest.approx((0.0, 1.0))

        arc = ArcInfo(Point(0, 0), 1.0, 0.0, math.pi / 2, clockwise=False)
        seg = RoutingSegment(Point(1, 0), Point(0, 1), arc)
        assert segment_tangent(seg, at_end=False) == pytest.approx((0.0, 1.0))
        assert segment_tangent(seg, at_end=True) == pytest.approx((-1.0, 0.0), abs=1e-12)


class TestOffsetPath:
    """Tests for joining offset pieces."""

    def test_open_corner_mitred(self):
        pieces = [
            RoutingSegment(Point(0, 0), Point(10, 0)),
            RoutingSegment(Point(10, 0), Point(10, 10)),
        ]
        result = offset_path(pieces, 1.0, -1)

        assert len(result) == 2
        assert_point(result[0].end, 11, -1)
        assert_point(result[1].start, 11, -1)
        assert_point(result[1].end, 11, 10)

    def test_miter_limit_falls_back_to_bridge(self):
        pieces = [
            RoutingSegment(Point(0, 0), Point(10, 0)),
            RoutingSegment(Point(10, 0), Point(10, 10)),
        ]
        result = offset_path(pieces, 1.0, -1, miter_limit=0.5)

        assert len(result) == 3
        assert result[1].arc is None
        assert_point(result[1].start, 10, -1)
        assert_point(result[1].end, 11, 0)

    def test_empty_input(self):
        assert offset_path([], 1.0, -1) == []


class TestOffsetOutline:
    """Tests for offset_outline."""

    def test_rectangle(self):
        result = offset_outline(path((0, 0), (20, 0), (20, 10), (0, 10)), 1.0)

        assert len(result) == 4
        expected = [(-1, -1), (21, -1), (21, 11), (-1, 11)]
        for seg, (x, y) in zip(result, expected):
            assert_point(seg.start, x, y)
        assert_point(result[-1].end, -1, -1)
        assert path_length(result) == pytest.approx(2 * 22 + 2 * 12)

    def test_rectangle_flipped(self):
        result = offset_outline(path((0, 0), (20, 0), (20, 10), (0, 10)), 1.0, flip=True)
        expected = [(1, 1), (19, 1), (19, 9), (1, 9)]
        for seg, (x, y) in zip(result, expected):
            assert_point(seg.start, x, y)

    def test_round_joins_around_arc(self, quarter_pie):
        result = offset_outline(quarter_pie, 1.0)

        assert len(result) == 5
        assert [seg.arc is not None for seg in result] == [False, True, True, True, False]

        first_join = result[1].arc
        assert first_join is not None
        assert first_join.center == Point(10, 0)
        assert first_join.radius == pytest.approx(1.0)
        assert_point(result[1].start, 10, -1)
        assert_point(result[1].end, 11, 0)

        assert result[2].arc is not None
        assert result[2].arc.radius == pytest.approx(11.0)

        second_join = result[3].arc
        assert second_join is not None
        assert_point(second_join.center, 0, 10)
        assert_point(result[3].end, -1, 10)

        # Straight corner at the origin is mitred
        assert_point(result[0].start, -1, -1)
        assert_point(result[-1].end, -1, -1)

    def test_joined_contour_is_continuous(self, quarter_pie):
        result = offset_outline(quarter_pie, 1.0)
        for a, b in zip(result, result[1:]):
            assert a.end.distance_to(b.start) < 1e-9

    def test_full_circle(self):
        arc = ArcInfo(Point(5, 5), 5.0, 0.0, 0.0, clockwise=True)
        outline = [PathSegment(Point(10, 5), Point(10, 5), 0.0, arc.length, arc)]

        grown = offset_outline(outline, 1.0)
        assert len(grown) == 1
        assert grown[0].arc is not None
        assert grown[0].arc.radius == pytest.approx(6.0)

        shrunk = offset_outline(outline, 1.0, flip=True)
        assert shrunk[0].arc is not None
        assert shrunk[0].arc.radius == pytest.approx(4.0)

    def test_empty_outline(self):
        assert offset_outline([], 1.0) == []

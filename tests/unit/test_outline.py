"""Unit tests for outline reconstruction in panel coordinates.

Tests cover:
- Point transformation (flip, layer rotation, mirroring, instance rotation)
- Arc direction under reflections
- Rectangle fallback for boards without usable outline commands
- Cumulative distances along mixed line/arc outlines
"""

import math

import pytest

from panelroute.core.outline import (
    board_display_size,
    build_outline_segments,
    panel_corner_arcs,
    rectangle_outline,
    reverses_orientation,
    transform_arc_command,
    transform_point_to_panel,
)
from panelroute.domain import Board, BoardInstance, CommandType, DrawCommand, Layer, Point


def make_board(commands=None, **kwargs) -> Board:
    """20 x 10 board, optionally with an outline layer."""
    layers = []
    if commands is not None:
        layers.append(Layer(name="edge", layer_type="outline", commands=commands))
    return Board(id="b1", name="b1", width=20, height=10, layers=layers, **kwargs)


def at(x: float, y: float, rotation: int = 0) -> BoardInstance:
    return BoardInstance(id="i1", board_id="b1", position=Point(x, y), rotation=rotation)


def line(x1, y1, x2, y2) -> DrawCommand:
    return DrawCommand(CommandType.LINE, start=Point(x1, y1), end=Point(x2, y2))


def assert_point(actual: Point, x: float, y: float) -> None:
    assert actual.x == pytest.approx(x, abs=1e-9)
    assert actual.y == pytest.approx(y, abs=1e-9)


@pytest.fixture
def d_shape_commands() -> list[DrawCommand]:
    """Rectangle whose right edge is replaced by a half circle bulging outward."""
    return [
        line(0, 0, 20, 0),
        DrawCommand(
            CommandType.ARC,
            start=Point(20, 0),
            end=Point(20, 10),
            center=Point(20, 5),
            clockwise=False,
        ),
        line(20, 10, 0, 10),
        line(0, 10, 0, 0),
    ]


class TestTransformPointToPanel:
    """Tests for the board-to-panel point transform."""

    def test_vertical_flip(self):
        board = make_board()
        assert_point(transform_point_to_panel(Point(0, 0), board, at(0, 0)), 0, 10)
        assert_point(transform_point_to_panel(Point(20, 10), board, at(0, 0)), 20, 0)

    def test_translation(self):
        board = make_board()
        assert_point(transform_point_to_panel(Point(5, 2), board, at(100, 50)), 105, 58)

    def test_instance_rotation_90(self):
        board = make_board()
        inst = at(100, 50, rotation=90)
        assert_point(transform_point_to_panel(Point(0, 0), board, inst), 100, 50)
        assert_point(transform_point_to_panel(Point(20, 0), board, inst), 100, 70)
        assert_point(transform_point_to_panel(Point(0, 10), board, inst), 110, 50)

    @pytest.mark.parametrize("rotation", [0, 90, 180, 270])
    def test_rotation_stays_in_footprint(self, rotation):
        board = make_board()
        inst = at(30, 40, rotation=rotation)
        width, height = board_display_size(board, inst)
        for corner in (Point(0, 0), Point(20, 0), Point(20, 10), Point(0, 10)):
            p = transform_point_to_panel(corner, board, inst)
            assert 30 - 1e-9 <= p.x <= 30 + width + 1e-9
            assert 40 - 1e-9 <= p.y <= 40 + height + 1e-9

    def test_layer_rotation_90(self):
        board = make_board(layer_rotation=90)
        assert board.effective_size == (10, 20)
        assert_point(transform_point_to_panel(Point(0, 0), board, at(0, 0)), 10, 20)
        assert_point(transform_point_to_panel(Point(20, 10), board, at(0, 0)), 0, 0)

    def test_layer_rotation_180(self):
        board = make_board(layer_rotation=180)
        assert_point(transform_point_to_panel(Point(0, 0), board, at(0, 0)), 20, 0)

    def test_mirror_y_flips_x(self):
        board = make_board(mirror_y=True)
        assert_point(transform_point_to_panel(Point(0, 0), board, at(0, 0)), 20, 10)

    def test_mirror_x_flips_y(self):
        board = make_board(mirror_x=True)
        assert_point(transform_point_to_panel(Point(0, 0), board, at(0, 0)), 0, 0)
        assert_point(transform_point_to_panel(Point(3, 7), board, at(0, 0)), 3, 7)


class TestOrientation:
    """Tests for arc direction under reflections."""

    def test_reverses_orientation(self):
        assert reverses_orientation(make_board())
        assert not reverses_orientation(make_board(mirror_x=True))
        assert not reverses_orientation(make_board(mirror_y=True))
        assert reverses_orientation(make_board(mirror_x=True, mirror_y=True))

    def test_flip_inverts_arc_direction(self, d_shape_commands):
        board = make_board(d_shape_commands)
        result = transform_arc_command(d_shape_commands[1], board, at(0, 0))
        assert result is not None
        start, end, arc = result

        assert_point(start, 20, 10)
        assert_point(end, 20, 0)
        assert arc.clockwise
        assert arc.sweep == pytest.approx(math.pi)
        # The arc still bulges to the right of the board
        assert_point(arc.point_at_angle(arc.angle_at(0.5)), 25, 5)

    def test_mirror_restores_arc_direction(self, d_shape_commands):
        board = make_board(d_shape_commands, mirror_x=True)
        result = transform_arc_command(d_shape_commands[1], board, at(0, 0))
        assert result is not None
        _, _, arc = result

        assert not arc.clockwise
        assert_point(arc.point_at_angle(arc.angle_at(0.5)), 25, 5)

    def test_incomplete_arc(self):
        cmd = DrawCommand(CommandType.ARC, start=Point(0, 0), end=Point(1, 1))
        assert transform_arc_command(cmd, make_board(), at(0, 0)) is None

    def test_collapsed_radius(self):
        cmd = DrawCommand(
            CommandType.ARC, start=Point(1, 1), end=Point(1, 1), center=Point(1, 1)
        )
        assert transform_arc_command(cmd, make_board(), at(0, 0)) is None

    def test_non_arc_command(self):
        assert transform_arc_command(line(0, 0, 1, 1), make_board(), at(0, 0)) is None


class TestBuildOutlineSegments:
    """Tests for build_outline_segments."""

    def test_rectangle_fallback_without_outline_layer(self):
        segments = build_outline_segments(make_board(), at(5, 5))

        assert [s.start for s in segments] == [
            Point(5, 5),
            Point(25, 5),
            Point(25, 15),
            Point(5, 15),
        ]
        assert segments[-1].end == Point(5, 5)
        assert [s.cumulative_distance for s in segments] == [0, 20, 30, 50]
        assert all(not s.is_arc for s in segments)

    def test_rectangle_fallback_rotated(self):
        segments = rectangle_outline(make_board(), at(0, 0, rotation=90))
        assert segments[1].start == Point(10, 0)
        assert segments[2].start == Point(10, 20)

    def test_fallback_when_only_degenerate_commands(self):
        board = make_board([line(3, 3, 3, 3), DrawCommand(CommandType.MOVE, end=Point(1, 1))])
        segments = build_outline_segments(board, at(0, 0))
        assert len(segments) == 4

    def test_mixed_outline(self, d_shape_commands):
        board = make_board(d_shape_commands)
        segments = build_outline_segments(board, at(0, 0))

        assert len(segments) == 4
        assert [s.is_arc for s in segments] == [False, True, False, False]

        arc_seg = segments[1]
        assert arc_seg.length == pytest.approx(5 * math.pi)
        assert segments[2].cumulative_distance == pytest.approx(20 + 5 * math.pi)
        assert segments[3].cumulative_distance == pytest.approx(40 + 5 * math.pi)

        # Consecutive segments connect
        for a, b in zip(segments, segments[1:] + segments[:1]):
            assert a.end.distance_to(b.start) < 1e-9

    def test_full_circle_outline(self):
        board = make_board(
            [
                DrawCommand(
                    CommandType.ARC,
                    start=Point(10, 5),
                    end=Point(10, 5),
                    center=Point(5, 5),
                )
            ]
        )
        segments = build_outline_segments(board, at(0, 0))

        assert len(segments) == 1
        assert segments[0].arc is not None
        assert segments[0].arc.sweep == pytest.approx(2 * math.pi)
        assert segments[0].length == pytest.approx(10 * math.pi)

    def test_short_segments_skipped(self):
        board = make_board(
            [line(0, 0, 20, 0), line(20, 0, 20, 0.0001), line(20, 0.0001, 20, 10)]
        )
        segments = build_outline_segments(board, at(0, 0))
        assert len(segments) == 2

    def test_line_without_start_skipped(self):
        board = make_board(
            [
                line(0, 0, 20, 0),
                DrawCommand(CommandType.LINE, end=Point(20, 10)),
                line(20, 0, 20, 10),
            ]
        )
        segments = build_outline_segments(board, at(0, 0))

        assert len(segments) == 2
        assert segments[1].cumulative_distance == pytest.approx(20.0)


class TestPanelCornerArcs:
    """Tests for rounded panel frame corners."""

    def test_no_radius(self):
        assert panel_corner_arcs(100, 80, 0.0) == []

    def test_corner_geometry(self):
        arcs = panel_corner_arcs(100, 80, 5.0)

        assert [a.center for a in arcs] == [
            Point(95, 5),
            Point(95, 75),
            Point(5, 75),
            Point(5, 5),
        ]
        for arc in arcs:
            assert arc.radius == 5.0
            assert not arc.clockwise
            assert arc.sweep == pytest.approx(math.pi / 2)

        assert_point(arcs[0].point_at_angle(arcs[0].start_angle), 95, 0)
        assert_point(arcs[0].point_at_angle(arcs[0].end_angle), 100, 5)
        assert_point(arcs[3].point_at_angle(arcs[3].start_angle), 0, 5)

"""Unit tests for the routing contour lifecycle.

Tests cover:
- Automatic contour generation (board outlines with tabs, panel frame)
- Adding, removing and clearing contours with sync copies
- Editing manual contours (segments, endpoints)
- Free drawing and follow-outline contours
"""

import itertools
import math

import pytest

from panelroute.config import RoutingConfig
from panelroute.core.contours import (
    add_routing_contour,
    auto_generate_contours,
    board_contour_segments,
    clear_routing_contours,
    create_follow_outline_contour,
    finalize_free_draw,
    find_contour,
    nearest_instance,
    panel_outline_segments,
    remove_routing_contour,
    replace_contour_segments,
    reroute_follow_outline,
    update_contour_endpoints,
)
from panelroute.core.outline import build_outline_segments
from panelroute.domain import (
    ArcInfo,
    Board,
    BoardInstance,
    ContourType,
    CreationMethod,
    OutlineDirection,
    Panel,
    Point,
    RoutingContour,
    RoutingSegment,
    Tab,
    TabEdge,
    TabType,
)


def counter_ids(prefix: str = "id"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def assert_point(actual: Point, x: float, y: float) -> None:
    assert actual.x == pytest.approx(x, abs=1e-9)
    assert actual.y == pytest.approx(y, abs=1e-9)


@pytest.fixture
def board() -> Board:
    return Board(id="b1", name="Sensor", width=20, height=10)


@pytest.fixture
def instances() -> list[BoardInstance]:
    return [
        BoardInstance(id="i1", board_id="b1", position=Point(0, 0)),
        BoardInstance(id="i2", board_id="b1", position=Point(50, 0)),
    ]


@pytest.fixture
def manual() -> RoutingContour:
    return RoutingContour(
        id="c1",
        contour_type=ContourType.BOARD_OUTLINE,
        segments=[RoutingSegment(Point(0, -1), Point(10, -1))],
        board_instance_id="i1",
        creation_method=CreationMethod.FREE_DRAW,
    )


class TestBoardContourSegments:
    """Tests for board_contour_segments."""

    def test_plain_rectangle(self, board, instances):
        segments = board_contour_segments(board, instances[0], [], 1.0)

        assert len(segments) == 4
        for seg, (x, y) in zip(segments, [(-1, -1), (21, -1), (21, 11), (-1, 11)]):
            assert_point(seg.start, x, y)
        assert_point(segments[-1].end, -1, -1)

    def test_tab_leaves_gap(self, board, instances):
        tab = Tab(id="t1", board_instance_id="i1", edge=TabEdge.BOTTOM, position=0.5, width=4)

        segments = board_contour_segments(board, instances[0], [tab], 1.0)

        assert len(segments) == 5
        assert_point(segments[0].start, -1, -1)
        assert_point(segments[0].end, 8, -1)
        assert_point(segments[1].start, 12, -1)
        assert_point(segments[1].end, 21, -1)

    def test_vscore_tab_ignored(self, board, instances):
        tab = Tab(
            id="t1",
            board_instance_id="i1",
            edge=TabEdge.BOTTOM,
            position=0.5,
            width=4,
            tab_type=TabType.VSCORE,
        )
        assert len(board_contour_segments(board, instances[0], [tab], 1.0)) == 4

    def test_tabs_of_other_placements_ignored(self, board, instances):
        tab = Tab(id="t1", board_instance_id="i2", edge=TabEdge.LEFT, position=0.5, width=4)
        assert len(board_contour_segments(board, instances[0], [tab], 1.0)) == 4

    def test_tab_at_edge_end(self, board, instances):
        tab = Tab(id="t1", board_instance_id="i1", edge=TabEdge.RIGHT, position=1.0, width=4)

        segments = board_contour_segments(board, instances[0], [tab], 1.0)

        # The gap runs to the end of the edge, so only its first part is cut
        assert len(segments) == 4
        assert_point(segments[1].start, 21, -1)
        assert_point(segments[1].end, 21, 8)


class TestPanelOutlineSegments:
    """Tests for panel_outline_segments."""

    def test_square_frame(self):
        segments = panel_outline_segments(100, 80)
        assert [s.start for s in segments] == [
            Point(0, 0),
            Point(100, 0),
            Point(100, 80),
            Point(0, 80),
        ]

    def test_rounded_frame(self):
        segments = panel_outline_segments(100, 80, 5.0)

        assert len(segments) == 8
        assert [s.arc is not None for s in segments] == [False, True] * 4
        assert segments[0].start == Point(5, 0)
        assert segments[0].end == Point(95, 0)
        assert segments[1].end == Point(100, 5)
        assert sum(s.length for s in segments) == pytest.approx(
            2 * 90 + 2 * 70 + 2 * math.pi * 5
        )

    def test_radius_clipped_to_half_size(self):
        segments = panel_outline_segments(100, 80, 60.0)
        # Vertical edges vanish once the radius reaches half the height
        assert len(segments) == 6
        assert segments[0].start == Point(40, 0)


class TestAutoGenerate:
    """Tests for auto_generate_contours."""

    def test_board_and_panel_contours(self, board, instances, manual):
        stale = RoutingContour(id="old", contour_type=ContourType.PANEL_OUTLINE)
        panel = Panel(
            width=100,
            height=80,
            boards=[board],
            instances=instances,
            routing_contours=[stale, manual],
        )

        contours = auto_generate_contours(panel, id_factory=counter_ids("auto"))

        assert [c.id for c in contours] == ["auto-1", "auto-2", "auto-3", "c1"]
        assert [c.contour_type for c in contours[:3]] == [
            ContourType.BOARD_OUTLINE,
            ContourType.BOARD_OUTLINE,
            ContourType.PANEL_OUTLINE,
        ]
        assert all(c.creation_method == CreationMethod.AUTO for c in contours[:3])
        assert contours[0].board_instance_id == "i1"
        assert contours[2].board_instance_id is None
        assert_point(contours[1].segments[0].start, 49, -1)

    def test_clearance_and_tool(self, board, instances):
        panel = Panel(width=100, height=80, boards=[board], instances=instances[:1])
        config = RoutingConfig(tool_diameter=3.0, clearance=0.5, generate_panel_outline=False)

        contours = auto_generate_contours(panel, config)

        assert len(contours) == 1
        assert contours[0].tool_diameter == 3.0
        assert_point(contours[0].segments[0].start, -2, -2)

    def test_panel_outline_only(self, board, instances):
        panel = Panel(width=100, height=80, boards=[board], instances=instances, corner_radius=5)
        config = RoutingConfig(generate_board_outlines=False)

        contours = auto_generate_contours(panel, config)

        assert len(contours) == 1
        assert len(contours[0].segments) == 8


class TestContourLifecycle:
    """Tests for adding, removing and clearing contours."""

    def test_add_manual_syncs(self, instances, manual):
        contours = add_routing_contour([], manual, instances, id_factory=counter_ids("copy"))

        assert [c.id for c in contours] == ["c1", "copy-1"]
        assert contours[1].board_instance_id == "i2"
        assert contours[1].segments == [RoutingSegment(Point(50, -1), Point(60, -1))]

    def test_add_auto_does_not_sync(self, instances, manual):
        manual.creation_method = CreationMethod.AUTO
        assert add_routing_contour([], manual, instances) == [manual]

    def test_remove_cascades_to_copies(self, instances, manual):
        contours = add_routing_contour([], manual, instances)
        assert remove_routing_contour(contours, "c1", instances) == []

    def test_remove_copy_is_noop(self, instances, manual):
        contours = add_routing_contour([], manual, instances, id_factory=counter_ids("copy"))
        assert remove_routing_contour(contours, "copy-1", instances) == contours

    def test_remove_unknown_is_noop(self, instances, manual):
        assert remove_routing_contour([manual], "nope", instances) == [manual]

    def test_clear_returns_empty_list(self):
        assert clear_routing_contours() == []

    def test_find_contour(self, manual):
        assert find_contour([manual], "c1") is manual
        assert find_contour([manual], "c2") is None

    def test_input_not_mutated(self, instances, manual):
        original = [manual]
        add_routing_contour(original, manual, instances)
        assert original == [manual]


class TestContourEdits:
    """Tests for segment replacement and endpoint drags."""

    def test_replace_segments_updates_copies(self, instances, manual):
        contours = add_routing_contour([], manual, instances, id_factory=counter_ids("copy"))
        new_segments = [RoutingSegment(Point(0, 0), Point(0, 5))]

        updated = replace_contour_segments(contours, "c1", new_segments, instances)

        assert updated[0].segments == new_segments
        assert updated[1].id == "copy-1"
        assert updated[1].segments == [RoutingSegment(Point(50, 0), Point(50, 5))]
        # The original contour object is not modified
        assert manual.segments == [RoutingSegment(Point(0, -1), Point(10, -1))]

    def test_replace_keeps_direction_unless_given(self, instances, manual):
        manual.outline_direction = OutlineDirection.REVERSE
        segments = [RoutingSegment(Point(0, 0), Point(1, 0))]

        kept = replace_contour_segments([manual], "c1", segments, instances)
        changed = replace_contour_segments(
            [manual], "c1", segments, instances, outline_direction=OutlineDirection.FORWARD
        )

        assert kept[0].outline_direction == OutlineDirection.REVERSE
        assert changed[0].outline_direction == OutlineDirection.FORWARD

    def test_sync_copy_is_read_only(self, instances, manual):
        contours = add_routing_contour([], manual, instances, id_factory=counter_ids("copy"))
        segments = [RoutingSegment(Point(0, 0), Point(1, 0))]
        assert replace_contour_segments(contours, "copy-1", segments, instances) == contours

    def test_auto_contour_is_read_only(self, instances, manual):
        manual.creation_method = CreationMethod.AUTO
        segments = [RoutingSegment(Point(0, 0), Point(1, 0))]
        assert replace_contour_segments([manual], "c1", segments, instances) == [manual]

    def test_update_line_endpoints(self, instances, manual):
        updated = update_contour_endpoints(
            [manual], "c1", instances[:1], start=Point(-3, -1), end=Point(12, -1)
        )
        assert updated[0].segments == [RoutingSegment(Point(-3, -1), Point(12, -1))]

    def test_update_arc_endpoint(self, instances, manual):
        arc = ArcInfo(Point(0, 0), 10.0, 0.0, math.pi / 2, clockwise=False)
        manual.segments = [RoutingSegment(Point(10, 0), Point(0, 10), arc)]

        updated = update_contour_endpoints([manual], "c1", instances[:1], end=Point(-10, 0))

        moved = updated[0].segments[0]
        assert moved.end == Point(-10, 0)
        assert moved.arc is not None
        assert moved.arc.end_angle == pytest.approx(math.pi)
        assert moved.arc.start_angle == 0.0
        assert moved.arc.radius == 10.0


class TestFreeDraw:
    """Tests for free-drawn contours."""

    def test_finalize(self, board, instances):
        points = [Point(1, 1), Point(5, 1), Point(5, 5)]

        contour = finalize_free_draw(points, instances, [board], id_factory=counter_ids("fd"))

        assert contour is not None
        assert contour.id == "fd-1"
        assert contour.creation_method == CreationMethod.FREE_DRAW
        assert contour.board_instance_id == "i1"
        assert len(contour.segments) == 2
        assert contour.segments[1] == RoutingSegment(Point(5, 1), Point(5, 5))

    def test_too_few_points(self, board, instances):
        assert finalize_free_draw([Point(1, 1)], instances, [board]) is None

    def test_no_placements(self, board):
        contour = finalize_free_draw([Point(0, 0), Point(1, 1)], [], [board])
        assert contour is not None
        assert contour.board_instance_id is None

    def test_nearest_instance(self, board, instances):
        nearest = nearest_instance(Point(55, 5), instances, [board])
        assert nearest is not None
        assert nearest.id == "i2"

    def test_nearest_instance_unknown_board(self, instances):
        assert nearest_instance(Point(0, 0), instances, []) is None


class TestFollowOutline:
    """Tests for follow-outline contours."""

    @pytest.fixture
    def outline(self, board, instances):
        return build_outline_segments(board, instances[0])

    def test_create(self, outline):
        contour = create_follow_outline_contour(
            outline, Point(5, 0), Point(20, 5), "i1", id_factory=counter_ids("fo")
        )

        assert contour is not None
        assert contour.id == "fo-1"
        assert contour.creation_method == CreationMethod.FOLLOW_OUTLINE
        assert contour.outline_direction == OutlineDirection.FORWARD
        assert contour.length == pytest.approx(22.0)

    def test_create_off_outline(self, outline):
        assert create_follow_outline_contour(outline, Point(50, 50), Point(20, 5), "i1") is None

    def test_reroute(self, outline, instances):
        contour = create_follow_outline_contour(outline, Point(5, 0), Point(20, 5), "i1")
        assert contour is not None
        contours = add_routing_contour([], contour, instances, id_factory=counter_ids("copy"))

        updated = reroute_follow_outline(
            contours, contour.id, outline, Point(5, 0), Point(20, 8), instances
        )

        assert_point(updated[0].segments[-1].end, 21, 8)
        assert updated[1].id == "copy-1"
        assert_point(updated[1].segments[-1].end, 71, 8)

    def test_reroute_off_outline_keeps_contour(self, outline, instances):
        contour = create_follow_outline_contour(outline, Point(5, 0), Point(20, 5), "i1")
        assert contour is not None

        updated = reroute_follow_outline(
            [contour], contour.id, outline, Point(5, 0), Point(60, 60), instances[:1]
        )

        assert updated == [contour]

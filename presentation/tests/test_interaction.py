"""
Portfolio Presenter - pan/zoom/drag state machine tests
"""

import pytest

from presentation.content import Position, StrategyContent, TimelineMilestone
from presentation.errors import UnknownNodeError
from presentation.interaction import (
    MAX_ZOOM,
    MIN_ZOOM,
    STRATEGY_BOUNDS,
    InteractionState,
    PointerTarget,
    StrategyCanvas,
    TimelineCanvas,
)
from presentation.layout import Point, path_segments


def _milestone(i, **extra):
    return TimelineMilestone(id=f"m{i}", role=f"Role {i}", company="Acme", dateRange="2020 - 2021", **extra)


@pytest.fixture
def milestones():
    return [_milestone(i) for i in range(5)]


@pytest.fixture
def changes():
    return []


@pytest.fixture
def canvas(milestones, changes):
    return TimelineCanvas(milestones, on_change=changes.append, scale=1.0)


def test_drag_divides_by_zoom_and_rebuilds_path(milestones, changes):
    """Drag node 2 by (100, 50) screen pixels at zoom 1.5"""
    canvas = TimelineCanvas(milestones, on_change=changes.append, scale=1.5)
    start = canvas.position_of("m2")

    assert canvas.on_pointer_down(0, 0, PointerTarget.node("m2")) == InteractionState.DRAGGING_NODE
    assert canvas.dragging_node_id == "m2"
    assert canvas.on_pointer_move(100, 50) is True

    moved = canvas.position_of("m2")
    assert moved.x == pytest.approx(start.x + 66.6667, abs=1e-3)
    assert moved.y == pytest.approx(start.y + 33.3333, abs=1e-3)

    segments = path_segments(canvas.positions())
    assert segments[1][1] == moved
    assert segments[2][0] == moved
    assert "L 766.667 295.733" in canvas.path()


def test_drag_reports_whole_collection_without_touching_input(milestones, canvas, changes):
    canvas.on_pointer_down(10, 10, PointerTarget.node("m1"))
    canvas.on_pointer_move(40, 10)
    canvas.on_pointer_move(60, 10)
    canvas.on_pointer_up()

    assert len(changes) == 2
    latest = changes[-1]
    assert [m.id for m in latest] == ["m0", "m1", "m2", "m3", "m4"]
    assert latest[1].position.x == 470
    assert latest[1].position.y == pytest.approx(57.6)
    assert all(m.position is None for m in milestones)
    assert canvas.state == InteractionState.IDLE


def test_timeline_drag_clamps_at_origin_only(canvas):
    canvas.on_pointer_down(0, 0, PointerTarget.node("m0"))
    canvas.on_pointer_move(-5000, 9000)
    assert canvas.position_of("m0") == Point(0, 160 + 9000)


def test_strategy_drag_clamps_both_bounds():
    changes = []
    strategy = StrategyContent(headline="h", description="d", points=["a", "b", "c"])
    canvas = StrategyCanvas(strategy, on_change=changes.append)

    canvas.on_pointer_down(0, 0, PointerTarget.node("1"))
    canvas.on_pointer_move(5000, 5000)
    canvas.on_pointer_up()
    assert canvas.position_of("1") == Point(STRATEGY_BOUNDS.max_x, STRATEGY_BOUNDS.max_y)

    canvas.on_pointer_down(0, 0, PointerTarget.node("0"))
    canvas.on_pointer_move(-5000, -5000)
    assert canvas.position_of("0") == Point(0, 0)
    assert len(changes[-1]) == 3
    assert changes[-1][0] == Position(x=0, y=0)


def test_below_threshold_release_toggles_instead_of_moving(canvas, changes):
    before = canvas.position_of("m3")
    canvas.on_pointer_down(100, 100, PointerTarget.node("m3"))
    canvas.on_pointer_move(103, 103)
    assert canvas.on_pointer_up() == "m3"

    assert canvas.position_of("m3") == before
    assert changes == []
    assert canvas.expansion.expanded_id == "m3"


def test_drag_past_threshold_suppresses_toggle(canvas):
    canvas.on_pointer_down(0, 0, PointerTarget.node("m3"))
    canvas.on_pointer_move(6, 0)
    canvas.on_pointer_move(1, 0)
    assert canvas.on_pointer_up() is None
    assert canvas.expansion.expanded_id is None


def test_pointer_leave_ends_drag_without_click(canvas):
    canvas.on_pointer_down(0, 0, PointerTarget.node("m1"))
    canvas.on_pointer_leave()
    assert canvas.state == InteractionState.IDLE
    assert canvas.expansion.expanded_id is None
    assert canvas.on_pointer_move(50, 50) is False


def test_pan_is_screen_space(milestones):
    canvas = TimelineCanvas(milestones, scale=2.0)
    assert canvas.on_pointer_down(10, 10, PointerTarget.background()) == InteractionState.PANNING
    canvas.on_pointer_move(40, -10)
    assert (canvas.viewport.pan_x, canvas.viewport.pan_y) == (30, -20)
    canvas.on_pointer_up()

    canvas.on_pointer_down(0, 0, PointerTarget.background())
    canvas.on_pointer_move(5, 5)
    assert (canvas.viewport.pan_x, canvas.viewport.pan_y) == (35, -15)


def test_control_press_starts_nothing(canvas):
    assert canvas.on_pointer_down(0, 0, PointerTarget.control()) == InteractionState.IDLE
    assert canvas.on_pointer_up() is None


def test_wheel_zoom_is_clamped(canvas):
    assert canvas.on_wheel(-100) == pytest.approx(1.3)
    assert canvas.on_wheel(10_000) == MIN_ZOOM
    assert canvas.on_wheel(-10_000) == MAX_ZOOM
    assert canvas.viewport.pan_x == 0


def test_strategy_ignores_pan_and_zoom():
    canvas = StrategyCanvas(StrategyContent(headline="h", description="d", points=["a"]))
    assert canvas.on_pointer_down(0, 0, PointerTarget.background()) == InteractionState.IDLE
    assert canvas.on_wheel(-500) == 1.0


def test_pressing_child_drags_parent_and_clicks_child():
    parent = _milestone(0, children=[_milestone(10)])
    canvas = TimelineCanvas([parent, _milestone(1)], scale=1.0)

    canvas.on_pointer_down(0, 0, PointerTarget.node("m10"))
    assert canvas.dragging_node_id == "m0"
    assert canvas.on_pointer_up() == "m10"
    assert canvas.expansion.expanded_id == "m10"

    canvas.on_pointer_down(0, 0, PointerTarget.node("m10"))
    canvas.on_pointer_move(0, 20)
    canvas.on_pointer_up()
    assert canvas.milestones[0].position == Position(x=140, y=180)
    assert canvas.milestones[0].children[0].position is None


def test_unknown_node_raises(canvas):
    with pytest.raises(UnknownNodeError):
        canvas.on_pointer_down(0, 0, PointerTarget.node("nope"))
    assert canvas.state == InteractionState.IDLE


def test_extent_follows_dragged_node(canvas):
    assert canvas.extent() == (1500, 420)
    canvas.on_pointer_down(0, 0, PointerTarget.node("m4"))
    canvas.on_pointer_move(1000, 0)
    width, _ = canvas.extent()
    assert width == 1260 + 1000 + 100

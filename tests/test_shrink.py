from maze.generator import generate_maze
from maze.maze_core import ActiveBounds
from maze.shrink import ShrinkEngine, ShrinkingWall
from game.events import EventType
from utils.constants import STEP_MS, SHRINK_INTERVAL_MS


def test_fire_waits_for_interval(open_room):
    engine = ShrinkEngine(open_room, ActiveBounds.full(open_room), now_ms=1000)
    assert not engine.should_fire(1000 + SHRINK_INTERVAL_MS)
    assert engine.should_fire(1000 + SHRINK_INTERVAL_MS + 1)


def test_fire_marks_ring_path_cells_and_contracts(open_room):
    bounds = ActiveBounds.full(open_room)
    engine = ShrinkEngine(open_room, bounds, min_span=2)

    # Outer ring is the border, nothing to mark
    result = engine.fire(9000)
    assert not result.halted
    assert result.markers == []
    assert bounds == ActiveBounds(1, 5, 1, 5)

    result = engine.fire(18000)
    assert not result.halted
    assert len(result.markers) == 16
    assert engine.is_marked(1, 1)
    assert not engine.is_marked(3, 3)
    assert bounds == ActiveBounds(2, 4, 2, 4)
    assert engine.last_fire_ms == 18000

    # Marked cells stay walkable until their timer runs out
    assert open_room.is_path(1, 1)


def test_fire_halts_at_minimum_span(open_room):
    bounds = ActiveBounds.full(open_room)
    engine = ShrinkEngine(open_room, bounds)

    result = engine.fire(9000)
    assert result.halted
    assert bounds == ActiveBounds.full(open_room)
    assert engine.shrinking_walls == []
    assert engine.last_fire_ms == 9000


def test_bounds_shrink_monotonically_until_halt():
    grid = generate_maze(21, 15, seed=4)
    bounds = ActiveBounds.full(grid)
    engine = ShrinkEngine(grid, bounds)

    previous = bounds.as_dict()
    now = 0
    while True:
        now += SHRINK_INTERVAL_MS + 1
        result = engine.fire(now)
        current = bounds.as_dict()
        assert current['min_x'] >= previous['min_x']
        assert current['max_x'] <= previous['max_x']
        assert current['min_y'] >= previous['min_y']
        assert current['max_y'] <= previous['max_y']
        if result.halted:
            assert current == previous
            break
        previous = current

    assert engine.cycles == 4
    assert bounds.span_y <= 7


def test_marker_solidifies_after_warning(open_room):
    engine = ShrinkEngine(open_room, ActiveBounds.full(open_room))
    engine.shrinking_walls.append(ShrinkingWall(3, 3, 2000))

    events = []
    for _ in range(119):
        events.extend(engine.update_markers(STEP_MS))
    assert open_room.is_path(3, 3)
    assert events == []
    assert 0 < engine.shrinking_walls[0].remaining_fraction < 0.05

    for _ in range(2):
        events.extend(engine.update_markers(STEP_MS))
    assert open_room.is_wall(3, 3)
    assert engine.shrinking_walls == []
    assert len(events) == 1
    assert events[0].type == EventType.WALL_SOLIDIFIED
    assert events[0].data['cell'] == (3, 3)
    assert events[0].position == open_room.cell_center(3, 3)


def test_solidify_is_idempotent(open_room):
    engine = ShrinkEngine(open_room, ActiveBounds.full(open_room))
    open_room.set_wall(2, 2)
    engine.shrinking_walls.append(ShrinkingWall(2, 2, 10))

    assert engine.update_markers(20) == []
    assert engine.shrinking_walls == []
    assert open_room.is_wall(2, 2)


def test_reset_drops_markers(open_room):
    engine = ShrinkEngine(open_room, ActiveBounds.full(open_room))
    engine.shrinking_walls.append(ShrinkingWall(2, 2))
    engine.cycles = 3

    new_bounds = ActiveBounds.full(open_room)
    engine.reset(open_room, new_bounds, 500)
    assert engine.shrinking_walls == []
    assert engine.cycles == 0
    assert engine.bounds is new_bounds
    assert engine.last_fire_ms == 500

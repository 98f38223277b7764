import random

from entities.gem import Gem, GemManager
from maze.generator import generate_maze
from maze.maze_core import ActiveBounds
from utils.constants import NUM_GEMS, START_CELL


def test_gem_is_centred(open_room):
    gem = Gem(open_room, 2, 3)
    assert (gem.x, gem.y) == (80, 112)


def test_target_count_scales_with_room(open_room):
    manager = GemManager()
    bounds = ActiveBounds.full(open_room)
    assert manager.count_free_cells(open_room, bounds) == 25
    assert manager.target_count(open_room, bounds) == 8
    assert manager.target_count(open_room, bounds, max_gems=3) == 3


def test_place_gems_inside_bounds():
    grid = generate_maze(21, 15, seed=6)
    bounds = ActiveBounds(3, 17, 3, 11)
    manager = GemManager()

    placed = manager.place_gems(grid, bounds, random.Random(6))

    cells = [(g.gx, g.gy) for g in manager]
    assert placed == len(manager) > 0
    assert placed <= NUM_GEMS
    assert len(set(cells)) == len(cells)
    for gx, gy in cells:
        assert bounds.contains(gx, gy)
        assert grid.is_path(gx, gy)
        assert (gx, gy) != START_CELL


def test_place_gems_replaces_old_batch(open_room):
    manager = GemManager()
    bounds = ActiveBounds.full(open_room)
    assert manager.place_gems(open_room, bounds, random.Random(1)) == 8
    first = list(manager)
    assert manager.place_gems(open_room, bounds, random.Random(2)) == 8
    assert len(manager) == 8
    assert all(g not in manager.gems for g in first)


def test_no_room_places_nothing(make_grid):
    grid = make_grid([
        "#######",
        "#..####",
        "#######",
        "#######",
        "#######",
    ])
    manager = GemManager()
    assert manager.place_gems(grid, ActiveBounds.full(grid), random.Random(0)) == 0
    assert len(manager) == 0


def test_remove(open_room):
    manager = GemManager()
    manager.gems = [Gem(open_room, 2, 2), Gem(open_room, 3, 3)]
    gem = manager.gems[1]
    manager.remove(gem)
    assert gem not in manager
    assert len(manager) == 1

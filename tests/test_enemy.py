import random

import pytest

from entities.enemy import (
    Enemy, EnemyManager, EnemyVariant, open_moves, line_of_sight_move,
    choose_chaser_move, choose_wanderer_move
)
from maze.generator import generate_maze
from maze.maze_core import ActiveBounds
from utils.constants import (
    CHASER_SPEED, CHASER_COOLDOWN, STUCK_COOLDOWN, MAX_ENEMIES, START_CELL
)

CROSS = [
    "###########",
    "#####.#####",
    "#####.#####",
    "#####.#####",
    "#####.#####",
    "#.........#",
    "#####.#####",
    "#####.#####",
    "#####.#####",
    "#####.#####",
    "###########",
]


class Target:
    def __init__(self, x, y):
        self.x = x
        self.y = y


@pytest.fixture
def cross(make_grid):
    return make_grid(CROSS)


def test_open_moves(cross):
    assert open_moves(cross, 5, 5) == [(0, -1), (0, 1), (-1, 0), (1, 0)]
    assert open_moves(cross, 5, 1) == [(0, 1)]


def test_line_of_sight(cross):
    assert line_of_sight_move(cross, (5, 5), (5, 9)) == (0, 1)
    assert line_of_sight_move(cross, (5, 5), (1, 5)) == (-1, 0)
    assert line_of_sight_move(cross, (5, 5), (5, 5)) is None
    assert line_of_sight_move(cross, (5, 5), (7, 9)) is None

    cross.set_wall(5, 7)
    assert line_of_sight_move(cross, (5, 5), (5, 9)) is None


def test_chaser_goes_straight_down_clear_column(cross):
    enemy = Enemy(*cross.cell_center(5, 5), EnemyVariant.CHASER)
    player = Target(*cross.cell_center(5, 9))

    assert enemy.decide(cross, player) is True
    assert enemy.direction == (0, 1)
    assert enemy.vx == 0
    assert enemy.vy == pytest.approx(CHASER_SPEED)
    assert enemy.move_cooldown == CHASER_COOLDOWN


def test_chaser_greedy_prefers_larger_axis(cross, stub_rng):
    moves = open_moves(cross, 5, 5)
    assert choose_chaser_move(cross, (5, 5), (7, 9), moves, stub_rng) == (0, 1)
    assert choose_chaser_move(cross, (5, 5), (9, 7), moves, stub_rng) == (1, 0)
    # Ties go horizontal
    assert choose_chaser_move(cross, (5, 5), (7, 7), moves, stub_rng) == (1, 0)


def test_chaser_falls_back_to_any_open_move(stub_rng, cross):
    moves = [(-1, 0)]
    assert choose_chaser_move(cross, (5, 5), (8, 9), moves, stub_rng) == (-1, 0)
    assert choose_chaser_move(cross, (5, 5), (8, 9), [], stub_rng) is None


def test_wanderer_avoids_reversal():
    moves = [(0, -1), (0, 1), (1, 0)]
    rng = random.Random(5)
    for _ in range(50):
        assert choose_wanderer_move(moves, (0, 1), rng) != (0, -1)


def test_wanderer_reverses_at_dead_end(stub_rng):
    assert choose_wanderer_move([(0, -1)], (0, 1), stub_rng) == (0, -1)


def test_cooldown_delays_decisions(cross):
    enemy = Enemy(*cross.cell_center(5, 5), EnemyVariant.CHASER)
    player = Target(*cross.cell_center(5, 9))
    enemy.decide(cross, player)

    player.x, player.y = cross.cell_center(1, 5)
    assert enemy.decide(cross, player) is False
    assert enemy.direction == (0, 1)


def test_bump_clears_axis_and_cooldown(single_cell):
    enemy = Enemy(*single_cell.cell_center(1, 1), 'chaser')
    enemy.set_direction((1, 0))
    enemy.move_cooldown = 30

    for _ in range(10):
        collided_x, _ = enemy.move(single_cell)
        if collided_x:
            break
    assert collided_x
    assert enemy.direction == (0, 0)
    assert enemy.vx == 0
    assert enemy.move_cooldown == 0


def test_boxed_in_enemy_waits(single_cell):
    enemy = Enemy(*single_cell.cell_center(1, 1), EnemyVariant.WANDERER)
    enemy.set_direction((1, 0))
    assert enemy.decide(single_cell, Target(0, 0)) is True
    assert enemy.direction == (0, 0)
    assert enemy.move_cooldown == STUCK_COOLDOWN


def test_unknown_variant():
    with pytest.raises(ValueError):
        Enemy(10, 10, 'ghost')


@pytest.mark.parametrize("seed", [1, 8, 21])
def test_place_enemies(seed):
    rng = random.Random(seed)
    grid = generate_maze(21, 15, seed=seed)
    bounds = ActiveBounds.full(grid)
    safe = bounds.inset(2)
    manager = EnemyManager()

    manager.place_enemies(grid, bounds, rng)

    cells = [grid.cell_at_pixel(e.x, e.y) for e in manager]
    assert 0 < len(manager) <= 5
    assert len(set(cells)) == len(cells)
    assert sum(1 for e in manager if e.is_chaser) <= 2
    for enemy, (gx, gy) in zip(manager, cells):
        assert grid.is_path(gx, gy)
        assert safe.contains(gx, gy)
        limit = 4 if enemy.is_chaser else 3
        assert abs(gx - START_CELL[0]) > limit or abs(gy - START_CELL[1]) > limit


def test_reinforcement_alternates_and_caps():
    rng = random.Random(3)
    grid = generate_maze(21, 15, seed=3)
    bounds = ActiveBounds.full(grid)
    manager = EnemyManager()
    manager.add_enemy(grid, 9, 9, EnemyVariant.CHASER, rng)

    enemy = manager.spawn_reinforcement(grid, bounds, rng)
    assert enemy is not None
    assert enemy.variant is EnemyVariant.WANDERER

    while len(manager) < MAX_ENEMIES:
        manager.add_enemy(grid, 9, 9, EnemyVariant.CHASER, rng)
    assert manager.spawn_reinforcement(grid, bounds, rng) is None

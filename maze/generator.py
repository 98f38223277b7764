"""
Maze generation - randomized depth-first carving with extra loops
"""

import logging
import math
import random

from utils.constants import (
    CARVE_DIRS, START_CELL, CYCLE_FACTOR, OPEN_AREA_CHANCE, WALL
)
from maze.maze_core import MazeGrid

logger = logging.getLogger(__name__)


def _make_rng(rng=None, seed=None):
    """Pick the random source: explicit rng, seeded Random, or module random"""
    if rng is not None:
        return rng
    if seed is not None:
        return random.Random(seed)
    return random


# ========== GENERATOR: DFS CARVER ==========

def gen_dfs_carver(grid, start=START_CELL, rng=None):
    """
    Depth-first carving on the 2-step lattice - animated generator

    Every cell sharing the start's parity is a carving target. The top of
    the stack carves towards the first shuffled neighbor that is still wall,
    and backtracks when none is left.
    """
    rng = _make_rng(rng)
    sx, sy = start
    grid.set_path(sx, sy)
    stack = [(sx, sy)]

    yield {"cells": grid.cells, "current": (sx, sy), "carved": None, "done": False}

    while stack:
        cx, cy = stack[-1]

        directions = list(CARVE_DIRS)
        rng.shuffle(directions)

        neighbors = []
        for dx, dy in directions:
            nx, ny = cx + dx, cy + dy
            if 0 < nx < grid.width - 1 and 0 < ny < grid.height - 1 and grid.get(nx, ny) == WALL:
                neighbors.append((nx, ny, dx, dy))

        if neighbors:
            nx, ny, dx, dy = neighbors[0]
            grid.set_path(nx, ny)
            grid.set_path(cx + dx // 2, cy + dy // 2)
            stack.append((nx, ny))

            yield {"cells": grid.cells, "current": (nx, ny), "carved": ((cx, cy), (nx, ny)), "done": False}
        else:
            stack.pop()
            yield {"cells": grid.cells, "current": (cx, cy), "carved": None, "done": False}

    yield {"cells": grid.cells, "current": (sx, sy), "carved": None, "done": True}


# ========== CYCLES (ADD LOOPS) ==========

def open_area(grid, x, y, rng):
    """
    Clear a 2x2 or 3x2 block anchored at (x, y)

    Skipped entirely if the block would touch the border.
    """
    area_w = 2 if rng.random() < 0.5 else 3
    area_h = 2

    if x + area_w >= grid.width - 1 or y + area_h >= grid.height - 1:
        return False

    for ny in range(y, y + area_h):
        for nx in range(x, x + area_w):
            grid.set_path(nx, ny)
    return True


def inject_cycles(grid, rng=None, attempts=None):
    """
    Knock out interior walls that join two existing paths

    The DFS leaves a perfect maze; every knocked-out wall closes a loop so
    entities get more than one route. Returns number of walls removed.
    """
    rng = _make_rng(rng)
    if attempts is None:
        attempts = math.floor(min(grid.width, grid.height) * CYCLE_FACTOR)

    removed = 0
    for _ in range(attempts):
        x = rng.randrange(1, grid.width - 1)
        y = rng.randrange(1, grid.height - 1)

        if grid.get(x, y) != WALL:
            continue
        if grid.path_neighbor_count(x, y) < 2:
            continue

        grid.set_path(x, y)
        removed += 1

        # Occasionally create small open areas
        if rng.random() < OPEN_AREA_CHANCE and x < grid.width - 2 and y < grid.height - 2:
            open_area(grid, x, y, rng)

    return removed


def clear_start_pocket(grid, start=START_CELL):
    """Force the 2x2 block at the start cell open"""
    sx, sy = start
    for y in (sy, sy + 1):
        for x in (sx, sx + 1):
            grid.set_path(x, y)


# ========== FULL MAZE ==========

def generate_maze(width, height, rng=None, seed=None, cell_size=None):
    """
    Build a complete playable maze

    Args:
        width, height: Odd grid dimensions (>= 5)
        rng: Random source (anything with shuffle/random/randrange)
        seed: Seed for a private random.Random when rng is not given
        cell_size: Pixel size of a cell (defaults to CELL_SIZE)

    Returns:
        MazeGrid
    """
    rng = _make_rng(rng, seed)
    if cell_size is None:
        grid = MazeGrid(width, height)
    else:
        grid = MazeGrid(width, height, cell_size)

    # Generate instantly
    for _ in gen_dfs_carver(grid, START_CELL, rng):
        pass

    removed = inject_cycles(grid, rng)
    clear_start_pocket(grid, START_CELL)

    logger.debug("Generated %dx%d maze, %d loops added, seed=%s",
                 width, height, removed, seed)
    return grid

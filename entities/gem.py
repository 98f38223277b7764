"""
Gem entities - the things the player collects for score
"""

import logging
import math
import random

from utils.constants import GEM_SIZE, NUM_GEMS, PATH, START_CELL

logger = logging.getLogger(__name__)


class Gem:
    """
    Single gem, centred in a grid cell
    """
    def __init__(self, grid, gx, gy, angle=0.0):
        self.gx = gx
        self.gy = gy
        self.x, self.y = grid.cell_center(gx, gy)
        self.size = GEM_SIZE
        self.angle = angle  # Spin for rendering

    def __repr__(self):
        return f"Gem(cell=({self.gx},{self.gy}))"


class GemManager:
    """
    Manages all gems in the maze
    """
    def __init__(self):
        self.gems = []

    def count_free_cells(self, grid, bounds):
        """Path cells inside the active bounds"""
        free = 0
        for y in range(bounds.min_y, bounds.max_y + 1):
            for x in range(bounds.min_x, bounds.max_x + 1):
                if grid.get(x, y) == PATH:
                    free += 1
        return free

    def target_count(self, grid, bounds, max_gems=NUM_GEMS):
        """How many gems fit: one per three free cells, capped"""
        return min(max_gems, self.count_free_cells(grid, bounds) // 3)

    def place_gems(self, grid, bounds, rng=random, max_gems=NUM_GEMS):
        """
        Replace the gem list with a fresh batch inside the active bounds

        Uses bounded random attempts, so fewer than the target may land.

        Returns:
            Number of gems placed (0 means the maze has no room left)
        """
        self.gems = []
        target = self.target_count(grid, bounds, max_gems)
        max_attempts = max_gems * 10
        attempts = 0
        taken = set()

        while len(self.gems) < target and attempts < max_attempts:
            attempts += 1
            gx = rng.randrange(bounds.min_x, bounds.max_x + 1)
            gy = rng.randrange(bounds.min_y, bounds.max_y + 1)

            if grid.get(gx, gy) != PATH or (gx, gy) == START_CELL:
                continue
            if (gx, gy) in taken:
                continue

            taken.add((gx, gy))
            self.gems.append(Gem(grid, gx, gy, rng.random() * math.pi * 2))

        logger.debug("Placed %d/%d gems in %s", len(self.gems), target, bounds)
        return len(self.gems)

    def remove(self, gem):
        self.gems.remove(gem)

    def clear(self):
        self.gems.clear()

    def __len__(self):
        return len(self.gems)

    def __iter__(self):
        return iter(self.gems)

    def __repr__(self):
        return f"GemManager(gems={len(self.gems)})"

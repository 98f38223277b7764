"""
Power-up entities
Players can collect power-ups for temporary boosts
"""

import logging
import math
import random

from utils.constants import (
    POWERUP_TYPES, POWERUP_SIZE, NUM_GEMS, PATH, START_CELL,
    SHRINK_POWERUP_CHANCE, MAX_ACTIVE_POWERUPS
)

logger = logging.getLogger(__name__)


POWERUP_NAMES = {
    'speed': 'Speed Boost',
    'invincibility': 'Invincibility',
    'ghost': 'Ghost Mode',
}


class PowerUp:
    """
    Single power-up, centred in a grid cell
    """
    def __init__(self, grid, gx, gy, powerup_type):
        """
        Args:
            grid: MazeGrid the power-up sits in
            gx, gy: Grid position
            powerup_type: 'speed', 'invincibility' or 'ghost'
        """
        if powerup_type not in POWERUP_TYPES:
            raise ValueError(f"unknown power-up type {powerup_type!r}")

        self.gx = gx
        self.gy = gy
        self.x, self.y = grid.cell_center(gx, gy)
        self.type = powerup_type
        self.size = POWERUP_SIZE
        self.angle = 0.0  # Pulsing animation

    def pulse(self):
        """Scale factor for the pulsing draw"""
        return 0.2 * math.sin(self.angle) + 1

    def update(self):
        """Advance the pulse animation"""
        self.angle += 0.05

    def snapshot(self):
        return {'x': self.x, 'y': self.y, 'type': self.type, 'size': self.size, 'pulse': self.pulse()}

    def __repr__(self):
        return f"PowerUp(cell=({self.gx},{self.gy}), type={self.type})"


class PowerUpManager:
    """
    Manages all power-ups in the maze
    """
    def __init__(self):
        self.powerups = []

    def add_powerup(self, grid, gx, gy, powerup_type):
        """Add a power-up to the maze"""
        powerup = PowerUp(grid, gx, gy, powerup_type)
        self.powerups.append(powerup)
        return powerup

    def _occupied(self, gx, gy):
        return any(p.gx == gx and p.gy == gy for p in self.powerups)

    def place_powerups(self, grid, gems, rng=random, count=NUM_GEMS // 5):
        """
        Scatter a fresh set of power-ups

        One random try per slot; cells holding a gem, another power-up or
        the start are skipped, so fewer than count may land.
        """
        self.powerups = []
        gem_cells = {(g.gx, g.gy) for g in gems}

        for _ in range(count):
            gx = rng.randrange(grid.width)
            gy = rng.randrange(grid.height)

            if grid.get(gx, gy) != PATH or (gx, gy) == START_CELL:
                continue
            if self._occupied(gx, gy) or (gx, gy) in gem_cells:
                continue

            self.add_powerup(grid, gx, gy, rng.choice(POWERUP_TYPES))

        logger.debug("Placed %d power-ups", len(self.powerups))
        return self.powerups

    def spawn_at_center(self, grid, bounds, rng=random):
        """
        Maybe drop a power-up in the middle of the shrinking maze

        Skipped when the centre cell is wall or already holds a power-up.

        Returns:
            The new PowerUp or None
        """
        if rng.random() >= SHRINK_POWERUP_CHANCE or len(self.powerups) >= MAX_ACTIVE_POWERUPS:
            return None

        mx, my = bounds.center()
        if grid.get(mx, my) != PATH or self._occupied(mx, my):
            return None

        return self.add_powerup(grid, mx, my, rng.choice(POWERUP_TYPES))

    def collect(self, powerup, player):
        """Apply a power-up to the player and remove it"""
        player.apply_power_up(powerup.type)
        self.powerups.remove(powerup)
        return powerup.type

    def update(self):
        for powerup in self.powerups:
            powerup.update()

    def clear(self):
        self.powerups.clear()

    def __len__(self):
        return len(self.powerups)

    def __iter__(self):
        return iter(self.powerups)

    def __repr__(self):
        return f"PowerUpManager(powerups={len(self.powerups)})"

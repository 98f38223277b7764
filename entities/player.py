"""
Player entity with power-up timers, trail, and facing angle
"""

import math

from utils.constants import (
    CELL_SIZE, PLAYER_SPEED, PLAYER_SIZE, PLAYER_MAX_TRAIL,
    POWERUP_TYPES, POWERUP_DURATIONS, SPEED_BOOST, START_CELL
)
from game.collision import move_entity


class Player:
    """
    Player entity in pixel coordinates
    """
    def __init__(self, x, y, size=PLAYER_SIZE, base_speed=PLAYER_SPEED):
        if base_speed < 0:
            raise ValueError(f"base speed must not be negative, got {base_speed}")

        self.x = x
        self.y = y
        self.size = size
        self.base_speed = base_speed

        # Actual velocity after collision, and the requested direction
        self.vx = 0
        self.vy = 0
        self.target_vx = 0
        self.target_vy = 0
        self.angle = 0.0

        # Trail for visual effect
        self.trail = []
        self.max_trail_length = PLAYER_MAX_TRAIL

        # Power-up timers in frames
        self.power_ups = {kind: 0 for kind in POWERUP_TYPES}

    @classmethod
    def at_start(cls, cell_size=CELL_SIZE):
        """Player centred in the start cell"""
        sx, sy = START_CELL
        return cls((sx + 0.5) * cell_size, (sy + 0.5) * cell_size)

    def set_intent(self, dx, dy):
        """Store requested direction (already normalized)"""
        self.target_vx = dx
        self.target_vy = dy

    def is_moving(self):
        return self.vx != 0 or self.vy != 0

    def has_power_up(self, kind):
        return self.power_ups.get(kind, 0) > 0

    def is_invincible(self):
        return self.has_power_up('invincibility')

    def is_ghost(self):
        return self.has_power_up('ghost')

    def effective_speed(self):
        """Base speed, boosted while the speed power-up runs"""
        if self.has_power_up('speed'):
            return self.base_speed * SPEED_BOOST
        return self.base_speed

    def apply_power_up(self, kind):
        """Start (or restart) a power-up timer"""
        if kind not in POWERUP_DURATIONS:
            raise ValueError(f"unknown power-up type {kind!r}")
        self.power_ups[kind] = POWERUP_DURATIONS[kind]

    def tick_power_ups(self):
        """
        Count every active power-up down by one frame

        Returns:
            List of power-up kinds that just ran out
        """
        expired = []
        for kind, timer in self.power_ups.items():
            if timer > 0:
                self.power_ups[kind] = timer - 1
                if self.power_ups[kind] == 0:
                    expired.append(kind)
        return expired

    def update_trail(self):
        """Remember where we were while moving"""
        if self.target_vx == 0 and self.target_vy == 0:
            return
        self.trail.append((self.x, self.y))
        if len(self.trail) > self.max_trail_length:
            self.trail.pop(0)

    def move(self, grid, canvas=None):
        """
        Move along the current intent with wall collision

        Returns:
            (collided_x, collided_y)
        """
        speed = self.effective_speed()
        self.update_trail()

        collided_x, collided_y = move_entity(
            self, grid, self.target_vx, self.target_vy, speed,
            ghost=self.is_ghost(), canvas=canvas
        )

        self.vx = 0 if collided_x else self.target_vx
        self.vy = 0 if collided_y else self.target_vy

        if self.is_moving():
            self.angle = math.atan2(self.vy, self.vx)

        return collided_x, collided_y

    def snapshot(self):
        return {
            'x': self.x,
            'y': self.y,
            'vx': self.vx,
            'vy': self.vy,
            'size': self.size,
            'angle': self.angle,
            'power_ups': dict(self.power_ups),
            'trail': list(self.trail),
        }

    def __repr__(self):
        return f"Player(pos=({self.x:.1f},{self.y:.1f}), power_ups={self.power_ups})"

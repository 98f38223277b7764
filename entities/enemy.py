"""
Enemy AI entities
Chasers hunt the player, wanderers patrol at random
"""

import logging
import math
import random
from enum import Enum

from utils.constants import (
    DIRS, PATH, START_CELL, NUM_ENEMIES, MAX_ENEMIES,
    CHASER_SPEED, WANDERER_SPEED, CHASER_SIZE, WANDERER_SIZE,
    CHASER_COOLDOWN, WANDERER_COOLDOWN, STUCK_COOLDOWN,
    CHASER_SAFE_DISTANCE, WANDERER_SAFE_DISTANCE
)
from game.collision import move_entity
from utils.helpers import sign, outside_square

logger = logging.getLogger(__name__)


class EnemyVariant(Enum):
    CHASER = 'chaser'
    WANDERER = 'wanderer'


# ========== POLICIES ==========

def open_moves(grid, gx, gy):
    """Unit directions (N, S, W, E) whose neighbor cell centre is path"""
    moves = []
    for dx, dy in DIRS:
        cx, cy = grid.cell_center(gx + dx, gy + dy)
        if grid.value_at_pixel(cx, cy) == PATH:
            moves.append((dx, dy))
    return moves


def line_of_sight_move(grid, enemy_cell, player_cell):
    """
    Direction straight at the player when they share a row or column and
    every cell between is path; None otherwise
    """
    ex, ey = enemy_cell
    px, py = player_cell

    if ex == px:
        step = sign(py - ey)
        if step == 0:
            return None
        for y in range(ey + step, py, step):
            if not grid.is_path(ex, y):
                return None
        return (0, step)

    if ey == py:
        step = sign(px - ex)
        for x in range(ex + step, px, step):
            if not grid.is_path(x, ey):
                return None
        return (step, 0)

    return None


def choose_chaser_move(grid, enemy_cell, player_cell, moves, rng=random):
    """
    Pick a chaser direction

    1. Straight shot along a clear row/column
    2. Greedy step on the axis with the larger distance, falling back to
       the other axis
    3. Any open direction
    """
    if not moves:
        return None

    target = line_of_sight_move(grid, enemy_cell, player_cell)
    if target not in moves:
        target = None

    if target is None:
        ex, ey = enemy_cell
        px, py = player_cell
        x_move = (sign(px - ex), 0)
        y_move = (0, sign(py - ey))

        if abs(px - ex) >= abs(py - ey):
            preferred = (x_move, y_move)
        else:
            preferred = (y_move, x_move)

        for move in preferred:
            if move in moves:
                target = move
                break

    if target is None:
        target = rng.choice(moves)
    return target


def choose_wanderer_move(moves, heading, rng=random):
    """
    Pick a wanderer direction, avoiding an immediate U-turn

    Args:
        moves: Open directions
        heading: Current (dx, dy), (0, 0) when stopped
    """
    if not moves:
        return None

    reverse = (-heading[0], -heading[1])
    candidates = [m for m in moves if m != reverse]
    if not candidates:
        candidates = moves
    return rng.choice(candidates)


# ========== ENEMY ==========

class Enemy:
    """
    Single enemy in pixel coordinates
    """
    def __init__(self, x, y, variant, rng=random):
        if not isinstance(variant, EnemyVariant):
            variant = EnemyVariant(variant)

        self.x = x
        self.y = y
        self.variant = variant
        self.size = CHASER_SIZE if variant is EnemyVariant.CHASER else WANDERER_SIZE
        self.speed = CHASER_SPEED if variant is EnemyVariant.CHASER else WANDERER_SPEED

        # Heading as unit direction; velocity is heading * speed
        self.direction = (0, 0)
        self.vx = 0.0
        self.vy = 0.0
        self.move_cooldown = 0

        # Eyes follow the player
        self.eye_angle = 0.0
        self.blink_timer = rng.random() * 100

    @property
    def is_chaser(self):
        return self.variant is EnemyVariant.CHASER

    def set_direction(self, direction):
        self.direction = direction
        self.vx = direction[0] * self.speed
        self.vy = direction[1] * self.speed

    def update_eyes(self, player, rng=random):
        """Track the player with the eyes and count down to the next blink"""
        self.eye_angle = math.atan2(player.y - self.y, player.x - self.x)
        self.blink_timer -= 1
        if self.blink_timer <= 0:
            self.blink_timer = rng.random() * 100 + 50

    def is_blinking(self):
        return self.blink_timer < 5

    def decide(self, grid, player, rng=random):
        """
        Choose a new heading once the cooldown has run out

        Returns:
            True if a new decision was made this tick
        """
        self.move_cooldown -= 1
        if self.move_cooldown > 0:
            return False

        gx, gy = grid.cell_at_pixel(self.x, self.y)
        moves = open_moves(grid, gx, gy)

        if not moves:
            # Boxed in, stay still and retry soon
            self.set_direction((0, 0))
            self.move_cooldown = STUCK_COOLDOWN
            return True

        if self.is_chaser:
            player_cell = grid.cell_at_pixel(player.x, player.y)
            move = choose_chaser_move(grid, (gx, gy), player_cell, moves, rng)
            self.move_cooldown = CHASER_COOLDOWN
        else:
            move = choose_wanderer_move(moves, self.direction, rng)
            # Wanderers keep a heading longer
            self.move_cooldown = WANDERER_COOLDOWN + rng.random() * WANDERER_COOLDOWN / 2

        self.set_direction(move)
        return True

    def move(self, grid, canvas=None):
        """
        Apply the current velocity with wall collision

        A bump zeroes that axis and forces a fresh decision next tick.
        """
        dx, dy = self.direction
        collided_x, collided_y = move_entity(self, grid, dx, dy, self.speed, canvas=canvas)

        if collided_x:
            self.direction = (0, self.direction[1])
            self.vx = 0.0
            self.move_cooldown = 0
        if collided_y:
            self.direction = (self.direction[0], 0)
            self.vy = 0.0
            self.move_cooldown = 0

        return collided_x, collided_y

    def update(self, grid, player, rng=random, canvas=None):
        """One tick of thinking and moving"""
        self.update_eyes(player, rng)
        self.decide(grid, player, rng)
        return self.move(grid, canvas)

    def snapshot(self):
        return {
            'x': self.x,
            'y': self.y,
            'vx': self.vx,
            'vy': self.vy,
            'size': self.size,
            'variant': self.variant.value,
            'eye_angle': self.eye_angle,
            'blinking': self.is_blinking(),
        }

    def __repr__(self):
        return f"Enemy(pos=({self.x:.1f},{self.y:.1f}), variant={self.variant.value})"


# ========== MANAGER ==========

class EnemyManager:
    """
    Manages all enemies in the maze
    """
    def __init__(self):
        self.enemies = []

    def add_enemy(self, grid, gx, gy, variant, rng=random):
        """Add an enemy centred in a cell"""
        x, y = grid.cell_center(gx, gy)
        enemy = Enemy(x, y, variant, rng)
        self.enemies.append(enemy)
        return enemy

    def _occupied(self, grid, gx, gy):
        return any(grid.cell_at_pixel(e.x, e.y) == (gx, gy) for e in self.enemies)

    def _spawn_cells(self, grid, bounds):
        """
        Path cells that survive the next two shrink cycles

        The first cycle takes the current outer ring, the second the ring
        inside it.
        """
        safe = bounds.inset(2)
        return [(x, y) for x, y in grid.path_cells() if safe.contains(x, y)]

    def _place_variant(self, grid, candidates, variant, count, safe_distance, rng):
        """Random attempts, like gem placement, bounded by 10x the enemy count"""
        placed = 0
        attempts = 0
        max_attempts = NUM_ENEMIES * 10

        if not candidates:
            return 0

        while placed < count and attempts < max_attempts:
            attempts += 1
            gx, gy = rng.choice(candidates)
            if not outside_square((gx, gy), START_CELL, safe_distance):
                continue
            if self._occupied(grid, gx, gy):
                continue
            self.add_enemy(grid, gx, gy, variant, rng)
            placed += 1
        return placed

    def place_enemies(self, grid, bounds, rng=random, count=NUM_ENEMIES):
        """
        Replace all enemies with a fresh set

        About half are chasers (kept further from the start), the rest
        wanderers.
        """
        self.enemies = []
        candidates = self._spawn_cells(grid, bounds)

        num_chasers = count // 2
        num_wanderers = count - num_chasers

        chasers = self._place_variant(grid, candidates, EnemyVariant.CHASER,
                                      num_chasers, CHASER_SAFE_DISTANCE, rng)
        wanderers = self._place_variant(grid, candidates, EnemyVariant.WANDERER,
                                        num_wanderers, WANDERER_SAFE_DISTANCE, rng)

        logger.debug("Placed %d chasers and %d wanderers", chasers, wanderers)
        return self.enemies

    def spawn_reinforcement(self, grid, bounds, rng=random):
        """
        Add one more enemy, alternating variants

        Returns:
            The new Enemy, or None if at the cap or no cell is free
        """
        if len(self.enemies) >= MAX_ENEMIES:
            return None

        chasers = sum(1 for e in self.enemies if e.is_chaser)
        if chasers <= len(self.enemies) - chasers:
            variant, safe_distance = EnemyVariant.CHASER, CHASER_SAFE_DISTANCE
        else:
            variant, safe_distance = EnemyVariant.WANDERER, WANDERER_SAFE_DISTANCE

        candidates = self._spawn_cells(grid, bounds)
        before = len(self.enemies)
        self._place_variant(grid, candidates, variant, 1, safe_distance, rng)
        if len(self.enemies) == before:
            return None
        return self.enemies[-1]

    def update(self, grid, player, rng=random, canvas=None):
        """Think and move every enemy"""
        for enemy in self.enemies:
            enemy.update(grid, player, rng, canvas)

    def clear(self):
        """Remove all enemies"""
        self.enemies.clear()

    def __len__(self):
        return len(self.enemies)

    def __iter__(self):
        return iter(self.enemies)

    def __repr__(self):
        return f"EnemyManager(enemies={len(self.enemies)})"

"""
Collision detection and handling

Entities move in pixel space; walls live on the cell grid. Movement is
resolved one axis at a time by sampling the two leading corners of the
entity's box. Samples sit just inside the full box, so a committed move
never leaves any part of the box in a wall cell; a box snapped flush to a
wall face still samples its own cell.
"""

import math

from utils.constants import PADDING, WALL
from utils.helpers import clamp, circles_collide


def collision_extent(size):
    """Half-size used for wall sampling, a hair under the real half-size"""
    return size / 2 - PADDING


def _check_direction(value, name):
    if value not in (-1, 0, 1):
        raise ValueError(f"{name} must be -1, 0 or 1, got {value!r}")


def _blocked_x(grid, next_x, y, dx, extent):
    """Wall under either leading corner when moving horizontally"""
    edge = next_x + extent if dx > 0 else next_x - extent
    return (grid.value_at_pixel(edge, y - extent) == WALL or
            grid.value_at_pixel(edge, y + extent) == WALL)


def _blocked_y(grid, x, next_y, dy, extent):
    """Wall under either leading corner when moving vertically"""
    edge = next_y + extent if dy > 0 else next_y - extent
    return (grid.value_at_pixel(x - extent, edge) == WALL or
            grid.value_at_pixel(x + extent, edge) == WALL)


def _snap(pos, direction, size, cell_size):
    """Position flush against the wall face of the current cell"""
    cell = math.floor(pos / cell_size)
    if direction > 0:
        return (cell + 1) * cell_size - size / 2
    return cell * cell_size + size / 2


def move_entity(entity, grid, dx, dy, speed, ghost=False, canvas=None):
    """
    Move an entity with axis-separated wall collision

    Args:
        entity: Anything with x, y, size attributes (pixels)
        grid: MazeGrid
        dx, dy: Direction per axis (-1, 0 or 1)
        speed: Pixels per tick
        ghost: Skip wall checks entirely
        canvas: (width, height) to clamp into, defaults to the grid's size

    Returns:
        (collided_x, collided_y)
    """
    _check_direction(dx, "dx")
    _check_direction(dy, "dy")
    if speed < 0:
        raise ValueError(f"speed must not be negative, got {speed}")

    extent = collision_extent(entity.size)
    collided_x = False
    collided_y = False

    if dx != 0:
        next_x = entity.x + dx * speed
        if not ghost and _blocked_x(grid, next_x, entity.y, dx, extent):
            collided_x = True
            entity.x = _snap(entity.x, dx, entity.size, grid.cell_size)
        else:
            entity.x = next_x

    if dy != 0:
        next_y = entity.y + dy * speed
        if not ghost and _blocked_y(grid, entity.x, next_y, dy, extent):
            collided_y = True
            entity.y = _snap(entity.y, dy, entity.size, grid.cell_size)
        else:
            entity.y = next_y

    # Keep inside the canvas even if outer walls are gone
    if canvas is None:
        canvas = (grid.pixel_width, grid.pixel_height)
    half = entity.size / 2
    entity.x = clamp(entity.x, half, canvas[0] - half)
    entity.y = clamp(entity.y, half, canvas[1] - half)

    return collided_x, collided_y


def box_overlaps_wall(grid, x, y, extent):
    """True if the square of half-size extent around (x, y) touches a wall cell"""
    gx0, gy0 = grid.cell_at_pixel(x - extent, y - extent)
    gx1, gy1 = grid.cell_at_pixel(x + extent, y + extent)
    for gy in range(gy0, gy1 + 1):
        for gx in range(gx0, gx1 + 1):
            if grid.get(gx, gy) == WALL:
                return True
    return False


def circles_overlap(a, b):
    """Round-body overlap test between two sized entities"""
    return circles_collide(a.x, a.y, a.size / 2, b.x, b.y, b.size / 2)


class CollisionHandler:
    """
    Handles entity-vs-entity checks for the player
    """
    def __init__(self):
        self.last_collision = None

    def check_player(self, player, gems, powerups, enemies):
        """
        Check the player's position against pickups and enemies

        Args:
            player: Player
            gems: Iterable of Gem
            powerups: Iterable of PowerUp
            enemies: Iterable of Enemy

        Returns:
            Dictionary with collision results:
            {
                'gems': [Gem, ...],
                'powerups': [PowerUp, ...],
                'enemy': Enemy or None
            }
        """
        result = {
            'gems': [g for g in gems if circles_overlap(player, g)],
            'powerups': [p for p in powerups if circles_overlap(player, p)],
            'enemy': None,
        }

        for enemy in enemies:
            if circles_overlap(player, enemy):
                result['enemy'] = enemy
                break

        self.last_collision = result
        return result

"""
Shrink engine - the outer ring of the maze turns to wall on a timer

Each fire marks the path cells of the current ring as shrinking walls and
contracts the active bounds. Marked cells stay walkable until their warning
timer runs out, then they solidify.
"""

import logging

from utils.constants import (
    SHRINK_INTERVAL_MS, SHRINK_WARNING_MS, MIN_SHRINK_SPAN, PATH
)
from game.events import EventType, GameEvent

logger = logging.getLogger(__name__)


class ShrinkingWall:
    """
    Path cell scheduled to become wall
    """
    __slots__ = ('x', 'y', 'timer', 'duration')

    def __init__(self, x, y, duration=SHRINK_WARNING_MS):
        self.x = x
        self.y = y
        self.timer = duration
        self.duration = duration

    @property
    def remaining_fraction(self):
        """0..1 share of the warning time still left"""
        if self.duration <= 0:
            return 0.0
        return max(0.0, min(1.0, self.timer / self.duration))

    @property
    def expired(self):
        return self.timer <= 0

    def __repr__(self):
        return f"ShrinkingWall(({self.x},{self.y}), timer={self.timer:.0f})"


class ShrinkResult:
    """Outcome of one fire attempt"""
    __slots__ = ('halted', 'markers')

    def __init__(self, halted, markers=None):
        self.halted = halted
        self.markers = markers or []

    def __repr__(self):
        return f"ShrinkResult(halted={self.halted}, markers={len(self.markers)})"


class ShrinkEngine:
    """
    Timer-driven ring shrinking for one maze instance
    """
    def __init__(self, grid, bounds, interval_ms=SHRINK_INTERVAL_MS,
                 warning_ms=SHRINK_WARNING_MS, min_span=MIN_SHRINK_SPAN, now_ms=0):
        self.grid = grid
        self.bounds = bounds
        self.interval_ms = interval_ms
        self.warning_ms = warning_ms
        self.min_span = min_span
        self.last_fire_ms = now_ms
        self.shrinking_walls = []
        self.cycles = 0

    def update_markers(self, dt_ms):
        """
        Count down every marker and solidify the expired ones

        Args:
            dt_ms: Elapsed time in milliseconds

        Returns:
            List of WALL_SOLIDIFIED events
        """
        events = []
        remaining = []

        for wall in self.shrinking_walls:
            wall.timer -= dt_ms
            if not wall.expired:
                remaining.append(wall)
                continue

            # Cell may already be a wall
            if self.grid.get(wall.x, wall.y) == PATH:
                self.grid.set_wall(wall.x, wall.y)
                cx, cy = self.grid.cell_center(wall.x, wall.y)
                events.append(GameEvent(EventType.WALL_SOLIDIFIED, cx, cy, cell=(wall.x, wall.y)))

        self.shrinking_walls = remaining
        return events

    def should_fire(self, now_ms):
        return now_ms - self.last_fire_ms > self.interval_ms

    def can_shrink(self):
        """False once either span has reached the minimum"""
        return self.bounds.span_x > self.min_span and self.bounds.span_y > self.min_span

    def fire(self, now_ms):
        """
        Start a shrink cycle on the current outer ring

        Returns:
            ShrinkResult; halted=True means the maze is at minimum size and
            nothing changed
        """
        self.last_fire_ms = now_ms

        if not self.can_shrink():
            return ShrinkResult(halted=True)

        markers = []
        for x, y in self.bounds.ring_cells():
            if self.grid.get(x, y) == PATH:
                markers.append(ShrinkingWall(x, y, self.warning_ms))

        self.shrinking_walls.extend(markers)
        self.bounds.contract()
        self.cycles += 1

        logger.debug("Shrink cycle %d: %d cells marked, bounds now %s",
                     self.cycles, len(markers), self.bounds)
        return ShrinkResult(halted=False, markers=markers)

    def is_marked(self, x, y):
        return any(w.x == x and w.y == y for w in self.shrinking_walls)

    def reset(self, grid, bounds, now_ms):
        """Point the engine at a freshly generated maze"""
        self.grid = grid
        self.bounds = bounds
        self.last_fire_ms = now_ms
        self.shrinking_walls = []
        self.cycles = 0

    def __repr__(self):
        return f"ShrinkEngine(bounds={self.bounds}, pending={len(self.shrinking_walls)})"

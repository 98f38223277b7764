"""
Core maze data - the path/wall grid and the shrinking active bounds
"""

import logging
import math
from collections import deque

from utils.constants import CELL_SIZE, PATH, WALL, DIRS

logger = logging.getLogger(__name__)


class MazeGrid:
    """
    Rectangular matrix of PATH / WALL cells

    Dimensions must be odd so that carving on the 2-step lattice leaves a
    wall border and alternating cell/wall columns.
    """
    def __init__(self, width, height, cell_size=CELL_SIZE):
        if width < 5 or height < 5:
            raise ValueError(f"maze must be at least 5x5, got {width}x{height}")
        if width % 2 == 0 or height % 2 == 0:
            raise ValueError(f"maze dimensions must be odd, got {width}x{height}")
        if cell_size <= 0:
            raise ValueError(f"cell size must be positive, got {cell_size}")

        self.width = width
        self.height = height
        self.cell_size = cell_size
        # All walls until carved
        self.cells = [[WALL] * width for _ in range(height)]

    @property
    def pixel_width(self):
        return self.width * self.cell_size

    @property
    def pixel_height(self):
        return self.height * self.cell_size

    def in_bounds(self, x, y):
        """Check if cell coordinates are within the grid"""
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x, y):
        """Cell value; anything outside the grid counts as wall"""
        if not self.in_bounds(x, y):
            return WALL
        return self.cells[y][x]

    def is_path(self, x, y):
        return self.get(x, y) == PATH

    def is_wall(self, x, y):
        return self.get(x, y) == WALL

    def set_path(self, x, y):
        self.cells[y][x] = PATH

    def set_wall(self, x, y):
        self.cells[y][x] = WALL

    def cell_at_pixel(self, px, py):
        """Convert a pixel position to cell coordinates"""
        return math.floor(px / self.cell_size), math.floor(py / self.cell_size)

    def value_at_pixel(self, px, py):
        """Sample the grid under a pixel (out of bounds is wall)"""
        gx, gy = self.cell_at_pixel(px, py)
        return self.get(gx, gy)

    def cell_center(self, x, y):
        """Pixel centre of a cell"""
        return (x * self.cell_size + self.cell_size / 2,
                y * self.cell_size + self.cell_size / 2)

    def path_neighbor_count(self, x, y):
        """Number of orthogonal neighbors that are path"""
        return sum(1 for dx, dy in DIRS if self.is_path(x + dx, y + dy))

    def neighbors_open(self, x, y):
        """Get list of orthogonal path neighbors"""
        return [(x + dx, y + dy) for dx, dy in DIRS if self.is_path(x + dx, y + dy)]

    def path_cells(self):
        """All path cells in row-major order"""
        return [(x, y)
                for y in range(self.height)
                for x in range(self.width)
                if self.cells[y][x] == PATH]

    def reachable_from(self, start):
        """BFS flood fill over path cells"""
        if not self.is_path(*start):
            return set()

        q = deque([start])
        seen = {start}

        while q:
            x, y = q.popleft()
            for n in self.neighbors_open(x, y):
                if n not in seen:
                    seen.add(n)
                    q.append(n)
        return seen

    def to_rows(self):
        """Copy of the matrix for read-only consumers"""
        return [row[:] for row in self.cells]

    def __repr__(self):
        return f"MazeGrid({self.width}x{self.height}, paths={len(self.path_cells())})"


class ActiveBounds:
    """
    The sub-rectangle whose outer ring is the next one to shrink

    Only ever contracts.
    """
    def __init__(self, min_x, max_x, min_y, max_y):
        self.min_x = min_x
        self.max_x = max_x
        self.min_y = min_y
        self.max_y = max_y

    @classmethod
    def full(cls, grid):
        """Bounds covering the whole grid"""
        return cls(0, grid.width - 1, 0, grid.height - 1)

    @property
    def span_x(self):
        return self.max_x - self.min_x

    @property
    def span_y(self):
        return self.max_y - self.min_y

    def contains(self, x, y):
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def center(self):
        return (self.min_x + self.max_x) // 2, (self.min_y + self.max_y) // 2

    def ring_cells(self):
        """
        Cells on the outer ring, corners counted once

        Left and right columns run the full height, top and bottom rows
        skip the corners.
        """
        cells = []
        for y in range(self.min_y, self.max_y + 1):
            cells.append((self.min_x, y))
            if self.min_x != self.max_x:
                cells.append((self.max_x, y))
        for x in range(self.min_x + 1, self.max_x):
            cells.append((x, self.min_y))
            if self.min_y != self.max_y:
                cells.append((x, self.max_y))
        return cells

    def contract(self):
        """Shrink by one cell on every side"""
        self.min_x += 1
        self.max_x -= 1
        self.min_y += 1
        self.max_y -= 1
        logger.debug("Active bounds contracted to %s", self)

    def inset(self, amount):
        """New bounds moved inward by amount on every side"""
        return ActiveBounds(self.min_x + amount, self.max_x - amount,
                            self.min_y + amount, self.max_y - amount)

    def as_dict(self):
        return {
            'min_x': self.min_x,
            'max_x': self.max_x,
            'min_y': self.min_y,
            'max_y': self.max_y,
        }

    def __eq__(self, other):
        if not isinstance(other, ActiveBounds):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        return f"ActiveBounds(x={self.min_x}..{self.max_x}, y={self.min_y}..{self.max_y})"

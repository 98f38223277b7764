import pytest

from maze.maze_core import MazeGrid


class StubRng:
    """
    Deterministic stand-in for random.Random

    shuffle keeps order, randrange returns its lower bound, choice takes the
    first item and random() returns a fixed value.
    """
    def __init__(self, value=0.0):
        self.value = value

    def shuffle(self, items):
        pass

    def randrange(self, start, stop=None):
        if stop is None:
            return 0
        return start

    def random(self):
        return self.value

    def choice(self, items):
        return items[0]

    def uniform(self, a, b):
        return a


@pytest.fixture
def stub_rng():
    return StubRng()


@pytest.fixture
def make_grid():
    """Build a MazeGrid from a list of strings ('#' wall, '.' path)"""
    def _make(rows, cell_size=32):
        grid = MazeGrid(len(rows[0]), len(rows), cell_size)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch == '.':
                    grid.set_path(x, y)
        return grid
    return _make


@pytest.fixture
def open_room(make_grid):
    """7x7 grid with an open 5x5 interior"""
    return make_grid([
        "#######",
        "#.....#",
        "#.....#",
        "#.....#",
        "#.....#",
        "#.....#",
        "#######",
    ])


@pytest.fixture
def single_cell(make_grid):
    """7x7 grid where only (1, 1) is open"""
    return make_grid([
        "#######",
        "#.#####",
        "#######",
        "#######",
        "#######",
        "#######",
        "#######",
    ])

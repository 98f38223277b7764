import pytest

from maze.maze_core import MazeGrid, ActiveBounds
from utils.constants import PATH, WALL


@pytest.mark.parametrize("width,height", [(3, 7), (7, 3), (8, 7), (7, 10)])
def test_rejects_small_or_even_dimensions(width, height):
    with pytest.raises(ValueError):
        MazeGrid(width, height)


def test_rejects_non_positive_cell_size():
    with pytest.raises(ValueError):
        MazeGrid(7, 7, 0)


def test_new_grid_is_all_wall():
    grid = MazeGrid(7, 5)
    assert grid.path_cells() == []
    assert all(v == WALL for row in grid.cells for v in row)


def test_out_of_bounds_reads_as_wall(open_room):
    assert open_room.get(-1, 3) == WALL
    assert open_room.get(3, 7) == WALL
    assert open_room.get(3, 3) == PATH


def test_pixel_conversion(open_room):
    assert open_room.cell_at_pixel(0, 0) == (0, 0)
    assert open_room.cell_at_pixel(31.9, 32) == (0, 1)
    assert open_room.cell_at_pixel(-0.5, 10) == (-1, 0)
    assert open_room.cell_center(1, 2) == (48, 80)
    assert open_room.value_at_pixel(48, 48) == PATH
    assert open_room.value_at_pixel(10, 48) == WALL
    assert open_room.pixel_width == 224


def test_neighbors(open_room):
    assert sorted(open_room.neighbors_open(1, 1)) == [(1, 2), (2, 1)]
    assert open_room.path_neighbor_count(3, 3) == 4
    assert open_room.path_neighbor_count(0, 0) == 0


def test_reachable_from_stops_at_walls(make_grid):
    grid = make_grid([
        "#######",
        "#..#..#",
        "#######",
        "#######",
        "#######",
    ])
    assert grid.reachable_from((1, 1)) == {(1, 1), (2, 1)}
    assert grid.reachable_from((0, 0)) == set()


def test_to_rows_is_a_copy(open_room):
    rows = open_room.to_rows()
    rows[1][1] = WALL
    assert open_room.is_path(1, 1)


def test_full_bounds(open_room):
    bounds = ActiveBounds.full(open_room)
    assert bounds.as_dict() == {'min_x': 0, 'max_x': 6, 'min_y': 0, 'max_y': 6}
    assert bounds.span_x == 6
    assert bounds.center() == (3, 3)


def test_ring_cells_counts_corners_once():
    bounds = ActiveBounds(0, 20, 0, 14)
    ring = bounds.ring_cells()
    assert len(ring) == len(set(ring)) == 21 * 2 + 13 * 2
    assert (0, 0) in ring and (20, 14) in ring
    assert (5, 5) not in ring


def test_ring_cells_degenerate_column():
    ring = ActiveBounds(3, 3, 1, 4).ring_cells()
    assert sorted(ring) == [(3, 1), (3, 2), (3, 3), (3, 4)]


def test_contract_and_inset():
    bounds = ActiveBounds(0, 20, 0, 14)
    inner = bounds.inset(2)
    assert inner == ActiveBounds(2, 18, 2, 12)
    assert bounds == ActiveBounds(0, 20, 0, 14)

    bounds.contract()
    assert bounds == ActiveBounds(1, 19, 1, 13)
    assert bounds.contains(1, 13)
    assert not bounds.contains(0, 5)

import pytest

from lardum.dungeon.tiles import Tile, TileGrid
from lardum.fov.fov import TransparencyMap, bresenham_line, compute_fov, is_visible_line


def test_bresenham_endpoints_inclusive():
    line = bresenham_line(0, 0, 4, 2)
    assert line[0] == (0, 0)
    assert line[-1] == (4, 2)
    assert len(line) == 5


def test_open_grid_uses_circular_radius():
    grid = TileGrid(9, 9, walled=False)
    visible = compute_fov(grid, (4, 4), 2)
    assert (4, 4) in visible
    assert (6, 4) in visible
    assert (5, 5) in visible
    # Corner of the bounding square lies outside the circle
    assert (6, 6) not in visible


def test_wall_blocks_sight_and_is_lit():
    grid = TileGrid(7, 5, walled=False)
    for y in range(5):
        grid.set(3, y, Tile.wall())
    visible = compute_fov(grid, (1, 2), 10)
    assert (3, 2) in visible
    assert (5, 2) not in visible


def test_walls_hidden_without_light_walls():
    grid = TileGrid(7, 5, walled=False)
    grid.set(3, 2, Tile.wall())
    assert not is_visible_line(grid, 1, 2, 3, 2, light_walls=False)
    visible = compute_fov(grid, (1, 2), 10, light_walls=False)
    assert (3, 2) not in visible
    assert (2, 2) in visible


def test_zero_radius_sees_only_origin():
    grid = TileGrid(5, 5, walled=False)
    assert compute_fov(grid, (2, 2), 0) == {(2, 2)}


def test_invalid_arguments():
    grid = TileGrid(5, 5, walled=False)
    with pytest.raises(ValueError):
        compute_fov(grid, (9, 9), 3)
    with pytest.raises(ValueError):
        compute_fov(grid, (1, 1), -1)


def test_transparency_map_is_a_snapshot():
    grid = TileGrid(7, 5, walled=False)
    snapshot = TransparencyMap.from_grid(grid)
    grid.set(3, 2, Tile.wall())
    assert (5, 2) in compute_fov(snapshot, (1, 2), 10)
    assert (5, 2) not in compute_fov(TransparencyMap.from_grid(grid), (1, 2), 10)


def test_vertical_and_reverse_lines():
    assert bresenham_line(2, 3, 2, 0) == [(2, 3), (2, 2), (2, 1), (2, 0)]
    assert bresenham_line(1, 1, 1, 1) == [(1, 1)]

import os
import sys

import numpy as np

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from blocks import DEFAULT_PALETTE as P
from detail import (EAST, NORTH, ORIENTATIONS, SOUTH, WEST, door_component_positions, place_detailed_door,
                    place_detailed_window, place_pitched_roof, window_cells)
from grid import SectorGrid
from placer import place_x_wall, place_z_wall


def _solid_cells(grid):
    cells = set()
    for (sx, _, sz), blocks in grid.sectors.items():
        for ix, iy, iz in np.argwhere(blocks != 0).tolist():
            cells.add((sx + ix, iy + grid.min_y, sz + iz))
    return cells


def test_door_opening_and_frame_are_disjoint():
    for orientation in ORIENTATIONS:
        opening = door_component_positions((5, 0, 7), orientation)
        assert len(opening.fill) == 2
        assert len(opening.frame) == 7
        assert not set(opening.fill) & set(opening.frame)


def test_door_frame_surrounds_three_sides():
    for orientation, (ax, az) in ((NORTH, (1, 0)), (SOUTH, (1, 0)), (EAST, (0, 1)), (WEST, (0, 1))):
        opening = door_component_positions((5, 0, 7), orientation)
        frame = set(opening.frame)
        for x, y, z in opening.fill:
            assert (x - ax, y, z - az) in frame
            assert (x + ax, y, z + az) in frame
        top = max(opening.fill, key=lambda c: c[1])
        assert (top[0], top[1] + 1, top[2]) in frame
        # nothing below the threshold
        assert min(c[1] for c in frame) == 1


def test_door_opening_above_anchor():
    opening = door_component_positions((5.5, 0, 7.2), NORTH)
    assert opening.fill == [(5, 1, 7), (5, 2, 7)]


def test_door_cut_into_wall():
    grid = SectorGrid()
    place_x_wall(grid, (0, 1, 0), 7, 4, P.brick)
    assert place_detailed_door(grid, (3, 0, 0), NORTH, P.log)
    assert grid.get_block((3, 1, 0)) == P.air
    assert grid.get_block((3, 2, 0)) == P.air
    for pos in ((2, 1, 0), (4, 2, 0), (3, 3, 0), (2, 3, 0)):
        assert grid.get_block(pos) == P.log
    assert grid.get_block((3, 4, 0)) == P.brick
    assert grid.get_block((1, 1, 0)) == P.brick


def test_door_unknown_orientation(capsys):
    grid = SectorGrid()
    assert door_component_positions((0, 0, 0), 'up') is None
    assert place_detailed_door(grid, (0, 0, 0), 'up', P.log) is False
    assert grid.write_count == 0
    assert "orientation" in capsys.readouterr().out


def test_window_frame_is_one_larger():
    cells = window_cells((0, 1, 0), 2, 2, 'x')
    assert len(cells.fill) == 4
    assert len(cells.frame) == 12
    assert set(cells.fill) == {(0, 1, 0), (1, 1, 0), (0, 2, 0), (1, 2, 0)}
    assert (-1, 0, 0) in cells.frame
    assert (2, 3, 0) in cells.frame
    assert all(z == 0 for _, _, z in cells.frame)


def test_window_along_z():
    grid = SectorGrid()
    place_z_wall(grid, (4, 0, 0), 8, 6, P.stone_brick)
    assert place_detailed_window(grid, (4, 2, 3), 1, 2, 'z', P.log, P.glass)
    assert grid.get_block((4, 2, 3)) == P.glass
    assert grid.get_block((4, 3, 3)) == P.glass
    assert grid.get_block((4, 2, 2)) == P.log
    assert grid.get_block((4, 2, 4)) == P.log
    assert grid.get_block((4, 4, 3)) == P.log
    assert grid.get_block((4, 1, 3)) == P.log
    assert grid.get_block((4, 2, 5)) == P.stone_brick
    assert grid.count(P.glass) == 2
    assert grid.count(P.log) == 10


def test_invalid_window(capsys):
    grid = SectorGrid()
    assert window_cells((0, 0, 0), 2, 2, 'y') is None
    assert place_detailed_window(grid, (0, 0, 0), 0, 2, 'x', P.log) is False
    assert grid.write_count == 0
    assert "invalid window" in capsys.readouterr().out


def test_odd_roof_is_symmetric_with_single_ridge():
    grid = SectorGrid()
    assert place_pitched_roof(grid, (0, 5, 0), 5, 3, P.planks, P.stone_brick, P.brick)
    cells = _solid_cells(grid)
    # overhang 1: slopes span x -1..5, mirrored about x = 2
    for x, y, z in cells:
        assert (4 - x, y, z) in cells
    assert max(y for _, y, _ in cells) == 8
    ridge = set(x for x, y, _ in cells if y == 8)
    assert ridge == {2}
    assert grid.get_block((-1, 5, 1)) == P.stone_brick
    assert grid.get_block((0, 6, 1)) == P.planks
    assert grid.get_block((2, 8, 1)) == P.planks
    assert grid.get_block((2, 8, -1)) == P.stone_brick
    assert grid.get_block((2, 8, 3)) == P.stone_brick


def test_roof_gables_close_the_ends():
    grid = SectorGrid()
    place_pitched_roof(grid, (0, 5, 0), 5, 3, P.planks, P.stone_brick, P.brick)
    for x in range(0, 5):
        if x not in (0, 4):
            assert grid.get_block((x, 5, 0)) == P.brick
            assert grid.get_block((x, 5, 2)) == P.brick
    assert grid.get_block((2, 7, 0)) == P.brick
    # the middle of the roof stays hollow
    assert grid.get_block((2, 5, 1)) == P.air


def test_even_roof_has_two_wide_ridge():
    grid = SectorGrid()
    assert place_pitched_roof(grid, (0, 5, 0), 6, 4, P.planks, P.stone_brick, P.brick)
    cells = _solid_cells(grid)
    for x, y, z in cells:
        assert (5 - x, y, z) in cells
    top = max(y for _, y, _ in cells)
    assert top == 8
    assert set(x for x, y, _ in cells if y == top) == {2, 3}


def test_roof_without_overhang():
    grid = SectorGrid()
    place_pitched_roof(grid, (0, 0, 0), 3, 2, P.planks, P.stone_brick, P.brick, overhang=0)
    cells = _solid_cells(grid)
    assert min(x for x, _, _ in cells) == 0
    assert max(x for x, _, _ in cells) == 2
    assert min(z for _, _, z in cells) == 0


def test_invalid_roof(capsys):
    grid = SectorGrid()
    assert place_pitched_roof(grid, (0, 0, 0), 0, 4, P.planks, P.stone_brick, P.brick) is False
    assert place_pitched_roof(grid, (0, 0, 0), 4, 4, P.planks, P.stone_brick, P.brick, overhang=-1) is False
    assert grid.write_count == 0
    assert "invalid roof" in capsys.readouterr().out

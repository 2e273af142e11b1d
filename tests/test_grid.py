import os
import sys

import numpy as np
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from blocks import BLOCK_ID, BlockPalette, DEFAULT_PALETTE
from config import SECTOR_SIZE
from grid import GridAccess, GridUnavailable, SectorGrid, as_access
from util import disc_offsets, round_half_up, sectorize


def _flat_grid(x0=-16, z0=-16, size=32, base=0):
    grid = SectorGrid()
    for sx in range(x0, x0 + size, SECTOR_SIZE):
        for sz in range(z0, z0 + size, SECTOR_SIZE):
            blocks = np.zeros((SECTOR_SIZE, grid.height, SECTOR_SIZE), dtype='u2')
            blocks[:, :base - grid.min_y, :] = BLOCK_ID['Dirt']
            blocks[:, base - grid.min_y, :] = BLOCK_ID['Grass']
            grid.load_sector((sx, 0, sz), blocks)
    return grid


def test_sectorize_negative_positions():
    assert sectorize((-1, 5, -1)) == (-SECTOR_SIZE, 0, -SECTOR_SIZE)
    assert sectorize((0.5, 0, SECTOR_SIZE)) == (0, 0, SECTOR_SIZE)


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(-0.5) == 0
    assert round_half_up(1.49) == 1
    assert round_half_up(-1.5) == -1


def test_disc_offsets_within_radius():
    D = disc_offsets(3)
    assert np.all(D[:, 0] ** 2 + D[:, 1] ** 2 == D[:, 2])
    assert D[:, 2].max() <= 9
    assert len(D) == 29
    assert len(disc_offsets(0)) == 1


def test_unloaded_reads_raise():
    grid = SectorGrid()
    with pytest.raises(GridUnavailable):
        grid.get_block((0, 0, 0))


def test_writes_autoload_sectors():
    grid = SectorGrid()
    grid.set_block((-1, 3, -1), BLOCK_ID['Stone'])
    assert grid.is_loaded((-1, 0, -1))
    assert grid.get_block((-1, 3, -1)) == BLOCK_ID['Stone']
    assert grid.get_block((-2, 3, -1)) == 0
    assert grid.write_count == 1


def test_no_autoload_and_height_limits():
    grid = SectorGrid(autoload=False)
    with pytest.raises(GridUnavailable):
        grid.set_block((0, 0, 0), BLOCK_ID['Stone'])
    grid.load_sector((0, 0, 0))
    with pytest.raises(GridUnavailable):
        grid.set_block((0, grid.max_y + 1, 0), BLOCK_ID['Stone'])
    with pytest.raises(GridUnavailable):
        grid.get_block((0, grid.min_y - 1, 0))


def test_access_degrades_failures(capsys):
    grid = SectorGrid(autoload=False)
    world = GridAccess(grid)
    assert world.block_at((3, 0, 3)) is None
    assert world.failed_reads == 1
    assert world.set_block((3, 0, 3), BLOCK_ID['Stone']) is False
    assert world.failed_writes == 1
    out = capsys.readouterr().out
    assert "WARN" in out
    assert as_access(world) is world


def test_column_height_and_height_map():
    grid = _flat_grid()
    grid.set_block((2, 4, 2), BLOCK_ID['Stone'])
    grid.set_block((3, 6, 3), BLOCK_ID['Water'])
    assert grid.column_height(0, 0) == 0
    assert grid.column_height(2, 2) == 4
    # water is not solid
    assert grid.column_height(3, 3) == 0
    h_map = grid.height_map(14, 14, 4, 4)
    assert h_map.shape == (4, 4)
    assert h_map[0, 0] == 0
    # columns past the loaded sectors
    assert h_map[3, 3] == -1
    assert grid.column_height(100, 100) is None


def test_palette_roles():
    palette = BlockPalette(stone_brick=BLOCK_ID['Stone'])
    assert palette.stone_brick == BLOCK_ID['Stone']
    assert palette.brick == BLOCK_ID['Brick']
    with pytest.raises(TypeError):
        BlockPalette(marble=1)


def test_palette_solidity():
    p = DEFAULT_PALETTE
    assert p.is_solid(p.dirt)
    assert p.is_solid(p.glass)
    assert not p.is_solid(p.air)
    assert not p.is_solid(p.water)
    assert not p.is_solid(None)
    assert p.is_liquid(p.water)
    assert p.name_of(p.stone_brick) == 'Stone Bricks'

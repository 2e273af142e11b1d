import os
import sys

import numpy as np

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from areas import Area
from blocks import BLOCK_ID, DEFAULT_PALETTE as P
from config import SECTOR_SIZE
from grid import SectorGrid
from structures.buildings import build_bench, build_small_shop, build_tall_building, build_village_house
from structures.dungeon import build_dungeon_entrance, generate_simple_dungeon
from structures.player_house import build_fence, build_player_house, fence_bounds, player_house_door_position
from structures.village import build_fountain, build_village, build_village_buildings


def _flat_grid(x0=-32, z0=-32, size=64, base=0):
    grid = SectorGrid()
    for sx in range(x0, x0 + size, SECTOR_SIZE):
        for sz in range(z0, z0 + size, SECTOR_SIZE):
            blocks = np.zeros((SECTOR_SIZE, grid.height, SECTOR_SIZE), dtype='u2')
            blocks[:, :base - grid.min_y, :] = BLOCK_ID['Dirt']
            blocks[:, base - grid.min_y, :] = BLOCK_ID['Grass']
            grid.load_sector((sx, 0, sz), blocks)
    return grid


def test_small_shop():
    grid = _flat_grid()
    assert build_small_shop(grid, (0, 0, 0))
    # footprint x -4..3, z -5..4, door in the middle of the south wall
    assert grid.get_block((0, 1, -5)) == P.air
    assert grid.get_block((0, 2, -5)) == P.air
    assert grid.get_block((-1, 1, -5)) == P.log
    assert grid.get_block((-3, 1, -5)) == P.glass
    assert grid.get_block((2, 2, -5)) == P.glass
    assert grid.get_block((-4, 2, 0)) == P.clay
    assert grid.get_block((0, 0, 0)) == P.planks
    assert grid.get_block((0, 1, 0)) == P.air
    # two wide ridge over an eight wide shop
    assert grid.column_height(-1, 0) == 8
    assert grid.column_height(0, 0) == 8


def test_village_house():
    grid = _flat_grid()
    assert build_village_house(grid, (0, 0, 0))
    # footprint x -4..4, z -3..3, door on the +z wall
    assert grid.get_block((0, 1, 3)) == P.air
    assert grid.get_block((0, 2, 3)) == P.air
    assert grid.get_block((0, 3, 3)) == P.log
    assert grid.get_block((-4, 1, 0)) == P.glass
    assert grid.get_block((4, 2, -1)) == P.glass
    assert grid.get_block((2, 1, -3)) == P.brick
    assert grid.get_block((0, 2, 0)) == P.air


def test_tall_building():
    grid = _flat_grid()
    assert build_tall_building(grid, (0, 0, 0))
    # footprint x -3..3, z -3..3
    assert grid.get_block((0, 1, -3)) == P.air
    assert grid.get_block((0, 4, 0)) == P.planks
    assert grid.get_block((0, 8, 0)) == P.planks
    assert grid.get_block((0, 2, 0)) == P.air
    assert grid.get_block((0, 1, 3)) == P.glass
    assert grid.get_block((-1, 5, -3)) == P.glass
    # flat roof and parapet
    assert grid.get_block((-4, 12, -4)) == P.stone_brick
    assert grid.get_block((-4, 13, -4)) == P.stone_brick
    assert grid.get_block((3, 13, 4)) == P.stone_brick
    assert grid.get_block((0, 13, 0)) == P.air
    assert grid.column_height(0, 0) == 12


def test_bench():
    grid = _flat_grid()
    assert build_bench(grid, (0, 0, 0))
    assert [grid.get_block((x, 1, 0)) for x in range(3)] == [P.planks] * 3
    assert grid.get_block((0, 0, 0)) == P.log
    assert grid.get_block((1, 0, 0)) == P.grass
    assert grid.get_block((2, 0, 0)) == P.log


def test_fountain():
    grid = _flat_grid()
    assert build_fountain(grid, (0, 1, 0))
    assert grid.get_block((0, 4, 0)) == P.stone_brick
    assert grid.get_block((0, 5, 0)) == P.air
    assert grid.get_block((2, 1, 0)) == P.water
    assert grid.get_block((5, 1, 0)) == P.stone_brick
    assert grid.get_block((1, 3, 0)) == P.water


def test_dungeon_room():
    grid = _flat_grid()
    rng = np.random.default_rng(3)
    assert generate_simple_dungeon(grid, (0, 0, 0), 7, 5, rng=rng, density=0.5)
    assert grid.get_block((3, 0, 2)) == P.stone_brick
    for y in (1, 2, 3):
        assert grid.get_block((6, y, 2)) == P.stone_brick
        assert grid.get_block((3, y, 0)) == P.stone_brick
    # doorway in the west wall
    assert grid.get_block((0, 1, 2)) == P.air
    assert grid.get_block((0, 2, 2)) == P.air
    assert grid.get_block((0, 3, 2)) == P.stone_brick
    scrap = grid.count(P.scrap)
    assert 1 <= scrap <= 7
    for x in range(0, 7):
        for z in range(0, 5):
            if grid.get_block((x, 1, z)) == P.scrap:
                assert 0 < x < 6 and 0 < z < 4


def test_dungeon_rejects_bad_size(capsys):
    grid = _flat_grid()
    before = grid.write_count
    assert generate_simple_dungeon(grid, (0, 0, 0), 0, 5) is False
    assert grid.write_count == before
    assert "invalid dungeon size" in capsys.readouterr().out


def test_dungeon_entrance_at_area_centre():
    grid = _flat_grid()
    area = Area('DUNGEON_ENTRANCE', 'Dungeon Entrance', -20, -20, 40, 40)
    assert build_dungeon_entrance(grid, area, rng=np.random.default_rng(0))
    # 15 x 11 room centred on (0, 0)
    assert grid.get_block((-7, 0, -5)) == P.stone_brick
    assert grid.get_block((7, 2, 5)) == P.stone_brick
    assert grid.get_block((-7, 1, 0)) == P.air
    assert grid.get_block((0, 0, 0)) == P.stone_brick


def test_player_house():
    grid = _flat_grid(x0=-16, z0=-16, size=80)
    area = Area('PLAYER_HOUSE', 'Player House', 0, 0, 50, 50)
    assert build_player_house(grid, area, palette=P)
    door_x, door_y, door_z = player_house_door_position(grid, area)
    assert (door_x, door_z) == (25, 30)
    assert grid.get_block((door_x, door_y + 1, door_z)) == P.air
    assert grid.get_block((door_x, door_y + 2, door_z)) == P.air
    assert grid.get_block((door_x, door_y + 3, door_z)) == P.log
    # house shell and raised roof
    assert grid.get_block((18, 3, 19)) == P.brick
    assert grid.column_height(24, 25) >= 7
    # front path out to the gate
    assert grid.get_block((25, 0, 40)) == P.stone_brick
    # garden trees
    assert grid.get_block((15, 1, 15)) == P.log
    assert grid.get_block((13, 1, 30)) == P.log


def test_fence_and_gate():
    grid = _flat_grid(x0=-16, z0=-16, size=80)
    area = Area('PLAYER_HOUSE', 'Player House', 0, 0, 50, 50)
    assert build_fence(grid, area)
    fx, fz, fw, fd = fence_bounds(area)
    assert (fx, fz, fw, fd) == (-5, -5, 60, 60)
    # corner posts are two high
    assert grid.get_block((fx, 1, fz)) == P.log
    assert grid.get_block((fx, 2, fz)) == P.log
    assert grid.get_block((fx, 3, fz)) == P.air
    for x, z in ((fx, fz), (fx + fw - 1, fz), (fx, fz + fd - 1), (fx + fw - 1, fz + fd - 1)):
        assert grid.get_block((x, 0, z)) == P.grass
        assert grid.get_block((x, 1, z)) == P.log
        assert grid.get_block((x, 2, z)) == P.log
        assert grid.get_block((x, 3, z)) == P.air, (x, z)
    # west and east sides: posts every fourth cell, rails between
    assert grid.get_block((fx, 1, fz + 4)) == P.log
    assert grid.get_block((fx, 2, fz + 4)) == P.log
    assert grid.get_block((fx + fw - 1, 1, fz + 1)) == P.planks
    assert grid.get_block((fx + fw - 1, 2, fz + 1)) == P.air
    # rails between posts
    assert grid.get_block((fx + 1, 1, fz)) == P.planks
    assert grid.get_block((fx + 1, 2, fz)) == P.air
    assert grid.get_block((fx + 4, 1, fz)) == P.log
    # gate on the south side
    gate_x, gate_z = fx + fw // 2, fz + fd - 1
    for x in (gate_x - 1, gate_x):
        assert grid.get_block((x, 1, gate_z)) == P.air
    for x in (gate_x - 2, gate_x + 1):
        for y in (1, 2, 3):
            assert grid.get_block((x, y, gate_z)) == P.log
    for x in range(gate_x - 2, gate_x + 2):
        assert grid.get_block((x, 4, gate_z)) == P.planks


def test_village_buildings_are_isolated(monkeypatch):
    import structures.village as village

    built = []

    def _shop(world, position, palette=None):
        built.append('shop')
        raise RuntimeError("no lumber")

    def _house(world, position, palette=None):
        built.append('house')
        return True

    monkeypatch.setattr(village, 'VILLAGE_BUILDINGS', (('shop', _shop), ('house', _house)))
    count = build_village_buildings(SectorGrid(), (0, 0), count=4, distance=10)
    assert built == ['shop', 'house', 'shop', 'house']
    assert count == 2


def test_village():
    grid = _flat_grid(x0=-64, z0=-64, size=128)
    area = Area('VILLAGE_CENTER', 'Village Center', -50, -50, 100, 100)
    assert build_village(grid, area, rng=np.random.default_rng(11), palette=P)
    # plaza, fountain on top of it
    assert grid.get_block((10, 0, 0)) == P.stone_brick
    assert grid.get_block((0, 1, 0)) == P.stone_brick
    assert grid.get_block((2, 1, 0)) == P.water
    assert grid.count(P.water) > 0
    # buildings on the ring
    assert grid.count(P.clay) > 0
    assert grid.count(P.brick) > 0
    assert grid.count(P.glass) > 0

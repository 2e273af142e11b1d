"""Village building templates.

Every template takes the centre column of its footprint and finds its own ground
from the footprint corner, so the walls start at ground level and the box floor
replaces the surface block.
"""
import math

from blocks import DEFAULT_PALETTE
from detail import NORTH, SOUTH, place_detailed_door, place_detailed_window, place_pitched_roof
from ground import find_ground_height
from placer import Dimensions, place_block, place_cuboid, place_floor, place_hollow_box, place_x_wall, place_z_wall

SHOP_SIZE = Dimensions(8, 4, 10)
HOUSE_SIZE = Dimensions(9, 5, 7)
TOWER_SIZE = Dimensions(7, 12, 7)
TOWER_FLOOR_SPACING = 4


def _footprint(world, position, size, palette):
    """Corner (x, ground y, z) of a footprint centred on `position`."""
    x = int(math.floor(position[0])) - size.width // 2
    z = int(math.floor(position[2])) - size.depth // 2
    return x, find_ground_height(world, x, z, palette=palette), z


def build_small_shop(world, position, palette=None):
    """Clay shop with a log-framed door on the south (-z) side, an awning and a counter."""
    p = palette or DEFAULT_PALETTE
    w, h, d = SHOP_SIZE
    x, y, z = _footprint(world, position, SHOP_SIZE, p)
    place_hollow_box(world, (x, y, z), SHOP_SIZE, p.clay)
    place_floor(world, (x + 1, y, z + 1), w - 2, d - 2, p.planks)
    # narrow windows either side of the door, sharing its frame posts
    place_detailed_window(world, (x + 1, y + 1, z), 1, 2, 'x', p.log, p.glass)
    place_detailed_window(world, (x + w - 2, y + 1, z), 1, 2, 'x', p.log, p.glass)
    place_detailed_door(world, (x + w // 2, y, z), SOUTH, p.log, palette=p)
    # awning over the entrance
    place_x_wall(world, (x + w // 2 - 2, y + 3, z - 1), 5, 1, p.planks)
    # counter across the back
    place_cuboid(world, (x + 2, y + 1, z + d - 3), Dimensions(w - 4, 1, 1), p.planks)
    place_pitched_roof(world, (x, y + h, z), w, d, p.planks, p.stone_brick, p.clay, overhang=1)
    return True


def build_village_house(world, position, palette=None):
    """Brick house, door on the north (+z) wall and a window in each side wall."""
    p = palette or DEFAULT_PALETTE
    w, h, d = HOUSE_SIZE
    x, y, z = _footprint(world, position, HOUSE_SIZE, p)
    place_hollow_box(world, (x, y, z), HOUSE_SIZE, p.brick)
    place_floor(world, (x + 1, y, z + 1), w - 2, d - 2, p.planks)
    place_detailed_door(world, (x + w // 2, y, z + d - 1), NORTH, p.log, palette=p)
    window_z = z + d // 2 - 1
    place_detailed_window(world, (x, y + 1, window_z), 2, 2, 'z', p.log, p.glass)
    place_detailed_window(world, (x + w - 1, y + 1, window_z), 2, 2, 'z', p.log, p.glass)
    place_pitched_roof(world, (x, y + h, z), w, d, p.planks, p.stone_brick, p.brick, overhang=1)
    return True


def build_tall_building(world, position, palette=None):
    """Stone brick tower: plank floors every few levels, windows on each side, flat roof with a parapet."""
    p = palette or DEFAULT_PALETTE
    w, h, d = TOWER_SIZE
    x, y, z = _footprint(world, position, TOWER_SIZE, p)
    place_hollow_box(world, (x, y, z), TOWER_SIZE, p.stone_brick)
    for level in range(TOWER_FLOOR_SPACING, h, TOWER_FLOOR_SPACING):
        place_floor(world, (x + 1, y + level, z + 1), w - 2, d - 2, p.planks)
    side_z = z + d // 2 - 1
    front_x = x + w // 2 - 1
    for level in range(1, h, TOWER_FLOOR_SPACING):
        wy = y + level
        place_detailed_window(world, (x, wy, side_z), 2, 2, 'z', p.log, p.glass)
        place_detailed_window(world, (x + w - 1, wy, side_z), 2, 2, 'z', p.log, p.glass)
        place_detailed_window(world, (front_x, wy, z + d - 1), 2, 2, 'x', p.log, p.glass)
        # the door takes the ground floor of the south wall
        if level > 1:
            place_detailed_window(world, (front_x, wy, z), 2, 2, 'x', p.log, p.glass)
    place_detailed_door(world, (x + w // 2, y, z), SOUTH, p.log, palette=p)
    # flat roof one wider than the walls, ringed by a one block parapet
    top = y + h
    place_floor(world, (x - 1, top, z - 1), w + 2, d + 2, p.stone_brick)
    place_x_wall(world, (x - 1, top + 1, z - 1), w + 2, 1, p.stone_brick)
    place_x_wall(world, (x - 1, top + 1, z + d), w + 2, 1, p.stone_brick)
    place_z_wall(world, (x - 1, top + 1, z), d, 1, p.stone_brick)
    place_z_wall(world, (x + w, top + 1, z), d, 1, p.stone_brick)
    return True


def build_bench(world, ground, palette=None, width=3):
    """Plank seat one above `ground`, log legs at both ends."""
    p = palette or DEFAULT_PALETTE
    x, y, z = ground
    place_cuboid(world, (x, y + 1, z), Dimensions(width, 1, 1), p.planks)
    place_block(world, (x, y, z), p.log)
    place_block(world, (x + width - 1, y, z), p.log)
    return True


# Village ring buildings, cycled by index.
VILLAGE_BUILDINGS = (
    ('shop', build_small_shop),
    ('house', build_village_house),
    ('tower', build_tall_building),
)

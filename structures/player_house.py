"""The player's home: a large brick house with its garden, fence and front path."""
import logutil
from blocks import DEFAULT_PALETTE
from detail import NORTH, place_detailed_door, place_detailed_window, place_pitched_roof
from grid import as_access
from ground import find_ground_height
from paths import create_path
from placer import Dimensions, place_block, place_cuboid, place_floor, place_hollow_box, place_tree, place_x_wall

HOUSE_SIZE = Dimensions(14, 7, 12)
FOUNDATION_MARGIN = 2
GARDEN_OFFSET = 10
FENCE_MARGIN = 5
FENCE_POST_SPACING = 4
FRONT_PATH_WIDTH = 3


def house_origin(world, area, palette=None):
    """Corner (x, ground y, z) of the house, centred on the area."""
    cx, cz = area.center
    x = cx - HOUSE_SIZE.width // 2
    z = cz - HOUSE_SIZE.depth // 2
    return x, find_ground_height(world, x, z, palette=palette), z


def player_house_door_position(world, area, palette=None):
    """Floor cell under the front door, in the +z wall.

    The height is read two blocks in front of the door, clear of the roof overhang,
    so it is the same before and after the house is built on flat ground.
    """
    door_x = area.center[0]
    door_z = area.center[1] - HOUSE_SIZE.depth // 2 + HOUSE_SIZE.depth - 1
    return (door_x, find_ground_height(world, door_x, door_z + 2, palette=palette), door_z)


def build_interior(world, origin, width, depth, palette=None):
    """Dividing wall with a doorway, a bed, a table and a chest, all standing on the floor."""
    p = palette or DEFAULT_PALETTE
    x, y, z = origin
    fy = y + 1
    wall_z = z + depth // 2
    place_x_wall(world, (x + 1, fy, wall_z), width - 2, 3, p.brick)
    place_block(world, (x + width // 2, fy, wall_z), p.air)
    place_block(world, (x + width // 2, fy + 1, wall_z), p.air)
    # bed
    place_cuboid(world, (x + 3, fy, z + 2), Dimensions(4, 1, 3), p.planks)
    # table
    place_cuboid(world, (x + width - 5, fy, z + 2), Dimensions(2, 1, 2), p.planks)
    # chest
    place_cuboid(world, (x + 2, fy, z + depth - 4), Dimensions(2, 1, 2), p.log)
    return True


def build_main_house(world, area, palette=None):
    p = palette or DEFAULT_PALETTE
    w, h, d = HOUSE_SIZE
    x, y, z = house_origin(world, area, p)
    m = FOUNDATION_MARGIN
    place_cuboid(world, (x - m, y - 1, z - m), Dimensions(w + 2 * m, 1, d + 2 * m), p.stone_brick)
    place_hollow_box(world, (x, y, z), HOUSE_SIZE, p.brick)
    place_floor(world, (x + 1, y, z + 1), w - 2, d - 2, p.planks)
    door_x = area.center[0]
    door_z = z + d - 1
    window_y = y + 1
    # front and back walls: a window either side of the door line
    for wz in (door_z, z):
        place_detailed_window(world, (door_x - 4, window_y, wz), 2, 2, 'x', p.log, p.glass)
        place_detailed_window(world, (door_x + 2, window_y, wz), 2, 2, 'x', p.log, p.glass)
    side_z = area.center[1] - 1
    place_detailed_window(world, (x, window_y, side_z), 2, 2, 'z', p.log, p.glass)
    place_detailed_window(world, (x + w - 1, window_y, side_z), 2, 2, 'z', p.log, p.glass)
    place_detailed_door(world, (door_x, y, door_z), NORTH, p.log, palette=p)
    place_pitched_roof(world, (x, y + h, z), w, d, p.planks, p.stone_brick, p.brick, overhang=1)
    build_interior(world, (x, y, z), w, d, palette=p)
    return True


def _plant_tree(world, x, z, trunk_height, palette):
    ground_y = find_ground_height(world, x, z, palette=palette)
    if world.block_at((x, ground_y, z)) not in (palette.grass, palette.dirt):
        return False
    if world.block_at((x, ground_y + 1, z)) != palette.air:
        return False
    return place_tree(world, (x, ground_y + 1, z), trunk_height, palette.log, palette.leaves)


def build_garden(world, area, palette=None):
    """Two trees west of the house and a small grass/stone checkerboard east of it."""
    p = palette or DEFAULT_PALETTE
    world = as_access(world)
    gx = area.start_x + GARDEN_OFFSET
    gz = area.start_z + GARDEN_OFFSET
    trees = int(bool(_plant_tree(world, gx + 5, gz + 5, 5, p)))
    trees += int(bool(_plant_tree(world, gx + 3, gz + 20, 4, p)))
    for dx in range(5):
        for dz in range(5):
            x, z = gx + 25 + dx, gz + 5 + dz
            block = p.grass if (dx + dz) % 2 == 0 else p.stone
            world.set_block((x, find_ground_height(world, x, z, palette=p), z), block)
    return trees


def fence_bounds(area):
    """(x, z, width, depth) of the fence line around the plot."""
    return (area.start_x - FENCE_MARGIN, area.start_z - FENCE_MARGIN,
            area.width + 2 * FENCE_MARGIN, area.depth + 2 * FENCE_MARGIN)


def _fence_sides(area):
    fx, fz, fw, fd = fence_bounds(area)
    yield 'north', [(fx + i, fz) for i in range(fw)]
    yield 'south', [(fx + i, fz + fd - 1) for i in range(fw)]
    yield 'west', [(fx, fz + i) for i in range(fd)]
    yield 'east', [(fx + fw - 1, fz + i) for i in range(fd)]


def build_fence(world, area, palette=None):
    """Post and rail fence around the plot with a gate in the middle of the south side.

    Posts are two high every few blocks and at the corners; rails sit one above
    the ground between them. The gate gap is two wide, between three high posts
    carrying a plank beam.
    """
    p = palette or DEFAULT_PALETTE
    world = as_access(world)
    fx, fz, fw, fd = fence_bounds(area)
    gate_x = fx + fw // 2
    gate_z = fz + fd - 1
    gap = range(gate_x - 2, gate_x + 2)
    done = set()
    for side, cells in _fence_sides(area):
        last = len(cells) - 1
        for i, (x, z) in enumerate(cells):
            # corners are shared by two sides
            if (x, z) in done or (side == 'south' and x in gap):
                continue
            done.add((x, z))
            ground_y = find_ground_height(world, x, z, palette=p)
            if i % FENCE_POST_SPACING == 0 or i == last:
                world.set_block((x, ground_y + 1, z), p.log)
                world.set_block((x, ground_y + 2, z), p.log)
            else:
                world.set_block((x, ground_y + 1, z), p.planks)
    tops = []
    for post_x in (gate_x - 2, gate_x + 1):
        ground_y = find_ground_height(world, post_x, gate_z, palette=p)
        for dy in (1, 2, 3):
            world.set_block((post_x, ground_y + dy, gate_z), p.log)
        tops.append(ground_y + 3)
    beam_y = max(tops) + 1
    for x in range(gate_x - 2, gate_x + 2):
        world.set_block((x, beam_y, gate_z), p.planks)
    return True


def build_front_path(world, area, palette=None):
    """Path from just outside the front door to the gate."""
    p = palette or DEFAULT_PALETTE
    door_x, _, door_z = player_house_door_position(world, area, p)
    _, fz, _, fd = fence_bounds(area)
    return create_path(world, (door_x, 0, door_z + 2), (door_x, 0, fz + fd - 1),
                       FRONT_PATH_WIDTH, p.stone_brick, palette=p)


def build_player_house(world, area, rng=None, palette=None):
    """House, garden, fence and front path. Each part is built on its own."""
    p = palette or DEFAULT_PALETTE
    logutil.log("AREA", f"building player house in {area.name}")
    ok = True
    for what, builder in (("house", build_main_house), ("garden", build_garden),
                          ("fence", build_fence), ("front path", build_front_path)):
        result = logutil.guarded("AREA", f"player house {what}", builder, world, area, palette=p)
        ok = ok and result is not False
    return ok

import numpy

import config
import logutil
from blocks import DEFAULT_PALETTE
from grid import as_access
from ground import find_ground_height
from placer import place_floor, place_x_wall, place_z_wall

WALL_HEIGHT = 3
DOOR_HEIGHT = 2


def generate_simple_dungeon(world, start, size_x, size_z, rng=None, palette=None, density=None):
    """Walled room: floor at `start` y, walls above it, a doorway in the west wall
    and scrap resources scattered over the inner floor.
    """
    p = palette or DEFAULT_PALETTE
    if size_x <= 0 or size_z <= 0:
        logutil.log("AREA", f"invalid dungeon size {size_x}x{size_z}", level="WARN")
        return False
    if rng is None:
        rng = numpy.random.default_rng()
    if density is None:
        density = getattr(config, 'DUNGEON_RESOURCE_DENSITY', 0.05)
    world = as_access(world)
    x, y, z = start
    place_floor(world, (x, y, z), size_x, size_z, p.stone_brick)
    wy = y + 1
    place_x_wall(world, (x, wy, z), size_x, WALL_HEIGHT, p.stone_brick)
    if size_z > 1:
        place_x_wall(world, (x, wy, z + size_z - 1), size_x, WALL_HEIGHT, p.stone_brick)
    if size_z > 2:
        place_z_wall(world, (x, wy, z + 1), size_z - 2, WALL_HEIGHT, p.stone_brick)
        if size_x > 1:
            place_z_wall(world, (x + size_x - 1, wy, z + 1), size_z - 2, WALL_HEIGHT, p.stone_brick)
        for dy in range(DOOR_HEIGHT):
            world.set_block((x, wy + dy, z + size_z // 2), p.air)
    else:
        logutil.log("AREA", f"dungeon at {start} too narrow for a doorway", level="WARN")
    inner = (size_x - 2) * (size_z - 2)
    resources = int(inner * density) if inner > 0 else 0
    for _ in range(resources):
        rx = int(rng.integers(size_x - 2)) + 1
        rz = int(rng.integers(size_z - 2)) + 1
        world.set_block((x + rx, wy, z + rz), p.scrap)
    logutil.log("AREA", f"dungeon room {size_x}x{size_z} at {start}, {resources} resources")
    return True


def build_dungeon_entrance(world, area, rng=None, palette=None):
    """Dungeon room centred on the area, its floor replacing the surface."""
    size_x, size_z = getattr(config, 'DUNGEON_ROOM_SIZE', (15, 11))
    cx, cz = area.center
    x, z = cx - size_x // 2, cz - size_z // 2
    y = find_ground_height(world, x, z, palette=palette)
    return generate_simple_dungeon(world, (x, y, z), size_x, size_z, rng=rng, palette=palette)

"""Block placement primitives.

Everything here writes through a GridAccess, so a single failed write is logged by the
grid boundary and the rest of the shape is still placed.
"""
from collections import namedtuple

import logutil
from blocks import DEFAULT_PALETTE
from grid import as_access
from util import floor_position

Dimensions = namedtuple('Dimensions', ['width', 'height', 'depth'])


def _valid(dims, what):
    if dims.width <= 0 or dims.height <= 0 or dims.depth <= 0:
        logutil.log("PLACER", f"invalid {what} dimensions {tuple(dims)}", level="WARN")
        return False
    return True


def place_block(world, position, block):
    return as_access(world).set_block(position, block)


def place_cuboid(world, start, dims, block):
    """Fill [start, start+dims) on every axis with `block`.

    Returns False (and writes nothing) when any dimension is not positive.
    """
    dims = Dimensions(*dims)
    if not _valid(dims, "cuboid"):
        return False
    world = as_access(world)
    x0, y0, z0 = floor_position(start)
    for x in range(x0, x0 + dims.width):
        for y in range(y0, y0 + dims.height):
            for z in range(z0, z0 + dims.depth):
                world.set_block((x, y, z), block)
    return True


def place_floor(world, start, width, depth, block):
    return place_cuboid(world, start, Dimensions(width, 1, depth), block)


def place_x_wall(world, start, length, height, block):
    """Wall running along x, one block thick in z."""
    return place_cuboid(world, start, Dimensions(length, height, 1), block)


def place_z_wall(world, start, length, height, block):
    """Wall running along z, one block thick in x."""
    return place_cuboid(world, start, Dimensions(1, height, length), block)


def place_hollow_box(world, start, dims, block):
    """Shell of a box: floor, ceiling and four walls, leaving the inside untouched.

    The x walls cover the corners, the z walls are inset by one so no corner is
    written twice.
    """
    dims = Dimensions(*dims)
    if not _valid(dims, "hollow box"):
        return False
    world = as_access(world)
    x, y, z = floor_position(start)
    w, h, d = dims
    place_floor(world, (x, y, z), w, d, block)
    if h > 1:
        place_floor(world, (x, y + h - 1, z), w, d, block)
    wall_h = h - 2
    if wall_h > 0:
        place_x_wall(world, (x, y + 1, z), w, wall_h, block)
        if d > 1:
            place_x_wall(world, (x, y + 1, z + d - 1), w, wall_h, block)
        if d > 2:
            place_z_wall(world, (x, y + 1, z + 1), d - 2, wall_h, block)
            if w > 1:
                place_z_wall(world, (x + w - 1, y + 1, z + 1), d - 2, wall_h, block)
    return True


# Leaf layers starting two blocks below the trunk top: (y offset, radius).
TREE_LEAF_LAYERS = ((0, 2), (1, 2), (2, 1), (3, 1))


def place_tree(world, base, trunk_height=4, trunk=None, leaves=None, palette=None):
    """Simple tree: a trunk column from `base` up and a rounded canopy around its top."""
    palette = palette or DEFAULT_PALETTE
    trunk = palette.log if trunk is None else trunk
    leaves = palette.leaves if leaves is None else leaves
    if trunk_height <= 0:
        logutil.log("PLACER", f"invalid trunk height {trunk_height}", level="WARN")
        return False
    world = as_access(world)
    x, y, z = floor_position(base)
    for dy in range(trunk_height):
        world.set_block((x, y + dy, z), trunk)
    leaf_y = y + trunk_height - 2
    for ly, r in TREE_LEAF_LAYERS:
        for dx in range(-r, r + 1):
            for dz in range(-r, r + 1):
                # rounded corners
                if dx * dx + dz * dz > r * r + 1:
                    continue
                # keep the trunk column
                if dx == 0 and dz == 0 and leaf_y + ly < y + trunk_height:
                    continue
                world.set_block((x + dx, leaf_y + ly, z + dz), leaves)
    return True

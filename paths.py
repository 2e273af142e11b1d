"""Straight, terrain-following paths between two columns."""
import math
import traceback
from collections import namedtuple

import logutil
from blocks import DEFAULT_PALETTE
from grid import as_access
from ground import find_ground_height
from util import round_half_up

PathSpec = namedtuple('PathSpec', ['start', 'end', 'width', 'block'])

PathVectors = namedtuple('PathVectors', ['dir_x', 'dir_z', 'perp_x', 'perp_z', 'length'])


def path_vectors(start, end):
    """Unit direction, its left perpendicular and the length; None for a zero-length path."""
    dx = end[0] - start[0]
    dz = end[2] - start[2]
    length = math.sqrt(dx * dx + dz * dz)
    if length == 0:
        return None
    dir_x = dx / length
    dir_z = dz / length
    return PathVectors(dir_x, dir_z, -dir_z, dir_x, length)


def _place_strip(world, cx, cz, vectors, width, block, palette, scan):
    half = width // 2
    placed = 0
    for w in range(-half, width - half):
        x = round_half_up(cx + vectors.perp_x * w)
        z = round_half_up(cz + vectors.perp_z * w)
        ground_y = find_ground_height(world, x, z, palette=palette, **scan)
        # never cover a cell that has something standing on it
        if world.block_at((x, ground_y + 1, z)) != palette.air:
            continue
        if world.set_block((x, ground_y, z), block):
            placed += 1
    return placed


def create_path(world, start, end, width=2, block=None, palette=None, scan_start=None, scan_min=None):
    """Lay a `width`-wide strip of `block` on the ground from `start` to `end`.

    Each cell of the strip sits on its own resolved ground height, so paths follow the
    terrain. A cell is only replaced when the block above it is air, which keeps paths
    from cutting into walls and floors they cross. Start and end y are ignored.
    """
    palette = palette or DEFAULT_PALETTE
    block = palette.stone if block is None else block
    path = PathSpec(tuple(start), tuple(end), width, block)
    if path.width <= 0:
        logutil.log("PATH", f"invalid path width {width}", level="WARN")
        return False
    vectors = path_vectors(path.start, path.end)
    if vectors is None:
        logutil.log("PATH", f"zero length path at {path.start}", level="WARN")
        return False
    scan = {'scan_start': scan_start, 'scan_min': scan_min}
    try:
        world = as_access(world)
        placed = 0
        for step in range(int(math.ceil(vectors.length)) + 1):
            cx = round_half_up(path.start[0] + vectors.dir_x * step)
            cz = round_half_up(path.start[2] + vectors.dir_z * step)
            placed += _place_strip(world, cx, cz, vectors, path.width, path.block, palette, scan)
    except Exception as ex:
        logutil.log("PATH", f"path {path.start} -> {path.end} failed: {ex}", level="WARN")
        traceback.print_exc()
        return False
    logutil.log("PATH", f"path {path.start} -> {path.end}: {placed} blocks", level="DEBUG")
    return True

"""Doors, windows and pitched roofs laid over plain walls."""
import math
from collections import namedtuple

import logutil
from blocks import DEFAULT_PALETTE
from grid import as_access
from util import floor_position

NORTH = 'north'
SOUTH = 'south'
EAST = 'east'
WEST = 'west'
ORIENTATIONS = (NORTH, SOUTH, EAST, WEST)

# Walls running east-west (constant z) take north/south doors.
EW_WALL = (NORTH, SOUTH)

AXES = ('x', 'z')

# Cells of a door or window: `frame` gets the frame block, `fill` the door/glass block.
Opening = namedtuple('Opening', ['frame', 'fill'])


def door_component_positions(position, orientation):
    """ Frame and opening cells of a door anchored on the floor cell `position`.

    The opening is the two cells directly above the anchor. The frame covers both
    flanks of the opening plus the three cells across its top, along the wall the
    door sits in.

    Returns
    -------
    Opening or None for an unknown orientation

    """
    if orientation not in ORIENTATIONS:
        return None
    x, y, z = floor_position(position)
    y0 = y + 1
    fill = [(x, y0, z), (x, y0 + 1, z)]
    ax, az = (1, 0) if orientation in EW_WALL else (0, 1)
    # (offset along the wall, height above the threshold)
    layout = ((-1, 0), (-1, 1), (1, 0), (1, 1), (-1, 2), (0, 2), (1, 2))
    frame = [(x + o * ax, y0 + dy, z + o * az) for o, dy in layout]
    return Opening(frame, fill)


def place_detailed_door(world, position, orientation, frame_block, door_block=None, palette=None):
    palette = palette or DEFAULT_PALETTE
    door_block = palette.air if door_block is None else door_block
    opening = door_component_positions(position, orientation)
    if opening is None:
        logutil.log("DETAIL", f"unknown door orientation {orientation!r} at {position}", level="WARN")
        return False
    world = as_access(world)
    for pos in opening.frame:
        world.set_block(pos, frame_block)
    for pos in opening.fill:
        world.set_block(pos, door_block)
    return True


def window_cells(start, width, height, axis):
    """ Frame and glass cells for a `width` x `height` opening whose lower-left cell is `start`.

    The frame is the border of a rectangle one cell larger than the opening on every
    side. Axis 'x' runs the window along x at a fixed z, axis 'z' along z at a fixed x.

    """
    if axis not in AXES or width <= 0 or height <= 0:
        return None
    sx, sy, sz = floor_position(start)
    along = sx if axis == 'x' else sz
    frame = []
    fill = []
    for a in range(along - 1, along + width + 1):
        for y in range(sy - 1, sy + height + 1):
            pos = (a, y, sz) if axis == 'x' else (sx, y, a)
            if a in (along - 1, along + width) or y in (sy - 1, sy + height):
                frame.append(pos)
            else:
                fill.append(pos)
    return Opening(frame, fill)


def place_detailed_window(world, start, width, height, axis, frame_block, glass_block=None, palette=None):
    palette = palette or DEFAULT_PALETTE
    glass_block = palette.glass if glass_block is None else glass_block
    cells = window_cells(start, width, height, axis)
    if cells is None:
        logutil.log("DETAIL", f"invalid window {width}x{height} axis={axis!r} at {start}", level="WARN")
        return False
    world = as_access(world)
    for pos in cells.frame:
        world.set_block(pos, frame_block)
    for pos in cells.fill:
        world.set_block(pos, glass_block)
    return True


class _RoofFrame(object):

    def __init__(self, start, width, depth, overhang):
        self.wall_x, self.base_y, self.wall_z = floor_position(start)
        self.wall_width = width
        self.wall_depth = depth
        self.start_x = self.wall_x - overhang
        self.start_z = self.wall_z - overhang
        self.width = width + 2 * overhang
        self.depth = depth + 2 * overhang
        self.layers = int(math.ceil(self.width / 2.0))

    def inside_walls(self, x):
        return self.wall_x <= x < self.wall_x + self.wall_width

    def material(self, x, z, layer, roof_block, eave_block):
        eave_z = z == self.start_z or z == self.start_z + self.depth - 1
        eave_x = layer == 0 and not self.inside_walls(x)
        return eave_block if (eave_z or eave_x) else roof_block


def _place_roof_slopes(world, frame, roof_block, eave_block):
    for layer in range(frame.layers):
        y = frame.base_y + layer
        x_min = frame.start_x + layer
        x_max = frame.start_x + frame.width - 1 - layer
        if x_min > x_max:
            continue
        for z in range(frame.start_z, frame.start_z + frame.depth):
            world.set_block((x_min, y, z), frame.material(x_min, z, layer, roof_block, eave_block))
            if x_max != x_min:
                world.set_block((x_max, y, z), frame.material(x_max, z, layer, roof_block, eave_block))


def _fill_gable_ends(world, frame, gable_block):
    for layer in range(frame.layers):
        y = frame.base_y + layer
        for x in range(frame.start_x + layer + 1, frame.start_x + frame.width - 1 - layer):
            if not frame.inside_walls(x):
                continue
            world.set_block((x, y, frame.wall_z), gable_block)
            if frame.wall_depth > 1:
                world.set_block((x, y, frame.wall_z + frame.wall_depth - 1), gable_block)


def place_pitched_roof(world, start, width, depth, roof_block, eave_block, gable_block, overhang=1):
    """Gable roof over a `width` x `depth` wall footprint whose corner is `start`.

    Slopes rise one block per layer from `start` y, starting `overhang` blocks outside
    the walls and meeting at the ridge. Eaves run along both z borders and along the
    lowest layer outside the walls. The triangular ends over the front and back walls
    are filled with `gable_block`. Roofs too narrow for their overhang come out empty.
    """
    if width <= 0 or depth <= 0 or overhang < 0:
        logutil.log("DETAIL", f"invalid roof {width}x{depth} overhang={overhang} at {start}", level="WARN")
        return False
    world = as_access(world)
    frame = _RoofFrame(start, width, depth, overhang)
    _place_roof_slopes(world, frame, roof_block, eave_block)
    _fill_gable_ends(world, frame, gable_block)
    return True

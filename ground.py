import math

import config
import logutil
from blocks import DEFAULT_PALETTE
from grid import as_access


def default_scan_range():
    base = getattr(config, 'WORLD_BASE_Y', 0)
    scan_start = base + getattr(config, 'GROUND_SCAN_HEIGHT', 15)
    scan_min = getattr(config, 'WORLD_MIN_Y', -10)
    return scan_start, scan_min


def is_solid(block, palette=None):
    return (palette or DEFAULT_PALETTE).is_solid(block)


def find_ground_height(world, x, z, scan_start=None, scan_min=None, palette=None, fallback=None):
    """ Return the y of the topmost solid (not air, not liquid) block in column (x, z).

    The column is scanned from `scan_start` down to `scan_min` inclusive. Cells that
    cannot be read count as not solid. When nothing solid is found the fallback
    height (the world base height by default) is returned and a warning is logged.

    Parameters
    ----------
    world : grid or GridAccess
    x, z : column, floored
    scan_start, scan_min : int, optional

    Returns
    -------
    y : int

    """
    palette = palette or DEFAULT_PALETTE
    world = as_access(world)
    default_start, default_min = default_scan_range()
    scan_start = default_start if scan_start is None else int(scan_start)
    scan_min = default_min if scan_min is None else int(scan_min)
    if fallback is None:
        fallback = getattr(config, 'WORLD_BASE_Y', 0)
    x, z = int(math.floor(x)), int(math.floor(z))
    for y in range(scan_start, scan_min - 1, -1):
        if is_solid(world.block_at((x, y, z)), palette):
            return y
    logutil.log("GROUND", f"no ground found at ({x}, {z}) in [{scan_min}, {scan_start}], using {fallback}", level="WARN")
    return fallback

import math

import numpy

import config
import logutil
from blocks import BLOCK_SOLID
from util import floor_position, sectorize

SECTOR_SIZE = config.SECTOR_SIZE


class GridUnavailable(Exception):
    """Raised when a block is read from (or written to) a region that is not resident."""


class SectorGrid(object):
    """In-memory voxel grid made of SECTOR_SIZE x height x SECTOR_SIZE numpy sectors.

    Sectors are keyed by their (x, 0, z) origin. y is stored relative to `min_y`.
    Reading from a sector that was never loaded raises GridUnavailable, like a real
    world whose chunks are still streaming in. Writes load sectors on demand unless
    `autoload` is False.
    """

    def __init__(self, min_y=None, max_y=None, autoload=True):
        self.min_y = config.WORLD_MIN_Y if min_y is None else min_y
        self.max_y = config.WORLD_MAX_Y if max_y is None else max_y
        self.height = self.max_y - self.min_y + 1
        self.autoload = autoload
        self.sectors = {}
        self.write_count = 0

    def _new_sector(self):
        return numpy.zeros((SECTOR_SIZE, self.height, SECTOR_SIZE), dtype='u2')

    def load_sector(self, position, blocks=None):
        spos = sectorize(position)
        if blocks is None:
            blocks = self._new_sector()
        self.sectors[spos] = blocks
        return blocks

    def unload_sector(self, position):
        self.sectors.pop(sectorize(position), None)

    def is_loaded(self, position):
        return sectorize(position) in self.sectors

    def _locate(self, position, create=False):
        x, y, z = floor_position(position)
        if not (self.min_y <= y <= self.max_y):
            raise GridUnavailable(f"y={y} outside [{self.min_y}, {self.max_y}]")
        spos = sectorize((x, y, z))
        sector = self.sectors.get(spos)
        if sector is None:
            if not create:
                raise GridUnavailable(f"sector {spos} not loaded")
            sector = self.load_sector(spos)
        return sector, (x - spos[0], y - self.min_y, z - spos[2])

    def get_block(self, position):
        sector, (ix, iy, iz) = self._locate(position)
        return int(sector[ix, iy, iz])

    def set_block(self, position, block):
        sector, (ix, iy, iz) = self._locate(position, create=self.autoload)
        sector[ix, iy, iz] = block
        self.write_count += 1

    def get_vertical_column(self, x, z):
        """
        Return the full column of blocks at integer (x,z) coordinates (index 0 is min_y),
        or None if the corresponding sector is not loaded.
        """
        spos = sectorize((x, 0, z))
        sector = self.sectors.get(spos)
        if sector is None:
            return None
        return sector[int(math.floor(x)) - spos[0], :, int(math.floor(z)) - spos[2]]

    def column_height(self, x, z):
        """y of the topmost solid block in the column, or None if there is none."""
        column = self.get_vertical_column(x, z)
        if column is None:
            return None
        solid = BLOCK_SOLID[column] > 0
        if not solid.any():
            return None
        return int(numpy.nonzero(solid)[0][-1]) + self.min_y

    def height_map(self, x0, z0, width, depth):
        """(width, depth) int array of column heights, -1 where empty or unloaded."""
        heights = numpy.full((width, depth), -1, dtype=numpy.int32)
        for dx in range(width):
            for dz in range(depth):
                h = self.column_height(x0 + dx, z0 + dz)
                if h is not None:
                    heights[dx, dz] = h
        return heights

    def count(self, block):
        return int(sum(numpy.count_nonzero(s == block) for s in self.sectors.values()))


class GridAccess(object):
    """Boundary between the generators and a voxel grid.

    The wrapped grid only needs `get_block(position)` and `set_block(position, block)`,
    either of which may raise when a region is not resident. Here those failures turn
    into plain results: `block_at` returns None and `set_block` returns False.
    """

    def __init__(self, grid):
        self.grid = grid
        self.failed_reads = 0
        self.failed_writes = 0

    def block_at(self, position):
        position = floor_position(position)
        try:
            return self.grid.get_block(position)
        except Exception as ex:
            self.failed_reads += 1
            logutil.log("GRID", f"read failed at {position}: {ex}", level="DEBUG")
            return None

    def set_block(self, position, block):
        position = floor_position(position)
        try:
            self.grid.set_block(position, block)
        except Exception as ex:
            self.failed_writes += 1
            logutil.log("GRID", f"write of {block} failed at {position}: {ex}", level="WARN")
            return False
        return True


def as_access(world):
    if isinstance(world, GridAccess):
        return world
    return GridAccess(world)

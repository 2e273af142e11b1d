import math

import numpy

from config import SECTOR_SIZE


def floor_position(position):
    """ Accepts `position` of arbitrary precision and returns the block
    containing that position.

    Parameters
    ----------
    position : tuple of len 3

    Returns
    -------
    block_position : tuple of ints of len 3

    """
    x, y, z = position
    return (int(math.floor(x)), int(math.floor(y)), int(math.floor(z)))


def round_half_up(value):
    """ Round to the nearest integer with halves going towards +inf
    (-0.5 -> 0, 0.5 -> 1), unlike python's banker's rounding.

    """
    return int(math.floor(value + 0.5))


def sectorize(position):
    """ Returns a tuple representing the sector for the given `position`.

    Parameters
    ----------
    position : tuple of len 3

    Returns
    -------
    sector : tuple of len 3

    """
    x, y, z = floor_position(position)
    x, z = x // SECTOR_SIZE, z // SECTOR_SIZE
    return (x*SECTOR_SIZE, 0, z*SECTOR_SIZE)


def disc_offsets(radius):
    """ Returns the (dx, dz, dist_sq) offsets of every column within `radius`
    of a centre column, in row-major order (dx outer, dz inner).

    Parameters
    ----------
    radius : int

    Returns
    -------
    offsets : (N, 3) int array

    """
    r = int(radius)
    if r < 0:
        return numpy.zeros((0, 3), dtype=numpy.int64)
    D = numpy.mgrid[-r:r+1, -r:r+1].reshape(2, -1).T
    dist_sq = (D*D).sum(axis=1)
    keep = dist_sq <= r*r
    return numpy.column_stack((D[keep], dist_sq[keep])).astype(numpy.int64)

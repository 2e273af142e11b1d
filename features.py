"""Radial terrain features: hills, valleys and water bodies.

All three shape the ground with the same falloff, ``floor(m * (1 - sqrt(d2 / r2)))``:
the full magnitude at the centre column, zero at the rim.
"""
import math
import traceback
from collections import namedtuple

import numpy

import config
import logutil
from blocks import DEFAULT_PALETTE
from grid import as_access
from util import disc_offsets, floor_position

RadialFeature = namedtuple('RadialFeature', ['center', 'radius', 'magnitude'])


def magnitude_at_point(dist_sq, radius_sq, magnitude):
    if radius_sq <= 0 or dist_sq < 0:
        return 0
    factor = 1 - math.sqrt(dist_sq / radius_sq)
    return max(0, int(math.floor(magnitude * factor)))


def falloff_field(radius, magnitude):
    """ Magnitudes for every column of a disc.

    Parameters
    ----------
    radius : int
    magnitude : int

    Returns
    -------
    offsets : (N, 2) int array of (dx, dz)
    values : (N,) int array, non-increasing with distance from the centre

    """
    D = disc_offsets(radius)
    radius_sq = int(radius) * int(radius)
    if radius_sq <= 0 or len(D) == 0:
        return D[:, :2], numpy.zeros(len(D), dtype=numpy.int64)
    factor = 1 - numpy.sqrt(D[:, 2] / float(radius_sq))
    values = numpy.maximum(0, numpy.floor(magnitude * factor)).astype(numpy.int64)
    return D[:, :2], values


def _feature_args(kind, center, radius, magnitude):
    if radius <= 0 or magnitude <= 0:
        logutil.log("TERRAIN", f"invalid {kind} radius={radius} magnitude={magnitude} at {center}", level="WARN")
        return None
    x, _, z = floor_position(center)
    return RadialFeature((x, z), int(radius), int(magnitude))


def _levels(base_y, water_level):
    if base_y is None:
        base_y = getattr(config, 'WORLD_BASE_Y', 0)
    if water_level is None:
        water_level = getattr(config, 'WATER_LEVEL', -2)
    return base_y, water_level


def _build_hill_column(world, x, z, base_y, height, palette):
    for dy in range(height + 1):
        world.set_block((x, base_y + dy, z), palette.grass if dy == height else palette.dirt)


def _carve_valley_column(world, x, z, base_y, depth, water_level, palette):
    for y in range(base_y, base_y - depth, -1):
        world.set_block((x, y, z), palette.water if y <= water_level else palette.air)
    world.set_block((x, base_y - depth, z), palette.sand if depth <= 2 else palette.gravel)


def create_hill(world, center, radius, height, palette=None, base_y=None):
    """Raise a grass-topped dirt mound from the base height. `center` y is ignored."""
    feature = _feature_args("hill", center, radius, height)
    if feature is None:
        return False
    palette = palette or DEFAULT_PALETTE
    base_y, _ = _levels(base_y, None)
    try:
        world = as_access(world)
        (cx, cz) = feature.center
        offsets, heights = falloff_field(feature.radius, feature.magnitude)
        for (dx, dz), h in zip(offsets.tolist(), heights.tolist()):
            _build_hill_column(world, cx + dx, cz + dz, base_y, h, palette)
    except Exception as ex:
        logutil.log("TERRAIN", f"hill at {center} failed: {ex}", level="WARN")
        traceback.print_exc()
        return False
    return True


def create_valley(world, center, radius, depth, palette=None, base_y=None, water_level=None):
    """Carve a bowl down from the base height.

    Carved cells at or below the water level become water, the rest air. The bottom
    of each column is sand where it is shallow (depth <= 2) and gravel otherwise.
    """
    feature = _feature_args("valley", center, radius, depth)
    if feature is None:
        return False
    palette = palette or DEFAULT_PALETTE
    base_y, water_level = _levels(base_y, water_level)
    try:
        world = as_access(world)
        (cx, cz) = feature.center
        offsets, depths = falloff_field(feature.radius, feature.magnitude)
        for (dx, dz), d in zip(offsets.tolist(), depths.tolist()):
            _carve_valley_column(world, cx + dx, cz + dz, base_y, d, water_level, palette)
    except Exception as ex:
        logutil.log("TERRAIN", f"valley at {center} failed: {ex}", level="WARN")
        traceback.print_exc()
        return False
    return True


def create_water_body(world, center, radius, depth, palette=None, base_y=None, water_level=None, beach_width=None):
    """A valley flooded up to the water level, ringed with a sand beach on dirt."""
    feature = _feature_args("water body", center, radius, depth)
    if feature is None:
        return False
    palette = palette or DEFAULT_PALETTE
    base_y, water_level = _levels(base_y, water_level)
    if beach_width is None:
        beach_width = getattr(config, 'BEACH_WIDTH', 2)
    try:
        world = as_access(world)
        if not create_valley(world, center, radius, depth, palette=palette, base_y=base_y, water_level=water_level):
            logutil.log("TERRAIN", f"valley under water body at {center} failed, filling anyway", level="WARN")
        (cx, cz) = feature.center
        radius_sq = feature.radius * feature.radius
        inner_sq = max(0, feature.radius - beach_width) ** 2
        offsets, depths = falloff_field(feature.radius, feature.magnitude)
        for (dx, dz), d in zip(offsets.tolist(), depths.tolist()):
            x, z = cx + dx, cz + dz
            for y in range(base_y - d + 1, water_level + 1):
                if world.block_at((x, y, z)) != palette.water:
                    world.set_block((x, y, z), palette.water)
            dist_sq = dx * dx + dz * dz
            if inner_sq < dist_sq <= radius_sq:
                world.set_block((x, base_y, z), palette.sand)
                world.set_block((x, base_y - 1, z), palette.dirt)
    except Exception as ex:
        logutil.log("TERRAIN", f"water body at {center} failed: {ex}", level="WARN")
        traceback.print_exc()
        return False
    return True

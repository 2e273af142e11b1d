import math

import numpy

import config
import logutil
from blocks import DEFAULT_PALETTE
from grid import as_access
from ground import find_ground_height
from paths import create_path
from placer import place_tree
from structures.buildings import VILLAGE_BUILDINGS, build_bench
from util import disc_offsets

FOUNTAIN_RADIUS = 5
FOUNTAIN_PILLAR_HEIGHT = 4
RADIAL_PATH_LENGTH = 40
RADIAL_PATH_WIDTH = 3
# Decorations stay out of the plaza and the building ring.
DECORATION_CLEARANCE = 25
TREE_CHANCE = 0.7


def build_plaza(world, center, palette=None, radius=None):
    """Paved stone brick disc laid over the ground, with a fountain on top of its centre."""
    p = palette or DEFAULT_PALETTE
    world = as_access(world)
    if radius is None:
        radius = getattr(config, 'VILLAGE_PLAZA_RADIUS', 20)
    cx, cz = center
    for dx, dz, _ in disc_offsets(radius).tolist():
        x, z = cx + dx, cz + dz
        world.set_block((x, find_ground_height(world, x, z, palette=p), z), p.stone_brick)
    ground_y = find_ground_height(world, cx, cz, palette=p)
    build_fountain(world, (cx, ground_y + 1, cz), palette=p)
    return True


def build_fountain(world, base, palette=None, radius=FOUNTAIN_RADIUS):
    """Round basin: stone brick rim, water inside, a central pillar with four spouts."""
    p = palette or DEFAULT_PALETTE
    world = as_access(world)
    x, y, z = base
    rim_sq = (radius - 1) ** 2
    for dx, dz, dist_sq in disc_offsets(radius).tolist():
        world.set_block((x + dx, y, z + dz), p.stone_brick if dist_sq >= rim_sq else p.water)
    for dy in range(FOUNTAIN_PILLAR_HEIGHT):
        world.set_block((x, y + dy, z), p.stone_brick)
    for dx, dz in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        world.set_block((x + dx, y + 2, z + dz), p.water)
    return True


def _ring(center, count, distance):
    cx, cz = center
    for i in range(count):
        angle = i * 2 * math.pi / count
        yield i, cx + math.cos(angle) * distance, cz + math.sin(angle) * distance


def build_village_buildings(world, center, palette=None, count=None, distance=None):
    """Buildings evenly spaced on a ring around the plaza, cycling shop, house and tower.

    Each building is built on its own; a failing one is logged and skipped.
    Returns the number built.
    """
    if count is None:
        count = getattr(config, 'VILLAGE_BUILDING_COUNT', 6)
    if distance is None:
        distance = getattr(config, 'VILLAGE_RING_RADIUS', 35)
    built = 0
    for i, x, z in _ring(center, count, distance):
        kind, builder = VILLAGE_BUILDINGS[i % len(VILLAGE_BUILDINGS)]
        if logutil.guarded("AREA", f"village {kind} {i}", builder, world, (x, 0, z), palette=palette):
            built += 1
    return built


def build_village_paths(world, center, palette=None, count=None):
    """Stone brick spokes running out from the centre of the village."""
    p = palette or DEFAULT_PALETTE
    if count is None:
        count = getattr(config, 'VILLAGE_RADIAL_PATHS', 8)
    cx, cz = center
    made = 0
    for _, x, z in _ring(center, count, RADIAL_PATH_LENGTH):
        if create_path(world, (cx, 0, cz), (x, 0, z), RADIAL_PATH_WIDTH, p.stone_brick, palette=p):
            made += 1
    return made


def add_village_decorations(world, area, rng, palette=None, count=None):
    """Scatter trees and benches over the open ground of the village, away from its centre."""
    p = palette or DEFAULT_PALETTE
    world = as_access(world)
    if count is None:
        count = getattr(config, 'VILLAGE_DECORATIONS', 15)
    cx, cz = area.center
    placed = 0
    for _ in range(count):
        x = area.start_x + int(rng.integers(area.width))
        z = area.start_z + int(rng.integers(area.depth))
        if math.hypot(x - cx, z - cz) < DECORATION_CLEARANCE:
            continue
        ground_y = find_ground_height(world, x, z, palette=p)
        suitable = world.block_at((x, ground_y, z)) in (p.grass, p.dirt)
        clear = world.block_at((x, ground_y + 1, z)) == p.air
        if rng.random() < TREE_CHANCE and suitable and clear:
            place_tree(world, (x, ground_y + 1, z), 4, p.log, p.leaves)
            placed += 1
        elif suitable:
            build_bench(world, (x, ground_y, z), palette=p)
            placed += 1
    return placed


def build_village(world, area, rng=None, palette=None):
    """Village centre: plaza and fountain, a ring of buildings, radial paths, then decorations."""
    p = palette or DEFAULT_PALETTE
    if rng is None:
        rng = numpy.random.default_rng()
    center = area.center
    logutil.log("AREA", f"building village at {center}")
    build_plaza(world, center, palette=p)
    built = build_village_buildings(world, center, palette=p)
    build_village_paths(world, center, palette=p)
    decorations = add_village_decorations(world, area, rng, palette=p)
    logutil.log("AREA", f"village done: {built} buildings, {decorations} decorations")
    return True

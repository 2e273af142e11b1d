#std/external libs
import time
import traceback
from collections import OrderedDict

import numpy

#local libs
import config
import logutil
from areas import AreaRegistry
from blocks import DEFAULT_PALETTE
from features import create_hill, create_valley, create_water_body
from grid import as_access
from paths import create_path
from structures.dungeon import build_dungeon_entrance
from structures.player_house import build_player_house
from structures.village import build_village

PHASES = ('base_terrain', 'terrain_features', 'area_structures', 'area_paths')

# Builders for the areas that carry structures: builder(world, area, rng=..., palette=...)
AREA_BUILDERS = {
    'VILLAGE_CENTER': build_village,
    'PLAYER_HOUSE': build_player_house,
    'DUNGEON_ENTRANCE': build_dungeon_entrance,
}


class WorldSettings(object):
    """Snapshot of the generation parameters.

    Values come from config unless passed as keyword overrides, e.g.
    ``WorldSettings(world_width=64, scattered_hills=0)``.
    """

    # attribute, config name, fallback
    FIELDS = (
        ('world_width', 'WORLD_WIDTH', 500),
        ('world_depth', 'WORLD_DEPTH', 500),
        ('world_origin', 'WORLD_ORIGIN', (-250, -250)),
        ('min_y', 'WORLD_MIN_Y', -10),
        ('base_y', 'WORLD_BASE_Y', 0),
        ('hill_height', 'HILL_HEIGHT', 5),
        ('water_level', 'WATER_LEVEL', -2),
        ('beach_width', 'BEACH_WIDTH', 2),
        ('areas', 'WORLD_AREAS', {}),
        ('area_features', 'AREA_FEATURES', {}),
        ('hill_radius_range', 'HILL_RADIUS_RANGE', (5, 15)),
        ('valley_radius_range', 'VALLEY_RADIUS_RANGE', (4, 12)),
        ('valley_depth_range', 'VALLEY_DEPTH_RANGE', (2, 6)),
        ('water_radius_range', 'WATER_RADIUS_RANGE', (6, 16)),
        ('water_depth_range', 'WATER_DEPTH_RANGE', (3, 7)),
        ('landmark_water_bodies', 'LANDMARK_WATER_BODIES', ()),
        ('scattered_hills', 'SCATTERED_HILLS', 15),
        ('scattered_hill_radius_range', 'SCATTERED_HILL_RADIUS_RANGE', (5, 20)),
        ('scattered_hill_height_range', 'SCATTERED_HILL_HEIGHT_RANGE', (2, 6)),
        ('area_structures', 'AREA_STRUCTURES', ()),
        ('area_connections', 'AREA_CONNECTIONS', ()),
        ('path_width', 'PATH_WIDTH', 4),
        ('path_block', 'PATH_BLOCK', 'stone_brick'),
        ('seed', 'SEED', None),
    )

    def __init__(self, **overrides):
        names = set(f[0] for f in self.FIELDS)
        unknown = set(overrides) - names
        if unknown:
            raise TypeError(f"unknown world settings: {', '.join(sorted(unknown))}")
        for attr, name, fallback in self.FIELDS:
            setattr(self, attr, overrides.get(attr, getattr(config, name, fallback)))

    def replace(self, **overrides):
        values = {attr: getattr(self, attr) for attr, _, _ in self.FIELDS}
        values.update(overrides)
        return WorldSettings(**values)


class PhaseResult(object):

    def __init__(self, name):
        self.name = name
        self.status = 'pending'
        self.attempted = 0
        self.succeeded = 0
        self.error = None

    @property
    def failed(self):
        return self.attempted - self.succeeded

    def __repr__(self):
        return f"<{self.name} {self.status} {self.succeeded}/{self.attempted}>"


class GenerationReport(object):
    """Outcome of one generation pass: a PhaseResult per phase, in run order."""

    def __init__(self, seed):
        self.seed = seed
        self.phases = OrderedDict((name, PhaseResult(name)) for name in PHASES)

    def __getitem__(self, name):
        return self.phases[name]

    @property
    def ok(self):
        return all(p.status == 'ok' for p in self.phases.values())

    def summary(self):
        parts = [f"{p.name}={p.status}({p.succeeded}/{p.attempted})" for p in self.phases.values()]
        return f"seed={self.seed} " + " ".join(parts)


def create_area_terrain(world, area, rng, hills=0, valleys=0, water_bodies=0, settings=None, palette=None):
    """Randomly placed hills, valleys and water bodies inside `area`.

    Each feature is its own call; failures are logged and the rest still run.
    Returns (attempted, succeeded).
    """
    s = settings or WorldSettings()
    p = palette or DEFAULT_PALETTE
    attempted = succeeded = 0

    def random_center():
        return (area.start_x + int(rng.integers(area.width)), s.base_y,
                area.start_z + int(rng.integers(area.depth)))

    for i in range(hills):
        radius = int(rng.integers(*s.hill_radius_range))
        height = int(rng.integers(3, max(3, s.hill_height) + 1))
        attempted += 1
        if logutil.guarded("TERRAIN", f"hill {i + 1}/{hills} in {area.name}", create_hill,
                           world, random_center(), radius, height, palette=p, base_y=s.base_y):
            succeeded += 1
    for i in range(valleys):
        radius = int(rng.integers(*s.valley_radius_range))
        depth = int(rng.integers(*s.valley_depth_range))
        attempted += 1
        if logutil.guarded("TERRAIN", f"valley {i + 1}/{valleys} in {area.name}", create_valley,
                           world, random_center(), radius, depth, palette=p,
                           base_y=s.base_y, water_level=s.water_level):
            succeeded += 1
    for i in range(water_bodies):
        radius = int(rng.integers(*s.water_radius_range))
        depth = int(rng.integers(*s.water_depth_range))
        attempted += 1
        if logutil.guarded("TERRAIN", f"water body {i + 1}/{water_bodies} in {area.name}", create_water_body,
                           world, random_center(), radius, depth, palette=p, base_y=s.base_y,
                           water_level=s.water_level, beach_width=s.beach_width):
            succeeded += 1
    logutil.log("TERRAIN", f"{area.name}: {hills} hills, {valleys} valleys, {water_bodies} water bodies")
    return attempted, succeeded


class WorldGenerator(object):
    """Builds a whole world into a grid in four ordered phases.

    Terrain goes first, so structures can find their ground; structures go before
    paths, so the paths can see (and avoid) them. A phase that raises is logged and
    the next one still runs, as does every call inside a phase.
    """

    def __init__(self, world, areas=None, palette=None, seed=None, settings=None):
        self.settings = settings or WorldSettings()
        if seed is None:
            seed = self.settings.seed
        if seed is None:
            seed = int(time.time())
        self.seed = seed
        self.rng = numpy.random.default_rng(seed)
        self.world = as_access(world)
        self.palette = palette or DEFAULT_PALETTE
        if areas is None:
            areas = AreaRegistry.from_config(self.settings.areas, self.settings.world_origin)
        self.areas = areas
        self.report = None

    def generate(self):
        if self.report is not None:
            logutil.log("MAPGEN", "generating into the same world again, structures will be duplicated", level="WARN")
        report = GenerationReport(self.seed)
        self.report = report
        logutil.log("MAPGEN", f"generating world seed={self.seed} areas={len(self.areas)}")
        steps = (
            self.generate_base_terrain,
            self.generate_terrain_features,
            self.build_area_structures,
            self.connect_areas,
        )
        for name, step in zip(PHASES, steps):
            self._run_phase(report[name], step)
        logutil.set_phase(None)
        logutil.log("MAPGEN", f"done: {report.summary()}")
        return report

    def _run_phase(self, phase, step):
        logutil.set_phase(phase.name)
        start = time.time()
        try:
            step(phase)
            phase.status = 'ok'
        except Exception as ex:
            phase.status = 'failed'
            phase.error = ex
            logutil.log("MAPGEN", f"phase {phase.name} failed: {ex!r}", level="ERROR")
            traceback.print_exc()
        logutil.log("MAPGEN", f"phase {phase.name} {phase.status} in {time.time() - start:.2f}s "
                    f"({phase.succeeded}/{phase.attempted} calls)")

    def _call(self, phase, what, fn, *args, **kwargs):
        phase.attempted += 1
        result = logutil.guarded("MAPGEN", what, fn, *args, **kwargs)
        if result is not False:
            phase.succeeded += 1
        return result

    def generate_base_terrain(self, phase):
        """Flat dirt from the bottom of the world up to the base height, grass on top."""
        s = self.settings
        ox, oz = s.world_origin
        p = self.palette
        world = self.world
        failed_before = world.failed_writes
        phase.attempted += 1
        for x in range(ox, ox + s.world_width):
            for z in range(oz, oz + s.world_depth):
                for y in range(s.min_y, s.base_y):
                    world.set_block((x, y, z), p.dirt)
                world.set_block((x, s.base_y, z), p.grass)
        failed = world.failed_writes - failed_before
        if failed:
            logutil.log("MAPGEN", f"base terrain: {failed} writes failed", level="WARN")
        phase.succeeded += 1

    def generate_terrain_features(self, phase):
        s = self.settings
        for key, counts in s.area_features.items():
            area = self.areas.get(key)
            if area is None:
                logutil.log("MAPGEN", f"no area {key!r} for terrain features", level="WARN")
                continue
            attempted, succeeded = create_area_terrain(
                self.world, area, self.rng, hills=counts.get('hills', 0), valleys=counts.get('valleys', 0),
                water_bodies=counts.get('water_bodies', 0), settings=s, palette=self.palette)
            phase.attempted += attempted
            phase.succeeded += succeeded
        for key, dx, dz, radius, depth in s.landmark_water_bodies:
            area = self.areas.get(key)
            if area is None:
                logutil.log("MAPGEN", f"no area {key!r} for landmark water body", level="WARN")
                continue
            center = (area.start_x + dx, s.base_y, area.start_z + dz)
            self._call(phase, f"water body near {area.name}", create_water_body, self.world, center,
                       radius, depth, palette=self.palette, base_y=s.base_y, water_level=s.water_level,
                       beach_width=s.beach_width)
        self.scatter_hills(phase)

    def scatter_hills(self, phase):
        """Random hills anywhere in the world footprint except inside declared areas."""
        s = self.settings
        ox, oz = s.world_origin
        skipped = 0
        for i in range(s.scattered_hills):
            x = ox + int(self.rng.integers(s.world_width))
            z = oz + int(self.rng.integers(s.world_depth))
            if self.areas.is_in_any_defined_area((x, 0, z)):
                skipped += 1
                continue
            radius = int(self.rng.integers(*s.scattered_hill_radius_range))
            height = int(self.rng.integers(*s.scattered_hill_height_range))
            self._call(phase, f"scattered hill {i + 1}", create_hill, self.world, (x, s.base_y, z),
                       radius, height, palette=self.palette, base_y=s.base_y)
        logutil.log("MAPGEN", f"scattered hills: {s.scattered_hills - skipped} placed, {skipped} inside areas")

    def build_area_structures(self, phase):
        for key in self.settings.area_structures:
            area = self.areas.get(key)
            builder = AREA_BUILDERS.get(key)
            if area is None or builder is None:
                logutil.log("MAPGEN", f"cannot build structures for {key!r}", level="WARN")
                continue
            self._call(phase, f"structures in {area.name}", builder, self.world, area,
                       rng=self.rng, palette=self.palette)

    def connect_areas(self, phase):
        s = self.settings
        block = getattr(self.palette, s.path_block)
        for a, b in s.area_connections:
            if a not in self.areas or b not in self.areas:
                logutil.log("MAPGEN", f"cannot connect {a!r} and {b!r}: unknown area", level="WARN")
                continue
            ax, az = self.areas.center(a)
            bx, bz = self.areas.center(b)
            self._call(phase, f"path {a} -> {b}", create_path, self.world, (ax, s.base_y + 1, az),
                       (bx, s.base_y + 1, bz), s.path_width, block, palette=self.palette)


def generate_world(grid, area_registry=None, block_palette=None, seed=None, settings=None):
    """Generate the whole world into `grid`. Never raises for failures inside generation."""
    generator = WorldGenerator(grid, areas=area_registry, palette=block_palette, seed=seed, settings=settings)
    return generator.generate()

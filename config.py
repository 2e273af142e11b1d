# Size of sectors used by the in-memory grid (x and z).
SECTOR_SIZE = 16

# World footprint in blocks, and the world-space corner it starts from (x, z).
WORLD_WIDTH = 500
WORLD_DEPTH = 500
WORLD_ORIGIN = (-250, -250)

# Vertical range of the generated world.
WORLD_MIN_Y = -10
WORLD_MAX_Y = 100
WORLD_BASE_Y = 0 # grass surface of the flat base terrain

# Terrain shaping.
HILL_HEIGHT = 5
WATER_LEVEL = -2
BEACH_WIDTH = 2

# Ground resolver scans down from WORLD_BASE_Y + GROUND_SCAN_HEIGHT to WORLD_MIN_Y.
GROUND_SCAN_HEIGHT = 15

# Named areas: (name, startX, startZ, width, depth), x/z measured from WORLD_ORIGIN.
WORLD_AREAS = {
    'VILLAGE_CENTER': ('Village Center', -50, -50, 100, 100),
    'PLAYER_HOUSE': ('Player House', 100, -80, 50, 50),
    'MARKET_DISTRICT': ('Market District', -120, 50, 80, 60),
    'TECH_DISTRICT': ('Tech District', 40, 70, 70, 70),
    'WILDERNESS': ('Wilderness', 150, 150, 100, 100),
    'DUNGEON_ENTRANCE': ('Dungeon Entrance', -150, 150, 40, 40),
}

# Random feature batches scoped to a single area.
AREA_FEATURES = {
    'WILDERNESS': {'hills': 8, 'valleys': 3, 'water_bodies': 2},
}

# Random ranges: (min, max) inclusive-exclusive as drawn from the rng.
HILL_RADIUS_RANGE = (5, 15)
VALLEY_RADIUS_RANGE = (4, 12)
VALLEY_DEPTH_RANGE = (2, 6)
WATER_RADIUS_RANGE = (6, 16)
WATER_DEPTH_RANGE = (3, 7)

# Landmark lakes: (area key, dx from area start, dz from area start, radius, depth).
# The Tech District lake sits 20 west and 20 past the far edge of the district.
LANDMARK_WATER_BODIES = (
    ('TECH_DISTRICT', -20, 90, 25, 5),
)

# Hills scattered over the whole world, skipping declared areas.
SCATTERED_HILLS = 15
SCATTERED_HILL_RADIUS_RANGE = (5, 20)
SCATTERED_HILL_HEIGHT_RANGE = (2, 6)

# Paths between area centres.
AREA_CONNECTIONS = (
    ('VILLAGE_CENTER', 'PLAYER_HOUSE'),
    ('VILLAGE_CENTER', 'MARKET_DISTRICT'),
    ('VILLAGE_CENTER', 'TECH_DISTRICT'),
)
PATH_WIDTH = 4
PATH_BLOCK = 'stone_brick' # palette role

# Areas that get structures built, in build order.
AREA_STRUCTURES = ('VILLAGE_CENTER', 'PLAYER_HOUSE', 'DUNGEON_ENTRANCE')

# Fixed seed for generation (None picks one from the clock).
SEED = None

# Logging: minimum level shown and whether WARN/ERROR are coloured.
LOG_LEVEL = 'INFO'
LOG_COLOR = True

# Radius of the village plaza; buildings sit on a ring just outside it.
VILLAGE_PLAZA_RADIUS = 20
VILLAGE_RING_RADIUS = 35
VILLAGE_BUILDING_COUNT = 6
VILLAGE_RADIAL_PATHS = 8
VILLAGE_DECORATIONS = 15

# Fraction of the dungeon floor covered with scrap resources.
DUNGEON_RESOURCE_DENSITY = 0.05
# Dungeon entrance room footprint (x, z), built at the area centre.
DUNGEON_ROOM_SIZE = (15, 11)

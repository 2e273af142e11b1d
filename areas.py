import config
import logutil


class Area(object):
    """Named rectangle of the world, in world x/z."""

    def __init__(self, key, name, start_x, start_z, width, depth):
        self.key = key
        self.name = name
        self.start_x = start_x
        self.start_z = start_z
        self.width = width
        self.depth = depth

    def __repr__(self):
        return f"Area({self.key!r}, x={self.start_x}, z={self.start_z}, {self.width}x{self.depth})"

    @property
    def center(self):
        return (self.start_x + self.width // 2, self.start_z + self.depth // 2)

    def contains(self, x, z):
        return (self.start_x <= x < self.start_x + self.width
                and self.start_z <= z < self.start_z + self.depth)

    def to_world(self, local_x, local_z, local_y=0, base_y=None):
        if base_y is None:
            base_y = getattr(config, 'WORLD_BASE_Y', 0)
        return (self.start_x + local_x, base_y + local_y, self.start_z + local_z)


class AreaRegistry(object):
    """Lookup of the named areas a world is divided into.

    Areas may overlap; nothing here checks for it.
    """

    def __init__(self, areas=()):
        self.areas = {}
        for area in areas:
            self.add(area)

    @classmethod
    def from_config(cls, table=None, origin=None):
        """Build from a {key: (name, startX, startZ, width, depth)} table measured from `origin`."""
        if table is None:
            table = getattr(config, 'WORLD_AREAS', {})
        if origin is None:
            origin = getattr(config, 'WORLD_ORIGIN', (0, 0))
        ox, oz = origin
        return cls(Area(key, name, ox + sx, oz + sz, w, d)
                   for key, (name, sx, sz, w, d) in table.items())

    def add(self, area):
        self.areas[area.key] = area

    def __iter__(self):
        return iter(self.areas.values())

    def __len__(self):
        return len(self.areas)

    def __contains__(self, key):
        return key in self.areas

    def get(self, key):
        return self.areas.get(key)

    def require(self, key):
        area = self.areas.get(key)
        if area is None:
            logutil.log("AREA", f"unknown area {key!r}", level="WARN")
            raise KeyError(key)
        return area

    def center(self, key):
        return self.require(key).center

    def to_world(self, key, local_x, local_z, local_y=0, base_y=None):
        return self.require(key).to_world(local_x, local_z, local_y, base_y)

    def is_position_in_area(self, position, key):
        x, _, z = position
        return self.require(key).contains(x, z)

    def is_in_any_defined_area(self, position):
        x, _, z = position
        return any(area.contains(x, z) for area in self.areas.values())

import numpy


class Block(object):
    name = None
    solid = True
    # Liquids are never treated as ground by the resolver.
    liquid = False
    # Indestructible blocks are not meant to be removed by players.
    indestructible = False


class Liquid(Block):
    solid = False
    liquid = True


class DirtWithGrass(Block):
    name = 'Grass'

class Dirt(Block):
    name = 'Dirt'

class Stone(Block):
    name = 'Stone'

class Sand(Block):
    name = 'Sand'

class Gravel(Block):
    name = 'Gravel'

class Brick(Block):
    name = 'Brick'

class Clay(Block):
    name = 'Clay'

class StoneBricks(Block):
    name = 'Stone Bricks'

class Plank(Block):
    name = 'Wood Planks'

class Log(Block):
    name = 'Log'

class Glass(Block):
    name = 'Glass'

class Leaves(Block):
    name = 'Oak Leaves'

class Ice(Block):
    name = 'Ice'

class DiamondOre(Block):
    name = 'Diamond Ore'

class InfectedShadow(Block):
    name = 'Infected Shadow'

class ScrapMetal(Block):
    name = 'Scrap Metal'

class Water(Liquid):
    name = 'Water'
    indestructible = True


BLOCKS = [
    DirtWithGrass,
    Dirt,
    Stone,
    Sand,
    Gravel,
    Brick,
    Clay,
    StoneBricks,
    Plank,
    Log,
    Glass,
    Leaves,
    Ice,
    DiamondOre,
    InfectedShadow,
    ScrapMetal,
    Water,
]

# Block 0 is air.
AIR = 0
BLOCK_ID = {'Air': AIR}
for i, b in enumerate(BLOCKS):
    BLOCK_ID[b.name] = i + 1

BLOCK_NAME = {v: k for k, v in BLOCK_ID.items()}
BLOCK_SOLID = numpy.array([False] + [b.solid for b in BLOCKS], dtype=numpy.uint8)
BLOCK_LIQUID = numpy.array([False] + [b.liquid for b in BLOCKS], dtype=numpy.uint8)
BLOCK_INDESTRUCTIBLE = numpy.array([False] + [b.indestructible for b in BLOCKS], dtype=numpy.uint8)


class BlockPalette(object):
    """Maps the material roles used by the generators to block ids.

    Any role can be overridden by keyword: ``BlockPalette(stone_brick=BLOCK_ID['Stone'])``
    swaps every stone brick placement for stone. Unknown roles raise TypeError.
    """

    ROLES = {
        'air': 'Air',
        'grass': 'Grass',
        'dirt': 'Dirt',
        'stone': 'Stone',
        'sand': 'Sand',
        'gravel': 'Gravel',
        'brick': 'Brick',
        'clay': 'Clay',
        'stone_brick': 'Stone Bricks',
        'planks': 'Wood Planks',
        'log': 'Log',
        'glass': 'Glass',
        'leaves': 'Oak Leaves',
        'water': 'Water',
        'scrap': 'Scrap Metal',
    }

    def __init__(self, liquids=None, **roles):
        unknown = set(roles) - set(self.ROLES)
        if unknown:
            raise TypeError(f"unknown palette roles: {', '.join(sorted(unknown))}")
        for role, name in self.ROLES.items():
            setattr(self, role, int(roles.get(role, BLOCK_ID[name])))
        if liquids is None:
            liquids = [i for i in range(len(BLOCK_LIQUID)) if BLOCK_LIQUID[i]]
            liquids.append(self.water)
        self.liquids = frozenset(int(b) for b in liquids)

    def is_solid(self, block_id):
        """Ground test: anything that is not missing, air or a liquid."""
        if block_id is None or block_id == self.air:
            return False
        return block_id not in self.liquids

    def is_liquid(self, block_id):
        return block_id in self.liquids

    def name_of(self, block_id):
        return BLOCK_NAME.get(block_id, str(block_id))


DEFAULT_PALETTE = BlockPalette()

import numpy
from config import VOXEL_TEXTURE

TEXTURE_PATH, TEXTURE_LAYERS = VOXEL_TEXTURE

# Voxel buffers are uint16: 0 is empty, material ids start at 1 and the top
# value marks voxels with no data (outside the generated bounds, skirts).
VOXEL_DTYPE = 'u2'
AIR = 0
UNSET = 0xFFFF


class Block(object):
    name = None
    # Atlas layer per face group: top, side, bottom.
    textures = (0, 0, 0)


class Grass(Block):
    name = 'Grass'
    textures = (0, 1, 2)

class Dirt(Block):
    name = 'Dirt'
    textures = (2, 2, 2)

class Stone(Block):
    name = 'Stone'
    textures = (3, 3, 3)

class Water(Block):
    name = 'Water'
    textures = (4, 4, 4)

class Marble(Block):
    name = 'Marble'
    textures = (5, 5, 5)

class Sand(Block):
    name = 'Sand'
    textures = (6, 6, 6)

class Snow(Block):
    name = 'Snow'
    textures = (7, 7, 7)

class Ice(Block):
    name = 'Ice'
    textures = (8, 8, 8)

class Wood(Block):
    name = 'Wood'
    textures = (9, 9, 9)

class Leaves(Block):
    name = 'Leaves'
    textures = (10, 10, 10)

class Clay(Block):
    name = 'Clay'
    textures = (11, 11, 11)

class Iron(Block):
    name = 'Iron'
    textures = (12, 12, 12)

class Gold(Block):
    name = 'Gold'
    textures = (13, 13, 13)

class Coal(Block):
    name = 'Coal'
    textures = (14, 14, 14)

class Copper(Block):
    name = 'Copper'
    textures = (15, 15, 15)

class Tin(Block):
    name = 'Tin'
    textures = (16, 16, 16)

class Silver(Block):
    name = 'Silver'
    textures = (17, 17, 17)

class Platinum(Block):
    name = 'Platinum'
    textures = (18, 18, 18)

class Lava(Block):
    name = 'Lava'
    textures = (19, 19, 19)

class Adamantine(Block):
    name = 'Adamantine'
    textures = (20, 20, 20)


# Explicit ordering keeps material ids stable across runs and workers.
BLOCKS = [
    Grass,
    Dirt,
    Stone,
    Water,
    Marble,
    Sand,
    Snow,
    Ice,
    Wood,
    Leaves,
    Clay,
    Iron,
    Gold,
    Coal,
    Copper,
    Tin,
    Silver,
    Platinum,
    Lava,
    Adamantine,
]

BLOCK_ID = {}
BLOCK_NAME = {AIR: 'Air', UNSET: 'Unset'}
for i, b in enumerate(BLOCKS):
    BLOCK_ID[b.name] = i + 1
    BLOCK_NAME[i + 1] = b.name

# id -> (top, side, bottom); row 0 (air) is never drawn.
BLOCK_TEXTURES = numpy.zeros((len(BLOCKS) + 1, 3), dtype='u4')
for b in BLOCKS:
    BLOCK_TEXTURES[BLOCK_ID[b.name]] = b.textures

GRASS = BLOCK_ID['Grass']
DIRT = BLOCK_ID['Dirt']
STONE = BLOCK_ID['Stone']
WATER = BLOCK_ID['Water']
MARBLE = BLOCK_ID['Marble']
SAND = BLOCK_ID['Sand']
SNOW = BLOCK_ID['Snow']
ICE = BLOCK_ID['Ice']
WOOD = BLOCK_ID['Wood']
LEAVES = BLOCK_ID['Leaves']
CLAY = BLOCK_ID['Clay']
IRON = BLOCK_ID['Iron']
GOLD = BLOCK_ID['Gold']
COAL = BLOCK_ID['Coal']
COPPER = BLOCK_ID['Copper']
TIN = BLOCK_ID['Tin']
SILVER = BLOCK_ID['Silver']
PLATINUM = BLOCK_ID['Platinum']
LAVA = BLOCK_ID['Lava']
ADAMANTINE = BLOCK_ID['Adamantine']


def is_solid(voxel):
    '''True for Solid(material) codes, works elementwise on arrays'''
    v = numpy.asarray(voxel)
    return (v != AIR) & (v != UNSET)


def voxel_name(voxel):
    return BLOCK_NAME[int(voxel)]


def material_to_texture_indices(material):
    '''(top, side, bottom) atlas layers for a material id or name'''
    if isinstance(material, str):
        material = BLOCK_ID[material]
    return tuple(int(t) for t in BLOCK_TEXTURES[material])

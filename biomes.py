import numpy

from blocks import GRASS, LEAVES, COAL, SAND, GOLD, PLATINUM, WOOD, SNOW, DIRT

# Temperate
GRASSLAND = 0
FOREST = 1
PINE_FOREST = 2
# Arid
DESERT = 3
SAVANNA = 4
SCRUB_DESERT = 5
# Polar
TAIGA = 6
TUNDRA = 7

BIOME_NAMES = [
    'Grassland',
    'Forest',
    'PineForest',
    'Desert',
    'Savanna',
    'ScrubDesert',
    'Taiga',
    'Tundra',
]

HOT = 0.4
COLD = -0.4
DRY = -0.3
WET = 0.2
HIGHLAND = 50.0

# biome -> top block of the column
BIOME_SURFACE = numpy.array([
    GRASS,     # Grassland
    LEAVES,    # Forest
    COAL,      # PineForest
    SAND,      # Desert
    GOLD,      # Savanna
    PLATINUM,  # ScrubDesert
    WOOD,      # Taiga
    SNOW,      # Tundra
], dtype='u2')

# biome -> the few blocks just under the surface
BIOME_SUBSURFACE = numpy.array([
    DIRT,
    DIRT,
    DIRT,
    SAND,
    DIRT,
    DIRT,
    SNOW,
    SNOW,
], dtype='u2')


def classify(temperature, humidity, weirdness, height_offset):
    '''
    Biome index for each column from its climate scalars. Every combination
    lands in exactly one branch.
    '''
    t = numpy.atleast_1d(numpy.asarray(temperature, dtype=float))
    h = numpy.atleast_1d(numpy.asarray(humidity, dtype=float))
    w = numpy.atleast_1d(numpy.asarray(weirdness, dtype=float))
    ho = numpy.atleast_1d(numpy.asarray(height_offset, dtype=float))
    t, h, w, ho = numpy.broadcast_arrays(t, h, w, ho)

    hot = numpy.where(h < DRY,
        numpy.where(ho > HIGHLAND, DESERT, SAVANNA),
        SCRUB_DESERT)
    cold = numpy.where(h < DRY,
        numpy.where(ho < HIGHLAND, TUNDRA, TAIGA),
        numpy.where(ho < HIGHLAND, TAIGA, PINE_FOREST))
    temperate = numpy.select(
        [h < DRY, h > WET],
        [numpy.where(ho < HIGHLAND, GRASSLAND, SCRUB_DESERT),
         numpy.where(w > 0.0, PINE_FOREST, FOREST)],
        default=numpy.where(w > 0.0, FOREST, GRASSLAND))
    biome = numpy.select([t > HOT, t < COLD], [hot, cold], default=temperate)
    return biome.astype(numpy.int8)


def biome_at(temperature, humidity, weirdness, height_offset):
    return int(classify(temperature, humidity, weirdness, height_offset)[0])


def surface_material(biome):
    return BIOME_SURFACE[biome]


def subsurface_material(biome):
    return BIOME_SUBSURFACE[biome]

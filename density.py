import numpy

from config import DENSITY_SCALE, SEA_LEVEL_Y, ICE_LEVEL_Y, WORLD_FLOOR_Y, WORLD_CEILING_Y
from blocks import AIR, STONE, WATER, ICE, LAVA, VOXEL_DTYPE
from biomes import BIOME_SURFACE, BIOME_SUBSURFACE, TUNDRA

SURFACE_PROBE = 1.0
SUBSURFACE_PROBE = 5.0


def final_density(base_density, y, height_offset, squash_factor):
    '''base noise minus the column's height gradient; solid where > 0'''
    return base_density - (y - height_offset) * squash_factor


def liquid_fill(y, biome):
    '''water below sea level; tundra seas freeze on the top layer'''
    y = numpy.asarray(y)
    biome = numpy.asarray(biome)
    return numpy.where((biome == TUNDRA) & (y == ICE_LEVEL_Y), ICE, WATER).astype(VOXEL_DTYPE)


def resolve_terrain(base_density, y, height_offset, squash_factor, biome):
    """Voxel codes from the density field before caves are carved.

    A solid voxel whose density 1 above is empty is the biome surface; if the
    density 5 above is empty it is the subsurface layer; otherwise stone.
    Both probes reuse the voxel's own base density.
    """
    y = numpy.asarray(y, dtype=numpy.float64)
    biome = numpy.asarray(biome, dtype=numpy.int64)
    solid = final_density(base_density, y, height_offset, squash_factor) > 0.0
    open_above = final_density(base_density, y + SURFACE_PROBE, height_offset, squash_factor) <= 0.0
    open_near = final_density(base_density, y + SUBSURFACE_PROBE, height_offset, squash_factor) <= 0.0

    ground = numpy.where(open_above, BIOME_SURFACE[biome],
        numpy.where(open_near, BIOME_SUBSURFACE[biome], STONE))
    empty = numpy.where(y < SEA_LEVEL_Y, liquid_fill(y, biome), AIR)
    return numpy.where(solid, ground, empty).astype(VOXEL_DTYPE)


def apply_bounds(voxels, y):
    '''lava floor below the world, nothing above it'''
    y = numpy.asarray(y)
    voxels = numpy.where(y < WORLD_FLOOR_Y, LAVA, voxels)
    voxels = numpy.where(y > WORLD_CEILING_Y, AIR, voxels)
    return voxels.astype(VOXEL_DTYPE)


class DensityField(object):
    def __init__(self, noise):
        self.noise = noise

    def base_density(self, x, y, z):
        Z = numpy.stack([numpy.asarray(x, dtype=numpy.float64),
                         numpy.asarray(y, dtype=numpy.float64),
                         numpy.asarray(z, dtype=numpy.float64)], axis=-1)
        return self.noise(Z * DENSITY_SCALE)

    def density(self, x, y, z, height_offset, squash_factor):
        return final_density(self.base_density(x, y, z), numpy.asarray(y, dtype=numpy.float64),
            height_offset, squash_factor)

    def terrain(self, x, y, z, height_offset, squash_factor, biome):
        base = self.base_density(x, y, z)
        return resolve_terrain(base, y, height_offset, squash_factor, biome)

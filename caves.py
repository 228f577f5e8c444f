import numpy

from config import (CAVE_SCALE, SPAGHETTI_SCALE, SEA_LEVEL_Y,
    CHEESE_THRESHOLD, MEATBALL_THRESHOLD, SPAGHETTI_THRESHOLD)
from blocks import (AIR, UNSET, WATER, ICE, SAND, SNOW, DIRT, VOXEL_DTYPE,
    COPPER, ADAMANTINE, IRON, MARBLE, COAL, WOOD, GOLD, TIN, CLAY, SILVER)

# materials kept out of caves under sea level so the sea floor holds
SHORE_BLOCKS = (SAND, SNOW, DIRT)


def _bands(value, edges, materials):
    '''first material whose edge the value is below, else air'''
    return numpy.select([value < e for e in edges], materials, default=AIR)


def ore_for_climate(temperature, humidity, weirdness):
    """Material that fills a cheese cave, picked from the column climate.

    Thresholds are strict and nested: temperature, then humidity, then
    weirdness. Climates outside every band fall through to air.
    """
    t = numpy.atleast_1d(numpy.asarray(temperature, dtype=float))
    h = numpy.atleast_1d(numpy.asarray(humidity, dtype=float))
    w = numpy.atleast_1d(numpy.asarray(weirdness, dtype=float))
    t, h, w = numpy.broadcast_arrays(t, h, w)

    cold = _bands(h, (-0.5, -0.1, 0.1, 0.5), (COPPER, ADAMANTINE, IRON, MARBLE))
    mild = numpy.select(
        [h < -0.5, h < -0.1, h < 0.1, h < 0.5],
        [_bands(w, (-0.5, -0.1, 0.1, 0.5), (COAL, WOOD, GOLD, TIN)),
         _bands(w, (-0.5, 0.5), (COPPER, IRON)),
         _bands(w, (-0.5, 0.5), (CLAY, DIRT)),
         _bands(w, (-0.5, 0.5), (SILVER, GOLD))],
        default=AIR)
    ore = numpy.select([t < -0.5, t < 0.5], [cold, mild], default=AIR)
    return ore.astype(VOXEL_DTYPE)


def carvable(voxels, y):
    '''solid voxels the carver may touch'''
    voxels = numpy.asarray(voxels)
    y = numpy.asarray(y)
    keep = (voxels == AIR) | (voxels == UNSET) | (voxels == WATER) | (voxels == ICE)
    shore = (y < SEA_LEVEL_Y) & numpy.isin(voxels, SHORE_BLOCKS)
    return ~(keep | shore)


def apply_carve(voxels, cheese, meatball, spaghetti, temperature, humidity, weirdness):
    '''
    cheese alone back-fills with ore, any meatball or spaghetti hit empties
    the voxel, no hit leaves it alone
    '''
    voxels = numpy.asarray(voxels)
    cheese = numpy.asarray(cheese, dtype=bool)
    tunnel = numpy.asarray(meatball, dtype=bool) | numpy.asarray(spaghetti, dtype=bool)
    out = numpy.where(tunnel, AIR, voxels)
    only_cheese = cheese & ~tunnel
    if only_cheese.any():
        out = numpy.where(only_cheese, ore_for_climate(temperature, humidity, weirdness), out)
    return out.astype(VOXEL_DTYPE)


class CaveCarver(object):
    def __init__(self, density_b, density_c, spaghetti_a, spaghetti_b):
        self.density_b = density_b
        self.density_c = density_c
        self.spaghetti_a = spaghetti_a
        self.spaghetti_b = spaghetti_b

    def predicates(self, x, y, z):
        """cheese, meatball and spaghetti masks for the positions."""
        Z = numpy.stack([numpy.asarray(x, dtype=numpy.float64),
                         numpy.asarray(y, dtype=numpy.float64),
                         numpy.asarray(z, dtype=numpy.float64)], axis=-1)
        cave_density = self.density_b(Z * CAVE_SCALE)
        cave_warp = self.density_c(Z * CAVE_SCALE)
        spaghetti_a = numpy.abs(self.spaghetti_a(Z * SPAGHETTI_SCALE))
        spaghetti_b = numpy.abs(self.spaghetti_b(Z * SPAGHETTI_SCALE))

        cheese = cave_density > CHEESE_THRESHOLD
        meatball = ((cave_warp + spaghetti_a < MEATBALL_THRESHOLD)
                    & (cave_warp + spaghetti_b < MEATBALL_THRESHOLD))
        spaghetti = (spaghetti_a < SPAGHETTI_THRESHOLD) & (spaghetti_b < SPAGHETTI_THRESHOLD)
        return cheese, meatball, spaghetti

    def carve(self, voxels, x, y, z, column):
        # never carves far above the terrain surface
        voxels = numpy.asarray(voxels)
        y = numpy.asarray(y)
        mask = carvable(voxels, y) & (y <= column.height_offset + 1.0)
        if not mask.any():
            return voxels.astype(VOXEL_DTYPE)
        x = numpy.asarray(x)
        z = numpy.asarray(z)
        cheese, meatball, spaghetti = self.predicates(x[mask], y[mask], z[mask])
        out = voxels.astype(VOXEL_DTYPE).copy()
        out[mask] = apply_carve(voxels[mask], cheese, meatball, spaghetti,
            column.temperature[mask], column.humidity[mask], column.weirdness[mask])
        return out

import collections
import numpy

from config import (CONTINENT_SCALE, EROSION_SCALE, PEAKS_VALLEYS_SCALE,
    TEMPERATURE_SCALE, HUMIDITY_SCALE, WEIRDNESS_SCALE)

ColumnStats = collections.namedtuple('ColumnStats',
    ['height_offset', 'squash_factor', 'temperature', 'humidity', 'weirdness'])


def _plane(xs, zs, scale):
    return numpy.stack([xs * scale, zs * scale], axis=-1)


def compute_column_stats(world, xs, zs):
    """Height and climate scalars for the (x, z) columns.

    Returns five float arrays in ColumnStats order. The peaks-and-valleys
    sample feeds both its height spline and the squash spline.
    """
    xs = numpy.asarray(xs, dtype=numpy.float64)
    zs = numpy.asarray(zs, dtype=numpy.float64)

    continent_val = world.continents(_plane(xs, zs, CONTINENT_SCALE))
    height = world.continent_spline(continent_val)

    erosion_val = world.erosion(_plane(xs, zs, EROSION_SCALE))
    height = height + world.erosion_spline(erosion_val)

    pv_val = world.peaks_valleys(_plane(xs, zs, PEAKS_VALLEYS_SCALE))
    height = height + world.pv_spline(pv_val)

    squash = world.squash_spline(pv_val)

    temperature = world.temperature(_plane(xs, zs, TEMPERATURE_SCALE))
    humidity = world.humidity(_plane(xs, zs, HUMIDITY_SCALE))
    weirdness = world.weirdness(_plane(xs, zs, WEIRDNESS_SCALE))
    return ColumnStats(height, squash, temperature, humidity, weirdness)


class ColumnCache(object):
    '''
    Per-generation-call memo of column stats keyed by (x, z). One instance
    serves a single chunk request and is never shared between threads.
    '''
    def __init__(self, world):
        self.world = world
        self.columns = {}
        self.hits = 0
        self.misses = 0

    def __len__(self):
        return len(self.columns)

    def __contains__(self, key):
        return key in self.columns

    def get(self, x, z):
        key = (int(x), int(z))
        stats = self.columns.get(key)
        if stats is not None:
            self.hits += 1
            return stats
        self.misses += 1
        arrays = compute_column_stats(self.world, [key[0]], [key[1]])
        stats = ColumnStats(*(float(a[0]) for a in arrays))
        self.columns[key] = stats
        return stats

    def lookup(self, xs, zs):
        """Stats for many columns at once as five arrays aligned with xs/zs.

        Distinct missing columns are computed in a single vectorised pass.
        Counters match a run of get() calls: the first query of a new column
        is a miss, every other query is a hit.
        """
        keys = numpy.stack([numpy.asarray(xs, dtype=numpy.int64).ravel(),
                            numpy.asarray(zs, dtype=numpy.int64).ravel()], axis=-1)
        uniq, inverse = numpy.unique(keys, axis=0, return_inverse=True)
        inverse = inverse.reshape(-1)
        uniq_keys = [tuple(k) for k in uniq.tolist()]
        missing = [k for k in uniq_keys if k not in self.columns]
        self.hits += len(keys) - len(missing)
        if missing:
            self.misses += len(missing)
            m = numpy.array(missing, dtype=numpy.int64)
            arrays = compute_column_stats(self.world, m[:, 0], m[:, 1])
            for k, row in zip(missing, zip(*(a.tolist() for a in arrays))):
                self.columns[k] = ColumnStats(*row)
        table = numpy.array([self.columns[k] for k in uniq_keys], dtype=numpy.float64)
        if table.size == 0:
            table = table.reshape(0, 5)
        per_pos = table[inverse]
        return ColumnStats(*(per_pos[:, i] for i in range(5)))

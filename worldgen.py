'''
worldgen.py -- world generation settings, the shared noise/spline owner and per-chunk voxel generators
'''

# standard library imports
import collections
import time
import numpy

# local imports
import config
import logutil
import lod as lodutil
import biomes
from noise import NoiseParams, FractalNoise
from spline import SplineRemap
from column_cache import ColumnCache
from density import DensityField, apply_bounds
from caves import CaveCarver
from blocks import AIR, UNSET, LAVA, VOXEL_DTYPE, TEXTURE_PATH, TEXTURE_LAYERS, material_to_texture_indices

NOISE_CHANNELS = ('continents', 'erosion', 'peaks_valleys', 'temperature', 'humidity', 'weirdness')
RAW_SEEDS = ('density_a', 'density_b', 'density_c', 'spaghetti_a', 'spaghetti_b')

_WorldGenConfig = collections.namedtuple('WorldGenConfig', NOISE_CHANNELS + RAW_SEEDS)


class WorldGenConfig(_WorldGenConfig):
    '''
    Immutable generation settings: NoiseParams for the six column channels
    and raw seeds for the five single-octave 3D fields. Not validated.
    '''
    __slots__ = ()

    @classmethod
    def from_dict(cls, d):
        kw = {}
        for name in NOISE_CHANNELS:
            p = d[name]
            kw[name] = p if isinstance(p, NoiseParams) else NoiseParams(**p)
        for name in RAW_SEEDS:
            kw[name] = int(d[name])
        return cls(**kw)

    @classmethod
    def default(cls):
        d = dict(config.WORLDGEN_NOISE)
        d.update(config.WORLDGEN_SEEDS)
        return cls.from_dict(d)

    def as_dict(self):
        d = {name: getattr(self, name)._asdict() for name in NOISE_CHANNELS}
        d.update({name: getattr(self, name) for name in RAW_SEEDS})
        return d


def _raw_field(seed):
    return FractalNoise(NoiseParams(seed=seed, octaves=1, frequency=1.0))


class TerrainWorld(object):
    '''
    Owns every noise field and spline of a world. Built once; generators for
    any number of chunks share it read-only from any thread.
    '''
    def __init__(self, world_config=None):
        if world_config is None:
            world_config = WorldGenConfig.default()
        self.config = world_config
        t0 = time.perf_counter()
        self.continents = FractalNoise(world_config.continents)
        self.erosion = FractalNoise(world_config.erosion)
        self.peaks_valleys = FractalNoise(world_config.peaks_valleys)
        self.temperature = FractalNoise(world_config.temperature)
        self.humidity = FractalNoise(world_config.humidity)
        self.weirdness = FractalNoise(world_config.weirdness)
        self.continent_spline = SplineRemap(config.CONTINENT_SPLINE)
        self.erosion_spline = SplineRemap(config.EROSION_SPLINE)
        self.pv_spline = SplineRemap(config.PEAKS_VALLEYS_SPLINE)
        self.squash_spline = SplineRemap(config.SQUASH_SPLINE)
        self.density = DensityField(_raw_field(world_config.density_a))
        self.caves = CaveCarver(
            _raw_field(world_config.density_b),
            _raw_field(world_config.density_c),
            _raw_field(world_config.spaghetti_a),
            _raw_field(world_config.spaghetti_b),
        )
        logutil.log("WORLDGEN", f"world ready in {(time.perf_counter() - t0) * 1000.0:.1f}ms "
                    f"continents seed {world_config.continents.seed}")

    # engine-facing settings

    def spawning_distance(self):
        return getattr(config, 'SPAWNING_DISTANCE', 64)

    def min_despawn_distance(self):
        return getattr(config, 'MIN_DESPAWN_DISTANCE', 1)

    def voxel_texture(self):
        return TEXTURE_PATH, TEXTURE_LAYERS

    def texture_mapper(self):
        return material_to_texture_indices

    def chunk_data_shape(self, lod):
        return lodutil.chunk_data_shape(lod)

    def chunk_meshing_shape(self, lod):
        return lodutil.chunk_meshing_shape(lod)

    def lod_for(self, chunk_coord, camera_position):
        return lodutil.lod_for(chunk_coord, camera_position)

    def generator(self, chunk_coord, lod):
        '''lookup delegate: a fresh generator (and column cache) per request'''
        return VoxelGenerator(self, chunk_coord, lod)

    request = generator


class VoxelGenerator(object):
    '''
    Samples voxels for one (chunk, lod) request. Keeps a private column cache,
    so an instance must stay on the thread that uses it.
    '''
    def __init__(self, world, chunk_coord, lod):
        self.world = world
        self.chunk_coord = tuple(int(c) for c in chunk_coord)
        self.lod = max(int(lod), 1)
        self.cache = ColumnCache(world)
        self.skirt = lodutil.skirt_enabled(self.lod)

    def sample(self, pos):
        '''voxel code at one absolute position'''
        return int(self.sample_many(numpy.array([pos], dtype=numpy.int64))[0])

    __call__ = sample

    def sample_many(self, positions):
        """Voxel codes for an (M, 3) array of absolute positions.

        Runs column stats, biome, density and caves in that order, then the
        world bounds and the skirt.
        """
        positions = numpy.asarray(positions, dtype=numpy.int64).reshape(-1, 3)
        out = numpy.full(len(positions), AIR, dtype=VOXEL_DTYPE)
        x, y, z = positions[:, 0], positions[:, 1], positions[:, 2]

        # only the band between the floor and the ceiling needs noise
        live = (y >= config.WORLD_FLOOR_Y) & (y <= config.WORLD_CEILING_Y)
        if self.skirt:
            skirt = lodutil.skirt_mask(self.chunk_coord, positions)
            live &= ~skirt
        if live.any():
            lx, ly, lz = x[live], y[live], z[live]
            column = self.cache.lookup(lx, lz)
            biome = biomes.classify(column.temperature, column.humidity,
                column.weirdness, column.height_offset)
            voxels = self.world.density.terrain(lx, ly, lz,
                column.height_offset, column.squash_factor, biome)
            out[live] = self.world.caves.carve(voxels, lx, ly, lz, column)

        out = apply_bounds(out, y)
        if self.skirt:
            out[skirt] = UNSET
        return out

    def generate(self):
        '''dense voxel buffer over the chunk's padded sample grid, indexed [x, y, z]'''
        t0 = time.perf_counter()
        shape = lodutil.chunk_data_shape(self.lod)
        positions = lodutil.sample_positions(self.chunk_coord, self.lod)
        lo = positions[:, 1].min()
        hi = positions[:, 1].max()
        if hi < config.WORLD_FLOOR_Y and not self.skirt:
            blocks = numpy.full(shape, LAVA, dtype=VOXEL_DTYPE)
        elif lo > config.WORLD_CEILING_Y and not self.skirt:
            blocks = numpy.full(shape, AIR, dtype=VOXEL_DTYPE)
        else:
            blocks = self.sample_many(positions).reshape(shape)
        logutil.log("WORLDGEN", f"chunk {self.chunk_coord} lod {self.lod}: "
                    f"{(time.perf_counter() - t0) * 1000.0:.1f}ms, {len(self.cache)} columns",
                    level="DEBUG")
        return blocks

import os
import sys
import concurrent.futures

import numpy as np
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import config
from noise import NoiseParams
from lod import sample_positions, chunk_data_shape
from worldgen import TerrainWorld, WorldGenConfig, VoxelGenerator
from blocks import AIR, UNSET, LAVA, GRASS, ADAMANTINE, is_solid

WORLD = TerrainWorld()


def _random_positions(n, seed=0):
    rng = np.random.RandomState(seed)
    xs = rng.randint(-3000, 3000, n)
    ys = rng.randint(-60, 120, n)
    zs = rng.randint(-3000, 3000, n)
    return np.stack([xs, ys, zs], axis=-1)


def test_default_config():
    cfg = WorldGenConfig.default()
    assert cfg.continents == NoiseParams(**config.WORLDGEN_NOISE['continents'])
    assert cfg.density_a == config.WORLDGEN_SEEDS['density_a']


def test_config_round_trip():
    cfg = WorldGenConfig.default()
    assert WorldGenConfig.from_dict(cfg.as_dict()) == cfg


def test_config_is_immutable():
    cfg = WorldGenConfig.default()
    with pytest.raises(AttributeError):
        cfg.density_a = 1


def test_engine_settings():
    assert WORLD.spawning_distance() == config.SPAWNING_DISTANCE
    assert WORLD.min_despawn_distance() == config.MIN_DESPAWN_DISTANCE
    path, layers = WORLD.voxel_texture()
    assert path.endswith('.png')
    assert layers == 21
    mapper = WORLD.texture_mapper()
    assert mapper(GRASS) == (0, 1, 2)
    assert mapper(ADAMANTINE) == (20, 20, 20)
    assert WORLD.chunk_data_shape(1) == (34, 34, 34)
    assert WORLD.chunk_meshing_shape(2) == (18, 18, 18)
    assert WORLD.lod_for((0, 0, 0), (0.0, 0.0, 0.0)) == 1


def test_sample_matches_sample_many():
    pos = _random_positions(48)
    gen = WORLD.generator((0, 0, 0), 1)
    batch = gen.sample_many(pos)
    for i, p in enumerate(pos):
        assert gen.sample(tuple(p)) == batch[i]
        # a fresh generator with an empty cache agrees too
        assert VoxelGenerator(WORLD, (5, 5, 5), 1)(tuple(p)) == batch[i]


def test_same_config_same_voxels():
    pos = _random_positions(2000, seed=4)
    a = TerrainWorld(WorldGenConfig.default()).generator((0, 0, 0), 1).sample_many(pos)
    b = WORLD.generator((3, 0, -2), 1).sample_many(pos)
    assert np.array_equal(a, b)


def test_different_seed_differs():
    d = WorldGenConfig.default().as_dict()
    d['continents'] = dict(d['continents'], seed=999)
    d['density_a'] = 4242
    other = TerrainWorld(WorldGenConfig.from_dict(d))
    pos = _random_positions(2000, seed=4)
    assert not np.array_equal(other.generator((0, 0, 0), 1).sample_many(pos),
                              WORLD.generator((0, 0, 0), 1).sample_many(pos))


def test_terrain_has_ground_and_sky():
    pos = _random_positions(3000, seed=6)
    v = WORLD.generator((0, 0, 0), 1).sample_many(pos)
    assert is_solid(v).any()
    assert (v == AIR).any()
    assert not (v == UNSET).any()


def test_threads_agree():
    pos = _random_positions(500, seed=7)
    expected = WORLD.generator((0, 0, 0), 1).sample_many(pos)
    with concurrent.futures.ThreadPoolExecutor(max_workers=4) as ex:
        results = list(ex.map(lambda c: WORLD.generator(c, 1).sample_many(pos),
                              [(i, 0, 0) for i in range(8)]))
    for r in results:
        assert np.array_equal(r, expected)


def test_neighbour_chunks_agree_on_padding():
    a = WORLD.generator((0, 0, 0), 1).generate()
    b = WORLD.generator((1, 0, 0), 1).generate()
    assert a.shape == (34, 34, 34)
    assert a.dtype == np.uint16
    # a's last interior plane and its padding are b's padding and first plane
    assert np.array_equal(a[32], b[0])
    assert np.array_equal(a[33], b[1])


def test_generate_matches_samples_at_any_lod():
    chunk = (0, -1, 1)
    buf = WORLD.generator(chunk, 4).generate()
    pos = sample_positions(chunk, 4)
    direct = VoxelGenerator(WORLD, chunk, 1).sample_many(pos)
    assert np.array_equal(buf, direct.reshape(chunk_data_shape(4)))


def test_generate_fills_cache_once_per_column():
    gen = WORLD.generator((0, 0, 0), 8)
    gen.generate()
    assert len(gen.cache) == 6 * 6
    assert gen.cache.misses == 6 * 6
    assert gen.cache.hits == 6 ** 3 - 6 * 6
    hits = gen.cache.hits
    gen.sample((0, 3, 0))
    assert gen.cache.misses == 6 * 6
    assert gen.cache.hits == hits + 1


def test_skirt_at_lod_2():
    gen = WORLD.generator((0, 0, 0), 2)
    buf = gen.generate()
    assert buf.shape == (18, 18, 18)
    shell = np.ones(buf.shape, dtype=bool)
    shell[1:-1, 1:-1, 1:-1] = False
    assert np.all(buf[shell] == UNSET)
    assert not np.any(buf[~shell] == UNSET)
    # interior voxels match the full-resolution world
    pos = sample_positions((0, 0, 0), 2).reshape(18, 18, 18, 3)[1:-1, 1:-1, 1:-1].reshape(-1, 3)
    full = VoxelGenerator(WORLD, (0, 0, 0), 1).sample_many(pos)
    assert np.array_equal(buf[1:-1, 1:-1, 1:-1].ravel(), full)


def test_skirt_can_be_turned_off(monkeypatch):
    monkeypatch.setattr(config, 'SKIRT_AT_LOD_2', False)
    buf = WORLD.generator((0, 0, 0), 2).generate()
    assert not np.any(buf == UNSET)


def test_world_bounds():
    gen = WORLD.generator((0, 0, 0), 1)
    assert gen.sample((5, -256, 5)) == LAVA
    assert gen.sample((5, -1000, 5)) == LAVA
    assert gen.sample((5, 256, 5)) == AIR
    assert gen.sample((5, 5000, 5)) == AIR


def test_chunks_beyond_bounds():
    below = WORLD.generator((0, -9, 0), 4).generate()
    assert np.all(below == LAVA)
    edge = WORLD.generator((0, -8, 0), 1).generate()
    assert np.all(edge[:, :2, :] == LAVA)
    top = WORLD.generator((0, 8, 0), 1).generate()
    assert np.all(top[:, 1:, :] == AIR)
    above = WORLD.generator((0, 20, 0), 1).generate()
    assert np.all(above == AIR)

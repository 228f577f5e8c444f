'''
preview.py -- renders generated terrain to a PNG for eyeballing seeds and settings

    python preview.py biome out.png --x 0 --z 0 --size 512
    python preview.py height out.png --size 256 --step 4
    python preview.py slice out.png --z 100 --size 256 --ymin -64 --ymax 128
'''

# standard library imports
import argparse
import json
import logging
import sys
import numpy
from PIL import Image

# local imports
import logutil
import biomes
from blocks import BLOCKS, BLOCK_ID, AIR, UNSET
from column_cache import ColumnCache
from worldgen import TerrainWorld, WorldGenConfig, VoxelGenerator

BIOME_COLORS = numpy.array([
    [110, 190, 80],   # Grassland
    [40, 120, 50],    # Forest
    [30, 80, 60],     # PineForest
    [230, 210, 140],  # Desert
    [190, 170, 80],   # Savanna
    [170, 150, 110],  # ScrubDesert
    [120, 150, 140],  # Taiga
    [235, 240, 245],  # Tundra
], dtype='u1')

MATERIAL_COLORS = {
    'Grass': (90, 170, 60), 'Dirt': (120, 85, 55), 'Stone': (125, 125, 125),
    'Water': (40, 90, 128), 'Marble': (230, 230, 225), 'Sand': (220, 200, 140),
    'Snow': (245, 250, 255), 'Ice': (170, 210, 240), 'Wood': (110, 80, 45),
    'Leaves': (50, 130, 40), 'Clay': (160, 150, 140), 'Iron': (200, 170, 150),
    'Gold': (230, 190, 40), 'Coal': (40, 40, 40), 'Copper': (190, 110, 60),
    'Tin': (180, 185, 190), 'Silver': (200, 200, 210), 'Platinum': (215, 220, 225),
    'Lava': (230, 80, 20), 'Adamantine': (90, 40, 120),
}


def _palette():
    pal = numpy.zeros((len(BLOCKS) + 1, 3), dtype='u1')
    pal[AIR] = (160, 200, 255)
    for b in BLOCKS:
        pal[BLOCK_ID[b.name]] = MATERIAL_COLORS[b.name]
    return pal


def _columns(world, x0, z0, size, step):
    xs, zs = numpy.meshgrid(x0 + numpy.arange(size) * step, z0 + numpy.arange(size) * step, indexing='ij')
    return ColumnCache(world).lookup(xs.ravel(), zs.ravel())


def render_biomes(world, x0, z0, size, step=1):
    column = _columns(world, x0, z0, size, step)
    b = biomes.classify(column.temperature, column.humidity, column.weirdness, column.height_offset)
    return numpy.ascontiguousarray(BIOME_COLORS[b].reshape(size, size, 3).swapaxes(0, 1))


def render_height(world, x0, z0, size, step=1):
    column = _columns(world, x0, z0, size, step)
    h = column.height_offset.reshape(size, size)
    span = max(h.max() - h.min(), 1e-6)
    gray = numpy.array((h - h.min()) / span * 255, dtype='u1')
    return numpy.ascontiguousarray(gray.swapaxes(0, 1))


def render_slice(world, x0, z, size, ymin, ymax):
    '''vertical x/y cut through the finished voxels (caves included)'''
    xs = x0 + numpy.arange(size)
    ys = numpy.arange(ymin, ymax)
    gx, gy = numpy.meshgrid(xs, ys, indexing='ij')
    positions = numpy.stack([gx.ravel(), gy.ravel(), numpy.full(gx.size, z)], axis=-1)
    voxels = VoxelGenerator(world, (0, 0, 0), 1).sample_many(positions)
    voxels = numpy.where(voxels == UNSET, AIR, voxels)
    img = _palette()[voxels].reshape(size, len(ys), 3)
    return numpy.ascontiguousarray(img.swapaxes(0, 1)[::-1])


def main(argv=None):
    parser = argparse.ArgumentParser(description='Render generated terrain to a PNG.')
    parser.add_argument('mode', choices=('biome', 'height', 'slice'))
    parser.add_argument('output')
    parser.add_argument('--x', type=int, default=0)
    parser.add_argument('--z', type=int, default=0)
    parser.add_argument('--size', type=int, default=256)
    parser.add_argument('--step', type=int, default=1, help='world units per pixel (biome/height)')
    parser.add_argument('--ymin', type=int, default=-64)
    parser.add_argument('--ymax', type=int, default=128)
    parser.add_argument('--config', help='JSON file with worldgen channels and seeds')
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    world_config = WorldGenConfig.default()
    if args.config:
        with open(args.config, 'r', encoding='utf-8') as f:
            world_config = WorldGenConfig.from_dict(json.load(f))
    world = TerrainWorld(world_config)

    if args.mode == 'biome':
        img = Image.fromarray(render_biomes(world, args.x, args.z, args.size, args.step))
    elif args.mode == 'height':
        img = Image.fromarray(render_height(world, args.x, args.z, args.size, args.step))
    else:
        img = Image.fromarray(render_slice(world, args.x, args.z, args.size, args.ymin, args.ymax))
    img.save(args.output)
    logutil.log("PREVIEW", f"wrote {args.mode} map {img.size[0]}x{img.size[1]} to {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())

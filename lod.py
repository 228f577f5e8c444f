import math
import numpy

import config
from config import CHUNK_SIZE, LOD_BREAKPOINTS, FAR_LOD

LOD_LEVELS = tuple(lod for _, lod in LOD_BREAKPOINTS) + (FAR_LOD,)


def lod_for_distance(distance):
    '''stride for a chunk at this distance (chunk units) from the camera chunk'''
    for limit, lod in LOD_BREAKPOINTS:
        if distance < limit:
            return lod
    return FAR_LOD


def camera_chunk(camera_position):
    return tuple(math.floor(c / CHUNK_SIZE) for c in camera_position)


def lod_for(chunk_coord, camera_position):
    cx, cy, cz = camera_chunk(camera_position)
    x, y, z = chunk_coord
    distance = math.sqrt((x - cx) ** 2 + (y - cy) ** 2 + (z - cz) ** 2)
    return lod_for_distance(distance)


def samples_per_side(lod):
    return CHUNK_SIZE // max(lod, 1)


def chunk_data_shape(lod):
    '''padded cube: one extra voxel on each side for seam-free meshing'''
    n = samples_per_side(lod) + 2
    return (n, n, n)


chunk_meshing_shape = chunk_data_shape


def chunk_bounds(chunk_coord):
    '''min (inclusive) and max (exclusive) voxel corner of the chunk'''
    chunk_min = numpy.array(chunk_coord, dtype=numpy.int64) * CHUNK_SIZE
    return chunk_min, chunk_min + CHUNK_SIZE


def sample_positions(chunk_coord, lod):
    """World positions for every cell of the chunk's padded sample grid.

    Cell index i on an axis maps to chunk_min + (i - 1) * lod, so index 0 and
    the last index land outside the chunk. Rows are in (x, y, z) order.
    """
    lod = max(lod, 1)
    shape = chunk_data_shape(lod)
    chunk_min, _ = chunk_bounds(chunk_coord)
    idx = numpy.indices(shape).reshape(3, -1).T
    return chunk_min + (idx - 1) * lod


def skirt_enabled(lod):
    return bool(getattr(config, 'SKIRT_AT_LOD_2', True)) and lod == 2


def skirt_mask(chunk_coord, positions):
    '''positions outside the chunk's own bounds'''
    chunk_min, chunk_max = chunk_bounds(chunk_coord)
    positions = numpy.asarray(positions)
    return ((positions < chunk_min) | (positions >= chunk_max)).any(axis=-1)

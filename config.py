import math

# Size of chunks used for generation, streaming and meshing (x, y and z).
CHUNK_SIZE = 32

# Streaming distances in chunk units.
SPAWNING_DISTANCE = 64
MIN_DESPAWN_DISTANCE = 1

# Chunks kept loaded around the camera by the chunk loader (chunk units), and
# the most new generation tasks one update may dispatch.
LOAD_RADIUS = 6
MAX_SPAWN_PER_UPDATE = 64

# LOD policy: (distance below which the stride applies, stride). Distances are
# measured in chunk units between the chunk and the chunk holding the camera.
LOD_BREAKPOINTS = (
    (16.0, 1),
    (24.0, 2),
    (32.0, 4),
    (40.0, 8),
    (48.0, 16),
)
FAR_LOD = 32

# Force padding voxels outside the chunk bounds to Unset, only at stride 2.
SKIRT_AT_LOD_2 = True

# World bounds: lava floor below, nothing above.
WORLD_FLOOR_Y = -255
WORLD_CEILING_Y = 255

# Empty space below this y is flooded.
SEA_LEVEL_Y = -10
# Tundra seas freeze on this single layer.
ICE_LEVEL_Y = -11

# Atlas path and layer count consumed by the mesher.
VOXEL_TEXTURE = ('textures/voxel_atlas.png', 21)

# Defaults used by the fractal sampler when a channel leaves them out.
DEFAULT_LACUNARITY = math.pi * 2.0 / 3.0
DEFAULT_PERSISTENCE = 0.25

# Terrain generation channels: seed, octaves, frequency, lacunarity, persistence.
WORLDGEN_NOISE = {
    'continents': {'seed': 1234, 'octaves': 5, 'frequency': 1.1, 'lacunarity': 2.8, 'persistence': 0.4},
    'erosion': {'seed': 5678, 'octaves': 3, 'frequency': 0.5, 'lacunarity': 2.0, 'persistence': 0.3},
    'peaks_valleys': {'seed': 7890, 'octaves': 4, 'frequency': 0.3, 'lacunarity': 2.0, 'persistence': 0.5},
    'temperature': {'seed': 2233, 'octaves': 1, 'frequency': 0.2},
    'humidity': {'seed': 4455, 'octaves': 2, 'frequency': 0.3},
    'weirdness': {'seed': 6677, 'octaves': 3, 'frequency': 0.8},
}

# Raw seeds for the single-octave 3D fields.
WORLDGEN_SEEDS = {
    'density_a': 9876,
    'density_b': 5432,
    'density_c': 1111,
    'spaghetti_a': 31337,
    'spaghetti_b': 73313,
}

# Column sampling scales (world units -> noise units).
CONTINENT_SCALE = 0.00025
EROSION_SCALE = 0.0025
PEAKS_VALLEYS_SCALE = 0.01
TEMPERATURE_SCALE = 0.0006667
HUMIDITY_SCALE = 0.0006667
WEIRDNESS_SCALE = 0.00033

# Voxel sampling scales.
DENSITY_SCALE = 0.01
CAVE_SCALE = 0.030303030303
SPAGHETTI_SCALE = 0.0025

# Cave carving thresholds.
CHEESE_THRESHOLD = 0.9813
MEATBALL_THRESHOLD = -0.494321
SPAGHETTI_THRESHOLD = 0.007654321

# Spline knots (noise value, height contribution).
CONTINENT_SPLINE = (
    (-1.0, -128.0),
    (-0.96, -96.0),
    (-0.91, -80.0),
    (-0.8, -64.0),
    (-0.7, -60.0),
    (-0.5, -50.0),
    (-0.4, -40.0),
    (-0.3, -36.0),
    (-0.2, -30.0),
    (-0.1, -26.0),
    (0.0, -20.0),
    (0.1, -16.0),
    (0.2, 10.0),
    (0.7, 10.0),
    # high plateaus
    (0.8, 64.0),
    (0.9, 80.0),
    (1.0, 96.0),
)
EROSION_SPLINE = (
    (-1.0, 48.0),
    (0.0, 36.0),
    (0.667, 6.0),
    (1.0, -48.01),
)
PEAKS_VALLEYS_SPLINE = (
    (-1.0, 0.0),
    (0.0, 10.0),
    (1.0, 20.0),
)
# Peaks and valleys noise -> how quickly density falls off above the surface.
SQUASH_SPLINE = (
    (-1.0, 1.0),
    (0.0, 0.4),
    (1.0, 0.03),
)

# Generation worker threads used by the chunk loader.
GENERATION_WORKERS = 4

# Enable ANSI colors in logs.
LOG_COLOR = True

# Log per-chunk generation timings (DEBUG).
LOG_GENERATION = True

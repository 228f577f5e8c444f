'''
chunk_loader.py -- streams terrain around the camera: dispatches one generation task per (chunk, lod)
to a worker thread pool and hands finished voxel buffers to the mesher
'''

# standard library imports
import collections
import concurrent.futures
import itertools
import math
import threading
import time

# local imports
import config
import logutil
from blocks import material_to_texture_indices

ChunkBuffer = collections.namedtuple('ChunkBuffer', ['chunk', 'lod', 'voxels', 'texture_mapper'])


def loader_log(msg, level="INFO"):
    logutil.log("LOADER", msg, level=level)


def _generate(world, chunk, lod):
    return world.generator(chunk, lod).generate()


def chunks_in_range(center, radius):
    '''chunk coordinates within radius (chunk units) of center, nearest first'''
    cx, cy, cz = center
    r = int(math.ceil(radius))
    found = []
    for dx, dy, dz in itertools.product(range(-r, r + 1), repeat=3):
        d2 = dx * dx + dy * dy + dz * dz
        if d2 <= radius * radius:
            found.append((d2, (cx + dx, cy + dy, cz + dz)))
    found.sort()
    return [c for _, c in found]


class ChunkLoader(object):
    '''
    Keeps the set of wanted chunks and their LODs, and generates missing ones
    on a thread pool. The world is shared read-only by every worker; each task
    builds its own generator.

    There is no cancellation: a task for a chunk that drops out of the area of
    interest runs to completion and its buffer is thrown away.
    '''
    def __init__(self, world, workers=None, mesher=None):
        if workers is None:
            workers = getattr(config, 'GENERATION_WORKERS', 4)
        self.world = world
        self.mesher = mesher
        self.executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix='worldgen')
        self.lock = threading.Lock()
        self.wanted = {}    # chunk -> lod
        self.inflight = {}  # (chunk, lod) -> future
        self.loaded = {}    # chunk -> ChunkBuffer
        self.submitted = {}  # (chunk, lod) -> dispatch time
        self.dropped = 0
        loader_log(f'loader started with {workers} workers')

    def request(self, chunk, lod):
        '''dispatch generation of a chunk at a stride unless already running'''
        chunk = tuple(int(c) for c in chunk)
        key = (chunk, lod)
        with self.lock:
            self.wanted[chunk] = lod
            future = self.inflight.get(key)
            if future is not None:
                return future
            future = self.executor.submit(_generate, self.world, chunk, lod)
            self.submitted[key] = time.perf_counter()
            self.inflight[key] = future
        loader_log(f'requested chunk {chunk} lod {lod}', level="DEBUG")
        return future

    def set_area_of_interest(self, wanted):
        '''replace the wanted set ({chunk: lod}); loaded chunks outside it are released'''
        with self.lock:
            self.wanted = {tuple(c): l for c, l in wanted.items()}
            for chunk in list(self.loaded):
                if self.wanted.get(chunk) != self.loaded[chunk].lod:
                    del self.loaded[chunk]

    def update(self, camera_position, radius=None, max_requests=None):
        """Recompute the wanted chunks around the camera and request the missing
        ones, nearest first and at most max_requests per call. Chunks left out
        are picked up by later updates.

        Returns the number of new requests.
        """
        if radius is None:
            radius = getattr(config, 'LOAD_RADIUS', 6)
        if max_requests is None:
            max_requests = getattr(config, 'MAX_SPAWN_PER_UPDATE', 64)
        center = tuple(math.floor(c / config.CHUNK_SIZE) for c in camera_position)
        wanted = {}
        for chunk in chunks_in_range(center, radius):
            wanted[chunk] = self.world.lod_for(chunk, camera_position)
        self.set_area_of_interest(wanted)
        sent = 0
        for chunk, lod in wanted.items():
            if sent >= max_requests:
                break
            with self.lock:
                have = self.loaded.get(chunk)
                busy = (chunk, lod) in self.inflight
            if busy or (have is not None and have.lod == lod):
                continue
            self.request(chunk, lod)
            sent += 1
        if sent:
            loader_log(f'camera chunk {center}: {sent} requests, {len(self.inflight)} in flight')
        return sent

    def poll(self):
        """Collect finished tasks. Results for chunks no longer wanted at that
        lod are discarded; the rest are stored and passed to the mesher.

        Every finished task is handled before a failure is re-raised, so
        good buffers from the same batch still reach `loaded` and the mesher.
        Failures are logged; the first one is raised.
        """
        with self.lock:
            done = [(k, f) for k, f in self.inflight.items() if f.done()]
            for k, _ in done:
                del self.inflight[k]
            started = {k: self.submitted.pop(k, None) for k, _ in done}
        ready = []
        errors = []
        for (chunk, lod), future in done:
            exc = future.exception()
            if exc is not None:
                loader_log(f'chunk {chunk} lod {lod} failed: {exc!r}', level="ERROR")
                errors.append(exc)
                continue
            with self.lock:
                stale = self.wanted.get(chunk) != lod
                if stale:
                    self.dropped += 1
                else:
                    buf = ChunkBuffer(chunk, lod, future.result(), material_to_texture_indices)
                    self.loaded[chunk] = buf
            if stale:
                loader_log(f'dropped stale chunk {chunk} lod {lod}', level="DEBUG")
                continue
            t0 = started[(chunk, lod)]
            if t0 is not None:
                ms = (time.perf_counter() - t0) * 1000.0
                loader_log(f"chunk {chunk} lod {lod} ready in {ms:.1f}ms", level="DEBUG")
            ready.append(buf)
            if self.mesher is not None:
                self.mesher(buf)
        if errors:
            raise errors[0]
        return ready

    def wait(self, timeout=None):
        '''block until every in-flight task has finished, then poll'''
        with self.lock:
            futures = list(self.inflight.values())
        concurrent.futures.wait(futures, timeout=timeout)
        return self.poll()

    def shutdown(self, wait=True):
        self.executor.shutdown(wait=wait)
        loader_log('loader stopped')

#
# N-dimensional simplex noise over numpy arrays, plus a fractal (octave) sampler.
#
# Based on example code by Stefan Gustavson (stegu@itn.liu.se), with the
# rank ordering method from 2012. Gustavson placed the original in the
# public domain.
#
import collections
import itertools
import numpy

import config


p = numpy.array( [151,160,137,91,90,15,
    131,13,201,95,96,53,194,233,7,225,140,36,103,30,69,142,8,99,37,240,21,10,23,
    190, 6,148,247,120,234,75,0,26,197,62,94,252,219,203,117,35,11,32,57,177,33,
    88,237,149,56,87,174,20,125,136,171,168, 68,175,74,165,71,134,139,48,27,166,
    77,146,158,231,83,111,229,122,60,211,133,230,220,105,92,41,55,46,245,40,244,
    102,143,54, 65,25,63,161, 1,216,80,73,209,76,132,187,208, 89,18,169,200,196,
    135,130,116,188,159,86,164,100,109,198,173,186, 3,64,52,217,226,250,124,123,
    5,202,38,147,118,126,255,82,85,212,207,206,59,227,47,16,58,17,182,189,28,42,
    223,183,170,213,119,248,152, 2,44,154,163, 70,221,153,101,155,167, 43,172,9,
    129,22,39,253, 19,98,108,110,79,113,224,232,178,185, 112,104,218,246,97,228,
    251,34,242,193,238,210,144,12,191,179,162,241, 81,51,145,235,249,14,239,107,
    49,192,214, 31,181,199,106,157,184, 84,204,176,115,121,50,45,127, 4,150,254,
    138,236,205,93,222,114,67,29,24,72,243,141,128,195,78,66,215,61,156,180] )
# To remove the need for index wrapping, double the permutation table length
perm = p[numpy.arange(512) & 255]

_GRADIENTS = {}


# returns floor of floating point array by coercing to integer
def fastfloor(x):
    return numpy.array(numpy.floor(x), dtype = numpy.int64)


def dot(g, *v):
    s = 0
    for i in range(len(v)):
        s = s + g[...,i]*v[i]
    return s


def rowsum(a):
    '''sum over the last axis, one column at a time so the result for a row
    never depends on how many rows are evaluated together'''
    s = a[...,0]
    for i in range(1, a.shape[-1]):
        s = s + a[...,i]
    return s


def gradients(n):
    '''edge and corner directions of the n-cube'''
    if n not in _GRADIENTS:
        grad = ((0,-1,1),)*n
        grad = numpy.array(list(itertools.product(*grad))[1:])
        _GRADIENTS[n] = grad[numpy.abs(grad).sum(-1)>=n-1]
    return _GRADIENTS[n]


#  # N-D simplex noise, better simplex rank ordering method 2012-03-09
class SimplexNoise(object):
    def __init__(self, seed=None):
        self.seed = seed
        if seed is not None:
            # private generator: never touches numpy's global random state
            rng = numpy.random.RandomState(int(seed) & 0xFFFFFFFF)
            p0 = rng.permutation(256)
            self.perm0 = p0[numpy.arange(512) & 255]
        else:
            self.perm0 = perm

    def noise(self, Z):
        Z = numpy.asarray(Z, dtype=numpy.float64)
        # Skew the input space to determine which cell of simplices we're in
        N = Z.shape[-1] #number of dimensions
        N1 = N+1 # number of simplices
        Fn = 1.0*(N1**0.5 - 1)/N
        Gn = 1.0*(N1 - N1**0.5)/N/N1

        #skew the Z data and store in z0
        s = rowsum(Z) * Fn # Factor for skewing
        i = fastfloor(Z+s[:,numpy.newaxis])
        t = rowsum(i) * Gn # Factor for unskewing
        Z0 = i - t[:,numpy.newaxis]
        z0 = Z - Z0

        # Use magnitude ordering to determine the simplices that the point z0 is located in
        rank = numpy.zeros(Z.shape, dtype=numpy.int64)
        for l,k in itertools.combinations(range(N),2):
            rank[:,k] += z0[:,k]>=z0[:,l]
            rank[:,l] += z0[:,k]<z0[:,l]

        # ind will contain the skewed indices of the N+1 simplex corners
        b = numpy.arange(N+1)[:,numpy.newaxis,numpy.newaxis]
        ind = rank >= N - b
        # zk contains the offsets of the point from each corner
        zk = z0 - ind + 1.0 * b * Gn

        # lattice coordinates only wrap for hashing, the geometry stays unwrapped
        indi = ind + (i & 255)
        grad = gradients(N)

        gik = 0
        for x in range(N-1,-1,-1):
            gik = self.perm0[indi[:,:,x] + gik]
        gik = gik%(grad.shape[0])
        # Calculate the contribution from the simplex corners
        tk = 0.5 - rowsum(zk*zk)
        tk = numpy.where(tk > 0, tk, 0.0)
        tk = tk * tk
        nk = tk * tk * dot(grad[gik], *[zk[...,d] for d in range(N)])

        # Sum up and scale the result to cover the range [-1,1]
        total = nk[0]
        for k in range(1, N1):
            total = total + nk[k]
        return total * (2**6)


# seed, octaves, frequency, lacunarity, persistence for one noise channel
NoiseParams = collections.namedtuple(
    'NoiseParams',
    ['seed', 'octaves', 'frequency', 'lacunarity', 'persistence'],
    defaults=(1, 1.0, config.DEFAULT_LACUNARITY, config.DEFAULT_PERSISTENCE),
)


class FractalNoise(object):
    '''
    Sum of simplex octaves. Octave k is seeded with seed+k, sampled at
    frequency*lacunarity**k and weighted by persistence**k. The sum is
    normalised by the total weight and clamped to [-1,1].
    '''
    def __init__(self, params):
        self.params = params
        self.sources = [SimplexNoise(seed=(params.seed + k) & 0xFFFFFFFF)
                        for k in range(params.octaves)]

    def sample(self, coords):
        Z = numpy.asarray(coords, dtype=numpy.float64)
        single = Z.ndim == 1
        if single:
            Z = Z[numpy.newaxis, :]
        freq = self.params.frequency
        amp = 1.0
        norm = 0.0
        total = numpy.zeros(Z.shape[0])
        for source in self.sources:
            total = total + source.noise(Z * freq) * amp
            norm += amp
            amp *= self.params.persistence
            freq *= self.params.lacunarity
        if norm > 0:
            total = total / norm
        total = numpy.clip(total, -1.0, 1.0)
        if single:
            return float(total[0])
        return total

    __call__ = sample


def noisen(Z, seed=None):
    s = SimplexNoise(seed)
    return s.noise(Z)


if __name__ == '__main__':
    import time
    from PIL import Image

    t=time.time()
    arr2 = numpy.mgrid[0:8:0.1,0:8:0.1].T
    shape2 = arr2.shape
    arr2 = arr2.reshape((shape2[0]*shape2[1],2))
    n = FractalNoise(NoiseParams(seed=3332, octaves=4, frequency=1.0, lacunarity=2.0, persistence=0.5))(arr2)
    n = n.reshape(shape2[0],shape2[1])
    print('arr2 noise',time.time()-t)
    print(n.min(),n.max(),numpy.average(n))
    n = numpy.array((n - n.min()) / (n.max()-n.min())*255,dtype='u1')
    im = Image.fromarray(n)
    im.save('noise2.png')

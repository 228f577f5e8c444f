import numpy


class SplineRemap(object):
    '''
    Piecewise-linear remap through ordered (input, output) knots.

    Inputs outside the knot domain are clamped to the first/last knot, so a
    lookup never fails. An empty knot list is a caller error.
    '''
    def __init__(self, knots):
        knots = sorted((float(x), float(y)) for x, y in knots)
        self.knots = tuple(knots)
        self.xs = numpy.array([k[0] for k in knots])
        self.ys = numpy.array([k[1] for k in knots])

    def clamped_sample(self, x):
        out = numpy.interp(x, self.xs, self.ys)
        if numpy.ndim(out) == 0:
            return float(out)
        return out

    __call__ = clamped_sample

    def __len__(self):
        return len(self.knots)

    def __repr__(self):
        return f'SplineRemap({list(self.knots)!r})'

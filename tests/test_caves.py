import os
import sys

import numpy as np
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from caves import ore_for_climate, carvable, apply_carve, CaveCarver
from column_cache import ColumnStats
from blocks import (AIR, UNSET, STONE, WATER, ICE, SAND, SNOW, DIRT, GRASS,
    COPPER, ADAMANTINE, IRON, MARBLE, COAL, WOOD, GOLD, TIN, CLAY, SILVER)


class _Const(object):
    def __init__(self, value):
        self.value = value

    def __call__(self, Z):
        return np.full(len(Z), self.value)


@pytest.mark.parametrize("t,h,w,expected", [
    (-0.6, -0.6, 0.0, COPPER),
    (-0.6, -0.5, 0.0, ADAMANTINE),
    (-0.6, -0.1, 0.0, IRON),
    (-0.6, 0.1, 0.0, MARBLE),
    (-0.6, 0.5, 0.0, AIR),
    (0.0, -0.6, -0.6, COAL),
    (0.0, -0.6, -0.5, WOOD),
    (0.0, -0.6, 0.0, GOLD),
    (0.0, -0.6, 0.3, TIN),
    (0.0, -0.6, 0.5, AIR),
    (0.0, -0.3, -0.6, COPPER),
    (0.0, -0.3, 0.0, IRON),
    (0.0, -0.3, 0.6, AIR),
    (0.0, 0.0, -0.6, CLAY),
    (0.0, 0.0, 0.0, DIRT),
    (0.0, 0.3, -0.6, SILVER),
    (0.0, 0.3, 0.0, GOLD),
    (0.0, 0.6, 0.0, AIR),
    (-0.5, -0.6, -0.6, COAL),
    (0.5, -0.6, 0.0, AIR),
    (0.9, 0.0, 0.0, AIR),
])
def test_ore_table(t, h, w, expected):
    assert int(ore_for_climate(t, h, w)[0]) == expected


@pytest.mark.parametrize("cheese,meatball,spaghetti,expected", [
    (False, False, False, STONE),
    (True, False, False, GOLD),
    (False, True, False, AIR),
    (False, False, True, AIR),
    (True, True, False, AIR),
    (True, False, True, AIR),
    (False, True, True, AIR),
    (True, True, True, AIR),
])
def test_carve_combinations(cheese, meatball, spaghetti, expected):
    # t=0, h=0.3, w=0 is a gold climate
    out = apply_carve(np.array([STONE]), np.array([cheese]), np.array([meatball]),
        np.array([spaghetti]), np.array([0.0]), np.array([0.3]), np.array([0.0]))
    assert int(out[0]) == expected


def test_carvable():
    v = np.array([AIR, UNSET, WATER, ICE, STONE, SAND, SAND, SNOW, DIRT, DIRT, GRASS])
    y = np.array([0, 0, -20, -11, 0, -11, -10, -50, -11, 0, -20])
    assert list(carvable(v, y)) == [
        False, False, False, False, True, False, True, False, False, True, True]


def _column(n, ho=100.0, t=0.0, h=0.3, w=0.0):
    return ColumnStats(np.full(n, ho), np.full(n, 1.0), np.full(n, t),
        np.full(n, h), np.full(n, w))


def test_carver_fills_cheese_with_ore():
    carver = CaveCarver(_Const(1.0), _Const(0.0), _Const(0.5), _Const(0.5))
    v = np.array([STONE, STONE, WATER])
    x = np.zeros(3)
    y = np.array([0, 50, -20])
    out = carver.carve(v, x, y, x, _column(3))
    assert list(out) == [GOLD, GOLD, WATER]


def test_carver_tunnels():
    # both spaghetti fields at zero: spaghetti tunnel everywhere
    carver = CaveCarver(_Const(0.0), _Const(0.0), _Const(0.0), _Const(0.0))
    out = carver.carve(np.array([STONE, DIRT]), np.zeros(2), np.array([0, 5]),
        np.zeros(2), _column(2))
    assert list(out) == [AIR, AIR]


def test_carver_stays_below_the_surface():
    carver = CaveCarver(_Const(0.0), _Const(0.0), _Const(0.0), _Const(0.0))
    y = np.array([100, 101, 102, 150])
    out = carver.carve(np.full(4, STONE), np.zeros(4), y, np.zeros(4), _column(4, ho=100.0))
    assert list(out) == [AIR, AIR, STONE, STONE]


def test_carver_no_hits_keeps_voxels():
    carver = CaveCarver(_Const(0.0), _Const(0.0), _Const(0.5), _Const(0.5))
    out = carver.carve(np.array([STONE, GRASS]), np.zeros(2), np.array([0, 1]),
        np.zeros(2), _column(2))
    assert list(out) == [STONE, GRASS]

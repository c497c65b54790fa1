"""Growable sample sequences: the shared driver and the uniform baseline."""

import numpy as np

from ._common import DEFAULT_SEED, DOMAIN_SIZE, check_count, check_seed, to01, to01_array
from .prng import Xoshiro128StarStar


class ProgressiveSequence:
    """Append-only list of 2D points that grows on request.

    Subclasses set ``dtype`` and implement ``_grow(m)``, which must leave at
    least ``m`` points in ``self._store[:self._generated]`` without touching
    points that already exist.  ``extend(m)`` then exposes the first ``m``.
    """

    dtype = np.float64

    def __init__(self, seed=DEFAULT_SEED, rng_factory=Xoshiro128StarStar):
        self._seed = check_seed(seed)
        self._rng = rng_factory(self._seed)
        self._store = np.zeros((0, 2), dtype=self.dtype)
        self._generated = 0
        self._size = 0

    @property
    def seed(self):
        return self._seed

    @property
    def generated(self):
        """Points actually produced; may run ahead of ``size()``."""
        return self._generated

    def set_seed(self, seed):
        """Change the seed.  Only allowed before generation starts."""
        seed = check_seed(seed)
        if self._generated:
            raise RuntimeError("set_seed() after generation started; call clear() first")
        self._seed = seed
        self._rng.reseed(seed)

    def clear(self):
        """Drop every point and rewind the random source to the seed."""
        self._store = np.zeros((0, 2), dtype=self.dtype)
        self._generated = 0
        self._size = 0
        self._rng.reseed(self._seed)

    def extend(self, m):
        """Grow the sequence to at least ``m`` points and return ``points()``."""
        m = check_count(m)
        if m > self._generated:
            self._grow(m)
        self._size = max(self._size, m)
        return self.points()

    def points(self):
        """Read-only (size, 2) view of the sequence in generation order."""
        view = self._store[: self._size]
        view.flags.writeable = False
        return view

    def points01(self):
        """The whole logical sequence as floats in [0, 1)."""
        return to01_array(self.points())

    def size(self):
        return self._size

    def __len__(self):
        return self._size

    def __repr__(self):
        return f"{type(self).__name__}(seed={self._seed}, size={self._size})"

    def _reserve(self, capacity):
        """Make room for ``capacity`` points, keeping the generated prefix."""
        if capacity <= len(self._store):
            return
        store = np.zeros((capacity, 2), dtype=self.dtype)
        store[: self._generated] = self._store[: self._generated]
        self._store = store

    def _grow(self, m):
        raise NotImplementedError


class UniformSequence(ProgressiveSequence):
    """Independent uniform samples, one point per request.

    With ``fixed_point=True`` coordinates are drawn as ``uniform_int() mod L``
    on the integer lattice instead of as floats.
    """

    def __init__(self, seed=DEFAULT_SEED, rng_factory=Xoshiro128StarStar, fixed_point=False):
        self.fixed_point = fixed_point
        if fixed_point:
            self.dtype = np.uint32
        super().__init__(seed, rng_factory)

    def to01(self, point):
        if self.fixed_point:
            return to01(point)
        return (float(point[0]), float(point[1]))

    def points01(self):
        if self.fixed_point:
            return to01_array(self.points())
        return np.array(self.points(), dtype=np.float64)

    def _grow(self, m):
        self._reserve(m)
        rng = self._rng
        for k in range(self._generated, m):
            if self.fixed_point:
                self._store[k] = (rng.uniform_int() % DOMAIN_SIZE, rng.uniform_int() % DOMAIN_SIZE)
            else:
                self._store[k] = (rng.uniform_float(), rng.uniform_float())
        self._generated = m

"""Progressive jittered (PJ) sequences.

Each round quadruples the point count.  At level N the domain is an n x n
grid (n = sqrt(N)) holding one point per cell; every cell is split into four
quadrants and the three empty ones each receive a new point, jittered
uniformly inside the quadrant.  After the round every cell of the 2n x 2n
grid holds exactly one point.

Children of parent s land at indices N + s (diagonal quadrant), 2N + s
(one of the two adjacent quadrants, picked by a coin flip) and 3N + s (the
quadrant left over).
"""

import numpy as np

from ._common import DOMAIN_SIZE, RESOLUTION_ERROR, level_side, next_power_of_4, to01
from .sequences import ProgressiveSequence

# ---------------------------------------------------------------------------
# Quadrant table
# ---------------------------------------------------------------------------

# Quadrants are (xhalf, yhalf) with 0 = lower half, 1 = upper half.
#
#   +-----+-----+
#   | 0,1 | 1,1 |
#   +-----+-----+
#   | 0,0 | 1,0 |
#   +-----+-----+
#
# parent quadrant -> (diagonal, diagonal flipped in x, diagonal flipped in y)
CHILD_QUADRANTS = {
    (0, 0): ((1, 1), (0, 1), (1, 0)),
    (1, 0): ((0, 1), (1, 1), (0, 0)),
    (0, 1): ((1, 0), (0, 0), (1, 1)),
    (1, 1): ((0, 0), (1, 0), (0, 1)),
}


def choose_children(parent_quadrant, coin):
    """Return (diagonal, adjacent, remaining) quadrants for a parent.

    ``coin`` is a float in [0, 1); below 0.5 the adjacent child is the
    diagonal quadrant flipped in x, otherwise flipped in y.  The remaining
    child takes the other flip.
    """
    diagonal, flip_x, flip_y = CHILD_QUADRANTS[parent_quadrant]
    if coin < 0.5:
        return diagonal, flip_x, flip_y
    return diagonal, flip_y, flip_x


def locate(point, side):
    """Cell (i, j) and quadrant (xhalf, yhalf) of a fixed-point point.

    Indices are clamped into range so a coordinate sitting on the far edge
    still resolves to the last cell and quadrant.
    """
    cell = DOMAIN_SIZE // side
    half = cell // 2
    x, y = int(point[0]), int(point[1])
    i = min(x // cell, side - 1)
    j = min(y // cell, side - 1)
    xhalf = min((x - i * cell) // half, 1)
    yhalf = min((y - j * cell) // half, 1)
    return i, j, (xhalf, yhalf)


class JitteredSequence(ProgressiveSequence):
    """Progressive jittered samples on the fixed-point lattice [0, 2^23)^2."""

    dtype = np.uint32

    to01 = staticmethod(to01)

    def _check_resolution(self, target):
        # the last round splits cells of side target/4 into half-cells
        if target > 1:
            side = level_side(target // 4)
            if DOMAIN_SIZE // side // 2 < 1:
                raise ValueError(RESOLUTION_ERROR)

    def _grow(self, m):
        target = next_power_of_4(m)
        self._check_resolution(target)
        self._reserve(target)

        if self._generated == 0:
            rng = self._rng
            self._store[0] = (rng.uniform_int() % DOMAIN_SIZE, rng.uniform_int() % DOMAIN_SIZE)
            self._generated = 1

        while self._generated < m:
            self._subdivide(self._generated)
            self._generated *= 4

    def _jitter(self, i, j, quadrant, cell, half):
        """Uniform point inside quadrant ``quadrant`` of cell (i, j)."""
        rng = self._rng
        x = i * cell + quadrant[0] * half + rng.uniform_int() % half
        y = j * cell + quadrant[1] * half + rng.uniform_int() % half
        return x, y

    def _subdivide(self, n_points):
        side = level_side(n_points)
        cell = DOMAIN_SIZE // side
        half = cell // 2
        store = self._store

        for s in range(n_points):
            i, j, quadrant = locate(store[s], side)
            diagonal = CHILD_QUADRANTS[quadrant][0]
            store[n_points + s] = self._jitter(i, j, diagonal, cell, half)

            _, adjacent, remaining = choose_children(quadrant, self._rng.uniform_float())
            store[2 * n_points + s] = self._jitter(i, j, adjacent, cell, half)
            store[3 * n_points + s] = self._jitter(i, j, remaining, cell, half)

"""Progressive multi-jittered (PMJ) sequences.

Same quadrant subdivision as PJ, with an extra constraint: after every
completed level N = 4^k, and after the half-way point 2 * 4^k, no two points
share a 1D stratum of width L / count along x, nor along y.

A round N -> 4N runs in two passes because the stratum resolution changes
half-way:

1. diagonal pass (N -> 2N): occupancy is rebuilt at resolution 2N from the
   N existing points, then each parent's diagonal child is placed.
2. adjacent pass (2N -> 4N): occupancy is rebuilt at resolution 4N from the
   2N existing points, then each parent's two remaining children are placed.

A child coordinate is redrawn inside its half-cell until it lands in a free
stratum; x and y are drawn independently.  A half-cell column spans exactly
as many free strata as there are children to place in it, so every draw has
a free stratum available.
"""

import numpy as np

from ._common import (
    DOMAIN_SIZE,
    MAX_DRAWS_PER_STRATUM,
    MIN_DRAWS,
    MIN_STRATUM_WIDTH,
    RESOLUTION_ERROR,
    level_side,
)
from .jittered import CHILD_QUADRANTS, JitteredSequence, choose_children, locate


class MultiJitteredSequence(JitteredSequence):
    """Progressive multi-jittered samples on the fixed-point lattice."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._occupied_x = np.zeros(0, dtype=bool)
        self._occupied_y = np.zeros(0, dtype=bool)

    def _check_resolution(self, target):
        super()._check_resolution(target)
        # the adjacent pass of the last round stratifies at resolution target
        if target > 1 and DOMAIN_SIZE // target < MIN_STRATUM_WIDTH:
            raise ValueError(RESOLUTION_ERROR)

    def build_occupied(self, count):
        """Rebuild both stratum bitmaps at resolution 2 * count.

        Marks the strata hit by the first ``count`` points and returns the
        stratum width.
        """
        resolution = 2 * count
        width = DOMAIN_SIZE // resolution
        if width < MIN_STRATUM_WIDTH:
            raise ValueError(RESOLUTION_ERROR)

        points = self._store[:count]
        self._occupied_x = np.zeros(resolution, dtype=bool)
        self._occupied_y = np.zeros(resolution, dtype=bool)
        self._occupied_x[points[:, 0] // width] = True
        self._occupied_y[points[:, 1] // width] = True
        return width

    def _draw_stratified(self, base, half, width, occupied, axis):
        """Draw base + jitter until it falls in a free stratum, then claim it."""
        rng = self._rng
        max_draws = max(MIN_DRAWS, MAX_DRAWS_PER_STRATUM * max(half // width, 1))
        for _ in range(max_draws):
            v = base + rng.uniform_int() % half
            stratum = v // width
            if not occupied[stratum]:
                occupied[stratum] = True
                return v
        raise RuntimeError(
            f"no free {axis}-stratum for half-cell at {base} "
            f"(width {half}, stratum width {width}) after {max_draws} draws"
        )

    def _place(self, i, j, quadrant, cell, half, width):
        x = self._draw_stratified(
            i * cell + quadrant[0] * half, half, width, self._occupied_x, "x"
        )
        y = self._draw_stratified(
            j * cell + quadrant[1] * half, half, width, self._occupied_y, "y"
        )
        return x, y

    def _subdivide(self, n_points):
        side = level_side(n_points)
        cell = DOMAIN_SIZE // side
        half = cell // 2
        store = self._store

        width = self.build_occupied(n_points)
        for s in range(n_points):
            i, j, quadrant = locate(store[s], side)
            diagonal = CHILD_QUADRANTS[quadrant][0]
            store[n_points + s] = self._place(i, j, diagonal, cell, half, width)

        width = self.build_occupied(2 * n_points)
        for s in range(n_points):
            i, j, quadrant = locate(store[s], side)
            _, adjacent, remaining = choose_children(quadrant, self._rng.uniform_float())
            store[2 * n_points + s] = self._place(i, j, adjacent, cell, half, width)
            store[3 * n_points + s] = self._place(i, j, remaining, cell, half, width)

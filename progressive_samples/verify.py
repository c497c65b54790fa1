"""Structural checks for progressive sequences.

All checks work on fixed-point (N, 2) arrays so cell and stratum membership
is exact integer division.
"""

import numpy as np

from ._common import DOMAIN_SIZE, level_side


def grid_violations(points, count):
    """Cells of the sqrt(count) x sqrt(count) grid not holding exactly one point.

    Looks at the first ``count`` points; ``count`` must be a power of 4.
    Returns a list of (i, j, points_in_cell).  One point per cell at level
    4^k is the same as one point per quadrant of every cell at level 4^(k-1).
    """
    side = level_side(count)
    cell = DOMAIN_SIZE // side
    pts = np.asarray(points[:count], dtype=np.int64)
    if len(pts) < count:
        raise ValueError(f"need {count} points, got {len(pts)}")

    i = np.minimum(pts[:, 0] // cell, side - 1)
    j = np.minimum(pts[:, 1] // cell, side - 1)
    counts = np.bincount(j * side + i, minlength=side * side).reshape(side, side)
    bad_j, bad_i = np.nonzero(counts != 1)
    return [(int(a), int(b), int(counts[b, a])) for a, b in zip(bad_i, bad_j)]


def stratum_violations(points, count):
    """1D strata of width L / count not holding exactly one point.

    Returns a list of (axis, stratum, points_in_stratum) over both axes.
    """
    if count <= 0 or DOMAIN_SIZE % count:
        raise ValueError(f"count {count} does not divide the fixed-point domain")
    width = DOMAIN_SIZE // count
    pts = np.asarray(points[:count], dtype=np.int64)
    if len(pts) < count:
        raise ValueError(f"need {count} points, got {len(pts)}")

    bad = []
    for axis, name in ((0, "x"), (1, "y")):
        counts = np.bincount(pts[:, axis] // width, minlength=count)
        for stratum in np.nonzero(counts != 1)[0]:
            bad.append((name, int(stratum), int(counts[stratum])))
    return bad


def check_progressive(points, stratified=False):
    """Check every complete level of a sequence prefix.

    Runs ``grid_violations`` at each 4^k <= len(points).  With
    ``stratified`` it also runs ``stratum_violations`` at 4^k and 2 * 4^k.
    Returns a list of readable failure lines, empty when all checks pass.
    """
    failures = []
    total = len(points)
    count = 1
    while count <= total:
        bad = grid_violations(points, count)
        if bad:
            failures.append(f"grid {count}: {len(bad)} bad cells, first {bad[:3]}")
        if stratified:
            for m in (count, 2 * count):
                if m > total:
                    continue
                bad = stratum_violations(points, m)
                if bad:
                    failures.append(f"strata {m}: {len(bad)} bad strata, first {bad[:3]}")
        count *= 4
    return failures

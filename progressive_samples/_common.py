"""Shared constants and fixed-point helpers for progressive sample sequences."""

import numpy as np

# ---------------------------------------------------------------------------
# Fixed-point coordinate domain
# ---------------------------------------------------------------------------

# Coordinates live on the integer lattice [0, DOMAIN_SIZE).  Stratum and
# quadrant membership is decided with integer division only; conversion to
# floats happens when points are handed to a consumer.
FIXED_POINT_BITS = 23
DOMAIN_SIZE = 1 << FIXED_POINT_BITS

DEFAULT_SEED = 1
SEED_LIMIT = 1 << 32

# ---------------------------------------------------------------------------
# Rejection sampling limits (multi-jittered placement)
# ---------------------------------------------------------------------------

# Draw cap per placement is this multiple of the strata a half-cell spans.
# With k free strata out of s the chance of hitting the cap is about
# exp(-MAX_DRAWS_PER_STRATUM * k), so a healthy state never reaches it.
MAX_DRAWS_PER_STRATUM = 64
MIN_DRAWS = 1024

# Stratum width 1 leaves no room for jitter inside a stratum.
MIN_STRATUM_WIDTH = 2

RESOLUTION_ERROR = "requested sample count exceeds fixed-point domain resolution"


def is_power_of_4(m):
    """True for 1, 4, 16, 64, ..."""
    return m > 0 and (m & (m - 1)) == 0 and (m.bit_length() - 1) % 2 == 0


def next_power_of_4(m):
    """Smallest power of 4 that is >= m (1 for m <= 1)."""
    n = 1
    while n < m:
        n *= 4
    return n


def level_side(count):
    """Grid side n for a level of n*n points; count must be a power of 4."""
    if not is_power_of_4(count):
        raise ValueError(f"level {count} is not a power of 4")
    return 1 << ((count.bit_length() - 1) // 2)


def to01(point):
    """Convert one fixed-point (x, y) pair to floats in [0, 1)."""
    return (int(point[0]) / DOMAIN_SIZE, int(point[1]) / DOMAIN_SIZE)


def to01_array(points):
    """Convert an (N, 2) fixed-point array to an (N, 2) float64 array."""
    return np.asarray(points, dtype=np.float64) / DOMAIN_SIZE


def from01(point):
    """Convert a float (x, y) pair in [0, 1] to the fixed-point lattice.

    Values are clamped so that 1.0 (or rounding just above it) maps to the
    last lattice cell instead of leaving the domain.
    """
    return tuple(min(max(int(v * DOMAIN_SIZE), 0), DOMAIN_SIZE - 1) for v in point)


def check_seed(seed):
    """Validate a 32-bit unsigned seed and return it as an int."""
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise ValueError(f"seed must be an integer, got {seed!r}")
    seed = int(seed)
    if not 0 <= seed < SEED_LIMIT:
        raise ValueError(f"seed {seed} outside [0, 2^32)")
    return seed


def check_count(m):
    """Validate a requested sample count and return it as an int."""
    if isinstance(m, bool) or not isinstance(m, (int, np.integer)):
        raise ValueError(f"sample count must be an integer, got {m!r}")
    m = int(m)
    if m < 0:
        raise ValueError(f"sample count must be >= 0, got {m}")
    return m

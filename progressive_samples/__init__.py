"""progressive_samples: progressive 2D sample sequences.

Three generators that grow a point set on request without changing points
already handed out:

    UniformSequence        independent uniform samples (baseline)
    JitteredSequence       progressive jittered (PJ)
    MultiJitteredSequence  progressive multi-jittered (PMJ)

PJ and PMJ work on the integer lattice [0, 2^23)^2; ``to01`` converts to
floats in [0, 1).

Usage:
    python -m progressive_samples --kind pmj --count 64 --print
    python -m progressive_samples --kind pj --count 1024 --check
    python -m progressive_samples --diagram comparison --count 256
    python -m progressive_samples --list

Requires: pip install numpy matplotlib
"""

from ._common import DEFAULT_SEED, DOMAIN_SIZE, FIXED_POINT_BITS, from01, to01, to01_array
from .jittered import JitteredSequence
from .multi_jittered import MultiJitteredSequence
from .prng import RandomSource, SplitMix64, Xoshiro128StarStar
from .sequences import ProgressiveSequence, UniformSequence

SEQUENCES = {
    "uniform": UniformSequence,
    "pj": JitteredSequence,
    "pmj": MultiJitteredSequence,
}

__all__ = [
    "DEFAULT_SEED",
    "DOMAIN_SIZE",
    "FIXED_POINT_BITS",
    "JitteredSequence",
    "MultiJitteredSequence",
    "ProgressiveSequence",
    "RandomSource",
    "SEQUENCES",
    "SplitMix64",
    "UniformSequence",
    "Xoshiro128StarStar",
    "from01",
    "to01",
    "to01_array",
]

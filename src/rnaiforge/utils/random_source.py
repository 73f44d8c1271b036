"""Injectable randomness for noise draws.

Every stochastic component takes a ``numpy.random.Generator``; tests pass a
seeded generator to get reproducible output.
"""

from typing import Optional

import numpy as np


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a generator, seeded when ``seed`` is given."""
    return np.random.default_rng(seed)


def resolve_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    """Return ``rng`` or a fresh instance-owned generator."""
    return rng if rng is not None else np.random.default_rng()


def jitter(rng: np.random.Generator, width: float) -> float:
    """Centered uniform noise in ``[-width/2, width/2)``."""
    return (float(rng.random()) - 0.5) * width

"""
Random number generation utilities.

All stochastic steps (site sampling, range placement) draw from a
``numpy.random.Generator`` so that a seed reproduces a map exactly.
"""

from typing import Optional

import numpy as np

# Global generator instance
_rng = None


def set_random_seed(seed: Optional[int]) -> np.random.Generator:
    """
    Reset the module-level generator.

    Args:
        seed: Seed to use, or None for fresh OS entropy

    Returns:
        The new generator
    """
    global _rng
    _rng = np.random.default_rng(seed)
    return _rng


def get_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Get a generator.

    With a seed, a new independent generator is returned. Without one the
    shared module-level generator is used, created on first access.
    """
    global _rng
    if seed is not None:
        return np.random.default_rng(seed)
    if _rng is None:
        _rng = np.random.default_rng()
    return _rng

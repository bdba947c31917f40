"""Poisson-disk site sampling."""

import math

import numpy as np
import structlog
from scipy.stats import qmc

logger = structlog.get_logger()


def sample_sites(width: float, height: float, min_distance: float,
                 rng: np.random.Generator) -> np.ndarray:
    """
    Fill a rectangle with blue-noise sites.

    scipy's Poisson-disk engine samples directly inside the rectangle's
    bounds, so the cost follows the map's area rather than its longest side.

    Args:
        width: Rectangle width
        height: Rectangle height
        min_distance: Minimum distance between any two sites
        rng: Generator driving the sampler

    Returns:
        Array of [x, y] site coordinates
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid area: {width}x{height}")
    if min_distance <= 0:
        raise ValueError(f"Invalid minimum distance: {min_distance}")

    if min_distance >= math.hypot(width, height):
        # No two points of the rectangle are that far apart
        return np.array([[rng.random() * width, rng.random() * height]])

    engine = qmc.PoissonDisk(
        d=2,
        radius=min_distance,
        l_bounds=[0, 0],
        u_bounds=[width, height],
        rng=rng,
    )
    points = engine.fill_space()

    logger.info("Sites sampled", sites=len(points), width=width, height=height,
                min_distance=min_distance)
    return points

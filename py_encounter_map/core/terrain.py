"""
Terrain shaping for encounter maps.

Elevation is built by superposing closed-form kernels (hills, cones, slopes)
over every point and region of a mesh. Mountain ranges scatter hills and
cones inside an ellipse. Kernels only ever add to the existing heights.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
import structlog

from ..config import settings
from .exceptions import PlacementExhausted
from .mesh import Mesh

logger = structlog.get_logger()


def hill_kernel(dsq: np.ndarray, r: float) -> np.ndarray:
    """
    Smooth radial bump (Wendland-type), 1 at the center and 0 at distance r.

    Args:
        dsq: Squared distances from the hill center
        r: Hill radius

    Returns:
        Kernel factor per sample, 0 outside the radius
    """
    r = float(r)
    c1 = (4 / 9) * r ** -6
    c2 = (17 / 9) * r ** -4
    c3 = (22 / 9) * r ** -2
    dsq = np.asarray(dsq, dtype=float)
    kernel = 1 - c1 * dsq ** 3 + c2 * dsq ** 2 - c3 * dsq
    return np.where(dsq < r * r, kernel, 0.0)


def cone_kernel(dsq: np.ndarray, r: float) -> np.ndarray:
    """Linear cone, 1 at the center and 0 at distance r."""
    r = float(r)
    dsq = np.asarray(dsq, dtype=float)
    inside = dsq < r * r
    return np.where(inside, 1 - np.sqrt(np.where(inside, dsq, 0.0)) / r, 0.0)


def slope_kernel(offsets: np.ndarray, direction: Tuple[float, float], r: float, h: float) -> np.ndarray:
    """
    One-sided ramp along a line.

    Samples on the negative side of the line (by the sign of the cross
    product with ``direction``) sit at h/2. Samples on the other side rise
    from h/2 on the line to h at cross-track distance r and beyond.

    Args:
        offsets: Sample positions relative to the anchor, shape (n, 2)
        direction: Unit direction of the line
        r: Cross-track distance over which the ramp rises
        h: Full ramp height

    Returns:
        Height contribution per sample
    """
    offsets = np.asarray(offsets, dtype=float).reshape(-1, 2)
    dx = offsets[:, 0]
    dy = offsets[:, 1]

    dot = dx * direction[0] + dy * direction[1]
    dist = np.hypot(dx - dot * direction[0], dy - dot * direction[1])
    dist = np.minimum(dist, r)

    cross = dx * direction[1] - dy * direction[0]
    low = 0.5 * h
    high = np.where(cross < 0, low, h)
    return low + (dist / r) * (high - low)


def ellipse_distance(offsets: np.ndarray, direction: Tuple[float, float], a: float, b: float) -> np.ndarray:
    """
    Normalized squared distance under an ellipse aligned with ``direction``.

    Values <= 1 lie inside the ellipse with semi-axis ``a`` along the
    direction and ``b`` across it.
    """
    offsets = np.asarray(offsets, dtype=float).reshape(-1, 2)
    # atan2 differs from atan(y/x) by pi at most, which the squares cancel
    phi = math.atan2(direction[1], direction[0])
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)
    dx = offsets[:, 0]
    dy = offsets[:, 1]
    along = cos_phi * dx + sin_phi * dy
    across = sin_phi * dx - cos_phi * dy
    return along ** 2 / a ** 2 + across ** 2 / b ** 2


def _unit_direction(direction: Sequence[float]) -> Tuple[float, float]:
    length = math.hypot(direction[0], direction[1])
    if length == 0:
        raise ValueError("Direction vector must be non-zero")
    return (direction[0] / length, direction[1] / length)


@dataclass
class RangePlacement:
    """Outcome of a mountain range placement."""
    requested: int
    placed: int
    scans: int
    exhausted: bool

    @property
    def shortfall(self) -> int:
        return self.requested - self.placed


class TerrainShaper:
    """
    Applies elevation kernels to the points and regions of a mesh.

    Every kernel is evaluated over both arenas with numpy and accumulated
    into each entity's ``height``.
    """

    def __init__(self, mesh: Mesh, unit: float, rng: np.random.Generator,
                 accept_probability: Optional[float] = None,
                 max_scans: Optional[int] = None):
        """
        Initialize the terrain shaper.

        Args:
            mesh: Mesh whose heights are shaped
            unit: Map unit scaling range feature radii
            rng: Generator for range placement
            accept_probability: Chance a sample inside a range gets a feature
            max_scans: Full scans a range may take before giving up
        """
        self.mesh = mesh
        self.unit = unit
        self._rng = rng
        self.accept_probability = (
            settings.range_accept_probability if accept_probability is None else accept_probability
        )
        self.max_scans = settings.range_max_scans if max_scans is None else max_scans

    def _random(self) -> float:
        return float(self._rng.random())

    def _P(self, probability: float) -> bool:
        if probability >= 1:
            return True
        if probability <= 0:
            return False
        return self._random() < probability

    def _offsets(self, pos: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
        origin = np.asarray(pos, dtype=float)
        return self.mesh.point_xy - origin, self.mesh.region_xy - origin

    def _accumulate(self, point_delta: np.ndarray, region_delta: np.ndarray) -> None:
        for idx in np.flatnonzero(point_delta):
            self.mesh.points[idx].height += float(point_delta[idx])
        for idx in np.flatnonzero(region_delta):
            self.mesh.regions[idx].height += float(region_delta[idx])

    def add_hill(self, pos: Sequence[float], r: float, h: float) -> None:
        """
        Add a smooth hill.

        Args:
            pos: Hill center [x, y]
            r: Radius of influence
            h: Height at the center
        """
        if r <= 0:
            raise ValueError(f"Invalid hill radius: {r}")
        point_off, region_off = self._offsets(pos)
        self._accumulate(
            h * hill_kernel(np.sum(point_off ** 2, axis=1), r),
            h * hill_kernel(np.sum(region_off ** 2, axis=1), r),
        )

    def add_cone(self, pos: Sequence[float], r: float, h: float) -> None:
        """Add a linear cone of radius ``r`` peaking at ``h``."""
        if r <= 0:
            raise ValueError(f"Invalid cone radius: {r}")
        point_off, region_off = self._offsets(pos)
        self._accumulate(
            h * cone_kernel(np.sum(point_off ** 2, axis=1), r),
            h * cone_kernel(np.sum(region_off ** 2, axis=1), r),
        )

    def add_slope(self, loc: Sequence[float], direction: Sequence[float], r: float, h: float) -> None:
        """
        Add a one-sided ramp along the line through ``loc``.

        Args:
            loc: A point on the line [x, y]
            direction: Line direction, normalized here
            r: Cross-track distance over which the ramp rises
            h: Full ramp height
        """
        if r <= 0:
            raise ValueError(f"Invalid slope radius: {r}")
        unit_dir = _unit_direction(direction)
        point_off, region_off = self._offsets(loc)
        self._accumulate(
            slope_kernel(point_off, unit_dir, r, h),
            slope_kernel(region_off, unit_dir, r, h),
        )

    def add_range(self, loc: Sequence[float], direction: Sequence[float],
                  a: float, b: float, h: float, count: int,
                  strict: bool = False) -> RangePlacement:
        """
        Scatter hills and cones inside an ellipse to form a mountain range.

        Points and then regions are scanned repeatedly; each sample inside
        the ellipse receives a feature with the acceptance probability,
        until ``count`` features exist or the scan budget is spent. Features
        nearer the ellipse center are taller.

        Args:
            loc: Ellipse center [x, y]
            direction: Orientation of the ellipse
            a: Semi-axis (the smaller of a and b runs along ``direction``)
            b: Other semi-axis
            h: Peak height, also the upper bound of feature radii in units
            count: Number of features to place
            strict: Raise PlacementExhausted instead of returning a short result

        Returns:
            RangePlacement describing how many features were placed
        """
        if a <= 0 or b <= 0:
            raise ValueError(f"Invalid range semi-axes: {a}, {b}")
        if h <= 0:
            raise ValueError(f"Invalid range height: {h}")
        if a > b:
            a, b = b, a

        unit_dir = _unit_direction(direction)
        point_off, region_off = self._offsets(loc)
        point_d = ellipse_distance(point_off, unit_dir, a, b)
        region_d = ellipse_distance(region_off, unit_dir, a, b)

        # Sample positions never move, so candidates are fixed for all scans
        candidates = [
            (self.mesh.points[i].pos, float(point_d[i])) for i in np.flatnonzero(point_d <= 1)
        ] + [
            (self.mesh.regions[i].pos, float(region_d[i])) for i in np.flatnonzero(region_d <= 1)
        ]

        placed = 0
        scans = 0
        while placed < count and scans < self.max_scans and candidates:
            scans += 1
            for pos, d in candidates:
                if placed >= count:
                    break
                if not self._P(self.accept_probability):
                    continue

                placed += 1
                radius = (self._random() * (h - a) + a) * self.unit
                feature_height = (h / 2) + (h * (1 - d) / 2)
                if self._random() < 0.5:
                    self.add_cone(pos, radius, feature_height)
                else:
                    self.add_hill(pos, radius, feature_height)

        result = RangePlacement(requested=count, placed=placed, scans=scans,
                                exhausted=placed < count)

        if result.exhausted:
            logger.warning("Range placement exhausted",
                           requested=count, placed=placed, scans=scans,
                           candidates=len(candidates))
            if strict:
                raise PlacementExhausted(result)
        else:
            logger.debug("Range placed", features=placed, scans=scans)

        return result

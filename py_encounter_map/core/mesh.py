"""
Mesh entities: points, borders and regions.

Entities live in per-kind arenas owned by ``Mesh`` and refer to each other
by integer id, which is also their index in the owning arena.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
from scipy.spatial import cKDTree

PositionKey = Tuple[float, float]
BorderKey = Tuple[PositionKey, PositionKey]


def position_key(x: float, y: float, precision: int) -> PositionKey:
    """Canonical lookup key for a position, rounded to ``precision`` decimals."""
    # + 0.0 folds -0.0 into 0.0
    return (round(x, precision) + 0.0, round(y, precision) + 0.0)


def border_key(a: Tuple[float, float], b: Tuple[float, float], precision: int) -> BorderKey:
    """Canonical lookup key for a border, independent of endpoint order."""
    ka = position_key(a[0], a[1], precision)
    kb = position_key(b[0], b[1], precision)
    return (ka, kb) if ka <= kb else (kb, ka)


def _link(ids: List[int], other: int) -> None:
    if other not in ids:
        ids.append(other)


@dataclass
class MapLocation:
    """
    Common shape of points and regions.

    ``flux`` and ``flow`` are reserved for an erosion pass; ``flow`` holds
    the id of the downstream location of the same kind.
    """
    id: int
    pos: Tuple[float, float]
    height: float = 0.0
    precipitation: float = 0.0
    temperature: float = 0.0
    flux: float = 0.0
    flow: Optional[int] = None
    land: bool = False

    def serialize_key(self, precision: int) -> PositionKey:
        return position_key(self.pos[0], self.pos[1], precision)


@dataclass
class Point(MapLocation):
    """A vertex of the subdivision."""
    borders: List[int] = field(default_factory=list)
    regions: List[int] = field(default_factory=list)
    neighbors: List[int] = field(default_factory=list)

    def add_border(self, border_id: int) -> None:
        _link(self.borders, border_id)

    def add_region(self, region_id: int) -> None:
        _link(self.regions, region_id)

    def add_neighbor(self, point_id: int) -> None:
        _link(self.neighbors, point_id)


@dataclass
class Region(MapLocation):
    """A Voronoi cell around one site."""
    points: List[int] = field(default_factory=list)
    borders: List[int] = field(default_factory=list)
    neighbors: List[int] = field(default_factory=list)

    def add_point(self, point_id: int) -> None:
        _link(self.points, point_id)

    def add_border(self, border_id: int) -> None:
        _link(self.borders, border_id)

    def add_neighbor(self, region_id: int) -> None:
        _link(self.neighbors, region_id)


@dataclass
class Border:
    """An edge separating up to two regions."""
    id: int
    va: Tuple[float, float]
    vb: Tuple[float, float]
    edge: int  # index of the diagram edge this border upgrades
    points: List[int] = field(default_factory=list)
    regions: List[int] = field(default_factory=list)
    neighbors: List[int] = field(default_factory=list)

    river: bool = False
    coast: bool = False
    settlement: bool = False

    def serialize_key(self, precision: int) -> BorderKey:
        return border_key(self.va, self.vb, precision)

    def add_point(self, point_id: int) -> None:
        _link(self.points, point_id)

    def add_region(self, region_id: int) -> None:
        _link(self.regions, region_id)

    def add_neighbor(self, border_id: int) -> None:
        _link(self.neighbors, border_id)


@dataclass
class BuildStats:
    """Counts of lookups the mesh builder skipped, for diagnostics."""
    skipped_point_lookups: int = 0
    skipped_border_lookups: int = 0
    skipped_region_lookups: int = 0
    duplicate_points: int = 0
    duplicate_borders: int = 0
    duplicate_regions: int = 0

    @property
    def skipped_lookups(self) -> int:
        return (self.skipped_point_lookups + self.skipped_border_lookups
                + self.skipped_region_lookups)


@dataclass
class Mesh:
    """Arenas of points, borders and regions plus their key indexes."""
    precision: int
    points: List[Point] = field(default_factory=list)
    borders: List[Border] = field(default_factory=list)
    regions: List[Region] = field(default_factory=list)

    point_index: Dict[PositionKey, int] = field(default_factory=dict)
    border_index: Dict[BorderKey, int] = field(default_factory=dict)
    region_index: Dict[PositionKey, int] = field(default_factory=dict)

    stats: BuildStats = field(default_factory=BuildStats)

    # Position caches, filled by finalize()
    point_xy: Optional[np.ndarray] = field(default=None, repr=False)
    region_xy: Optional[np.ndarray] = field(default=None, repr=False)
    _region_tree: Optional[cKDTree] = field(default=None, repr=False)

    def find_point(self, x: float, y: float) -> Optional[Point]:
        idx = self.point_index.get(position_key(x, y, self.precision))
        return None if idx is None else self.points[idx]

    def find_region(self, x: float, y: float) -> Optional[Region]:
        idx = self.region_index.get(position_key(x, y, self.precision))
        return None if idx is None else self.regions[idx]

    def find_border(self, a: Tuple[float, float], b: Tuple[float, float]) -> Optional[Border]:
        idx = self.border_index.get(border_key(a, b, self.precision))
        return None if idx is None else self.borders[idx]

    def finalize(self) -> None:
        """Cache position arrays once the arenas are complete."""
        self.point_xy = np.array([p.pos for p in self.points], dtype=float).reshape(-1, 2)
        self.region_xy = np.array([r.pos for r in self.regions], dtype=float).reshape(-1, 2)
        self._region_tree = cKDTree(self.region_xy) if len(self.regions) else None

    def nearest_region(self, x: float, y: float) -> Optional[Region]:
        """Find the region whose site is closest to (x, y)."""
        if self._region_tree is None:
            return None
        _, idx = self._region_tree.query([x, y])
        return self.regions[int(idx)]

    def point_heights(self) -> np.ndarray:
        return np.array([p.height for p in self.points], dtype=float)

    def region_heights(self) -> np.ndarray:
        return np.array([r.height for r in self.regions], dtype=float)

"""
Encounter map: sampled Voronoi mesh with sculpted terrain.

Ties the pipeline together: Poisson-disk sites, a bounded Voronoi diagram,
the point/border/region mesh, terrain kernels, land/sea classification and
coastline extraction.
"""

from typing import List, Optional, Sequence

import structlog

from ..config import settings
from ..utils.random import get_rng
from .diagram import BoundingBox, Diagram
from .features import LandSeaSummary, get_coast_lines, set_land_and_sea
from .mesh import Border, BuildStats, Mesh, Region
from .mesh_builder import build_mesh
from .sampling import sample_sites
from .terrain import RangePlacement, TerrainShaper
from .voronoi_diagram import compute_diagram

logger = structlog.get_logger()


class EncounterMap:
    """
    A rectangular map built on a Voronoi mesh.

    The points, borders and regions arenas are exposed directly; terrain
    operations mutate the heights of their entities in place.
    """

    SEA_LEVEL = settings.sea_level

    def __init__(self, width: float, height: float, min_dist: float,
                 seed: Optional[int] = None):
        """
        Sample sites, compute their Voronoi diagram and build the mesh.

        Args:
            width: Map width
            height: Map height
            min_dist: Minimum distance between sampled sites
            seed: Seed for sampling and range placement
        """
        if min_dist <= 0:
            raise ValueError(f"Invalid minimum distance: {min_dist}")
        self._init_dimensions(width, height, seed)

        logger.info("Generating encounter map", width=width, height=height,
                    min_dist=min_dist, seed=self.seed)

        sites = sample_sites(width, height, min_dist, self._rng)
        bbox = BoundingBox(xl=0, xr=width, yt=0, yb=height)
        self._init_mesh(compute_diagram(sites, bbox))

    @classmethod
    def from_diagram(cls, width: float, height: float, diagram: Diagram,
                     seed: Optional[int] = None) -> "EncounterMap":
        """Build a map from an already computed diagram."""
        encounter_map = cls.__new__(cls)
        encounter_map._init_dimensions(width, height, seed)
        encounter_map._init_mesh(diagram)
        return encounter_map

    def _init_dimensions(self, width: float, height: float, seed: Optional[int]) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid map size: {width}x{height}")
        self.width = width
        self.height = height
        self.unit = min(width, height) / settings.unit_divisor
        self.seed = settings.default_seed if seed is None else seed
        self._rng = get_rng(self.seed)

    def _init_mesh(self, diagram: Diagram) -> None:
        self.mesh: Mesh = build_mesh(diagram, precision=settings.key_precision)
        self.terrain = TerrainShaper(self.mesh, self.unit, self._rng)

    @property
    def points(self):
        return self.mesh.points

    @property
    def borders(self):
        return self.mesh.borders

    @property
    def regions(self):
        return self.mesh.regions

    @property
    def build_stats(self) -> BuildStats:
        return self.mesh.stats

    def nearest_region(self, x: float, y: float) -> Optional[Region]:
        return self.mesh.nearest_region(x, y)

    def add_hill(self, pos: Sequence[float], r: float, h: float) -> None:
        self.terrain.add_hill(pos, r, h)

    def add_cone(self, pos: Sequence[float], r: float, h: float) -> None:
        self.terrain.add_cone(pos, r, h)

    def add_slope(self, loc: Sequence[float], direction: Sequence[float], r: float, h: float) -> None:
        self.terrain.add_slope(loc, direction, r, h)

    def add_range(self, loc: Sequence[float], direction: Sequence[float],
                  a: float, b: float, h: float, count: int,
                  strict: bool = False) -> RangePlacement:
        return self.terrain.add_range(loc, direction, a, b, h, count, strict=strict)

    def set_land_and_sea(self, sea_level: Optional[float] = None) -> LandSeaSummary:
        return set_land_and_sea(self.mesh, self.SEA_LEVEL if sea_level is None else sea_level)

    def get_coast_lines(self) -> List[List[Border]]:
        """Coastlines as lists of borders, in traversal order."""
        return [
            [self.mesh.borders[border_id] for border_id in coast]
            for coast in get_coast_lines(self.mesh)
        ]

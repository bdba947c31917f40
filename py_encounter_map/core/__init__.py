"""
Core map generation functionality.
"""

from .diagram import BoundingBox, Cell, Diagram, Edge, HalfEdge, Vertex
from .mesh import Border, BuildStats, Mesh, Point, Region
from .mesh_builder import build_mesh
from .voronoi_diagram import compute_diagram
from .terrain import RangePlacement, TerrainShaper
from .features import get_coast_lines, set_land_and_sea
from .exceptions import EncounterMapError, PlacementExhausted
from .encounter_map import EncounterMap

__all__ = ['BoundingBox', 'Cell', 'Diagram', 'Edge', 'HalfEdge', 'Vertex',
           'Border', 'BuildStats', 'Mesh', 'Point', 'Region', 'build_mesh',
           'compute_diagram', 'RangePlacement', 'TerrainShaper',
           'get_coast_lines', 'set_land_and_sea', 'EncounterMapError',
           'PlacementExhausted', 'EncounterMap']

"""
Planar subdivision data structures.

These mirror what a Voronoi engine hands to the mesh builder: vertices,
edges with up to two adjoining cells, and cells with ordered half-edges and
neighbor ids. The mesh builder only depends on these types, never on the
engine that produced them.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple


class BoundingBox(NamedTuple):
    """Clipping rectangle, named after the left/right/top/bottom sides."""
    xl: float
    xr: float
    yt: float
    yb: float


@dataclass
class Vertex:
    """A diagram vertex."""
    x: float
    y: float

    @property
    def pos(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Edge:
    """
    A diagram edge between two vertices.

    ``right_cell`` is None when the edge lies on the bounding rectangle.
    """
    va: Vertex
    vb: Vertex
    left_cell: Optional[int] = None
    right_cell: Optional[int] = None


@dataclass
class HalfEdge:
    """One side of an edge, as seen from the owning cell."""
    edge: int
    cell: int


@dataclass
class Cell:
    """A diagram cell around one site."""
    site: Vertex
    halfedges: List[HalfEdge] = field(default_factory=list)
    neighbors: List[int] = field(default_factory=list)


@dataclass
class Diagram:
    """Complete subdivision: vertices, cells and edges."""
    vertices: List[Vertex]
    cells: List[Cell]
    edges: List[Edge]

    def edge_of(self, halfedge: HalfEdge) -> Edge:
        return self.edges[halfedge.edge]

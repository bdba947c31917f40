"""Bounded Voronoi diagram computation on top of scipy."""

import math
from typing import Dict, List

import numpy as np
import structlog
from scipy.spatial import Voronoi

from .diagram import BoundingBox, Cell, Diagram, Edge, HalfEdge, Vertex

logger = structlog.get_logger()

# Sites closer than this to a side are not mirrored across it
MIRROR_EPSILON = 1e-9


def get_mirrored_sites(sites: np.ndarray, bbox: BoundingBox) -> np.ndarray:
    """
    Reflect sites across the four sides of the bounding box.

    The bisector between a site and its reflection is the side itself, so
    adding the reflections clips every real cell exactly to the box and
    keeps all real cells bounded.

    Args:
        sites: Array of [x, y] site coordinates
        bbox: Clipping rectangle

    Returns:
        Array of reflected site coordinates
    """
    x = sites[:, 0]
    y = sites[:, 1]

    mirrors = []
    for keep, mx, my in (
        (x - bbox.xl > MIRROR_EPSILON, 2 * bbox.xl - x, y),
        (bbox.xr - x > MIRROR_EPSILON, 2 * bbox.xr - x, y),
        (y - bbox.yt > MIRROR_EPSILON, x, 2 * bbox.yt - y),
        (bbox.yb - y > MIRROR_EPSILON, x, 2 * bbox.yb - y),
    ):
        mirrors.append(np.column_stack([mx, my])[keep])

    return np.vstack(mirrors)


def _order_halfedges(cell: Cell, edges: List[Edge]) -> None:
    """Sort a cell's half-edges counter-clockwise around its site."""
    def angle(halfedge: HalfEdge) -> float:
        edge = edges[halfedge.edge]
        mx = (edge.va.x + edge.vb.x) / 2
        my = (edge.va.y + edge.vb.y) / 2
        return math.atan2(my - cell.site.y, mx - cell.site.x)

    cell.halfedges.sort(key=angle)


def compute_diagram(sites: np.ndarray, bbox: BoundingBox) -> Diagram:
    """
    Compute the Voronoi diagram of ``sites`` clipped to ``bbox``.

    Ridges between two real sites become interior edges with two cells;
    ridges between a real site and a reflection become boundary edges with
    a single cell. Ridges between two reflections are dropped.

    Args:
        sites: Array of [x, y] site coordinates, all inside ``bbox``
        bbox: Clipping rectangle

    Returns:
        Diagram with vertices, cells (one per site, same order) and edges
    """
    sites = np.asarray(sites, dtype=float)
    n_sites = len(sites)
    if n_sites == 0:
        raise ValueError("Cannot compute a diagram without sites")

    all_points = np.vstack([sites, get_mirrored_sites(sites, bbox)])
    vor = Voronoi(all_points)

    logger.info("Voronoi diagram calculated",
                sites=n_sites, vertices=len(vor.vertices), ridges=len(vor.ridge_points))

    vertices: List[Vertex] = []
    vertex_lookup: Dict[int, Vertex] = {}

    def get_vertex(qhull_idx: int) -> Vertex:
        vertex = vertex_lookup.get(qhull_idx)
        if vertex is None:
            x, y = vor.vertices[qhull_idx]
            # Clamp round-off from the reflected bisectors back onto the box
            vertex = Vertex(float(np.clip(x, bbox.xl, bbox.xr)),
                            float(np.clip(y, bbox.yt, bbox.yb)))
            vertex_lookup[qhull_idx] = vertex
            vertices.append(vertex)
        return vertex

    cells = [Cell(site=Vertex(float(x), float(y))) for x, y in sites]
    edges: List[Edge] = []

    for (p1, p2), ridge_vertices in zip(vor.ridge_points, vor.ridge_vertices):
        if p1 >= n_sites and p2 >= n_sites:
            continue
        if -1 in ridge_vertices or len(ridge_vertices) != 2:
            continue
        v1, v2 = ridge_vertices
        if v1 == v2:
            continue

        left, right = (int(p1), int(p2)) if p1 < n_sites else (int(p2), int(p1))
        right_cell = right if right < n_sites else None

        edge_idx = len(edges)
        edges.append(Edge(get_vertex(v1), get_vertex(v2), left, right_cell))

        cells[left].halfedges.append(HalfEdge(edge_idx, left))
        if right_cell is not None:
            cells[right_cell].halfedges.append(HalfEdge(edge_idx, right_cell))

    for idx, cell in enumerate(cells):
        _order_halfedges(cell, edges)
        for halfedge in cell.halfedges:
            edge = edges[halfedge.edge]
            other = edge.right_cell if edge.left_cell == idx else edge.left_cell
            if other is not None and other not in cell.neighbors:
                cell.neighbors.append(other)

    return Diagram(vertices=vertices, cells=cells, edges=edges)

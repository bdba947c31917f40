"""Shared fixtures: a deterministic square-grid subdivision and meshes built from it."""

import pytest

from py_encounter_map.core.diagram import Cell, Diagram, Edge, HalfEdge, Vertex
from py_encounter_map.core.mesh_builder import build_mesh


def make_grid_diagram(n: int = 3, size: float = 10.0) -> Diagram:
    """
    Build an n x n grid of square cells as a stub subdivision engine would.

    Vertex (i, j) sits at (i * size, j * size) with index j * (n + 1) + i.
    Cell (c, r) has its site at the square's center and index r * n + c.
    Horizontal edges come first (row by row), then vertical edges.
    """
    vertices = [Vertex(i * size, j * size) for j in range(n + 1) for i in range(n + 1)]

    def vertex(i, j):
        return vertices[j * (n + 1) + i]

    def cell_idx(c, r):
        if 0 <= c < n and 0 <= r < n:
            return r * n + c
        return None

    edges = []
    horizontal = {}
    vertical = {}
    for j in range(n + 1):
        for i in range(n):
            cells = [c for c in (cell_idx(i, j - 1), cell_idx(i, j)) if c is not None]
            horizontal[(i, j)] = len(edges)
            edges.append(Edge(vertex(i, j), vertex(i + 1, j), cells[0],
                              cells[1] if len(cells) > 1 else None))
    for j in range(n):
        for i in range(n + 1):
            cells = [c for c in (cell_idx(i - 1, j), cell_idx(i, j)) if c is not None]
            vertical[(i, j)] = len(edges)
            edges.append(Edge(vertex(i, j), vertex(i, j + 1), cells[0],
                              cells[1] if len(cells) > 1 else None))

    cells = []
    for r in range(n):
        for c in range(n):
            idx = cell_idx(c, r)
            cell = Cell(site=Vertex((c + 0.5) * size, (r + 0.5) * size))
            for edge_idx in (horizontal[(c, r)], vertical[(c + 1, r)],
                             horizontal[(c, r + 1)], vertical[(c, r)]):
                cell.halfedges.append(HalfEdge(edge_idx, idx))
            for nc, nr in ((c, r - 1), (c + 1, r), (c, r + 1), (c - 1, r)):
                neighbor = cell_idx(nc, nr)
                if neighbor is not None:
                    cell.neighbors.append(neighbor)
            cells.append(cell)

    return Diagram(vertices=vertices, cells=cells, edges=edges)


@pytest.fixture
def grid_diagram():
    """3 x 3 grid of 10 x 10 cells covering a 30 x 30 square."""
    return make_grid_diagram(3, 10.0)


@pytest.fixture
def grid_mesh(grid_diagram):
    """Mesh built from the 3 x 3 grid."""
    return build_mesh(grid_diagram)


@pytest.fixture
def grid_factory():
    """Factory for grids of other sizes."""
    return make_grid_diagram

"""Tests for bounded Voronoi diagram computation and site sampling."""

import numpy as np
import pytest
from scipy.spatial.distance import pdist

from py_encounter_map.core.diagram import BoundingBox
from py_encounter_map.core.sampling import sample_sites
from py_encounter_map.core.voronoi_diagram import compute_diagram, get_mirrored_sites

BBOX = BoundingBox(xl=0, xr=100, yt=0, yb=80)


def cell_area(diagram, idx):
    """Area of a convex cell as the sum of site-edge triangles."""
    cell = diagram.cells[idx]
    area = 0.0
    for halfedge in cell.halfedges:
        edge = diagram.edges[halfedge.edge]
        ax, ay = edge.va.x - cell.site.x, edge.va.y - cell.site.y
        bx, by = edge.vb.x - cell.site.x, edge.vb.y - cell.site.y
        area += abs(ax * by - ay * bx) / 2
    return area


class TestMirroredSites:
    """Test site reflection across the bounding box."""

    def test_four_reflections_per_site(self):
        sites = np.array([[10.0, 20.0], [50.0, 40.0]])
        mirrors = get_mirrored_sites(sites, BBOX)

        assert mirrors.shape == (8, 2)
        assert [-10.0, 20.0] in mirrors.tolist()
        assert [190.0, 20.0] in mirrors.tolist()
        assert [10.0, -20.0] in mirrors.tolist()
        assert [10.0, 140.0] in mirrors.tolist()

    def test_site_on_side_not_reflected(self):
        sites = np.array([[0.0, 20.0]])
        mirrors = get_mirrored_sites(sites, BBOX)

        assert mirrors.shape == (3, 2)


class TestComputeDiagram:
    """Test Voronoi diagram computation."""

    @pytest.fixture
    def diagram(self):
        rng = np.random.default_rng(7)
        sites = np.column_stack([rng.uniform(1, 99, 50), rng.uniform(1, 79, 50)])
        return compute_diagram(sites, BBOX)

    def test_one_cell_per_site(self, diagram):
        assert len(diagram.cells) == 50

    def test_vertices_inside_box(self, diagram):
        for vertex in diagram.vertices:
            assert BBOX.xl <= vertex.x <= BBOX.xr
            assert BBOX.yt <= vertex.y <= BBOX.yb

    def test_cells_tile_the_box(self, diagram):
        """Clipped cells cover the box exactly."""
        total = sum(cell_area(diagram, i) for i in range(len(diagram.cells)))
        assert total == pytest.approx(100 * 80, rel=1e-6)

    def test_cells_are_closed(self, diagram):
        """Every vertex of a cell is shared by exactly two of its half-edges."""
        for cell in diagram.cells:
            assert len(cell.halfedges) >= 3
            counts = {}
            for halfedge in cell.halfedges:
                edge = diagram.edge_of(halfedge)
                for vertex in (edge.va, edge.vb):
                    counts[id(vertex)] = counts.get(id(vertex), 0) + 1
            assert set(counts.values()) == {2}

    def test_neighbors_symmetric(self, diagram):
        for i, cell in enumerate(diagram.cells):
            for neighbor in cell.neighbors:
                assert i in diagram.cells[neighbor].neighbors

    def test_halfedges_reference_owner(self, diagram):
        for i, cell in enumerate(diagram.cells):
            for halfedge in cell.halfedges:
                assert halfedge.cell == i
                edge = diagram.edge_of(halfedge)
                assert i in (edge.left_cell, edge.right_cell)

    def test_halfedges_counter_clockwise(self, diagram):
        cell = diagram.cells[0]
        angles = []
        for halfedge in cell.halfedges:
            edge = diagram.edge_of(halfedge)
            mx = (edge.va.x + edge.vb.x) / 2
            my = (edge.va.y + edge.vb.y) / 2
            angles.append(np.arctan2(my - cell.site.y, mx - cell.site.x))
        assert angles == sorted(angles)

    def test_single_site_fills_box(self):
        diagram = compute_diagram(np.array([[30.0, 40.0]]), BBOX)

        assert len(diagram.cells) == 1
        assert len(diagram.edges) == 4
        assert all(edge.right_cell is None for edge in diagram.edges)
        assert cell_area(diagram, 0) == pytest.approx(100 * 80)
        corners = sorted((round(v.x, 6), round(v.y, 6)) for v in diagram.vertices)
        assert corners == [(0, 0), (0, 80), (100, 0), (100, 80)]

    def test_no_sites(self):
        with pytest.raises(ValueError):
            compute_diagram(np.empty((0, 2)), BBOX)


class TestSampleSites:
    """Test Poisson-disk site sampling."""

    def test_minimum_distance(self):
        sites = sample_sites(100, 60, 8, np.random.default_rng(3))

        assert len(sites) > 10
        assert pdist(sites).min() >= 8 - 1e-9

    def test_inside_rectangle(self):
        sites = sample_sites(100, 60, 8, np.random.default_rng(3))

        assert np.all(sites[:, 0] >= 0) and np.all(sites[:, 0] <= 100)
        assert np.all(sites[:, 1] >= 0) and np.all(sites[:, 1] <= 60)

    def test_elongated_rectangle(self):
        """A long thin strip is sampled within its own bounds."""
        sites = sample_sites(400, 4, 1, np.random.default_rng(8))

        assert len(sites) > 100
        assert pdist(sites).min() >= 1 - 1e-9
        assert np.all(sites[:, 0] >= 0) and np.all(sites[:, 0] <= 400)
        assert np.all(sites[:, 1] >= 0) and np.all(sites[:, 1] <= 4)
        # Sites spread along the whole strip
        assert sites[:, 0].max() > 300

    def test_reproducible(self):
        sites1 = sample_sites(50, 50, 5, np.random.default_rng(11))
        sites2 = sample_sites(50, 50, 5, np.random.default_rng(11))

        np.testing.assert_array_equal(sites1, sites2)

    def test_distance_larger_than_area(self):
        sites = sample_sites(10, 10, 50, np.random.default_rng(0))

        assert sites.shape == (1, 2)

    @pytest.mark.parametrize("width,height,min_distance", [(0, 10, 1), (10, -1, 1), (10, 10, 0)])
    def test_invalid_arguments(self, width, height, min_distance):
        with pytest.raises(ValueError):
            sample_sites(width, height, min_distance, np.random.default_rng(0))

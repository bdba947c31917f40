"""
Mesh construction from a planar subdivision.

Converts a diagram (vertices, cells, edges) into cross-linked arenas of
points, borders and regions. Entities are resolved purely from their
geometric keys, so any engine honouring the ``Diagram`` contract works.
Lookups that miss (clipped or degenerate geometry) are skipped and counted
rather than treated as errors.
"""

import time

import structlog

from .diagram import Diagram
from .mesh import Border, Mesh, Point, Region, border_key, position_key

logger = structlog.get_logger()


def create_locations(mesh: Mesh, diagram: Diagram) -> None:
    """
    Pass 1: one point per distinct vertex, one region per distinct site.

    Args:
        mesh: Empty mesh to populate
        diagram: Source diagram
    """
    for vertex in diagram.vertices:
        key = position_key(vertex.x, vertex.y, mesh.precision)
        if key in mesh.point_index:
            mesh.stats.duplicate_points += 1
            continue
        point = Point(id=len(mesh.points), pos=(vertex.x, vertex.y))
        mesh.points.append(point)
        mesh.point_index[key] = point.id

    for cell in diagram.cells:
        key = position_key(cell.site.x, cell.site.y, mesh.precision)
        if key in mesh.region_index:
            mesh.stats.duplicate_regions += 1
            continue
        region = Region(id=len(mesh.regions), pos=(cell.site.x, cell.site.y))
        mesh.regions.append(region)
        mesh.region_index[key] = region.id


def create_borders(mesh: Mesh, diagram: Diagram) -> None:
    """Pass 2: one border per distinct edge, linked to its endpoint points."""
    for edge_idx, edge in enumerate(diagram.edges):
        key = border_key(edge.va.pos, edge.vb.pos, mesh.precision)
        if key in mesh.border_index:
            mesh.stats.duplicate_borders += 1
            continue

        border = Border(id=len(mesh.borders), va=edge.va.pos, vb=edge.vb.pos, edge=edge_idx)

        for vertex in (edge.va, edge.vb):
            point = mesh.find_point(vertex.x, vertex.y)
            if point is None:
                mesh.stats.skipped_point_lookups += 1
                continue
            border.add_point(point.id)
            point.add_border(border.id)

        mesh.borders.append(border)
        mesh.border_index[key] = border.id


def link_regions(mesh: Mesh, diagram: Diagram) -> None:
    """Pass 3: attach points and borders to regions and link neighbor regions."""
    for cell in diagram.cells:
        region = mesh.find_region(cell.site.x, cell.site.y)
        if region is None:
            mesh.stats.skipped_region_lookups += 1
            continue

        for halfedge in cell.halfedges:
            edge = diagram.edge_of(halfedge)

            for vertex in (edge.va, edge.vb):
                point = mesh.find_point(vertex.x, vertex.y)
                if point is None:
                    mesh.stats.skipped_point_lookups += 1
                    continue
                region.add_point(point.id)
                point.add_region(region.id)

            border = mesh.find_border(edge.va.pos, edge.vb.pos)
            if border is None:
                mesh.stats.skipped_border_lookups += 1
                continue
            region.add_border(border.id)
            border.add_region(region.id)

        for neighbor_idx in cell.neighbors:
            if neighbor_idx < 0 or neighbor_idx >= len(diagram.cells):
                mesh.stats.skipped_region_lookups += 1
                continue
            site = diagram.cells[neighbor_idx].site
            neighbor = mesh.find_region(site.x, site.y)
            if neighbor is None:
                mesh.stats.skipped_region_lookups += 1
                continue
            if neighbor.id != region.id:
                region.add_neighbor(neighbor.id)
                neighbor.add_neighbor(region.id)


def link_neighbors(mesh: Mesh) -> None:
    """
    Pass 4: derive border and point adjacency from shared membership.

    Borders sharing a point are neighbors; points sharing a border are
    neighbors. Both relations are linked in both directions.
    """
    for border in mesh.borders:
        for point_a_id in border.points:
            point_a = mesh.points[point_a_id]

            for other_id in point_a.borders:
                if other_id != border.id:
                    border.add_neighbor(other_id)
                    mesh.borders[other_id].add_neighbor(border.id)

            for point_b_id in border.points:
                if point_a_id != point_b_id:
                    point_a.add_neighbor(point_b_id)
                    mesh.points[point_b_id].add_neighbor(point_a_id)


def build_mesh(diagram: Diagram, precision: int = 6) -> Mesh:
    """
    Build the complete point/border/region graph for a diagram.

    Args:
        diagram: Planar subdivision to upgrade
        precision: Decimals kept in position keys

    Returns:
        Populated mesh with position caches and build statistics
    """
    mesh = Mesh(precision=precision)

    started = time.perf_counter()
    create_locations(mesh, diagram)
    logger.debug("Locations created", points=len(mesh.points), regions=len(mesh.regions),
                 elapsed=round(time.perf_counter() - started, 4))

    started = time.perf_counter()
    create_borders(mesh, diagram)
    link_regions(mesh, diagram)
    link_neighbors(mesh)
    mesh.finalize()

    logger.info("Mesh built",
                points=len(mesh.points),
                borders=len(mesh.borders),
                regions=len(mesh.regions),
                skipped_lookups=mesh.stats.skipped_lookups,
                elapsed=round(time.perf_counter() - started, 4))
    return mesh

"""
Geographic features on the mesh.

This module handles:
- Land/sea classification of points and regions by sea level
- Coastal border detection
- Coastline extraction as connected runs of coastal borders
"""

from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Set

import structlog

from .mesh import Mesh

logger = structlog.get_logger()


@dataclass
class LandSeaSummary:
    """Counts produced by a land/sea classification."""
    sea_level: float
    land_points: int
    land_regions: int
    coastal_borders: int


def set_land_and_sea(mesh: Mesh, sea_level: float) -> LandSeaSummary:
    """
    Tag land and sea, then mark coastal borders.

    A location is land when its height is strictly above ``sea_level``. A
    border is coastal when its regions include both land and sea, so a
    border with a single region never is. Tags are recomputed from scratch
    on every call.

    Args:
        mesh: Mesh with shaped heights
        sea_level: Land threshold

    Returns:
        Summary counts of the classification
    """
    land_points = 0
    for point in mesh.points:
        point.land = point.height > sea_level
        land_points += point.land

    land_regions = 0
    for region in mesh.regions:
        region.land = region.height > sea_level
        land_regions += region.land

    coastal = 0
    for border in mesh.borders:
        has_land = False
        has_sea = False
        for region_id in border.regions:
            if mesh.regions[region_id].land:
                has_land = True
            else:
                has_sea = True
        border.coast = has_land and has_sea
        coastal += border.coast

    summary = LandSeaSummary(sea_level=sea_level, land_points=land_points,
                             land_regions=land_regions, coastal_borders=coastal)
    logger.info("Land and sea classified",
                sea_level=sea_level, land_points=land_points,
                land_regions=land_regions, coastal_borders=coastal)
    return summary


def coastal_neighbors(mesh: Mesh, border_id: int) -> List[int]:
    """Coastal borders sharing a point with the given border."""
    return [n for n in mesh.borders[border_id].neighbors if mesh.borders[n].coast]


def find_coast_start(mesh: Mesh, border_id: int) -> Optional[int]:
    """
    Find a border to start walking a coastline from.

    Searches the coastal component containing ``border_id`` breadth-first
    for an end of the coastline, a coastal border with at most one coastal
    neighbor. Closed loops have no end, in which case ``border_id`` itself
    is the start.

    Args:
        mesh: Classified mesh
        border_id: A border of the component

    Returns:
        Start border id, or None if ``border_id`` is not coastal
    """
    if not mesh.borders[border_id].coast:
        return None

    seen = {border_id}
    queue = deque([border_id])
    while queue:
        current = queue.popleft()
        neighbors = coastal_neighbors(mesh, current)
        if len(neighbors) <= 1:
            return current
        for neighbor in neighbors:
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)

    return border_id


def get_coast_lines(mesh: Mesh) -> List[List[int]]:
    """
    Extract coastlines as lists of coastal border ids.

    Each coastal component is walked depth-first from its start border.
    Every coastal border appears in exactly one coastline. Where three or
    more coastal borders meet, consecutive entries of a coastline are not
    necessarily adjacent.

    Args:
        mesh: Mesh classified with set_land_and_sea

    Returns:
        List of coastlines in discovery order
    """
    coasts: List[List[int]] = []
    added: Set[int] = set()

    for border in mesh.borders:
        if not border.coast or border.id in added:
            continue

        start = find_coast_start(mesh, border.id)
        if start is None:
            continue

        coast: List[int] = []
        stack = [start]
        while stack:
            current = stack.pop()
            if not mesh.borders[current].coast:
                break
            if current not in added:
                added.add(current)
                coast.append(current)
                stack.extend(coastal_neighbors(mesh, current))

        if coast:
            coasts.append(coast)

    logger.info("Coastlines extracted", coastlines=len(coasts), borders=len(added))
    return coasts

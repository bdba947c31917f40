"""
Encounter map generation: Voronoi mesh, terrain kernels and coastlines.
"""

from .core import EncounterMap, RangePlacement, PlacementExhausted

__all__ = ['EncounterMap', 'RangePlacement', 'PlacementExhausted']

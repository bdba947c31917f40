#!/usr/bin/env python3
"""
Simple demo script showing encounter map generation.
"""

from py_encounter_map import EncounterMap
from py_encounter_map.config import settings
from py_encounter_map.logging_config import configure_logging


def main():
    """Demonstrate mesh building, terrain shaping and coastlines."""
    configure_logging(settings.log_level, settings.log_format)

    print("Encounter Map Demo")
    print("=" * 40)

    width, height, min_dist = 200, 150, 8
    encounter_map = EncounterMap(width, height, min_dist, seed=42)
    print(f"\nRegions: {len(encounter_map.regions)}")
    print(f"Borders: {len(encounter_map.borders)}")
    print(f"Points:  {len(encounter_map.points)}")

    encounter_map.add_hill((60, 70), 40, 6)
    encounter_map.add_cone((150, 50), 25, 5)
    encounter_map.add_slope((0, 140), (1, 0), 30, -2)
    result = encounter_map.add_range((120, 100), (1, 0.3), 6, 30, 4, 8)
    print(f"\nRange: placed {result.placed}/{result.requested} features in {result.scans} scans")

    summary = encounter_map.set_land_and_sea()
    land_pct = summary.land_regions / len(encounter_map.regions) * 100
    print(f"Land regions: {summary.land_regions} ({land_pct:.1f}%)")

    coasts = encounter_map.get_coast_lines()
    print(f"\nCoastlines: {len(coasts)}")
    for i, coast in enumerate(sorted(coasts, key=len, reverse=True)[:5]):
        print(f"  #{i + 1}: {len(coast)} borders")


if __name__ == "__main__":
    main()

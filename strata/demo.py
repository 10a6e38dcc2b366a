#!/usr/bin/env python3
"""
Strata - Demo
Generates a terrain from the runtime settings (STRATA_* environment
variables), prints statistics and an ASCII map, then walks a path across
the surface.

Usage:
    python -m strata.demo
"""

import sys
import time
from collections import Counter

from strata.catalog import descriptor
from strata.config import LayerKind, TileId, get_preset
from strata.generation.pipeline import generate
from strata.interface import TerrainInterface
from strata.settings import configure_logging, get_settings


def print_section(title):
    """Print a formatted section header"""
    print(f"\n{'='*70}")
    print(f"  {title}")
    print(f"{'='*70}\n")


def demo_terrain():
    """Generate a terrain and report on it"""
    settings = get_settings()

    print_section("STRATA - TERRAIN GENERATION")
    print("Terrain Configuration:")
    print(f"  Seed: {settings.seed}")
    print(f"  Size: {settings.width}x{settings.height}")
    print(f"  Preset: {settings.preset}")

    start_time = time.time()
    terrain = generate(
        settings.seed,
        settings.width,
        settings.height,
        get_preset(settings.preset),
    )
    generation_time = time.time() - start_time

    print_section("GENERATION COMPLETE")
    print(f"Total generation time: {generation_time:.2f} seconds")
    print(f"Terrain ID: {terrain.metadata.terrain_id}")
    print(f"Status: {terrain.metadata.status}")

    print_section("TERRAIN ANALYSIS")

    for kind in LayerKind:
        layer = terrain.layer(kind)
        counts = Counter(int(tile_id) for tile_id in layer.ids.flat)
        counts.pop(int(TileId.EMPTY), None)

        print(f"{kind.name.title()} Tiles:")
        if not counts:
            print("  (none)")
        for tile_id, count in sorted(counts.items()):
            print(f"  {descriptor(TileId(tile_id)).name:20s} {count:7d}")

    total = terrain.width * terrain.height
    walkable = terrain.walkability.count()
    print(f"\nWalkable cells: {walkable} ({walkable / total * 100:.1f}%)")

    print_section("MAP")
    print(terrain.to_ascii())

    print_section("PATH ACROSS THE SURFACE")

    walkable_cells = [
        (x, y)
        for x in range(terrain.width)
        for y in range(terrain.height - 1, -1, -1)
        if terrain.is_walkable(x, y)
    ]
    if len(walkable_cells) < 2:
        print("Not enough walkable cells for a path.")
        return terrain

    start, end = walkable_cells[0], walkable_cells[-1]
    result = TerrainInterface(terrain).find_path(start, end)
    if result.success:
        print(f"Path {start} -> {end}: {len(result.path)} cells, cost {result.total_cost}")
    else:
        print(f"No path from {start} to {end}")

    return terrain


def main():
    """Main demo function"""
    configure_logging()

    try:
        demo_terrain()
    except KeyboardInterrupt:
        print("\n\nDemo interrupted by user.")
        sys.exit(0)


if __name__ == "__main__":
    main()

import sys
import time

import numpy

import logutil
import mapgen
from areas import AreaRegistry
from blocks import DEFAULT_PALETTE
from grid import SectorGrid


def format_height_map(h_map, offset=0, title=None):
    """Hex height map, one row per z. Heights are shifted by `offset`; empty columns print as --."""
    lines = []
    if title:
        lines.append(title)
    for z in range(h_map.shape[1]):
        row = []
        for x in range(h_map.shape[0]):
            val = int(h_map[x, z])
            if val < 0:
                cell = "--"
            else:
                cell = f"{min(255, val + offset):02X}"
            row.append(cell)
        lines.append(" ".join(row))
    return "\n".join(lines)


def main():
    seed = None
    if len(sys.argv) > 1:
        try:
            seed = int(sys.argv[1])
        except ValueError:
            logutil.log("MAIN", f"ignoring bad seed {sys.argv[1]!r}", level="WARN")
    area_key = sys.argv[2] if len(sys.argv) > 2 else 'VILLAGE_CENTER'
    grid = SectorGrid()
    areas = AreaRegistry.from_config()
    start = time.time()
    report = mapgen.generate_world(grid, area_registry=areas, block_palette=DEFAULT_PALETTE, seed=seed)
    logutil.log("MAIN", f"generated in {time.time() - start:.1f}s, {grid.write_count} writes, "
                f"{len(grid.sectors)} sectors")
    area = areas.get(area_key)
    if area is None:
        logutil.log("MAIN", f"unknown area {area_key!r}", level="WARN")
        return 1
    heights = grid.height_map(area.start_x, area.start_z, area.width, area.depth)
    # shift so the bottom of the world prints as 00
    shown = numpy.where(heights < 0, -1, heights - grid.min_y)
    print(format_height_map(shown, title=f"{area.name} heights above y={grid.min_y}"))
    return 0 if report.ok else 1


if __name__ == '__main__':
    sys.exit(main())

"""Statistics over generated terrain.

Used to check that generation keeps rare types rare while clumping them
together. Grids are (rows, width) integer arrays of tile ids, row 0 being
the oldest generated row.

Usage:
    world.reset(7, 16)
    grid = sample_terrain(world, rows=2000)
    freqs = tile_frequencies(grid, world.catalog.tile_count)
    cond, base = conditional_frequency(grid, tile_id=1)
"""

from typing import Tuple

import numpy as np

from ..world import World


def sample_terrain(world: World, rows: int) -> np.ndarray:
    """Generate ``rows`` new rows through the world's generator.

    The grid height is kept constant the same way scrolling does, but no
    objects are generated and the player is not moved.

    Returns:
        int array of shape (rows, width).
    """
    if world.height == 0:
        raise ValueError("World must be reset before sampling terrain")

    out = np.zeros((rows, world.width), dtype=np.int32)
    for i in range(rows):
        world.tiles.pop(0)
        world.generator.generate_row(world)
        out[i] = world.tiles[-1]
    return out


def tile_frequencies(grid: np.ndarray, n_types: int) -> np.ndarray:
    """Fraction of cells holding each tile id."""
    counts = np.bincount(grid.ravel(), minlength=n_types).astype(np.float64)
    return counts / max(grid.size, 1)


def conditional_frequency(grid: np.ndarray, tile_id: int) -> Tuple[float, float]:
    """Clustering measure for one tile type.

    Compares the frequency of ``tile_id`` in cells whose previous-row
    neighborhood (the three cells below, clipped at the edges) contains
    ``tile_id`` with its overall frequency. A ratio well above 1 means the
    type clumps.

    Returns:
        (conditional frequency, base frequency). Conditional is 0.0 when no
        cell has a matching neighbor.
    """
    match = grid == tile_id
    base = float(match.mean()) if grid.size else 0.0

    below = match[:-1]
    # Any match among left-below, below, right-below
    neighborhood = below.copy()
    neighborhood[:, 1:] |= below[:, :-1]
    neighborhood[:, :-1] |= below[:, 1:]

    current = match[1:]
    n = int(neighborhood.sum())
    if n == 0:
        return 0.0, base
    return float(current[neighborhood].sum()) / n, base


def run_lengths(grid: np.ndarray, tile_id: int) -> np.ndarray:
    """Lengths of vertical runs of ``tile_id``, over every column."""
    lengths = []
    for column in (grid == tile_id).T:
        run = 0
        for hit in column:
            if hit:
                run += 1
            elif run:
                lengths.append(run)
                run = 0
        if run:
            lengths.append(run)
    return np.array(lengths, dtype=np.int64)

"""Offline analysis of generated courses."""

from .terrain_stats import sample_terrain, tile_frequencies, conditional_frequency, run_lengths

__all__ = [
    "sample_terrain",
    "tile_frequencies",
    "conditional_frequency",
    "run_lengths",
]

"""Grid environment for mazechase levels."""

from .grid import GLYPH_TILES, TILE_ALIASES, TILE_GLYPHS, Grid, Position, Tile
from .schemas import GridState, PositionState
from .helpers import (
    NEIGHBOR_DELTAS,
    goal_reachable,
    grid_shortest_path,
    parse_layout,
    render_ascii,
)

__all__ = [
    "Grid",
    "Position",
    "Tile",
    "TILE_ALIASES",
    "TILE_GLYPHS",
    "GLYPH_TILES",
    "GridState",
    "PositionState",
    "NEIGHBOR_DELTAS",
    "goal_reachable",
    "grid_shortest_path",
    "parse_layout",
    "render_ascii",
]

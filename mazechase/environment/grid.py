"""Tile grid primitives for maze levels.

The grid is the only place tiles are read or written. Every access is bounds
checked: reads outside the grid return ``None`` and writes outside the grid
are ignored, so callers never index past the border wall by accident.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence


class Tile(str, Enum):
    """Semantic label of one grid cell."""

    EMPTY = "empty"
    WALL = "wall"
    PLAYER = "player"
    PURSUER = "pursuer"
    HAZARD = "hazard"
    GOAL = "goal"
    OBSTACLE = "obstacle"

    @property
    def is_blocking(self) -> bool:
        """Impassable for the player and for pursuers."""
        return self in (Tile.WALL, Tile.OBSTACLE)

    @property
    def is_lethal(self) -> bool:
        """Ends the session when the player steps onto it."""
        return self in (Tile.PURSUER, Tile.HAZARD)

    @classmethod
    def parse(cls, label: str) -> "Tile":
        """Return the tile for a label, accepting the themed aliases.

        Raises:
            ValueError: If the label is not a known tile or alias.
        """
        if isinstance(label, Tile):
            return label
        key = str(label).strip().lower()
        key = TILE_ALIASES.get(key, key)
        return cls(key)


# Themed labels used by the original level catalogue.
TILE_ALIASES = {
    "zombie": Tile.PURSUER.value,
    "spider": Tile.HAZARD.value,
    "cobweb": Tile.OBSTACLE.value,
}

# Compact single-character layout encoding.
TILE_GLYPHS = {
    Tile.EMPTY: ".",
    Tile.WALL: "#",
    Tile.PLAYER: "@",
    Tile.PURSUER: "Z",
    Tile.HAZARD: "x",
    Tile.GOAL: "G",
    Tile.OBSTACLE: "%",
}
GLYPH_TILES = {glyph: tile for tile, glyph in TILE_GLYPHS.items()}


@dataclass(frozen=True)
class Position:
    """Integer grid coordinate; ``x`` is the column, ``y`` the row."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


class Grid:
    """Rectangular matrix of tiles with bounds-checked access."""

    def __init__(self, rows: Sequence[Sequence[Tile]]):
        if not rows or not rows[0]:
            raise ValueError("Grid must have at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Grid rows must all have the same length")
        # Own a private copy so the source definition is never mutated.
        self._cells: List[List[Tile]] = [[Tile.parse(cell) for cell in row] for row in rows]
        self.width = width
        self.height = len(rows)

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def get(self, position: Position) -> Optional[Tile]:
        """Return the tile at ``position`` or ``None`` when off-grid."""
        if not self.in_bounds(position):
            return None
        return self._cells[position.y][position.x]

    def set(self, position: Position, tile: Tile) -> bool:
        """Write ``tile`` at ``position``. Returns False (no-op) when off-grid."""
        if not self.in_bounds(position):
            return False
        self._cells[position.y][position.x] = tile
        return True

    def find(self, tile: Tile) -> Iterator[Position]:
        """Yield every position holding ``tile`` in row-major order."""
        for y, row in enumerate(self._cells):
            for x, cell in enumerate(row):
                if cell is tile:
                    yield Position(x, y)

    def copy(self) -> "Grid":
        return Grid(self._cells)

    def rows(self) -> List[List[Tile]]:
        """Return a detached copy of the tile rows."""
        return [list(row) for row in self._cells]

    def labels(self) -> List[List[str]]:
        return [[cell.value for cell in row] for row in self._cells]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

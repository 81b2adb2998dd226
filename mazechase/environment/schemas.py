"""Pydantic schemas for grid snapshots.

These models mirror the mutable ``Grid`` in ``grid.py`` but stay detached
from the live session, so renderers and tests can hold on to a snapshot
while the engine keeps mutating its own grid.
"""

from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, Field

from .grid import Grid, Position, Tile


class PositionState(BaseModel):
    """Serializable ``(x, y)`` coordinate."""

    x: int
    y: int

    @classmethod
    def from_position(cls, position: Position) -> "PositionState":
        return cls(x=position.x, y=position.y)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


class GridState(BaseModel):
    """Dense copy of a grid, row-major, ``rows[y][x]``."""

    width: int
    height: int
    rows: List[List[Tile]] = Field(
        default_factory=list,
        description="Tile rows; rows[y][x] is the tile at column x, row y",
    )

    @classmethod
    def from_grid(cls, grid: Grid) -> "GridState":
        return cls(width=grid.width, height=grid.height, rows=grid.rows())

    def tile_at(self, x: int, y: int) -> Tile | None:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.rows[y][x]
        return None

    def to_grid(self) -> Grid:
        return Grid(self.rows)

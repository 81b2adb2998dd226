"""
Pydantic schemas for the mazechase engine.

All data structures that cross the engine boundary are defined here:
level definitions coming in from the catalogue, and render snapshots going
out to presentation code.

Design Philosophy:
- Level data is validated once, when the catalogue is built, so the engine
  can trust every grid it loads
- Snapshots are detached copies; holding one never aliases live engine state
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from mazechase.environment import (
    Grid,
    GridState,
    PositionState,
    Tile,
    parse_layout,
)


# ============================================================================
# Enumerations
# ============================================================================


class Direction(Enum):
    """Directional intent delivered by an input binding as a unit delta."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @classmethod
    def from_key(cls, key: str) -> "Direction":
        """Map a key name (``"up"``, ``"ArrowLeft"``, ``"R"`` ...) to a direction.

        Raises:
            ValueError: If the key does not name a direction.
        """
        normalized = key.strip().lower().removeprefix("arrow")
        aliases = {"u": "up", "d": "down", "l": "left", "r": "right"}
        normalized = aliases.get(normalized, normalized)
        try:
            return cls[normalized.upper()]
        except KeyError:
            raise ValueError(f"Unknown direction key: {key!r}") from None


class Outcome(str, Enum):
    """Session lifecycle: ACTIVE until exactly one terminal state."""

    ACTIVE = "active"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.ACTIVE


class MoveResult(str, Enum):
    """The single effect a ``move_player`` call had."""

    REJECTED = "rejected"  # No session, frozen session, off-grid, or blocked tile
    COMMITTED = "committed"
    LOST = "lost"
    WON = "won"


# ============================================================================
# Level Data
# ============================================================================


class LevelDefinition(BaseModel):
    """One level of the catalogue: a validated rectangular tile matrix.

    Accepts either ``grid`` (rows of tile labels, themed aliases such as
    ``"zombie"`` allowed) or ``layout`` (compact glyph strings). Validation
    enforces the level data contract: identical row lengths, exactly one
    player start and at least one goal. Goal reachability is not checked
    here; see ``LevelCatalogue(require_reachable_goal=True)``.
    """

    name: str = Field("", description="Human-friendly level title")
    description: str = Field("", description="Optional flavour text")
    grid: List[List[Tile]] = Field(..., description="Tile rows; grid[y][x]")

    @model_validator(mode="before")
    @classmethod
    def _expand_layout(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "layout" not in data:
            return data
        if "grid" in data:
            raise ValueError("Level must define either 'grid' or 'layout', not both")
        data = dict(data)
        data["grid"] = parse_layout(data.pop("layout"))
        return data

    @field_validator("grid", mode="before")
    @classmethod
    def _parse_labels(cls, rows: Any) -> Any:
        if not isinstance(rows, list):
            return rows
        return [
            [Tile.parse(cell) for cell in row] if isinstance(row, list) else row
            for row in rows
        ]

    @model_validator(mode="after")
    def _check_contract(self) -> "LevelDefinition":
        if not self.grid or not self.grid[0]:
            raise ValueError("Level grid must not be empty")

        width = len(self.grid[0])
        for y, row in enumerate(self.grid):
            if len(row) != width:
                raise ValueError(
                    f"Level grid must be rectangular: row {y} has {len(row)} tiles, expected {width}"
                )

        players = sum(row.count(Tile.PLAYER) for row in self.grid)
        if players != 1:
            raise ValueError(f"Level grid must contain exactly one player start (found {players})")

        if not any(Tile.GOAL in row for row in self.grid):
            raise ValueError("Level grid must contain at least one goal")

        return self

    @property
    def width(self) -> int:
        return len(self.grid[0])

    @property
    def height(self) -> int:
        return len(self.grid)

    def to_grid(self) -> Grid:
        """Return a fresh, independently mutable grid for a new session."""
        return Grid(self.grid)


# ============================================================================
# Render Snapshot
# ============================================================================


class SessionSnapshot(BaseModel):
    """Read-only view of one session for presentation code."""

    level_index: int = Field(..., description="1-based catalogue index")
    grid: GridState
    player: PositionState
    pursuers: List[PositionState] = Field(default_factory=list)
    move_count: int = 0
    outcome: Outcome = Outcome.ACTIVE
    level_name: Optional[str] = None

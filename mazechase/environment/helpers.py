"""Utilities for maze grids: reachability and ASCII rendering."""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Tuple

from .grid import GLYPH_TILES, TILE_GLYPHS, Grid, Position, Tile
from .schemas import GridState

# Four-directional movement (up, down, left, right) matching player intents.
NEIGHBOR_DELTAS: Tuple[Tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


def grid_shortest_path(
    grid: Grid,
    start: Position,
    goal: Position,
    *,
    avoid_lethal: bool = True,
) -> Optional[List[Position]]:
    """Return a list of positions from start to goal using BFS.

    Only walks through tiles the player could enter without ending the
    session: blocking tiles are always skipped and, with ``avoid_lethal``,
    so are hazards and pursuers (at their start positions). Returns None when
    the goal cannot be reached. The path includes both endpoints.
    """

    if start == goal:
        return [start]

    visited = {start}
    queue: deque[Tuple[Position, List[Position]]] = deque([(start, [start])])

    def neighbors(position: Position) -> Iterable[Position]:
        for dx, dy in NEIGHBOR_DELTAS:
            candidate = position.offset(dx, dy)
            tile = grid.get(candidate)
            if tile is None or tile.is_blocking:
                continue
            if avoid_lethal and tile.is_lethal:
                continue
            yield candidate

    while queue:
        position, path = queue.popleft()
        for nb in neighbors(position):
            if nb in visited:
                continue
            visited.add(nb)
            new_path = path + [nb]
            if nb == goal:
                return new_path
            queue.append((nb, new_path))
    return None


def goal_reachable(grid: Grid, *, avoid_lethal: bool = True) -> bool:
    """True when some goal tile is reachable from the player start tile."""
    start = next(grid.find(Tile.PLAYER), None)
    if start is None:
        return False
    return any(
        grid_shortest_path(grid, start, goal, avoid_lethal=avoid_lethal) is not None
        for goal in grid.find(Tile.GOAL)
    )


def parse_layout(lines: Iterable[str]) -> List[List[Tile]]:
    """Decode compact glyph rows (``#`` wall, ``.`` empty, ``@`` player ...).

    Raises:
        ValueError: On an unknown glyph.
    """
    rows: List[List[Tile]] = []
    for y, line in enumerate(lines):
        row: List[Tile] = []
        for x, glyph in enumerate(line):
            tile = GLYPH_TILES.get(glyph)
            if tile is None:
                raise ValueError(f"Unknown layout glyph {glyph!r} at column {x}, row {y}")
            row.append(tile)
        rows.append(row)
    return rows


_LEGEND_LABELS: Dict[Tile, str] = {
    Tile.PLAYER: "player",
    Tile.PURSUER: "pursuer",
    Tile.HAZARD: "hazard",
    Tile.OBSTACLE: "obstacle",
    Tile.GOAL: "goal",
    Tile.WALL: "wall",
}


def render_ascii(
    grid: GridState | Grid,
    *,
    symbols: Optional[Dict[Tile, str]] = None,
    legend: bool = False,
) -> str:
    """Render a grid as text, one glyph per tile.

    Suitable for terminal demos and test failure messages. ``symbols``
    overrides individual glyphs; ``legend`` appends a key line.
    """

    mapping = {**TILE_GLYPHS}
    if symbols:
        mapping.update(symbols)

    rows = grid.rows if isinstance(grid, GridState) else grid.rows()
    lines = ["".join(mapping.get(tile, "?") for tile in row) for row in rows]

    if legend:
        key = "  ".join(f"{mapping[tile]} {label}" for tile, label in _LEGEND_LABELS.items())
        lines.append("")
        lines.append(key)

    return "\n".join(lines)

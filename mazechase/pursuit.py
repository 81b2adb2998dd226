"""
PursuitController: greedy pursuer movement, one tile per tick.

Each tick every pursuer takes one step toward the player. Pursuers are
resolved one after another in their load order (row-major scan of the
level), each seeing the grid as left by the pursuers before it:

1. The pursuer's own stamp is lifted so it cannot block itself.
2. Candidate steps are built from the delta to the player: the axis with
   the larger distance first, then the other axis, then the diagonal as a
   last resort when both deltas are non-zero. Ties go to the vertical axis.
3. The first candidate that is on the grid, not a wall, obstacle or
   pursuer, and not already claimed by an earlier pursuer this tick wins.
   No valid candidate means the pursuer stays put.
4. A pursuer whose step lands on the player ends the session; later
   pursuers are not evaluated.

Stamps are only written back once every destination is decided. Larger-axis
greed means a wall square in the pursuer's way can be used to shake it
off, which keeps the levels solvable.
"""

from typing import List, Optional, Set, Tuple

from .environment import Grid, Position, Tile
from .logging_utils import log_deterministic, pursuit_debug_enabled
from .maze_state import MazeState


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def candidate_steps(dx: int, dy: int) -> List[Tuple[int, int]]:
    """Ordered unit steps toward a target ``dx``, ``dy`` away (at most three)."""
    sx, sy = _sign(dx), _sign(dy)
    steps: List[Tuple[int, int]] = []

    if abs(dx) > abs(dy):
        steps.append((sx, 0))
        if dy != 0:
            steps.append((0, sy))
    elif dy != 0:
        steps.append((0, sy))
        if dx != 0:
            steps.append((sx, 0))

    if dx != 0 and dy != 0:
        steps.append((sx, sy))

    return steps


class PursuitController:
    """Advances every pursuer of a MazeState one step per ``step()`` call."""

    # Tiles a pursuer can never step onto.
    BLOCKED_TILES = frozenset({Tile.WALL, Tile.OBSTACLE, Tile.PURSUER})

    def __init__(self, state: MazeState, *, enabled: bool = True):
        """
        Args:
            state: The session whose pursuers this controller moves
            enabled: False freezes pursuers (static-hazard variant)
        """
        self.state = state
        self.enabled = enabled

    def step(self) -> bool:
        """Run one pursuit tick. Returns True if any pursuer changed tile.

        No-op when disabled, when no session is active, or when the level has
        no pursuers.
        """
        state = self.state
        grid = state.grid
        player = state.player
        if not self.enabled or not state.is_active or grid is None or player is None:
            return False

        origins = list(state.pursuers)
        if not origins:
            return False

        finals = list(origins)
        claimed: Set[Position] = set()
        caught = False

        for index, origin in enumerate(origins):
            state.lift_pursuer(origin)
            destination = self._choose_destination(grid, origin, player, claimed)
            finals[index] = destination
            claimed.add(destination)

            if pursuit_debug_enabled():
                log_deterministic(
                    f"[Pursuit] #{index} {origin.as_tuple()} -> {destination.as_tuple()}"
                )

            if destination == player:
                caught = True
                break

        state.place_pursuers(finals)

        if caught or player in finals:
            state.signal_game_over()

        return finals != origins

    def _choose_destination(
        self,
        grid: Grid,
        origin: Position,
        player: Position,
        claimed: Set[Position],
    ) -> Position:
        for dx, dy in candidate_steps(player.x - origin.x, player.y - origin.y):
            candidate = origin.offset(dx, dy)
            if self._can_enter(grid, candidate, claimed):
                return candidate
        return origin

    def _can_enter(self, grid: Grid, position: Position, claimed: Set[Position]) -> bool:
        tile: Optional[Tile] = grid.get(position)
        if tile is None or tile in self.BLOCKED_TILES:
            return False
        return position not in claimed

"""
MazeState: the single source of truth for one live level.

A MazeState owns the grid, the player position, the ordered pursuer
positions and the move counter of the current session. Presentation code
reads it; only ``initialize``, ``move_player`` and the PursuitController
mutate it.

Outcome contract:
- A session starts ACTIVE and ends in exactly one of WON or LOST
- The matching callback fires once, at the moment of the transition
- Afterwards the state is frozen: moves and pursuit ticks are no-ops until
  ``initialize`` loads a new session

Rejected moves are ordinary gameplay, not faults, so nothing here raises
for bad input; the return value says what happened.
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .catalogue import LevelCatalogue
from .environment import Grid, GridState, Position, PositionState, Tile
from .logging_utils import log_deterministic, verbose_enabled
from .schemas import Direction, LevelDefinition, MoveResult, Outcome, SessionSnapshot

OutcomeCallback = Callable[[], None]


class MazeState:
    """Grid, entity positions and outcome of the current session."""

    def __init__(
        self,
        catalogue: LevelCatalogue,
        *,
        on_level_complete: Optional[OutcomeCallback] = None,
        on_game_over: Optional[OutcomeCallback] = None,
    ):
        """Create an empty state bound to a catalogue.

        Args:
            catalogue: Source of level grids for ``initialize``
            on_level_complete: Called once when the player enters a goal
            on_game_over: Called once when the player is killed or caught
        """
        self.catalogue = catalogue
        self.on_level_complete = on_level_complete
        self.on_game_over = on_game_over

        self._level: Optional[LevelDefinition] = None
        self._level_index: Optional[int] = None
        self._grid: Optional[Grid] = None
        self._player: Optional[Position] = None
        self._pursuers: List[Position] = []
        # Tiles hidden under a pursuer (a hazard or goal it walked onto).
        # Anything not listed here is EMPTY underneath.
        self._underlay: Dict[Position, Tile] = {}
        self._move_count = 0
        self._outcome: Optional[Outcome] = None

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def initialize(self, level_index: int) -> bool:
        """Load a fresh session for a 1-based level index.

        Deep-copies the level grid, records the player start and every pursuer
        start in row-major order, and resets the move counter and outcome.

        Returns:
            True when a session was loaded. An out-of-range index is a caller
            contract violation and is ignored (returns False, current session
            untouched).
        """
        level = self.catalogue.get(level_index)
        if level is None:
            return False

        grid = level.to_grid()
        player = next(grid.find(Tile.PLAYER), None)
        if player is None:  # pragma: no cover - LevelDefinition guarantees a start
            return False

        self._level = level
        self._level_index = level_index
        self._grid = grid
        self._player = player
        self._pursuers = list(grid.find(Tile.PURSUER))
        self._underlay = {}
        self._move_count = 0
        self._outcome = Outcome.ACTIVE

        if verbose_enabled():
            log_deterministic(
                f"[Maze] Level {level_index} loaded: {grid.width}x{grid.height}, "
                f"player at {player.as_tuple()}, {len(self._pursuers)} pursuer(s)"
            )
        return True

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._grid is not None

    @property
    def is_active(self) -> bool:
        return self._outcome is Outcome.ACTIVE

    @property
    def grid(self) -> Optional[Grid]:
        """The live grid. Use ``snapshot()`` for a detached copy."""
        return self._grid

    @property
    def player(self) -> Optional[Position]:
        return self._player

    @property
    def pursuers(self) -> Tuple[Position, ...]:
        return tuple(self._pursuers)

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def outcome(self) -> Optional[Outcome]:
        """None before the first ``initialize``."""
        return self._outcome

    @property
    def level_index(self) -> Optional[int]:
        return self._level_index

    def snapshot(self) -> Optional[SessionSnapshot]:
        """Detached render snapshot, or None when no session is loaded."""
        if self._grid is None or self._player is None or self._level_index is None:
            return None
        return SessionSnapshot(
            level_index=self._level_index,
            level_name=self._level.name if self._level else None,
            grid=GridState.from_grid(self._grid),
            player=PositionState.from_position(self._player),
            pursuers=[PositionState.from_position(p) for p in self._pursuers],
            move_count=self._move_count,
            outcome=self._outcome or Outcome.ACTIVE,
        )

    # ------------------------------------------------------------------
    # Player movement
    # ------------------------------------------------------------------

    def move(self, direction: Direction) -> MoveResult:
        return self.move_player(direction.dx, direction.dy)

    def move_player(self, dx: int, dy: int) -> MoveResult:
        """Try to move the player by a unit delta.

        Exactly one effect per call:
        - REJECTED: no session, frozen session, off-grid, wall or obstacle
        - LOST: target is a pursuer or hazard (game over fires, grid untouched)
        - WON: target is a goal (level complete fires, grid untouched)
        - COMMITTED: player moved one tile, move counter incremented

        Callers must only send unit deltas; magnitude is not checked.
        """
        if self._grid is None or self._player is None or not self.is_active:
            return MoveResult.REJECTED

        target = self._player.offset(dx, dy)
        tile = self._grid.get(target)

        if tile is None or tile.is_blocking:
            return MoveResult.REJECTED

        if tile.is_lethal:
            self._finish(Outcome.LOST, reason=f"player walked into {tile.value} at {target.as_tuple()}")
            return MoveResult.LOST

        if tile is Tile.GOAL:
            self._finish(Outcome.WON, reason=f"goal reached at {target.as_tuple()}")
            return MoveResult.WON

        self._grid.set(self._player, Tile.EMPTY)
        self._grid.set(target, Tile.PLAYER)
        self._player = target
        self._move_count += 1

        if verbose_enabled():
            log_deterministic(f"[Maze] Player -> {target.as_tuple()} (moves: {self._move_count})")
        return MoveResult.COMMITTED

    # ------------------------------------------------------------------
    # Pursuer bookkeeping (used by PursuitController)
    # ------------------------------------------------------------------

    def lift_pursuer(self, position: Position) -> None:
        """Remove a pursuer's stamp, restoring whatever it was standing on."""
        if self._grid is None:
            return
        self._grid.set(position, self._underlay.pop(position, Tile.EMPTY))

    def place_pursuers(self, positions: Sequence[Position]) -> None:
        """Commit final pursuer positions for this tick and stamp them."""
        if self._grid is None:
            return
        for position in positions:
            beneath = self._grid.get(position)
            if beneath in (Tile.HAZARD, Tile.GOAL):
                self._underlay[position] = beneath
            self._grid.set(position, Tile.PURSUER)
        self._pursuers = list(positions)

    def signal_game_over(self, reason: str = "player caught by a pursuer") -> bool:
        """Transition to LOST. Returns False if the session already ended."""
        return self._finish(Outcome.LOST, reason=reason)

    def _finish(self, outcome: Outcome, *, reason: str) -> bool:
        if not self.is_active:
            return False
        self._outcome = outcome

        if verbose_enabled():
            log_deterministic(f"[Maze] Session {outcome.value}: {reason}")

        callback = self.on_level_complete if outcome is Outcome.WON else self.on_game_over
        if callback is not None:
            callback()
        return True

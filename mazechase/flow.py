"""Application flow: which screen the game is on and which level is next.

    START --start_game--> PLAYING --(goal)--> LEVEL_COMPLETE --next_level--> PLAYING
                             |                       |
                             |  (last level goal) -> GAME_WON --start_game--> PLAYING
                             |
                             +--(caught/hazard)--> GAME_OVER --restart_level--> PLAYING
                                                             --start_game----> PLAYING (level 1)

``restart_level`` is also allowed from LEVEL_COMPLETE (replay the level just
cleared). The flow owns the session's outcome callbacks; presentation code
reads ``state`` and ``current_level`` to decide what to show.
"""

from enum import Enum
from typing import Callable, Optional

from .logging_utils import log_info
from .session import GameSession


class FlowState(str, Enum):
    START = "start"
    PLAYING = "playing"
    LEVEL_COMPLETE = "level_complete"
    GAME_WON = "game_won"
    GAME_OVER = "game_over"


class InvalidTransitionError(RuntimeError):
    """Raised when a flow action is not available on the current screen."""

    def __init__(self, action: str, state: FlowState) -> None:
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} while in state '{state.value}'")


class GameFlow:
    """Screen state machine sequencing levels of one GameSession."""

    def __init__(
        self,
        session: GameSession,
        *,
        on_state_change: Optional[Callable[[FlowState], None]] = None,
    ):
        self.session = session
        self.on_state_change = on_state_change
        self.state = FlowState.START
        self.current_level = 1

        session.on_level_complete = self.handle_level_complete
        session.on_game_over = self.handle_game_over

    @property
    def total_levels(self) -> int:
        return len(self.session.catalogue)

    def start_game(self, level_index: int = 1) -> None:
        """Begin (or begin again) at ``level_index``. Available from any screen.

        Raises:
            InvalidTransitionError: If the catalogue has no such level; the
                current screen and session are left as they were.
        """
        self._play(level_index)

    def next_level(self) -> None:
        if self.state is not FlowState.LEVEL_COMPLETE:
            raise InvalidTransitionError("advance to the next level", self.state)
        self._play(self.current_level + 1)

    def restart_level(self) -> None:
        if self.state not in (FlowState.LEVEL_COMPLETE, FlowState.GAME_OVER):
            raise InvalidTransitionError("restart the level", self.state)
        self._play(self.current_level)

    def handle_level_complete(self) -> None:
        if self.current_level < self.total_levels:
            self._set_state(FlowState.LEVEL_COMPLETE)
        else:
            self._set_state(FlowState.GAME_WON)

    def handle_game_over(self) -> None:
        self._set_state(FlowState.GAME_OVER)

    def _play(self, level_index: int) -> None:
        if not self.session.load(level_index):
            raise InvalidTransitionError(
                f"load level {level_index} of {self.total_levels}", self.state
            )
        self.current_level = level_index
        self._set_state(FlowState.PLAYING)

    def _set_state(self, state: FlowState) -> None:
        self.state = state
        log_info(f"[Flow] {state.value} (level {self.current_level}/{self.total_levels})")
        if self.on_state_change is not None:
            self.on_state_change(state)

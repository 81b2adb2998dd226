"""
GameSession: single-owner command loop around one MazeState.

Player input and pursuit timers never touch the engine directly. Each one
becomes a command on one queue, and the session applies commands strictly
in arrival order, so a move and the pursuit tick it triggers can never
interleave mid-update:

1. ``submit_move`` / ``submit_direction`` enqueue a MoveCommand
2. A committed move schedules a reactive TickCommand ``reactive_delay``
   seconds later (immediately, right behind the move, when the delay is 0
   or no event loop is driving the session)
3. While the session is open, a periodic task enqueues a TickCommand every
   ``tick_interval`` seconds
4. Every command is stamped with the session generation. Loading a level or
   reaching an outcome bumps the generation, so anything still queued or
   scheduled for the old session is dropped instead of applied

Two ways to drive it:
- Synchronous: ``load()``, ``submit_*()``, ``process_pending()``. No event
  loop and no wall-clock waits; used by tests and scripted replays.
- Asynchronous: ``async with session`` (or ``open()``/``close()``) starts the
  consumer and the periodic timer; ``join()`` waits for the queue to drain.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional, Set, Union

from .catalogue import LevelCatalogue, load_catalogue
from .config import Config
from .logging_utils import (
    log_error,
    log_info,
    log_success,
    log_timer,
    verbose_enabled,
)
from .maze_state import MazeState
from .pursuit import PursuitController
from .schemas import Direction, MoveResult, SessionSnapshot


# =============================
# Commands
# =============================

@dataclass(frozen=True)
class MoveCommand:
    """Player intent: move by a unit delta."""

    dx: int
    dy: int
    generation: int


@dataclass(frozen=True)
class TickCommand:
    """Advance every pursuer one step."""

    generation: int
    source: str = "manual"  # "periodic" | "reactive" | "manual"


Command = Union[MoveCommand, TickCommand]


class GameSession:
    """
    Owns one MazeState and serializes every mutation through a command queue.

    Callbacks passed here are the application's: they fire once per session,
    after the session has already cancelled its own timers.
    """

    def __init__(
        self,
        catalogue: Optional[LevelCatalogue] = None,
        *,
        on_level_complete: Optional[Callable[[], None]] = None,
        on_game_over: Optional[Callable[[], None]] = None,
        tick_interval: Optional[float] = None,
        reactive_delay: Optional[float] = None,
        pursuers_move: Optional[bool] = None,
    ):
        """Initialize a session. Timing defaults come from Config.

        Args:
            catalogue: Level source (defaults to ``load_catalogue()``)
            on_level_complete: Application callback for a win
            on_game_over: Application callback for a loss
            tick_interval: Seconds between periodic pursuit ticks
            reactive_delay: Seconds between a committed move and its pursuit tick
            pursuers_move: False keeps pursuers static

        Raises:
            ValueError: If tick_interval <= 0 or reactive_delay < 0
        """
        self.catalogue = catalogue if catalogue is not None else load_catalogue()
        self.tick_interval = Config.TICK_INTERVAL_SECONDS if tick_interval is None else tick_interval
        self.reactive_delay = Config.REACTIVE_DELAY_SECONDS if reactive_delay is None else reactive_delay
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be greater than zero (got {self.tick_interval})")
        if self.reactive_delay < 0:
            raise ValueError(f"reactive_delay cannot be negative (got {self.reactive_delay})")

        self.on_level_complete = on_level_complete
        self.on_game_over = on_game_over

        self.state = MazeState(
            self.catalogue,
            on_level_complete=self._handle_level_complete,
            on_game_over=self._handle_game_over,
        )
        self.pursuit = PursuitController(
            self.state,
            enabled=Config.PURSUERS_MOVE if pursuers_move is None else pursuers_move,
        )

        self._queue: asyncio.Queue[Command] = asyncio.Queue()
        self._generation = 0
        self._running = False
        self._consumer: Optional[asyncio.Task] = None
        self._ticker: Optional[asyncio.Task] = None
        self._reactive_handles: Set[asyncio.TimerHandle] = set()

        # Counters for monitoring and tests
        self.ticks_applied = 0
        self.commands_dropped = 0

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_running(self) -> bool:
        return self._running

    def load(self, level_index: int) -> bool:
        """(Re)initialize the session on a level.

        Invalidates every queued command, pending reactive tick and the
        periodic timer of the previous session. An out-of-range index is
        ignored and leaves the current session running.
        """
        if not self.state.initialize(level_index):
            return False

        self._invalidate()
        log_info(
            f"[Session] Level {level_index} started "
            f"({len(self.state.pursuers)} pursuer(s), tick every {self.tick_interval}s)"
        )
        if self._running:
            self._start_ticker()
        return True

    async def open(self, level_index: Optional[int] = None) -> None:
        """Start the queue consumer (and the periodic timer once a level is loaded)."""
        if self._running:
            return
        self._running = True
        self._consumer = asyncio.create_task(self._consume())
        if level_index is not None:
            self.load(level_index)
        elif self.state.is_active:
            self._start_ticker()

    async def close(self) -> None:
        """Stop timers and the consumer."""
        self._running = False
        self._cancel_reactive()
        for task in (self._ticker, self._consumer):
            if task is None:
                continue
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._ticker = None
        self._consumer = None

    async def join(self) -> None:
        """Wait until every queued command has been applied."""
        await self._queue.join()

    async def __aenter__(self) -> "GameSession":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Command submission
    # ------------------------------------------------------------------

    def submit_move(self, dx: int, dy: int) -> None:
        self._queue.put_nowait(MoveCommand(dx, dy, self._generation))

    def submit_direction(self, direction: Direction) -> None:
        self.submit_move(direction.dx, direction.dy)

    def submit_tick(self, source: str = "manual") -> None:
        self._queue.put_nowait(TickCommand(self._generation, source))

    def process_pending(self) -> int:
        """Apply every queued command synchronously. Returns how many were applied.

        Reactive ticks enqueued by moves processed here are applied in the
        same call, right after the move that caused them.
        """
        applied = 0
        while not self._queue.empty():
            command = self._queue.get_nowait()
            try:
                if self._apply(command):
                    applied += 1
            finally:
                self._queue.task_done()
        return applied

    def snapshot(self) -> Optional[SessionSnapshot]:
        return self.state.snapshot()

    # ------------------------------------------------------------------
    # Command application
    # ------------------------------------------------------------------

    async def _consume(self) -> None:
        while True:
            command = await self._queue.get()
            try:
                self._apply(command)
            except Exception as exc:
                # Engine state is already settled when a callback raises; keep draining.
                log_error(f"[Session] {type(command).__name__} failed: {exc}")
            finally:
                self._queue.task_done()

    def _apply(self, command: Command) -> bool:
        if command.generation != self._generation:
            self.commands_dropped += 1
            return False

        if isinstance(command, MoveCommand):
            result = self.state.move_player(command.dx, command.dy)
            if result is MoveResult.COMMITTED:
                self._schedule_reactive_tick()
            return True

        if verbose_enabled():
            log_timer(f"[Session] Pursuit tick ({command.source})")
        self.pursuit.step()
        self.ticks_applied += 1
        return True

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _schedule_reactive_tick(self) -> None:
        generation = self._generation
        if self.reactive_delay <= 0 or not self._running:
            # Queued behind the move that was just committed.
            self._queue.put_nowait(TickCommand(generation, "reactive"))
            return

        loop = asyncio.get_running_loop()
        handle: Optional[asyncio.TimerHandle] = None

        def fire() -> None:
            self._reactive_handles.discard(handle)
            self._queue.put_nowait(TickCommand(generation, "reactive"))

        handle = loop.call_later(self.reactive_delay, fire)
        self._reactive_handles.add(handle)

    def _start_ticker(self) -> None:
        self._stop_ticker()
        self._ticker = asyncio.create_task(self._run_ticker(self._generation))

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    async def _run_ticker(self, generation: int) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            if generation != self._generation or not self.state.is_active:
                return
            self._queue.put_nowait(TickCommand(generation, "periodic"))

    def _cancel_reactive(self) -> None:
        for handle in self._reactive_handles:
            handle.cancel()
        self._reactive_handles.clear()

    def _invalidate(self) -> None:
        """Retire every command and timer belonging to the current generation."""
        self._generation += 1
        self._cancel_reactive()
        self._stop_ticker()

    # ------------------------------------------------------------------
    # Outcome handling
    # ------------------------------------------------------------------

    def _handle_level_complete(self) -> None:
        self._invalidate()
        log_success(
            f"[Session] Level {self.state.level_index} complete after {self.state.move_count} moves"
        )
        if self.on_level_complete is not None:
            self.on_level_complete()

    def _handle_game_over(self) -> None:
        self._invalidate()
        log_error(f"[Session] Game over on level {self.state.level_index}")
        if self.on_game_over is not None:
            self.on_game_over()

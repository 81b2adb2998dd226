"""
mazechase - grid maze chase simulation engine.

A player crosses a fixed grid toward a goal while static hazards wait and
pursuers close in on a timer.

Engine state is owned by MazeState; pursuers are driven by PursuitController;
GameSession serializes player input and pursuit ticks through one command
queue. Rendering and input devices are left to the application.
"""

__version__ = "0.1.0"

# Engine components
from .maze_state import MazeState
from .pursuit import PursuitController, candidate_steps
from .session import GameSession, MoveCommand, TickCommand
from .flow import FlowState, GameFlow, InvalidTransitionError

# Level data
from .catalogue import (
    BUILTIN_LEVELS,
    LevelCatalogue,
    LevelCatalogueError,
    LevelLoader,
    load_catalogue,
)

# Core schemas
from .schemas import (
    Direction,
    LevelDefinition,
    MoveResult,
    Outcome,
    SessionSnapshot,
)

# Grid helpers
from .environment import (
    Grid,
    GridState,
    Position,
    PositionState,
    Tile,
    goal_reachable,
    grid_shortest_path,
    render_ascii,
)

__all__ = [
    # Engine
    "MazeState",
    "PursuitController",
    "candidate_steps",
    "GameSession",
    "MoveCommand",
    "TickCommand",
    "GameFlow",
    "FlowState",
    "InvalidTransitionError",
    # Level data
    "BUILTIN_LEVELS",
    "LevelCatalogue",
    "LevelCatalogueError",
    "LevelLoader",
    "load_catalogue",
    # Schemas
    "Direction",
    "LevelDefinition",
    "MoveResult",
    "Outcome",
    "SessionSnapshot",
    # Grid helpers
    "Grid",
    "GridState",
    "Position",
    "PositionState",
    "Tile",
    "goal_reachable",
    "grid_shortest_path",
    "render_ascii",
]

"""Tests for MazeState initialization, player movement and outcome signalling."""

import pytest

from mazechase import (
    Direction,
    LevelCatalogue,
    LevelDefinition,
    MazeState,
    MoveResult,
    Outcome,
    Position,
    PursuitController,
    Tile,
)


def make_catalogue(*layouts: list[str]) -> LevelCatalogue:
    return LevelCatalogue([LevelDefinition(layout=layout) for layout in layouts])


class CallbackRecorder:
    def __init__(self):
        self.level_complete = 0
        self.game_over = 0

    def on_level_complete(self) -> None:
        self.level_complete += 1

    def on_game_over(self) -> None:
        self.game_over += 1


def make_state(*layouts: list[str]) -> tuple[MazeState, CallbackRecorder]:
    recorder = CallbackRecorder()
    state = MazeState(
        make_catalogue(*layouts),
        on_level_complete=recorder.on_level_complete,
        on_game_over=recorder.on_game_over,
    )
    return state, recorder


OPEN_ROOM = [
    "#####",
    "#...#",
    "#.@.#",
    "#..G#",
    "#####",
]


def test_initialize_scans_player_and_pursuers_in_row_major_order():
    state, _ = make_state([
        "######",
        "#..Z.#",
        "#Z@..#",
        "#...Z#",
        "#...G#",
        "######",
    ])

    assert state.initialize(1) is True
    assert state.player == Position(2, 2)
    assert state.pursuers == (Position(3, 1), Position(1, 2), Position(4, 3))
    assert state.move_count == 0
    assert state.outcome is Outcome.ACTIVE
    assert state.level_index == 1


def test_initialize_out_of_range_is_a_silent_no_op():
    state, _ = make_state(OPEN_ROOM)

    assert state.initialize(0) is False
    assert state.initialize(2) is False
    assert state.is_loaded is False
    assert state.outcome is None

    state.initialize(1)
    state.move_player(0, -1)
    assert state.initialize(5) is False
    # Existing session is untouched
    assert state.move_count == 1
    assert state.player == Position(2, 1)


def test_move_without_session_is_rejected():
    state, recorder = make_state(OPEN_ROOM)

    assert state.move_player(1, 0) is MoveResult.REJECTED
    assert state.snapshot() is None
    assert recorder.level_complete == recorder.game_over == 0


@pytest.mark.parametrize("direction", list(Direction))
def test_legal_move_changes_position_by_delta_and_counts(direction):
    state, _ = make_state(OPEN_ROOM)
    state.initialize(1)
    start = state.player

    result = state.move(direction)

    assert result is MoveResult.COMMITTED
    assert state.player == Position(start.x + direction.dx, start.y + direction.dy)
    assert state.move_count == 1
    assert state.grid.get(start) is Tile.EMPTY
    assert state.grid.get(state.player) is Tile.PLAYER
    assert len(list(state.grid.find(Tile.PLAYER))) == 1


def test_wall_move_leaves_state_unchanged_and_is_idempotent():
    state, recorder = make_state(OPEN_ROOM)
    state.initialize(1)
    state.move_player(0, -1)  # now at (2, 1), wall above
    before = state.grid.labels()

    for _ in range(5):
        assert state.move_player(0, -1) is MoveResult.REJECTED

    assert state.player == Position(2, 1)
    assert state.move_count == 1
    assert state.grid.labels() == before
    assert recorder.level_complete == recorder.game_over == 0


def test_obstacle_blocks_the_player():
    state, recorder = make_state(["#####", "#@%G#", "#####"])
    state.initialize(1)

    assert state.move_player(1, 0) is MoveResult.REJECTED
    assert state.player == Position(1, 1)
    assert state.move_count == 0
    assert recorder.game_over == 0


def test_off_grid_target_is_rejected():
    state, _ = make_state(["@.G"])
    state.initialize(1)

    assert state.move_player(0, -1) is MoveResult.REJECTED
    assert state.move_player(-1, 0) is MoveResult.REJECTED
    assert state.player == Position(0, 0)
    assert state.move_count == 0


@pytest.mark.parametrize("layout", [
    ["#####", "#@x.#", "#..G#", "#####"],
    ["#####", "#@Z.#", "#..G#", "#####"],
])
def test_lethal_tile_fires_game_over_once_without_moving(layout):
    state, recorder = make_state(layout)
    state.initialize(1)
    before = state.grid.labels()

    assert state.move_player(1, 0) is MoveResult.LOST

    assert recorder.game_over == 1
    assert recorder.level_complete == 0
    assert state.player == Position(1, 1)
    assert state.move_count == 0
    assert state.grid.labels() == before
    assert state.outcome is Outcome.LOST


def test_goal_fires_level_complete_once_and_freezes_session():
    state, recorder = make_state(["####", "#@G#", "####"])
    state.initialize(1)

    assert state.move_player(1, 0) is MoveResult.WON
    assert recorder.level_complete == 1
    assert state.outcome is Outcome.WON
    # Grid is left as-is on a win
    assert state.grid.get(Position(2, 1)) is Tile.GOAL
    assert state.player == Position(1, 1)

    # Frozen: further calls are no-ops and never signal again
    assert state.move_player(1, 0) is MoveResult.REJECTED
    assert state.signal_game_over() is False
    assert recorder.level_complete == 1
    assert recorder.game_over == 0


def test_scenario_right_three_down_four_reaches_goal():
    state, recorder = make_state([
        "########",
        "#@.....#",
        "#......#",
        "#......#",
        "#......#",
        "#...G.G#",
        "########",
    ])
    state.initialize(1)
    assert state.grid.width == 8 and state.grid.height == 7

    for _ in range(3):
        assert state.move(Direction.RIGHT) is MoveResult.COMMITTED
    for _ in range(3):
        assert state.move(Direction.DOWN) is MoveResult.COMMITTED

    assert state.move_count == 6
    assert recorder.level_complete == 0

    assert state.move(Direction.DOWN) is MoveResult.WON
    assert recorder.level_complete == 1
    assert state.move_count == 6


def test_reinitialize_mid_game_resets_everything():
    catalogue = LevelCatalogue.default()
    state = MazeState(catalogue)
    state.initialize(1)
    original_pursuers = state.pursuers
    fresh_grid = catalogue.get(1).to_grid()

    state.move(Direction.RIGHT)
    state.move(Direction.RIGHT)
    PursuitController(state).step()
    assert state.move_count == 2
    assert state.pursuers != original_pursuers

    assert state.initialize(1) is True
    assert state.move_count == 0
    assert state.pursuers == original_pursuers == (Position(3, 4),)
    assert state.player == Position(1, 1)
    assert state.grid == fresh_grid
    assert state.outcome is Outcome.ACTIVE


def test_session_grid_is_a_copy_of_the_catalogue():
    catalogue = LevelCatalogue.default()
    state = MazeState(catalogue)
    state.initialize(1)

    state.move(Direction.RIGHT)

    level = catalogue.get(1)
    assert level.grid[1][1] is Tile.PLAYER
    assert level.grid[1][2] is Tile.EMPTY


def test_snapshot_is_detached_from_live_state():
    state, _ = make_state(OPEN_ROOM)
    state.initialize(1)

    snapshot = state.snapshot()
    state.move(Direction.UP)

    assert snapshot.player.as_tuple() == (2, 2)
    assert snapshot.move_count == 0
    assert snapshot.grid.tile_at(2, 2) is Tile.PLAYER
    assert state.snapshot().player.as_tuple() == (2, 1)
    assert state.snapshot().move_count == 1

"""Unit tests for the core schema building blocks."""

import pytest
from pydantic import ValidationError

from mazechase.environment import Grid, GridState, PositionState, Tile
from mazechase.schemas import (
    Direction,
    LevelDefinition,
    MoveResult,
    Outcome,
    SessionSnapshot,
)


def test_level_definition_from_layout():
    level = LevelDefinition(name="Tiny", layout=["#####", "#@ZG#", "#####"])

    assert level.width == 5
    assert level.height == 3
    assert level.grid[1] == [Tile.WALL, Tile.PLAYER, Tile.PURSUER, Tile.GOAL, Tile.WALL]
    assert level.description == ""


def test_level_definition_from_themed_labels():
    level = LevelDefinition(grid=[
        ["player", "zombie", "spider"],
        ["cobweb", "empty", "goal"],
    ])

    assert level.grid == [
        [Tile.PLAYER, Tile.PURSUER, Tile.HAZARD],
        [Tile.OBSTACLE, Tile.EMPTY, Tile.GOAL],
    ]


def test_to_grid_returns_independent_copies():
    level = LevelDefinition(layout=["@.G"])
    first = level.to_grid()
    second = level.to_grid()

    assert isinstance(first, Grid)
    assert first == second
    assert first is not second


@pytest.mark.parametrize(
    ("data", "fragment"),
    [
        ({"layout": ["#@G#", "#.#"]}, "rectangular"),
        ({"layout": ["#..G#"]}, "exactly one player"),
        ({"layout": ["@.@G"]}, "exactly one player"),
        ({"layout": ["#@..#"]}, "at least one goal"),
        ({"layout": []}, "empty"),
        ({"grid": [["player", "lava", "goal"]]}, "lava"),
        ({"layout": ["@?G"]}, "glyph"),
        ({"layout": ["@G"], "grid": [["player", "goal"]]}, "not both"),
    ],
)
def test_level_definition_rejects_broken_contract(data, fragment):
    with pytest.raises(ValidationError) as excinfo:
        LevelDefinition(**data)
    assert fragment in str(excinfo.value)


@pytest.mark.parametrize(
    ("key", "direction"),
    [
        ("up", Direction.UP),
        ("ArrowDown", Direction.DOWN),
        ("L", Direction.LEFT),
        (" right ", Direction.RIGHT),
    ],
)
def test_direction_from_key(key, direction):
    assert Direction.from_key(key) is direction


def test_direction_from_unknown_key():
    with pytest.raises(ValueError):
        Direction.from_key("jump")


def test_direction_deltas_are_unit_steps():
    for direction in Direction:
        assert abs(direction.dx) + abs(direction.dy) == 1
    assert (Direction.UP.dx, Direction.UP.dy) == (0, -1)


def test_outcome_and_move_result_values():
    assert Outcome.ACTIVE.is_terminal is False
    assert Outcome.WON.is_terminal and Outcome.LOST.is_terminal
    assert MoveResult("committed") is MoveResult.COMMITTED


def test_session_snapshot_serializes():
    grid = LevelDefinition(layout=["@ZG"]).to_grid()
    snapshot = SessionSnapshot(
        level_index=1,
        grid=GridState.from_grid(grid),
        player=PositionState(x=0, y=0),
        pursuers=[PositionState(x=1, y=0)],
    )

    data = snapshot.model_dump(mode="json")
    assert data["outcome"] == "active"
    assert data["grid"]["rows"] == [["player", "pursuer", "goal"]]
    assert data["move_count"] == 0

"""Tests for the level catalogue and JSON level loading."""

import json
from pathlib import Path

import pytest

from mazechase import (
    BUILTIN_LEVELS,
    LevelCatalogue,
    LevelCatalogueError,
    LevelDefinition,
    LevelLoader,
    Tile,
    load_catalogue,
)
from mazechase.config import Config

EXAMPLE_LEVELS = Path(__file__).resolve().parent.parent / "examples" / "levels"


def test_default_catalogue_has_three_levels():
    catalogue = LevelCatalogue.default()

    assert len(catalogue) == len(BUILTIN_LEVELS) == 3
    sizes = [(level.width, level.height) for level in catalogue]
    assert sizes == [(8, 7), (9, 8), (12, 12)]
    assert catalogue.get(1).name == "The Lower Cells"
    assert [len(list(level.to_grid().find(Tile.PURSUER))) for level in catalogue] == [1, 1, 3]


def test_builtin_levels_are_solvable():
    levels = [LevelDefinition(**data) for data in BUILTIN_LEVELS]
    # Raises if any goal is cut off by walls or lethal tiles
    LevelCatalogue(levels, require_reachable_goal=True)


def test_get_is_one_based_and_bounded():
    catalogue = LevelCatalogue.default()

    assert catalogue.get(0) is None
    assert catalogue.get(4) is None
    assert catalogue.get(-1) is None
    assert catalogue.contains(3) is True
    assert catalogue.contains(4) is False


def test_empty_catalogue_is_rejected():
    with pytest.raises(LevelCatalogueError):
        LevelCatalogue([])


def test_unreachable_goal_is_rejected_on_request():
    walled_off = LevelDefinition(name="Sealed", layout=["#####", "#@#G#", "#####"])
    LevelCatalogue([walled_off])  # accepted by default

    with pytest.raises(LevelCatalogueError) as excinfo:
        LevelCatalogue([walled_off], require_reachable_goal=True)

    assert excinfo.value.level == "Sealed"
    assert "Remediation tips" in str(excinfo.value)


def test_goal_behind_hazard_counts_as_unreachable():
    level = LevelDefinition(layout=["#####", "#@xG#", "#####"])
    with pytest.raises(LevelCatalogueError):
        LevelCatalogue([level], require_reachable_goal=True)


def test_example_levels_directory_loads_in_filename_order():
    catalogue = LevelCatalogue.from_directory(EXAMPLE_LEVELS, require_reachable_goal=True)

    assert len(catalogue) == 2
    assert catalogue.get(1).name == "Courtyard"
    # Themed labels in the crypt file resolve to engine tiles
    crypt = catalogue.get(2).to_grid()
    assert list(crypt.find(Tile.PURSUER))
    assert list(crypt.find(Tile.HAZARD))


def test_loader_defaults_name_to_file_stem(tmp_path):
    (tmp_path / "02_second.json").write_text(
        json.dumps({"layout": ["#####", "#@.G#", "#####"]})
    )
    (tmp_path / "01_first.json").write_text(
        json.dumps({"name": "First", "grid": [["player", "goal"]]})
    )
    (tmp_path / "_draft.json").write_text("not json at all")

    loader = LevelLoader(tmp_path)
    assert loader.list_levels() == ["01_first", "02_second"]

    catalogue = LevelCatalogue.from_directory(tmp_path)
    assert [level.name for level in catalogue] == ["First", "02_second"]

    info = loader.get_level_info("02_second")
    assert info["width"] == 5 and info["height"] == 3
    assert info["description"] == "No description"


def test_loader_missing_level_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        LevelLoader(tmp_path).load("nowhere")


def test_empty_directory_is_rejected(tmp_path):
    with pytest.raises(LevelCatalogueError):
        LevelCatalogue.from_directory(tmp_path)


def test_load_catalogue_falls_back_to_builtin(monkeypatch):
    monkeypatch.setattr(Config, "LEVELS_DIR", None)
    assert len(load_catalogue()) == 3

    assert len(load_catalogue(EXAMPLE_LEVELS)) == 2

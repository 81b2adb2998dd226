"""
Level catalogue: the ordered, validated set of maze levels.

This module provides LevelCatalogue, the passive data source the engine
reads grids from, and LevelLoader for turning JSON level files into
LevelDefinition objects. Levels define the initial conditions of a session:
- Board shape (every row the same width)
- Player start (exactly one)
- Goals (one or more)
- Static hazards, obstacles and pursuer start tiles

Design philosophy:
- Levels are data, not code: a directory of JSON files can replace the
  built-in catalogue without touching the engine
- Validation happens once, at construction, so a malformed level fails
  loudly before any session starts instead of misbehaving mid-game
- Indexing is 1-based to match how levels are presented to players

Level file structure:
```json
{
  "name": "First Steps",
  "description": "...",
  "layout": [
    "#####",
    "#@.G#",
    "#####"
  ]
}
```
``grid`` (rows of tile labels) may be used instead of ``layout``.

Usage:
    catalogue = LevelCatalogue.from_directory(Path("examples/levels"))
    level = catalogue.get(1)
"""

import json
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from .config import Config
from .environment import goal_reachable
from .schemas import LevelDefinition


class LevelCatalogueError(ValueError):
    """Raised when a catalogue cannot be built from the supplied levels."""

    def __init__(self, reason: str, *, level: Optional[str] = None) -> None:
        self.reason = reason
        self.level = level
        where = f" (level {level})" if level else ""
        message = (
            f"Invalid level catalogue{where}: {reason}\n\n"
            "Remediation tips:\n"
            "  - Check that MAZECHASE_LEVELS_DIR points to a directory of *.json levels\n"
            "  - Every level needs one player '@', at least one goal 'G', equal-width rows\n"
            "  - Render the level with mazechase.environment.render_ascii to inspect it"
        )
        super().__init__(message)


class LevelCatalogue:
    """Ordered collection of level definitions, addressed by 1-based index.

    The catalogue is read-only after construction. Sessions never mutate a
    LevelDefinition; they call ``to_grid()`` to get their own copy.
    """

    def __init__(
        self,
        levels: Sequence[LevelDefinition],
        *,
        require_reachable_goal: bool = False,
    ):
        """Build a catalogue.

        Args:
            levels: Level definitions in play order.
            require_reachable_goal: Also reject levels whose goals cannot be
                reached from the player start without crossing a lethal tile.

        Raises:
            LevelCatalogueError: If ``levels`` is empty or a goal is unreachable.
        """
        if not levels:
            raise LevelCatalogueError("catalogue must contain at least one level")

        self._levels: List[LevelDefinition] = list(levels)

        if require_reachable_goal:
            for index, level in enumerate(self._levels, start=1):
                if not goal_reachable(level.to_grid()):
                    raise LevelCatalogueError(
                        "no goal is reachable from the player start",
                        level=level.name or str(index),
                    )

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[LevelDefinition]:
        return iter(self._levels)

    def contains(self, level_index: int) -> bool:
        return 1 <= level_index <= len(self._levels)

    def get(self, level_index: int) -> Optional[LevelDefinition]:
        """Return the level at a 1-based index, or None when out of range."""
        if not self.contains(level_index):
            return None
        return self._levels[level_index - 1]

    @classmethod
    def default(cls) -> "LevelCatalogue":
        """The built-in three-level catalogue."""
        return cls([LevelDefinition(**data) for data in BUILTIN_LEVELS])

    @classmethod
    def from_directory(
        cls, levels_dir: Path, *, require_reachable_goal: bool = False
    ) -> "LevelCatalogue":
        """Load every level file in ``levels_dir`` in filename order."""
        loader = LevelLoader(levels_dir)
        levels = [loader.load(name) for name in loader.list_levels()]
        if not levels:
            raise LevelCatalogueError(f"no level files found in {levels_dir}")
        return cls(levels, require_reachable_goal=require_reachable_goal)


class LevelLoader:
    """Load and validate levels from JSON files.

    Directory structure:
    - Default: Config.LEVELS_DIR, falling back to {PROJECT_ROOT}/examples/levels/
    - Level files: {level_name}.json, played in sorted filename order
      (prefix with numbers, e.g. "01_entrance.json")
    - Files starting with "_" are ignored
    """

    def __init__(self, levels_dir: Optional[Path] = None):
        self.levels_dir = levels_dir or Config.LEVELS_DIR or Config.EXAMPLE_LEVELS_DIR

    def load(self, level_name: str) -> LevelDefinition:
        """Load a level by name from its JSON file.

        Args:
            level_name: Name of level file without the .json extension

        Returns:
            Validated LevelDefinition; a missing "name" defaults to the file stem

        Raises:
            FileNotFoundError: If the level file doesn't exist in levels_dir
            json.JSONDecodeError: If the file contains invalid JSON
            pydantic.ValidationError: If the level breaks the data contract
        """
        level_path = self.levels_dir / f"{level_name}.json"

        if not level_path.exists():
            raise FileNotFoundError(
                f"Level '{level_name}' not found at {level_path}"
            )

        data = json.loads(level_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise LevelCatalogueError("level file must contain a JSON object", level=level_name)

        data.setdefault("name", level_name)
        return LevelDefinition(**data)

    def list_levels(self) -> List[str]:
        """List level names (without .json extension) in play order."""
        if not self.levels_dir.exists():
            return []

        return sorted(
            f.stem for f in self.levels_dir.glob("*.json")
            if not f.name.startswith("_")
        )

    def get_level_info(self, level_name: str) -> Dict[str, object]:
        """Get level metadata without validating the grid."""
        level_path = self.levels_dir / f"{level_name}.json"
        data = json.loads(level_path.read_text(encoding="utf-8"))
        rows = data.get("grid") or data.get("layout") or []

        return {
            "name": data.get("name", level_name),
            "description": data.get("description", "No description"),
            "height": len(rows),
            "width": len(rows[0]) if rows else 0,
        }


def load_catalogue(levels_dir: Optional[Path] = None) -> LevelCatalogue:
    """Convenience function: directory catalogue if configured, else built-in.

    Args:
        levels_dir: Optional override; defaults to Config.LEVELS_DIR

    Returns:
        LevelCatalogue ready for a session
    """
    directory = levels_dir or Config.LEVELS_DIR
    if directory is None:
        return LevelCatalogue.default()
    return LevelCatalogue.from_directory(directory)


# Glyphs: '#' wall, '.' empty, '@' player, 'Z' pursuer, 'x' hazard, 'G' goal, '%' obstacle.
BUILTIN_LEVELS: List[Dict[str, object]] = [
    {
        "name": "The Lower Cells",
        "description": "An easy maze: one zombie, one spider, two cobwebs.",
        "layout": [
            "########",
            "#@..%..#",
            "#.#.#x.#",
            "#....#.#",
            "#%#Z...#",
            "#...#.G#",
            "########",
        ],
    },
    {
        "name": "The Long Gallery",
        "description": "Medium difficulty: the zombie waits beside the shortest route.",
        "layout": [
            "#########",
            "#@..%..x#",
            "#.#.##..#",
            "#.Z.....#",
            "#.#.%.#.#",
            "#...#...#",
            "#.#...xG#",
            "#########",
        ],
    },
    {
        "name": "The White Tower",
        "description": "Hard: winding corridors, three zombies and a nest of spiders.",
        "layout": [
            "############",
            "#@.%..x.%..#",
            "#.###.####.#",
            "#...Z...%..#",
            "###.###.####",
            "#x...%...Z.#",
            "#.##.#####.#",
            "#..Z...%...#",
            "##.##.##.#x#",
            "#%..x......#",
            "#.#.##.##.G#",
            "############",
        ],
    },
]

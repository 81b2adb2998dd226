"""
mazechase Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_path(value: str | None) -> Path | None:
    return Path(value) if value else None


class Config:
    """Application configuration loaded from environment variables."""

    # Pursuit timing
    # Seconds between periodic pursuer ticks
    TICK_INTERVAL_SECONDS: float = float(os.getenv("MAZECHASE_TICK_INTERVAL", "1.0"))
    # Seconds between a committed player move and the reactive pursuer tick
    REACTIVE_DELAY_SECONDS: float = float(os.getenv("MAZECHASE_REACTIVE_DELAY", "0.3"))
    # Set to "false" to freeze pursuers in place (static-hazard variant)
    PURSUERS_MOVE: bool = os.getenv("MAZECHASE_PURSUERS_MOVE", "true").lower() not in ("0", "false", "no")

    # Level catalogue
    # Directory of *.json level files; None means the built-in catalogue
    LEVELS_DIR: Path | None = _optional_path(os.getenv("MAZECHASE_LEVELS_DIR"))

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    EXAMPLE_LEVELS_DIR: Path = PROJECT_ROOT / "examples" / "levels"

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if cls.TICK_INTERVAL_SECONDS <= 0:
            raise ValueError(
                "MAZECHASE_TICK_INTERVAL must be greater than zero "
                f"(got {cls.TICK_INTERVAL_SECONDS})"
            )

        if cls.REACTIVE_DELAY_SECONDS < 0:
            raise ValueError(
                "MAZECHASE_REACTIVE_DELAY cannot be negative "
                f"(got {cls.REACTIVE_DELAY_SECONDS}). Use 0 to tick immediately after a move."
            )

        if cls.LEVELS_DIR is not None and not cls.LEVELS_DIR.is_dir():
            raise ValueError(
                f"MAZECHASE_LEVELS_DIR points to {cls.LEVELS_DIR}, which is not a directory"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "mazechase Configuration:",
            f"  Tick Interval: {cls.TICK_INTERVAL_SECONDS}s",
            f"  Reactive Delay: {cls.REACTIVE_DELAY_SECONDS}s",
            f"  Pursuers Move: {cls.PURSUERS_MOVE}",
            f"  Levels: {cls.LEVELS_DIR or 'built-in catalogue'}",
        ]
        return "\n".join(lines)

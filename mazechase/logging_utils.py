"""Logging utilities for mazechase sessions.

Every line is printed with a tag so the output stays readable without color:
session lifecycle lines are always shown, engine-step and timer lines only
when MAZECHASE_VERBOSE (or DEBUG_PURSUIT for per-pursuer decisions) is set.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"      # Engine steps (player moves, pursuer decisions)
    YELLOW = "\033[93m"    # Timer activity (periodic and reactive ticks)
    RED = "\033[91m"       # Game over and errors
    GREEN = "\033[92m"     # Level complete
    CYAN = "\033[96m"      # Session info

    BOLD = "\033[1m"
    RESET = "\033[0m"


def colors_enabled() -> bool:
    return not os.getenv("MAZECHASE_NO_COLOR")


def verbose_enabled() -> bool:
    """Return True when per-move and per-tick detail should be printed."""
    return bool(os.getenv("MAZECHASE_VERBOSE"))


def pursuit_debug_enabled() -> bool:
    """Return True when per-pursuer decisions should be printed."""
    return bool(os.getenv("DEBUG_PURSUIT"))


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap ``text`` in ANSI codes unless MAZECHASE_NO_COLOR is set."""
    if not colors_enabled():
        return text

    codes = (Color.BOLD.value if bold else "") + color.value
    return f"{codes}{text}{Color.RESET.value}"


def _emit(tag: str, message: str, color: Color) -> None:
    print(colored(f"{tag} {message}", color))


def log_deterministic(message: str) -> None:
    """Engine step: a move was applied or a pursuer picked its tile."""
    _emit(LOG_TAG_DETERMINISTIC, message, Color.BLUE)


def log_timer(message: str) -> None:
    """A periodic or reactive pursuit tick was applied."""
    _emit(LOG_TAG_TIMER, message, Color.YELLOW)


def log_error(message: str) -> None:
    _emit(LOG_TAG_ERROR, message, Color.RED)


def log_success(message: str) -> None:
    _emit(LOG_TAG_SUCCESS, message, Color.GREEN)


def log_info(message: str) -> None:
    _emit(LOG_TAG_INFO, message, Color.CYAN)


# Markers for message types (color-blind accessible)
LOG_TAG_DETERMINISTIC = "[•]"  # Engine step
LOG_TAG_TIMER = "[⏱]"          # Pursuit tick
LOG_TAG_ERROR = "[!]"          # Game over/error
LOG_TAG_SUCCESS = "[✓]"        # Level complete
LOG_TAG_INFO = "[i]"           # Session info

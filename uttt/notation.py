"""
Move notation for Ultimate Tic-Tac-Toe.
A square is a file letter a-i (column) and a rank digit 1-9 (row), e.g. "e5".
"""

from typing import Optional, Tuple

from .config import GameConfig
from .game_state import Active


def position_to_string(position: Tuple[int, int]) -> str:
    """Write flat (column, row) as notation, e.g. (0, 0) -> "a1"."""
    x, y = position
    return f"{GameConfig.FILES[x]}{y + 1}"


def string_to_position(text: str) -> Optional[Tuple[int, int]]:
    """
    Read a square from text.

    Args:
        text: Something like "e5" or "E5" (surrounding whitespace is ignored).

    Returns:
        Flat (column, row), or None if the text is not exactly one file
        letter followed by one non-zero rank digit.
    """
    chars = text.strip().lower()
    if len(chars) != 2:
        return None

    file, rank = chars
    if file not in GameConfig.FILES or rank not in "123456789":
        return None

    return GameConfig.FILES.index(file), int(rank) - 1


def move_min(active: Active) -> Tuple[int, int]:
    """Top-left square the current player may use."""
    if active is None:
        return 0, 0
    macro_col, macro_row = active
    return macro_col * 3, macro_row * 3


def move_max(active: Active) -> Tuple[int, int]:
    """Bottom-right square the current player may use."""
    if active is None:
        return 8, 8
    macro_col, macro_row = active
    return macro_col * 3 + 2, macro_row * 3 + 2

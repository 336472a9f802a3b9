"""
Cell marks for Ultimate Tic-Tac-Toe.
"""

from enum import IntEnum

from .config import GameConfig


class Mark(IntEnum):
    """What a cell holds. X always moves first."""
    EMPTY = 0
    X = 1
    O = 2

    def other(self) -> "Mark":
        """Get the opposing mark (EMPTY has no opponent)."""
        if self == Mark.X:
            return Mark.O
        if self == Mark.O:
            return Mark.X
        return Mark.EMPTY

    @property
    def symbol(self) -> str:
        """Plain one-character form: ' ', 'x' or 'o'."""
        return " xo"[self]

    def colored(self) -> str:
        """Symbol wrapped in the terminal colour for this mark."""
        if self == Mark.X:
            return f"{GameConfig.COLOR_X}{self.symbol}{GameConfig.RESET}"
        if self == Mark.O:
            return f"{GameConfig.COLOR_O}{self.symbol}{GameConfig.RESET}"
        return self.symbol

    def __str__(self) -> str:
        return self.symbol

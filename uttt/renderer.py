"""
Terminal rendering for Ultimate Tic-Tac-Toe.

Open sub-boards show their cells. A won sub-board is drawn as one big mark
and a drawn sub-board is filled with dots. When a sub-board is active, only
its grid lines and coordinates are shown so the player can see where to go.
"""

from typing import List

import numpy as np

from .config import GameConfig
from .game_state import Active
from .mark import Mark
from .win_checker import sub_board_outcomes


# Big marks for won sub-boards, indexed [micro column][micro row]
BIG_X = [
    ["╲", " ", "╱"],
    [" ", "x", " "],
    ["╱", " ", "╲"],
]
BIG_O = [
    ["╭", "|", "╰"],
    ["-", "o", "-"],
    ["╮", "|", "╯"],
]

DRAWN_CELL = "⋅"
BORDER = "+---+---+---+"
HIDDEN_BORDER = "+           +"


def _colored(text: str, mark: Mark) -> str:
    color = GameConfig.COLOR_X if mark == Mark.X else GameConfig.COLOR_O
    return f"{color}{text}{GameConfig.RESET}"


def _cell(board: np.ndarray, winner: Mark, drawn: bool,
          x1: int, y1: int, x0: int, y0: int) -> str:
    """Three characters for one cell."""
    if drawn:
        return f" {DRAWN_CELL} "
    if winner == Mark.X:
        return f" {_colored(BIG_X[x0][y0], Mark.X)} "
    if winner == Mark.O:
        return f" {_colored(BIG_O[x0][y0], Mark.O)} "
    return f" {Mark(int(board[x1, y1, x0, y0])).colored()} "


def render_game(board: np.ndarray, active: Active) -> str:
    """
    Draw the board as text.

    Args:
        board: The full (3, 3, 3, 3) board.
        active: The active sub-board, or None.

    Returns:
        Multi-line string ready to print.
    """
    winners, drawn = sub_board_outcomes(board)
    files = GameConfig.FILES

    def highlighted(x1: int, y1: int) -> bool:
        decided = winners[x1, y1] != Mark.EMPTY or drawn[x1, y1]
        return not decided and (active is None or active == (x1, y1))

    header_blocks = []
    for x1 in range(3):
        if active is None or active[0] == x1:
            letters = files[x1 * 3:x1 * 3 + 3]
            header_blocks.append("  " + "   ".join(letters) + "  ")
        else:
            header_blocks.append(" " * len(BORDER))

    border = "   " + " ".join([BORDER] * 3)
    lines: List[str] = ["   " + " ".join(header_blocks).rstrip(), border]

    for y in range(9):
        y1, y0 = divmod(y, 3)

        if active is None or active[1] == y1:
            label = f" {y + 1} "
        else:
            label = "   "

        blocks = []
        for x1 in range(3):
            sep = "|" if highlighted(x1, y1) else " "
            cells = [
                _cell(board, Mark(int(winners[x1, y1])), bool(drawn[x1, y1]), x1, y1, x0, y0)
                for x0 in range(3)
            ]
            blocks.append("|" + sep.join(cells) + "|")
        lines.append(label + " ".join(blocks))

        if y0 < 2:
            inner = [BORDER if highlighted(x1, y1) else HIDDEN_BORDER for x1 in range(3)]
            lines.append("   " + " ".join(inner))
        elif y < 8:
            lines.append(border)
            lines.append(border)

    lines.append(border)
    return "\n".join(lines)

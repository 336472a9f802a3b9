"""
Game state management for Ultimate Tic-Tac-Toe.
Tracks the board, whose turn it is, and which sub-board must be played next.
"""

from enum import Enum
from typing import Optional, List, Tuple
from dataclasses import dataclass, field

import numpy as np

from .config import GameConfig
from .mark import Mark
from .win_checker import (
    BoardOutcomes,
    board_outcomes,
    empty_cells,
    place_mark,
)


# (macro column, macro row) of the sub-board the next move must go in
Active = Optional[Tuple[int, int]]

# (macro column, macro row, micro column, micro row)
FullMove = Tuple[int, int, int, int]


class IllegalMove(Enum):
    """Why a move was refused."""
    OUT_OF_BOUNDS = "out_of_bounds"
    SUBBOARD_WON = "subboard_won"
    SUBBOARD_DRAWN = "subboard_drawn"
    WRONG_SUBBOARD = "wrong_subboard"
    OCCUPIED = "occupied"


def new_board() -> np.ndarray:
    """An empty board indexed [macro col][macro row][micro col][micro row]."""
    size = GameConfig.BOARD_SIZE
    return np.zeros((size, size, size, size), dtype=np.int8)


def split_position(x: int, y: int) -> FullMove:
    """Convert flat (column, row) in 0-8 to (macro col, macro row, micro col, micro row)."""
    return x // 3, y // 3, x % 3, y % 3


def join_position(macro_col: int, macro_row: int, micro_col: int, micro_row: int) -> Tuple[int, int]:
    """Convert nested coordinates back to flat (column, row) in 0-8."""
    return macro_col * 3 + micro_col, macro_row * 3 + micro_row


@dataclass(eq=False)
class GameState:
    """
    The complete state of an Ultimate Tic-Tac-Toe game.

    Tracks:
    - The 9x9 board as nine 3x3 sub-boards
    - Whose turn it is
    - The active sub-board (None means any undecided sub-board)

    Winner, draw and completion are always derived from the board. The
    derived results are cached against the board's bytes, so writing to
    `board` directly is still seen by the next query.
    """

    board: np.ndarray = field(default_factory=new_board)
    turn: Mark = Mark.X
    active: Active = None
    _outcomes: Optional[BoardOutcomes] = field(default=None, init=False, repr=False)
    _outcomes_key: bytes = field(default=b"", init=False, repr=False)

    def outcomes(self) -> BoardOutcomes:
        """Results of every sub-board and of the whole game for the current board."""
        key = self.board.tobytes()
        if self._outcomes is None or key != self._outcomes_key:
            self._outcomes = board_outcomes(self.board)
            self._outcomes_key = key
        return self._outcomes

    @property
    def winner(self) -> Mark:
        """Winner of the whole game, or Mark.EMPTY."""
        return self.outcomes().winner

    def is_draw(self) -> bool:
        return self.outcomes().is_draw

    def is_complete(self) -> bool:
        """The game ends on a draw OR a winner."""
        outcomes = self.outcomes()
        return outcomes.is_draw or outcomes.winner != Mark.EMPTY

    def check_move(
        self,
        macro_col: int,
        macro_row: int,
        micro_col: int,
        micro_row: int
    ) -> Optional[IllegalMove]:
        """
        Check a move for the current player without making it.

        Returns:
            The first rule the move breaks, or None if it is legal.
        """
        if not all(0 <= c <= 2 for c in (macro_col, macro_row, micro_col, micro_row)):
            return IllegalMove.OUT_OF_BOUNDS

        outcomes = self.outcomes()
        index = macro_col * 3 + macro_row

        if outcomes.winners[index] != Mark.EMPTY:
            return IllegalMove.SUBBOARD_WON

        if outcomes.drawn[index]:
            return IllegalMove.SUBBOARD_DRAWN

        if self.active is not None and self.active != (macro_col, macro_row):
            return IllegalMove.WRONG_SUBBOARD

        if self.board[macro_col, macro_row, micro_col, micro_row] != Mark.EMPTY:
            return IllegalMove.OCCUPIED

        return None

    def apply_move(
        self,
        macro_col: int,
        macro_row: int,
        micro_col: int,
        micro_row: int
    ) -> bool:
        """
        Place the current player's mark.

        Args:
            macro_col: Sub-board column (0-2).
            macro_row: Sub-board row (0-2).
            micro_col: Cell column inside the sub-board (0-2).
            micro_row: Cell row inside the sub-board (0-2).

        Returns:
            True if the move was made, False (state untouched) if it was illegal.
        """
        if self.check_move(macro_col, macro_row, micro_col, micro_row) is not None:
            return False

        if self.turn == Mark.EMPTY:
            self.turn = Mark.X

        outcomes = place_mark(
            self.outcomes(), macro_col, macro_row, micro_col, micro_row, self.turn
        )
        self.board[macro_col, macro_row, micro_col, micro_row] = self.turn
        self._outcomes = outcomes
        self._outcomes_key = self.board.tobytes()

        # Next player goes where this cell points, unless that sub-board is closed
        if outcomes.is_decided(micro_col, micro_row):
            self.active = None
        else:
            self.active = (micro_col, micro_row)

        if not (outcomes.is_draw or outcomes.winner != Mark.EMPTY):
            self.turn = self.turn.other()

        return True

    def play(self, x: int, y: int) -> bool:
        """Make a move given flat board coordinates (0-8, 0-8)."""
        if not (0 <= x <= 8 and 0 <= y <= 8):
            return False
        return self.apply_move(*split_position(x, y))

    def open_sub_boards(self) -> List[Tuple[int, int]]:
        """Sub-boards the current player may move in."""
        outcomes = self.outcomes()
        open_boards = []
        for macro_col in range(3):
            for macro_row in range(3):
                if outcomes.is_decided(macro_col, macro_row):
                    continue
                if self.active is not None and self.active != (macro_col, macro_row):
                    continue
                open_boards.append((macro_col, macro_row))
        return open_boards

    def legal_moves(self) -> List[FullMove]:
        """
        Get all legal moves for the current player.

        Returns:
            List of (macro col, macro row, micro col, micro row) tuples.
        """
        codes = self.outcomes().codes
        moves = []
        for macro_col, macro_row in self.open_sub_boards():
            for micro_col, micro_row in empty_cells(codes[macro_col * 3 + macro_row]):
                moves.append((macro_col, macro_row, micro_col, micro_row))
        return moves

    def copy(self) -> "GameState":
        """Create a deep copy of the game state."""
        clone = GameState(
            board=self.board.copy(),
            turn=self.turn,
            active=self.active,
        )
        # Outcomes are immutable, so the copy can share them
        clone._outcomes = self._outcomes
        clone._outcomes_key = self._outcomes_key
        return clone


# Quick test
if __name__ == "__main__":
    print("Testing GameState...")

    game = GameState()

    moves = [
        (4, 4),  # x in the centre of the centre board
        (3, 3),  # o must answer in the centre board
        (0, 0),  # x is sent to the top-left board
    ]

    for x, y in moves:
        mover = game.turn.symbol
        accepted = game.play(x, y)
        print(f"{mover} plays ({x}, {y}): accepted={accepted}, next active={game.active}")

    print(f"Legal moves now: {len(game.legal_moves())}")
    print("\nGame state test done!")

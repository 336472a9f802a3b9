"""
Move validator for Ultimate Tic-Tac-Toe.
Turns a refused move into the message the player sees.
"""

from typing import Optional
from dataclasses import dataclass

from .game_state import GameState, IllegalMove, split_position


ERROR_MESSAGES = {
    IllegalMove.OUT_OF_BOUNDS:
        "Invalid move! That position is not within the game boundaries!",
    IllegalMove.SUBBOARD_WON:
        "Invalid move! That position is within a game that has already been won!",
    IllegalMove.SUBBOARD_DRAWN:
        "Invalid move! That position is within a game that has already been drawn!",
    IllegalMove.WRONG_SUBBOARD:
        "Invalid move! That position is not within the current active game!",
    IllegalMove.OCCUPIED:
        "Invalid move! There is already a piece at that position!",
}


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    reason: Optional[IllegalMove] = None
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates Ultimate Tic-Tac-Toe moves.

    Rules:
    1. The position must be on the 9x9 board
    2. The sub-board must not be won or drawn already
    3. The sub-board must be the active one, if there is one
    4. The cell must be empty
    """

    def validate_move(
        self,
        game_state: GameState,
        x: Optional[int],
        y: Optional[int]
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            x: Board column (0-8), or None if the player produced no move.
            y: Board row (0-8), or None if the player produced no move.

        Returns:
            ValidationResult with is_valid, reason and error_message.
        """
        if x is None or y is None or not (0 <= x <= 8 and 0 <= y <= 8):
            reason = IllegalMove.OUT_OF_BOUNDS
        else:
            reason = game_state.check_move(*split_position(x, y))

        if reason is None:
            return ValidationResult(is_valid=True)

        return ValidationResult(
            is_valid=False,
            reason=reason,
            error_message=ERROR_MESSAGES[reason]
        )

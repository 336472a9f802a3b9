"""
AI player for Ultimate Tic-Tac-Toe.
Uses negamax with alpha-beta pruning to a fixed depth, then picks randomly
among the best-scoring moves so its play is not predictable.
"""

import random
from typing import Optional, List, Tuple

import numpy as np

from .config import GameConfig
from .game_state import Active, GameState, join_position
from .mark import Mark
from .win_checker import BoardOutcomes, GRID_DRAWS, GRID_THREATS, GRID_WINNERS, board_outcomes


INF = float("inf")


def _sub_board_values(perspective: Mark) -> List[int]:
    """Score of every possible sub-board for one player, indexed by grid code."""
    won = GRID_WINNERS != Mark.EMPTY
    values = np.where(GRID_DRAWS, -GameConfig.SUBBOARD_DRAW_PENALTY, GRID_THREATS[perspective])
    values = np.where(won & (GRID_WINNERS == perspective), GameConfig.SUBBOARD_WIN_SCORE, values)
    values = np.where(won & (GRID_WINNERS != perspective), -GameConfig.SUBBOARD_WIN_SCORE, values)
    return values.tolist()


# Indexed by [perspective][grid code]
SUB_BOARD_VALUES = [_sub_board_values(mark) for mark in Mark]


def score_outcomes(outcomes: BoardOutcomes, perspective: Mark) -> int:
    """evaluate() for a board that has already been decided."""
    values = SUB_BOARD_VALUES[perspective]
    points = sum(values[code] for code in outcomes.codes)

    if outcomes.winner == Mark.EMPTY:
        return points
    if outcomes.winner == perspective:
        return points + GameConfig.WIN_SCORE
    return points - GameConfig.WIN_SCORE


def evaluate(board: np.ndarray, perspective: Mark) -> int:
    """
    Static score of a board for one player.

    Per sub-board: threat balance if still open, a small penalty if drawn,
    +/-SUBBOARD_WIN_SCORE if won. A won game adds +/-WIN_SCORE on top.

    Args:
        board: The full (3, 3, 3, 3) board.
        perspective: Who we are scoring for.

    Returns:
        The score (higher is better for perspective).
    """
    return score_outcomes(board_outcomes(board), perspective)


class AIPlayer:
    """
    An AI that plays Ultimate Tic-Tac-Toe using negamax search.

    Every branch works on its own copy of the game state, so sibling
    branches never see each other's trial moves.
    """

    def __init__(
        self,
        max_depth: int = GameConfig.MAX_DEPTH,
        rng: Optional[random.Random] = None,
        verbose: bool = True
    ):
        """
        Initialize the AI player.

        Args:
            max_depth: Plies searched below each candidate move.
            rng: Random source for tie-breaks (seed it for repeatable games).
            verbose: Print progress to the console.
        """
        self.max_depth = max_depth
        self.rng = rng or random.Random()
        self.verbose = verbose

        # Keep track of how many positions we've evaluated (for debugging)
        self.positions_evaluated = 0

    def play(
        self,
        board: np.ndarray,
        turn: Mark,
        active: Active
    ) -> Optional[Tuple[int, int]]:
        """Player interface: pick a move for `turn` on this board."""
        if self.verbose:
            print("Thinking...")
        state = GameState(board=board.copy(), turn=turn, active=active)
        return self.choose_move(state)

    def choose_move(self, game_state: GameState) -> Optional[Tuple[int, int]]:
        """
        Get the best move for the current position.

        Args:
            game_state: Current game state.

        Returns:
            Flat (column, row) of the chosen move, or None if no moves available.
        """
        legal = game_state.legal_moves()
        if not legal:
            return None

        ranked = self.rank_moves(game_state)

        best_moves = []
        best_score = -INF
        for move, score in ranked:
            if score > best_score:
                best_moves = [move]
                best_score = score
            elif score == best_score:
                best_moves.append(move)

        if not best_moves:
            return join_position(*self.rng.choice(legal))

        choice = self.rng.choice(best_moves)

        if self.verbose:
            print(
                f"AI evaluated {self.positions_evaluated} positions. "
                f"Best move: {choice} (score: {best_score}, ties: {len(best_moves)})"
            )

        return choice

    def rank_moves(self, game_state: GameState) -> List[Tuple[Tuple[int, int], int]]:
        """
        Score every legal move for the player to move.

        Returns:
            List of (flat (column, row), score) in enumeration order.
        """
        self.positions_evaluated = 0
        me = game_state.turn
        ranked = []

        for move in game_state.legal_moves():
            child = game_state.copy()
            if not child.apply_move(*move):
                continue
            score = self.search(child, 0, -INF, INF, me)
            ranked.append((join_position(*move), score))

        return ranked

    def search(
        self,
        game_state: GameState,
        depth: int,
        alpha: float,
        beta: float,
        perspective: Mark
    ) -> int:
        """
        Negamax with alpha-beta pruning.

        Args:
            game_state: State to search from (never modified).
            depth: Plies already searched.
            alpha: Lower bound of the window.
            beta: Upper bound of the window.
            perspective: Player the leaf evaluation is scored for.

        Returns:
            The score of the position.
        """
        self.positions_evaluated += 1

        outcomes = game_state.outcomes()
        if depth >= self.max_depth or outcomes.winner != Mark.EMPTY:
            return score_outcomes(outcomes, perspective)

        best = -INF

        for move in game_state.legal_moves():
            child = game_state.copy()
            if not child.apply_move(*move):
                continue

            score = -self.search(child, depth + 1, -beta, -alpha, perspective)

            best = max(best, score)
            alpha = max(alpha, best)
            if alpha >= beta:
                return alpha  # Prune

        # Nowhere to move: score the position as it stands
        if best == -INF:
            return score_outcomes(outcomes, perspective)

        return best

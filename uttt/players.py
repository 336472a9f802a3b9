"""
Players for Ultimate Tic-Tac-Toe.

Every player has the same interface:

    play(board, turn, active) -> Optional[(column, row)]

Returning None means "no move produced"; the game asks the same player again.
"""

import random
from enum import Enum
from typing import Callable, Optional, Tuple

import numpy as np

from .ai_player import AIPlayer
from .config import GameConfig
from .game_state import Active
from .mark import Mark
from .notation import move_max, move_min, position_to_string, string_to_position


class PlayerKind(Enum):
    """The kinds of player that can take a seat."""
    HUMAN = "human"
    RANDOM = "random"
    SEARCH = "smart"


# Extra names accepted on the command line
PLAYER_ALIASES = {
    "search": PlayerKind.SEARCH,
}


class HumanPlayer:
    """A person typing moves like "e5" at the keyboard."""

    def __init__(self, input_func: Callable[[str], str] = input):
        self.input_func = input_func

    def play(
        self,
        board: np.ndarray,
        turn: Mark,
        active: Active
    ) -> Optional[Tuple[int, int]]:
        print(
            f"It's {turn.colored()}'s turn! You can move in any open square between "
            f"{position_to_string(move_min(active))} and {position_to_string(move_max(active))}"
        )
        return string_to_position(self.input_func(""))


class RandomPlayer:
    """
    Picks any square on the board at random.
    The square is not checked, so the game may have to ask several times.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def play(
        self,
        board: np.ndarray,
        turn: Mark,
        active: Active
    ) -> Optional[Tuple[int, int]]:
        size = GameConfig.CELLS_PER_SIDE
        return self.rng.randrange(size), self.rng.randrange(size)


def parse_player_kind(name: str) -> PlayerKind:
    """
    Look up a player kind by name.

    Raises:
        ValueError: If the name is not a known player.
    """
    key = name.strip().lower()
    if key in PLAYER_ALIASES:
        return PLAYER_ALIASES[key]
    try:
        return PlayerKind(key)
    except ValueError:
        choices = ", ".join([k.value for k in PlayerKind] + list(PLAYER_ALIASES))
        raise ValueError(f"Unknown player '{name}'. Choose one of: {choices}") from None


def create_player(
    name: str,
    max_depth: int = GameConfig.MAX_DEPTH,
    rng: Optional[random.Random] = None
):
    """
    Build a player from its name ("human", "random" or "smart").

    Args:
        name: Player name from the command line.
        max_depth: Search depth for the smart player.
        rng: Random source shared by the random and smart players.
    """
    kind = parse_player_kind(name)

    if kind == PlayerKind.HUMAN:
        return HumanPlayer()
    if kind == PlayerKind.RANDOM:
        return RandomPlayer(rng)
    return AIPlayer(max_depth=max_depth, rng=rng)

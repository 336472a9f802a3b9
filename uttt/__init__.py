"""
Ultimate Tic-Tac-Toe
====================
Nine tic-tac-toe boards in a 3x3 grid. The cell you play in picks the
board your opponent must play in next. Win three boards in a row to win.

Handles the rules, the AI opponent, move notation and board snapshots.
"""

__version__ = "1.0.0"

from .config import GameConfig
from .mark import Mark
from .game_state import GameState, IllegalMove
from .move_validator import MoveValidator, ValidationResult
from .ai_player import AIPlayer, evaluate
from .players import HumanPlayer, RandomPlayer, PlayerKind, create_player
from .snapshot import SnapshotError, encode_snapshot, decode_snapshot

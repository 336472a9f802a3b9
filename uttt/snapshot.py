"""
Snapshot encoding for Ultimate Tic-Tac-Toe.

Byte layout:
    flag        0 = no active sub-board,
                2 = active sub-board, followed by macro column and macro row
    turn        0 = nobody, 1 = x, 2 = o
    cells       81 bytes, one mark each, ordered by macro column, macro row,
                micro column, micro row
"""

import io

import numpy as np

from .config import GameConfig
from .game_state import GameState
from .mark import Mark


class SnapshotError(ValueError):
    """Raised when snapshot bytes cannot be decoded."""


def encode_snapshot(game_state: GameState) -> bytes:
    """
    Encode a game state to bytes.

    Args:
        game_state: The state to encode.

    Returns:
        83 bytes without an active sub-board, 85 with one.
    """
    if game_state.active is None:
        header = bytes([GameConfig.SNAPSHOT_NO_ACTIVE])
    else:
        macro_col, macro_row = game_state.active
        header = bytes([GameConfig.SNAPSHOT_HAS_ACTIVE, macro_col, macro_row])

    header += bytes([int(game_state.turn)])
    return header + game_state.board.astype(np.uint8).tobytes()


def _read_exact(stream: io.BytesIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise SnapshotError(f"Snapshot truncated: expected {size} byte(s) for {what}, got {len(data)}")
    return data


def _to_mark(value: int) -> Mark:
    try:
        return Mark(value)
    except ValueError:
        raise SnapshotError(f"Invalid mark byte in snapshot: {value}") from None


def decode_snapshot(data: bytes) -> GameState:
    """
    Decode bytes produced by encode_snapshot.

    Args:
        data: Snapshot bytes. Anything after the last cell is ignored.

    Returns:
        A new GameState.

    Raises:
        SnapshotError: If the data is too short or holds invalid values.
    """
    stream = io.BytesIO(data)

    flag = _read_exact(stream, 1, "flag")[0]
    if flag != GameConfig.SNAPSHOT_NO_ACTIVE:
        macro_col, macro_row = _read_exact(stream, 2, "active sub-board")
        if macro_col > 2 or macro_row > 2:
            raise SnapshotError(f"Active sub-board out of range: ({macro_col}, {macro_row})")
        active = (macro_col, macro_row)
    else:
        active = None

    turn = _to_mark(_read_exact(stream, 1, "turn")[0])

    cells = np.frombuffer(
        _read_exact(stream, GameConfig.SNAPSHOT_CELLS, "cells"),
        dtype=np.uint8
    )
    invalid = cells[cells > Mark.O]
    if invalid.size:
        raise SnapshotError(f"Invalid mark byte in snapshot: {int(invalid[0])}")

    board = cells.astype(np.int8).reshape(3, 3, 3, 3)
    return GameState(board=board, turn=turn, active=active)

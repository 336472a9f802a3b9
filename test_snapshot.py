"""
Tests for the snapshot byte format.

Usage:
    pytest test_snapshot.py
"""

import random
import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from uttt import GameState, Mark, SnapshotError, decode_snapshot, encode_snapshot
from uttt.game_state import join_position


EMPTY_CELLS = bytes(81)


def played_game(moves, seed=11):
    """Play some random legal moves."""
    rng = random.Random(seed)
    state = GameState()
    for _ in range(moves):
        legal = state.legal_moves()
        if state.is_complete() or not legal:
            break
        assert state.apply_move(*rng.choice(legal))
    return state


def test_encode_new_game():
    data = encode_snapshot(GameState())
    assert len(data) == 83
    assert data[0] == 0
    assert data[1] == Mark.X
    assert data[2:] == EMPTY_CELLS


def test_encode_active_and_cell_order():
    state = GameState()
    state.apply_move(1, 1, 0, 2)
    data = encode_snapshot(state)

    assert len(data) == 85
    assert list(data[:4]) == [2, 0, 2, Mark.O]

    cells = data[4:]
    # macro col, macro row, micro col, micro row
    index = ((1 * 3 + 1) * 3 + 0) * 3 + 2
    assert cells[index] == Mark.X
    assert sum(1 for b in cells if b) == 1


def test_round_trip():
    for moves in (0, 1, 7, 30, 200):
        state = played_game(moves)
        decoded = decode_snapshot(encode_snapshot(state))
        assert np.array_equal(decoded.board, state.board)
        assert decoded.turn == state.turn
        assert decoded.active == state.active


def test_decoded_state_keeps_playing():
    state = GameState()
    state.apply_move(1, 1, 2, 0)
    decoded = decode_snapshot(encode_snapshot(state))

    assert decoded.active == (2, 0)
    assert decoded.turn == Mark.O
    assert not decoded.play(*join_position(0, 0, 0, 0))
    assert decoded.apply_move(2, 0, 1, 1)
    assert decoded.turn == Mark.X


def test_decoded_board_is_writable():
    decoded = decode_snapshot(encode_snapshot(GameState()))
    assert decoded.apply_move(0, 0, 0, 0)


def test_turn_byte_zero_means_nobody():
    decoded = decode_snapshot(bytes([0, 0]) + EMPTY_CELLS)
    assert decoded.turn == Mark.EMPTY
    assert decoded.apply_move(0, 0, 0, 0)
    assert decoded.board[0, 0, 0, 0] == Mark.X


def test_any_nonzero_flag_reads_active():
    decoded = decode_snapshot(bytes([1, 1, 2, 2]) + EMPTY_CELLS)
    assert decoded.active == (1, 2)
    assert decoded.turn == Mark.O


def test_trailing_bytes_are_ignored():
    data = encode_snapshot(played_game(5))
    decoded = decode_snapshot(data + b"\x09\x09")
    assert encode_snapshot(decoded) == data


def test_one_byte_short_fails():
    data = encode_snapshot(GameState())
    assert len(data[:-1]) == 82
    with pytest.raises(SnapshotError):
        decode_snapshot(data[:-1])


@pytest.mark.parametrize("data", [
    b"",
    b"\x00",
    b"\x02",
    b"\x02\x01",
    b"\x02\x01\x01",
    b"\x02\x01\x01\x01" + bytes(80),
])
def test_truncated_snapshots_fail(data):
    with pytest.raises(SnapshotError):
        decode_snapshot(data)


def test_bad_values_fail():
    with pytest.raises(SnapshotError):
        decode_snapshot(bytes([0, 3]) + EMPTY_CELLS)

    cells = bytearray(EMPTY_CELLS)
    cells[40] = 7
    with pytest.raises(SnapshotError):
        decode_snapshot(bytes([0, 1]) + bytes(cells))

    with pytest.raises(SnapshotError):
        decode_snapshot(bytes([2, 3, 0, 1]) + EMPTY_CELLS)


def test_snapshot_error_is_value_error():
    with pytest.raises(ValueError):
        decode_snapshot(b"\x00\x01")

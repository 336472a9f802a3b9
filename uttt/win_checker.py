"""
Win checker for Ultimate Tic-Tac-Toe.
Decides sub-boards and the whole board, and scores open sub-boards for the AI.

A sub-board is a 3x3 grid indexed [column][row]. The whole board is a 3x3
grid of sub-boards, so the same line checks run twice: once over the cells
of a sub-board and once over the "meta" grid of sub-board results.
"""

from typing import List, NamedTuple, Tuple

import numpy as np

from .mark import Mark


# All possible winning lines as (column, row) tuples
WIN_LINES: List[List[Tuple[int, int]]] = [
    [(0, 0), (0, 1), (0, 2)],
    [(1, 0), (1, 1), (1, 2)],
    [(2, 0), (2, 1), (2, 2)],
    [(0, 0), (1, 0), (2, 0)],
    [(0, 1), (1, 1), (2, 1)],
    [(0, 2), (1, 2), (2, 2)],
    [(0, 0), (1, 1), (2, 2)],
    [(0, 2), (1, 1), (2, 0)],
]

# Same lines as indices into a flattened 3x3 grid, shape (8, 3)
LINE_INDEX = np.array(
    [[col * 3 + row for col, row in line] for line in WIN_LINES],
    dtype=np.intp,
)


def _gather_lines(grids) -> np.ndarray:
    """
    Collect the 8 lines of one or more 3x3 grids.

    Args:
        grids: A 3x3 grid, or any array whose trailing dimensions are 3x3
            (the full (3, 3, 3, 3) board gives all nine sub-boards).

    Returns:
        Array of shape (n, 8, 3).
    """
    return np.asarray(grids).reshape(-1, 9)[:, LINE_INDEX]


def _line_winners(lines: np.ndarray) -> np.ndarray:
    """Winner of each grid: the mark of its first complete line, else EMPTY."""
    first = lines[..., 0]
    won = (first != Mark.EMPTY) & (first == lines[..., 1]) & (first == lines[..., 2])
    first_won = won.argmax(axis=1)
    marks = first[np.arange(len(first)), first_won]
    return np.where(won.any(axis=1), marks, Mark.EMPTY)


def _line_draws(lines: np.ndarray) -> np.ndarray:
    """A grid is drawn once every line holds both an X and an O."""
    blocked = (lines == Mark.X).any(axis=2) & (lines == Mark.O).any(axis=2)
    return blocked.all(axis=1)


def sub_board_winner(sub_board) -> Mark:
    """
    Check if a sub-board has been won.

    Args:
        sub_board: 3x3 grid of marks.

    Returns:
        The winning Mark, or Mark.EMPTY if no line is complete.
    """
    return Mark(int(_line_winners(_gather_lines(sub_board))[0]))


def sub_board_is_draw(sub_board) -> bool:
    """
    Check if a sub-board can no longer be won by anyone.

    This is not "board full": the sub-board counts as drawn as soon as every
    line is blocked, which can happen with cells still empty.
    """
    return bool(_line_draws(_gather_lines(sub_board))[0])


def sub_board_outcomes(board) -> Tuple[np.ndarray, np.ndarray]:
    """
    Decide all nine sub-boards at once.

    Args:
        board: The full (3, 3, 3, 3) board.

    Returns:
        (winners, drawn): 3x3 array of Mark values and 3x3 bool array,
        both indexed [macro column][macro row].
    """
    lines = _gather_lines(board)
    return _line_winners(lines).reshape(3, 3), _line_draws(lines).reshape(3, 3)


def board_winner(board) -> Mark:
    """Winner of the whole game: a line of sub-boards won by the same mark."""
    winners, _ = sub_board_outcomes(board)
    return sub_board_winner(winners)


def board_is_draw(board) -> bool:
    """
    Check if the whole game is drawn.

    The meta grid is "drawn-or-not" per sub-board, and every line of it must
    contain at least one drawn sub-board.
    """
    _, drawn = sub_board_outcomes(board)
    return bool(drawn.reshape(9)[LINE_INDEX].any(axis=1).all())


def subgame_score(sub_board, perspective: Mark) -> int:
    """
    Count open threats in an undecided sub-board.

    +1 for every line with two of our marks and none of theirs,
    -1 for every line with two of theirs and none of ours.

    Args:
        sub_board: 3x3 grid of marks.
        perspective: Who we are scoring for.

    Returns:
        The threat balance (0 when perspective is EMPTY).
    """
    if perspective == Mark.EMPTY:
        return 0
    return int(_threat_balance(_gather_lines(sub_board), perspective)[0])


def _threat_balance(lines: np.ndarray, perspective: Mark) -> np.ndarray:
    """Open two-in-a-rows for perspective minus those for the opponent, per grid."""
    ours = (lines == perspective).sum(axis=2)
    theirs = (lines == perspective.other()).sum(axis=2)

    threats = ((ours == 2) & (theirs == 0)).sum(axis=1)
    blocks = ((ours == 0) & (theirs == 2)).sum(axis=1)
    return threats - blocks


# ==================== LOOKUP TABLES ====================
# A 3x3 grid packs into a base-3 code: the cell at (column, row) is the
# digit of weight 3 ** (column * 3 + row). The search only ever asks about
# whole grids, so every answer is computed once here for all 3 ** 9 grids.

GRID_COUNT = 3 ** 9
CELL_WEIGHTS = 3 ** np.arange(9, dtype=np.int64)

ALL_GRIDS = ((np.arange(GRID_COUNT, dtype=np.int64)[:, None] // CELL_WEIGHTS) % 3).astype(np.int8)

_all_lines = _gather_lines(ALL_GRIDS)

# Indexed by grid code
GRID_WINNERS = _line_winners(_all_lines).astype(np.int8)
GRID_DRAWS = _line_draws(_all_lines)

# Indexed by [perspective][grid code]; the EMPTY row is all zeros
GRID_THREATS = np.stack([
    np.zeros(GRID_COUNT, dtype=np.int64),
    _threat_balance(_all_lines, Mark.X),
    _threat_balance(_all_lines, Mark.O),
])

# Indexed by a 9-bit mask of drawn sub-boards (bit column * 3 + row)
_all_masks = (np.arange(512)[:, None] >> np.arange(9)) & 1
META_DRAWS = _all_masks[:, LINE_INDEX].any(axis=2).all(axis=1)

del _all_lines, _all_masks

# Plain lists for scalar lookups in the search loop
_WINNERS = GRID_WINNERS.tolist()
_DRAWS = GRID_DRAWS.tolist()
_META_DRAWS = META_DRAWS.tolist()
_WEIGHTS = CELL_WEIGHTS.tolist()
_EMPTY_CELLS = [
    tuple((k // 3, k % 3) for k, cell in enumerate(cells) if cell == Mark.EMPTY)
    for cells in ALL_GRIDS.tolist()
]


def grid_code(grid) -> int:
    """Base-3 code of a 3x3 grid."""
    return int(np.asarray(grid, dtype=np.int64).reshape(9) @ CELL_WEIGHTS)


def empty_cells(code: int) -> Tuple[Tuple[int, int], ...]:
    """(column, row) of every empty cell in the grid with this code."""
    return _EMPTY_CELLS[code]


class BoardOutcomes(NamedTuple):
    """
    Everything the rules need to know about a board, computed once.

    Per-sub-board tuples are indexed by macro_col * 3 + macro_row.
    """
    codes: Tuple[int, ...]
    winners: Tuple[int, ...]
    drawn: Tuple[bool, ...]
    winner: Mark
    is_draw: bool

    def is_decided(self, macro_col: int, macro_row: int) -> bool:
        """A sub-board takes no more moves once it is won or drawn."""
        index = macro_col * 3 + macro_row
        return self.winners[index] != Mark.EMPTY or self.drawn[index]


def _summarize(codes: Tuple[int, ...]) -> BoardOutcomes:
    winners = tuple(_WINNERS[code] for code in codes)
    drawn = tuple(_DRAWS[code] for code in codes)

    meta_code = sum(w * weight for w, weight in zip(winners, _WEIGHTS))
    drawn_mask = sum(1 << i for i, d in enumerate(drawn) if d)

    return BoardOutcomes(
        codes=codes,
        winners=winners,
        drawn=drawn,
        winner=Mark(_WINNERS[meta_code]),
        is_draw=_META_DRAWS[drawn_mask],
    )


def board_outcomes(board) -> BoardOutcomes:
    """
    Decide every sub-board and the whole game in one pass.

    Args:
        board: The full (3, 3, 3, 3) board.

    Returns:
        A BoardOutcomes agreeing with sub_board_outcomes, board_winner
        and board_is_draw.
    """
    codes = np.asarray(board, dtype=np.int64).reshape(9, 9) @ CELL_WEIGHTS
    return _summarize(tuple(codes.tolist()))


def place_mark(
    outcomes: BoardOutcomes,
    macro_col: int,
    macro_row: int,
    micro_col: int,
    micro_row: int,
    mark: Mark
) -> BoardOutcomes:
    """
    Outcomes after `mark` is written into an empty cell.

    Only the touched sub-board's code changes, so nothing is re-read from
    the board.
    """
    codes = list(outcomes.codes)
    codes[macro_col * 3 + macro_row] += int(mark) * _WEIGHTS[micro_col * 3 + micro_row]
    return _summarize(tuple(codes))


# Quick test
if __name__ == "__main__":
    print("Testing win checker...")

    sub = np.zeros((3, 3), dtype=np.int8)
    sub[0][0] = sub[1][0] = sub[2][0] = Mark.X
    print(f"Top row of x: winner = {sub_board_winner(sub).name}")
    assert sub_board_winner(sub) == Mark.X

    sub = np.zeros((3, 3), dtype=np.int8)
    sub[0][0] = sub[1][0] = Mark.X
    print(f"Two x in a row: score for x = {subgame_score(sub, Mark.X)}")
    assert subgame_score(sub, Mark.X) == 1

    print("\nWin checker test done!")

"""
Game configuration for Ultimate Tic-Tac-Toe.
Board geometry, search settings, scoring weights, wire format and colours.
"""


class GameConfig:
    """
    Configuration class for the game and the AI.
    These values are read everywhere and never changed while playing.
    """

    # ==================== BOARD SETTINGS ====================
    # 3x3 sub-boards, each a 3x3 grid of cells
    BOARD_SIZE = 3
    CELLS_PER_SIDE = BOARD_SIZE * BOARD_SIZE  # 9

    # Column letters used in move notation (a1 .. i9)
    FILES = "abcdefghi"

    # ==================== AI SETTINGS ====================
    # Plies explored below each candidate move
    MAX_DEPTH = 8

    # Evaluation weights
    WIN_SCORE = 1_000_000          # Whole game won / lost
    SUBBOARD_WIN_SCORE = 100       # Sub-board won / lost
    SUBBOARD_DRAW_PENALTY = 10     # Sub-board that nobody can win any more

    # ==================== SNAPSHOT FORMAT ====================
    SNAPSHOT_NO_ACTIVE = 0
    SNAPSHOT_HAS_ACTIVE = 2
    SNAPSHOT_CELLS = CELLS_PER_SIDE * CELLS_PER_SIDE  # 81

    # ==================== CONSOLE SETTINGS ====================
    RESET = "\x1b[0m"
    RED = "\x1b[31m"
    BLUE = "\x1b[34m"
    COLOR_X = BLUE
    COLOR_O = RED

    # Blank lines printed to "clear" the terminal between turns
    CLEAR_SCREEN_LINES = 100

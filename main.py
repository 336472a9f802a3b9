"""
Main script for Ultimate Tic-Tac-Toe in the terminal.

This script ties together:
- Players (human at the keyboard, random, or the search AI)
- Logic (game state, move validation)
- Rendering (board drawn with ANSI colours)

Run this script to play!

Usage:
    python main.py                    # Human vs human
    python main.py human smart        # Human (x) vs AI (o)
    python main.py smart random       # Watch the AI play
    python main.py smart smart --depth 4 --seed 7
"""

import random
from typing import Optional, Tuple

from uttt import GameConfig, GameState, Mark, MoveValidator, create_player
from uttt.game_state import split_position
from uttt.renderer import render_game


class UltimateTicTacToe:
    """
    Console controller for one game.

    Game flow:
    1. Draw the board
    2. Ask the player whose turn it is for a move
    3. Refuse illegal moves with a message and ask the same player again
    4. Repeat until someone wins or the game is drawn
    """

    def __init__(self, player_x, player_o, clear_screen: bool = True):
        """
        Initialize the game.

        Args:
            player_x: Player for x (moves first).
            player_o: Player for o.
            clear_screen: Scroll the old board away before each redraw.
        """
        self.players = {Mark.X: player_x, Mark.O: player_o}
        self.clear_screen = clear_screen

        self.game_state = GameState()
        self.validator = MoveValidator()

        # Message for the player, shown before they are asked again
        self.message: Optional[str] = None

    def take_turn(self) -> Tuple[int, int]:
        """
        Get one legal move from the current player and make it.

        Returns:
            Flat (column, row) of the move that was made.
        """
        while True:
            if self.message is not None:
                print(self.message)
                self.message = None

            state = self.game_state
            if state.turn == Mark.EMPTY:
                state.turn = Mark.X

            player = self.players[state.turn]
            position = player.play(state.board.copy(), state.turn, state.active)

            x, y = position if position is not None else (None, None)
            result = self.validator.validate_move(state, x, y)
            if not result.is_valid:
                self.message = result.error_message
                continue

            state.apply_move(*split_position(x, y))
            return x, y

    def is_over(self) -> bool:
        """Game over on a win, a draw, or when nobody can move any more."""
        return self.game_state.is_complete() or not self.game_state.legal_moves()

    def start(self) -> Mark:
        """
        Play the game to the end.

        Returns:
            The winner, or Mark.EMPTY for a draw.
        """
        while not self.is_over():
            self._draw()
            self.take_turn()

        self._draw()
        return self._show_game_result()

    def _draw(self):
        if self.clear_screen:
            print("\n" * GameConfig.CLEAR_SCREEN_LINES)
        print(render_game(self.game_state.board, self.game_state.active))

    def _show_game_result(self) -> Mark:
        """Show the final game result."""
        winner = self.game_state.winner
        if winner == Mark.EMPTY:
            print("It's a draw!")
        else:
            print(f"{winner.colored()} wins!")
        return winner


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Ultimate Tic-Tac-Toe")
    parser.add_argument(
        "player_x",
        nargs="?",
        default="human",
        help="Who plays x: human, random or smart (default: human)"
    )
    parser.add_argument(
        "player_o",
        nargs="?",
        default="human",
        help="Who plays o: human, random or smart (default: human)"
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=GameConfig.MAX_DEPTH,
        help=f"Search depth for smart players (default: {GameConfig.MAX_DEPTH})"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for random and smart players"
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Don't scroll the old board away between turns"
    )

    args = parser.parse_args()

    rng = random.Random(args.seed)
    try:
        player_x = create_player(args.player_x, max_depth=args.depth, rng=rng)
        player_o = create_player(args.player_o, max_depth=args.depth, rng=rng)
    except ValueError as e:
        parser.error(str(e))

    game = UltimateTicTacToe(player_x, player_o, clear_screen=not args.no_clear)

    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()

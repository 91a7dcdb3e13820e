"""
utils.py - Constants, enumerations and helpers shared by the engine

This module provides the board dimensions, the Player and GameResult
enumerations, move ordering and the ASCII renderer used throughout the
package.
"""

from enum import Enum, auto
from functools import lru_cache
from typing import Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

# Terminal scores sit above every heuristic value. A win is scored
# WIN_SCORE + empty cells left, so quicker wins score higher.
WIN_SCORE = 1_000_000
HEURISTIC_LIMIT = WIN_SCORE // 2
INFINITY = 10 * WIN_SCORE


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def index(self) -> int:
        """Bitmask slot of a real player (ONE -> 0, TWO -> 1)."""
        return self.value - 1

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        if self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"{player} cannot win")


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col) in grid coordinates, row 0 at the top
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1)
}


@lru_cache(maxsize=None)
def center_out_order(width: int) -> Tuple[int, ...]:
    """
    Column order starting from the center and moving outwards.

    For even widths the left of the two center columns comes first.

    Args:
        width: Number of columns

    Returns:
        Tuple of column indices, e.g. (3, 2, 4, 1, 5, 0, 6) for width 7
    """
    center = (width - 1) / 2
    return tuple(sorted(range(width), key=lambda c: (abs(c - center), c)))


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a board grid as ASCII art.

    Args:
        grid: 2D array of cell values, row 0 at the top

    Returns:
        ASCII representation of the board
    """
    rows, cols = grid.shape
    symbols = {Player.EMPTY.value: ".", Player.ONE.value: "X", Player.TWO.value: "O"}
    border = "+" + "-" * (cols * 2 - 1) + "+"

    lines = [border]
    for row in range(rows):
        lines.append("|" + " ".join(symbols[int(v)] for v in grid[row]) + "|")
    lines.append(border)
    lines.append(" " + " ".join(str(c % 10) for c in range(cols)) + " ")
    return "\n".join(lines)

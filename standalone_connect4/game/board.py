"""
board.py - Board representation for Connect Four

This module implements the Board class: the grid of cells, per-column fill
heights, the move counter and the player to move. Moves are applied with
drop() and rolled back with undo(), which lets the search engine walk the
game tree on a single board without allocating new ones.

Alongside the numpy grid the board keeps one bitmask per player. Bit
``col * (height + 1) + r`` is set when the player owns the cell ``r`` rows
above the bottom of column ``col``; the extra bit per column is a sentinel
that is never set, so bit shifts never wrap from one column into the next.
The bitmasks back both the O(1) win check and the transposition key.
"""

from typing import Iterable, List, Optional, Tuple

import numpy as np

from standalone_connect4.debug import debug
from standalone_connect4.errors import BoardStateError, ColumnFullError, OutOfRangeError
from standalone_connect4.utils import COLS, ROWS, Player, render_board_ascii


class Board:
    """
    Represents a Connect Four game board.

    The board only enforces structure (bounds, full columns, gravity). Whether
    the game is already won is a question for the rules module.
    """

    def __init__(self, width: int = COLS, height: int = ROWS):
        """
        Initialize an empty board.

        Args:
            width: Number of columns
            height: Number of rows
        """
        if width < 1 or height < 1:
            raise ValueError(f"board dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
        self.heights: List[int] = [0] * self.width
        self.move_count = 0
        self.current_player = Player.ONE
        self._history: List[Tuple[int, int]] = []
        self._bits = [0, 0]

    @classmethod
    def from_moves(cls, moves: Iterable[int], width: int = COLS, height: int = ROWS) -> 'Board':
        """
        Build a board by dropping the given columns in order.

        Args:
            moves: Sequence of column indices, first player first

        Returns:
            The resulting board

        Raises:
            InvalidMoveError: if any column in the sequence is illegal
        """
        board = cls(width, height)
        for column in moves:
            board.drop(column)
        return board

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        new_board = Board.__new__(Board)
        new_board.width = self.width
        new_board.height = self.height
        new_board.grid = self.grid.copy()
        new_board.heights = self.heights.copy()
        new_board.move_count = self.move_count
        new_board.current_player = self.current_player
        new_board._history = self._history.copy()
        new_board._bits = self._bits.copy()
        return new_board

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def moves(self) -> Tuple[int, ...]:
        """Columns played so far, in order."""
        return tuple(col for _, col in self._history)

    @property
    def last_move(self) -> Optional[Tuple[int, int]]:
        """(row, column) of the most recent token, or None on an empty board."""
        return self._history[-1] if self._history else None

    def can_drop(self, column: int) -> bool:
        return 0 <= column < self.width and self.heights[column] < self.height

    def drop(self, column: int) -> int:
        """
        Place the current player's token in the given column.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            The grid row the token landed in (row 0 is the top)

        Raises:
            OutOfRangeError: if the column is outside [0, width)
            ColumnFullError: if the column has no empty cell
        """
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)) \
                or not 0 <= column < self.width:
            debug.debug(f"Rejected drop: column {column!r} out of range", "board")
            raise OutOfRangeError(column, self.width)
        column = int(column)

        filled = self.heights[column]
        if filled >= self.height:
            debug.debug(f"Rejected drop: column {column} is full", "board")
            raise ColumnFullError(column)

        row = self.height - 1 - filled
        player = self.current_player
        self.grid[row, column] = player.value
        self._bits[player.index] |= 1 << (column * (self.height + 1) + filled)
        self.heights[column] = filled + 1
        self.move_count += 1
        self._history.append((row, column))
        self.current_player = player.other()
        return row

    def undo(self, column: int) -> None:
        """
        Remove the most recent token, which must sit in ``column``.

        This is a structural rollback for search, not a validated move.

        Raises:
            BoardStateError: if ``column`` was not the last column dropped into
        """
        if not self._history or self._history[-1][1] != column:
            last = self._history[-1][1] if self._history else None
            raise BoardStateError(f"undo({column}) does not match last drop ({last})")

        row, _ = self._history.pop()
        filled = self.heights[column] - 1
        player = self.current_player.other()
        self.grid[row, column] = Player.EMPTY.value
        self._bits[player.index] &= ~(1 << (column * (self.height + 1) + filled))
        self.heights[column] = filled
        self.move_count -= 1
        self.current_player = player

    def undo_last(self) -> int:
        """
        Undo the most recent drop.

        Returns:
            The column that was undone

        Raises:
            BoardStateError: on an empty board
        """
        if not self._history:
            raise BoardStateError("undo on an empty board")
        column = self._history[-1][1]
        self.undo(column)
        return column

    def is_full(self) -> bool:
        return self.move_count == self.width * self.height

    def cell(self, row: int, column: int) -> Player:
        return Player(int(self.grid[row, column]))

    def bits_of(self, player: Player) -> int:
        """Bitmask of the cells owned by ``player``."""
        return self._bits[player.index]

    @property
    def occupied(self) -> int:
        return self._bits[0] | self._bits[1]

    def key(self) -> int:
        """
        Transposition key of the position.

        The mover's bitmask plus the occupancy mask is unique per position and
        side to move: adding the occupancy mask turns each column into a run
        of ones topped by a marker bit in the sentinel-padded layout.
        """
        return self._bits[self.current_player.index] + self.occupied

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the grid, row 0 at the top
        """
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        moves = "".join(str(c) for c in self.moves) if self.width <= 10 else list(self.moves)
        return f"Board({self.width}x{self.height}, moves={moves!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and self._history == other._history
                and self.heights == other.heights
                and self.move_count == other.move_count
                and self.current_player == other.current_player
                and self._bits == other._bits
                and np.array_equal(self.grid, other.grid))

    __hash__ = None

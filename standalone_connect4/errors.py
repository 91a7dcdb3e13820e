"""
errors.py - Exception hierarchy for the Connect Four engine

Move rejections (InvalidMoveError and its subclasses) and GameOverError are
recoverable: the rejected call leaves all state untouched. BoardStateError and
SearchError signal a broken invariant and are never caught inside the engine.
"""


class Connect4Error(Exception):
    """Base class for every error raised by this package."""


class InvalidMoveError(Connect4Error, ValueError):
    """A move was rejected. The board is unchanged."""

    def __init__(self, column, message: str):
        super().__init__(message)
        self.column = column


class OutOfRangeError(InvalidMoveError):
    """Column index outside [0, width)."""

    def __init__(self, column, width: int):
        super().__init__(column, f"column {column!r} is out of range [0, {width})")
        self.width = width


class ColumnFullError(InvalidMoveError):
    """The column has no empty cell left."""

    def __init__(self, column: int):
        super().__init__(column, f"column {column} is full")


class OutOfTurnError(InvalidMoveError):
    """The player asking to move is not the player to move."""

    def __init__(self, column, player, expected):
        super().__init__(column, f"{player.name} tried to move but it is {expected.name}'s turn")
        self.player = player
        self.expected = expected


class GameOverError(Connect4Error):
    """A move was requested after the game already ended."""

    def __init__(self, result):
        super().__init__(f"game is over ({result.name})")
        self.result = result


class BoardStateError(Connect4Error, RuntimeError):
    """Board invariant violated, e.g. undo without a matching drop."""


class SearchError(Connect4Error, RuntimeError):
    """Internal consistency fault detected during search."""


class ConfigError(Connect4Error, ValueError):
    """Invalid configuration file or environment override."""

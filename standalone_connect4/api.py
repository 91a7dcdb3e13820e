"""
api.py - Functional entry points for embedding the engine

These functions never mutate the board they are given: apply_move() returns
a new board, request_engine_move() searches a private copy.
"""

from typing import Optional

from standalone_connect4.ai.search import SearchEngine, SearchResult
from standalone_connect4.errors import GameOverError, OutOfTurnError
from standalone_connect4.game import rules
from standalone_connect4.game.board import Board
from standalone_connect4.utils import COLS, ROWS, GameResult, Player


def new_game(width: int = COLS, height: int = ROWS) -> Board:
    """Create an empty board; Player.ONE moves first."""
    return Board(width, height)


def result_of(board: Board) -> GameResult:
    return rules.game_result(board)


def apply_move(board: Board, column: int, player: Player) -> Board:
    """
    Play ``column`` for ``player`` and return the resulting board.

    Raises:
        GameOverError: if the game on ``board`` already ended
        OutOfTurnError: if ``player`` is not the player to move
        OutOfRangeError: if the column is outside the board
        ColumnFullError: if the column is full
    """
    result = rules.game_result(board)
    if result.is_game_over():
        raise GameOverError(result)
    if player != board.current_player:
        raise OutOfTurnError(column, player, board.current_player)

    new_board = board.copy()
    new_board.drop(column)
    return new_board


def request_engine_move(board: Board, player: Player,
                        time_budget_ms: Optional[int] = None,
                        depth_limit: Optional[int] = None,
                        engine: Optional[SearchEngine] = None) -> SearchResult:
    """
    Ask the engine for ``player``'s move on ``board``.

    A finished game is not an error: the result carries no column and the
    terminal GameResult.

    Raises:
        OutOfTurnError: if ``player`` is not the player to move on a live board
    """
    if player != board.current_player and not rules.game_result(board).is_game_over():
        raise OutOfTurnError(None, player, board.current_player)
    if engine is None:
        engine = SearchEngine()
    return engine.search(board, max_depth=depth_limit, time_budget_ms=time_budget_ms)

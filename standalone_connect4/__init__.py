"""
standalone_connect4 - Connect Four game engine and move-search solver

This package provides the board representation, the rules, a position
evaluator, a negamax search engine with a transposition table and a game
session that alternates human and engine moves.
"""

# Version number
__version__ = '0.1.0'

from standalone_connect4.api import apply_move, new_game, request_engine_move, result_of
from standalone_connect4.errors import (BoardStateError, ColumnFullError, ConfigError,
                                        Connect4Error, GameOverError, InvalidMoveError,
                                        OutOfRangeError, OutOfTurnError, SearchError)
from standalone_connect4.utils import GameResult, Player
from standalone_connect4.game.board import Board
from standalone_connect4.ai.search import SearchEngine, SearchResult
from standalone_connect4.game.session import GameSession

__all__ = [
    'new_game', 'apply_move', 'request_engine_move', 'result_of',
    'GameResult', 'Player', 'Board', 'SearchEngine', 'SearchResult', 'GameSession',
    'Connect4Error', 'InvalidMoveError', 'OutOfRangeError', 'ColumnFullError',
    'OutOfTurnError', 'GameOverError', 'BoardStateError', 'SearchError', 'ConfigError',
]

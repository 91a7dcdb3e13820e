"""
Functional API tests: immutability of inputs, turn checks and terminal boards.
"""

import pytest

import standalone_connect4 as c4
from standalone_connect4.ai.search import SearchEngine
from standalone_connect4.config import EngineConfig, SearchConfig
from standalone_connect4.errors import (ColumnFullError, GameOverError, InvalidMoveError,
                                        OutOfRangeError, OutOfTurnError)
from standalone_connect4.game.board import Board
from standalone_connect4.utils import GameResult, Player

from conftest import DRAW_MOVES, HORIZONTAL_WIN_MOVES, OPEN_THREE_MOVES


class TestApplyMove:
    def test_returns_new_board(self):
        board = c4.new_game()
        after = c4.apply_move(board, 3, Player.ONE)
        assert after is not board
        assert board.move_count == 0
        assert after.moves == (3,)
        assert after.cell(5, 3) == Player.ONE

    def test_chained_moves(self):
        board = c4.new_game()
        for i, col in enumerate(HORIZONTAL_WIN_MOVES):
            player = Player.ONE if i % 2 == 0 else Player.TWO
            board = c4.apply_move(board, col, player)
        assert c4.result_of(board) == GameResult.PLAYER_ONE_WIN

    def test_out_of_turn(self):
        board = c4.new_game()
        with pytest.raises(OutOfTurnError) as info:
            c4.apply_move(board, 3, Player.TWO)
        assert info.value.expected == Player.ONE
        assert isinstance(info.value, InvalidMoveError)

    def test_bad_columns(self):
        board = Board.from_moves([0] * 6)
        with pytest.raises(ColumnFullError):
            c4.apply_move(board, 0, Player.ONE)
        with pytest.raises(OutOfRangeError):
            c4.apply_move(board, 7, Player.ONE)
        with pytest.raises(OutOfRangeError):
            c4.apply_move(board, -1, Player.ONE)
        assert board.moves == (0,) * 6

    def test_game_over_checked_before_turn(self):
        # TWO would be to move, but the game is already won
        board = Board.from_moves(HORIZONTAL_WIN_MOVES)
        with pytest.raises(GameOverError) as info:
            c4.apply_move(board, 0, Player.ONE)
        assert info.value.result == GameResult.PLAYER_ONE_WIN
        with pytest.raises(GameOverError):
            c4.apply_move(board, 0, Player.TWO)

    def test_errors_share_base(self):
        assert issubclass(GameOverError, c4.Connect4Error)
        assert issubclass(InvalidMoveError, ValueError)


class TestEngineMove:
    def test_finds_win(self):
        board = Board.from_moves(OPEN_THREE_MOVES)
        found = c4.request_engine_move(board, Player.ONE, depth_limit=2)
        assert found.column == 1
        assert board.moves == tuple(OPEN_THREE_MOVES)

    def test_terminal_board(self):
        board = Board.from_moves(HORIZONTAL_WIN_MOVES)
        found = c4.request_engine_move(board, Player.ONE)
        assert found.column is None
        assert found.result == GameResult.PLAYER_ONE_WIN

    def test_drawn_board(self):
        found = c4.request_engine_move(Board.from_moves(DRAW_MOVES), Player.ONE)
        assert found.column is None
        assert found.result == GameResult.DRAW

    def test_out_of_turn(self):
        with pytest.raises(OutOfTurnError):
            c4.request_engine_move(c4.new_game(), Player.TWO, depth_limit=1)

    def test_uses_given_engine(self):
        engine = SearchEngine(EngineConfig(search=SearchConfig(max_depth=1)))
        found = c4.request_engine_move(c4.new_game(), Player.ONE, engine=engine)
        assert found.depth == 1
        assert engine.last_nodes == found.nodes

    def test_time_budget(self):
        found = c4.request_engine_move(c4.new_game(), Player.ONE, time_budget_ms=1,
                                       depth_limit=20)
        assert found.timed_out
        assert found.column in range(7)


class TestPackageExports:
    def test_version(self):
        assert c4.__version__ == '0.1.0'

    def test_session_export(self):
        session = c4.GameSession()
        assert session.apply_human_move(3) == GameResult.IN_PROGRESS

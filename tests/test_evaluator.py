"""
Evaluator tests: terminal ordering, sign conventions and heuristic terms.
"""

import pytest

from standalone_connect4.ai.evaluator import Evaluator, center_weights, window_indices
from standalone_connect4.config import EvalWeights
from standalone_connect4.game.board import Board
from standalone_connect4.utils import HEURISTIC_LIMIT, WIN_SCORE, Player

from conftest import (DIAGONAL_WIN_MOVES, DRAW_MOVES, HORIZONTAL_WIN_MOVES, VERTICAL_WIN_MOVES,
                      random_playout)


class TestTerminalScores:
    def test_win_and_loss(self):
        ev = Evaluator()
        b = Board.from_moves(HORIZONTAL_WIN_MOVES)
        remaining = 42 - len(HORIZONTAL_WIN_MOVES)
        assert ev.score(b, Player.ONE) == WIN_SCORE + remaining
        assert ev.score(b, Player.TWO) == -(WIN_SCORE + remaining)

    def test_faster_win_scores_higher(self):
        ev = Evaluator()
        fast = Board.from_moves(VERTICAL_WIN_MOVES)
        slow = Board.from_moves(DIAGONAL_WIN_MOVES)
        assert ev.score(slow, Player.ONE) >= WIN_SCORE
        assert ev.score(fast, Player.ONE) > ev.score(slow, Player.ONE)
        assert ev.score(fast, Player.TWO) < ev.score(slow, Player.TWO)

    def test_draw_is_zero(self):
        b = Board.from_moves(DRAW_MOVES)
        assert Evaluator().score(b, Player.ONE) == 0
        assert Evaluator().score(b, Player.TWO) == 0

    def test_empty_perspective_rejected(self):
        with pytest.raises(ValueError):
            Evaluator().score(Board(), Player.EMPTY)


class TestHeuristic:
    def test_empty_board_is_zero(self):
        assert Evaluator().score(Board(), Player.ONE) == 0

    def test_center_token_favours_owner(self):
        ev = Evaluator()
        b = Board.from_moves([3])
        assert ev.score(b, Player.ONE) > 0
        assert ev.score(b, Player.TWO) < 0

    def test_center_beats_edge(self):
        ev = Evaluator()
        assert ev.score(Board.from_moves([3]), Player.ONE) > ev.score(Board.from_moves([0]), Player.ONE)

    def test_zero_sum_on_random_boards(self, rng):
        ev = Evaluator()
        for _ in range(100):
            b = random_playout(rng, max_moves=rng.randint(0, 42))
            assert ev.score(b, Player.ONE) == -ev.score(b, Player.TWO)

    def test_heuristic_stays_below_win_score(self, rng):
        ev = Evaluator(EvalWeights(playable_three=10 ** 9))
        for _ in range(50):
            b = random_playout(rng, max_moves=rng.randint(5, 30))
            assert abs(ev.heuristic(b, Player.ONE)) <= HEURISTIC_LIMIT < WIN_SCORE

    def test_playable_three_counts_more(self):
        weights = EvalWeights(playable_three=100, three=1, two=0, center=0)
        ev = Evaluator(weights)
        # ONE: 1, 2, 3 on the bottom row, 0 and 4 both playable
        playable = Board.from_moves([1, 1, 2, 2, 3, 6])
        assert ev.score(playable, Player.ONE) >= 200

    def test_weights_change_scores(self):
        b = Board.from_moves([3, 0, 3])
        plain = Evaluator(EvalWeights(center=0)).score(b, Player.ONE)
        centered = Evaluator(EvalWeights(center=50)).score(b, Player.ONE)
        assert centered > plain


class TestWindows:
    def test_standard_board_has_69_windows(self):
        assert window_indices(7, 6).shape == (69, 4)

    def test_small_board_has_no_windows(self):
        assert window_indices(3, 3).shape == (0, 4)
        assert Evaluator().heuristic(Board(3, 3), Player.ONE) == 0

    def test_center_weights(self):
        assert list(center_weights(7, 6)[0]) == [0, 1, 2, 3, 2, 1, 0]
        assert list(center_weights(6, 6)[0]) == [0, 1, 2, 2, 1, 0]

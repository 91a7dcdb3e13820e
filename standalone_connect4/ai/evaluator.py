"""
evaluator.py - Static position evaluation for Connect Four

Terminal positions get an exact score: a win is worth WIN_SCORE plus the
number of empty cells left, so the search prefers the quickest win and the
slowest loss. Everything else gets a heuristic built from every four-cell
window on the board:

- open threes (three tokens and one empty cell), worth more when the empty
  cell is immediately playable
- open twos (two tokens and two empty cells)
- tokens close to the center column

Each term counts for the evaluated player and against the opponent, so
score(board, p) == -score(board, p.other()) holds for every position.
"""

from functools import lru_cache
from typing import Optional

import numpy as np

from standalone_connect4.config import EvalWeights
from standalone_connect4.game import rules
from standalone_connect4.game.board import Board
from standalone_connect4.utils import (CONNECT_N, DIRECTION_VECTORS, HEURISTIC_LIMIT, WIN_SCORE,
                                       GameResult, Player)


@lru_cache(maxsize=None)
def window_indices(width: int, height: int) -> np.ndarray:
    """
    Flat grid indices of every line of CONNECT_N cells.

    Returns:
        Array of shape (windows, CONNECT_N)
    """
    windows = []
    for row in range(height):
        for col in range(width):
            for dr, dc in DIRECTION_VECTORS.values():
                end_r, end_c = row + dr * (CONNECT_N - 1), col + dc * (CONNECT_N - 1)
                if 0 <= end_r < height and 0 <= end_c < width:
                    windows.append([(row + i * dr) * width + col + i * dc for i in range(CONNECT_N)])
    indices = np.array(windows, dtype=np.intp).reshape(-1, CONNECT_N)
    indices.setflags(write=False)
    return indices


@lru_cache(maxsize=None)
def center_weights(width: int, height: int) -> np.ndarray:
    """Per-cell weight: distance-from-edge toward the center column, 0 at the edges."""
    half = width // 2
    per_column = np.array([max(0, half - abs(col - (width - 1) / 2)) for col in range(width)])
    weights = np.tile(np.floor(per_column).astype(np.int64), (height, 1))
    weights.setflags(write=False)
    return weights


def terminal_score(result: GameResult, board: Board, perspective: Player) -> int:
    """Exact score of a finished game from ``perspective``'s point of view."""
    if result == GameResult.DRAW:
        return 0
    remaining = board.size - board.move_count
    value = WIN_SCORE + remaining
    return value if result.winner == perspective else -value


class Evaluator:
    """Scores positions; holds only its weights."""

    def __init__(self, weights: Optional[EvalWeights] = None):
        self.weights = weights if weights is not None else EvalWeights()

    def score(self, board: Board, perspective: Player) -> int:
        """
        Score a board from one player's perspective.

        Args:
            board: The position to score
            perspective: The player the score is for

        Returns:
            Positive when the position favours ``perspective``
        """
        if perspective == Player.EMPTY:
            raise ValueError("perspective must be a real player")

        result = rules.game_result(board)
        if result.is_game_over():
            return terminal_score(result, board, perspective)
        return self.heuristic(board, perspective)

    def heuristic(self, board: Board, perspective: Player) -> int:
        """Window-based estimate for a non-terminal board, clamped below WIN_SCORE."""
        w = self.weights
        grid = board.grid
        windows = window_indices(board.width, board.height)
        me, opp = perspective.value, perspective.other().value

        empty = grid == Player.EMPTY.value
        supported = np.ones_like(empty)
        supported[:-1] = ~empty[1:]
        playable = (empty & supported).ravel()

        cells = grid.ravel()[windows]
        mine = np.count_nonzero(cells == me, axis=1)
        theirs = np.count_nonzero(cells == opp, axis=1)
        open_cells = CONNECT_N - mine - theirs
        window_playable = playable[windows].any(axis=1)

        score = 0
        for count, sign in ((mine, 1), (theirs, -1)):
            threes = (count == CONNECT_N - 1) & (open_cells == 1)
            playable_threes = int(np.count_nonzero(threes & window_playable))
            other_threes = int(np.count_nonzero(threes)) - playable_threes
            twos = int(np.count_nonzero((count == CONNECT_N - 2) & (open_cells == 2)))
            score += sign * (w.playable_three * playable_threes + w.three * other_threes + w.two * twos)

        centers = center_weights(board.width, board.height)
        score += w.center * int(centers[grid == me].sum() - centers[grid == opp].sum())

        return max(-HEURISTIC_LIMIT, min(HEURISTIC_LIMIT, score))

import random

import pytest

from standalone_connect4.ai.search import SearchEngine
from standalone_connect4.config import EngineConfig, SearchConfig
from standalone_connect4.debug import DebugLevel, debug
from standalone_connect4.game import rules
from standalone_connect4.game.board import Board

# Player ONE: 3, 2, 4 on the bottom row; Player TWO stacked on top. ONE to move.
OPEN_THREE_MOVES = [3, 3, 2, 2, 4, 4]

# Completes a bottom-row four for Player ONE on the 7th move.
HORIZONTAL_WIN_MOVES = [3, 3, 2, 2, 4, 4, 5]

# Player ONE completes the (0,0)-(3,3) diagonal on the 11th move.
DIAGONAL_WIN_MOVES = [0, 1, 1, 2, 3, 2, 2, 3, 6, 3, 3]

VERTICAL_WIN_MOVES = [0, 1, 0, 1, 0, 1, 0]

# Fills all 42 cells without four in a row. Final grid, bottom to top:
# even columns A A B B A B, odd columns B B A A B A.
DRAW_MOVES = [
    0, 1, 0, 1, 1, 0, 1, 0, 0, 1, 1, 0,
    2, 3, 2, 3, 3, 2, 3, 2, 2, 3, 3, 2,
    4, 5, 6, 5, 4, 4, 6, 6, 5, 4, 5, 6, 4, 5, 6, 4, 5, 6,
]


def random_playout(rng: random.Random, board: Board = None, max_moves: int = 42) -> Board:
    """Play random legal moves until the game ends or ``max_moves`` are made."""
    board = board or Board()
    for _ in range(max_moves):
        if rules.game_result(board).is_game_over():
            break
        board.drop(rng.choice(rules.legal_moves(board)))
    return board


@pytest.fixture(autouse=True)
def _reset_debug():
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def engine():
    return SearchEngine(EngineConfig(search=SearchConfig(max_depth=4)))

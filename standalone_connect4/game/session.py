"""
session.py - Game session management for Connect Four

This module provides the GameSession class, which owns the board of one game,
alternates human and engine moves and reports the result after every move.
Front ends read the state through snapshot(), which never exposes the live
board.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from standalone_connect4.ai.search import SearchEngine, SearchResult
from standalone_connect4.config import EngineConfig
from standalone_connect4.debug import debug
from standalone_connect4.errors import GameOverError
from standalone_connect4.game import rules
from standalone_connect4.game.board import Board
from standalone_connect4.utils import COLS, ROWS, GameResult, Player


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session; the grid is a non-writable copy."""
    grid: np.ndarray
    current_player: Player
    move_count: int
    moves: Tuple[int, ...]
    last_move: Optional[Tuple[int, int]]
    result: GameResult
    winning_line: Tuple[Tuple[int, int], ...]
    legal_moves: Tuple[int, ...]

    @property
    def winner(self) -> Optional[Player]:
        return self.result.winner


class GameSession:
    """
    High-level Connect Four game manager.

    The session is the only owner of its board. Every state change goes
    through apply_human_move(), apply_engine_move(), undo() or reset().
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 width: int = COLS, height: int = ROWS,
                 engine: Optional[SearchEngine] = None):
        """
        Initialize a new game.

        Args:
            config: Engine configuration (search limits, weights)
            width: Number of columns
            height: Number of rows
            engine: Search engine to use; one is created from ``config`` if omitted
        """
        self.config = config if config is not None else EngineConfig()
        self.engine = engine if engine is not None else SearchEngine(self.config)
        self._board = Board(width, height)
        debug.debug(f"New session {width}x{height}", "session")

    @classmethod
    def replay(cls, moves: Iterable[int], config: Optional[EngineConfig] = None,
               width: int = COLS, height: int = ROWS,
               engine: Optional[SearchEngine] = None) -> 'GameSession':
        """
        Rebuild a session from the columns played so far.

        Raises:
            InvalidMoveError: if a column is illegal at its point in the game
            GameOverError: if the sequence continues after the game ended
        """
        session = cls(config, width, height, engine)
        for column in moves:
            session.apply_human_move(column)
        return session

    @property
    def result(self) -> GameResult:
        return rules.game_result(self._board)

    @property
    def current_player(self) -> Player:
        return self._board.current_player

    @property
    def moves(self) -> Tuple[int, ...]:
        return self._board.moves

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def _ensure_in_progress(self) -> None:
        result = self.result
        if result.is_game_over():
            debug.debug(f"Move rejected, game over ({result.name})", "session")
            raise GameOverError(result)

    def apply_human_move(self, column: int) -> GameResult:
        """
        Play ``column`` for the player to move.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            The game result after the move

        Raises:
            GameOverError: if the game already ended
            InvalidMoveError: if the column is out of range or full
        """
        self._ensure_in_progress()
        player = self._board.current_player
        self._board.drop(column)
        result = self.result
        debug.debug(f"{player.name} played column {column} -> {result.name}", "session")
        return result

    def apply_engine_move(self, time_budget_ms: Optional[int] = None,
                          depth: Optional[int] = None) -> SearchResult:
        """
        Let the engine choose and play a move for the player to move.

        Args:
            time_budget_ms: Wall-clock budget for the search
            depth: Depth limit for the search

        Returns:
            The SearchResult of the move that was played

        Raises:
            GameOverError: if the game already ended
        """
        self._ensure_in_progress()
        found = self.engine.search(self._board, max_depth=depth, time_budget_ms=time_budget_ms)
        if found.column is None:
            raise GameOverError(found.result)
        self._board.drop(found.column)
        debug.debug(f"Engine played column {found.column} -> {self.result.name}", "session")
        return found

    def undo(self) -> Optional[int]:
        """
        Take back the last move, also after the game ended.

        Returns:
            The column that was undone, or None if no moves were made
        """
        if self._board.move_count == 0:
            debug.debug("No moves to undo", "session")
            return None
        return self._board.undo_last()

    def reset(self) -> None:
        """Start over on an empty board; a persistent search table is dropped too."""
        self._board.reset()
        self.engine.clear_table()

    def board_copy(self) -> Board:
        return self._board.copy()

    def snapshot(self) -> SessionSnapshot:
        grid = self._board.get_state()
        grid.setflags(write=False)
        result = self.result
        line: List[Tuple[int, int]] = rules.winning_line(self._board) if result.winner else []
        return SessionSnapshot(
            grid=grid,
            current_player=self._board.current_player,
            move_count=self._board.move_count,
            moves=self._board.moves,
            last_move=self._board.last_move,
            result=result,
            winning_line=tuple(line),
            legal_moves=tuple(rules.legal_moves(self._board)) if not result.is_game_over() else (),
        )

    def render(self) -> str:
        return self._board.render()

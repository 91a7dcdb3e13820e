"""
search.py - Negamax move search for Connect Four

This module provides the SearchEngine class, which picks a move with negamax,
alpha-beta pruning and iterative deepening, backed by a transposition table.

Each call works on a private copy of the board, walking the tree with
drop()/undo() pairs. Iterations run at depth 1, 2, ... up to the depth limit;
when the time budget runs out mid-iteration that iteration is thrown away and
the move from the deepest completed one is returned. Depth 1 always runs to
completion, so a non-terminal board always gets a move.

Among equally scored root moves the first in center-out order wins, which
makes the choice reproducible for a fixed depth.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from standalone_connect4.ai.evaluator import Evaluator, terminal_score
from standalone_connect4.ai.transposition import Bound, TranspositionTable
from standalone_connect4.config import EngineConfig, SearchConfig
from standalone_connect4.debug import debug
from standalone_connect4.errors import SearchError
from standalone_connect4.game import rules
from standalone_connect4.game.board import Board
from standalone_connect4.utils import INFINITY, WIN_SCORE, GameResult


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search call. ``score`` is from the mover's point of view."""
    column: Optional[int]
    score: int
    depth: int
    result: GameResult = GameResult.IN_PROGRESS
    nodes: int = 0
    elapsed_ms: float = 0.0
    timed_out: bool = False

    @property
    def is_proven(self) -> bool:
        """True when the score is a forced win or loss rather than an estimate."""
        return abs(self.score) >= WIN_SCORE


class SearchTimeout(Exception):
    """Raised inside the tree when the deadline passes; never leaves search()."""


class _Worker:
    """Runs negamax for one thread; counts its own nodes."""

    def __init__(self, evaluator: Evaluator, table: TranspositionTable, deadline: Optional[float]):
        self.evaluator = evaluator
        self.table = table
        self.deadline = deadline
        self.nodes = 0

    def negamax(self, board: Board, depth: int, alpha: int, beta: int) -> int:
        """
        Negamax with alpha-beta pruning.

        Args:
            board: Position to search; restored before returning
            depth: Remaining depth in plies
            alpha: Lower bound of the search window
            beta: Upper bound of the search window

        Returns:
            Score from the perspective of the player to move
        """
        self.nodes += 1
        if self.deadline is not None and time.perf_counter() >= self.deadline:
            raise SearchTimeout

        mover = board.current_player
        result = rules.game_result(board)
        if result.is_game_over():
            return terminal_score(result, board, mover)
        if depth == 0:
            return self.evaluator.heuristic(board, mover)

        alpha_orig = alpha
        key = board.key()
        tt_move = None
        entry = self.table.probe(key)
        if entry is not None and entry.key == key:
            tt_move = entry.move
            if entry.depth >= depth:
                if entry.bound == Bound.EXACT:
                    return entry.score
                if entry.bound == Bound.LOWER:
                    alpha = max(alpha, entry.score)
                elif entry.bound == Bound.UPPER:
                    beta = min(beta, entry.score)
                if alpha >= beta:
                    return entry.score

        moves = rules.legal_moves(board)
        if not moves:
            raise SearchError(f"no legal moves in a non-terminal position: {board!r}")
        if tt_move is not None and tt_move != moves[0] and tt_move in moves:
            moves.remove(tt_move)
            moves.insert(0, tt_move)

        best = -INFINITY
        best_move = moves[0]
        for column in moves:
            board.drop(column)
            score = -self.negamax(board, depth - 1, -beta, -alpha)
            board.undo(column)

            if score > best:
                best = score
                best_move = column
            if best > alpha:
                alpha = best
            if alpha >= beta:
                break

        if best <= alpha_orig:
            bound = Bound.UPPER
        elif best >= beta:
            bound = Bound.LOWER
        else:
            bound = Bound.EXACT
        self.table.store(key, depth, best, bound, best_move)
        return best

    def root(self, board: Board, depth: int, columns: Sequence[int]) -> Tuple[int, int]:
        """Search every root move in order; the first of equal scores is kept."""
        alpha = -INFINITY
        best_column, best = columns[0], -INFINITY
        for column in columns:
            board.drop(column)
            score = -self.negamax(board, depth - 1, -INFINITY, -alpha)
            board.undo(column)
            if score > best:
                best, best_column = score, column
                alpha = max(alpha, best)
        self.table.store(board.key(), depth, best, Bound.EXACT, best_column)
        return best_column, best

    def child(self, board: Board, column: int, depth: int) -> int:
        """Full-window score of one root move on the worker's own board."""
        board.drop(column)
        return -self.negamax(board, depth - 1, -INFINITY, INFINITY)


class SearchEngine:
    """
    Picks moves with iterative-deepening negamax.

    The engine owns its transposition table. By default the table is cleared
    at the start of every search; with ``SearchConfig.persist_table`` entries
    carry over between searches until clear_table() is called.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 evaluator: Optional[Evaluator] = None,
                 table: Optional[TranspositionTable] = None):
        self.config = config if config is not None else EngineConfig()
        self.config.search.validate()
        self.evaluator = evaluator if evaluator is not None else Evaluator(self.config.weights)
        self.table = (table if table is not None
                      else TranspositionTable(self.config.search.table_capacity))
        self.last_nodes = 0

    @property
    def search_config(self) -> SearchConfig:
        return self.config.search

    def clear_table(self) -> None:
        self.table.clear()

    def search(self, board: Board, max_depth: Optional[int] = None,
               time_budget_ms: Optional[int] = None) -> SearchResult:
        """
        Find the best move for the player to move.

        Args:
            board: The position; never modified
            max_depth: Depth limit in plies (defaults to the config)
            time_budget_ms: Wall-clock budget (defaults to the config; None
                searches to the depth limit)

        Returns:
            SearchResult for the deepest completed iteration. On a finished
            game the column is None and the depth 0.
        """
        start = time.perf_counter()
        result = rules.game_result(board)
        if result.is_game_over():
            debug.debug(f"Search requested on finished game ({result.name})", "search")
            return SearchResult(None, terminal_score(result, board, board.current_player), 0, result)

        cfg = self.config.search
        limit = max_depth if max_depth is not None else cfg.max_depth
        if limit < 1:
            raise ValueError(f"max_depth must be >= 1, got {limit}")
        limit = min(limit, board.size - board.move_count)
        budget = time_budget_ms if time_budget_ms is not None else cfg.time_budget_ms
        deadline = start + budget / 1000.0 if budget is not None else None

        if not cfg.persist_table:
            self.table.clear()

        root_key = board.key()
        work = board.copy()
        columns = rules.legal_moves(work)
        if not columns:
            raise SearchError(f"no legal moves in a non-terminal position: {board!r}")

        best_column, best_score, completed = columns[0], 0, 0
        timed_out = False
        self.last_nodes = 0

        for depth in range(1, limit + 1):
            # depth 1 ignores the clock so there is always a move to return
            iteration_deadline = deadline if depth > 1 else None
            try:
                column, score = self._search_root(work, depth, columns, iteration_deadline)
            except SearchTimeout:
                timed_out = True
                debug.debug(f"Time budget exhausted during depth {depth}", "search")
                break

            if work.key() != root_key or work.move_count != board.move_count:
                raise SearchError("working board not restored after search iteration")

            best_column, best_score, completed = column, score, depth
            debug.debug(f"depth {depth}: column {column} score {score} "
                        f"nodes {self.last_nodes}", "search")
            if abs(score) >= WIN_SCORE:
                break

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        debug.info(f"{board.current_player.name} plays column {best_column} "
                   f"(score {best_score}, depth {completed}, {self.last_nodes} nodes, "
                   f"{elapsed_ms:.1f} ms)", "search")
        return SearchResult(best_column, best_score, completed, result,
                            self.last_nodes, elapsed_ms, timed_out)

    def best_move(self, board: Board, max_depth: Optional[int] = None,
                  time_budget_ms: Optional[int] = None) -> Optional[int]:
        return self.search(board, max_depth, time_budget_ms).column

    def _search_root(self, board: Board, depth: int, columns: List[int],
                     deadline: Optional[float]) -> Tuple[int, int]:
        workers = self.config.search.workers
        if workers <= 1 or len(columns) == 1:
            worker = _Worker(self.evaluator, self.table, deadline)
            try:
                return worker.root(board, depth, columns)
            finally:
                self.last_nodes += worker.nodes

        # Root split: one board copy per move, shared table, same tie-break
        jobs = [(_Worker(self.evaluator, self.table, deadline), board.copy(), column)
                for column in columns]
        try:
            with ThreadPoolExecutor(max_workers=min(workers, len(jobs))) as pool:
                futures = [pool.submit(w.child, b, c, depth) for w, b, c in jobs]
                scores = [f.result() for f in futures]
        finally:
            self.last_nodes += sum(w.nodes for w, _, _ in jobs)

        best_index = 0
        for i, score in enumerate(scores):
            if score > scores[best_index]:
                best_index = i
        best_column, best = columns[best_index], scores[best_index]
        self.table.store(board.key(), depth, best, Bound.EXACT, best_column)
        return best_column, best

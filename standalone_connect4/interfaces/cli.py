"""
cli.py - Command-line interface for exercising the engine

Commands:
    analyze    search a position given as a comma-separated column list
    selfplay   let the engine play both sides to the end
    benchmark  time searches of the same position
"""

import argparse
import sys
from typing import List, Optional

from standalone_connect4.ai.search import SearchEngine, SearchResult
from standalone_connect4.config import EngineConfig, load_config
from standalone_connect4.debug import debug
from standalone_connect4.errors import ConfigError, Connect4Error
from standalone_connect4.game.board import Board
from standalone_connect4.game.session import GameSession
from standalone_connect4.utils import COLS, ROWS


def parse_moves(text: str) -> List[int]:
    """Parse "3,3,4" (or "334" for single-digit columns) into column indices."""
    text = text.strip()
    if not text:
        return []
    if "," in text:
        return [int(part) for part in text.split(",") if part.strip()]
    return [int(ch) for ch in text]


def format_result(found: SearchResult) -> str:
    if found.column is None:
        return f"Game over: {found.result.name}"
    kind = "proven" if found.is_proven else "heuristic"
    return (f"Best move: column {found.column} | score {found.score} ({kind}) | "
            f"depth {found.depth} | nodes {found.nodes} | {found.elapsed_ms:.1f} ms"
            + (" | time budget hit" if found.timed_out else ""))


class SimpleCLI:
    """Command-line front end over SearchEngine and GameSession."""

    def __init__(self, out=None):
        self.out = out or sys.stdout
        self.args = None
        self.config: Optional[EngineConfig] = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog='standalone_connect4',
                                         description='Connect Four engine CLI')
        parser.add_argument('--debug-level', default=None,
                            help='none, error, warning, info, debug or trace')
        parser.add_argument('--config', default=None, help='Path to a TOML config file')
        parser.add_argument('--width', type=int, default=COLS)
        parser.add_argument('--height', type=int, default=ROWS)

        subparsers = parser.add_subparsers(dest='command', required=True)

        analyze = subparsers.add_parser('analyze', help='Search a position')
        analyze.add_argument('--moves', default='', help='Columns played so far, e.g. 3,3,4')
        analyze.add_argument('--depth', type=int, default=None)
        analyze.add_argument('--time-ms', type=int, default=None)

        selfplay = subparsers.add_parser('selfplay', help='Engine plays both sides')
        selfplay.add_argument('--moves', default='', help='Opening columns to start from')
        selfplay.add_argument('--depth', type=int, default=None)
        selfplay.add_argument('--time-ms', type=int, default=None)
        selfplay.add_argument('--quiet', action='store_true', help='Only print the final board')

        benchmark = subparsers.add_parser('benchmark', help='Time repeated searches')
        benchmark.add_argument('--moves', default='')
        benchmark.add_argument('--depth', type=int, default=6)
        benchmark.add_argument('--iterations', type=int, default=3)

        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        parser = self.build_parser()
        self.args = parser.parse_args(argv)

        try:
            self.config = load_config(self.args.config)
            debug.set_from_string(self.args.debug_level or self.config.log_level)
        except (ConfigError, ValueError) as exc:
            print(f"Configuration error: {exc}", file=self.out)
            return 2

        handlers = {
            'analyze': self.analyze,
            'selfplay': self.selfplay,
            'benchmark': self.benchmark,
        }
        try:
            return handlers[self.args.command]()
        except (Connect4Error, ValueError) as exc:
            print(f"Error: {exc}", file=self.out)
            return 2

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def _position(self) -> Board:
        """Replay --moves through a session so moves after a finished game are rejected."""
        session = GameSession.replay(parse_moves(self.args.moves), self.config,
                                     self.args.width, self.args.height)
        return session.board_copy()

    def analyze(self) -> int:
        board = self._position()
        self._print(board.render())
        self._print(f"To move: {board.current_player.name}")
        found = SearchEngine(self.config).search(board, self.args.depth, self.args.time_ms)
        self._print(format_result(found))
        return 0

    def selfplay(self) -> int:
        session = GameSession.replay(parse_moves(self.args.moves), self.config,
                                     self.args.width, self.args.height)
        while not session.is_game_over():
            player = session.current_player
            found = session.apply_engine_move(self.args.time_ms, self.args.depth)
            if not self.args.quiet:
                self._print(f"{player.name}: {format_result(found)}")
        self._print(session.render())
        self._print(f"Moves: {','.join(str(c) for c in session.moves)}")
        self._print(f"Result: {session.result.name}")
        return 0

    def benchmark(self) -> int:
        board = self._position()
        engine = SearchEngine(self.config)
        total_nodes, total_ms = 0, 0.0
        for i in range(self.args.iterations):
            engine.clear_table()
            found = engine.search(board, max_depth=self.args.depth)
            total_nodes += found.nodes
            total_ms += found.elapsed_ms
            self._print(f"Run {i + 1}: {format_result(found)}")
        if self.args.iterations > 0 and total_ms > 0:
            self._print(f"Average: {total_ms / self.args.iterations:.1f} ms, "
                        f"{total_nodes / (total_ms / 1000.0):.0f} nodes/s")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())

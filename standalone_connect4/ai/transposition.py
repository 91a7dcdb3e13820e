"""Transposition table for the negamax search.

Entries are keyed by Board.key(), which is exact for a position and the side
to move, so a hit never needs a collision check. Each entry records the
depth it was searched to, its score, the best move and how the score relates
to the true value (Bound.EXACT, LOWER or UPPER).

The table is bounded: once ``capacity`` entries are stored the least recently
written one is evicted. A lock guards every access so root-split workers can
share one table. Entries are advisory: callers must check depth and bound
before using a score.

Usage:

    tt = TranspositionTable(capacity=100_000)
    tt.store(board.key(), depth=4, score=12, bound=Bound.EXACT, move=3)
    entry = tt.probe(board.key())
"""
from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from standalone_connect4.debug import debug


class Bound(Enum):
    EXACT = 0  # score inside the search window
    LOWER = 1  # fail-high: true value >= score
    UPPER = 2  # fail-low: true value <= score


@dataclass(frozen=True)
class TTEntry:
    key: int
    depth: int
    score: int
    bound: Bound
    move: Optional[int]


class TranspositionTable:
    """Thread-safe, capacity-bounded table of TTEntry keyed by board key."""

    def __init__(self, capacity: int = 1_000_000):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._table: OrderedDict[int, TTEntry] = OrderedDict()
        self._lock = threading.Lock()
        self.probes = 0
        self.hits = 0
        self.evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)

    def probe(self, key: int) -> Optional[TTEntry]:
        with self._lock:
            self.probes += 1
            entry = self._table.get(key)
            if entry is not None:
                self.hits += 1
        return entry

    def store(self, key: int, depth: int, score: int, bound: Bound, move: Optional[int]) -> None:
        entry = TTEntry(key, depth, score, bound, move)
        with self._lock:
            old = self._table.get(key)
            if old is not None:
                # a deeper result stays unless the new one is exact and the old is only a bound
                if old.depth > depth and not (bound == Bound.EXACT and old.bound != Bound.EXACT):
                    return
                self._table[key] = entry
                self._table.move_to_end(key)
                return
            if len(self._table) >= self.capacity:
                self._table.popitem(last=False)
                self.evictions += 1
            self._table[key] = entry

    def clear(self) -> None:
        with self._lock:
            size = len(self._table)
            self._table.clear()
            self.probes = self.hits = self.evictions = 0
        debug.trace(f"Cleared transposition table ({size} entries)", "tt")

    def stats(self) -> dict:
        with self._lock:
            return {
                "entries": len(self._table),
                "capacity": self.capacity,
                "probes": self.probes,
                "hits": self.hits,
                "evictions": self.evictions,
            }

"""
Transposition table tests: storage, replacement, capacity and thread safety.
"""

import threading

import pytest

from standalone_connect4.ai.transposition import Bound, TranspositionTable, TTEntry


class TestTranspositionTable:
    def test_store_and_probe(self):
        tt = TranspositionTable()
        tt.store(42, depth=3, score=17, bound=Bound.EXACT, move=3)
        entry = tt.probe(42)
        assert entry == TTEntry(42, 3, 17, Bound.EXACT, 3)
        assert len(tt) == 1

    def test_miss_returns_none(self):
        assert TranspositionTable().probe(7) is None

    def test_deeper_entry_kept(self):
        tt = TranspositionTable()
        tt.store(1, depth=6, score=5, bound=Bound.LOWER, move=2)
        tt.store(1, depth=2, score=9, bound=Bound.LOWER, move=4)
        assert tt.probe(1).depth == 6

    def test_shallower_exact_replaces_deeper_bound(self):
        tt = TranspositionTable()
        tt.store(1, depth=6, score=5, bound=Bound.UPPER, move=2)
        tt.store(1, depth=2, score=9, bound=Bound.EXACT, move=4)
        assert tt.probe(1) == TTEntry(1, 2, 9, Bound.EXACT, 4)

    def test_equal_depth_overwrites(self):
        tt = TranspositionTable()
        tt.store(1, depth=4, score=5, bound=Bound.LOWER, move=2)
        tt.store(1, depth=4, score=-3, bound=Bound.UPPER, move=1)
        assert tt.probe(1).score == -3

    def test_capacity_evicts_oldest(self):
        tt = TranspositionTable(capacity=3)
        for key in range(5):
            tt.store(key, depth=1, score=key, bound=Bound.EXACT, move=None)
        assert len(tt) == 3
        assert tt.probe(0) is None and tt.probe(1) is None
        assert tt.probe(4).score == 4
        assert tt.stats()["evictions"] == 2

    def test_rewrite_refreshes_age(self):
        tt = TranspositionTable(capacity=2)
        tt.store(1, 1, 0, Bound.EXACT, None)
        tt.store(2, 1, 0, Bound.EXACT, None)
        tt.store(1, 1, 5, Bound.EXACT, None)
        tt.store(3, 1, 0, Bound.EXACT, None)
        assert tt.probe(1) is not None
        assert tt.probe(2) is None

    def test_clear(self):
        tt = TranspositionTable()
        tt.store(1, 1, 0, Bound.EXACT, None)
        tt.probe(1)
        tt.clear()
        assert len(tt) == 0
        assert tt.stats() == {"entries": 0, "capacity": tt.capacity, "probes": 0,
                              "hits": 0, "evictions": 0}

    def test_hit_counters(self):
        tt = TranspositionTable()
        tt.store(1, 1, 0, Bound.EXACT, None)
        tt.probe(1)
        tt.probe(2)
        stats = tt.stats()
        assert stats["probes"] == 2 and stats["hits"] == 1

    def test_negative_and_large_scores(self):
        tt = TranspositionTable()
        tt.store(9, 2, -1_000_035, Bound.EXACT, 0)
        assert tt.probe(9).score == -1_000_035

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            TranspositionTable(capacity=0)

    def test_concurrent_stores(self):
        tt = TranspositionTable(capacity=500)

        def writer(offset):
            for i in range(1000):
                tt.store(offset * 10_000 + i, 1, i, Bound.EXACT, None)
                tt.probe(offset * 10_000 + i)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(tt) == 500

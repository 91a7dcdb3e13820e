"""
standalone_connect4.ai - Move search for Connect Four

This package provides the position evaluator, the transposition table and
the negamax search engine.
"""

from standalone_connect4.ai.evaluator import Evaluator
from standalone_connect4.ai.transposition import Bound, TranspositionTable, TTEntry
from standalone_connect4.ai.search import SearchEngine, SearchResult

__all__ = ['Evaluator', 'Bound', 'TranspositionTable', 'TTEntry', 'SearchEngine', 'SearchResult']

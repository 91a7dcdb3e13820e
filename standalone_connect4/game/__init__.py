"""
standalone_connect4.game - Core game mechanics for Connect Four

This package contains the board representation and the rules. Session
management (game.session) and the Gymnasium environment (game.env) build on
the search engine and are imported from their own modules.
"""

from standalone_connect4.game.board import Board
from standalone_connect4.game import rules

__all__ = ['Board', 'rules']

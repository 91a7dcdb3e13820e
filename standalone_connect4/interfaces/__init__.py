"""
standalone_connect4.interfaces - Command-line front end for the engine
"""

# Don't import anything here to avoid circular imports
__all__ = []

"""
rules.py - Rule enforcement for Connect Four

Stateless functions over a Board: legal move generation, win detection,
draw detection and the derived game result. Nothing here is cached on the
board, so the result can never drift from the cells it is computed from.

check_win() only looks at the lines through the last placed token. It runs at
every node of the search, so it works on the owner's bitmask instead of the
numpy grid.
"""

from typing import List, Optional, Tuple

from standalone_connect4.game.board import Board
from standalone_connect4.utils import (CONNECT_N, DIRECTION_VECTORS, GameResult, Player,
                                       center_out_order)


def legal_moves(board: Board) -> List[int]:
    """
    Get the columns that still have room, center columns first.

    Args:
        board: The board to inspect

    Returns:
        List of column indices in center-out order
    """
    heights = board.heights
    limit = board.height
    return [col for col in center_out_order(board.width) if heights[col] < limit]


def is_legal(board: Board, column: int) -> bool:
    """Check that ``column`` is on the board and not full."""
    return board.can_drop(column)


def _line_shifts(height: int) -> Tuple[int, int, int, int]:
    # vertical, horizontal, diagonal "/", diagonal "\" in the padded bit layout
    stride = height + 1
    return 1, stride, stride + 1, stride - 1


def check_win(board: Board, last_column: int, last_row: int) -> bool:
    """
    Check if the token at (last_row, last_column) completes four in a row.

    Args:
        board: The board after the move
        last_column: Column of the most recently placed token
        last_row: Grid row of that token (row 0 is the top)

    Returns:
        True if the token's owner has CONNECT_N in a line through it
    """
    owner = board.cell(last_row, last_column)
    if owner == Player.EMPTY:
        return False

    bits = board.bits_of(owner)
    limit = board.width * (board.height + 1)
    origin = last_column * (board.height + 1) + (board.height - 1 - last_row)

    for shift in _line_shifts(board.height):
        count = 1
        idx = origin + shift
        while idx < limit and (bits >> idx) & 1:
            count += 1
            idx += shift
        idx = origin - shift
        while idx >= 0 and (bits >> idx) & 1:
            count += 1
            idx -= shift
        if count >= CONNECT_N:
            return True

    return False


def is_draw(board: Board) -> bool:
    """A draw is a full board without a winning line through the last move."""
    if not board.is_full():
        return False
    last = board.last_move
    return last is None or not check_win(board, last[1], last[0])


def game_result(board: Board, last_move: Optional[Tuple[int, int]] = None) -> GameResult:
    """
    Derive the game result from the board.

    Only the line through the last move can hold a new four in a row, because
    play stops at the first win.

    Args:
        board: The board to evaluate
        last_move: (row, column) of the most recent token; defaults to
            board.last_move

    Returns:
        The current GameResult
    """
    if last_move is None:
        last_move = board.last_move
    if last_move is None:
        return GameResult.IN_PROGRESS

    row, column = last_move
    if check_win(board, column, row):
        return GameResult.win_for(board.cell(row, column))
    if board.is_full():
        return GameResult.DRAW
    return GameResult.IN_PROGRESS


def find_winner(board: Board) -> Optional[Player]:
    """
    Scan the whole grid for four in a row.

    This is the brute-force reference for check_win(); it is O(width x height)
    and not meant for the search loop.

    Returns:
        The first player found with a winning line, or None
    """
    grid = board.grid
    for row in range(board.height):
        for col in range(board.width):
            value = int(grid[row, col])
            if value == Player.EMPTY.value:
                continue
            for dr, dc in DIRECTION_VECTORS.values():
                end_r, end_c = row + dr * (CONNECT_N - 1), col + dc * (CONNECT_N - 1)
                if not (0 <= end_r < board.height and 0 <= end_c < board.width):
                    continue
                if all(grid[row + i * dr, col + i * dc] == value for i in range(1, CONNECT_N)):
                    return Player(value)
    return None


def winning_line(board: Board) -> List[Tuple[int, int]]:
    """
    Get the positions of the winning line through the last move.

    Returns:
        List of (row, col) positions forming the line, or an empty list
    """
    last = board.last_move
    if last is None:
        return []

    row, col = last
    player_value = int(board.grid[row, col])

    for dr, dc in DIRECTION_VECTORS.values():
        positions = [(row, col)]

        r, c = row + dr, col + dc
        while 0 <= r < board.height and 0 <= c < board.width and board.grid[r, c] == player_value:
            positions.append((r, c))
            r += dr
            c += dc

        r, c = row - dr, col - dc
        while 0 <= r < board.height and 0 <= c < board.width and board.grid[r, c] == player_value:
            positions.insert(0, (r, c))
            r -= dr
            c -= dc

        if len(positions) >= CONNECT_N:
            return positions

    return []

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from esper import World

from threes.components.board import Board
from threes.components.piece import Piece
from threes.constants import MAX_PIECE_VALUE
from threes.systems.board_ops import get_board


def board_from_values(
    rows: Sequence[Sequence[Optional[int]]],
    *,
    max_value: int = MAX_PIECE_VALUE,
) -> Board:
    """Build a board from a grid of values, with None (or 0) for empty cells."""
    size = len(rows)
    cells = [
        Piece(value, max_value=max_value) if value else None
        for row in rows
        for value in row
    ]
    return Board(size=size, cells=cells)


def install_board(world: World, rows: Sequence[Sequence[Optional[int]]]) -> Board:
    """Replace the world's board contents in place so systems keep their references."""
    board = get_board(world)
    board.cells = board_from_values(rows).cells
    return board


def scripted_keys(keys: Iterable[str]) -> Callable[[], str]:
    """Key reader that replays keys and then reports end of input."""
    remaining = iter(keys)
    return lambda: next(remaining, '')

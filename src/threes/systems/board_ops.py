from __future__ import annotations

from typing import Optional

from esper import World

from threes.components.bag import Bag
from threes.components.board import Board, Position
from threes.components.piece import Piece


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def get_bag(world: World) -> Bag:
    for _, bag in world.get_component(Bag):
        return bag
    raise RuntimeError("Bag not found")


def move_piece(board: Board, bag: Bag, src: Position, dst: Position) -> Optional[Piece]:
    """Move or merge src onto dst, reporting any merge result to the bag."""
    merged = board.move(src[0], src[1], dst[0], dst[1])
    if merged is not None:
        bag.notify_merged(merged.value)
    return merged


def unrotate_position(position: Position, turns: int, size: int) -> Position:
    """Map a cell seen after ``turns`` CCW rotations back to the unrotated grid."""
    row, col = position
    for _ in range(turns % 4):
        row, col = size - 1 - col, row
    return row, col


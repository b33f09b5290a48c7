"""Directional sliding.

Every direction is handled by rotating the board so that direction points
up, lifting pieces one row toward row 0, and rotating back. Positions in the
records returned to callers are always in the unrotated frame.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Set

from threes.components.bag import Bag
from threes.components.board import Board, Position
from threes.components.direction import Direction
from threes.systems.board_ops import move_piece, unrotate_position

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MergeRecord:
    position: Position
    value: int


@dataclass(slots=True)
class SpawnRecord:
    position: Position
    value: int


@dataclass(slots=True)
class SlideResult:
    direction: Direction
    merges: List[MergeRecord] = field(default_factory=list)
    spawned: Optional[SpawnRecord] = None
    escalations: List[int] = field(default_factory=list)

    @property
    def moved(self) -> bool:
        return self.spawned is not None


class Slider:
    """Performs one slide over a board, drawing the follow-up spawn from the bag."""

    def __init__(self, board: Board, bag: Bag, *, rng: random.Random | None = None):
        self.board = board
        self.bag = bag
        self._rng = rng or random.Random()
        self.lifted: Set[int] = set()

    def _can_lift(self, row: int, col: int) -> bool:
        piece = self.board.get(row, col)
        if piece is None:
            return False
        return piece.merges(self.board.get(row - 1, col))

    def _lift_column(self, col: int, turns: int, result: SlideResult) -> None:
        # Front rows go first so a run of equal pieces cascades one step at a time.
        for row in range(1, self.board.size):
            if not self._can_lift(row, col):
                continue
            extras_before = len(self.bag.extras)
            merged = move_piece(self.board, self.bag, (row, col), (row - 1, col))
            self.lifted.add(col)
            if merged is None:
                continue
            position = unrotate_position((row - 1, col), turns, self.board.size)
            result.merges.append(MergeRecord(position=position, value=merged.value))
            if len(self.bag.extras) > extras_before:
                result.escalations.append(merged.value)

    def _spawn(self, turns: int) -> Optional[SpawnRecord]:
        if not self.lifted:
            return None
        col = self._rng.choice(sorted(self.lifted))
        row = self.board.size - 1
        piece = self.bag.next()
        self.board.set(row, col, piece)
        return SpawnRecord(position=unrotate_position((row, col), turns, self.board.size), value=piece.value)

    def slide(self, direction: Direction) -> SlideResult:
        self.lifted.clear()
        result = SlideResult(direction=direction)
        turns = direction.turns
        self.board.rotate_ccw(turns)
        try:
            for col in range(self.board.size):
                self._lift_column(col, turns, result)
            result.spawned = self._spawn(turns)
        finally:
            self.board.rotate_cw(turns)
        logger.debug(
            "slide %s: lifted=%s merges=%d spawned=%s",
            direction.value, sorted(self.lifted), len(result.merges), result.spawned,
        )
        return result

    def can_move(self, direction: Direction) -> bool:
        turns = direction.turns
        self.board.rotate_ccw(turns)
        try:
            for col in range(self.board.size):
                for row in range(1, self.board.size):
                    if self._can_lift(row, col):
                        return True
            return False
        finally:
            self.board.rotate_cw(turns)

    def no_moves_remain(self) -> bool:
        return not any(self.can_move(direction) for direction in Direction)

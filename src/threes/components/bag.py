from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List

from threes.components.piece import Piece
from threes.constants import (
    BASE_BAG_VALUES,
    ESCALATION_DIVISOR,
    ESCALATION_THRESHOLD,
    EXTRAS_PER_REFILL,
    MAX_PIECE_VALUE,
)


@dataclass
class Bag:
    """Serves up the pieces that land on the board.

    Each refill holds two each of 1, 2 and 3 plus EXTRAS_PER_REFILL picks from
    the extras pool, shuffled together. The extras start as a copy of the base
    values and gain a bonus piece every time a merge reaches a new maximum of
    ESCALATION_THRESHOLD or more.
    """
    rng: random.Random = field(default_factory=random.Random)
    max_piece_value: int = MAX_PIECE_VALUE
    extras: List[Piece] = field(default_factory=list)
    max_value: int = 3
    pool: List[Piece] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.extras:
            self.extras = [self._piece(value) for value in BASE_BAG_VALUES]
        if not self.pool:
            self._fill()

    def _piece(self, value: int) -> Piece:
        return Piece(value, max_value=self.max_piece_value)

    def _fill(self) -> None:
        pool = [self._piece(value) for value in BASE_BAG_VALUES]
        pool += self.rng.sample(self.extras, min(EXTRAS_PER_REFILL, len(self.extras)))
        self.rng.shuffle(pool)
        self.pool = pool

    def peek(self) -> Piece:
        if not self.pool:
            self._fill()
        return self.pool[0]

    def next(self) -> Piece:
        piece = self.peek()
        self.pool.pop(0)
        return piece

    def take(self, count: int) -> List[Piece]:
        return [self.next() for _ in range(count)]

    def notify_merged(self, value: int) -> Piece | None:
        """Track the highest merge; returns the extra piece added, if any."""
        if value < self.max_value:
            return None
        self.max_value = value
        if value < ESCALATION_THRESHOLD:
            return None
        extra = self._piece(value // ESCALATION_DIVISOR)
        self.extras.append(extra)
        return extra

    def extra_values(self) -> List[int]:
        return [piece.value for piece in self.extras]

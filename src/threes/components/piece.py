from __future__ import annotations

from dataclasses import dataclass

from threes.constants import MAX_PIECE_VALUE


@dataclass(frozen=True, slots=True)
class Piece:
    """A single numbered tile.

    1 and 2 only combine with each other (into 3). Anything from 3 upwards
    combines with an equal value and doubles, until max_value is reached.
    """
    value: int
    max_value: int = MAX_PIECE_VALUE

    @property
    def merge_value(self) -> int:
        """Value a partner must carry to merge with this piece."""
        if self.value == 1:
            return 2
        if self.value == 2:
            return 1
        return self.value

    def merges(self, other: Piece | None) -> bool:
        """True when this piece may slide onto other (an empty cell counts)."""
        if other is None:
            return True
        if self.value >= self.max_value:
            return False
        return other.value == self.merge_value

    def merge(self, other: Piece | None = None) -> Piece:
        # Only the sliding piece's value matters; callers merge source into destination.
        if self.value in (1, 2):
            return Piece(3, max_value=self.max_value)
        return Piece(self.value * 2, max_value=self.max_value)

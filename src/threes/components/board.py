from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from threes.components.piece import Piece
from threes.constants import GRID_SIZE

Position = Tuple[int, int]


class InvalidMoveError(RuntimeError):
    """Raised when a move targets an occupied cell the source cannot merge into."""


@dataclass(slots=True)
class Board:
    """Square grid of optional pieces stored row-major.

    Geometry (indexing and rotation) lives here; deciding which moves are
    legal is the slider's job. ``move`` refuses anything illegal.
    """
    size: int = GRID_SIZE
    cells: List[Optional[Piece]] = field(default_factory=list)

    def __post_init__(self) -> None:
        expected = self.size * self.size
        if not self.cells:
            self.cells = [None] * expected
        elif len(self.cells) != expected:
            raise ValueError(f"Board of size {self.size} needs {expected} cells, got {len(self.cells)}")

    @classmethod
    def deal(cls, pieces: Sequence[Piece], *, size: int = GRID_SIZE, rng: random.Random | None = None) -> "Board":
        """Scatter pieces over a fresh board; the rest of the cells stay empty."""
        cells: List[Optional[Piece]] = list(pieces)
        cells += [None] * (size * size - len(cells))
        (rng or random.Random()).shuffle(cells)
        return cls(size=size, cells=cells)

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.size}x{self.size} board")
        return row * self.size + col

    def get(self, row: int, col: int) -> Optional[Piece]:
        return self.cells[self._index(row, col)]

    def set(self, row: int, col: int, piece: Optional[Piece]) -> None:
        self.cells[self._index(row, col)] = piece

    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col) is None

    def move(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> Optional[Piece]:
        """Slide the source piece onto the destination.

        Returns the merged piece when the move combined two pieces, None for a
        plain relocation.
        """
        piece = self.get(src_row, src_col)
        if piece is None:
            raise InvalidMoveError(f"Invalid move attempt: no piece at {src_row} {src_col}")
        if self.is_empty(dst_row, dst_col):
            self.set(dst_row, dst_col, piece)
            self.set(src_row, src_col, None)
            return None
        target = self.get(dst_row, dst_col)
        if not piece.merges(target):
            raise InvalidMoveError(
                f"Invalid move attempt: {src_row} {src_col} -> {dst_row} {dst_col}"
            )
        merged = piece.merge(target)
        self.set(dst_row, dst_col, merged)
        self.set(src_row, src_col, None)
        return merged

    def _rotate_ccw_once(self) -> None:
        copy = list(self.cells)
        for row in range(self.size):
            for col in range(self.size):
                self.cells[row * self.size + col] = copy[(self.size - 1 - col) * self.size + row]

    def rotate_ccw(self, turns: int) -> "Board":
        for _ in range(turns % 4):
            self._rotate_ccw_once()
        return self

    def rotate_cw(self, turns: int) -> "Board":
        return self.rotate_ccw(4 - turns % 4)

    def __iter__(self) -> Iterator[Optional[Piece]]:
        return iter(self.cells)

    def values(self) -> List[List[Optional[int]]]:
        """Read-only snapshot of piece values, None for empty cells."""
        return [
            [piece.value if piece is not None else None for piece in self.cells[row * self.size:(row + 1) * self.size]]
            for row in range(self.size)
        ]

    def highest_value(self) -> int:
        return max((piece.value for piece in self.cells if piece is not None), default=0)

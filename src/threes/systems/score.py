import math

from threes.components.board import Board


def piece_points(value: int) -> int:
    """Points for one piece: 3 scores 3 and every doubling triples it. 1s and 2s score nothing."""
    if value < 3:
        return 0
    return int(3 ** (math.log2(value / 3) + 1))


def compute_score(board: Board) -> int:
    return sum(piece_points(piece.value) for piece in board if piece is not None)

from dataclasses import dataclass


@dataclass(slots=True)
class Score:
    """Latest point total for the board; final once the game has ended."""
    points: int = 0
    final: bool = False

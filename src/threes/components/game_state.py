"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from threes.components.direction import Direction


class GameMode(Enum):
    """High-level modes of a single session."""
    PLAYING = auto()
    GAME_OVER = auto()
    QUIT = auto()


@dataclass
class GameState:
    """Singleton component storing the current mode and move counter."""
    mode: GameMode = GameMode.PLAYING
    moves: int = 0
    last_direction: Optional[Direction] = None

    @property
    def finished(self) -> bool:
        return self.mode != GameMode.PLAYING

from enum import Enum

from threes.constants import DIRECTION_TURNS


class Direction(Enum):
    """Slide directions. Each maps to the CCW quarter turns that make it 'up'."""
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def turns(self) -> int:
        return DIRECTION_TURNS[self.value]

    @classmethod
    def parse(cls, name: str) -> "Direction":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown direction '{name}'") from None

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Union

from threes.components.direction import Direction
from threes.events.bus import EventBus, EVENT_KEY_IGNORED

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Continue:
    """The player picked a direction to slide."""
    direction: Direction


@dataclass(frozen=True, slots=True)
class Quit:
    """The player asked to stop (or input ran out)."""


InputResult = Union[Continue, Quit]

KEY_BINDINGS: Dict[str, Direction] = {
    '\x1b[A': Direction.UP,
    '\x1b[B': Direction.DOWN,
    '\x1b[C': Direction.RIGHT,
    '\x1b[D': Direction.LEFT,
    # WASD
    'w': Direction.UP,
    's': Direction.DOWN,
    'd': Direction.RIGHT,
    'a': Direction.LEFT,
    # Vim keys
    'k': Direction.UP,
    'j': Direction.DOWN,
    'l': Direction.RIGHT,
    'h': Direction.LEFT,
}
QUIT_KEYS = frozenset({'q', 'Q', '\x03'})


def parse_key(key: str) -> InputResult | None:
    """Translate a raw key into a command; None means keep waiting."""
    if key == '' or key in QUIT_KEYS:
        return Quit()
    direction = KEY_BINDINGS.get(key) or KEY_BINDINGS.get(key.lower())
    if direction is None:
        return None
    return Continue(direction)


class InputSystem:
    """Pulls keys from a reader until one of them means something."""

    def __init__(self, event_bus: EventBus, read_key: Callable[[], str]):
        self.event_bus = event_bus
        self._read_key = read_key

    def next_command(self) -> InputResult:
        while True:
            key = self._read_key()
            command = parse_key(key)
            if command is not None:
                return command
            logger.debug("Ignoring key %r", key)
            self.event_bus.emit(EVENT_KEY_IGNORED, key=key)

"""Top-level loop for one game session."""
from __future__ import annotations

import logging

from esper import World

from threes.components.game_state import GameMode
from threes.components.score import Score
from threes.events.bus import (
    EVENT_BOARD_CHANGED,
    EVENT_GAME_OVER,
    EVENT_QUIT_REQUESTED,
    EVENT_SLIDE_REQUEST,
    EventBus,
)
from threes.systems.board_ops import get_bag, get_board
from threes.systems.input import InputSystem, Quit
from threes.systems.score import compute_score
from threes.systems.slider import Slider
from threes.utils.game_state import get_game_state, set_game_mode

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Alternates terminal-state checks, input and slide requests until the game ends."""

    def __init__(self, world: World, event_bus: EventBus, input_system: InputSystem):
        self.world = world
        self.event_bus = event_bus
        self.input_system = input_system

    def _slider(self) -> Slider:
        return Slider(get_board(self.world), get_bag(self.world), rng=getattr(self.world, "random", None))

    def step(self) -> bool:
        """Run one loop iteration; returns False once the game has finished."""
        if get_game_state(self.world).finished:
            return False
        if self._slider().no_moves_remain():
            points = compute_score(get_board(self.world))
            logger.info("No moves remain; final score %d", points)
            set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
            self.event_bus.emit(EVENT_GAME_OVER, points=points)
            return False
        command = self.input_system.next_command()
        if isinstance(command, Quit):
            logger.info("Player quit after %d moves", get_game_state(self.world).moves)
            set_game_mode(self.world, self.event_bus, GameMode.QUIT)
            self.event_bus.emit(EVENT_QUIT_REQUESTED)
            return False
        self.event_bus.emit(EVENT_SLIDE_REQUEST, direction=command.direction)
        return True

    def run(self) -> int:
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="initial_deal")
        while self.step():
            pass
        return self.final_score()

    def final_score(self) -> int:
        for _, score in self.world.get_component(Score):
            if score.final:
                return score.points
        return compute_score(get_board(self.world))

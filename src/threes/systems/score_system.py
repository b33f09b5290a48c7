from esper import World

from threes.components.score import Score
from threes.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_GAME_OVER,
    EVENT_QUIT_REQUESTED,
    EVENT_SCORE_COMPUTED,
)
from threes.systems.board_ops import get_board
from threes.systems.score import compute_score


class ScoreSystem:
    """Keeps the Score component current and announces the final tally.

    Recomputes after every EVENT_BOARD_CHANGED; EVENT_GAME_OVER and
    EVENT_QUIT_REQUESTED freeze the score and emit it with final=True.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_finished)
        self.event_bus.subscribe(EVENT_QUIT_REQUESTED, self.on_game_finished)

    def _score(self) -> Score:
        for _, score in self.world.get_component(Score):
            return score
        return self.world.component_for_entity(self.world.create_entity(Score()), Score)

    def on_board_changed(self, sender, **kwargs):
        score = self._score()
        if score.final:
            return
        score.points = compute_score(get_board(self.world))
        self.event_bus.emit(EVENT_SCORE_COMPUTED, points=score.points, final=False)

    def on_game_finished(self, sender, **kwargs):
        score = self._score()
        if score.final:
            return
        score.points = compute_score(get_board(self.world))
        score.final = True
        self.event_bus.emit(EVENT_SCORE_COMPUTED, points=score.points, final=True)

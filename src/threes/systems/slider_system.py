import logging

from esper import World

from threes.components.direction import Direction
from threes.components.game_state import GameState
from threes.events.bus import (
    EventBus,
    EVENT_BAG_ESCALATED,
    EVENT_BOARD_CHANGED,
    EVENT_PIECE_SPAWNED,
    EVENT_PIECES_MERGED,
    EVENT_SLIDE_BLOCKED,
    EVENT_SLIDE_COMPLETED,
    EVENT_SLIDE_REQUEST,
)
from threes.systems.board_ops import get_bag, get_board
from threes.systems.slider import SlideResult, Slider

logger = logging.getLogger(__name__)


class SliderSystem:
    """Executes slide requests against the world's board and bag.

    Logic:
      - On EVENT_SLIDE_REQUEST: run a Slider pass for the requested direction.
      - A pass that lifts nothing emits EVENT_SLIDE_BLOCKED and leaves the board untouched.
      - Otherwise emits one EVENT_PIECES_MERGED per merge, EVENT_BAG_ESCALATED for new
        extras, EVENT_PIECE_SPAWNED, EVENT_SLIDE_COMPLETED and finally EVENT_BOARD_CHANGED.
      Requests are ignored once the game has left PLAYING mode.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_SLIDE_REQUEST, self.on_slide_request)

    def slider(self) -> Slider:
        return Slider(get_board(self.world), get_bag(self.world), rng=getattr(self.world, "random", None))

    def _state(self) -> GameState | None:
        for _, state in self.world.get_component(GameState):
            return state
        return None

    def on_slide_request(self, sender, **kwargs):
        direction = kwargs.get('direction')
        if isinstance(direction, str):
            try:
                direction = Direction.parse(direction)
            except ValueError:
                logger.warning("Ignoring slide request with unknown direction %r", direction)
                return
        if not isinstance(direction, Direction):
            return
        state = self._state()
        if state is not None and state.finished:
            return
        result = self.slider().slide(direction)
        if not result.moved:
            self.event_bus.emit(EVENT_SLIDE_BLOCKED, direction=direction)
            return
        if state is not None:
            state.moves += 1
            state.last_direction = direction
        self._emit_result(result)

    def _emit_result(self, result: SlideResult) -> None:
        for merge in result.merges:
            self.event_bus.emit(EVENT_PIECES_MERGED, position=merge.position, value=merge.value)
        if result.escalations:
            extras = get_bag(self.world).extra_values()
            for value in result.escalations:
                logger.info("Bag escalated after reaching %d; extras now %s", value, extras)
                self.event_bus.emit(EVENT_BAG_ESCALATED, value=value, extras=extras)
        spawned = result.spawned
        if spawned is not None:
            self.event_bus.emit(EVENT_PIECE_SPAWNED, position=spawned.position, value=spawned.value)
        self.event_bus.emit(
            EVENT_SLIDE_COMPLETED,
            direction=result.direction,
            merges=list(result.merges),
            spawned=spawned,
        )
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason=f"slide_{result.direction.value}")

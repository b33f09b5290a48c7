import random

from esper import World
from .events.bus import EventBus
from threes.components.bag import Bag
from threes.components.board import Board
from threes.components.game_state import GameState, GameMode
from threes.components.score import Score
from threes.constants import GRID_SIZE, INITIAL_PIECES, MAX_PIECE_VALUE


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.PLAYING,
    *,
    rng: random.Random | None = None,
    max_piece_value: int = MAX_PIECE_VALUE,
    size: int = GRID_SIZE,
    initial_pieces: int = INITIAL_PIECES,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the global game state resource.
    world.create_entity(GameState(mode=initial_mode), Score())

    bag = Bag(rng=world.random, max_piece_value=max_piece_value)
    world.create_entity(bag)

    # Deal the opening layout straight from the bag so the preview stays in sync.
    board = Board.deal(bag.take(initial_pieces), size=size, rng=world.random)
    world.create_entity(board)
    return world

"""Entry point for the Threes! terminal clone.

Sets up the ECS world, event bus and systems, then runs the game loop
against the controlling terminal.
"""
import argparse
import logging
import random
import sys

from colorama import just_fix_windows_console
from threes.world import create_world
from threes.constants import MAX_PIECE_VALUE
from threes.events.bus import EventBus
from threes.rendering.terminal_renderer import RenderSystem
from threes.systems.game_flow_system import GameFlowSystem
from threes.systems.input import InputSystem
from threes.systems.score_system import ScoreSystem
from threes.systems.slider_system import SliderSystem
from threes.terminal.keypress import read_key

logger = logging.getLogger("threes")


class ThreesTerminal:
    def __init__(
        self,
        *,
        seed: int | None = None,
        max_piece_value: int = MAX_PIECE_VALUE,
        clear_screen: bool = True,
        read_key=read_key,
        stream=None,
    ):
        self.event_bus = EventBus()
        self.world = create_world(
            self.event_bus,
            rng=random.Random(seed),
            max_piece_value=max_piece_value,
        )
        # Board systems
        self.slider_system = SliderSystem(self.world, self.event_bus)
        self.score_system = ScoreSystem(self.world, self.event_bus)

        # Interface systems
        self.render_system = RenderSystem(self.world, self.event_bus, stream, clear_screen=clear_screen)
        self.input_system = InputSystem(self.event_bus, read_key)
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus, self.input_system)

    def run(self) -> int:
        return self.game_flow_system.run()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="threes", description="Play Threes! in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="seed for a reproducible game")
    parser.add_argument(
        "--max-value",
        type=int,
        default=MAX_PIECE_VALUE,
        help=f"largest piece value that can still merge (default: {MAX_PIECE_VALUE})",
    )
    parser.add_argument("--no-clear", action="store_true", help="do not clear the screen between frames")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="write logs here instead of stderr")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=args.log_file,
    )
    if not sys.stdin.isatty():
        print("threes needs an interactive terminal.", file=sys.stderr)
        return 1
    just_fix_windows_console()
    game = ThreesTerminal(seed=args.seed, max_piece_value=args.max_value, clear_screen=not args.no_clear)
    points = game.run()
    logger.info("Session finished with %d points", points)
    return 0


if __name__ == "__main__":
    sys.exit(main())

import io

from main import ThreesTerminal, parse_args
from threes.components.game_state import GameMode
from threes.utils.game_state import get_game_state
from tests.helpers import scripted_keys


def test_parse_args_defaults_and_overrides():
    args = parse_args([])
    assert args.seed is None
    assert args.max_value == 6144
    assert not args.no_clear
    args = parse_args(["--seed", "5", "--max-value", "768", "--no-clear", "--log-level", "DEBUG"])
    assert args.seed == 5
    assert args.max_value == 768
    assert args.no_clear
    assert args.log_level == "DEBUG"


def test_terminal_game_wires_systems():
    stream = io.StringIO()
    game = ThreesTerminal(seed=3, clear_screen=False, read_key=scripted_keys(['\x1b[A', 'q']), stream=stream)
    points = game.run()
    assert get_game_state(game.world).mode in (GameMode.QUIT, GameMode.GAME_OVER)
    output = stream.getvalue()
    assert "Next:" in output
    assert output.endswith(f"You scored {points} points.\n")

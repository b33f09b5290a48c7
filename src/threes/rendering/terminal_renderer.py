from __future__ import annotations

import sys
from typing import IO, List

from colorama import Fore, Style
from esper import World

from threes.components.board import Board
from threes.components.game_state import GameMode
from threes.components.piece import Piece
from threes.constants import CELL_GAP, CELL_WIDTH, EMPTY_CELL
from threes.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_GAME_MODE_CHANGED,
    EVENT_SCORE_COMPUTED,
)
from threes.systems.board_ops import get_bag, get_board
from threes.systems.score import compute_score

CLEAR_SCREEN = '\x1b[2J\x1b[H'
BELL = '\x07'

PIECE_COLORS = {
    1: Fore.CYAN,
    2: Fore.RED,
}

HELP_TEXT = (
    "Use arrow keys to slide pieces. Merge them together to make larger numbers!\n"
    "Press `q` to quit."
)


def center(text: object, width: int = CELL_WIDTH) -> str:
    label = str(text)
    if len(label) % 2:
        label = ' ' + label
    pad = max(width - len(label), 0) // 2
    return ' ' * pad + label + ' ' * pad


def preview_label(piece: Piece) -> str:
    # Bonus pieces stay a surprise until they land.
    return '+' if piece.value > 3 else str(piece.value)


class RenderSystem:
    """Draws the board, the next-piece preview and messages to a text stream.

    Redraws on EVENT_BOARD_CHANGED; the switch to GAME_OVER mode and the final
    EVENT_SCORE_COMPUTED append their messages below the last frame.
    """

    def __init__(self, world: World, event_bus: EventBus, stream: IO[str] | None = None, *, clear_screen: bool = True):
        self.world = world
        self.event_bus = event_bus
        self.stream = stream if stream is not None else sys.stdout
        self.clear_screen = clear_screen
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)
        self.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self.on_game_mode_changed)
        self.event_bus.subscribe(EVENT_SCORE_COMPUTED, self.on_score_computed)

    def on_board_changed(self, sender, **kwargs):
        self.process()

    def on_game_mode_changed(self, sender, **kwargs):
        if kwargs.get('new_mode') != GameMode.GAME_OVER:
            return
        self._write(f"No valid moves... game over!{BELL}\n")

    def on_score_computed(self, sender, **kwargs):
        if not kwargs.get('final'):
            return
        self._write(f"You scored {kwargs.get('points', 0)} points.\n")

    def process(self):
        self._write(self.render_frame())

    def render_frame(self) -> str:
        board = get_board(self.world)
        lines: List[str] = []
        if self.clear_screen:
            lines.append(CLEAR_SCREEN)
        lines.append(self.render_board(board))
        lines.append(self.render_preview())
        lines.append(f"Score: {compute_score(board)}\n")
        lines.append(self.render_banner())
        return ''.join(lines)

    def render_board(self, board: Board) -> str:
        top = board.highest_value()
        rows: List[str] = []
        for row in range(board.size):
            cells = [self.render_piece(board.get(row, col), top) for col in range(board.size)]
            rows.append(CELL_GAP.join(cells) + CELL_GAP + '\n\n')
        return ''.join(rows)

    @staticmethod
    def render_piece(piece: Piece | None, top: int) -> str:
        if piece is None:
            return center(EMPTY_CELL)
        style = PIECE_COLORS.get(piece.value, '')
        if piece.value >= top:
            style += Style.BRIGHT
        return f"{style}{center(piece.value)}{Style.RESET_ALL}"

    def render_preview(self) -> str:
        piece = get_bag(self.world).peek()
        color = PIECE_COLORS.get(piece.value, '')
        return f"Next: {color}{preview_label(piece)}{Style.RESET_ALL}\n"

    @staticmethod
    def render_banner() -> str:
        title = f"{Fore.RED}T {Fore.CYAN}H {Style.RESET_ALL}R E E S"
        return f"\n{title}\n{HELP_TEXT}\n"

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

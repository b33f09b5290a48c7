from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT
# ============================================================================
EVENT_KEY_IGNORED = "key_ignored"          # payload: key=str
EVENT_QUIT_REQUESTED = "quit_requested"    # payload: None


# ============================================================================
# SLIDING & BOARD MECHANICS
# ============================================================================
EVENT_SLIDE_REQUEST = "slide_request"          # payload: direction=Direction
EVENT_SLIDE_COMPLETED = "slide_completed"      # payload: direction=Direction, merges=list[MergeRecord], spawned=SpawnRecord|None
EVENT_SLIDE_BLOCKED = "slide_blocked"          # payload: direction=Direction
EVENT_PIECES_MERGED = "pieces_merged"          # payload: position=(r,c), value=int
EVENT_PIECE_SPAWNED = "piece_spawned"          # payload: position=(r,c), value=int
EVENT_BOARD_CHANGED = "board_changed"          # payload: reason=str


# ============================================================================
# BAG
# ============================================================================
EVENT_BAG_ESCALATED = "bag_escalated"          # payload: value=int, extras=list[int]


# ============================================================================
# GAME FLOW & SCORE
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"  # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_GAME_OVER = "game_over"                  # payload: points=int
EVENT_SCORE_COMPUTED = "score_computed"        # payload: points=int, final=bool

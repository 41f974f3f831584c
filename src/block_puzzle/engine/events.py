from typing import Dict

from blinker import Signal


class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so lambdas and bound methods of unreferenced listeners stay connected.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# Every payload also carries generation=int, the session generation it belongs to.

# ============================================================================
# SESSION FLOW
# ============================================================================
EVENT_PHASE_CHANGED = "phase_changed"            # payload: phase=Phase, previous=Phase
EVENT_SESSION_RESET = "session_reset"            # payload: reason=str
EVENT_GAME_OVER = "game_over"                    # payload: score=int, high_score=int
EVENT_LEVEL_UP = "level_up"                      # payload: level=int, target=int


# ============================================================================
# BOARD & HAND
# ============================================================================
EVENT_HAND_DEALT = "hand_dealt"                  # payload: shapes=list[ShapeDef]
EVENT_PIECE_PLACED = "piece_placed"              # payload: slot=int, shape=ShapeDef, cells=list[(r,c)], score=int
EVENT_PLACEMENT_REJECTED = "placement_rejected"  # payload: slot=int, row=int, col=int, reason=str
EVENT_CELLS_CLEARED = "cells_cleared"            # payload: cells=list[ClearedCell], rows_cleared=int, cols_cleared=int, combo=int, score=int, bonus=int
EVENT_SCORE_CHANGED = "score_changed"            # payload: score=int, delta=int


# ============================================================================
# PRESENTATION
# ============================================================================
EVENT_NOTICE = "notice"                          # payload: text=str, color=str, duration_ms=int

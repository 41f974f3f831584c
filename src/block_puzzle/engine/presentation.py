"""Presentation-side timers driven by engine events.

The engine mutates state synchronously; these helpers only pace what a
renderer shows afterwards. Each listens on the event bus and drops anything
stamped with a generation older than the latest session reset, so a restart
or level change never lets a stale animation or notice leak through.
Time is read from an injectable millisecond clock and freezes while the
session is paused.
"""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .events import EVENT_CELLS_CLEARED, EVENT_NOTICE, EVENT_PHASE_CHANGED, EVENT_SESSION_RESET, EventBus
from .session import Phase


Clock = Callable[[], float]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class _GenerationTimer(ABC):
    def __init__(self, bus: EventBus, clock: Optional[Clock] = None) -> None:
        self.clock = clock or _monotonic_ms
        self.generation = 0
        self._paused_at: Optional[float] = None
        self._paused_total = 0.0
        bus.subscribe(EVENT_SESSION_RESET, self._on_reset)
        bus.subscribe(EVENT_PHASE_CHANGED, self._on_phase)

    def now(self) -> float:
        """Clock time minus every paused interval"""
        current = self._paused_at if self._paused_at is not None else self.clock()
        return current - self._paused_total

    def _is_stale(self, generation: int) -> bool:
        if generation < self.generation:
            return True
        self.generation = generation
        return False

    def _on_reset(self, sender, generation: int = 0, **payload) -> None:
        self.generation = max(self.generation, generation)
        self._discard()

    def _on_phase(self, sender, phase: Optional[Phase] = None, **payload) -> None:
        if phase is Phase.PAUSED and self._paused_at is None:
            self._paused_at = self.clock()
        elif phase is not Phase.PAUSED and self._paused_at is not None:
            self._paused_total += self.clock() - self._paused_at
            self._paused_at = None

    @abstractmethod
    def _discard(self) -> None:
        """Drop everything in flight"""


@dataclass
class PoppingCell:
    row: int
    col: int
    color: int
    started_ms: float
    duration_ms: float


class PopAnimator(_GenerationTimer):
    """Tracks cleared cells while their pop animation runs.

    A clear event carrying ``duration_ms`` (the session's configured pop
    duration) sets that clear's length; ``duration_ms`` here covers events
    without one.
    """

    def __init__(self, bus: EventBus, duration_ms: int = 300, clock: Optional[Clock] = None) -> None:
        super().__init__(bus, clock)
        self.duration_ms = duration_ms
        self._cells: List[PoppingCell] = []
        bus.subscribe(EVENT_CELLS_CLEARED, self._on_cleared)

    def _discard(self) -> None:
        self._cells = []

    def _on_cleared(self, sender, generation: int = 0, cells=(), duration_ms: Optional[int] = None,
                    **payload) -> None:
        if self._is_stale(generation):
            return
        started = self.now()
        duration = duration_ms if duration_ms is not None else self.duration_ms
        self._cells.extend(PoppingCell(c.row, c.col, c.color, started, duration) for c in cells)

    def active(self) -> List[Tuple[PoppingCell, float]]:
        """Cells still popping, each with its progress in [0, 1)"""
        now = self.now()
        live: List[Tuple[PoppingCell, float]] = []
        for cell in self._cells:
            progress = (now - cell.started_ms) / cell.duration_ms
            if progress < 1.0:
                live.append((cell, max(0.0, progress)))
        self._cells = [cell for cell, _ in live]
        return live

    @property
    def busy(self) -> bool:
        return bool(self.active())


@dataclass
class Notice:
    text: str
    color: str
    duration_ms: int
    started_ms: float


class NoticeBoard(_GenerationTimer):
    """Holds the latest transient notice; a new notice replaces the old one."""

    def __init__(self, bus: EventBus, clock: Optional[Clock] = None) -> None:
        super().__init__(bus, clock)
        self._notice: Optional[Notice] = None
        bus.subscribe(EVENT_NOTICE, self._on_notice)

    def _discard(self) -> None:
        self._notice = None

    def _on_notice(self, sender, generation: int = 0, text: str = "", color: str = "white",
                   duration_ms: int = 1500, **payload) -> None:
        if self._is_stale(generation):
            return
        self._notice = Notice(text, color, duration_ms, self.now())

    def current(self) -> Optional[Tuple[Notice, float]]:
        """The visible notice and its opacity, fading linearly to zero"""
        if self._notice is None:
            return None
        elapsed = self.now() - self._notice.started_ms
        if elapsed >= self._notice.duration_ms:
            self._notice = None
            return None
        return self._notice, 1.0 - elapsed / self._notice.duration_ms

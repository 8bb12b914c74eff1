from __future__ import annotations
import heapq
import itertools
from dataclasses import dataclass
from typing import Callable, List, Tuple


@dataclass(eq=False)
class Timer:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


class TimerQueue:
    """
    Deferred callbacks driven by the frame loop.
    Nothing fires on its own: update(dt) advances the clock and runs every
    timer that came due, in due order (ties keep scheduling order).
    """

    def __init__(self) -> None:
        self.now: float = 0.0
        self._heap: List[Tuple[float, int, Timer]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer:
        t = Timer(due=self.now + max(0.0, float(delay)), callback=callback)
        heapq.heappush(self._heap, (t.due, next(self._seq), t))
        return t

    def update(self, dt: float) -> int:
        """ Advance by dt seconds. Returns how many callbacks ran. """
        target = self.now + max(0.0, float(dt))
        fired = 0
        while self._heap and self._heap[0][0] <= target:
            due, _, t = heapq.heappop(self._heap)
            if not t.pending:
                continue
            # Callbacks see the clock at their own due time so re-armed timers stay exact
            self.now = max(self.now, due)
            t.fired = True
            t.callback()
            fired += 1
        self.now = target
        return fired

    def clear(self) -> None:
        for _, _, t in self._heap:
            t.cancel()
        self._heap.clear()

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, t in self._heap if t.pending)

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from engine.timers import Timer, TimerQueue


@dataclass
class RevealParams:
    tick_s: float = 0.022       # One character per tick


class RevealState(Enum):
    IDLE = "idle"
    REVEALING = "revealing"
    DONE = "done"


class TextModel:
    """
    Typewriter reveal of one block of scene text.

        idle --reveal()--> revealing --last char / skip_to_end()--> done
          ^                    |
          +----cancel()--------+

    Completion runs exactly once per reveal, whether the text ran out on its
    own or the player skipped. A cancelled reveal never completes.
    No rendering here: `on_text` receives the growing string.
    """
    def __init__(self,
                 timers: TimerQueue,
                 reveal: Optional[RevealParams] = None,
                 on_text: Optional[Callable[[str], None]] = None):
        self.timers = timers
        self.reveal_params = reveal or RevealParams()
        self.on_text = on_text
        self.state = RevealState.IDLE
        self.full_text: str = ""
        self.index: int = 0
        self._timer: Optional[Timer] = None
        self._on_complete: Optional[Callable[[], None]] = None

    # ---------- queries ----------
    @property
    def revealing(self) -> bool:
        return self.state is RevealState.REVEALING

    @property
    def shown_text(self) -> str:
        return self.full_text[:self.index]

    # ---------- control ----------
    def reveal(self, text: str, on_complete: Optional[Callable[[], None]] = None) -> None:
        self.cancel()
        self.state = RevealState.REVEALING
        self.full_text = text or ""
        self.index = 0
        self._on_complete = on_complete
        self._emit()
        self._step()

    def skip_to_end(self) -> bool:
        """ Show everything now. Only meaningful while revealing. """
        if not self.revealing:
            return False
        self._cancel_timer()
        self.index = len(self.full_text)
        self._emit()
        self._finish()
        return True

    def cancel(self) -> None:
        self._cancel_timer()
        self._on_complete = None
        self.state = RevealState.IDLE

    # ---------- internals ----------
    def _step(self) -> None:
        self._timer = None
        if self.index >= len(self.full_text):
            self._finish()
            return
        self.index += 1
        self._emit()
        self._timer = self.timers.call_later(self.reveal_params.tick_s, self._step)

    def _finish(self) -> None:
        self.state = RevealState.DONE
        cb, self._on_complete = self._on_complete, None
        if cb:
            cb()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _emit(self) -> None:
        if self.on_text:
            self.on_text(self.shown_text)

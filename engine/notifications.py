from __future__ import annotations
from typing import Callable, Optional

from engine.timers import Timer, TimerQueue


class Toast:
    """ Transient banner that hides itself after `duration` seconds. """

    def __init__(self,
                 timers: TimerQueue,
                 duration: float = 2.5,
                 on_show: Optional[Callable[[str], None]] = None,
                 on_hide: Optional[Callable[[], None]] = None):
        self.timers = timers
        self.duration = float(duration)
        self.on_show = on_show
        self.on_hide = on_hide
        self.visible = False
        self.message: str = ""
        self._timer: Optional[Timer] = None

    def show(self, message: str) -> None:
        # Showing again restarts the countdown
        self._cancel_timer()
        self.message = message
        self.visible = True
        if self.on_show:
            self.on_show(message)
        self._timer = self.timers.call_later(self.duration, self.hide)

    def hide(self) -> None:
        self._cancel_timer()
        if not self.visible:
            return
        self.visible = False
        if self.on_hide:
            self.on_hide()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class ThoughtPopup:
    """
    Delayed "thought" bubble. schedule() always clears the previous one first,
    then arms a single show timer if there is anything to say.
    """

    def __init__(self,
                 timers: TimerQueue,
                 delay: float = 1.0,
                 on_show: Optional[Callable[[str], None]] = None,
                 on_hide: Optional[Callable[[], None]] = None):
        self.timers = timers
        self.delay = float(delay)
        self.on_show = on_show
        self.on_hide = on_hide
        self.visible = False
        self.text: str = ""
        self._timer: Optional[Timer] = None

    @property
    def scheduled(self) -> bool:
        return self._timer is not None and self._timer.pending

    def schedule(self, text: Optional[str]) -> None:
        self.hide()
        if not text:
            return
        self._timer = self.timers.call_later(self.delay, lambda: self._show(text))

    def hide(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if not self.visible:
            return
        self.visible = False
        if self.on_hide:
            self.on_hide()

    def _show(self, text: str) -> None:
        self._timer = None
        self.text = text
        self.visible = True
        if self.on_show:
            self.on_show(text)

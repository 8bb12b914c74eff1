from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from engine.narrative.gate import ChoiceView


@dataclass
class ChoiceController:
    """ Keyboard/hover selection over the rendered choices. Disabled ones are skipped. """
    items: List[ChoiceView] = field(default_factory=list)
    sel: int = -1
    hover: int = -1

    # Lifecycle
    def show(self, items: List[ChoiceView]) -> None:
        self.items = list(items or [])
        self.hover = -1
        if not (0 <= self.sel < len(self.items) and self.items[self.sel].enabled):
            self.sel = self._first_enabled()

    def hide(self) -> None:
        self.items.clear()
        self.sel = -1
        self.hover = -1

    def active(self) -> bool:
        return bool(self.items)

    # Input
    def move(self, delta: int) -> None:
        n = len(self.items)
        if not n or not any(c.enabled for c in self.items):
            return
        i = self.sel if self.sel >= 0 else (-1 if delta > 0 else 0)
        for _ in range(n):
            i = (i + delta) % n
            if self.items[i].enabled:
                self.sel = i
                return

    def set_hover_index(self, idx: Optional[int]) -> None:
        self.hover = -1 if idx is None else int(idx)
        if idx is not None and 0 <= idx < len(self.items) and self.items[idx].enabled:
            self.sel = int(idx)  # Hover also selects

    def selected_index(self) -> Optional[int]:
        """ Choice index (as the presenter knows it) of the selection, if any. """
        if 0 <= self.sel < len(self.items) and self.items[self.sel].enabled:
            return self.items[self.sel].index
        return None

    def _first_enabled(self) -> int:
        for i, c in enumerate(self.items):
            if c.enabled:
                return i
        return -1

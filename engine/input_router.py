from __future__ import annotations
from enum import Enum
from typing import Any, Optional, Protocol, Sequence, Tuple

# Minimal protocols, no pygame import here
class _HasCollide(Protocol):
    def collidepoint(self, pos: Tuple[int, int]) -> bool: ...


class ClickAction(Enum):
    NONE = "none"
    DISMISS_THOUGHT = "dismiss_thought"
    CHOOSE = "choose"           # payload: choice index
    INSPECT = "inspect"         # payload: object id
    SKIP = "skip"


class InputRouter:
    """
    Decides what a left-click means. Hit order:
      - visible thought popup        -> dismiss it
      - a choice button              -> choose (index)
      - an object button             -> inspect (id)
      - anywhere in the UI while text is typing -> skip to the end
      - otherwise                    -> nothing
    The scene refreshes the hit areas after every layout.
    """
    def __init__(self) -> None:
        self.ui_rect: Optional[_HasCollide] = None
        self.thought_rect: Optional[_HasCollide] = None
        self.choice_rects: Sequence[Tuple[int, _HasCollide]] = ()
        self.object_rects: Sequence[Tuple[str, _HasCollide]] = ()

    # --- public API ---------------------------------------------------------
    def route(self, pos: Tuple[int, int], *, revealing: bool) -> Tuple[ClickAction, Any]:
        if self._rect_hit(self.thought_rect, pos):
            return ClickAction.DISMISS_THOUGHT, None
        for idx, rect in self.choice_rects:
            if self._rect_hit(rect, pos):
                return ClickAction.CHOOSE, idx
        for oid, rect in self.object_rects:
            if self._rect_hit(rect, pos):
                return ClickAction.INSPECT, oid
        if revealing and self._rect_hit(self.ui_rect, pos):
            return ClickAction.SKIP, None
        return ClickAction.NONE, None

    # --- helpers ------------------------------------------------------------
    @staticmethod
    def _rect_hit(rect: Optional[_HasCollide], pos: Tuple[int, int]) -> bool:
        # Works with any pygame.Rect-like object
        return bool(rect is not None and getattr(rect, "collidepoint", None) and rect.collidepoint(pos))

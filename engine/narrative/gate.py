from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from engine.narrative.types import Choice, InteractiveObject, Scene
from engine.progress import DAUGHTER_SCENES, PlayerProgress


@dataclass(frozen=True)
class ObjectView:
    id: str
    label: str
    visited: bool


@dataclass(frozen=True)
class ChoiceView:
    index: int
    text: str
    style: str
    enabled: bool
    hint: Optional[str] = None


class ChoiceAction(Enum):
    NONE = "none"
    GOTO = "goto"
    RESTART = "restart"


class ChoiceGate:
    """
    Decides which objects look visited and which choices are open,
    from whatever the player has accumulated in PlayerProgress.
    """

    def __init__(self, progress: PlayerProgress, daughter_scenes: FrozenSet[str] = DAUGHTER_SCENES):
        self.progress = progress
        self.daughter_scenes = frozenset(daughter_scenes)

    # ---------- objects ----------
    def build_objects(self, scene: Optional[Scene]) -> List[ObjectView]:
        if scene is None:
            return []
        return [ObjectView(o.id, o.label, self.progress.is_visited(o.id)) for o in scene.objects]

    def visit_object(self, scene: Optional[Scene], object_id: str) -> Optional[InteractiveObject]:
        """ Mark an object of `scene` as seen. Returns it, or None if the scene has no such object. """
        obj = scene.find_object(object_id) if scene else None
        if obj is None:
            return None
        self.progress.mark_visited(obj.id)
        return obj

    # ---------- choices ----------
    def eligibility(self, choice: Choice) -> Tuple[bool, Optional[str]]:
        """ (eligible, hint). The last unmet requirement decides the default hint. """
        eligible = True
        hint = None
        need = choice.requires_visited_objects_at_least
        if need is not None and self.progress.visited_count < need:
            eligible = False
            hint = choice.locked_hint or f"Explore at least {need} things first"
        if choice.requires_all_daughter_scenes and not self.progress.has_daughter_scenes(self.daughter_scenes):
            eligible = False
            hint = choice.locked_hint or "Listen to all of her stories before moving on"
        return eligible, hint

    def build_choices(self, scene: Optional[Scene]) -> List[ChoiceView]:
        if scene is None:
            return []
        views = []
        for i, ch in enumerate(scene.choices):
            eligible, hint = self.eligibility(ch)
            views.append(ChoiceView(
                index=i,
                text=ch.text or "Continue",
                style=ch.style,
                enabled=eligible,
                hint=hint,
            ))
        return views

    def resolve(self, choice: Choice) -> Tuple[ChoiceAction, Optional[str]]:
        """
        Where an eligible choice leads. `wrong` and `correct` tags take the
        same path as any other choice with a `next`.
        """
        if choice.is_restart:
            return ChoiceAction.RESTART, None
        if choice.next:
            return ChoiceAction.GOTO, choice.next
        return ChoiceAction.NONE, None

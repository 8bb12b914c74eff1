from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Set

from engine.narrative.types import SceneEffects

# Side scenes that must all be heard before the final chapter opens
DAUGHTER_SCENES = frozenset({"shrimp", "bunny", "monkey", "psycho"})

_CHAPTER_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_chapter(scene_id: str) -> Optional[int]:
    """
    Leading integer of the part before the first dot: "2.1_wrong" -> 2,
    "12b" -> 12, "epilogue" -> None.
    """
    m = _CHAPTER_PREFIX.match(str(scene_id).split(".")[0])
    return int(m.group(1)) if m else None


@dataclass
class PlayerProgress:
    """
    Narrative position plus everything the player has seen so far.
    One instance per playthrough; restart resets it in place.
    """
    chapter: int = 1
    perspective: Optional[str] = None
    visited_objects: Set[str] = field(default_factory=set)
    daughter_scenes: Set[str] = field(default_factory=set)
    flags: Dict[str, Any] = field(default_factory=dict)
    current_scene_id: Optional[str] = None

    def reset(self, first_scene_id: Optional[str] = None) -> None:
        self.chapter = 1
        self.perspective = None
        self.visited_objects = set()
        self.daughter_scenes = set()
        self.flags = {}
        self.current_scene_id = first_scene_id

    def enter_scene(self, scene_id: str) -> None:
        self.current_scene_id = scene_id
        chapter = parse_chapter(scene_id)
        if chapter is not None:
            self.chapter = chapter

    def apply_effects(self, effects: SceneEffects) -> None:
        if effects.set_perspective:
            self.perspective = effects.set_perspective
        if effects.mark_visited_object:
            self.visited_objects.add(effects.mark_visited_object)
        if effects.daughter_scene_id:
            self.daughter_scenes.add(effects.daughter_scene_id)

    def mark_visited(self, object_id: str) -> bool:
        """ Returns True if the object was not visited before. """
        if object_id in self.visited_objects:
            return False
        self.visited_objects.add(object_id)
        return True

    def is_visited(self, object_id: str) -> bool:
        return object_id in self.visited_objects

    @property
    def visited_count(self) -> int:
        return len(self.visited_objects)

    def has_daughter_scenes(self, required: Iterable[str] = DAUGHTER_SCENES) -> bool:
        return all(s in self.daughter_scenes for s in required)

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Dict, List

RESTART = "restart"   # `next` sentinel that restarts the story


@dataclass(frozen=True)
class InteractiveObject:
    id: str
    label: str
    description: str = ""


@dataclass(frozen=True)
class Choice:
    text: str
    next: Optional[str] = None          # Scene id, RESTART, or None (dead end)
    style: str = "primary"              # primary | secondary
    requires_visited_objects_at_least: Optional[int] = None
    requires_all_daughter_scenes: bool = False
    locked_hint: Optional[str] = None
    # Tags
    wrong: bool = False
    correct: bool = False
    restart: bool = False

    @property
    def is_restart(self) -> bool:
        return self.restart or self.next == RESTART


@dataclass(frozen=True)
class SceneEffects:
    """ State changes applied to PlayerProgress when the scene is entered. """
    set_perspective: Optional[str] = None
    mark_visited_object: Optional[str] = None
    daughter_scene_id: Optional[str] = None


@dataclass(frozen=True)
class SceneMeta:
    thought_popup: Optional[str] = None


@dataclass(frozen=True)
class Scene:
    id: str                                         # e.g. "2.1_wrong"; prefix before the dot is the chapter
    text: str = ""
    text_variants: Optional[Dict[str, str]] = None  # perspective -> text; "default" is mandatory
    chapter: Optional[str] = None                   # Label shown above the text
    background: Optional[str] = None
    objects: List[InteractiveObject] = field(default_factory=list)
    choices: List[Choice] = field(default_factory=list)
    effects: SceneEffects = field(default_factory=SceneEffects)
    meta: SceneMeta = field(default_factory=SceneMeta)

    def resolve_text(self, perspective: Optional[str]) -> str:
        if self.text_variants is not None:
            if perspective and self.text_variants.get(perspective):
                return self.text_variants[perspective]
            return self.text_variants.get("default", "")
        return self.text or ""

    def find_object(self, object_id: str) -> Optional[InteractiveObject]:
        for obj in self.objects:
            if obj.id == object_id:
                return obj
        return None


@dataclass
class Story:
    scenes: Dict[str, Scene]    # scene id -> Scene
    first_scene_id: str

    def get(self, scene_id: Optional[str]) -> Optional[Scene]:
        if scene_id is None:
            return None
        return self.scenes.get(scene_id)

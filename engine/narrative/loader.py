from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple

import yaml

from engine.narrative.types import (
    RESTART, Choice, InteractiveObject, Scene, SceneEffects, SceneMeta, Story,
)

logger = logging.getLogger(__name__)


def _opt_str(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    s = str(raw).strip()
    return s or None


def _text_block(raw: Any) -> str:
    """ say-style text: allow str or list[str] (joined as paragraphs). """
    if isinstance(raw, list):
        return "\n".join(str(s) for s in raw)
    if raw is None:
        return ""
    return str(raw)


def _parse_objects(path: str, sid: str, raw: Any) -> List[InteractiveObject]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"{path}: scene '{sid}': 'objects' must be a list")
    objects = []
    for idx, o in enumerate(raw):
        if not isinstance(o, dict) or not _opt_str(o.get("id")):
            raise ValueError(f"{path}: scene '{sid}': object #{idx} needs an 'id'")
        oid = str(o["id"]).strip()
        objects.append(InteractiveObject(
            id=oid,
            label=str(o.get("label") or oid),
            description=_text_block(o.get("description")),
        ))
    return objects


def _choice_count(path: str, sid: str, idx: int, c: dict, key: str) -> Optional[int]:
    value = c.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{path}: scene '{sid}': choice #{idx}: '{key}' must be an integer") from None


def _choice_flag(path: str, sid: str, idx: int, c: dict, key: str) -> bool:
    value = c.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{path}: scene '{sid}': choice #{idx}: '{key}' must be true or false")
    return value


def _parse_choices(path: str, sid: str, raw: Any) -> List[Choice]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"{path}: scene '{sid}': 'choices' must be a list")
    choices = []
    for idx, c in enumerate(raw):
        if not isinstance(c, dict):
            raise ValueError(f"{path}: scene '{sid}': choice #{idx} must be a mapping")
        choices.append(Choice(
            text=str(c.get("text") or ""),
            next=_opt_str(c.get("next")),
            style=str(c.get("style") or "primary"),
            requires_visited_objects_at_least=_choice_count(path, sid, idx, c, "requires_visited_objects_at_least"),
            requires_all_daughter_scenes=_choice_flag(path, sid, idx, c, "requires_all_daughter_scenes"),
            locked_hint=_opt_str(c.get("locked_hint")),
            wrong=_choice_flag(path, sid, idx, c, "wrong"),
            correct=_choice_flag(path, sid, idx, c, "correct"),
            restart=_choice_flag(path, sid, idx, c, "restart"),
        ))
    return choices


def parse_scene(path: str, sid: str, body: Any) -> Scene:
    if not isinstance(body, dict):
        raise ValueError(f"{path}: scene '{sid}' must be a mapping")

    variants = body.get("text_variants")
    if variants is not None:
        if not isinstance(variants, dict) or "default" not in variants:
            raise ValueError(f"{path}: scene '{sid}': 'text_variants' needs a 'default' entry")
        variants = {str(k): _text_block(v) for k, v in variants.items()}

    meta = body.get("meta", {}) or {}
    if not isinstance(meta, dict):
        raise ValueError(f"{path}: scene '{sid}': 'meta' must be a mapping")

    return Scene(
        id=sid,
        text=_text_block(body.get("text")),
        text_variants=variants,
        chapter=_opt_str(body.get("chapter")),
        background=_opt_str(body.get("background")),
        objects=_parse_objects(path, sid, body.get("objects")),
        choices=_parse_choices(path, sid, body.get("choices")),
        effects=SceneEffects(
            set_perspective=_opt_str(body.get("set_perspective")),
            mark_visited_object=_opt_str(body.get("mark_visited_object")),
            daughter_scene_id=_opt_str(meta.get("daughter_scene_id")),
        ),
        meta=SceneMeta(thought_popup=_opt_str(meta.get("thought_popup"))),
    )


def story_from_dict(data: Dict[str, Any], path: str = "<story>") -> Story:
    first = _opt_str(data.get("first_scene"))
    if not first:
        raise ValueError(f"{path}: Missing 'first_scene'")

    raw_scenes = data.get("scenes", {})
    if not isinstance(raw_scenes, dict) or not raw_scenes:
        raise ValueError(f"{path}: 'scenes' must be a non-empty mapping")

    # Scene ids like 1.1 come out of YAML as floats unless quoted; keep them textual
    scenes: Dict[str, Scene] = {}
    for key, body in raw_scenes.items():
        sid = str(key)
        scenes[sid] = parse_scene(path, sid, body)

    if first not in scenes:
        raise ValueError(f"{path}: first_scene '{first}' is not defined")

    story = Story(scenes=scenes, first_scene_id=first)
    for sid, target in find_dangling_references(story):
        logger.warning("%s: scene '%s' points to unknown scene '%s'", path, sid, target)
    return story


def load_story_file(path: str) -> Story:
    """
    Loads a single YAML file containing:
        first_scene: <scene id>
        scenes: { <scene id>: {text | text_variants, choices: [...], ...} }
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    story = story_from_dict(data, path)
    logger.info("Loaded %d scenes from %s", len(story.scenes), path)
    return story


def find_dangling_references(story: Story) -> List[Tuple[str, str]]:
    """ (scene id, target) for every choice whose `next` names no scene. """
    out = []
    for sid, scene in story.scenes.items():
        for ch in scene.choices:
            if ch.next and ch.next != RESTART and ch.next not in story.scenes:
                out.append((sid, ch.next))
    return out

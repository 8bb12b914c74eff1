from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from engine.ui.style import Theme

WRONG_CHOICE_SCENE = "2.1_wrong"
WRONG_CHOICE_MESSAGE = "Это решение ни на что не повлияет"


@dataclass
class WindowCfg:
    width: int = 1280
    height: int = 720
    title: str = "HORIZON"
    bg_rgb: tuple[int, int, int] = (14, 15, 18)


@dataclass
class TimingCfg:
    reveal_tick_s: float = 0.022    # Per typed character
    fade_out_s: float = 0.26        # Fade-out before the next scene is laid out
    settle_s: float = 0.30          # Fade-in; transitions stay locked until it ends
    toast_s: float = 2.5
    thought_delay_s: float = 1.0    # After the scene's text is fully shown


@dataclass
class StoryCfg:
    path: str = "game/content/story.yaml"
    assets_root: str = "game/assets"
    wrong_choice_scene: str = WRONG_CHOICE_SCENE
    wrong_choice_message: str = WRONG_CHOICE_MESSAGE


@dataclass
class AppCfg:
    fps: int = 60
    log_level: str = "INFO"
    window: WindowCfg = field(default_factory=WindowCfg)
    timing: TimingCfg = field(default_factory=TimingCfg)
    story: StoryCfg = field(default_factory=StoryCfg)
    theme: Theme = field(default_factory=Theme)


def _get(d: dict, path: str, default: Any):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def load_ui_defaults(path: str = "game/config/defaults.yaml") -> Dict[str, Any]:
    """ Raw YAML mapping, or {} when the file does not exist. """
    p = Path(path)
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(path: str = "game/config/defaults.yaml") -> AppCfg:
    data = load_ui_defaults(path)
    return AppCfg(
        fps=int(_get(data, "fps", 60)),
        log_level=str(_get(data, "log_level", "INFO")).upper(),
        window=WindowCfg(
            width=int(_get(data, "window.width", 1280)),
            height=int(_get(data, "window.height", 720)),
            title=str(_get(data, "window.title", "HORIZON")),
            bg_rgb=tuple(_get(data, "window.bg_rgb", (14, 15, 18))),
        ),
        timing=TimingCfg(
            reveal_tick_s=float(_get(data, "timing.reveal_tick_s", 0.022)),
            fade_out_s=float(_get(data, "timing.fade_out_s", 0.26)),
            settle_s=float(_get(data, "timing.settle_s", 0.30)),
            toast_s=float(_get(data, "timing.toast_s", 2.5)),
            thought_delay_s=float(_get(data, "timing.thought_delay_s", 1.0)),
        ),
        story=StoryCfg(
            path=str(_get(data, "story.path", "game/content/story.yaml")),
            assets_root=str(_get(data, "story.assets_root", "game/assets")),
            wrong_choice_scene=str(_get(data, "story.wrong_choice_scene", WRONG_CHOICE_SCENE)),
            wrong_choice_message=str(_get(data, "story.wrong_choice_message", WRONG_CHOICE_MESSAGE)),
        ),
        theme=build_theme_from_defaults(data),
    )


def build_theme_from_defaults(defaults: Dict[str, Any]) -> Theme:
    tdata = defaults.get("theme", {}) or {}
    th = Theme()

    th.font_path        = tdata.get("font_path", th.font_path)
    th.font_size        = int(tdata.get("font_size", th.font_size))
    th.label_size       = int(tdata.get("label_size", th.label_size))
    th.small_size       = int(tdata.get("small_size", th.small_size))
    th.text_rgb         = tuple(tdata.get("text_rgb", th.text_rgb))
    th.note_rgb         = tuple(tdata.get("note_rgb", th.note_rgb))
    th.muted_rgb        = tuple(tdata.get("muted_rgb", th.muted_rgb))
    th.box_bg           = tuple(tdata.get("box_bg", th.box_bg))
    th.border_radius    = int(tdata.get("border_radius", th.border_radius))
    th.padding          = int(tdata.get("padding", th.padding))
    th.line_spacing     = int(tdata.get("line_spacing", th.line_spacing))
    th.textbox_frac     = tuple(tdata.get("textbox_frac", th.textbox_frac))

    # buttons
    bt = tdata.get("button", {}) or {}
    b = th.button
    b.h             = int(bt.get("h", b.h))
    b.gap           = int(bt.get("gap", b.gap))
    b.radius        = int(bt.get("radius", b.radius))
    b.primary_rgba  = tuple(bt.get("primary_rgba", b.primary_rgba))
    b.secondary_rgba = tuple(bt.get("secondary_rgba", b.secondary_rgba))
    b.disabled_rgba = tuple(bt.get("disabled_rgba", b.disabled_rgba))
    b.selected_rgba = tuple(bt.get("selected_rgba", b.selected_rgba))
    b.visited_rgba  = tuple(bt.get("visited_rgba", b.visited_rgba))

    # overlays
    ov = tdata.get("overlay", {}) or {}
    th.toast_rgba   = tuple(ov.get("toast_rgba", th.toast_rgba))
    th.thought_rgba = tuple(ov.get("thought_rgba", th.thought_rgba))
    th.fade_rgb     = tuple(ov.get("fade_rgb", th.fade_rgb))
    return th

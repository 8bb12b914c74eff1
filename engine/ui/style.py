from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ButtonStyle:
    h: int = 40
    gap: int = 8
    radius: int = 8
    primary_rgba: tuple[int, int, int, int] = (40, 52, 84, 230)
    secondary_rgba: tuple[int, int, int, int] = (30, 30, 35, 200)
    disabled_rgba: tuple[int, int, int, int] = (30, 30, 35, 110)
    selected_rgba: tuple[int, int, int, int] = (140, 180, 255, 255)   # outline
    visited_rgba: tuple[int, int, int, int] = (60, 60, 70, 150)


@dataclass
class Theme:
    font_path: Optional[str] = None
    font_size: int = 24
    label_size: int = 18            # chapter label
    small_size: int = 16            # hints, object notes
    text_rgb: tuple[int, int, int] = (235, 235, 240)
    note_rgb: tuple[int, int, int] = (203, 213, 245)
    muted_rgb: tuple[int, int, int] = (140, 142, 150)
    box_bg: tuple[int, int, int, int] = (10, 10, 10, 170)
    border_radius: int = 12
    padding: int = 18
    line_spacing: int = 4
    textbox_frac: tuple[float, float] = (0.6, 0.5)
    button: ButtonStyle = field(default_factory=ButtonStyle)
    toast_rgba: tuple[int, int, int, int] = (120, 30, 40, 230)
    thought_rgba: tuple[int, int, int, int] = (245, 245, 250, 235)
    fade_rgb: tuple[int, int, int] = (0, 0, 0)


def compute_centered_rect(screen_size: tuple[int, int], wfrac: float, hfrac: float, y_offset: int = 0) -> tuple[int, int, int, int]:
    """ (x, y, w, h) of a box centred in the screen; plain tuple so callers choose the Rect type. """
    sw, sh = screen_size
    w = max(1, int(sw * wfrac))
    h = max(1, int(sh * hfrac))
    return ((sw - w) // 2, (sh - h) // 2 + y_offset, w, h)

from __future__ import annotations

import sys
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

import pygame

logger = logging.getLogger(__name__)

# --- Project / assets root ----------------------------------------------------

def _project_root() -> Path:
    """
    Works in dev and with PyInstaller-like bundles.
    """
    if getattr(sys, "_MEIPASS", None):  # PyInstaller temp dir
        return Path(sys._MEIPASS)  # type: ignore[attr-defined]
    return Path(__file__).resolve().parents[1]  # engine/ -> [project root]


def asset_path(ref: str, assets_root: str = "game/assets") -> Path:
    """
    Resolve a background reference from the story. Absolute paths are kept,
    relative ones are looked up under the assets root.
    """
    p = Path(ref)
    if p.is_absolute():
        return p
    return _project_root() / assets_root / p


# --- Background cache ---------------------------------------------------------

# Cache key: (ref, (w, h)); backgrounds are always scaled to cover the window
_image_cache: Dict[Tuple[str, Tuple[int, int]], pygame.Surface] = {}


def _fallback_surface(size: Tuple[int, int]) -> pygame.Surface:
    """
    A loud magenta/black cross so missing assets are obvious.
    """
    surf = pygame.Surface(size)
    surf.fill((255, 0, 255))
    pygame.draw.line(surf, (0, 0, 0), (0, 0), size, 2)
    pygame.draw.line(surf, (0, 0, 0), (0, size[1]), (size[0], 0), 2)
    return surf


def _cover(surf: pygame.Surface, size: Tuple[int, int]) -> pygame.Surface:
    """ Scale to fill `size` keeping aspect ratio, cropping the overflow. """
    w, h = surf.get_size()
    tw, th = size
    scale = max(tw / max(1, w), th / max(1, h))
    scaled = pygame.transform.smoothscale(surf, (max(1, int(w * scale)), max(1, int(h * scale))))
    x = (scaled.get_width() - tw) // 2
    y = (scaled.get_height() - th) // 2
    return scaled.subsurface(pygame.Rect(x, y, tw, th)).copy()


def load_background(ref: Optional[str], size: Tuple[int, int], assets_root: str = "game/assets") -> Optional[pygame.Surface]:
    """
    Cached, window-sized background for a story reference. None for no background.
    "#rrggbb" refs are solid fills; anything else is an image file.
    Missing files log a warning and return the fallback surface.
    """
    if not ref:
        return None
    key = (ref, (int(size[0]), int(size[1])))
    cached = _image_cache.get(key)
    if cached is not None:
        return cached

    if ref.startswith("#"):
        surf = pygame.Surface(key[1])
        try:
            surf.fill(pygame.Color(ref))
        except ValueError as e:
            logger.warning("Bad background colour '%s': %s", ref, e)
            surf = _fallback_surface(key[1])
        _image_cache[key] = surf
        return surf

    path = asset_path(ref, assets_root)
    try:
        surf = _cover(pygame.image.load(str(path)), key[1])
        if pygame.display.get_surface() is not None:
            surf = surf.convert()
    except (pygame.error, FileNotFoundError) as e:
        logger.warning("Could not load background '%s': %s", path, e)
        surf = _fallback_surface(key[1])

    _image_cache[key] = surf
    return surf

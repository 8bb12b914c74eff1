from __future__ import annotations
from dataclasses import dataclass
from collections import OrderedDict
from typing import List, Optional
import pygame

@dataclass(frozen=True)
class FontKey:
    path: Optional[str]
    size: int
    bold: bool = False
    italic: bool = False

class FontCache:
    """
    Tiny LRU cache for pygame.font.Font objects keyed by FontKey.
      - font = fonts.get(path, size, italic=True)
      - lines = fonts.wrap(font, text, max_width)
    """

    def __init__(self, max_entries: int = 16) -> None:
        self._cache: "OrderedDict[FontKey, pygame.font.Font]" = OrderedDict()
        self._max = max(1, int(max_entries))

    def get(
        self,
        path: Optional[str],
        size: int,
        *,
        bold: bool = False,
        italic: bool = False,
    ) -> pygame.font.Font:
        k = FontKey(path, int(size), bool(bold), bool(italic))
        f = self._cache.get(k)
        if f is not None:
            self._cache.move_to_end(k)
            return f

        f = pygame.font.Font(k.path, k.size)
        if k.bold:
            f.set_bold(True)
        if k.italic:
            f.set_italic(True)

        self._cache[k] = f
        while len(self._cache) > self._max:
            self._cache.popitem(last=False)
        return f

    @staticmethod
    def wrap(font: pygame.font.Font, text: str, max_width: int) -> List[str]:
        """ Greedy word wrap; explicit newlines start new paragraphs. """
        lines: List[str] = []
        for para in (text or "").split("\n"):
            cur = ""
            for word in para.split(" "):
                trial = word if not cur else f"{cur} {word}"
                if font.size(trial)[0] <= max_width or not cur:
                    cur = trial
                else:
                    lines.append(cur)
                    cur = word
            lines.append(cur)
        return lines

    @staticmethod
    def line_height(font: pygame.font.Font, spacing: int = 0) -> int:
        return font.get_linesize() + spacing


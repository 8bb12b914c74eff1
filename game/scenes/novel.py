# game/scenes/novel.py
from __future__ import annotations
from typing import List, Optional, Tuple
import pygame

from engine.settings import AppCfg
from engine.resources import load_background
from engine.input_router import InputRouter, ClickAction
from engine.ui.anim import FadeOverlay
from engine.ui.choice_controller import ChoiceController
from engine.ui.fonts import FontCache
from engine.ui.style import Theme, compute_centered_rect

# Narrative
from engine.narrative.gate import ChoiceView, ObjectView
from engine.narrative.loader import load_story_file
from engine.narrative.presenter import ScenePresenter
from engine.narrative.types import Story


class NovelScene:
    """
    Visual Novel play scene, and the presenter's screen.
    - Keeps whatever the presenter last rendered and draws it every frame
    - Routes clicks through InputRouter; Space/Enter skip or choose
    """

    def __init__(self, screen: pygame.Surface, cfg: AppCfg, story: Optional[Story] = None):
        self.screen = screen
        self.cfg = cfg
        self.theme: Theme = cfg.theme
        self.fonts = FontCache()
        self.request_quit = False

        # What the presenter told us to show
        self.bg_ref: Optional[str] = None
        self.chapter_label = ""
        self.text = ""
        self.notes: List[str] = []
        self.objects: List[ObjectView] = []
        self.choices = ChoiceController()
        self.toast: Optional[str] = None
        self.thought: Optional[str] = None
        self.fade = FadeOverlay(cfg.timing.fade_out_s, cfg.timing.settle_s)

        self.router = InputRouter()
        self._layout_dirty = True
        self._box = pygame.Rect(0, 0, 0, 0)
        self._screen_size: Tuple[int, int] = (0, 0)
        self._choice_rows: List[pygame.Rect] = []
        self._thought_rect: Optional[pygame.Rect] = None

        self.story = story or load_story_file(cfg.story.path)
        self.presenter = ScenePresenter(
            self.story,
            self,
            timing=cfg.timing,
            wrong_choice_scene=cfg.story.wrong_choice_scene,
            wrong_choice_message=cfg.story.wrong_choice_message,
        )

    # --- Lifecycle ----------------------------------------------------------
    def on_enter(self) -> None:
        self.presenter.start()

    # --- PresentationSink ---------------------------------------------------
    def render_background(self, ref: Optional[str]) -> None:
        self.bg_ref = ref

    def render_chapter_label(self, text: str) -> None:
        self.chapter_label = text

    def render_revealed_text(self, text: str) -> None:
        # An empty string starts a new block; notes belong to the previous one
        if not text:
            self.notes.clear()
        self.text = text

    def append_object_description(self, text: str) -> None:
        self.notes.append(text)

    def render_object_list(self, objects: List[ObjectView]) -> None:
        self.objects = list(objects)
        self._layout_dirty = True

    def render_choice_list(self, choices: List[ChoiceView]) -> None:
        if choices:
            self.choices.show(choices)
        else:
            self.choices.hide()
        self._layout_dirty = True

    def show_toast(self, message: str) -> None:
        self.toast = message

    def hide_toast(self) -> None:
        self.toast = None

    def show_thought_popup(self, text: str) -> None:
        self.thought = text
        self._layout_dirty = True

    def hide_thought_popup(self) -> None:
        self.thought = None
        self._layout_dirty = True

    def visual_transition(self, phase: str) -> None:
        self.fade.play(phase)

    # --- Loop ---------------------------------------------------------------
    def handle_event(self, e: pygame.event.Event) -> bool:
        if e.type == pygame.KEYDOWN:
            if e.key == pygame.K_ESCAPE:
                self.request_quit = True
                return True
            if self._is_advance_key(e.key):
                if self.presenter.revealing:
                    self.presenter.skip()
                else:
                    idx = self.choices.selected_index()
                    if idx is not None:
                        self.presenter.click_choice(idx)
                return True
            if e.key in (pygame.K_UP, pygame.K_DOWN) and self.choices.active():
                self.choices.move(-1 if e.key == pygame.K_UP else +1)
                return True
            return False

        if e.type == pygame.MOUSEMOTION:
            hovered = None
            for idx, rect in self.router.choice_rects:
                if rect.collidepoint(e.pos):
                    hovered = idx
            self.choices.set_hover_index(self._row_of(hovered))
            return False

        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            self._ensure_layout()
            action, payload = self.router.route(e.pos, revealing=self.presenter.revealing)
            if action is ClickAction.DISMISS_THOUGHT:
                self.presenter.dismiss_thought()
            elif action is ClickAction.CHOOSE:
                self.presenter.click_choice(payload)
            elif action is ClickAction.INSPECT:
                self.presenter.click_object(payload)
            elif action is ClickAction.SKIP:
                self.presenter.skip()
            else:
                return False
            return True

        if e.type == pygame.VIDEORESIZE:
            self._layout_dirty = True
            return True

        return False

    def update(self, dt: float) -> None:
        self.presenter.update(dt)
        self.fade.update(dt)

    def draw(self, surface: pygame.Surface) -> None:
        self.screen = surface
        self._ensure_layout()
        th = self.theme

        # Background first
        bg = load_background(self.bg_ref, surface.get_size(), self.cfg.story.assets_root)
        if bg is not None:
            surface.blit(bg, (0, 0))
        else:
            surface.fill(self.cfg.window.bg_rgb)

        # Text box
        box = self._box
        panel = pygame.Surface(box.size, pygame.SRCALPHA)
        pygame.draw.rect(panel, th.box_bg, panel.get_rect(), border_radius=th.border_radius)
        surface.blit(panel, box.topleft)

        if self.chapter_label:
            label = self.fonts.get(th.font_path, th.label_size, bold=True)
            surface.blit(label.render(self.chapter_label, True, th.muted_rgb),
                         (box.x, box.y - label.get_linesize() - 4))

        self._draw_text(surface, box.inflate(-2 * th.padding, -2 * th.padding))
        self._draw_objects(surface)
        self._draw_choices(surface)
        self._draw_overlays(surface)

        if self.fade.alpha > 0.5:
            cover = pygame.Surface(surface.get_size())
            cover.fill(th.fade_rgb)
            cover.set_alpha(int(self.fade.alpha))
            surface.blit(cover, (0, 0))

    # --- drawing ------------------------------------------------------------
    def _draw_text(self, surface: pygame.Surface, inner: pygame.Rect) -> None:
        th = self.theme
        body = self.fonts.get(th.font_path, th.font_size)
        small = self.fonts.get(th.font_path, th.small_size, italic=True)
        rows = [(body, th.text_rgb, ln) for ln in FontCache.wrap(body, self.text, inner.w)]
        for note in self.notes:
            rows.append((small, th.note_rgb, ""))
            rows.extend((small, th.note_rgb, ln) for ln in FontCache.wrap(small, note, inner.w))

        # Follow the bottom once the block overflows
        total = sum(FontCache.line_height(f, th.line_spacing) for f, _, _ in rows)
        y = inner.y - max(0, total - inner.h)
        prev_clip = surface.get_clip()
        surface.set_clip(inner)
        for font, rgb, ln in rows:
            if ln:
                surface.blit(font.render(ln, True, rgb), (inner.x, y))
            y += FontCache.line_height(font, th.line_spacing)
        surface.set_clip(prev_clip)

    def _draw_button(self, surface: pygame.Surface, rect: pygame.Rect, text: str,
                     fill: Tuple[int, int, int, int], rgb: Tuple[int, int, int],
                     outline: Optional[Tuple[int, int, int, int]] = None) -> None:
        b = self.theme.button
        tmp = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.rect(tmp, fill, tmp.get_rect(), border_radius=b.radius)
        if outline:
            pygame.draw.rect(tmp, outline, tmp.get_rect(), width=2, border_radius=b.radius)
        surface.blit(tmp, rect.topleft)
        font = self.fonts.get(self.theme.font_path, self.theme.small_size + 2)
        surf = font.render(text, True, rgb)
        surface.blit(surf, surf.get_rect(center=rect.center))

    def _draw_objects(self, surface: pygame.Surface) -> None:
        th, b = self.theme, self.theme.button
        for (oid, rect), obj in zip(self.router.object_rects, self.objects):
            fill = b.visited_rgba if obj.visited else b.secondary_rgba
            rgb = th.muted_rgb if obj.visited else th.text_rgb
            self._draw_button(surface, rect, obj.label, fill, rgb)

    def _draw_choices(self, surface: pygame.Surface) -> None:
        th, b = self.theme, self.theme.button
        hint_font = self.fonts.get(th.font_path, th.small_size, italic=True)
        for row, (c, rect) in enumerate(zip(self.choices.items, self._choice_rows)):
            if not c.enabled:
                fill, rgb = b.disabled_rgba, th.muted_rgb
            elif c.style == "secondary":
                fill, rgb = b.secondary_rgba, th.text_rgb
            else:
                fill, rgb = b.primary_rgba, th.text_rgb
            outline = b.selected_rgba if (row == self.choices.sel and c.enabled) else None
            self._draw_button(surface, rect, c.text, fill, rgb, outline)
            if c.hint and not c.enabled:
                hs = hint_font.render(c.hint, True, th.muted_rgb)
                surface.blit(hs, (rect.x + 6, rect.bottom + 2))

    def _draw_overlays(self, surface: pygame.Surface) -> None:
        th = self.theme
        font = self.fonts.get(th.font_path, th.small_size + 2)
        if self.toast:
            ts = font.render(self.toast, True, (255, 255, 255))
            r = ts.get_rect(midtop=(surface.get_width() // 2, 16)).inflate(32, 16)
            self._draw_button(surface, r, self.toast, th.toast_rgba, (255, 255, 255))
        if self.thought and self._thought_rect is not None:
            r = self._thought_rect
            tmp = pygame.Surface(r.size, pygame.SRCALPHA)
            pygame.draw.rect(tmp, th.thought_rgba, tmp.get_rect(), border_radius=16)
            surface.blit(tmp, r.topleft)
            italic = self.fonts.get(th.font_path, th.small_size, italic=True)
            y = r.y + 10
            for ln in FontCache.wrap(italic, self.thought, r.w - 24):
                surface.blit(italic.render(ln, True, (30, 30, 40)), (r.x + 12, y))
                y += italic.get_linesize()

    # --- layout -------------------------------------------------------------
    def _ensure_layout(self) -> None:
        if not self._layout_dirty and self._screen_size == self.screen.get_size():
            return
        th, b = self.theme, self.theme.button
        self._screen_size = self.screen.get_size()
        sw, sh = self._screen_size
        wfrac, hfrac = th.textbox_frac
        self._box = pygame.Rect(compute_centered_rect(self._screen_size, wfrac, hfrac, y_offset=-sh // 8))

        font = self.fonts.get(th.font_path, th.small_size + 2)
        x, y = self._box.x, self._box.bottom + b.gap
        obj_rects = []
        for obj in self.objects:
            w = font.size(obj.label)[0] + 28
            if x + w > self._box.right and x > self._box.x:
                x, y = self._box.x, y + b.h + b.gap
            obj_rects.append((obj.id, pygame.Rect(x, y, w, b.h)))
            x += w + b.gap
        if obj_rects:
            y += b.h + b.gap

        rows = []
        for c in self.choices.items:
            rows.append(pygame.Rect(self._box.x, y, self._box.w, b.h))
            y += b.h + b.gap + (th.small_size + 4 if (c.hint and not c.enabled) else 0)
        self._choice_rows = rows

        self._thought_rect = None
        if self.thought:
            tw = min(360, sw // 3)
            italic = self.fonts.get(th.font_path, th.small_size, italic=True)
            lines = FontCache.wrap(italic, self.thought, tw - 24)
            thh = 20 + len(lines) * italic.get_linesize()
            self._thought_rect = pygame.Rect(sw - tw - 24, sh - thh - 24, tw, thh)

        self.router.ui_rect = self.screen.get_rect()
        self.router.thought_rect = self._thought_rect
        self.router.object_rects = obj_rects
        # Only enabled choices are clickable
        self.router.choice_rects = [(c.index, r) for c, r in zip(self.choices.items, rows) if c.enabled]
        self._layout_dirty = False

    # --- helpers ------------------------------------------------------------
    def _is_advance_key(self, key: int) -> bool:
        return key in (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER)

    def _row_of(self, choice_index: Optional[int]) -> Optional[int]:
        if choice_index is None:
            return None
        for row, c in enumerate(self.choices.items):
            if c.index == choice_index:
                return row
        return None

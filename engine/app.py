from __future__ import annotations

import pygame

from engine.settings import AppCfg
from game.scenes.novel import NovelScene


class GameApp:
    """
    Minimal app shell that delegates input/update/draw to the novel scene.
    It keeps global concerns (window init, fps, resize, fullscreen).
    """

    def __init__(self, cfg: AppCfg):
        self.cfg = cfg
        pygame.init()
        pygame.display.set_caption(cfg.window.title)

        # Window/display
        self._flags = pygame.RESIZABLE | pygame.DOUBLEBUF
        self.screen = pygame.display.set_mode(
            (int(cfg.window.width), int(cfg.window.height)),
            flags=self._flags,
        )

        # Core loop
        self.clock = pygame.time.Clock()
        self.running = True

        self.scene = NovelScene(self.screen, cfg)
        self.scene.on_enter()

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        while self.running and not self.scene.request_quit:
            dt = self.clock.tick(self.cfg.fps) / 1000.0

            # ---- event pump -------------------------------------------------
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    self.running = False
                    break

                # App-level resize: update display first, then forward event
                if e.type == pygame.VIDEORESIZE:
                    self._resize_to(e.w, e.h)
                    self.scene.handle_event(e)
                    continue

                if self.scene.handle_event(e):
                    continue

                # Global hotkeys
                if e.type == pygame.KEYDOWN:
                    if e.key == pygame.K_F11:
                        self._toggle_fullscreen()
                        continue
                    if (e.key == pygame.K_q) and (pygame.key.get_mods() & pygame.KMOD_CTRL):
                        self.running = False
                        continue

            # ---- update/draw -----------------------------------------------
            self.scene.update(dt)
            self.scene.draw(self.screen)
            pygame.display.flip()

        pygame.quit()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _resize_to(self, w: int, h: int) -> None:
        """Recreate the window surface and hand it to the scene."""
        w = max(1, int(w))
        h = max(1, int(h))
        self.screen = pygame.display.set_mode((w, h), flags=self._flags)
        self.scene.screen = self.screen

    def _toggle_fullscreen(self) -> None:
        """Simple fullscreen toggle with F11."""
        try:
            pygame.display.toggle_fullscreen()
        except pygame.error:
            current_flags = pygame.display.get_surface().get_flags()
            if current_flags & pygame.FULLSCREEN:
                self._flags = pygame.RESIZABLE | pygame.SCALED | pygame.DOUBLEBUF
                self.screen = pygame.display.set_mode(self.screen.get_size(), flags=self._flags)
            else:
                self._flags = pygame.FULLSCREEN | pygame.SCALED | pygame.DOUBLEBUF
                self.screen = pygame.display.set_mode((0, 0), flags=self._flags)
            self.scene.screen = self.screen

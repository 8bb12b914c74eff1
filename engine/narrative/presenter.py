from __future__ import annotations
import logging
from typing import List, Optional, Protocol

from engine.narrative.gate import ChoiceAction, ChoiceGate, ChoiceView, ObjectView
from engine.narrative.types import Scene, Story
from engine.notifications import ThoughtPopup, Toast
from engine.progress import PlayerProgress
from engine.settings import TimingCfg, WRONG_CHOICE_MESSAGE, WRONG_CHOICE_SCENE
from engine.timers import Timer, TimerQueue
from engine.ui.text_model import RevealParams, TextModel

logger = logging.getLogger(__name__)

FADE_OUT = "fade-out"
FADE_IN = "fade-in"


class PresentationSink(Protocol):
    """ Everything the presenter asks of the screen. """
    def render_background(self, ref: Optional[str]) -> None: ...
    def render_chapter_label(self, text: str) -> None: ...
    def render_revealed_text(self, text: str) -> None: ...
    def append_object_description(self, text: str) -> None: ...
    def render_object_list(self, objects: List[ObjectView]) -> None: ...
    def render_choice_list(self, choices: List[ChoiceView]) -> None: ...
    def show_toast(self, message: str) -> None: ...
    def hide_toast(self) -> None: ...
    def show_thought_popup(self, text: str) -> None: ...
    def hide_thought_popup(self) -> None: ...
    def visual_transition(self, phase: str) -> None: ...


class NullSink:
    def render_background(self, ref): pass
    def render_chapter_label(self, text): pass
    def render_revealed_text(self, text): pass
    def append_object_description(self, text): pass
    def render_object_list(self, objects): pass
    def render_choice_list(self, choices): pass
    def show_toast(self, message): pass
    def hide_toast(self): pass
    def show_thought_popup(self, text): pass
    def hide_thought_popup(self): pass
    def visual_transition(self, phase): pass


class ScenePresenter:
    """
    Walks the story graph one scene at a time.

    A transition runs as:
      fade-out -> (fade_out_s) -> enter scene, apply its effects, start the
      reveal, fade-in -> (settle_s) -> unlocked.
    The reveal's completion lays out objects and choices and arms the thought
    popup. Only one transition can be in flight; requests made meanwhile are
    dropped. Unknown scene ids are dropped too.
    """

    def __init__(self,
                 story: Story,
                 sink: Optional[PresentationSink] = None,
                 *,
                 timing: Optional[TimingCfg] = None,
                 progress: Optional[PlayerProgress] = None,
                 timers: Optional[TimerQueue] = None,
                 wrong_choice_scene: str = WRONG_CHOICE_SCENE,
                 wrong_choice_message: str = WRONG_CHOICE_MESSAGE):
        self.story = story
        self.sink = sink or NullSink()
        self.timing = timing or TimingCfg()
        self.timers = timers or TimerQueue()
        self.progress = progress or PlayerProgress()
        self.gate = ChoiceGate(self.progress)
        self.wrong_choice_scene = wrong_choice_scene
        self.wrong_choice_message = wrong_choice_message

        self.text = TextModel(self.timers,
                              RevealParams(tick_s=self.timing.reveal_tick_s),
                              on_text=self.sink.render_revealed_text)
        self.toast = Toast(self.timers, self.timing.toast_s,
                           on_show=self.sink.show_toast, on_hide=self.sink.hide_toast)
        self.thought = ThoughtPopup(self.timers, self.timing.thought_delay_s,
                                    on_show=self.sink.show_thought_popup,
                                    on_hide=self.sink.hide_thought_popup)

        self._transitioning = False
        self._pending: Optional[Timer] = None
        self._scene: Optional[Scene] = None    # Scene currently laid out on screen
        self._built = False                     # Objects/choices exist for _scene

    # ---------- queries ----------
    @property
    def transitioning(self) -> bool:
        return self._transitioning

    @property
    def revealing(self) -> bool:
        return self.text.revealing

    @property
    def current_scene(self) -> Optional[Scene]:
        return self.story.get(self.progress.current_scene_id)

    # ---------- lifecycle ----------
    def start(self) -> bool:
        """ Begin a fresh playthrough. Anything still pending from an earlier run is dropped. """
        self.text.cancel()
        self.toast.hide()
        self.thought.hide()
        self.timers.clear()
        self._pending = None
        self._transitioning = False
        self._built = False
        self._scene = None
        self.progress.reset(self.story.first_scene_id)
        return self.request_transition(self.story.first_scene_id, immediate=True)

    def update(self, dt: float) -> None:
        self.timers.update(dt)

    # ---------- transitions ----------
    def request_transition(self, scene_id: Optional[str], immediate: bool = False) -> bool:
        scene = self.story.get(scene_id)
        if scene is None or self._transitioning:
            return False
        self._transitioning = True

        # Tear down the outgoing scene before anything of the new one is armed
        self.text.cancel()
        self.thought.hide()
        self._built = False

        if scene.id == self.wrong_choice_scene:
            self.toast.show(self.wrong_choice_message)
        else:
            self.toast.hide()

        self.sink.visual_transition(FADE_OUT)
        delay = 0.0 if immediate else self.timing.fade_out_s
        self._pending = self.timers.call_later(delay, lambda: self._enter(scene))
        return True

    def restart(self) -> bool:
        if self._transitioning:
            return False
        logger.debug("Restarting from '%s'", self.story.first_scene_id)
        self.progress.reset(self.story.first_scene_id)
        return self.request_transition(self.story.first_scene_id)

    def _enter(self, scene: Scene) -> None:
        self._pending = None
        self.progress.enter_scene(scene.id)
        self.progress.apply_effects(scene.effects)
        self._scene = scene
        logger.debug("Entered scene '%s' (chapter %d)", scene.id, self.progress.chapter)

        self.sink.render_background(scene.background)
        self.sink.render_chapter_label(scene.chapter or "")
        self.sink.render_object_list([])
        self.sink.render_choice_list([])

        text = scene.resolve_text(self.progress.perspective)
        self.text.reveal(text, on_complete=lambda: self._on_revealed(scene))

        self.sink.visual_transition(FADE_IN)
        self._pending = self.timers.call_later(self.timing.settle_s, self._settle)

    def _settle(self) -> None:
        self._pending = None
        self._transitioning = False

    def _on_revealed(self, scene: Scene) -> None:
        self._built = True
        self.sink.render_object_list(self.gate.build_objects(scene))
        self.sink.render_choice_list(self.gate.build_choices(scene))
        self.thought.schedule(scene.meta.thought_popup)

    # ---------- player input ----------
    def skip(self) -> bool:
        """ Click inside the UI while typing: show the rest at once. """
        return self.text.skip_to_end()

    def dismiss_thought(self) -> None:
        self.thought.hide()

    def click_object(self, object_id: str) -> bool:
        if not self._built:
            return False
        obj = self.gate.visit_object(self._scene, object_id)
        if obj is None:
            return False
        self.sink.append_object_description(obj.description)
        self.sink.render_object_list(self.gate.build_objects(self._scene))
        # Visiting may open a gated choice
        self.sink.render_choice_list(self.gate.build_choices(self._scene))
        return True

    def click_choice(self, index: int) -> bool:
        if self._transitioning or self.text.revealing or not self._built or self._scene is None:
            return False
        if index < 0 or index >= len(self._scene.choices):
            return False
        choice = self._scene.choices[index]
        eligible, _ = self.gate.eligibility(choice)
        if not eligible:
            return False
        action, target = self.gate.resolve(choice)
        if action is ChoiceAction.RESTART:
            return self.restart()
        if action is ChoiceAction.GOTO:
            return self.request_transition(target)
        return False

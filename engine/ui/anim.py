from dataclasses import dataclass
from typing import Callable, Any

def ease_linear(t: float) -> float: return t
def ease_out_cubic(t: float) -> float: t = max(0.0, min(1.0, t)); return 1 - (1 - t) ** 3

@dataclass
class Tween:
    obj: Any
    attr: str
    start: float
    end: float
    duration: float
    ease: Callable[[float], float] = ease_out_cubic
    t: float = 0.0
    on_done: Callable[[], None] | None = None

    def update(self, dt: float) -> bool:
        self.t += dt
        u = 1.0 if self.duration <= 0 else max(0.0, min(1.0, self.t / self.duration))
        v = self.start + (self.end - self.start) * self.ease(u)
        setattr(self.obj, self.attr, v)
        finished = (u >= 1.0)
        if finished and self.on_done:
            self.on_done()
        return finished

class Animator:
    def __init__(self):
        self._tweens: list[Tween] = []

    def add(self, tween: Tween) -> None:
        # A new tween on the same attribute replaces the running one
        self._tweens = [tw for tw in self._tweens if not (tw.obj is tween.obj and tw.attr == tween.attr)]
        self._tweens.append(tween)

    def update(self, dt: float) -> None:
        self._tweens[:] = [tw for tw in self._tweens if not tw.update(dt)]


class FadeOverlay:
    """ Full-screen cover for scene changes. alpha 0 = scene visible, 255 = covered. """
    def __init__(self, out_duration: float = 0.26, in_duration: float = 0.30):
        self.alpha: float = 0.0
        self.out_duration = out_duration
        self.in_duration = in_duration
        self._anim = Animator()

    def play(self, phase: str) -> None:
        if phase == "fade-out":
            self._anim.add(Tween(self, "alpha", self.alpha, 255.0, self.out_duration, ease_linear))
        elif phase == "fade-in":
            self._anim.add(Tween(self, "alpha", self.alpha, 0.0, self.in_duration, ease_out_cubic))

    def update(self, dt: float) -> None:
        self._anim.update(dt)

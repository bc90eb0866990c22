"""A panel that shows a captured part of the screen while swinging and drifting."""

from __future__ import annotations

import math
import random
from typing import Any, Callable, Sequence

from eventviz.canvas import Canvas
from eventviz.clock import Clock
from eventviz.color import Color
from eventviz.event import Event

Grabber = Callable[[float, float, float, float], Any]

SWING_LIMIT = 45
VIEW_MARGIN = 100.0
SIDES_COLOR = Color(255, 255, 255, 100)
VIEW_COLOR = Color(255, 0, 0, 100)


def _outline(canvas: Canvas, x: float, y: float, w: float, h: float, color: Color) -> None:
    corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
    for (ax, ay), (bx, by) in zip(corners, corners[1:] + corners[:1]):
        canvas.draw_line(ax, ay, bx, by, color)


class Mirror(Event):
    """Copies the screen region at ``view`` and shows it at ``loc``.

    The panel swings around its vertical axis between -45 and 45 degrees and,
    when moving, drifts up and down inside the window.
    """

    type_name = "JMirror"

    def __init__(
        self,
        size: Sequence[float] | None = None,
        loc: Sequence[float] = (0.0, 0.0),
        *,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        window_size: Sequence[float] = (1024, 768),
        grabber: Grabber | None = None,
        event_id: int = 0,
    ) -> None:
        super().__init__(clock, event_id=event_id)
        self.rng = rng if rng is not None else random.Random()
        self.window = (float(window_size[0]), float(window_size[1]))
        self.grabber = grabber
        self.texture: Any = None
        self.capture_region: tuple[float, float, float, float] | None = None
        self.angle = 0
        self.move_backwards = False
        self.display_mirror = True
        self.draw_view = False
        self.draw_sides = False
        if size is not None:
            self.set_size(size)
            self.set_loc(loc)
        self.y_speed = self.rng.uniform(0, 1.0)
        width, height = self.window
        self.view = (
            VIEW_MARGIN + self.rng.uniform(0, width - self.size[0] - VIEW_MARGIN),
            VIEW_MARGIN + self.rng.uniform(0, height - self.size[1] - VIEW_MARGIN),
        )
        self.speed = self.rng.uniform(0.3, 0.5)
        if size is None:
            self.colors[0] = Color(255, 255, 255, 0)

    def move_triangle(self) -> None:
        """Swing one step; the angle is kept as whole degrees."""
        if self.move_backwards:
            self.angle = int(self.angle - self.y_speed)
        else:
            self.angle = int(self.angle + self.y_speed)
        if self.angle > SWING_LIMIT:
            self.move_backwards = True
        if self.angle < -SWING_LIMIT:
            self.move_backwards = False

    def move_up(self) -> None:
        """Drift vertically, reversing at the window edges."""
        if not self.move:
            return
        self.loc[1] += self.speed
        if self.loc[1] + self.size[1] > self.window[1] or self.loc[1] < 0:
            self.speed *= -1

    def respawn(self) -> None:
        """Move to the right edge of the window at a random height."""
        self.loc = [self.window[0], self.rng.uniform(0, self.window[1]), 0.0]

    def set_size(self, size: Sequence[float]) -> None:
        super().set_size(size)
        self.texture = None

    def specific_function(self) -> None:
        if self.clock.frame() > 1:
            self.capture_region = (self.view[0], self.view[1], self.size[0], self.size[1])
            if self.grabber is not None:
                self.texture = self.grabber(*self.capture_region)
        self.move_triangle()
        self.move_up()

    def _projected(self) -> tuple[float, float, float, float]:
        width = self.size[0] * math.cos(math.radians(self.angle))
        centre = self.loc[0] + self.size[0] / 2
        return centre - width / 2, self.loc[1], width, self.size[1]

    def display(self, canvas: Canvas) -> None:
        x, y, w, h = self._projected()
        canvas.draw_rect(x, y, w, h, self.colors[0])
        if self.draw_sides:
            _outline(canvas, x, y, w, h, SIDES_COLOR)
        if self.draw_view:
            self.display_view(canvas)

    def display_view(self, canvas: Canvas) -> None:
        """Outline the screen region that is being captured."""
        _outline(canvas, self.view[0], self.view[1], self.size[0], self.size[1], VIEW_COLOR)
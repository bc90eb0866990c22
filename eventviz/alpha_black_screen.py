"""A full-screen layer that leaves trails by painting translucent black."""

from __future__ import annotations

from eventviz.canvas import Canvas
from eventviz.clock import Clock
from eventviz.color import BLACK, CHANNEL_MAX, Color
from eventviz.event import Event


class AlphaBlackScreen(Event):
    """Paints a translucent rectangle (or gradient) over the previous frame.

    While active the canvas keeps its previous contents, so each frame fades
    earlier ones instead of wiping them.
    """

    type_name = "AlphaBlackScreen"

    def __init__(self, canvas: Canvas, state: bool = True, clock: Clock | None = None) -> None:
        super().__init__(clock)
        self.canvas = canvas
        self.gradient = False
        self.gradient_color = Color.gray(CHANNEL_MAX)
        self.gradient_alpha = CHANNEL_MAX
        self.do_alpha_blend = False
        self.colors[0] = BLACK
        self.set_activeness(state)
        self.set_alpha(CHANNEL_MAX)

    def set_activeness(self, state: bool) -> None:
        """Turn trail blending on or off; switching off wipes the canvas."""
        self.do_alpha_blend = bool(state)
        if state:
            self.canvas.set_background_auto(False)
            self.canvas.alpha_blending = True
        else:
            self.canvas.set_background_auto(True)
            self.canvas.clear(self.colors[0])

    def set_alpha(self, alpha: int) -> None:
        """Set the overlay alpha; full opacity (or inactive state) switches blending off."""
        if alpha >= CHANNEL_MAX or not self.do_alpha_blend:
            self.set_activeness(False)
        self.gradient_alpha = alpha
        self.colors[0] = self.colors[0].with_alpha(alpha)

    def display(self, canvas: Canvas) -> None:
        if not self.do_alpha_blend:
            return
        if self.gradient:
            edge = Color(0, 0, 0, self.gradient_alpha)
            center = self.gradient_color.with_alpha(self.gradient_alpha)
            canvas.draw_gradient(center, edge)
        else:
            canvas.draw_rect(0, 0, self.size[0], self.size[1], self.colors[0])
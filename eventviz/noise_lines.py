"""Lines scattered across the screen by a noise function."""

from __future__ import annotations

import random
from enum import IntEnum
from typing import Iterator, Sequence

from eventviz.canvas import Canvas
from eventviz.clock import Clock
from eventviz.color import Color
from eventviz.event import Event
from eventviz.noise import noise

ATTACK_MS = 10.0
RELEASE_MS = 800.0
MIN_ALPHA = 25
MAX_ALPHA = 255


class NoiseMode(IntEnum):
    HORIZONTAL = 0
    VERTICAL = 1


def _steps(start: float, stop: float, step: float) -> Iterator[float]:
    value = start
    while value < stop:
        yield value
        value += step


class NoiseLines(Event):
    """A burst of noise-placed lines that fades in and out over ``duration`` ms.

    A non-zero mode draws horizontal lines, mode zero draws vertical ones.
    """

    type_name = "Jnoise"

    def __init__(
        self,
        duration: float = 200,
        color: Color | None = None,
        mode: int = NoiseMode.HORIZONTAL,
        lines_amount: int = 100,
        *,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        window_size: Sequence[float] = (1024, 768),
        event_id: int = 0,
    ) -> None:
        super().__init__(clock, event_id=event_id)
        self.rng = rng if rng is not None else random.Random()
        self.mode = mode
        self.colors[0] = color if color is not None else Color.gray(255)
        self.lines_amount = int(lines_amount)
        self.line_width = 1
        self.offset = (0.0, 0.0)
        self.seed = 0.0
        self.set_end_time(duration)
        self.active = True
        self.generate_seed()
        self.colors[0] = self.colors[0].with_alpha(self.rng.uniform(MIN_ALPHA, MAX_ALPHA))
        self.add_env_adsr_alpha(ATTACK_MS, duration - ATTACK_MS - RELEASE_MS, RELEASE_MS)
        self.loc = [0.0, 0.0, 0.0]
        self.size = [float(window_size[0]), float(window_size[1]), 0.0]

    def generate_seed(self) -> None:
        """Seed the line placement with the elapsed time in seconds."""
        self.seed = self.clock.millis() / 1000.0

    def horizontal_noise(self, canvas: Canvas, count: int) -> None:
        """Draw about ``count / 2`` full-width lines at noise-chosen heights."""
        x, y = self.loc[0], self.loc[1]
        width, height = self.size[0], self.size[1]
        for i in _steps(self.seed, self.seed + count * 0.5, 1.0):
            level = y + noise(i * 2.0) * height
            canvas.draw_line(x, level, x + width, level, self.colors[0])

    def vertical_noise(self, canvas: Canvas, count: int) -> None:
        """Draw about ``count / 2`` full-height lines at noise-chosen positions."""
        dx, dy = self.offset
        x, y = self.loc[0] + dx, self.loc[1] + dy
        width, height = self.size[0], self.size[1]
        for i in _steps(self.seed, self.seed + count, 2.0):
            column = x + width * noise(i)
            canvas.draw_line(column, y, column, y + height, self.colors[0])

    def display(self, canvas: Canvas) -> None:
        if self.mode:
            self.horizontal_noise(canvas, self.lines_amount)
        else:
            self.vertical_noise(canvas, self.lines_amount)

    def custom_one(self) -> None:
        """Take the number of lines from the first custom argument."""
        self.lines_amount = int(self.custom_one_arguments[0])
"""A grid of noise-driven direction vectors drawn as lines, circles or texels."""

from __future__ import annotations

import math
import random
from enum import IntEnum
from typing import Callable, Sequence

from eventviz.canvas import Canvas
from eventviz.clock import Clock
from eventviz.color import CHANNEL_MAX, Color
from eventviz.event import Event
from eventviz.noise import noise

Pixel = tuple[float, ...]
Grid = list[list[Pixel]]
GridSource = Callable[[int, int], Sequence[Sequence[Sequence[float]]]]

DEFAULT_DENSITY = (40, 40)
SEED_RANGE = 1000.0


class VecFieldMode(IntEnum):
    PERLIN = 0
    TEST = 1
    LINES = 2
    CIRCLES = 3
    HIDE = 4
    VIDEO = 5
    UNDERLAYING = 6
    TEXTURE = 7


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _rgba(texel: Sequence[float]) -> tuple[float, float, float, float]:
    values = [float(v) for v in texel]
    if len(values) == 1:
        return values[0], values[0], values[0], 1.0
    if len(values) == 2:
        return values[0], values[0], values[0], values[1]
    if len(values) == 3:
        return values[0], values[1], values[2], 1.0
    return values[0], values[1], values[2], values[3]


def _unit(x: float, y: float) -> tuple[float, float]:
    length = math.hypot(x, y)
    if length == 0:
        return 0.0, 0.0
    return x / length, y / length


def _as_grid(source: Sequence[Sequence[Sequence[float]]]) -> Grid:
    return [[tuple(float(c) for c in texel) for texel in row] for row in source]


class VecField(Event):
    """A vector field sampled from 3D noise on a ``density`` grid.

    In PERLIN mode the field is recomputed each frame into the pixel grid; in
    UNDERLAYING mode the texture is taken from ``underlayer`` and in VIDEO
    mode from ``video``, both called with the grid width and height.
    """

    type_name = "JVecField"

    def __init__(
        self,
        clock: Clock | None = None,
        *,
        rng: random.Random | None = None,
        viewport: Sequence[float] = (1024, 768),
        underlayer: GridSource | None = None,
        video: GridSource | None = None,
        event_id: int = 0,
    ) -> None:
        super().__init__(clock, event_id=event_id)
        if viewport[0] <= 0 or viewport[1] <= 0:
            raise ValueError("viewport dimensions must be positive")
        self.rng = rng if rng is not None else random.Random()
        self.viewport = (float(viewport[0]), float(viewport[1]))
        self.size = [self.viewport[0], self.viewport[1], 0.0]
        self.underlayer = underlayer
        self.video = video
        self.shader_contrast = 1.0
        self.shader_brightness_add = 0.0
        self.line_length = 10.0
        self.line_width = 1.0
        self.t = 0.0
        self.complexity = 20.0
        self.phase = math.tau
        self.draw_colors = False
        self.normalize = True
        self.mode = VecFieldMode.UNDERLAYING
        self.draw_mode = VecFieldMode.TEXTURE
        self.density = DEFAULT_DENSITY
        self.channels = 4
        self.pixels: Grid = []
        self.texture: Grid = []
        self.size_multiplier = (1.0, 1.0)
        self.offset = (0.5, 0.5)
        self.set_density(self.density)
        self.colors[0] = self.colors[0].with_alpha(CHANNEL_MAX)
        self.seed = int(self.rng.uniform(0, SEED_RANGE))

    # -- field --------------------------------------------------------------

    def get_field(self, x: float, y: float) -> tuple[float, float]:
        """The field at grid position (x, y); both components lie in 0..1."""
        norm_x = _clamp01(x / self.viewport[0])
        norm_y = _clamp01(y / self.viewport[1])
        c, p = self.complexity, self.phase
        u = noise(self.t + p, norm_x * c + p, norm_y * c + p)
        v = noise(self.t - p, norm_x * c - p, norm_y * c + p)
        return u, v

    def set_density(self, density: Sequence[float], channels: int = 4) -> None:
        """Resize the pixel grid to ``density`` cells; the texture is cleared."""
        width, height = int(density[0]), int(density[1])
        if width <= 0 or height <= 0:
            raise ValueError("density must be positive in both directions")
        if not 1 <= channels <= 4:
            raise ValueError("channels must be between 1 and 4")
        self.channels = channels
        self.pixels = [[(0.0,) * channels for _ in range(width)] for _ in range(height)]
        self.texture = []
        self.density = (width, height)
        self.size_multiplier = (self.size[0] / width, self.size[1] / height)
        self.offset = (self.size_multiplier[0] * 0.5, self.size_multiplier[1] * 0.5)

    def _set_pixel(self, x: int, y: int, rgba: Sequence[float]) -> None:
        self.pixels[y][x] = tuple(float(c) for c in rgba[: self.channels])

    def set_size(self, size: Sequence[float]) -> None:
        super().set_size(size)
        self.set_density(self.density, self.channels)

    def set_pixels_to_test(self) -> None:
        """Fill a 2x2 grid with a fixed pattern of vectors."""
        self.set_density((2, 2), 4)
        for y, row in enumerate(self.pixels):
            for x in range(len(row)):
                self._set_pixel(x, y, (0.5, 0.5, 0.0, 1.0))
        self._set_pixel(0, 0, (1.0, 0.5, 0.0, 1.0))
        self._set_pixel(0, 1, (0.0, 0.5, 0.0, 1.0))

    def set_mode(self, mode: int) -> None:
        self.mode = mode

    # -- per frame ----------------------------------------------------------

    def specific_function(self) -> None:
        if self.mode == VecFieldMode.PERLIN:
            self.t = self.clock.frame() * self.speed + self.seed
            for y, row in enumerate(self.pixels):
                for x in range(len(row)):
                    u, v = self.get_field(x, y)
                    self._set_pixel(x, y, (u, v, 1.0, 1.0))
            self.texture = [list(row) for row in self.pixels]
        elif self.mode == VecFieldMode.VIDEO and self.video is not None:
            self.texture = _as_grid(self.video(*self.density))

    def _texture_dims(self) -> tuple[int, int]:
        if not self.texture:
            return 0, 0
        return len(self.texture[0]), len(self.texture)

    def _cell_start(self, i: int, j: int) -> tuple[float, float]:
        mx, my = self.size_multiplier
        return i * mx + self.offset[0], j * my + self.offset[1]

    def display(self, canvas: Canvas) -> None:
        color = self.colors[0]
        if self.mode == VecFieldMode.UNDERLAYING:
            if self.underlayer is not None:
                self.texture = _as_grid(self.underlayer(*self.density))
            canvas.draw_rect(0, 0, self.size[0], self.size[1], color)
            return

        width, height = self._texture_dims()
        if self.draw_mode == VecFieldMode.LINES:
            for i in range(width):
                for j in range(height):
                    sx, sy = self._cell_start(i, j)
                    u, v = self.get_field(i, j)
                    dx, dy = u * 2.0 - 1.0, v * 2.0 - 1.0
                    if self.normalize:
                        dx, dy = _unit(dx, dy)
                    canvas.draw_line(sx, sy, sx + dx * self.line_length,
                                     sy + dy * self.line_length, color)
        elif self.draw_mode == VecFieldMode.CIRCLES:
            for i in range(width):
                for j in range(height):
                    sx, sy = self._cell_start(i, j)
                    dx, dy = self.get_field(i, j)
                    if self.normalize:
                        dx, dy = _unit(dx, dy)
                    canvas.draw_circle(sx, sy, abs(dx * self.line_length), color)
        elif self.draw_mode == VecFieldMode.HIDE:
            canvas.draw_rect(0, 0, self.size[0], self.size[1], color)
        elif self.draw_mode == VecFieldMode.TEXTURE and width and height:
            cell_w, cell_h = self.size[0] / width, self.size[1] / height
            for j, row in enumerate(self.texture):
                for i, texel in enumerate(row):
                    r, g, b, a = _rgba(texel)
                    tint = Color(color.r * r, color.g * g, color.b * b, color.a * a)
                    canvas.draw_rect(i * cell_w, j * cell_h, cell_w, cell_h, tint)

    def custom_one(self) -> None:
        """Take the contrast applied to the underlayer from the first custom argument."""
        self.shader_contrast = self.custom_one_arguments[0]
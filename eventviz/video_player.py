"""Video playback drawn whole, cut into shuffled vertical bins, or as ASCII art."""

from __future__ import annotations

import logging
import random
from enum import IntEnum
from typing import Callable, Sequence

from eventviz.canvas import Canvas
from eventviz.clock import Clock
from eventviz.color import CHANNEL_MAX, Color
from eventviz.env import Env
from eventviz.event import Event

log = logging.getLogger(__name__)

Pixel = tuple[int, int, int]
Frame = list[list[Pixel]]
FrameSource = Callable[[], Sequence[Sequence[Sequence[int]]]]

DEFAULT_BIN_COUNT = 7
ASCII_STEP_X = 7
ASCII_STEP_Y = 9
ASCII_GAMMA = 2.5
ASCII_CHARACTERS = (
    "  ..,,,'''``--_:;^^**=+<>iv%&xclrs)/){}I?!][1taeo7zjLunT#@JCwfy325Fp6mqSghVd4E"
    "gXPGZbYkOA8U$KHDBWNMR0Q"
)


class VideoMode(IntEnum):
    NORMAL = 0
    BINS = 1
    ASCII = 2


def _as_frame(grid: Sequence[Sequence[Sequence[int]]]) -> Frame:
    return [[(int(p[0]), int(p[1]), int(p[2])) for p in row] for row in grid]


def _tint(pixel: Sequence[int], color: Color) -> Color:
    return Color(
        pixel[0] * color.r / CHANNEL_MAX,
        pixel[1] * color.g / CHANNEL_MAX,
        pixel[2] * color.b / CHANNEL_MAX,
        color.a,
    )


def _dilate(rows: Frame) -> Frame:
    """Replace every pixel by the channel-wise maximum of its 3x3 neighbourhood."""
    height = len(rows)
    result: Frame = []
    for y, row in enumerate(rows):
        new_row = []
        for x in range(len(row)):
            neighbours = [
                rows[ny][nx]
                for ny in range(max(0, y - 1), min(height, y + 2))
                for nx in range(max(0, x - 1), min(len(rows[ny]), x + 2))
            ]
            new_row.append(tuple(max(p[c] for p in neighbours) for c in range(3)))
        result.append(new_row)
    return result


def _draw_grid(canvas: Canvas, rows: Frame, x: float, y: float, width: float,
               height: float, color: Color) -> None:
    if not rows or not rows[0]:
        return
    cell_w = width / len(rows[0])
    cell_h = height / len(rows)
    for j, row in enumerate(rows):
        for i, pixel in enumerate(row):
            canvas.draw_rect(x + i * cell_w, y + j * cell_h, cell_w, cell_h, _tint(pixel, color))


class FramePlayer:
    """Plays a sequence of equally sized RGB frames, one frame per update."""

    def __init__(self, frames: Sequence[Sequence[Sequence[Sequence[int]]]], loop: bool = True) -> None:
        converted = [_as_frame(f) for f in frames]
        if not converted or not converted[0] or not converted[0][0]:
            raise ValueError("a video needs at least one non-empty frame")
        height, width = len(converted[0]), len(converted[0][0])
        if any(len(f) != height or any(len(r) != width for r in f) for f in converted):
            raise ValueError("all frames must have the same dimensions")
        self._frames = converted
        self.width = width
        self.height = height
        self.loop = loop
        self.playing = False
        self.done = False
        self.current_frame = 0

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    @property
    def loaded(self) -> bool:
        return bool(self._frames)

    @property
    def pixels(self) -> Frame:
        """The frame currently shown."""
        if not self._frames:
            return []
        return self._frames[self.current_frame]

    def play(self) -> None:
        self.playing = True
        self.done = False

    def close(self) -> None:
        """Stop playback and release the frames."""
        self.playing = False
        self._frames = []

    def update(self) -> None:
        """Advance one frame; at the end wrap around or mark the video done."""
        if not self.playing or not self._frames:
            return
        if self.current_frame + 1 >= self.frame_count:
            if self.loop:
                self.current_frame = 0
            else:
                self.done = True
        else:
            self.current_frame += 1

    def set_frame(self, frame: int) -> None:
        """Jump to ``frame``, clamped to the frames available."""
        self.current_frame = min(max(int(frame), 0), self.frame_count - 1)
        self.done = False

    def set_position(self, fraction: float) -> None:
        """Jump to a point given as a fraction 0..1 of the video."""
        if not 0.0 <= fraction <= 1.0:
            raise ValueError("position must lie between 0 and 1")
        self.set_frame(int(fraction * self.frame_count))


class Bin(Event):
    """A vertical strip of the video, taken from one place and shown at another."""

    type_name = "Bin"

    def __init__(self, frame_source: FrameSource, x_pos: int, x_pos_source: int,
                 bin_width: int, *, window_height: float = 768,
                 clock: Clock | None = None, event_id: int = 0) -> None:
        super().__init__(clock, event_id=event_id)
        if bin_width <= 0:
            raise ValueError("bin width must be positive")
        self.frame_source = frame_source
        self.x_pos = x_pos
        self.x_pos_source = x_pos_source
        self.bin_width = bin_width
        self.window_height = float(window_height)
        self.new_x_pos = x_pos
        self.switching = False
        self.mirror_h = False
        self.mirror_v = False
        self.brightness = CHANNEL_MAX
        self.dilate = False
        self.dilate_factor = 4
        self.gray = False
        self.visible = True
        self.colors[0] = Color.gray(CHANNEL_MAX)

    def do_fade(self, attack: float = 100, sustain: float = 0, release: float = 200) -> Env:
        """Fade out to black, hold, then fade back in to full alpha."""
        return self.add_env_alpha([self.colors[0].a, 0, 0, CHANNEL_MAX],
                                  [attack, sustain, release])

    def do_switch(self, x: int) -> None:
        """Fade out and, once dark, move to horizontal position ``x``."""
        self.switching = True
        self.do_fade(10, 100, 300)
        self.new_x_pos = x

    def specific_function(self) -> None:
        if self.switching and not self.env:
            self.add_env_alpha([0, 0, CHANNEL_MAX], [1, 200])
            self.x_pos = self.new_x_pos
            self.switching = False

    def region(self, frame: Sequence[Sequence[Sequence[int]]]) -> Frame:
        """The processed strip of ``frame`` this bin shows.

        Mirroring in both directions at once cancels out.
        """
        rows = [row[self.x_pos_source:self.x_pos_source + self.bin_width]
                for row in _as_frame(frame)]
        if self.mirror_h != self.mirror_v or not self.mirror_h:
            if self.mirror_h:
                rows = [row[::-1] for row in rows]
            if self.mirror_v:
                rows = rows[::-1]
        if self.dilate:
            rows = _dilate(rows)
        if self.gray:
            rows = [[(p[0], p[0], p[0]) for p in row] for row in rows]
        return rows

    def display(self, canvas: Canvas) -> None:
        if not self.visible:
            return
        frame = self.frame_source()
        if not frame:
            return
        _draw_grid(canvas, self.region(frame), self.x_pos, 0,
                   self.bin_width, self.window_height, self.colors[0])


class VideoPlayer(Event):
    """Shows a :class:`FramePlayer` and offers effects on its bins."""

    type_name = "VideoPlayer"

    def __init__(self, clock: Clock | None = None, *, rng: random.Random | None = None,
                 window_size: Sequence[float] = (1024, 768), event_id: int = 0) -> None:
        super().__init__(clock, event_id=event_id)
        self.rng = rng if rng is not None else random.Random()
        self.window = (float(window_size[0]), float(window_size[1]))
        self.colors[0] = Color.gray(CHANNEL_MAX)
        self.path = ""
        self.player: FramePlayer | None = None
        self.playing = False
        self.loop = False
        self.loop_points = [0, 60]
        self.bins: list[Bin] = []
        self.ascii_characters = ASCII_CHARACTERS
        self.ascii_text: list[str] = []
        self.mode: int = VideoMode.NORMAL
        self.set_mode(VideoMode.NORMAL)

    def _current_frame(self) -> Frame:
        return self.player.pixels if self.player is not None else []

    def load(self, player: FramePlayer) -> bool:
        """Start playing ``player`` from the beginning, looping."""
        player.loop = True
        self.player = player
        self.play(0)
        self.playing = True
        return True

    def _on_finished(self) -> None:
        if self.player is not None:
            self.player.close()

    def play(self, fraction: float = 0) -> None:
        if self.player is None:
            raise RuntimeError("no video loaded")
        self.playing = True
        self.player.set_position(fraction)
        self.player.play()

    def set_mode(self, mode: int) -> None:
        """Select the drawing mode; the bin mode also cuts the video into bins."""
        self.mode = mode
        if mode == VideoMode.BINS:
            self.set_bins(DEFAULT_BIN_COUNT)

    def set_bins(self, count: int) -> None:
        """Cut the window into ``count`` strips showing shuffled parts of the video."""
        if count <= 0:
            raise ValueError("bin count must be positive")
        bin_width = int(self.window[0]) // count
        if bin_width <= 0:
            raise ValueError("too many bins for the window width")
        sources = [i * bin_width for i in range(count)]
        self.rng.shuffle(sources)
        self.bins = [
            Bin(self._current_frame, bin_width * i, source, bin_width,
                window_height=self.window[1], clock=self.clock)
            for i, source in enumerate(sources)
        ]

    def random_bin(self) -> Bin:
        if not self.bins:
            raise IndexError("there are no bins")
        return self.rng.choice(self.bins)

    def choose_two_random_bins(self) -> tuple[int, int]:
        """Two different bin indices chosen at random."""
        if len(self.bins) < 2:
            raise ValueError("need at least two bins")
        first = self.rng.randrange(len(self.bins))
        second = self.rng.randrange(len(self.bins))
        while second == first:
            second = self.rng.randrange(len(self.bins))
        return first, second

    def switch_bins(self, pair: Sequence[int]) -> None:
        """Swap the positions of two bins, unless either is already busy."""
        a, b = self.bins[pair[0]], self.bins[pair[1]]
        if not a.env and not b.env:
            a.do_switch(b.x_pos)
            b.do_switch(a.x_pos)

    def switch_random_bins(self) -> None:
        self.switch_bins(self.choose_two_random_bins())

    def random_mirror(self, horizontal: bool, vertical: bool) -> None:
        """Toggle mirroring of one bin; asking for both directions changes nothing."""
        chosen = self.random_bin()
        if horizontal:
            chosen.mirror_h = not chosen.mirror_h
        if vertical:
            chosen.mirror_v = not chosen.mirror_v
        if horizontal and vertical:
            chosen.mirror_h = not chosen.mirror_h
            chosen.mirror_v = not chosen.mirror_v

    def all_random_brightness(self, low: float = 0, high: float = CHANNEL_MAX) -> None:
        for b in self.bins:
            b.set_alpha(self.rng.uniform(low, high))

    def random_fade(self) -> None:
        for b in self.bins:
            b.do_fade(self.rng.uniform(100, 1000), 0, self.rng.uniform(100, 1000))

    def switch_dilate(self, all_bins: bool = True) -> None:
        """Toggle dilation on every bin, or on one random bin."""
        factor = int(self.rng.uniform(1, 6))
        for b in (self.bins if all_bins else [self.random_bin()]):
            b.dilate = not b.dilate
            b.dilate_factor = factor

    def disable_vertical_mirror(self) -> None:
        for b in self.bins:
            b.mirror_v = False

    def switch_bin_state(self) -> None:
        chosen = self.random_bin()
        chosen.visible = not chosen.visible

    def switch_bin_color(self) -> None:
        chosen = self.random_bin()
        chosen.gray = not chosen.gray

    def switch_all_bin_color(self) -> None:
        for b in self.bins:
            b.gray = not b.gray

    def mirror_all_bins(self, horizontal: bool, vertical: bool) -> None:
        """Toggle both mirror flags of every bin, whatever the arguments."""
        for b in self.bins:
            b.mirror_h = not b.mirror_h
            b.mirror_v = not b.mirror_v

    def all_bins_visible(self) -> None:
        for b in self.bins:
            b.visible = True

    def disable_odd_bins(self) -> None:
        """Hide every other bin, starting with the first."""
        for b in self.bins[::2]:
            b.visible = False

    def fade_phase(self) -> None:
        """Fade all bins with attacks and releases staggered along the row."""
        count = len(self.bins)
        for i, b in enumerate(self.bins):
            ratio = i / count
            b.do_fade(1000 - 800 * ratio, 0, 200 + ratio * self.rng.uniform(1000, 2000))

    def set_loop_point(self, point: int = 0) -> None:
        """Store the current frame as loop start (0) or loop end (1)."""
        if self.player is None:
            raise RuntimeError("no video loaded")
        self.loop_points[point] = self.player.current_frame
        log.debug("loop point %s is %s", point, self.loop_points[point])

    def start_from_loop_point(self) -> None:
        if self.player is None:
            raise RuntimeError("no video loaded")
        self.player.set_frame(self.loop_points[0])

    def specific_function(self) -> None:
        if self.player is None or not self.player.loaded or not self.playing:
            return
        if self.loop and self.player.current_frame > self.loop_points[1]:
            self.player.set_frame(self.loop_points[0])
        for b in self.bins:
            b.update()
            b.specific_function()
        self.player.update()
        if self.player.done:
            self.active = True

    def ascii_lines(self) -> list[str]:
        """The current frame as text, one character per 7x9 pixel block."""
        frame = self._current_frame()
        chars = self.ascii_characters
        lines = []
        for row in frame[::ASCII_STEP_Y]:
            line = []
            for pixel in row[::ASCII_STEP_X]:
                lightness = (max(pixel) + min(pixel)) / 2
                index = int((lightness / CHANNEL_MAX) ** ASCII_GAMMA * len(chars))
                line.append(chars[min(index, len(chars) - 1)])
            lines.append("".join(line))
        return lines

    def _display_normal(self, canvas: Canvas) -> None:
        _draw_grid(canvas, self._current_frame(), 0, 0, self.size[0], self.size[1],
                   self.colors[0])

    def _display_cut(self, canvas: Canvas) -> None:
        for b in self.bins:
            b.display(canvas)

    def display(self, canvas: Canvas) -> None:
        if self.player is None or not self.player.loaded or not self.playing:
            return
        if self.mode == VideoMode.NORMAL:
            self._display_normal(canvas)
        elif self.mode == VideoMode.BINS:
            self._display_cut(canvas)
        elif self.mode == VideoMode.ASCII:
            self._display_normal(canvas)
            self.ascii_text = self.ascii_lines()

    def custom_two(self) -> None:
        """Jump to the position given by the first custom argument (0..1)."""
        if self.player is None:
            raise RuntimeError("no video loaded")
        self.player.set_position(self.custom_one_arguments[0])
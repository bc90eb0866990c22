"""A square recursively cut into polygons that can be extruded and exported."""

from __future__ import annotations

import logging
import math
import random
from pathlib import Path
from typing import Callable, Sequence

from eventviz.canvas import Canvas
from eventviz.clock import Clock
from eventviz.color import Color
from eventviz.env import Env
from eventviz.mesh import EXPORT_SCALE, Mesh, MeshEvent, Vec3, as_vec3

log = logging.getLogger(__name__)

HeightField = Callable[[float, float], float]

HEIGHT_RANGE = 200.0
NOISE_SCALE = 0.001
MAX_WALK = 50
RANDOM_END_SIDE_CHANCE = 8.0
TRIPLE_SPLIT_CHANCE = 5.0
Z_OFFSET_RANGE = 30.0


def _lattice(ix: int, iy: int) -> float:
    h = (ix * 374761393 + iy * 668265263) & 0xFFFFFFFF
    h = ((h ^ (h >> 13)) * 1274126177) & 0xFFFFFFFF
    return (h ^ (h >> 16)) / 0xFFFFFFFF


def _smooth_noise(x: float, y: float) -> float:
    """Smooth 2D value noise in 0..1."""
    x0, y0 = math.floor(x), math.floor(y)
    fx, fy = x - x0, y - y0
    sx = fx * fx * (3 - 2 * fx)
    sy = fy * fy * (3 - 2 * fy)
    top = _lattice(x0, y0) + sx * (_lattice(x0 + 1, y0) - _lattice(x0, y0))
    bottom = _lattice(x0, y0 + 1) + sx * (_lattice(x0 + 1, y0 + 1) - _lattice(x0, y0 + 1))
    return top + sy * (bottom - top)


def _random_index(rng: random.Random, count: int) -> int:
    return min(int(rng.uniform(0, count)), count - 1)


def _midpoint(a: Vec3, b: Vec3) -> Vec3:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2, (a[2] + b[2]) / 2)


class Poly(MeshEvent):
    """A closed polyline (last point equals the first) that can split in two."""

    def __init__(self, clock: Clock | None = None, points: Sequence[Sequence[float]] = (),
                 *, event_id: int = 0, export_root: str | Path = ".") -> None:
        super().__init__(clock, event_id=event_id, export_root=export_root)
        self.m = Mesh()
        self.points: list[Vec3] = [as_vec3(p) for p in points]
        self.block = False
        self.z = 100.0
        self.z_offset = 0.0
        self.spawn_pos: Vec3 = (0.0, 0.0, 0.0)
        self.end_point: Vec3 = (0.0, 0.0, 0.0)
        self.start_side = 0
        self.end_side = 0
        self.loc_adjustment_for_export: Vec3 = (0.0, 0.0, 0.0)
        self.has_env_flag = False
        self.draw_wireframe = False
        self.height_field: HeightField = _smooth_noise

    @property
    def has_env(self) -> bool:
        return self.has_env_flag

    @has_env.setter
    def has_env(self, value: bool) -> None:
        self.has_env_flag = bool(value)

    def _pairs(self):
        count = len(self.points)
        return ((self.points[i], self.points[(i + 1) % count]) for i in range(count))

    def area(self) -> float:
        """Signed area enclosed by the outline."""
        return 0.5 * sum(a[0] * b[1] - b[0] * a[1] for a, b in self._pairs())

    def centroid(self) -> tuple[float, float]:
        """Centre of mass of the enclosed area (mean of the points if it has none)."""
        if not self.points:
            raise ValueError("polygon has no points")
        area = self.area()
        if area == 0:
            count = len(self.points)
            return (sum(p[0] for p in self.points) / count,
                    sum(p[1] for p in self.points) / count)
        cx = cy = 0.0
        for a, b in self._pairs():
            cross = a[0] * b[1] - b[0] * a[1]
            cx += (a[0] + b[0]) * cross
            cy += (a[1] + b[1]) * cross
        return cx / (6 * area), cy / (6 * area)

    def _side_lengths(self) -> list[float]:
        return [math.dist(self.points[i], self.points[i + 1])
                for i in range(len(self.points) - 1)]

    def prepare(self, rng: random.Random) -> None:
        """Pick where the next cut starts (longest side) and ends."""
        lengths = self._side_lengths()
        if len(lengths) < 2:
            raise ValueError("a polygon needs at least two sides to be cut")
        longest = 0.0
        self.start_side = 0
        for i, length in enumerate(lengths):
            if length > longest:
                longest = length
                self.start_side = i
        log.debug("start side %s, id %s", self.start_side, self.id)
        self.spawn_pos = _midpoint(self.points[self.start_side], self.points[self.start_side + 1])

        if rng.uniform(0, RANDOM_END_SIDE_CHANCE) <= 1.0:
            self.end_side = _random_index(rng, len(lengths))
            while self.end_side == self.start_side:
                self.end_side = _random_index(rng, len(lengths))
        else:
            longest = 0.0
            second = 0
            for i, length in enumerate(lengths):
                if i != self.start_side and length > longest:
                    longest = length
                    second = i
            self.end_side = second
        log.debug("end side %s", self.end_side)
        self.end_point = _midpoint(self.points[self.end_side], self.points[self.end_side + 1])

    def split(self, polys: list[Poly]) -> bool:
        """Cut along the prepared line, keep one half and append the other to ``polys``."""
        if self.block:
            return False
        sides = len(self.points) - 1

        first = [self.spawn_pos, self.end_point]
        for step in range(MAX_WALK):
            index = self.end_side - step
            if index < 0:
                index = sides + index
            if index == self.start_side:
                first.append(self.spawn_pos)
                break
            if first[-1] != self.points[index]:
                first.append(self.points[index])
        else:
            log.error("cut of polygon %s did not close", self.id)

        second = [self.spawn_pos, self.end_point]
        for step in range(1, MAX_WALK):
            index = (self.end_side + step) % sides
            if second[-1] != self.points[index]:
                second.append(self.points[index])
            if index == self.start_side:
                second.append(self.spawn_pos)
                break
        else:
            log.error("cut of polygon %s did not close", self.id)

        self.points = first
        other = Poly(self.clock, second, event_id=len(polys), export_root=self.export_root)
        polys.append(other)
        return True

    def generate_mesh(self, frame: int) -> Mesh:
        """Extrude the outline to a height taken from the height field."""
        cx, cy = self.centroid()
        drift = frame * NOISE_SCALE
        self.z = (self.height_field(cx * NOISE_SCALE + drift, cy * NOISE_SCALE + drift)
                  * HEIGHT_RANGE + self.z_offset)
        z = self.z
        mesh = Mesh()
        centre = (cx, cy, z)
        for a, b in zip(self.points, self.points[1:]):
            a_top = (a[0], a[1], a[2] + z)
            b_top = (b[0], b[1], b[2] + z)
            mesh.vertices += [centre, a_top, b_top, a_top, b_top, a, a, b, b_top]
        self.m = mesh
        return mesh

    def prepare_for_save(self) -> None:
        """Centre the mesh on the export origin and scale it down."""
        self._ensure_directory()
        dx, dy, dz = self.loc_adjustment_for_export
        self.m = self.m.translated((-dx, -dy, -dz)).scaled(EXPORT_SCALE)

    def save(self) -> Path:
        return self.m.save(self.mesh_name())

    def _draw(self, canvas: Canvas, offset: Sequence[float]) -> None:
        dx, dy = offset[0], offset[1]
        color = self.colors[0]
        for a, b in zip(self.points, self.points[1:]):
            canvas.draw_line(a[0] + dx, a[1] + dy, b[0] + dx, b[1] + dy, color)
        if self.draw_wireframe:
            for a, b in self.m.edges():
                canvas.draw_line(a[0] + dx, a[1] + dy, b[0] + dx, b[1] + dy, color)

    def display(self, canvas: Canvas) -> None:
        self._draw(canvas, (0.0, 0.0))


class DivisionGrid(MeshEvent):
    """A padded square divided again and again along its longest sides."""

    def __init__(self, clock: Clock | None = None, *, rng: random.Random | None = None,
                 event_id: int = 0, export_root: str | Path = ".",
                 initial_splits: int = 32, blocked: int = 4, final_splits: int = 1024) -> None:
        super().__init__(clock, event_id=event_id, export_root=export_root)
        self.rng = rng if rng is not None else random.Random()
        self.size = [1080.0, 1080.0, 0.0]
        self.save_frames = False
        self.initial_splits = initial_splits
        self.blocked = blocked
        self.final_splits = final_splits
        self.polys: list[Poly] = []
        self.generate_random_rects()

    def generate_random_rects(self) -> None:
        """Start from one padded square and cut it up."""
        side = self.size[0]
        padding = int(side * 0.05)
        far = side - padding
        square = [(padding, padding), (far, padding), (far, far), (padding, far),
                  (padding, padding)]
        first = Poly(self.clock, square, event_id=self.id, export_root=self.export_root)
        self.polys = [first]

        for _ in range(self.initial_splits):
            self.sort_and_split()
        for _ in range(min(self.blocked, len(self.polys))):
            index = _random_index(self.rng, len(self.polys))
            while self.polys[index].block:
                index = _random_index(self.rng, len(self.polys))
            self.polys[index].block = True
        for _ in range(self.final_splits):
            self.sort_and_split()
        for poly in self.polys:
            poly.z_offset = self.rng.uniform(0, Z_OFFSET_RANGE)

    def _split_from(self, index: int) -> int:
        while True:
            if index >= len(self.polys):
                raise RuntimeError("no polygon left that can be split")
            poly = self.polys[index]
            poly.prepare(self.rng)
            if poly.split(self.polys):
                return index
            index += 1

    def sort_and_split(self) -> None:
        """Cut the largest polygon that may be cut, sometimes three times over."""
        self.polys.sort(key=lambda p: abs(p.area()), reverse=True)
        repeats = 3 if self.rng.uniform(0, TRIPLE_SPLIT_CHANCE) < 1.0 else 1
        index = 0
        for _ in range(repeats):
            index = self._split_from(index)

    def _attach_env(self, index: int, values: Sequence[float], times: Sequence[float]) -> Env:
        poly = self.polys[index]
        poly.has_env = True
        return poly.add_env_alpha(values, times)

    def add_env_random_poly(self, values: Sequence[float], times: Sequence[float]) -> Env:
        """Drive the alpha of a randomly chosen polygon."""
        if not self.polys:
            raise IndexError("grid has no polygons")
        return self._attach_env(_random_index(self.rng, len(self.polys)), values, times)

    def add_env_selected_poly(self, values: Sequence[float], times: Sequence[float]) -> Env:
        """Drive the alpha of the polygon chosen by the first custom argument (0..1)."""
        if not self.polys:
            raise IndexError("grid has no polygons")
        index = int(self.custom_one_arguments[0] * len(self.polys))
        if index >= len(self.polys) or index < 0:
            index = 0
        return self._attach_env(index, values, times)

    def set_color(self, color: Color, index: int = 0) -> None:
        for poly in self.polys:
            poly.colors[0] = color

    def _prepare_export(self) -> None:
        centre = (self.size[0] * 0.5, self.size[1] * 0.5, 0.0)
        for i, poly in enumerate(self.polys):
            poly.loc_adjustment_for_export = centre
            poly.id = self.id + i

    def specific_function(self) -> None:
        frame = self.clock.frame()
        for poly in self.polys:
            poly.update()
            poly.generate_mesh(frame)
        if self.save_frames and self.polys:
            rest = Mesh()
            for poly in self.polys:
                poly.prepare_for_save()
                if poly.has_env:
                    poly.save()
                else:
                    rest.append(poly.m)
            rest.save(self.polys[0].mesh_name())

    def display(self, canvas: Canvas) -> None:
        for poly in self.polys:
            poly._draw(canvas, self.loc)

    def custom_one(self) -> None:
        """Show the extruded meshes as wireframes."""
        for poly in self.polys:
            poly.draw_wireframe = True

    def custom_two(self) -> None:
        """Export every polygon once, now."""
        self._prepare_export()
        for poly in self.polys:
            poly.custom_two()

    def custom_three(self) -> None:
        """Switch per-frame export on or off from the first custom argument."""
        self.save_frames = bool(self.custom_one_arguments[0])
        if self.save_frames:
            self._prepare_export()
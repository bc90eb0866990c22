"""Triangle meshes and an event that shows one and exports it as PLY files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Sequence

from eventviz.canvas import Canvas
from eventviz.clock import Clock
from eventviz.event import Event

Vec3 = tuple[float, float, float]

EXPORT_SCALE = 0.01
FRAME_DIGITS = 7
ID_DIGITS = 4


def as_vec3(values: Sequence[float]) -> Vec3:
    """Pad or cut a sequence of numbers to exactly three floats."""
    items = [float(v) for v in values][:3]
    items += [0.0] * (3 - len(items))
    return items[0], items[1], items[2]


def _zero_pad(number: int, width: int) -> str:
    digits = str(number)
    if len(digits) <= width:
        return "0" * (width - len(digits)) + digits
    # Numbers longer than the field keep the full run of zeroes in front.
    return "0" * width + digits


def _format(value: float) -> str:
    return format(value, ".9g")


@dataclass
class Mesh:
    """Vertices grouped into triangles.

    Without explicit ``indices`` every three consecutive vertices form a
    triangle.
    """

    vertices: list[Vec3] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    @staticmethod
    def box(width: float, height: float, depth: float) -> Mesh:
        """A closed box centred on the origin, made of twelve triangles."""
        hw, hh, hd = width / 2, height / 2, depth / 2
        vertices = [(x, y, z) for z in (-hd, hd) for y in (-hh, hh) for x in (-hw, hw)]
        quads = [
            (0, 2, 3, 1),
            (4, 5, 7, 6),
            (0, 1, 5, 4),
            (2, 6, 7, 3),
            (0, 4, 6, 2),
            (1, 3, 7, 5),
        ]
        indices: list[int] = []
        for a, b, c, d in quads:
            indices += [a, b, c, a, c, d]
        return Mesh(vertices, indices)

    def add_vertex(self, vertex: Sequence[float]) -> None:
        self.vertices.append(as_vec3(vertex))

    def clear(self) -> None:
        self.vertices.clear()
        self.indices.clear()

    def face_indices(self) -> list[int]:
        """Vertex indices of all triangles, three per triangle."""
        if self.indices:
            return list(self.indices)
        return list(range(len(self.vertices) - len(self.vertices) % 3))

    def triangles(self) -> Iterator[tuple[Vec3, Vec3, Vec3]]:
        order = self.face_indices()
        for start in range(0, len(order) - 2, 3):
            a, b, c = order[start:start + 3]
            yield self.vertices[a], self.vertices[b], self.vertices[c]

    def edges(self) -> Iterator[tuple[Vec3, Vec3]]:
        """The three edges of every triangle."""
        for a, b, c in self.triangles():
            yield a, b
            yield b, c
            yield c, a

    def append(self, other: Mesh) -> None:
        """Add the triangles of ``other`` to this mesh."""
        offset = len(self.vertices)
        if self.indices or other.indices:
            self.indices = self.face_indices() + [i + offset for i in other.face_indices()]
        self.vertices.extend(other.vertices)

    def translated(self, offset: Sequence[float]) -> Mesh:
        dx, dy, dz = as_vec3(offset)
        return Mesh([(x + dx, y + dy, z + dz) for x, y, z in self.vertices], list(self.indices))

    def scaled(self, factor: float) -> Mesh:
        return Mesh([(x * factor, y * factor, z * factor) for x, y, z in self.vertices],
                    list(self.indices))

    def to_ply(self) -> str:
        """The mesh as an ASCII PLY document."""
        order = self.face_indices()
        faces = [order[i:i + 3] for i in range(0, len(order) - 2, 3)]
        lines = [
            "ply",
            "format ascii 1.0",
            f"element vertex {len(self.vertices)}",
            "property float x",
            "property float y",
            "property float z",
            f"element face {len(faces)}",
            "property list uchar int vertex_indices",
            "end_header",
        ]
        lines += [" ".join(_format(c) for c in vertex) for vertex in self.vertices]
        lines += ["3 " + " ".join(str(i) for i in face) for face in faces]
        return "\n".join(lines) + "\n"

    def save(self, path: str | Path) -> Path:
        """Write :meth:`to_ply` to ``path`` and return the path."""
        target = Path(path)
        target.write_text(self.to_ply())
        return target


class MeshEvent(Event):
    """An event that draws a mesh and can export it once per frame."""

    def __init__(self, clock: Clock | None = None, *, event_id: int = 0,
                 export_root: str | Path = ".") -> None:
        super().__init__(clock, event_id=event_id)
        self.export_root = str(export_root)
        self.save_every_frame = False
        self.size = [100.0, 100.0, 100.0]
        self.m = Mesh.box(*self.size)

    def directory_name_for_frame(self) -> str:
        """Export folder for the current frame, e.g. ``./meshExport/f0000042``."""
        frame = _zero_pad(self.clock.frame(), FRAME_DIGITS)
        return f"{self.export_root}/meshExport/f{frame}"

    def mesh_name(self) -> str:
        """Export file for this event in the current frame's folder."""
        return f"{self.directory_name_for_frame()}/m{_zero_pad(self.id, ID_DIGITS)}.ply"

    def _ensure_directory(self) -> None:
        Path(self.directory_name_for_frame()).mkdir(parents=True, exist_ok=True)

    def prepare_for_save(self) -> None:
        """Adjust the mesh before export; the plain mesh needs nothing."""

    def save(self) -> Path:
        """Export the mesh moved to its location and scaled down."""
        self._ensure_directory()
        exported = self.m.translated(self.loc).scaled(EXPORT_SCALE)
        return exported.save(self.mesh_name())

    def set_size(self, size: Sequence[float]) -> None:
        self.size = list(as_vec3(size))
        self.m = Mesh.box(*self.size)

    def set_loc(self, loc: Sequence[float]) -> None:
        self.loc = list(as_vec3(loc))

    def specific_function(self) -> None:
        if self.save_every_frame:
            self.save()

    def display(self, canvas: Canvas) -> None:
        dx, dy = self.loc[0], self.loc[1]
        for a, b in self.m.edges():
            canvas.draw_line(a[0] + dx, a[1] + dy, b[0] + dx, b[1] + dy, self.colors[0])

    def custom_one(self) -> None:
        """Start exporting the mesh every frame."""
        self.save_every_frame = True

    def custom_two(self) -> None:
        """Export the mesh once, now."""
        self.prepare_for_save()
        self.save()
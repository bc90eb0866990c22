"""A recording drawing surface: draw calls are kept as a list of commands."""

from __future__ import annotations

from dataclasses import dataclass, field

from eventviz.color import BLACK, Color


@dataclass(frozen=True)
class DrawCommand:
    """One recorded drawing operation."""

    kind: str
    params: tuple[float, ...]
    color: Color
    secondary: Color | None = None


@dataclass
class Canvas:
    """Collects draw calls in order, along with background and blending state."""

    width: int = 1024
    height: int = 768
    background: Color = BLACK
    background_auto: bool = True
    alpha_blending: bool = False
    commands: list[DrawCommand] = field(default_factory=list)

    def _record(self, kind: str, params: tuple[float, ...], color: Color,
                secondary: Color | None = None) -> DrawCommand:
        command = DrawCommand(kind, tuple(float(p) for p in params), color, secondary)
        self.commands.append(command)
        return command

    def draw_rect(self, x: float, y: float, w: float, h: float, color: Color) -> DrawCommand:
        """Record a filled rectangle."""
        return self._record("rect", (x, y, w, h), color)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: Color) -> DrawCommand:
        """Record a line segment."""
        return self._record("line", (x1, y1, x2, y2), color)

    def draw_circle(self, x: float, y: float, radius: float, color: Color) -> DrawCommand:
        """Record a circle; the radius may not be negative."""
        if radius < 0:
            raise ValueError("radius must not be negative")
        return self._record("circle", (x, y, radius), color)

    def draw_gradient(self, center: Color, edge: Color) -> DrawCommand:
        """Record a full-surface circular gradient from ``center`` to ``edge``."""
        return self._record("gradient", (), center, edge)

    def set_background_auto(self, enabled: bool) -> None:
        """Choose whether the surface is wiped before every frame."""
        self.background_auto = bool(enabled)

    def clear(self, color: Color) -> None:
        """Fill the whole surface with ``color``, discarding earlier drawing."""
        self.background = color
        self.commands.clear()
"""RGBA colours with 8-bit channels that saturate instead of wrapping."""

from __future__ import annotations

from dataclasses import dataclass

CHANNEL_MAX = 255


def _clamp_channel(value: float) -> int:
    return int(min(max(value, 0), CHANNEL_MAX))


@dataclass(frozen=True)
class Color:
    """An immutable RGBA colour; every channel is kept within 0..255."""

    r: int = CHANNEL_MAX
    g: int = CHANNEL_MAX
    b: int = CHANNEL_MAX
    a: int = CHANNEL_MAX

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            object.__setattr__(self, name, _clamp_channel(getattr(self, name)))

    @classmethod
    def gray(cls, level: float, alpha: float = CHANNEL_MAX) -> Color:
        """A grey colour with all three colour channels set to ``level``."""
        return cls(level, level, level, alpha)

    def with_alpha(self, alpha: float) -> Color:
        """Return a copy with the alpha channel replaced (and clamped)."""
        return Color(self.r, self.g, self.b, alpha)

    def __add__(self, other: Color) -> Color:
        """Add the colour channels with saturation; alpha is kept from ``self``."""
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b, self.a)


BLACK = Color(0, 0, 0)
WHITE = Color(CHANNEL_MAX, CHANNEL_MAX, CHANNEL_MAX)
RED = Color(CHANNEL_MAX, 0, 0)
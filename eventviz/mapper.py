"""Routing of incoming control values onto named event parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from eventviz.env import Target, TargetKind


class LinkTap:
    """A named parameter that accepts 0..1 values scaled into ``value_range``."""

    def __init__(
        self,
        name: str,
        target: Target,
        value_range: tuple[float, float] | None = None,
        weight: float = 1.0,
        parent_id: int = 0,
    ) -> None:
        if value_range is None:
            value_range = (0.0, 255.0) if target.kind is TargetKind.COLOR_ALPHA else (0.0, 1.0)
        self.name = name
        self.target = target
        self.value_range = (float(value_range[0]), float(value_range[1]))
        self.weight = weight
        self.parent_id = parent_id

    def set_value(self, value: float) -> None:
        """Scale a 0..1 ``value`` into the range, weight it and write it."""
        low, high = self.value_range
        scaled = low + value * (high - low)
        self.target.write(scaled * self.weight)


class MapperMode(Enum):
    LINEAR = 0
    EXPONENTIAL = 1


@dataclass
class Mapper:
    """Forwards values that arrive at ``listen_id`` to a link tap."""

    listen_id: str = "/0"
    link: LinkTap | None = None
    audio_param: str = ""
    parent: Any = None
    mode: MapperMode = MapperMode.LINEAR

    def process(self, address: str, value: float) -> bool:
        """Apply ``value`` if ``address`` matches; return whether it did."""
        if self.mode is MapperMode.EXPONENTIAL:
            value = value * value
        if address != self.listen_id:
            return False
        if self.link is None:
            raise ValueError(f"mapper listening on {self.listen_id!r} has no link")
        self.link.set_value(value)
        return True
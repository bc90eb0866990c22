"""Breakpoint envelopes that drive a value over time."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Sequence

from eventviz.clock import Clock

log = logging.getLogger(__name__)

SAVE_OVERHEAD_FRAMES = 30

Easing = Callable[[float], float]


class TargetKind(Enum):
    """How a value is stored when it is written to a target."""

    FLOAT = "float"
    INT = "int"
    COLOR_ALPHA = "color_alpha"


@dataclass
class Target:
    """A writable slot: an attribute (``key`` is a str) or an item (any other key)."""

    kind: TargetKind
    owner: Any
    key: Any

    @classmethod
    def attribute(cls, owner: Any, name: str, kind: TargetKind = TargetKind.FLOAT) -> Target:
        return cls(kind, owner, name)

    @classmethod
    def item(cls, owner: Any, key: Any, kind: TargetKind = TargetKind.FLOAT) -> Target:
        return cls(kind, owner, key)

    def read(self) -> Any:
        if isinstance(self.key, str):
            return getattr(self.owner, self.key)
        return self.owner[self.key]

    def write(self, value: float) -> None:
        """Store ``value`` converted to the target's kind."""
        if self.kind is TargetKind.FLOAT:
            new = float(value)
        elif self.kind is TargetKind.INT:
            new = int(value)
        else:
            new = self.read().with_alpha(value)
        if isinstance(self.key, str):
            setattr(self.owner, self.key, new)
        else:
            self.owner[self.key] = new


def _format_number(value: float) -> str:
    return f"{value:g}"


class Env:
    """A multi-segment linear (or eased) envelope.

    ``levels`` holds one more entry than ``times``; ``times`` are segment
    lengths in milliseconds. Each call to :meth:`process` computes the current
    value and writes it to the target, if any.
    """

    def __init__(
        self,
        levels: Sequence[float] = (),
        times: Sequence[float] = (),
        target: Target | None = None,
        *,
        curve: int = 0,
        easing: Easing | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.clock = clock if clock is not None else Clock()
        self.target = target
        self.curve = curve
        self.easing = easing
        self.id = 0
        self.parent_id = 0
        self.value = 0.0
        self.loop = False
        self.levels: list[float] = []
        self.times: list[float] = []
        self.times_index = 0
        self.total_run_time = 0
        self.start_time = self.clock.millis()
        self.active = False

        self.save = False
        self.file_name = ".txt"
        self.saved_values: list[float] = []
        self.save_capacity = 0

        if levels or times:
            self.trigger(levels, times)

    @property
    def rising(self) -> bool:
        """True when the first segment goes up."""
        return len(self.levels) > 1 and self.levels[0] - self.levels[1] < 0

    def trigger(self, levels: Sequence[float], times: Sequence[float]) -> None:
        """Restart the envelope with new breakpoints."""
        levels = [float(v) for v in levels]
        times = [float(t) for t in times]
        if not times:
            raise ValueError("an envelope needs at least one segment time")
        if len(levels) < len(times) + 1:
            raise ValueError("an envelope needs one more level than segment times")
        self.levels = levels
        self.times = times
        self.start_time = self.clock.millis()
        self.total_run_time = int(times[0])
        self.active = True
        self.times_index = 0

    def set_loop(self, loop: bool = True) -> None:
        self.loop = loop

    def _write(self, value: float) -> None:
        if self.target is not None:
            self.target.write(value)

    def process(self) -> bool:
        """Advance the envelope; return False once it has finished."""
        if not self.active:
            return True
        now = self.clock.millis()
        if now > self.start_time + self.total_run_time:
            self.times_index += 1
            if self.times_index >= len(self.times):
                self.value = self.levels[self.times_index]
                self._write(self.value)
                if not self.loop:
                    self.active = False
                    self.value = self.levels[-1]
                    self._write(self.value)
                    if self.save:
                        self.save_value(self.value)
                    return False
                self.times_index = 0
                self.start_time = now
                self.total_run_time = int(self.times[0])
                return True
            self.total_run_time = int(self.total_run_time + self.times[self.times_index])

        index = self.times_index
        segment = self.times[index]
        if segment == 0:
            ratio = 1.0
        else:
            ratio = (now - self.start_time - self.total_run_time + segment) / segment
        start_level = self.levels[index]
        delta = self.levels[index + 1] - start_level
        if self.easing is not None:
            output = start_level + self.easing(min(max(ratio, 0.0), 1.0)) * delta
        else:
            output = start_level + ratio * delta

        self._write(output)
        self.value = output
        if self.save:
            self.save_value(output)
        return True

    def enable_save(self, frame_rate: float = 60.0) -> None:
        """Record every computed value, sized for one pass at ``frame_rate``."""
        self.save = True
        total_seconds = sum(self.times) / 1000.0
        self.save_capacity = int(total_seconds * frame_rate) + SAVE_OVERHEAD_FRAMES
        self.saved_values = []
        log.debug("recording envelope values to %s", self.file_name)

    def save_value(self, value: float) -> bool:
        """Record one value; return False when the buffer is already full."""
        if len(self.saved_values) < self.save_capacity:
            self.saved_values.append(float(value))
            return True
        log.info("envelope buffer full, not recording anymore")
        return False

    def export_text(self) -> str:
        """The recorded values as ``parent_id,v0,v1,...``."""
        return f"{self.parent_id}," + ",".join(_format_number(v) for v in self.saved_values)

    def write_export(self, directory: str | Path = "envExport") -> Path:
        """Write :meth:`export_text` into ``directory`` and return the file path."""
        if not self.save:
            raise RuntimeError("saving was not enabled for this envelope")
        folder = Path(directory)
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / self.file_name
        if path.exists():
            stem = self.file_name.split(".txt")[0]
            path = folder / f"{stem}_{self.parent_id}.txt"
        path.write_text(self.export_text())
        return path
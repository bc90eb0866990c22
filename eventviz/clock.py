"""Time sources: elapsed milliseconds and frame numbers."""

from __future__ import annotations

import time


class Clock:
    """Wall-clock time measured from the moment the clock was created."""

    def __init__(self, frame_rate: float = 60.0) -> None:
        if frame_rate <= 0:
            raise ValueError("frame_rate must be positive")
        self.frame_rate = frame_rate
        self._origin = time.monotonic()

    def millis(self) -> int:
        """Elapsed whole milliseconds since creation."""
        return int((time.monotonic() - self._origin) * 1000)

    def frame(self) -> int:
        """Frame number implied by the elapsed time and the frame rate."""
        return int(self.millis() / 1000 * self.frame_rate)


class ManualClock(Clock):
    """A clock that only moves when told to; useful for deterministic runs."""

    def __init__(self, start_ms: int = 0, start_frame: int = 0, frame_rate: float = 60.0) -> None:
        super().__init__(frame_rate)
        if start_ms < 0 or start_frame < 0:
            raise ValueError("start values must not be negative")
        self._millis = int(start_ms)
        self._frame = int(start_frame)

    def millis(self) -> int:
        return self._millis

    def frame(self) -> int:
        return self._frame

    def advance(self, ms: int) -> int:
        """Move time forward by ``ms`` milliseconds and return the new time."""
        if ms < 0:
            raise ValueError("time cannot move backwards")
        self._millis += int(ms)
        return self._millis

    def step_frame(self, count: int = 1) -> int:
        """Move the frame counter forward and return the new frame number."""
        if count < 0:
            raise ValueError("frame counter cannot move backwards")
        self._frame += int(count)
        return self._frame
"""Visual events: timed objects with colours, envelopes and parameter taps."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Sequence

from eventviz.canvas import Canvas
from eventviz.clock import Clock
from eventviz.color import Color
from eventviz.env import Env, Target, TargetKind
from eventviz.mapper import LinkTap, Mapper

log = logging.getLogger(__name__)

DEFAULT_END_TIME = 1000
CUSTOM_ARGUMENT_COUNT = 5


def _vec3(values: Sequence[float]) -> list[float]:
    items = [float(v) for v in values][:3]
    return items + [0.0] * (3 - len(items))


class Event:
    """Something drawn on screen for a while, shaped by envelopes."""

    type_name = "Event"

    def __init__(self, clock: Clock | None = None, *, event_id: int = 0) -> None:
        self.clock = clock if clock is not None else Clock()
        self.id = event_id
        self.active = False
        self.finished = False
        self.start_time = self.clock.millis()
        self.end_time = DEFAULT_END_TIME

        self.colors: list[Color] = [Color.gray(255, 0)]
        self.loc = [0.0, 0.0, 0.0]
        self.size = [0.0, 0.0, 0.0]
        self.direction = [0.0, 0.0, 0.0]
        self.rotation = [0.0, 0.0, 0.0]
        self.speed = 1.0
        self.mode = 0
        self.move = False
        self.evolve = False
        self.fill = True
        self.check_borders_h = True
        self.check_borders_v = True

        self.env: list[Env] = []
        self.link_taps: list[LinkTap] = []
        self.mappers: list[Mapper] = []
        self.mappers_parent: list[Mapper | None] | None = None
        self.parent_container: list[Any] | None = None

        self.custom_one_arguments = [0.0] * CUSTOM_ARGUMENT_COUNT
        self.custom_two_arguments = [0.0] * CUSTOM_ARGUMENT_COUNT

    # -- lifetime -----------------------------------------------------------

    def _on_finished(self) -> None:
        """Release resources when the event ends; subclasses extend this."""

    def _finish(self) -> None:
        log.debug("event (id: %s) has passed", self.id)
        self._on_finished()
        self.finished = True
        if self.parent_container is not None:
            for i, item in enumerate(self.parent_container):
                if item is self:
                    self.parent_container[i] = None
        if self.mappers_parent is not None:
            for mapper in self.mappers:
                for i, item in enumerate(self.mappers_parent):
                    if item is mapper:
                        self.mappers_parent[i] = None

    def update(self) -> bool:
        """Run envelopes and check the lifetime; return False once finished."""
        if self.finished:
            return False
        if self.active and self.clock.millis() > self.end_time:
            self._finish()
            return False
        self.env = [e for e in self.env if e.process()]
        return True

    def specific_function(self) -> None:
        """Per-frame behaviour of a particular kind of event."""

    def display(self, canvas: Canvas) -> None:
        """Draw the event; the plain event draws nothing."""

    def set_end_time(self, duration: float) -> None:
        """End the event ``duration`` milliseconds from now."""
        self.start_time = self.clock.millis()
        self.end_time = self.start_time + duration

    def delete_with_fade(self, release_time: float) -> None:
        """Fade the alpha to zero and end the event when the fade is done."""
        self.add_env_alpha([self.colors[0].a, 0], [release_time])
        self.end_time = self.clock.millis() + release_time
        self.active = True

    # -- envelopes ----------------------------------------------------------

    def _alpha_target(self) -> Target:
        return Target.item(self.colors, 0, TargetKind.COLOR_ALPHA)

    def set_envelope(self, attack: float, sustain: float, release: float,
                     target: Target | None = None,
                     value_range: tuple[float, float] = (0.0, 255.0)) -> Env:
        """Drive ``target`` (default: alpha) through an attack-sustain-release shape
        and make the event's lifetime match it."""
        low, high = value_range
        env = self.add_env([low, high, high, low], [attack, sustain, release],
                           target if target is not None else self._alpha_target())
        self.set_end_time(attack + sustain + release)
        return env

    def _attach(self, env: Env) -> Env:
        self.env.append(env)
        env.id = len(self.env)
        env.parent_id = self.id
        return env

    def add_env(self, levels: Sequence[float], times: Sequence[float],
                target: Target | None = None, curve: int = 0) -> Env:
        """Create an envelope writing to ``target`` and attach it."""
        return self._attach(Env(levels, times, target, curve=curve, clock=self.clock))

    def add_env_alpha(self, levels: Sequence[float], times: Sequence[float], curve: int = 0) -> Env:
        """Attach an envelope driving the alpha of the first colour."""
        return self.add_env(levels, times, self._alpha_target(), curve)

    def add_env_adsr_alpha(self, attack: float, sustain: float, release: float) -> Env:
        """Fade alpha in to its current value, hold it, then fade it out."""
        alpha = self.colors[0].a
        return self.add_env_alpha([0, alpha, alpha, 0], [attack, sustain, release])

    @property
    def last_env(self) -> Env | None:
        return self.env[-1] if self.env else None

    def loop_last_env(self) -> None:
        """Make the most recently added envelope repeat."""
        if not self.env:
            raise IndexError("event has no envelopes")
        self.env[-1].set_loop(True)

    def has_env(self, env_id: int) -> bool:
        return any(e.id == env_id for e in self.env)

    def clear_env(self) -> None:
        self.env.clear()

    # -- geometry -----------------------------------------------------------

    def check_borders(self, width: float, height: float) -> None:
        """Keep the event inside the viewport, bouncing its direction."""
        if self.check_borders_h:
            if self.loc[0] < 0:
                self.loc[0] = 0.0
                self.direction[0] *= -1
            if self.loc[0] + self.size[0] > width:
                self.loc[0] = width - self.size[0]
                self.direction[0] *= -1
        if self.check_borders_v:
            if self.loc[1] + self.size[1] > height:
                self.loc[1] = height - self.size[1]
                self.direction[1] *= -1
            if self.loc[1] < 0:
                self.loc[1] = 0.0
                self.direction[1] *= -1

    # -- parameter taps -----------------------------------------------------

    def make_link_tap(self, name: str, target: Target,
                      value_range: tuple[float, float] | None = None) -> LinkTap:
        tap = LinkTap(name, target, value_range, parent_id=self.id)
        self.link_taps.append(tap)
        return tap

    def get_link_tap(self, name: str) -> LinkTap | None:
        """The first tap with this name, or None."""
        return next((tap for tap in self.link_taps if tap.name == name), None)

    # -- setters used by the message interface ------------------------------

    def set_color(self, color: Color, index: int = 0) -> None:
        self.colors[index] = color

    def set_alpha(self, alpha: float) -> None:
        self.colors[0] = self.colors[0].with_alpha(alpha)

    def set_loc(self, loc: Sequence[float]) -> None:
        self.loc = _vec3(loc)

    def set_size(self, size: Sequence[float]) -> None:
        self.size = _vec3(size)

    def set_speed(self, speed: float) -> None:
        self.speed = speed

    def set_mode(self, mode: int) -> None:
        self.mode = mode

    # Remote-callable actions; a kind of event overrides the ones it supports.
    def custom_one(self) -> None:
        """First remote-callable action; none for a plain event."""

    def custom_two(self) -> None:
        """Second remote-callable action; none for a plain event."""

    def custom_three(self) -> None:
        """Third remote-callable action; none for a plain event."""

    def custom_four(self) -> None:
        """Fourth remote-callable action; none for a plain event."""

    def custom_five(self) -> None:
        """Fifth remote-callable action; none for a plain event."""


class EventList:
    """An ordered collection of events that are updated and drawn together.

    Updating and drawing run from the last event to the first, so earlier
    events are drawn on top.
    """

    def __init__(self) -> None:
        self._events: list[Event] = []

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def add(self, event: Event) -> None:
        self._events.append(event)

    def add_first(self, event: Event) -> None:
        self._events.insert(0, event)

    def get(self, index: int) -> Event:
        """The event at ``index``; indices past the end give the last event."""
        if not self._events:
            raise IndexError("event list is empty")
        if index < 0:
            raise IndexError("index must not be negative")
        return self._events[min(index, len(self._events) - 1)]

    def last(self) -> Event:
        if not self._events:
            raise IndexError("event list is empty")
        return self._events[-1]

    def remove(self, event: Event) -> None:
        self._events.remove(event)

    def update_all(self) -> None:
        """Run every event's behaviour and update, dropping finished events."""
        for event in reversed(list(self._events)):
            event.specific_function()
            if not event.update():
                self._events.remove(event)

    def display_all(self, canvas: Canvas) -> None:
        for event in reversed(self._events):
            event.display(canvas)
import pytest

from eventviz.canvas import Canvas
from eventviz.clock import ManualClock
from eventviz.color import RED, Color
from eventviz.env import Target, TargetKind
from eventviz.event import Event, EventList
from eventviz.mapper import Mapper


class _Marker(Event):
    def __init__(self, clock, event_id):
        super().__init__(clock, event_id=event_id)
        self.calls = 0

    def specific_function(self):
        self.calls += 1

    def display(self, canvas):
        canvas.draw_rect(self.id, 0, 1, 1, self.colors[0])


@pytest.fixture
def clock():
    return ManualClock()


def test_defaults(clock):
    ev = Event(clock)
    assert ev.colors == [Color(255, 255, 255, 0)]
    assert ev.end_time == 1000
    assert ev.active is False


def test_inactive_event_outlives_end_time(clock):
    ev = Event(clock)
    clock.advance(5000)
    assert ev.update() is True
    assert ev.finished is False


def test_active_event_finishes_after_end_time(clock):
    ev = Event(clock)
    ev.set_end_time(500)
    ev.active = True
    clock.advance(500)
    assert ev.update() is True
    clock.advance(1)
    assert ev.update() is False
    assert ev.finished is True


def test_finishing_clears_parent_references(clock):
    ev = Event(clock)
    other = Event(clock)
    mapper = Mapper()
    ev.mappers.append(mapper)
    ev.mappers_parent = [mapper]
    ev.parent_container = [other, ev]
    ev.set_end_time(10)
    ev.active = True
    clock.advance(11)
    ev.update()
    assert ev.parent_container == [other, None]
    assert ev.mappers_parent == [None]


def test_set_envelope_drives_alpha_and_is_removed(clock):
    ev = Event(clock)
    ev.set_envelope(100, 100, 100)
    assert ev.end_time == 300
    clock.advance(100)
    ev.update()
    assert ev.colors[0].a == 255
    clock.advance(201)
    for _ in range(5):
        ev.update()
    assert ev.env == []
    assert ev.colors[0].a == 0


def test_set_envelope_on_float_target(clock):
    ev = Event(clock)
    ev.set_envelope(10, 10, 10, Target.item(ev.size, 0), (2.0, 8.0))
    clock.advance(10)
    ev.update()
    assert ev.size[0] == pytest.approx(8.0)


def test_add_env_numbers_envelopes(clock):
    ev = Event(clock, event_id=7)
    first = ev.add_env_alpha([0, 255], [100])
    second = ev.add_env([0, 1], [100], Target.item(ev.loc, 0))
    assert (first.id, second.id) == (1, 2)
    assert first.parent_id == 7
    assert ev.has_env(2) and not ev.has_env(3)
    assert ev.last_env is second
    ev.clear_env()
    assert ev.last_env is None


def test_loop_last_env(clock):
    ev = Event(clock)
    with pytest.raises(IndexError):
        ev.loop_last_env()
    env = ev.add_env_alpha([0, 255], [100])
    ev.loop_last_env()
    assert env.loop is True


def test_adsr_alpha_uses_current_alpha(clock):
    ev = Event(clock)
    ev.set_alpha(120)
    env = ev.add_env_adsr_alpha(10, 20, 30)
    assert env.levels == [0.0, 120.0, 120.0, 0.0]
    assert env.times == [10.0, 20.0, 30.0]


def test_delete_with_fade(clock):
    ev = Event(clock)
    ev.set_alpha(200)
    ev.delete_with_fade(100)
    assert ev.active is True
    assert ev.end_time == 100
    assert ev.env[0].levels == [200.0, 0.0]
    clock.advance(101)
    assert ev.update() is False


def test_check_borders_bounces(clock):
    ev = Event(clock)
    ev.set_size([10, 10])
    ev.loc = [-5.0, 95.0, 0.0]
    ev.direction = [1.0, 1.0, 0.0]
    ev.check_borders(100, 100)
    assert ev.loc[:2] == [0.0, 90.0]
    assert ev.direction[:2] == [-1.0, -1.0]


def test_check_borders_disabled(clock):
    ev = Event(clock)
    ev.check_borders_h = False
    ev.check_borders_v = False
    ev.loc = [-5.0, -5.0, 0.0]
    ev.check_borders(100, 100)
    assert ev.loc == [-5.0, -5.0, 0.0]


def test_link_tap_writes_alpha(clock):
    ev = Event(clock)
    ev.make_link_tap("alpha", Target.item(ev.colors, 0, TargetKind.COLOR_ALPHA))
    tap = ev.get_link_tap("alpha")
    tap.set_value(1.0)
    assert ev.colors[0].a == 255
    assert ev.get_link_tap("missing") is None


def test_setters(clock):
    ev = Event(clock)
    ev.set_color(RED)
    ev.set_loc([1, 2])
    ev.set_speed(3.5)
    ev.set_mode(2)
    assert ev.colors[0] == RED
    assert ev.loc == [1.0, 2.0, 0.0]
    assert (ev.speed, ev.mode) == (3.5, 2)
    with pytest.raises(IndexError):
        ev.set_color(RED, 3)


def test_event_list_get_and_last(clock):
    events = EventList()
    with pytest.raises(IndexError):
        events.last()
    a, b = Event(clock, event_id=1), Event(clock, event_id=2)
    events.add(a)
    events.add(b)
    assert events.get(0) is a
    assert events.get(10) is b
    assert events.last() is b
    c = Event(clock, event_id=3)
    events.add_first(c)
    assert list(events) == [c, a, b]
    events.remove(a)
    assert list(events) == [c, b]


def test_event_list_update_removes_finished(clock):
    events = EventList()
    keep = _Marker(clock, 1)
    done = _Marker(clock, 2)
    done.set_end_time(10)
    done.active = True
    events.add(keep)
    events.add(done)
    clock.advance(11)
    events.update_all()
    assert list(events) == [keep]
    assert keep.calls == 1 and done.calls == 1


def test_event_list_displays_last_first(clock):
    events = EventList()
    events.add(_Marker(clock, 1))
    events.add(_Marker(clock, 2))
    canvas = Canvas()
    events.display_all(canvas)
    assert [c.params[0] for c in canvas.commands] == [2.0, 1.0]
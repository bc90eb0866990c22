import time

import pytest

from eventviz.clock import Clock, ManualClock


def test_manual_clock_starts_where_told():
    clock = ManualClock(start_ms=250, start_frame=3)
    assert clock.millis() == 250
    assert clock.frame() == 3


def test_manual_clock_advance_accumulates():
    clock = ManualClock()
    clock.advance(100)
    assert clock.advance(40) == 140
    assert clock.millis() == 140


def test_manual_clock_step_frame_defaults_to_one():
    clock = ManualClock()
    assert clock.step_frame() == 1
    assert clock.step_frame(5) == 6


def test_manual_clock_refuses_to_go_back():
    clock = ManualClock()
    with pytest.raises(ValueError):
        clock.advance(-1)
    with pytest.raises(ValueError):
        clock.step_frame(-1)


def test_real_clock_moves_forward():
    clock = Clock(frame_rate=1000)
    first = clock.millis()
    time.sleep(0.05)
    assert clock.millis() >= first + 50
    assert clock.frame() >= 50


def test_real_clock_rejects_bad_frame_rate():
    with pytest.raises(ValueError):
        Clock(frame_rate=0)
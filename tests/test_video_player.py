import random

import pytest

from eventviz.canvas import Canvas
from eventviz.clock import ManualClock
from eventviz.video_player import (
    ASCII_CHARACTERS,
    Bin,
    FramePlayer,
    VideoMode,
    VideoPlayer,
)


def solid(width, height, value):
    return [[(value, value, value) for _ in range(width)] for _ in range(height)]


def frames(count, width=2, height=2):
    return [solid(width, height, i * 10) for i in range(count)]


def make_player(bins=0, count=4):
    clock = ManualClock()
    vp = VideoPlayer(clock, rng=random.Random(1), window_size=(1024, 768))
    vp.load(FramePlayer(frames(count)))
    if bins:
        vp.set_bins(bins)
    return vp, clock


def test_frame_player_loops_back_to_start():
    player = FramePlayer(frames(3))
    player.play()
    seen = []
    for _ in range(4):
        player.update()
        seen.append(player.current_frame)
    assert seen == [1, 2, 0, 1]
    assert player.done is False


def test_frame_player_without_loop_is_done_at_end():
    player = FramePlayer(frames(2), loop=False)
    player.play()
    player.update()
    player.update()
    assert player.current_frame == 1
    assert player.done is True


def test_frame_player_rejects_empty_and_ragged():
    with pytest.raises(ValueError):
        FramePlayer([])
    with pytest.raises(ValueError):
        FramePlayer([solid(2, 2, 0), solid(3, 2, 0)])


def test_set_position_maps_fraction_and_validates():
    player = FramePlayer(frames(4))
    player.set_position(0.5)
    assert player.current_frame == 2
    player.set_position(1.0)
    assert player.current_frame == 3
    with pytest.raises(ValueError):
        player.set_position(1.5)


def test_load_starts_playing_from_start():
    vp, _ = make_player()
    assert vp.playing is True
    assert vp.player.playing is True
    assert vp.player.current_frame == 0


def test_bin_mode_creates_seven_shuffled_bins():
    vp, _ = make_player()
    vp.set_mode(VideoMode.BINS)
    assert vp.mode == VideoMode.BINS
    assert len(vp.bins) == 7
    width = 1024 // 7
    assert [b.x_pos for b in vp.bins] == [i * width for i in range(7)]
    assert sorted(b.x_pos_source for b in vp.bins) == [i * width for i in range(7)]


def test_set_bins_rejects_zero():
    vp, _ = make_player()
    with pytest.raises(ValueError):
        vp.set_bins(0)


def test_choose_two_random_bins_are_distinct():
    vp, _ = make_player(bins=3)
    for _ in range(20):
        a, b = vp.choose_two_random_bins()
        assert a != b
        assert 0 <= a < 3 and 0 <= b < 3


def test_choose_two_random_bins_needs_two():
    vp, _ = make_player(bins=1)
    with pytest.raises(ValueError):
        vp.choose_two_random_bins()


def test_switch_bins_swaps_targets_and_skips_busy_bins():
    vp, _ = make_player(bins=2)
    a, b = vp.bins
    vp.switch_bins((0, 1))
    assert a.new_x_pos == b.x_pos
    assert b.new_x_pos == a.x_pos
    assert a.switching and b.switching
    vp.switch_bins((0, 1))
    assert len(a.env) == 1 and len(b.env) == 1


def test_bin_moves_after_fade_out():
    clock = ManualClock()
    b = Bin(lambda: [], 0, 0, 10, clock=clock)
    b.do_switch(99)
    for _ in range(20):
        clock.advance(50)
        b.update()
        b.specific_function()
        if not b.switching:
            break
    assert b.x_pos == 99
    assert b.switching is False


def test_disable_odd_bins_hides_every_other():
    vp, _ = make_player(bins=5)
    vp.disable_odd_bins()
    assert [b.visible for b in vp.bins] == [False, True, False, True, False]
    vp.all_bins_visible()
    assert all(b.visible for b in vp.bins)


def test_mirror_all_bins_toggles_both_flags():
    vp, _ = make_player(bins=3)
    vp.mirror_all_bins(True, False)
    assert all(b.mirror_h and b.mirror_v for b in vp.bins)
    vp.disable_vertical_mirror()
    assert not any(b.mirror_v for b in vp.bins)


def test_random_mirror_both_directions_cancels():
    vp, _ = make_player(bins=3)
    vp.random_mirror(True, True)
    assert not any(b.mirror_h or b.mirror_v for b in vp.bins)
    vp.random_mirror(True, False)
    assert sum(b.mirror_h for b in vp.bins) == 1


def test_all_random_brightness_within_range():
    vp, _ = make_player(bins=4)
    vp.all_random_brightness(10, 20)
    assert all(10 <= b.colors[0].a <= 20 for b in vp.bins)


def test_random_fade_and_fade_phase_add_envelopes():
    vp, _ = make_player(bins=4)
    vp.random_fade()
    assert [len(b.env) for b in vp.bins] == [1, 1, 1, 1]
    vp.fade_phase()
    assert [len(b.env) for b in vp.bins] == [2, 2, 2, 2]


def test_switch_dilate_and_colors():
    vp, _ = make_player(bins=3)
    vp.switch_dilate(True)
    assert all(b.dilate and 1 <= b.dilate_factor <= 5 for b in vp.bins)
    vp.switch_all_bin_color()
    assert all(b.gray for b in vp.bins)
    vp.switch_bin_color()
    assert sum(b.gray for b in vp.bins) == 2


def test_loop_point_round_trip():
    vp, _ = make_player(count=5)
    vp.player.set_frame(3)
    vp.set_loop_point(0)
    assert vp.loop_points[0] == 3
    vp.player.set_frame(1)
    vp.start_from_loop_point()
    assert vp.player.current_frame == 3


def test_loop_jumps_back_past_end_point():
    vp, _ = make_player(count=5)
    vp.loop = True
    vp.loop_points = [0, 1]
    vp.player.set_frame(2)
    vp.specific_function()
    assert vp.player.current_frame == 1


def test_custom_two_sets_position():
    vp, _ = make_player(count=4)
    vp.custom_one_arguments[0] = 0.5
    vp.custom_two()
    assert vp.player.current_frame == 2


def test_finished_video_ends_the_event():
    vp, clock = make_player(count=2)
    vp.player.loop = False
    vp.specific_function()
    vp.specific_function()
    assert vp.active is True
    clock.advance(2000)
    assert vp.update() is False
    assert vp.player.loaded is False


def test_region_mirror_gray_and_dilate():
    frame = [[(1, 2, 3), (4, 5, 6)], [(7, 8, 9), (10, 11, 12)]]
    b = Bin(lambda: frame, 0, 0, 2)
    b.mirror_h = True
    assert b.region(frame)[0] == [(4, 5, 6), (1, 2, 3)]
    b.mirror_v = True
    assert b.region(frame) == frame
    b.mirror_h = b.mirror_v = False
    b.gray = True
    assert b.region(frame)[1] == [(7, 7, 7), (10, 10, 10)]
    b.gray = False
    b.dilate = True
    assert all(p == (10, 11, 12) for row in b.region(frame) for p in row)


def test_display_normal_draws_one_rect_per_pixel():
    vp, _ = make_player()
    vp.set_size((4, 2))
    canvas = Canvas()
    vp.display(canvas)
    assert len(canvas.commands) == 4
    assert all(c.kind == "rect" and c.params[2:] == (2.0, 1.0) for c in canvas.commands)


def test_display_bins_skips_hidden_bins():
    vp, _ = make_player(bins=2)
    vp.mode = VideoMode.BINS
    vp.bins[0].visible = False
    canvas = Canvas()
    vp.display(canvas)
    assert len(canvas.commands) == 4
    assert all(c.params[0] >= vp.bins[1].x_pos for c in canvas.commands)


def test_ascii_lines_dark_and_bright():
    vp, _ = make_player()
    vp.load(FramePlayer([solid(14, 18, 0)]))
    assert vp.ascii_lines() == ["  ", "  "]
    vp.load(FramePlayer([solid(14, 18, 255)]))
    vp.mode = VideoMode.ASCII
    vp.display(Canvas())
    assert vp.ascii_text == [ASCII_CHARACTERS[-1] * 2] * 2
import pytest

from eventviz.color import BLACK, CHANNEL_MAX, Color


def test_channels_are_clamped_on_construction():
    c = Color(300, -20, 128, 999)
    assert (c.r, c.g, c.b, c.a) == (CHANNEL_MAX, 0, 128, CHANNEL_MAX)


def test_fractional_channels_truncate():
    c = Color(10.9, 20.2, 30.99, 40.5)
    assert (c.r, c.g, c.b, c.a) == (10, 20, 30, 40)


def test_with_alpha_replaces_only_alpha():
    c = Color(1, 2, 3, 4)
    d = c.with_alpha(77)
    assert (d.r, d.g, d.b, d.a) == (1, 2, 3, 77)
    assert c.a == 4


def test_with_alpha_clamps():
    assert Color().with_alpha(1000).a == CHANNEL_MAX
    assert Color().with_alpha(-5).a == 0


def test_add_saturates_and_keeps_left_alpha():
    left = Color(200, 10, 0, 42)
    right = Color(100, 5, 0, 200)
    total = left + right
    assert total.r == CHANNEL_MAX
    assert total.g == 15
    assert total.b == 0
    assert total.a == left.a


def test_add_rejects_non_colors():
    with pytest.raises(TypeError):
        Color() + 5


def test_gray_sets_all_colour_channels():
    g = Color.gray(CHANNEL_MAX, 0)
    assert (g.r, g.g, g.b, g.a) == (CHANNEL_MAX, CHANNEL_MAX, CHANNEL_MAX, 0)


def test_black_constant():
    faded = BLACK.with_alpha(10)
    assert (faded.r, faded.g, faded.b, faded.a) == (0, 0, 0, 10)
    assert (BLACK.r, BLACK.g, BLACK.b, BLACK.a) == (0, 0, 0, CHANNEL_MAX)


def test_colors_are_immutable():
    c = Color(5, 6, 7, 8)
    with pytest.raises(AttributeError):
        c.r = 1
    assert (c.r, c.g, c.b, c.a) == (5, 6, 7, 8)
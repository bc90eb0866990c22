import math

import pytest

from eventviz.noise import noise


@pytest.mark.parametrize("dims", [1, 2, 3, 4])
def test_values_stay_in_unit_range(dims):
    for step in range(200):
        point = [step * 0.173 - 10 + k * 3.1 for k in range(dims)]
        value = noise(*point)
        assert 0.0 <= value <= 1.0


def test_deterministic():
    points = [(1.25, -3.5, 7.0), (0.3,), (2.2, 9.1), (4.0, 1.0, -2.5, 0.75)]
    first = [noise(*p) for p in points]
    second = [noise(*p) for p in points]
    assert first == second
    assert all(0.0 <= v <= 1.0 for v in first)


def test_continuous():
    for x in (0.1, 2.7, -5.3, 100.9):
        assert abs(noise(x) - noise(x + 1e-6)) < 1e-3
        assert abs(noise(x, x) - noise(x, x + 1e-6)) < 1e-3


def test_varies_across_space():
    values = {round(noise(x * 0.37), 9) for x in range(50)}
    assert len(values) > 10


def test_dimensions_differ():
    assert noise(0.5) != noise(0.5, 0.0, 0.0, 0.0) or noise(1.5) != noise(1.5, 0.0)


def test_no_arguments_rejected():
    with pytest.raises(TypeError):
        noise()


def test_too_many_arguments_rejected():
    with pytest.raises(TypeError):
        noise(1, 2, 3, 4, 5)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_rejected(bad):
    with pytest.raises(ValueError):
        noise(bad)
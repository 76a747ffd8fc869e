import numpy as np
import pytest

from game.asteroids.utils import circle_overlap, clamp, lerp, make_rng, map_range, point_in_rect


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_lerp_and_map_range():
    assert lerp(0.0, 10.0, 0.25) == pytest.approx(2.5)
    assert map_range(12, 12, 36, 12, 28) == pytest.approx(12)
    assert map_range(36, 12, 36, 12, 28) == pytest.approx(28)
    assert map_range(24, 12, 36, 12, 28) == pytest.approx(20)


def test_circle_overlap_is_strict():
    assert circle_overlap(0, 0, 5, 9, 0, 5)
    # touching edges do not overlap
    assert not circle_overlap(0, 0, 5, 10, 0, 5)
    assert not circle_overlap(0, 0, 1, 3, 4, 3.9)
    assert circle_overlap(0, 0, 1, 3, 4, 4.1)


def test_point_in_rect():
    rect = (745, 10, 45, 35)
    assert point_in_rect(760, 20, rect)
    assert not point_in_rect(745, 20, rect)
    assert not point_in_rect(760, 45, rect)
    assert not point_in_rect(10, 10, rect)


def test_make_rng_is_reproducible():
    a = make_rng(7).random(5)
    b = make_rng(7).random(5)
    assert np.array_equal(a, b)

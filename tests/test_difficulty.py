import pytest

from game.asteroids.difficulty import (
    Difficulty, ease_out_curve, get_difficulty, linear_curve, progress, resolve_curve,
)


def test_linear_endpoints():
    start = get_difficulty(0.0)
    assert start == Difficulty(spawn_interval=35, speed_mult=1.0, t=0.0)

    end = get_difficulty(60.0)
    assert end.spawn_interval == 10
    assert end.speed_mult == pytest.approx(3.0)
    assert end.t == pytest.approx(1.0)


def test_linear_spawn_interval_floor():
    assert get_difficulty(120.0).spawn_interval == 8


def test_ease_out_values():
    half = get_difficulty(30.0, curve="ease_out")
    assert half.spawn_interval == 20
    assert half.speed_mult == pytest.approx(2.125)

    end = get_difficulty(60.0, curve="ease_out")
    assert end.spawn_interval == 15
    assert end.speed_mult == pytest.approx(2.5)

    # flat past the end of the session
    assert get_difficulty(90.0, curve="ease_out").speed_mult == pytest.approx(2.5)


@pytest.mark.parametrize("curve", [linear_curve, ease_out_curve])
def test_curves_are_monotonic(curve):
    previous = None
    for secs in range(0, 61):
        d = get_difficulty(float(secs), curve=curve)
        if previous is not None:
            assert d.spawn_interval <= previous.spawn_interval
            assert d.speed_mult >= previous.speed_mult
        previous = d


def test_negative_time_is_clamped():
    assert get_difficulty(-5.0).t == 0.0


def test_unknown_curve():
    with pytest.raises(ValueError):
        resolve_curve("exponential")
    with pytest.raises(ValueError):
        get_difficulty(10.0, curve="steep")


def test_progress_clamps():
    assert progress(-1.0) == 0.0
    assert progress(30.0) == pytest.approx(0.5)
    assert progress(75.0) == 1.0

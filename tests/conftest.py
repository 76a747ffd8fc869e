import pytest

from game.asteroids.difficulty import Difficulty
from game.asteroids.entities import Asteroid
from game.asteroids.session import Session


def quiet_curve(t):
    """Difficulty that never spawns anything"""
    return Difficulty(spawn_interval=10 ** 9, speed_mult=1.0, t=t)


def still_asteroid(x, y, radius=20.0):
    return Asteroid(x=x, y=y, radius=radius, speed=0.0)


@pytest.fixture
def session():
    return Session(seed=0, star_count=0)


@pytest.fixture
def quiet_session():
    """A launched session with spawning disabled"""
    s = Session(seed=0, star_count=0, curve=quiet_curve)
    s.launch()
    return s

from game.asteroids import config as C
from game.asteroids.difficulty import Difficulty
from game.asteroids.spawner import Spawner, spawn_count
from game.asteroids.utils import make_rng


class FixedRng:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def test_spawn_count_policy():
    assert spawn_count(0.0, FixedRng(0.0)) == 1
    assert spawn_count(0.4, FixedRng(0.0)) == 2
    assert spawn_count(0.6, FixedRng(0.1)) == 3
    assert spawn_count(0.6, FixedRng(0.9)) == 2


def test_spawner_waits_for_interval():
    rng = make_rng(0)
    spawner = Spawner()
    difficulty = Difficulty(spawn_interval=3, speed_mult=1.0, t=0.0)
    assert spawner.update(difficulty, rng, C.WIDTH) == []
    assert spawner.update(difficulty, rng, C.WIDTH) == []
    wave = spawner.update(difficulty, rng, C.WIDTH)
    assert len(wave) == 1
    assert spawner.counter == 0


def test_spawned_speed_scales_with_difficulty():
    rng = make_rng(5)
    spawner = Spawner()
    difficulty = Difficulty(spawn_interval=1, speed_mult=3.0, t=0.4)
    wave = spawner.update(difficulty, rng, C.WIDTH)
    assert len(wave) == 2
    assert all(4.5 <= a.speed <= 10.5 for a in wave)
    assert all(a.y < 0 for a in wave)


def test_reset():
    spawner = Spawner()
    spawner.counter = 12
    spawner.reset()
    assert spawner.counter == 0

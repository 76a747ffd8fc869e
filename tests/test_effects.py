import pytest

from game.asteroids import config as C
from game.asteroids.effects import ScreenShake, spawn_explosion, update_particles
from game.asteroids.entities import Particle
from game.asteroids.utils import make_rng


def test_explosion_creates_requested_count():
    particles = []
    created = spawn_explosion(particles, 100, 200, 20, make_rng(0))
    assert created == 20
    assert len(particles) == 20
    assert all(p.x == 100 and p.y == 200 for p in particles)
    assert all(p.color in C.EXPLOSION_COLORS for p in particles)


def test_particle_cap_holds_under_rapid_bursts():
    rng = make_rng(0)
    particles = []
    total = 0
    for _ in range(50):
        total += spawn_explosion(particles, 0, 0, 28, rng)
        assert len(particles) <= C.MAX_PARTICLES
    assert len(particles) == C.MAX_PARTICLES
    assert total == C.MAX_PARTICLES
    assert spawn_explosion(particles, 0, 0, 10, rng) == 0


def test_custom_cap():
    particles = []
    assert spawn_explosion(particles, 0, 0, 10, make_rng(0), cap=4) == 4
    assert len(particles) == 4


def test_update_particles_drops_dead():
    alive = Particle(x=0, y=0, vx=0, vy=0, color=(0, 0, 0), decay=0.1)
    dying = Particle(x=0, y=0, vx=0, vy=0, color=(0, 0, 0), life=0.05, decay=0.1)
    survivors = update_particles([alive, dying])
    assert survivors == [alive]


def test_shake_decays_to_zero():
    shake = ScreenShake()
    shake.pulse(C.SHAKE_CRASH)
    previous = shake.amount
    for _ in range(60):
        shake.decay()
        assert shake.amount <= previous
        previous = shake.amount
    assert shake.amount == 0.0


def test_shake_pulse_keeps_the_stronger_value():
    shake = ScreenShake()
    shake.pulse(12)
    shake.pulse(3)
    assert shake.amount == 12
    shake.reset()
    shake.pulse(3)
    assert shake.amount == 3


def test_shake_offset_bounds():
    rng = make_rng(0)
    shake = ScreenShake()
    assert shake.offset(rng) == (0.0, 0.0)
    shake.pulse(5)
    for _ in range(20):
        dx, dy = shake.offset(rng)
        assert -5 <= dx <= 5
        assert -5 <= dy <= 5

import math

import pytest

from game.asteroids import config as C
from game.asteroids.entities import Asteroid, Missile, Particle, Ship, Star
from game.asteroids.utils import make_rng


def test_ship_spawns_near_bottom_center():
    ship = Ship.spawn(C.WIDTH, C.HEIGHT)
    assert ship.x == C.WIDTH / 2
    assert ship.y == C.HEIGHT - 90
    assert ship.radius > 0


def test_ship_diagonal_is_normalized():
    ship = Ship.spawn(C.WIDTH, C.HEIGHT)
    x0, y0 = ship.x, ship.y
    ship.update(1, -1, C.WIDTH, C.HEIGHT)
    assert ship.x - x0 == pytest.approx(C.SHIP_SPEED * C.DIAGONAL)
    assert y0 - ship.y == pytest.approx(C.SHIP_SPEED * C.DIAGONAL)


def test_ship_is_clamped_to_play_area():
    ship = Ship.spawn(C.WIDTH, C.HEIGHT)
    for _ in range(200):
        ship.update(-1, -1, C.WIDTH, C.HEIGHT)
    assert ship.x == pytest.approx(C.SHIP_SPRITE_SIZE / 2 + 5)
    assert ship.y == pytest.approx(C.HEIGHT * 0.15)

    for _ in range(200):
        ship.update(1, 1, C.WIDTH, C.HEIGHT)
    assert ship.x == pytest.approx(C.WIDTH - C.SHIP_SPRITE_SIZE / 2 - 5)
    assert ship.y == pytest.approx(C.HEIGHT - C.SHIP_SPRITE_SIZE / 2 - 5)


def test_ship_tilts_against_movement():
    ship = Ship.spawn(C.WIDTH, C.HEIGHT)
    ship.update(1, 0, C.WIDTH, C.HEIGHT)
    assert ship.tilt < 0
    for _ in range(100):
        ship.update(0, 0, C.WIDTH, C.HEIGHT)
    assert abs(ship.tilt) < 1e-3


def test_missile_moves_up_and_leaves():
    m = Missile(100, 0)
    m.update()
    assert m.y == -C.MISSILE_SPEED
    assert not m.offscreen
    m.update()
    m.update()
    assert m.offscreen


@pytest.mark.parametrize("radius,points", [
    (12.0, 30), (19.9, 30), (20.0, 20), (29.9, 20), (30.0, 10), (35.9, 10),
])
def test_asteroid_points_by_radius(radius, points):
    assert Asteroid(x=0, y=0, radius=radius, speed=1).points == points


def test_asteroid_spawn_bounds():
    rng = make_rng(3)
    for _ in range(200):
        a = Asteroid.spawn(rng, speed_mult=2.0, width=C.WIDTH)
        lo, hi = C.ASTEROID_RADIUS_RANGE
        assert lo <= a.radius < hi
        assert a.radius + 10 <= a.x <= C.WIDTH - a.radius - 10
        assert a.y <= -a.radius * 2 - 10
        assert 1.5 * 2.0 <= a.speed <= 3.5 * 2.0
        assert -0.5 <= a.vx <= 0.5
        assert a.alive


def test_asteroid_wraps_horizontally():
    a = Asteroid(x=-21, y=0, radius=20, speed=0)
    a.update(C.WIDTH)
    assert a.x == C.WIDTH + 20

    b = Asteroid(x=C.WIDTH + 21, y=0, radius=20, speed=0)
    b.update(C.WIDTH)
    assert b.x == -20


def test_asteroid_passed_threshold():
    a = Asteroid(x=0, y=C.HEIGHT + 60, radius=20, speed=0)
    assert not a.passed(C.HEIGHT)
    a.y += 1
    assert a.passed(C.HEIGHT)


def test_particle_decays_and_dies():
    p = Particle(x=0, y=0, vx=2.0, vy=0.0, color=(255, 255, 255), decay=0.5)
    p.update()
    assert p.vx == pytest.approx(1.9)
    assert p.x == pytest.approx(1.9)
    assert p.life == pytest.approx(0.5)
    assert not p.dead
    p.update()
    assert p.dead


def test_particle_spawn_ranges():
    rng = make_rng(1)
    p = Particle.spawn(rng, 10, 20, (1, 2, 3))
    speed = math.hypot(p.vx, p.vy)
    assert 1.0 <= speed <= 6.0
    assert 0.02 <= p.decay <= 0.06
    assert 2.0 <= p.size <= 5.0
    assert p.life == 1.0


def test_star_wraps_to_top():
    rng = make_rng(0)
    star = Star(x=10, y=C.HEIGHT + 5, speed=1.0, size=1.0, alpha=100)
    star.update(1.0, rng, C.WIDTH, C.HEIGHT)
    assert -20 <= star.y < -5
    assert 0 <= star.x <= C.WIDTH

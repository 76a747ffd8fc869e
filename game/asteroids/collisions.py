"""
Collision checks between missiles, asteroids and the ship.

The helpers mutate the lists they are given; the session decides what each
result is worth.
"""

from typing import List, Optional, Tuple

from . import config as C
from .entities import Asteroid, Missile, Ship
from .utils import circle_overlap


def resolve_missile_hits(asteroids: List[Asteroid], missiles: List[Missile]) -> List[Tuple[Asteroid, Missile]]:
    """
    Remove every asteroid/missile pair that overlaps.

    Each asteroid consumes at most one missile, so a missile can never destroy
    two asteroids in the same tick.
    """
    hits = []
    for i in range(len(asteroids) - 1, -1, -1):
        a = asteroids[i]
        if not a.alive:
            continue
        for j in range(len(missiles) - 1, -1, -1):
            m = missiles[j]
            if circle_overlap(m.x, m.y, m.radius, a.x, a.y, a.radius):
                a.alive = False
                del asteroids[i]
                del missiles[j]
                hits.append((a, m))
                break
    return hits


def find_ship_collision(asteroids: List[Asteroid], ship: Ship, factor: float = C.SHIP_HIT_FACTOR) -> Optional[Asteroid]:
    """First asteroid touching the ship, using a shrunk asteroid radius"""
    for a in asteroids:
        if not a.alive:
            continue
        if circle_overlap(a.x, a.y, a.radius * factor, ship.x, ship.y, ship.radius):
            return a
    return None


def remove_passed(asteroids: List[Asteroid], height: int) -> int:
    """Drop asteroids that left the bottom of the screen; returns how many"""
    before = len(asteroids)
    asteroids[:] = [a for a in asteroids if not a.passed(height)]
    return before - len(asteroids)

"""
Particle bursts and screen shake
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from . import config as C
from .entities import Particle
from .utils import uniform


def spawn_explosion(
    particles: List[Particle],
    x: float,
    y: float,
    count: int,
    rng: np.random.Generator,
    cap: int = C.MAX_PARTICLES,
) -> int:
    """
    Append up to ``count`` particles at (x, y).

    Creation stops silently once ``cap`` particles are alive.
    Returns the number of particles actually created.
    """
    created = 0
    for _ in range(count):
        if len(particles) >= cap:
            break
        color = C.EXPLOSION_COLORS[int(rng.integers(len(C.EXPLOSION_COLORS)))]
        particles.append(Particle.spawn(rng, x, y, color))
        created += 1
    return created


def update_particles(particles: List[Particle]) -> List[Particle]:
    """Advance every particle one tick and return the survivors"""
    for p in particles:
        p.update()
    return [p for p in particles if not p.dead]


@dataclass
class ScreenShake:
    """Decaying shake magnitude, in pixels"""
    amount: float = 0.0
    decay_rate: float = C.SHAKE_DECAY
    cutoff: float = C.SHAKE_CUTOFF

    def pulse(self, strength: float):
        self.amount = max(self.amount, strength)

    def decay(self):
        if self.amount <= 0:
            return
        self.amount *= self.decay_rate
        if self.amount < self.cutoff:
            self.amount = 0.0

    def reset(self):
        self.amount = 0.0

    def offset(self, rng: np.random.Generator) -> Tuple[float, float]:
        """Random render jitter for the current magnitude"""
        if self.amount <= 0:
            return 0.0, 0.0
        return uniform(rng, -self.amount, self.amount), uniform(rng, -self.amount, self.amount)

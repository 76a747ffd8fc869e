"""
Asteroid spawner
"""

from typing import List

import numpy as np

from .difficulty import Difficulty
from .entities import Asteroid


def spawn_count(t: float, rng: np.random.Generator) -> int:
    """How many asteroids a wave releases at elapsed fraction ``t``"""
    if t > 0.5 and rng.random() < 0.3:
        return 3
    return 2 if t > 0.3 else 1


class Spawner:
    """Counts ticks and releases a wave every ``spawn_interval`` ticks"""

    def __init__(self):
        self.counter = 0

    def reset(self):
        self.counter = 0

    def update(self, difficulty: Difficulty, rng: np.random.Generator, width: int) -> List[Asteroid]:
        self.counter += 1
        if self.counter < difficulty.spawn_interval:
            return []

        self.counter = 0
        count = spawn_count(difficulty.t, rng)
        return [Asteroid.spawn(rng, difficulty.speed_mult, width) for _ in range(count)]

"""
Game entity dataclasses

Every entity exposes an ``update`` that advances it by one tick. Coordinates are
screen space: x grows to the right, y grows downward.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from . import config as C
from .utils import clamp, lerp, map_range, uniform

Color = Tuple[int, int, int]


@dataclass
class Ship:
    """Player ship"""
    x: float
    y: float
    radius: float = C.SHIP_RADIUS
    speed: float = C.SHIP_SPEED
    tilt: float = 0.0  # visual only

    @classmethod
    def spawn(cls, width: int, height: int) -> "Ship":
        return cls(x=width * 0.5, y=height - C.SHIP_START_OFFSET)

    def update(self, mx: float, my: float, width: int, height: int):
        # normalize diagonal
        if mx != 0 and my != 0:
            mx *= C.DIAGONAL
            my *= C.DIAGONAL

        self.x += mx * self.speed
        self.y += my * self.speed

        # Keep in bounds
        half = C.SHIP_SPRITE_SIZE / 2
        self.x = clamp(self.x, half + C.SHIP_EDGE_MARGIN, width - half - C.SHIP_EDGE_MARGIN)
        self.y = clamp(self.y, height * C.SHIP_TOP_LIMIT, height - half - C.SHIP_EDGE_MARGIN)

        self.tilt = lerp(self.tilt, mx * -C.SHIP_MAX_TILT, C.SHIP_TILT_EASE)

    @property
    def nose(self) -> Tuple[float, float]:
        """Where missiles leave the ship"""
        return self.x, self.y - C.SHIP_SPRITE_SIZE / 2


@dataclass
class Missile:
    """Missile fired straight up by the ship"""
    x: float
    y: float
    speed: float = C.MISSILE_SPEED
    radius: float = C.MISSILE_RADIUS

    def update(self):
        self.y -= self.speed

    @property
    def offscreen(self) -> bool:
        return self.y < C.MISSILE_EXIT_Y


@dataclass
class Asteroid:
    """Falling asteroid; smaller rocks are worth more"""
    x: float
    y: float
    radius: float
    speed: float
    vx: float = 0.0
    rot: float = 0.0
    rot_speed: float = 0.0
    alive: bool = True
    template: int = 0
    tint: Color = (127, 107, 85)

    @classmethod
    def spawn(cls, rng: np.random.Generator, speed_mult: float, width: int) -> "Asteroid":
        """Create an asteroid somewhere above the visible top edge"""
        radius = uniform(rng, *C.ASTEROID_RADIUS_RANGE)
        margin = radius + C.ASTEROID_SIDE_MARGIN
        return cls(
            x=uniform(rng, margin, width - margin),
            y=-radius * 2 - uniform(rng, *C.ASTEROID_ENTRY_RANGE),
            radius=radius,
            speed=uniform(rng, *C.ASTEROID_SPEED_RANGE) * speed_mult,
            vx=uniform(rng, -C.ASTEROID_DRIFT, C.ASTEROID_DRIFT),
            rot=uniform(rng, 0.0, 2 * math.pi),
            rot_speed=uniform(rng, -C.ASTEROID_SPIN, C.ASTEROID_SPIN),
            template=int(rng.integers(C.ASTEROID_TEMPLATES)),
            tint=(int(rng.integers(100, 155)), int(rng.integers(85, 130)), int(rng.integers(65, 105))),
        )

    def update(self, width: int):
        self.y += self.speed
        self.x += self.vx
        self.rot += self.rot_speed

        # Wrap horizontally
        if self.x < -self.radius:
            self.x = width + self.radius
        if self.x > width + self.radius:
            self.x = -self.radius

    def passed(self, height: int) -> bool:
        """True once the asteroid has fully left the bottom of the screen"""
        return self.y > height + self.radius * 2 + C.ASTEROID_EXIT_MARGIN

    @property
    def points(self) -> int:
        for bound, value in C.ASTEROID_POINT_TIERS:
            if self.radius < bound:
                return value
        return C.ASTEROID_BASE_POINTS


@dataclass
class Particle:
    """Explosion debris"""
    x: float
    y: float
    vx: float
    vy: float
    color: Color
    life: float = 1.0
    decay: float = 0.04
    size: float = 3.0
    friction: float = C.PARTICLE_FRICTION

    @classmethod
    def spawn(cls, rng: np.random.Generator, x: float, y: float, color: Color) -> "Particle":
        angle = uniform(rng, 0.0, 2 * math.pi)
        spd = uniform(rng, *C.PARTICLE_SPEED_RANGE)
        return cls(
            x=x,
            y=y,
            vx=math.cos(angle) * spd,
            vy=math.sin(angle) * spd,
            color=color,
            decay=uniform(rng, *C.PARTICLE_DECAY_RANGE),
            size=uniform(rng, *C.PARTICLE_SIZE_RANGE),
        )

    def update(self):
        self.vx *= self.friction
        self.vy *= self.friction
        self.x += self.vx
        self.y += self.vy
        self.life -= self.decay

    @property
    def dead(self) -> bool:
        return self.life <= 0


@dataclass
class Star:
    """Background star; no collisions"""
    x: float
    y: float
    speed: float
    size: float
    alpha: int

    @classmethod
    def spawn(cls, rng: np.random.Generator, width: int, height: int) -> "Star":
        speed = uniform(rng, *C.STAR_SPEED_RANGE)
        return cls(
            x=uniform(rng, 0.0, width),
            y=uniform(rng, 0.0, height),
            speed=speed,
            size=map_range(speed, *C.STAR_SPEED_RANGE, *C.STAR_SIZE_RANGE),
            alpha=int(map_range(speed, *C.STAR_SPEED_RANGE, *C.STAR_ALPHA_RANGE)),
        )

    def update(self, speed_mult: float, rng: np.random.Generator, width: int, height: int):
        self.y += self.speed * speed_mult
        if self.y > height + 5:
            self.y = uniform(rng, *C.STAR_RESPAWN_RANGE)
            self.x = uniform(rng, 0.0, width)

"""
Difficulty ramp: maps elapsed play time to spawn pacing and asteroid speed.

Two curves are available. ``linear`` keeps tightening right up to the end,
``ease_out`` front-loads the ramp and flattens over the last stretch.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Union

from . import config as C
from .utils import clamp


@dataclass(frozen=True)
class Difficulty:
    spawn_interval: int  # ticks between spawn waves
    speed_mult: float
    t: float  # elapsed fraction of the session, not clamped above


def linear_curve(t: float) -> Difficulty:
    spawn_interval = max(8, math.floor(C.BASE_SPAWN_INTERVAL - t * 25))
    return Difficulty(spawn_interval, 1.0 + t * 2.0, t)


def ease_out_curve(t: float) -> Difficulty:
    u = min(t, 1.0)
    curve = 1 - (1 - u) ** 2
    spawn_interval = max(12, math.floor(C.BASE_SPAWN_INTERVAL - curve * 20))
    return Difficulty(spawn_interval, 1.0 + curve * 1.5, t)


CURVES: Dict[str, Callable[[float], Difficulty]] = {
    "linear": linear_curve,
    "ease_out": ease_out_curve,
}

CurveSpec = Union[str, Callable[[float], Difficulty]]


def resolve_curve(curve: CurveSpec) -> Callable[[float], Difficulty]:
    if callable(curve):
        return curve
    if curve not in CURVES:
        raise ValueError(f"Unknown difficulty curve: {curve!r} (expected one of {sorted(CURVES)})")
    return CURVES[curve]


def get_difficulty(
    play_seconds: float,
    duration: float = C.GAME_DURATION,
    curve: CurveSpec = C.DEFAULT_CURVE,
) -> Difficulty:
    t = max(0.0, play_seconds / duration)
    return resolve_curve(curve)(t)


def progress(play_seconds: float, duration: float = C.GAME_DURATION) -> float:
    """Fraction of the journey completed, in [0, 1]"""
    return clamp(play_seconds / duration, 0.0, 1.0)

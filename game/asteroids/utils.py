"""
Utility functions for game mechanics
"""

from __future__ import annotations
from typing import Optional, Sequence
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from a to b"""
    return a + (b - a) * t


def map_range(v: float, in_lo: float, in_hi: float, out_lo: float, out_hi: float) -> float:
    """Re-map a value from one range onto another (unclamped)"""
    return out_lo + (v - in_lo) * (out_hi - out_lo) / (in_hi - in_lo)


def circle_overlap(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching edges do not count)"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) < (rr * rr)


def point_in_rect(px: float, py: float, rect: Sequence[float]) -> bool:
    """Strict containment test against an (x, y, w, h) rectangle"""
    x, y, w, h = rect
    return x < px < x + w and y < py < y + h


def uniform(rng: np.random.Generator, lo: float, hi: float) -> float:
    """Draw a plain float from [lo, hi)"""
    return float(rng.uniform(lo, hi))


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source a session draws from"""
    return np.random.default_rng(seed)

"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np

# Screen "up" (y grows downward)
DEFAULT_AIM: Tuple[float, float] = (0.0, -1.0)


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def vec_len(x: float, y: float) -> float:
    """Calculate vector length (magnitude)"""
    return math.hypot(x, y)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = vec_len(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x2 - x1, y2 - y1)


def angle_to(x1: float, y1: float, x2: float, y2: float) -> float:
    """Heading in radians from (x1, y1) toward (x2, y2)"""
    return math.atan2(y2 - y1, x2 - x1)


def aim_vector(x1: float, y1: float, x2: float, y2: float) -> Tuple[float, float]:
    """
    Unit vector from (x1, y1) toward (x2, y2).
    Identical points have no heading, so they aim straight up.
    """
    nx, ny = normalize(x2 - x1, y2 - y1)
    if nx == 0.0 and ny == 0.0:
        return DEFAULT_AIM
    return nx, ny


def circle_collide(x1, y1, r1, x2, y2, r2, tolerance: float = 0.0) -> bool:
    """
    Check if two circles collide.
    With a tolerance the gap between the rims must be below it.
    """
    if tolerance:
        return math.hypot(x1 - x2, y1 - y2) - r1 - r2 < tolerance
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) <= (rr * rr)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)

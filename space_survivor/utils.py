"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rects_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Check if two axis-aligned boxes overlap (touching edges do not count)"""
    return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah


def angle_to(from_x: float, from_y: float, to_x: float, to_y: float) -> float:
    """Angle in radians of the vector from one point to another"""
    return math.atan2(to_y - from_y, to_x - from_x)


def is_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)

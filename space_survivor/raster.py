"""
Headless numpy rasterizer for world snapshots (rgb_array frames)
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .world import WorldSnapshot

Color = Tuple[int, int, int]

BG_C: Color = (0, 0, 0)
PLAYER_C: Color = (0, 255, 255)
ENEMY_C: Color = (255, 0, 0)
PROJECTILE_C: Color = (255, 255, 0)
BAR_BG_C: Color = (128, 128, 128)
BAR_FILL_C: Color = (255, 0, 0)


def fill_rect(frame: np.ndarray, x: float, y: float, w: float, h: float, color: Color):
    """Fill an axis-aligned box, clipped to the frame"""
    height, width = frame.shape[:2]
    x0 = max(0, int(x))
    y0 = max(0, int(y))
    x1 = min(width, int(x + w))
    y1 = min(height, int(y + h))
    if x0 < x1 and y0 < y1:
        frame[y0:y1, x0:x1] = color


def rasterize(snapshot: WorldSnapshot) -> np.ndarray:
    """Draw a snapshot into an (H, W, 3) uint8 array, y pointing down"""
    frame = np.zeros((snapshot.height, snapshot.width, 3), dtype=np.uint8)
    frame[:] = BG_C

    for e in snapshot.enemies:
        fill_rect(frame, e.x, e.y, e.width, e.height, ENEMY_C)

    for b in snapshot.projectiles:
        fill_rect(frame, b.x, b.y, b.size, b.size, PROJECTILE_C)

    p = snapshot.player
    fill_rect(frame, p.x, p.y, p.width, p.height, PLAYER_C)

    # Health bar, top-right
    bar_w, bar_h = 150, 20
    x0, y0 = snapshot.width - bar_w - 20, 20
    fill_rect(frame, x0, y0, bar_w, bar_h, BAR_BG_C)
    fill_rect(frame, x0, y0, bar_w * p.health / max(1, p.max_health), bar_h, BAR_FILL_C)

    return frame

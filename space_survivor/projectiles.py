"""
Ordered set of live projectiles
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from .entities import Projectile

logger = logging.getLogger(__name__)


class ProjectileSet:
    """Projectiles in creation order, addressed by a session-unique id"""

    def __init__(self, width: int, height: int, speed: float = 10.0, size: int = 4):
        self.width = width
        self.height = height
        self.speed = speed
        self.size = size
        self._items: List[Projectile] = []
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Projectile]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Projectile:
        return self._items[index]

    def spawn(self, origin: Tuple[float, float], angle: float) -> int:
        """Create a projectile at ``origin`` heading along ``angle``; returns its id"""
        pid = self._next_id
        self._next_id += 1
        assert all(p.id != pid for p in self._items), f"duplicate projectile id {pid}"

        ox, oy = origin
        self._items.append(Projectile.fired(pid, ox, oy, angle, self.speed, self.size))
        return pid

    def advance_all(self) -> int:
        """Move every projectile, then drop the ones that left the world"""
        for p in self._items:
            p.advance()

        before = len(self._items)
        self._items = [p for p in self._items if not p.is_off_screen(self.width, self.height)]
        culled = before - len(self._items)
        if culled:
            logger.debug("culled %d off-screen projectiles", culled)
        return culled

    def get(self, pid: int) -> Optional[Projectile]:
        for p in self._items:
            if p.id == pid:
                return p
        return None

    def remove(self, pid: int) -> bool:
        for i, p in enumerate(self._items):
            if p.id == pid:
                del self._items[i]
                return True
        return False

    def clear(self):
        self._items = []

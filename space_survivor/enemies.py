"""
Ordered set of live enemies: edge spawning and pursuit
"""

from __future__ import annotations

import logging
import random
from typing import Iterator, List, Optional, Tuple

from .entities import Enemy

logger = logging.getLogger(__name__)

EDGES = ("top", "right", "bottom", "left")


class EnemySet:
    """Enemies in spawn order, each chasing the player's current center"""

    def __init__(
        self,
        width: int,
        height: int,
        enemy_width: int = 30,
        enemy_height: int = 30,
        speed: float = 2.0,
    ):
        self.width = width
        self.height = height
        self.enemy_width = enemy_width
        self.enemy_height = enemy_height
        self.speed = speed
        self._items: List[Enemy] = []
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Enemy]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Enemy:
        return self._items[index]

    def add(self, x: float, y: float) -> Enemy:
        enemy = Enemy(
            id=self._next_id,
            x=x,
            y=y,
            width=self.enemy_width,
            height=self.enemy_height,
            speed=self.speed,
        )
        self._next_id += 1
        self._items.append(enemy)
        return enemy

    def edge_position(self, edge: str, rng: random.Random) -> Tuple[float, float]:
        """Random point along ``edge``, just outside the visible area"""
        ew, eh = self.enemy_width, self.enemy_height
        if edge == "top":
            return rng.random() * (self.width - ew), -eh
        elif edge == "right":
            return self.width, rng.random() * (self.height - eh)
        elif edge == "bottom":
            return rng.random() * (self.width - ew), self.height
        elif edge == "left":
            return -ew, rng.random() * (self.height - eh)
        raise ValueError(f"Unknown spawn edge: {edge}")

    def try_spawn_at_edge(self, probability: float, rng: random.Random) -> Optional[Enemy]:
        if rng.random() >= probability:
            return None

        edge = rng.choice(EDGES)
        x, y = self.edge_position(edge, rng)
        enemy = self.add(x, y)
        logger.debug("spawned enemy %d on %s edge at (%.1f, %.1f)", enemy.id, edge, x, y)
        return enemy

    def advance_all(self, player_center: Tuple[float, float]):
        tx, ty = player_center
        for e in self._items:
            e.chase(tx, ty)

    def pop(self, index: int) -> Enemy:
        return self._items.pop(index)

    def clear(self):
        self._items = []

"""
World / simulation step
-----------------------
- Owns the player, projectile set, enemy set, score and terminal flag
- One ``step`` advances everything in a fixed order:
  player -> projectiles -> spawn -> enemies -> projectile x enemy ->
  enemy x player -> terminal check
- Single writer: the tick driver. Hosts only write the input state and read
  snapshots between ticks.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .config import SurvivorConfig
from .enemies import EnemySet
from .entities import Player, PlayerPose, ProjectilePose, EnemyPose
from .input_state import Direction, InputSnapshot, InputState
from .projectiles import ProjectileSet
from .utils import rects_overlap, angle_to, is_finite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepEvents:
    """What happened during one tick"""
    kills: int = 0
    damage: int = 0
    spawned: int = 0
    culled: int = 0
    terminal: bool = False


@dataclass(frozen=True)
class WorldSnapshot:
    """Read-only state handed to renderers"""
    width: int
    height: int
    player: PlayerPose
    projectiles: Tuple[ProjectilePose, ...]
    enemies: Tuple[EnemyPose, ...]
    score: int
    tick: int
    terminal: bool


class World:
    """Complete mutable game state for one play-through"""

    def __init__(
        self,
        config: Optional[SurvivorConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or SurvivorConfig()
        self.rng = rng or random.Random()
        self.width = self.config.width
        self.height = self.config.height

        self.input = InputState()
        self.player = Player.from_config(self.config)
        self.projectiles = ProjectileSet(
            self.width,
            self.height,
            speed=self.config.projectile_speed,
            size=self.config.projectile_size,
        )
        self.enemies = EnemySet(
            self.width,
            self.height,
            enemy_width=self.config.enemy_width,
            enemy_height=self.config.enemy_height,
            speed=self.config.enemy_speed,
        )

        self.score = 0
        self.tick_count = 0
        self.terminal = False

        self.restart()

    # ----------------------------
    # Session control
    # ----------------------------

    def restart(self):
        """Reinitialize every collection, the score and the player"""
        self.projectiles.clear()
        self.enemies.clear()
        self.score = 0
        self.tick_count = 0
        self.terminal = False
        self.player.reset(*self.config.start_position)
        logger.info("session started (%dx%d, %s movement)", self.width, self.height, self.config.movement)

    def is_terminal(self) -> bool:
        return self.terminal

    # ----------------------------
    # Host-facing input
    # ----------------------------

    def set_directional(self, direction: Direction, pressed: bool):
        self.input.set_directional(direction, pressed)

    def set_pointer(self, x: float, y: float):
        self.input.set_pointer(x, y)

    def fire_projectile(self, pointer: Tuple[float, float]) -> Optional[int]:
        """Fire from the ship's nose toward ``pointer``; ignored once terminal"""
        if self.terminal:
            return None

        px, py = pointer
        if not is_finite(px, py):
            return None

        p = self.player
        cx, cy = p.center
        # muzzle sits on the ship's nose along the current facing
        bx = cx + math.cos(p.angle) * p.width / 2
        by = cy + math.sin(p.angle) * p.height / 2
        half = self.projectiles.size / 2

        angle = angle_to(cx, cy, px, py)
        return self.projectiles.spawn((bx - half, by - half), angle)

    # ----------------------------
    # Simulation step
    # ----------------------------

    def step(self, inputs: Optional[InputSnapshot] = None) -> StepEvents:
        """Advance one tick. A terminal world is left untouched."""
        if self.terminal:
            return StepEvents(terminal=True)

        if inputs is None:
            inputs = self.input.snapshot()

        self.player.update(inputs, self.width, self.height)

        culled = self.projectiles.advance_all()

        spawned = 0
        if self.enemies.try_spawn_at_edge(self.config.spawn_probability, self.rng) is not None:
            spawned = 1

        self.enemies.advance_all(self.player.center)

        kills = self._resolve_projectile_hits()
        damage = self._resolve_player_contact()

        self.tick_count += 1
        self._check_terminal()
        self._check_invariants()

        return StepEvents(
            kills=kills,
            damage=damage,
            spawned=spawned,
            culled=culled,
            terminal=self.terminal,
        )

    def _resolve_projectile_hits(self) -> int:
        kills = 0
        for i in range(len(self.enemies) - 1, -1, -1):
            enemy = self.enemies[i]
            for j in range(len(self.projectiles) - 1, -1, -1):
                projectile = self.projectiles[j]
                if rects_overlap(*enemy.box, *projectile.box):
                    self.enemies.pop(i)
                    self.projectiles.remove(projectile.id)
                    self.score += self.config.kill_reward
                    kills += 1
                    logger.debug("projectile %d destroyed enemy %d", projectile.id, enemy.id)
                    break
        return kills

    def _resolve_player_contact(self) -> int:
        # at most one enemy damages the player per tick
        for i in range(len(self.enemies) - 1, -1, -1):
            enemy = self.enemies[i]
            if rects_overlap(*enemy.box, *self.player.box):
                self.player.take_damage(self.config.contact_damage)
                self.enemies.pop(i)
                logger.debug("enemy %d hit player, health=%d", enemy.id, self.player.health)
                return self.config.contact_damage
        return 0

    def _check_terminal(self):
        if self.config.edge_exit_ends_game:
            if any(e.y > self.height for e in self.enemies):
                self.terminal = True
                logger.info("enemy crossed the far boundary at tick %d", self.tick_count)

        if self.player.health <= 0:
            self.terminal = True
            logger.info("player destroyed at tick %d, score=%d", self.tick_count, self.score)

    def _check_invariants(self):
        p = self.player
        assert 0 <= p.health <= p.max_health, f"health out of range: {p.health}"
        assert 0 <= p.x <= self.width - p.width and 0 <= p.y <= self.height - p.height, \
            f"player outside the world: ({p.x}, {p.y})"
        assert self.score >= 0
        for e in self.enemies:
            assert is_finite(e.x, e.y), f"enemy {e.id} has non-finite position"

    # ----------------------------
    # Render-facing accessors
    # ----------------------------

    def player_pose(self) -> PlayerPose:
        p = self.player
        return PlayerPose(p.x, p.y, p.width, p.height, p.angle, p.health, p.max_health)

    def projectile_poses(self) -> Tuple[ProjectilePose, ...]:
        return tuple(ProjectilePose(b.id, b.x, b.y, b.size, b.heading) for b in self.projectiles)

    def enemy_poses(self) -> Tuple[EnemyPose, ...]:
        px, py = self.player.center
        poses = []
        for e in self.enemies:
            cx, cy = e.center
            poses.append(EnemyPose(e.id, e.x, e.y, e.width, e.height, angle_to(cx, cy, px, py)))
        return tuple(poses)

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            width=self.width,
            height=self.height,
            player=self.player_pose(),
            projectiles=self.projectile_poses(),
            enemies=self.enemy_poses(),
            score=self.score,
            tick=self.tick_count,
            terminal=self.terminal,
        )


# ----------------------------
# Session API for hosts
# ----------------------------

def init_session(
    width: int = 800,
    height: int = 600,
    config: Optional[SurvivorConfig] = None,
    seed: Optional[int] = None,
) -> World:
    """Fresh world with a centered player at full health"""
    config = replace(config or SurvivorConfig(), width=width, height=height)
    return World(config, rng=random.Random(seed))


def tick(world: World, inputs: Optional[InputSnapshot] = None) -> bool:
    """Advance one frame; returns whether the session is now terminal"""
    return world.step(inputs).terminal


def fire_projectile(world: World, pointer: Tuple[float, float]) -> Optional[int]:
    return world.fire_projectile(pointer)


def set_directional(world: World, direction: Direction, pressed: bool):
    world.set_directional(direction, pressed)


def is_terminal(world: World) -> bool:
    return world.is_terminal()


def restart(world: World):
    world.restart()

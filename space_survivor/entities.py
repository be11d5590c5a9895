"""
Game entity dataclasses
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple

from .config import SurvivorConfig, MOVEMENT_DIRECT
from .input_state import InputSnapshot
from .utils import clamp, angle_to, is_finite


class Vector2(NamedTuple):
    x: float
    y: float


@dataclass
class Player:
    """Player ship steered by the directional keys and aimed by the pointer"""
    x: float
    y: float
    width: int = 40
    height: int = 20
    vx: float = 0.0
    vy: float = 0.0
    angle: float = 0.0  # radians, faces the pointer
    health: int = 100
    max_health: int = 100

    movement: str = MOVEMENT_DIRECT
    speed: float = 4.0
    acceleration: float = 0.5
    friction: float = 0.05
    max_speed: float = 6.0

    @classmethod
    def from_config(cls, config: SurvivorConfig) -> "Player":
        x, y = config.start_position
        return cls(
            x=x,
            y=y,
            width=config.player_width,
            height=config.player_height,
            health=config.max_health,
            max_health=config.max_health,
            movement=config.movement,
            speed=config.player_speed,
            acceleration=config.acceleration,
            friction=config.friction,
            max_speed=config.max_speed,
        )

    @property
    def center(self) -> Vector2:
        return Vector2(self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def box(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height

    def update(self, inputs: InputSnapshot, world_width: int, world_height: int):
        """Face the pointer, move by the active flags, then clamp into the world"""
        cx, cy = self.center
        if is_finite(inputs.pointer_x, inputs.pointer_y):
            self.angle = angle_to(cx, cy, inputs.pointer_x, inputs.pointer_y)

        if self.movement == MOVEMENT_DIRECT:
            self._move_direct(inputs)
        else:
            self._move_inertial(inputs)

        self.x = clamp(self.x, 0.0, world_width - self.width)
        self.y = clamp(self.y, 0.0, world_height - self.height)

        assert is_finite(self.x, self.y, self.vx, self.vy)

    def _move_direct(self, inputs: InputSnapshot):
        if inputs.up:
            self.y -= self.speed
        if inputs.down:
            self.y += self.speed
        if inputs.left:
            self.x -= self.speed
        if inputs.right:
            self.x += self.speed

    def _move_inertial(self, inputs: InputSnapshot):
        if inputs.up:
            self.vy -= self.acceleration
        if inputs.down:
            self.vy += self.acceleration
        if inputs.left:
            self.vx -= self.acceleration
        if inputs.right:
            self.vx += self.acceleration

        self.vx *= (1.0 - self.friction)
        self.vy *= (1.0 - self.friction)

        velocity = math.hypot(self.vx, self.vy)
        if velocity > self.max_speed:
            self.vx = (self.vx / velocity) * self.max_speed
            self.vy = (self.vy / velocity) * self.max_speed

        self.x += self.vx
        self.y += self.vy

    def take_damage(self, amount: int):
        self.health = max(0, self.health - amount)

    def heal(self, amount: int):
        self.health = min(self.max_health, self.health + amount)

    def reset(self, x: float, y: float):
        self.x, self.y = x, y
        self.vx = self.vy = 0.0
        self.angle = 0.0
        self.health = self.max_health


@dataclass
class Projectile:
    """Straight-line projectile; velocity is fixed at creation"""
    id: int
    x: float
    y: float
    velocity: Vector2
    size: int = 4

    @classmethod
    def fired(cls, pid: int, x: float, y: float, angle: float, speed: float, size: int) -> "Projectile":
        velocity = Vector2(math.cos(angle) * speed, math.sin(angle) * speed)
        return cls(id=pid, x=x, y=y, velocity=velocity, size=size)

    @property
    def heading(self) -> float:
        return math.atan2(self.velocity.y, self.velocity.x)

    @property
    def box(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.size, self.size

    def advance(self):
        self.x += self.velocity.x
        self.y += self.velocity.y

    def is_off_screen(self, width: int, height: int) -> bool:
        return self.x < 0 or self.x > width or self.y < 0 or self.y > height


@dataclass
class Enemy:
    """Enemy entity that chases the player"""
    id: int
    x: float
    y: float
    width: int = 30
    height: int = 30
    speed: float = 2.0

    @property
    def center(self) -> Vector2:
        return Vector2(self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def box(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height

    def chase(self, target_x: float, target_y: float):
        """Step toward the target along the unit vector between centers"""
        cx, cy = self.center
        dx = target_x - cx
        dy = target_y - cy
        dist = math.hypot(dx, dy)

        if dist > 0:
            self.x += (dx / dist) * self.speed
            self.y += (dy / dist) * self.speed


# ----------------------------
# Read-only poses for renderers
# ----------------------------

class PlayerPose(NamedTuple):
    x: float
    y: float
    width: int
    height: int
    angle: float
    health: int
    max_health: int


class ProjectilePose(NamedTuple):
    id: int
    x: float
    y: float
    size: int
    angle: float


class EnemyPose(NamedTuple):
    id: int
    x: float
    y: float
    width: int
    height: int
    angle: float  # faces the player's center

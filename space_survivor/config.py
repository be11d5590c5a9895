"""
Session configuration for the survivor simulation
"""

from __future__ import annotations

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict

MOVEMENT_DIRECT = "direct"
MOVEMENT_INERTIAL = "inertial"
MOVEMENT_MODES = (MOVEMENT_DIRECT, MOVEMENT_INERTIAL)


@dataclass(frozen=True)
class SurvivorConfig:
    """Tuning values for one game session (units are px and ticks)"""

    # Arena
    width: int = 800
    height: int = 600

    # Player
    player_width: int = 40
    player_height: int = 20
    max_health: int = 100
    movement: str = MOVEMENT_DIRECT
    player_speed: float = 4.0       # direct mode, px per tick
    acceleration: float = 0.5       # inertial mode, px per tick^2
    friction: float = 0.05          # inertial mode, fraction lost per tick
    max_speed: float = 6.0          # inertial mode

    # Projectiles
    projectile_size: int = 4
    projectile_speed: float = 10.0

    # Enemies
    enemy_width: int = 30
    enemy_height: int = 30
    enemy_speed: float = 2.0
    spawn_probability: float = 0.02

    # Rules
    kill_reward: int = 10
    contact_damage: int = 20
    edge_exit_ends_game: bool = False

    def __post_init__(self):
        if self.movement not in MOVEMENT_MODES:
            raise ValueError(
                f"Unknown movement mode: {self.movement!r} (expected one of {MOVEMENT_MODES})"
            )
        if self.width <= self.player_width or self.height <= self.player_height:
            raise ValueError(
                f"World {self.width}x{self.height} cannot hold a "
                f"{self.player_width}x{self.player_height} player"
            )
        if self.max_health <= 0:
            raise ValueError(f"max_health must be positive, got {self.max_health}")
        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ValueError(f"spawn_probability must be in [0, 1], got {self.spawn_probability}")
        if not 0.0 <= self.friction < 1.0:
            raise ValueError(f"friction must be in [0, 1), got {self.friction}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SurvivorConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def start_position(self):
        """Top-left corner the player starts from, kept inside the world"""
        x = min(self.width / 2.0, float(self.width - self.player_width))
        y = min(self.height / 2.0, float(self.height - self.player_height))
        return x, y

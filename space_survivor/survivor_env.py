"""
SurvivorEnv - gymnasium wrapper around the survivor World
---------------------------------------------------------
- One World per environment, advanced one tick per step
- MultiDiscrete action space: [move(5), shoot(2), aim(8)]
- Vector observation: player state + top-K nearest enemies
- Reward from kill/damage events, small shot and time costs, death penalty
- Rendering: "human" (arcade viewer) or "rgb_array" (numpy rasterizer)

Quick test:
    python -m space_survivor.survivor_env
"""

from __future__ import annotations

import math
import random
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import SurvivorConfig
from .input_state import Direction, InputSnapshot
from .raster import rasterize
from .utils import clamp, seed_everything
from .world import World, StepEvents

DEFAULT_REWARDS = {
    "R_KILL": 1.0,
    "R_DAMAGE": 0.05,   # per point of health lost
    "R_SHOT": 0.01,
    "R_TIME": 0.001,
    "R_DEATH": 5.0,
}

MOVES = {
    0: None,
    1: Direction.UP,
    2: Direction.DOWN,
    3: Direction.LEFT,
    4: Direction.RIGHT,
}

AIM_DISTANCE = 100.0


class SurvivorEnv(gym.Env):
    """Survivor arena exposed through the Gymnasium API"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        game_config: Optional[Dict[str, Any]] = None,
        max_steps: int = 3600,  # 60s at 60 ticks/s
        k_enemies: int = 5,
        shoot_cooldown_steps: int = 6,
        rewards: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        self.config = SurvivorConfig.from_dict(game_config or {})
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.shoot_cooldown_steps = shoot_cooldown_steps
        self.rewards = dict(DEFAULT_REWARDS, **(rewards or {}))

        # move: 0 stay, 1 up, 2 down, 3 left, 4 right
        # shoot: 0/1
        # aim: 0..7 (8 directions)
        self.action_space = spaces.MultiDiscrete([5, 2, 8])

        # Player: pos(2) vel(2) health(1) cooldown(1)
        # Each enemy: rel pos(2)
        obs_dim = 2 + 2 + 1 + 1 + (self.k_enemies * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.world = World(self.config, rng=random.Random())
        self._viewer = None

        self._step_count = 0
        self._cooldown = 0
        self._prev_pos = (self.world.player.x, self.world.player.y)
        self._kills = 0
        self._damage = 0

        self._aim_dirs = []
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._aim_dirs.append((math.cos(ang), math.sin(ang)))

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is not None:
            self.world.rng.seed(seed)

        self.world.restart()
        self._step_count = 0
        self._cooldown = 0
        self._prev_pos = (self.world.player.x, self.world.player.y)
        self._kills = 0
        self._damage = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, shoot, aim = int(action[0]), int(action[1]), int(action[2])

        p = self.world.player
        cx, cy = p.center
        dx, dy = self._aim_dirs[aim % 8]
        pointer = (cx + dx * AIM_DISTANCE, cy + dy * AIM_DISTANCE)

        shots = 0
        if shoot and self._cooldown == 0:
            if self.world.fire_projectile(pointer) is not None:
                shots = 1
                self._cooldown = self.shoot_cooldown_steps

        direction = MOVES.get(move)
        inputs = InputSnapshot(
            up=direction is Direction.UP,
            down=direction is Direction.DOWN,
            left=direction is Direction.LEFT,
            right=direction is Direction.RIGHT,
            pointer_x=pointer[0],
            pointer_y=pointer[1],
        )

        self._prev_pos = (p.x, p.y)
        events = self.world.step(inputs)

        if self._cooldown > 0:
            self._cooldown -= 1

        self._kills += events.kills
        self._damage += events.damage

        reward = self._compute_reward(events, shots)

        terminated = events.terminal
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        w, h = self.world.width, self.world.height
        p = self.world.player

        speed_scale = max(1e-6, p.max_speed, p.speed)
        vx = (p.x - self._prev_pos[0]) / speed_scale
        vy = (p.y - self._prev_pos[1]) / speed_scale
        health = p.health / p.max_health
        cooldown = self._cooldown / max(1, self.shoot_cooldown_steps)

        obs_parts = [(p.x / w) * 2 - 1, (p.y / h) * 2 - 1,
                     clamp(vx, -1, 1), clamp(vy, -1, 1),
                     health * 2 - 1,
                     clamp(cooldown * 2 - 1, -1, 1)]

        # Enemies: top-K nearest
        px, py = p.center
        enemies_sorted = sorted(
            self.world.enemies,
            key=lambda e: (e.center.x - px) ** 2 + (e.center.y - py) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                ex, ey = enemies_sorted[i].center
                obs_parts += [clamp((ex - px) / w, -1, 1), clamp((ey - py) / h, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: StepEvents, shots: int) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_KILL"] * events.kills
        reward -= r["R_DAMAGE"] * events.damage
        reward -= r["R_SHOT"] * shots
        reward -= r["R_TIME"]

        if self.world.player.health <= 0:
            reward -= r["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "health": self.world.player.health,
            "score": self.world.score,
            "enemies_killed": self._kills,
            "damage_taken": self._damage,
            "num_enemies": len(self.world.enemies),
            "num_projectiles": len(self.world.projectiles),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return rasterize(self.world.snapshot())

        if self._viewer is None:
            self._viewer = _make_viewer(self.world.width, self.world.height)
        self._viewer.dispatch_events()
        self._viewer.show(self.world.snapshot())
        return None

    def close(self):
        if self._viewer is not None:
            self._viewer.close()
            self._viewer = None


def _make_viewer(width: int, height: int):
    """Passive arcade window that only draws what the env hands it"""
    import arcade
    from .render import AssetHandles, SceneRenderer

    class SurvivorViewer(arcade.Window):
        def __init__(self):
            super().__init__(width, height, "SurvivorEnv - Arcade")
            self.renderer = SceneRenderer(AssetHandles(), width, height)

        def show(self, snapshot):
            self.clear()
            self.renderer.draw(snapshot)
            self.flip()

    return SurvivorViewer()


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(
    render: bool = True,
    seed: Optional[int] = 42,
    game_config: Optional[Dict[str, Any]] = None,
) -> float:
    """Run a random episode and return its total reward"""
    env = SurvivorEnv(render_mode="human" if render else None, game_config=game_config)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  "
          f"(score {info['score']}, steps {info['step']}, health {info['health']})")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)

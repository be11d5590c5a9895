"""
Action-space adapters for algorithms that only accept Discrete actions
"""

from typing import Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class FlatActionWrapper(gym.ActionWrapper):
    """
    Exposes SurvivorEnv's [move, shoot, aim] action as a single index.

    MultiDiscrete([5, 2, 8]) becomes Discrete(80) in row-major order, so
    index = (move * 2 + shoot) * 8 + aim.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        if not isinstance(env.action_space, spaces.MultiDiscrete):
            raise ValueError(f"Expected a MultiDiscrete action space, got {env.action_space}")
        self.nvec: Tuple[int, ...] = tuple(int(n) for n in env.action_space.nvec)
        self.action_space = spaces.Discrete(int(np.prod(self.nvec)))

    def action(self, action) -> np.ndarray:
        return np.array(np.unravel_index(int(action), self.nvec), dtype=np.int64)

    def encode(self, move: int, shoot: int, aim: int) -> int:
        """Inverse of ``action``"""
        return int(np.ravel_multi_index((move, shoot, aim), self.nvec))

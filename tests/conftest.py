import random

import pytest

from space_survivor import SurvivorConfig, World


@pytest.fixture
def quiet_config():
    """Default rules with spawning disabled so ticks are deterministic"""
    return SurvivorConfig(spawn_probability=0.0)


@pytest.fixture
def world(quiet_config):
    return World(quiet_config, rng=random.Random(1234))


@pytest.fixture
def enemy_on_player():
    """Adds an enemy whose box is centered on the player's center"""
    def _add(world):
        cx, cy = world.player.center
        return world.enemies.add(
            cx - world.enemies.enemy_width / 2,
            cy - world.enemies.enemy_height / 2,
        )
    return _add

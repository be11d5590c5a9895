import numpy as np
import pytest

from space_survivor.survivor_env import SurvivorEnv

QUIET = {"spawn_probability": 0.0}


def test_reset_observation_in_space():
    env = SurvivorEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["health"] == 100
    assert info["score"] == 0


def test_step_contract():
    env = SurvivorEnv()
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(np.array([4, 0, 0]))
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    assert terminated is False
    assert truncated is False
    for key in ("health", "score", "enemies_killed", "damage_taken",
                "num_enemies", "num_projectiles", "step"):
        assert key in info
    assert info["step"] == 1


def test_move_action_moves_player_right():
    env = SurvivorEnv(game_config=QUIET)
    env.reset(seed=0)
    env.step(np.array([4, 0, 0]))
    assert env.world.player.x == pytest.approx(404.0)


def test_shoot_respects_cooldown():
    env = SurvivorEnv(game_config=QUIET, shoot_cooldown_steps=6)
    env.reset(seed=0)
    for _ in range(3):
        _, _, _, _, info = env.step(np.array([0, 1, 0]))
    assert info["num_projectiles"] == 1


def test_shooting_costs_reward():
    env = SurvivorEnv(game_config=QUIET)
    env.reset(seed=0)
    _, idle_reward, _, _, _ = env.step(np.array([0, 0, 0]))
    env.reset(seed=0)
    _, shot_reward, _, _, _ = env.step(np.array([0, 1, 0]))
    assert shot_reward < idle_reward


def test_truncates_at_max_steps():
    env = SurvivorEnv(game_config=QUIET, max_steps=5)
    env.reset(seed=0)
    truncated = False
    for _ in range(5):
        _, _, _, truncated, _ = env.step(np.array([0, 0, 0]))
    assert truncated is True


def test_death_terminates_with_penalty():
    env = SurvivorEnv(game_config=QUIET)
    env.reset(seed=0)
    world = env.world
    world.player.health = 20
    cx, cy = world.player.center
    world.enemies.add(cx - 15, cy - 15)

    _, reward, terminated, _, info = env.step(np.array([0, 0, 0]))

    assert terminated is True
    assert info["health"] == 0
    assert info["damage_taken"] == 20
    assert reward < -5.0


def test_seeded_resets_are_reproducible():
    actions = [np.array([m % 5, m % 2, m % 8]) for m in range(120)]

    def rollout():
        env = SurvivorEnv()
        obs, _ = env.reset(seed=11)
        trace = [obs]
        for a in actions:
            obs, _, terminated, truncated, _ = env.step(a)
            trace.append(obs)
            if terminated or truncated:
                break
        return np.stack(trace)

    np.testing.assert_array_equal(rollout(), rollout())


def test_rgb_array_render():
    env = SurvivorEnv(render_mode="rgb_array", game_config=QUIET)
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (600, 800, 3)
    assert frame.dtype == np.uint8
    # player box is drawn at its top-left corner (400, 300)
    assert tuple(frame[310, 420]) == (0, 255, 255)

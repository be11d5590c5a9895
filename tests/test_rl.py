import csv

import numpy as np
import pytest

from space_survivor.survivor_env import SurvivorEnv
from rl.wrappers import FlatActionWrapper


def test_flat_actions_cover_every_multidiscrete_action():
    env = FlatActionWrapper(SurvivorEnv())
    assert env.action_space.n == 80

    seen = set()
    for flat in range(env.action_space.n):
        move, shoot, aim = env.action(flat)
        assert env.unwrapped.action_space.contains(np.array([move, shoot, aim]))
        assert env.encode(move, shoot, aim) == flat
        seen.add((int(move), int(shoot), int(aim)))
    assert len(seen) == 80


def test_flat_action_layout_is_row_major():
    env = FlatActionWrapper(SurvivorEnv())
    assert list(env.action(0)) == [0, 0, 0]
    assert list(env.action(8)) == [0, 1, 0]
    assert list(env.action(16)) == [1, 0, 0]
    assert list(env.action(79)) == [4, 1, 7]


def test_flat_wrapper_steps_the_env():
    env = FlatActionWrapper(SurvivorEnv(game_config={"spawn_probability": 0.0}))
    env.reset(seed=0)
    # move right, no shot
    env.step(env.encode(4, 0, 0))
    assert env.unwrapped.world.player.x == pytest.approx(404.0)


def _finished_info(reward, length, kills, damage, score, health):
    return {
        "episode": {"r": reward, "l": length, "t": 0.0},
        "enemies_killed": kills,
        "damage_taken": damage,
        "score": score,
        "health": health,
    }


def test_record_episode_writes_csv_row(tmp_path):
    pytest.importorskip("stable_baselines3")
    from rl.metrics_callback import CSV_FIELDS, EpisodeStats, MetricsCallback

    callback = MetricsCallback(log_dir=str(tmp_path), algo_name="ppo", verbose=0)
    callback.record_episode(EpisodeStats.from_info(_finished_info(12.5, 300, 3, 40, 30, 60)))
    callback.record_episode(EpisodeStats.from_info(_finished_info(-4.0, 90, 0, 100, 0, 0)))
    callback.close()

    with open(tmp_path / "ppo_metrics.csv", newline="") as f:
        reader = csv.DictReader(f)
        assert tuple(reader.fieldnames) == CSV_FIELDS
        rows = list(reader)

    assert len(rows) == 2
    assert rows[0]["episode"] == "1"
    assert float(rows[0]["reward"]) == 12.5
    assert (rows[0]["kills"], rows[0]["damage"], rows[0]["score"]) == ("3", "40", "30")
    assert rows[0]["survived"] == "1"
    assert rows[1]["survived"] == "0"

    summary = callback.get_summary()
    assert summary["total_episodes"] == 2
    assert summary["mean_kills"] == pytest.approx(1.5)
    assert summary["survival_rate"] == pytest.approx(0.5)


def test_callback_only_records_finished_episodes(tmp_path):
    pytest.importorskip("stable_baselines3")
    from rl.metrics_callback import MetricsCallback

    callback = MetricsCallback(log_dir=str(tmp_path), algo_name="dqn", verbose=0)
    callback.update_locals({
        "infos": [_finished_info(1.0, 10, 1, 0, 10, 100), {"score": 0}],
        "dones": [True, False],
    })
    assert callback._on_step() is True
    callback.close()

    assert [s.score for s in callback.episodes] == [10]


def test_run_episodes_summarizes_rollouts():
    pytest.importorskip("stable_baselines3")
    from rl.evaluate import run_episodes

    env = SurvivorEnv(game_config={"spawn_probability": 0.0}, max_steps=5)
    results = run_episodes(env, lambda obs: np.array([0, 0, 0]), n_episodes=2, seed=3)

    assert results["episode_lengths"] == [5, 5]
    assert results["mean_score"] == 0.0
    assert results["mean_reward"] == pytest.approx(-0.005)

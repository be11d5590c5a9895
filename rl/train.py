"""
Train PPO or DQN agents on the survivor environment with Stable-Baselines3.

    python -m rl.train --algo ppo --timesteps 200000
"""

import os
import argparse
import logging
from typing import Optional

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from space_survivor.survivor_env import SurvivorEnv
from rl.configs.survivor_config import ENV_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback
from rl.wrappers import FlatActionWrapper

log = logging.getLogger(__name__)

# algo name -> (model class, hyperparameters, needs flat actions, normalize observations)
ALGORITHMS = {
    "ppo": (PPO, PPO_CONFIG, False, True),
    "dqn": (DQN, DQN_CONFIG, True, False),
}


def make_env(seed: Optional[int] = None, flat_actions: bool = False, render_mode: Optional[str] = None):
    """Env factory for DummyVecEnv"""
    def _init():
        env = SurvivorEnv(render_mode=render_mode, **ENV_CONFIG)
        if flat_actions:
            env = FlatActionWrapper(env)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def train(
    algo: str,
    total_timesteps: Optional[int] = None,
    n_envs: int = 4,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
):
    """Train one algorithm and save its final model (plus VecNormalize stats for PPO)"""
    if algo not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model_cls, hyperparams, flat_actions, normalize = ALGORITHMS[algo]

    total_timesteps = total_timesteps or TRAINING_CONFIG["total_timesteps"]
    save_dir = save_dir or os.path.join(TRAINING_CONFIG["model_dir"], algo)
    log_dir = log_dir or os.path.join(TRAINING_CONFIG["log_dir"], algo)
    os.makedirs(save_dir, exist_ok=True)

    # DQN learns from a replay buffer; one env is enough
    if not normalize:
        n_envs = 1

    log.info("training %s for %s timesteps on %d env(s)", algo.upper(), f"{total_timesteps:,}", n_envs)

    env = DummyVecEnv([make_env(seed=i, flat_actions=flat_actions) for i in range(n_envs)])
    eval_env = DummyVecEnv([make_env(seed=100, flat_actions=flat_actions)])
    if normalize:
        env = VecNormalize(env, norm_obs=True, norm_reward=True)
        eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    metrics = MetricsCallback(log_dir=log_dir, algo_name=algo, verbose=1)
    callbacks = [
        CheckpointCallback(
            save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
            save_path=save_dir,
            name_prefix=f"{algo}_survivor",
        ),
        EvalCallback(
            eval_env,
            best_model_save_path=save_dir,
            log_path=log_dir,
            eval_freq=max(1, TRAINING_CONFIG["eval_freq"] // n_envs),
            deterministic=True,
            render=False,
        ),
        metrics,
        TensorboardMetricsCallback(verbose=0),
    ]

    model = model_cls(
        env=env,
        tensorboard_log=os.path.join(TRAINING_CONFIG["tensorboard_log"], algo),
        **hyperparams
    )
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, f"{algo}_survivor_final")
    model.save(final_path)
    if normalize:
        env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    summary = metrics.get_summary()
    log.info("%s done, model saved to %s", algo.upper(), final_path)
    if summary:
        log.info("episodes %d, mean reward %.2f ± %.2f, mean score %.1f, survival %.0f%%",
                 summary["total_episodes"], summary["mean_reward"], summary["std_reward"],
                 summary["mean_score"], 100 * summary["survival_rate"])
    return model, metrics


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the survivor environment")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=sorted(ALGORITHMS) + ["all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    algos = ["dqn", "ppo"] if args.algo == "all" else [args.algo]
    for algo in algos:
        train(algo, total_timesteps=args.timesteps, n_envs=args.n_envs)


if __name__ == "__main__":
    main()

"""
Evaluate a trained survivor agent, optionally against a random-policy baseline.

    python -m rl.evaluate models/ppo/ppo_survivor_final --vec-normalize models/ppo/vec_normalize.pkl
"""

import argparse
import logging
from typing import Callable, Dict, Any, Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from space_survivor.survivor_env import SurvivorEnv
from rl.configs.survivor_config import ENV_CONFIG
from rl.wrappers import FlatActionWrapper

log = logging.getLogger(__name__)

MODEL_CLASSES = {"ppo": PPO, "dqn": DQN}


def run_episodes(env, policy: Callable, n_episodes: int, seed: Optional[int] = None) -> Dict[str, Any]:
    """Roll out ``policy(obs) -> action`` on a plain gymnasium env and summarize"""
    rewards, lengths, scores, kills = [], [], [], []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=None if seed is None else seed + episode)
        done = False
        total = 0.0
        steps = 0
        while not done:
            obs, reward, terminated, truncated, info = env.step(policy(obs))
            total += float(reward)
            steps += 1
            done = terminated or truncated

        rewards.append(total)
        lengths.append(steps)
        scores.append(info["score"])
        kills.append(info["enemies_killed"])
        log.info("episode %d/%d: reward %.2f, length %d, score %d",
                 episode + 1, n_episodes, total, steps, info["score"])

    return {
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_length": float(np.mean(lengths)),
        "mean_score": float(np.mean(scores)),
        "mean_kills": float(np.mean(kills)),
        "episode_rewards": rewards,
        "episode_lengths": lengths,
    }


def _print_summary(title: str, results: Dict[str, Any]):
    print("\n" + "=" * 50)
    print(f"{title} ({len(results['episode_rewards'])} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print(f"Mean Score: {results['mean_score']:.1f}  Mean Kills: {results['mean_kills']:.1f}")
    print("=" * 50)


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """Run a saved model deterministically; PPO observations go through saved VecNormalize stats"""
    if algo not in MODEL_CLASSES:
        raise ValueError(f"Unknown algorithm: {algo}")
    model = MODEL_CLASSES[algo].load(model_path)

    env = SurvivorEnv(render_mode="human" if render else None, **ENV_CONFIG)
    if algo == "dqn":
        env = FlatActionWrapper(env)

    normalizer = None
    if vec_normalize_path:
        normalizer = VecNormalize.load(vec_normalize_path, DummyVecEnv([lambda: SurvivorEnv(**ENV_CONFIG)]))
        normalizer.training = False

    def policy(obs):
        if normalizer is not None:
            obs = normalizer.normalize_obs(obs)
        action, _ = model.predict(obs, deterministic=True)
        return action

    results = run_episodes(env, policy, n_episodes, seed)
    env.close()
    _print_summary("Evaluation Results", results)
    return results


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """Random-policy baseline on the same env settings"""
    env = SurvivorEnv(render_mode=None, **ENV_CONFIG)
    env.action_space.seed(seed)
    results = run_episodes(env, lambda obs: env.action_space.sample(), n_episodes, seed)
    env.close()
    _print_summary("Random Policy Results", results)
    return results


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained RL agent")
    parser.add_argument("model_path", type=str, help="Path to the trained model")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=sorted(MODEL_CLASSES),
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument("--n-episodes", type=int, default=10, help="Number of evaluation episodes (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--vec-normalize", type=str, default=None, help="Path to VecNormalize stats file (for PPO)")
    parser.add_argument("--compare-random", action="store_true", help="Also evaluate a random policy")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        baseline = compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        print(f"\nImprovement over random: {results['mean_reward'] - baseline['mean_reward']:.2f}")


if __name__ == "__main__":
    main()

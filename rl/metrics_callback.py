"""
Episode metrics for survivor training runs.

Each finished episode becomes one ``EpisodeStats`` row built from the
Monitor summary plus the env's info dict (kills, damage, score, health).
"""

import os
import csv
import logging
from typing import Dict, List, Any, NamedTuple, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback

log = logging.getLogger(__name__)

CSV_FIELDS = ("timestep", "episode", "reward", "length", "kills", "damage", "score", "survived")


class EpisodeStats(NamedTuple):
    reward: float
    length: int
    kills: int
    damage: int
    score: int
    survived: bool

    @classmethod
    def from_info(cls, info: Dict[str, Any]) -> "EpisodeStats":
        # "episode" is added by the Monitor wrapper on the final step
        ep = info["episode"]
        return cls(
            reward=float(ep["r"]),
            length=int(ep["l"]),
            kills=int(info.get("enemies_killed", 0)),
            damage=int(info.get("damage_taken", 0)),
            score=int(info.get("score", 0)),
            survived=info.get("health", 0) > 0,
        )


def finished_episodes(locals_: Dict[str, Any]):
    """Yield stats for every env that ended an episode on this step"""
    for info, done in zip(locals_.get("infos", []), locals_.get("dones", [])):
        if done and "episode" in info:
            yield EpisodeStats.from_info(info)


class MetricsCallback(BaseCallback):
    """Collects EpisodeStats and appends them to ``<log_dir>/<algo>_metrics.csv``"""

    def __init__(self, log_dir: str, algo_name: str, verbose: int = 1):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name
        self.csv_path = os.path.join(log_dir, f"{algo_name}_metrics.csv")
        self.episodes: List[EpisodeStats] = []
        self._csv_file = None
        self._writer: Optional[csv.DictWriter] = None

    def _open(self):
        os.makedirs(self.log_dir, exist_ok=True)
        self._csv_file = open(self.csv_path, "w", newline="")
        self._writer = csv.DictWriter(self._csv_file, fieldnames=CSV_FIELDS)
        self._writer.writeheader()
        log.info("[%s] logging episode metrics to %s", self.algo_name, self.csv_path)

    def _on_training_start(self) -> None:
        self._open()

    def _on_step(self) -> bool:
        for stats in finished_episodes(self.locals):
            self.record_episode(stats)
        return True

    def record_episode(self, stats: EpisodeStats):
        if self._writer is None:
            self._open()

        self.episodes.append(stats)
        row = stats._asdict()
        row.update(
            timestep=self.num_timesteps,
            episode=len(self.episodes),
            survived=int(stats.survived),
        )
        self._writer.writerow(row)
        self._csv_file.flush()

        if self.verbose > 0 and len(self.episodes) % 10 == 0:
            recent = [s.reward for s in self.episodes[-10:]]
            log.info("[%s] episode %d, timestep %d, avg reward (10 ep) %.2f",
                     self.algo_name, len(self.episodes), self.num_timesteps, np.mean(recent))

    def close(self):
        if self._csv_file is not None:
            self._csv_file.close()
            self._csv_file = None
            self._writer = None

    def _on_training_end(self) -> None:
        self.close()
        log.info("[%s] saved %d episodes to %s", self.algo_name, len(self.episodes), self.csv_path)

    def get_summary(self) -> Dict[str, Any]:
        if not self.episodes:
            return {}

        rewards = [s.reward for s in self.episodes]
        return {
            "total_episodes": len(self.episodes),
            "mean_reward": float(np.mean(rewards)),
            "std_reward": float(np.std(rewards)),
            "mean_length": float(np.mean([s.length for s in self.episodes])),
            "mean_kills": float(np.mean([s.kills for s in self.episodes])),
            "mean_damage": float(np.mean([s.damage for s in self.episodes])),
            "mean_score": float(np.mean([s.score for s in self.episodes])),
            "survival_rate": float(np.mean([s.survived for s in self.episodes])),
        }


class TensorboardMetricsCallback(BaseCallback):
    """Logs each finished episode's survivor metrics to TensorBoard"""

    def _on_step(self) -> bool:
        for stats in finished_episodes(self.locals):
            self.logger.record("custom/episode_reward", stats.reward)
            self.logger.record("custom/episode_length", stats.length)
            self.logger.record("custom/kills", stats.kills)
            self.logger.record("custom/damage_taken", stats.damage)
            self.logger.record("custom/score", stats.score)
        return True

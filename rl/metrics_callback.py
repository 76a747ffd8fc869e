"""
Per-episode game metrics for Stable-Baselines3 runs.

The Monitor wrapper marks finished episodes with an "episode" entry in info;
the env's own info carries score, kills, dodges, progress and the outcome.
MetricsCallback writes one CSV row per episode (read by rl.plot_results),
TensorboardMetricsCallback mirrors the same values as TensorBoard scalars.
"""

import os
import csv
from typing import Any, Dict, Iterator, List, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback

COLUMNS = ("timestep", "episode", "reward", "length", "score", "kills", "dodges", "progress", "won")


def finished_episodes(callback: BaseCallback) -> Iterator[Dict[str, Any]]:
    """Infos of the envs whose episode ended on this step"""
    infos = callback.locals.get("infos", [])
    dones = callback.locals.get("dones", [])
    for info, done in zip(infos, dones):
        if done and "episode" in info:
            yield info


def episode_row(info: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a finished episode's info into the CSV / TensorBoard fields"""
    return {
        "reward": float(info["episode"]["r"]),
        "length": int(info["episode"]["l"]),
        "score": int(info.get("score", 0)),
        "kills": int(info.get("kills", 0)),
        "dodges": int(info.get("dodges", 0)),
        "progress": float(info.get("progress", 0.0)),
        "won": 1.0 if info.get("won", False) else 0.0,
    }


class MetricsCallback(BaseCallback):
    """Collect episode rows in memory and stream them to <log_dir>/<algo>_metrics.csv"""

    def __init__(self, log_dir: str, algo_name: str, verbose: int = 1, print_every: int = 10):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name
        self.print_every = print_every

        self.rows: List[Dict[str, Any]] = []
        self.csv_path: Optional[str] = None
        self._csv_file = None
        self._writer: Optional[csv.DictWriter] = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")
        self._csv_file = open(self.csv_path, "w", newline="")
        self._writer = csv.DictWriter(self._csv_file, fieldnames=COLUMNS)
        self._writer.writeheader()
        self._csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        for info in finished_episodes(self):
            self.record_episode(info)
        return True

    def record_episode(self, info: Dict[str, Any]) -> None:
        row = {"timestep": self.num_timesteps, "episode": len(self.rows) + 1, **episode_row(info)}
        self.rows.append(row)

        if self._writer is not None:
            self._writer.writerow(row)
            self._csv_file.flush()

        if self.verbose > 0 and len(self.rows) % self.print_every == 0:
            recent = self.rows[-self.print_every:]
            print(f"[{self.algo_name}] Episode {len(self.rows)}, Timestep {self.num_timesteps}, "
                  f"Avg Reward: {np.mean([r['reward'] for r in recent]):.2f}, "
                  f"Avg Score: {np.mean([r['score'] for r in recent]):.1f}, "
                  f"Wins: {int(sum(r['won'] for r in recent))}/{len(recent)}")

    def _on_training_end(self) -> None:
        if self._csv_file is not None:
            self._csv_file.close()
            self._csv_file = None
            self._writer = None
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.rows)} episodes to {self.csv_path}")

    def _column(self, name: str) -> np.ndarray:
        return np.array([r[name] for r in self.rows], dtype=float)

    def get_summary(self) -> Dict[str, Any]:
        if not self.rows:
            return {}

        rewards = self._column("reward")
        return {
            "mean_reward": float(rewards.mean()),
            "std_reward": float(rewards.std()),
            "mean_length": float(self._column("length").mean()),
            "total_episodes": len(self.rows),
            "mean_score": float(self._column("score").mean()),
            "mean_kills": float(self._column("kills").mean()),
            "mean_progress": float(self._column("progress").mean()),
            "win_rate": float(self._column("won").mean()),
        }


class TensorboardMetricsCallback(BaseCallback):
    """Record finished-episode game metrics under custom/ in the SB3 logger"""

    def _on_step(self) -> bool:
        for info in finished_episodes(self):
            for name, value in episode_row(info).items():
                self.logger.record(f"custom/{name}", value)
        return True

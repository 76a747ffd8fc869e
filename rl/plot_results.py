"""
Plotting script for training runs.
Turns MetricsCallback CSVs into learning curves and an algorithm comparison.

Usage:
    python -m rl.plot_results --log-dir ./logs --output-dir ./plots
"""

import os
import argparse
from typing import Dict, Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm."""
    for csv_path in (
        os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
        os.path.join(log_dir, f"{algo}_metrics.csv"),
    ):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def _curve(ax, df: pd.DataFrame, column: str, window: int, **kwargs):
    values = smooth(df[column].values.astype(float), window)
    ax.plot(df["timestep"].values[:len(values)], values, linewidth=2, **kwargs)
    ax.set_xlabel("Timesteps")
    ax.grid(True, alpha=0.3)


def plot_learning_curve(df: pd.DataFrame, algo: str, output_dir: str, window: int = 50) -> str:
    """Reward, score, progress and win rate for a single algorithm."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    ax = axes[0, 0]
    _curve(ax, df, "reward", window, label=f"{algo} (smoothed)")
    ax.set_ylabel("Episode Reward")
    ax.set_title("Episode Reward vs Timesteps")
    ax.legend()

    ax = axes[0, 1]
    _curve(ax, df, "score", window, color="orange")
    ax.set_ylabel("Score")
    ax.set_title("Game Score vs Timesteps")

    ax = axes[1, 0]
    _curve(ax, df, "progress", window, color="green")
    ax.set_ylabel("Distance to Earth")
    ax.set_ylim(0, 1.05)
    ax.set_title("Journey Progress vs Timesteps")

    ax = axes[1, 1]
    _curve(ax, df, "won", window, color="purple")
    ax.set_ylabel("Win Rate")
    ax.set_ylim(0, 1.05)
    ax.set_title("Win Rate (rolling) vs Timesteps")

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(data: Dict[str, pd.DataFrame], output_dir: str, window: int = 50) -> str:
    """Overlay score and progress curves for every algorithm with data."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle("Algorithm Comparison", fontsize=16, fontweight="bold")

    colors = {"dqn": "#2ecc71", "ppo": "#3498db"}
    for algo, df in data.items():
        if df is None or len(df) == 0:
            continue
        _curve(axes[0], df, "score", window, label=algo.upper(), color=colors.get(algo))
        _curve(axes[1], df, "progress", window, label=algo.upper(), color=colors.get(algo))

    axes[0].set_ylabel("Score")
    axes[0].legend()
    axes[1].set_ylabel("Distance to Earth")
    axes[1].set_ylim(0, 1.05)
    axes[1].legend()

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "algorithm_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    print(f"Saved comparison plot to {save_path}")
    return save_path


def main():
    parser = argparse.ArgumentParser(description="Plot training results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory with metrics CSVs (default: ./logs)")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Where to write PNGs (default: ./plots)")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window in episodes (default: 50)")
    args = parser.parse_args()

    data = {}
    for algo in ("ppo", "dqn"):
        df = load_metrics(args.log_dir, algo)
        if df is None:
            print(f"No metrics found for {algo} in {args.log_dir}")
            continue
        data[algo] = df
        plot_learning_curve(df, algo, args.output_dir, args.window)

    if len(data) > 1:
        plot_comparison(data, args.output_dir, args.window)


if __name__ == "__main__":
    main()

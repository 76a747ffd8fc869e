"""
Train PPO / DQN agents on the asteroids environment with Stable-Baselines3.

PPO runs several vectorised envs behind VecNormalize; DQN needs a flat action
space, so its env is wrapped to Discrete(18). Both get checkpoints, periodic
evaluation, a per-episode metrics CSV and TensorBoard scalars.

Usage:
    python -m rl.train --algo ppo --reward baseline --timesteps 500000
    python -m rl.train --algo all --curve ease_out
"""

import os
import argparse
from typing import Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.asteroids import AsteroidsEnv
from game.asteroids.difficulty import CURVES
from rl.configs.asteroids_config import (
    PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG, REWARD_CONFIGS, get_env_config,
)
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback

# name -> (model class, hyperparameters)
ALGOS = {
    "ppo": (PPO, PPO_CONFIG),
    "dqn": (DQN, DQN_CONFIG),
}

EVAL_SEED_OFFSET = 100


class MultiDiscreteToDiscreteWrapper(gym.ActionWrapper):
    """Flatten MultiDiscrete([3, 3, 2]) into Discrete(18) for DQN (last component varies fastest)"""

    def __init__(self, env):
        super().__init__(env)
        self._nvec = env.action_space.nvec
        self.action_space = spaces.Discrete(int(np.prod(self._nvec)))

    def action(self, action):
        return np.array(np.unravel_index(int(action), tuple(self._nvec)), dtype=np.int64)


def get_algo(algo: str):
    if algo not in ALGOS:
        raise ValueError(f"Unknown algorithm: {algo}")
    return ALGOS[algo]


def make_env(reward_name: str = "baseline", render_mode: Optional[str] = None,
             seed: Optional[int] = None, wrap_for_dqn: bool = False, curve: Optional[str] = None):
    """Factory for DummyVecEnv: a monitored AsteroidsEnv"""
    def _init():
        env = AsteroidsEnv(render_mode=render_mode, **get_env_config(reward_name, curve))
        if wrap_for_dqn:
            env = MultiDiscreteToDiscreteWrapper(env)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def _build_envs(algo: str, reward_name: str, curve: Optional[str], n_envs: int, seed: int):
    if algo == "dqn":
        env = DummyVecEnv([make_env(reward_name, seed=seed, wrap_for_dqn=True, curve=curve)])
        eval_env = DummyVecEnv([make_env(reward_name, seed=seed + EVAL_SEED_OFFSET, wrap_for_dqn=True, curve=curve)])
        return env, eval_env

    env = DummyVecEnv([make_env(reward_name, seed=seed + i, curve=curve) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)
    eval_env = DummyVecEnv([make_env(reward_name, seed=seed + EVAL_SEED_OFFSET, curve=curve)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)
    return env, eval_env


def train(
    algo: str = "ppo",
    total_timesteps: Optional[int] = None,
    reward_name: str = "baseline",
    curve: Optional[str] = None,
    n_envs: int = 4,
    seed: int = 0,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
):
    """Train one agent and return (model, metrics_callback)"""
    model_cls, hyperparams = get_algo(algo)
    if algo == "dqn":
        n_envs = 1

    total_timesteps = total_timesteps or TRAINING_CONFIG["total_timesteps"]
    save_dir = save_dir or os.path.join(TRAINING_CONFIG["model_dir"], algo)
    log_dir = log_dir or os.path.join(TRAINING_CONFIG["log_dir"], algo)
    tensorboard_log = tensorboard_log or os.path.join(TRAINING_CONFIG["tensorboard_log"], algo)
    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training {algo.upper()} ({reward_name}, curve={curve or 'default'}) for {total_timesteps:,} timesteps")
    print(f"Environments: {n_envs}" + (" (Discrete(18) action wrapper)" if algo == "dqn" else ""))
    print(f"{'='*60}\n")

    env, eval_env = _build_envs(algo, reward_name, curve, n_envs, seed)

    # SB3 frequencies count calls per env
    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name=algo, verbose=1)
    callbacks = [
        CheckpointCallback(
            save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
            save_path=save_dir,
            name_prefix=f"{algo}_asteroids",
        ),
        EvalCallback(
            eval_env,
            best_model_save_path=save_dir,
            log_path=log_dir,
            eval_freq=max(1, TRAINING_CONFIG["eval_freq"] // n_envs),
            n_eval_episodes=TRAINING_CONFIG["n_eval_episodes"],
            deterministic=True,
            render=False,
        ),
        metrics_callback,
        TensorboardMetricsCallback(verbose=0),
    ]

    model = model_cls(env=env, tensorboard_log=tensorboard_log, seed=seed, **hyperparams)
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, f"{algo}_asteroids_final")
    model.save(final_path)
    if isinstance(env, VecNormalize):
        env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    print(f"\n{'='*60}")
    print(f"{algo.upper()} done, model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.1f}  Win rate: {summary['win_rate']:.0%}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")

    env.close()
    eval_env.close()
    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the asteroids environment")
    parser.add_argument("--algo", type=str, default="ppo", choices=sorted(ALGOS) + ["all"],
                        help="RL algorithm to use (default: ppo)")
    parser.add_argument("--reward", type=str, default="baseline", choices=sorted(REWARD_CONFIGS),
                        help="Reward shaping configuration (default: baseline)")
    parser.add_argument("--curve", type=str, default=None, choices=sorted(CURVES),
                        help="Difficulty curve (default: the environment's)")
    parser.add_argument("--timesteps", type=int, default=None,
                        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})")
    parser.add_argument("--n-envs", type=int, default=4, help="Parallel environments for PPO (default: 4)")
    parser.add_argument("--seed", type=int, default=0, help="Base random seed (default: 0)")
    args = parser.parse_args()

    algos = sorted(ALGOS) if args.algo == "all" else [args.algo]
    for algo in algos:
        train(
            algo,
            total_timesteps=args.timesteps,
            reward_name=args.reward,
            curve=args.curve,
            n_envs=args.n_envs,
            seed=args.seed,
        )


if __name__ == "__main__":
    main()

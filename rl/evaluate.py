"""
Evaluate trained asteroids agents, optionally against a random-policy baseline.

Usage:
    python -m rl.evaluate ./models/ppo/ppo_asteroids_final --algo ppo \
        --vec-normalize ./models/ppo/vec_normalize.pkl --compare-random
"""

import argparse
import time
from typing import Any, Dict, List, Optional

import numpy as np

from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.asteroids import AsteroidsEnv
from game.asteroids.difficulty import CURVES
from rl.configs.asteroids_config import REWARD_CONFIGS, get_env_config
from rl.train import ALGOS, MultiDiscreteToDiscreteWrapper, get_algo


def load_model(model_path: str, algo: str):
    model_cls, _ = get_algo(algo)
    return model_cls.load(model_path)


def describe_outcome(info: Dict[str, Any]) -> str:
    if info.get("won"):
        return "reached Earth"
    if info.get("crashed"):
        return f"crashed at {info.get('progress', 0):.0%}"
    return f"timed out at {info.get('progress', 0):.0%}"


def summarize(rewards: List[float], scores: List[float], wins: List[float]) -> Dict[str, Any]:
    return {
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_score": float(np.mean(scores)),
        "win_rate": float(np.mean(wins)),
        "episode_rewards": list(rewards),
    }


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
    reward_name: str = "baseline",
    curve: Optional[str] = None,
):
    """
    Run a trained model deterministically for a number of episodes

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to open the game window
        seed: Random seed for evaluation
        vec_normalize_path: VecNormalize statistics saved by PPO training
        reward_name: Reward shaping the model was trained with
        curve: Difficulty curve override
    """
    model = load_model(model_path, algo)

    base_env = AsteroidsEnv(render_mode="human" if render else None, **get_env_config(reward_name, curve))
    inner = MultiDiscreteToDiscreteWrapper(base_env) if algo == "dqn" else base_env

    env = DummyVecEnv([lambda: inner])
    if seed is not None:
        env.seed(seed)

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    rewards, scores, wins = [], [], []

    for episode in range(n_episodes):
        obs = env.reset()
        total_reward = 0.0
        steps = 0
        done = [False]

        while not done[0]:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += float(reward[0])
            steps += 1
            if render:
                time.sleep(1 / base_env.metadata["render_fps"])

        # DummyVecEnv auto-resets; info still describes the finished episode
        final = info[0]
        rewards.append(total_reward)
        scores.append(final.get("score", 0))
        wins.append(1.0 if final.get("won") else 0.0)

        print(f"Episode {episode + 1}/{n_episodes}: Reward = {total_reward:.2f}, "
              f"Score = {final.get('score', 0)}, Length = {steps}, {describe_outcome(final)}")

    env.close()

    results = summarize(rewards, scores, wins)
    print("\n" + "=" * 50)
    print(f"{algo.upper()} over {n_episodes} episodes:")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Score: {results['mean_score']:.1f}  Win rate: {results['win_rate']:.0%}")
    print("=" * 50)
    return results


def compare_with_random(
    n_episodes: int = 10,
    seed: Optional[int] = None,
    reward_name: str = "baseline",
    curve: Optional[str] = None,
):
    """Uniform-random policy on the same environment settings"""
    print("Evaluating random policy baseline...")

    env = AsteroidsEnv(render_mode=None, **get_env_config(reward_name, curve))
    env.action_space.seed(seed)

    rewards, scores, wins = [], [], []

    for episode in range(n_episodes):
        env.reset(seed=seed + episode if seed is not None else None)
        terminated = truncated = False
        total_reward = 0.0

        while not (terminated or truncated):
            _, reward, terminated, truncated, info = env.step(env.action_space.sample())
            total_reward += reward

        rewards.append(total_reward)
        scores.append(info["score"])
        wins.append(1.0 if info["won"] else 0.0)

    env.close()

    results = summarize(rewards, scores, wins)
    print(f"\nRandom policy ({n_episodes} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Score: {results['mean_score']:.1f}  Win rate: {results['win_rate']:.0%}")
    return results


def main():
    parser = argparse.ArgumentParser(description="Evaluate a trained asteroids agent")
    parser.add_argument("model_path", type=str, help="Path to the trained model")
    parser.add_argument("--algo", type=str, default="ppo", choices=sorted(ALGOS),
                        help="Algorithm used to train the model (default: ppo)")
    parser.add_argument("--reward", type=str, default="baseline", choices=sorted(REWARD_CONFIGS),
                        help="Reward configuration used during training (default: baseline)")
    parser.add_argument("--curve", type=str, default=None, choices=sorted(CURVES),
                        help="Difficulty curve (default: the environment's)")
    parser.add_argument("--n-episodes", type=int, default=10, help="Number of evaluation episodes (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--vec-normalize", type=str, default=None, help="VecNormalize stats file (PPO)")
    parser.add_argument("--compare-random", action="store_true", help="Also evaluate a random policy")
    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
        reward_name=args.reward,
        curve=args.curve,
    )

    if args.compare_random:
        print()
        baseline = compare_with_random(args.n_episodes, args.seed, args.reward, args.curve)
        print(f"\nImprovement over random: {results['mean_reward'] - baseline['mean_reward']:.2f}")


if __name__ == "__main__":
    main()

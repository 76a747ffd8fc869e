"""
Training configuration for the asteroids environment
Reward shaping variants, timestep budgets and algorithm hyperparameters
"""

from typing import Optional

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - far too slow with parallel envs
    "width": 800,
    "height": 600,
    "game_duration": 60.0,
    "max_steps": 3660,  # one full session at 60 FPS plus a second of slack
    "k_asteroids": 6,
    "curve": "linear",
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE (balanced)
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced scoring and survival",
    "R_SCORE": 0.02,     # Reward per point scored (kills and dodges)
    "R_SHOT": 0.01,      # Penalty per missile (encourage aimed fire)
    "R_SURVIVE": 0.001,  # Small reward per tick alive
    "R_CRASH": 5.0,      # Ship destroyed
    "R_WIN": 5.0,        # Earth reached
}

# Reward Config 2: SURVIVAL (reach Earth at all costs)
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize reaching Earth - heavy crash penalty, small score reward",
    "R_SCORE": 0.005,
    "R_SHOT": 0.005,
    "R_SURVIVE": 0.003,
    "R_CRASH": 10.0,
    "R_WIN": 10.0,
}

# Reward Config 3: AGGRESSIVE (hunt asteroids)
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Prioritize destroying asteroids - higher score reward, cheaper shots",
    "R_SCORE": 0.05,
    "R_SHOT": 0.002,
    "R_SURVIVE": 0.0005,
    "R_CRASH": 3.0,
    "R_WIN": 3.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# TIMESTEP CONFIGURATIONS
# ==============================================================================

TIMESTEP_CONFIGS = {
    "short": 50_000,
    "medium": 500_000,
    "long": 2_000_000,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.995,  # sessions are long: 3600 ticks
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.995,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 20_000,
    "eval_freq": 10_000,
    "n_eval_episodes": 5,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}


def get_env_config(reward_name: str = "baseline", curve: Optional[str] = None) -> dict:
    """ENV_CONFIG with the named reward shaping (and optionally another difficulty curve) applied"""
    if reward_name not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {reward_name}")
    config = {**ENV_CONFIG, "reward_config": REWARD_CONFIGS[reward_name]}
    if curve is not None:
        config["curve"] = curve
    return config

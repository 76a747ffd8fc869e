import os

import numpy as np
import pytest

pytest.importorskip("stable_baselines3")

from rl.configs.asteroids_config import ENV_CONFIG, REWARD_CONFIGS, get_env_config  # noqa: E402
from rl.metrics_callback import MetricsCallback  # noqa: E402
from rl.train import MultiDiscreteToDiscreteWrapper  # noqa: E402
from game.asteroids import AsteroidsEnv  # noqa: E402


def test_env_config_builds_env():
    env = AsteroidsEnv(**get_env_config("survival"))
    assert env.rewards["R_CRASH"] == REWARD_CONFIGS["survival"]["R_CRASH"]
    assert env.max_steps == ENV_CONFIG["max_steps"]


def test_unknown_reward_config():
    with pytest.raises(ValueError):
        get_env_config("reckless")


def test_discrete_wrapper_mapping():
    env = MultiDiscreteToDiscreteWrapper(AsteroidsEnv())
    assert env.action_space.n == 18
    assert list(env.action(0)) == [0, 0, 0]
    assert list(env.action(1)) == [0, 0, 1]
    assert list(env.action(17)) == [2, 2, 1]


def test_discrete_wrapper_steps():
    env = MultiDiscreteToDiscreteWrapper(AsteroidsEnv())
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(5)
    assert obs.shape == env.observation_space.shape


def test_metrics_summary(tmp_path):
    cb = MetricsCallback(log_dir=str(tmp_path), algo_name="test", verbose=0)
    assert cb.get_summary() == {}
    cb.record_episode({"episode": {"r": 2.0, "l": 100}, "score": 40, "kills": 1, "progress": 0.5, "won": False})
    cb.record_episode({"episode": {"r": 4.0, "l": 3600}, "score": 80, "dodges": 9, "progress": 1.0, "won": True})
    summary = cb.get_summary()
    assert summary["total_episodes"] == 2
    assert summary["mean_score"] == pytest.approx(60)
    assert summary["win_rate"] == pytest.approx(0.5)
    assert np.isclose(summary["mean_reward"], 3.0)


def test_plot_results(tmp_path):
    pytest.importorskip("matplotlib")
    pd = pytest.importorskip("pandas")
    import matplotlib
    matplotlib.use("Agg")
    from rl.plot_results import load_metrics, plot_comparison, plot_learning_curve, smooth

    assert list(smooth(np.arange(3.0), window=10)) == [0.0, 1.0, 2.0]
    assert len(smooth(np.arange(20.0), window=5)) == 16

    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    df = pd.DataFrame({
        "timestep": np.arange(30) * 100,
        "episode": np.arange(30),
        "reward": np.linspace(-5, 5, 30),
        "length": np.full(30, 600),
        "score": np.arange(30) * 3,
        "kills": np.zeros(30),
        "dodges": np.zeros(30),
        "progress": np.linspace(0, 1, 30),
        "won": np.zeros(30),
    })
    df.to_csv(log_dir / "ppo_metrics.csv", index=False)

    loaded = load_metrics(str(log_dir), "ppo")
    assert loaded is not None and len(loaded) == 30
    assert load_metrics(str(log_dir), "dqn") is None

    out = tmp_path / "plots"
    assert (out / "ppo_learning_curve.png").name in plot_learning_curve(loaded, "ppo", str(out), window=5)
    assert os.path.exists(plot_comparison({"ppo": loaded, "dqn": loaded}, str(out), window=5))


def test_env_config_curve_override():
    assert get_env_config("baseline")["curve"] == ENV_CONFIG["curve"]
    env = AsteroidsEnv(**get_env_config("baseline", curve="ease_out"))
    assert env.curve == "ease_out"


def test_unknown_algorithm():
    from rl.train import get_algo
    with pytest.raises(ValueError):
        get_algo("a2c")


def test_describe_outcome():
    from rl.evaluate import describe_outcome
    assert describe_outcome({"won": True, "progress": 1.0}) == "reached Earth"
    assert describe_outcome({"crashed": True, "progress": 0.25}) == "crashed at 25%"
    assert describe_outcome({"progress": 0.5}) == "timed out at 50%"


def test_episode_row_defaults():
    from rl.metrics_callback import COLUMNS, episode_row
    row = episode_row({"episode": {"r": 1.5, "l": 42}, "won": True})
    assert row == {"reward": 1.5, "length": 42, "score": 0, "kills": 0, "dodges": 0, "progress": 0.0, "won": 1.0}
    assert set(row) | {"timestep", "episode"} == set(COLUMNS)

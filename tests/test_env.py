import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from game.asteroids import AsteroidsEnv, run_random_episode
from game.asteroids.session import GameState

from conftest import still_asteroid


def test_passes_gymnasium_checker():
    check_env(AsteroidsEnv(), skip_render_check=True)


def test_reset_observation():
    env = AsteroidsEnv(k_asteroids=4)
    obs, info = env.reset(seed=1)
    assert obs.shape == (4 + 4 * 5,)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["score"] == 0
    assert env.session.state is GameState.PLAYING


def test_idle_step_rewards_survival():
    env = AsteroidsEnv(reward_config={"R_SURVIVE": 0.5, "name": "ignored"})
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(np.array([0, 0, 0]))
    assert reward == pytest.approx(0.5)
    assert not terminated and not truncated


def test_shot_penalty():
    env = AsteroidsEnv()
    env.reset(seed=0)
    _, reward, _, _, info = env.step(np.array([0, 0, 1]))
    assert info["shots"] == 1
    assert reward == pytest.approx(env.rewards["R_SURVIVE"] - env.rewards["R_SHOT"])


def test_crash_terminates_with_penalty():
    env = AsteroidsEnv()
    env.reset(seed=0)
    ship = env.session.ship
    env.session.asteroids.append(still_asteroid(ship.x, ship.y))
    _, reward, terminated, truncated, info = env.step(np.array([0, 0, 0]))
    assert terminated and not truncated
    assert info["crashed"] and not info["won"]
    assert reward == pytest.approx(-env.rewards["R_CRASH"])


def test_win_terminates():
    env = AsteroidsEnv(game_duration=0.5)
    env.reset(seed=0)
    env.session.asteroids.clear()
    terminated = False
    for _ in range(30):
        _, reward, terminated, truncated, info = env.step(np.array([0, 0, 0]))
    assert terminated
    assert info["won"]
    assert reward == pytest.approx(env.rewards["R_WIN"])


def test_truncates_at_max_steps():
    env = AsteroidsEnv(max_steps=5)
    env.reset(seed=0)
    for _ in range(4):
        _, _, terminated, truncated, _ = env.step(np.array([1, 0, 0]))
        assert not truncated
    _, _, terminated, truncated, _ = env.step(np.array([1, 0, 0]))
    assert truncated or terminated


def test_movement_actions():
    env = AsteroidsEnv()
    env.reset(seed=0)
    x0, y0 = env.session.ship.x, env.session.ship.y
    env.step(np.array([2, 1, 0]))  # right + up
    assert env.session.ship.x > x0
    assert env.session.ship.y < y0


def test_random_episode_headless(capsys):
    info = run_random_episode(render=False, seed=3, max_steps=200)
    assert "return" in info
    assert "Random episode return" in capsys.readouterr().out


def test_render_none_returns_none():
    env = AsteroidsEnv()
    env.reset(seed=0)
    assert env.render() is None
    env.close()

"""
AsteroidsEnv - Asteroid Destroyer as an RL environment
------------------------------------------------------
- Same Session the interactive game runs, stepped one tick per action
- Gymnasium API
- MultiDiscrete action space: [horizontal(3), vertical(3), fire(2)]
- Vector observation: ship state + top-K nearest asteroids
- Reward shaped from score gained, shots, survival, crash and reaching Earth
- Arcade rendering on demand ("human" window or "rgb_array" frames)

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.asteroids.env
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from . import config as C
from .input import Action, TickInput
from .session import GameState, Session
from .utils import clamp

DEFAULT_REWARDS = {
    "R_SCORE": 0.02,    # per point scored
    "R_SHOT": 0.01,     # per missile fired
    "R_SURVIVE": 0.001, # per tick alive
    "R_CRASH": 5.0,     # ship destroyed
    "R_WIN": 5.0,       # Earth reached
}

_HORIZONTAL = (None, Action.LEFT, Action.RIGHT)
_VERTICAL = (None, Action.UP, Action.DOWN)


class AsteroidsEnv(gym.Env):
    """Asteroid dodging / shooting environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": C.FPS}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = C.WIDTH,
        height: int = C.HEIGHT,
        game_duration: float = C.GAME_DURATION,
        max_steps: Optional[int] = None,
        k_asteroids: int = 6,
        curve: str = C.DEFAULT_CURVE,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.game_duration = game_duration
        # a full session plus a second of slack
        self.max_steps = max_steps if max_steps is not None else int(game_duration * C.FPS) + C.FPS
        self.k_asteroids = k_asteroids
        self.curve = curve
        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        self.action_space = spaces.MultiDiscrete([3, 3, 2])

        # Ship: pos(2) progress(1) fire-ready(1)
        # Each asteroid: rel pos(2) drift(1) fall speed(1) radius(1)
        obs_dim = 4 + self.k_asteroids * 5
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self.session: Session = None  # type: ignore
        self._window = None
        self._step_count = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self.session = Session(
            rng=self.np_random,
            width=self.width,
            height=self.height,
            game_duration=self.game_duration,
            curve=self.curve,
            star_count=0 if self.render_mode is None else C.STAR_COUNT,
        )
        self.session.launch()
        self._step_count = 0
        if self._window is not None:
            self._window.session = self.session

        return self._get_obs(), self._get_info()

    def step(self, action):
        horizontal, vertical, fire = int(action[0]), int(action[1]), int(action[2])
        held = {a for a in (_HORIZONTAL[horizontal], _VERTICAL[vertical]) if a is not None}
        if fire:
            held.add(Action.FIRE)

        score_before = self.session.score
        shots_before = self.session.shots
        self.session.tick(TickInput(held=frozenset(held)))

        self._events = {
            "score": float(self.session.score - score_before),
            "shot": float(self.session.shots - shots_before),
        }
        reward = self._compute_reward()

        terminated = self.session.state in (GameState.GAMEOVER, GameState.WIN)
        self._step_count += 1
        truncated = not terminated and self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.session
        ship = s.ship

        obs_parts = [
            ship.x / self.width * 2 - 1,
            ship.y / self.height * 2 - 1,
            s.progress * 2 - 1,
            1.0 if s.can_fire else -1.0,
        ]

        asteroids_sorted = sorted(
            s.asteroids,
            key=lambda a: (a.x - ship.x) ** 2 + (a.y - ship.y) ** 2
        )
        max_fall = C.ASTEROID_SPEED_RANGE[1] * 3.0
        max_radius = C.ASTEROID_RADIUS_RANGE[1]
        for i in range(self.k_asteroids):
            if i < len(asteroids_sorted):
                a = asteroids_sorted[i]
                obs_parts += [
                    clamp((a.x - ship.x) / self.width, -1, 1),
                    clamp((a.y - ship.y) / self.height, -1, 1),
                    clamp(a.vx / C.ASTEROID_DRIFT, -1, 1),
                    clamp(a.speed / max_fall, 0, 1) * 2 - 1,
                    clamp(a.radius / max_radius, 0, 1) * 2 - 1,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        R = self.rewards
        reward = 0.0

        reward += R["R_SCORE"] * self._events.get("score", 0.0)
        reward -= R["R_SHOT"] * self._events.get("shot", 0.0)

        state = self.session.state
        if state is GameState.GAMEOVER:
            reward -= R["R_CRASH"]
        elif state is GameState.WIN:
            reward += R["R_WIN"]
        else:
            reward += R["R_SURVIVE"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.session
        return {
            "score": s.score,
            "kills": s.kills,
            "dodges": s.dodges,
            "shots": s.shots,
            "progress": s.progress,
            "play_seconds": s.play_seconds(),
            "won": s.state is GameState.WIN,
            "crashed": s.state is GameState.GAMEOVER,
            "num_asteroids": len(s.asteroids),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import AsteroidsWindow
            self._window = AsteroidsWindow(
                self.session, interactive=False, visible=self.render_mode == "human",
            )

        self._window.switch_to()
        self._window.dispatch_events()
        self._window.on_draw()

        if self.render_mode == "human":
            self._window.flip()
            return None
        return self._render_rgb_array()

    def _render_rgb_array(self) -> np.ndarray:
        import arcade
        image = arcade.get_image(0, 0, self.width, self.height)
        return np.asarray(image.convert("RGB"), dtype=np.uint8)

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42, max_steps: Optional[int] = None) -> Dict[str, Any]:
    """Run a random-policy episode and return its final info"""
    env = AsteroidsEnv(render_mode="human" if render else None, max_steps=max_steps)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1 / C.FPS)

    outcome = "reached Earth" if info["won"] else "crashed" if info["crashed"] else "timed out"
    print(f"Random episode return: {total:.2f} - {outcome}, score {info['score']}")

    env.close()
    info["return"] = total
    return info


if __name__ == "__main__":
    run_random_episode(render=True)

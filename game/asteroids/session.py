"""
Session - the per-tick game state machine
-----------------------------------------
- Start -> Playing -> Paused -> GameOver / Win, retry back to Playing
- Difficulty ramp, asteroid spawning, missile fire
- Collision + scoring, dodge bonus, particle bursts, screen shake
- Time accounting that excludes paused spans

A Session owns every mutable piece of game state and one random source, so a
seeded session replays identically. Rendering and audio never mutate it: they
read ``snapshot()`` and the events returned from ``tick()``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from . import config as C
from .collisions import find_ship_collision, remove_passed, resolve_missile_hits
from .difficulty import CurveSpec, get_difficulty, progress, resolve_curve
from .effects import ScreenShake, spawn_explosion, update_particles
from .entities import Asteroid, Missile, Particle, Ship, Star
from .events import GameEvent
from .input import TickInput
from .spawner import Spawner
from .utils import make_rng, map_range, point_in_rect


class GameState(str, Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAMEOVER = "gameover"
    WIN = "win"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view handed to the renderer"""
    state: GameState
    frame: int
    ship: Ship
    missiles: Tuple[Missile, ...]
    asteroids: Tuple[Asteroid, ...]
    particles: Tuple[Particle, ...]
    stars: Tuple[Star, ...]
    score: int
    high_score: int
    progress: float
    time_remaining: int
    shake: float
    ended_frame: Optional[int]
    new_high_score: bool


class Session:
    """One game from the title screen through any number of play-throughs"""

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        width: int = C.WIDTH,
        height: int = C.HEIGHT,
        fps: int = C.FPS,
        game_duration: float = C.GAME_DURATION,
        fire_rate: int = C.FIRE_RATE,
        max_particles: int = C.MAX_PARTICLES,
        star_count: int = C.STAR_COUNT,
        curve: CurveSpec = C.DEFAULT_CURVE,
        high_score_store=None,
        verbose: int = 0,
    ):
        assert width > 0 and height > 0, "Play area must be non-empty"
        assert game_duration > 0, "Session duration must be positive"

        self.rng = rng if rng is not None else make_rng(seed)
        self.width = width
        self.height = height
        self.fps = fps
        self.game_duration = game_duration
        self.fire_rate = fire_rate
        self.max_particles = max_particles
        self.curve = curve
        resolve_curve(curve)  # fail fast on a bad name
        self.high_score_store = high_score_store
        self.verbose = verbose

        self.pause_button = (width - C.PAUSE_BUTTON_RIGHT_INSET, C.PAUSE_BUTTON_TOP, *C.PAUSE_BUTTON_SIZE)

        self.state = GameState.START
        self.frame = 0
        self.score = 0
        self.high_score = high_score_store.load() if high_score_store is not None else 0
        self.new_high_score = False

        self.ship = Ship.spawn(width, height)
        self.missiles: List[Missile] = []
        self.asteroids: List[Asteroid] = []
        self.particles: List[Particle] = []
        self.stars: List[Star] = [Star.spawn(self.rng, width, height) for _ in range(star_count)]

        self.spawner = Spawner()
        self.shake = ScreenShake()
        self.progress = 0.0

        # Frame bookkeeping
        self.play_start_frame = 0
        self.pause_offset = 0
        self.pause_start_frame = 0
        self.last_fire_frame = -fire_rate
        self.ended_frame: Optional[int] = None

        # Per-session stats
        self.shots = 0
        self.kills = 0
        self.dodges = 0

        self.events: List[GameEvent] = []

    # ----------------------------
    # Tick
    # ----------------------------

    def tick(self, inp: Optional[TickInput] = None) -> List[GameEvent]:
        """Advance one frame and return the events it produced"""
        if inp is None:
            inp = TickInput()

        self.frame += 1
        self.events = []

        self._handle_triggers(inp)

        if self.state is GameState.PLAYING:
            self._update_playing(inp)
        elif self.state is GameState.GAMEOVER:
            # let the crash play out behind the overlay
            self.particles = update_particles(self.particles)

        self.shake.decay()
        return self.events

    def _handle_triggers(self, inp: TickInput):
        if inp.launch:
            self.launch()

        toggle = inp.pause
        if inp.click is not None and self.state in (GameState.PLAYING, GameState.PAUSED):
            toggle = toggle or point_in_rect(inp.click[0], inp.click[1], self.pause_button)
        if toggle:
            self.toggle_pause()

    def _update_playing(self, inp: TickInput):
        secs = self.play_seconds()
        self.progress = progress(secs, self.game_duration)

        if secs >= self.game_duration:
            self._finish(GameState.WIN, GameEvent.SESSION_WIN)
            return

        self._update_ship(inp)

        star_speed = 1 + self.progress * C.STAR_PROGRESS_BOOST
        for s in self.stars:
            s.update(star_speed, self.rng, self.width, self.height)

        difficulty = get_difficulty(secs, self.game_duration, self.curve)
        self.asteroids.extend(self.spawner.update(difficulty, self.rng, self.width))

        for m in self.missiles:
            m.update()
        self.missiles = [m for m in self.missiles if not m.offscreen]

        for a in self.asteroids:
            a.update(self.width)

        self._handle_collisions()
        if self.state is not GameState.PLAYING:
            return

        dodged = remove_passed(self.asteroids, self.height)
        self.dodges += dodged
        self.score += dodged * C.DODGE_BONUS

        self.particles = update_particles(self.particles)

    def _update_ship(self, inp: TickInput):
        self.ship.update(inp.horizontal, inp.vertical, self.width, self.height)

        if inp.fire and self.frame - self.last_fire_frame >= self.fire_rate:
            x, y = self.ship.nose
            self.missiles.append(Missile(x, y))
            self.last_fire_frame = self.frame
            self.shots += 1
            self.events.append(GameEvent.SHOOT)

    def _handle_collisions(self):
        # Missiles vs asteroids
        for a, _ in resolve_missile_hits(self.asteroids, self.missiles):
            self.score += a.points
            self.kills += 1
            lo, hi = C.ASTEROID_RADIUS_RANGE
            burst = math.floor(map_range(a.radius, lo, hi, *C.HIT_BURST_RANGE))
            self.explode(a.x, a.y, burst)
            self.shake.pulse(C.SHAKE_HIT)
            self.events.append(GameEvent.EXPLODE)

        # Asteroids vs ship
        hit = find_ship_collision(self.asteroids, self.ship)
        if hit is not None:
            self.explode(hit.x, hit.y, C.CRASH_BURST_ASTEROID)
            self.explode(self.ship.x, self.ship.y, C.CRASH_BURST_SHIP)
            self.shake.pulse(C.SHAKE_CRASH)
            self.events.append(GameEvent.EXPLODE)
            self._finish(GameState.GAMEOVER, GameEvent.SESSION_FAIL)

    def explode(self, x: float, y: float, count: int) -> int:
        return spawn_explosion(self.particles, x, y, count, self.rng, self.max_particles)

    # ----------------------------
    # Transitions
    # ----------------------------

    def launch(self) -> bool:
        """Start (or restart) a play-through; ignored while one is running"""
        if self.state not in (GameState.START, GameState.GAMEOVER, GameState.WIN):
            return False

        self.score = 0
        self.new_high_score = False
        self.missiles = []
        self.asteroids = []
        self.particles = []
        self.spawner.reset()
        self.shake.reset()
        self.progress = 0.0
        self.ship = Ship.spawn(self.width, self.height)
        self.play_start_frame = self.frame
        self.pause_offset = 0
        self.pause_start_frame = 0
        self.last_fire_frame = self.frame - self.fire_rate
        self.ended_frame = None
        self.shots = self.kills = self.dodges = 0

        self.state = GameState.PLAYING
        self.events.append(GameEvent.SESSION_START)
        if self.verbose > 0:
            print(f"[Session] Launch at frame {self.frame} (high score {self.high_score})")
        return True

    def pause(self) -> bool:
        if self.state is not GameState.PLAYING:
            return False
        self.state = GameState.PAUSED
        self.pause_start_frame = self.frame
        if self.verbose > 1:
            print(f"[Session] Paused at frame {self.frame}")
        return True

    def resume(self) -> bool:
        if self.state is not GameState.PAUSED:
            return False
        self.pause_offset += self.frame - self.pause_start_frame
        self.state = GameState.PLAYING
        if self.verbose > 1:
            print(f"[Session] Resumed at frame {self.frame} (paused total {self.pause_offset} frames)")
        return True

    def toggle_pause(self) -> bool:
        if self.state is GameState.PLAYING:
            return self.pause()
        return self.resume()

    def _finish(self, state: GameState, event: GameEvent):
        self.state = state
        self.ended_frame = self.frame
        self._commit_high_score()
        self.events.append(event)
        if self.verbose > 0:
            print(f"[Session] {state.value} at {self.play_seconds():.1f}s - "
                  f"score {self.score}, kills {self.kills}, dodges {self.dodges}")

    def _commit_high_score(self):
        if self.score <= self.high_score:
            return
        self.high_score = self.score
        self.new_high_score = True
        if self.high_score_store is not None:
            self.high_score_store.save(self.high_score)

    # ----------------------------
    # Clock / views
    # ----------------------------

    def _clock_frame(self) -> int:
        if self.state is GameState.PAUSED:
            return self.pause_start_frame
        if self.state in (GameState.GAMEOVER, GameState.WIN) and self.ended_frame is not None:
            return self.ended_frame
        if self.state is GameState.START:
            return self.play_start_frame
        return self.frame

    def play_seconds(self) -> float:
        """Seconds spent Playing this session, paused spans excluded"""
        frames = self._clock_frame() - self.play_start_frame - self.pause_offset
        return max(0.0, frames / self.fps)

    def time_remaining(self) -> int:
        return max(0, math.ceil(self.game_duration - self.play_seconds()))

    @property
    def can_fire(self) -> bool:
        return self.frame - self.last_fire_frame >= self.fire_rate

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self.state,
            frame=self.frame,
            ship=self.ship,
            missiles=tuple(self.missiles),
            asteroids=tuple(self.asteroids),
            particles=tuple(self.particles),
            stars=tuple(self.stars),
            score=self.score,
            high_score=self.high_score,
            progress=self.progress,
            time_remaining=self.time_remaining(),
            shake=self.shake.amount,
            ended_frame=self.ended_frame,
            new_high_score=self.new_high_score,
        )

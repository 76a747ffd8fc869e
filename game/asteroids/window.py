"""
Arcade window: render, input and audio collaborators around a Session.

The session works in screen space (y down); every draw helper here flips y and
applies the current screen-shake jitter.
"""

import math
from typing import Dict, Optional, Set, Tuple

import arcade
import numpy as np

from . import config as C
from .audio import AudioPlayer
from .entities import Asteroid
from .events import GameEvent
from .input import Action, InputTracker
from .session import GameState, Session
from .sprites import asteroid_image, earth_image, ship_image
from .utils import map_range

KEY_BINDINGS: Dict[int, Action] = {
    arcade.key.LEFT: Action.LEFT,
    arcade.key.A: Action.LEFT,
    arcade.key.RIGHT: Action.RIGHT,
    arcade.key.D: Action.RIGHT,
    arcade.key.UP: Action.UP,
    arcade.key.W: Action.UP,
    arcade.key.DOWN: Action.DOWN,
    arcade.key.S: Action.DOWN,
    arcade.key.SPACE: Action.FIRE,
    arcade.key.ENTER: Action.LAUNCH,
    arcade.key.NUM_ENTER: Action.LAUNCH,
    arcade.key.P: Action.PAUSE,
}

BG = (5, 5, 15)
TEXT_C = (180, 180, 200)
DIM_C = (150, 150, 180)
PROMPT_C = (255, 255, 100)
SCORE_C = (255, 220, 80)
EARTH_SPIN = 0.005


class AsteroidsWindow(arcade.Window):
    """Arcade window that plays (or just displays) a Session"""

    def __init__(
        self,
        session: Session,
        audio: Optional[AudioPlayer] = None,
        title: str = C.TITLE,
        interactive: bool = True,
        visible: bool = True,
        seed: Optional[int] = None,
    ):
        super().__init__(session.width, session.height, title, update_rate=1 / session.fps, visible=visible)
        self.session = session
        self.audio = audio
        self.interactive = interactive
        self.background_color = BG

        # Input state gathered between ticks
        self.tracker = InputTracker()
        self._held: Set[Action] = set()
        self._click: Optional[Tuple[float, float]] = None
        self._pointer: Tuple[float, float] = (-1.0, -1.0)

        # Cosmetic randomness stays out of the session's random source
        self._fx_rng = np.random.default_rng(seed)
        self._ox = 0.0
        self._oy = 0.0
        self.earth_angle = 0.0

        self._ship_texture = arcade.Texture(ship_image())
        self._earth_texture = arcade.Texture(earth_image(self._fx_rng))
        self._asteroid_textures: Dict[tuple, arcade.Texture] = {}

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        action = KEY_BINDINGS.get(symbol)
        if action is not None:
            self._held.add(action)
            self.tracker.press(action)

    def on_key_release(self, symbol: int, modifiers: int):
        action = KEY_BINDINGS.get(symbol)
        if action is not None:
            self._held.discard(action)

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        self._pointer = (x, self.height - y)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        self._click = (x, self.height - y)

    # ----------------------------
    # Update
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        inp = self.tracker.poll(self._held, self._click)
        self._click = None
        events = self.session.tick(inp)

        if GameEvent.SESSION_START in events:
            self.earth_angle = float(self._fx_rng.uniform(0, 2 * math.pi))
        if self.session.state in (GameState.PLAYING, GameState.WIN):
            self.earth_angle += EARTH_SPIN
        if self.audio is not None:
            self.audio.handle(events)

    # ----------------------------
    # Draw helpers (screen space, y down)
    # ----------------------------

    def _rect(self, x: float, y: float, w: float, h: float, color):
        if w <= 0 or h <= 0:
            return
        left = x + self._ox
        top = self.height - (y + self._oy)
        arcade.draw_lrbt_rectangle_filled(left, left + w, top - h, top, color)

    def _text(self, text: str, x: float, y: float, color, size: float, bold: bool = False, anchor_x: str = "center"):
        arcade.draw_text(
            text, x + self._ox, self.height - (y + self._oy), color, size,
            anchor_x=anchor_x, anchor_y="center", bold=bold,
        )

    def _glow_text(self, text: str, x: float, y: float, size: float, base):
        r, g, b = base
        self._text(text, x, y + 2, (r, g, b, 50), size, bold=True)
        self._text(text, x, y, (r, g, b, 140), size, bold=True)
        self._text(text, x, y, (255, 255, 255), size, bold=True)

    def _texture(self, texture: arcade.Texture, x: float, y: float, w: float, h: float, angle: float = 0.0):
        rect = arcade.XYWH(x + self._ox, self.height - (y + self._oy), w, h)
        arcade.draw_texture_rect(texture, rect, angle=math.degrees(angle), pixelated=True)

    def _blink(self) -> bool:
        return self.session.frame % 60 < 40

    def _asteroid_texture(self, a: Asteroid) -> arcade.Texture:
        # coarse tint buckets keep the texture atlas small
        tint = tuple(v // 24 * 24 + 12 for v in a.tint)
        key = (a.template, tint, int(a.radius))
        if key not in self._asteroid_textures:
            self._asteroid_textures[key] = arcade.Texture(asteroid_image(a.template, tint, a.radius))
        return self._asteroid_textures[key]

    # ----------------------------
    # Scenes
    # ----------------------------

    def on_draw(self):
        self.clear()
        snap = self.session.snapshot()
        self._ox, self._oy = self.session.shake.offset(self._fx_rng)

        if snap.state is GameState.START:
            self._draw_stars(snap)
            self._draw_start_screen(snap)
        elif snap.state is GameState.PLAYING:
            self._draw_playing_scene(snap)
        elif snap.state is GameState.PAUSED:
            self._draw_playing_scene(snap)
            self._draw_pause_overlay()
        elif snap.state is GameState.GAMEOVER:
            self._draw_playing_scene(snap)
            self._draw_game_over(snap)
        else:
            self._draw_win_scene(snap)

        self._ox = self._oy = 0.0

    def _draw_stars(self, snap):
        for s in snap.stars:
            streak = s.size * 0.5
            self._rect(s.x, s.y, max(s.size, 1), max(s.size + streak, 1), (255, 255, 255, s.alpha))

    def _draw_start_screen(self, snap):
        W, H = self.width, self.height
        self._glow_text("ASTEROID DESTROYER", W / 2, H * 0.22, 40, (255, 80, 80))
        self._text("JOURNEY HOME", W / 2, H * 0.32, (140, 180, 255), 18)
        self._text("Navigate through the asteroid belt", W / 2, H * 0.44, TEXT_C, 15)
        self._text("and reach Earth to survive!", W / 2, H * 0.49, TEXT_C, 15)
        self._text("WASD / Arrow Keys  --  Move", W / 2, H * 0.60, (150, 160, 180), 14)
        self._text("SPACE  --  Fire Missiles", W / 2, H * 0.65, (150, 160, 180), 14)
        self._text("P  --  Pause", W / 2, H * 0.70, (150, 160, 180), 14)
        if self._blink():
            self._text("Press ENTER to Launch", W / 2, H * 0.82, PROMPT_C, 20)
        if snap.high_score > 0:
            self._text(f"High Score: {snap.high_score}", W / 2, H * 0.91, (140, 140, 170), 13)

    def _draw_playing_scene(self, snap):
        self._draw_stars(snap)
        self._draw_earth(snap.progress)

        for m in snap.missiles:
            self._rect(m.x - 4, m.y - 6, 8, 12, (255, 200, 80, 80))
            self._rect(m.x - 2, m.y - 4, 4, 8, (255, 255, 200))
            self._rect(m.x - 1, m.y + 4, 2, float(self._fx_rng.uniform(4, 10)), (255, 180, 60, 120))

        for a in snap.asteroids:
            texture = self._asteroid_texture(a)
            self._texture(texture, a.x, a.y, texture.width, texture.height, a.rot)

        for p in snap.particles:
            s = p.size * p.life
            r, g, b = p.color
            self._rect(p.x - s / 2, p.y - s / 2, s, s, (r, g, b, int(255 * max(0.0, p.life))))

        self._draw_ship(snap)
        self._draw_hud(snap)

    def _draw_earth(self, progress: float):
        if progress <= 0.4:
            return
        scale = map_range(progress, 0.4, 1.0, 0.03, 0.35)
        y = map_range(progress, 0.4, 1.0, -20, 60)
        size = 200 * scale
        self._texture(self._earth_texture, self.width / 2, y, size, size, self.earth_angle)
        arcade.draw_circle_outline(
            self.width / 2 + self._ox, self.height - (y + self._oy), size / 2 + 4,
            (100, 160, 255, int(40 * scale)), 3,
        )

    def _draw_ship(self, snap):
        ship = snap.ship
        size = C.SHIP_SPRITE_SIZE
        self._texture(self._ship_texture, ship.x, ship.y, size, size, ship.tilt)

        # Engine flames
        frame = snap.frame
        flame_h = float(self._fx_rng.uniform(8, 18))
        bottom = ship.y + size / 2
        outer = (255, 180, 40, 230) if frame % 3 < 2 else (255, 100, 20, 200)
        inner = (255, 240, 80, 180) if frame % 4 < 2 else (255, 160, 40, 160)
        for dx in (-7, 3):
            self._rect(ship.x + dx, bottom, 4, flame_h, outer)
            self._rect(ship.x + dx + 1, bottom + 2, 2, flame_h + float(self._fx_rng.uniform(2, 8)), inner)
        center = (100, 180, 255, 200) if frame % 2 == 0 else (150, 210, 255, 180)
        self._rect(ship.x - 2, bottom, 4, flame_h * 0.6, center)

    def _draw_hud(self, snap):
        self._glow_text(str(snap.score), 55, 28, 22, SCORE_C)
        self._text("SCORE", 55, 10, TEXT_C, 10)

        # Progress bar
        bar_w, bar_h = 200, 12
        bar_x = self.width / 2 - bar_w / 2
        bar_y = 16
        self._rect(bar_x, bar_y, bar_w, bar_h, (40, 40, 60))
        fill_w = bar_w * snap.progress
        if snap.progress < 0.5:
            fill_c = (100, 180, 255)
        elif snap.progress < 0.8:
            fill_c = (100, 255, 150)
        else:
            fill_c = SCORE_C
        self._rect(bar_x, bar_y, fill_w, bar_h, fill_c)
        self._text("EARTH", bar_x + bar_w / 2, bar_y + bar_h / 2 - 1, (255, 255, 255), 9)
        self._rect(bar_x + fill_w - 3, bar_y - 2, 6, bar_h + 4, (255, 100, 80))
        self._text(f"{snap.time_remaining}s", bar_x + bar_w + 10, bar_y + bar_h / 2, TEXT_C, 12, anchor_x="left")

        # Pause button
        bx, by, bw, bh = self.session.pause_button
        px, py = self._pointer
        hover = bx < px < bx + bw and by < py < by + bh
        self._rect(bx, by, bw, bh, (255, 255, 255, 50 if hover else 25))
        bar_c = (255, 255, 255, 200 if hover else 120)
        self._rect(bx + 15, by + 8, 5, 19, bar_c)
        self._rect(bx + 25, by + 8, 5, 19, bar_c)

    def _draw_pause_overlay(self):
        W, H = self.width, self.height
        self._rect(-self._ox, -self._oy, W, H, (0, 0, 20, 150))
        self._glow_text("PAUSED", W / 2, H / 2 - 20, 48, (150, 180, 255))
        self._text("Press P to Resume", W / 2, H / 2 + 30, TEXT_C, 18)

    def _draw_game_over(self, snap):
        W, H = self.width, self.height
        self._rect(-self._ox, -self._oy, W, H, (0, 0, 10, 170))
        self._glow_text("SHIP DESTROYED", W / 2, H / 3, 42, (255, 60, 60))
        self._text(f"Distance to Earth: {int(snap.progress * 100)}% complete", W / 2, H / 2 - 20, TEXT_C, 14)
        self._text(f"Score: {snap.score}", W / 2, H / 2 + 20, SCORE_C, 24)
        label = "NEW High Score" if snap.new_high_score else "High Score"
        self._text(f"{label}: {snap.high_score}", W / 2, H / 2 + 55, DIM_C, 16)
        if self._blink():
            self._text("Press ENTER to Retry", W / 2, H * 0.78, PROMPT_C, 18)

    def _draw_win_scene(self, snap):
        W, H = self.width, self.height
        t = (snap.frame - (snap.ended_frame or snap.frame)) / self.session.fps
        self._draw_stars(snap)

        # Earth grows to fill the view
        scale = min(2.5, 0.4 + t * 0.5)
        size = 200 * scale
        cy = H / 2 + t * 15
        self._texture(self._earth_texture, W / 2, cy, size, size, self.earth_angle + t * 0.01)
        arcade.draw_circle_outline(W / 2 + self._ox, H - (cy + self._oy), size / 2 + 6, (100, 160, 255, 60), 4)

        self._text("EARTH REACHED!", W / 2, H * 0.15, (100, 255, 150, int(min(255, t * 100))), 44, bold=True)
        if t > 1.5:
            self._text(f"Final Score: {snap.score}", W / 2, H * 0.78, SCORE_C, 22)
            label = "NEW High Score" if snap.new_high_score else "High Score"
            self._text(f"{label}: {snap.high_score}", W / 2, H * 0.84, DIM_C, 16)
        if t > 3 and self._blink():
            self._text("Press ENTER to Play Again", W / 2, H * 0.92, PROMPT_C, 18)


def run_game(session: Session, audio: Optional[AudioPlayer] = None, seed: Optional[int] = None):
    """Open the window and hand control to arcade's event loop"""
    window = AsteroidsWindow(session, audio=audio, seed=seed)
    arcade.run()
    return window

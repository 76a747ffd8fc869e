"""
Configuration constants for Asteroid Destroyer.

All timing assumes a fixed 60 ticks per second; speeds are in pixels per tick.
"""

# ---------------------------------------------------------------------------
# Display / timing
# ---------------------------------------------------------------------------
WIDTH: int = 800
HEIGHT: int = 600
FPS: int = 60
GAME_DURATION: float = 60.0  # seconds of play needed to reach Earth
TITLE: str = "Asteroid Destroyer - Journey Home"

# ---------------------------------------------------------------------------
# Ship
# ---------------------------------------------------------------------------
SHIP_SPEED: float = 5.0
SHIP_RADIUS: float = 16.0
SHIP_PIXEL: int = 3
SHIP_SPRITE_SIZE: int = 14 * SHIP_PIXEL
SHIP_START_OFFSET: float = 90.0  # distance from the bottom edge
SHIP_EDGE_MARGIN: float = 5.0
SHIP_TOP_LIMIT: float = 0.15  # fraction of height the ship may climb to
SHIP_MAX_TILT: float = 0.18
SHIP_TILT_EASE: float = 0.15
DIAGONAL: float = 0.707

# ---------------------------------------------------------------------------
# Missiles
# ---------------------------------------------------------------------------
FIRE_RATE: int = 10  # ticks between shots
MISSILE_SPEED: float = 10.0
MISSILE_RADIUS: float = 4.0
MISSILE_EXIT_Y: float = -20.0

# ---------------------------------------------------------------------------
# Asteroids
# ---------------------------------------------------------------------------
ASTEROID_RADIUS_RANGE = (12.0, 36.0)
ASTEROID_SPEED_RANGE = (1.5, 3.5)
ASTEROID_DRIFT: float = 0.5
ASTEROID_SPIN: float = 0.02
ASTEROID_ENTRY_RANGE = (10.0, 100.0)  # extra distance above the top edge
ASTEROID_SIDE_MARGIN: float = 10.0
ASTEROID_EXIT_MARGIN: float = 20.0
ASTEROID_TEMPLATES: int = 3
SHIP_HIT_FACTOR: float = 0.7  # asteroid radius shrink for ship collisions

# (radius upper bound, points); anything larger scores ASTEROID_BASE_POINTS
ASTEROID_POINT_TIERS = ((20.0, 30), (30.0, 20))
ASTEROID_BASE_POINTS: int = 10
DODGE_BONUS: int = 5

# ---------------------------------------------------------------------------
# Difficulty
# ---------------------------------------------------------------------------
DEFAULT_CURVE: str = "linear"
BASE_SPAWN_INTERVAL: int = 35

# ---------------------------------------------------------------------------
# Particles / effects
# ---------------------------------------------------------------------------
MAX_PARTICLES: int = 300
PARTICLE_SPEED_RANGE = (1.0, 6.0)
PARTICLE_DECAY_RANGE = (0.02, 0.06)
PARTICLE_SIZE_RANGE = (2.0, 5.0)
PARTICLE_FRICTION: float = 0.95
EXPLOSION_COLORS = (
    (200, 200, 200),
    (255, 160, 50),
    (255, 240, 60),
    (255, 255, 255),
    (255, 100, 30),
    (140, 120, 90),
)
HIT_BURST_RANGE = (12, 28)  # particles for the smallest / largest asteroid
CRASH_BURST_ASTEROID: int = 25
CRASH_BURST_SHIP: int = 30

SHAKE_HIT: float = 3.0
SHAKE_CRASH: float = 12.0
SHAKE_DECAY: float = 0.85
SHAKE_CUTOFF: float = 0.5

# ---------------------------------------------------------------------------
# Background
# ---------------------------------------------------------------------------
STAR_COUNT: int = 200
STAR_SPEED_RANGE = (0.5, 3.0)
STAR_SIZE_RANGE = (1.0, 2.5)
STAR_ALPHA_RANGE = (80, 255)
STAR_RESPAWN_RANGE = (-20.0, -5.0)
STAR_PROGRESS_BOOST: float = 3.0

# ---------------------------------------------------------------------------
# HUD / persistence
# ---------------------------------------------------------------------------
PAUSE_BUTTON_RIGHT_INSET: int = 55  # button x = width - inset
PAUSE_BUTTON_TOP: int = 10
PAUSE_BUTTON_SIZE = (45, 35)  # w, h
HIGH_SCORE_KEY: str = "asteroidDestroyerHS2"
HIGH_SCORE_FILE: str = "~/.asteroid_destroyer.json"

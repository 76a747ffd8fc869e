"""Asteroid Destroyer - dodge and shoot your way home through an asteroid belt"""

from .session import Session, GameState, SessionSnapshot
from .events import GameEvent
from .input import Action, InputTracker, TickInput
from .highscore import HighScoreStore, MemoryHighScoreStore
from .env import AsteroidsEnv, run_random_episode

__all__ = [
    'Session', 'GameState', 'SessionSnapshot', 'GameEvent',
    'Action', 'InputTracker', 'TickInput',
    'HighScoreStore', 'MemoryHighScoreStore',
    'AsteroidsEnv', 'run_random_episode',
]

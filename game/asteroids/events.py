"""
Semantic events emitted by a session for the audio collaborator
"""

from enum import Enum


class GameEvent(str, Enum):
    SHOOT = "shoot"
    EXPLODE = "explode"
    SESSION_START = "sessionStart"
    SESSION_WIN = "sessionWin"
    SESSION_FAIL = "sessionFail"

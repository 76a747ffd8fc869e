"""
Audio collaborator: plays arcade's bundled sounds for session events.
"""

from typing import Dict, Iterable, Optional

import arcade

from .events import GameEvent

SOUND_FILES: Dict[GameEvent, str] = {
    GameEvent.SHOOT: ":resources:sounds/laser1.wav",
    GameEvent.EXPLODE: ":resources:sounds/explosion2.wav",
    GameEvent.SESSION_START: ":resources:sounds/upgrade1.wav",
    GameEvent.SESSION_WIN: ":resources:sounds/upgrade4.wav",
    GameEvent.SESSION_FAIL: ":resources:sounds/gameover3.wav",
}

VOLUMES: Dict[GameEvent, float] = {
    GameEvent.SHOOT: 0.25,
    GameEvent.EXPLODE: 0.5,
}


def load_sound_safe(path: str) -> Optional[arcade.Sound]:
    try:
        return arcade.load_sound(path)
    except Exception as e:  # missing file or no audio backend
        print(f"[WARN] Could not load sound {path}: {e}")
        return None


class AudioPlayer:
    """Fire-and-forget playback; nothing here feeds back into the game"""

    def __init__(self, muted: bool = False, volume: float = 1.0):
        self.muted = muted
        self.volume = volume
        self._sounds: Dict[GameEvent, Optional[arcade.Sound]] = {}

    def _sound(self, event: GameEvent) -> Optional[arcade.Sound]:
        if event not in self._sounds:
            self._sounds[event] = load_sound_safe(SOUND_FILES[event])
        return self._sounds[event]

    def handle(self, events: Iterable[GameEvent]):
        if self.muted:
            return
        # one playback per event kind per tick
        for event in dict.fromkeys(events):
            sound = self._sound(event)
            if sound is not None:
                arcade.play_sound(sound, volume=self.volume * VOLUMES.get(event, 0.6))

"""
High score persistence: one integer stored under a fixed key in a JSON file.
"""

import json
import os
from typing import Optional

from . import config as C


class HighScoreStore:
    """Reads and writes the best score. Unreadable data counts as 0."""

    def __init__(self, path: str = C.HIGH_SCORE_FILE, key: str = C.HIGH_SCORE_KEY, verbose: int = 0):
        self.path = os.path.expanduser(path)
        self.key = key
        self.verbose = verbose

    def _read(self) -> dict:
        with open(self.path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            value = int(self._read().get(self.key, 0))
        except (OSError, ValueError, TypeError, OverflowError) as e:
            print(f"[WARN] Could not read high score from {self.path}: {e}")
            return 0
        return max(0, value)

    def save(self, value: int) -> bool:
        data: dict = {}
        if os.path.exists(self.path):
            try:
                data = self._read()
            except (OSError, ValueError) as e:
                print(f"[WARN] Overwriting unreadable high score file {self.path}: {e}")

        data[self.key] = int(value)
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            print(f"[WARN] Could not save high score to {self.path}: {e}")
            return False

        if self.verbose > 0:
            print(f"[HighScore] Saved {value} to {self.path}")
        return True


class MemoryHighScoreStore:
    """In-process store for headless runs"""

    def __init__(self, value: Optional[int] = None):
        self.value = value or 0
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> bool:
        self.value = int(value)
        self.saves += 1
        return True

"""
Per-tick input snapshots.

Movement and fire are level-triggered (held); launch and pause are
edge-triggered on the tick the key goes down.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Set, Tuple


class Action(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    FIRE = "fire"
    LAUNCH = "launch"  # also retry / play again
    PAUSE = "pause"


@dataclass(frozen=True)
class TickInput:
    held: FrozenSet[Action] = frozenset()
    pressed: FrozenSet[Action] = frozenset()
    click: Optional[Tuple[float, float]] = None  # pointer press this tick, screen space

    @property
    def horizontal(self) -> int:
        mx = 0
        if Action.LEFT in self.held:
            mx = -1
        if Action.RIGHT in self.held:
            mx = 1
        return mx

    @property
    def vertical(self) -> int:
        my = 0
        if Action.UP in self.held:
            my = -1
        if Action.DOWN in self.held:
            my = 1
        return my

    @property
    def fire(self) -> bool:
        return Action.FIRE in self.held

    @property
    def launch(self) -> bool:
        return Action.LAUNCH in self.pressed

    @property
    def pause(self) -> bool:
        return Action.PAUSE in self.pressed


class InputTracker:
    """
    Turns successive held-key sets into TickInputs with press edges.

    Key-down events reported through press() are latched until the next poll,
    so a tap that starts and ends between two ticks still counts once.
    """

    def __init__(self):
        self._previous: FrozenSet[Action] = frozenset()
        self._latched: Set[Action] = set()

    def press(self, action: Action):
        self._latched.add(action)

    def poll(self, held: Iterable[Action], click: Optional[Tuple[float, float]] = None) -> TickInput:
        held = frozenset(held)
        pressed = (held - self._previous) | self._latched
        self._previous = held
        self._latched = set()
        return TickInput(held=held, pressed=frozenset(pressed), click=click)

    def reset(self):
        self._previous = frozenset()
        self._latched = set()

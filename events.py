# Input events consumed by the dispatcher.

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

WINDOW_RESIZE = "resize"
WINDOW_SHOW = "show"


@dataclass(frozen=True)
class PointerButton:
    button: int
    pressed: bool
    x: int
    y: int

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class PointerMotion:
    x: int
    y: int
    dx: int = 0
    dy: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Scroll:
    # Wheel units; positive dx scrolls right, positive dy scrolls up.
    dx: int
    dy: int


@dataclass(frozen=True)
class Key:
    key: str
    pressed: bool
    repeat: bool = False


@dataclass(frozen=True)
class WindowChanged:
    kind: str = WINDOW_RESIZE


@dataclass(frozen=True)
class Quit:
    pass


InputEvent = Union[PointerButton, PointerMotion, Scroll, Key, WindowChanged, Quit]

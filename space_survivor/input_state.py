"""
Input state written by the host and read once per tick by the simulation
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class InputSnapshot:
    """Consistent view of the input state taken at the start of a tick"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    pointer_x: float = 0.0
    pointer_y: float = 0.0


@dataclass
class InputState:
    """Mutable directional-key and pointer state owned by the host"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    pointer_x: float = 0.0
    pointer_y: float = 0.0

    def set_directional(self, direction: Direction, pressed: bool):
        setattr(self, Direction(direction).value, bool(pressed))

    def set_pointer(self, x: float, y: float):
        self.pointer_x = float(x)
        self.pointer_y = float(y)

    def snapshot(self) -> InputSnapshot:
        return InputSnapshot(
            up=self.up,
            down=self.down,
            left=self.left,
            right=self.right,
            pointer_x=self.pointer_x,
            pointer_y=self.pointer_y,
        )

"""Player state, collision against the map and keyboard/mouse steering."""

from __future__ import annotations

import math
from collections.abc import Collection
from dataclasses import dataclass
from typing import Protocol, Sequence

from .floodfill import PlayerStart

SPEED = 0.00005
MOUSE_SENSITIVITY = 0.025
COLLISION = 0.15
DEFAULT_SPEED = 0.025

KEY_FORWARD = "w"
KEY_BACK = "s"
KEY_RIGHT = "d"
KEY_LEFT = "a"
KEY_TURN_LEFT = "left"
KEY_TURN_RIGHT = "right"
MOUSE_TOGGLE = "mouse_middle"
LOOK_LEFT = "look_left"
LOOK_RIGHT = "look_right"

_ANGLES = {
    "E": 0.0,
    "W": math.pi,
    "N": 3 * math.pi / 2,
    "S": math.pi / 2,
}


class _Level(Protocol):
    grid: Sequence[str]
    width: int

    @property
    def height(self) -> int: ...


def initial_angle(direction: str) -> float:
    """Facing angle in radians for a spawn letter N, S, E or W."""
    try:
        return _ANGLES[direction]
    except KeyError:
        raise ValueError(f"Unknown direction: {direction!r}") from None


def is_wall(level: _Level, x: float, y: float) -> bool:
    """Return True if world point ``(x, y)`` lies in a wall or off the map."""
    nx = int(x)
    ny = int(y)
    if ny < 0 or ny >= level.height:
        return True
    if nx < 0 or nx >= level.width:
        return True
    row = level.grid[ny]
    return nx < len(row) and row[nx] == "1"


def can_move(level: _Level, x: float, y: float) -> bool:
    """Return True if a player of collision radius fits at ``(x, y)``."""
    diagonal = COLLISION / math.sqrt(2)
    probes = (
        (COLLISION, 0.0),
        (0.0, COLLISION),
        (-COLLISION, 0.0),
        (0.0, -COLLISION),
        (diagonal, diagonal),
        (-diagonal, diagonal),
        (diagonal, -diagonal),
        (-diagonal, -diagonal),
    )
    return not any(is_wall(level, x + ox, y + oy) for ox, oy in probes)


def movement_delta(
    angle: float, speed: float, keys: Collection[str]
) -> tuple[float, float] | None:
    """Step for the first held movement key (W, S, D, A), or None."""
    cos_a = math.cos(angle) * speed
    sin_a = math.sin(angle) * speed
    if KEY_FORWARD in keys:
        return cos_a, sin_a
    if KEY_BACK in keys:
        return -cos_a, -sin_a
    if KEY_RIGHT in keys:
        return -sin_a, cos_a
    if KEY_LEFT in keys:
        return sin_a, -cos_a
    return None


@dataclass
class Player:
    """Position, facing and movement state of the player."""

    pos_x: float
    pos_y: float
    direction: str
    angle: float
    speed: float = DEFAULT_SPEED
    moving: bool = False
    mouse_look: bool = False

    @classmethod
    def from_start(cls, start: PlayerStart) -> Player:
        """Create a player standing at the centre of its spawn cell."""
        return cls(
            pos_x=start.pos_x,
            pos_y=start.pos_y,
            direction=start.direction,
            angle=initial_angle(start.direction),
        )

    def move(self, level: _Level, dx: float, dy: float) -> bool:
        """Step by ``(dx, dy)``, sliding along walls; return whether it moved."""
        new_x = self.pos_x + dx
        new_y = self.pos_y + dy
        old_x, old_y = self.pos_x, self.pos_y
        moved = False
        if can_move(level, new_x, new_y):
            self.pos_x, self.pos_y = new_x, new_y
            moved = True
        else:
            if can_move(level, new_x, old_y):
                self.pos_x = new_x
                moved = True
            if can_move(level, old_x, new_y):
                self.pos_y = new_y
                moved = True
        if moved:
            self.moving = True
        return moved

    def rotate(self, keys: Collection[str]) -> None:
        """Turn for held arrow keys, toggle mouse look, apply mouse turning."""
        if KEY_TURN_LEFT in keys:
            self.angle -= self.speed
        if KEY_TURN_RIGHT in keys:
            self.angle += self.speed
        if MOUSE_TOGGLE in keys:
            self.mouse_look = not self.mouse_look
        if self.mouse_look:
            if LOOK_LEFT in keys:
                self.angle -= MOUSE_SENSITIVITY
            if LOOK_RIGHT in keys:
                self.angle += MOUSE_SENSITIVITY
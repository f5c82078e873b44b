"""Drawing the 3D view, the minimap and the player into a frame buffer."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from .player import Player, is_wall
from .raycast import cast_ray, texture_side, texture_x, wall_slice

MIN_WIDTH = 384
MIN_HEIGHT = 216
MINIMAP_SCALE = 16
STEP_SIZE = 0.5

GRAY_COLOR = 2054449919
BLACK_COLOR = 255
RED_COLOR = 0xFF0000FF

_PLAYER_SIZE = 5
_NEAREST = 1e-9


class _Level(Protocol):
    grid: Sequence[str]
    width: int
    floor: int
    ceiling: int

    @property
    def height(self) -> int: ...


@dataclass
class Frame:
    """A width x height buffer of 32-bit RGBA pixels, indexed ``[y, x]``."""

    width: int
    height: int
    pixels: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid frame size {self.width}x{self.height}")
        self.pixels = np.zeros((self.height, self.width), dtype=np.uint32)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at column ``x``, row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        self.pixels[y, x] = color


def _fill_square(frame: Frame, x: int, y: int, size: int, color: int) -> None:
    """Fill a square, clipped to the frame."""
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + size, frame.width), min(y + size, frame.height)
    if x0 < x1 and y0 < y1:
        frame.pixels[y0:y1, x0:x1] = color


def draw_floor_ceiling(frame: Frame, floor: int, ceiling: int) -> None:
    """Paint the upper half with ``floor`` and the lower half with ``ceiling``."""
    half = frame.height // 2
    frame.pixels[:half] = floor
    frame.pixels[half:] = ceiling


def _draw_column(
    frame: Frame,
    level: _Level,
    player: Player,
    textures: Mapping[str, np.ndarray],
    column: int,
    angle: float,
) -> None:
    hit = cast_ray(level.grid, player.pos_x, player.pos_y, angle, player.angle)
    span = wall_slice(frame.height, max(hit.distance, _NEAREST))
    if span.visible_end < span.visible_start:
        return
    texture = np.asarray(textures[texture_side(hit.side, hit.dir_x, hit.dir_y)])
    tex_height, tex_width = texture.shape[:2]
    tex_col = texture_x(hit.wall_x, tex_width)
    rows = np.arange(span.visible_start, span.visible_end + 1, dtype=np.int64)
    if span.height > 0:
        tex_rows = np.minimum(
            ((rows - span.original_start) * tex_height) // span.height,
            tex_height - 1,
        )
    else:
        tex_rows = np.zeros_like(rows)
    frame.pixels[rows, column] = texture[tex_rows, tex_col]


def draw_walls(
    frame: Frame,
    level: _Level,
    player: Player,
    textures: Mapping[str, np.ndarray],
) -> None:
    """Cast one ray per screen column and draw the textured wall it meets."""
    plane = frame.width / 2.0
    for column in range(frame.width):
        offset = (column + 0.5) - plane
        ray = player.angle + math.atan(offset / plane)
        _draw_column(frame, level, player, textures, column, ray)


def draw_minimap(frame: Frame, grid: Sequence[str], direction: str) -> None:
    """Draw the map grid as squares in the top-left corner."""
    color = 0
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char == "\n":
                break
            if char in "1 " or ord(char) <= 13:
                color = BLACK_COLOR
            elif char == "0" or char == direction:
                color = GRAY_COLOR
            _fill_square(
                frame, x * MINIMAP_SCALE, y * MINIMAP_SCALE, MINIMAP_SCALE, color
            )


def draw_player(frame: Frame, player: Player) -> None:
    """Mark the player's minimap position with a small red square."""
    x = int(player.pos_x * MINIMAP_SCALE)
    y = int(player.pos_y * MINIMAP_SCALE)
    half = _PLAYER_SIZE // 2
    _fill_square(frame, x - half, y - half, _PLAYER_SIZE, RED_COLOR)


def draw_minimap_rays(frame: Frame, level: _Level, player: Player) -> None:
    """Trace the player's line of sight on the minimap up to the first wall."""
    step_x = math.cos(player.angle) * STEP_SIZE
    step_y = math.sin(player.angle) * STEP_SIZE
    ray_x, ray_y = player.pos_x, player.pos_y
    while not is_wall(level, ray_x, ray_y):
        ray_x += step_x
        ray_y += step_y
        x = ray_x * MINIMAP_SCALE
        y = ray_y * MINIMAP_SCALE
        if 0 <= x < frame.width and 0 <= y < frame.height:
            frame.put_pixel(int(x), int(y), RED_COLOR)


def resize_target(width: int, height: int) -> tuple[int, int] | None:
    """Frame size to use after a window resize, or None to keep the current one."""
    if width <= MIN_WIDTH or height <= MIN_HEIGHT:
        if width == MIN_WIDTH and height == MIN_HEIGHT:
            return None
        new_width = MIN_WIDTH if width <= MIN_WIDTH else width
        new_height = MIN_HEIGHT if height <= MIN_HEIGHT else height
        return new_width, new_height
    return width, height


def render_scene(
    frame: Frame,
    level: _Level,
    player: Player,
    textures: Mapping[str, np.ndarray],
) -> None:
    """Draw a complete frame: background, walls, minimap, player and sight line."""
    draw_floor_ceiling(frame, level.floor, level.ceiling)
    draw_walls(frame, level, player, textures)
    draw_minimap(frame, level.grid, player.direction)
    draw_player(frame, player)
    draw_minimap_rays(frame, level, player)
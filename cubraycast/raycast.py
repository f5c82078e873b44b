"""Grid ray casting (DDA), wall slice geometry and texture sampling."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

_FAR = 1e30
_WALL = "1"


@dataclass(frozen=True)
class RayHit:
    """Where a ray struck a wall and how far away it was."""

    map_x: int
    map_y: int
    side: int
    dir_x: float
    dir_y: float
    distance: float
    wall_x: float


@dataclass(frozen=True)
class WallSlice:
    """Vertical extent of one wall column on screen."""

    height: int
    original_start: int
    original_end: int
    visible_start: int
    visible_end: int


def calc_delta(direction: float) -> float:
    """Distance along a ray between two grid lines of one axis."""
    if direction == 0.0:
        return _FAR
    return abs(1.0 / direction)


def _axis_setup(direction: float, pos: float, cell: int, delta: float) -> tuple[int, float]:
    if direction < 0:
        return -1, (pos - cell) * delta
    return 1, (cell + 1.0 - pos) * delta


def _is_wall_cell(grid: Sequence[str], x: int, y: int) -> bool:
    if y < 0 or y >= len(grid) or x < 0 or x >= len(grid[y]):
        return True
    return grid[y][x] == _WALL


def cast_ray(
    grid: Sequence[str],
    pos_x: float,
    pos_y: float,
    angle: float,
    view_angle: float,
) -> RayHit:
    """Cast a ray from ``(pos_x, pos_y)`` at ``angle`` until it meets a wall.

    The returned distance is corrected for the fisheye effect against
    ``view_angle``, the direction the viewer faces. Cells outside the grid
    stop the ray as walls do.
    """
    dir_x = math.cos(angle)
    dir_y = math.sin(angle)
    map_x = int(pos_x)
    map_y = int(pos_y)
    delta_x = calc_delta(dir_x)
    delta_y = calc_delta(dir_y)
    step_x, side_x = _axis_setup(dir_x, pos_x, map_x, delta_x)
    step_y, side_y = _axis_setup(dir_y, pos_y, map_y, delta_y)

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _is_wall_cell(grid, map_x, map_y):
            break

    if side == 0:
        dist = (map_x - pos_x + (1 - step_x) // 2) / dir_x
        hit = pos_y + dist * dir_y
    else:
        dist = (map_y - pos_y + (1 - step_y) // 2) / dir_y
        hit = pos_x + dist * dir_x
    return RayHit(
        map_x=map_x,
        map_y=map_y,
        side=side,
        dir_x=dir_x,
        dir_y=dir_y,
        distance=dist * math.cos(angle - view_angle),
        wall_x=hit - math.floor(hit),
    )


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def wall_slice(screen_height: int, distance: float) -> WallSlice:
    """Compute the on-screen span of a wall seen at ``distance``."""
    if distance <= 0:
        raise ValueError(f"distance must be positive, got {distance}")
    height = int(screen_height / distance)
    middle = screen_height // 2
    half = _trunc_div(height, 2)
    start = middle - half
    end = middle + half
    return WallSlice(
        height=height,
        original_start=start,
        original_end=end,
        visible_start=max(start, 0),
        visible_end=min(end, screen_height - 1),
    )


def texture_side(side: int, dir_x: float, dir_y: float) -> str:
    """Name of the wall face hit: ``north``, ``south``, ``east`` or ``west``."""
    if side == 0:
        return "east" if dir_x > 0 else "west"
    return "south" if dir_y > 0 else "north"


def texture_color(texture: Sequence[Sequence[int]], x: int, y: int) -> int:
    """Colour at column ``x``, row ``y`` of ``texture``; 0 when outside it."""
    height = len(texture)
    width = len(texture[0]) if height else 0
    if x < 0 or x >= width or y < 0 or y >= height:
        return 0
    return int(texture[y][x])


def texture_x(wall_x: float, width: int) -> int:
    """Texture column for a hit at fraction ``wall_x`` across a wall."""
    column = int(wall_x * width)
    return min(column, width - 1)


def texture_y(y: int, start: int, wall_height: int, tex_height: int) -> int:
    """Texture row for screen row ``y`` of a wall starting at ``start``."""
    if wall_height <= 0:
        return 0
    row = _trunc_div((y - start) * tex_height, wall_height)
    return min(row, tex_height - 1)
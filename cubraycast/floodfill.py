"""Player discovery and enclosure checks for a parsed map grid."""

from __future__ import annotations

from dataclasses import dataclass

_PLAYER_CHARS = frozenset("NSEW")
_OPEN_CHARS = frozenset(" \t\n")
_BLOCKING_CHARS = frozenset("1")


@dataclass(frozen=True)
class PlayerStart:
    """Grid cell and facing of the player's spawn point."""

    x: int
    y: int
    direction: str

    @property
    def pos_x(self) -> float:
        """Horizontal world position at the centre of the spawn cell."""
        return self.x + 0.5

    @property
    def pos_y(self) -> float:
        """Vertical world position at the centre of the spawn cell."""
        return self.y + 0.5


def find_player(grid: list[str]) -> PlayerStart:
    """Return the single player start in ``grid``.

    Raises ValueError unless exactly one of N, S, E or W appears.
    """
    found = [
        PlayerStart(x, y, char)
        for y, row in enumerate(grid)
        for x, char in enumerate(row)
        if char in _PLAYER_CHARS
    ]
    if len(found) != 1:
        raise ValueError(f"Wrong player count: {len(found)}")
    return found[-1]


def pad_grid(grid: list[str], width: int) -> list[str]:
    """Return the rows of ``grid`` cut or padded with spaces to ``width``."""
    return [row[:width].ljust(width) for row in grid]


def _is_enclosed(grid: list[str], start_x: int, start_y: int) -> bool:
    height = len(grid)
    visited: set[tuple[int, int]] = set()
    stack = [(start_x, start_y)]
    while stack:
        x, y = stack.pop()
        if y < 0 or y >= height or x < 0 or x >= len(grid[y]):
            return False
        char = grid[y][x]
        if char in _OPEN_CHARS:
            return False
        if char in _BLOCKING_CHARS or (x, y) in visited:
            continue
        visited.add((x, y))
        stack.extend(((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)))
    return True


def is_map_closed(grid: list[str], width: int) -> PlayerStart:
    """Check that the area reachable from the player is walled in.

    Returns the player start. Raises ValueError when the player count is
    wrong or when the reachable area touches a gap or the map's edge.
    """
    padded = pad_grid(grid, width)
    start = find_player(grid)
    if not _is_enclosed(padded, start.x, start.y):
        raise ValueError("Map not enclosed")
    return start
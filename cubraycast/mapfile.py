"""Reading and validating ``.cub`` scene description files."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field

from .floodfill import PlayerStart, is_map_closed

_METADATA_COUNT = 6
_PATH_IDENTIFIERS = {"NO": "north", "SO": "south", "EA": "east", "WE": "west"}
_COLOR_IDENTIFIERS = {"F": "floor", "C": "ceiling"}
_TRIM = " \n\t"
_BLANK_CHARS = frozenset(" \n\t")
_MAP_CHARS = frozenset("01 \nNESW")
_SPACE_CHARS = frozenset(" \t\n\v\f\r")
_DIGITS = frozenset("0123456789")


class MapError(ValueError):
    """A scene file is missing, malformed or describes an invalid map."""


@dataclass
class MapData:
    """Everything a scene file describes."""

    north: str
    south: str
    west: str
    east: str
    floor: int
    ceiling: int
    grid: list[str] = field(default_factory=list)
    width: int = 0
    player: PlayerStart | None = None

    @property
    def height(self) -> int:
        """Number of map rows."""
        return len(self.grid)


def is_valid_ext(name: str) -> bool:
    """Return True if ``name`` has a stem and ends in ``.cub``."""
    return len(name) >= 5 and name.endswith(".cub")


def is_empty_line(line: str) -> bool:
    """Return True for a non-empty line of only spaces, tabs and newlines."""
    return bool(line) and all(char in _BLANK_CHARS for char in line)


def is_valid_map_line(line: str) -> bool:
    """Return True if every character may appear in a map row."""
    return all(char in _MAP_CHARS for char in line)


def _is_rgb_format(text: str) -> bool:
    allowed = all(
        char in _DIGITS or char == "," or char in _SPACE_CHARS for char in text
    )
    return allowed and text.count(",") == 2


def _read_component(text: str, pos: int) -> tuple[int | None, int]:
    """Read one number and its separator, returning (value, next position)."""
    while pos < len(text) and text[pos] in " \t":
        pos += 1
    if pos >= len(text) or text[pos] not in _DIGITS:
        return None, pos
    end = pos
    while end < len(text) and text[end] in _DIGITS:
        end += 1
    value = int(text[pos:end])
    pos = end
    while pos < len(text) and text[pos] in " \t":
        pos += 1
    if pos < len(text) and text[pos] == ",":
        pos += 1
    return value, pos


def parse_color(text: str) -> int:
    """Parse ``R,G,B`` into a 32-bit RGBA value with full opacity."""
    trimmed = text.strip(_TRIM)
    if not _is_rgb_format(trimmed):
        raise MapError(f"Invalid color: {trimmed!r}")
    components = []
    pos = 0
    for _ in range(3):
        value, pos = _read_component(trimmed, pos)
        components.append(value)
    if any(value is None or value > 255 for value in components):
        raise MapError(f"Invalid color: {trimmed!r}")
    red, green, blue = components
    return (red << 24) | (green << 16) | (blue << 8) | 0xFF


def _parse_metadata(line: str, meta: dict[str, object]) -> bool:
    trimmed = line.lstrip(" \t")
    for ident, name in _PATH_IDENTIFIERS.items():
        if trimmed.startswith(ident + " "):
            if name in meta:
                return False
            path = trimmed[len(ident) + 1:].strip(_TRIM)
            if not path:
                return False
            meta[name] = path
            return True
    for ident, name in _COLOR_IDENTIFIERS.items():
        if trimmed.startswith(ident + " "):
            if name in meta:
                return False
            try:
                meta[name] = parse_color(trimmed[len(ident) + 1:])
            except MapError:
                return False
            return True
    return False


def parse_lines(lines: Iterable[str]) -> MapData:
    """Build a validated MapData from the lines of a scene file.

    Lines keep their trailing newline, as read from the file.
    """
    meta: dict[str, object] = {}
    rows: list[str] = []
    width = 0
    for line in lines:
        if len(meta) < _METADATA_COUNT:
            if is_empty_line(line):
                continue
            if _parse_metadata(line, meta):
                continue
            raise MapError("Missing metadata or invalid identifier")
        if not is_valid_map_line(line):
            raise MapError("Invalid map line")
        row = line[:-1] if line.endswith("\n") else line
        rows.append(row)
        width = max(width, len(row))
    if len(meta) != _METADATA_COUNT:
        raise MapError("Metadata missing")
    if not rows:
        raise MapError("Map missing")
    try:
        player = is_map_closed(rows, width)
    except ValueError as exc:
        raise MapError(str(exc)) from exc
    return MapData(grid=rows, width=width, player=player, **meta)


def _split_lines(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def load_map(path: str | os.PathLike[str]) -> MapData:
    """Read and validate the scene file at ``path``."""
    if not is_valid_ext(os.fspath(path)):
        raise MapError("Invalid file extension")
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise MapError("Failed to open map file") from exc
    return parse_lines(_split_lines(text))
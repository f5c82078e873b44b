"""Window, input handling and the main loop of the game."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence

import numpy as np
import pygame

from .mapfile import MapData, MapError, load_map
from .player import (
    KEY_BACK,
    KEY_FORWARD,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_TURN_LEFT,
    KEY_TURN_RIGHT,
    LOOK_LEFT,
    LOOK_RIGHT,
    MOUSE_TOGGLE,
    SPEED,
    Player,
    movement_delta,
)
from .render import MIN_HEIGHT, MIN_WIDTH, Frame, render_scene, resize_target

TITLE = "Cub3D"
_SIDES = ("east", "north", "west", "south")
_FPS = 60
_KEY_BINDINGS = {
    pygame.K_w: KEY_FORWARD,
    pygame.K_s: KEY_BACK,
    pygame.K_d: KEY_RIGHT,
    pygame.K_a: KEY_LEFT,
    pygame.K_LEFT: KEY_TURN_LEFT,
    pygame.K_RIGHT: KEY_TURN_RIGHT,
}


def _surface_to_texture(surface: pygame.Surface) -> np.ndarray:
    rgb = pygame.surfarray.array3d(surface).astype(np.uint32)
    alpha = pygame.surfarray.array_alpha(surface).astype(np.uint32)
    packed = (rgb[..., 0] << 24) | (rgb[..., 1] << 16) | (rgb[..., 2] << 8) | alpha
    return np.ascontiguousarray(packed.T)


def load_textures(map_data: MapData) -> dict[str, np.ndarray]:
    """Load the four wall images as ``[row, column]`` arrays of RGBA values."""
    textures = {}
    for side in _SIDES:
        try:
            surface = pygame.image.load(getattr(map_data, side))
        except (pygame.error, OSError) as exc:
            raise OSError("Failed to load textures") from exc
        textures[side] = _surface_to_texture(surface)
    return textures


def _frame_to_rgb(frame: Frame) -> np.ndarray:
    pixels = frame.pixels
    rgb = np.stack(
        [(pixels >> 24) & 0xFF, (pixels >> 16) & 0xFF, (pixels >> 8) & 0xFF],
        axis=-1,
    ).astype(np.uint8)
    return rgb.transpose(1, 0, 2)


class Game:
    """A loaded level, its textures and the player exploring it."""

    def __init__(self, map_data: MapData, textures: Mapping[str, np.ndarray]):
        if map_data.player is None:
            raise ValueError("map has no player start")
        self.level = map_data
        self.textures = dict(textures)
        self.player = Player.from_start(map_data.player)
        self.frame = Frame(MIN_WIDTH, MIN_HEIGHT)
        self.running = False

    def _resize(self, width: int, height: int) -> pygame.Surface:
        self.frame = Frame(width, height)
        self.player.speed = height * SPEED
        return pygame.display.set_mode((width, height), pygame.RESIZABLE)

    def _held_keys(self) -> set[str]:
        pressed = pygame.key.get_pressed()
        keys = {name for code, name in _KEY_BINDINGS.items() if pressed[code]}
        if pygame.mouse.get_pressed()[1]:
            keys.add(MOUSE_TOGGLE)
        mouse_x, _ = pygame.mouse.get_pos()
        centre = self.frame.width // 2
        if mouse_x < centre:
            keys.add(LOOK_LEFT)
        elif mouse_x > centre:
            keys.add(LOOK_RIGHT)
        return keys

    def _step(self, keys: set[str]) -> None:
        delta = movement_delta(self.player.angle, self.player.speed, keys)
        if delta is None:
            self.player.moving = False
        else:
            self.player.move(self.level, *delta)
        self.player.rotate(keys)

    def run(self) -> None:
        """Open the window and play until it is closed or Escape is pressed."""
        pygame.init()
        try:
            info = pygame.display.Info()
            width = max(info.current_w // 2, MIN_WIDTH)
            height = max(info.current_h // 2, MIN_HEIGHT)
            pygame.display.set_caption(TITLE)
            screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
            self.frame = Frame(width, height)
            clock = pygame.time.Clock()
            self.running = True
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.VIDEORESIZE:
                        target = resize_target(event.w, event.h)
                        if target is not None:
                            screen = self._resize(*target)
                render_scene(self.frame, self.level, self.player, self.textures)
                surface = pygame.surfarray.make_surface(_frame_to_rgb(self.frame))
                screen.blit(surface, (0, 0))
                pygame.display.flip()
                self._step(self._held_keys())
                if self.player.mouse_look:
                    pygame.mouse.set_visible(False)
                    pygame.mouse.set_pos(
                        (self.frame.width // 2, self.frame.height // 2)
                    )
                if pygame.key.get_pressed()[pygame.K_ESCAPE]:
                    self.running = False
                clock.tick(_FPS)
        finally:
            pygame.quit()


def run_game(path: str) -> int:
    """Load the scene at ``path`` and play it; return 0 on success, 1 on error."""
    try:
        map_data = load_map(path)
    except MapError as exc:
        print(f"Error: {exc}")
        return 1
    try:
        textures = load_textures(map_data)
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    Game(map_data, textures).run()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point: expects the path of one ``.cub`` file."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) == 1 and args[0]:
        run_game(args[0])
    else:
        print("Usage: cubraycast <map.cub>")
    return 0
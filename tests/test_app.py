import math

import numpy as np
import pygame
import pytest

from cubraycast.app import Game, load_textures, main, run_game
from cubraycast.mapfile import MapData, load_map
from cubraycast.player import initial_angle

COLOR = (10, 20, 30, 255)
SIDES = {"north", "south", "east", "west"}


def _write_png(path, color=COLOR):
    surface = pygame.Surface((2, 3), pygame.SRCALPHA)
    surface.fill(color)
    pygame.image.save(surface, str(path))


def _write_map(tmp_path, with_textures=True, rows=("111", "1N1", "111")):
    paths = {}
    for ident in ("NO", "SO", "WE", "EA"):
        path = tmp_path / f"{ident.lower()}.png"
        if with_textures:
            _write_png(path)
        paths[ident] = path
    lines = [f"{ident} {path}" for ident, path in paths.items()]
    lines += ["F 220,100,0", "C 225,30,0", ""]
    lines += list(rows)
    map_path = tmp_path / "level.cub"
    map_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return map_path


def test_load_textures_packs_rgba(tmp_path):
    map_data = load_map(_write_map(tmp_path))
    textures = load_textures(map_data)
    assert set(textures) == SIDES
    for texture in textures.values():
        assert texture.shape == (3, 2)
        assert (texture == 0x0A141EFF).all()


def test_load_textures_missing_file_raises(tmp_path):
    map_data = load_map(_write_map(tmp_path, with_textures=False))
    with pytest.raises(OSError, match="Failed to load textures"):
        load_textures(map_data)


def test_run_game_bad_extension(capsys):
    assert run_game("level.txt") == 1
    assert "Invalid file extension" in capsys.readouterr().out


def test_run_game_invalid_map(tmp_path, capsys):
    map_path = _write_map(tmp_path, rows=("111", "101", "111"))
    assert run_game(str(map_path)) == 1
    assert "Error:" in capsys.readouterr().out


def test_run_game_missing_textures(tmp_path, capsys):
    map_path = _write_map(tmp_path, with_textures=False)
    assert run_game(str(map_path)) == 1
    assert "Failed to load textures" in capsys.readouterr().err


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 0
    assert "Usage" in capsys.readouterr().out


def test_main_with_bad_map_reports_error(capsys):
    assert main(["level.txt"]) == 0
    assert "Invalid file extension" in capsys.readouterr().out


def test_game_places_player_at_start(tmp_path):
    map_data = load_map(_write_map(tmp_path))
    textures = load_textures(map_data)
    game = Game(map_data, textures)
    assert game.player.pos_x == map_data.player.pos_x
    assert game.player.pos_y == map_data.player.pos_y
    assert math.isclose(game.player.angle, initial_angle("N"))
    assert game.running is False


def test_game_requires_player_start():
    map_data = MapData(
        north="n.png",
        south="s.png",
        west="w.png",
        east="e.png",
        floor=255,
        ceiling=255,
        grid=["111"],
        width=3,
    )
    with pytest.raises(ValueError):
        Game(map_data, {side: np.zeros((1, 1), dtype=np.uint32) for side in SIDES})
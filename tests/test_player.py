import math
from types import SimpleNamespace

import pytest

from cubraycast.floodfill import PlayerStart
from cubraycast.player import (
    COLLISION,
    MOUSE_SENSITIVITY,
    Player,
    can_move,
    initial_angle,
    is_wall,
    movement_delta,
)

GRID = [
    "11111",
    "10001",
    "10N01",
    "10001",
    "11111",
]


@pytest.fixture
def level():
    return SimpleNamespace(grid=GRID, width=5, height=5)


def test_initial_angles():
    assert initial_angle("E") == 0
    assert initial_angle("W") == pytest.approx(math.pi)
    assert initial_angle("N") == pytest.approx(3 * math.pi / 2)
    assert initial_angle("S") == pytest.approx(math.pi / 2)


def test_initial_angle_rejects_unknown():
    with pytest.raises(ValueError):
        initial_angle("X")


def test_is_wall(level):
    assert is_wall(level, 2.5, 2.5) is False
    assert is_wall(level, 0.5, 2.5) is True
    assert is_wall(level, 10.0, 2.0) is True
    assert is_wall(level, 2.0, -1.5) is True


def test_can_move(level):
    assert can_move(level, 2.5, 2.5) is True
    assert can_move(level, 1.0 + COLLISION / 2, 2.5) is False


def test_movement_delta_none_without_keys():
    assert movement_delta(0.0, 0.1, set()) is None


def test_movement_delta_forward_and_back():
    fwd = movement_delta(0.7, 0.1, {"w"})
    back = movement_delta(0.7, 0.1, {"s"})
    assert fwd == pytest.approx((math.cos(0.7) * 0.1, math.sin(0.7) * 0.1))
    assert back == pytest.approx((-fwd[0], -fwd[1]))


def test_movement_delta_strafe_is_perpendicular():
    fwd = movement_delta(0.7, 0.1, {"w"})
    right = movement_delta(0.7, 0.1, {"d"})
    left = movement_delta(0.7, 0.1, {"a"})
    assert fwd[0] * right[0] + fwd[1] * right[1] == pytest.approx(0.0)
    assert left == pytest.approx((-right[0], -right[1]))


def test_forward_takes_priority():
    assert movement_delta(0.7, 0.1, {"w", "s"}) == movement_delta(0.7, 0.1, {"w"})


def test_from_start():
    player = Player.from_start(PlayerStart(2, 2, "N"))
    assert (player.pos_x, player.pos_y) == (2.5, 2.5)
    assert player.angle == pytest.approx(3 * math.pi / 2)
    assert player.direction == "N"


def test_move_free(level):
    player = Player(2.5, 2.5, "E", 0.0)
    assert player.move(level, 0.1, 0.0) is True
    assert player.pos_x == pytest.approx(2.6)
    assert player.moving is True


def test_move_slides_along_wall(level):
    player = Player(1.3, 2.5, "W", math.pi)
    assert player.move(level, -0.5, 0.1) is True
    assert player.pos_x == pytest.approx(1.3)
    assert player.pos_y == pytest.approx(2.6)


def test_move_blocked(level):
    player = Player(1.3, 1.3, "W", math.pi)
    assert player.move(level, -0.5, -0.5) is False
    assert (player.pos_x, player.pos_y) == (1.3, 1.3)
    assert player.moving is False


def test_rotate_keys():
    player = Player(2.5, 2.5, "E", 1.0, speed=0.1)
    player.rotate({"left"})
    assert player.angle == pytest.approx(0.9)
    player.rotate({"right", "left"})
    assert player.angle == pytest.approx(0.9)


def test_mouse_look_toggle():
    player = Player(2.5, 2.5, "E", 1.0)
    player.rotate({"look_right"})
    assert player.angle == 1.0
    player.rotate({"mouse_middle"})
    assert player.mouse_look is True
    player.rotate({"look_right"})
    assert player.angle == pytest.approx(1.0 + MOUSE_SENSITIVITY)
    player.rotate({"mouse_middle"})
    assert player.mouse_look is False
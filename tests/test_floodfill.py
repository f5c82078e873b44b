import pytest

from cubraycast.floodfill import PlayerStart, find_player, is_map_closed, pad_grid

CLOSED = [
    "11111",
    "10001",
    "10N01",
    "11111",
]


def test_find_player_returns_cell_and_direction():
    start = find_player(CLOSED)
    assert start == PlayerStart(2, 2, "N")


def test_player_position_is_cell_centre():
    start = find_player(CLOSED)
    assert start.pos_x == start.x + 0.5
    assert start.pos_y == start.y + 0.5


def test_find_player_without_player_raises():
    with pytest.raises(ValueError, match="Wrong player count: 0"):
        find_player(["111", "101", "111"])


def test_find_player_with_two_players_raises():
    with pytest.raises(ValueError, match="Wrong player count"):
        find_player(["1111", "1NS1", "1111"])


def test_pad_grid_fills_short_rows_with_spaces():
    padded = pad_grid(["1", "111"], 3)
    assert padded == ["1  ", "111"]


def test_pad_grid_rows_all_have_width():
    rows = ["1", "", "11111", "101"]
    padded = pad_grid(rows, 5)
    assert all(len(row) == 5 for row in padded)
    assert [row.rstrip() for row in padded] == rows


def test_closed_map_returns_player():
    assert is_map_closed(CLOSED, 5) == find_player(CLOSED)


def test_floor_on_edge_is_open():
    grid = ["11111", "10N00", "11111"]
    with pytest.raises(ValueError, match="Map not enclosed"):
        is_map_closed(grid, 5)


def test_space_inside_reachable_area_is_open():
    grid = ["11111", "10 01", "10N01", "11111"]
    with pytest.raises(ValueError, match="Map not enclosed"):
        is_map_closed(grid, 5)


def test_short_row_padding_opens_map():
    grid = ["11111", "1N0", "11111"]
    with pytest.raises(ValueError, match="Map not enclosed"):
        is_map_closed(grid, 5)


def test_unreachable_gap_does_not_matter():
    grid = [
        "111 0",
        "1N1  ",
        "111  ",
    ]
    assert is_map_closed(grid, 5).direction == "N"


def test_player_count_checked_before_enclosure():
    with pytest.raises(ValueError, match="Wrong player count"):
        is_map_closed(["000"], 3)
import pytest

from solong.mapfile import MapError, parse_map
from solong.validate import Layout, check_map, check_walls, flood_fill, scan_tiles

VALID = "1111111\n1P0C0E1\n1111111\n"


def test_check_map_valid_layout():
    layout = check_map(parse_map(VALID))
    assert layout.player == (1, 1)
    assert layout.exit == (1, 5)
    assert layout.coins == 1
    assert layout.player_count == 1
    assert layout.exit_count == 1


def test_check_walls_vertical():
    with pytest.raises(MapError, match="vertical"):
        check_walls(parse_map("111111\n0PCE01\n111111\n"))


def test_check_walls_horizontal():
    with pytest.raises(MapError, match="horizontal"):
        check_walls(parse_map("110111\n1PCE01\n111111\n"))


def test_scan_tiles_rejects_unknown():
    with pytest.raises(MapError, match="Invalid character"):
        scan_tiles(parse_map("111111\n1PZCE1\n111111\n"))


def test_scan_tiles_ghost_only_in_bonus():
    mapdata = parse_map("11111111\n1PC0RE01\n11111111\n")
    with pytest.raises(MapError, match="Invalid character"):
        scan_tiles(mapdata, False)
    layout = scan_tiles(mapdata, True)
    assert layout.ghosts == {"R": (1, 4)}


def test_flood_fill_through_exit_reaches_everything():
    mapdata = parse_map(VALID)
    grid = flood_fill(mapdata, scan_tiles(mapdata), True)
    assert grid[1] == "1XXXXX1"
    assert set("".join(grid)) <= {"0", "1", "X"}


def test_flood_fill_unreachable_coin():
    mapdata = parse_map("1111111\n1P0E1C1\n1111111\n")
    with pytest.raises(MapError, match="path"):
        flood_fill(mapdata, scan_tiles(mapdata), True)


def test_coin_behind_exit_fails_second_pass():
    mapdata = parse_map("11111\n1P1C1\n1E001\n11111\n")
    layout = scan_tiles(mapdata)
    grid = flood_fill(mapdata, layout, True)
    assert "C" not in "".join(grid)
    with pytest.raises(MapError, match="path"):
        flood_fill(mapdata, layout, False)


def test_check_map_no_coin():
    with pytest.raises(MapError, match="Check objects"):
        check_map(parse_map("11111\n1P0E1\n11111\n"))


def test_check_map_two_players():
    with pytest.raises(MapError, match="Check objects"):
        check_map(parse_map("111111\n1PPCE1\n111111\n"))


def test_check_map_bonus_message():
    with pytest.raises(MapError, match="Check your map"):
        check_map(parse_map("11111\n1P0E1\n11111\n"), bonus=True)


def test_check_map_bonus_with_ghost():
    layout = check_map(parse_map("11111111\n1PC0RE01\n11111111\n"), bonus=True)
    assert layout.ghosts["R"] == (1, 4)
    assert layout.coins == 1


def test_check_map_bonus_ghost_behind_exit():
    with pytest.raises(MapError, match="path"):
        check_map(parse_map("1111111\n1PCE0R1\n1111111\n"), bonus=True)


def test_flood_fill_leaves_input_untouched():
    mapdata = parse_map(VALID)
    before = mapdata.rows
    flood_fill(mapdata, scan_tiles(mapdata), False)
    assert mapdata.rows == before


def test_layout_defaults():
    layout = Layout()
    assert layout.player_count == 0
    assert dict(layout.ghosts) == {}
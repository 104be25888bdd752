import pytest

from solong.game import Direction, Game, GameOver, Outcome
from solong.mapfile import MapError, parse_map

LINE_MAP = "1111111\n1P0C0E1\n1111111\n"
EXIT_FIRST_MAP = "11111\n1PE01\n10001\n10C01\n11111\n"
GHOST_NEXT_MAP = "1111111\n1PRC0E1\n1111111\n"
GHOST_ROOM_MAP = "1111111\n1P0C0E1\n1000R01\n1111111\n"


class FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, stop):
        assert stop == 4
        return self.value


def game(text, bonus=False):
    return Game.from_map(parse_map(text), bonus)


def test_from_map_locates_player_and_coins():
    g = game(LINE_MAP)
    assert g.player == (1, 1)
    assert g.coins == 1
    assert g.exit_open is False
    assert g.rows() == ("1111111", "1P0C0E1", "1111111")


def test_from_map_rejects_invalid_map():
    with pytest.raises(MapError):
        game("1111\n1P01\n1111\n")


def test_press_moves_player():
    g = game(LINE_MAP)
    assert g.press(Direction.RIGHT) is True
    assert g.player == (1, 2)
    assert g.rows()[1] == "10PC0E1"
    assert g.movements == 1


def test_press_into_wall_only_turns():
    g = game(LINE_MAP)
    assert g.press(Direction.UP) is False
    assert g.player == (1, 1)
    assert g.movements == 0
    assert g.facing is Direction.UP


def test_collecting_coin_opens_exit():
    g = game(LINE_MAP)
    g.press(Direction.RIGHT)
    g.press(Direction.RIGHT)
    assert g.coins == 0
    assert g.exit_open is True
    assert g.rows()[1] == "100P0E1"


def test_closed_exit_blocks_player():
    g = game(EXIT_FIRST_MAP)
    before = g.rows()
    assert g.press(Direction.RIGHT) is False
    assert g.rows() == before
    assert g.movements == 0


def test_reaching_open_exit_wins():
    g = game(LINE_MAP)
    for _ in range(3):
        g.press(Direction.RIGHT)
    with pytest.raises(GameOver) as info:
        g.press(Direction.RIGHT)
    assert info.value.outcome is Outcome.WIN
    assert info.value.movements == 4
    assert g.rows()[1] == "1000001"


def test_status_lines():
    g = game(LINE_MAP)
    g.press(Direction.RIGHT)
    assert g.status_line() == "You moved 1 times."
    assert game(LINE_MAP, bonus=True).status_line() == "Moved : 0 time"


def test_can_move():
    g = game(LINE_MAP)
    assert g.can_move((1, 1), Direction.RIGHT) is True
    assert g.can_move((1, 1), Direction.LEFT) is False
    assert g.can_move((1, 1), Direction.DOWN) is False


def test_moving_back_the_opposite_way_returns_to_start():
    g = game(LINE_MAP)
    assert g.press(Direction.RIGHT) is True
    assert g.press(Direction.RIGHT.opposite) is True
    assert g.player == (1, 1)
    assert g.movements == 2
    assert g.rows()[1] == "1P0C0E1"


def test_bonus_press_only_steers():
    g = game(LINE_MAP, bonus=True)
    assert g.press(Direction.RIGHT) is False
    assert g.wanted is Direction.RIGHT
    assert g.player == (1, 1)


def test_bonus_player_moves_after_period():
    g = game(LINE_MAP, bonus=True)
    g.steer(Direction.RIGHT)
    for _ in range(Game.PLAYER_PERIOD):
        g.move_player()
    assert g.player == (1, 1)
    g.move_player()
    assert g.player == (1, 2)
    assert g.heading is Direction.RIGHT
    assert g.mouth_open is False
    assert g.movements == 1


def test_bonus_player_keeps_heading_into_wall():
    g = game(LINE_MAP, bonus=True)
    for _ in range(Game.PLAYER_PERIOD + 1):
        g.move_player()
    assert g.player == (1, 1)
    assert g.movements == 0


def test_bonus_player_walking_into_ghost_loses():
    g = game(GHOST_NEXT_MAP, bonus=True)
    g.steer(Direction.RIGHT)
    with pytest.raises(GameOver) as info:
        for _ in range(Game.PLAYER_PERIOD + 1):
            g.move_player()
    assert info.value.outcome is Outcome.LOSS


def test_ghost_moves_after_period():
    g = game(GHOST_ROOM_MAP, bonus=True)
    g.rng = FixedRng(int(Direction.RIGHT))
    for _ in range(Game.GHOST_PERIOD):
        g.move_ghosts()
    assert g.rows()[2] == "1000R01"
    g.move_ghosts()
    assert g.rows()[2] == "10000R1"
    assert g.ghosts["R"].position == (2, 5)
    assert g.ghosts["R"].heading is Direction.RIGHT


def test_ghost_turns_at_wall():
    g = game(GHOST_ROOM_MAP, bonus=True)
    g.rng = FixedRng(int(Direction.RIGHT))
    for _ in range(Game.GHOST_PERIOD + 1):
        g.move_ghosts()
    for _ in range(Game.GHOST_PERIOD):
        g.move_ghosts()
    ghost = g.ghosts["R"]
    assert ghost.position == (2, 5)
    assert ghost.wanted is Direction.UP


def test_ghost_catching_player_loses():
    g = game(GHOST_NEXT_MAP, bonus=True)
    g.rng = FixedRng(int(Direction.LEFT))
    with pytest.raises(GameOver) as info:
        for _ in range(Game.GHOST_PERIOD + 1):
            g.move_ghosts()
    assert info.value.outcome is Outcome.LOSS
    assert g.rows()[1][1] == "0"


def test_tick_does_nothing_in_classic_game():
    g = game(LINE_MAP)
    before = g.rows()
    for _ in range(Game.PLAYER_PERIOD + 1):
        g.tick()
    assert g.rows() == before
    assert g.movements == 0


def test_tick_moves_bonus_player():
    g = game(LINE_MAP, bonus=True)
    g.steer(Direction.RIGHT)
    for _ in range(Game.PLAYER_PERIOD + 1):
        g.tick()
    assert g.player == (1, 2)
    assert g.status_line() == "Moved : 1 time"
"""Game state and movement rules for the player and the ghosts."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum

from solong.mapfile import MapData
from solong.validate import COIN, EXIT, FLOOR, GHOSTS, PLAYER, WALL, check_map

Position = tuple[int, int]


class Direction(IntEnum):
    """A heading on the grid."""

    UP = 0
    LEFT = 1
    DOWN = 2
    RIGHT = 3

    @property
    def delta(self) -> Position:
        """The (row, column) step taken in this direction."""
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.LEFT: (0, -1),
    Direction.DOWN: (1, 0),
    Direction.RIGHT: (0, 1),
}

# Directions a ghost tries, in order, after bumping into something.
_GHOST_TURNS = {
    Direction.UP: (Direction.LEFT, Direction.RIGHT, Direction.DOWN),
    Direction.LEFT: (Direction.UP, Direction.DOWN, Direction.RIGHT),
    Direction.DOWN: (Direction.RIGHT, Direction.LEFT, Direction.UP),
    Direction.RIGHT: (Direction.DOWN, Direction.UP, Direction.LEFT),
}


class Outcome(Enum):
    """How a game ended."""

    WIN = "win"
    LOSS = "loss"


class GameOver(Exception):
    """Raised when the player reaches the open exit or is caught."""

    def __init__(self, outcome: Outcome, movements: int) -> None:
        self.outcome = outcome
        self.movements = movements
        message = (
            "Congratulation! You win..."
            if outcome is Outcome.WIN
            else "SORRY! You lost..."
        )
        super().__init__(message)


@dataclass
class Ghost:
    """A wandering enemy, drawn with its own map letter."""

    char: str
    row: int
    col: int
    heading: Direction = Direction.UP
    wanted: Direction = Direction.UP
    clock: int = 0
    under: str = FLOOR

    @property
    def position(self) -> Position:
        return (self.row, self.col)


class Game:
    """A running game on a validated map.

    In the classic game the player moves one tile per key press. In the
    bonus game keys only steer; the player and the ghosts advance on ticks.
    """

    PLAYER_PERIOD = 75
    GHOST_PERIOD = 70

    def __init__(
        self,
        rows: tuple[str, ...],
        width: int,
        player: Position,
        coins: int,
        bonus: bool = False,
        ghosts: dict[str, Ghost] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._grid = [list(row) for row in rows]
        self.width = width
        self.player = player
        self.coins = coins
        self.bonus = bonus
        self.ghosts: dict[str, Ghost] = ghosts or {}
        self.rng = rng or random.Random()
        self.movements = 0
        self.facing = Direction.LEFT
        self.mouth_open = True
        self.heading = Direction.UP
        self.wanted = Direction.UP
        self._player_clock = 0
        self._eat = False

    @classmethod
    def from_map(cls, mapdata: MapData, bonus: bool = False) -> "Game":
        """Validate a map and start a game on it."""
        layout = check_map(mapdata, bonus)
        ghosts: dict[str, Ghost] = {}
        if bonus:
            for char in GHOSTS:
                if char in layout.ghosts:
                    row, col = layout.ghosts[char]
                    ghosts[char] = Ghost(char=char, row=row, col=col)
        return cls(
            rows=mapdata.rows,
            width=mapdata.width,
            player=layout.player,
            coins=layout.coins,
            bonus=bonus,
            ghosts=ghosts,
        )

    @property
    def exit_open(self) -> bool:
        return self.coins == 0

    def rows(self) -> tuple[str, ...]:
        """The current map as strings, one per row."""
        return tuple("".join(row) for row in self._grid)

    def _tile(self, position: Position) -> str:
        row, col = position
        return self._grid[row][col]

    def _neighbour(self, position: Position, direction: Direction) -> Position:
        dr, dc = direction.delta
        return (position[0] + dr, position[1] + dc)

    def can_move(self, position: Position, direction: Direction) -> bool:
        """True if the tile next to ``position`` in ``direction`` is not a wall."""
        return self._tile(self._neighbour(position, Direction(direction))) != WALL

    def _finish(self, outcome: Outcome) -> None:
        row, col = self.player
        self._grid[row][col] = FLOOR
        self.movements += 1
        raise GameOver(outcome, self.movements)

    def _step_player(self, target: Position) -> None:
        tile = self._tile(target)
        self._grid[target[0]][target[1]] = PLAYER
        self._grid[self.player[0]][self.player[1]] = FLOOR
        self.player = target
        if tile == COIN:
            self.coins -= 1
        self.movements += 1

    def press(self, direction: Direction) -> bool:
        """Handle a direction key; return True if the player moved.

        In the bonus game this only steers the player.
        """
        direction = Direction(direction)
        if self.bonus:
            self.steer(direction)
            return False
        self.facing = direction
        self.mouth_open = True
        target = self._neighbour(self.player, direction)
        tile = self._tile(target)
        if tile == EXIT and self.coins == 0:
            self._finish(Outcome.WIN)
        if tile in (FLOOR, COIN):
            self._step_player(target)
            return True
        return False

    def steer(self, direction: Direction) -> None:
        """Choose the direction the player turns to when it can."""
        self.wanted = Direction(direction)

    def _move_pac(self, direction: Direction, mouth_open: bool) -> None:
        target = self._neighbour(self.player, direction)
        tile = self._tile(target)
        if tile == EXIT and self.coins == 0:
            self._finish(Outcome.WIN)
        if tile in GHOSTS:
            self._finish(Outcome.LOSS)
        if tile in (FLOOR, COIN):
            self.facing = direction
            self.mouth_open = mouth_open
            self._step_player(target)

    def move_player(self) -> None:
        """Advance the player one tile every ``PLAYER_PERIOD`` calls."""
        if self._player_clock == self.PLAYER_PERIOD:
            if self.can_move(self.player, self.wanted):
                self.heading = self.wanted
            self._move_pac(self.heading, self._eat)
            self._eat = not self._eat
            self._player_clock = 0
        self._player_clock += 1

    def _turn_ghost(self, ghost: Ghost) -> None:
        first, second, last = _GHOST_TURNS[ghost.heading]
        if self.can_move(ghost.position, first):
            ghost.wanted = first
        elif self.can_move(ghost.position, second):
            ghost.wanted = second
        else:
            ghost.wanted = last

    def _advance_ghost(self, ghost: Ghost) -> None:
        target = self._neighbour(ghost.position, ghost.heading)
        tile = self._tile(target)
        if tile == PLAYER:
            self._finish(Outcome.LOSS)
        if tile in (FLOOR, COIN):
            ghost.under = tile
            self._grid[target[0]][target[1]] = ghost.char
            self._grid[ghost.row][ghost.col] = ghost.under
            ghost.row, ghost.col = target
        elif tile == WALL or tile in GHOSTS or tile == EXIT:
            self._turn_ghost(ghost)

    def _step_ghost(self, ghost: Ghost) -> None:
        if ghost.clock == self.GHOST_PERIOD:
            choice = Direction(self.rng.randrange(4))
            if choice not in (ghost.heading, ghost.heading.opposite):
                ghost.wanted = choice
            if self.can_move(ghost.position, ghost.wanted):
                ghost.heading = ghost.wanted
            self._advance_ghost(ghost)
            ghost.clock = 0
        ghost.clock += 1

    def move_ghosts(self) -> None:
        """Advance every ghost by one tick."""
        for ghost in self.ghosts.values():
            self._step_ghost(ghost)

    def tick(self) -> None:
        """One frame: in the bonus game, ghosts move, then the player."""
        if not self.bonus:
            return
        self.move_ghosts()
        self.move_player()

    def status_line(self) -> str:
        """The move counter as shown to the player."""
        if self.bonus:
            return f"Moved : {self.movements} time"
        return f"You moved {self.movements} times."
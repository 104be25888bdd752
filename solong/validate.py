"""Checks that a map is closed, holds the right objects and can be finished."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from solong.mapfile import MapData, MapError

WALL = "1"
FLOOR = "0"
PLAYER = "P"
EXIT = "E"
COIN = "C"
GHOSTS = ("R", "B", "G")
FILLED = "X"

Position = tuple[int, int]


@dataclass(frozen=True)
class Layout:
    """Where the objects of a map are, as (row, column) positions."""

    player: Position = (0, 0)
    exit: Position = (0, 0)
    coins: int = 0
    player_count: int = 0
    exit_count: int = 0
    ghosts: Mapping[str, Position] = field(default_factory=dict)


def check_walls(mapdata: MapData) -> None:
    """Raise unless the map is surrounded by walls."""
    rows, width = mapdata.rows, mapdata.width
    if not rows:
        return
    for row in rows:
        if width == 0 or row[0] != WALL or row[width - 1] != WALL:
            raise MapError("Missing wall in vertical walls")
    top, bottom = rows[0], rows[-1]
    for col in range(width):
        if top[col] != WALL or bottom[col] != WALL:
            raise MapError("Missing wall in horizontal walls")


def scan_tiles(mapdata: MapData, bonus: bool = False) -> Layout:
    """Reject unknown tiles and locate the player, exit, coins and ghosts."""
    allowed = {WALL, FLOOR, PLAYER, EXIT, COIN}
    if bonus:
        allowed.update(GHOSTS)
    player: Position = (0, 0)
    exit_pos: Position = (0, 0)
    coins = players = exits = 0
    ghosts: dict[str, Position] = {}
    for r, row in enumerate(mapdata.rows[:-1]):
        for c, char in enumerate(row[: mapdata.width]):
            if char not in allowed:
                raise MapError(f"Invalid character here! {char}")
            if char == COIN:
                coins += 1
            elif char == PLAYER:
                player = (r, c)
                players += 1
            elif char == EXIT:
                exit_pos = (r, c)
                exits += 1
            elif char in GHOSTS:
                ghosts[char] = (r, c)
    return Layout(
        player=player,
        exit=exit_pos,
        coins=coins,
        player_count=players,
        exit_count=exits,
        ghosts=ghosts,
    )


def flood_fill(
    mapdata: MapData, layout: Layout, through_exit: bool, bonus: bool = False
) -> tuple[str, ...]:
    """Fill from the player and raise if any object is left unreached.

    With ``through_exit`` false the exit is a dead end, so every coin (and
    ghost) must be reachable without walking over it. Returns the filled rows.
    """
    grid = [list(row) for row in mapdata.rows]
    height, width = mapdata.height, mapdata.width
    if not through_exit:
        er, ec = layout.exit
        grid[er][ec] = FILLED
    pr, pc = layout.player
    passable = {grid[pr][pc], COIN, FLOOR}
    if through_exit:
        passable.add(EXIT)
    if bonus:
        passable.update(GHOSTS)
    passable.discard(FILLED)

    stack = [(pr, pc)]
    while stack:
        r, c = stack.pop()
        if not (0 <= r < height and 0 <= c < width) or grid[r][c] not in passable:
            continue
        grid[r][c] = FILLED
        stack.extend(((r, c - 1), (r, c + 1), (r - 1, c), (r + 1, c)))

    for row in grid:
        if any(char not in (FLOOR, WALL, FILLED) for char in row[:width]):
            raise MapError("The path is not valid")
    return tuple("".join(row) for row in grid)


def check_map(mapdata: MapData, bonus: bool = False) -> Layout:
    """Run every check on a map and return its layout."""
    check_walls(mapdata)
    layout = scan_tiles(mapdata, bonus)
    flood_fill(mapdata, layout, True, bonus)
    flood_fill(mapdata, layout, False, bonus)
    if not (layout.player_count == 1 and layout.coins >= 1 and layout.exit_count == 1):
        raise MapError("Check your map" if bonus else "Check objects in the map")
    return layout
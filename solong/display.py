"""Sprites, drawing and the window loop of the game."""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

import pygame

from solong.game import Direction, Game, GameOver, Outcome
from solong.mapfile import MapError, load_map
from solong.validate import COIN, EXIT, FLOOR, GHOSTS, PLAYER, WALL
from solong.xpm import XpmError, XpmImage, read_xpm

PathLike = Union[str, "os.PathLike[str]"]

CELL_SIZE = 32
TITLE = "PACMAN"
DEFAULT_ASSETS = "textures"
FRAMES_PER_SECOND = 60
TICKS_PER_FRAME = 5
TEXT_POSITION = (40, 50)
TEXT_COLOR = (255, 255, 255)

_TILE_FILES = {
    "wall": "wall.xpm",
    "floor": "floor.xpm",
    "coin": "coin.xpm",
    "exit_open": "exit_open.xpm",
    "exit_closed": "exit_closed.xpm",
}

_PLAYER_FILES = {
    Direction.UP: "player_up.xpm",
    Direction.DOWN: "player_down.xpm",
    Direction.LEFT: "player_left.xpm",
    Direction.RIGHT: "player_right.xpm",
}

_SHUT_FILES = {
    Direction.UP: "player_shut_up.xpm",
    Direction.DOWN: "player_shut_down.xpm",
    Direction.LEFT: "player_shut_left.xpm",
    Direction.RIGHT: "player_shut_right.xpm",
}

_GHOST_FILES = {
    "R": "ghost_red.xpm",
    "B": "ghost_blue.xpm",
    "G": "ghost_green.xpm",
}

_KEYS = {
    pygame.K_w: Direction.UP,
    pygame.K_UP: Direction.UP,
    pygame.K_a: Direction.LEFT,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_s: Direction.DOWN,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_d: Direction.RIGHT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def _to_surface(image: XpmImage) -> pygame.Surface:
    surface = pygame.Surface((image.width, image.height))
    for y, row in enumerate(image.pixels):
        for x, pixel in enumerate(row):
            surface.set_at(
                (x, y), ((pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF)
            )
    return surface


def _load(directory: Path, name: str) -> pygame.Surface:
    return _to_surface(read_xpm(directory / name))


@dataclass(frozen=True)
class Sprites:
    """The images used to draw each kind of tile."""

    wall: pygame.Surface
    floor: pygame.Surface
    coin: pygame.Surface
    exit_open: pygame.Surface
    exit_closed: pygame.Surface
    players: Mapping[Direction, pygame.Surface]
    shut: Mapping[Direction, pygame.Surface] = field(default_factory=dict)
    ghosts: Mapping[str, pygame.Surface] = field(default_factory=dict)

    @classmethod
    def load(cls, asset_dir: PathLike, bonus: bool = False) -> "Sprites":
        """Read every sprite the game needs from ``asset_dir``."""
        directory = Path(asset_dir)
        ghosts: dict[str, pygame.Surface] = {}
        shut: dict[Direction, pygame.Surface] = {}
        if bonus:
            ghosts = {char: _load(directory, name) for char, name in _GHOST_FILES.items()}
        players = {d: _load(directory, name) for d, name in _PLAYER_FILES.items()}
        if bonus:
            shut = {d: _load(directory, name) for d, name in _SHUT_FILES.items()}
        tiles = {key: _load(directory, name) for key, name in _TILE_FILES.items()}
        return cls(players=players, shut=shut, ghosts=ghosts, **tiles)

    def player(self, direction: Direction, mouth_open: bool) -> pygame.Surface:
        """The player sprite facing ``direction``, mouth open or shut."""
        if not mouth_open and direction in self.shut:
            return self.shut[direction]
        return self.players[direction]


@dataclass
class Renderer:
    """Draws a game's map tile by tile."""

    game: Game
    sprites: Sprites
    cell_size: int = CELL_SIZE

    def tile_for(self, char: str) -> Optional[pygame.Surface]:
        """The sprite for a map character, or None if it is not drawn."""
        if char == WALL:
            return self.sprites.wall
        if char == FLOOR:
            return self.sprites.floor
        if char == COIN:
            return self.sprites.coin
        if char == EXIT:
            return self.sprites.exit_open if self.game.exit_open else self.sprites.exit_closed
        if char == PLAYER:
            return self.sprites.player(self.game.facing, self.game.mouth_open)
        if self.game.bonus and char in GHOSTS:
            return self.sprites.ghosts.get(char)
        return None

    def draw(self, surface: pygame.Surface) -> None:
        """Blit every tile of the current map onto ``surface``."""
        for r, row in enumerate(self.game.rows()):
            for c, char in enumerate(row):
                tile = self.tile_for(char)
                if tile is not None:
                    surface.blit(tile, (c * self.cell_size, r * self.cell_size))


def run(
    path: PathLike, bonus: bool = False, asset_dir: PathLike = DEFAULT_ASSETS
) -> Optional[Outcome]:
    """Play the map at ``path`` in a window.

    Returns the outcome, or None if the window was closed. Raises MapError
    for a bad map and XpmError for a missing or broken sprite.
    """
    game = Game.from_map(load_map(path), bonus)
    sprites = Sprites.load(asset_dir, bonus)
    renderer = Renderer(game, sprites)
    last_status: Optional[str] = None

    def report() -> None:
        nonlocal last_status
        status = game.status_line()
        if status != last_status:
            print(status)
            last_status = status

    pygame.init()
    try:
        screen = pygame.display.set_mode(
            (game.width * CELL_SIZE, len(game.rows()) * CELL_SIZE)
        )
        pygame.display.set_caption(TITLE)
        font = pygame.font.Font(None, 24) if bonus else None
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return None
                if event.type != pygame.KEYDOWN:
                    continue
                if event.key == pygame.K_ESCAPE:
                    if not bonus:
                        print("\nOh,Game is closed...")
                    return None
                direction = _KEYS.get(event.key)
                if direction is not None:
                    game.press(direction)
                    if not bonus:
                        report()
            if bonus:
                for _ in range(TICKS_PER_FRAME):
                    game.tick()
            renderer.draw(screen)
            if font is not None:
                text = font.render(game.status_line(), True, TEXT_COLOR)
                x, y = TEXT_POSITION
                screen.blit(text, (x, y - font.get_ascent()))
                report()
            pygame.display.flip()
            clock.tick(FRAMES_PER_SECOND)
    except GameOver as over:
        print(f"\n{over}")
        return over.outcome
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry: play a ``.ber`` map."""
    parser = argparse.ArgumentParser(prog="solong", description="Play a .ber map.")
    parser.add_argument("map", help="path of the .ber map file")
    parser.add_argument("--bonus", action="store_true", help="play with ghosts")
    parser.add_argument(
        "--assets", default=DEFAULT_ASSETS, help="directory holding the XPM sprites"
    )
    args = parser.parse_args(argv)
    try:
        run(args.map, args.bonus, args.assets)
    except (MapError, XpmError) as exc:
        print(f"Error\n{exc}")
    return 0
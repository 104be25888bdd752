# solong

A small tile-based arcade game. You walk a character around a walled map,
pick up every coin, and then leave through the exit. Bonus mode adds
continuous movement and up to three ghosts that wander the maze. If a ghost
reaches you, or you walk into one, you lose.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
solong path/to/level.ber
solong --bonus --assets path/to/sprites path/to/level.ber
```

Options:

- `--bonus` plays with ghosts and continuous movement
- `--assets DIR` is the directory that holds the XPM sprites (default: `textures`)

Controls:

- `W` / `Up`, `A` / `Left`, `S` / `Down`, `D` / `Right`: in the classic game
  each press moves the player one tile; in bonus mode the key sets the
  direction the player turns to as soon as it can
- `Esc` or closing the window quits

The move counter is printed whenever it changes. In bonus mode it is also
drawn in the window. When the game ends, a win or loss message is printed.
If the map or a sprite cannot be used, `Error` and the reason are printed
instead.

From Python, `solong.display.run(path, bonus, asset_dir)` plays a map and
returns an `Outcome`, or `None` if the window was closed.
`solong.display.main(argv)` is the command-line entry.

## Sprites

The package ships no images. The asset directory must hold these XPM files:

- `wall.xpm`, `floor.xpm`, `coin.xpm`, `exit_open.xpm`, `exit_closed.xpm`
- `player_up.xpm`, `player_down.xpm`, `player_left.xpm`, `player_right.xpm`
- bonus mode also needs `player_shut_up.xpm`, `player_shut_down.xpm`,
  `player_shut_left.xpm`, `player_shut_right.xpm` and `ghost_red.xpm`,
  `ghost_blue.xpm`, `ghost_green.xpm`

Tiles are drawn 32 pixels apart.

## Map format

A map is a plain-text file whose name ends in `.ber`. Every line, counting
its line ending, must have the same length. This means the last line needs a
trailing newline if the others have one.

| Char | Meaning |
|------|---------|
| `1`  | wall    |
| `0`  | floor   |
| `P`  | player start (exactly one) |
| `C`  | coin (at least one) |
| `E`  | exit (exactly one) |
| `R`, `B`, `G` | red, blue and green ghost (bonus mode only) |

The map must be closed by walls on every side. Every coin and the exit must
be reachable from the player. Every coin must also be reachable without
walking over the exit. In bonus mode the ghosts must be reachable too.
Example:

```
1111111
1P0C0E1
1111111
```

## Library use

- `solong.mapfile.load_map(path)` checks the file name, reads the file and
  returns a `MapData` (`rows`, `width`, `height`). The same module also
  provides `parse_map`, `map_width` and `check_extension`.
- `solong.validate.check_map(mapdata, bonus)` checks walls, tiles, object
  counts and reachability, and returns a `Layout`. It is built from
  `check_walls`, `scan_tiles` and `flood_fill`.
- `solong.game.Game.from_map(mapdata, bonus)` builds the playable state.
  `Game.press` and `Game.steer` take a `Direction`, and `Game.tick` advances
  one frame in bonus mode. `Game.rows()` returns the current map and
  `Game.status_line()` the move counter. A finished game raises `GameOver`,
  which carries an `Outcome` (`WIN` or `LOSS`) and the move count.
- `solong.xpm.read_xpm` and `solong.xpm.parse_xpm_text` decode XPM images
  into `XpmImage` pixel grids of `0xRRGGBB` values. Transparent pixels become
  `solong.xpm.TRANSPARENT`.
- `solong.colors.lookup_color(name)` resolves an X11 colour name without
  regard to case. It returns `-1` for `none` and `None` for an unknown name.

Map errors raise `solong.mapfile.MapError`, and image errors raise
`solong.xpm.XpmError`.
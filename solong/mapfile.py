"""Reading and shape checks for ``.ber`` map files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

EXTENSION = ".ber"

PathLike = Union[str, "os.PathLike[str]"]


class MapError(Exception):
    """Raised when a map file cannot be played."""


@dataclass(frozen=True)
class MapData:
    """The rows of a map, without line endings, and its width in tiles."""

    rows: tuple[str, ...]
    width: int

    @property
    def height(self) -> int:
        return len(self.rows)


def check_extension(path: PathLike) -> str:
    """Return the path as a string if it names a ``.ber`` file, else raise."""
    name = os.fspath(path)
    if not name or name.endswith("/"):
        raise MapError("Format of file is not valid!")
    dot = name.rfind(".")
    if dot < 0 or not name[dot:].startswith(EXTENSION):
        raise MapError("Format of file is not valid!")
    return name


def _split_lines(text: str) -> list[str]:
    """Split text into lines that keep their trailing newline."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def map_width(lines: Iterable[str]) -> int:
    """Width of the map in tiles; every raw line must have the same length."""
    lines = list(lines)
    if not lines:
        raise MapError("Map empty!")
    first = lines[0]
    if any(len(line) != len(first) for line in lines):
        raise MapError("Map is not rectangular")
    return len(first) - 1 if first.endswith("\n") else len(first)


def parse_map(text: str) -> MapData:
    """Build a map from the text of a map file."""
    lines = _split_lines(text)
    if not lines:
        raise MapError("Map empty!")
    width = map_width(lines)
    rows = tuple(line.removesuffix("\n") for line in lines)
    return MapData(rows=rows, width=width)


def load_map(path: PathLike) -> MapData:
    """Check the file name, read the file and parse it."""
    name = check_extension(path)
    try:
        data = Path(name).read_bytes()
    except OSError as exc:
        raise MapError(f"Cannot open {name}: {exc.strerror or exc}") from exc
    return parse_map(data.decode("latin-1"))
"""Reading XPM images into rows of 0xRRGGBB pixels."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from solong.colors import NONE_COLOR, lookup_color

PathLike = Union[str, "os.PathLike[str]"]

# Pixel value given to transparent ("None") colours.
TRANSPARENT = 0xFF000000

_NAME_LIMIT = 63
_WORD_SPLIT = re.compile(r"[ \t]+")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"[0-9a-fA-F]+")
_QUOTED = re.compile(r'"([^"]*)"')


class XpmError(Exception):
    """Raised when XPM data cannot be turned into an image."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: ``pixels[y][x]`` holds 0xRRGGBB or ``TRANSPARENT``."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]


def split_words(text: str) -> list[str]:
    """Split on spaces and tabs only, dropping empty words."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def _blank_comments(text: str, opener: str, closer: str) -> str:
    quoted = False
    i = 0
    while i <= len(text) - len(opener):
        char = text[i]
        if char == '"':
            quoted = not quoted
        elif not quoted and text.startswith(opener, i):
            end = text.find(closer, i + len(opener))
            stop = len(text) if end < 0 else end + len(closer)
            text = text[:i] + " " * (stop - i) + text[stop:]
            i = stop
            continue
        i += 1
    return text


def strip_comments(text: str) -> str:
    """Replace comments outside quoted strings by spaces, keeping the length."""
    text = _blank_comments(text, "/*", "*/")
    return _blank_comments(text, "//", "\n")


def _atoi(word: str) -> int:
    match = _INT_PREFIX.match(word)
    return int(match.group(1)) if match else 0


def text_to_rgb(name: str, end: Optional[str] = None) -> int:
    """Colour value of an XPM colour spec.

    ``#rrggbb`` is read as hex; otherwise ``name`` (joined with ``end`` when
    given) is looked up by name. Unknown names give 0, ``None`` gives -1.
    """
    if name.startswith("#"):
        match = _HEX_PREFIX.match(name[1:])
        return int(match.group(0), 16) if match else 0
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    value = lookup_color(name)
    return 0 if value is None else value


def convert_color(color: int, depth: int, shifts: Sequence[int]) -> int:
    """Map 0xRRGGBB to a pixel value for a visual of ``depth`` bits.

    ``shifts`` holds, for red, green and blue in turn, the offset and the
    width of the channel's bits in a pixel.
    """
    if len(shifts) != 6:
        raise ValueError("shifts must hold six values")
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    r_off, r_bits, g_off, g_bits, b_off, b_bits = shifts
    return (
        ((red >> (16 - r_bits)) << r_off)
        + ((green >> (16 - g_bits)) << g_off)
        + ((blue >> (16 - b_bits)) << b_off)
    )


def _read_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if not (width and height and ncolors and cpp):
        raise XpmError("XPM header values must not be zero")
    return width, height, ncolors, cpp


def _read_color(line: str, cpp: int) -> tuple[str, int]:
    words = split_words(line[cpp:])
    try:
        index = words.index("c") + 1
    except ValueError:
        raise XpmError(f"No colour given in {line!r}") from None
    if index >= len(words):
        raise XpmError(f"No colour given in {line!r}")
    end = words[index + 1] if index + 1 < len(words) else None
    return line[:cpp], text_to_rgb(words[index], end)


def parse_xpm(lines: Sequence[str]) -> XpmImage:
    """Build an image from the strings of an XPM file, in order."""
    feed = iter(lines)

    def next_line() -> str:
        try:
            return next(feed)
        except StopIteration:
            raise XpmError("XPM data ends too early") from None

    width, height, ncolors, cpp = _read_header(next_line())

    # With one or two characters per pixel a later definition replaces an
    # earlier one; with more, the first definition of a key is kept.
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        key, rgb = _read_color(next_line(), cpp)
        if cpp <= 2:
            palette[key] = rgb
        else:
            palette.setdefault(key, rgb)

    rows = []
    for _ in range(height):
        line = next_line()
        row = []
        for x in range(width):
            color = palette.get(line[cpp * x : cpp * (x + 1)], 0)
            row.append(TRANSPARENT if color == NONE_COLOR else color)
        rows.append(tuple(row))
    return XpmImage(width=width, height=height, pixels=tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Build an image from the text of an XPM file."""
    return parse_xpm(_QUOTED.findall(strip_comments(text)))


def read_xpm(path: PathLike) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise XpmError(f"Cannot read {os.fspath(path)}: {exc.strerror or exc}") from exc
    return parse_xpm_text(data.decode("latin-1"))
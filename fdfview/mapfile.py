"""Reading height maps from ``.fdf`` text files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterator

from fdfview.colors import WHITE

_CHUNK_SIZE = 4096
_WHITESPACE = frozenset("\t\n\v\f\r ")
_DIGITS = "0123456789"
_COLOR_PREFIX_CHARS = frozenset(_DIGITS + "-+,")


class MapError(Exception):
    """Raised when a map file cannot be read or is malformed."""


@dataclass
class HeightMap:
    """A grid of altitudes with one RGB colour per point."""

    width: int
    height: int
    z: list[list[int]]
    colors: list[list[int]]
    is_color: bool = False
    min_z: int = field(init=False)
    max_z: int = field(init=False)

    def __post_init__(self) -> None:
        self.min_z, self.max_z = self.z_range()

    def z_range(self) -> tuple[int, int]:
        """Lowest and highest altitude over the whole grid."""
        values = [value for row in self.z for value in row]
        if not values:
            raise MapError("The map is empty")
        return min(values), max(values)


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way C's atoi does; 0 if none."""
    i = 0
    while i < len(text) and text[i] in _WHITESPACE:
        i += 1
    if text[i:i + 1] == "+" and text[i + 1:i + 2] != "-":
        i += 1
    sign = 1
    if text[i:i + 1] == "-":
        sign = -1
        i += 1
    result = 0
    for char in text[i:]:
        if char not in _DIGITS:
            break
        result = result * 10 + int(char)
    return sign * result


def atoi_base(text: str, base: int) -> int:
    """Parse leading hexadecimal-style digits in ``base``, with an optional '-'."""
    sign = 1
    if text.startswith("-"):
        sign = -1
        text = text[1:]
    result = 0
    for char in text:
        if "0" <= char <= "9":
            digit = ord(char) - ord("0")
        elif "a" <= char <= "f":
            digit = ord(char) - ord("a") + 10
        elif "A" <= char <= "F":
            digit = ord(char) - ord("A") + 10
        else:
            break
        result = result * base + digit
    return sign * result


def split_words(text: str, sep: str) -> list[str]:
    """Split on a single separator character, dropping empty pieces."""
    return [word for word in text.split(sep) if word]


def read_lines(stream: IO[str]) -> Iterator[str]:
    """Yield lines split on '\\n' only, each keeping its newline except the last."""
    pending = ""
    while True:
        chunk = stream.read(_CHUNK_SIZE)
        if not chunk:
            break
        pending += chunk
        while (index := pending.find("\n")) != -1:
            yield pending[: index + 1]
            pending = pending[index + 1:]
    if pending:
        yield pending


def parse_color(token: str) -> int | None:
    """Colour given after ``0x`` in a map token, or None when there is none."""
    i = 0
    while i < len(token) and token[i] in _COLOR_PREFIX_CHARS:
        i += 1
    if token[i:i + 1] in ("x", "X"):
        return atoi_base(token[i + 1:].lower(), 16)
    return None


def _open(path: str | Path) -> IO[str]:
    try:
        return open(path, encoding="utf-8", errors="surrogateescape", newline="")
    except OSError as exc:
        raise MapError(f"Cannot open file: {exc.strerror}") from exc


def parse_dimensions(path: str | Path) -> tuple[int, int]:
    """Return (width, height) of a map file, checking every row has the same width."""
    with _open(path) as stream:
        lines = read_lines(stream)
        first = next(lines, None)
        if first is None:
            raise MapError("Empty file")
        width = len(split_words(first, " "))
        height = 1
        for line in lines:
            if len(split_words(line, " ")) != width:
                raise MapError("Inconsistent width")
            height += 1
    return width, height


def load_map(path: str | Path) -> HeightMap:
    """Read a map file into a HeightMap."""
    width, height = parse_dimensions(path)
    if width <= 0 or height <= 0:
        raise MapError("Invalid map dimensions")
    z_rows: list[list[int]] = []
    color_rows: list[list[int]] = []
    is_color = False
    with _open(path) as stream:
        lines = read_lines(stream)
        for _ in range(height):
            line = next(lines, None)
            if line is None:
                raise MapError("Unexpected end of file or read error")
            tokens = split_words(line, " ")[:width]
            z_rows.append([atoi(token) for token in tokens])
            row_colors = []
            for token in tokens:
                color = parse_color(token)
                if color is None:
                    row_colors.append(WHITE)
                else:
                    is_color = True
                    row_colors.append(color)
            color_rows.append(row_colors)
    return HeightMap(width, height, z_rows, color_rows, is_color)
"""Reading, validating and querying grid maps."""

from __future__ import annotations

import io
from dataclasses import dataclass
from os import PathLike
from typing import Iterable

from wolfcast.textutil import atoi, read_lines, split

CUBE_SIZE = 12
MAX_COLUMNS = 107
MAX_LINES = 67
MIN_SIZE = 3

_BAD_READ = "Error 0:\tinvalid map"
_BAD_CHAR = "Error 1:\tinvalid map"
_BAD_PLACEMENT = "Error 2:\tinvalid map"
_BAD_WALL = "Error 3:\tinvalid map"
_BAD_SIZE = "Error:\t[map] out of parameters"
_BAD_OPEN = "open():\tFAILLED"


class MapError(ValueError):
    """Raised when a map file cannot be read or is not a valid map."""


@dataclass(frozen=True)
class GameMap:
    """A validated map: rows of cells, 0 for floor and 1 for wall."""

    cells: tuple[tuple[int, ...], ...]
    columns: int
    lines: int

    def cell(self, row: int, col: int) -> int:
        """Return the value of a cell; raise IndexError outside the map."""
        if row < 0 or col < 0:
            raise IndexError(f"cell ({row}, {col}) is outside the map")
        return self.cells[row][col]

    def is_wall(self, row: int, col: int) -> bool:
        """Tell whether a cell blocks movement and rays; outside counts as wall."""
        try:
            return self.cell(row, col) > 0
        except IndexError:
            return True

    def tile_origin(self, row: int, col: int, cube: int = CUBE_SIZE) -> tuple[int, int]:
        """Return the (x, y) pixel of a cell's top-left corner on the minimap."""
        return col * cube, row * cube

    def spawn(self) -> tuple[int, int]:
        """Return (row, col) of the first floor cell, scanning row by row."""
        for row, values in enumerate(self.cells):
            for col, value in enumerate(values):
                if value == 0:
                    return row, col
        raise MapError("no free cell to place the player")


def check_chars(line: str) -> None:
    """Reject a line holding anything but '0', '1' and spaces."""
    if any(ch not in "01 " for ch in line.split("\n", 1)[0]):
        raise MapError(_BAD_CHAR)


def check_placement(line: str) -> None:
    """Require a line to start with '1' and alternate cells with single spaces."""
    if not line.startswith("1"):
        raise MapError(_BAD_PLACEMENT)
    for ch, following in zip(line, line[1:] + "\0"):
        if ch in "01" and following not in " \0":
            raise MapError(_BAD_PLACEMENT)
        if ch == " " and following not in "01":
            raise MapError(_BAD_PLACEMENT)


def check_walls(rows: list[str]) -> tuple[int, int]:
    """Check the map is closed by walls and within size limits.

    Returns (columns, lines).
    """
    if not rows:
        raise MapError(_BAD_WALL)
    width = len(rows[0])
    columns = 0
    for ch in rows[0]:
        if ch not in "1 ":
            raise MapError(_BAD_WALL)
        if ch == "1":
            columns += 1
    lines = 0
    last = len(rows) - 1
    for y, row in enumerate(rows):
        if row.startswith("1"):
            lines += 1
        if not row.startswith("1") or len(row) < width or row[width - 1] != "1":
            raise MapError(_BAD_WALL)
        if y == last and any(ch not in "1 " for ch in row):
            raise MapError(_BAD_WALL)
        floors = row.count("0")
        if len(row) != width or (floors == 0 and y != 0 and y != last):
            raise MapError(_BAD_WALL)
    if columns > MAX_COLUMNS or lines > MAX_LINES:
        raise MapError(_BAD_SIZE)
    if columns < MIN_SIZE or lines < MIN_SIZE:
        raise MapError(_BAD_SIZE)
    return columns, lines


def _build(lines: Iterable[str]) -> GameMap:
    rows = []
    for line in lines:
        check_chars(line)
        check_placement(line)
        rows.append(line)
    if not rows:
        raise MapError(_BAD_READ)
    columns, count = check_walls(rows)
    cells = tuple(
        tuple(atoi(token) for token in split(row, " ")[:columns]) for row in rows[:count]
    )
    return GameMap(cells=cells, columns=columns, lines=count)


def parse_map(text: str) -> GameMap:
    """Validate map text and build a GameMap from it."""
    return _build(read_lines(io.StringIO(text)))


def load_map(path: str | PathLike[str]) -> GameMap:
    """Read and validate a map file."""
    try:
        handle = open(path, encoding="latin-1", newline="")
    except OSError as exc:
        raise MapError(_BAD_OPEN) from exc
    with handle:
        try:
            return _build(read_lines(handle))
        except OSError as exc:
            raise MapError(_BAD_READ) from exc
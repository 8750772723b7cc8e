"""Game board, ships and shot resolution for a two-player naval battle."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, NamedTuple

ROWS = 10
COLS = 10

WATER = "~"
HIT = "x"
MISS = "O"

RESET = "\x1b[0m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
BLUE = "\x1b[34m"
MAGENTA = "\x1b[35m"
BOLD = "\x1b[1m"

_SHIP_NAMES = {
    "C": "Carrier",
    "B": "Battleship",
    "R": "Cruiser",
    "S": "Submarine",
    "D": "Destroyer",
}


@dataclass(frozen=True)
class Ship:
    """A ship type: its board symbol, length in cells and display name."""

    symbol: str
    length: int
    name: str


class Coordinate(NamedTuple):
    """A cell position on the board."""

    row: int
    column: int


class Direction(IntEnum):
    """Orientation of a ship on the board."""

    HORIZONTAL = 0
    VERTICAL = 1


class ShotResult(Enum):
    """Outcome of firing at a cell."""

    INVALID = -1
    MISS = 0
    HIT = 1


def ship_name(symbol: str) -> str:
    """Return the display name of the ship with the given symbol."""
    return _SHIP_NAMES.get(symbol, "Unknown Ship")


def default_fleet() -> list[Ship]:
    """Return the standard five-ship fleet, largest first."""
    return [
        Ship("C", 5, "Carrier"),
        Ship("B", 4, "Battleship"),
        Ship("R", 3, "Cruiser"),
        Ship("S", 3, "Submarine"),
        Ship("D", 2, "Destroyer"),
    ]


@dataclass
class _Cell:
    symbol: str = WATER
    is_hit: bool = False


class Board:
    """A 10x10 grid of cells holding ships and the shots fired at them."""

    def __init__(self) -> None:
        self._cells = [[_Cell() for _ in range(COLS)] for _ in range(ROWS)]

    def __contains__(self, target: object) -> bool:
        if not isinstance(target, tuple) or len(target) != 2:
            return False
        row, col = target
        return 0 <= row < ROWS and 0 <= col < COLS

    def _cell(self, target: Coordinate) -> _Cell:
        if target not in self:
            raise IndexError(f"coordinate {tuple(target)} is off the board")
        return self._cells[target[0]][target[1]]

    def symbol_at(self, target: Coordinate) -> str:
        """Return the symbol currently stored at the target cell."""
        return self._cell(target).symbol

    def is_hit(self, target: Coordinate) -> bool:
        """Return whether the target cell has already been fired at."""
        return self._cell(target).is_hit

    def _span(self, row: int, col: int, direction: int, length: int):
        if direction == Direction.HORIZONTAL:
            return (Coordinate(row, col + i) for i in range(length))
        return (Coordinate(row + i, col) for i in range(length))

    def is_valid_placement(self, row: int, col: int, direction: int, length: int) -> bool:
        """Return whether a ship of the given length fits on open water there."""
        if (row, col) not in self:
            return False
        if direction == Direction.HORIZONTAL:
            if col + length > COLS:
                return False
        elif row + length > ROWS:
            return False
        return all(
            self._cell(pos).symbol == WATER
            for pos in self._span(row, col, direction, length)
        )

    def place_ship(self, row: int, col: int, direction: int, ship: Ship) -> None:
        """Put a ship on the board; raise ValueError if it does not fit."""
        if not self.is_valid_placement(row, col, direction, ship.length):
            raise ValueError(
                f"cannot place {ship.name} at {row}, {col} facing {direction}"
            )
        for pos in self._span(row, col, direction, ship.length):
            self._cell(pos).symbol = ship.symbol

    def place_randomly(self, ships: Iterable[Ship], rng: random.Random) -> None:
        """Place each ship at a random valid position and orientation."""
        for ship in ships:
            while True:
                row = rng.randint(0, ROWS - 1)
                col = rng.randint(0, COLS - 1)
                direction = Direction(rng.randint(0, 1))
                if self.is_valid_placement(row, col, direction, ship.length):
                    self.place_ship(row, col, direction, ship)
                    break

    def check_shot(self, target: Coordinate) -> ShotResult:
        """Classify a shot as a hit, a miss, or invalid (off board or repeated)."""
        if target not in self:
            return ShotResult.INVALID
        cell = self._cell(target)
        if cell.is_hit:
            return ShotResult.INVALID
        if cell.symbol != WATER:
            return ShotResult.HIT
        return ShotResult.MISS

    def update(self, target: Coordinate) -> None:
        """Mark the target as fired at, recording a hit or a miss."""
        cell = self._cell(target)
        cell.is_hit = True
        cell.symbol = MISS if cell.symbol == WATER else HIT

    def render(self, reveal_ships: bool) -> str:
        """Return the coloured text picture of the board and its legend."""
        parts = [BOLD + "\n     "]
        parts.extend(f"{col:2d} " for col in range(COLS))
        parts.append("\n")
        for row_index, row in enumerate(self._cells):
            parts.append(f"{BOLD}{row_index:2d} | {RESET}")
            for cell in row:
                if cell.is_hit:
                    if cell.symbol == WATER:
                        parts.append(RED + " X " + RESET)
                    else:
                        parts.append(GREEN + " O " + RESET)
                elif cell.symbol != WATER and reveal_ships:
                    parts.append(f"{MAGENTA} {cell.symbol} {RESET}")
                else:
                    parts.append(BLUE + " ~ " + RESET)
            parts.append("\n")
        parts.append("\n" + BOLD + "Legend:\n" + RESET)
        parts.append(RED + " X " + RESET + " = Hit, ")
        parts.append(GREEN + " O " + RESET + " = Miss, ")
        parts.append(BLUE + " ~ " + RESET + " = Water, ")
        parts.append(MAGENTA + " S " + RESET + " = Ship (if visible)\n\n")
        return "".join(parts)
"""Turn handling, computer opponents and the interactive game loop."""

from __future__ import annotations

import argparse
import itertools
import os
import random
import subprocess
from dataclasses import dataclass
from typing import Iterable, Iterator, Protocol, TextIO

from broadside.board import (
    COLS,
    ROWS,
    WATER,
    Board,
    Coordinate,
    Ship,
    ShotResult,
    default_fleet,
    ship_name,
)

LOG_FILE_NAME = "battleship.log"
PLAYER_1 = 0
PLAYER_2 = 1
WINNING_HITS = 17

# North, south, west, east: the order in which cells around a hit are probed.
_PROBE_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))
_NEIGHBOUR_BOOST = 10


def _all_cells() -> Iterator[Coordinate]:
    return (Coordinate(r, c) for r, c in itertools.product(range(ROWS), range(COLS)))


@dataclass
class Stats:
    """Shot counts for one player."""

    num_hits: int = 0
    num_misses: int = 0

    def record(self, result: ShotResult) -> None:
        """Count a resolved shot as a hit or a miss."""
        if result is ShotResult.HIT:
            self.num_hits += 1
        else:
            self.num_misses += 1

    def total_shots(self) -> int:
        """Return the number of shots fired."""
        return self.num_hits + self.num_misses

    def hit_miss_ratio(self) -> float:
        """Return hits per miss as a percentage; 100 when nothing missed."""
        if self.num_misses == 0:
            return 100.0
        return self.num_hits / self.num_misses * 100


class SunkTracker:
    """Counts the cells of each player's ships still afloat."""

    def __init__(self) -> None:
        self._remaining = [
            {ship.symbol: ship.length for ship in default_fleet()} for _ in range(2)
        ]

    def record_hit(self, player: int, symbol: str) -> bool:
        """Record a hit on one of the player's ships; return True if it just sank."""
        remaining = self._remaining[player]
        if symbol not in remaining:
            return False
        remaining[symbol] -= 1
        return remaining[symbol] == 0


class Opponent(Protocol):
    def choose_target(self, board: Board) -> Coordinate: ...

    def notify_result(self, target: Coordinate, result: ShotResult, sunk: bool) -> None: ...


def _fired_on_ship(board: Board, pos: Coordinate) -> bool:
    return pos in board and board.is_hit(pos) and board.symbol_at(pos) != WATER


def probability_grid(board: Board, ships: Iterable[Ship]) -> list[list[int]]:
    """Score every cell by how many ship placements could cover it."""
    ships = list(ships)
    grid = [[0] * COLS for _ in range(ROWS)]
    for origin in _all_cells():
        if board.is_hit(origin):
            continue
        r, c = origin
        for ship in ships:
            spans = []
            if c + ship.length <= COLS:
                spans.append([Coordinate(r, c + k) for k in range(ship.length)])
            if r + ship.length <= ROWS:
                spans.append([Coordinate(r + k, c) for k in range(ship.length)])
            for span in spans:
                if not any(board.is_hit(pos) for pos in span):
                    for pos in span:
                        grid[pos.row][pos.column] += 1
    for pos in _all_cells():
        if board.is_hit(pos):
            continue
        if any(
            _fired_on_ship(board, Coordinate(pos.row + dr, pos.column + dc))
            for dr, dc in _PROBE_OFFSETS
        ):
            grid[pos.row][pos.column] += _NEIGHBOUR_BOOST
    return grid


class ProbabilityAI:
    """Fires at the open cell that the most ship placements could cover."""

    def __init__(self, ships: Iterable[Ship]) -> None:
        self.ships = list(ships)
        self.history: list[tuple[Coordinate, ShotResult, bool]] = []
        self.ships_sunk = 0

    def choose_target(self, board: Board) -> Coordinate:
        """Return the highest-scoring cell not yet fired at."""
        grid = probability_grid(board, self.ships)
        candidates = [pos for pos in _all_cells() if not board.is_hit(pos)]
        if not candidates:
            raise RuntimeError("no untargeted cells remain")
        return max(candidates, key=lambda pos: grid[pos.row][pos.column])

    def notify_result(self, target: Coordinate, result: ShotResult, sunk: bool) -> None:
        """Record the shot; the board alone still drives the next choice."""
        self.history.append((target, result, sunk))
        if sunk:
            self.ships_sunk += 1


class HuntTargetAI:
    """Fires at random until it hits, then probes outward from that hit."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng
        self._anchor: Coordinate | None = None
        self._distance = 1
        self._probing = False

    def choose_target(self, board: Board) -> Coordinate:
        """Return the next cell to fire at."""
        if self._anchor is not None:
            target = self._probe(board)
            if target is not None:
                self._probing = True
                return target
            self._anchor = None
        self._probing = False
        self._distance = 1
        while True:
            target = Coordinate(
                self._rng.randint(0, ROWS - 1), self._rng.randint(0, COLS - 1)
            )
            if board.check_shot(target) is not ShotResult.INVALID:
                return target

    def _probe(self, board: Board) -> Coordinate | None:
        assert self._anchor is not None
        reach = max(ROWS, COLS)
        while self._distance < reach:
            for dr, dc in _PROBE_OFFSETS:
                target = Coordinate(
                    self._anchor.row + dr * self._distance,
                    self._anchor.column + dc * self._distance,
                )
                if board.check_shot(target) is not ShotResult.INVALID:
                    return target
            self._distance += 1
        return None

    def notify_result(self, target: Coordinate, result: ShotResult, sunk: bool) -> None:
        """Update hunting state after the shot at target was resolved."""
        if sunk:
            self._anchor = None
        elif result is ShotResult.HIT:
            if self._probing:
                self._anchor = None
            else:
                self._anchor = target
                self._distance = 1


class Game:
    """Two boards, two players' statistics and the rules for resolving shots."""

    def __init__(self, ai: Opponent | None, rng: random.Random, log: TextIO) -> None:
        self.ai = ai
        self.rng = rng
        self.log = log
        self.fleet = default_fleet()
        self.user = Board()
        self.computer = Board()
        self.players = [Stats(), Stats()]
        self.sunk = SunkTracker()
        self.last_sunk: str | None = None

    def fire(self, player: int, target: Coordinate) -> ShotResult:
        """Resolve a shot by player at the opponent's board and log it."""
        if player not in (PLAYER_1, PLAYER_2):
            raise ValueError(f"unknown player {player}")
        board = self.computer if player == PLAYER_1 else self.user
        result = board.check_shot(target)
        if result is ShotResult.INVALID:
            raise ValueError(f"cannot fire at {tuple(target)}")
        symbol = board.symbol_at(target)
        self.last_sunk = None
        sunk = False
        if result is ShotResult.HIT:
            self.log.write(f"{target.row}, {target.column} is a hit!\n")
            sunk = self.sunk.record_hit(1 - player, symbol)
            if sunk:
                self.last_sunk = ship_name(symbol)
                self.log.write(f"> {self.last_sunk} has been sunk!\n")
        else:
            self.log.write(f"{target.row}, {target.column} is a miss!\n")
        self.players[player].record(result)
        board.update(target)
        if player == PLAYER_2 and self.ai is not None:
            self.ai.notify_result(target, result, sunk)
        return result

    def winner(self) -> int | None:
        """Return the index of the player who has sunk every ship, if any."""
        return next(
            (i for i, stats in enumerate(self.players) if stats.num_hits == WINNING_HITS),
            None,
        )


def format_stats(players: Iterable[Stats]) -> str:
    """Return the end-of-game statistics table."""
    lines = [
        "+" + "=" * 51,
        "|" + " " * 20 + "PLAYER STATS" + " " * 19,
        "+" + "-" * 51,
    ]
    for number, stats in enumerate(players, start=1):
        lines += [
            f"| PLAYER {number} : {stats.num_hits} hits" + " " * 32,
            f"|            {stats.num_misses} misses" + " " * 30,
            f"|            {stats.total_shots()} total shots" + " " * 25,
            f"|            {stats.hit_miss_ratio():.2f}% hit/miss ratio" + " " * 17,
        ]
    lines.append("+" + "=" * 51)
    return "\n".join(lines)


def parse_target(line: str) -> Coordinate:
    """Parse 'row column' into a coordinate; raise ValueError if malformed."""
    parts = line.split()
    if len(parts) != 2:
        raise ValueError(f"expected a row and a column, got {line!r}")
    row, column = (int(part) for part in parts)
    return Coordinate(row, column)


def _read_ints(prompt: str, count: int) -> list[int] | None:
    tokens = input(prompt).split()
    if len(tokens) != count:
        return None
    try:
        return [int(token) for token in tokens]
    except ValueError:
        return None


def _pause(message: str) -> None:
    print(message, end="")
    input()


def _clear_screen() -> None:
    subprocess.run("cls" if os.name == "nt" else "clear", shell=True, check=False)


def _choose_ai(rng: random.Random) -> Opponent:
    print("> Choose AI mode:")
    print("> [1] Regular AI (Random)")
    print("> [2] Smart AI (Probability Grid)")
    while True:
        values = _read_ints("> Enter option: ", 1)
        if values == [1]:
            return HuntTargetAI(rng)
        if values == [2]:
            return ProbabilityAI(default_fleet())
        print("ERROR: invalid input, try again.")


def _place_manually(board: Board, fleet: Iterable[Ship]) -> None:
    for ship in fleet:
        print(f"> Placing {ship.name} ({ship.length} cells)")
        while True:
            values = _read_ints(
                "> Enter row, column, and direction (0=horizontal, 1=vertical): ", 3
            )
            if values is not None:
                row, col, direction = values
                if board.is_valid_placement(row, col, direction, ship.length):
                    board.place_ship(row, col, direction, ship)
                    break
            print("Invalid placement. Try again.")


def _ask_target(board: Board) -> Coordinate:
    while True:
        try:
            target = parse_target(input("> Enter Target (row column): "))
        except ValueError:
            target = None
        if target is not None and board.check_shot(target) is not ShotResult.INVALID:
            return target
        print("> Try inputting another target!")


def _play(rng: random.Random, log: TextIO) -> None:
    print("          ~~~ Welcome to Battleship! ~~~\n")
    _pause("\t   Hit <ENTER> to continue!\n")
    _clear_screen()

    game = Game(_choose_ai(rng), rng, log)

    print("\n> Please select from the following menu:")
    print("> [1] Manually")
    print("> [2] Randomly")
    while True:
        values = _read_ints("> Enter Option: ", 1)
        if values == [1]:
            _place_manually(game.user, game.fleet)
            break
        if values == [2]:
            game.user.place_randomly(game.fleet, rng)
            break
        print("ERROR: invalid input, try again.")

    game.computer.place_randomly(game.fleet, rng)
    print("> Player 2 (Computer's) board has been generated.")

    player = rng.randint(0, 1)
    print(f"> Player {player + 1} has been randomly selected to go first.")
    _pause("> Hit <ENTER> to continue!\n")
    _clear_screen()

    while True:
        log.write(f"Player {player + 1}'s turn.\n")
        if player == PLAYER_1:
            print("> Player 2's Board:")
            print(game.computer.render(False), end="")
            print("> PLAYER 1'S TURN")
            target = _ask_target(game.computer)
        else:
            print("> Player 1's Board:")
            print(game.user.render(True), end="")
            print("> COMPUTER'S TURN")
            assert game.ai is not None
            target = game.ai.choose_target(game.user)

        result = game.fire(player, target)
        outcome = "hit" if result is ShotResult.HIT else "miss"
        print(f"> {target.row}, {target.column} is a {outcome}!")
        if game.last_sunk is not None:
            print(f"> {game.last_sunk} has been sunk!")

        winner = game.winner()
        if winner is not None:
            print(f"\n> Player {winner + 1} wins!")
            log.write(f"\n>>>> Player {winner + 1} wins! <<<<\n")
            break

        _pause("> Hit <ENTER> to continue!\n")
        player = 1 - player
        _clear_screen()

    log.write(format_stats(game.players))


def main(argv: list[str] | None = None) -> int:
    """Run an interactive game against the computer."""
    parser = argparse.ArgumentParser(
        prog="broadside", description="Play a naval battle against the computer."
    )
    parser.add_argument("--log", default=LOG_FILE_NAME, help="file to record the game in")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random number generator")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    try:
        log = open(args.log, "w", encoding="utf-8")
    except OSError:
        print("Error opening log file.")
        return 1
    with log:
        try:
            _play(rng, log)
        except (EOFError, KeyboardInterrupt):
            print()
            return 1
    return 0
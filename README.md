# broadside

Battleship in the terminal. You play against the computer on a 10×10 grid.

## Installing and playing

```
pip install .
broadside
```

Options:

- `--log FILE` sets the file the game is recorded in. The default is `battleship.log` in the current directory.
- `--seed N` seeds the random number generator, so that placements and computer shots repeat from one game to the next.

The game opens with a welcome screen. After you press Enter, it asks two questions.

1. **Which computer opponent to play.**
   - `1` is the regular AI. It fires at random until it scores a hit. It then probes outward from that hit to the north, south, west and east, stepping further out when the nearer cells are used up.
   - `2` is the smart AI. It scores every cell by how many ways a ship of the fleet could still cover it, counting around the shots already fired. Cells next to a known hit get a bonus of 10. It fires at the cell with the highest score.
2. **How to place your fleet.**
   - `1` places it by hand. For each ship you enter a row, a column and a direction: `0` for horizontal, `1` for vertical.
   - `2` places it at random.

The fleet:

| Symbol | Ship       | Length |
|--------|------------|--------|
| C      | Carrier    | 5      |
| B      | Battleship | 4      |
| R      | Cruiser    | 3      |
| S      | Submarine  | 3      |
| D      | Destroyer  | 2      |

The computer places its fleet at random. Who fires first is also chosen at random.

On your turn, enter a target as `row column`, for example `3 7`. If the input is malformed, off the board, or names a cell already fired at, it is refused and you are asked again. The first player to score 17 hits has sunk every ship and wins.

The log file records:

- each turn
- every hit and miss
- every sunk ship
- the winner
- a closing table of each player's hits, misses, total shots and hit/miss ratio

Pressing Ctrl-C or closing input ends the game early. The command then exits with status 1.

## Using it as a library

`broadside.board` holds the board and the rules for a single shot:

- `Board`
- `Ship`
- `Coordinate`
- `Direction`
- `ShotResult`
- `default_fleet()`
- `ship_name()`

```python
import random
from broadside.board import Board, Coordinate, default_fleet

board = Board()
board.place_randomly(default_fleet(), random.Random(1))
target = Coordinate(0, 0)
result = board.check_shot(target)   # ShotResult.HIT, MISS or INVALID
board.update(target)
print(board.render(reveal_ships=True))
```

`broadside.game` holds turn resolution, statistics and the computer opponents:

- The classes are `Game`, `Stats`, `SunkTracker`, `HuntTargetAI` and `ProbabilityAI`.
- The functions are `probability_grid()`, `format_stats()`, `parse_target()` and `main()`.
- `Game.fire()` resolves one shot and writes it to the log. It raises `ValueError` for an unknown player or a target that cannot be fired at.
- `Game.winner()` returns the index of the player who has won, if any.

## Limitations

The game is for one person against the computer, at a single terminal. It has no two-human mode and no network play. It also cannot save a game and resume it later.

## Running the tests

```
pip install ".[test]"
pytest
```
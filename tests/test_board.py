import random
from collections import Counter

import pytest

from broadside.board import (
    COLS,
    HIT,
    MISS,
    ROWS,
    WATER,
    Board,
    Coordinate,
    Direction,
    Ship,
    ShotResult,
    default_fleet,
    ship_name,
)


def _all_coordinates():
    return [Coordinate(r, c) for r in range(ROWS) for c in range(COLS)]


def _symbol_counts(board):
    return Counter(board.symbol_at(pos) for pos in _all_coordinates())


@pytest.fixture
def destroyer():
    return Ship("D", 2, "Destroyer")


def test_default_fleet_matches_ship_names():
    fleet = default_fleet()
    assert [s.symbol for s in fleet] == ["C", "B", "R", "S", "D"]
    assert [s.length for s in fleet] == [5, 4, 3, 3, 2]
    for ship in fleet:
        assert ship_name(ship.symbol) == ship.name


def test_fleet_total_length_is_seventeen():
    assert sum(s.length for s in default_fleet()) == 17


def test_ship_name_unknown():
    assert ship_name("Z") == "Unknown Ship"


def test_new_board_is_all_water_and_unhit():
    board = Board()
    for pos in _all_coordinates():
        assert board.symbol_at(pos) == WATER
        assert board.is_hit(pos) is False


def test_horizontal_placement_bounds():
    board = Board()
    assert board.is_valid_placement(0, 5, Direction.HORIZONTAL, 5)
    assert not board.is_valid_placement(0, 6, Direction.HORIZONTAL, 5)


def test_vertical_placement_bounds():
    board = Board()
    assert board.is_valid_placement(5, 0, Direction.VERTICAL, 5)
    assert not board.is_valid_placement(6, 0, Direction.VERTICAL, 5)


def test_off_board_start_is_invalid():
    board = Board()
    assert not board.is_valid_placement(-1, 0, Direction.HORIZONTAL, 2)
    assert not board.is_valid_placement(0, COLS, Direction.VERTICAL, 2)


def test_place_ship_horizontal(destroyer):
    board = Board()
    board.place_ship(3, 4, Direction.HORIZONTAL, destroyer)
    assert board.symbol_at(Coordinate(3, 4)) == "D"
    assert board.symbol_at(Coordinate(3, 5)) == "D"
    assert board.symbol_at(Coordinate(4, 4)) == WATER
    assert _symbol_counts(board)["D"] == destroyer.length


def test_place_ship_vertical(destroyer):
    board = Board()
    board.place_ship(3, 4, Direction.VERTICAL, destroyer)
    assert board.symbol_at(Coordinate(4, 4)) == "D"
    assert board.symbol_at(Coordinate(3, 5)) == WATER


def test_overlap_is_invalid_and_place_raises(destroyer):
    board = Board()
    board.place_ship(2, 2, Direction.HORIZONTAL, destroyer)
    assert not board.is_valid_placement(1, 3, Direction.VERTICAL, 3)
    with pytest.raises(ValueError):
        board.place_ship(1, 3, Direction.VERTICAL, Ship("R", 3, "Cruiser"))
    assert board.symbol_at(Coordinate(1, 3)) == WATER


def test_place_ship_off_board_raises(destroyer):
    board = Board()
    with pytest.raises(ValueError):
        board.place_ship(0, 9, Direction.HORIZONTAL, destroyer)


@pytest.mark.parametrize("seed", [0, 1, 42, 1234])
def test_place_randomly_places_whole_fleet(seed):
    board = Board()
    fleet = default_fleet()
    board.place_randomly(fleet, random.Random(seed))
    counts = _symbol_counts(board)
    for ship in fleet:
        assert counts[ship.symbol] == ship.length
    assert counts[WATER] == ROWS * COLS - sum(s.length for s in fleet)


def test_place_randomly_is_deterministic_for_seed():
    a, b = Board(), Board()
    a.place_randomly(default_fleet(), random.Random(7))
    b.place_randomly(default_fleet(), random.Random(7))
    assert _symbol_counts(a) == _symbol_counts(b)
    assert all(a.symbol_at(p) == b.symbol_at(p) for p in _all_coordinates())


def test_check_shot_hit_and_miss(destroyer):
    board = Board()
    board.place_ship(0, 0, Direction.HORIZONTAL, destroyer)
    assert board.check_shot(Coordinate(0, 0)) is ShotResult.HIT
    assert board.check_shot(Coordinate(5, 5)) is ShotResult.MISS


@pytest.mark.parametrize(
    "target",
    [Coordinate(-1, 0), Coordinate(0, -1), Coordinate(ROWS, 0), Coordinate(0, COLS)],
)
def test_check_shot_off_board_is_invalid(target):
    assert Board().check_shot(target) is ShotResult.INVALID


def test_repeat_shot_is_invalid(destroyer):
    board = Board()
    board.place_ship(0, 0, Direction.HORIZONTAL, destroyer)
    for pos in (Coordinate(0, 0), Coordinate(9, 9)):
        board.update(pos)
        assert board.check_shot(pos) is ShotResult.INVALID


def test_update_records_hit_and_miss(destroyer):
    board = Board()
    board.place_ship(0, 0, Direction.HORIZONTAL, destroyer)
    board.update(Coordinate(0, 1))
    board.update(Coordinate(4, 4))
    assert board.is_hit(Coordinate(0, 1))
    assert board.symbol_at(Coordinate(0, 1)) == HIT
    assert board.symbol_at(Coordinate(4, 4)) == MISS
    assert board.symbol_at(Coordinate(0, 0)) == "D"


def test_symbol_at_off_board_raises():
    with pytest.raises(IndexError):
        Board().symbol_at(Coordinate(-1, 3))


def test_render_hides_and_reveals_ships(destroyer):
    board = Board()
    board.place_ship(0, 0, Direction.HORIZONTAL, destroyer)
    hidden = board.render(False)
    shown = board.render(True)
    assert "\x1b[35m D \x1b[0m" not in hidden
    assert shown.count("\x1b[35m D \x1b[0m") == destroyer.length
    assert "Legend:" in hidden


def test_render_marks_fired_cells(destroyer):
    board = Board()
    board.place_ship(0, 0, Direction.HORIZONTAL, destroyer)
    before = board.render(False).count("\x1b[32m O \x1b[0m")
    board.update(Coordinate(0, 0))
    board.update(Coordinate(5, 5))
    after = board.render(False).count("\x1b[32m O \x1b[0m")
    assert after - before == 2


def test_render_row_labels():
    text = Board().render(False)
    for row in range(ROWS):
        assert f"{row:2d} | " in text
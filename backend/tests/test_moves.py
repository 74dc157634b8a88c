import pytest

from othelloplus.exceptions import InvalidMoveError
from othelloplus.moves import (
    ROOT_MOVES,
    normalize_move,
    number_moves,
    orient_move,
    orient_moves,
    parse_moves,
    split_moves,
)


def test_normalize_move_uppercases():
    assert normalize_move("c4") == "C4"
    assert normalize_move(" f5 ") == "F5"


@pytest.mark.parametrize("token", ["", "C", "I4", "C9", "C0", "4C", "C44"])
def test_normalize_move_rejects_bad_tokens(token):
    with pytest.raises(InvalidMoveError):
        normalize_move(token)


def test_split_moves_two_character_chunks():
    assert split_moves("f5d6C3d3") == ["F5", "D6", "C3", "D3"]
    assert split_moves("f5 d6\nc3") == ["F5", "D6", "C3"]
    assert split_moves("") == []


def test_split_moves_rejects_odd_length():
    with pytest.raises(InvalidMoveError) as exc:
        split_moves("f5d")
    assert "odd" in str(exc.value)


def test_invalid_move_is_value_error():
    with pytest.raises(ValueError):
        split_moves("z9")


def test_parse_moves_accepts_list_or_string():
    assert parse_moves(["f5", "D6"]) == ["F5", "D6"]
    assert parse_moves("f5d6") == ["F5", "D6"]


def test_number_moves():
    assert number_moves(["F5", "D6"]) == ["1. F5", "2. D6"]
    assert number_moves([]) == []


def test_orientations_of_f5_are_the_root_moves():
    assert sorted(orient_move("F5", orientation) for orientation in range(4)) == sorted(ROOT_MOVES)


def test_orient_moves_transpose():
    assert orient_moves(["F5", "D6", "C3"], 1) == ("E6", "F4", "C3")
    assert orient_moves(["F5", "D6"], 2) == ("C4", "E3")

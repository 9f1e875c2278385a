"""Unit tests for the textual chord encoding."""

import pytest

from chordview.chord import Chord
from chordview.chord_parser import (
    format_chord,
    format_frets,
    parse_chord,
    parse_fingers,
    parse_frets,
)


def test_parse_compact_frets() -> None:
    assert parse_frets("x32010") == (-1, 3, 2, 0, 1, 0)
    assert parse_frets("X32010") == (-1, 3, 2, 0, 1, 0)


def test_parse_separated_frets_with_high_positions() -> None:
    assert parse_frets("x, 10, 12, 12, 11, x") == (-1, 10, 12, 12, 11, -1)
    assert parse_frets("-1 3 2 0 1 0") == (-1, 3, 2, 0, 1, 0)


@pytest.mark.parametrize("text", ["", "   ", "x3a010", "x,3,-2,0,1,0"])
def test_parse_frets_rejects_garbage(text: str) -> None:
    with pytest.raises(ValueError):
        parse_frets(text)


def test_parse_fingers_treats_x_and_dash_as_unlabelled() -> None:
    assert parse_fingers("x32-10") == (0, 3, 2, 0, 1, 0)


def test_parse_fingers_rejects_letters() -> None:
    with pytest.raises(ValueError, match="Invalid finger"):
        parse_fingers("0a2010")


def test_parse_chord_with_fingers() -> None:
    chord = parse_chord("x32010/032010")
    assert chord == Chord([-1, 3, 2, 0, 1, 0], [0, 3, 2, 0, 1, 0])


def test_parse_chord_length_mismatch() -> None:
    with pytest.raises(ValueError, match="finger hints"):
        parse_chord("x32010/0320")


def test_format_frets_compact_and_separated() -> None:
    assert format_frets(Chord([-1, 3, 2, 0, 1, 0])) == "x32010"
    assert format_frets(Chord([-1, 10, 12, 12, 11, -1])) == "x,10,12,12,11,x"


def test_format_chord_includes_fingers() -> None:
    assert format_chord(Chord([1, 3, 3, 2, 1, 1], [1, 3, 4, 2, 1, 1])) == "133211/134211"
    assert format_chord(Chord([-1, 3, 2, 0, 1, 0])) == "x32010"

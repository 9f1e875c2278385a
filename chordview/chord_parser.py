"""Parse and format the textual chord encoding used by the CLI and sheets.

Two spellings are accepted for a list of frets:

    x32010          one character per string, ``x`` marks a muted string
    x,10,12,12,x,x  comma and/or whitespace separated, needed for frets >= 10

A chord may carry finger hints after a slash: ``x32010/032010``.
"""

import re

from chordview.chord import CLOSED, Chord

_SEPARATORS = re.compile(r"[,\s]+")
_CLOSED_TOKENS = {"x", "X"}
_NO_FINGER_TOKENS = {"x", "X", "-"}


def _tokenize(text: str) -> list[str]:
    stripped = text.strip()
    if not stripped:
        raise ValueError("Empty chord encoding.")
    if _SEPARATORS.search(stripped):
        return [token for token in _SEPARATORS.split(stripped) if token]
    return list(stripped)


def parse_frets(text: str) -> tuple[int, ...]:
    """
    Parse a fret list such as ``x32010`` or ``x, 3, 2, 0, 1, 0``.

    Raises:
        ValueError: If a token is neither ``x`` nor an integer >= -1.
    """
    frets: list[int] = []
    for token in _tokenize(text):
        if token in _CLOSED_TOKENS:
            frets.append(CLOSED)
            continue
        try:
            value = int(token)
        except ValueError:
            raise ValueError(f"Invalid fret '{token}' in '{text}'.") from None
        if value < CLOSED:
            raise ValueError(f"Invalid fret '{token}' in '{text}'.")
        frets.append(value)
    return tuple(frets)


def parse_fingers(text: str) -> tuple[int, ...]:
    """Parse finger hints; ``x`` and ``-`` mean "no label" (0)."""
    fingers: list[int] = []
    for token in _tokenize(text):
        if token in _NO_FINGER_TOKENS:
            fingers.append(0)
            continue
        if not token.isdigit():
            raise ValueError(f"Invalid finger '{token}' in '{text}'.")
        fingers.append(int(token))
    return tuple(fingers)


def parse_chord(text: str) -> Chord:
    """
    Build a Chord from ``FRETS`` or ``FRETS/FINGERS``.

    Raises:
        ValueError: If either part is malformed or the lengths disagree.
    """
    frets_text, sep, fingers_text = text.partition("/")
    frets = parse_frets(frets_text)
    fingers = parse_fingers(fingers_text) if sep else None
    return Chord(frets, fingers)


def format_frets(chord: Chord) -> str:
    """Format a chord's frets back into the compact encoding."""
    tokens = ["x" if fret == CLOSED else str(fret) for fret in chord.frets]
    if all(len(token) == 1 for token in tokens):
        return "".join(tokens)
    return ",".join(tokens)


def format_chord(chord: Chord) -> str:
    """Format a chord, including its finger hints when present."""
    encoded = format_frets(chord)
    if not chord.has_fingers:
        return encoded
    fingers = [str(finger) for finger in chord.fingers]
    if all(len(token) == 1 for token in fingers) and "," not in encoded:
        return f"{encoded}/{''.join(fingers)}"
    return f"{encoded}/{','.join(fingers)}"

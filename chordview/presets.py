"""Common guitar chord shapes, built fresh on every lookup."""

from chordview.chord import Chord

# ── Shape table ─────────────────────────────────────────────────────────────
# (frets, fingers), string 6 (low E) first. -1 = muted, 0 = open.

PRESETS: dict[str, tuple[tuple[int, ...], tuple[int, ...]]] = {
    "C": ((-1, 3, 2, 0, 1, 0), (0, 3, 2, 0, 1, 0)),
    "D": ((-1, -1, 0, 2, 3, 2), (0, 0, 0, 1, 3, 2)),
    "Dm": ((-1, -1, 0, 2, 3, 1), (0, 0, 0, 2, 3, 1)),
    "E": ((0, 2, 2, 1, 0, 0), (0, 2, 3, 1, 0, 0)),
    "Em": ((0, 2, 2, 0, 0, 0), (0, 2, 3, 0, 0, 0)),
    "F": ((1, 3, 3, 2, 1, 1), (1, 3, 4, 2, 1, 1)),
    "G": ((3, 2, 0, 0, 0, 3), (2, 1, 0, 0, 0, 3)),
    "A": ((-1, 0, 2, 2, 2, 0), (0, 0, 1, 2, 3, 0)),
    "Am": ((-1, 0, 2, 2, 1, 0), (0, 0, 2, 3, 1, 0)),
    "Bm": ((-1, 2, 4, 4, 3, 2), (0, 1, 3, 4, 2, 1)),
    "B7": ((-1, 2, 1, 2, 0, 2), (0, 2, 1, 3, 0, 4)),
}


def open_c() -> Chord:
    """Return a new open C chord (x32010) without finger hints."""
    return Chord((-1, 3, 2, 0, 1, 0))


def preset_names() -> list[str]:
    return list(PRESETS)


def preset(name: str) -> Chord:
    """
    Build the named chord shape.

    Raises:
        KeyError: If ``name`` is not a known preset.
    """
    try:
        frets, fingers = PRESETS[name]
    except KeyError:
        known = ", ".join(PRESETS)
        raise KeyError(f"Unknown chord preset '{name}'. Known presets: {known}.") from None
    return Chord(frets, fingers)

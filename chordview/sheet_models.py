"""Data models for chord sheet outputs."""

from dataclasses import dataclass, field

from chordview.chord import Chord


@dataclass(frozen=True)
class ChordDiagram:
    """A chord shape with the name printed under its diagram."""

    name: str
    chord: Chord


@dataclass(frozen=True)
class ChordSheet:
    """An ordered set of diagrams rendered as one document."""

    title: str
    diagrams: list[ChordDiagram] = field(default_factory=list)

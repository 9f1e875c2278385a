"""chordview: stringed-instrument chord diagrams rendered to SVG."""

from chordview.chord import BarreSpan, Chord
from chordview.chord_view import ChordView
from chordview.style import ChordStyle, ShowMode

__version__ = "0.1.0"

__all__ = ["BarreSpan", "Chord", "ChordStyle", "ChordView", "ShowMode", "__version__"]

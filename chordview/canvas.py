"""Drawing surface contract consumed by ChordView."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from chordview.style import MarkerImage


class PaintStyle(Enum):
    FILL = "fill"
    STROKE = "stroke"


@dataclass(frozen=True)
class Paint:
    """How a primitive is filled or stroked."""

    style: PaintStyle = PaintStyle.FILL
    color: str = "#ffffff"
    alpha: int = 255
    stroke_width: float = 0.0
    text_size: float = 12.0

    @property
    def opacity(self) -> float:
        return self.alpha / 255


@dataclass(frozen=True)
class FontMetrics:
    """Baseline-relative font extents; ``ascent`` is negative (above the baseline)."""

    ascent: float
    descent: float


@dataclass
class Path:
    """A path built from move/line/quadratic segments."""

    commands: list[tuple[str, tuple[float, ...]]] = field(default_factory=list)

    def move_to(self, x: float, y: float) -> Path:
        self.commands.append(("M", (x, y)))
        return self

    def line_to(self, x: float, y: float) -> Path:
        self.commands.append(("L", (x, y)))
        return self

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> Path:
        self.commands.append(("Q", (cx, cy, x, y)))
        return self

    def to_svg(self) -> str:
        """Render the segments as SVG path data."""
        parts = []
        for op, coords in self.commands:
            pairs = " ".join(
                f"{coords[i]:.2f},{coords[i + 1]:.2f}" for i in range(0, len(coords), 2)
            )
            parts.append(f"{op} {pairs}")
        return " ".join(parts)


class Canvas(ABC):
    """
    Abstract drawing surface with fixed bounds.

    Text measurement defaults to em-based estimates for a sans-serif face,
    which is all the diagram layout needs to right-align fret numbers and
    centre finger labels. Surfaces with real font access may override them.
    """

    # Average advance of a digit, as a fraction of the font size
    GLYPH_WIDTH_EM: float = 0.56
    ASCENT_EM: float = -0.93
    DESCENT_EM: float = 0.24

    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def measure_text(self, text: str, paint: Paint) -> float:
        return len(text) * paint.text_size * self.GLYPH_WIDTH_EM

    def font_metrics(self, paint: Paint) -> FontMetrics:
        return FontMetrics(
            ascent=paint.text_size * self.ASCENT_EM,
            descent=paint.text_size * self.DESCENT_EM,
        )

    @abstractmethod
    def draw_bitmap(self, image: MarkerImage, x: float, y: float) -> None:
        """Draw an image with its top-left corner at (x, y)."""

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float, paint: Paint) -> None:
        """Draw a straight line."""

    @abstractmethod
    def draw_rect(
        self, left: float, top: float, right: float, bottom: float, paint: Paint
    ) -> None:
        """Draw an axis-aligned rectangle."""

    @abstractmethod
    def draw_circle(self, cx: float, cy: float, radius: float, paint: Paint) -> None:
        """Draw a circle."""

    @abstractmethod
    def draw_text(self, text: str, x: float, y: float, paint: Paint) -> None:
        """Draw text with its left end of the baseline at (x, y)."""

    @abstractmethod
    def draw_path(self, path: Path, paint: Paint) -> None:
        """Draw an arbitrary path."""


@dataclass(frozen=True)
class DrawCall:
    """One primitive recorded by RecordingCanvas."""

    op: str
    args: tuple[Any, ...]
    paint: Paint | None = None


class RecordingCanvas(Canvas):
    """A canvas that keeps every draw call in order instead of rendering it."""

    def __init__(self, width: float, height: float) -> None:
        super().__init__(width, height)
        self.calls: list[DrawCall] = []

    def calls_for(self, op: str) -> list[DrawCall]:
        return [call for call in self.calls if call.op == op]

    def draw_bitmap(self, image: MarkerImage, x: float, y: float) -> None:
        self.calls.append(DrawCall("bitmap", (image, x, y)))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, paint: Paint) -> None:
        self.calls.append(DrawCall("line", (x1, y1, x2, y2), paint))

    def draw_rect(
        self, left: float, top: float, right: float, bottom: float, paint: Paint
    ) -> None:
        self.calls.append(DrawCall("rect", (left, top, right, bottom), paint))

    def draw_circle(self, cx: float, cy: float, radius: float, paint: Paint) -> None:
        self.calls.append(DrawCall("circle", (cx, cy, radius), paint))

    def draw_text(self, text: str, x: float, y: float, paint: Paint) -> None:
        self.calls.append(DrawCall("text", (text, x, y), paint))

    def draw_path(self, path: Path, paint: Paint) -> None:
        self.calls.append(DrawCall("path", (path,), paint))

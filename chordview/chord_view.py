"""ChordView: lays out a chord diagram and issues draw calls against a Canvas."""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from chordview.canvas import Canvas, Paint, PaintStyle, Path
from chordview.chord import CLOSED, OPEN, BarreSpan, Chord
from chordview.style import ChordStyle, MarkerImage, ShowMode

logger = logging.getLogger(__name__)


class ChordView:
    """
    A chord diagram widget.

    Geometry is recomputed on every ``draw()`` from the current chord, the
    style and the canvas bounds. From top to bottom the view holds:

    - the string marker row (open/muted markers), when the chord needs one;
    - the head, a rounded cap above the grid, for chords near the nut;
    - the fret grid, with fret numbers in a column on its left once the chord
      sits higher than the default fret span.

    Without a chord only the empty grid is drawn.

    Usage:

        view = ChordView(ChordStyle(head_radius=20), preset("C"))
        view.draw(SvgCanvas(400, 480))
    """

    #: Largest fret for which the head (nut) is still drawn.
    HEAD_FRET_LIMIT = 5
    DEFAULT_ROWS = 4
    SIMPLE_ROWS = 3

    def __init__(
        self,
        style: ChordStyle | None = None,
        chord: Chord | None = None,
        on_invalidate: Callable[[ChordView], None] | None = None,
    ) -> None:
        """
        Args:
            style:         Styling configuration; defaults to ChordStyle().
            chord:         Chord to display, or None for an empty grid.
            on_invalidate: Called whenever a setter schedules a redraw.
        """
        self.style = style if style is not None else ChordStyle()
        self._chord = chord
        self._show_mode = self.style.show_mode
        self._on_invalidate = on_invalidate
        self.needs_redraw = True

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def chord(self) -> Chord | None:
        return self._chord

    @chord.setter
    def chord(self, chord: Chord | None) -> None:
        self._chord = chord
        self.invalidate()

    @property
    def show_mode(self) -> ShowMode:
        return self._show_mode

    @show_mode.setter
    def show_mode(self, mode: ShowMode | int | str) -> None:
        self._show_mode = ShowMode.from_value(mode)
        self.invalidate()

    def set_chord(self, chord: Chord | None) -> None:
        """Replace the displayed chord and schedule a redraw."""
        self.chord = chord

    def get_chord(self) -> Chord | None:
        return self._chord

    def set_show_mode(self, mode: ShowMode | int | str) -> None:
        """
        Switch between normal and simple rendering and schedule a redraw.

        Raises:
            ValueError: If ``mode`` does not name a show mode.
        """
        self.show_mode = mode

    def get_show_mode(self) -> ShowMode:
        return self._show_mode

    def invalidate(self) -> None:
        """Mark the view as needing a redraw."""
        self.needs_redraw = True
        if self._on_invalidate is not None:
            self._on_invalidate(self)

    def draw(self, canvas: Canvas) -> None:
        """Run the full draw pipeline against ``canvas``."""
        logger.debug(
            "Drawing %s on %gx%g canvas (%s mode)",
            self._chord,
            canvas.width,
            canvas.height,
            self._show_mode.name.lower(),
        )
        if self._chord is not None:
            self._draw_string_markers(canvas, self._chord)
        self._draw_fret_labels(canvas)
        self._draw_head(canvas)
        self._draw_grid(canvas)
        self._draw_notes(canvas)
        self.needs_redraw = False

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def string_count(self) -> int:
        return self._chord.string_count if self._chord is not None else self.style.string_count

    def least_fret(self) -> int:
        """Least pressed fret of the chord; 1 when no chord is set."""
        return self._chord.least_fret() if self._chord is not None else 1

    def largest_fret(self) -> int:
        """Largest pressed fret of the chord; 1 when no chord is set."""
        return self._chord.largest_fret() if self._chord is not None else 1

    def row_count(self) -> int:
        """
        Number of fret rows in the grid.

        In simple mode a chord that starts on fret 1 and spans fewer than
        three frets gets three rows; everything else gets four.
        """
        if self._show_mode is ShowMode.SIMPLE:
            least = self.least_fret()
            if self.largest_fret() - least < 3 and least == 1:
                return self.SIMPLE_ROWS
        return self.DEFAULT_ROWS

    def is_exceed_default_fret(self) -> bool:
        return self.largest_fret() > self.style.default_fret_span

    def fret_label_width(self, canvas: Canvas) -> float:
        """Width of the fret number column left of the grid."""
        if self._chord is None:
            return 0.0
        widest = str(self.least_fret() + self.row_count() - 1)
        return canvas.measure_text(widest, self._fret_text_paint()) + self.style.fret_text_offset_x

    def should_draw_strings(self) -> bool:
        return self._chord is not None and (
            self._chord.is_closed_string() or self._chord.is_empty_string()
        )

    def string_marker_height(self) -> float:
        if not self.should_draw_strings():
            return 0.0
        return self._max_marker_height() + self.style.string_offset_y

    def should_draw_head(self) -> bool:
        return self._chord is not None and self._chord.largest_fret() <= self.HEAD_FRET_LIMIT

    def head_height(self) -> float:
        return self.style.head_radius if self.should_draw_head() else 0.0

    def grid_top(self) -> float:
        return self.string_marker_height() + self.head_height()

    def grid_width(self, canvas: Canvas) -> float:
        return canvas.width - self.fret_label_width(canvas) - self.style.note_radius

    def grid_height(self, canvas: Canvas) -> float:
        return canvas.height - self.string_marker_height() - self.head_height()

    def column_width(self, canvas: Canvas) -> float:
        return self.grid_width(canvas) / (self.string_count - 1)

    def row_height(self, canvas: Canvas) -> float:
        return self.grid_height(canvas) / self.row_count()

    def fret_to_row(self, fret: int) -> int:
        """
        Map a pressed fret to its 1-based grid row.

        Within the default span the row is the fret itself. Above it, rows
        are relative to the least fret: the least fret sits on row 1 and any
        other fret on ``fret % least + 1``, or ``fret - least + 1`` when the
        fret is a multiple of the least fret.
        """
        if not self.is_exceed_default_fret():
            return fret
        least = self.least_fret()
        if fret == least:
            return 1
        remainder = fret % least
        return remainder + 1 if remainder != 0 else fret - least + 1

    def note_center(self, canvas: Canvas, fret: int, column: int) -> tuple[float, float]:
        """
        Centre of the note circle for ``fret`` on grid column ``column``.

        Columns are numbered 1..string_count from the left, i.e. in the order
        of ``Chord.frets``.
        """
        line_width = self.style.grid_line_width
        column_width = self.column_width(canvas)
        row_height = self.row_height(canvas)
        inset = line_width if column == self.string_count else line_width / 2
        cx = self.fret_label_width(canvas) + line_width / 2 + column_width * (column - 1) - inset
        cy = self.grid_top() + row_height * self.fret_to_row(fret) - row_height / 2
        return cx, cy

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _max_marker_height(self) -> float:
        return max(
            _marker_height(self.style.closed_string_image),
            _marker_height(self.style.empty_string_image),
        )

    def _marker_for(self, fret: int) -> MarkerImage | None:
        if fret == CLOSED:
            return self.style.closed_string_image
        if fret == OPEN:
            return self.style.empty_string_image
        return None

    def _fret_text_paint(self) -> Paint:
        return Paint(
            style=PaintStyle.FILL,
            color=self.style.fret_text_color,
            text_size=self.style.fret_text_size,
        )

    # ------------------------------------------------------------------
    # Draw pipeline
    # ------------------------------------------------------------------

    def _draw_string_markers(self, canvas: Canvas, chord: Chord) -> None:
        if not self.should_draw_strings():
            return
        label_width = self.fret_label_width(canvas)
        column_width = self.column_width(canvas)
        top = self._max_marker_height() / 2
        for index, fret in enumerate(chord.frets):
            image = self._marker_for(fret)
            if image is None:
                continue
            left = label_width - image.width / 2 + column_width * index
            canvas.draw_bitmap(image, left, top)

    def _draw_fret_labels(self, canvas: Canvas) -> None:
        if not self.is_exceed_default_fret():
            return
        paint = self._fret_text_paint()
        label_width = self.fret_label_width(canvas)
        row_height = self.row_height(canvas)
        least = self.least_fret()
        for row, fret in enumerate(range(least, least + self.row_count()), start=1):
            text = str(fret)
            x = label_width - canvas.measure_text(text, paint) - self.style.fret_text_offset_x
            y = self.grid_top() + row_height * row
            canvas.draw_text(text, x, y, paint)
            if self._show_mode is ShowMode.SIMPLE:
                break

    def _draw_head(self, canvas: Canvas) -> None:
        if not self.should_draw_head():
            return
        radius = self.style.head_radius
        width = self.grid_width(canvas)
        x = self.fret_label_width(canvas)
        y = self.string_marker_height()
        path = (
            Path()
            .move_to(x, y + radius)
            .quad_to(x, y, x + radius, y)
            .line_to(x + width - radius, y)
            .quad_to(x + width, y, x + width, y + radius)
        )
        canvas.draw_path(path, Paint(style=PaintStyle.FILL, color=self.style.head_color))

    def _draw_grid(self, canvas: Canvas) -> None:
        line_width = self.style.grid_line_width
        paint = Paint(
            style=PaintStyle.STROKE,
            color=self.style.grid_line_color,
            stroke_width=line_width,
        )
        rows = self.row_count()
        strings = self.string_count
        width, height = self.grid_width(canvas), self.grid_height(canvas)
        left, top = self.fret_label_width(canvas), self.grid_top()

        row_step = (height - line_width * (rows + 1)) / rows + line_width
        for y in top + line_width / 2 + row_step * np.arange(rows + 1):
            canvas.draw_line(left, float(y), left + width, float(y), paint)

        column_step = (width - line_width * strings) / (strings - 1) + line_width
        for x in left + line_width / 2 + column_step * np.arange(strings):
            canvas.draw_line(float(x), top, float(x), top + height, paint)

    def _draw_notes(self, canvas: Canvas) -> None:
        if self._chord is None:
            return
        chord = self._chord
        barre = chord.barre_chord_data()
        if barre is not None:
            self._draw_barre(canvas, chord, barre)

        strings = chord.string_count
        for index, fret in enumerate(chord.frets):
            if fret < 1:
                continue
            if barre is not None and fret == barre.fret and strings - index <= barre.span:
                continue
            finger = chord.fingers[index] if chord.has_fingers else 0
            self._draw_note(
                canvas,
                fret,
                index + 1,
                finger,
                alpha=self.style.note_alpha,
                stroke_width=self.style.note_stroke_width,
                stroke_color=self.style.note_stroke_color,
            )

    def _draw_barre(self, canvas: Canvas, chord: Chord, barre: BarreSpan) -> None:
        style = self.style
        strings = self.string_count
        column_width = self.column_width(canvas)
        row_height = self.row_height(canvas)

        left = self.fret_label_width(canvas) + style.grid_line_width / 2
        left += column_width * (strings - barre.span)
        top = self.grid_top()
        if self.is_exceed_default_fret():
            top += row_height / 2 - style.note_radius
        else:
            top += row_height * barre.fret - row_height / 2 - style.note_radius
        right = left + column_width * (barre.span - 1)
        bottom = top + style.note_radius * 2

        logger.debug("Barre at fret %d over %d strings", barre.fret, barre.span)
        canvas.draw_rect(
            left,
            top,
            right,
            bottom,
            Paint(style=PaintStyle.FILL, color=style.barre_color, alpha=style.barre_alpha),
        )
        if style.barre_stroke_width > 0:
            edge = Paint(
                style=PaintStyle.STROKE,
                color=style.barre_stroke_color,
                stroke_width=style.barre_stroke_width,
            )
            half = style.barre_stroke_width / 2
            canvas.draw_line(left, top + half, right, top + half, edge)
            canvas.draw_line(left, bottom - half, right, bottom - half, edge)

        # End caps on the outermost covered strings.
        finger = 1 if chord.has_fingers else 0
        for column in (strings, strings - (barre.span - 1)):
            self._draw_note(canvas, barre.fret, column, finger, alpha=255)

    def _draw_note(
        self,
        canvas: Canvas,
        fret: int,
        column: int,
        finger: int,
        alpha: int,
        stroke_width: float = 0.0,
        stroke_color: str = "#ffffff",
    ) -> None:
        style = self.style
        cx, cy = self.note_center(canvas, fret, column)
        canvas.draw_circle(
            cx,
            cy,
            style.note_radius,
            Paint(style=PaintStyle.FILL, color=style.note_color, alpha=alpha),
        )

        if self._show_mode is not ShowMode.SIMPLE and finger > 0:
            text_paint = Paint(
                style=PaintStyle.FILL,
                color=style.note_text_color,
                text_size=style.note_text_size,
            )
            text = str(finger)
            metrics = canvas.font_metrics(text_paint)
            x = cx - canvas.measure_text(text, text_paint) / 2
            y = cy - (metrics.ascent + metrics.descent) / 2
            canvas.draw_text(text, x, y, text_paint)

        if stroke_width > 0:
            canvas.draw_circle(
                cx,
                cy,
                style.note_radius,
                Paint(style=PaintStyle.STROKE, color=stroke_color, stroke_width=stroke_width),
            )


def _marker_height(image: MarkerImage | None) -> float:
    return image.height if image is not None else 0.0

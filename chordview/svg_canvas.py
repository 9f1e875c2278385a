"""SvgCanvas: a Canvas that builds an SVG document with svgwrite."""

from __future__ import annotations

from pathlib import Path as FilePath
from typing import Any

import svgwrite

from chordview.canvas import Canvas, Paint, PaintStyle, Path
from chordview.style import MarkerImage


class SvgCanvas(Canvas):
    """
    Renders draw calls into an in-memory ``svgwrite.Drawing``.

    Usage:

        canvas = SvgCanvas(400, 480, background="#202020")
        ChordView(style, chord).draw(canvas)
        markup = canvas.tostring()
    """

    FONT_FAMILY = "sans-serif"

    def __init__(self, width: float, height: float, background: str | None = None) -> None:
        super().__init__(width, height)
        self.drawing = svgwrite.Drawing(
            size=(f"{width:g}", f"{height:g}"),
            viewBox=f"0 0 {width:g} {height:g}",
            profile="full",
            debug=False,
        )
        if background is not None:
            self.drawing.add(self.drawing.rect((0, 0), (width, height), fill=background))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _paint_attributes(self, paint: Paint) -> dict[str, Any]:
        """Translate a Paint into SVG presentation attributes."""
        if paint.style is PaintStyle.STROKE:
            return {
                "fill": "none",
                "stroke": paint.color,
                "stroke_width": paint.stroke_width,
                "stroke_opacity": f"{paint.opacity:.3f}",
            }
        return {"fill": paint.color, "fill_opacity": f"{paint.opacity:.3f}"}

    # ------------------------------------------------------------------
    # Canvas primitives
    # ------------------------------------------------------------------

    def draw_bitmap(self, image: MarkerImage, x: float, y: float) -> None:
        self.drawing.add(
            self.drawing.image(image.href, insert=(x, y), size=(image.width, image.height))
        )

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, paint: Paint) -> None:
        self.drawing.add(
            self.drawing.line(
                start=(x1, y1),
                end=(x2, y2),
                stroke=paint.color,
                stroke_width=paint.stroke_width,
                stroke_opacity=f"{paint.opacity:.3f}",
            )
        )

    def draw_rect(
        self, left: float, top: float, right: float, bottom: float, paint: Paint
    ) -> None:
        x, width = min(left, right), abs(right - left)
        y, height = min(top, bottom), abs(bottom - top)
        self.drawing.add(
            self.drawing.rect(insert=(x, y), size=(width, height), **self._paint_attributes(paint))
        )

    def draw_circle(self, cx: float, cy: float, radius: float, paint: Paint) -> None:
        self.drawing.add(
            self.drawing.circle(center=(cx, cy), r=radius, **self._paint_attributes(paint))
        )

    def draw_text(self, text: str, x: float, y: float, paint: Paint) -> None:
        self.drawing.add(
            self.drawing.text(
                text,
                insert=(x, y),
                font_size=f"{paint.text_size:g}",
                font_family=self.FONT_FAMILY,
                fill=paint.color,
                fill_opacity=f"{paint.opacity:.3f}",
            )
        )

    def draw_path(self, path: Path, paint: Paint) -> None:
        self.drawing.add(self.drawing.path(d=path.to_svg(), **self._paint_attributes(paint)))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def tostring(self) -> str:
        return str(self.drawing.tostring())

    def save(self, output_path: str | FilePath) -> None:
        """
        Write the SVG document to disk.

        Raises:
            OSError: If the file cannot be written.
        """
        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(self.tostring())

"""Renderer implementations for chord sheet output formats."""

from __future__ import annotations

from abc import ABC, abstractmethod

from chordview.chord import Chord
from chordview.chord_parser import format_chord
from chordview.chord_view import ChordView
from chordview.sheet_models import ChordSheet
from chordview.style import ChordStyle
from chordview.svg_canvas import SvgCanvas


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class SheetRenderer(ABC):
    """
    Abstract sheet renderer.

    Every renderer draws its diagrams through a ChordView onto an SvgCanvas of
    a fixed size; subclasses only decide how the SVGs are assembled.
    """

    DEFAULT_WIDTH: float = 400.0
    DEFAULT_HEIGHT: float = 480.0

    def __init__(
        self,
        style: ChordStyle | None = None,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
    ) -> None:
        """
        Args:
            style:  Diagram style; defaults to ChordStyle().
            width:  Width of each diagram in SVG user units.
            height: Height of each diagram in SVG user units.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Diagram size must be positive, got {width}x{height}.")
        self.style = style if style is not None else ChordStyle()
        self.width = width
        self.height = height

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(self, sheet: ChordSheet) -> str:
        """Render a sheet into a file content string."""

    def render_diagram(self, chord: Chord) -> str:
        """Draw one chord and return the SVG markup."""
        canvas = SvgCanvas(self.width, self.height, background=self.style.background_color)
        ChordView(self.style, chord).draw(canvas)
        return canvas.tostring()


class SvgDiagramRenderer(SheetRenderer):
    """Render a single diagram as a standalone SVG document."""

    @property
    def default_extension(self) -> str:
        return ".svg"

    def render(self, sheet: ChordSheet) -> str:
        if len(sheet.diagrams) != 1:
            raise ValueError(
                f"SVG output holds exactly one diagram, got {len(sheet.diagrams)}."
            )
        svg = self.render_diagram(sheet.diagrams[0].chord)
        return f'<?xml version="1.0" encoding="utf-8" ?>\n{svg}\n'


class HtmlSheetRenderer(SheetRenderer):
    """Render diagrams into a self-contained HTML document with inline SVG."""

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(self, sheet: ChordSheet) -> str:
        figures = [
            (diagram.name, self.render_diagram(diagram.chord)) for diagram in sheet.diagrams
        ]
        return self.build_html(sheet.title, figures)

    def build_html(self, title: str, figures: list[tuple[str, str]]) -> str:
        """
        Wrap (caption, svg) pairs in a self-contained HTML document.

        Each SVG is placed in its own ``figure`` inside a wrapping grid. The
        stylesheet includes both screen styles (cards on a grey background)
        and print styles (no shadows, figures kept whole across pages).
        """
        title_safe = _escape_html(title)
        heading = f"  <h1>{title_safe}</h1>\n" if title else ""
        cards = "\n".join(
            f'    <figure class="chord">{svg}<figcaption>{_escape_html(name)}</figcaption></figure>'
            for name, svg in figures
        )

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    *, *::before, *::after {{ box-sizing: border-box; }}
    body {{
      font-family: Georgia, serif;
      background: #f0f0f0;
      margin: 0;
      padding: 2rem;
    }}
    h1 {{
      text-align: center;
      font-size: 1.6rem;
      margin-bottom: 2rem;
      color: #222;
    }}
    .sheet {{
      display: grid;
      grid-template-columns: repeat(auto-fill, minmax(160px, 1fr));
      gap: 1.5rem;
      max-width: 960px;
      margin: 0 auto;
    }}
    .chord {{
      background: #fff;
      box-shadow: 0 2px 8px rgba(0, 0, 0, 0.15);
      margin: 0;
      padding: 1rem;
    }}
    .chord svg {{
      display: block;
      width: 100%;
      height: auto;
    }}
    .chord figcaption {{
      text-align: center;
      font-size: 1.2rem;
      margin-top: 0.5rem;
      color: #222;
    }}
    @media print {{
      body {{
        background: #fff;
        padding: 0;
        margin: 0;
      }}
      h1 {{
        margin-top: 1rem;
      }}
      .chord {{
        box-shadow: none;
        break-inside: avoid;
        page-break-inside: avoid;
      }}
    }}
  </style>
</head>
<body>
{heading}  <div class="sheet">
{cards}
  </div>
</body>
</html>"""


class MarkdownSheetRenderer(SheetRenderer):
    """Render diagrams into Markdown with inline SVG blocks."""

    @property
    def default_extension(self) -> str:
        return ".md"

    def render(self, sheet: ChordSheet) -> str:
        lines: list[str] = []
        if sheet.title:
            lines += [f"# {_escape_html(sheet.title)}", ""]
        for diagram in sheet.diagrams:
            lines += [
                f"## {_escape_html(diagram.name)}",
                "",
                f"`{format_chord(diagram.chord)}`",
                "",
                f'<div class="chordview-diagram">{self.render_diagram(diagram.chord)}</div>',
                "",
            ]
        return "\n".join(lines)

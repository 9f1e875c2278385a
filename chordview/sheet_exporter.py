"""SheetExporter: renders chord diagrams to SVG, HTML or Markdown files."""

from __future__ import annotations

import logging
from typing import Final

from chordview.sheet_models import ChordDiagram, ChordSheet
from chordview.sheet_renderers import (
    HtmlSheetRenderer,
    MarkdownSheetRenderer,
    SheetRenderer,
    SvgDiagramRenderer,
)
from chordview.style import ChordStyle

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS: Final[set[str]] = {"svg", "html", "md"}


class SheetExporter:
    """
    Write chord diagrams to disk via a pluggable renderer.

    Supported formats:
    - ``svg``: one diagram as a standalone SVG file.
    - ``html``: any number of diagrams as inline SVG in a self-contained page.
    - ``md``: Markdown with a heading, the chord encoding and inline SVG per diagram.
    """

    def __init__(
        self,
        title: str = "",
        output_format: str = "html",
        style: ChordStyle | None = None,
        width: float = SheetRenderer.DEFAULT_WIDTH,
        height: float = SheetRenderer.DEFAULT_HEIGHT,
    ) -> None:
        self.title = title
        normalized = output_format.strip().lower()
        if normalized not in SUPPORTED_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_FORMATS))
            raise ValueError(
                f"Unsupported output format '{output_format}'. Use one of: {supported}."
            )
        self.output_format = normalized
        self.renderer = self._build_renderer(normalized, style, width, height)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_renderer(
        self,
        output_format: str,
        style: ChordStyle | None,
        width: float,
        height: float,
    ) -> SheetRenderer:
        if output_format == "svg":
            return SvgDiagramRenderer(style, width, height)
        if output_format == "html":
            return HtmlSheetRenderer(style, width, height)
        return MarkdownSheetRenderer(style, width, height)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def default_extension(self) -> str:
        return self.renderer.default_extension

    def render(self, diagrams: list[ChordDiagram]) -> str:
        """
        Render diagrams into the selected format.

        Raises:
            ValueError: If there is nothing to render or the format cannot hold
                        the given number of diagrams.
        """
        if not diagrams:
            raise ValueError("At least one chord diagram is required.")
        sheet = ChordSheet(title=self.title, diagrams=list(diagrams))
        return self.renderer.render(sheet)

    def export(self, diagrams: list[ChordDiagram], output_path: str) -> None:
        """
        Render diagrams and write the result to ``output_path``.

        Raises:
            ValueError: If rendering fails (see ``render``).
            OSError: If the output file cannot be written.
        """
        content = self.render(diagrams)
        logger.debug(
            "Writing %d diagram(s) as %s to %s", len(diagrams), self.output_format, output_path
        )
        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(content)

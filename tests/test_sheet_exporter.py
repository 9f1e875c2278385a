"""Unit tests for SheetExporter."""

from pathlib import Path

import pytest

from chordview.presets import preset
from chordview.sheet_exporter import SUPPORTED_FORMATS, SheetExporter
from chordview.sheet_models import ChordDiagram
from chordview.sheet_renderers import (
    HtmlSheetRenderer,
    MarkdownSheetRenderer,
    SvgDiagramRenderer,
)


def _diagrams(*names: str) -> list[ChordDiagram]:
    return [ChordDiagram(name=name, chord=preset(name)) for name in names]


def test_supported_formats() -> None:
    assert SUPPORTED_FORMATS == {"svg", "html", "md"}


@pytest.mark.parametrize(
    ("output_format", "renderer_type", "extension"),
    [
        ("svg", SvgDiagramRenderer, ".svg"),
        ("HTML", HtmlSheetRenderer, ".html"),
        (" md ", MarkdownSheetRenderer, ".md"),
    ],
)
def test_format_selects_renderer(output_format: str, renderer_type: type, extension: str) -> None:
    exporter = SheetExporter(output_format=output_format)
    assert isinstance(exporter.renderer, renderer_type)
    assert exporter.default_extension == extension


def test_unsupported_format_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported output format 'pdf'"):
        SheetExporter(output_format="pdf")


def test_render_requires_diagrams() -> None:
    with pytest.raises(ValueError, match="At least one"):
        SheetExporter().render([])


def test_export_html_writes_file(tmp_path: Path) -> None:
    out = tmp_path / "sheet.html"
    SheetExporter(title="Test", output_format="html").export(_diagrams("C", "G", "Am"), str(out))
    content = out.read_text(encoding="utf-8")
    assert "<title>Test</title>" in content
    assert content.count("<figure") == 3


def test_export_svg_writes_single_diagram(tmp_path: Path) -> None:
    out = tmp_path / "em.svg"
    SheetExporter(output_format="svg", width=200, height=240).export(_diagrams("Em"), str(out))
    content = out.read_text(encoding="utf-8")
    assert content.startswith("<?xml")
    assert 'viewBox="0 0 200 240"' in content


def test_export_svg_rejects_many_diagrams(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="exactly one"):
        SheetExporter(output_format="svg").export(_diagrams("C", "G"), str(tmp_path / "x.svg"))


def test_export_to_missing_directory_raises_oserror(tmp_path: Path) -> None:
    out = tmp_path / "missing" / "sheet.md"
    with pytest.raises(OSError):
        SheetExporter(output_format="md").export(_diagrams("D"), str(out))

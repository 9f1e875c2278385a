"""Tests for the chordview command line, run through click's CliRunner."""

from pathlib import Path

from click.testing import CliRunner

from chordview import __version__
from chordview.cli import _name_to_filename, _resolve_diagram, main


def test_version_option() -> None:
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_resolve_diagram_accepts_preset_encoding_and_named_encoding() -> None:
    assert _resolve_diagram("Am").name == "Am"
    assert _resolve_diagram("x32010").chord.frets == (-1, 3, 2, 0, 1, 0)
    named = _resolve_diagram("Cadd9=x32030")
    assert named.name == "Cadd9"
    assert named.chord.frets == (-1, 3, 2, 0, 3, 0)


def test_name_to_filename_sanitizes() -> None:
    assert _name_to_filename("F#m7", ".svg") == "Fsharpm7.svg"
    assert _name_to_filename("C / G", ".svg") == "C_G.svg"
    assert _name_to_filename("///", ".svg") == "chord.svg"


def test_render_writes_svg(tmp_path: Path) -> None:
    out = tmp_path / "am.svg"
    result = CliRunner().invoke(main, ["render", "Am", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "Done!" in result.output
    assert "<svg" in out.read_text(encoding="utf-8")


def test_render_defaults_to_chord_name(tmp_path: Path) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(main, ["render", "F", "--mode", "simple", "--no-markers"])
        assert result.exit_code == 0, result.output
        assert Path("F.svg").exists()


def test_render_invalid_chord_fails() -> None:
    result = CliRunner().invoke(main, ["render", "not-a-chord"])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_render_uses_style_file(tmp_path: Path) -> None:
    style = tmp_path / "style.json"
    style.write_text('{"background_color": "#abcdef"}', encoding="utf-8")
    out = tmp_path / "g.svg"
    result = CliRunner().invoke(main, ["render", "G", "-o", str(out), "--style", str(style)])
    assert result.exit_code == 0, result.output
    assert 'fill="#abcdef"' in out.read_text(encoding="utf-8")


def test_render_rejects_bad_style_file(tmp_path: Path) -> None:
    style = tmp_path / "style.json"
    style.write_text('{"note_size": 3}', encoding="utf-8")
    result = CliRunner().invoke(main, ["render", "G", "--style", str(style)])
    assert result.exit_code == 1
    assert "note_size" in result.output


def test_sheet_writes_html(tmp_path: Path) -> None:
    out = tmp_path / "song.html"
    result = CliRunner().invoke(
        main, ["sheet", "C", "G", "Am", "-o", str(out), "--title", "My Song"]
    )
    assert result.exit_code == 0, result.output
    content = out.read_text(encoding="utf-8")
    assert "<h1>My Song</h1>" in content
    assert content.count('<figure class="chord">') == 3


def test_sheet_writes_markdown(tmp_path: Path) -> None:
    out = tmp_path / "song.md"
    result = CliRunner().invoke(main, ["sheet", "Em", "D=xx0232", "-o", str(out), "--format", "md"])
    assert result.exit_code == 0, result.output
    content = out.read_text(encoding="utf-8")
    assert "## D" in content
    assert "`xx0232`" in content


def test_sheet_requires_output() -> None:
    result = CliRunner().invoke(main, ["sheet", "C"])
    assert result.exit_code != 0


def test_info_reports_full_barre() -> None:
    result = CliRunner().invoke(main, ["info", "F"])
    assert result.exit_code == 0
    assert "Barre        : fret 1, strings 1-6" in result.output
    assert "Fingers      : [1, 3, 4, 2, 1, 1]" in result.output


def test_info_reports_no_barre_for_open_c() -> None:
    result = CliRunner().invoke(main, ["info", "x32010"])
    assert result.exit_code == 0
    assert "Barre        : none" in result.output
    assert "Muted string : yes" in result.output
    assert "Fingers      : -" in result.output


def test_info_invalid_chord_fails() -> None:
    result = CliRunner().invoke(main, ["info", "1"])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_render_rejects_wrongly_typed_style_value(tmp_path: Path) -> None:
    style = tmp_path / "style.json"
    style.write_text('{"note_radius": "big"}', encoding="utf-8")
    result = CliRunner().invoke(main, ["render", "C", "--style", str(style)])
    assert result.exit_code == 1
    assert "ERROR" in result.output
    assert "note_radius" in result.output
    assert not isinstance(result.exception, TypeError)


def test_render_rejects_marker_given_as_plain_string(tmp_path: Path) -> None:
    style = tmp_path / "style.json"
    style.write_text('{"closed_string_image": "x.png"}', encoding="utf-8")
    result = CliRunner().invoke(main, ["render", "C", "--style", str(style)])
    assert result.exit_code == 1
    assert "closed_string_image" in result.output

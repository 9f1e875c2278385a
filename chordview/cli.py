"""chordview CLI entry point."""

import logging
import re
import sys
from collections.abc import Callable
from typing import NoReturn

import click

from chordview import __version__
from chordview.chord_parser import format_chord, parse_chord
from chordview.presets import PRESETS, preset
from chordview.sheet_exporter import SheetExporter
from chordview.sheet_models import ChordDiagram
from chordview.sheet_renderers import SheetRenderer
from chordview.style import (
    ChordStyle,
    ShowMode,
    default_closed_marker,
    default_open_marker,
)

DEFAULT_BACKGROUND = "#1e1e1e"


def _resolve_diagram(spec: str) -> ChordDiagram:
    """
    Turn a CHORD argument into a named diagram.

    Accepts a preset name (``Am``), an encoding (``x32010/032010``) or a
    named encoding (``Cadd9=x32030``).
    """
    if spec in PRESETS:
        return ChordDiagram(name=spec, chord=preset(spec))
    name, sep, encoding = spec.partition("=")
    if sep:
        return ChordDiagram(name=name.strip(), chord=parse_chord(encoding))
    return ChordDiagram(name=spec, chord=parse_chord(spec))


def _name_to_filename(name: str, suffix: str) -> str:
    """Convert a chord name to a safe filename with the given suffix."""
    sanitized = name.replace("#", "sharp")
    sanitized = re.sub(r"[^\w\s-]", "", sanitized)
    sanitized = re.sub(r"\s+", "_", sanitized.strip())
    return f"{sanitized or 'chord'}{suffix}"


def _build_style(
    style_path: str | None,
    mode: str | None,
    background: str,
    markers: bool,
) -> ChordStyle:
    """Load the base style and apply command-line overrides on top of it."""
    style = ChordStyle.load(style_path) if style_path else ChordStyle(head_radius=16.0)
    overrides: dict[str, object] = {}
    if mode is not None:
        overrides["show_mode"] = ShowMode.from_value(mode)
    if style.background_color is None:
        overrides["background_color"] = background
    if markers:
        size = style.note_radius
        if style.closed_string_image is None:
            overrides["closed_string_image"] = default_closed_marker(size, style.grid_line_color)
        if style.empty_string_image is None:
            overrides["empty_string_image"] = default_open_marker(size, style.grid_line_color)
    return style.model_copy(update=overrides) if overrides else style


def _fail(message: str) -> NoReturn:
    click.echo(f"  ERROR: {message}", err=True)
    sys.exit(1)


# ── Shared options ─────────────────────────────────────────────────────────────

_style_options = [
    click.option(
        "--mode",
        type=click.Choice(["normal", "simple"], case_sensitive=False),
        default=None,
        help="Show mode. Simple drops finger labels and trims short chords to 3 rows.",
    ),
    click.option(
        "--style",
        "style_path",
        type=click.Path(exists=True, dir_okay=False, readable=True),
        default=None,
        metavar="JSON",
        help="JSON file of style attributes (colours, sizes, radii, alphas).",
    ),
    click.option(
        "--width",
        type=click.FloatRange(min=50),
        default=SheetRenderer.DEFAULT_WIDTH,
        show_default=True,
        help="Diagram width in SVG units.",
    ),
    click.option(
        "--height",
        type=click.FloatRange(min=50),
        default=SheetRenderer.DEFAULT_HEIGHT,
        show_default=True,
        help="Diagram height in SVG units.",
    ),
    click.option(
        "--background",
        default=DEFAULT_BACKGROUND,
        show_default=True,
        metavar="COLOR",
        help="Background colour, unless the style file sets one.",
    ),
    click.option(
        "--markers/--no-markers",
        default=True,
        show_default=True,
        help="Draw built-in open/muted string markers when the style has none.",
    ),
]


def style_options(func: Callable[..., None]) -> Callable[..., None]:
    """Attach the diagram styling options shared by render and sheet."""
    for option in reversed(_style_options):
        func = option(func)
    return func


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="chordview")
@click.option("-v", "--verbose", is_flag=True, help="Log layout and export details.")
def main(verbose: bool) -> None:
    """chordview — chord diagram renderer."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


# ── render subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("chord")
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination SVG file path. Defaults to <chord-name>.svg.",
)
@style_options
def render(
    chord: str,
    output: str | None,
    mode: str | None,
    style_path: str | None,
    width: float,
    height: float,
    background: str,
    markers: bool,
) -> None:
    """
    Render one chord diagram as SVG.

    CHORD is a preset name, a fret encoding, or NAME=ENCODING.

    \b
    Examples:
      chordview render Am
      chordview render x32010/032010 -o c.svg
      chordview render "F=133211/134211" --mode simple
    """
    try:
        diagram = _resolve_diagram(chord)
        style = _build_style(style_path, mode, background, markers)
        exporter = SheetExporter(output_format="svg", style=style, width=width, height=height)
    except (OSError, ValueError) as exc:
        _fail(str(exc))

    resolved_output = output or _name_to_filename(diagram.name, exporter.default_extension)
    click.echo(f"chordview v{__version__}")
    click.echo(f"  Chord  : {diagram.name}  ({format_chord(diagram.chord)})")
    click.echo(f"  Output : {resolved_output}")

    try:
        exporter.export([diagram], resolved_output)
    except OSError as exc:
        _fail(f"Could not write output file — {exc}")
    except ValueError as exc:
        _fail(f"Could not render chord — {exc}")

    click.echo(f"Done!  Open '{resolved_output}' in any browser or image viewer.")


# ── sheet subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("chords", nargs=-1, required=True)
@click.option(
    "--output",
    "-o",
    required=True,
    metavar="PATH",
    help="Destination sheet file path.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "md"], case_sensitive=False),
    default="html",
    show_default=True,
    help="Sheet output format: self-contained HTML page or Markdown with inline SVG.",
)
@click.option("--title", default="", metavar="TEXT", help="Title shown in the sheet header.")
@style_options
def sheet(
    chords: tuple[str, ...],
    output: str,
    output_format: str,
    title: str,
    mode: str | None,
    style_path: str | None,
    width: float,
    height: float,
    background: str,
    markers: bool,
) -> None:
    """
    Render several chord diagrams into one HTML or Markdown sheet.

    \b
    Examples:
      chordview sheet C G Am F -o song.html --title "My Song"
      chordview sheet Em "Cadd9=x32030" D -o song.md --format md
    """
    try:
        diagrams = [_resolve_diagram(spec) for spec in chords]
        style = _build_style(style_path, mode, background, markers)
        exporter = SheetExporter(
            title=title,
            output_format=output_format,
            style=style,
            width=width,
            height=height,
        )
    except (OSError, ValueError) as exc:
        _fail(str(exc))

    click.echo(f"chordview v{__version__}")
    click.echo(f"  Chords : {', '.join(d.name for d in diagrams)}")
    click.echo(f"  Format : {exporter.output_format}")
    click.echo(f"  Output : {output}")

    try:
        exporter.export(diagrams, output)
    except OSError as exc:
        _fail(f"Could not write output file — {exc}")
    except ValueError as exc:
        _fail(f"Could not render sheet — {exc}")

    click.echo(f"Done!  Wrote {len(diagrams)} diagram(s) to '{output}'.")


# ── info subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.argument("chord")
def info(chord: str) -> None:
    """Print the layout facts ChordView derives from CHORD."""
    try:
        diagram = _resolve_diagram(chord)
    except ValueError as exc:
        _fail(str(exc))

    shape = diagram.chord
    barre = shape.barre_chord_data()
    click.echo(f"{diagram.name}")
    click.echo(f"  Frets        : {list(shape.frets)}")
    click.echo(f"  Fingers      : {list(shape.fingers) if shape.has_fingers else '-'}")
    click.echo(f"  Least fret   : {shape.least_fret()}")
    click.echo(f"  Largest fret : {shape.largest_fret()}")
    click.echo(f"  Open string  : {'yes' if shape.is_empty_string() else 'no'}")
    click.echo(f"  Muted string : {'yes' if shape.is_closed_string() else 'no'}")
    if barre is None:
        click.echo("  Barre        : none")
    else:
        click.echo(f"  Barre        : fret {barre.fret}, strings 1-{barre.span}")

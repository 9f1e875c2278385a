"""Styling configuration for chord diagrams."""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chordview.chord import DEFAULT_STRING_COUNT

logger = logging.getLogger(__name__)


class ShowMode(Enum):
    """Diagram detail level."""

    NORMAL = 1
    SIMPLE = 2  # fewer rows, no finger labels, first fret number only

    @classmethod
    def from_value(cls, value: ShowMode | int | str) -> ShowMode:
        """
        Convert a raw attribute value into a ShowMode.

        Accepts a ShowMode, its integer value (1 or 2) or its name in any case.

        Raises:
            ValueError: If the value does not name a show mode.
        """
        if isinstance(value, ShowMode):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        elif isinstance(value, int) and not isinstance(value, bool):
            for mode in cls:
                if mode.value == value:
                    return mode
        names = ", ".join(f"{mode.name.lower()} ({mode.value})" for mode in cls)
        raise ValueError(f"Unknown show mode {value!r}. Use one of: {names}.")


class MarkerImage(BaseModel):
    """An image drawn above an open or muted string."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    href: str
    width: float = Field(ge=0)
    height: float = Field(ge=0)

    @classmethod
    def from_svg(cls, markup: str, width: float, height: float) -> MarkerImage:
        """Wrap inline SVG markup in a base64 data URI."""
        encoded = base64.b64encode(markup.encode("utf-8")).decode("ascii")
        return cls(href=f"data:image/svg+xml;base64,{encoded}", width=width, height=height)


def default_closed_marker(size: float = 40.0, color: str = "#ffffff") -> MarkerImage:
    """An "X" marker for muted strings."""
    stroke = size / 8
    lo, hi = stroke, size - stroke
    markup = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size:g}" height="{size:g}">'
        f'<path d="M {lo:g},{lo:g} L {hi:g},{hi:g} M {hi:g},{lo:g} L {lo:g},{hi:g}" '
        f'stroke="{color}" stroke-width="{stroke:g}" stroke-linecap="round" fill="none"/>'
        "</svg>"
    )
    return MarkerImage.from_svg(markup, size, size)


def default_open_marker(size: float = 40.0, color: str = "#ffffff") -> MarkerImage:
    """A ring marker for open strings."""
    stroke = size / 8
    radius = (size - stroke) / 2
    markup = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size:g}" height="{size:g}">'
        f'<circle cx="{size / 2:g}" cy="{size / 2:g}" r="{radius:g}" '
        f'stroke="{color}" stroke-width="{stroke:g}" fill="none"/>'
        "</svg>"
    )
    return MarkerImage.from_svg(markup, size, size)


#: Frets covered by the grid before fret numbers are shown.
DEFAULT_FRET_SPAN = 4


class ChordStyle(BaseModel):
    """
    Everything a ChordView needs besides the chord itself.

    Sizes are in canvas units, colours are SVG colour strings and alphas run
    from 0 (transparent) to 255 (opaque). A marker image left as None is not
    drawn.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    show_mode: ShowMode = ShowMode.NORMAL
    closed_string_image: MarkerImage | None = None
    empty_string_image: MarkerImage | None = None
    string_offset_y: float = Field(default=0.0, ge=0)
    head_radius: float = Field(default=0.0, ge=0)
    head_color: str = "#ffffff"
    fret_text_size: float = Field(default=40.0, ge=0)
    fret_text_color: str = "#ffffff"
    fret_text_offset_x: float = 0.0
    grid_line_width: float = Field(default=10.0, ge=0)
    grid_line_color: str = "#ffffff"
    note_color: str = "#ffffff"
    note_radius: float = Field(default=40.0, ge=0)
    note_text_size: float = Field(default=40.0, ge=0)
    note_text_color: str = "#000000"
    note_stroke_width: float = Field(default=0.0, ge=0)
    note_stroke_color: str = "#ffffff"
    note_alpha: int = Field(default=255, ge=0, le=255)
    barre_color: str = "#ffffff"
    barre_alpha: int = Field(default=255, ge=0, le=255)
    barre_stroke_width: float = Field(default=0.0, ge=0)
    barre_stroke_color: str = "#ffffff"
    string_count: int = Field(
        default=DEFAULT_STRING_COUNT, ge=2, description="Grid columns drawn when no chord is set"
    )
    default_fret_span: int = Field(default=DEFAULT_FRET_SPAN, ge=1)
    background_color: str | None = None

    @field_validator("show_mode", mode="before")
    @classmethod
    def coerce_show_mode(cls, value: Any) -> ShowMode:
        return ShowMode.from_value(value)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any]) -> ChordStyle:
        """
        Build a style from a flat mapping of field names to values.

        Missing fields keep their defaults. Marker images are given as
        ``{"href": ..., "width": ..., "height": ...}`` mappings.

        Raises:
            pydantic.ValidationError: If a key is not a style field or a value
                                      has the wrong type or range.
        """
        return cls.model_validate(dict(attributes))

    @classmethod
    def load(cls, path: str | Path) -> ChordStyle:
        """
        Read a style from a JSON file holding a single object.

        Raises:
            pydantic.ValidationError: If the file is not valid JSON, not an
                                      object, or holds bad values.
            OSError: If the file cannot be read.
        """
        style = cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
        logger.debug("Loaded style from %s", path)
        return style

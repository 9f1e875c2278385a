"""Chord: an immutable chord shape and the queries the diagram layout needs."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_STRING_COUNT = 6

#: Fret value of a muted string (not sounded).
CLOSED = -1
#: Fret value of an open string (sounded, not pressed).
OPEN = 0


@dataclass(frozen=True)
class BarreSpan:
    """
    A bar drawn across several strings.

    Attributes:
        fret: Fret the bar is pressed at.
        span: Number of strings covered, counted from string 1 upward.
    """

    fret: int
    span: int


@dataclass(frozen=True, init=False)
class Chord:
    """
    One chord shape: a fret per string plus optional finger hints.

    ``frets`` is stored from the highest-numbered string down, so on a guitar
    ``frets[0]`` is string 6 (low E) and ``frets[-1]`` is string 1 (high e).

    Fret values:
        -1  closed (muted) string
         0  open string
        n   string pressed at fret n (n >= 1)

    ``fingers`` is either empty or parallel to ``frets``; 0 means "no label".

    Raises:
        ValueError: If the frets are too few, out of range, or the fingers do
                    not line up with the frets.
    """

    frets: tuple[int, ...]
    fingers: tuple[int, ...]

    def __init__(self, frets: Sequence[int], fingers: Sequence[int] | None = None) -> None:
        object.__setattr__(self, "frets", tuple(frets))
        object.__setattr__(self, "fingers", tuple(fingers) if fingers is not None else ())
        self._validate()

    def _validate(self) -> None:
        if len(self.frets) < 2:
            raise ValueError(f"A chord needs at least 2 strings, got {len(self.frets)}.")
        for fret in self.frets:
            if not isinstance(fret, int) or isinstance(fret, bool) or fret < CLOSED:
                raise ValueError(f"Invalid fret value {fret!r}: expected an integer >= -1.")
        if not self.fingers:
            return
        if len(self.fingers) != len(self.frets):
            raise ValueError(
                f"Expected {len(self.frets)} finger hints to match the frets, "
                f"got {len(self.fingers)}."
            )
        for finger in self.fingers:
            if not isinstance(finger, int) or isinstance(finger, bool) or finger < 0:
                raise ValueError(f"Invalid finger value {finger!r}: expected an integer >= 0.")

    # ------------------------------------------------------------------
    # Basic properties
    # ------------------------------------------------------------------

    @property
    def string_count(self) -> int:
        return len(self.frets)

    @property
    def has_fingers(self) -> bool:
        return bool(self.fingers)

    def is_empty_string(self) -> bool:
        """Return True if any string is played open."""
        return OPEN in self.frets

    def is_closed_string(self) -> bool:
        """Return True if any string is muted."""
        return CLOSED in self.frets

    def least_fret(self) -> int:
        """Smallest pressed fret, or -1 when no string is pressed."""
        pressed = [fret for fret in self.frets if fret >= 1]
        return min(pressed) if pressed else -1

    def largest_fret(self) -> int:
        """Largest pressed fret, or -1 when no string is pressed."""
        pressed = [fret for fret in self.frets if fret >= 1]
        return max(pressed) if pressed else -1

    def fret_at(self, string: int) -> int:
        """
        Return the fret of a string numbered 1..string_count.

        String 1 is the last element of ``frets``; string ``string_count`` is
        the first.

        Raises:
            IndexError: If ``string`` is outside 1..string_count.
        """
        if not 1 <= string <= self.string_count:
            raise IndexError(f"String {string} is out of range 1..{self.string_count}.")
        return self.frets[self.string_count - string]

    # ------------------------------------------------------------------
    # Barre detection
    # ------------------------------------------------------------------

    def first_string_least(self) -> bool:
        """Return True if string 1 holds the least pressed fret."""
        return self.frets[-1] == self.least_fret()

    def with_first_string(self) -> int:
        """
        Count the consecutive strings, starting at string 1, that share its fret.

        When finger hints are present a string only extends the run if its
        finger matches string 1's finger as well. For ``3, 3, 2, 1, 1, 1`` the
        result is 3.
        """
        first_fret = self.frets[-1]
        first_finger = self.fingers[-1] if self.fingers else None
        count = 1
        while count < self.string_count:
            index = self.string_count - 1 - count
            if self.frets[index] != first_fret:
                break
            if first_finger is not None and self.fingers[index] != first_finger:
                break
            count += 1
        return count

    def max_unclosed_string(self) -> int:
        """
        Return the highest-numbered string that is not muted.

        For ``-1, 3, 2, 1, 1, 1`` string 6 is closed, so the result is 5.
        Returns 0 when every string is muted.
        """
        for string in range(self.string_count, 0, -1):
            if self.fret_at(string) != CLOSED:
                return string
        return 0

    def barre_chord_data(self) -> BarreSpan | None:
        """
        Decide whether this chord is drawn with a bar, and how wide it is.

        1. With an open string, a bar only exists when string 1 holds the least
           fret and at least one neighbouring string ties with it.
        2. Otherwise, with a muted string, the bar runs from string 1 up to the
           highest string that is not muted.
        3. Otherwise the bar covers every string.

        Returns:
            The bar, or None when the chord is drawn without one.
        """
        least = self.least_fret()
        if least == -1:
            return None

        if self.is_empty_string():
            span = self.with_first_string()
            if self.first_string_least() and span > 1:
                logger.debug("Barre across %d strings at fret %d (open chord)", span, least)
                return BarreSpan(least, span)
            return None

        if self.is_closed_string():
            return BarreSpan(least, self.max_unclosed_string())

        return BarreSpan(least, self.string_count)

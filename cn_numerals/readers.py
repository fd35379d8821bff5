"""
Directional readers — the recursive core of the parser.

A magnitude keyword splits an expression in two:

    九千九百九十九 万 九千九百九十九
    └── read_left ─┘    └── read_right ─┘

Each side is parsed by looking for the next-smaller keyword inside a
bounded window, composing around it, and recursing one level down. When
a level's keyword is absent the same window is retried at the next level,
which is how "一万零二" skips thousand, hundred and ten.

Recursion depth is bounded by the number of magnitude levels, never by
input length.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from .composer import Reading, compose, implied_ten_left, reject_leading_zero
from .decimal_reader import read_decimal
from .exceptions import InvalidLevelError, MalformedCompositionError, NumeralError
from .glyphs import (
    MAGNITUDES,
    TEN,
    UNITS,
    GlyphKind,
    classify,
    digit_value,
    is_decimal_marker,
)
from .models import Diagnostic, Severity

logger = logging.getLogger(__name__)


class DirectionalReader:
    """Parses numeral fragments out of one scratch buffer.

    Usage:
        reader = DirectionalReader(list("一百二十三"))
        reader.read_right(2, 5, level=4, want_decimal=True)
        # Reading(begin=2, end=5, value=23, decimal='')
    """

    def __init__(
        self, buffer: Sequence[str], diagnostics: list[Diagnostic] | None = None
    ):
        self.buffer = buffer
        self.diagnostics: list[Diagnostic] = (
            diagnostics if diagnostics is not None else []
        )

    # ─── Right Side ─────────────────────────────────────────────────

    def read_right(
        self, begin: int, end: int, level: int, want_decimal: bool
    ) -> Optional[Reading]:
        """Read the lower-order part of an expression in [begin, end)."""
        if not begin < end <= len(self.buffer):
            return None
        if not self._level_ok(level, begin, "read_right"):
            return None
        if end - begin == 1:
            return self._read_one(begin)
        if level == UNITS:
            return self._read_right_units(begin, end, want_decimal)

        pos = self._find_right(begin, end, level, want_decimal)
        if pos is None:
            return self.read_right(begin, end, level + 1, want_decimal)
        return self.read_num(begin, end, pos, level, want_decimal)

    def _read_right_units(
        self, begin: int, end: int, want_decimal: bool
    ) -> Optional[Reading]:
        char = self.buffer[begin]

        # "一百点二", "十点八": nothing but a fraction after the keyword
        if is_decimal_marker(char):
            if not want_decimal:
                return None
            tail = read_decimal(self.buffer, begin)
            if tail is None:
                return None
            return Reading(begin=begin, end=tail.end, value=0, decimal=tail.suffix)

        digit = digit_value(char)
        if digit is None:
            return None
        reading = Reading(begin=begin, end=begin + 1, value=digit)

        # "一百零一": the zero is padding, the value is the next digit
        if digit == 0 and begin + 1 < end:
            following = digit_value(self.buffer[begin + 1])
            if following is not None:
                reading = Reading(begin=begin, end=begin + 2, value=following)

        if want_decimal:
            tail = read_decimal(self.buffer, reading.end)
            if tail is not None:
                reading = replace(reading, end=tail.end, decimal=tail.suffix)
        return reading

    def _find_right(
        self, begin: int, end: int, level: int, want_decimal: bool
    ) -> Optional[int]:
        magnitude = MAGNITUDES[level]
        limit = end
        if not want_decimal and magnitude.right_window is not None:
            limit = min(end, begin + magnitude.right_window)

        for index in range(begin, limit):
            char = self.buffer[index]
            if char in magnitude.glyphs:
                return index
            if char not in magnitude.companions:
                break
        return None

    # ─── Left Side ──────────────────────────────────────────────────

    def read_left(
        self, begin: int, end: int, level: int, want_decimal: bool
    ) -> Optional[Reading]:
        """Read the higher-order part of an expression in [begin, end)."""
        if not 0 <= begin < end <= len(self.buffer):
            return None
        if not self._level_ok(level, begin, "read_left"):
            return None
        if end - begin == 1:
            return self._read_one(begin)
        if level == UNITS:
            return self._read_left_units(begin, end, want_decimal)

        pos = self._find_left(begin, end, level, want_decimal)
        if pos is None:
            return self.read_left(begin, end, level + 1, want_decimal)
        return self.read_num(begin, end, pos, level, want_decimal)

    def _read_left_units(
        self, begin: int, end: int, want_decimal: bool
    ) -> Optional[Reading]:
        if not want_decimal:
            digit = digit_value(self.buffer[end - 1])
            if digit is None:
                return None
            return Reading(begin=end - 1, end=end, value=digit)

        # Walk back over digits and at most one decimal marker: "三点五万"
        collected: list[str] = []
        start = end
        seen_marker = False
        for index in range(end - 1, begin - 1, -1):
            char = self.buffer[index]
            if is_decimal_marker(char):
                if seen_marker:
                    break
                seen_marker = True
                collected.append(".")
            else:
                digit = digit_value(char)
                if digit is None:
                    break
                collected.append(str(digit))
            start = index

        if not collected:
            return None
        text = "".join(reversed(collected))

        if not seen_marker:
            # "一万零二": the zero before the digit belongs to the match
            first = end - 2 if len(text) > 1 and text[-2] == "0" else end - 1
            return Reading(begin=first, end=end, value=int(text[-1]))

        whole, _, fraction = text.partition(".")
        if not whole:
            return None
        return Reading(begin=start, end=end, value=int(whole), decimal=fraction)

    def _find_left(
        self, begin: int, end: int, level: int, want_decimal: bool
    ) -> Optional[int]:
        magnitude = MAGNITUDES[level]
        floor = begin
        if not want_decimal and magnitude.left_window is not None:
            floor = max(begin, end - magnitude.left_window)

        for index in range(end - 1, floor - 1, -1):
            char = self.buffer[index]
            if char in magnitude.glyphs:
                return index
            if char not in magnitude.companions:
                break
        return None

    # ─── Composition ────────────────────────────────────────────────

    def read_num(
        self, begin: int, end: int, pos: int, level: int, want_decimal: bool
    ) -> Optional[Reading]:
        """Parse the expression around the keyword at `pos` within [begin, end)."""
        left = self.read_left(begin, pos, level + 1, want_decimal)
        if left is not None and left.end < pos:
            left = self.read_left(left.end, pos, level + 1, want_decimal)
        if level == TEN:
            left = implied_ten_left(left, pos)
        if left is None:
            return None

        try:
            if not want_decimal:
                reject_leading_zero(left, pos)
            right = self.read_right(pos + 1, end, level + 1, want_decimal)
            if right is not None and right.begin > pos + 1:
                right = self.read_right(pos + 1, right.begin, level + 1, want_decimal)
            after = self.buffer[pos + 1] if pos + 1 < len(self.buffer) else ""
            return compose(left, right, level, pos, after)
        except MalformedCompositionError as exc:
            self.report(exc, Severity.WARNING, pos)
            return None

    # ─── Helpers ────────────────────────────────────────────────────

    def _read_one(self, index: int) -> Optional[Reading]:
        glyph = classify(self.buffer[index])
        if glyph.kind not in (GlyphKind.DIGIT, GlyphKind.MAGNITUDE):
            return None
        return Reading(begin=index, end=index + 1, value=glyph.value)

    def _level_ok(self, level: int, position: int, caller: str) -> bool:
        if 0 <= level <= UNITS:
            return True
        self.report(
            InvalidLevelError(
                f"{caller} called with level {level}",
                details={"level": level, "caller": caller},
            ),
            Severity.ERROR,
            position,
        )
        return False

    def report(self, exc: NumeralError, severity: Severity, position: int) -> None:
        """Record a recognition problem as a diagnostic and log it."""
        self.diagnostics.append(
            Diagnostic(
                severity=severity,
                code=exc.code,
                position=position,
                message=str(exc),
                details=exc.details,
            )
        )
        if severity == Severity.ERROR:
            logger.error("[%s] at %d: %s", exc.code, position, exc)
        else:
            logger.debug("[%s] at %d: %s", exc.code, position, exc)

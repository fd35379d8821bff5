"""
Character classification and the magnitude table.

Every decision the parser makes starts here: is this character a digit,
a magnitude keyword, a marker, or nothing at all?

Supported alphabets:
    Digits      零一二三… / financial 壹贰叁… / fullwidth ０１２… / ASCII 0-9
    Magnitudes  十拾 百佰 千仟 万萬 亿億
    Decimal     . 点 块 元          ("七百零三块五" → 703.5)
    Negative    负 - －

All tables are module-level immutable data, built once at import time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ─── Glyph Alphabets ─────────────────────────────────────────────────

_DIGIT_GLYPHS: tuple[str, ...] = (
    "0０零",
    "1１一壹",
    "2２二两貳贰",
    "3３三叁參",
    "4４四肆",
    "5５五伍",
    "6６六陸陆",
    "7７七柒",
    "8８八捌",
    "9９九玖",
)

DECIMAL_MARKERS: str = ".点块元"
NEGATIVE_MARKERS: str = "负-－"
_ZEROS: frozenset[str] = frozenset(_DIGIT_GLYPHS[0])
_DECIMALS: frozenset[str] = frozenset(DECIMAL_MARKERS)
_NEGATIVES: frozenset[str] = frozenset(NEGATIVE_MARKERS)

_DIGITS: dict[str, int] = {
    glyph: value for value, glyphs in enumerate(_DIGIT_GLYPHS) for glyph in glyphs
}
_DIGITS_AND_MARKERS: frozenset[str] = frozenset(_DIGITS) | _DECIMALS


# ─── Magnitude Table ─────────────────────────────────────────────────


@dataclass(frozen=True)
class Magnitude:
    """One row of the magnitude table.

    `right_window` / `left_window` bound how far the directional readers
    look for this keyword (None = up to the caller's window). `companions`
    are the characters allowed between the anchor and the keyword.
    """

    name: str
    glyphs: str
    scale: int
    right_window: Optional[int]
    left_window: Optional[int]
    companions: frozenset[str]


def _build_magnitudes() -> tuple[Magnitude, ...]:
    rows = [
        # name, glyphs, scale, right window, left window
        ("hundred-million", "億亿", 100_000_000, None, None),
        ("ten-thousand", "万萬", 10_000, 8, 8),
        ("thousand", "千仟", 1_000, 3, 6),
        ("hundred", "佰百", 100, 3, 4),
        ("ten", "十拾", 10, 3, 2),
    ]
    table = []
    for index, (name, glyphs, scale, right, left) in enumerate(rows):
        lower = "".join(row[1] for row in rows[index + 1:])
        table.append(
            Magnitude(
                name=name,
                glyphs=glyphs,
                scale=scale,
                right_window=right,
                left_window=left,
                companions=_DIGITS_AND_MARKERS | frozenset(lower),
            )
        )
    return tuple(table)


MAGNITUDES: tuple[Magnitude, ...] = _build_magnitudes()

# The implicit sixth level: plain digits, no keyword.
UNITS: int = len(MAGNITUDES)
TEN: int = UNITS - 1

_SCALES: dict[str, int] = {
    glyph: magnitude.scale for magnitude in MAGNITUDES for glyph in magnitude.glyphs
}


def scale_of(level: int) -> int:
    """Scale factor of a level; the units level scales by 1."""
    return 1 if level == UNITS else MAGNITUDES[level].scale


# ─── Classifier ──────────────────────────────────────────────────────


class GlyphKind(str, Enum):
    """Semantic class of a single character."""

    DIGIT = "DIGIT"
    MAGNITUDE = "MAGNITUDE"
    DECIMAL_MARKER = "DECIMAL_MARKER"
    NEGATIVE_MARKER = "NEGATIVE_MARKER"
    NONE = "NONE"


@dataclass(frozen=True)
class GlyphClass:
    kind: GlyphKind
    value: Optional[int] = None  # digit 0-9 or magnitude scale


_NOT_A_GLYPH = GlyphClass(GlyphKind.NONE)


def classify(char: str) -> GlyphClass:
    """Classify one character. Total: unknown characters map to NONE."""
    if char in _DIGITS:
        return GlyphClass(GlyphKind.DIGIT, _DIGITS[char])
    if char in _SCALES:
        return GlyphClass(GlyphKind.MAGNITUDE, _SCALES[char])
    if char in _DECIMALS:
        return GlyphClass(GlyphKind.DECIMAL_MARKER)
    if char in _NEGATIVES:
        return GlyphClass(GlyphKind.NEGATIVE_MARKER)
    return _NOT_A_GLYPH


def digit_value(char: str) -> Optional[int]:
    return _DIGITS.get(char)


def is_zero(char: str) -> bool:
    return char in _ZEROS


def is_decimal_marker(char: str) -> bool:
    return char in _DECIMALS


def is_negative_marker(char: str) -> bool:
    return char in _NEGATIVES

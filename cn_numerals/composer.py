"""
Value composition around a magnitude keyword.

Given what was read to the LEFT of a keyword (the multiplier) and to its
RIGHT (the lower-order remainder), produce the combined reading:

    value = left × scale + right

plus the idioms people actually use:

    十一        no left before "ten"        → left is 1             → 11
    一万零十一  zero before "ten"           → left is 1             → 10011
    二百五      single digit after keyword  → it means 5 tens       → 250
    二百零五    ... unless a zero separates → plain units           → 205
    三点五万    decimal before keyword      → fills the zero padding → 35000

Everything here is pure: no buffer scanning, no recursion. The readers
and the extraction driver both call into it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .exceptions import (
    DecimalContradictionError,
    DecimalSuffixError,
    LeadingZeroError,
)
from .glyphs import is_zero, scale_of


@dataclass(frozen=True)
class Reading:
    """A successfully parsed fragment: span, integer value, decimal digits."""

    begin: int
    end: int  # Exclusive
    value: int
    decimal: str = ""


# ─── Correction Rules ───────────────────────────────────────────────


def implied_ten_left(left: Optional[Reading], pos: int) -> Reading:
    """The multiplier of a "ten" keyword.

    A missing multiplier is an omitted "one" (十一 = 11); a bare zero is an
    omitted "one" after zero-padding (一万零十一 = 10011). The zero stays
    inside the span.
    """
    if left is None:
        return Reading(begin=pos, end=pos, value=1)
    if left.value == 0 and not left.decimal:
        return replace(left, value=1)
    return left


def reject_leading_zero(left: Reading, pos: int) -> None:
    """Raise LeadingZeroError when the multiplier is a bare zero."""
    if left.value == 0 and not left.decimal:
        raise LeadingZeroError(
            "Value above a magnitude keyword cannot start with zero",
            details={"keyword_position": pos, "left_begin": left.begin},
        )


def scale_right(right: Reading, level: int, after_keyword: str) -> int:
    """Apply the fractional rule to the remainder after a keyword.

    A lone digit right after the keyword names the next lower place:
    二百五 is 250 and 两亿五 is 250000000. A zero glyph between keyword and
    digit (二百零五) or a decimal tail keeps it as plain units.
    """
    if 0 < right.value < 10 and not right.decimal and not is_zero(after_keyword):
        return right.value * scale_of(level) // 10
    return right.value


def carry_decimal(value: int, suffix: str, level: int) -> tuple[int, str]:
    """Move decimal digits into the zero padding of a scale.

    Returns the new integer value and whatever digits did not fit:
        (30000, "5",   万) → (35000, "")
        (30000, "125678", 万) → (31256, "78")

    Raises:
        DecimalSuffixError: If the suffix holds anything but ASCII digits.
    """
    padding = len(str(scale_of(level))) - 1
    head, rest = suffix[:padding], suffix[padding:]
    filled = head.ljust(padding, "0")
    if not (filled.isascii() and filled.isdigit()):
        raise DecimalSuffixError(
            f"Illegal decimal '0.{suffix}'",
            details={"suffix": suffix, "level": level},
        )
    return value + int(filled), rest


# ─── Composition ────────────────────────────────────────────────────


def compose(
    left: Reading,
    right: Optional[Reading],
    level: int,
    pos: int,
    after_keyword: str = "",
) -> Reading:
    """Combine the readings on both sides of the keyword at `pos`.

    Args:
        left: Multiplier reading (already corrected for "ten").
        right: Remainder reading, or None when nothing follows.
        level: Magnitude level of the keyword.
        pos: Buffer index of the keyword.
        after_keyword: The character right after the keyword.

    Raises:
        DecimalContradictionError: If the multiplier carries a decimal
            and a remainder follows.
    """
    value = left.value * scale_of(level)

    if right is None:
        suffix = ""
        if left.decimal:
            value, suffix = carry_decimal(value, left.decimal, level)
        return Reading(begin=left.begin, end=pos + 1, value=value, decimal=suffix)

    if left.decimal:
        raise DecimalContradictionError(
            f"Decimal {left.value}.{left.decimal} is followed by {right.value}",
            details={"keyword_position": pos, "left_decimal": left.decimal},
        )

    value += scale_right(right, level, after_keyword)
    return Reading(begin=left.begin, end=right.end, value=value, decimal=right.decimal)

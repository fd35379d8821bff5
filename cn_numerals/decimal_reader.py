"""
Decimal suffix reader.

Reads the fractional tail that follows an integer match:

    "三点一四"      marker at 1 → suffix "14", end 4
    "七百零三块五"  marker at 4 → suffix "5",  end 6

The suffix is kept as a string of digits so that long fractions are never
rounded through a float.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .glyphs import digit_value, is_decimal_marker


@dataclass(frozen=True)
class DecimalTail:
    suffix: str
    end: int  # exclusive


def read_decimal(buffer: Sequence[str], position: int) -> Optional[DecimalTail]:
    """Consume a decimal marker at `position` plus every digit glyph after it.

    Returns None when `position` is not a decimal marker or no digit
    follows the marker.
    """
    if not 0 <= position < len(buffer) or not is_decimal_marker(buffer[position]):
        return None

    digits: list[str] = []
    index = position + 1
    while index < len(buffer):
        value = digit_value(buffer[index])
        if value is None:
            break
        digits.append(str(value))
        index += 1

    if not digits:
        return None
    return DecimalTail(suffix="".join(digits), end=index)

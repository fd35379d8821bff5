"""
Replace Chinese numeral expressions with their Arabic-numeral form.

    "价格是二百五十块"  →  "价格是250块"
    "负三点一四"        →  "-3.14"
"""

from __future__ import annotations

from typing import Iterable

from .extractor import NumeralExtractor, extract_numerals
from .models import NumeralMatch


def splice(text: str, matches: Iterable[NumeralMatch]) -> str:
    """Substitute each match's display string for its span.

    Matches are applied from the back of the text so earlier offsets stay
    valid. The match collection itself is left untouched.
    """
    chars = list(text)
    for match in sorted(matches, key=lambda m: m.begin, reverse=True):
        chars[match.begin:match.end] = match.display
    return "".join(chars)


def replace_numerals(text: str, extractor: NumeralExtractor | None = None) -> str:
    """Return a copy of `text` with every numeral in Arabic digits."""
    matches = extractor.extract(text) if extractor else extract_numerals(text)
    return splice(text, matches)

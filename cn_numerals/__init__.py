"""
cn_numerals — find Chinese numerals in free text and turn them into digits.

Architecture: Magnitude keywords (亿 → 十) → Recursive left/right readers → Digit sweep
Philosophy:  Every character belongs to at most one number.
"""

__version__ = "1.0.0"

from .extractor import NumeralExtractor, extract_numerals  # noqa: E402
from .models import NumeralMatch  # noqa: E402
from .replacer import replace_numerals  # noqa: E402

__all__ = ["NumeralExtractor", "NumeralMatch", "extract_numerals", "replace_numerals"]

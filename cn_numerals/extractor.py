"""
Extraction driver — finds every numeral expression in a piece of text.

Flow:
  ┌──────────────┐
  │ scratch copy │   list(text), owned by this call only
  └──────┬───────┘
         │
  ┌──────▼──────┐
  │ 亿 万 千 百 十 │   per level, largest first: find keyword,
  └──────┬──────┘   compose around it, blank the matched span
         │
  ┌──────▼──────┐
  │ digit sweep │   leftover single digits: "第三", "３号"
  └──────┬──────┘
         │
  ┌──────▼──────┐
  │    sort     │   ascending by begin
  └─────────────┘

Blanking is what guarantees a character belongs to at most one match:
once a span is consumed, no later search can see its glyphs. Offsets stay
valid because blanking never shifts characters.
"""

from __future__ import annotations

import logging
from typing import Optional

from .composer import Reading, compose, implied_ten_left
from .config import NumeralSettings
from .decimal_reader import read_decimal
from .exceptions import DanglingRightError, MalformedCompositionError
from .glyphs import MAGNITUDES, TEN, digit_value, is_negative_marker
from .models import Diagnostic, NumeralMatch, Severity
from .readers import DirectionalReader

logger = logging.getLogger(__name__)

_CONSUMED = "\x00"


class NumeralExtractor:
    """Extracts Chinese numeral expressions from free text.

    Usage:
        extractor = NumeralExtractor()
        for match in extractor.extract("负三点一四和二百五"):
            print(match.begin, match.end, match.display)
    """

    def __init__(self, settings: NumeralSettings | None = None):
        self.settings = settings or NumeralSettings()

    def extract(self, text: str) -> list[NumeralMatch]:
        """Return all matches in `text`, sorted by position. `text` is not modified."""
        matches, _ = self.extract_with_diagnostics(text)
        return matches

    def extract_with_diagnostics(
        self, text: str
    ) -> tuple[list[NumeralMatch], list[Diagnostic]]:
        scan = _Scan(text, self.settings)
        matches = scan.run()
        logger.debug(
            "Extracted %d numeral(s), %d diagnostic(s) from %d chars",
            len(matches),
            len(scan.diagnostics),
            len(text),
        )
        return matches, scan.diagnostics


class _Scan:
    """State of one extraction call: the blanked buffer and its results."""

    def __init__(self, text: str, settings: NumeralSettings):
        self.buffer: list[str] = list(text)
        self.settings = settings
        self.diagnostics: list[Diagnostic] = []
        self.reader = DirectionalReader(self.buffer, self.diagnostics)
        self.matches: list[NumeralMatch] = []

    def run(self) -> list[NumeralMatch]:
        # Every attempt moves the cursor past a keyword, so the buffer
        # length bounds the number of attempts per level.
        max_attempts = len(self.buffer)

        for level, magnitude in enumerate(MAGNITUDES):
            cursor = 0
            for _ in range(max_attempts):
                pos = self._find(magnitude.glyphs, cursor)
                if pos is None:
                    break
                reading = self._compose_at(pos, level)
                if reading is None:
                    cursor = pos + 1
                    continue
                cursor = self._accept(reading).end

        self._sweep_digits()
        self.matches.sort(key=lambda match: match.begin)
        return self.matches

    # ─── Keyword Composition ────────────────────────────────────────

    def _find(self, glyphs: str, start: int) -> Optional[int]:
        for index in range(start, len(self.buffer)):
            if self.buffer[index] in glyphs:
                return index
        return None

    def _compose_at(self, pos: int, level: int) -> Optional[Reading]:
        """Compose the expression anchored at the keyword at `pos`.

        The right side is read first and may carry a decimal tail. When it
        is empty, the left side may carry the decimal instead ("三点五万").
        A keyword with nothing on either side stands for one of its unit.
        """
        window_begin = max(0, pos - self.settings.context_before)
        window_end = min(len(self.buffer), pos + self.settings.context_after)
        below = level + 1

        try:
            right = self.reader.read_right(pos + 1, window_end, below, True)
            left = self.reader.read_left(
                window_begin, pos, below, want_decimal=right is None
            )
            if level == TEN:
                left = implied_ten_left(left, pos)
            if left is None:
                if right is not None:
                    raise DanglingRightError(
                        f"'{self.buffer[pos]}' has digits after it but nothing before",
                        details={"keyword_position": pos, "right_value": right.value},
                    )
                left = Reading(begin=pos, end=pos, value=1)

            after = self.buffer[pos + 1] if pos + 1 < len(self.buffer) else ""
            return compose(left, right, level, pos, after)
        except MalformedCompositionError as exc:
            self.reader.report(exc, Severity.WARNING, pos)
            return None

    # ─── Finalization ───────────────────────────────────────────────

    def _accept(self, reading: Reading) -> NumeralMatch:
        """Attach a trailing decimal and a leading minus, then consume the span."""
        begin, end = reading.begin, reading.end
        value, suffix = reading.value, reading.decimal
        negative = False

        if not suffix:
            tail = read_decimal(self.buffer, end)
            if tail is not None:
                end, suffix = tail.end, tail.suffix

        if begin > 0 and is_negative_marker(self.buffer[begin - 1]):
            value = -value
            negative = True
            begin -= 1

        for index in range(begin, end):
            self.buffer[index] = _CONSUMED

        match = NumeralMatch(
            begin=begin,
            end=end,
            integer_value=value,
            decimal_suffix=suffix,
            negative=negative,
        )
        self.matches.append(match)
        return match

    def _sweep_digits(self) -> None:
        """Match every remaining non-ASCII digit glyph on its own.

        Runs left to right so a digit's decimal tail is still intact when
        the digit is accepted. Plain ASCII digits are left as they are.
        """
        index = 0
        while index < len(self.buffer):
            char = self.buffer[index]
            digit = digit_value(char)
            if digit is None or char.isascii():
                index += 1
                continue
            match = self._accept(Reading(begin=index, end=index + 1, value=digit))
            index = match.end


_default_extractor = NumeralExtractor()


def extract_numerals(text: str) -> list[NumeralMatch]:
    """Find every numeral expression in `text`, sorted ascending by begin."""
    return _default_extractor.extract(text)

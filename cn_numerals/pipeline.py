"""
Extraction pipeline — one call, one typed report.

Flow:
  raw text → hash → extract (+ diagnostics) → splice → NumeralReport

The text is SHA-256 hashed so a report can be tied back to its input
without storing the text itself.
"""

from __future__ import annotations

import hashlib
import logging

from .config import NumeralSettings
from .extractor import NumeralExtractor
from .models import NumeralReport, Severity
from .replacer import splice

logger = logging.getLogger(__name__)


class NumeralPipeline:
    """Runs extraction and replacement together.

    Usage:
        pipeline = NumeralPipeline()
        report = pipeline.run("一万零二")
        report.matches[0].integer_value   # 10002
        report.replaced                   # "10002"
    """

    def __init__(self, settings: NumeralSettings | None = None):
        self.settings = settings or NumeralSettings()
        self.extractor = NumeralExtractor(self.settings)

    def run(self, text: str) -> NumeralReport:
        text_hash = hashlib.sha256(text.encode("utf-8")).hexdigest()

        matches, diagnostics = self.extractor.extract_with_diagnostics(text)
        replaced = splice(text, matches)

        errors = sum(1 for d in diagnostics if d.severity == Severity.ERROR)
        if errors:
            logger.warning("%d engine error(s) while reading %s", errors, text_hash[:12])
        logger.info("Read %d numeral(s) from %s", len(matches), text_hash[:12])

        return NumeralReport(
            text_hash=text_hash,
            matches=matches,
            replaced=replaced,
            diagnostics=diagnostics,
        )

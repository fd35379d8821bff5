"""
Custom exception hierarchy for numeral recognition.

Each exception type maps to a category of recognition failure. Only
DecimalSuffixError ever escapes the engine: the other two are recorded
as diagnostics and turned into "no match at this position".
"""

from __future__ import annotations


class NumeralError(Exception):
    """Base exception for all numeral recognition failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class MalformedCompositionError(NumeralError):
    """A magnitude keyword was found but its left/right sides do not compose."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        code: str = "MALFORMED_COMPOSITION",
    ):
        super().__init__(code, message, details)


class LeadingZeroError(MalformedCompositionError):
    """The value above a keyword is a bare zero: "零百"."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, details, code="LEADING_ZERO")


class DecimalContradictionError(MalformedCompositionError):
    """A decimal above a keyword cannot be followed by lower terms: "三点五万二"."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, details, code="DECIMAL_CONTRADICTION")


class DanglingRightError(MalformedCompositionError):
    """Digits follow a keyword that has nothing above it: "百五"."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, details, code="DANGLING_RIGHT")


class InvalidLevelError(NumeralError):
    """A reader was asked to search a level outside the magnitude table."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INVALID_LEVEL", message, details)


class DecimalSuffixError(NumeralError):
    """A decimal suffix is not a run of digits — a logic defect, not bad input."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("DECIMAL_SUFFIX_INVALID", message, details)

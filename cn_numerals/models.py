"""
Pydantic models for recognized numerals and extraction reports.

A NumeralMatch is immutable once the driver hands it out. Spans are
half-open character offsets into the caller's original string.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field, model_validator

from .exceptions import DecimalSuffixError


# ─── Severity Levels ────────────────────────────────────────────────


class Severity(str, Enum):
    """Severity of a diagnostic."""

    ERROR = "ERROR"  # Contract violation inside the engine
    WARNING = "WARNING"  # Keyword found but rejected


# ─── Diagnostic ─────────────────────────────────────────────────────


class Diagnostic(BaseModel):
    """A recognition problem observed while parsing. Never aborts a run."""

    severity: Severity
    code: str  # e.g. "DECIMAL_CONTRADICTION"
    position: int  # Character offset of the keyword involved
    message: str
    details: dict = Field(default_factory=dict)


# ─── Numeral Match ──────────────────────────────────────────────────


class NumeralMatch(BaseModel):
    """One recognized numeral expression."""

    model_config = {"frozen": True}

    begin: int = Field(ge=0)
    end: int = Field(gt=0)  # Exclusive
    integer_value: int
    decimal_suffix: str = ""  # Digits of 0.<suffix>, kept as text
    negative: bool = False  # Preceded by a negative marker, even when the value is 0

    @model_validator(mode="after")
    def _check_span(self) -> "NumeralMatch":
        if self.begin >= self.end:
            raise ValueError(f"Empty span [{self.begin}, {self.end})")
        if self.negative and self.integer_value > 0:
            raise ValueError(f"Negative match with positive value {self.integer_value}")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display(self) -> str:
        """Canonical Arabic-numeral form: "123", "-3.14" or "-0.5"."""
        sign = "-" if self.negative or self.integer_value < 0 else ""
        if self.decimal_suffix:
            return f"{sign}{abs(self.integer_value)}.{self.decimal_suffix}"
        return f"{sign}{abs(self.integer_value)}"

    def to_decimal(self) -> Decimal:
        """Exact value. The sign applies to the fraction too.

        Raises:
            DecimalSuffixError: If the suffix is not a run of ASCII digits.
        """
        if self.decimal_suffix and not (
            self.decimal_suffix.isascii() and self.decimal_suffix.isdigit()
        ):
            raise DecimalSuffixError(
                f"Illegal decimal suffix '0.{self.decimal_suffix}'",
                details={"begin": self.begin, "suffix": self.decimal_suffix},
            )
        return Decimal(self.display)

    def to_float(self) -> float:
        return float(self.to_decimal())


# ─── Report ─────────────────────────────────────────────────────────


class NumeralReport(BaseModel):
    """The output of the extraction pipeline for one piece of text."""

    text_hash: str  # SHA-256 of the input text
    matches: list[NumeralMatch] = Field(default_factory=list)
    replaced: str
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def count(self) -> int:
        return len(self.matches)

"""
Runtime settings, read from the environment.

    CN_NUMERALS_CONTEXT_BEFORE   chars searched left of a keyword   (30)
    CN_NUMERALS_CONTEXT_AFTER    chars searched right of a keyword  (40)
    CN_NUMERALS_MAX_TEXT_LENGTH  largest text the API accepts       (100000)
    CN_NUMERALS_LOG_LEVEL        logging level for the front ends   (WARNING)

The context windows are a performance bound only: composition still
recurses level by level inside them. Front ends load a `.env` file first
(python-dotenv) so the same variables can live there.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

_PREFIX = "CN_NUMERALS_"


class NumeralSettings(BaseModel):
    """Immutable engine and front-end settings."""

    model_config = {"frozen": True}

    context_before: int = Field(default=30, ge=1)
    context_after: int = Field(default=40, ge=1)
    max_text_length: int = Field(default=100_000, ge=1)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NumeralSettings":
        """Build settings from CN_NUMERALS_* variables; unset ones keep defaults."""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[_PREFIX + name.upper()]
            for name in cls.model_fields
            if _PREFIX + name.upper() in environ
        }
        return cls(**values)


def configure_logging(settings: NumeralSettings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

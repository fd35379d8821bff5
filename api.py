"""
cn_numerals — FastAPI Server
============================

HTTP access to the numeral extractor.

Endpoints:
    POST /extract           Extract numerals from text (matches + replaced text)
    POST /extract/file      Upload a UTF-8 text file for extraction
    POST /replace           Replace numerals with Arabic digits
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, UploadFile
from pydantic import BaseModel, Field

from cn_numerals import __version__
from cn_numerals.config import NumeralSettings, configure_logging
from cn_numerals.glyphs import MAGNITUDES
from cn_numerals.models import Diagnostic, NumeralMatch, NumeralReport
from cn_numerals.pipeline import NumeralPipeline

load_dotenv()


# ─── Application Lifespan (pre-warm pipeline) ───────────────────────

_pipeline: NumeralPipeline | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the pipeline from environment settings on startup."""
    global _pipeline  # noqa: PLW0603
    settings = NumeralSettings.from_env()
    configure_logging(settings)
    _pipeline = NumeralPipeline(settings)
    yield
    _pipeline = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Chinese Numeral Extractor API",
    description=(
        "Finds numerals written with Chinese digit and magnitude glyphs "
        "(二百五, 九千九百九十九万, 负三点一四, ３号) in free text and "
        "returns their values or the text with Arabic digits substituted."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class TextRequest(BaseModel):
    """Request body for /extract and /replace."""

    text: str = Field(
        ...,
        min_length=1,
        description="Free text that may contain Chinese numerals.",
        json_schema_extra={"example": "价格是二百五十块，温度负三点一四度"},
    )


class ExtractResponse(BaseModel):
    """Matches, replaced text and diagnostics for one text."""

    count: int
    matches: list[NumeralMatch]
    replaced: str
    diagnostics: list[Diagnostic]
    original_hash: str = Field(description="SHA-256 hash of the input text")

    model_config = {"json_schema_extra": {"example": {
        "count": 1,
        "matches": [
            {
                "begin": 3,
                "end": 7,
                "integer_value": 250,
                "decimal_suffix": "",
                "display": "250",
            }
        ],
        "replaced": "价格是250块",
        "diagnostics": [],
        "original_hash": "a1b2c3d4...",
    }}}


class ReplaceResponse(BaseModel):
    replaced: str


class HealthResponse(BaseModel):
    status: str
    version: str
    levels: list[str]


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_pipeline() -> NumeralPipeline:
    if _pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialised")
    return _pipeline


def _check_length(pipeline: NumeralPipeline, text: str) -> None:
    limit = pipeline.settings.max_text_length
    if len(text) > limit:
        raise HTTPException(
            status_code=422, detail=f"Text longer than {limit} characters"
        )


def _build_response(report: NumeralReport) -> ExtractResponse:
    """Convert the internal NumeralReport to the API response schema."""
    return ExtractResponse(
        count=report.count,
        matches=report.matches,
        replaced=report.replaced,
        diagnostics=report.diagnostics,
        original_hash=report.text_hash,
    )


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/extract",
    summary="Extract numerals from text",
    tags=["Extraction"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def extract(request: TextRequest) -> ExtractResponse:
    """Find every numeral expression in the text.

    Returns:
    - **matches**: spans, integer values and decimal suffixes, ascending by position
    - **replaced**: the text with each match in Arabic digits
    - **diagnostics**: keywords that were found but could not be composed
    """
    pipeline = _get_pipeline()
    _check_length(pipeline, request.text)
    return _build_response(pipeline.run(request.text))


@app.post(
    "/replace",
    summary="Replace numerals with Arabic digits",
    tags=["Extraction"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def replace(request: TextRequest) -> ReplaceResponse:
    pipeline = _get_pipeline()
    _check_length(pipeline, request.text)
    return ReplaceResponse(replaced=pipeline.run(request.text).replaced)


@app.post(
    "/extract/file",
    summary="Extract numerals from an uploaded text file",
    tags=["Extraction"],
    responses={
        413: {"description": "File too large (max 1 MB)"},
        400: {"description": "File is not valid UTF-8 text"},
        422: {"description": "File is empty"},
        503: {"description": "Pipeline not yet initialised"},
    },
)
async def extract_file(file: UploadFile) -> ExtractResponse:
    """Upload a `.txt` file (up to 1 MB) and extract its numerals."""
    if file.size and file.size > 1_048_576:
        raise HTTPException(status_code=413, detail="File too large (max 1 MB)")

    content = await file.read()
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded text")

    if not text.strip():
        raise HTTPException(status_code=422, detail="File is empty")

    pipeline = _get_pipeline()
    _check_length(pipeline, text)
    report = await asyncio.to_thread(pipeline.run, text)
    return _build_response(report)


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and the magnitude levels the engine knows."""
    _get_pipeline()
    return HealthResponse(
        status="healthy",
        version=__version__,
        levels=[magnitude.name for magnitude in MAGNITUDES],
    )

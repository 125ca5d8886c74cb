"""Extraction request/result models and content kind enum."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from clip_manager.models.errors import ErrorKind


class ContentKind(str, Enum):
    """Extraction family a URL belongs to. Derived from the URL's host."""

    VIDEO = "video"
    WEBPAGE = "webpage"
    SOCIAL = "social"


class TranscriptStatus(str, Enum):
    """Outcome of the transcript sub-fetch."""

    AVAILABLE = "available"
    DISABLED = "disabled"
    UNAVAILABLE = "unavailable"
    FETCH_FAILED = "fetch_failed"


# Placeholder content used when no transcript could be recovered
TRANSCRIPT_DISABLED_PLACEHOLDER = "[Transcript is disabled by the video creator.]"
TRANSCRIPT_UNAVAILABLE_PLACEHOLDER = "[No transcript available for this video.]"
TRANSCRIPT_FETCH_FAILED_PLACEHOLDER = "[Transcript is not available for this video.]"


def transcript_placeholder(status: TranscriptStatus) -> str:
    """Return the user-facing placeholder for a transcript that was not recovered."""
    if status == TranscriptStatus.DISABLED:
        return TRANSCRIPT_DISABLED_PLACEHOLDER
    if status == TranscriptStatus.UNAVAILABLE:
        return TRANSCRIPT_UNAVAILABLE_PLACEHOLDER
    return TRANSCRIPT_FETCH_FAILED_PLACEHOLDER


class ExtractionRequest(BaseModel):
    """A single URL to extract, with an optional transcript language hint."""

    model_config = ConfigDict(frozen=True)

    url: str
    language: str | None = None


class AdapterOutcome(BaseModel):
    """Uniform return shape of every external adapter call.

    Adapters never raise past their boundary: failures come back with
    ok=False, an ErrorKind, and optional diagnostic detail (e.g. stderr).
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    value: str = ""
    error_kind: ErrorKind | None = None
    detail: str | None = None

    @classmethod
    def success(cls, value: str) -> "AdapterOutcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error_kind: ErrorKind, detail: str | None = None) -> "AdapterOutcome":
        return cls(ok=False, error_kind=error_kind, detail=detail)


class VideoMetadata(BaseModel):
    """Video metadata from the metadata adapter. Every field is optional."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    channel_name: str | None = None
    duration_seconds: int | None = None
    upload_date: str | None = None  # YYYY-MM-DD when known
    view_count: int | None = None
    description: str | None = None


class TranscriptFragment(BaseModel):
    """One caption line from the transcript adapter."""

    model_config = ConfigDict(frozen=True)

    text: str
    offset_ms: int
    duration_ms: int


class ExtractionResult(BaseModel):
    """Normalized, storable record produced by the extraction pipeline."""

    model_config = ConfigDict(frozen=True)

    title: str
    content: str
    kind: ContentKind
    metadata: dict[str, Any] = {}
    tags: list[str] = []  # Derived from kind by the orchestrator

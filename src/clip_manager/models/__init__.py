"""Data models and enums for the clip extraction pipeline."""

from clip_manager.models.content import (
    AdapterOutcome,
    ContentKind,
    ExtractionRequest,
    ExtractionResult,
    TranscriptFragment,
    TranscriptStatus,
    VideoMetadata,
)
from clip_manager.models.errors import ErrorKind, ExtractionError

__all__ = [
    "AdapterOutcome",
    "ContentKind",
    "ErrorKind",
    "ExtractionError",
    "ExtractionRequest",
    "ExtractionResult",
    "TranscriptFragment",
    "TranscriptStatus",
    "VideoMetadata",
]

"""Video pipeline: metadata and transcript fetched concurrently, then merged."""

import logging

from clip_manager.config import Settings
from clip_manager.extraction.metadata import VideoMetadataStrategy, format_duration, parse_video_metadata
from clip_manager.extraction.router import extract_video_id
from clip_manager.extraction.strategy import ExtractionStrategy, gather_outcomes
from clip_manager.extraction.youtube import TranscriptStrategy, transcript_status_of
from clip_manager.models.content import (
    AdapterOutcome,
    ContentKind,
    ExtractionResult,
    TranscriptStatus,
    VideoMetadata,
    transcript_placeholder,
)

logger = logging.getLogger(__name__)

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_CHANNEL = "Unknown Channel"
UNKNOWN_DATE = "Unknown Date"


def transcript_languages(settings: Settings, language: str | None) -> list[str]:
    """Language preference order: the request's hint first, then configured defaults."""
    languages = [language] if language else []
    languages += [lang for lang in settings.transcript_language_list if lang not in languages]
    return languages or ["en"]


def default_video_strategies(
    settings: Settings, language: str | None = None
) -> tuple[ExtractionStrategy[str], ExtractionStrategy[str]]:
    """(metadata strategy, transcript strategy) for one request."""
    return (
        VideoMetadataStrategy(
            command=settings.video_metadata_command,
            timeout=settings.video_metadata_timeout_seconds,
        ),
        TranscriptStrategy(
            languages=transcript_languages(settings, language),
            timeout=settings.transcript_timeout_seconds,
            proxy_url=settings.youtube_proxy_url,
        ),
    )


async def extract_video(
    url: str,
    settings: Settings,
    language: str | None = None,
    strategies: tuple[ExtractionStrategy[str], ExtractionStrategy[str]] | None = None,
) -> ExtractionResult:
    """Extract video metadata and transcript.

    Both sub-fetches are launched together and always both awaited. Neither
    failing aborts the pipeline: metadata falls back to "Unknown" values and
    the transcript to a placeholder string.
    """
    metadata_strategy, transcript_strategy = strategies or default_video_strategies(settings, language)

    metadata_outcome, transcript_outcome = await gather_outcomes(
        metadata_strategy.attempt(url),
        transcript_strategy.attempt(url),
    )

    parsed = _metadata_from(metadata_outcome, url)
    metadata = parsed if parsed is not None else VideoMetadata()
    status = transcript_status_of(transcript_outcome)
    if status == TranscriptStatus.AVAILABLE:
        content = transcript_outcome.value
    else:
        content = transcript_placeholder(status)
        logger.info("No transcript for %s (%s), using placeholder", url, status.value)

    return ExtractionResult(
        title=metadata.title or UNKNOWN_TITLE,
        content=content,
        kind=ContentKind.VIDEO,
        metadata={
            "type": "video",
            "video_id": extract_video_id(url),
            "channel_name": metadata.channel_name or UNKNOWN_CHANNEL,
            "duration_seconds": metadata.duration_seconds,
            "duration": format_duration(metadata.duration_seconds),
            "upload_date": metadata.upload_date or UNKNOWN_DATE,
            "view_count": metadata.view_count,
            "description": metadata.description or "",
            "language": language,
            "metadata_found": parsed is not None,
            "metadata_source": metadata_strategy.name if parsed is not None else None,
            "transcript_status": status.value,
        },
    )


def _metadata_from(outcome: AdapterOutcome, url: str) -> VideoMetadata | None:
    if not outcome.ok:
        logger.warning("Video metadata unavailable for %s: %s", url, outcome.detail)
        return None
    try:
        return parse_video_metadata(outcome.value)
    except ValueError as exc:
        logger.warning("Could not parse video metadata for %s: %s", url, exc)
        return None

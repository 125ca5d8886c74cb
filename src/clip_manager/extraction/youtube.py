"""YouTube transcript fetching using youtube-transcript-api."""

import asyncio
import logging

from youtube_transcript_api import YouTubeTranscriptApi
from youtube_transcript_api._errors import (
    InvalidVideoId,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
)
from youtube_transcript_api.proxies import GenericProxyConfig

from clip_manager.extraction.router import extract_video_id
from clip_manager.models.content import AdapterOutcome, TranscriptFragment, TranscriptStatus
from clip_manager.models.errors import ErrorKind

logger = logging.getLogger(__name__)

_STATUS_ERROR_KINDS = {
    TranscriptStatus.DISABLED: ErrorKind.TRANSCRIPT_DISABLED,
    TranscriptStatus.UNAVAILABLE: ErrorKind.TRANSCRIPT_UNAVAILABLE,
    TranscriptStatus.FETCH_FAILED: ErrorKind.FETCH_FAILED,
}


def classify_transcript_error(exc: BaseException) -> TranscriptStatus:
    """Map a transcript fetch failure to a terminal transcript status.

    Captions turned off (by type or by message) is DISABLED; a missing or
    unknown video/track is UNAVAILABLE; anything else is FETCH_FAILED.
    """
    if isinstance(exc, TranscriptsDisabled):
        return TranscriptStatus.DISABLED
    if isinstance(exc, (NoTranscriptFound, VideoUnavailable, InvalidVideoId)):
        return TranscriptStatus.UNAVAILABLE
    if "disabled" in str(exc).lower():
        return TranscriptStatus.DISABLED
    return TranscriptStatus.FETCH_FAILED


def transcript_status_of(outcome: AdapterOutcome) -> TranscriptStatus:
    """Read the transcript status back out of a TranscriptStrategy outcome."""
    if outcome.ok:
        return TranscriptStatus.AVAILABLE
    for status, kind in _STATUS_ERROR_KINDS.items():
        if outcome.error_kind == kind:
            return status
    return TranscriptStatus.FETCH_FAILED


def fetch_transcript(
    video_id: str,
    languages: list[str],
    proxy_url: str = "",
) -> list[TranscriptFragment]:
    """Fetch caption fragments for a video (blocking).

    Uses YouTubeTranscriptApi instance fetch() method (not deprecated static methods).
    Raises whatever youtube-transcript-api raises.
    """
    proxy_config = GenericProxyConfig(https_url=proxy_url) if proxy_url else None
    ytt_api = YouTubeTranscriptApi(proxy_config=proxy_config)
    transcript = ytt_api.fetch(video_id, languages=languages)
    return [
        TranscriptFragment(
            text=snippet.text,
            offset_ms=int(snippet.start * 1000),
            duration_ms=int(snippet.duration * 1000),
        )
        for snippet in transcript
    ]


class TranscriptStrategy:
    """Fetch and join a video's transcript.

    Failures come back with TRANSCRIPT_DISABLED, TRANSCRIPT_UNAVAILABLE or
    FETCH_FAILED so the pipeline can pick the right placeholder.
    """

    name = "youtube-transcript-api"
    min_length = 1

    def __init__(
        self,
        languages: list[str] | None = None,
        timeout: float = 20.0,
        proxy_url: str = "",
    ) -> None:
        self.languages = languages or ["en"]
        self.timeout = timeout
        self.proxy_url = proxy_url

    async def attempt(self, url: str) -> AdapterOutcome:
        video_id = extract_video_id(url)
        if video_id is None:
            return AdapterOutcome.failure(ErrorKind.TRANSCRIPT_UNAVAILABLE, "no transcript source for URL")

        try:
            async with asyncio.timeout(self.timeout):
                # Sync call wrapped in to_thread
                fragments = await asyncio.to_thread(
                    fetch_transcript, video_id, self.languages, self.proxy_url
                )
        except TimeoutError:
            logger.warning("Transcript fetch timed out after %.1fs: %s", self.timeout, video_id)
            return AdapterOutcome.failure(ErrorKind.FETCH_FAILED, "transcript fetch timed out")
        except Exception as exc:
            # Catch-all for IP blocks, request errors, disabled captions, etc.
            status = classify_transcript_error(exc)
            if status == TranscriptStatus.FETCH_FAILED:
                logger.warning("Transcript fetch failed: %s", video_id, exc_info=True)
            else:
                logger.info("No transcript (%s): %s (%s)", status.value, video_id, type(exc).__name__)
            return AdapterOutcome.failure(_STATUS_ERROR_KINDS[status], str(exc)[:500])

        text = " ".join(fragment.text.strip() for fragment in fragments if fragment.text.strip())
        if not text:
            return AdapterOutcome.failure(ErrorKind.TRANSCRIPT_UNAVAILABLE, "transcript is empty")
        return AdapterOutcome.success(text)

"""Top-level extraction: classify, dispatch, validate, tag.

Every call runs under a wall-clock budget. Failed strategies fall back to
the next one or to placeholders; nothing is retried.
"""

import asyncio
import logging
from urllib.parse import urlparse

import httpx

from clip_manager.config import Settings, get_settings
from clip_manager.extraction.router import classify
from clip_manager.extraction.social import extract_social
from clip_manager.extraction.validator import tags_for, validate
from clip_manager.extraction.video import extract_video
from clip_manager.extraction.webpage import extract_webpage
from clip_manager.models.content import ContentKind, ExtractionRequest, ExtractionResult
from clip_manager.models.errors import ErrorKind, ExtractionError

logger = logging.getLogger(__name__)


def is_http_url(url: str) -> bool:
    """True for absolute http(s) URLs with a host."""
    try:
        parsed = urlparse(url.strip())
        return parsed.scheme in ("http", "https") and bool(parsed.hostname)
    except ValueError:
        return False


class Extractor:
    """Turns URLs into validated ExtractionResults.

    The HTTP client is owned by the caller and shared across requests as a
    connection pool; no other state outlives a single extract() call.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings | None = None) -> None:
        self.client = client
        self.settings = settings or get_settings()

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """Extract, validate and tag the content behind request.url.

        Raises:
            ExtractionError: INVALID_URL, FETCH_FAILED (including running out
                of the wall-clock budget) or INSUFFICIENT_CONTENT.
        """
        url = request.url.strip()
        if not is_http_url(url):
            raise ExtractionError(ErrorKind.INVALID_URL)

        kind = classify(url)
        timeout = self.settings.extraction_timeout_seconds
        logger.info("Extracting %s as %s", url, kind.value)
        try:
            async with asyncio.timeout(timeout):
                result = await self._dispatch(url, kind, request.language)
        except TimeoutError:
            logger.warning("Extraction timed out after %.1fs: %s", timeout, url)
            raise ExtractionError(ErrorKind.FETCH_FAILED, f"Extraction timed out after {timeout:.0f}s.") from None

        result = validate(result)
        logger.info("Extracted %d chars from %s (%s)", len(result.content), url, kind.value)
        return result.model_copy(update={"tags": tags_for(kind, url)})

    async def _dispatch(self, url: str, kind: ContentKind, language: str | None) -> ExtractionResult:
        """Dispatch to the pipeline for the URL's kind."""
        if kind == ContentKind.VIDEO:
            return await extract_video(url, self.settings, language)
        if kind == ContentKind.SOCIAL:
            return await extract_social(
                self.client,
                url,
                proxy_host=self.settings.social_proxy_host,
                timeout=self.settings.http_timeout_seconds,
                user_agent=self.settings.user_agent,
            )
        return await extract_webpage(self.client, url, self.settings)


async def extract_content(url: str, language: str | None = None) -> ExtractionResult:
    """One-off extraction with a short-lived HTTP client and default settings."""
    async with httpx.AsyncClient() as client:
        return await Extractor(client).extract(ExtractionRequest(url=url, language=language))

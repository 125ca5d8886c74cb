"""Webpage pipeline: fetch HTML, then article CLI with DOM fallback."""

import logging
from urllib.parse import urlparse

import httpx

from clip_manager.config import Settings
from clip_manager.extraction.article import SubprocessArticleStrategy, fetch_html
from clip_manager.extraction.dom import DomHeuristicStrategy
from clip_manager.extraction.strategy import ExtractionStrategy, run_fallback_chain
from clip_manager.extraction.text import derive_title
from clip_manager.extraction.validator import MIN_CONTENT_CHARS
from clip_manager.models.content import ContentKind, ExtractionResult
from clip_manager.models.errors import ErrorKind, ExtractionError

logger = logging.getLogger(__name__)


def default_webpage_strategies(settings: Settings) -> list[ExtractionStrategy[str]]:
    """Webpage strategies in priority order."""
    return [
        SubprocessArticleStrategy(
            command=settings.article_extractor_command,
            timeout=settings.article_extractor_timeout_seconds,
        ),
        DomHeuristicStrategy(),
    ]


async def extract_webpage(
    client: httpx.AsyncClient,
    url: str,
    settings: Settings,
    strategies: list[ExtractionStrategy[str]] | None = None,
) -> ExtractionResult:
    """Extract the readable text of a generic web page.

    Raises:
        ExtractionError: FETCH_FAILED / INVALID_URL when the page cannot be
            downloaded, INSUFFICIENT_CONTENT when every strategy comes back
            with less than the minimum viable text.
    """
    html = await fetch_html(
        client,
        url,
        timeout=settings.http_timeout_seconds,
        user_agent=settings.user_agent,
    )

    if strategies is None:
        strategies = default_webpage_strategies(settings)
    method, outcome = await run_fallback_chain(strategies, html)

    if method is None or len(outcome.value) < MIN_CONTENT_CHARS:
        logger.warning("No strategy produced enough text for %s (%s)", url, outcome.detail)
        raise ExtractionError(ErrorKind.INSUFFICIENT_CONTENT)

    content = outcome.value
    return ExtractionResult(
        title=derive_title(content) or url,
        content=content,
        kind=ContentKind.WEBPAGE,
        metadata={
            "type": "webpage",
            "extraction_method": method,
            "source_domain": urlparse(url).hostname,
        },
    )

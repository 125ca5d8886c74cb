"""Heuristic HTML-to-text fallback using BeautifulSoup.

Used only when the article CLI is unavailable or returns too little text.
Strips page chrome, then picks the longest of a fixed list of common
content containers, falling back to the whole body.
"""

import asyncio
import logging

from bs4 import BeautifulSoup

from clip_manager.extraction.text import normalize_whitespace
from clip_manager.models.content import AdapterOutcome
from clip_manager.models.errors import ErrorKind

logger = logging.getLogger(__name__)

STRIP_TAGS = ["script", "style", "noscript", "template", "nav", "header", "footer", "aside"]

# Checked in this order; the longest text wins, ties keep the earlier selector
CONTENT_SELECTORS = [
    "main",
    "article",
    ".content",
    ".post-content",
    ".entry-content",
    ".article-content",
    "#content",
    ".main-content",
]

# Below this, a matched container is ignored in favour of the full body
CONTAINER_MIN_CHARS = 100


def _text_of(elements) -> str:
    return normalize_whitespace("\n".join(el.get_text("\n") for el in elements))


def extract_dom_text(html: str) -> tuple[str, str]:
    """Extract readable text from HTML.

    Returns:
        (text, source) where source is the winning selector or "body".
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(STRIP_TAGS):
        tag.decompose()

    best_text, best_selector = "", None
    for selector in CONTENT_SELECTORS:
        text = _text_of(soup.select(selector))
        if len(text) > len(best_text):
            best_text, best_selector = text, selector

    if best_selector is not None and len(best_text) >= CONTAINER_MIN_CHARS:
        return best_text, best_selector

    root = soup.body or soup
    return normalize_whitespace(root.get_text("\n")), "body"


class DomHeuristicStrategy:
    """Fallback strategy: in-process DOM heuristics over the fetched HTML."""

    name = "dom-heuristic"
    min_length = 1

    async def attempt(self, html: str) -> AdapterOutcome:
        try:
            text, source = await asyncio.to_thread(extract_dom_text, html)
        except Exception as exc:
            # html.parser is lenient, but a pathological document can still blow up
            logger.warning("DOM fallback failed to parse HTML: %s", exc, exc_info=True)
            return AdapterOutcome.failure(ErrorKind.INSUFFICIENT_CONTENT, str(exc))
        logger.debug("DOM fallback picked %s (%d chars)", source, len(text))
        if not text:
            return AdapterOutcome.failure(ErrorKind.INSUFFICIENT_CONTENT, "no text in document")
        return AdapterOutcome.success(text)

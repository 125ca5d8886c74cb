"""Social post text via an embeddable-render proxy's og:description tag."""

import html
import logging
import re
from urllib.parse import urlparse, urlunparse

import httpx

from clip_manager.models.content import ContentKind, ExtractionResult

logger = logging.getLogger(__name__)

SOCIAL_PLACEHOLDER = (
    "[Could not extract tweet content. The post might be private, deleted, or a video.]"
)
DEFAULT_TITLE = "Twitter Post"

OG_DESCRIPTION_PATTERN = re.compile(r'<meta property="og:description" content="([^"]*)"\s*/?>')
HANDLE_PATTERN = re.compile(r"^/([A-Za-z0-9_]{1,15})/status(?:es)?/\d+")
# Reserved first path segments that are not user handles
_NON_HANDLES = frozenset({"i", "intent", "home", "search", "hashtag"})


def proxy_url_for(url: str, proxy_host: str = "twitframe.com") -> str:
    """Point a twitter.com / x.com post URL at the render proxy host."""
    parsed = urlparse(url)
    return urlunparse(parsed._replace(scheme="https", netloc=proxy_host))


def author_handle(url: str) -> str | None:
    """Return the @handle from a post URL path, if it has one."""
    match = HANDLE_PATTERN.match(urlparse(url).path)
    if match and match.group(1).lower() not in _NON_HANDLES:
        return match.group(1)
    return None


def parse_post_text(markup: str) -> str | None:
    """Pull the entity-decoded og:description out of proxy markup."""
    match = OG_DESCRIPTION_PATTERN.search(markup)
    if not match or not match.group(1):
        return None
    return html.unescape(match.group(1)).strip() or None


async def extract_social(
    client: httpx.AsyncClient,
    url: str,
    *,
    proxy_host: str = "twitframe.com",
    timeout: float = 30.0,
    user_agent: str | None = None,
) -> ExtractionResult:
    """Extract a social post's text through the render proxy.

    Best effort: a failed fetch or missing tag gives SOCIAL_PLACEHOLDER
    content instead of an error, so the bare link can still be saved.
    """
    target = proxy_url_for(url, proxy_host)
    text = None
    try:
        response = await client.get(
            target,
            headers={"User-Agent": user_agent} if user_agent else None,
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )
        response.raise_for_status()
        text = parse_post_text(response.text)
        if text is None:
            logger.info("No og:description in proxy markup for %s", url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Social proxy fetch failed for %s: %s", url, exc)

    handle = author_handle(url)
    return ExtractionResult(
        title=f"Post by @{handle}" if handle else DEFAULT_TITLE,
        content=text or SOCIAL_PLACEHOLDER,
        kind=ContentKind.SOCIAL,
        metadata={
            "type": "social",
            "author_handle": handle,
            "extraction_method": "og-description",
            "proxy_url": target,
            "extracted": text is not None,
        },
    )

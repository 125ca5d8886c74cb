"""Tests for social post extraction through the render proxy (mocked HTTP)."""

import httpx
import pytest

from clip_manager.extraction.social import (
    SOCIAL_PLACEHOLDER,
    author_handle,
    extract_social,
    parse_post_text,
    proxy_url_for,
)
from clip_manager.models.content import ContentKind

POST_URL = "https://x.com/jack/status/20"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _markup(description: str) -> str:
    return f'<html><head><meta property="og:description" content="{description}" /></head></html>'


def test_proxy_url_rewrites_host():
    assert proxy_url_for("https://x.com/jack/status/20") == "https://twitframe.com/jack/status/20"
    assert proxy_url_for("https://twitter.com/jack/status/20?s=20") == (
        "https://twitframe.com/jack/status/20?s=20"
    )
    assert proxy_url_for(POST_URL, "embed.example") == "https://embed.example/jack/status/20"


def test_parse_decodes_entities():
    assert parse_post_text(_markup("Hello &quot;world&quot;")) == 'Hello "world"'
    assert parse_post_text(_markup("a &amp; b &#39;c&#39; &lt;tag&gt;")) == "a & b 'c' <tag>"


def test_parse_missing_tag():
    assert parse_post_text("<html><head></head><body></body></html>") is None


def test_author_handle():
    assert author_handle("https://twitter.com/jack/status/20") == "jack"
    assert author_handle("https://x.com/i/status/20") is None
    assert author_handle("https://x.com/jack") is None


@pytest.mark.asyncio
async def test_extracts_description():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        return httpx.Response(200, text=_markup("Hello &quot;world&quot;, this is the post."))

    async with _client(handler) as client:
        result = await extract_social(client, POST_URL)

    assert seen["url"] == "https://twitframe.com/jack/status/20"
    assert result.kind == ContentKind.SOCIAL
    assert result.content == 'Hello "world", this is the post.'
    assert result.title == "Post by @jack"
    assert result.metadata["extracted"] is True
    assert result.metadata["author_handle"] == "jack"


@pytest.mark.asyncio
async def test_missing_tag_gives_placeholder():
    async with _client(lambda request: httpx.Response(200, text="<html></html>")) as client:
        result = await extract_social(client, POST_URL)

    assert result.content == SOCIAL_PLACEHOLDER
    assert result.metadata["extracted"] is False


@pytest.mark.asyncio
async def test_fetch_error_gives_placeholder():
    async with _client(lambda request: httpx.Response(500)) as client:
        result = await extract_social(client, POST_URL)

    assert result.content == SOCIAL_PLACEHOLDER


@pytest.mark.asyncio
async def test_network_error_gives_placeholder():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as client:
        result = await extract_social(client, "https://twitter.com/i/web/status/20")

    assert result.content == SOCIAL_PLACEHOLDER
    assert result.title == "Twitter Post"

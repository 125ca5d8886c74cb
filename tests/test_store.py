"""Tests for the persistence hand-off and manual-save fallback."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from clip_manager.models.content import ContentKind, ExtractionResult
from clip_manager.models.errors import ErrorKind, ExtractionError
from clip_manager.store import FALLBACK_NOTE, ClipRecord, bare_link_record, save_extraction


class FakeStore:
    """In-memory ClipStore double."""

    def __init__(self) -> None:
        self.records: list[ClipRecord] = []

    async def save(self, record: ClipRecord) -> str:
        self.records.append(record)
        return f"clip-{len(self.records)}"


def _extractor(result=None, error=None) -> MagicMock:
    extractor = MagicMock()
    extractor.extract = AsyncMock(return_value=result, side_effect=error)
    return extractor


@pytest.mark.asyncio
async def test_saves_extracted_result():
    result = ExtractionResult(
        title="Title",
        content="c" * 80,
        kind=ContentKind.WEBPAGE,
        metadata={"type": "webpage"},
        tags=["webpage"],
    )
    store = FakeStore()

    clip_id = await save_extraction(_extractor(result), store, "https://example.com/a", "user-1")

    assert clip_id == "clip-1"
    record = store.records[0]
    assert record.user_id == "user-1"
    assert record.url == "https://example.com/a"
    assert record.content == "c" * 80
    assert record.tags == ["webpage"]


@pytest.mark.asyncio
async def test_failure_without_fallback_saves_nothing():
    store = FakeStore()
    extractor = _extractor(error=ExtractionError(ErrorKind.INSUFFICIENT_CONTENT))

    with pytest.raises(ExtractionError):
        await save_extraction(extractor, store, "https://example.com/empty", "user-1")

    assert store.records == []


@pytest.mark.asyncio
async def test_failure_with_fallback_saves_bare_link():
    store = FakeStore()
    url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    extractor = _extractor(error=ExtractionError(ErrorKind.FETCH_FAILED))

    clip_id = await save_extraction(extractor, store, url, "user-1", allow_manual_fallback=True)

    assert clip_id == "clip-1"
    record = store.records[0]
    assert record.title == "YouTube Video"
    assert record.content == f"YouTube video: {url}\n\n{FALLBACK_NOTE}"
    assert record.metadata["extraction_failed"] is True
    assert record.metadata["error_kind"] == "fetch_failed"
    assert record.tags == ["youtube", "video"]


def test_bare_link_record_social_and_webpage():
    error = ExtractionError(ErrorKind.INSUFFICIENT_CONTENT)

    social = bare_link_record("https://x.com/jack/status/20", "u", error)
    assert social.title == "Twitter Post"
    assert social.kind == ContentKind.SOCIAL
    assert social.content.startswith("Twitter/X post: https://x.com/jack/status/20")

    page = bare_link_record("https://example.com/a", "u", error)
    assert page.title == "https://example.com/a"
    assert page.tags == ["webpage"]


def test_bare_link_record_uses_configured_platform_name():
    record = bare_link_record("https://vimeo.com/76979871", "u", ExtractionError(ErrorKind.FETCH_FAILED))

    assert record.title == "Vimeo Video"
    assert record.content.startswith("Vimeo video: https://vimeo.com/76979871")
    assert record.tags == ["vimeo", "video"]

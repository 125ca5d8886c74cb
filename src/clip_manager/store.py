"""Hand-off to the persistence collaborator.

The store itself (ids, timestamps, queries) lives outside this package; it
only has to satisfy ClipStore. save_extraction() never hands a result that
failed validation to the store. With manual fallback enabled it saves the
bare link instead, marked as not extracted.
"""

import logging
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict

from clip_manager.extraction.orchestrator import Extractor
from clip_manager.extraction.router import classify, platform_display_name
from clip_manager.extraction.validator import tags_for
from clip_manager.models.content import ContentKind, ExtractionRequest, ExtractionResult
from clip_manager.models.errors import ExtractionError

logger = logging.getLogger(__name__)

FALLBACK_NOTE = "[Content extraction was not successful, but the link has been saved]"


class ClipRecord(BaseModel):
    """A clip ready to be stored for a user."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    url: str
    title: str
    content: str
    kind: ContentKind
    metadata: dict[str, Any] = {}
    tags: list[str] = []


class ClipStore(Protocol):
    """Persistence collaborator. Returns the stored record's id."""

    async def save(self, record: ClipRecord) -> str: ...


def record_from_result(result: ExtractionResult, url: str, user_id: str) -> ClipRecord:
    return ClipRecord(
        user_id=user_id,
        url=url,
        title=result.title,
        content=result.content,
        kind=result.kind,
        metadata=result.metadata,
        tags=result.tags,
    )


def bare_link_record(url: str, user_id: str, error: ExtractionError) -> ClipRecord:
    """Record for a link whose content could not be extracted."""
    kind = classify(url)
    if kind == ContentKind.VIDEO:
        platform = platform_display_name(url)
        title = f"{platform} Video" if platform else "Video"
        label = f"{platform} video" if platform else "Video"
    elif kind == ContentKind.SOCIAL:
        title, label = "Twitter Post", "Twitter/X post"
    else:
        title, label = url, "Web page"
    return ClipRecord(
        user_id=user_id,
        url=url,
        title=title,
        content=f"{label}: {url}\n\n{FALLBACK_NOTE}",
        kind=kind,
        metadata={
            "type": kind.value,
            "extraction_failed": True,
            "error_kind": error.kind.value,
            "error": error.message,
        },
        tags=tags_for(kind, url),
    )


async def save_extraction(
    extractor: Extractor,
    store: ClipStore,
    url: str,
    user_id: str,
    language: str | None = None,
    allow_manual_fallback: bool = False,
) -> str:
    """Extract a URL and save it for a user, returning the stored id.

    Raises:
        ExtractionError: when extraction fails and manual fallback is off.
    """
    try:
        result = await extractor.extract(ExtractionRequest(url=url, language=language))
    except ExtractionError as exc:
        if not allow_manual_fallback:
            raise
        logger.info("Saving bare link after failed extraction (%s): %s", exc.kind.value, url)
        return await store.save(bare_link_record(url, user_id, exc))
    return await store.save(record_from_result(result, url, user_id))

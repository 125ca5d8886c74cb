"""Result validation and kind-derived tags."""

from clip_manager.extraction.router import platform_for
from clip_manager.models.content import ContentKind, ExtractionResult
from clip_manager.models.errors import ErrorKind, ExtractionError

# Minimum content length for webpage and social results
MIN_CONTENT_CHARS = 50


def validate(result: ExtractionResult) -> ExtractionResult:
    """Reject results that should not be persisted.

    Non-video results need at least MIN_CONTENT_CHARS of content. Video
    results are exempt from the length rule: their metadata is always
    present (sentinel values when the metadata fetch failed), so a
    placeholder transcript still makes a storable record.

    Raises:
        ExtractionError: INSUFFICIENT_CONTENT when the result is rejected.
    """
    if not result.content or not result.content.strip():
        raise ExtractionError(ErrorKind.INSUFFICIENT_CONTENT)

    if result.kind == ContentKind.VIDEO:
        return result

    if len(result.content) < MIN_CONTENT_CHARS:
        raise ExtractionError(ErrorKind.INSUFFICIENT_CONTENT)
    return result


def tags_for(kind: ContentKind, url: str) -> list[str]:
    """Tags handed to the persistence layer alongside a result."""
    if kind == ContentKind.VIDEO:
        platform = platform_for(url)
        return [platform, "video"] if platform else ["video"]
    if kind == ContentKind.SOCIAL:
        return [platform_for(url) or "twitter", "social"]
    return ["webpage"]

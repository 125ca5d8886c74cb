"""Error taxonomy for the extraction pipeline."""

from enum import Enum


class ErrorKind(str, Enum):
    """Why an extraction step failed.

    Only FETCH_FAILED, INSUFFICIENT_CONTENT and INVALID_URL ever reach the
    caller. The rest are resolved locally into fallbacks or placeholders.
    """

    FETCH_FAILED = "fetch_failed"
    SUBPROCESS_FAILED = "subprocess_failed"
    INSUFFICIENT_CONTENT = "insufficient_content"
    INVALID_URL = "invalid_url"
    TRANSCRIPT_DISABLED = "transcript_disabled"
    TRANSCRIPT_UNAVAILABLE = "transcript_unavailable"


_USER_MESSAGES = {
    ErrorKind.FETCH_FAILED: "Could not reach the page. Check the link or try again later.",
    ErrorKind.SUBPROCESS_FAILED: "The content extractor failed on this page.",
    ErrorKind.INSUFFICIENT_CONTENT: (
        "Could not extract meaningful content from URL. The page may be blocked or empty."
    ),
    ErrorKind.INVALID_URL: "The URL is not a valid http(s) link.",
    ErrorKind.TRANSCRIPT_DISABLED: "Transcript is disabled by the video creator.",
    ErrorKind.TRANSCRIPT_UNAVAILABLE: "Transcript is not available for this video.",
}


def user_message(kind: ErrorKind) -> str:
    """Short user-facing message for an error kind."""
    return _USER_MESSAGES[kind]


class ExtractionError(Exception):
    """Terminal extraction failure for a single request."""

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or user_message(kind)
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"ExtractionError(kind={self.kind.value!r}, message={self.message!r})"

"""Whitespace normalization and title derivation for extracted text."""

import re

_INLINE_WS = re.compile(r"[^\S\n]+")
_BLANK_LINES = re.compile(r"\n(?:[^\S\n]*\n)+")

TITLE_MAX_CHARS = 100


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space and blank-line runs to one line break."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _INLINE_WS.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _BLANK_LINES.sub("\n", text)
    return text.strip()


def derive_title(content: str, max_chars: int = TITLE_MAX_CHARS) -> str:
    """First non-blank line of content, truncated with "..." when longer than max_chars."""
    for line in content.splitlines():
        line = line.strip()
        if line:
            return line[:max_chars] + "..." if len(line) > max_chars else line
    return ""

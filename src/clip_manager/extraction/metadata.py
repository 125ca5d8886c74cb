"""Video metadata via the yt-dlp CLI (JSON dump, no media download)."""

import json
import logging

from clip_manager.extraction.process import run_command, split_command
from clip_manager.models.content import AdapterOutcome, VideoMetadata
from clip_manager.models.errors import ErrorKind

logger = logging.getLogger(__name__)

METADATA_FLAGS = ["--dump-json", "--skip-download", "--no-playlist", "--no-warnings"]


class VideoMetadataStrategy:
    """Run yt-dlp for a URL; the outcome value is its raw JSON dump."""

    name = "yt-dlp"
    min_length = 2  # "{}"

    def __init__(self, command: str = "yt-dlp", timeout: float = 45.0) -> None:
        self.argv = split_command(command)
        self.timeout = timeout

    async def attempt(self, url: str) -> AdapterOutcome:
        outcome = await run_command([*self.argv, *METADATA_FLAGS, url], timeout=self.timeout)
        if not outcome.ok:
            return outcome
        # --dump-json prints one object per line; a single video gives one line
        first_line = outcome.value.strip().splitlines()[:1]
        if not first_line:
            return AdapterOutcome.failure(ErrorKind.SUBPROCESS_FAILED, "yt-dlp produced no output")
        try:
            data = json.loads(first_line[0])
        except json.JSONDecodeError as exc:
            logger.warning("yt-dlp returned invalid JSON for %s: %s", url, exc)
            return AdapterOutcome.failure(ErrorKind.SUBPROCESS_FAILED, f"invalid JSON: {exc}")
        if not isinstance(data, dict):
            return AdapterOutcome.failure(ErrorKind.SUBPROCESS_FAILED, "yt-dlp JSON is not an object")
        return AdapterOutcome.success(json.dumps(data))


def parse_video_metadata(raw: str) -> VideoMetadata:
    """Map a yt-dlp JSON dump onto VideoMetadata.

    Missing or malformed fields are left as None rather than failing.
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("metadata JSON is not an object")
    return VideoMetadata(
        title=_str_or_none(data.get("title")),
        channel_name=_str_or_none(data.get("uploader") or data.get("channel")),
        duration_seconds=_int_or_none(data.get("duration")),
        upload_date=_format_upload_date(data.get("upload_date")),
        view_count=_int_or_none(data.get("view_count")),
        description=_str_or_none(data.get("description")),
    )


def format_duration(seconds: int | None) -> str:
    """Format seconds as H:MM:SS or M:SS. None becomes "Unknown"."""
    if seconds is None:
        return "Unknown"
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def _str_or_none(value) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _int_or_none(value) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _format_upload_date(value) -> str | None:
    """yt-dlp gives YYYYMMDD; return YYYY-MM-DD, or the raw value if it is some other shape."""
    value = _str_or_none(value)
    if value and len(value) == 8 and value.isdigit():
        return f"{value[:4]}-{value[4:6]}-{value[6:]}"
    return value

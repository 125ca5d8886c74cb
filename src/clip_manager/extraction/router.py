"""URL classification by hostname."""

import functools
import re
from pathlib import Path
from urllib.parse import urlparse

import yaml

from clip_manager.models.content import ContentKind

_CONFIG_PATH = Path(__file__).resolve().parent / "hosts.yaml"

# Watch, shorts, embed, live and short-link formats
VIDEO_ID_PATTERN = re.compile(
    r"(?:youtube(?:-nocookie)?\.com/(?:watch\?(?:.*&)?v=|shorts/|embed/|live/|v/)|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})"
)


@functools.lru_cache
def load_hosts() -> dict[str, dict[str, str]]:
    """Load the host tables and platform display names from YAML. Result is cached."""
    with open(_CONFIG_PATH) as f:
        data = yaml.safe_load(f) or {}
    return {
        "video": {host.lower(): name for host, name in (data.get("video") or {}).items()},
        "social": {host.lower(): name for host, name in (data.get("social") or {}).items()},
        "platforms": dict(data.get("platforms") or {}),
    }


def _hostname(url: str) -> str | None:
    try:
        return urlparse(url.strip()).hostname
    except ValueError:
        return None


def _match(hostname: str, hosts: dict[str, str]) -> str | None:
    """Match hostname or any parent domain against a host table.

    www.youtube.com matches youtube.com; netflix.com does not match x.com.
    """
    parts = hostname.lower().rstrip(".").split(".")
    for i in range(len(parts)):
        candidate = ".".join(parts[i:])
        if candidate in hosts:
            return hosts[candidate]
    return None


def classify(url: str) -> ContentKind:
    """Classify a URL by hostname. Unknown or unparsable URLs are WEBPAGE."""
    hostname = _hostname(url)
    if not hostname:
        return ContentKind.WEBPAGE
    hosts = load_hosts()
    if _match(hostname, hosts["video"]):
        return ContentKind.VIDEO
    if _match(hostname, hosts["social"]):
        return ContentKind.SOCIAL
    return ContentKind.WEBPAGE


def platform_for(url: str) -> str | None:
    """Return the platform name for a known video or social URL (e.g. "youtube")."""
    hostname = _hostname(url)
    if not hostname:
        return None
    hosts = load_hosts()
    return _match(hostname, hosts["video"]) or _match(hostname, hosts["social"])


def platform_display_name(url: str) -> str | None:
    """Human-readable platform name for a known URL (e.g. "YouTube")."""
    platform = platform_for(url)
    if platform is None:
        return None
    return load_hosts()["platforms"].get(platform, platform.capitalize())


def extract_video_id(url: str) -> str | None:
    """Extract the 11-character video ID from a YouTube URL.

    Also handles URLs with additional query params (e.g., &t=123, &list=PLxxx).
    """
    match = VIDEO_ID_PATTERN.search(url)
    return match.group(1) if match else None

"""Page download and article text extraction via the trafilatura CLI."""

import logging

import httpx

from clip_manager.extraction.process import html_snapshot, run_command, split_command
from clip_manager.extraction.text import normalize_whitespace
from clip_manager.models.content import AdapterOutcome
from clip_manager.models.errors import ErrorKind, ExtractionError

logger = logging.getLogger(__name__)

# Shorter output is usually a boilerplate or error page, not an article
ARTICLE_MIN_CHARS = 100

# Replaced with the snapshot path when present in the configured command
PATH_PLACEHOLDER = "{path}"


async def fetch_html(client: httpx.AsyncClient, url: str, *, timeout: float, user_agent: str) -> str:
    """Download a page with a browser User-Agent.

    Raises:
        ExtractionError: INVALID_URL for malformed or non-http URLs,
            FETCH_FAILED for network errors, timeouts, and non-2xx responses.
    """
    try:
        response = await client.get(
            url,
            headers={"User-Agent": user_agent},
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )
        response.raise_for_status()
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
        raise ExtractionError(ErrorKind.INVALID_URL) from exc
    except httpx.HTTPError as exc:
        logger.warning("Failed to fetch %s: %s", url, exc)
        raise ExtractionError(ErrorKind.FETCH_FAILED) from exc
    return response.text


class SubprocessArticleStrategy:
    """Hand the fetched HTML to an article-extraction CLI through a temp file.

    A `{path}` placeholder in the command is replaced with the snapshot
    path. Without one the snapshot is connected to the CLI's stdin, which
    is how trafilatura reads its input.
    """

    name = "trafilatura"
    min_length = ARTICLE_MIN_CHARS

    def __init__(self, command: str = "trafilatura", timeout: float = 30.0) -> None:
        self.argv = split_command(command)
        self.timeout = timeout

    async def attempt(self, html: str) -> AdapterOutcome:
        with html_snapshot(html) as path:
            if any(PATH_PLACEHOLDER in arg for arg in self.argv):
                argv = [arg.replace(PATH_PLACEHOLDER, str(path)) for arg in self.argv]
                outcome = await run_command(argv, timeout=self.timeout)
            else:
                outcome = await run_command(self.argv, timeout=self.timeout, stdin_path=path)
        if not outcome.ok:
            return outcome
        return AdapterOutcome.success(normalize_whitespace(outcome.value))

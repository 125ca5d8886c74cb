"""Tests for subprocess invocation, timeouts, and temp-file handoff.

These run short-lived Python subprocesses instead of the real CLIs.
"""

import sys
import time

import pytest

from clip_manager.extraction.process import html_snapshot, run_command, split_command
from clip_manager.models.errors import ErrorKind


@pytest.mark.asyncio
async def test_run_command_success():
    outcome = await run_command([sys.executable, "-c", "print('hello')"], timeout=10)

    assert outcome.ok is True
    assert outcome.value.strip() == "hello"


@pytest.mark.asyncio
async def test_run_command_nonzero_exit_captures_stderr():
    code = "import sys; sys.stderr.write('boom'); sys.exit(3)"
    outcome = await run_command([sys.executable, "-c", code], timeout=10)

    assert outcome.ok is False
    assert outcome.error_kind == ErrorKind.SUBPROCESS_FAILED
    assert outcome.detail == "boom"


@pytest.mark.asyncio
async def test_run_command_missing_program():
    outcome = await run_command(["clip-manager-no-such-binary"], timeout=5)

    assert outcome.ok is False
    assert outcome.error_kind == ErrorKind.SUBPROCESS_FAILED
    assert "could not start" in outcome.detail


@pytest.mark.asyncio
async def test_run_command_timeout_kills_process():
    """A process running past its timeout resolves to a failure promptly."""
    started = time.monotonic()
    outcome = await run_command(
        [sys.executable, "-c", "import time; time.sleep(30)"], timeout=0.5
    )
    elapsed = time.monotonic() - started

    assert outcome.ok is False
    assert outcome.error_kind == ErrorKind.SUBPROCESS_FAILED
    assert "timed out" in outcome.detail
    assert elapsed < 10


@pytest.mark.asyncio
async def test_run_command_reads_stdin_from_file():
    code = "import sys; sys.stdout.write(sys.stdin.read().upper())"
    with html_snapshot("<p>abc</p>") as path:
        outcome = await run_command([sys.executable, "-c", code], timeout=10, stdin_path=path)

    assert outcome.ok is True
    assert outcome.value == "<P>ABC</P>"


def test_html_snapshot_removed_after_use():
    with html_snapshot("<p>hello</p>") as path:
        assert path.read_text(encoding="utf-8") == "<p>hello</p>"
    assert not path.exists()


def test_html_snapshot_removed_on_error():
    with pytest.raises(RuntimeError):
        with html_snapshot("<p>hello</p>") as path:
            saved = path
            raise RuntimeError("extractor blew up")
    assert not saved.exists()


def test_html_snapshot_unique_per_use():
    with html_snapshot("a") as first, html_snapshot("b") as second:
        assert first != second


def test_split_command_handles_quotes():
    assert split_command('"/opt/my tools/trafilatura" --fast') == ["/opt/my tools/trafilatura", "--fast"]

"""Subprocess invocation with hard timeouts and scoped temp-file handoff.

Every external CLI the pipeline uses (article extractor, video metadata
extractor) goes through run_command(), which always returns an
AdapterOutcome: a process that exits non-zero, cannot be started, or runs
past its timeout is reported as SUBPROCESS_FAILED. Timed-out processes are
killed and reaped before the call returns.
"""

import asyncio
import contextlib
import logging
import os
import shlex
import tempfile
from collections.abc import Iterator, Sequence
from pathlib import Path

from clip_manager.models.content import AdapterOutcome
from clip_manager.models.errors import ErrorKind

logger = logging.getLogger(__name__)

# Cap on stderr carried back as diagnostic detail
_MAX_DETAIL_CHARS = 500


def split_command(command: str) -> list[str]:
    """Split a configured command string into argv."""
    return shlex.split(command)


@contextlib.contextmanager
def html_snapshot(html: str) -> Iterator[Path]:
    """Write HTML to a request-owned temp file and delete it on exit.

    The file is removed on every exit path, including timeouts and
    cancellation of the awaiting task.
    """
    fd, name = tempfile.mkstemp(prefix="clip_", suffix=".html")
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(html)
        yield path
    finally:
        path.unlink(missing_ok=True)


async def run_command(
    argv: Sequence[str],
    *,
    timeout: float,
    stdin_path: Path | None = None,
) -> AdapterOutcome:
    """Run argv and return its stdout as an AdapterOutcome.

    Args:
        argv: Program and arguments.
        timeout: Seconds before the process is killed.
        stdin_path: Optional file connected to the process's stdin.

    Returns:
        Success with decoded stdout on exit code 0, otherwise a
        SUBPROCESS_FAILED outcome with stderr (or the reason) as detail.
    """
    program = argv[0] if argv else "<empty>"
    with contextlib.ExitStack() as stack:
        stdin = stack.enter_context(open(stdin_path, "rb")) if stdin_path else asyncio.subprocess.DEVNULL
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=stdin,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            logger.warning("Could not start %s: %s", program, exc)
            return AdapterOutcome.failure(ErrorKind.SUBPROCESS_FAILED, f"could not start {program}: {exc}")

        try:
            async with asyncio.timeout(timeout):
                stdout, stderr = await proc.communicate()
        except TimeoutError:
            await _terminate(proc)
            logger.warning("%s timed out after %.1fs", program, timeout)
            return AdapterOutcome.failure(
                ErrorKind.SUBPROCESS_FAILED, f"{program} timed out after {timeout:.1f}s"
            )
        except asyncio.CancelledError:
            await _terminate(proc)
            raise

    if proc.returncode != 0:
        detail = stderr.decode("utf-8", errors="replace").strip()[:_MAX_DETAIL_CHARS]
        logger.warning("%s exited with code %s: %s", program, proc.returncode, detail)
        return AdapterOutcome.failure(
            ErrorKind.SUBPROCESS_FAILED, detail or f"{program} exited with code {proc.returncode}"
        )

    return AdapterOutcome.success(stdout.decode("utf-8", errors="replace"))


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    """Kill a running process and reap it."""
    if proc.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
    await proc.wait()

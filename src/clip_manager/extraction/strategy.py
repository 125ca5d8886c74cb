"""Extraction strategies, ordered fallback chains, and concurrent fan-out."""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Protocol, TypeVar

from clip_manager.models.content import AdapterOutcome
from clip_manager.models.errors import ErrorKind

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", contravariant=True)


class ExtractionStrategy(Protocol[InputT]):
    """One way of turning an input (HTML, URL, video ID) into text.

    attempt() must not raise; failures come back as AdapterOutcome.
    min_length is the shortest value the chain accepts from this strategy.
    """

    name: str
    min_length: int

    async def attempt(self, source: InputT) -> AdapterOutcome: ...


async def run_fallback_chain(
    strategies: Sequence[ExtractionStrategy[InputT]], source: InputT
) -> tuple[str | None, AdapterOutcome]:
    """Try strategies in priority order, returning the first acceptable outcome.

    An outcome is acceptable when it is ok and its value meets the
    strategy's min_length. Nothing is retried: a rejected attempt moves
    straight to the next strategy.

    Returns:
        (strategy name, outcome) for the first accepted attempt, or
        (None, last outcome) when every strategy was rejected.
    """
    last = AdapterOutcome.failure(ErrorKind.INSUFFICIENT_CONTENT, "no strategies configured")
    for strategy in strategies:
        outcome = await strategy.attempt(source)
        if outcome.ok and len(outcome.value) >= strategy.min_length:
            logger.debug("Strategy %s accepted (%d chars)", strategy.name, len(outcome.value))
            return strategy.name, outcome
        if outcome.ok:
            logger.info(
                "Strategy %s returned %d chars (< %d), falling back",
                strategy.name,
                len(outcome.value),
                strategy.min_length,
            )
            last = AdapterOutcome.failure(
                ErrorKind.INSUFFICIENT_CONTENT,
                f"{strategy.name} returned {len(outcome.value)} chars",
            )
        else:
            logger.info("Strategy %s failed (%s), falling back", strategy.name, outcome.detail)
            last = outcome
    return None, last


async def gather_outcomes(*attempts: Awaitable[AdapterOutcome]) -> list[AdapterOutcome]:
    """Run attempts concurrently and wait for all of them.

    Never short-circuits: an attempt that raises is converted into a failed
    outcome so the others still complete and can be merged.
    """
    results = await asyncio.gather(*attempts, return_exceptions=True)
    outcomes: list[AdapterOutcome] = []
    for result in results:
        if isinstance(result, BaseException):
            if isinstance(result, asyncio.CancelledError):
                raise result
            logger.warning("Concurrent attempt raised: %r", result, exc_info=result)
            outcomes.append(AdapterOutcome.failure(ErrorKind.FETCH_FAILED, repr(result)))
        else:
            outcomes.append(result)
    return outcomes

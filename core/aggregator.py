"""
Aggregator - Runs every source handler concurrently and reduces the results.
"""

import asyncio
import logging
from typing import List, Sequence, Tuple

from handlers.base_handler import BaseHandler
from models.check_result import CheckResult

logger = logging.getLogger('Aggregator')


async def gather_source_results(
    handlers: Sequence[BaseHandler]
) -> List[Tuple[BaseHandler, CheckResult]]:
    """
    Run all handlers concurrently and wait for every one of them.

    Args:
        handlers: Handlers in priority order

    Returns:
        (handler, result) pairs in the same order as `handlers`
    """
    results = await asyncio.gather(
        *(asyncio.to_thread(handler.fetch_and_classify) for handler in handlers),
        return_exceptions=True,
    )

    pairs = []
    for handler, result in zip(handlers, results):
        if isinstance(result, BaseException):
            logger.error(f"{handler.display_name} raised {type(result).__name__}: {result}")
            result = CheckResult.not_found()
        pairs.append((handler, result))
    return pairs


def reduce_results(results: Sequence[CheckResult]) -> CheckResult:
    """Return the first found result in priority order, else not found."""
    for result in results:
        if result.found:
            return result
    return CheckResult.not_found()


async def check_all_sources(handlers: Sequence[BaseHandler]) -> CheckResult:
    """
    Check every source and return the single authoritative result.

    Args:
        handlers: Handlers in priority order

    Returns:
        The highest-priority found result, or a not-found result
    """
    logger.info(f"Checking {len(handlers)} sources...")

    pairs = await gather_source_results(handlers)
    result = reduce_results([result for _, result in pairs])

    if result.found:
        winner = next(handler for handler, r in pairs if r is result)
        logger.info(f"[FOUND] {winner.display_name}: {result.source or result.model}")
    else:
        logger.info("No Sonnet 5 found in any source")
    return result

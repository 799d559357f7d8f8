"""Fan a Query out to every enabled connector and join the results.

Each connector runs in its own task, bounded by its own timeout. Failures
and timeouts are logged and skipped: the aggregator never raises because some
subset of sources failed. Output order follows connector priority, not
completion order, so first-occurrence deduplication is deterministic.

An optional overall deadline cancels connectors that are still running and
returns what has already arrived. Cancelling the caller cancels every
in-flight connector task.
"""

import asyncio
import logging

from career_reco.core.errors import SourceError
from career_reco.core.schemas import Query, RawItem
from career_reco.sources.base import SourceConnector

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 8.0


async def _call_connector(
    connector: SourceConnector,
    query: Query,
    limit: int,
    timeout_s: float,
) -> list[RawItem]:
    return await asyncio.wait_for(connector.search(query, limit), timeout=timeout_s)


def _collect(
    connector: SourceConnector,
    task: asyncio.Task[list[RawItem]],
) -> list[RawItem] | None:
    """Return a finished task's items, or None after logging why it failed."""
    if task.cancelled():
        logger.warning("Source '%s' cancelled at request deadline", connector.source_id)
        return None
    exc = task.exception()
    if exc is None:
        return task.result()
    if isinstance(exc, asyncio.TimeoutError):
        logger.warning(
            "Source '%s' timed out - skipping", connector.source_id,
        )
    elif isinstance(exc, SourceError):
        logger.warning(
            "Source '%s' failed (%s): %s - skipping",
            connector.source_id, type(exc).__name__, exc,
        )
    else:
        logger.warning(
            "Source '%s' raised unexpectedly - skipping",
            connector.source_id,
            exc_info=exc,
        )
    return None


async def aggregate(
    query: Query,
    connectors: list[SourceConnector],
    per_source_limit: int,
    *,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    deadline_s: float | None = None,
) -> list[RawItem]:
    """Search every enabled connector concurrently.

    Args:
        query: The request query.
        connectors: Connectors in priority order.
        per_source_limit: Maximum items requested from each connector.
        timeout_s: Upper bound for any single connector call; a connector's
            own (smaller) timeout takes precedence.
        deadline_s: Optional bound for the whole fan-out.

    Returns:
        Items concatenated in connector order. Empty when every source
        failed or none is enabled; the caller decides on a fallback.
    """
    enabled = [c for c in connectors if c.enabled]
    skipped = len(connectors) - len(enabled)
    if skipped:
        logger.debug("Skipping %d disabled sources", skipped)
    if not enabled:
        logger.info("No enabled sources")
        return []

    tasks = [
        asyncio.create_task(
            _call_connector(c, query, per_source_limit, min(c.timeout_s, timeout_s)),
            name=f"source:{c.source_id}",
        )
        for c in enabled
    ]

    try:
        _, pending = await asyncio.wait(tasks, timeout=deadline_s)
        if pending:
            logger.warning(
                "Request deadline reached with %d sources still running", len(pending),
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
    finally:
        # Caller cancellation lands here with tasks still running
        unfinished = [task for task in tasks if not task.done()]
        for task in unfinished:
            task.cancel()
        if unfinished:
            await asyncio.gather(*unfinished, return_exceptions=True)

    items: list[RawItem] = []
    succeeded = 0
    for connector, task in zip(enabled, tasks):
        result = _collect(connector, task)
        if result is not None:
            succeeded += 1
            items.extend(result)

    logger.info(
        "Aggregated %d items from %d/%d sources", len(items), succeeded, len(enabled),
    )
    return items

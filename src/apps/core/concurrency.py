"""Helpers for issuing independent queries concurrently."""

import asyncio
from typing import Any, Awaitable


async def fan_out(*awaitables: Awaitable[Any]) -> tuple[Any, ...]:
    """
    Run independent awaitables concurrently and return their results in order.

    The first failure aborts the whole batch: the remaining tasks are
    cancelled and drained before the exception propagates. Cancelling the
    caller cancels every child.
    """
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    try:
        return tuple(await asyncio.gather(*tasks))
    except Exception:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

"""A tiny asyncio counterpart of `p-map` used to fan out page fetches.

Every item starts immediately (no concurrency cap); results come back in
input order. The first mapper error is re-raised after the remaining tasks
have been cancelled and allowed to unwind, so each task's ``finally`` blocks
(closing its browser page) run before the caller sees the failure.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

InT = TypeVar("InT")
OutT = TypeVar("OutT")


async def p_map(
    iterable: Iterable[InT], mapper: Callable[[InT], Awaitable[OutT]]
) -> list[OutT]:
    """Map ``iterable`` through the async ``mapper`` concurrently."""

    tasks = [asyncio.ensure_future(mapper(item)) for item in iterable]
    if not tasks:
        return []

    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


__all__ = ["p_map"]

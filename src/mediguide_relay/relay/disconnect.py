"""
Cancellation of upstream calls when the inbound client goes away.

Starlette keeps running a handler after the client disconnects, so the
upstream call is run as a task and the request is polled for a disconnect
while it is pending.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DisconnectAware(Protocol):
    async def is_disconnected(self) -> bool: ...


class ClientDisconnectedError(Exception):
    """Raised when the inbound client disconnected before the result was ready."""

    pass


async def run_until_disconnected(
    request: DisconnectAware,
    awaitable: Awaitable[T],
    poll_interval: float,
) -> T:
    """Await ``awaitable``, cancelling it if ``request`` disconnects first.

    Raises:
        ClientDisconnectedError: If the client disconnected; the pending
            awaitable has been cancelled.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if task in done:
                return task.result()
            if await request.is_disconnected():
                logger.info("Client disconnected, cancelling upstream call")
                raise ClientDisconnectedError()
    finally:
        if not task.done():
            task.cancel()

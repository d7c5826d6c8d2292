"""Search cancellation – race an awaitable against a caller-owned event."""
from __future__ import annotations

import asyncio
import contextlib
import inspect
from typing import Any, Awaitable

from mp_facets.search.errors import SearchCanceledError


def raise_if_canceled(cancel: asyncio.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise SearchCanceledError("Search canceled")


async def cancellable(coro: Awaitable[Any], cancel: asyncio.Event | None = None) -> Any:
    """Await *coro* unless *cancel* is set first.

    Raises :class:`SearchCanceledError` when the event wins; exceptions raised
    by *coro* itself propagate unchanged.
    """
    if cancel is None:
        return await coro
    if cancel.is_set():
        if inspect.iscoroutine(coro):
            coro.close()
        raise SearchCanceledError("Search canceled")

    work = asyncio.ensure_future(coro)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        work.cancel()
        raise
    finally:
        waiter.cancel()

    if work in done:
        return work.result()

    work.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await work
    raise SearchCanceledError("Search canceled")


__all__ = ["cancellable", "raise_if_canceled"]

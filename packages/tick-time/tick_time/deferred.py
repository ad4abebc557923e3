"""Deferred - awaitable surface shared by Delay and Until.

The controllable primitive does not inherit from a future. It owns one
``concurrent.futures.Future`` per run and forwards the read side to it:
callers can ``await`` the primitive from any running asyncio loop, or poll
``done()`` from a synchronous game loop without any loop at all.
"""
from __future__ import annotations

import asyncio
from concurrent.futures import Future
from typing import Any, Callable, Generator, TypeVar

D = TypeVar("D", bound="Deferred")


def _settle_waiter(waiter: asyncio.Future[None], source: Future[None]) -> None:
    if waiter.done():
        return
    if source.cancelled():
        waiter.cancel()
        return
    exc = source.exception()
    if exc is not None:
        waiter.set_exception(exc)
    else:
        waiter.set_result(None)


class Deferred:
    """Delegates to the future of the current run. Subclasses settle it."""

    def __init__(self) -> None:
        self._future: Future[None] = Future()

    @property
    def future(self) -> Future[None]:
        """The future backing the current run."""
        return self._future

    def __await__(self) -> Generator[Any, None, None]:
        # each awaiter gets its own loop future, fed one way from the shared
        # one, so cancelling an awaiting task leaves the run untouched
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[None] = loop.create_future()

        def relay(source: Future[None]) -> None:
            if not loop.is_closed():
                loop.call_soon_threadsafe(_settle_waiter, waiter, source)

        self._future.add_done_callback(relay)
        return waiter.__await__()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> None:
        """Return once fulfilled, re-raise if rejected.

        Blocks the calling thread while pending; under a deterministic
        scheduler check ``done()`` first.
        """
        return self._future.result(timeout)

    def exception(self, timeout: float | None = None) -> BaseException | None:
        return self._future.exception(timeout)

    def add_done_callback(self: D, fn: Callable[[D], Any]) -> None:
        """Call ``fn(self)`` when the current run settles (now, if it has)."""
        self._future.add_done_callback(lambda _future: fn(self))

    def _renew(self) -> None:
        self._future = Future()

    def _fulfill(self) -> None:
        # the future may have been cancelled through the public property
        if not self._future.done():
            self._future.set_result(None)

    def _reject(self, exc: BaseException) -> None:
        if not self._future.done():
            self._future.set_exception(exc)

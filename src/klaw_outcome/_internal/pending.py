"""Single-assignment completion cell backing OptionAsync and ResultAsync.

A Pending starts its awaitable as soon as it is built inside a running event
loop and settles at most once. Every later await, from any number of chained
wrappers, attaches to that one resolution instead of re-running the work.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Generator
from typing import Any

__all__ = ['MaybeAwaitable', 'Pending', 'settle']

type MaybeAwaitable[T] = T | Awaitable[T]


class Pending[T]:
    """A value produced by one eagerly started awaitable.

    Built with a running loop, the awaitable is scheduled immediately via
    ``asyncio.ensure_future``. Built without one (e.g. at import time), the
    start is deferred to the first await. Exceptions raised by the awaitable
    are re-raised to every awaiter. Awaiters are shielded from the
    computation: cancelling one of them (a timeout, a cancelled task) never
    cancels the shared work.

    Examples:
        >>> async def main():
        ...     cell = Pending(compute())   # already running
        ...     first = await cell
        ...     second = await cell         # same value, compute() ran once
    """

    __slots__ = ('_future', '_is_set', '_source', '_value')

    def __init__(self, source: Awaitable[T]) -> None:
        self._source: Awaitable[T] | None = source
        self._future: asyncio.Future[T] | None = None
        self._value: T | None = None
        self._is_set = False
        self._start()

    @classmethod
    def resolved(cls, value: T) -> Pending[T]:
        """Create an already-settled cell; awaiting it never suspends."""
        cell = cls.__new__(cls)
        cell._source = None
        cell._future = None
        cell._value = value
        cell._is_set = True
        return cell

    def _start(self) -> asyncio.Future[T] | None:
        if self._future is None and self._source is not None:
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                return None
            self._future = asyncio.ensure_future(self._source)
            self._source = None
        return self._future

    def is_set(self) -> bool:
        """Check if the value has been observed by an await."""
        return self._is_set

    async def get(self) -> T:
        """Wait for the single resolution and return it."""
        if self._is_set:
            return self._value  # type: ignore[return-value]
        future = self._start()
        if future is None:
            msg = 'Pending requires a running asyncio event loop'
            raise RuntimeError(msg)
        value = await asyncio.shield(future)
        self._value = value
        self._is_set = True
        return value

    def future(self) -> asyncio.Future[T]:
        """Return a new asyncio.Future settled with this cell's resolution.

        Each call hands out a separate future; cancelling it leaves the
        underlying computation and every other observer untouched.

        Raises:
            RuntimeError: If called without a running event loop.
        """
        loop = asyncio.get_running_loop()
        if self._is_set:
            done = loop.create_future()
            done.set_result(self._value)  # type: ignore[arg-type]
            return done
        future = self._start()
        if future is None:
            msg = 'Pending has neither a value nor a computation to wait on'
            raise RuntimeError(msg)
        return asyncio.shield(future)

    def __await__(self) -> Generator[Any, Any, T]:
        return self.get().__await__()

    def __repr__(self) -> str:
        if self._is_set:
            return f'Pending(resolved={self._value!r})'
        return f'Pending({self._future or self._source!r})'


async def settle[T](value: T | Awaitable[T]) -> T:
    """Await value if it is awaitable, otherwise return it unchanged.

    Callbacks handed to the async wrappers may be sync or async; their return
    value goes through here exactly once.
    """
    if inspect.isawaitable(value):
        return await value
    return value

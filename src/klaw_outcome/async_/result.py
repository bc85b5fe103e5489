"""ResultAsync: an awaitable handle on a pending Result.

ResultAsync wraps one eagerly started computation producing a Result[T, E]
and lifts the Result combinators over it. Chaining methods return a new
ResultAsync immediately; nothing suspends until the chain is awaited or a
terminal method (``unwrap``, ``match``, ...) is awaited.

Example:
    ```python
    async def fetch_user(id: int) -> Result[User, ApiError]:
        ...

    name = await (
        ResultAsync(fetch_user(1))
        .and_then(validate_user)      # sync or async, Result or ResultAsync
        .map(lambda user: user.name)
        .map_err(ApiError.wrap)
        .unwrap_or('anonymous')
    )
    ```
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Generator, Iterable
from typing import TYPE_CHECKING, Any

from klaw_outcome._config import get_config
from klaw_outcome._internal.pending import MaybeAwaitable, Pending, settle
from klaw_outcome._logging import debug_enabled, get_logger
from klaw_outcome.types.result import Err, Ok, Result

if TYPE_CHECKING:
    from klaw_outcome.async_.option import OptionAsync

__all__ = ['ResultAsync']

logger = get_logger(__name__)


class ResultAsync[T, E]:
    """Async-aware Result wrapper for composing async Result operations.

    The wrapped computation starts when the ResultAsync is built (inside a
    running event loop) and resolves exactly once. Awaiting the same
    ResultAsync several times, or chaining several operations off it, observes
    that single resolution.

    Note:
        The eager start relies on asyncio. Handles built outside a running
        loop start on their first await.

    Example:
        ```python
        async def main():
            result = await ResultAsync.from_ok(21).map(lambda x: x * 2)
            assert result == Ok(42)

        asyncio.run(main())
        ```
    """

    __slots__ = ('_pending',)

    def __init__(self, awaitable: Awaitable[Result[T, E]]) -> None:
        """Create a ResultAsync from an awaitable producing a Result.

        Args:
            awaitable: A coroutine, Task, Future or other awaitable.
        """
        self._pending: Pending[Result[T, E]] = (
            awaitable if isinstance(awaitable, Pending) else Pending(awaitable)
        )

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        """Support await syntax to get the underlying Result."""
        return self._pending.__await__()

    # -----------------------------------------------------------------
    # Constructors
    # -----------------------------------------------------------------

    @classmethod
    def from_result(cls, result: MaybeAwaitable[Result[T, E]]) -> ResultAsync[T, E]:
        """Create a ResultAsync from a Result or an awaitable of one.

        A plain Result is wrapped in an already-resolved cell, so awaiting
        it does not suspend.
        """
        if isinstance(result, Ok | Err):
            return cls(Pending.resolved(result))
        return cls(result)

    @classmethod
    def from_ok(cls, value: T) -> ResultAsync[T, Any]:
        """Create an already-resolved ResultAsync containing Ok(value)."""
        return cls(Pending.resolved(Ok(value)))

    @classmethod
    def from_err(cls, error: E) -> ResultAsync[Any, E]:
        """Create an already-resolved ResultAsync containing Err(error)."""
        return cls(Pending.resolved(Err(error)))

    @classmethod
    def from_awaitable(
        cls,
        awaitable: Awaitable[T],
        error_fn: Callable[[BaseException], E] | None = None,
        *,
        exceptions: tuple[type[BaseException], ...] | None = None,
    ) -> ResultAsync[T, E]:
        """Wrap an awaitable, turning its value into Ok and a raise into Err.

        Args:
            awaitable: The awaitable to wrap.
            error_fn: Optional mapping applied to the caught exception.
            exceptions: Exception types to capture. Defaults to the configured
                ``catch`` tuple; anything else propagates as a failure.

        Example:
            ```python
            body = await ResultAsync.from_awaitable(
                client.get('/api/data'),
                lambda e: NetworkError(str(e)),
            )
            ```
        """
        catch = exceptions if exceptions is not None else get_config().catch

        async def _wrapped() -> Result[T, E]:
            try:
                value = await awaitable
            except catch as e:
                _log_captured('ResultAsync.from_awaitable', e)
                return Err(error_fn(e) if error_fn is not None else e)  # type: ignore[arg-type]
            return Ok(value)

        return cls(_wrapped())

    @classmethod
    def try_(
        cls,
        fn: Callable[[], MaybeAwaitable[T]],
        error_fn: Callable[[BaseException], E] | None = None,
        *,
        exceptions: tuple[type[BaseException], ...] | None = None,
    ) -> ResultAsync[T, E]:
        """Run a sync or async zero-argument function, capturing raises as Err.

        Example:
            ```python
            parsed = ResultAsync.try_(lambda: json.loads(text))
            fetched = ResultAsync.try_(lambda: client.get('/api'))
            ```
        """
        catch = exceptions if exceptions is not None else get_config().catch

        async def _tried() -> Result[T, E]:
            try:
                value = await settle(fn())
            except catch as e:
                _log_captured('ResultAsync.try_', e)
                return Err(error_fn(e) if error_fn is not None else e)  # type: ignore[arg-type]
            return Ok(value)

        return cls(_tried())

    @classmethod
    def all(cls, handles: Iterable[Awaitable[Result[Any, E]]]) -> ResultAsync[list[Any], E]:
        """Combine handles into one ResultAsync of the ordered values.

        Handles are awaited in input order and the first Err by position is
        returned without awaiting later handles. Every handle is wrapped and
        started when `all` is called, so later computations still run to
        completion; they are not cancelled.

        Example:
            ```python
            results = await ResultAsync.all([
                ResultAsync.from_awaitable(client.get('/a')),
                ResultAsync.from_awaitable(client.get('/b')),
            ])
            # Ok([resp_a, resp_b]) or the first Err
            ```
        """
        handle_list = [h if isinstance(h, cls) else cls(h) for h in handles]

        async def _all() -> Result[list[Any], E]:
            values: list[Any] = []
            for index, handle in enumerate(handle_list):
                result = await handle
                if isinstance(result, Err):
                    if debug_enabled(__name__):
                        logger.debug('all short-circuited', index=index, total=len(handle_list))
                    return result
                values.append(result.value)
            return Ok(values)

        return cls(_all())

    @classmethod
    def all_settled(
        cls, handles: Iterable[Awaitable[Result[Any, E]]]
    ) -> ResultAsync[list[Any], list[E]]:
        """Combine handles, collecting every error instead of stopping at one.

        Every handle is awaited in input order. If any failed, the result is
        Err with the list of all errors in input order; otherwise Ok with the
        list of values.
        """
        handle_list = [h if isinstance(h, cls) else cls(h) for h in handles]

        async def _all_settled() -> Result[list[Any], list[E]]:
            values: list[Any] = []
            errors: list[E] = []
            for handle in handle_list:
                result = await handle
                if isinstance(result, Err):
                    errors.append(result.error)
                else:
                    values.append(result.value)
            if debug_enabled(__name__):
                logger.debug('all_settled finished', ok=len(values), err=len(errors))
            if errors:
                return Err(errors)
            return Ok(values)

        return cls(_all_settled())

    # -----------------------------------------------------------------
    # Conversion
    # -----------------------------------------------------------------

    def to_future(self) -> asyncio.Future[Result[T, E]]:
        """Return an asyncio.Future resolving to the same Result.

        Raises:
            RuntimeError: If called without a running event loop.
        """
        return self._pending.future()

    def ok(self) -> OptionAsync[T]:
        """Convert to OptionAsync, discarding the error."""
        from klaw_outcome.async_.option import OptionAsync

        async def _ok() -> Any:
            return (await self._pending).ok()

        return OptionAsync(_ok())

    def err(self) -> OptionAsync[E]:
        """Convert to OptionAsync, discarding the value."""
        from klaw_outcome.async_.option import OptionAsync

        async def _err() -> Any:
            return (await self._pending).err()

        return OptionAsync(_err())

    # -----------------------------------------------------------------
    # Querying
    # -----------------------------------------------------------------

    async def is_ok(self) -> bool:
        return (await self._pending).is_ok()

    async def is_err(self) -> bool:
        return (await self._pending).is_err()

    async def is_ok_and(self, pred: Callable[[T], MaybeAwaitable[bool]]) -> bool:
        """Return True if Ok and the (sync or async) predicate holds."""
        result = await self._pending
        if isinstance(result, Ok):
            return bool(await settle(pred(result.value)))
        return False

    async def is_err_and(self, pred: Callable[[E], MaybeAwaitable[bool]]) -> bool:
        """Return True if Err and the (sync or async) predicate holds."""
        result = await self._pending
        if isinstance(result, Err):
            return bool(await settle(pred(result.error)))
        return False

    # -----------------------------------------------------------------
    # Transformations
    # -----------------------------------------------------------------

    def map[U](self, f: Callable[[T], MaybeAwaitable[U]]) -> ResultAsync[U, E]:
        """Apply a sync or async function to the Ok value.

        If Err, f is never called and the Err passes through.

        Example:
            ```python
            result = await ResultAsync.from_ok(5).map(lambda x: x * 2).map(double_async)
            assert result == Ok(20)
            ```
        """

        async def _mapped() -> Result[U, E]:
            result = await self._pending
            if isinstance(result, Ok):
                return Ok(await settle(f(result.value)))
            return result

        return ResultAsync(_mapped())

    def map_err[F](self, f: Callable[[E], MaybeAwaitable[F]]) -> ResultAsync[T, F]:
        """Apply a sync or async function to the Err value."""

        async def _mapped() -> Result[T, F]:
            result = await self._pending
            if isinstance(result, Err):
                return Err(await settle(f(result.error)))
            return result  # type: ignore[return-value]

        return ResultAsync(_mapped())

    async def map_or[U](self, default: U, f: Callable[[T], MaybeAwaitable[U]]) -> U:
        """Apply f to the Ok value, or return default."""
        result = await self._pending
        if isinstance(result, Ok):
            return await settle(f(result.value))
        return default

    async def map_or_else[U](
        self,
        default: Callable[[E], MaybeAwaitable[U]],
        f: Callable[[T], MaybeAwaitable[U]],
    ) -> U:
        """Apply f to the Ok value, or compute a default from the error."""
        result = await self._pending
        if isinstance(result, Ok):
            return await settle(f(result.value))
        return await settle(default(result.error))

    def inspect(self, f: Callable[[T], Any]) -> ResultAsync[T, E]:
        """Call f with the Ok value for its side effect.

        f runs as soon as the value resolves, before anything chained after
        this call sees it. The Result passes through unchanged.
        """

        async def _inspected() -> Result[T, E]:
            result = await self._pending
            if isinstance(result, Ok):
                f(result.value)
            return result

        return ResultAsync(_inspected())

    def inspect_err(self, f: Callable[[E], Any]) -> ResultAsync[T, E]:
        """Call f with the Err value for its side effect."""

        async def _inspected() -> Result[T, E]:
            result = await self._pending
            if isinstance(result, Err):
                f(result.error)
            return result

        return ResultAsync(_inspected())

    # -----------------------------------------------------------------
    # Chaining
    # -----------------------------------------------------------------

    def and_then[U](
        self, f: Callable[[T], MaybeAwaitable[Result[U, E]]]
    ) -> ResultAsync[U, E]:
        """Chain a function returning a Result, an awaitable Result or a ResultAsync.

        If Err, f is never called and the Err passes through unchanged.

        Example:
            ```python
            result = (
                ResultAsync.from_ok(user_id)
                .and_then(fetch_user)       # returns ResultAsync
                .and_then(validate_user)    # returns Result
            )
            ```
        """

        async def _chained() -> Result[U, E]:
            result = await self._pending
            if isinstance(result, Ok):
                return await settle(f(result.value))
            return result

        return ResultAsync(_chained())

    def or_else[F](
        self, f: Callable[[E], MaybeAwaitable[Result[T, F]]]
    ) -> ResultAsync[T, F]:
        """Recover from an Err with a function returning a (possibly async) Result.

        Example:
            ```python
            result = fetch_primary().or_else(lambda e: fetch_backup())
            ```
        """

        async def _recovered() -> Result[T, F]:
            result = await self._pending
            if isinstance(result, Err):
                return await settle(f(result.error))
            return result  # type: ignore[return-value]

        return ResultAsync(_recovered())

    def and_[U](self, other: Awaitable[Result[U, E]]) -> ResultAsync[U, E]:
        """Resolve to other if this is Ok, otherwise keep this Err."""

        async def _and() -> Result[U, E]:
            result = await self._pending
            if isinstance(result, Ok):
                return await other
            return result

        return ResultAsync(_and())

    def or_[F](self, other: Awaitable[Result[T, F]]) -> ResultAsync[T, F]:
        """Keep this Ok, otherwise resolve to other."""

        async def _or() -> Result[T, F]:
            result = await self._pending
            if isinstance(result, Err):
                return await other
            return result

        return ResultAsync(_or())

    def flatten(self) -> ResultAsync[Any, E]:
        """Remove one level of nesting from ResultAsync[Result[U, E], E].

        An Ok payload that is a ResultAsync is awaited; a payload that is
        not a Result is left as is.
        """

        async def _flattened() -> Result[Any, E]:
            result = await self._pending
            if isinstance(result, Ok) and isinstance(result.value, ResultAsync):
                return await result.value
            return result.flatten()

        return ResultAsync(_flattened())

    def zip[U](self, other: Awaitable[Result[U, E]]) -> ResultAsync[tuple[T, U], E]:
        """Combine two results into a tuple.

        Awaits self first; other is only awaited when self is Ok. The first
        Err by position wins.
        """

        async def _zipped() -> Result[tuple[T, U], E]:
            result = await self._pending
            if isinstance(result, Err):
                return result
            other_result = await other
            if isinstance(other_result, Err):
                return other_result
            return Ok((result.value, other_result.value))

        return ResultAsync(_zipped())

    def zip_with[U, R](
        self,
        other: Awaitable[Result[U, E]],
        f: Callable[[T, U], MaybeAwaitable[R]],
    ) -> ResultAsync[R, E]:
        """Combine two Ok values with a sync or async function."""

        async def _zipped() -> Result[R, E]:
            result = await self._pending
            if isinstance(result, Err):
                return result
            other_result = await other
            if isinstance(other_result, Err):
                return other_result
            return Ok(await settle(f(result.value, other_result.value)))

        return ResultAsync(_zipped())

    # -----------------------------------------------------------------
    # Unwrapping
    # -----------------------------------------------------------------

    async def expect(self, msg: str) -> T:
        """Return the Ok value, or raise ResultUnwrapError embedding msg."""
        return (await self._pending).expect(msg)

    async def unwrap(self) -> T:
        """Return the Ok value, or raise ResultUnwrapError."""
        return (await self._pending).unwrap()

    async def expect_err(self, msg: str) -> E:
        """Return the Err value, or raise ResultUnwrapError embedding msg."""
        return (await self._pending).expect_err(msg)

    async def unwrap_err(self) -> E:
        """Return the Err value, or raise ResultUnwrapError."""
        return (await self._pending).unwrap_err()

    async def unwrap_or(self, default: T) -> T:
        return (await self._pending).unwrap_or(default)

    async def unwrap_or_else(self, f: Callable[[E], MaybeAwaitable[T]]) -> T:
        """Return the Ok value, or compute one from the error (sync or async)."""
        result = await self._pending
        if isinstance(result, Ok):
            return result.value
        return await settle(f(result.error))

    async def match[R](
        self,
        *,
        ok: Callable[[T], MaybeAwaitable[R]],
        err: Callable[[E], MaybeAwaitable[R]],
    ) -> R:
        """Await once and dispatch to exactly one handler.

        Example:
            ```python
            message = await result.match(
                ok=lambda value: f'Success: {value}',
                err=lambda error: f'Failed: {error}',
            )
            ```
        """
        result = await self._pending
        if isinstance(result, Ok):
            return await settle(ok(result.value))
        return await settle(err(result.error))

    def __repr__(self) -> str:
        return f'ResultAsync({self._pending!r})'


def _log_captured(constructor: str, exc: BaseException) -> None:
    if debug_enabled(__name__):
        logger.debug('exception captured', constructor=constructor, exc_type=type(exc).__name__)

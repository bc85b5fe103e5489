"""OptionAsync: an awaitable handle on a pending Option."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Generator, Iterable
from typing import TYPE_CHECKING, Any

from klaw_outcome._config import get_config
from klaw_outcome._internal.pending import MaybeAwaitable, Pending, settle
from klaw_outcome._logging import debug_enabled, get_logger
from klaw_outcome.types.option import Nothing, NothingType, Option, Some

if TYPE_CHECKING:
    from klaw_outcome.async_.result import ResultAsync

__all__ = ['OptionAsync']

logger = get_logger(__name__)


class OptionAsync[T]:
    """Async-aware Option wrapper for composing async Option operations.

    Like ResultAsync, the wrapped computation starts eagerly and resolves once;
    chaining methods never suspend and terminal methods await exactly once.

    Example:
        ```python
        async def find_user(id: int) -> Option[User]:
            ...

        email = await (
            OptionAsync(find_user(1))
            .filter(lambda user: user.active)
            .map(lambda user: user.email)
            .unwrap_or('nobody@example.com')
        )
        ```
    """

    __slots__ = ('_pending',)

    def __init__(self, awaitable: Awaitable[Option[T]]) -> None:
        self._pending: Pending[Option[T]] = (
            awaitable if isinstance(awaitable, Pending) else Pending(awaitable)
        )

    def __await__(self) -> Generator[Any, Any, Option[T]]:
        return self._pending.__await__()

    # -----------------------------------------------------------------
    # Constructors
    # -----------------------------------------------------------------

    @classmethod
    def from_option(cls, option: MaybeAwaitable[Option[T]]) -> OptionAsync[T]:
        """Create an OptionAsync from an Option or an awaitable of one."""
        if isinstance(option, Some | NothingType):
            return cls(Pending.resolved(option))
        return cls(option)

    @classmethod
    def from_some(cls, value: T) -> OptionAsync[T]:
        return cls(Pending.resolved(Some(value)))

    @classmethod
    def from_nothing(cls) -> OptionAsync[Any]:
        return cls(Pending.resolved(Nothing))

    @classmethod
    def from_nullable(cls, value: MaybeAwaitable[T | None]) -> OptionAsync[T]:
        """Wrap a value (or awaitable value), mapping Python's None to Nothing."""

        async def _wrapped() -> Option[T]:
            resolved = await settle(value)
            if resolved is None:
                return Nothing
            return Some(resolved)

        return cls(_wrapped())

    @classmethod
    def from_awaitable(
        cls,
        awaitable: Awaitable[T],
        *,
        exceptions: tuple[type[BaseException], ...] | None = None,
    ) -> OptionAsync[T]:
        """Wrap an awaitable; its value becomes Some and a raise becomes Nothing.

        Args:
            awaitable: The awaitable to wrap.
            exceptions: Exception types turned into Nothing. Defaults to the
                configured ``catch`` tuple.
        """
        catch = exceptions if exceptions is not None else get_config().catch

        async def _wrapped() -> Option[T]:
            try:
                value = await awaitable
            except catch as e:
                _log_captured('OptionAsync.from_awaitable', e)
                return Nothing
            return Some(value)

        return cls(_wrapped())

    @classmethod
    def try_(
        cls,
        fn: Callable[[], MaybeAwaitable[T]],
        *,
        exceptions: tuple[type[BaseException], ...] | None = None,
    ) -> OptionAsync[T]:
        """Run a sync or async zero-argument function; a raise becomes Nothing."""
        catch = exceptions if exceptions is not None else get_config().catch

        async def _tried() -> Option[T]:
            try:
                value = await settle(fn())
            except catch as e:
                _log_captured('OptionAsync.try_', e)
                return Nothing
            return Some(value)

        return cls(_tried())

    @classmethod
    def all(cls, handles: Iterable[Awaitable[Option[Any]]]) -> OptionAsync[list[Any]]:
        """Combine handles into Some of the ordered values.

        Handles are awaited in input order; the first Nothing by position is
        returned without awaiting the rest. Every handle is wrapped and started
        when `all` is called, so later computations still run.
        """
        handle_list = [h if isinstance(h, cls) else cls(h) for h in handles]

        async def _all() -> Option[list[Any]]:
            values: list[Any] = []
            for index, handle in enumerate(handle_list):
                option = await handle
                if isinstance(option, NothingType):
                    if debug_enabled(__name__):
                        logger.debug('all short-circuited', index=index, total=len(handle_list))
                    return Nothing
                values.append(option.value)
            return Some(values)

        return cls(_all())

    @classmethod
    def all_settled(cls, handles: Iterable[Awaitable[Option[Any]]]) -> OptionAsync[list[Any]]:
        """Await every handle; Nothing if any was absent, else Some of the values.

        Unlike ``all`` no handle is skipped, so every computation is observed.
        """
        handle_list = [h if isinstance(h, cls) else cls(h) for h in handles]

        async def _all_settled() -> Option[list[Any]]:
            values: list[Any] = []
            missing = 0
            for handle in handle_list:
                option = await handle
                if isinstance(option, Some):
                    values.append(option.value)
                else:
                    missing += 1
            if debug_enabled(__name__):
                logger.debug('all_settled finished', some=len(values), nothing=missing)
            if missing:
                return Nothing
            return Some(values)

        return cls(_all_settled())

    # -----------------------------------------------------------------
    # Conversion
    # -----------------------------------------------------------------

    def to_future(self) -> asyncio.Future[Option[T]]:
        """Return an asyncio.Future resolving to the same Option."""
        return self._pending.future()

    def ok_or[E](self, err: E) -> ResultAsync[T, E]:
        """Convert to ResultAsync, using err for Nothing."""
        from klaw_outcome.async_.result import ResultAsync

        async def _converted() -> Any:
            return (await self._pending).ok_or(err)

        return ResultAsync(_converted())

    def ok_or_else[E](self, f: Callable[[], MaybeAwaitable[E]]) -> ResultAsync[T, E]:
        """Convert to ResultAsync, computing the error (sync or async) for Nothing."""
        from klaw_outcome.async_.result import ResultAsync
        from klaw_outcome.types.result import Err, Ok

        async def _converted() -> Any:
            option = await self._pending
            if isinstance(option, Some):
                return Ok(option.value)
            return Err(await settle(f()))

        return ResultAsync(_converted())

    # -----------------------------------------------------------------
    # Querying
    # -----------------------------------------------------------------

    async def is_some(self) -> bool:
        return (await self._pending).is_some()

    async def is_none(self) -> bool:
        return (await self._pending).is_none()

    async def is_some_and(self, pred: Callable[[T], MaybeAwaitable[bool]]) -> bool:
        option = await self._pending
        if isinstance(option, Some):
            return bool(await settle(pred(option.value)))
        return False

    async def is_none_or(self, pred: Callable[[T], MaybeAwaitable[bool]]) -> bool:
        option = await self._pending
        if isinstance(option, Some):
            return bool(await settle(pred(option.value)))
        return True

    # -----------------------------------------------------------------
    # Transformations
    # -----------------------------------------------------------------

    def map[U](self, f: Callable[[T], MaybeAwaitable[U]]) -> OptionAsync[U]:
        """Apply a sync or async function to the Some value."""

        async def _mapped() -> Option[U]:
            option = await self._pending
            if isinstance(option, Some):
                return Some(await settle(f(option.value)))
            return Nothing

        return OptionAsync(_mapped())

    async def map_or[U](self, default: U, f: Callable[[T], MaybeAwaitable[U]]) -> U:
        option = await self._pending
        if isinstance(option, Some):
            return await settle(f(option.value))
        return default

    async def map_or_else[U](
        self,
        default: Callable[[], MaybeAwaitable[U]],
        f: Callable[[T], MaybeAwaitable[U]],
    ) -> U:
        option = await self._pending
        if isinstance(option, Some):
            return await settle(f(option.value))
        return await settle(default())

    def filter(self, predicate: Callable[[T], MaybeAwaitable[bool]]) -> OptionAsync[T]:
        """Keep the value only if the (sync or async) predicate holds.

        Example:
            ```python
            adult = OptionAsync.from_some(user).filter(is_adult_async)
            ```
        """

        async def _filtered() -> Option[T]:
            option = await self._pending
            if isinstance(option, Some) and await settle(predicate(option.value)):
                return option
            return Nothing

        return OptionAsync(_filtered())

    def inspect(self, f: Callable[[T], Any]) -> OptionAsync[T]:
        """Call f with the Some value for its side effect; the Option passes through."""

        async def _inspected() -> Option[T]:
            option = await self._pending
            if isinstance(option, Some):
                f(option.value)
            return option

        return OptionAsync(_inspected())

    # -----------------------------------------------------------------
    # Chaining
    # -----------------------------------------------------------------

    def and_then[U](self, f: Callable[[T], MaybeAwaitable[Option[U]]]) -> OptionAsync[U]:
        """Chain a function returning an Option, an awaitable Option or an OptionAsync."""

        async def _chained() -> Option[U]:
            option = await self._pending
            if isinstance(option, Some):
                return await settle(f(option.value))
            return Nothing

        return OptionAsync(_chained())

    def or_else(self, f: Callable[[], MaybeAwaitable[Option[T]]]) -> OptionAsync[T]:
        """Recover from Nothing with a function returning a (possibly async) Option."""

        async def _recovered() -> Option[T]:
            option = await self._pending
            if isinstance(option, NothingType):
                return await settle(f())
            return option

        return OptionAsync(_recovered())

    def and_[U](self, other: Awaitable[Option[U]]) -> OptionAsync[U]:
        """Resolve to other if this is Some, otherwise Nothing."""

        async def _and() -> Option[U]:
            option = await self._pending
            if isinstance(option, Some):
                return await other
            return Nothing

        return OptionAsync(_and())

    def or_(self, other: Awaitable[Option[T]]) -> OptionAsync[T]:
        """Keep this Some, otherwise resolve to other."""

        async def _or() -> Option[T]:
            option = await self._pending
            if isinstance(option, NothingType):
                return await other
            return option

        return OptionAsync(_or())

    def xor(self, other: Awaitable[Option[T]]) -> OptionAsync[T]:
        """Resolve to whichever side is Some, or Nothing if both or neither are."""

        async def _xor() -> Option[T]:
            option = await self._pending
            return option.xor(await other)

        return OptionAsync(_xor())

    def flatten(self) -> OptionAsync[Any]:
        """Remove one level of nesting; an OptionAsync payload is awaited."""

        async def _flattened() -> Option[Any]:
            option = await self._pending
            if isinstance(option, Some) and isinstance(option.value, OptionAsync):
                return await option.value
            return option.flatten()

        return OptionAsync(_flattened())

    def zip[U](self, other: Awaitable[Option[U]]) -> OptionAsync[tuple[T, U]]:
        """Pair two Some values; other is only awaited when self is Some."""

        async def _zipped() -> Option[tuple[T, U]]:
            option = await self._pending
            if isinstance(option, NothingType):
                return Nothing
            return option.zip(await other)

        return OptionAsync(_zipped())

    def zip_with[U, R](
        self,
        other: Awaitable[Option[U]],
        f: Callable[[T, U], MaybeAwaitable[R]],
    ) -> OptionAsync[R]:
        """Combine two Some values with a sync or async function."""

        async def _zipped() -> Option[R]:
            option = await self._pending
            if isinstance(option, NothingType):
                return Nothing
            other_option = await other
            if isinstance(other_option, NothingType):
                return Nothing
            return Some(await settle(f(option.value, other_option.value)))

        return OptionAsync(_zipped())

    # -----------------------------------------------------------------
    # Unwrapping
    # -----------------------------------------------------------------

    async def expect(self, msg: str) -> T:
        """Return the Some value, or raise OptionUnwrapError with msg verbatim."""
        return (await self._pending).expect(msg)

    async def unwrap(self) -> T:
        """Return the Some value, or raise OptionUnwrapError."""
        return (await self._pending).unwrap()

    async def unwrap_or(self, default: T) -> T:
        return (await self._pending).unwrap_or(default)

    async def unwrap_or_else(self, f: Callable[[], MaybeAwaitable[T]]) -> T:
        option = await self._pending
        if isinstance(option, Some):
            return option.value
        return await settle(f())

    async def unwrap_or_default(self) -> T | None:
        option = await self._pending
        return option.unwrap_or_default()

    async def match[R](
        self,
        *,
        some: Callable[[T], MaybeAwaitable[R]],
        nothing: Callable[[], MaybeAwaitable[R]],
    ) -> R:
        """Await once and dispatch to exactly one handler (sync or async)."""
        option = await self._pending
        if isinstance(option, Some):
            return await settle(some(option.value))
        return await settle(nothing())

    def __repr__(self) -> str:
        return f'OptionAsync({self._pending!r})'


def _log_captured(constructor: str, exc: BaseException) -> None:
    if debug_enabled(__name__):
        logger.debug('exception captured', constructor=constructor, exc_type=type(exc).__name__)

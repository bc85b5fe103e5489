"""Bridge between the synchronous types and their async wrappers."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from klaw_outcome._internal.pending import settle
from klaw_outcome.async_.option import OptionAsync
from klaw_outcome.async_.result import ResultAsync
from klaw_outcome.types.option import NothingType, Option, Some
from klaw_outcome.types.result import Err, Ok, Result

__all__ = [
    'all_async',
    'from_awaitable',
    'lift_async',
    'to_async',
    'try_async',
]

all_async = ResultAsync.all
from_awaitable = ResultAsync.from_awaitable


@overload
def to_async[T](value: Some[T]) -> OptionAsync[T]: ...
@overload
def to_async(value: NothingType) -> OptionAsync[Any]: ...
@overload
def to_async[T](value: Ok[T]) -> ResultAsync[T, Any]: ...
@overload
def to_async[E](value: Err[E]) -> ResultAsync[Any, E]: ...


def to_async(value: Option[Any] | Result[Any, Any]) -> OptionAsync[Any] | ResultAsync[Any, Any]:
    """Lift an Option or Result into an already-resolved async wrapper.

    Raises:
        TypeError: If value is neither an Option nor a Result.

    Examples:
        >>> to_async(Ok(5))
        ResultAsync(Pending(resolved=Ok(value=5)))
    """
    match value:
        case Some() | NothingType():
            return OptionAsync.from_option(value)
        case Ok() | Err():
            return ResultAsync.from_result(value)
    msg = f'to_async() expects an Option or a Result, got {type(value).__name__}'
    raise TypeError(msg)


def lift_async(func: Callable[..., Any]) -> Any:
    """Decorator turning a Result-returning function into a ResultAsync-returning one.

    The decorated function may be sync or async; its return value may be a
    Result or an awaitable of one.

    Example:
        ```python
        @lift_async
        async def load(path: str) -> Result[bytes, OSError]:
            ...

        data = await load('config.toml').map(parse)
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> ResultAsync[Any, Any]:
        async def _lifted() -> Result[Any, Any]:
            return await settle(wrapped(*args, **kwargs))

        return ResultAsync(_lifted())

    return wrapper(func)


def try_async(
    func: Callable[..., Awaitable[Any]] | None = None,
    *,
    error_fn: Callable[[BaseException], Any] | None = None,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Decorator turning a raising (sync or async) function into a ResultAsync one.

    Can be used with or without arguments:
        @try_async
        async def fetch(url): ...

        @try_async(exceptions=(OSError,), error_fn=NetworkError.wrap)
        async def fetch(url): ...

    Args:
        func: The function to wrap (when used without parentheses).
        error_fn: Optional mapping applied to the caught exception.
        exceptions: Exception types to capture. Defaults to the configured
            ``catch`` tuple.
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> ResultAsync[Any, Any]:
        return ResultAsync.try_(lambda: wrapped(*args, **kwargs), error_fn, exceptions=exceptions)

    if func is not None:
        return wrapper(func)
    return wrapper

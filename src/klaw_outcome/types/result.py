"""Result type: Ok[T] | Err[E] for explicit error handling."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec
import wrapt

from klaw_outcome.errors import ResultUnwrapError

if TYPE_CHECKING:
    from klaw_outcome.async_.result import ResultAsync
    from klaw_outcome.types.option import NothingType, Option, Some

__all__ = ['Err', 'Ok', 'Result', 'collect', 'match_result', 'safe', 'try_catch']


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Ok represents the successful outcome of an operation. It wraps a value
    that can be extracted, transformed, or propagated through a chain of
    Result-returning operations. The error type is phantom: nothing of it
    exists at runtime.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap()
        42
        >>> ok.map(lambda x: x * 2)
        Ok(value=84)
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True if the result is Ok.

        This method provides type narrowing - after checking is_ok(),
        the type checker knows the result is Ok[T].
        """
        return True

    def is_err(self) -> TypeIs[Err[object]]:
        """Return False since this is Ok."""
        return False

    def is_ok_and(self, pred: Callable[[T], bool]) -> bool:
        """Return True if the value satisfies the predicate."""
        return pred(self.value)

    def is_err_and(self, _pred: Callable[[Any], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def ok(self) -> Some[T]:
        """Convert to Option, returning Some(value)."""
        from klaw_outcome.types.option import Some

        return Some(self.value)

    def err(self) -> NothingType:
        """Convert to Option, returning Nothing since this is Ok."""
        from klaw_outcome.types.option import Nothing

        return Nothing

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_or[U](self, _default: U, f: Callable[[T], U]) -> U:
        """Apply f to the value, ignoring the default."""
        return f(self.value)

    def map_or_else[U](self, _default: Callable[[Any], U], f: Callable[[T], U]) -> U:
        """Apply f to the value, ignoring the default factory."""
        return f(self.value)

    def map_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def inspect(self, f: Callable[[T], Any]) -> Ok[T]:
        """Call f with the value for its side effect and return self."""
        f(self.value)
        return self

    def inspect_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self without calling f."""
        return self

    def iter(self) -> Iterator[T]:
        """Iterate over the value (one item)."""
        yield self.value

    def expect(self, _msg: str) -> T:
        """Return the contained Ok value, ignoring the message."""
        return self.value

    def unwrap(self) -> T:
        """Return the contained Ok value.

        Since this is Ok, this always succeeds.
        """
        return self.value

    def expect_err(self, msg: str) -> NoReturn:
        """Raise with the custom message since this is Ok.

        Raises:
            ResultUnwrapError: Always, with the custom message.
        """
        raise ResultUnwrapError(f'{msg}: {self.value!r}', self.value)

    def unwrap_err(self) -> NoReturn:
        """Raise since Ok has no error to unwrap.

        Raises:
            ResultUnwrapError: Always.
        """
        raise ResultUnwrapError(f'Called unwrap_err on Ok: {self.value}', self.value)

    def and_[U, E](self, other: Result[U, E]) -> Result[U, E]:
        """Return other if self is Ok, else return self (Err).

        Since this is Ok, returns other.
        """
        return other

    def and_then[U, E](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Apply a function that returns a Result to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Result[U, E].

        Returns:
            The Result returned by f.
        """
        return f(self.value)

    def or_(self, _other: Result[T, Any]) -> Ok[T]:
        """Return self if Ok, else return other.

        Since this is Ok, returns self.
        """
        return self

    def or_else(self, _f: Callable[[Any], Result[T, Any]]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def unwrap_or(self, _default: T) -> T:
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, _f: Callable[[Any], T]) -> T:
        """Return the contained Ok value, ignoring the fallback function."""
        return self.value

    def flatten(self) -> Result[Any, Any]:
        """Remove one level of nesting.

        Ok(Ok(x)) becomes Ok(x) and Ok(Err(e)) becomes Err(e). A payload
        that is not a Result is left as is.
        """
        if isinstance(self.value, Ok | Err):
            return self.value
        return self

    def into_ok(self) -> T:
        """Return the value (the Ok-only counterpart of unwrap)."""
        return self.value

    def into_err(self) -> NoReturn:
        """Raise since Ok carries no error.

        Raises:
            ResultUnwrapError: Always.
        """
        raise ResultUnwrapError(f'Called into_err on Ok: {self.value}', self.value)

    def transmute(self) -> Ok[T]:
        """Narrow the phantom error type; returns self."""
        return self

    def transpose(self) -> Option[Result[Any, Any]]:
        """Turn Ok(Some(x)) into Some(Ok(x)) and Ok(Nothing) into Nothing.

        Raises:
            TypeError: If the payload is not an Option.
        """
        from klaw_outcome.types.option import NothingType, Some

        match self.value:
            case Some(value):
                return Some(Ok(value))
            case NothingType():
                return self.value
        msg = f'transpose() requires Ok(Option), got Ok({self.value!r})'
        raise TypeError(msg)

    def to_async(self) -> ResultAsync[T, Any]:
        """Lift into an already-resolved ResultAsync."""
        from klaw_outcome.async_.result import ResultAsync

        return ResultAsync.from_result(self)


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    Err represents the failure outcome of an operation. It wraps an error
    value that can be transformed, recovered from, or propagated. The error
    does not have to be an exception.

    Examples:
        >>> err = Err('something went wrong')
        >>> err.is_err()
        True
        >>> err.unwrap_or(0)
        0
    """

    error: E

    def is_ok(self) -> TypeIs[Ok[object]]:
        """Return False since this is Err."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True if the result is Err.

        This method provides type narrowing - after checking is_err(),
        the type checker knows the result is Err[E].
        """
        return True

    def is_ok_and(self, _pred: Callable[[Any], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def is_err_and(self, pred: Callable[[E], bool]) -> bool:
        """Return True if the error satisfies the predicate."""
        return pred(self.error)

    def ok(self) -> NothingType:
        """Convert to Option, returning Nothing since this is Err."""
        from klaw_outcome.types.option import Nothing

        return Nothing

    def err(self) -> Some[E]:
        """Convert to Option, returning Some(error)."""
        from klaw_outcome.types.option import Some

        return Some(self.error)

    def map(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def map_or[U](self, default: U, _f: Callable[[Any], U]) -> U:
        """Return the default since there's no value."""
        return default

    def map_or_else[U](self, default: Callable[[E], U], _f: Callable[[Any], U]) -> U:
        """Compute the default from the error."""
        return default(self.error)

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.error))

    def inspect(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self without calling f."""
        return self

    def inspect_err(self, f: Callable[[E], Any]) -> Err[E]:
        """Call f with the error for its side effect and return self."""
        f(self.error)
        return self

    def iter(self) -> Iterator[Any]:
        """Iterate over nothing."""
        return iter(())

    def expect(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message.

        Args:
            msg: Custom error message, embedded verbatim.

        Raises:
            ResultUnwrapError: Always, chained to the error when it is an exception.
        """
        raise ResultUnwrapError(f'{msg}: {self.error!r}', self.error) from self._cause()

    def unwrap(self) -> NoReturn:
        """Raise an exception since this is Err.

        Raises:
            ResultUnwrapError: Always, since Err has no Ok value to unwrap.
        """
        raise ResultUnwrapError(f'Called unwrap on Err: {self.error}', self.error) from self._cause()

    def expect_err(self, _msg: str) -> E:
        """Return the contained error, ignoring the message."""
        return self.error

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.error

    def and_(self, _other: Result[Any, E]) -> Err[E]:
        """Return self since this is Err."""
        return self

    def and_then(self, _f: Callable[[Any], Result[Any, E]]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def or_[T, F](self, other: Result[T, F]) -> Result[T, F]:
        """Return other since this is Err."""
        return other

    def or_else[T, F](self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Apply a recovery function to the error.

        Args:
            f: Function that takes the error and returns a new Result.

        Returns:
            The Result returned by f.
        """
        return f(self.error)

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[E], T]) -> T:
        """Compute a default value from the error."""
        return f(self.error)

    def flatten(self) -> Err[E]:
        """Return self since this is Err (nothing to flatten)."""
        return self

    def into_ok(self) -> NoReturn:
        """Raise since Err carries no value.

        Raises:
            ResultUnwrapError: Always.
        """
        raise ResultUnwrapError(f'Called into_ok on Err: {self.error}', self.error) from self._cause()

    def into_err(self) -> E:
        """Return the error (the Err-only counterpart of unwrap_err)."""
        return self.error

    def transmute(self) -> Err[E]:
        """Narrow the phantom value type; returns self."""
        return self

    def transpose(self) -> Some[Err[E]]:
        """Err(e) transposes to Some(Err(e))."""
        from klaw_outcome.types.option import Some

        return Some(self)

    def to_async(self) -> ResultAsync[Any, E]:
        """Lift into an already-resolved ResultAsync."""
        from klaw_outcome.async_.result import ResultAsync

        return ResultAsync.from_result(self)

    def _cause(self) -> BaseException | None:
        return self.error if isinstance(self.error, BaseException) else None


type Result[T, E = Exception] = Ok[T] | Err[E]


def collect[T, E](results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Collect an iterable of Results into a Result of list.

    Short-circuits on the first Err encountered.

    Args:
        results: An iterable of Result values.

    Returns:
        Ok(list[T]) if all results are Ok, otherwise the first Err.

    Examples:
        >>> collect([Ok(1), Ok(2), Ok(3)])
        Ok(value=[1, 2, 3])
        >>> collect([Ok(1), Err('fail'), Ok(3)])
        Err(error='fail')
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)


def match_result[T, E, R](
    result: Result[T, E],
    *,
    ok: Callable[[T], R],
    err: Callable[[E], R],
) -> R:
    """Dispatch to exactly one handler based on the variant."""
    if isinstance(result, Ok):
        return ok(result.value)
    return err(result.error)


def try_catch[T](
    fn: Callable[[], T],
    error_fn: Callable[[BaseException], Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Result[T, Any]:
    """Call fn now and capture a raised exception as Err.

    Args:
        fn: Zero-argument callable.
        error_fn: Optional mapping applied to the caught exception.
        exceptions: Exception types to capture. Defaults to the configured
            ``catch`` tuple; anything else propagates.

    Example:
        ```python
        try_catch(lambda: int('42'))   # Ok(value=42)
        try_catch(lambda: int('x'))    # Err(error=ValueError(...))
        ```
    """
    from klaw_outcome._config import get_config

    catch = exceptions if exceptions is not None else get_config().catch
    try:
        return Ok(fn())
    except catch as e:
        return Err(error_fn(e) if error_fn is not None else e)


def safe(
    func: Callable[..., Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Decorator that catches exceptions and returns Err.

    Wraps a function so that it returns Ok(value) on success and
    Err(exception) if an exception is raised.

    Can be used with or without arguments:
        @safe
        def risky(): ...

        @safe(exceptions=(ValueError, TypeError))
        def specific(): ...

    Args:
        func: The function to wrap (when used without parentheses).
        exceptions: Tuple of exception types to catch. Defaults to the
            configured ``catch`` tuple.

    Returns:
        A wrapped function that returns Result[T, E] instead of T.
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[Any, Any]:
        return try_catch(lambda: wrapped(*args, **kwargs), exceptions=exceptions)

    if func is not None:
        return wrapper(func)
    return wrapper

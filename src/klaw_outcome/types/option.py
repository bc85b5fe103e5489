"""Option type: Some[T] | Nothing for optional values."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from klaw_outcome.errors import OptionUnwrapError

if TYPE_CHECKING:
    from klaw_outcome.async_.option import OptionAsync
    from klaw_outcome.types.result import Err, Ok, Result

__all__ = ['Nothing', 'NothingType', 'Option', 'Some', 'from_nullable', 'match_option']


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Option containing a value of type T.

    Some represents the presence of a value. It wraps a value that can be
    extracted, transformed, or propagated through a chain of Option-returning
    operations.

    Examples:
        >>> some = Some(42)
        >>> some.unwrap()
        42
        >>> some.map(lambda x: x * 2)
        Some(value=84)
        >>> some.filter(lambda x: x > 100)
        NothingType()
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True if the option is Some.

        This method provides type narrowing - after checking is_some(),
        the type checker knows the option is Some[T].
        """
        return True

    def is_some_and(self, pred: Callable[[T], bool]) -> bool:
        """Return True if the value satisfies the predicate."""
        return pred(self.value)

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def is_none_or(self, pred: Callable[[T], bool]) -> bool:
        """Return the predicate's verdict on the value."""
        return pred(self.value)

    def unwrap(self) -> T:
        """Return the contained Some value.

        Since this is Some, this always succeeds.
        """
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the fallback function."""
        return self.value

    def unwrap_or_default(self) -> T:
        """Return the contained Some value."""
        return self.value

    def expect(self, _msg: str) -> T:
        """Return the contained Some value, ignoring the message."""
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some containing the result of applying f to the value.
        """
        return Some(f(self.value))

    def map_or[U](self, _default: U, f: Callable[[T], U]) -> U:
        """Apply f to the value, ignoring the default."""
        return f(self.value)

    def map_or_else[U](self, _default: Callable[[], U], f: Callable[[T], U]) -> U:
        """Apply f to the value, ignoring the default factory."""
        return f(self.value)

    def inspect(self, f: Callable[[T], Any]) -> Some[T]:
        """Call f with the value for its side effect and return self."""
        f(self.value)
        return self

    def and_[U](self, other: Option[U]) -> Option[U]:
        """Return other if self is Some, else return Nothing.

        Since this is Some, returns other.
        """
        return other

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Apply a function that returns an Option to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Option[U].

        Returns:
            The Option returned by f.
        """
        return f(self.value)

    def or_(self, _other: Option[T]) -> Some[T]:
        """Return self if Some, else return other.

        Since this is Some, returns self.
        """
        return self

    def or_else(self, _f: Callable[[], Option[T]]) -> Some[T]:
        """Return self unchanged since this is Some."""
        return self

    def xor(self, other: Option[T]) -> Option[T]:
        """Return self if other is Nothing, else Nothing."""
        if isinstance(other, Some):
            return Nothing
        return self

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Return Some if the predicate is satisfied, else Nothing.

        Args:
            predicate: Function that returns True to keep the value.

        Returns:
            Some(value) if predicate(value) is True, else Nothing.
        """
        if predicate(self.value):
            return self
        return Nothing

    def zip[U](self, other: Option[U]) -> Option[tuple[T, U]]:
        """Combine two Some values into a tuple.

        If both are Some, returns Some((self.value, other.value)).
        If other is Nothing, returns Nothing.
        """
        if isinstance(other, Some):
            return Some((self.value, other.value))
        return Nothing

    def zip_with[U, R](self, other: Option[U], f: Callable[[T, U], R]) -> Option[R]:
        """Combine two Some values with f; Nothing if other is Nothing."""
        if isinstance(other, Some):
            return Some(f(self.value, other.value))
        return Nothing

    def unzip(self) -> tuple[Option[Any], Option[Any]]:
        """Split Some((a, b)) into (Some(a), Some(b))."""
        first, second = self.value  # type: ignore[misc]
        return Some(first), Some(second)

    def flatten(self) -> Option[Any]:
        """Remove one level of nesting.

        Some(Some(x)) becomes Some(x) and Some(Nothing) becomes Nothing. A
        payload that is not an Option is left as is.
        """
        if isinstance(self.value, Some | NothingType):
            return self.value
        return self

    def ok_or[E](self, _err: E) -> Ok[T]:
        """Convert to Result, returning Ok(value).

        Args:
            _err: Ignored error value.

        Returns:
            Ok containing the value.
        """
        from klaw_outcome.types.result import Ok

        return Ok(self.value)

    def ok_or_else[E](self, _f: Callable[[], E]) -> Ok[T]:
        """Convert to Result, returning Ok(value).

        Args:
            _f: Ignored error factory function.

        Returns:
            Ok containing the value.
        """
        from klaw_outcome.types.result import Ok

        return Ok(self.value)

    def transpose(self) -> Result[Option[Any], Any]:
        """Turn Some(Ok(x)) into Ok(Some(x)) and Some(Err(e)) into Err(e).

        Raises:
            TypeError: If the payload is not a Result.
        """
        from klaw_outcome.types.result import Err, Ok

        match self.value:
            case Ok(value):
                return Ok(Some(value))
            case Err():
                return self.value
        msg = f'transpose() requires Some(Result), got Some({self.value!r})'
        raise TypeError(msg)

    def to_async(self) -> OptionAsync[T]:
        """Lift into an already-resolved OptionAsync."""
        from klaw_outcome.async_.option import OptionAsync

        return OptionAsync.from_option(self)


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant of Option representing absence of a value.

    Nothing represents the absence of a value. Operations on Nothing
    typically return Nothing or a default value.

    This is a singleton - use the `Nothing` constant instead of
    instantiating directly.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.unwrap_or(0)
        0
    """

    def is_some(self) -> TypeIs[Some[object]]:
        """Return False since this is Nothing."""
        return False

    def is_some_and(self, _pred: Callable[[Any], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True if the option is Nothing.

        This method provides type narrowing - after checking is_none(),
        the type checker knows the option is Nothing.
        """
        return True

    def is_none_or(self, _pred: Callable[[Any], bool]) -> bool:
        """Return True without calling the predicate."""
        return True

    def unwrap(self) -> NoReturn:
        """Raise an exception since this is Nothing.

        Raises:
            OptionUnwrapError: Always, since Nothing has no value to unwrap.
        """
        msg = 'Called unwrap on Nothing'
        raise OptionUnwrapError(msg)

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Nothing."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Nothing."""
        return f()

    def unwrap_or_default(self) -> None:
        """Return None, the empty default for an absent value."""
        return None

    def expect(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message.

        Args:
            msg: Custom error message, used verbatim.

        Raises:
            OptionUnwrapError: Always, with the custom message.
        """
        raise OptionUnwrapError(msg)

    def map(self, _f: Callable[[Any], Any]) -> NothingType:
        """Return Nothing since there's no value to map."""
        return self

    def map_or[U](self, default: U, _f: Callable[[Any], U]) -> U:
        """Return the default since there's no value."""
        return default

    def map_or_else[U](self, default: Callable[[], U], _f: Callable[[Any], U]) -> U:
        """Compute the default since there's no value."""
        return default()

    def inspect(self, _f: Callable[[Any], Any]) -> NothingType:
        """Return Nothing without calling f."""
        return self

    def and_(self, _other: Option[Any]) -> NothingType:
        """Return Nothing since self is Nothing."""
        return self

    def and_then(self, _f: Callable[[Any], Option[Any]]) -> NothingType:
        """Return Nothing since there's no value to bind."""
        return self

    def or_[T](self, other: Option[T]) -> Option[T]:
        """Return other since self is Nothing."""
        return other

    def or_else[T](self, f: Callable[[], Option[T]]) -> Option[T]:
        """Apply a recovery function since this is Nothing.

        Args:
            f: Function that returns a new Option.

        Returns:
            The Option returned by f.
        """
        return f()

    def xor[T](self, other: Option[T]) -> Option[T]:
        """Return other, which is Some only if exactly one side is Some."""
        return other

    def filter(self, _predicate: Callable[[Any], bool]) -> NothingType:
        """Return Nothing since there's no value to filter."""
        return self

    def zip(self, _other: Option[Any]) -> NothingType:
        """Return Nothing since self is Nothing."""
        return self

    def zip_with(self, _other: Option[Any], _f: Callable[[Any, Any], Any]) -> NothingType:
        """Return Nothing since self is Nothing."""
        return self

    def unzip(self) -> tuple[NothingType, NothingType]:
        """Return a pair of Nothing."""
        return self, self

    def flatten(self) -> NothingType:
        """Return Nothing since there's nothing to flatten."""
        return self

    def ok_or[E](self, err: E) -> Err[E]:
        """Convert to Result, returning Err(err).

        Args:
            err: The error value to wrap.

        Returns:
            Err containing the error.
        """
        from klaw_outcome.types.result import Err

        return Err(err)

    def ok_or_else[E](self, f: Callable[[], E]) -> Err[E]:
        """Convert to Result, computing the error.

        Args:
            f: Function that produces the error value.

        Returns:
            Err containing the computed error.
        """
        from klaw_outcome.types.result import Err

        return Err(f())

    def transpose(self) -> Ok[NothingType]:
        """Nothing transposes to Ok(Nothing)."""
        from klaw_outcome.types.result import Ok

        return Ok(self)

    def to_async(self) -> OptionAsync[Any]:
        """Lift into an already-resolved OptionAsync."""
        from klaw_outcome.async_.option import OptionAsync

        return OptionAsync.from_option(self)


Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""


type Option[T] = Some[T] | NothingType


def from_nullable[T](value: T | None) -> Option[T]:
    """Wrap a value in Some, mapping Python's None to Nothing.

    Examples:
        >>> from_nullable('hello')
        Some(value='hello')
        >>> from_nullable(None)
        NothingType()
    """
    if value is None:
        return Nothing
    return Some(value)


def match_option[T, R](
    option: Option[T],
    *,
    some: Callable[[T], R],
    nothing: Callable[[], R],
) -> R:
    """Dispatch to exactly one handler based on the variant."""
    if isinstance(option, Some):
        return some(option.value)
    return nothing()

"""OptionCell: an explicitly mutable slot holding an Option."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from klaw_outcome.types.option import Nothing, NothingType, Option, Some

__all__ = ['OptionCell']


class OptionCell[T]:
    """A mutable handle around an otherwise immutable Option.

    ``take`` and ``replace`` mutate the handle, never the Some/Nothing
    values themselves, so an Option shared elsewhere is unaffected. The cell
    is not synchronized; it is meant for single-threaded use.

    Examples:
        >>> cell = OptionCell(Some(1))
        >>> cell.take()
        Some(value=1)
        >>> cell.get()
        NothingType()
        >>> cell.replace(2)
        Some(value=2)
        >>> cell.get()
        NothingType()
    """

    __slots__ = ('_option',)

    def __init__(self, option: Option[T] = Nothing) -> None:
        self._option: Option[T] = option

    def get(self) -> Option[T]:
        """Return the Option currently held."""
        return self._option

    def is_some(self) -> bool:
        return isinstance(self._option, Some)

    def is_none(self) -> bool:
        return isinstance(self._option, NothingType)

    def take(self) -> Option[T]:
        """Empty the cell and return its former content.

        Holding Some(v): the cell becomes Nothing and a new Some(v) is
        returned. Holding Nothing: no-op, returns Nothing.
        """
        match self._option:
            case Some(value):
                self._option = Nothing
                return Some(value)
        return Nothing

    def take_if(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Take the value only if it satisfies the predicate."""
        match self._option:
            case Some(value) if predicate(value):
                return self.take()
        return Nothing

    def replace(self, value: T) -> Option[T]:
        """Store value and return the previous one wrapped in Some.

        On an empty cell this returns Some(value) and the cell stays empty;
        there is no previous value to hand back.
        """
        match self._option:
            case Some(old):
                self._option = Some(value)
                return Some(old)
        return Some(value)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, OptionCell):
            return self._option == other._option
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'OptionCell({self._option!r})'

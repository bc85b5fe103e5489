"""Control-level failures raised when a value is extracted from the wrong variant."""

from __future__ import annotations

from typing import Any

__all__ = [
    'OptionUnwrapError',
    'ResultUnwrapError',
    'UnwrapError',
]


class UnwrapError(RuntimeError):
    """A value was extracted from a variant that does not carry one.

    Absence (``Nothing``) and failure (``Err``) are ordinary data everywhere
    else in the library; this is the only exception the library itself raises
    for them.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        super().__init__(message)


class OptionUnwrapError(UnwrapError):
    """Raised by ``unwrap``/``expect`` on ``Nothing``."""


class ResultUnwrapError(UnwrapError):
    """Raised by ``unwrap``/``expect``/``into_*`` on the wrong Result variant.

    Attributes:
        value: The payload of the variant that was actually present.
    """

"""Async wrappers: ResultAsync, OptionAsync and the sync/async bridge."""

from klaw_outcome.async_.lift import all_async, from_awaitable, lift_async, to_async, try_async
from klaw_outcome.async_.option import OptionAsync
from klaw_outcome.async_.result import ResultAsync

__all__ = [
    'OptionAsync',
    'ResultAsync',
    'all_async',
    'from_awaitable',
    'lift_async',
    'to_async',
    'try_async',
]

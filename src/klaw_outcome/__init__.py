"""klaw-outcome: Option and Result types with composable async wrappers.

Example:
    ```python
    from klaw_outcome import Ok, ResultAsync

    async def main():
        total = await ResultAsync.all([
            ResultAsync.from_awaitable(fetch('a')),
            ResultAsync.from_awaitable(fetch('b')),
        ]).map(sum)
    ```
"""

from klaw_outcome._config import OutcomeConfig, get_config, init, reset_config
from klaw_outcome._logging import (
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
)
from klaw_outcome.async_ import (
    OptionAsync,
    ResultAsync,
    all_async,
    from_awaitable,
    lift_async,
    to_async,
    try_async,
)
from klaw_outcome.errors import OptionUnwrapError, ResultUnwrapError, UnwrapError
from klaw_outcome.types import (
    Err,
    Nothing,
    NothingType,
    Ok,
    Option,
    OptionCell,
    Result,
    Some,
    collect,
    from_nullable,
    match_option,
    match_result,
    safe,
    try_catch,
)

__version__ = '0.1.0'

__all__ = [
    'Err',
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'OptionAsync',
    'OptionCell',
    'OptionUnwrapError',
    'OutcomeConfig',
    'Result',
    'ResultAsync',
    'ResultUnwrapError',
    'Some',
    'UnwrapError',
    '__version__',
    'add_log_hook',
    'all_async',
    'clear_log_hooks',
    'collect',
    'configure_logging',
    'from_awaitable',
    'from_nullable',
    'get_config',
    'get_logger',
    'init',
    'lift_async',
    'match_option',
    'match_result',
    'remove_log_hook',
    'reset_config',
    'safe',
    'to_async',
    'try_async',
    'try_catch',
]

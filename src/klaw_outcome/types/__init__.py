"""Core types: Result, Ok, Err, Option, Some, Nothing, OptionCell."""

from klaw_outcome.types.cell import OptionCell
from klaw_outcome.types.option import Nothing, NothingType, Option, Some, from_nullable, match_option
from klaw_outcome.types.result import Err, Ok, Result, collect, match_result, safe, try_catch

__all__ = [
    'Err',
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'OptionCell',
    'Result',
    'Some',
    'collect',
    'from_nullable',
    'match_option',
    'match_result',
    'safe',
    'try_catch',
]

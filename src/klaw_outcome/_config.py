"""Library configuration: OutcomeConfig, init, and environment detection."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from klaw_outcome._logging import configure_logging

__all__ = [
    'OutcomeConfig',
    'get_config',
    'init',
    'reset_config',
]

_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class OutcomeConfig:
    """Configuration for klaw-outcome.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_logs: Emit JSON log lines (True) or console output (False).
        catch: Exception types that ``try_`` constructors and ``try_async``
            convert into ``Err``/``Nothing`` when no ``exceptions=`` is given.
    """

    log_level: str | None = None
    json_logs: bool = True
    catch: tuple[type[BaseException], ...] = (Exception,)


# Active configuration (set by init(), or detected on first get_config())
_config: OutcomeConfig | None = None


def _detect_log_level() -> str | None:
    """Read KLAW_OUTCOME_LOG_LEVEL, ignoring unknown values."""
    env_level = os.environ.get('KLAW_OUTCOME_LOG_LEVEL', '').upper()
    if not env_level:
        return None
    if env_level not in _LEVELS:
        logging.warning("Unknown KLAW_OUTCOME_LOG_LEVEL value '%s', logging stays off", env_level)
        return None
    return env_level


def _detect_json_logs() -> bool:
    """Read KLAW_OUTCOME_LOG_FORMAT ("json" or "console")."""
    env_format = os.environ.get('KLAW_OUTCOME_LOG_FORMAT', '').lower()
    if env_format == 'console':
        return False
    if env_format and env_format != 'json':
        logging.warning("Unknown KLAW_OUTCOME_LOG_FORMAT value '%s', defaulting to json", env_format)
    return True


def init(
    log_level: str | None = None,
    *,
    json_logs: bool | None = None,
    catch: tuple[type[BaseException], ...] | None = None,
) -> OutcomeConfig:
    """Set the library configuration.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). Detected from the
            environment if None; stays silent if the environment is unset too.
        json_logs: Log format. Detected from the environment if None.
        catch: Exception types captured by ``try_`` constructors.

    Returns:
        The OutcomeConfig that was set.

    Example:
        ```python
        import klaw_outcome

        klaw_outcome.init(log_level='DEBUG', json_logs=False)
        klaw_outcome.init(catch=(ValueError, OSError))
        ```
    """
    global _config  # noqa: PLW0603

    resolved_level = log_level.upper() if log_level is not None else _detect_log_level()
    resolved_json = json_logs if json_logs is not None else _detect_json_logs()
    resolved_catch = tuple(catch) if catch is not None else (Exception,)
    if not resolved_catch:
        msg = 'catch must name at least one exception type'
        raise ValueError(msg)

    _config = OutcomeConfig(
        log_level=resolved_level,
        json_logs=resolved_json,
        catch=resolved_catch,
    )

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=resolved_json)

    return _config


def get_config() -> OutcomeConfig:
    """Get the active configuration.

    When ``init()`` has not been called, the configuration is detected from
    the environment without touching logging setup.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = OutcomeConfig(
            log_level=_detect_log_level(),
            json_logs=_detect_json_logs(),
        )
    return _config


def reset_config() -> None:
    """Forget the active configuration so the next get_config() re-detects it."""
    global _config  # noqa: PLW0603
    _config = None

"""Tests for library configuration and initialization."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest

from klaw_outcome import OutcomeConfig, ResultAsync, get_config, init
from klaw_outcome._config import _detect_json_logs, _detect_log_level


@pytest.fixture(autouse=True)
def _fresh(fresh_config) -> None:
    """Reset configuration and root logging around each test."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


class TestOutcomeConfig:
    """Tests for the OutcomeConfig dataclass."""

    def test_default_values(self) -> None:
        config = OutcomeConfig()
        assert config.log_level is None
        assert config.json_logs is True
        assert config.catch == (Exception,)

    def test_config_is_frozen(self) -> None:
        config = OutcomeConfig()
        with pytest.raises(AttributeError):
            config.json_logs = False  # type: ignore[misc]


class TestDetectLogLevel:
    """Tests for _detect_log_level()."""

    def test_env_level(self) -> None:
        with patch.dict(os.environ, {'KLAW_OUTCOME_LOG_LEVEL': 'debug'}):
            assert _detect_log_level() == 'DEBUG'

    def test_env_invalid_ignored(self) -> None:
        with patch.dict(os.environ, {'KLAW_OUTCOME_LOG_LEVEL': 'loud'}):
            assert _detect_log_level() is None

    def test_no_env(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _detect_log_level() is None


class TestDetectJsonLogs:
    """Tests for _detect_json_logs()."""

    def test_console(self) -> None:
        with patch.dict(os.environ, {'KLAW_OUTCOME_LOG_FORMAT': 'console'}):
            assert _detect_json_logs() is False

    def test_json(self) -> None:
        with patch.dict(os.environ, {'KLAW_OUTCOME_LOG_FORMAT': 'JSON'}):
            assert _detect_json_logs() is True

    def test_unknown_defaults_to_json(self) -> None:
        with patch.dict(os.environ, {'KLAW_OUTCOME_LOG_FORMAT': 'xml'}):
            assert _detect_json_logs() is True


class TestInit:
    """Tests for init() and get_config()."""

    def test_init_with_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = init()
        assert config == OutcomeConfig()
        assert get_config() is config

    def test_init_log_level_configures_logging(self) -> None:
        init(log_level='debug', json_logs=False)
        assert get_config().log_level == 'DEBUG'
        assert logging.getLogger().level == logging.DEBUG

    def test_init_catch(self) -> None:
        config = init(catch=(KeyError, OSError))
        assert config.catch == (KeyError, OSError)

    def test_init_empty_catch_rejected(self) -> None:
        with pytest.raises(ValueError, match='catch'):
            init(catch=())

    def test_get_config_detects_environment(self) -> None:
        env = {'KLAW_OUTCOME_LOG_LEVEL': 'WARNING', 'KLAW_OUTCOME_LOG_FORMAT': 'console'}
        with patch.dict(os.environ, env):
            config = get_config()
        assert config.log_level == 'WARNING'
        assert config.json_logs is False

    @pytest.mark.asyncio
    async def test_catch_applies_to_async_constructors(self) -> None:
        init(catch=(ValueError,))
        assert (await ResultAsync.try_(lambda: int('x'))).is_err()
        with pytest.raises(KeyError):
            await ResultAsync.try_(lambda: {}['k'])

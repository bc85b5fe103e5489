"""Pytest configuration and shared fixtures for klaw-outcome tests."""

import pytest

from klaw_outcome import clear_log_hooks, reset_config


@pytest.fixture
def fresh_config():
    """Re-detect configuration before and after a test."""
    reset_config()
    yield
    reset_config()
    clear_log_hooks()


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    from klaw_outcome import Ok

    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from klaw_outcome import Err

    return Err(ValueError('test error'))


@pytest.fixture
def sample_some():
    """Sample Some value for testing."""
    from klaw_outcome import Some

    return Some('hello')


@pytest.fixture
def sample_nothing():
    """Sample Nothing value for testing."""
    from klaw_outcome import Nothing

    return Nothing


class CallCounter:
    """Callable recording how many times, and with what, it was invoked."""

    def __init__(self, result=None):
        self.calls = []
        self._result = result

    def __call__(self, *args):
        self.calls.append(args)
        if self._result is None:
            return args[0] if args else None
        return self._result

    @property
    def count(self):
        return len(self.calls)


@pytest.fixture
def counter():
    """A fresh CallCounter that echoes its first argument."""
    return CallCounter()

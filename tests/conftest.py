"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures ``src/`` is available on ``sys.path`` for imports.
- Isolates ``QTABSET_*`` environment variables and root logging handlers
  between tests.
"""

import logging
import os
import signal
import sys
from pathlib import Path

import pytest

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests

# Ensure the src layout is importable without installation
ROOT = Path(__file__).resolve().parents[1]
SRC = str(ROOT / "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from qtabset import config as _cfg  # noqa: E402

_ISOLATED_ENV = (
    _cfg.ENV_PILLS,
    _cfg.ENV_TABSET_WIDTH,
    _cfg.ENV_LOG_LEVEL,
    _cfg.ENV_DELIMITER,
)

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TEST_TIMEOUT", "10"))


def _timeout_handler(signum, frame):
    """Test Timeout handler."""
    raise TimeoutError(f"Test exceeded {_TEST_TIMEOUT} seconds timeout")


def pytest_runtest_setup(item):
    """Arm a per-test timeout where SIGALRM is available."""
    try:
        signal.signal(signal.SIGALRM, _timeout_handler)
        signal.alarm(_TEST_TIMEOUT)
    except (AttributeError, ValueError):
        pass


def pytest_runtest_teardown(item, nextitem):
    """Disarm the per-test timeout."""
    try:
        signal.alarm(0)
    except (AttributeError, ValueError):
        pass


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Remove QTABSET_* variables, including any a .env file loads later."""
    for name in _ISOLATED_ENV:
        # setenv first so teardown deletes whatever load_dotenv writes
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv(_cfg.ENV_DISABLE_FILE_LOGS, "1")
    yield


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Restore root logger handlers replaced by ``configure_logging``."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)

"""Environment-backed defaults for the command line interface.

This module provides RenderSettings, which reads defaults for the CLI from
environment variables and an optional ``.env`` file. Command line flags
always take precedence over these values.

Examples
--------
>>> from pathlib import Path
>>> from qtabset.settings import RenderSettings
>>> RenderSettings(env_file=Path("render.env")).tabset_width  # doctest: +SKIP
'fill'
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from qtabset.config import (
    DEFAULT_CSV_DELIMITER,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TABSET_WIDTH,
    ENV_DELIMITER,
    ENV_DISABLE_FILE_LOGS,
    ENV_FILENAME,
    ENV_LOG_LEVEL,
    ENV_PILLS,
    ENV_TABSET_WIDTH,
    FALSY_VALUES,
    TRUTHY_VALUES,
)
from qtabset.exceptions import ConfigurationError
from qtabset.tabset_generator.validator import validate_tabset_width


def _parse_bool(name: str, raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in TRUTHY_VALUES:
        return True
    if value in FALSY_VALUES:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean value, got {raw!r}",
        context={"variable": name},
    )


class RenderSettings:
    r"""Defaults for rendering and logging read from the environment.

    Parameters
    ----------
    env_file : Path | None, optional
        ``.env`` file to load. Defaults to ``.env`` in the current working
        directory. Variables already present in the environment are not
        overridden by the file.

    Attributes
    ----------
    pills : bool
        Default for ``--pills`` (``QTABSET_PILLS``).
    tabset_width : str
        Default for ``--tabset-width`` (``QTABSET_TABSET_WIDTH``).
    log_level : str
        Default for ``--log-level`` (``QTABSET_LOG_LEVEL``).
    delimiter : str
        Default field delimiter for delimited text input (``QTABSET_DELIMITER``).
    disable_file_logs : bool
        Skip the log file handler (``DISABLE_FILE_LOGS``).

    Raises
    ------
    ConfigurationError
        If a variable holds an invalid value.
    """

    def __init__(self, env_file: Path | None = None) -> None:
        env_path = Path(env_file) if env_file is not None else Path.cwd() / ENV_FILENAME
        if env_path.exists():
            load_dotenv(env_path, override=False)
        self.pills: bool = _parse_bool(ENV_PILLS, os.getenv(ENV_PILLS), False)
        self.tabset_width: str = validate_tabset_width(
            os.getenv(ENV_TABSET_WIDTH, DEFAULT_TABSET_WIDTH)
        )
        self.log_level: str = os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()
        self.delimiter: str = os.getenv(ENV_DELIMITER, DEFAULT_CSV_DELIMITER)
        if not self.delimiter:
            raise ConfigurationError(
                f"{ENV_DELIMITER} must not be empty", context={"variable": ENV_DELIMITER}
            )
        self.disable_file_logs: bool = _parse_bool(
            ENV_DISABLE_FILE_LOGS, os.getenv(ENV_DISABLE_FILE_LOGS), False
        )

    def __repr__(self) -> str:
        return (
            f"RenderSettings(pills={self.pills!r}, tabset_width={self.tabset_width!r}, "
            f"log_level={self.log_level!r}, delimiter={self.delimiter!r}, "
            f"disable_file_logs={self.disable_file_logs!r})"
        )


__all__ = ["RenderSettings"]

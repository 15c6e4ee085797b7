"""Tabset Generator Runner Module.

This module provides the programmatic, file-based entrypoints and logging
configuration for the tabset generator. It is the boundary between callers
that work with files (the CLI, build scripts, tests) and the in-memory
``qtab`` pipeline. No markup rules live here; loading is delegated to
``data_loader.py`` and rendering to ``processor.py``.

Notes
-----
All configuration values (log directory, filenames, log format) come from
``qtabset.config``.

Examples
--------
>>> from pathlib import Path
>>> from qtabset.tabset_generator.runner import configure_logging, run_from_config
>>> configure_logging(log_level="INFO", enable_file=False)
>>> ok = run_from_config(Path("results.csv"), ["model"], ["score"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from qtabset.config import (
    DEFAULT_CSV_DELIMITER,
    LOG_DIR,
    LOG_FILENAME_GENERATE_TABSETS,
    LOG_FORMAT,
)

from .data_loader import load_table
from .processor import qtab, render_tabsets
from .validator import ColumnSelection

logger = logging.getLogger(__name__)


def configure_logging(log_level: str = "INFO", enable_file: bool = True) -> None:
    r"""Configure logging for tabset generation.

    Sets up a stream (console) handler and an optional file handler, using
    the log format from project configuration. Failures while creating the
    file handler are ignored so that read-only environments can still run
    the generator.

    Parameters
    ----------
    log_level : str, optional
        The logging level (e.g., "INFO", "DEBUG"). Defaults to "INFO".
    enable_file : bool, optional
        Whether to also write logs to ``LOG_DIR / LOG_FILENAME_GENERATE_TABSETS``.
        Defaults to True.

    Returns
    -------
    None
        No return value.

    Notes
    -----
    Existing root handlers are removed first, so repeated calls do not
    duplicate output. The stream handler writes to stderr, keeping stdout
    free for the generated markup. A file handler that cannot be created is
    skipped silently and on purpose: logging falls back to the console only
    and no warning is emitted.

    Examples
    --------
    >>> from qtabset.tabset_generator.runner import configure_logging
    >>> configure_logging(log_level="DEBUG", enable_file=False)
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_handler = _open_log_file() if enable_file else None
    if file_handler is not None:
        handlers.insert(0, file_handler)
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def _open_log_file() -> logging.Handler | None:
    """Return an appending handler for the generator log, or ``None``.

    Any error while creating ``LOG_DIR`` or opening the file yields ``None``
    without a message; the console handler is still installed.
    """
    try:
        LOG_DIR.mkdir(exist_ok=True)
        return logging.FileHandler(LOG_DIR / LOG_FILENAME_GENERATE_TABSETS, mode="a")
    except Exception:
        return None


def generate_tabsets(
    input_path: Path,
    tabset_vars: ColumnSelection,
    output_vars: ColumnSelection,
    output_file: Path | None = None,
    *,
    layout: str | None = None,
    heading_levels: Any = None,
    pills: bool = False,
    tabset_width: str = "default",
    categories: Mapping[str, Sequence[Any]] | None = None,
    delimiter: str = DEFAULT_CSV_DELIMITER,
) -> None:
    """Load a table file and write its tabset markup.

    Parameters
    ----------
    input_path : Path
        Table file (CSV or other delimited text, JSON, JSON lines).
    tabset_vars, output_vars : str | int | Sequence[str | int]
        Column selections, as accepted by ``qtab``.
    output_file : Path | None, optional
        Destination file. ``None`` writes to stdout.
    layout, heading_levels, pills, tabset_width
        Rendering options, as accepted by ``qtab``.
    categories : Mapping[str, Sequence[Any]] | None, optional
        Column name to ordered levels, applied before rendering.
    delimiter : str, optional
        Field delimiter for delimited text input.

    Raises
    ------
    FileNotFoundError
        If ``input_path`` does not exist.
    qtabset.exceptions.AppError
        For unparsable input or invalid arguments. Nothing is written.

    Notes
    -----
    When writing to a file, the markup is rendered in memory first so that a
    failed call never leaves a truncated file behind.
    """
    data = load_table(input_path, delimiter=delimiter, categories=categories)
    options: dict[str, Any] = {
        "layout": layout,
        "heading_levels": heading_levels,
        "pills": pills,
        "tabset_width": tabset_width,
    }
    if output_file is None:
        qtab(data, tabset_vars, output_vars, file=sys.stdout, **options)
        return
    markup = render_tabsets(data, tabset_vars, output_vars, **options)
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with output_file.open("w", encoding="utf-8") as fh:
        fh.write(markup)
    logger.info("Wrote tabset markup to %s", output_file)


def run_from_config(
    input_path: Path,
    tabset_vars: ColumnSelection,
    output_vars: ColumnSelection,
    output_file: Path | None = None,
    **options: Any,
) -> bool:
    """Run tabset generation and report success instead of raising.

    Keyword options are passed to :func:`generate_tabsets`.

    Returns
    -------
    bool
        True on success, False if any error occurred (the error is logged).
    """
    try:
        generate_tabsets(
            Path(input_path), tabset_vars, output_vars, output_file, **options
        )
        return True
    except Exception as exc:
        logger.exception("Failed to generate tabsets: %s", exc)
        return False


__all__ = ["configure_logging", "generate_tabsets", "run_from_config"]

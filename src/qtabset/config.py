"""Global configuration constants for the project.

Defines the Quarto markup tokens, validation patterns, paths and logging
settings used across the tabset generator, the runner and the CLI.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]
LOG_DIR: Path = PROJECT_ROOT / "logs"
ENV_FILENAME: str = ".env"

# Quarto tabset markup
TABSET_DIV: str = "::: {.panel-tabset}"
TABSET_CLOSE: str = ":::"
PILLS_CLASS: str = ".nav-pills"
TABSET_WIDTH_CLASS_FORMAT: str = ".nav-{width}"
TABSET_WIDTHS: tuple[str, ...] = ("default", "fill", "justified")
DEFAULT_TABSET_WIDTH: str = "default"
HEADING_CHAR: str = "#"
BLOCK_SEPARATOR: str = "\n\n"

# Layout directives must open a fenced div
LAYOUT_PATTERN: str = r"^:{3,}"
LAYOUT_CLOSER_PATTERN: str = r"^(:+)"

# Cell rendering
MISSING_VALUE_PLACEHOLDER: str = "NA"
FLOAT_FORMAT: str = ".15g"

# Heading level tokens treated as "absent" on the command line
HEADING_LEVEL_ABSENT_TOKENS: tuple[str, ...] = ("", "na", "none", "null")

# Input loading defaults
DEFAULT_CSV_DELIMITER: str = ","
JSON_SUFFIXES: tuple[str, ...] = (".json",)
JSON_LINES_SUFFIXES: tuple[str, ...] = (".jsonl", ".ndjson")

# CLI defaults and logging
LOG_FILENAME_GENERATE_TABSETS: str = "generate_tabsets.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL: str = "INFO"

# Boolean spellings accepted in environment variables
TRUTHY_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")
FALSY_VALUES: tuple[str, ...] = ("0", "false", "no", "off", "")

# Environment variable names read by qtabset.settings
ENV_PILLS: str = "QTABSET_PILLS"
ENV_TABSET_WIDTH: str = "QTABSET_TABSET_WIDTH"
ENV_LOG_LEVEL: str = "QTABSET_LOG_LEVEL"
ENV_DELIMITER: str = "QTABSET_DELIMITER"
ENV_DISABLE_FILE_LOGS: str = "DISABLE_FILE_LOGS"

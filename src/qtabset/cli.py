"""CLI entrypoint for the tabset generator.

Parses arguments, configures logging and delegates to
:func:`qtabset.tabset_generator.runner.generate_tabsets`. The generated
markup goes to stdout (or ``--output``); log messages go to stderr and,
unless disabled, to the log file configured in ``qtabset.config``.

Defaults for ``--pills``, ``--tabset-width``, ``--log-level`` and
``--delimiter`` are read from the environment and a ``.env`` file through
:class:`qtabset.settings.RenderSettings`.

Exit status
-----------
0 on success, 2 for invalid arguments or input data, 1 for any other error.

Examples
--------
>>> # In shell
>>> qtabset results.csv --tabset-vars model,metric --output-vars score --heading-levels NA,3
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from qtabset.config import HEADING_LEVEL_ABSENT_TOKENS, TABSET_WIDTHS
from qtabset.exceptions import AppError, ConfigurationError
from qtabset.settings import RenderSettings
from qtabset.tabset_generator.data_loader import parse_category_spec
from qtabset.tabset_generator.runner import configure_logging, generate_tabsets

logger = logging.getLogger(__name__)


def split_names(raw: str) -> list[str]:
    """Split a comma-separated column list, dropping empty items."""
    return [name.strip() for name in raw.split(",") if name.strip()]


def parse_heading_levels(raw: str | None) -> list[float | None] | None:
    """Parse ``--heading-levels`` such as ``"2,NA,3"``.

    Tokens ``NA``, ``None``, ``null`` or an empty item mean "keep the
    tabset" for that level. Numbers are passed on unchanged so that the
    library validation reports bad values.

    Examples
    --------
    >>> parse_heading_levels("2,NA,3")
    [2.0, None, 3.0]
    >>> parse_heading_levels(None) is None
    True
    """
    if raw is None:
        return None
    levels: list[float | None] = []
    for token in raw.split(","):
        token = token.strip()
        if token.lower() in HEADING_LEVEL_ABSENT_TOKENS:
            levels.append(None)
            continue
        try:
            levels.append(float(token))
        except ValueError as exc:
            raise ConfigurationError(
                "`heading_levels` must be numeric.",
                context={"argument": "heading_levels", "value": token},
            ) from exc
    return levels


def build_parser(settings: RenderSettings) -> argparse.ArgumentParser:
    """Create the argument parser, using ``settings`` for defaults."""
    parser = argparse.ArgumentParser(
        prog="qtabset",
        description="Render a table as nested Quarto tabset panels.",
    )
    parser.add_argument(
        "input", type=Path, help="Input table (CSV, JSON or JSON lines)."
    )
    parser.add_argument(
        "--tabset-vars",
        required=True,
        help="Comma-separated tabset columns, outermost first.",
    )
    parser.add_argument(
        "--output-vars",
        required=True,
        help="Comma-separated columns shown in each tab.",
    )
    parser.add_argument(
        "--layout",
        default=None,
        help='Layout directive around tab content, e.g. \'::: {layout="[2, 3]"}\'.',
    )
    parser.add_argument(
        "--heading-levels",
        default=None,
        help="Comma-separated heading level per tabset column; NA keeps a tabset.",
    )
    parser.add_argument(
        "--pills",
        action=argparse.BooleanOptionalAction,
        default=settings.pills,
        help="Display tabs as pills.",
    )
    parser.add_argument(
        "--tabset-width",
        choices=TABSET_WIDTHS,
        default=settings.tabset_width,
        help="Tab width style.",
    )
    parser.add_argument(
        "--category",
        action="append",
        default=[],
        metavar="COLUMN=L1,L2,...",
        help="Order a column by the given levels. May be repeated.",
    )
    parser.add_argument(
        "--delimiter",
        default=settings.delimiter,
        help="Field delimiter for delimited text input.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write markup to this file instead of stdout.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the tabset generator from command line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Arguments to parse. ``None`` uses ``sys.argv``.

    Returns
    -------
    int
        Process exit status.
    """
    try:
        settings = RenderSettings()
    except AppError as exc:
        configure_logging(enable_file=False)
        logger.error("Invalid settings: %s", exc.message)
        return 2
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level, enable_file=not settings.disable_file_logs)
    logger.debug("Arguments: %s", vars(args))

    try:
        categories = dict(parse_category_spec(spec) for spec in args.category)
        generate_tabsets(
            args.input,
            split_names(args.tabset_vars),
            split_names(args.output_vars),
            args.output,
            layout=args.layout,
            heading_levels=parse_heading_levels(args.heading_levels),
            pills=args.pills,
            tabset_width=args.tabset_width,
            categories=categories,
            delimiter=args.delimiter,
        )
    except AppError as exc:
        logger.error("%s", exc.message)
        return 2
    except FileNotFoundError as exc:
        logger.error("File not found: %s", exc)
        return 1
    except Exception as exc:
        logger.error("Unexpected error: %s", exc, exc_info=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())

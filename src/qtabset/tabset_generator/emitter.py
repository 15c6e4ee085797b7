"""Markup emission for nested Quarto tabsets.

Walks the sorted table one row at a time and writes, driven by the boundary
table, the tabset open markers, headings, leaf content, layout wrappers and
tabset close markers. Each block is followed by a blank line.

Nesting rules
-------------
- Level 1 is opened by its tabset div only; it has no heading of its own.
- When a row starts level ``j >= 2``, the heading announcing the tab of the
  parent column ``j - 1`` is written first, then the tabset div of level
  ``j`` unless that level is rendered as headings.
- Every row writes a leaf heading with the value of the innermost column.
- Closers are written innermost first.

Boundaries
----------
- Writes only to the sink passed in; no global state.
- Rendering errors raised for a cell propagate and leave the sink partially
  written.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TextIO

import pandas as pd

from qtabset.config import (
    BLOCK_SEPARATOR,
    HEADING_CHAR,
    LAYOUT_CLOSER_PATTERN,
    PILLS_CLASS,
    TABSET_CLOSE,
    TABSET_DIV,
    TABSET_WIDTH_CLASS_FORMAT,
)

from .cell_render import RenderKind, render_cell, render_plain
from .partitioner import BoundaryTable
from .validator import TabsetOptions

logger = logging.getLogger(__name__)


def make_tabset_div(pills: bool, tabset_width: str) -> str:
    """Build the opening marker of a tabset.

    Examples
    --------
    >>> make_tabset_div(False, "default")
    '::: {.panel-tabset}'
    >>> make_tabset_div(True, "fill")
    '::: {.panel-tabset} .nav-pills .nav-fill'
    """
    div = TABSET_DIV
    if pills:
        div = f"{div} {PILLS_CLASS}"
    if tabset_width in ("fill", "justified"):
        div = f"{div} {TABSET_WIDTH_CLASS_FORMAT.format(width=tabset_width)}"
    return div


def layout_closer(layout: str) -> str:
    """Return the closing fence of a layout directive.

    Examples
    --------
    >>> layout_closer('::::: {layout="[2, 3]"}')
    ':::::'
    """
    match = re.match(LAYOUT_CLOSER_PATTERN, layout)
    return match.group(1) if match else layout


def heading(level: int, text: str) -> str:
    """Format a markdown heading line."""
    return f"{HEADING_CHAR * level} {text}"


def _write_block(sink: TextIO, text: str) -> None:
    sink.write(text)
    sink.write(BLOCK_SEPARATOR)


def _level_or_default(heading_levels: tuple[int | None, ...], level: int) -> int:
    """Return the heading level configured for 1-based ``level``."""
    configured = heading_levels[level - 1]
    return level if configured is None else configured


def print_tabset_start(
    sink: TextIO,
    options: TabsetOptions,
    boundaries: BoundaryTable,
    row: int,
    tabset_div: str,
) -> None:
    """Open the outermost tabset on the first row of the table."""
    if options.heading_levels[0] is None and boundaries.starts(row, 1):
        _write_block(sink, tabset_div)


def print_nested_tabsets(
    sink: TextIO,
    data: pd.DataFrame,
    options: TabsetOptions,
    boundaries: BoundaryTable,
    row: int,
    tabset_div: str,
) -> None:
    """Write parent headings and open nested tabsets for levels 2..depth."""
    for level in range(2, options.depth + 1):
        if not boundaries.starts(row, level):
            continue
        parent_column = options.tabset_names[level - 2]
        _write_block(
            sink,
            heading(
                _level_or_default(options.heading_levels, level - 1),
                render_plain(data.at[row, parent_column]),
            ),
        )
        if options.heading_levels[level - 1] is None:
            _write_block(sink, tabset_div)


def print_outputs(
    sink: TextIO,
    data: pd.DataFrame,
    options: TabsetOptions,
    row: int,
    render_kinds: Mapping[str, RenderKind],
) -> None:
    """Write the leaf heading and the content of every output column."""
    depth = options.depth
    _write_block(
        sink,
        heading(
            _level_or_default(options.heading_levels, depth),
            render_plain(data.at[row, options.tabset_names[depth - 1]]),
        ),
    )
    if options.layout is not None:
        _write_block(sink, options.layout)

    for column in options.output_names:
        kind = render_kinds.get(column, RenderKind.PLAIN)
        _write_block(sink, render_cell(data.at[row, column], kind))

    if options.layout is not None:
        _write_block(sink, layout_closer(options.layout))


def print_tabset_end(
    sink: TextIO,
    options: TabsetOptions,
    boundaries: BoundaryTable,
    row: int,
) -> None:
    """Close finished tabsets, innermost first."""
    for level in range(options.depth, 0, -1):
        if options.heading_levels[level - 1] is None and boundaries.ends(row, level):
            _write_block(sink, TABSET_CLOSE)


def print_row_tabsets(
    sink: TextIO,
    data: pd.DataFrame,
    options: TabsetOptions,
    boundaries: BoundaryTable,
    row: int,
    tabset_div: str,
    render_kinds: Mapping[str, RenderKind],
) -> None:
    """Write everything belonging to a single row."""
    print_tabset_start(sink, options, boundaries, row, tabset_div)
    print_nested_tabsets(sink, data, options, boundaries, row, tabset_div)
    print_outputs(sink, data, options, row, render_kinds)
    print_tabset_end(sink, options, boundaries, row)


def emit_tabsets(
    sink: TextIO,
    data: pd.DataFrame,
    options: TabsetOptions,
    boundaries: BoundaryTable,
    render_kinds: Mapping[str, RenderKind],
) -> None:
    """Write the tabset markup for every row of a prepared table.

    Parameters
    ----------
    sink : TextIO
        Writable text stream receiving the markup.
    data : pd.DataFrame
        Sorted table from :func:`qtabset.tabset_generator.partitioner.prep_data`.
    options : TabsetOptions
        Validated rendering options.
    boundaries : BoundaryTable
        Boundary table computed from ``data``.
    render_kinds : Mapping[str, RenderKind]
        Render path of each output column.

    Returns
    -------
    None
        The only effect is the sequence of writes to ``sink``.
    """
    tabset_div = make_tabset_div(options.pills, options.tabset_width)
    for row in range(len(data.index)):
        print_row_tabsets(
            sink, data, options, boundaries, row, tabset_div, render_kinds
        )
    logger.debug("Emitted tabset markup for %d rows", len(data.index))


__all__ = [
    "emit_tabsets",
    "heading",
    "layout_closer",
    "make_tabset_div",
    "print_nested_tabsets",
    "print_outputs",
    "print_row_tabsets",
    "print_tabset_end",
    "print_tabset_start",
]

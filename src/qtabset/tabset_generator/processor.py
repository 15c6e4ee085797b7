"""Render a data frame as nested Quarto tabsets.

Ties the three phases together: validation of the arguments, partitioning
of the table into a sorted row order plus a boundary table, and emission of
the markup to a text sink. This module holds no markup rules of its own.
"""

from __future__ import annotations

import io
import logging
import sys
from typing import Any, TextIO

import pandas as pd

from .cell_render import classify_columns
from .emitter import emit_tabsets
from .partitioner import get_tabset_master, prep_data
from .validator import ColumnSelection, validate_data

logger = logging.getLogger(__name__)


def qtab(
    data: pd.DataFrame,
    tabset_vars: ColumnSelection,
    output_vars: ColumnSelection,
    layout: str | None = None,
    heading_levels: Any = None,
    pills: bool = False,
    tabset_width: str = "default",
    file: TextIO | None = None,
) -> None:
    """Write tabset panels for each unique combination of the tabset columns.

    The table is sorted by ``tabset_vars``; define the order beforehand with
    categorical columns when alphabetical order is not wanted. Several
    tabset columns produce nested tabsets. Categorical output columns are
    written as their labels. Output columns holding objects (data frames,
    figures, lists) are written with their notebook representation.

    In a Quarto document, call this from a chunk with ``#| output: asis``.

    Parameters
    ----------
    data : pd.DataFrame
        Table with at least one row and two columns.
    tabset_vars : str | int | Sequence[str | int]
        Columns used as tabset labels, outermost first.
    output_vars : str | int | Sequence[str | int]
        Columns displayed in each tab.
    layout : str | None, optional
        Layout directive wrapped around each tab's content. Must begin with
        at least three ``:`` (e.g. ``'::: {layout="[2, 3]"}'``).
    heading_levels : Sequence[int | None] | None, optional
        One entry per tabset column. An integer renders that level as a
        heading of that level instead of a tabset; ``None`` keeps the
        tabset. ``None`` for the whole argument means all tabsets.
    pills : bool, optional
        Display tabs as pills.
    tabset_width : str, optional
        ``"default"``, ``"fill"`` or ``"justified"``.
    file : TextIO | None, optional
        Destination stream. Defaults to ``sys.stdout``.

    Returns
    -------
    None
        Called for its side effect on ``file``.

    Raises
    ------
    qtabset.exceptions.ConfigurationError
        For invalid options. Raised before anything is written.
    qtabset.exceptions.DataValidationError
        For an invalid table or column selection. Raised before anything is
        written.

    Examples
    --------
    >>> import pandas as pd
    >>> df = pd.DataFrame({"g1": ["A", "A", "B"], "g2": ["X", "Y", "X"], "v": [10, 20, 30]})
    >>> qtab(df, ["g1", "g2"], "v")  # doctest: +SKIP
    >>> qtab(df, ["g1", "g2"], "v", heading_levels=[2, 3])  # doctest: +SKIP
    """
    options = validate_data(
        data,
        tabset_vars,
        output_vars,
        layout=layout,
        heading_levels=heading_levels,
        pills=pills,
        tabset_width=tabset_width,
    )
    tabset_names = list(options.tabset_names)
    output_names = list(options.output_names)

    prepared = prep_data(data, tabset_names, output_names)
    boundaries = get_tabset_master(prepared, tabset_names)
    render_kinds = classify_columns(prepared, output_names)

    sink = sys.stdout if file is None else file
    emit_tabsets(sink, prepared, options, boundaries, render_kinds)


def render_tabsets(
    data: pd.DataFrame,
    tabset_vars: ColumnSelection,
    output_vars: ColumnSelection,
    layout: str | None = None,
    heading_levels: Any = None,
    pills: bool = False,
    tabset_width: str = "default",
) -> str:
    """Return the markup :func:`qtab` would write, as a string.

    Examples
    --------
    >>> import pandas as pd
    >>> df = pd.DataFrame({"g": ["A"], "v": [1]})
    >>> print(render_tabsets(df, "g", "v"), end="")
    ::: {.panel-tabset}
    <BLANKLINE>
    # A
    <BLANKLINE>
    1
    <BLANKLINE>
    :::
    <BLANKLINE>
    """
    buffer = io.StringIO()
    qtab(
        data,
        tabset_vars,
        output_vars,
        layout=layout,
        heading_levels=heading_levels,
        pills=pills,
        tabset_width=tabset_width,
        file=buffer,
    )
    return buffer.getvalue()


__all__ = ["qtab", "render_tabsets"]

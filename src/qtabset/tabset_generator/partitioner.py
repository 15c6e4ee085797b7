"""Sorting and boundary detection for nested tabsets.

The partitioner turns a validated table into the row order used for
emission and a boundary table saying, for every row and nesting level,
whether the row opens and/or closes a tabset.

Boundaries at level ``j`` are computed relative to the parent prefix, the
values of tabset columns ``1..j-1``. Within each contiguous run of rows that
share the parent prefix, the first row starts level ``j`` and the last row
ends it. Level 1 has an empty prefix, so the whole table is a single run. A
value repeated under a different parent therefore starts a fresh run.

Notes
-----
The table is sorted with a stable sort, so rows sharing every tabset value
keep their input order. Categorical columns sort by category order and are
converted to their text labels afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .cell_render import render_plain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundaryTable:
    """Per-row start/end flags for every nesting level.

    Attributes
    ----------
    frame : pd.DataFrame
        One row per table row, with boolean columns ``tabset{j}_start`` and
        ``tabset{j}_end`` for ``j`` in ``1..depth``.
    depth : int
        Number of nesting levels.
    """

    frame: pd.DataFrame
    depth: int

    def starts(self, row: int, level: int) -> bool:
        """Return whether ``row`` opens a group at 1-based ``level``."""
        return bool(self.frame.at[row, f"tabset{level}_start"])

    def ends(self, row: int, level: int) -> bool:
        """Return whether ``row`` closes a group at 1-based ``level``."""
        return bool(self.frame.at[row, f"tabset{level}_end"])

    def __len__(self) -> int:
        return len(self.frame.index)


def category_labels(series: pd.Series) -> pd.Series:
    """Convert a categorical column to its text labels, keeping missing values.

    Labels use the same text form as plain cells, so a categorical column
    renders exactly like the uncategorized column it was built from.
    """
    values = series.astype(object)
    return values.where(values.isna(), values.map(render_plain))


def prep_data(
    data: pd.DataFrame, tabset_names: list[str], output_names: list[str]
) -> pd.DataFrame:
    """Project, sort and normalize the table for emission.

    Parameters
    ----------
    data : pd.DataFrame
        Validated input table.
    tabset_names : list[str]
        Tabset columns, outermost first.
    output_names : list[str]
        Output columns.

    Returns
    -------
    pd.DataFrame
        New frame holding exactly ``tabset_names + output_names``, sorted by
        the tabset columns with missing values last, categorical columns
        replaced by their labels, and a fresh ``RangeIndex``.

    Examples
    --------
    >>> import pandas as pd
    >>> df = pd.DataFrame({"g": ["b", "a"], "v": [1, 2], "x": [0, 0]})
    >>> prep_data(df, ["g"], ["v"]).to_dict("list")
    {'g': ['a', 'b'], 'v': [2, 1]}
    """
    columns = list(tabset_names) + list(output_names)
    prepared = data.loc[:, columns].sort_values(
        by=list(tabset_names), kind="mergesort", na_position="last"
    )
    prepared = prepared.reset_index(drop=True)
    for column in prepared.columns:
        if isinstance(prepared[column].dtype, pd.CategoricalDtype):
            prepared[column] = category_labels(prepared[column])
    return prepared


def _value_changes(column: pd.Series) -> np.ndarray:
    """Flag rows whose value differs from the previous row.

    Two missing values compare equal. The first row is always flagged.
    """
    previous = column.shift(1)
    both_missing = column.isna() & previous.isna()
    # Nullable dtypes compare to <NA> when only one side is missing
    differs = (column != previous).fillna(True).astype(bool)
    changed = (differs & ~both_missing).to_numpy(dtype=bool)
    if len(changed):
        changed[0] = True
    return changed


def get_tabset_master(data: pd.DataFrame, tabset_names: list[str]) -> BoundaryTable:
    """Compute the boundary table of a sorted table.

    Parameters
    ----------
    data : pd.DataFrame
        Output of :func:`prep_data`.
    tabset_names : list[str]
        Tabset columns, outermost first.

    Returns
    -------
    BoundaryTable
        Start/end flags for levels ``1..len(tabset_names)``.

    Examples
    --------
    >>> import pandas as pd
    >>> df = pd.DataFrame({"g1": ["A", "A", "B"], "g2": ["X", "Y", "X"]})
    >>> master = get_tabset_master(df, ["g1", "g2"])
    >>> master.frame["tabset2_start"].tolist()
    [True, False, True]
    >>> master.frame["tabset2_end"].tolist()
    [False, True, True]
    """
    n_rows = len(data.index)
    depth = len(tabset_names)
    run_starts = np.zeros(n_rows, dtype=bool)
    if n_rows:
        run_starts[0] = True

    flags: dict[str, np.ndarray] = {}
    for level in range(1, depth + 1):
        if level > 1:
            # Extend the parent prefix with the column of the previous level
            run_starts = run_starts | _value_changes(data[tabset_names[level - 2]])
        run_ends = np.empty(n_rows, dtype=bool)
        run_ends[:-1] = run_starts[1:]
        if n_rows:
            run_ends[-1] = True
        flags[f"tabset{level}_start"] = run_starts.copy()
        flags[f"tabset{level}_end"] = run_ends

    frame = pd.DataFrame(flags, index=pd.RangeIndex(n_rows))
    logger.debug("Computed boundaries for %d rows at depth %d", n_rows, depth)
    return BoundaryTable(frame=frame, depth=depth)


__all__ = ["BoundaryTable", "category_labels", "get_tabset_master", "prep_data"]

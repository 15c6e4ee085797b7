"""Cell rendering helpers for tabset content.

Each output column is tagged once, when the table is normalized, with a
:class:`RenderKind`. Scalar columns are written with :func:`render_plain`,
which concatenates the value as text. List columns (object columns holding
lists, dicts, data frames, figures and similar objects) are written with
:func:`render_rich`, which follows the IPython display protocol so a cell
renders the same way it would when displayed in a notebook.

Boundaries
----------
- No I/O; functions return strings and never write to a stream.
- Errors raised by an object's own display hooks are not caught.
"""

from __future__ import annotations

import enum
import math
import pprint
from typing import Any

import numpy as np
import pandas as pd
from pandas.api.types import is_object_dtype, is_scalar

from qtabset.config import FLOAT_FORMAT, MISSING_VALUE_PLACEHOLDER


class RenderKind(enum.Enum):
    """How the cells of a column are turned into text."""

    PLAIN = "plain"
    RICH = "rich"


def is_list_column(series: pd.Series) -> bool:
    """Return ``True`` if ``series`` holds non-scalar cell values.

    Parameters
    ----------
    series : pd.Series
        Column to inspect.

    Returns
    -------
    bool
        ``True`` when the column has object dtype and at least one value is
        not a scalar in the pandas sense (lists, dicts, data frames, arbitrary
        objects).

    Examples
    --------
    >>> import pandas as pd
    >>> is_list_column(pd.Series([[1, 2], [3]]))
    True
    >>> is_list_column(pd.Series(["a", "b"]))
    False
    """
    if not is_object_dtype(series.dtype):
        return False
    return any(not is_scalar(value) for value in series)


def classify_column(series: pd.Series) -> RenderKind:
    """Tag a column with the render path used for its cells."""
    return RenderKind.RICH if is_list_column(series) else RenderKind.PLAIN


def classify_columns(data: pd.DataFrame, columns: list[str]) -> dict[str, RenderKind]:
    """Return a mapping of column name to :class:`RenderKind`."""
    return {column: classify_column(data[column]) for column in columns}


def _is_missing(value: Any) -> bool:
    if value is None or value is pd.NA or value is pd.NaT:
        return True
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    return False


def render_plain(value: Any) -> str:
    """Render a scalar cell value as plain text.

    Missing values become the configured placeholder, numpy scalars are
    unwrapped, floats with no fractional part lose their trailing ``.0`` and
    other floats are written with 15 significant digits.

    Parameters
    ----------
    value : Any
        Scalar cell value.

    Returns
    -------
    str
        Text written to the document.

    Examples
    --------
    >>> render_plain(10.0)
    '10'
    >>> render_plain(2.5)
    '2.5'
    >>> render_plain(None)
    'NA'
    """
    if _is_missing(value):
        return MISSING_VALUE_PLACEHOLDER
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isfinite(value):
        if value.is_integer():
            return str(int(value))
        return format(value, FLOAT_FORMAT)
    return str(value)


def render_rich(value: Any) -> str:
    """Render an opaque cell value the way a notebook would display it.

    The IPython display protocol is tried first (``_repr_markdown_`` then
    ``_repr_html_``), so data frames, styled tables and most plotting objects
    render as markdown or HTML. Containers fall back to ``pprint`` and other
    objects to ``str``. Line breaks inside the rendered text are preserved.

    Parameters
    ----------
    value : Any
        Cell value of a list column.

    Returns
    -------
    str
        Rendered representation, possibly spanning multiple lines.

    Raises
    ------
    Exception
        Whatever the object's display hook raises; it is not caught here.
    """
    for hook in ("_repr_markdown_", "_repr_html_"):
        method = getattr(value, hook, None)
        if callable(method):
            rendered = method()
            if rendered is not None:
                # Hooks may return (data, metadata) tuples
                if isinstance(rendered, tuple):
                    rendered = rendered[0]
                return str(rendered).rstrip("\n")
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return pprint.pformat(value)
    if is_scalar(value):
        return render_plain(value)
    return str(value)


def render_cell(value: Any, kind: RenderKind) -> str:
    """Dispatch a cell value to the render path of its column."""
    if kind is RenderKind.RICH:
        return render_rich(value)
    return render_plain(value)


__all__ = [
    "RenderKind",
    "classify_column",
    "classify_columns",
    "is_list_column",
    "render_cell",
    "render_plain",
    "render_rich",
]

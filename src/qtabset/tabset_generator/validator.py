"""Argument validation and normalization for the tabset generator.

Every check in this module runs before any markup is written, so a call
that fails validation produces no output at all. Each violated constraint
raises its own error with a message naming the offending argument and,
where relevant, the offending columns.

Column selections replace the tidy-select style of notebook tools with an
explicit rule: a selection is a column name, a 0-based integer position or a
sequence mixing both. The selection is resolved once into an ordered list of
column names.
"""

from __future__ import annotations

import logging
import math
import numbers
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

import pandas as pd

from qtabset.config import LAYOUT_PATTERN, TABSET_WIDTHS
from qtabset.exceptions import ConfigurationError, DataValidationError

from .cell_render import is_list_column

logger = logging.getLogger(__name__)

ColumnSelection = Union[str, int, Sequence[Union[str, int]]]


@dataclass(frozen=True)
class TabsetOptions:
    """Validated arguments of a single rendering call.

    Attributes
    ----------
    tabset_names : tuple[str, ...]
        Tabset (grouping) columns, outermost first.
    output_names : tuple[str, ...]
        Output columns, in display order.
    heading_levels : tuple[int | None, ...]
        One entry per tabset column; ``None`` renders that level as a tabset.
    layout : str | None
        Layout directive wrapped around each row's content.
    pills : bool
        Whether tabs are displayed as pills.
    tabset_width : str
        One of ``"default"``, ``"fill"`` or ``"justified"``.
    """

    tabset_names: tuple[str, ...]
    output_names: tuple[str, ...]
    heading_levels: tuple[int | None, ...]
    layout: str | None = None
    pills: bool = False
    tabset_width: str = "default"

    @property
    def depth(self) -> int:
        """Number of nesting levels."""
        return len(self.tabset_names)


def validate_table(data: Any) -> None:
    """Check that ``data`` is a data frame with at least one row and two columns."""
    if not isinstance(data, pd.DataFrame):
        raise DataValidationError(
            "`data` must be a data frame.",
            context={"argument": "data", "type": type(data).__name__},
        )
    if len(data.index) < 1:
        raise DataValidationError(
            "`data` must have one or more rows.", context={"argument": "data"}
        )
    if len(data.columns) < 2:
        raise DataValidationError(
            "`data` must have two or more columns.", context={"argument": "data"}
        )


def validate_layout(layout: Any) -> str | None:
    """Return the layout directive as a string, or ``None`` when unset.

    Examples
    --------
    >>> validate_layout('::: {layout="[2, 3]"}')
    '::: {layout="[2, 3]"}'
    >>> validate_layout(None) is None
    True
    """
    if layout is None:
        return None
    if isinstance(layout, (list, tuple)):
        if len(layout) != 1:
            raise ConfigurationError(
                "`layout` must be length 1.",
                context={"argument": "layout", "length": len(layout)},
            )
        layout = layout[0]
    if not isinstance(layout, str):
        raise ConfigurationError(
            "`layout` must be character.",
            context={"argument": "layout", "type": type(layout).__name__},
        )
    if not re.match(LAYOUT_PATTERN, layout):
        raise ConfigurationError(
            '`layout` must begin with at least three or more repetitions of ":".',
            context={"argument": "layout", "value": layout},
        )
    return layout


def _is_absent(value: Any) -> bool:
    return value is None or value is pd.NA


def validate_heading_levels(heading_levels: Any) -> tuple[int | None, ...] | None:
    """Normalize ``heading_levels`` to a tuple of positive ints and ``None``.

    Parameters
    ----------
    heading_levels : Any
        ``None``, a single number, or a sequence of numbers and ``None``.

    Returns
    -------
    tuple[int | None, ...] | None
        ``None`` when not supplied, otherwise the coerced levels. Numbers are
        truncated to integers.

    Raises
    ------
    ConfigurationError
        If any entry is non-numeric, NaN, infinite or not positive, or if the
        sequence is empty.

    Examples
    --------
    >>> validate_heading_levels([2, None, 3.0])
    (2, None, 3)
    """
    if heading_levels is None:
        return None
    # Arrays and Series are not Sequence subclasses but iterate like one
    if isinstance(heading_levels, (str, bytes)) or not hasattr(
        heading_levels, "__iter__"
    ):
        values = [heading_levels]
    else:
        values = list(heading_levels)

    for value in values:
        if _is_absent(value):
            continue
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ConfigurationError(
                "`heading_levels` must be numeric.",
                context={"argument": "heading_levels", "value": repr(value)},
            )
    if len(values) == 0:
        raise ConfigurationError(
            "`heading_levels` must be length 1 or greater.",
            context={"argument": "heading_levels"},
        )
    nums = [float(value) for value in values if not _is_absent(value)]
    if any(math.isnan(num) for num in nums):
        raise ConfigurationError(
            "`heading_levels` must not include NaN.",
            context={"argument": "heading_levels"},
        )
    if any(math.isinf(num) for num in nums):
        raise ConfigurationError(
            "`heading_levels` must not be infinite.",
            context={"argument": "heading_levels"},
        )
    if any(num <= 0 for num in nums):
        raise ConfigurationError(
            "`heading_levels` except for NAs must be positive.",
            context={"argument": "heading_levels"},
        )
    return tuple(None if _is_absent(value) else int(value) for value in values)


def validate_pills(pills: Any) -> bool:
    """Accept only the booleans ``True`` and ``False``."""
    if pills is True or pills is False:
        return pills
    raise ConfigurationError(
        "`pills` must be a `True` or `False`",
        context={"argument": "pills", "value": repr(pills)},
    )


def validate_tabset_width(tabset_width: Any) -> str:
    """Match ``tabset_width`` against the allowed widths.

    An exact match wins; otherwise a unique prefix is accepted.

    Examples
    --------
    >>> validate_tabset_width("fill")
    'fill'
    >>> validate_tabset_width("j")
    'justified'
    """
    if isinstance(tabset_width, str) and tabset_width:
        if tabset_width in TABSET_WIDTHS:
            return tabset_width
        matches = [width for width in TABSET_WIDTHS if width.startswith(tabset_width)]
        if len(matches) == 1:
            return matches[0]
    allowed = ", ".join(f'"{width}"' for width in TABSET_WIDTHS)
    raise ConfigurationError(
        f"`tabset_width` must be one of {allowed}.",
        context={"argument": "tabset_width", "value": repr(tabset_width)},
    )


def resolve_columns(
    data: pd.DataFrame, selection: ColumnSelection, argument: str
) -> list[str]:
    """Resolve a column selection into an ordered list of column names.

    Parameters
    ----------
    data : pd.DataFrame
        Table whose columns are selected.
    selection : str | int | Sequence[str | int]
        Column names and/or 0-based positions.
    argument : str
        Argument name used in error messages (``tabset_vars`` or
        ``output_vars``).

    Returns
    -------
    list[str]
        Selected column names, first occurrence order, without duplicates.

    Raises
    ------
    DataValidationError
        If a selection names an unknown column or an out-of-range position.
    """
    if selection is None:
        items: list[Any] = []
    elif isinstance(selection, (str, numbers.Integral)):
        items = [selection]
    else:
        items = list(selection)

    columns = list(data.columns)
    names: list[str] = []
    unknown: list[str] = []
    for item in items:
        if isinstance(item, bool):
            unknown.append(repr(item))
            continue
        if isinstance(item, numbers.Integral):
            if -len(columns) <= item < len(columns):
                name = columns[item]
            else:
                unknown.append(str(item))
                continue
        elif item in columns:
            name = item
        else:
            unknown.append(str(item))
            continue
        if name not in names:
            names.append(name)
    if unknown:
        raise DataValidationError(
            f"`{argument}` selects undefined columns: {', '.join(unknown)}",
            context={"argument": argument, "columns": unknown},
        )
    return names


def validate_data(
    data: Any,
    tabset_vars: ColumnSelection,
    output_vars: ColumnSelection,
    layout: Any = None,
    heading_levels: Any = None,
    pills: Any = False,
    tabset_width: Any = "default",
) -> TabsetOptions:
    """Validate every argument of a rendering call.

    Parameters
    ----------
    data : Any
        Expected to be a ``pandas.DataFrame``.
    tabset_vars, output_vars : str | int | Sequence[str | int]
        Column selections for tabset labels and tab content.
    layout : Any, optional
        Layout directive or ``None``.
    heading_levels : Any, optional
        Heading levels or ``None``.
    pills : Any, optional
        Must be a boolean.
    tabset_width : Any, optional
        ``"default"``, ``"fill"`` or ``"justified"``.

    Returns
    -------
    TabsetOptions
        Immutable, normalized options.

    Raises
    ------
    qtabset.exceptions.ConfigurationError
        For invalid ``layout``, ``heading_levels``, ``pills`` or
        ``tabset_width``.
    qtabset.exceptions.DataValidationError
        For an invalid table or column selections.
    """
    pills = validate_pills(pills)
    tabset_width = validate_tabset_width(tabset_width)
    validate_table(data)
    layout = validate_layout(layout)
    levels = validate_heading_levels(heading_levels)

    tabset_names = resolve_columns(data, tabset_vars, "tabset_vars")
    if len(tabset_names) == 0:
        raise DataValidationError(
            "`tabset_vars` must be of length 1 or more.",
            context={"argument": "tabset_vars"},
        )

    list_columns = [name for name in tabset_names if is_list_column(data[name])]
    if list_columns:
        raise DataValidationError(
            "`tabset_vars` must not contain list columns: "
            + ", ".join(map(str, list_columns)),
            context={"argument": "tabset_vars", "columns": list_columns},
        )

    if levels is None:
        levels = (None,) * len(tabset_names)
    if len(levels) != len(tabset_names):
        raise ConfigurationError(
            "The number of columns specified in `tabset_vars` "
            "and the length of `heading_levels` must be the same.",
            context={
                "argument": "heading_levels",
                "tabset_vars": len(tabset_names),
                "heading_levels": len(levels),
            },
        )

    output_names = resolve_columns(data, output_vars, "output_vars")
    if len(output_names) == 0:
        raise DataValidationError(
            "`output_vars` must be of length 1 or more.",
            context={"argument": "output_vars"},
        )
    overlap = [name for name in output_names if name in tabset_names]
    if overlap:
        raise DataValidationError(
            "There must not be variables that are included in both "
            "`tabset_vars` and `output_vars`: " + ", ".join(map(str, overlap)),
            context={"argument": "output_vars", "columns": overlap},
        )

    logger.debug(
        "Validated tabset columns %s and output columns %s",
        tabset_names,
        output_names,
    )
    return TabsetOptions(
        tabset_names=tuple(tabset_names),
        output_names=tuple(output_names),
        heading_levels=levels,
        layout=layout,
        pills=pills,
        tabset_width=tabset_width,
    )


__all__ = [
    "ColumnSelection",
    "TabsetOptions",
    "resolve_columns",
    "validate_data",
    "validate_heading_levels",
    "validate_layout",
    "validate_pills",
    "validate_tabset_width",
    "validate_table",
]

"""Table loading utilities for the tabset generator.

Reads tables from delimited text, JSON and JSON-lines files into pandas
data frames, and applies categorical ("factor") orderings so callers can
control the order of tabs without renaming values.

JSON inputs can carry list columns (arrays or objects in a cell); delimited
text files always produce scalar columns.

Examples
--------
>>> from pathlib import Path
>>> df = load_table(Path("results.csv"), categories={"size": ["S", "M", "L"]})  # doctest: +SKIP
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from qtabset.config import DEFAULT_CSV_DELIMITER, JSON_LINES_SUFFIXES, JSON_SUFFIXES
from qtabset.exceptions import DataValidationError

from .partitioner import category_labels

logger = logging.getLogger(__name__)


def read_table_file(path: Path, delimiter: str = DEFAULT_CSV_DELIMITER) -> pd.DataFrame:
    """Read ``path`` into a data frame, choosing the reader by file suffix.

    Parameters
    ----------
    path : Path
        Input file. ``.json`` is read as a JSON table, ``.jsonl`` and
        ``.ndjson`` as JSON lines, anything else as delimited text.
    delimiter : str, optional
        Field delimiter for delimited text files.

    Returns
    -------
    pd.DataFrame
        Parsed table.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    DataValidationError
        If the file cannot be parsed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Input table not found: {path}")
    suffix = path.suffix.lower()
    try:
        if suffix in JSON_LINES_SUFFIXES:
            return pd.read_json(path, lines=True)
        if suffix in JSON_SUFFIXES:
            return pd.read_json(path)
        return pd.read_csv(path, sep=delimiter)
    except (ValueError, pd.errors.ParserError) as exc:
        # EmptyDataError is a ValueError subclass
        raise DataValidationError(
            f"Could not parse table {path.name}: {exc}",
            context={"path": str(path)},
        ) from exc


def apply_categories(
    data: pd.DataFrame, categories: Mapping[str, Sequence[Any]] | None
) -> pd.DataFrame:
    """Convert columns to ordered categoricals with the given level order.

    Values and levels are compared by their text labels, so numeric columns
    read from a file can be ordered with levels given as strings.

    Parameters
    ----------
    data : pd.DataFrame
        Table to convert. It is not modified.
    categories : Mapping[str, Sequence[Any]] | None
        Column name to ordered levels.

    Returns
    -------
    pd.DataFrame
        Copy of ``data`` with the named columns converted.

    Raises
    ------
    DataValidationError
        If a column is missing or holds values that are not among its
        levels.

    Examples
    --------
    >>> import pandas as pd
    >>> df = pd.DataFrame({"size": ["L", "S"], "v": [1, 2]})
    >>> apply_categories(df, {"size": ["S", "M", "L"]})["size"].cat.codes.tolist()
    [2, 0]
    """
    if not categories:
        return data
    result = data.copy()
    for column, levels in categories.items():
        if column not in result.columns:
            raise DataValidationError(
                f"Category column not found: {column}",
                context={"argument": "categories", "columns": [column]},
            )
        labels = [str(level) for level in levels]
        values = category_labels(result[column])
        unknown = sorted(set(values.dropna()) - set(labels))
        if unknown:
            raise DataValidationError(
                f"Column {column} has values missing from its levels: "
                + ", ".join(unknown),
                context={"argument": "categories", "columns": [column]},
            )
        result[column] = pd.Categorical(values, categories=labels, ordered=True)
        logger.debug("Column %s ordered by levels %s", column, labels)
    return result


def parse_category_spec(spec: str) -> tuple[str, list[str]]:
    """Parse a ``column=level1,level2,...`` command line specification.

    Examples
    --------
    >>> parse_category_spec("size=S,M,L")
    ('size', ['S', 'M', 'L'])
    """
    column, sep, levels = spec.partition("=")
    column = column.strip()
    if not sep or not column or not levels.strip():
        raise DataValidationError(
            f"Invalid category specification {spec!r}; expected COLUMN=L1,L2,...",
            context={"argument": "categories", "value": spec},
        )
    return column, [level.strip() for level in levels.split(",")]


def load_table(
    path: Path,
    delimiter: str = DEFAULT_CSV_DELIMITER,
    categories: Mapping[str, Sequence[Any]] | None = None,
) -> pd.DataFrame:
    """Load a table file and apply categorical orderings.

    Parameters
    ----------
    path : Path
        Input file (see :func:`read_table_file`).
    delimiter : str, optional
        Field delimiter for delimited text files.
    categories : Mapping[str, Sequence[Any]] | None, optional
        Column name to ordered levels.

    Returns
    -------
    pd.DataFrame
        Table ready to be passed to :func:`qtabset.tabset_generator.qtab`.
    """
    data = read_table_file(Path(path), delimiter=delimiter)
    logger.info(
        "Loaded %d rows and %d columns from %s",
        len(data.index),
        len(data.columns),
        path,
    )
    return apply_categories(data, categories)


__all__ = ["apply_categories", "load_table", "parse_category_spec", "read_table_file"]

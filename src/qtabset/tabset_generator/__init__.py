"""Tabset generator pipeline package.

Public API surface of the tabset generation layer. It re-exports the
functions a consumer (a notebook, the CLI or the runner) needs: the
``qtab`` entry point, its string-returning twin, table loading helpers and
the building blocks of the validate, partition and emit phases.

Consumers should import from this package rather than from its submodules.

Examples
--------
>>> import pandas as pd
>>> from qtabset.tabset_generator import render_tabsets
>>> df = pd.DataFrame({"g1": ["A", "B"], "v": [1, 2]})
>>> markup = render_tabsets(df, "g1", "v")
>>> markup.startswith("::: {.panel-tabset}")
True
"""

from .cell_render import RenderKind, classify_columns, render_plain, render_rich
from .data_loader import apply_categories, load_table, parse_category_spec
from .emitter import emit_tabsets, layout_closer, make_tabset_div
from .partitioner import BoundaryTable, get_tabset_master, prep_data
from .processor import qtab, render_tabsets
from .validator import TabsetOptions, validate_data

__all__ = [
    "BoundaryTable",
    "RenderKind",
    "TabsetOptions",
    "apply_categories",
    "classify_columns",
    "emit_tabsets",
    "get_tabset_master",
    "layout_closer",
    "load_table",
    "make_tabset_div",
    "parse_category_spec",
    "prep_data",
    "qtab",
    "render_plain",
    "render_rich",
    "render_tabsets",
    "validate_data",
]

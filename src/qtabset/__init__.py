"""qtabset package.

Renders grouped tabular data into nested Quarto tabset panels. Each unique
combination of the tabset columns becomes a tab (or a heading), and the
output columns of the row become the tab content.

Package Structure
-----------------
- `tabset_generator/`:
    Validation, partitioning (sorting and boundary detection) and emission
    of the tabset markup, plus table loading and cell rendering helpers.
- `config.py`: All configuration constants (markup tokens, paths, log format),
  as UPPER_SNAKE_CASE.
- `settings.py`: Environment and ``.env`` backed defaults for the CLI.
- `exceptions.py`: Project-specific exception classes.
- `cli.py`: The ``qtabset`` command line interface.

Examples
--------
>>> import pandas as pd
>>> from qtabset import qtab
>>> df = pd.DataFrame({"g": ["A", "B"], "v": [1, 2]})
>>> qtab(df, "g", "v")  # doctest: +SKIP
"""

from .tabset_generator import qtab, render_tabsets

__all__ = ["qtab", "render_tabsets"]

"""Unit tests for argument validation of the tabset generator."""

import math

import pandas as pd
import pytest

from qtabset.exceptions import ConfigurationError, DataValidationError
from qtabset.tabset_generator import validator as v


@pytest.fixture
def df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "g1": ["A", "A", "B"],
            "g2": ["X", "Y", "X"],
            "v1": [1, 2, 3],
            "v2": [0.5, 1.5, 2.5],
        }
    )


def test_validate_data_defaults(df):
    opts = v.validate_data(df, ["g1", "g2"], ["v1", "v2"])
    assert opts.tabset_names == ("g1", "g2")
    assert opts.output_names == ("v1", "v2")
    assert opts.heading_levels == (None, None)
    assert opts.layout is None
    assert opts.pills is False
    assert opts.tabset_width == "default"
    assert opts.depth == 2


def test_validate_data_rejects_non_frame():
    with pytest.raises(DataValidationError, match="must be a data frame"):
        v.validate_data([{"a": 1}], "a", "b")


def test_validate_data_rejects_empty_rows():
    empty = pd.DataFrame({"a": [], "b": []})
    with pytest.raises(DataValidationError, match="one or more rows"):
        v.validate_data(empty, "a", "b")


def test_validate_data_rejects_single_column():
    with pytest.raises(DataValidationError, match="two or more columns"):
        v.validate_data(pd.DataFrame({"a": [1]}), "a", "a")


@pytest.mark.parametrize(
    "layout, message",
    [
        (["::: {}", "::: {}"], "length 1"),
        (3, "must be character"),
        (":: {layout}", "three or more repetitions"),
        ("{layout} :::", "three or more repetitions"),
    ],
)
def test_validate_layout_errors(layout, message):
    with pytest.raises(ConfigurationError, match=message):
        v.validate_layout(layout)


def test_validate_layout_accepts_single_element_list():
    assert v.validate_layout([':::: {layout="[1, 1]"}']) == ':::: {layout="[1, 1]"}'


def test_validate_heading_levels_coerces_and_keeps_absent():
    assert v.validate_heading_levels([2, None, 3.9]) == (2, None, 3)
    assert v.validate_heading_levels(4) == (4,)
    assert v.validate_heading_levels([pd.NA, 1]) == (None, 1)
    assert v.validate_heading_levels(None) is None


@pytest.mark.parametrize(
    "levels, message",
    [
        (["2"], "must be numeric"),
        ([True], "must be numeric"),
        ("2", "must be numeric"),
        ([], "length 1 or greater"),
        ([math.nan, 2], "must not include NaN"),
        ([math.inf], "must not be infinite"),
        ([0, None], "must be positive"),
        ([-1], "must be positive"),
    ],
)
def test_validate_heading_levels_errors(levels, message):
    with pytest.raises(ConfigurationError, match=message):
        v.validate_heading_levels(levels)


def test_heading_levels_length_must_match(df):
    with pytest.raises(ConfigurationError, match="must be the same"):
        v.validate_data(df, ["g1", "g2"], "v1", heading_levels=[2])


def test_tabset_vars_must_not_be_empty(df):
    with pytest.raises(DataValidationError, match="`tabset_vars` must be of length 1"):
        v.validate_data(df, [], "v1")


def test_output_vars_must_not_be_empty(df):
    with pytest.raises(DataValidationError, match="`output_vars` must be of length 1"):
        v.validate_data(df, "g1", [])


def test_overlap_is_rejected_and_named(df):
    with pytest.raises(DataValidationError, match="both") as excinfo:
        v.validate_data(df, ["g1", "g2"], ["g2", "v1"])
    assert excinfo.value.context["columns"] == ["g2"]


def test_list_tabset_columns_are_named(df):
    df["l1"] = [[1], [2], [3]]
    df["l2"] = [{"a": 1}, {"b": 2}, {"c": 3}]
    with pytest.raises(DataValidationError, match="list columns: l1, l2") as excinfo:
        v.validate_data(df, ["l1", "g1", "l2"], "v1")
    assert excinfo.value.context["columns"] == ["l1", "l2"]


def test_list_output_columns_are_allowed(df):
    df["l1"] = [[1], [2], [3]]
    opts = v.validate_data(df, "g1", ["l1"])
    assert opts.output_names == ("l1",)


def test_resolve_columns_unknown_names(df):
    with pytest.raises(DataValidationError, match="undefined columns: nope, 9"):
        v.resolve_columns(df, ["g1", "nope", 9], "tabset_vars")


def test_resolve_columns_positions_and_duplicates(df):
    assert v.resolve_columns(df, 0, "tabset_vars") == ["g1"]
    assert v.resolve_columns(df, [1, "g2", -1, "v2"], "output_vars") == ["g2", "v2"]


def test_pills_must_be_bool(df):
    with pytest.raises(ConfigurationError, match="pills"):
        v.validate_data(df, "g1", "v1", pills="yes")


def test_tabset_width_matching(df):
    assert v.validate_tabset_width("j") == "justified"
    assert v.validate_tabset_width("fill") == "fill"
    with pytest.raises(ConfigurationError, match="tabset_width"):
        v.validate_tabset_width("wide")
    with pytest.raises(ConfigurationError):
        v.validate_tabset_width("")
    opts = v.validate_data(df, "g1", "v1", pills=True, tabset_width="fi")
    assert (opts.pills, opts.tabset_width) == (True, "fill")


def test_integer_column_labels_are_named_in_errors():
    listy = pd.DataFrame([[[1], 2], [[3], 4]])
    with pytest.raises(DataValidationError, match="list columns: 0$") as excinfo:
        v.validate_data(listy, 0, 1)
    assert excinfo.value.context["columns"] == [0]

    plain = pd.DataFrame([["a", 2], ["b", 4]])
    with pytest.raises(DataValidationError, match="`output_vars`: 0$") as excinfo:
        v.validate_data(plain, 0, [0, 1])
    assert excinfo.value.context["columns"] == [0]

"""Command line tests for ``qtabset.cli``."""

import pytest

from qtabset import cli
from qtabset.exceptions import ConfigurationError

CSV = "g1,g2,v\nB,X,30\nA,X,10\nA,Y,20\n"
EXPECTED = (
    "::: {.panel-tabset}\n\n# A\n\n::: {.panel-tabset}\n\n## X\n\n10\n\n## Y\n\n20\n\n"
    ":::\n\n# B\n\n::: {.panel-tabset}\n\n## X\n\n30\n\n:::\n\n:::\n\n"
)


@pytest.fixture
def table(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "results.csv"
    path.write_text(CSV, encoding="utf-8")
    return path


def test_split_names():
    assert cli.split_names(" a, b ,,c ") == ["a", "b", "c"]


def test_parse_heading_levels():
    assert cli.parse_heading_levels("2, NA,none,,3") == [2.0, None, None, None, 3.0]
    assert cli.parse_heading_levels(None) is None
    with pytest.raises(ConfigurationError, match="must be numeric"):
        cli.parse_heading_levels("2,x")


def test_main_writes_markup_to_stdout(table, capsys):
    code = cli.main([str(table), "--tabset-vars", "g1,g2", "--output-vars", "v"])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.out == EXPECTED


def test_main_heading_levels_and_width(table, capsys):
    code = cli.main(
        [
            str(table),
            "--tabset-vars",
            "g1,g2",
            "--output-vars",
            "v",
            "--heading-levels",
            "NA,3",
            "--tabset-width",
            "fill",
        ]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("::: {.panel-tabset} .nav-fill\n\n# A\n\n### X\n\n10\n\n")
    assert out.count(":::") == 2


def test_main_writes_output_file(table, tmp_path, capsys):
    target = tmp_path / "out" / "tabs.qmd"
    code = cli.main(
        [str(table), "--tabset-vars", "g1,g2", "--output-vars", "v", "--output", str(target)]
    )
    assert code == 0
    assert target.read_text(encoding="utf-8") == EXPECTED
    assert capsys.readouterr().out == ""


def test_main_category_orders_tabs(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "sizes.csv"
    path.write_text("size,v\nL,1\nS,2\nM,3\n", encoding="utf-8")
    code = cli.main(
        [
            str(path),
            "--tabset-vars",
            "size",
            "--output-vars",
            "v",
            "--category",
            "size=S,M,L",
        ]
    )
    assert code == 0
    assert capsys.readouterr().out == (
        "::: {.panel-tabset}\n\n# S\n\n2\n\n# M\n\n3\n\n# L\n\n1\n\n:::\n\n"
    )


@pytest.mark.parametrize(
    "extra",
    [
        ["--tabset-vars", "nope", "--output-vars", "v"],
        ["--tabset-vars", "g1", "--output-vars", "g1"],
        ["--tabset-vars", "g1", "--output-vars", "v", "--layout", "{bad}"],
        ["--tabset-vars", "g1", "--output-vars", "v", "--heading-levels", "x"],
        ["--tabset-vars", "g1", "--output-vars", "v", "--category", "g1"],
    ],
)
def test_main_invalid_arguments_exit_2(table, capsys, extra):
    assert cli.main([str(table), *extra]) == 2
    assert capsys.readouterr().out == ""


def test_main_missing_input_exit_1(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    code = cli.main([str(tmp_path / "missing.csv"), "--tabset-vars", "a", "--output-vars", "b"])
    assert code == 1
    assert capsys.readouterr().out == ""


def test_main_requires_column_flags(table):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(table), "--tabset-vars", "g1"])
    assert excinfo.value.code == 2


def test_main_invalid_environment_exit_2(table, monkeypatch):
    monkeypatch.setenv("QTABSET_PILLS", "maybe")
    assert cli.main([str(table), "--tabset-vars", "g1", "--output-vars", "v"]) == 2


def test_main_reads_defaults_from_env_file(table, tmp_path, capsys):
    (tmp_path / ".env").write_text("QTABSET_PILLS=true\n", encoding="utf-8")
    assert cli.main([str(table), "--tabset-vars", "g1", "--output-vars", "v"]) == 0
    assert capsys.readouterr().out.startswith("::: {.panel-tabset} .nav-pills\n\n")


def test_flag_overrides_environment(table, monkeypatch, capsys):
    monkeypatch.setenv("QTABSET_PILLS", "1")
    code = cli.main([str(table), "--tabset-vars", "g1", "--output-vars", "v", "--no-pills"])
    assert code == 0
    assert capsys.readouterr().out.startswith("::: {.panel-tabset}\n\n")

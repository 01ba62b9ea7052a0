"""Tests for the command line front end."""

import pytest

from craftcalc.cli import main
from craftcalc.data.loader import EXAMPLE_PLAN_PATH


@pytest.fixture
def no_config(tmp_path):
    return ["--config", str(tmp_path / "missing.yaml")]


def test_prints_shopping_list(capsys, no_config):
    assert main([str(EXAMPLE_PLAN_PATH), *no_config]) == 0
    assert capsys.readouterr().out == "- 3 diamond\n- 1 log\n"


def test_ignore_stock(capsys, no_config):
    assert main([str(EXAMPLE_PLAN_PATH), "--ignore-stock", *no_config]) == 0
    assert capsys.readouterr().out == "- 1 coal\n- 3 diamond\n- 1 log\n"


def test_target_override(capsys, no_config):
    args = [str(EXAMPLE_PLAN_PATH), "--target", "torch", "--quantity", "8", *no_config]
    assert main(args) == 0
    # 2 torch crafts need 2 sticks, both in stock; 2 coal minus 1 owned
    assert capsys.readouterr().out == "- 1 coal\n"


def test_tree_and_table(capsys, no_config):
    args = [str(EXAMPLE_PLAN_PATH), "--tree", "--table", "--ignore-stock", *no_config]
    assert main(args) == 0
    out = capsys.readouterr().out
    assert "- 1 diamond pickaxe (1x craft)" in out
    assert "  - 2 stick (1x craft)" in out
    assert out.splitlines()[-1] == "- 1 log"
    assert any(line.startswith("Item") for line in out.splitlines())


def test_nothing_to_gather(tmp_path, capsys, no_config):
    path = tmp_path / "plan.txt"
    path.write_text("need:\n- 1 stick\nhave:\n- 1 stick\n", encoding="utf-8")
    assert main([str(path), *no_config]) == 0
    assert capsys.readouterr().out == "Nothing to gather.\n"


@pytest.mark.parametrize(
    "text, message",
    [
        ("need:\n- 1 a\nrecipes:\n- 1 a = 1 b\n- 1 b = 1 a\n", "cycle"),
        ("recipes:\n- 1 a = 1 b\n- 2 a = 1 c\n", "More than one recipe"),
        ("need:\noops\n", "Line 2"),
    ],
)
def test_errors_exit_with_status_1(tmp_path, capsys, no_config, text, message):
    path = tmp_path / "plan.txt"
    path.write_text(text, encoding="utf-8")
    assert main([str(path), *no_config]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert message in captured.err


def test_missing_file(tmp_path, capsys, no_config):
    assert main([str(tmp_path / "nope.txt"), *no_config]) == 1
    assert "error:" in capsys.readouterr().err


def test_bad_quantity(capsys, no_config):
    args = [str(EXAMPLE_PLAN_PATH), "--target", "torch", "--quantity", "0", *no_config]
    assert main(args) == 1
    assert "Invalid quantity" in capsys.readouterr().err

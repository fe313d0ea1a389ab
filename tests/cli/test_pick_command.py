from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from searchlist import __version__
from searchlist.cli.main import app

runner = CliRunner()


@pytest.fixture
def picker(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    calls: dict[str, Any] = {"reattached": False, "choose": lambda items: items[-1:]}

    def fake_run_picker(items, config=None):  # type: ignore[no-untyped-def]
        calls["items"] = items
        calls["config"] = config
        return calls["choose"](items)

    def fake_reattach() -> None:
        calls["reattached"] = True

    monkeypatch.setattr("searchlist.tui.app.run_picker", fake_run_picker)
    monkeypatch.setattr("searchlist.cli.main.reattach_tty", fake_reattach)
    return calls


def _items_file(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "items.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_pick_from_file_prints_chosen_titles(tmp_path: Path, picker: dict[str, Any]) -> None:
    path = _items_file(tmp_path, "Alpha Notes\tfirst note\n\nBeta Plan\n")

    result = runner.invoke(app, ["pick", str(path)])

    assert result.exit_code == 0, result.output
    assert result.output == "Beta Plan\n"
    assert [(i.title, i.description) for i in picker["items"]] == [
        ("Alpha Notes", "first note"),
        ("Beta Plan", ""),
    ]
    assert not picker["reattached"]


def test_pick_from_stdin_reattaches_terminal(picker: dict[str, Any]) -> None:
    picker["choose"] = lambda items: items

    result = runner.invoke(app, ["pick"], input="one\ntwo\n")

    assert result.exit_code == 0, result.output
    assert result.output == "one\ntwo\n"
    assert picker["reattached"]


def test_flags_reach_the_config(tmp_path: Path, picker: dict[str, Any]) -> None:
    path = _items_file(tmp_path, "a\nb\n")

    result = runner.invoke(app, ["pick", str(path), "--fuzzy", "--matches-only", "--sort-by-matches"])

    assert result.exit_code == 0, result.output
    config = picker["config"]
    assert config.fuzzy
    assert config.matches_only
    assert config.sort_by_match_count
    assert not config.case_sensitive


def test_config_file_is_applied(tmp_path: Path, picker: dict[str, Any]) -> None:
    path = _items_file(tmp_path, "a\n")
    config_path = tmp_path / "conf.json"
    config_path.write_text('{"caseSensitive": true, "height": 5}', encoding="utf-8")

    result = runner.invoke(app, ["pick", str(path), "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert picker["config"].case_sensitive
    assert picker["config"].height == 5


def test_cancelled_pick_exits_nonzero(tmp_path: Path, picker: dict[str, Any]) -> None:
    picker["choose"] = lambda items: None
    path = _items_file(tmp_path, "a\n")

    result = runner.invoke(app, ["pick", str(path)])

    assert result.exit_code == 1
    assert result.output == ""


def test_empty_input_is_reported(tmp_path: Path, picker: dict[str, Any]) -> None:
    path = _items_file(tmp_path, "\n  \n")

    result = runner.invoke(app, ["pick", str(path)])

    assert result.exit_code == 1
    assert "Nothing to pick from." in result.output
    assert "items" not in picker


def test_bad_config_is_reported(tmp_path: Path, picker: dict[str, Any]) -> None:
    path = _items_file(tmp_path, "a\n")
    config_path = tmp_path / "conf.json"
    config_path.write_text('{"height": "tall"}', encoding="utf-8")

    result = runner.invoke(app, ["pick", str(path), "-c", str(config_path)])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert "items" not in picker


def test_unreadable_file_is_reported(tmp_path: Path, picker: dict[str, Any]) -> None:
    result = runner.invoke(app, ["pick", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "cannot read" in result.output


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"searchlist {__version__}" in result.output


def test_invalid_log_level(tmp_path: Path, picker: dict[str, Any]) -> None:
    path = _items_file(tmp_path, "a\n")

    result = runner.invoke(app, ["--log-level", "loud", "pick", str(path)])

    assert result.exit_code == 2
    assert "invalid log level" in result.output


def test_missing_terminal_is_reported(monkeypatch: pytest.MonkeyPatch, picker: dict[str, Any]) -> None:
    def no_tty() -> None:
        raise OSError(6, "No such device or address")

    monkeypatch.setattr("searchlist.cli.main.reattach_tty", no_tty)

    result = runner.invoke(app, ["pick"], input="one\n")

    assert result.exit_code == 1
    assert "no terminal to run the picker on" in result.output
    assert "items" not in picker

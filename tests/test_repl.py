import io
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from shell.repl import Shell, describe
from store.repository import KeyValueStore
from store.values import Boolean, Integer, Text


@pytest.fixture
def shell(tmp_path: Path) -> Shell:
    return Shell(KeyValueStore(tmp_path / "data.txt"))


def test_describe() -> None:
    assert describe(Integer(42)) == "Integer(42)"
    assert describe(Boolean(True)) == "Boolean(true)"
    assert describe(Text("hi")) == "Text('hi')"


def test_set_and_get(shell: Shell, capsys: pytest.CaptureFixture[str]) -> None:
    assert shell.execute("set foo 42") is True
    assert shell.execute("get foo") is True
    assert shell.execute("get missing") is True
    out = capsys.readouterr().out
    assert out.splitlines() == ["Value inserted", "Integer(42)", "Key not found"]


def test_set_infers_boolean_and_text(shell: Shell) -> None:
    shell.execute("set flag true")
    shell.execute("set name hello")
    assert shell.store.get("flag") == Boolean(True)
    assert shell.store.get("name") == Text("hello")


def test_remove_list_and_clear(shell: Shell, capsys: pytest.CaptureFixture[str]) -> None:
    shell.execute("set b 2")
    shell.execute("set a x")
    shell.execute("remove b")
    shell.execute("list")
    shell.execute("clear")
    shell.execute("list")
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Value inserted",
        "Value inserted",
        "Key removed",
        "a: Text('x')",
        "Store cleared",
        "(empty)",
    ]


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("get", "Usage: get <key>"),
        ("get a b", "Usage: get <key>"),
        ("set a", "Usage: set <key> <value>"),
        ("remove", "Usage: remove <key>"),
        ("frobnicate", "Unknown command."),
    ],
)
def test_usage_and_unknown_commands(
    shell: Shell, capsys: pytest.CaptureFixture[str], line: str, expected: str
) -> None:
    assert shell.execute(line) is True
    assert capsys.readouterr().out.strip() == expected


def test_blank_line_and_exit(shell: Shell, capsys: pytest.CaptureFixture[str]) -> None:
    assert shell.execute("   ") is True
    assert shell.execute("exit") is False
    assert capsys.readouterr().out == ""


def test_rejected_value_is_reported(shell: Shell, capsys: pytest.CaptureFixture[str]) -> None:
    assert shell.execute("set k a=b") is True
    captured = capsys.readouterr()
    assert "Failed to insert value" in captured.err
    assert shell.store.is_empty()


def test_write_failure_is_reported_and_loop_continues(
    shell: Shell, capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
) -> None:
    with patch.object(shell.store, "_write_back", side_effect=OSError("read-only")):
        with caplog.at_level(logging.WARNING, logger="shell.repl"):
            assert shell.execute("clear") is True
    captured = capsys.readouterr()
    assert "Failed to clear store: read-only" in captured.err
    assert "Failed to clear store" in caplog.text


def test_run_reads_until_exit(shell: Shell, capsys: pytest.CaptureFixture[str]) -> None:
    shell.run(io.StringIO("set a 1\nget a\nexit\nget a\n"))
    out = capsys.readouterr().out
    assert out.count("Integer(1)") == 1
    assert out.startswith("> ")


def test_run_stops_at_eof(shell: Shell, capsys: pytest.CaptureFixture[str]) -> None:
    shell.run(io.StringIO("set a 1\n"))
    assert shell.store.get("a") == Integer(1)
    assert "Value inserted" in capsys.readouterr().out

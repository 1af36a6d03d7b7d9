"""Interactive command loop over a KeyValueStore."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import TextIO

import typer

from store import codec
from store.repository import KeyValueStore
from store.values import Text, Value

logger = logging.getLogger(__name__)

USAGE = {
    "get": "Usage: get <key>",
    "set": "Usage: set <key> <value>",
    "remove": "Usage: remove <key>",
}

HELP_TEXT = """Commands:
  get <key>           Show the value stored under <key>
  set <key> <value>   Store <value> (true/false, integer or text)
  remove <key>        Delete <key>
  list                Show every entry
  clear               Delete every entry
  help                Show this message
  exit                Leave the shell"""


def describe(value: Value) -> str:
    if isinstance(value, Text):
        return f"Text({value.value!r})"
    return f"{type(value).__name__}({codec.format_value(value)})"


class Shell:
    """Line-oriented command interpreter.

    Each line is split on whitespace; the first token selects the command.
    Failures from the store are reported and the loop keeps going.
    """

    def __init__(self, store: KeyValueStore, prompt: str = "> ") -> None:
        self.store = store
        self.prompt = prompt
        self._commands: dict[str, tuple[int | None, Callable[[list[str]], None]]] = {
            "get": (1, self._get),
            "set": (2, self._set),
            "remove": (1, self._remove),
            "list": (None, self._list),
            "clear": (None, self._clear),
            "help": (None, self._help),
        }

    def run(self, stream: TextIO | None = None) -> None:
        """Read commands from ``stream`` (stdin by default) until exit or EOF."""
        stream = stream if stream is not None else sys.stdin
        while True:
            typer.echo(self.prompt, nl=False)
            line = stream.readline()
            if not line:
                typer.echo()
                break
            if not self.execute(line):
                break

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the shell should stop."""
        parts = line.split()
        if not parts:
            return True
        name, args = parts[0], parts[1:]
        if name == "exit":
            return False
        command = self._commands.get(name)
        if command is None:
            typer.echo("Unknown command.")
            return True
        arity, handler = command
        if arity is not None and len(args) != arity:
            typer.echo(USAGE[name])
            return True
        handler(args)
        return True

    def _get(self, args: list[str]) -> None:
        value = self.store.get(args[0])
        if value is None:
            typer.echo("Key not found")
        else:
            typer.echo(describe(value))

    def _set(self, args: list[str]) -> None:
        key, raw = args
        try:
            self.store.insert(key, codec.parse_value(raw))
        except (OSError, ValueError) as e:
            self._report("insert value", e)
            return
        typer.echo("Value inserted")

    def _remove(self, args: list[str]) -> None:
        try:
            self.store.remove(args[0])
        except OSError as e:
            self._report("remove key", e)
            return
        typer.echo("Key removed")

    def _list(self, args: list[str]) -> None:
        if self.store.is_empty():
            typer.echo("(empty)")
            return
        for key, value in self.store.items():
            typer.echo(f"{key}: {describe(value)}")

    def _clear(self, args: list[str]) -> None:
        try:
            self.store.clear()
        except OSError as e:
            self._report("clear store", e)
            return
        typer.echo("Store cleared")

    def _help(self, args: list[str]) -> None:
        typer.echo(HELP_TEXT)

    def _report(self, action: str, error: Exception) -> None:
        logger.warning(f"Failed to {action}: {error}")
        typer.secho(f"Failed to {action}: {error}", fg=typer.colors.RED, err=True)

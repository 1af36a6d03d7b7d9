"""CLI entry point for the flatkv store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from shell.config import configure_logging, load_config
from shell.repl import Shell, describe
from shell.schemas import ShellConfig
from store import codec
from store.errors import MalformedFileError
from store.repository import KeyValueStore

logger = logging.getLogger(__name__)

app = typer.Typer(help="flatkv: persistent key-value store shell")


def _build_config(
    config_path: Optional[str],
    data_file: Optional[str],
    log_level: Optional[str],
) -> ShellConfig:
    try:
        config = load_config(config_path) if config_path else ShellConfig()
        overrides: dict[str, object] = {}
        if data_file:
            overrides["data_file"] = data_file
        if log_level:
            overrides["log_level"] = log_level
        if overrides:
            config = ShellConfig.from_dict({**config.to_dict(), **overrides})
    except FileNotFoundError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except ValueError as e:
        typer.secho(f"❌ Invalid config: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    return config


def _open_store(config: ShellConfig) -> KeyValueStore:
    try:
        return KeyValueStore(config.data_file)
    except MalformedFileError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except OSError as e:
        typer.secho(f"❌ Cannot read {config.data_file}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


def _fail(action: str, error: Exception) -> NoReturn:
    logger.warning(f"Failed to {action}: {error}")
    typer.secho(f"❌ Failed to {action}: {error}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    data_file: Optional[str] = typer.Option(
        None, "--data-file", "-f", envvar="FLATKV_DATA_FILE", help="Backing file path"
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to YAML config"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Start the interactive shell, or run a single command."""
    config = _build_config(config_path, data_file, log_level)
    configure_logging(config)
    ctx.obj = config
    if ctx.invoked_subcommand is None:
        repl(ctx)


@app.command()
def repl(ctx: typer.Context) -> None:
    """Run the interactive command shell."""
    config: ShellConfig = ctx.obj
    store = _open_store(config)
    Shell(store, prompt=config.prompt).run()


@app.command()
def get(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key to look up"),
) -> None:
    """Print the value stored under KEY."""
    store = _open_store(ctx.obj)
    value = store.get(key)
    if value is None:
        typer.secho("Key not found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(1)
    typer.echo(describe(value))


@app.command("set")
def set_value(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key to write"),
    value: str = typer.Argument(..., help="true/false, a non-negative integer, or text"),
) -> None:
    """Store VALUE under KEY."""
    store = _open_store(ctx.obj)
    try:
        store.insert(key, codec.parse_value(value))
    except (OSError, ValueError) as e:
        _fail("insert value", e)
    typer.echo("Value inserted")


@app.command()
def remove(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key to delete"),
) -> None:
    """Delete KEY if present."""
    store = _open_store(ctx.obj)
    try:
        store.remove(key)
    except OSError as e:
        _fail("remove key", e)
    typer.echo("Key removed")


@app.command("list")
def list_entries(ctx: typer.Context) -> None:
    """List every entry."""
    store = _open_store(ctx.obj)
    for key, value in store.items():
        typer.echo(f"{key}: {describe(value)}")


@app.command()
def clear(ctx: typer.Context) -> None:
    """Delete every entry and truncate the backing file."""
    store = _open_store(ctx.obj)
    try:
        store.clear()
    except OSError as e:
        _fail("clear store", e)
    typer.echo("Store cleared")


@app.command()
def export(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON here"),
) -> None:
    """Export the store as tagged JSON."""
    store = _open_store(ctx.obj)
    payload = store.export_json()
    if output is None:
        typer.echo(payload)
        return
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(payload + "\n", encoding="utf-8")
    typer.secho(f"✅ Exported {len(store)} entries to {output_path}", fg=typer.colors.GREEN)


@app.command("import")
def import_entries(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Tagged JSON file produced by export"),
) -> None:
    """Merge entries from a tagged JSON export."""
    store = _open_store(ctx.obj)
    try:
        text = Path(source).read_text(encoding="utf-8")
        count = store.import_json(text)
    except (OSError, ValueError) as e:
        _fail("import entries", e)
    typer.secho(f"✅ Imported {count} entries", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()

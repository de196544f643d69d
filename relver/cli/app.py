from __future__ import annotations

import os
from pathlib import Path

import typer

from relver import __version__
from relver.cli.commands.bump_cmd import bump
from relver.cli.commands.calculate_cmd import advance, calculate
from relver.cli.commands.state_cmd import encode_state, state
from relver.cli.commands.validate_cmd import validate
from relver.cli.context import VERBOSE_ENV_VAR
from relver.core.config import CONFIG_ENV_VAR
from relver.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Version management for the pre -> rc -> rtm release lifecycle.",
)


# Commands
app.command()(state)
app.command()(calculate)
app.command()(advance)
app.command()(bump)
app.command()(validate)
app.command("encode")(encode_state)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help=f"Config file (overrides ${CONFIG_ENV_VAR} and ./relver.toml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print diagnostics to stderr."),
) -> None:
    del version

    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: --config '{path}' does not exist", err=True)
            raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
        os.environ[CONFIG_ENV_VAR] = str(path)

    if verbose:
        os.environ[VERBOSE_ENV_VAR] = "1"


def main() -> None:
    app()

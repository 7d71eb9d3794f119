from __future__ import annotations

import os
from pathlib import Path

import typer

from tagtrain import __version__
from tagtrain.cli.commands.history_cmd import latest, next_tag
from tagtrain.cli.commands.manifest_cmd import patch_manifest
from tagtrain.cli.commands.release_cmd import release
from tagtrain.cli.context import CONFIG_ENV, REPO_ENV
from tagtrain.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(latest)
app.command("next")(next_tag)
app.command("patch-manifest")(patch_manifest)
app.command()(release)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    repo: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository root (default: current directory).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: <repo>/.tagtrain.toml).",
    ),
) -> None:
    del version

    if repo is not None:
        try:
            root = repo.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --repo: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        os.environ[REPO_ENV] = str(root)

    if config is not None:
        os.environ[CONFIG_ENV] = str(config.expanduser())


def main() -> None:
    app()

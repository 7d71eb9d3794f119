from __future__ import annotations

import typer

from tagtrain.cli.context import build_context, exit_with
from tagtrain.core.result import Err
from tagtrain.output.console import Style
from tagtrain.release.manifest import apply_manifest_version
from tagtrain.release.tag import parse_tag


def patch_manifest(
    version: str = typer.Argument(..., help="New version (a leading 'v' is stripped)."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report without writing."),
) -> None:
    """Rewrite the marked version line of the manifest."""
    ctx = build_context()
    parsed = parse_tag("v" + version.strip().removeprefix("v"))
    if isinstance(parsed, Err):
        exit_with(parsed.error, console=ctx.console)
    value = parsed.value.version
    path = ctx.manifest_path

    changed = apply_manifest_version(
        path,
        version=value,
        marker=ctx.config.manifest.marker,
        dry_run=dry_run,
    )
    if isinstance(changed, Err):
        exit_with(changed.error, console=ctx.console)

    if not changed.value:
        ctx.console.print(f"{path.name}: already at {value}", Style.DIM)
    elif dry_run:
        ctx.console.info(f"{path.name}: would set version {value}")
    else:
        ctx.console.success(f"{path.name}: version {value}")

from __future__ import annotations

import typer

from tagtrain.cli.context import build_context, exit_with
from tagtrain.core.result import Err
from tagtrain.release.increment import next_alpha_tag
from tagtrain.release.tag import Tag, parse_tag


def latest() -> None:
    """Print the most recently created release tag."""
    ctx = build_context()
    tag = ctx.history().latest()
    if isinstance(tag, Err):
        exit_with(tag.error, console=ctx.console)
    typer.echo(tag.value.to_text())


def next_tag(
    from_tag: str | None = typer.Option(
        None,
        "--from",
        help="Compute from this tag instead of the tag history.",
    ),
) -> None:
    """Print the next alpha tag."""
    ctx = build_context()

    last: Tag
    if from_tag is not None:
        parsed = parse_tag(from_tag)
        if isinstance(parsed, Err):
            exit_with(parsed.error, console=ctx.console)
        last = parsed.value
    else:
        found = ctx.history().latest()
        if isinstance(found, Err):
            exit_with(found.error, console=ctx.console)
        last = found.value

    typer.echo(next_alpha_tag(last, label=ctx.config.release.prerelease_label).to_text())

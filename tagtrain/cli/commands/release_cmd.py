from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import typer

from tagtrain.cli.context import CLIContext, build_context, exit_with
from tagtrain.core.result import Err, Ok, Result
from tagtrain.output.console import Style
from tagtrain.platform.files import append_line
from tagtrain.release.contracts import ReleaseOutcome
from tagtrain.release.coordinator import ReleaseCoordinator
from tagtrain.release.errors import ReleaseError
from tagtrain.release.events import EventName, ReleaseEvent, event_from_github_env, make_event
from tagtrain.services.cargo import CargoPublisher
from tagtrain.services.changelog import GitCliffChangelog
from tagtrain.services.gh import GhReleaseHost

_EVENT_NAMES: dict[str, EventName] = {
    "schedule": "schedule",
    "dispatch": "dispatch",
    "tag": "tag",
}


def build_coordinator(ctx: CLIContext) -> ReleaseCoordinator:
    root = ctx.repo.path
    head = ctx.repo.head_sha()
    return ReleaseCoordinator(
        history=ctx.history(),
        publisher=CargoPublisher(repo_root=root, token_env=ctx.config.publish.token_env),
        changelog=GitCliffChangelog(repo_root=root, config=ctx.config.changelog.config),
        host=GhReleaseHost(
            repo_root=root,
            repo=ctx.config.host.repo,
            target=head.value if isinstance(head, Ok) else None,
        ),
        manifest_path=ctx.manifest_path,
        manifest_marker=ctx.config.manifest.marker,
        settings=ctx.config.release,
        console=ctx.console,
    )


def resolve_event(
    *,
    event: str | None,
    tag: str | None,
    environ: Mapping[str, str],
) -> Result[ReleaseEvent, ReleaseError]:
    if event is None:
        if tag is not None:
            return make_event("tag", tag=tag)
        return event_from_github_env(environ)

    name = _EVENT_NAMES.get(event.strip().lower())
    if name is None:
        return Err(
            ReleaseError(
                kind="invalid_event",
                message=f"unknown event: {event}",
                hint="schedule, dispatch or tag",
            )
        )
    return make_event(name, tag=tag)


def export_github_env(
    name: str, value: str, *, environ: Mapping[str, str]
) -> Result[Path | None, ReleaseError]:
    """Append ``name=value`` to the file named by GITHUB_ENV, if any."""
    target = environ.get("GITHUB_ENV", "").strip()
    if not target:
        return Ok(None)
    path = Path(target)
    try:
        append_line(path, f"{name}={value}")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write GITHUB_ENV: {e}",
                hint=str(path),
            )
        )
    return Ok(path)


def _print_outcome(ctx: CLIContext, outcome: ReleaseOutcome) -> None:
    ctx.console.newline()
    prefix = "dry run: " if outcome.dry_run else ""
    match outcome.track:
        case "alpha":
            ctx.console.success(f"{prefix}alpha release {outcome.tag} (from {outcome.previous_tag})")
        case "stable":
            if outcome.already_published:
                ctx.console.success(f"stable release {outcome.tag} was already published")
            else:
                ctx.console.success(f"{prefix}stable release {outcome.tag}")


def release(
    event: str | None = typer.Option(
        None,
        "--event",
        help="Trigger: schedule, dispatch or tag (default: detect from GitHub Actions).",
    ),
    tag: str | None = typer.Option(None, "--tag", help="Pushed stable tag (with --event tag)."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Compute and report without publishing or writing."
    ),
) -> None:
    """Run the alpha or stable release for one trigger."""
    ctx = build_context()
    environ: Mapping[str, str] = os.environ

    resolved = resolve_event(event=event, tag=tag, environ=environ)
    if isinstance(resolved, Err):
        exit_with(resolved.error, console=ctx.console)

    coordinator = build_coordinator(ctx)
    outcome = coordinator.run(resolved.value, dry_run=dry_run)
    if isinstance(outcome, Err):
        exit_with(outcome.error, console=ctx.console)

    _print_outcome(ctx, outcome.value)

    if outcome.value.track == "alpha" and not outcome.value.dry_run:
        exported = export_github_env("NEXT_TAG", outcome.value.tag.to_text(), environ=environ)
        if isinstance(exported, Err):
            exit_with(exported.error, console=ctx.console)
        if exported.value is not None:
            ctx.console.print(f"NEXT_TAG={outcome.value.tag} -> GITHUB_ENV", Style.DIM)


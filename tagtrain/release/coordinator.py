"""Release coordinator: one trigger in, one release track run.

Alpha track (schedule, manual dispatch)::

    latest tag -> next alpha tag -> patch manifest -> publish (dirty tree)
    -> changelog -> hosted prerelease

Stable track (tag push)::

    publish the pushed tag as committed

The first failing step aborts the run; later steps are never attempted.
"""

from __future__ import annotations

from pathlib import Path

from tagtrain.core.config import ReleaseSettings
from tagtrain.core.result import Err, Ok, Result
from tagtrain.output.console import ConsoleProtocol, Style
from tagtrain.release.contracts import ChangelogGenerator, Publisher, ReleaseHost, ReleaseOutcome
from tagtrain.release.errors import ReleaseError
from tagtrain.release.events import ManualDispatch, ReleaseEvent, Scheduled, TagPush
from tagtrain.release.history import TagHistoryReader, highest_tag
from tagtrain.release.increment import next_alpha_tag
from tagtrain.release.manifest import apply_manifest_version
from tagtrain.release.tag import Tag


class ReleaseCoordinator:
    def __init__(
        self,
        *,
        history: TagHistoryReader,
        publisher: Publisher,
        changelog: ChangelogGenerator,
        host: ReleaseHost,
        manifest_path: Path,
        manifest_marker: str,
        settings: ReleaseSettings,
        console: ConsoleProtocol,
    ) -> None:
        self._history = history
        self._publisher = publisher
        self._changelog = changelog
        self._host = host
        self._manifest_path = manifest_path
        self._manifest_marker = manifest_marker
        self._settings = settings
        self._console = console

    def run(
        self, event: ReleaseEvent, *, dry_run: bool = False
    ) -> Result[ReleaseOutcome, ReleaseError]:
        match event:
            case TagPush(tag=tag):
                return self._run_stable(tag, dry_run=dry_run)
            case Scheduled() | ManualDispatch():
                return self._run_alpha(dry_run=dry_run)

    def next_tag(self) -> Result[tuple[Tag, Tag], ReleaseError]:
        """Return ``(latest, next)`` for the alpha track without side effects."""
        latest = self._history.latest()
        if isinstance(latest, Err):
            return latest
        self._warn_if_out_of_order(latest.value)
        nxt = next_alpha_tag(latest.value, label=self._settings.prerelease_label)
        return Ok((latest.value, nxt))

    def _run_alpha(self, *, dry_run: bool) -> Result[ReleaseOutcome, ReleaseError]:
        self._console.header("Alpha release")

        computed = self.next_tag()
        if isinstance(computed, Err):
            return computed
        latest, nxt = computed.value
        self._console.print(f"last tag: {latest}", Style.DIM)
        self._console.info(f"next alpha release: {nxt}")

        changed = apply_manifest_version(
            self._manifest_path,
            version=nxt.version,
            marker=self._manifest_marker,
            dry_run=dry_run,
        )
        if isinstance(changed, Err):
            return changed
        if changed.value:
            verb = "would set" if dry_run else "set"
            self._console.success(f"{self._manifest_path.name}: {verb} version {nxt.version}")
        else:
            self._console.print(
                f"{self._manifest_path.name}: already at {nxt.version}", Style.DIM
            )

        if dry_run:
            self._console.warning("dry run: skipping publish, changelog and release")
            return Ok(
                ReleaseOutcome(
                    track="alpha",
                    tag=nxt,
                    previous_tag=latest,
                    manifest_changed=changed.value,
                    dry_run=True,
                )
            )

        published = self._publisher.publish(tag=nxt, allow_dirty=True)
        if isinstance(published, Err):
            return published
        self._console.success(f"published {nxt}")

        notes = self._changelog.unreleased(tag=nxt)
        if isinstance(notes, Err):
            return notes

        created = self._host.create_release(tag=nxt, prerelease=True, body=notes.value)
        if isinstance(created, Err):
            return created
        self._console.success(f"created prerelease {nxt}")

        return Ok(
            ReleaseOutcome(
                track="alpha",
                tag=nxt,
                previous_tag=latest,
                manifest_changed=changed.value,
                notes=notes.value,
            )
        )

    def _run_stable(self, tag: Tag, *, dry_run: bool) -> Result[ReleaseOutcome, ReleaseError]:
        self._console.header(f"Stable release {tag}")

        if dry_run:
            self._console.warning(f"dry run: would publish {tag} as committed")
            return Ok(ReleaseOutcome(track="stable", tag=tag, dry_run=True))

        published = self._publisher.publish(tag=tag, allow_dirty=False)
        if isinstance(published, Err):
            if published.error.kind != "already_published":
                return published
            # A retried run after a completed publish.
            self._console.warning(f"{tag} is already published, nothing to do")
            return Ok(ReleaseOutcome(track="stable", tag=tag, already_published=True))

        self._console.success(f"published {tag}")
        return Ok(ReleaseOutcome(track="stable", tag=tag))

    def _warn_if_out_of_order(self, latest: Tag) -> None:
        names = self._history.tags()
        if isinstance(names, Err):
            return
        highest = highest_tag(names.value)
        if highest is not None and highest > latest:
            self._console.warning(
                f"latest tag by creation ({latest}) is lower than {highest}; "
                "tags were created out of order"
            )

"""Collaborator contracts between the coordinator and external tools."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from tagtrain.core.result import Result
from tagtrain.release.errors import ReleaseError
from tagtrain.release.tag import Tag

ReleaseTrack = Literal["alpha", "stable"]


class Publisher(Protocol):
    def publish(self, *, tag: Tag, allow_dirty: bool) -> Result[None, ReleaseError]:
        """Upload the artifact of the working tree under ``tag``.

        A registry refusing an already uploaded version must come back as
        ``already_published``.
        """
        ...


class ChangelogGenerator(Protocol):
    def unreleased(self, *, tag: Tag) -> Result[str, ReleaseError]:
        """Notes for everything since the last tag, labelled ``tag``."""
        ...


class ReleaseHost(Protocol):
    def create_release(
        self, *, tag: Tag, prerelease: bool, body: str
    ) -> Result[None, ReleaseError]: ...


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    """What one coordinator run did."""

    track: ReleaseTrack
    tag: Tag
    previous_tag: Tag | None = None
    manifest_changed: bool = False
    already_published: bool = False
    notes: str | None = None
    dry_run: bool = False

"""Release domain: tags, the alpha increment, the manifest patch, the coordinator.

Nothing in this package talks to external tools directly except through the
collaborator Protocols in ``contracts`` and the git-backed ``GitTagHistory``.
"""

from __future__ import annotations

from tagtrain.release.contracts import (
    ChangelogGenerator,
    Publisher,
    ReleaseHost,
    ReleaseOutcome,
    ReleaseTrack,
)
from tagtrain.release.coordinator import ReleaseCoordinator
from tagtrain.release.errors import ReleaseError, ReleaseErrorKind
from tagtrain.release.events import (
    ManualDispatch,
    ReleaseEvent,
    Scheduled,
    TagPush,
    event_from_github_env,
    make_event,
)
from tagtrain.release.history import GitTagHistory, TagHistoryReader
from tagtrain.release.increment import next_alpha_tag
from tagtrain.release.manifest import apply_manifest_version, patch_manifest_text
from tagtrain.release.tag import Prerelease, Tag, parse_tag

__all__ = [
    "ChangelogGenerator",
    "GitTagHistory",
    "ManualDispatch",
    "Prerelease",
    "Publisher",
    "ReleaseCoordinator",
    "ReleaseError",
    "ReleaseErrorKind",
    "ReleaseEvent",
    "ReleaseHost",
    "ReleaseOutcome",
    "ReleaseTrack",
    "Scheduled",
    "Tag",
    "TagHistoryReader",
    "TagPush",
    "apply_manifest_version",
    "event_from_github_env",
    "make_event",
    "next_alpha_tag",
    "parse_tag",
    "patch_manifest_text",
]

"""Error type shared by every release step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "empty_history",
    "malformed_tag",
    "manifest_patch_not_found",
    "manifest_patch_ambiguous",
    "publish_rejected",
    "already_published",
    "changelog_failed",
    "tool_missing",
    "git_failed",
    "io_failed",
    "invalid_event",
    "invalid_config",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    ``kind`` drives control flow (the stable path accepts
    ``already_published``) and exit codes; ``message`` and ``hint`` are for
    humans.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

"""Tag history: which tag was released last."""

from __future__ import annotations

from typing import Protocol

from tagtrain.core.result import Err, Ok, Result
from tagtrain.git.repository import Repository
from tagtrain.release.errors import ReleaseError
from tagtrain.release.tag import Tag, parse_tag
from tagtrain.release.tools import ensure_tool_available

__all__ = ["GitTagHistory", "TagHistoryReader", "highest_tag"]


class TagHistoryReader(Protocol):
    def tags(self) -> Result[list[str], ReleaseError]:
        """All tag names, oldest first by creation time."""
        ...

    def latest(self) -> Result[Tag, ReleaseError]:
        """The most recently created tag, parsed."""
        ...


class GitTagHistory:
    """TagHistoryReader over ``git tag --sort=<key>``.

    Creation order and version order can disagree when tags are created out of
    order; this reader returns the newest by creation, not the highest version.
    """

    def __init__(self, repo: Repository, *, sort: str = "creatordate") -> None:
        self._repo = repo
        self._sort = sort

    def tags(self) -> Result[list[str], ReleaseError]:
        available = ensure_tool_available("git")
        if isinstance(available, Err):
            return available

        result = self._repo.tags(sort=self._sort)
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="git_failed",
                    message=f"failed to list tags: {result.error.message}",
                    hint=str(self._repo.path),
                )
            )
        return Ok(result.value)

    def latest(self) -> Result[Tag, ReleaseError]:
        names = self.tags()
        if isinstance(names, Err):
            return names
        if not names.value:
            return Err(
                ReleaseError(
                    kind="empty_history",
                    message="no release tag found in history",
                    hint="Push an initial vX.Y.Z tag first (shallow clones need fetch-depth: 0)",
                )
            )
        return parse_tag(names.value[-1])


def highest_tag(names: list[str]) -> Tag | None:
    """Highest parseable tag by version order; unparseable names are skipped."""
    best: Tag | None = None
    for name in names:
        parsed = parse_tag(name)
        if isinstance(parsed, Ok) and (best is None or parsed.value > best):
            best = parsed.value
    return best

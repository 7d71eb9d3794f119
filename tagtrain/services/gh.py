"""Hosted releases through the GitHub CLI."""

from __future__ import annotations

import tempfile
from pathlib import Path
from time import sleep

from tagtrain.core.result import Err, Ok, Result
from tagtrain.platform.process import ProcessError
from tagtrain.platform.process import run as run_process
from tagtrain.release.errors import ReleaseError
from tagtrain.release.tag import Tag
from tagtrain.release.tools import ensure_tool_available
from tagtrain.services.timeouts import (
    GH_READ_RETRY_ATTEMPTS,
    GH_READ_RETRY_DELAY_SECONDS,
    GH_TIMEOUT_SECONDS,
)


def _is_transient_gh_error(error: ProcessError) -> bool:
    text = error.output.lower()
    markers = (
        "timed out",
        "timeout",
        "connection reset",
        "connection refused",
        "temporarily unavailable",
        "service unavailable",
        "bad gateway",
        "gateway timeout",
        "tls handshake timeout",
        "network is unreachable",
        "http 429",
        "http 500",
        "http 502",
        "http 503",
        "http 504",
    )
    return any(marker in text for marker in markers)


def run_gh_read(
    *,
    repo_root: Path,
    cmd: list[str],
    timeout: float = GH_TIMEOUT_SECONDS,
    retry_attempts: int = GH_READ_RETRY_ATTEMPTS,
) -> Result[str, ProcessError]:
    """Run a read-only gh command, retrying transient network failures."""
    attempts = max(1, retry_attempts)
    result = run_process(cmd, cwd=repo_root, timeout=timeout)
    for attempt in range(1, attempts):
        if isinstance(result, Ok) or not _is_transient_gh_error(result.error):
            break
        sleep(GH_READ_RETRY_DELAY_SECONDS * attempt)
        result = run_process(cmd, cwd=repo_root, timeout=timeout)
    return result


class GhReleaseHost:
    """ReleaseHost backed by ``gh release``.

    Creation is never retried; only the existence probe is.
    """

    def __init__(
        self,
        *,
        repo_root: Path,
        repo: str | None = None,
        target: str | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._repo = repo
        self._target = target

    def _repo_args(self) -> list[str]:
        return ["--repo", self._repo] if self._repo else []

    def release_exists(self, *, tag: Tag) -> Result[bool, ReleaseError]:
        result = run_gh_read(
            repo_root=self._repo_root,
            cmd=["gh", "release", "view", tag.to_text(), "--json", "tagName", *self._repo_args()],
        )
        if isinstance(result, Ok):
            return Ok(True)
        if "release not found" in result.error.output.lower():
            return Ok(False)
        return Err(
            ReleaseError(
                kind="publish_rejected",
                message=f"failed to query release {tag}",
                hint=result.error.stderr.strip() or None,
            )
        )

    def create_command(self, *, tag: Tag, prerelease: bool, notes_file: Path) -> list[str]:
        cmd = [
            "gh",
            "release",
            "create",
            tag.to_text(),
            "--title",
            tag.to_text(),
            "--notes-file",
            str(notes_file),
        ]
        if prerelease:
            cmd.append("--prerelease")
        if self._target:
            cmd.extend(["--target", self._target])
        cmd.extend(self._repo_args())
        return cmd

    def create_release(
        self, *, tag: Tag, prerelease: bool, body: str
    ) -> Result[None, ReleaseError]:
        available = ensure_tool_available("gh")
        if isinstance(available, Err):
            return available

        exists = self.release_exists(tag=tag)
        if isinstance(exists, Err):
            return exists
        if exists.value:
            return Err(
                ReleaseError(
                    kind="publish_rejected",
                    message=f"release {tag} already exists",
                    hint="delete it or let the next run compute a new tag",
                )
            )

        # Notes go through a file: argv is capped at 128 KiB per argument on Linux.
        try:
            with tempfile.TemporaryDirectory(prefix="tagtrain-notes-") as tmp:
                notes_file = Path(tmp) / "notes.md"
                notes_file.write_text(body, encoding="utf-8")
                result = run_process(
                    self.create_command(tag=tag, prerelease=prerelease, notes_file=notes_file),
                    cwd=self._repo_root,
                    timeout=GH_TIMEOUT_SECONDS,
                )
        except OSError as e:
            return Err(
                ReleaseError(kind="io_failed", message=f"failed to write release notes: {e}")
            )
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="publish_rejected",
                    message=f"gh release create failed for {tag}",
                    hint=result.error.stderr.strip() or "check GH_TOKEN permissions",
                )
            )
        return Ok(None)

"""Release notes through git-cliff."""

from __future__ import annotations

from pathlib import Path

from tagtrain.core.result import Err, Ok, Result
from tagtrain.platform.process import run as run_process
from tagtrain.release.errors import ReleaseError
from tagtrain.release.tag import Tag
from tagtrain.release.tools import ensure_tool_available
from tagtrain.services.timeouts import GIT_CLIFF_TIMEOUT_SECONDS


class GitCliffChangelog:
    """ChangelogGenerator running ``git-cliff --unreleased --tag <next>``."""

    def __init__(self, *, repo_root: Path, config: str) -> None:
        self._repo_root = repo_root
        self._config = config

    def command(self, *, tag: Tag) -> list[str]:
        return [
            "git-cliff",
            "--config",
            self._config,
            "--unreleased",
            "--tag",
            tag.to_text(),
            "--strip",
            "header",
        ]

    def unreleased(self, *, tag: Tag) -> Result[str, ReleaseError]:
        available = ensure_tool_available("git-cliff")
        if isinstance(available, Err):
            return available

        result = run_process(
            self.command(tag=tag),
            cwd=self._repo_root,
            timeout=GIT_CLIFF_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="changelog_failed",
                    message=f"git-cliff failed for {tag} (exit {result.error.returncode})",
                    hint=result.error.stderr.strip() or self._config,
                )
            )
        return Ok(result.value.strip() + "\n")

"""Git repository access for the release train.

Only read operations are needed: the tag list in creation order and the HEAD
commit. Both return Result values.

Usage:
    repo = Repository(Path("."))
    match repo.tags(sort="creatordate"):
        case Ok(tags):
            print(tags[-1] if tags else "no tags")
        case Err(e):
            print(f"git failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tagtrain.core.result import Err, Ok, Result
from tagtrain.platform.process import ProcessError
from tagtrain.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message (stderr when available)
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A local git checkout.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check for a ``.git`` directory or worktree file."""
        return (self.path / ".git").exists()

    def tags(self, *, sort: str = "creatordate") -> Result[list[str], GitError]:
        """List tag names, oldest first, ordered by ``git tag --sort=<sort>``."""
        result = self._run(["tag", "--list", f"--sort={sort}"])
        match result:
            case Err(e):
                return Err(self._error("tag", e, "git tag failed"))
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def head_sha(self) -> Result[str, GitError]:
        """Full sha of HEAD."""
        result = self._run(["rev-parse", "HEAD"])
        match result:
            case Err(e):
                return Err(self._error("rev-parse", e, "git rev-parse failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )

    @staticmethod
    def _error(command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or fallback,
            returncode=e.returncode,
        )

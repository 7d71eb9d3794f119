"""Git operations used by the release train."""

from tagtrain.git.repository import GitError, Repository

__all__ = ["GitError", "Repository"]

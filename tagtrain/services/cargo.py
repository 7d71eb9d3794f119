"""crates.io publishing through ``cargo publish``."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from tagtrain.core.result import Err, Ok, Result
from tagtrain.platform.process import ProcessError, merged_env
from tagtrain.platform.process import run as run_process
from tagtrain.release.errors import ReleaseError
from tagtrain.release.tag import Tag
from tagtrain.release.tools import ensure_tool_available
from tagtrain.services.timeouts import CARGO_PUBLISH_TIMEOUT_SECONDS

# cargo reads the registry token from this variable.
_CARGO_TOKEN_VAR = "CARGO_REGISTRY_TOKEN"

_DUPLICATE_MARKERS = (
    "is already uploaded",
    "already exists",
)


def is_duplicate_version(error: ProcessError) -> bool:
    text = error.output.lower()
    return any(marker in text for marker in _DUPLICATE_MARKERS)


class CargoPublisher:
    """Publisher that runs ``cargo publish`` in the crate root.

    The token is read from ``token_env`` and handed to cargo through its
    environment, never on the command line.
    """

    def __init__(
        self,
        *,
        repo_root: Path,
        token_env: str,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._token_env = token_env
        self._environ = environ if environ is not None else os.environ

    def command(self, *, allow_dirty: bool) -> list[str]:
        cmd = ["cargo", "publish"]
        if allow_dirty:
            cmd.append("--allow-dirty")
        return cmd

    def publish(self, *, tag: Tag, allow_dirty: bool) -> Result[None, ReleaseError]:
        available = ensure_tool_available("cargo")
        if isinstance(available, Err):
            return available

        extra: dict[str, str] = {}
        token = self._environ.get(self._token_env, "").strip()
        if token:
            extra[_CARGO_TOKEN_VAR] = token

        result = run_process(
            self.command(allow_dirty=allow_dirty),
            cwd=self._repo_root,
            env=merged_env(extra),
            timeout=CARGO_PUBLISH_TIMEOUT_SECONDS,
        )
        if isinstance(result, Ok):
            return Ok(None)

        error = result.error
        if is_duplicate_version(error):
            return Err(
                ReleaseError(
                    kind="already_published",
                    message=f"{tag.version} is already on the registry",
                    hint=_last_line(error.stderr),
                )
            )
        return Err(
            ReleaseError(
                kind="publish_rejected",
                message=f"cargo publish failed for {tag} (exit {error.returncode})",
                hint=_last_line(error.stderr) or f"set {self._token_env} for registry auth",
            )
        )


def _last_line(text: str) -> str | None:
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    return lines[-1] if lines else None

"""Presence checks for the external tools the release tracks shell out to."""

from __future__ import annotations

from tagtrain.core.result import Err, Ok, Result
from tagtrain.platform.process import which
from tagtrain.release.errors import ReleaseError

_INSTALL_HINTS = {
    "git": "Install git: https://git-scm.com/downloads",
    "cargo": "Install Rust: https://rustup.rs/",
    "git-cliff": "Install git-cliff: cargo install git-cliff",
    "gh": "Install GitHub CLI: https://cli.github.com/",
}


def ensure_tool_available(tool: str) -> Result[None, ReleaseError]:
    if which(tool) is None:
        return Err(
            ReleaseError(
                kind="tool_missing",
                message=f"{tool}: missing",
                hint=_INSTALL_HINTS.get(tool),
            )
        )
    return Ok(None)

"""Error presentation and exit code mapping for release errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tagtrain.core.errors import ErrorCode
from tagtrain.output.console import Style
from tagtrain.release.errors import ReleaseError

if TYPE_CHECKING:
    from tagtrain.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_code(error: ReleaseError) -> ErrorCode:
    match error.kind:
        case "tool_missing" | "git_failed":
            return ErrorCode.ENV_ERROR
        case "changelog_failed":
            return ErrorCode.BUILD_ERROR
        case "publish_rejected" | "already_published":
            return ErrorCode.NETWORK_ERROR
        case "io_failed":
            return ErrorCode.IO_ERROR
        case _:
            return ErrorCode.USER_ERROR

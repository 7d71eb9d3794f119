"""Marked version line in a manifest file.

The manifest is opaque except for one line of the shape::

    version = "0.22.0" # crate version

where the trailing marker comment singles the line out from other
``version = ...`` keys (dependencies, workspace members). Only the quoted value
is ever rewritten; indentation, spacing, the marker and line endings stay as
they were.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from tagtrain.core.result import Err, Ok, Result
from tagtrain.platform.files import atomic_write_text
from tagtrain.release.errors import ReleaseError

__all__ = [
    "VersionLine",
    "apply_manifest_version",
    "find_version_line",
    "patch_manifest_text",
    "read_manifest_version",
]


@dataclass(frozen=True, slots=True)
class VersionLine:
    """The located version declaration.

    ``head`` is everything up to and including the opening quote, ``tail``
    everything from the closing quote to the end of the line (line ending
    included).
    """

    index: int
    head: str
    value: str
    tail: str

    def render(self, value: str) -> str:
        return f"{self.head}{value}{self.tail}"


def _line_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(
        rf'^(?P<head>[ \t]*version[ \t]*=[ \t]*")(?P<value>[^"\r\n]*)'
        rf'(?P<tail>"[ \t]*{re.escape(marker)}[ \t]*(?:\r\n|\n|\r)?)$'
    )


def find_version_line(text: str, *, marker: str) -> Result[VersionLine, ReleaseError]:
    """Locate the single marked version line."""
    pattern = _line_pattern(marker)
    found: list[VersionLine] = []
    for index, line in enumerate(text.splitlines(keepends=True)):
        m = pattern.match(line)
        if m is not None:
            found.append(
                VersionLine(
                    index=index,
                    head=m.group("head"),
                    value=m.group("value"),
                    tail=m.group("tail"),
                )
            )

    if not found:
        return Err(
            ReleaseError(
                kind="manifest_patch_not_found",
                message="no version line carrying the marker",
                hint=f'Expected: version = "X.Y.Z" {marker}',
            )
        )
    if len(found) > 1:
        lines = ", ".join(str(v.index + 1) for v in found)
        return Err(
            ReleaseError(
                kind="manifest_patch_ambiguous",
                message=f"{len(found)} version lines carry the marker",
                hint=f"lines {lines}",
            )
        )
    return Ok(found[0])


def read_manifest_version(text: str, *, marker: str) -> Result[str, ReleaseError]:
    line = find_version_line(text, marker=marker)
    if isinstance(line, Err):
        return line
    return Ok(line.value.value)


def patch_manifest_text(text: str, *, version: str, marker: str) -> Result[str, ReleaseError]:
    """Return ``text`` with the marked version value replaced by ``version``."""
    located = find_version_line(text, marker=marker)
    if isinstance(located, Err):
        return located

    line = located.value
    lines = text.splitlines(keepends=True)
    lines[line.index] = line.render(version)
    return Ok("".join(lines))


def apply_manifest_version(
    path: Path,
    *,
    version: str,
    marker: str,
    dry_run: bool = False,
) -> Result[bool, ReleaseError]:
    """Rewrite the manifest file in place.

    Returns:
        Ok(True) if the file content changed (or would change on dry run),
        Ok(False) if it already declared ``version``.
    """
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            text = handle.read()
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )

    patched = patch_manifest_text(text, version=version, marker=marker)
    if isinstance(patched, Err):
        return Err(
            ReleaseError(
                kind=patched.error.kind,
                message=f"{path.name}: {patched.error.message}",
                hint=patched.error.hint,
            )
        )

    if patched.value == text:
        return Ok(False)
    if dry_run:
        return Ok(True)

    try:
        atomic_write_text(path, patched.value, encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write {path.name}: {e}",
                hint=str(path),
            )
        )
    return Ok(True)

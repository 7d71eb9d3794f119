"""Release tag model: ``v<major>.<minor>.<patch>[-<label>.<counter>]``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from tagtrain.core.result import Err, Ok, Result
from tagtrain.release.errors import ReleaseError

__all__ = ["Prerelease", "Tag", "parse_tag"]

_NUM = r"(0|[1-9]\d*)"
_TAG_RE = re.compile(rf"^v{_NUM}\.{_NUM}\.{_NUM}(?:-([0-9A-Za-z-]+)\.{_NUM})?$")
_TAG_HINT = "Expected vMAJOR.MINOR.PATCH[-LABEL.N]"


@dataclass(frozen=True, slots=True)
class Prerelease:
    label: str
    counter: int


@total_ordering
@dataclass(frozen=True, slots=True)
class Tag:
    """An immutable, totally ordered release identifier.

    A stable tag ranks above every prerelease of the same major.minor.patch;
    prereleases of the same triple order by label, then counter.
    """

    major: int
    minor: int
    patch: int
    prerelease: Prerelease | None = None

    @property
    def is_stable(self) -> bool:
        return self.prerelease is None

    @property
    def version(self) -> str:
        """Canonical form without the leading ``v`` (manifest value)."""
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is None:
            return base
        return f"{base}-{self.prerelease.label}.{self.prerelease.counter}"

    def to_text(self) -> str:
        return f"v{self.version}"

    def _key(self) -> tuple[int, int, int, int, str, int]:
        if self.prerelease is None:
            return (self.major, self.minor, self.patch, 1, "", 0)
        return (
            self.major,
            self.minor,
            self.patch,
            0,
            self.prerelease.label,
            self.prerelease.counter,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        return self.to_text()


def parse_tag(text: str) -> Result[Tag, ReleaseError]:
    """Parse a tag, failing with ``malformed_tag`` on anything else."""
    m = _TAG_RE.match(text.strip())
    if m is None:
        return Err(
            ReleaseError(
                kind="malformed_tag",
                message=f"invalid release tag: {text!r}",
                hint=_TAG_HINT,
            )
        )

    prerelease: Prerelease | None = None
    if m.group(4) is not None:
        prerelease = Prerelease(label=m.group(4), counter=int(m.group(5)))
    return Ok(Tag(int(m.group(1)), int(m.group(2)), int(m.group(3)), prerelease))

"""Release triggers.

A run is started by exactly one of: the weekly schedule, a manual dispatch, or
the push of a stable ``vX.Y.Z`` tag. Events are built either from an explicit
CLI choice or from the GitHub Actions environment.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from tagtrain.core.result import Err, Ok, Result
from tagtrain.release.errors import ReleaseError
from tagtrain.release.tag import Tag, parse_tag

__all__ = [
    "EventName",
    "ManualDispatch",
    "ReleaseEvent",
    "Scheduled",
    "TagPush",
    "event_from_github_env",
    "make_event",
    "tag_push",
]

EventName = Literal["schedule", "dispatch", "tag"]

_TAG_REF_PREFIX = "refs/tags/"


@dataclass(frozen=True, slots=True)
class Scheduled:
    pass


@dataclass(frozen=True, slots=True)
class ManualDispatch:
    pass


@dataclass(frozen=True, slots=True)
class TagPush:
    """Push of a stable tag; the tag is published verbatim."""

    tag: Tag


type ReleaseEvent = Scheduled | ManualDispatch | TagPush


def tag_push(text: str) -> Result[TagPush, ReleaseError]:
    """Build a TagPush, refusing prerelease and malformed tags."""
    parsed = parse_tag(text)
    if isinstance(parsed, Err):
        return Err(
            ReleaseError(
                kind="invalid_event",
                message=f"pushed tag is not a release tag: {text!r}",
                hint=parsed.error.hint,
            )
        )
    if not parsed.value.is_stable:
        return Err(
            ReleaseError(
                kind="invalid_event",
                message=f"pushed tag is a prerelease: {text}",
                hint="Only vMAJOR.MINOR.PATCH tags trigger a stable release",
            )
        )
    return Ok(TagPush(tag=parsed.value))


def make_event(name: EventName, *, tag: str | None = None) -> Result[ReleaseEvent, ReleaseError]:
    match name:
        case "schedule":
            return Ok(Scheduled())
        case "dispatch":
            return Ok(ManualDispatch())
        case "tag":
            if tag is None:
                return Err(
                    ReleaseError(
                        kind="invalid_event",
                        message="a tag event needs --tag",
                        hint="e.g. --event tag --tag v1.0.0",
                    )
                )
            return tag_push(tag)


def event_from_github_env(env: Mapping[str, str]) -> Result[ReleaseEvent, ReleaseError]:
    """Resolve the trigger of the current GitHub Actions run."""
    event_name = env.get("GITHUB_EVENT_NAME", "").strip()
    ref = env.get("GITHUB_REF", "").strip()

    if event_name == "schedule":
        return Ok(Scheduled())
    if event_name == "workflow_dispatch":
        return Ok(ManualDispatch())
    if event_name == "push":
        if not ref.startswith(_TAG_REF_PREFIX):
            return Err(
                ReleaseError(
                    kind="invalid_event",
                    message=f"push event is not a tag push: {ref or '<no ref>'}",
                )
            )
        return tag_push(ref.removeprefix(_TAG_REF_PREFIX))

    if not event_name:
        return Err(
            ReleaseError(
                kind="invalid_event",
                message="cannot detect the release trigger",
                hint="Run inside GitHub Actions or pass --event",
            )
        )
    return Err(
        ReleaseError(
            kind="invalid_event",
            message=f"unsupported trigger: {event_name}",
            hint="schedule, workflow_dispatch or a tag push",
        )
    )

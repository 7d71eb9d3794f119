from __future__ import annotations

import pytest

from tagtrain.core.result import Err, Ok
from tagtrain.release.tag import Prerelease, Tag, parse_tag


def _tag(text: str) -> Tag:
    parsed = parse_tag(text)
    assert isinstance(parsed, Ok)
    return parsed.value


def test_parse_release_tag() -> None:
    assert parse_tag("v0.22.0") == Ok(Tag(0, 22, 0))


def test_parse_prerelease_tag() -> None:
    assert _tag("v0.22.1-alpha.13") == Tag(0, 22, 1, Prerelease("alpha", 13))


@pytest.mark.parametrize(
    "text",
    ["", "0.22.0", "v0.22", "v0.22.0-alpha", "v01.2.3", "v1.2.3-alpha.01", "v1.2.3+build", "latest"],
)
def test_parse_tag_rejects_malformed(text: str) -> None:
    parsed = parse_tag(text)
    assert isinstance(parsed, Err)
    assert parsed.error.kind == "malformed_tag"


def test_text_forms() -> None:
    tag = Tag(0, 22, 1, Prerelease("alpha", 0))
    assert tag.to_text() == "v0.22.1-alpha.0"
    assert tag.version == "0.22.1-alpha.0"
    assert str(Tag(1, 0, 0)) == "v1.0.0"


def test_stable_ranks_above_its_prereleases() -> None:
    assert _tag("v0.22.1-alpha.99") < _tag("v0.22.1")
    assert _tag("v0.22.1") < _tag("v0.22.2-alpha.0")


def test_prerelease_counter_orders_numerically() -> None:
    assert _tag("v0.22.1-alpha.9") < _tag("v0.22.1-alpha.10")


def test_sorting_mixed_history() -> None:
    names = ["v0.22.1-alpha.1", "v0.21.0", "v0.22.0", "v0.22.1-alpha.0", "v0.22.1"]
    ordered = sorted(_tag(n) for n in names)
    assert [t.to_text() for t in ordered] == [
        "v0.21.0",
        "v0.22.0",
        "v0.22.1-alpha.0",
        "v0.22.1-alpha.1",
        "v0.22.1",
    ]


def test_tag_is_frozen() -> None:
    tag = Tag(1, 2, 3)
    with pytest.raises(AttributeError):
        tag.patch = 4  # type: ignore[misc]

from __future__ import annotations

from tagtrain.release.tag import Prerelease, Tag


def next_alpha_tag(last: Tag, *, label: str) -> Tag:
    """Compute the next tag of the unstable track.

    Continues the chain when ``last`` is already a ``label`` prerelease
    (``v0.22.1-alpha.12 -> v0.22.1-alpha.13``); otherwise starts a new chain on
    the next patch (``v0.22.0 -> v0.22.1-alpha.0``). A prerelease with another
    label also starts a new chain. Numbers never roll over.
    """
    pre = last.prerelease
    if pre is not None and pre.label == label:
        return Tag(
            last.major,
            last.minor,
            last.patch,
            Prerelease(label=label, counter=pre.counter + 1),
        )
    return Tag(last.major, last.minor, last.patch + 1, Prerelease(label=label, counter=0))

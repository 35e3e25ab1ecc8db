"""Release version resolution.

The version comes from the CI tag reference when one is present, otherwise
from the command-line argument. Branch-only tag suffixes are stripped; real
pre-release qualifiers (``-beta``, ``-rc.1``) are kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from npmstage.core.config import DEFAULT_BRANCH_SUFFIXES
from npmstage.core.result import Err, Ok, Result
from npmstage.services.prepare.errors import InvalidVersion, MissingVersion

TAG_REF_ENV = "GITHUB_REF"
TAG_REF_PREFIX = "refs/tags/v"

VersionSource = Literal["tag", "argument"]


@dataclass(frozen=True, slots=True)
class ResolvedVersion:
    value: str
    original: str
    source: VersionSource

    @property
    def was_normalized(self) -> bool:
        return self.value != self.original

    def __str__(self) -> str:
        return self.value


def tag_ref_version(tag_ref: str | None) -> str | None:
    """Return the version carried by ``refs/tags/v<version>``, else None."""
    if tag_ref is None:
        return None
    ref = tag_ref.strip()
    if not ref.startswith(TAG_REF_PREFIX):
        return None
    return ref.removeprefix(TAG_REF_PREFIX) or None


def strip_branch_suffix(version: str, suffixes: tuple[str, ...] = DEFAULT_BRANCH_SUFFIXES) -> str:
    """Remove one reserved ``-<suffix>`` from the very end of version.

    Matching is exact: ``1.0.0-88codefoo`` and ``1.0.088code`` are untouched.
    """
    for suffix in suffixes:
        tail = f"-{suffix}"
        if version.endswith(tail):
            return version[: -len(tail)]
    return version


def resolve_version(
    *,
    tag_ref: str | None,
    argument: str | None,
    branch_suffixes: tuple[str, ...] = DEFAULT_BRANCH_SUFFIXES,
) -> Result[ResolvedVersion, MissingVersion | InvalidVersion]:
    raw = tag_ref_version(tag_ref)
    source: VersionSource = "tag"
    if raw is None:
        raw = argument.strip() if argument else None
        source = "argument"
    if not raw:
        return Err(MissingVersion(env_var=TAG_REF_ENV))

    value = strip_branch_suffix(raw, branch_suffixes)
    if not value:
        return Err(InvalidVersion(value=raw, reason="nothing left after removing branch suffix"))
    return Ok(ResolvedVersion(value=value, original=raw, source=source))

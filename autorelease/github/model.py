from __future__ import annotations

from dataclasses import dataclass

TAG_REF_PREFIX = "refs/tags/"


def tag_ref(tag: str) -> str:
    """Fully-qualified ref of a tag: ``latest`` -> ``refs/tags/latest``."""
    return f"{TAG_REF_PREFIX}{tag}"


def short_ref(ref: str) -> str:
    """Ref path as used by the update endpoint: ``refs/tags/latest`` -> ``tags/latest``."""
    return ref.removeprefix("refs/")


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    repo_owner: str
    repo_name: str
    tag: str
    title: str
    body: str
    is_draft: bool
    is_prerelease: bool


@dataclass(frozen=True, slots=True)
class GitRef:
    ref: str
    target_commit_sha: str


@dataclass(frozen=True, slots=True)
class Release:
    id: int
    tag: str
    html_url: str | None = None
    upload_url: str | None = None

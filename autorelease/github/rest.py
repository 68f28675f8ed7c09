"""GitHub REST operations used to publish a moving-tag release.

Each function issues exactly one request through an ``ApiClient`` and
decodes the response into the types of ``autorelease.github.model``.
"""

from __future__ import annotations

from dataclasses import replace
from urllib.parse import quote

from autorelease.core.context import RepoId
from autorelease.core.result import Err, Ok, Result
from autorelease.core.structured import as_str_dict, get_int, get_str
from autorelease.github.http import ApiClient, HttpError
from autorelease.github.model import GitRef, Release, short_ref

__all__ = [
    "create_ref",
    "update_ref",
    "get_release_by_tag",
    "delete_release",
    "create_release",
]


def _repo_path(repo: RepoId) -> str:
    return f"/repos/{quote(repo.owner, safe='')}/{quote(repo.name, safe='')}"


def _parse_release(obj: object, *, method: str, path: str) -> Result[Release, HttpError]:
    data = as_str_dict(obj)
    if data is None:
        return Err(
            HttpError(method=method, url=path, status=0, message="unexpected release payload")
        )

    release_id = get_int(data, "id")
    tag = get_str(data, "tag_name")
    if release_id is None or tag is None:
        return Err(
            HttpError(
                method=method,
                url=path,
                status=0,
                message="release payload missing id/tag_name",
            )
        )

    return Ok(
        Release(
            id=release_id,
            tag=tag,
            html_url=get_str(data, "html_url"),
            upload_url=get_str(data, "upload_url"),
        )
    )


def create_ref(
    client: ApiClient,
    *,
    repo: RepoId,
    ref: str,
    sha: str,
) -> Result[GitRef, HttpError]:
    """Create ``ref`` (fully qualified, e.g. ``refs/tags/latest``) at ``sha``.

    GitHub answers 422 when the ref already exists.
    """
    result = client.request("POST", f"{_repo_path(repo)}/git/refs", {"ref": ref, "sha": sha})
    if isinstance(result, Err):
        return result
    return Ok(GitRef(ref=ref, target_commit_sha=sha))


def update_ref(
    client: ApiClient,
    *,
    repo: RepoId,
    ref: str,
    sha: str,
    force: bool = True,
) -> Result[GitRef, HttpError]:
    """Move an existing ref to ``sha``.

    ``ref`` may be given fully qualified or in the short ``tags/<tag>`` form
    the endpoint expects.
    """
    path = f"{_repo_path(repo)}/git/refs/{quote(short_ref(ref), safe='/')}"
    result = client.request("PATCH", path, {"sha": sha, "force": force})
    if isinstance(result, Err):
        return result
    return Ok(GitRef(ref=f"refs/{short_ref(ref)}", target_commit_sha=sha))


def get_release_by_tag(
    client: ApiClient,
    *,
    repo: RepoId,
    tag: str,
) -> Result[Release | None, HttpError]:
    """Look up the release attached to ``tag``.

    Returns:
        Ok(Release), Ok(None) when no release exists for the tag (404), or
        Err(HttpError) for any other failure.
    """
    path = f"{_repo_path(repo)}/releases/tags/{quote(tag, safe='')}"
    result = client.request("GET", path)
    if isinstance(result, Err):
        if result.error.is_not_found:
            return Ok(None)
        return result
    return _parse_release(result.value, method="GET", path=path)


def delete_release(
    client: ApiClient,
    *,
    repo: RepoId,
    release_id: int,
) -> Result[None, HttpError]:
    result = client.request("DELETE", f"{_repo_path(repo)}/releases/{release_id}")
    if isinstance(result, Err):
        return result
    return Ok(None)


def create_release(
    client: ApiClient,
    *,
    repo: RepoId,
    tag: str,
    name: str,
    body: str,
    draft: bool,
    prerelease: bool,
) -> Result[Release, HttpError]:
    path = f"{_repo_path(repo)}/releases"
    result = client.request(
        "POST",
        path,
        {
            "tag_name": tag,
            "name": name,
            "body": body,
            "draft": draft,
            "prerelease": prerelease,
        },
    )
    if isinstance(result, Err):
        return result

    # Parse errors here follow a successful POST.
    return _parse_release(result.value, method="POST", path=path).map_err(
        lambda e: replace(e, message=f"{e.message}; the release may already have been created")
    )

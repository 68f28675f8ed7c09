"""Publish a release on a moving tag.

A run is three remote steps in strict order:

1. point ``refs/tags/<tag>`` at the triggering commit (create, or
   force-update when the ref already exists);
2. delete the release currently attached to the tag, if any;
3. create the new release on the tag.

Step 2 is best-effort. Steps 1 and 3 stop the run on failure; nothing done
by earlier steps is rolled back.
"""

from __future__ import annotations

from autorelease.core.context import RepoId
from autorelease.core.result import Err, Ok, Result
from autorelease.github import rest
from autorelease.github.http import ApiClient, HttpError
from autorelease.github.model import GitRef, Release, ReleaseRequest, short_ref, tag_ref
from autorelease.output.console import ConsoleProtocol, group
from autorelease.services.errors import PublishError


class ReleasePublisher:
    def __init__(self, *, client: ApiClient, console: ConsoleProtocol) -> None:
        self._client = client
        self._console = console

    def publish(self, request: ReleaseRequest, commit_sha: str) -> Result[Release, PublishError]:
        """Move the tag, drop the previous release and create the new one."""
        repo = RepoId(owner=request.repo_owner, name=request.repo_name)

        ref = self.ensure_tag_ref(repo=repo, tag=request.tag, sha=commit_sha)
        if isinstance(ref, Err):
            return ref

        self.remove_prior_release(repo=repo, tag=request.tag)

        return self.create_release(repo=repo, request=request)

    def ensure_tag_ref(self, *, repo: RepoId, tag: str, sha: str) -> Result[GitRef, PublishError]:
        """Create ``refs/tags/<tag>`` at ``sha``, or force-move it if it exists.

        Only a 422 from the create call (ref already exists) falls back to an
        update. Auth, permission and network failures are reported as they are.
        """
        ref = tag_ref(tag)
        with group(self._console, "Generating release tag"):
            self._console.print(f'Attempting to create or update release tag "{tag}"')

            created = rest.create_ref(self._client, repo=repo, ref=ref, sha=sha)
            if isinstance(created, Ok):
                self._console.print(f'Successfully created the release tag "{tag}"')
                return created

            if not created.error.is_unprocessable:
                return created.map_err(lambda e: _tag_error(f'could not create tag "{ref}"', e))

            existing = short_ref(ref)
            self._console.print(
                f'Could not create new tag "{ref}" ({created.error.message}) '
                f'therefore updating existing tag "{existing}"'
            )
            updated = rest.update_ref(self._client, repo=repo, ref=existing, sha=sha, force=True)
            if isinstance(updated, Err):
                return updated.map_err(
                    lambda e: _tag_error(f'could not update tag "{existing}"', e)
                )

            self._console.print(f'Successfully updated the release tag "{tag}"')
            return updated

    def remove_prior_release(self, *, repo: RepoId, tag: str) -> Release | None:
        """Delete the release attached to ``tag``.

        Returns the deleted release, or None when there was none or the
        lookup/delete failed. Failures are logged and never stop the run.
        """
        with group(self._console, f'Deleting GitHub releases associated with the tag "{tag}"'):
            self._console.print(f'Searching for releases corresponding to the "{tag}" tag')

            found = rest.get_release_by_tag(self._client, repo=repo, tag=tag)
            if isinstance(found, Err):
                self._console.warning(
                    f'Could not look up release associated with tag "{tag}" ({found.error})'
                )
                return None
            if found.value is None:
                self._console.print(f'No release associated with tag "{tag}"')
                return None

            release = found.value
            self._console.print(f"Deleting release: {release.id}")
            deleted = rest.delete_release(self._client, repo=repo, release_id=release.id)
            if isinstance(deleted, Err):
                self._console.warning(f"Could not delete release {release.id} ({deleted.error})")
                return None
            return release

    def create_release(
        self, *, repo: RepoId, request: ReleaseRequest
    ) -> Result[Release, PublishError]:
        with group(self._console, f'Generating new GitHub release for the "{request.tag}" tag'):
            self._console.print("Creating new release")
            created = rest.create_release(
                self._client,
                repo=repo,
                tag=request.tag,
                name=request.title,
                body=request.body,
                draft=request.is_draft,
                prerelease=request.is_prerelease,
            )
            if isinstance(created, Err):
                return created.map_err(lambda e: _release_error(request.tag, e))
            return created


def _tag_error(message: str, error: HttpError) -> PublishError:
    return PublishError(
        kind="tag_failed",
        message=f"{message}: {error.message}",
        hint=_hint_for(error),
    )


def _release_error(tag: str, error: HttpError) -> PublishError:
    return PublishError(
        kind="release_failed",
        message=f'could not create release for tag "{tag}": {error.message}',
        hint=_hint_for(error),
    )


def _hint_for(error: HttpError) -> str | None:
    match error.status:
        case 401:
            return "check that repo_token is valid"
        case 403 | 404:
            return "the token needs 'contents: write' permission on the repository"
        case 0:
            return "network error talking to the GitHub API"
        case _:
            return None

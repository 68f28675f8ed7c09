from __future__ import annotations

from autorelease.core.context import RepoId
from autorelease.core.result import Err, Ok
from autorelease.github import rest
from autorelease.github.http import MockApiClient
from autorelease.github.model import GitRef, Release, short_ref, tag_ref

REPO = RepoId(owner="octo", name="hello")
SHA = "0123456789abcdef0123456789abcdef01234567"


def test_tag_ref_helpers() -> None:
    assert tag_ref("latest") == "refs/tags/latest"
    assert short_ref("refs/tags/latest") == "tags/latest"
    assert short_ref("tags/latest") == "tags/latest"


def test_create_ref_posts_ref_and_sha() -> None:
    client = MockApiClient()
    client.set_response("POST", "/repos/octo/hello/git/refs", {"ref": "refs/tags/latest"})

    result = rest.create_ref(client, repo=REPO, ref="refs/tags/latest", sha=SHA)

    assert result == Ok(GitRef(ref="refs/tags/latest", target_commit_sha=SHA))
    assert client.calls[0].payload == {"ref": "refs/tags/latest", "sha": SHA}


def test_create_ref_propagates_error() -> None:
    client = MockApiClient()
    client.set_error("POST", "/repos/octo/hello/git/refs", 422, "Reference already exists")

    result = rest.create_ref(client, repo=REPO, ref="refs/tags/latest", sha=SHA)

    assert isinstance(result, Err)
    assert result.error.is_unprocessable


def test_update_ref_patches_short_ref_with_force() -> None:
    client = MockApiClient()
    client.set_response("PATCH", "/repos/octo/hello/git/refs/tags/latest", {})

    result = rest.update_ref(client, repo=REPO, ref="refs/tags/latest", sha=SHA)

    assert result == Ok(GitRef(ref="refs/tags/latest", target_commit_sha=SHA))
    assert client.calls[0].payload == {"sha": SHA, "force": True}


def test_update_ref_accepts_short_form() -> None:
    client = MockApiClient()
    client.set_response("PATCH", "/repos/octo/hello/git/refs/tags/v1/latest", {})

    result = rest.update_ref(client, repo=REPO, ref="tags/v1/latest", sha=SHA, force=False)

    assert isinstance(result, Ok)
    assert client.calls[0].payload == {"sha": SHA, "force": False}


def test_get_release_by_tag_found() -> None:
    client = MockApiClient()
    client.set_response(
        "GET",
        "/repos/octo/hello/releases/tags/latest",
        {
            "id": 99,
            "tag_name": "latest",
            "html_url": "https://github.com/octo/hello/releases/tag/latest",
            "upload_url": "https://uploads.github.com/repos/octo/hello/releases/99/assets{?name,label}",
        },
    )

    result = rest.get_release_by_tag(client, repo=REPO, tag="latest")

    assert isinstance(result, Ok)
    assert result.value == Release(
        id=99,
        tag="latest",
        html_url="https://github.com/octo/hello/releases/tag/latest",
        upload_url="https://uploads.github.com/repos/octo/hello/releases/99/assets{?name,label}",
    )


def test_get_release_by_tag_absent_is_none() -> None:
    client = MockApiClient()

    assert rest.get_release_by_tag(client, repo=REPO, tag="latest") == Ok(None)


def test_get_release_by_tag_quotes_tag() -> None:
    client = MockApiClient()

    rest.get_release_by_tag(client, repo=REPO, tag="v1/latest")

    assert client.calls[0].path == "/repos/octo/hello/releases/tags/v1%2Flatest"


def test_get_release_by_tag_other_errors_propagate() -> None:
    client = MockApiClient()
    client.set_error("GET", "/repos/octo/hello/releases/tags/latest", 401, "Bad credentials")

    result = rest.get_release_by_tag(client, repo=REPO, tag="latest")

    assert isinstance(result, Err)
    assert result.error.status == 401


def test_get_release_by_tag_malformed_payload() -> None:
    client = MockApiClient()
    client.set_response("GET", "/repos/octo/hello/releases/tags/latest", {"name": "x"})

    result = rest.get_release_by_tag(client, repo=REPO, tag="latest")

    assert isinstance(result, Err)
    assert "missing id/tag_name" in result.error.message


def test_delete_release() -> None:
    client = MockApiClient()
    client.set_response("DELETE", "/repos/octo/hello/releases/99", None)

    assert rest.delete_release(client, repo=REPO, release_id=99) == Ok(None)
    assert client.methods == ["DELETE"]


def test_create_release_payload() -> None:
    client = MockApiClient()
    client.set_response("POST", "/repos/octo/hello/releases", {"id": 100, "tag_name": "latest"})

    result = rest.create_release(
        client,
        repo=REPO,
        tag="latest",
        name="Development Build",
        body="notes",
        draft=False,
        prerelease=True,
    )

    assert result == Ok(Release(id=100, tag="latest"))
    assert client.calls[0].payload == {
        "tag_name": "latest",
        "name": "Development Build",
        "body": "notes",
        "draft": False,
        "prerelease": True,
    }


def test_create_release_error() -> None:
    client = MockApiClient()
    client.set_error("POST", "/repos/octo/hello/releases", 422, "Validation Failed")

    result = rest.create_release(
        client, repo=REPO, tag="latest", name="t", body="b", draft=False, prerelease=False
    )

    assert isinstance(result, Err)
    assert result.error.message == "Validation Failed"


def test_create_release_unreadable_response_warns_release_may_exist() -> None:
    client = MockApiClient()
    client.set_response("POST", "/repos/octo/hello/releases", {"name": "x"})

    result = rest.create_release(
        client, repo=REPO, tag="latest", name="t", body="b", draft=False, prerelease=False
    )

    assert isinstance(result, Err)
    assert result.error.status == 0
    assert result.error.message == (
        "release payload missing id/tag_name; the release may already have been created"
    )
    assert client.methods == ["POST"]


def test_get_release_by_tag_unreadable_response_has_no_creation_note() -> None:
    client = MockApiClient()
    client.set_response("GET", "/repos/octo/hello/releases/tags/latest", {"name": "x"})

    result = rest.get_release_by_tag(client, repo=REPO, tag="latest")

    assert isinstance(result, Err)
    assert "may already have been created" not in result.error.message

"""Publish command - move the tag and replace its release."""

from __future__ import annotations

import json

import typer

from autorelease.cli.commands._helpers import exit_on_error, fail
from autorelease.cli.context import CLIContext, build_context
from autorelease.core.config import ActionInputs, load_inputs
from autorelease.core.context import load_event_payload
from autorelease.core.errors import ErrorCode
from autorelease.core.result import Err
from autorelease.github.http import DEFAULT_TIMEOUT_SECONDS, RealApiClient
from autorelease.github.model import Release, ReleaseRequest
from autorelease.output.console import group
from autorelease.output.workflow import write_outputs
from autorelease.services.publisher import ReleasePublisher


def publish(
    repo_token: str = typer.Option(
        "",
        "--repo-token",
        envvar="INPUT_REPO_TOKEN",
        help="Token used for every API call.",
        show_default=False,
    ),
    release_tag: str = typer.Option(
        "",
        "--release-tag",
        envvar="INPUT_RELEASE_TAG",
        help="Tag to create or move and attach the release to.",
        show_default=False,
    ),
    draft: str = typer.Option(
        "",
        "--draft",
        envvar="INPUT_DRAFT",
        help="JSON boolean: publish the release as a draft.",
        show_default=False,
    ),
    prerelease: str = typer.Option(
        "",
        "--prerelease",
        envvar="INPUT_PRERELEASE",
        help="JSON boolean: mark the release as a prerelease.",
        show_default=False,
    ),
    title: str = typer.Option(
        "",
        "--title",
        envvar="INPUT_TITLE",
        help="Release title.",
        show_default=False,
    ),
    body: str = typer.Option(
        "",
        "--body",
        envvar="INPUT_BODY",
        help="Release notes (defaults to a note naming the triggering commit).",
        show_default=False,
    ),
    timeout: float = typer.Option(
        DEFAULT_TIMEOUT_SECONDS,
        "--timeout",
        help="Per-request timeout in seconds.",
    ),
) -> None:
    """Create or move the release tag, delete its old release, publish a new one."""
    ctx = build_context()
    try:
        _publish(
            ctx,
            repo_token=repo_token,
            release_tag=release_tag,
            draft=draft,
            prerelease=prerelease,
            title=title,
            body=body,
            timeout=timeout,
        )
    except typer.Exit:
        raise
    except Exception as e:
        ctx.console.error(str(e) or type(e).__name__)
        raise


def _publish(
    ctx: CLIContext,
    *,
    repo_token: str,
    release_tag: str,
    draft: str,
    prerelease: str,
    title: str,
    body: str,
    timeout: float,
) -> None:
    run = ctx.run
    inputs = load_inputs(
        repo_token=repo_token,
        release_tag=release_tag,
        draft=draft,
        prerelease=prerelease,
        title=title,
        body=body,
        sha=run.sha,
    )
    if isinstance(inputs, Err):
        fail(ctx, inputs.error, ErrorCode.USER_ERROR)
    args = inputs.value

    _initialize(ctx, args)

    publisher = ReleasePublisher(
        client=RealApiClient(args.repo_token, base_url=run.api_url, timeout=timeout),
        console=ctx.console,
    )
    request = ReleaseRequest(
        repo_owner=run.repo.owner,
        repo_name=run.repo.name,
        tag=args.release_tag,
        title=args.title,
        body=args.body,
        is_draft=args.draft,
        is_prerelease=args.prerelease,
    )
    result = publisher.publish(request, run.sha)
    if isinstance(result, Err):
        fail(ctx, result.error, ErrorCode.PUBLISH_ERROR)
    release = result.value

    ctx.console.success(f'Published release {release.id} for tag "{release.tag}"')
    if release.html_url:
        ctx.console.print(release.html_url)

    if run.output_path is not None:
        exit_on_error(
            write_outputs(run.output_path, _outputs(release)),
            ctx,
            ErrorCode.ENV_ERROR,
        )


def _initialize(ctx: CLIContext, args: ActionInputs) -> None:
    run = ctx.run
    with group(ctx.console, "Initializing the Automatic Releases action"):
        ctx.console.print(f"Repository: {run.repo.slug}")
        ctx.console.print(f"Commit: {run.sha}")
        ctx.console.print(f"Release tag: {args.release_tag}")
        if run.event_path is None:
            return
        payload = load_event_payload(run.event_path)
        if isinstance(payload, Err):
            ctx.console.warning(payload.error.message)
            return
        ctx.console.print(json.dumps(payload.value, indent=2, sort_keys=True))


def _outputs(release: Release) -> dict[str, str]:
    outputs = {
        "automatic_releases_tag": release.tag,
        "release_id": str(release.id),
    }
    if release.upload_url:
        outputs["upload_url"] = release.upload_url
    return outputs

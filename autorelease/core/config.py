"""Typed loading of the action inputs.

GitHub Actions hands every ``with:`` input to the step as an ``INPUT_<NAME>``
environment variable. The CLI binds those variables to its options; this
module validates the raw strings into a frozen ``ActionInputs``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from .result import Err, Ok, Result

__all__ = [
    "ActionInputs",
    "ConfigError",
    "default_body",
    "load_inputs",
    "parse_json_bool",
]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when an action input is missing or malformed."""

    message: str
    input_name: str | None = None

    @property
    def hint(self) -> str | None:
        if self.input_name is None:
            return None
        return f"set the '{self.input_name}' input (env INPUT_{self.input_name.upper()})"


@dataclass(frozen=True, slots=True)
class ActionInputs:
    """Validated inputs of one publish run."""

    repo_token: str
    release_tag: str
    draft: bool
    prerelease: bool
    title: str
    body: str

    def __repr__(self) -> str:
        # Keep the token out of tracebacks and debug output.
        return (
            f"ActionInputs(repo_token='***', release_tag={self.release_tag!r}, "
            f"draft={self.draft!r}, prerelease={self.prerelease!r}, title={self.title!r})"
        )


def default_body(sha: str) -> str:
    """Release notes used when the ``body`` input is empty."""
    return f"Automatically generated from the current master branch ({sha})"


def parse_json_bool(raw: str, *, name: str) -> Result[bool, ConfigError]:
    """Decode a JSON-encoded boolean input (``true``/``false``)."""
    try:
        value: object = json.loads(raw)
    except json.JSONDecodeError:
        return Err(ConfigError(f"input '{name}' is not valid JSON: {raw!r}", input_name=name))
    if not isinstance(value, bool):
        return Err(
            ConfigError(f"input '{name}' must be true or false, got {raw!r}", input_name=name)
        )
    return Ok(value)


def _required(raw: str | None, *, name: str) -> Result[str, ConfigError]:
    value = (raw or "").strip()
    if not value:
        return Err(ConfigError(f"input required and not supplied: {name}", input_name=name))
    return Ok(value)


def load_inputs(
    *,
    repo_token: str | None,
    release_tag: str | None,
    draft: str | None,
    prerelease: str | None,
    title: str | None,
    body: str | None,
    sha: str,
) -> Result[ActionInputs, ConfigError]:
    """Validate raw input strings.

    Args:
        repo_token: Token used for every API call.
        release_tag: Tag to move and attach the release to.
        draft: JSON-encoded boolean.
        prerelease: JSON-encoded boolean.
        title: Release display title.
        body: Optional release notes.
        sha: Triggering commit, used for the default body.

    Returns:
        Ok(ActionInputs), or Err(ConfigError) for the first bad input.
    """
    token = _required(repo_token, name="repo_token")
    if isinstance(token, Err):
        return token
    tag = _required(release_tag, name="release_tag")
    if isinstance(tag, Err):
        return tag

    draft_raw = _required(draft, name="draft")
    if isinstance(draft_raw, Err):
        return draft_raw
    draft_flag = parse_json_bool(draft_raw.value, name="draft")
    if isinstance(draft_flag, Err):
        return draft_flag

    prerelease_raw = _required(prerelease, name="prerelease")
    if isinstance(prerelease_raw, Err):
        return prerelease_raw
    prerelease_flag = parse_json_bool(prerelease_raw.value, name="prerelease")
    if isinstance(prerelease_flag, Err):
        return prerelease_flag

    release_title = _required(title, name="title")
    if isinstance(release_title, Err):
        return release_title

    return Ok(
        ActionInputs(
            repo_token=token.value,
            release_tag=tag.value,
            draft=draft_flag.value,
            prerelease=prerelease_flag.value,
            title=release_title.value,
            body=(body or "").strip() or default_body(sha),
        )
    )

"""Run context resolved from the GitHub Actions runner environment.

The runner exposes the repository, the triggering commit and a handful of
paths as environment variables. They are read once at the entry point into a
frozen ``RunContext`` and passed explicitly to everything that needs them.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict

__all__ = [
    "DEFAULT_API_URL",
    "ContextError",
    "RepoId",
    "RunContext",
    "load_event_payload",
]

DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True, slots=True)
class ContextError:
    """Error when the runner environment is incomplete or malformed."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RepoId:
    """Owner/name pair identifying a GitHub repository."""

    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, slug: str) -> Result[RepoId, ContextError]:
        owner, sep, name = slug.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            return Err(
                ContextError(
                    message=f"invalid repository: {slug!r}",
                    hint="expected 'owner/name'",
                )
            )
        return Ok(cls(owner=owner, name=name))

    def __str__(self) -> str:
        return self.slug


@dataclass(frozen=True, slots=True)
class RunContext:
    """Everything the publisher needs to know about the triggering run.

    Attributes:
        repo: Repository the release is published to.
        sha: Commit that triggered the run; the tag is moved onto it.
        api_url: Base URL of the REST API (GitHub Enterprise support).
        event_path: JSON file holding the webhook event, when present.
        output_path: File that step outputs are appended to, when present.
        in_actions: True when running on a GitHub Actions runner.
    """

    repo: RepoId
    sha: str
    api_url: str = DEFAULT_API_URL
    event_path: Path | None = None
    output_path: Path | None = None
    in_actions: bool = False

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Result[RunContext, ContextError]:
        """Build the context from runner variables.

        Args:
            env: Environment mapping (defaults to ``os.environ``).

        Returns:
            Ok(RunContext), or Err(ContextError) if GITHUB_REPOSITORY or
            GITHUB_SHA is missing.
        """
        env = os.environ if env is None else env

        slug = env.get("GITHUB_REPOSITORY", "").strip()
        if not slug:
            return Err(
                ContextError(
                    message="GITHUB_REPOSITORY is not set",
                    hint="run inside GitHub Actions or export GITHUB_REPOSITORY=owner/name",
                )
            )
        repo = RepoId.parse(slug)
        if isinstance(repo, Err):
            return repo

        sha = env.get("GITHUB_SHA", "").strip()
        if not sha:
            return Err(
                ContextError(
                    message="GITHUB_SHA is not set",
                    hint="export GITHUB_SHA with the commit the tag should point at",
                )
            )

        event_path = env.get("GITHUB_EVENT_PATH", "").strip()
        output_path = env.get("GITHUB_OUTPUT", "").strip()

        return Ok(
            cls(
                repo=repo.value,
                sha=sha,
                api_url=(env.get("GITHUB_API_URL", "").strip() or DEFAULT_API_URL).rstrip("/"),
                event_path=Path(event_path) if event_path else None,
                output_path=Path(output_path) if output_path else None,
                in_actions=env.get("GITHUB_ACTIONS", "") == "true",
            )
        )


def load_event_payload(path: Path) -> Result[StrDict, ContextError]:
    """Read the webhook event payload the runner wrote to disk."""
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ContextError(f"event payload not found: {path}"))
    except PermissionError:
        return Err(ContextError(f"permission denied reading: {path}"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(ContextError(f"invalid event payload: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ContextError("event payload root must be a JSON object"))
    return Ok(data)

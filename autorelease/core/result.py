"""Result type for explicit error handling.

Every remote call made while publishing a release returns either ``Ok`` with
the decoded payload or ``Err`` with a structured error. Expected conditions
(a ref that already exists, a tag with no release) are inspected by the
caller instead of being caught as exceptions.

Usage:
    result = get_release_by_tag(client, repo=repo, tag="latest")
    match result:
        case Ok(None):
            print("no previous release")
        case Ok(release):
            print(f"found release {release.id}")
        case Err(error):
            print(f"lookup failed: {error}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result carrying a value."""

    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        """Return self unchanged; there is no error to convert."""
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result carrying an error value."""

    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Convert the contained error with ``f``.

        Used at layer boundaries, e.g. turning a transport ``HttpError`` into
        a ``PublishError`` that the CLI knows how to report.
        """
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]

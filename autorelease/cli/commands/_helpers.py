"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from autorelease.core.errors import ErrorCode
from autorelease.core.result import Err, Result
from autorelease.output.console import Style

if TYPE_CHECKING:
    from autorelease.cli.context import CLIContext


T = TypeVar("T")
E = TypeVar("E")


def fail(ctx: CLIContext, error: object, error_code: ErrorCode) -> NoReturn:
    """Report an error and exit with ``error_code``.

    On a GitHub Actions runner the message becomes an ``::error::`` annotation,
    which marks the step as failed together with the non-zero exit status.

    Expects error objects to have 'message' and optional 'hint' attributes.
    """
    message: str = getattr(error, "message", str(error))
    hint: str | None = getattr(error, "hint", None)
    ctx.console.error(message)
    if hint:
        ctx.console.print(f"hint: {hint}", Style.DIM)
    raise typer.Exit(code=int(error_code))


def exit_on_error[T, E](
    result: Result[T, E],
    ctx: CLIContext,
    error_code: ErrorCode = ErrorCode.PUBLISH_ERROR,
) -> None:
    """Exit with error if result is Err, otherwise return."""
    if isinstance(result, Err):
        fail(ctx, result.error, error_code)

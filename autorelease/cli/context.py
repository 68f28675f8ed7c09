from __future__ import annotations

import os
from dataclasses import dataclass

import typer

from autorelease.core.context import RunContext
from autorelease.core.errors import ErrorCode
from autorelease.core.result import Err
from autorelease.output.console import ConsoleProtocol, Style, make_console


@dataclass(frozen=True, slots=True)
class CLIContext:
    run: RunContext
    console: ConsoleProtocol


def build_context() -> CLIContext:
    run_result = RunContext.from_env()
    if isinstance(run_result, Err):
        # No RunContext to ask, so read the runner flag directly.
        console = make_console(in_actions=os.environ.get("GITHUB_ACTIONS") == "true")
        console.error(run_result.error.message)
        if run_result.error.hint:
            console.print(f"hint: {run_result.error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    run = run_result.value
    return CLIContext(run=run, console=make_console(in_actions=run.in_actions))

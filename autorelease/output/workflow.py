"""GitHub Actions workflow command helpers.

Commands are single log lines of the form ``::name::value``; step outputs are
``name=value`` lines appended to the file named by ``GITHUB_OUTPUT``.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from autorelease.core.result import Err, Ok, Result

__all__ = ["OutputError", "escape_data", "write_outputs"]


@dataclass(frozen=True, slots=True)
class OutputError:
    message: str
    path: Path


def escape_data(value: str) -> str:
    """Escape a command value so multi-line text stays one log line."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _format_output(name: str, value: str) -> str:
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(path: Path, outputs: Mapping[str, str]) -> Result[None, OutputError]:
    """Append step outputs to the runner's output file."""
    try:
        with path.open("a", encoding="utf-8") as f:
            for name, value in outputs.items():
                f.write(_format_output(name, value))
    except OSError as e:
        return Err(OutputError(message=f"failed to write step outputs: {e}", path=path))
    return Ok(None)

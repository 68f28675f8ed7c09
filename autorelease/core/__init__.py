"""Core domain types and logic."""

from .config import ActionInputs, ConfigError, load_inputs
from .context import ContextError, RepoId, RunContext
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ActionInputs",
    "ConfigError",
    "load_inputs",
    # context
    "ContextError",
    "RepoId",
    "RunContext",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]

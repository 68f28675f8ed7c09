"""Error codes for CLI exit status.

Each failure class of a publish run maps to one stable process exit code so
that a CI step can tell bad inputs apart from an API failure.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the CLI.

    - 0: Success
    - 1: User error (missing or malformed action inputs)
    - 2: Environment error (runner variables such as GITHUB_SHA missing)
    - 3: Publish error (the GitHub API rejected the tag or release)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    PUBLISH_ERROR = 3

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

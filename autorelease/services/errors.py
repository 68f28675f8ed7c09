from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class PublishError:
    kind: Literal[
        "tag_failed",
        "release_failed",
    ]
    message: str
    hint: str | None = None

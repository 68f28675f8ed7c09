"""Release publishing services."""

from .errors import PublishError
from .publisher import ReleasePublisher

__all__ = ["PublishError", "ReleasePublisher"]

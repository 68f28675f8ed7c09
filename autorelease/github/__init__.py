"""GitHub REST API access."""

from .http import ApiClient, HttpError, MockApiClient, RealApiClient
from .model import GitRef, Release, ReleaseRequest, tag_ref

__all__ = [
    "ApiClient",
    "HttpError",
    "MockApiClient",
    "RealApiClient",
    "GitRef",
    "Release",
    "ReleaseRequest",
    "tag_ref",
]

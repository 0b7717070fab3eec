"""MediaPackage tagging adapter package."""

from __future__ import annotations

from .client import MediaPackageTaggingClient
from .schema import ErrorResponse, ListTagsResponse, TagResourceRequest

__all__ = [
    "ErrorResponse",
    "ListTagsResponse",
    "MediaPackageTaggingClient",
    "TagResourceRequest",
]

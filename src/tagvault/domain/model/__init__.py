"""Domain model for tag reconciliation and secret resolution."""

from __future__ import annotations

from .secrets import (
    COMPOSITE_ID_SEPARATOR,
    FetchedSecret,
    SelectorKind,
    VersionSelector,
    compose_identifier,
    select_version,
)
from .tags import SystemTagFilter, TagDiff, TagSet, TagsLike

__all__ = [
    "COMPOSITE_ID_SEPARATOR",
    "FetchedSecret",
    "SelectorKind",
    "SystemTagFilter",
    "TagDiff",
    "TagSet",
    "TagsLike",
    "VersionSelector",
    "compose_identifier",
    "select_version",
]

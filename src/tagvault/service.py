"""Tagging entry points called by the resource lifecycle framework."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from tagvault.domain.model.tags import TagSet

if TYPE_CHECKING:
    from tagvault.domain.context import InvocationContext
    from tagvault.domain.model.tags import TagsLike
    from tagvault.domain.reconciliation import TagReconciler

log = getLogger(__name__)


@dataclass(slots=True)
class TagResult:
    """Per-invocation tag state shared between the framework and this package.

    ``tags_in`` holds the tags the configuration asks for; ``tags_out`` is filled
    by :meth:`TaggingService.list_tags` with what the remote object carries.
    """

    tags_in: TagSet = field(default_factory=TagSet)
    tags_out: TagSet | None = None


def get_tags_in(result: TagResult | None) -> dict[str, str] | None:
    """Return the requested tags, or ``None`` when there are none."""
    if result is None or not result.tags_in:
        return None
    return result.tags_in.to_dict()


def set_tags_out(result: TagResult | None, tags: TagsLike) -> None:
    if result is not None:
        result.tags_out = TagSet.new(tags)


@dataclass(slots=True, frozen=True)
class TaggingService:
    reconciler: TagReconciler

    def list_tags(
        self,
        ctx: InvocationContext,
        identifier: str,
        *,
        result: TagResult | None = None,
    ) -> TagSet:
        tags = self.reconciler.read(ctx, identifier)
        set_tags_out(result, tags)
        return tags

    def update_tags(
        self,
        ctx: InvocationContext,
        identifier: str,
        old_tags: TagsLike,
        new_tags: TagsLike,
    ) -> None:
        log.debug("Updating tags for resource %s", identifier)
        self.reconciler.reconcile(ctx, identifier, old_tags, new_tags)

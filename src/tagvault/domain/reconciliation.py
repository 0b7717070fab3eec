"""Tag reconciliation against a remote tagging API.

A reconcile pass issues at most two remote calls, always in this order:

1. one untag call for the keys that are no longer desired;
2. one tag call for keys that are new or carry a changed value.

System tags are stripped from both operand sets before either call. The first
failing call ends the pass, so an untag failure means the tag call is never
issued. A failed tag call after a successful untag leaves the remote object
partially converged; calling :meth:`TagReconciler.reconcile` again with the
same inputs finishes the job.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import TransportFailure
from .model.tags import SystemTagFilter, TagDiff, TagSet

if TYPE_CHECKING:
    from .context import InvocationContext
    from .model.tags import TagsLike
    from .ports.tagging import TaggingTransport

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TagReconciler:
    transport: TaggingTransport
    system_filter: SystemTagFilter

    def read(self, ctx: InvocationContext, identifier: str) -> TagSet:
        """Return the tags currently attached to ``identifier``.

        Transport errors propagate unchanged.
        """
        tags = self.transport.list_tags_for_resource(ctx, identifier)
        observed = TagSet.new(tags)
        log.debug("Listed %d tag(s) for resource %s", len(observed), identifier)
        return observed

    def diff(self, observed: TagsLike, desired: TagsLike) -> TagDiff:
        return TagDiff.between(observed, desired, self.system_filter)

    def reconcile(
        self,
        ctx: InvocationContext,
        identifier: str,
        observed: TagsLike,
        desired: TagsLike,
    ) -> None:
        diff = self.diff(observed, desired)

        if diff.removed:
            keys = diff.removed.keys()
            log.debug("Untagging resource %s: keys=%s", identifier, keys)
            try:
                self.transport.untag_resource(ctx, identifier, keys)
            except Exception as exc:
                raise TransportFailure("untagging resource", identifier, exc) from exc

        if diff.updated:
            tags = diff.updated.to_dict()
            log.debug("Tagging resource %s: keys=%s", identifier, sorted(tags))
            try:
                self.transport.tag_resource(ctx, identifier, tags)
            except Exception as exc:
                raise TransportFailure("tagging resource", identifier, exc) from exc

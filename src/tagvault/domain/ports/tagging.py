"""Port for the remote tagging API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from tagvault.domain.context import InvocationContext


@runtime_checkable
class TaggingTransport(Protocol):
    """Narrow view of a service client that can list, add and remove tags.

    Implementations raise :class:`tagvault.domain.errors.TransportError` (or any
    other exception) on failure; the reconciler adds context and re-raises.
    """

    def list_tags_for_resource(
        self, ctx: InvocationContext, identifier: str
    ) -> Mapping[str, str] | None: ...

    def untag_resource(
        self, ctx: InvocationContext, identifier: str, keys: Sequence[str]
    ) -> None: ...

    def tag_resource(
        self, ctx: InvocationContext, identifier: str, tags: Mapping[str, str]
    ) -> None: ...


__all__ = ["TaggingTransport"]

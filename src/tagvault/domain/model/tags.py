"""Tag sets, the system tag policy and the derived tag diff."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import Final, TypeAlias

TagsLike: TypeAlias = "TagSet | Mapping[str, str | None] | Iterable[tuple[str, str | None]] | None"


class TagSet(Mapping[str, str]):
    """Immutable mapping from tag key to tag value.

    Iteration follows insertion order; :meth:`keys` is sorted so that every
    list emitted to a transport is deterministic.
    """

    __slots__ = ("_tags",)

    def __init__(self, tags: Mapping[str, str] | None = None) -> None:
        self._tags: dict[str, str] = dict(tags) if tags else {}

    @classmethod
    def new(cls, value: TagsLike = None) -> TagSet:
        """Build a tag set from a mapping, key/value pairs, another set or ``None``."""
        if value is None:
            return cls()
        if isinstance(value, TagSet):
            return value
        items = value.items() if isinstance(value, Mapping) else value
        tags: dict[str, str] = {}
        for key, raw in items:
            if not isinstance(key, str):
                raise TypeError(f"Tag key must be a string, got {type(key).__name__}")
            if raw is None:
                raw = ""
            if not isinstance(raw, str):
                raise TypeError(f"Tag value for {key!r} must be a string, got {type(raw).__name__}")
            tags[key] = raw
        return cls(tags)

    def __getitem__(self, key: str) -> str:
        return self._tags[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __hash__(self) -> int:
        return hash(frozenset(self._tags.items()))

    def __repr__(self) -> str:
        return f"TagSet({self._tags!r})"

    def keys(self) -> list[str]:  # type: ignore[override]
        return sorted(self._tags)

    def to_dict(self) -> dict[str, str]:
        return dict(self._tags)

    def removed(self, desired: TagsLike) -> TagSet:
        """Tags of this set whose keys are no longer present in ``desired``."""
        target = TagSet.new(desired)
        return TagSet({key: value for key, value in self._tags.items() if key not in target})

    def updated(self, desired: TagsLike) -> TagSet:
        """Tags of ``desired`` that are new or carry a different value than here."""
        target = TagSet.new(desired)
        return TagSet(
            {key: value for key, value in target.items() if self._tags.get(key) != value}
        )

    def ignore_system(self, system_filter: SystemTagFilter) -> TagSet:
        return system_filter.apply(self)

    def ignore_prefixes(self, *prefixes: str) -> TagSet:
        return TagSet(
            {key: value for key, value in self._tags.items() if not key.startswith(prefixes)}
        )

    def only(self, keys: Iterable[str]) -> TagSet:
        wanted = set(keys)
        return TagSet({key: value for key, value in self._tags.items() if key in wanted})

    def merge(self, other: TagsLike) -> TagSet:
        """Return a new set with ``other`` layered on top of this one."""
        merged = dict(self._tags)
        merged.update(TagSet.new(other))
        return TagSet(merged)


@dataclass(slots=True, frozen=True)
class SystemTagFilter:
    """Policy naming the tag keys a platform reserves for itself."""

    prefixes: tuple[str, ...] = ()
    keys: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def for_platform(cls, platform: str) -> SystemTagFilter:
        return _PLATFORM_FILTERS[platform.strip().lower()]

    def with_prefixes(self, *prefixes: str) -> SystemTagFilter:
        merged = self.prefixes + tuple(p for p in prefixes if p not in self.prefixes)
        return replace(self, prefixes=merged)

    def matches(self, key: str) -> bool:
        return key in self.keys or key.startswith(self.prefixes)

    def apply(self, tags: TagsLike) -> TagSet:
        source = TagSet.new(tags)
        return TagSet({key: value for key, value in source.items() if not self.matches(key)})


_PLATFORM_FILTERS: Final[dict[str, SystemTagFilter]] = {
    "aws": SystemTagFilter(prefixes=("aws:",)),
    "none": SystemTagFilter(),
}


@dataclass(slots=True, frozen=True)
class TagDiff:
    """Removals and upserts needed to move ``observed`` tags to ``desired``."""

    removed: TagSet
    updated: TagSet

    @classmethod
    def between(
        cls,
        observed: TagsLike,
        desired: TagsLike,
        system_filter: SystemTagFilter,
    ) -> TagDiff:
        current = TagSet.new(observed)
        target = TagSet.new(desired)
        return cls(
            removed=current.removed(target).ignore_system(system_filter),
            updated=current.updated(target).ignore_system(system_filter),
        )

    @property
    def is_empty(self) -> bool:
        return not self.removed and not self.updated

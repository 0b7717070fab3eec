"""Secret version selectors, composite identifiers and fetched secret values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, SecretBytes, SecretStr

COMPOSITE_ID_SEPARATOR = "|"


class SelectorKind(StrEnum):
    NONE = "none"
    VERSION_ID = "version_id"
    VERSION_STAGE = "version_stage"


@dataclass(slots=True, frozen=True)
class VersionSelector:
    """Which version of a secret to read: none, by version id, or by stage label."""

    kind: SelectorKind = SelectorKind.NONE
    value: str | None = None

    def __post_init__(self) -> None:
        if self.kind is SelectorKind.NONE:
            if self.value is not None:
                raise ValueError("A NONE selector cannot carry a value")
        elif not self.value:
            raise ValueError(f"A {self.kind} selector requires a non-empty value")

    @classmethod
    def none(cls) -> VersionSelector:
        return cls()

    @classmethod
    def by_version_id(cls, version_id: str) -> VersionSelector:
        return cls(SelectorKind.VERSION_ID, version_id)

    @classmethod
    def by_version_stage(cls, version_stage: str) -> VersionSelector:
        return cls(SelectorKind.VERSION_STAGE, version_stage)

    @property
    def version_id(self) -> str | None:
        return self.value if self.kind is SelectorKind.VERSION_ID else None

    @property
    def version_stage(self) -> str | None:
        return self.value if self.kind is SelectorKind.VERSION_STAGE else None

    def rendering(self) -> str:
        if self.kind is SelectorKind.NONE:
            return ""
        return f"{self.kind}:{self.value}"


def select_version(raw_version_id: str | None, raw_version_stage: str | None) -> VersionSelector:
    """Pick the selector for a lookup; a version id wins over a stage label."""
    if raw_version_id:
        return VersionSelector.by_version_id(raw_version_id)
    if raw_version_stage:
        return VersionSelector.by_version_stage(raw_version_stage)
    return VersionSelector.none()


def compose_identifier(secret_name: str, selector: VersionSelector) -> str:
    return f"{secret_name}{COMPOSITE_ID_SEPARATOR}{selector.rendering()}"


class FetchedSecret(BaseModel):
    """A secret version as returned by a successful lookup.

    The payload fields are pydantic secret types: they render masked in
    ``repr``, ``str`` and JSON dumps and must be unwrapped explicitly.
    """

    model_config = ConfigDict(frozen=True)

    arn: str
    created_date: datetime | None = None
    secret_binary: SecretBytes = Field(default_factory=lambda: SecretBytes(b""))
    secret_string: SecretStr = Field(default_factory=lambda: SecretStr(""))
    name: str | None = None
    version_id: str | None = None
    version_stages: tuple[str, ...] = ()

    def created_date_rfc3339(self) -> str:
        if self.created_date is None:
            return ""
        value = self.created_date
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")

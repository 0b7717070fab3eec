"""In-memory transports that record every remote call."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from tagvault.domain.ports.secrets import GetSecretValueOutput

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from tagvault.domain.context import InvocationContext
    from tagvault.domain.ports.secrets import GetSecretValueInput

SECRET_ARN = "arn:aws:secretsmanager:us-east-1:123456789012:secret:s1-AbCdEf"
CREATED_AT = datetime(2024, 3, 1, 12, 30, 45, tzinfo=UTC)


@dataclass
class RecordingTaggingTransport:
    tags: dict[str, dict[str, str]] = field(default_factory=dict)
    calls: list[tuple[str, str, object]] = field(default_factory=list)
    fail_on: dict[str, Exception] = field(default_factory=dict)

    def list_tags_for_resource(self, ctx: InvocationContext, identifier: str) -> dict[str, str]:
        ctx.check()
        self.calls.append(("list", identifier, None))
        self._maybe_fail("list")
        return dict(self.tags.get(identifier, {}))

    def untag_resource(
        self, ctx: InvocationContext, identifier: str, keys: Sequence[str]
    ) -> None:
        ctx.check()
        self.calls.append(("untag", identifier, list(keys)))
        self._maybe_fail("untag")
        current = self.tags.setdefault(identifier, {})
        for key in keys:
            current.pop(key, None)

    def tag_resource(
        self, ctx: InvocationContext, identifier: str, tags: Mapping[str, str]
    ) -> None:
        ctx.check()
        self.calls.append(("tag", identifier, dict(tags)))
        self._maybe_fail("tag")
        self.tags.setdefault(identifier, {}).update(tags)

    @property
    def mutating_calls(self) -> list[tuple[str, str, object]]:
        return [call for call in self.calls if call[0] != "list"]

    def _maybe_fail(self, operation: str) -> None:
        error = self.fail_on.get(operation)
        if error is not None:
            raise error


@dataclass
class StubSecretsTransport:
    output: GetSecretValueOutput = field(default_factory=GetSecretValueOutput)
    error: Exception | None = None
    requests: list[GetSecretValueInput] = field(default_factory=list)

    def get_secret_value(
        self, ctx: InvocationContext, request: GetSecretValueInput
    ) -> GetSecretValueOutput:
        ctx.check()
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.output

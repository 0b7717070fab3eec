"""Ephemeral secret entry point.

``open`` reads one secret version for transient use during a single
operation. The payload fields of the result are :class:`pydantic.SecretStr`
values and are never meant to be written to persisted state.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError

from tagvault.domain.errors import SecretReadError
from tagvault.domain.model.secrets import compose_identifier, select_version

if TYPE_CHECKING:
    from tagvault.domain.context import InvocationContext
    from tagvault.domain.model.secrets import FetchedSecret
    from tagvault.domain.resolution import SecretResolver

log = getLogger(__name__)

TYPE_NAME: Final = "aws_secretsmanager_secret"


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(slots=True, frozen=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str = ""


@dataclass(slots=True, frozen=True)
class AttributeSpec:
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False


SCHEMA: Final[dict[str, AttributeSpec]] = {
    "secret_id": AttributeSpec(required=True),
    "version_id": AttributeSpec(optional=True),
    "version_stage": AttributeSpec(optional=True),
    "arn": AttributeSpec(computed=True),
    "created_date": AttributeSpec(computed=True),
    "secret_binary": AttributeSpec(computed=True, sensitive=True),
    "secret_string": AttributeSpec(computed=True, sensitive=True),
}


class OpenSecretRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    secret_id: str
    version_id: str | None = None
    version_stage: str | None = None


class OpenSecretResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    secret_id: str
    version_id: str | None = None
    version_stage: str | None = None

    arn: str
    created_date: str
    secret_binary: SecretStr
    secret_string: SecretStr

    def secret_binary_bytes(self) -> bytes:
        """The binary payload as the original bytes."""
        return self.secret_binary.get_secret_value().encode("utf-8", errors="surrogateescape")


@dataclass(slots=True)
class OpenResponse:
    result: OpenSecretResult | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add_error(self, summary: str, detail: str = "") -> None:
        self.diagnostics.append(Diagnostic(Severity.ERROR, summary, detail))

    def add_warning(self, summary: str, detail: str = "") -> None:
        self.diagnostics.append(Diagnostic(Severity.WARNING, summary, detail))

    @property
    def has_error(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)


def _binary_as_text(payload: bytes) -> str:
    # lossless: undecodable bytes survive as surrogate escapes
    return payload.decode("utf-8", errors="surrogateescape")


def _build_result(request: OpenSecretRequest, secret: FetchedSecret) -> OpenSecretResult:
    return OpenSecretResult(
        secret_id=request.secret_id,
        version_id=request.version_id,
        version_stage=request.version_stage,
        arn=secret.arn,
        created_date=secret.created_date_rfc3339(),
        secret_binary=SecretStr(_binary_as_text(secret.secret_binary.get_secret_value())),
        secret_string=secret.secret_string,
    )


@dataclass(slots=True, frozen=True)
class EphemeralSecret:
    resolver: SecretResolver

    type_name: str = TYPE_NAME

    @staticmethod
    def schema() -> dict[str, AttributeSpec]:
        return dict(SCHEMA)

    def open(
        self,
        ctx: InvocationContext,
        request: OpenSecretRequest | Mapping[str, object],
    ) -> OpenResponse:
        response = OpenResponse()

        try:
            data = (
                request
                if isinstance(request, OpenSecretRequest)
                else OpenSecretRequest.model_validate(dict(request))
            )
        except ValidationError as exc:
            for error in exc.errors():
                location = ".".join(str(part) for part in error["loc"]) or "request"
                response.add_error(f"Invalid attribute {location}", error["msg"])
            return response

        if data.version_id and data.version_stage:
            response.add_warning(
                "Conflicting version selectors",
                "Both version_id and version_stage were set; version_id takes precedence.",
            )

        selector = select_version(data.version_id, data.version_stage)
        try:
            secret = self.resolver.fetch(ctx, data.secret_id, selector)
        except SecretReadError as exc:
            identifier = compose_identifier(data.secret_id, selector)
            log.warning("Could not open secret %s", identifier)
            response.add_error(f"failed reading secret ({identifier})", str(exc.cause))
            return response

        response.result = _build_result(data, secret)
        return response

"""Port for the remote secret retrieval API."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, model_validator

if TYPE_CHECKING:
    from tagvault.domain.context import InvocationContext


class GetSecretValueInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    secret_id: str
    version_id: str | None = None
    version_stage: str | None = None

    @model_validator(mode="after")
    def _single_selector(self) -> GetSecretValueInput:
        if self.version_id is not None and self.version_stage is not None:
            raise ValueError("version_id and version_stage are mutually exclusive")
        return self


class GetSecretValueOutput(BaseModel):
    """Transport-level result; optional fields stay ``None`` when absent."""

    model_config = ConfigDict(frozen=True)

    arn: str | None = None
    name: str | None = None
    version_id: str | None = None
    created_date: datetime | None = None
    secret_binary: bytes | None = None
    secret_string: str | None = None
    version_stages: tuple[str, ...] = ()


@runtime_checkable
class SecretsTransport(Protocol):
    def get_secret_value(
        self, ctx: InvocationContext, request: GetSecretValueInput
    ) -> GetSecretValueOutput: ...


__all__ = ["GetSecretValueInput", "GetSecretValueOutput", "SecretsTransport"]

"""Pydantic models for the Secrets Manager JSON 1.1 payloads."""

from __future__ import annotations

import base64
import binascii
from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SecretsManagerBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GetSecretValueRequest(SecretsManagerBaseModel):
    secret_id: str = Field(alias="SecretId")
    version_id: str | None = Field(default=None, alias="VersionId")
    version_stage: str | None = Field(default=None, alias="VersionStage")

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True, exclude_none=True)


class GetSecretValueResponse(SecretsManagerBaseModel):
    arn: str | None = Field(default=None, alias="ARN")
    name: str | None = Field(default=None, alias="Name")
    version_id: str | None = Field(default=None, alias="VersionId")
    created_date: datetime | None = Field(default=None, alias="CreatedDate")
    secret_binary: bytes | None = Field(default=None, alias="SecretBinary")
    secret_string: str | None = Field(default=None, alias="SecretString")
    version_stages: list[str] = Field(default_factory=list, alias="VersionStages")

    @field_validator("secret_binary", mode="before")
    @classmethod
    def _decode_base64(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as exc:
                raise ValueError("SecretBinary is not valid base64") from exc
        return value


class ErrorResponse(SecretsManagerBaseModel):
    type: str | None = Field(default=None, alias="__type")
    message: str | None = None
    message_upper: str | None = Field(default=None, alias="Message")

    @property
    def code(self) -> str | None:
        if self.type is None:
            return None
        return self.type.rsplit("#", 1)[-1]

    @property
    def text(self) -> str | None:
        return self.message or self.message_upper

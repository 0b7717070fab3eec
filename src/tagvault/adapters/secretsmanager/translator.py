"""Translate Secrets Manager payloads to and from the secrets port types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tagvault.domain.ports.secrets import GetSecretValueOutput

from .schema import GetSecretValueRequest

if TYPE_CHECKING:
    from tagvault.domain.ports.secrets import GetSecretValueInput

    from .schema import GetSecretValueResponse


def translate_request(request: GetSecretValueInput) -> GetSecretValueRequest:
    return GetSecretValueRequest(
        secret_id=request.secret_id,
        version_id=request.version_id,
        version_stage=request.version_stage,
    )


def translate_response(response: GetSecretValueResponse) -> GetSecretValueOutput:
    return GetSecretValueOutput(
        arn=response.arn,
        name=response.name,
        version_id=response.version_id,
        created_date=response.created_date,
        secret_binary=response.secret_binary,
        secret_string=response.secret_string,
        version_stages=tuple(response.version_stages),
    )

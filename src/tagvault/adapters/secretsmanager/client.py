"""HTTP secrets transport speaking the Secrets Manager JSON 1.1 protocol."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from tagvault.adapters.http_resilience import (
    ResilienceConfig,
    ResilientClient,
    raise_transport_error,
    request_timeout,
    within_deadline,
)
from tagvault.domain.errors import SecretNotFoundError, TransportError
from tagvault.domain.ports.secrets import SecretsTransport

from .schema import ErrorResponse, GetSecretValueResponse
from .translator import translate_request, translate_response

if TYPE_CHECKING:
    from collections.abc import Callable

    from tagvault.domain.context import InvocationContext
    from tagvault.domain.ports.secrets import GetSecretValueInput, GetSecretValueOutput

log = getLogger(__name__)

TARGET_PREFIX = "secretsmanager"
CONTENT_TYPE = "application/x-amz-json-1.1"

_NOT_FOUND_CODE = "ResourceNotFoundException"
_INVALID_REQUEST_CODE = "InvalidRequestException"
_DELETED_MARKER = "because it was marked for deletion"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _is_not_found(code: str | None, message: str) -> bool:
    if code == _NOT_FOUND_CODE:
        return True
    return code == _INVALID_REQUEST_CODE and _DELETED_MARKER in message


def _error_from_response(response: httpx.Response) -> TransportError:
    code: str | None = None
    message: str | None = None
    try:
        payload = ErrorResponse.model_validate(response.json())
        code, message = payload.code, payload.text
    except (ValueError, ValidationError):
        pass
    text = message or response.reason_phrase or f"HTTP {response.status_code}"
    if code:
        text = f"{code}: {text}"
    error_type = SecretNotFoundError if _is_not_found(code, text) else TransportError
    return error_type(text, code=code, status=response.status_code)


@dataclass(slots=True)
class SecretsManagerClient:
    resilience: ResilienceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def get_secret_value(
        self, ctx: InvocationContext, request: GetSecretValueInput
    ) -> GetSecretValueOutput:
        ctx.check()
        payload = translate_request(request).to_payload()
        timeout = request_timeout(ctx, self.resilience)
        raw = asyncio.run(
            within_deadline(ctx, self._invoke("GetSecretValue", payload, timeout=timeout))
        )
        try:
            response = GetSecretValueResponse.model_validate(raw)
        except ValidationError as exc:
            raise TransportError(f"Unexpected GetSecretValue response: {exc}") from exc
        if response.arn is None:
            raise TransportError("Empty GetSecretValue response")
        return translate_response(response)

    async def _invoke(
        self,
        operation: str,
        payload: dict[str, str],
        *,
        timeout: float,
    ) -> object:
        headers = {
            "Content-Type": CONTENT_TYPE,
            "X-Amz-Target": f"{TARGET_PREFIX}.{operation}",
        }
        async with self.client_factory(self.resilience) as client:
            try:
                response = await client.post("/", json=payload, headers=headers, timeout=timeout)
            except httpx.HTTPError as exc:
                log.warning("Secrets Manager %s failed: %s", operation, exc)
                raise_transport_error(exc)
        if response.is_error:
            error = _error_from_response(response)
            log.warning("Secrets Manager %s returned %s", operation, error.code or error.status)
            raise error
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"Malformed {operation} response body") from exc


if TYPE_CHECKING:
    _transport_check: SecretsTransport = SecretsManagerClient(
        ResilienceConfig(name="secretsmanager")
    )

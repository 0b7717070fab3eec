"""HTTP tagging transport for the MediaPackage REST API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Unpack
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from tagvault.adapters.http_resilience import (
    ResilienceConfig,
    ResilientClient,
    raise_transport_error,
    request_timeout,
    within_deadline,
)
from tagvault.domain.errors import TransportError
from tagvault.domain.ports.tagging import TaggingTransport

from .schema import ErrorResponse, ListTagsResponse, TagResourceRequest

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from tagvault.adapters.http_resilience import RequestOptions
    from tagvault.domain.context import InvocationContext

log = getLogger(__name__)

_ERROR_TYPE_HEADER = "x-amzn-ErrorType"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _tags_path(identifier: str) -> str:
    return f"/tags/{quote(identifier, safe='')}"


def _error_from_response(response: httpx.Response) -> TransportError:
    code = response.headers.get(_ERROR_TYPE_HEADER)
    if code:
        code = code.split(":", 1)[0]
    try:
        payload = ErrorResponse.model_validate(response.json())
        message = payload.text
    except (ValueError, ValidationError):
        message = None
    text = message or response.reason_phrase or f"HTTP {response.status_code}"
    if code:
        text = f"{code}: {text}"
    return TransportError(text, code=code, status=response.status_code)


@dataclass(slots=True)
class MediaPackageTaggingClient:
    resilience: ResilienceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def list_tags_for_resource(self, ctx: InvocationContext, identifier: str) -> dict[str, str]:
        response = self._call(ctx, "GET", _tags_path(identifier))
        if not response.content:
            return {}
        try:
            return ListTagsResponse.model_validate(response.json()).tags
        except (ValueError, ValidationError) as exc:
            raise TransportError(f"Unexpected ListTagsForResource response: {exc}") from exc

    def untag_resource(
        self, ctx: InvocationContext, identifier: str, keys: Sequence[str]
    ) -> None:
        params = [("tagKeys", key) for key in keys]
        self._call(ctx, "DELETE", _tags_path(identifier), params=params)

    def tag_resource(
        self, ctx: InvocationContext, identifier: str, tags: Mapping[str, str]
    ) -> None:
        body = TagResourceRequest(tags=dict(tags)).model_dump(mode="json")
        self._call(ctx, "POST", _tags_path(identifier), json=body)

    def _call(
        self,
        ctx: InvocationContext,
        method: str,
        path: str,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        ctx.check()
        kwargs["timeout"] = request_timeout(ctx, self.resilience)
        return asyncio.run(within_deadline(ctx, self._request(method, path, **kwargs)))

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        async with self.client_factory(self.resilience) as client:
            try:
                response = await client.request(method, path, **kwargs)
            except httpx.HTTPError as exc:
                log.warning("MediaPackage %s %s failed: %s", method, path, exc)
                raise_transport_error(exc)
        if response.is_error:
            error = _error_from_response(response)
            log.warning("MediaPackage %s %s returned %s", method, path, error)
            raise error
        return response


if TYPE_CHECKING:
    _transport_check: TaggingTransport = MediaPackageTaggingClient(
        ResilienceConfig(name="mediapackage")
    )

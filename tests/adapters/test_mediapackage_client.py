from __future__ import annotations

import json
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from tagvault.adapters.mediapackage import MediaPackageTaggingClient
from tagvault.config.http_resilience import ResilienceConfig
from tagvault.domain.context import InvocationContext
from tagvault.domain.errors import ContextExpiredError, TransportError, TransportFailure
from tagvault.domain.model.tags import SystemTagFilter
from tagvault.domain.reconciliation import TagReconciler

from tests.support.http import make_client_factory

ARN = "arn:aws:mediapackage:us-east-1:123456789012:channels/abc"
BASE_URL = "https://mediapackage.example.test"


def _client(
    handler: Callable[[httpx.Request], httpx.Response],
    recorded: list[httpx.Request] | None = None,
    *,
    delay: float = 0.0,
) -> MediaPackageTaggingClient:
    def recording_handler(request: httpx.Request) -> httpx.Response:
        if recorded is not None:
            recorded.append(request)
        return handler(request)

    return MediaPackageTaggingClient(
        ResilienceConfig(name="mediapackage", base_url=BASE_URL),
        client_factory=make_client_factory(recording_handler, delay=delay),
    )


def test_list_tags_reads_tags_payload() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda _: httpx.Response(200, json={"tags": {"env": "prod"}}), requests)

    tags = client.list_tags_for_resource(InvocationContext.background(), ARN)

    assert tags == {"env": "prod"}
    (request,) = requests
    assert request.method == "GET"
    assert request.url.path == f"/tags/{ARN}"


def test_list_tags_handles_empty_body() -> None:
    client = _client(lambda _: httpx.Response(200))

    assert client.list_tags_for_resource(InvocationContext.background(), ARN) == {}


def test_list_tags_rejects_malformed_payload() -> None:
    client = _client(lambda _: httpx.Response(200, json={"tags": {"env": None}}))

    with pytest.raises(TransportError, match="^Unexpected ListTagsForResource response"):
        client.list_tags_for_resource(InvocationContext.background(), ARN)


def test_list_tags_rejects_non_json_body() -> None:
    client = _client(lambda _: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(TransportError, match="^Unexpected ListTagsForResource response"):
        client.list_tags_for_resource(InvocationContext.background(), ARN)


def test_untag_sends_repeated_tag_keys() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda _: httpx.Response(204), requests)

    client.untag_resource(InvocationContext.background(), ARN, ["a", "b"])

    (request,) = requests
    assert request.method == "DELETE"
    assert request.url.params.get_list("tagKeys") == ["a", "b"]


def test_tag_posts_tags_body() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda _: httpx.Response(204), requests)

    client.tag_resource(InvocationContext.background(), ARN, {"b": "3"})

    (request,) = requests
    assert request.method == "POST"
    assert json.loads(request.content) == {"tags": {"b": "3"}}


def test_error_response_becomes_transport_error() -> None:
    client = _client(
        lambda _: httpx.Response(
            404,
            json={"message": "channel abc not found"},
            headers={"x-amzn-ErrorType": "NotFoundException:http://internal.amazon.com/"},
        )
    )

    with pytest.raises(TransportError) as exc:
        client.list_tags_for_resource(InvocationContext.background(), ARN)

    assert str(exc.value) == "NotFoundException: channel abc not found"
    assert exc.value.code == "NotFoundException"
    assert exc.value.status == 404


def test_network_error_becomes_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)

    with pytest.raises(TransportError, match="connection refused"):
        client.tag_resource(InvocationContext.background(), ARN, {"a": "1"})


def test_cancelled_context_sends_nothing() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda _: httpx.Response(204), requests)
    ctx = InvocationContext()
    ctx.cancel()

    with pytest.raises(ContextExpiredError):
        client.tag_resource(ctx, ARN, {"a": "1"})

    assert requests == []


def test_slow_response_past_deadline_raises_context_expired() -> None:
    client = _client(lambda _: httpx.Response(200, json={"tags": {}}), delay=1.0)

    with pytest.raises(ContextExpiredError, match="deadline exceeded"):
        client.list_tags_for_resource(InvocationContext.with_timeout(0.05), ARN)


def test_reconciler_over_http_orders_untag_before_tag() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "DELETE":
            return httpx.Response(500, json={"message": "internal failure"})
        return httpx.Response(204)

    client = _client(handler, requests)
    reconciler = TagReconciler(client, SystemTagFilter.for_platform("aws"))

    with pytest.raises(TransportFailure, match=r"^untagging resource \(arn:aws:mediapackage"):
        reconciler.reconcile(InvocationContext.background(), ARN, {"a": "1"}, {"b": "2"})

    assert [request.method for request in requests] == ["DELETE"]
